"""Guest-facing waitlist API routes."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...core.queue import EntryStatus, EntryType, QueueEntry, find_entry
from ...services.venue import Venue
from ..deps import ConnectionManager, get_connection_manager, get_venue

router = APIRouter(prefix="/waitlist", tags=["waitlist"])


class JoinWaitlistRequest(BaseModel):
    """Schema for joining the waitlist or booking a reservation."""

    name: str = Field(min_length=1, max_length=200)
    party_size: int = Field(ge=1)
    type: EntryType = EntryType.WAITLIST
    special_requests: Optional[str] = Field(default=None, max_length=500)


class WaitlistEntryResponse(BaseModel):
    """Schema for waitlist entry response."""

    id: int
    name: str
    party_size: int
    type: EntryType
    status: EntryStatus
    position: Optional[int]
    estimated_wait: int
    special_requests: Optional[str]
    joined_at: datetime


def _entry_response(venue: Venue, entry: QueueEntry) -> WaitlistEntryResponse:
    return WaitlistEntryResponse(
        **entry.to_dict(),
        status=EntryStatus.QUEUED,
        position=venue.engine.position(entry.id),
    )


def _parse_type(entry_type: Optional[str]) -> Optional[EntryType]:
    if entry_type is None:
        return None
    try:
        return EntryType(entry_type)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid entry type: {entry_type}")


@router.get("", response_model=List[WaitlistEntryResponse])
async def get_waitlist(
    type: Optional[str] = None,
    venue: Venue = Depends(get_venue),
):
    """Get queued entries in join order, optionally only one type."""
    entry_type = _parse_type(type)
    entries = venue.store.get_entries()
    if entry_type is not None:
        entries = [e for e in entries if e.type == entry_type]
    return [_entry_response(venue, e) for e in entries]


@router.post("", response_model=WaitlistEntryResponse)
async def join_waitlist(
    payload: JoinWaitlistRequest,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Join the waitlist or book a reservation."""
    entry = venue.engine.join(
        name=payload.name,
        party_size=payload.party_size,
        special_requests=payload.special_requests,
        entry_type=payload.type,
    )
    await ws_manager.broadcast({"type": "entry_joined", "data": entry.to_dict()})
    return _entry_response(venue, entry)


@router.get("/{entry_id}", response_model=WaitlistEntryResponse)
async def get_waitlist_entry(entry_id: int, venue: Venue = Depends(get_venue)):
    """Get an entry with its current position in its queue."""
    entry = find_entry(venue.store.get_entries(), entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return _entry_response(venue, entry)


@router.delete("/{entry_id}")
async def leave_waitlist(
    entry_id: int,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Leave the waitlist or cancel a reservation."""
    entry = find_entry(venue.store.get_entries(), entry_id)
    if entry is None or not venue.engine.cancel(entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")

    await ws_manager.broadcast(
        {"type": "entry_cancelled", "data": {"id": entry_id}}
    )
    message = (
        "Reservation cancelled"
        if entry.type == EntryType.RESERVATION
        else "Removed from waitlist"
    )
    return {"message": message, "status": EntryStatus.CANCELLED.value}
