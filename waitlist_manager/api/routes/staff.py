"""Staff seating and dashboard API routes."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ...core.queue import EntryStatus, EntryType
from ...core.selector import SeatingOutcome
from ...services.notification import NotificationLevel
from ...services.venue import Venue
from ..deps import ConnectionManager, get_connection_manager, get_venue, state_snapshot

router = APIRouter(prefix="/staff", tags=["staff"])


class SeatAllRequest(BaseModel):
    """Schema for seating every entry of one type."""

    type: EntryType = EntryType.RESERVATION


class PromotionResponse(BaseModel):
    """Schema for a single promotion."""

    entry_id: int
    success: bool
    table_id: Optional[int]
    outcome: str
    notes: List[str]


class SeatAllResponse(BaseModel):
    """Schema for a batch promotion."""

    type: EntryType
    seated_count: int
    failed_count: int
    seated_entry_ids: List[int]
    failed_entry_ids: List[int]
    assignments: Dict[int, int]
    nothing_to_do: bool


class NotificationResponse(BaseModel):
    id: str
    message: str
    level: str
    table_id: Optional[int]
    entry_id: Optional[int]
    created_at: str
    metadata: dict


@router.post("/promote/{entry_id}", response_model=PromotionResponse)
async def promote_entry(
    entry_id: int,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Seat one entry at the best table for its preferences."""
    result = venue.engine.promote(entry_id)
    if result.outcome == SeatingOutcome.ENTRY_NOT_FOUND:
        raise HTTPException(status_code=404, detail="Entry not found")

    notifications = venue.notifications.for_promotion(result)
    for notification in notifications:
        await ws_manager.broadcast({"type": "notification", "data": notification.to_dict()})

    if not result.success:
        raise HTTPException(status_code=409, detail=result.outcome.value)

    await ws_manager.broadcast({"type": "entry_promoted", "data": state_snapshot(venue)})
    return PromotionResponse(**result.to_dict())


@router.post("/seat-all", response_model=SeatAllResponse)
async def seat_all(
    request: Optional[SeatAllRequest] = None,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Seat every queued entry of a type in one step."""
    entry_type = request.type if request else EntryType.RESERVATION
    result = venue.engine.seat_all(entry_type)

    for notification in venue.notifications.for_batch(result):
        await ws_manager.broadcast({"type": "notification", "data": notification.to_dict()})
    if result.seated_count:
        await ws_manager.broadcast({"type": "batch_seated", "data": state_snapshot(venue)})

    return SeatAllResponse(**result.to_dict())


@router.post("/no-show/{entry_id}")
async def mark_no_show(
    entry_id: int,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Remove an entry that did not turn up."""
    if not venue.engine.no_show(entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")

    await ws_manager.broadcast({"type": "entry_no_show", "data": {"id": entry_id}})
    return {"id": entry_id, "status": EntryStatus.NO_SHOW.value}


@router.get("/dashboard")
async def get_dashboard(venue: Venue = Depends(get_venue)):
    """Occupancy, queue sizes and table usage."""
    return venue.dashboard.get_dashboard()


@router.post("/occupancy/{direction}")
async def adjust_occupancy(direction: str, venue: Venue = Depends(get_venue)):
    """Step the venue head count up or down."""
    if direction == "increment":
        changed = venue.occupancy.increment()
    elif direction == "decrement":
        changed = venue.occupancy.decrement()
    else:
        raise HTTPException(status_code=400, detail=f"Invalid direction: {direction}")

    if not changed:
        venue.notifications.send(
            f"Occupancy already at {'capacity' if direction == 'increment' else 'zero'}",
            NotificationLevel.INFO,
        )
    return venue.occupancy.to_dict()


@router.get("/notifications", response_model=List[NotificationResponse])
async def get_notifications(
    limit: int = Query(default=50, ge=1, le=200),
    venue: Venue = Depends(get_venue),
):
    """Recent staff notifications, oldest first."""
    return [NotificationResponse(**n.to_dict()) for n in venue.notifications.get_recent(limit)]
