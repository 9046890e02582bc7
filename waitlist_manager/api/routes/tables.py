"""Table layout API routes."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...config import settings
from ...core.layout import find_table
from ...services.notification import NotificationLevel
from ...services.venue import Venue
from ..deps import ConnectionManager, get_connection_manager, get_venue, state_snapshot

router = APIRouter(prefix="/tables", tags=["tables"])


class TableUpdate(BaseModel):
    """Schema for renaming a table or changing its capacity."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    capacity: Optional[int] = Field(
        default=None,
        ge=settings.min_table_capacity,
        le=settings.max_table_capacity,
    )


class LayoutUpdate(BaseModel):
    """Schema for resizing the table layout."""

    count: int = Field(ge=settings.min_tables, le=settings.max_tables)


class TableResponse(BaseModel):
    """Schema for table response."""

    id: int
    row: int
    col: int
    name: str
    capacity: int
    occupied: bool
    guest_name: Optional[str]
    party_size: Optional[int]
    seated_at: Optional[datetime]


def _require_table(venue: Venue, table_id: int):
    table = find_table(venue.store.get_tables(), table_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Table not found")
    return table


def _table_response(venue: Venue, table_id: int) -> TableResponse:
    return TableResponse(**_require_table(venue, table_id).to_dict())


async def _broadcast_state(venue: Venue, ws_manager: ConnectionManager, event: str):
    await ws_manager.broadcast({"type": event, "data": state_snapshot(venue)})


@router.get("", response_model=List[TableResponse])
async def get_tables(
    occupied: Optional[bool] = None,
    venue: Venue = Depends(get_venue),
):
    """Get all tables in layout order, optionally filtered by occupancy."""
    tables = venue.store.get_tables()
    if occupied is not None:
        tables = [t for t in tables if t.occupied == occupied]
    return [TableResponse(**t.to_dict()) for t in tables]


@router.put("/layout", response_model=List[TableResponse])
async def resize_layout(
    layout: LayoutUpdate,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Resize the layout, keeping the data of surviving tables."""
    if not venue.engine.resize_layout(layout.count):
        raise HTTPException(status_code=400, detail=f"Invalid table count: {layout.count}")

    venue.notifications.send(f"Table count updated to {layout.count}", NotificationLevel.SUCCESS)
    await _broadcast_state(venue, ws_manager, "layout_updated")
    return [TableResponse(**t.to_dict()) for t in venue.store.get_tables()]


@router.post("/clear")
async def clear_all_tables(
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Clear every occupied table."""
    cleared = venue.engine.clear_all_tables()
    if cleared:
        venue.notifications.send(
            f"Cleared all {cleared} occupied tables", NotificationLevel.SUCCESS
        )
        await _broadcast_state(venue, ws_manager, "tables_cleared")
    else:
        venue.notifications.send("No occupied tables to clear", NotificationLevel.INFO)
    return {"cleared": cleared}


@router.get("/{table_id}", response_model=TableResponse)
async def get_table(table_id: int, venue: Venue = Depends(get_venue)):
    """Get a specific table by ID."""
    return _table_response(venue, table_id)


@router.put("/{table_id}", response_model=TableResponse)
async def update_table(
    table_id: int,
    table_data: TableUpdate,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Rename a table or change its capacity."""
    # Capacity bounds are enforced by TableUpdate, so a miss means an unknown id
    if not venue.engine.update_table(
        table_id, name=table_data.name, capacity=table_data.capacity
    ):
        raise HTTPException(status_code=404, detail="Table not found")

    if table_data.name is not None:
        venue.notifications.send(
            f'Table renamed to "{table_data.name}"',
            NotificationLevel.SUCCESS,
            table_id=table_id,
        )

    if table_data.capacity is not None:
        venue.notifications.send(
            f"Table capacity updated to {table_data.capacity}",
            NotificationLevel.SUCCESS,
            table_id=table_id,
        )

    await _broadcast_state(venue, ws_manager, "table_updated")
    return _table_response(venue, table_id)


@router.post("/{table_id}/clear", response_model=TableResponse)
async def clear_table(
    table_id: int,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Free a table."""
    if not venue.engine.clear_table(table_id):
        raise HTTPException(status_code=404, detail="Table not found")

    venue.notifications.send(
        f"Table {table_id} cleared", NotificationLevel.SUCCESS, table_id=table_id
    )
    await _broadcast_state(venue, ws_manager, "table_cleared")
    return _table_response(venue, table_id)


@router.post("/{table_id}/occupy", response_model=TableResponse)
async def occupy_table(
    table_id: int,
    venue: Venue = Depends(get_venue),
    ws_manager: ConnectionManager = Depends(get_connection_manager),
):
    """Mark a table occupied without guest details."""
    if not venue.engine.occupy_manually(table_id):
        raise HTTPException(status_code=404, detail="Table not found")

    table = _require_table(venue, table_id)
    venue.notifications.send(
        f"{table.name} marked as occupied", NotificationLevel.SUCCESS, table_id=table_id
    )
    await _broadcast_state(venue, ws_manager, "table_occupied")
    return TableResponse(**table.to_dict())
