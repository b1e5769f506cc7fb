"""Groups and bookings API endpoints."""

import logging
from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tourdesk.database import get_db
from tourdesk.models import Booking, Group
from tourdesk.models.base import new_id
from tourdesk.models.booking import BOOKING_STATUSES
from tourdesk.schemas import BookingCreate, BookingResponse, BookingUpdate, GroupWithBookings
from tourdesk.services.group_importer import GroupImporter
from tourdesk.services.webhook_relay import group_sheet_row, send_notification, send_sheet_log

logger = logging.getLogger(__name__)
router = APIRouter()

# Non-nullable booking columns; an explicit null in an edit leaves them as they are
REQUIRED_BOOKING_FIELDS = frozenset(
    {
        "group_id",
        "booking_reference",
        "customer_name",
        "number_of_people",
        "language",
        "meeting_point",
        "status",
    }
)


async def _get_group_or_404(db: AsyncSession, group_id: str) -> Group:
    group = await db.get(Group, group_id)
    if group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    return group


def _check_status(status: str | None) -> None:
    if status is not None and status not in BOOKING_STATUSES:
        raise HTTPException(status_code=400, detail=f"Unknown booking status: {status}")


@router.get("/groups", response_model=list[GroupWithBookings])
async def get_groups(
    date_param: date = Query(..., alias="date", description="Tour date (YYYY-MM-DD)"),
    guide_id: str | None = Query(None, description="Only groups led by this guide"),
    db: AsyncSession = Depends(get_db),
) -> list[Group]:
    """
    List the groups on a tour date with their bookings.

    Groups are ordered by meeting time, bookings by meeting point.
    """
    stmt = (
        select(Group)
        .options(selectinload(Group.bookings))
        .where(Group.tour_date == date_param)
        .order_by(Group.meeting_time, Group.group_number)
    )
    if guide_id:
        stmt = stmt.where(Group.guide_id == guide_id)

    result = await db.execute(stmt)
    return list(result.scalars().all())


@router.delete("/groups/{group_id}")
async def delete_group(
    group_id: str,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> dict[str, str]:
    """Delete a group; its bookings are removed by the database cascade."""
    group = await _get_group_or_404(db, group_id)

    payload = {
        "id": group.id,
        "group_number": group.group_number,
        "tour_date": group.tour_date.isoformat(),
        "meeting_time": group.meeting_time,
        "guide_id": group.guide_id,
    }
    await db.delete(group)
    logger.info(f"Deleted group {group_id}")

    background_tasks.add_task(send_notification, "groups", "delete", payload)
    background_tasks.add_task(send_sheet_log, group_sheet_row(payload, "delete"), "delete")
    return {"status": "deleted", "id": group_id}


@router.post("/bookings", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Add a booking to a group and recompute the group's participant total."""
    _check_status(data.status)
    await _get_group_or_404(db, data.group_id)

    booking = Booking(id=new_id(), **data.model_dump())
    db.add(booking)
    await db.flush()

    total = await GroupImporter(db).recalculate_total_participants(booking.group_id)
    logger.info(f"Added booking {booking.id}; group {booking.group_id} now has {total} participants")

    background_tasks.add_task(
        send_notification,
        "bookings",
        "create",
        BookingResponse.model_validate(booking).model_dump(mode="json"),
    )
    return booking


@router.put("/bookings/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    data: BookingUpdate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """
    Edit a booking and recompute the participant total of its group.

    Moving a booking to another group recomputes both groups.
    """
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    changes = data.model_dump(exclude_unset=True)
    _check_status(changes.get("status"))
    if changes.get("group_id"):
        await _get_group_or_404(db, changes["group_id"])

    previous_group_id = booking.group_id
    for field, value in changes.items():
        if value is None and field in REQUIRED_BOOKING_FIELDS:
            continue
        setattr(booking, field, value)
    await db.flush()

    importer = GroupImporter(db)
    if previous_group_id != booking.group_id:
        await importer.recalculate_total_participants(previous_group_id)
    total = await importer.recalculate_total_participants(booking.group_id)
    logger.info(f"Updated booking {booking_id}; group {booking.group_id} now has {total} participants")

    background_tasks.add_task(
        send_notification,
        "bookings",
        "update",
        BookingResponse.model_validate(booking).model_dump(mode="json"),
    )
    return booking


@router.delete("/bookings/{booking_id}")
async def delete_booking(
    booking_id: str,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> dict[str, str | int]:
    """Delete a booking and recompute its group's participant total."""
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    group_id = booking.group_id
    payload = {
        "id": booking.id,
        "group_id": group_id,
        "booking_reference": booking.booking_reference,
    }
    await db.delete(booking)
    await db.flush()

    total = await GroupImporter(db).recalculate_total_participants(group_id)
    logger.info(f"Deleted booking {booking_id}; group {group_id} now has {total} participants")

    background_tasks.add_task(send_notification, "bookings", "delete", payload)
    return {"status": "deleted", "id": booking_id, "total_participants": total}
