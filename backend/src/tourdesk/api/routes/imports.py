"""Bulk booking import API endpoints."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.database import get_db
from tourdesk.importers import BookingTextParser, ParsedGroup
from tourdesk.schemas import (
    BookingResponse,
    GroupResponse,
    GroupWithBookings,
    ImportPreviewRequest,
    ImportPreviewResponse,
    ImportRequest,
    ParsedGroupResponse,
)
from tourdesk.services.group_importer import GroupImporter, ImportFailedError
from tourdesk.services.webhook_relay import group_sheet_row, send_notification, send_sheet_log

logger = logging.getLogger(__name__)
router = APIRouter()

PARSE_FAILED_DETAIL = "Could not parse the text. Please check the format."


async def resolve_group_number(
    request: ImportPreviewRequest, parsed: ParsedGroup, importer: GroupImporter
) -> int | None:
    """
    Pick the group number for an import.

    The request wins, then the guide's daily assignment for the tour date.
    None leaves the number found in the text.
    """
    if request.group_number is not None:
        return request.group_number
    if request.guide_id:
        return await importer.resolve_group_number(request.guide_id, parsed.date)
    return None


@router.post("/imports/preview", response_model=ImportPreviewResponse)
async def preview_import(
    request: ImportPreviewRequest,
    db: AsyncSession = Depends(get_db),
) -> ImportPreviewResponse:
    """
    Parse pasted booking text without storing anything.

    Called on every text change for live preview, so a failed parse is a
    normal response with ``parsed=false`` rather than an error.
    """
    parsed = BookingTextParser().parse(request.text)
    if parsed is None:
        return ImportPreviewResponse(parsed=False)

    group = ParsedGroupResponse.model_validate(parsed)
    group_number = await resolve_group_number(request, parsed, GroupImporter(db))
    if group_number:
        group = group.model_copy(update={"group_number": group_number})

    return ImportPreviewResponse(
        parsed=True,
        booking_count=len(group.bookings),
        group=group,
    )


@router.post("/imports", response_model=GroupWithBookings, status_code=201)
async def confirm_import(
    request: ImportRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> GroupWithBookings:
    """
    Parse pasted booking text and store it as a group with bookings.

    The group number is taken from the request, then from the guide's
    daily assignment for the tour date, then from the text itself.
    """
    parsed = BookingTextParser().parse(request.text)
    if parsed is None:
        raise HTTPException(status_code=422, detail=PARSE_FAILED_DETAIL)

    importer = GroupImporter(db)
    group_number = await resolve_group_number(request, parsed, importer)

    try:
        group = await importer.import_group(
            parsed,
            created_by=request.created_by,
            guide_id=request.guide_id,
            group_number=group_number,
        )
    except ImportFailedError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    response = GroupWithBookings(
        **GroupResponse.model_validate(group).model_dump(),
        bookings=[BookingResponse.model_validate(b) for b in group.bookings],
    )

    data = response.model_dump(mode="json")
    background_tasks.add_task(send_notification, "groups", "create", data)
    background_tasks.add_task(send_sheet_log, group_sheet_row(data, "import"))
    return response
