"""Pydantic schemas for API requests and responses."""

from tourdesk.schemas.group import (
    BookingCreate,
    BookingResponse,
    BookingUpdate,
    GroupResponse,
    GroupWithBookings,
)
from tourdesk.schemas.imports import (
    ImportPreviewRequest,
    ImportPreviewResponse,
    ImportRequest,
    ParsedBookingResponse,
    ParsedGroupResponse,
)
from tourdesk.schemas.setting import WebhookSettingResponse, WebhookSettingUpdate

__all__ = [
    "BookingCreate",
    "BookingResponse",
    "BookingUpdate",
    "GroupResponse",
    "GroupWithBookings",
    "ImportPreviewRequest",
    "ImportPreviewResponse",
    "ImportRequest",
    "ParsedBookingResponse",
    "ParsedGroupResponse",
    "WebhookSettingResponse",
    "WebhookSettingUpdate",
]
