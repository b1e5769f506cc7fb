"""Pydantic schemas for bulk booking imports."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class ImportPreviewRequest(BaseModel):
    """Pasted text to preview."""

    text: str
    group_number: int | None = Field(default=None, ge=1)
    guide_id: str | None = None


class ImportRequest(ImportPreviewRequest):
    """Pasted text to import, with the account it is attributed to."""

    created_by: str


class ParsedBookingResponse(BaseModel):
    """One booking as understood by the parser."""

    model_config = ConfigDict(from_attributes=True)

    phone: str
    booking_reference: str
    email: str
    customer_name: str
    language: str
    number_of_people: int
    meeting_point: str


class ParsedGroupResponse(BaseModel):
    """A group as understood by the parser, before it is stored."""

    model_config = ConfigDict(from_attributes=True)

    date: date
    time: str
    group_number: int
    total_participants: int
    bookings: list[ParsedBookingResponse]


class ImportPreviewResponse(BaseModel):
    """
    Result of parsing pasted text.

    booking_count lets operators compare against the pasted text, since
    booking blocks without a name are dropped silently.
    """

    parsed: bool
    booking_count: int = 0
    group: ParsedGroupResponse | None = None
