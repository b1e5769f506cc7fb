"""Pydantic schemas for group and booking data."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class BookingResponse(BaseModel):
    """Stored booking response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    group_id: str
    booking_reference: str
    customer_name: str
    phone: str | None = None
    email: str | None = None
    number_of_people: int
    language: str
    meeting_point: str
    status: str
    notes: str | None = None
    postponed_to: date | None = None


class GroupResponse(BaseModel):
    """Stored group response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    group_number: int
    tour_date: date
    meeting_time: str
    total_participants: int | None = None
    status: str
    notes: str | None = None
    guide_id: str | None = None
    created_by: str
    created_at: datetime | None = None


class GroupWithBookings(GroupResponse):
    """Group together with its bookings."""

    bookings: list[BookingResponse]


class BookingCreate(BaseModel):
    """Booking added to an existing group by hand."""

    group_id: str
    booking_reference: str = Field(min_length=1)
    customer_name: str = Field(min_length=1)
    phone: str | None = None
    email: str | None = None
    number_of_people: int = Field(default=1, ge=1)
    language: str = "English"
    meeting_point: str = "Unknown"
    status: str = "confirmed"
    notes: str | None = None
    postponed_to: date | None = None


class BookingUpdate(BaseModel):
    """Partial booking edit; only the fields sent are changed."""

    group_id: str | None = None
    booking_reference: str | None = Field(default=None, min_length=1)
    customer_name: str | None = Field(default=None, min_length=1)
    phone: str | None = None
    email: str | None = None
    number_of_people: int | None = Field(default=None, ge=1)
    language: str | None = None
    meeting_point: str | None = None
    status: str | None = None
    notes: str | None = None
    postponed_to: date | None = None
