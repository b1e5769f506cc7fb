"""Data models for bulk booking imports."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class ParsedBooking:
    """
    One reservation extracted from pasted booking text.

    The import confirmation step turns these into Booking rows; the store
    assigns ids and timestamps.
    """

    phone: str  # Raw token as found, may keep a leading "+"
    booking_reference: str
    customer_name: str
    email: str = ""
    language: str = "English"
    number_of_people: int = 1
    meeting_point: str = "Unknown"


@dataclass(frozen=True)
class ParsedGroup:
    """
    One importable tour group extracted from pasted booking text.

    This is the output format of the booking text parser.
    """

    date: date
    time: str  # Meeting time as HH:MM
    group_number: int
    total_participants: int
    bookings: list[ParsedBooking] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate that the group carries at least one booking."""
        if not self.bookings:
            raise ValueError("a parsed group must contain at least one booking")
