"""Importers that turn pasted booking text into group records."""

from tourdesk.importers.booking_text import BookingTextParser, parse_booking_text
from tourdesk.importers.models import ParsedBooking, ParsedGroup

__all__ = [
    "BookingTextParser",
    "ParsedBooking",
    "ParsedGroup",
    "parse_booking_text",
]
