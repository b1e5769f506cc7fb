"""Parser for bulk booking messages pasted from a messaging app.

The expected input looks like::

    📅 Date: 24/12/25
    👥 Total Participants: 5P

    13:00

    Group 1    Bab Agnaou

    📞 +212600000001 | 🔹 Booking Ref: GYG123
    📧 Email: anna@example.com
    👤 Name: Anna Smith
    🗣 Language: English | 🎟 Participants: 2

       Jemaa el-Fna

    📞 +212600000002 | 🔹 Booking Ref: GYG456
    ...

The emoji glyphs and marker words are part of the input contract. The scan
is a single pass over lines carrying one piece of state, the current meeting
point, which indented heading lines update and booking lines read.
"""

import logging
import re
from datetime import date

from tourdesk.importers.models import ParsedBooking, ParsedGroup

logger = logging.getLogger(__name__)

DEFAULT_TIME = "13:00"
DEFAULT_GROUP_NUMBER = 1
DEFAULT_LANGUAGE = "English"
DEFAULT_PARTICIPANTS = 1
UNKNOWN_MEETING_POINT = "Unknown"

# Any of these on a line rules it out as a meeting point heading
MARKER_GLYPHS = ("📞", "📧", "👤", "🗣", "🔹", "🎟", "📅", "👥")

DATE_RE = re.compile(r"📅\s*Date:\s*(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(?!\d)", re.IGNORECASE)
TOTAL_PARTICIPANTS_RE = re.compile(r"👥\s*Total\s*Participants:\s*(\d+)P", re.IGNORECASE)
TIME_RE = re.compile(r"(\d{1,2}):(\d{2})")
GROUP_RE = re.compile(r"Group\s*(\d+)(?:[ \t]+(.*))?", re.IGNORECASE)
LEADING_INDENT_RE = re.compile(r"\s{2,}")

PHONE_RE = re.compile(r"📞\s*(\+?\d+)")
REFERENCE_RE = re.compile(r"🔹\s*Booking\s*Ref:\s*([A-Za-z0-9]+)", re.IGNORECASE)
EMAIL_RE = re.compile(r"📧\s*Email:\s*(\S+)", re.IGNORECASE)
NAME_RE = re.compile(r"👤\s*Name:\s*(\S.*)", re.IGNORECASE)
# Messaging apps often append a variation selector (U+FE0F) to these two
LANGUAGE_RE = re.compile(r"🗣\ufe0f?\s*Language:\s*(\w+)", re.IGNORECASE)
PARTICIPANTS_RE = re.compile(r"🎟\ufe0f?\s*Participants:\s*(\d+)", re.IGNORECASE)


def extract_date(text: str) -> date | None:
    """
    Extract the tour date from the 📅 marker.

    Day and month may be one or two digits; a two-digit year is taken to be
    in the 2000s.

    Returns:
        The tour date, or None if the marker is missing or malformed
    """
    match = DATE_RE.search(text)
    if not match:
        return None

    day, month, year = match.groups()
    if len(year) == 2:
        year = "20" + year

    return date.fromisoformat(f"{year}-{month.zfill(2)}-{day.zfill(2)}")


def extract_total_participants(text: str) -> int | None:
    """Return the stated total participant count, or None if not stated."""
    match = TOTAL_PARTICIPANTS_RE.search(text)
    return int(match.group(1)) if match else None


def extract_meeting_time(lines: list[str]) -> str:
    """
    Return the first standalone HH:MM line, zero-padded.

    The time must sit alone on its line with a line break before and after
    it, so times embedded in other text are ignored.
    """
    for index, line in enumerate(lines):
        if index == 0 or index == len(lines) - 1:
            continue
        match = TIME_RE.fullmatch(line.rstrip())
        if match:
            hours, minutes = match.groups()
            return f"{hours.zfill(2)}:{minutes}"
    return DEFAULT_TIME


def extract_group_header(lines: list[str]) -> tuple[int, str | None]:
    """
    Return the group number and meeting point from the ``Group N`` line.

    Returns:
        (group_number, meeting_point); defaults to (1, None) without a header
    """
    for line in lines:
        match = GROUP_RE.fullmatch(line.rstrip())
        if match:
            number = int(match.group(1)) or DEFAULT_GROUP_NUMBER
            meeting_point = (match.group(2) or "").strip() or None
            return number, meeting_point
    return DEFAULT_GROUP_NUMBER, None


def is_meeting_point_line(line: str) -> bool:
    """
    Check whether a line is an indented meeting point heading.

    A heading is indented by at least two whitespace characters and carries
    no booking markers, no ``@``, no ``|`` and is not a bare time. Meeting
    point names containing ``|`` or ``@`` are therefore not recognised.
    """
    if not LEADING_INDENT_RE.match(line):
        return False

    candidate = line.strip()
    if not candidate:
        return False
    if any(glyph in candidate for glyph in MARKER_GLYPHS):
        return False
    if "@" in candidate or "|" in candidate:
        return False
    return TIME_RE.fullmatch(candidate) is None


def parse_booking_block(
    header: str,
    email_line: str,
    name_line: str,
    details_line: str,
    meeting_point: str,
) -> ParsedBooking | None:
    """
    Build a booking from a 📞/🔹 header line and the three lines after it.

    Args:
        header: Line carrying the phone and booking reference markers
        email_line: Line expected to carry the 📧 email marker
        name_line: Line expected to carry the 👤 name marker
        details_line: Line expected to carry 🗣 language and 🎟 participants
        meeting_point: Current meeting point context

    Returns:
        The booking, or None if the header is not a booking or the name is missing
    """
    phone_match = PHONE_RE.search(header)
    reference_match = REFERENCE_RE.search(header)
    if not phone_match or not reference_match:
        return None

    name_match = NAME_RE.search(name_line)
    if not name_match:
        logger.debug(f"Dropping booking {reference_match.group(1)}: no customer name found")
        return None

    email_match = EMAIL_RE.search(email_line)
    language_match = LANGUAGE_RE.search(details_line)
    participants_match = PARTICIPANTS_RE.search(details_line)

    return ParsedBooking(
        phone=phone_match.group(1).strip(),
        booking_reference=reference_match.group(1).strip(),
        customer_name=name_match.group(1).strip(),
        email=email_match.group(1).strip() if email_match else "",
        language=language_match.group(1).strip() if language_match else DEFAULT_LANGUAGE,
        number_of_people=(
            int(participants_match.group(1)) or DEFAULT_PARTICIPANTS
            if participants_match
            else DEFAULT_PARTICIPANTS
        ),
        meeting_point=meeting_point,
    )


class BookingTextParser:
    """
    Turns one pasted booking message into a ParsedGroup.

    Parsing is all-or-nothing at the group level: a missing date or a
    message without a single valid booking gives None. Individual booking
    blocks without a customer name are skipped.
    """

    def parse(self, text: str) -> ParsedGroup | None:
        """
        Parse a booking message.

        Args:
            text: Raw pasted text

        Returns:
            The parsed group, or None if the text could not be parsed

        Raises:
            Should NOT raise exceptions. Returns None on any error.
        """
        try:
            return self._parse(text)
        except Exception as e:
            logger.warning(f"Booking text parse error: {e}", exc_info=True)
            return None

    def _parse(self, text: str) -> ParsedGroup | None:
        tour_date = extract_date(text)
        if tour_date is None:
            logger.debug("No 📅 Date marker found in booking text")
            return None

        lines = text.split("\n")
        group_number, current_meeting_point = extract_group_header(lines)
        bookings = self._scan_bookings(lines, current_meeting_point)

        if not bookings:
            logger.debug("No valid bookings found in booking text")
            return None

        total = extract_total_participants(text) or sum(b.number_of_people for b in bookings)

        return ParsedGroup(
            date=tour_date,
            time=extract_meeting_time(lines),
            group_number=group_number,
            total_participants=total,
            bookings=bookings,
        )

    def _scan_bookings(
        self, lines: list[str], current_meeting_point: str | None
    ) -> list[ParsedBooking]:
        """Walk the lines top to bottom, tracking the current meeting point."""
        bookings: list[ParsedBooking] = []

        for index, line in enumerate(lines):
            if is_meeting_point_line(line):
                current_meeting_point = line.strip()
                continue

            following = lines[index + 1 : index + 4]
            following += [""] * (3 - len(following))

            booking = parse_booking_block(
                line,
                *following,
                meeting_point=current_meeting_point or UNKNOWN_MEETING_POINT,
            )
            if booking:
                bookings.append(booking)

        return bookings


def parse_booking_text(text: str) -> ParsedGroup | None:
    """Parse a booking message with a fresh parser."""
    return BookingTextParser().parse(text)
