"""Service for persisting parsed booking imports as groups and bookings."""

import logging
from datetime import date

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.importers.models import ParsedGroup
from tourdesk.models import Booking, DailyAssignment, Group
from tourdesk.models.base import new_id

logger = logging.getLogger(__name__)


class ImportFailedError(Exception):
    """Raised when a parsed group could not be stored."""


class GroupImporter:
    """
    Stores a ParsedGroup and its bookings as one logical unit.

    The group row is flushed first so its id is available for the bookings.
    If the bookings cannot be written afterwards, the group row is deleted
    again so no empty group is left behind.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize group importer.

        Args:
            db: Database session
        """
        self.db = db

    async def import_group(
        self,
        parsed: ParsedGroup,
        created_by: str,
        guide_id: str | None = None,
        group_number: int | None = None,
    ) -> Group:
        """
        Create a group and its bookings from a parse result.

        Args:
            parsed: Result of the booking text parser
            created_by: Account that confirmed the import
            guide_id: Guide leading the group, if known
            group_number: Overrides the group number found in the text

        Returns:
            The created Group, with bookings attached

        Raises:
            ImportFailedError: If the group or its bookings could not be stored
        """
        group = Group(
            id=new_id(),
            group_number=group_number or parsed.group_number,
            tour_date=parsed.date,
            meeting_time=parsed.time,
            total_participants=parsed.total_participants,
            status="pending",
            created_by=created_by,
            guide_id=guide_id,
            bookings=[],
        )

        try:
            self.db.add(group)
            await self.db.flush()
        except Exception as e:
            logger.error(f"Failed to create group for {parsed.date}: {e}", exc_info=True)
            raise ImportFailedError(f"Could not create group: {e}") from e

        bookings = [
            Booking(
                id=new_id(),
                group_id=group.id,
                booking_reference=b.booking_reference,
                customer_name=b.customer_name,
                phone=b.phone or None,
                email=b.email or None,
                number_of_people=b.number_of_people,
                language=b.language,
                meeting_point=b.meeting_point,
                status="confirmed",
            )
            for b in parsed.bookings
        ]

        try:
            group.bookings.extend(bookings)
            await self.db.flush()
            await self.db.refresh(group, attribute_names=["created_at", "updated_at"])
        except Exception as e:
            logger.error(
                f"Failed to create bookings for group {group.id}, removing group: {e}",
                exc_info=True,
            )
            await self._remove_orphaned_group(group.id)
            raise ImportFailedError(f"Could not create bookings: {e}") from e

        logger.info(
            f"Imported group {group.group_number} on {group.tour_date} "
            f"with {len(bookings)} bookings"
        )
        return group

    async def _remove_orphaned_group(self, group_id: str) -> None:
        """Delete a group whose bookings failed to insert."""
        await self.db.rollback()
        await self.db.execute(delete(Group).where(Group.id == group_id))
        await self.db.commit()

    async def recalculate_total_participants(self, group_id: str) -> int:
        """
        Set a group's total to the sum of its bookings' participant counts.

        Args:
            group_id: Group to update

        Returns:
            The new total
        """
        result = await self.db.execute(
            select(func.coalesce(func.sum(Booking.number_of_people), 0)).where(
                Booking.group_id == group_id
            )
        )
        total = int(result.scalar_one())

        await self.db.execute(
            update(Group).where(Group.id == group_id).values(total_participants=total)
        )
        return total

    async def resolve_group_number(self, guide_id: str, tour_date: date) -> int | None:
        """
        Look up the group number a guide is assigned to on a date.

        Returns:
            The assigned group number, or None if the guide has no assignment
        """
        result = await self.db.execute(
            select(DailyAssignment.group_number).where(
                DailyAssignment.guide_id == guide_id,
                DailyAssignment.assignment_date == tour_date,
            )
        )
        return result.scalar_one_or_none()
