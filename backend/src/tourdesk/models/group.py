"""Group model for scheduled tour instances."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourdesk.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from tourdesk.models.booking import Booking

GROUP_STATUSES = ("pending", "confirmed", "completed", "cancelled")


class Group(Base, TimestampMixin):
    """
    Tour group model.

    One group is a tour on a given date and meeting time, identified by its
    group number within that date. Bookings hang off the group and are
    deleted with it.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    group_number: Mapped[int] = mapped_column(Integer, nullable=False)
    tour_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    meeting_time: Mapped[str] = mapped_column(String(5), nullable=False, default="13:00")
    total_participants: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Account identifiers issued by the auth provider
    guide_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship(
        back_populates="group",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Booking.meeting_point",
    )

    def __repr__(self) -> str:
        return (
            f"<Group(id={self.id!r}, tour_date={self.tour_date}, "
            f"group_number={self.group_number})>"
        )
