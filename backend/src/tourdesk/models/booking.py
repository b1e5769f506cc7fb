"""Booking model for customer reservations within a tour group."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tourdesk.models.base import Base, TimestampMixin, new_id

if TYPE_CHECKING:
    from tourdesk.models.group import Group

BOOKING_STATUSES = ("confirmed", "cancelled", "postponed", "no_show", "problem")


class Booking(Base, TimestampMixin):
    """
    Booking model.

    One customer party's reservation inside a group, with the meeting point
    the party is collected from.
    """

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    # Foreign keys
    group_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Reservation details
    booking_reference: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    number_of_people: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    language: Mapped[str] = mapped_column(String(50), nullable=False, default="English")
    meeting_point: Mapped[str] = mapped_column(String(200), nullable=False)

    # Day-of-tour outcome recorded by the guide
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="confirmed")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    postponed_to: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    group: Mapped["Group"] = relationship(back_populates="bookings")

    def __repr__(self) -> str:
        return (
            f"<Booking(booking_reference={self.booking_reference!r}, "
            f"customer_name={self.customer_name!r}, "
            f"number_of_people={self.number_of_people})>"
        )
