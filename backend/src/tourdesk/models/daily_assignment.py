"""Daily assignment of a guide to a group number."""

from datetime import date

from sqlalchemy import Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tourdesk.models.base import Base, TimestampMixin, new_id


class DailyAssignment(Base, TimestampMixin):
    """Which group number a guide leads on a given day."""

    __tablename__ = "daily_assignments"
    __table_args__ = (
        UniqueConstraint(
            "guide_id",
            "assignment_date",
            name="uq_guide_assignment_date",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    guide_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    assignment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    group_number: Mapped[int] = mapped_column(Integer, nullable=False)
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<DailyAssignment(guide_id={self.guide_id!r}, "
            f"assignment_date={self.assignment_date}, group_number={self.group_number})>"
        )
