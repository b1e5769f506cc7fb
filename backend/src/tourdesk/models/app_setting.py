"""Key/value application settings, mainly outbound webhook URLs."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tourdesk.models.base import Base, TimestampMixin, new_id


class AppSetting(Base, TimestampMixin):
    """
    Application setting stored in the database.

    Values are read on every use rather than cached in the process, so an
    administrator's change takes effect on the next request.
    """

    __tablename__ = "app_settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<AppSetting(key={self.key!r})>"
