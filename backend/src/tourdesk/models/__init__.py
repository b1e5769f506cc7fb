"""SQLAlchemy ORM models."""

from tourdesk.models.app_setting import AppSetting
from tourdesk.models.base import Base
from tourdesk.models.booking import Booking
from tourdesk.models.daily_assignment import DailyAssignment
from tourdesk.models.group import Group

__all__ = ["AppSetting", "Base", "Booking", "DailyAssignment", "Group"]
