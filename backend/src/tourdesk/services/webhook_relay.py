"""Relay of side-effect notifications to external webhook endpoints."""

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.config import settings
from tourdesk.database import AsyncSessionLocal
from tourdesk.models import AppSetting

logger = logging.getLogger(__name__)

SHEETS_WEBHOOK_KEY = "sheets_webhook_url"
SHEETS_DELETE_WEBHOOK_KEY = "sheets_delete_webhook_url"

# Entity type → app_settings key of its automation webhook
AUTOMATION_WEBHOOK_KEYS: dict[str, str] = {
    "daily_reports": "webhook_daily_reports",
    "email_logs": "webhook_email_logs",
    "issues": "webhook_issues",
    "guide_unavailability": "webhook_guide_unavailability",
    "groups": "webhook_groups",
    "bookings": "webhook_bookings",
    "daily_assignments": "webhook_daily_assignments",
    "user_logins": "webhook_user_logins",
}

WEBHOOK_SETTING_KEYS = (
    SHEETS_WEBHOOK_KEY,
    SHEETS_DELETE_WEBHOOK_KEY,
    *AUTOMATION_WEBHOOK_KEYS.values(),
)

# Outward action names used by the automation webhooks
_ACTIONS = {"add": "create", "create": "create", "update": "update", "delete": "delete"}


class WebhookRelay:
    """
    Fire-and-forget POSTs to spreadsheet and automation webhooks.

    Webhook URLs live in app_settings and are looked up on every call.
    """

    def __init__(self, db: AsyncSession, timeout: int | None = None) -> None:
        """
        Initialize webhook relay.

        Args:
            db: Database session used to read webhook settings
            timeout: Request timeout in seconds (uses settings if not provided)
        """
        self.db = db
        self.timeout = timeout or settings.webhook_timeout

    async def get_webhook_url(self, key: str) -> str | None:
        """Read a webhook URL from app_settings; blank values count as unset."""
        result = await self.db.execute(select(AppSetting.value).where(AppSetting.key == key))
        value = result.scalar_one_or_none()
        return value.strip() if value and value.strip() else None

    async def log_to_sheets(self, data: dict[str, Any], action: str = "log") -> bool:
        """
        Forward an event row to the spreadsheet logging webhook.

        Args:
            data: Row to log, keyed by spreadsheet column
            action: "log" to append a row, "delete" to remove one

        Returns:
            True if the webhook accepted the row
        """
        key = SHEETS_DELETE_WEBHOOK_KEY if action == "delete" else SHEETS_WEBHOOK_KEY
        return await self._post(key, data)

    async def notify(self, entity_type: str, action: str, data: dict[str, Any]) -> bool:
        """
        Send a change notification to an entity's automation webhook.

        Args:
            entity_type: One of AUTOMATION_WEBHOOK_KEYS
            action: "add"/"create", "update" or "delete"
            data: Record that changed

        Returns:
            True if the webhook accepted the notification
        """
        key = AUTOMATION_WEBHOOK_KEYS.get(entity_type)
        if key is None:
            logger.warning(f"No automation webhook defined for entity type: {entity_type}")
            return False

        payload = {
            "type": entity_type,
            "action": _ACTIONS.get(action, action),
            "data": data,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        return await self._post(key, payload)

    async def _post(self, key: str, payload: dict[str, Any]) -> bool:
        try:
            url = await self.get_webhook_url(key)
        except Exception as e:
            logger.error(f"Could not read webhook setting {key}: {e}")
            return False

        if not url:
            logger.info(f"Webhook not configured: {key}")
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
        except Exception as e:
            logger.error(f"Webhook call failed for {key}: {e}")
            return False

        logger.info(f"Webhook delivered: {key}")
        return True


async def send_notification(entity_type: str, action: str, data: dict[str, Any]) -> None:
    """Relay a notification with its own DB session.

    Meant for FastAPI background tasks, which run after the request's
    session has been closed.
    """
    async with AsyncSessionLocal() as db:
        await WebhookRelay(db).notify(entity_type, action, data)


def group_sheet_row(group: dict[str, Any], action: str) -> dict[str, Any]:
    """Spreadsheet row for a group event, keyed by sheet column."""
    return {
        "#Date": group["tour_date"],
        "#Operation_Time": datetime.now(timezone.utc).strftime("%H:%M"),
        "#Guide": group.get("guide_id") or "",
        "#Activity": f"Group {group['group_number']}",
        "#Pickup_Time": group.get("meeting_time") or "",
        "#Action": action,
    }


async def send_sheet_log(data: dict[str, Any], action: str = "log") -> None:
    """Log a spreadsheet row with its own DB session, for background tasks."""
    async with AsyncSessionLocal() as db:
        await WebhookRelay(db).log_to_sheets(data, action)
