"""Pydantic schemas for webhook settings."""

from pydantic import BaseModel


class WebhookSettingResponse(BaseModel):
    """A webhook URL setting."""

    key: str
    value: str | None = None


class WebhookSettingUpdate(BaseModel):
    """New value for a webhook URL setting; null or blank clears it."""

    value: str | None = None
