"""Webhook settings API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tourdesk.database import get_db
from tourdesk.models import AppSetting
from tourdesk.schemas import WebhookSettingResponse, WebhookSettingUpdate
from tourdesk.services.webhook_relay import WEBHOOK_SETTING_KEYS

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/settings/webhooks", response_model=list[WebhookSettingResponse])
async def get_webhook_settings(
    db: AsyncSession = Depends(get_db),
) -> list[WebhookSettingResponse]:
    """List every known webhook key with its configured URL, if any."""
    result = await db.execute(
        select(AppSetting).where(AppSetting.key.in_(WEBHOOK_SETTING_KEYS))
    )
    stored = {s.key: s.value for s in result.scalars().all()}

    return [
        WebhookSettingResponse(key=key, value=stored.get(key))
        for key in WEBHOOK_SETTING_KEYS
    ]


@router.put("/settings/webhooks/{key}", response_model=WebhookSettingResponse)
async def update_webhook_setting(
    key: str,
    update: WebhookSettingUpdate,
    db: AsyncSession = Depends(get_db),
) -> WebhookSettingResponse:
    """Create or replace a webhook URL setting."""
    if key not in WEBHOOK_SETTING_KEYS:
        raise HTTPException(status_code=400, detail=f"Unknown webhook setting: {key}")

    value = update.value.strip() if update.value and update.value.strip() else None

    result = await db.execute(select(AppSetting).where(AppSetting.key == key))
    setting = result.scalar_one_or_none()
    if setting:
        setting.value = value
    else:
        db.add(AppSetting(key=key, value=value))

    logger.info(f"Webhook setting {key} {'updated' if value else 'cleared'}")
    return WebhookSettingResponse(key=key, value=value)
