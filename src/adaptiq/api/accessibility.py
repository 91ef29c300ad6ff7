"""Accessibility settings API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_async_db
from ..logging_config import bind_user_context
from ..schemas.accessibility import (
    AccessibilitySettings, AccessibilitySettingsResponse, AccessibilitySettingsUpdate
)
from ..services.accessibility_service import AccessibilitySettingsService, display_classes

router = APIRouter(prefix="/accessibility", tags=["accessibility"])


def _response(user_id: str, settings: AccessibilitySettings) -> AccessibilitySettingsResponse:
    return AccessibilitySettingsResponse(
        user_id=user_id,
        display_classes=display_classes(settings),
        **settings.model_dump(),
    )


@router.get(
    "/{user_id}",
    response_model=AccessibilitySettingsResponse,
    dependencies=[Depends(bind_user_context)],
)
async def get_settings(
    user_id: str,
    db: AsyncSession = Depends(get_async_db)
) -> AccessibilitySettingsResponse:
    """Get a user's accessibility settings."""
    settings = await AccessibilitySettingsService(db).get_settings(user_id)
    return _response(user_id, settings)


@router.patch(
    "/{user_id}",
    response_model=AccessibilitySettingsResponse,
    dependencies=[Depends(bind_user_context)],
)
async def update_settings(
    user_id: str,
    updates: AccessibilitySettingsUpdate,
    db: AsyncSession = Depends(get_async_db)
) -> AccessibilitySettingsResponse:
    """Change some of a user's accessibility settings."""
    settings = await AccessibilitySettingsService(db).update_settings(user_id, updates)
    return _response(user_id, settings)


@router.post(
    "/{user_id}/reset",
    response_model=AccessibilitySettingsResponse,
    dependencies=[Depends(bind_user_context)],
)
async def reset_settings(
    user_id: str,
    db: AsyncSession = Depends(get_async_db)
) -> AccessibilitySettingsResponse:
    """Restore a user's default accessibility settings."""
    settings = await AccessibilitySettingsService(db).reset_settings(user_id)
    return _response(user_id, settings)
