"""Accessibility settings store backed by the database."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging_config import get_logger
from ..models.profile import AccessibilitySettingsRecord
from ..schemas.accessibility import AccessibilitySettings, AccessibilitySettingsUpdate

logger = get_logger(__name__)


def display_classes(settings: AccessibilitySettings) -> List[str]:
    """Document-level CSS classes implied by a user's settings."""
    classes = [
        f"text-{settings.text_size.value}",
        f"contrast-{settings.contrast.value}",
        f"focus-{settings.focus_indicators.value}",
    ]
    if settings.reduced_motion:
        classes.append("reduce-motion")
    if settings.simplified_interface:
        classes.append("simplified-interface")
    if settings.color_blind_friendly:
        classes.append("color-blind-friendly")
    if settings.motor_assistance:
        classes.append("motor-assistance")
    return classes


class AccessibilitySettingsService:
    """Service for per-user accessibility settings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_record(self, user_id: str) -> Optional[AccessibilitySettingsRecord]:
        stmt = select(AccessibilitySettingsRecord).where(AccessibilitySettingsRecord.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_settings(self, user_id: str) -> AccessibilitySettings:
        """Get a user's settings; users who never changed anything get the defaults."""
        record = await self._get_record(user_id)
        if record is None:
            return AccessibilitySettings()
        return AccessibilitySettings.model_validate(record.settings or {})

    async def _save(self, user_id: str, settings: AccessibilitySettings) -> AccessibilitySettings:
        record = await self._get_record(user_id)
        data = settings.model_dump(mode="json")
        try:
            if record is None:
                self.db.add(AccessibilitySettingsRecord(user_id=user_id, settings=data))
            else:
                record.settings = data
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Error saving accessibility settings", error=str(e), user_id=user_id)
            raise
        return settings

    async def update_settings(
        self,
        user_id: str,
        updates: AccessibilitySettingsUpdate
    ) -> AccessibilitySettings:
        """Change the given settings and keep the rest."""
        current = await self.get_settings(user_id)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        settings = AccessibilitySettings.model_validate({**current.model_dump(), **changes})

        await self._save(user_id, settings)
        logger.info("Accessibility settings updated", user_id=user_id, fields=sorted(changes))
        return settings

    async def reset_settings(self, user_id: str) -> AccessibilitySettings:
        """Restore the default settings."""
        settings = await self._save(user_id, AccessibilitySettings())
        logger.info("Accessibility settings reset", user_id=user_id)
        return settings
