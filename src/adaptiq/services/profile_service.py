"""Learner profile store backed by the database."""

from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging_config import get_logger
from ..models.profile import LearnerProfileRecord
from ..schemas.learner import (
    LearnerProfile, LearnerProfileBase, LearnerProfileCreate, LearnerProfileUpdate
)
from ..utils.exceptions import ProfileAlreadyExistsException, ProfileNotFoundException

logger = get_logger(__name__)

PROFILE_SECTIONS = ("learning_preferences", "cognitive_profile", "performance_history")


def to_learner_profile(record: LearnerProfileRecord) -> LearnerProfile:
    """Build the engine-facing profile from a stored record."""
    return LearnerProfile(
        id=record.user_id,
        disability_types=record.disability_types or [],
        learning_preferences=record.learning_preferences or {},
        cognitive_profile=record.cognitive_profile or {},
        performance_history=record.performance_history or {},
    )


class ProfileService:
    """Service for learner profile management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile_record(self, user_id: str) -> Optional[LearnerProfileRecord]:
        """Get the stored profile for a user, if any."""
        stmt = select(LearnerProfileRecord).where(LearnerProfileRecord.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def require_profile_record(self, user_id: str) -> LearnerProfileRecord:
        record = await self.get_profile_record(user_id)
        if record is None:
            raise ProfileNotFoundException(user_id)
        return record

    async def get_profile(self, user_id: str) -> LearnerProfile:
        """Get a user's profile in the form the adaptation engine consumes."""
        return to_learner_profile(await self.require_profile_record(user_id))

    async def create_profile(self, user_id: str, data: LearnerProfileCreate) -> LearnerProfileRecord:
        """Create the profile for a user."""
        if await self.get_profile_record(user_id) is not None:
            raise ProfileAlreadyExistsException(user_id)

        try:
            record = LearnerProfileRecord(user_id=user_id, **data.model_dump(mode="json"))
            self.db.add(record)
            await self.db.commit()
            await self.db.refresh(record)
        except IntegrityError:
            # Lost a race with a concurrent create for the same user
            await self.db.rollback()
            raise ProfileAlreadyExistsException(user_id)
        except Exception as e:
            await self.db.rollback()
            logger.error("Error creating learner profile", error=str(e), user_id=user_id)
            raise

        logger.info(
            "Learner profile created",
            user_id=user_id,
            disability_types=record.disability_types,
        )
        return record

    async def update_profile(self, user_id: str, updates: LearnerProfileUpdate) -> LearnerProfileRecord:
        """Apply a partial update; nested sections are merged field by field."""
        record = await self.require_profile_record(user_id)
        changes = updates.model_dump(mode="json", exclude_unset=True)

        merged: Dict[str, Any] = {
            "disability_types": list(record.disability_types or []),
            **{section: dict(getattr(record, section) or {}) for section in PROFILE_SECTIONS},
        }
        if changes.get("disability_types") is not None:
            merged["disability_types"] = changes["disability_types"]
        for section in PROFILE_SECTIONS:
            if changes.get(section) is not None:
                merged[section].update(changes[section])

        # Re-validate the merged profile before persisting it
        validated = LearnerProfileBase.model_validate(merged).model_dump(mode="json")

        try:
            for key, value in validated.items():
                setattr(record, key, value)
            await self.db.commit()
            await self.db.refresh(record)
        except Exception as e:
            await self.db.rollback()
            logger.error("Error updating learner profile", error=str(e), user_id=user_id)
            raise

        logger.info("Learner profile updated", user_id=user_id, fields=sorted(changes))
        return record

    async def delete_profile(self, user_id: str) -> None:
        """Delete a user's profile."""
        record = await self.require_profile_record(user_id)
        try:
            await self.db.delete(record)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Error deleting learner profile", error=str(e), user_id=user_id)
            raise

        logger.info("Learner profile deleted", user_id=user_id)
