"""ORM records for learner profiles and accessibility settings."""

from sqlalchemy import Column, JSON, String

from .base import BaseModel


class LearnerProfileRecord(BaseModel):
    """Persisted learner profile, one per user."""

    __tablename__ = "learner_profiles"

    user_id = Column(String(100), nullable=False, unique=True, index=True)
    disability_types = Column(JSON, nullable=False, default=list)
    learning_preferences = Column(JSON, nullable=False, default=dict)
    cognitive_profile = Column(JSON, nullable=False, default=dict)
    performance_history = Column(JSON, nullable=False, default=dict)


class AccessibilitySettingsRecord(BaseModel):
    """Persisted accessibility settings, one per user."""

    __tablename__ = "accessibility_settings"

    user_id = Column(String(100), nullable=False, unique=True, index=True)
    settings = Column(JSON, nullable=False, default=dict)
