"""SQLAlchemy models for Adaptiq."""

from .base import BaseModel
from .profile import AccessibilitySettingsRecord, LearnerProfileRecord

__all__ = ["BaseModel", "LearnerProfileRecord", "AccessibilitySettingsRecord"]
