"""Pydantic schemas for accessibility settings."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

AUDIO_SPEED_MIN = 0.5
AUDIO_SPEED_MAX = 2.0


def _clamp_audio_speed(value: float) -> float:
    return max(AUDIO_SPEED_MIN, min(AUDIO_SPEED_MAX, value))


class TextSize(str, Enum):
    NORMAL = "normal"
    LARGE = "large"
    EXTRA_LARGE = "extra-large"


class ContrastLevel(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    EXTRA_HIGH = "extra-high"


class FocusIndicatorLevel(str, Enum):
    NORMAL = "normal"
    ENHANCED = "enhanced"
    EXTRA_ENHANCED = "extra-enhanced"


class AccessibilitySettings(BaseModel):
    """User-toggled display, audio and motor preferences."""
    text_size: TextSize = TextSize.NORMAL
    contrast: ContrastLevel = ContrastLevel.NORMAL
    audio_enabled: bool = False
    audio_speed: float = 1.0
    reduced_motion: bool = False
    simplified_interface: bool = False
    color_blind_friendly: bool = False
    focus_indicators: FocusIndicatorLevel = FocusIndicatorLevel.NORMAL
    auto_read: bool = False
    sign_language: bool = False
    motor_assistance: bool = False
    keyboard_navigation: bool = False

    @field_validator("audio_speed")
    @classmethod
    def _clamp_speed(cls, value: float) -> float:
        return _clamp_audio_speed(value)


class AccessibilitySettingsUpdate(BaseModel):
    """Partial settings update; omitted fields keep their current value."""
    text_size: Optional[TextSize] = None
    contrast: Optional[ContrastLevel] = None
    audio_enabled: Optional[bool] = None
    audio_speed: Optional[float] = None
    reduced_motion: Optional[bool] = None
    simplified_interface: Optional[bool] = None
    color_blind_friendly: Optional[bool] = None
    focus_indicators: Optional[FocusIndicatorLevel] = None
    auto_read: Optional[bool] = None
    sign_language: Optional[bool] = None
    motor_assistance: Optional[bool] = None
    keyboard_navigation: Optional[bool] = None

    @field_validator("audio_speed")
    @classmethod
    def _clamp_speed(cls, value: Optional[float]) -> Optional[float]:
        return None if value is None else _clamp_audio_speed(value)


class AccessibilitySettingsResponse(AccessibilitySettings):
    """Settings plus the display classes they imply."""
    user_id: str
    display_classes: List[str] = Field(default_factory=list)
