"""Pydantic schemas for learner profiles."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DisabilityType(str, Enum):
    """Declared support needs."""
    DYSLEXIA = "dyslexia"
    ADHD = "adhd"
    AUTISM = "autism"
    INTELLECTUAL_DISABILITY = "intellectual_disability"
    VISUAL_IMPAIRMENT = "visual_impairment"
    HEARING_IMPAIRMENT = "hearing_impairment"


class PreferredPace(str, Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


class AttentionSpan(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class ProcessingSpeed(str, Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


class CapacityLevel(str, Enum):
    """Three-step estimate used across the cognitive profile."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LearningPreferences(BaseModel):
    """Modality flags and pacing preferences."""
    visual_learner: bool = False
    auditory_learner: bool = False
    kinesthetic_learner: bool = False
    preferred_pace: PreferredPace = PreferredPace.NORMAL
    attention_span: AttentionSpan = AttentionSpan.MEDIUM
    processing_speed: ProcessingSpeed = ProcessingSpeed.NORMAL


class CognitiveProfile(BaseModel):
    """Cognitive capacity estimates."""
    working_memory_capacity: CapacityLevel = CapacityLevel.MEDIUM
    executive_function_level: CapacityLevel = CapacityLevel.MEDIUM
    language_processing: CapacityLevel = CapacityLevel.MEDIUM


class PerformanceHistory(BaseModel):
    """Running performance statistics."""
    average_accuracy: float = Field(0.0, ge=0.0, le=1.0)
    average_completion_time: float = Field(0.0, ge=0.0, description="Seconds")
    struggling_concepts: List[str] = Field(default_factory=list)
    mastered_concepts: List[str] = Field(default_factory=list)


class LearnerProfileBase(BaseModel):
    """Base learner profile schema."""
    disability_types: List[DisabilityType] = Field(default_factory=list)
    learning_preferences: LearningPreferences = Field(default_factory=LearningPreferences)
    cognitive_profile: CognitiveProfile = Field(default_factory=CognitiveProfile)
    performance_history: PerformanceHistory = Field(default_factory=PerformanceHistory)

    @field_validator("disability_types")
    @classmethod
    def _dedupe_tags(cls, value: List[DisabilityType]) -> List[DisabilityType]:
        return list(dict.fromkeys(value))


class LearnerProfile(LearnerProfileBase):
    """A learner profile as consumed by the adaptation engine."""
    id: str = "anonymous"


class LearnerProfileCreate(LearnerProfileBase):
    """Schema for profile creation."""
    pass


class LearnerProfileUpdate(BaseModel):
    """Schema for partial profile updates."""
    disability_types: Optional[List[DisabilityType]] = None
    learning_preferences: Optional[LearningPreferences] = None
    cognitive_profile: Optional[CognitiveProfile] = None
    performance_history: Optional[PerformanceHistory] = None


class LearnerProfileResponse(LearnerProfileBase):
    """Schema for profile responses."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
