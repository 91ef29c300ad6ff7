"""Pydantic schemas for content adaptation."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .accessibility import AccessibilitySettings
from .learner import LearnerProfile


class TextComplexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class SupportLevel(str, Enum):
    """Shared scale for visual support and scaffolding."""
    MINIMAL = "minimal"
    MODERATE = "moderate"
    EXTENSIVE = "extensive"


class InteractionType(str, Enum):
    CLICK = "click"
    DRAG = "drag"
    VOICE = "voice"
    GESTURE = "gesture"


class Pacing(str, Enum):
    SELF_PACED = "self-paced"
    GUIDED = "guided"
    TIMED = "timed"


class FeedbackStyle(str, Enum):
    IMMEDIATE = "immediate"
    DELAYED = "delayed"
    SUMMARY = "summary"


class RepetitionLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ContentAdaptationParameters(BaseModel):
    """Derived parameters controlling how lesson content is transformed."""
    text_complexity: TextComplexity = TextComplexity.MODERATE
    visual_support: SupportLevel = SupportLevel.MODERATE
    audio_support: bool = False
    interaction_type: InteractionType = InteractionType.CLICK
    pacing: Pacing = Pacing.SELF_PACED
    feedback_style: FeedbackStyle = FeedbackStyle.IMMEDIATE
    repetition_level: RepetitionLevel = RepetitionLevel.MEDIUM
    scaffolding: SupportLevel = SupportLevel.MODERATE


class StepScaffolding(BaseModel):
    """Guided-practice metadata attached to a lesson step."""
    prerequisite_check: bool = True
    guided_practice: bool = True
    immediate_support: bool = True
    step_number: int = Field(..., ge=1)
    total_steps: int = Field(..., ge=1)


class ContentStep(BaseModel):
    """One ordered lesson step; unknown fields are carried through."""
    model_config = ConfigDict(extra="allow")

    content: str = ""
    scaffolding: Optional[StepScaffolding] = None


class LessonContent(BaseModel):
    """Raw lesson content; unknown fields are carried through."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: Optional[str] = None
    instructions: Optional[str] = None
    description: Optional[str] = None
    steps: List[ContentStep] = Field(default_factory=list)


class VisualAids(BaseModel):
    visual_cues: bool = True
    color_coding: bool = True
    icon_support: bool = True
    progress_indicators: bool = True


class AdaptedLesson(LessonContent):
    """Lesson content after adaptation."""
    visual_aids: Optional[VisualAids] = None
    hints: List[str] = Field(default_factory=list)


class VisualElement(BaseModel):
    type: str
    description: str


class VisualFormat(BaseModel):
    type: str = "visual"
    elements: List[VisualElement] = Field(default_factory=list)


class AudioFormat(BaseModel):
    type: str = "audio"
    narration: Optional[str] = None
    sound_effects: bool = True
    background_music: bool = False
    speed: str = "normal"


class InteractiveElements(BaseModel):
    drag_and_drop: bool = False
    click_to_reveal: bool = False
    voice_commands: bool = False
    gesture_controls: bool = False


class InteractiveFormat(BaseModel):
    type: str = "interactive"
    interaction_type: InteractionType
    adaptive_elements: InteractiveElements


class SimplifiedFormat(BaseModel):
    type: str = "simplified"
    instructions: Optional[str] = None
    description: Optional[str] = None


class AlternativeFormats(BaseModel):
    """Secondary representations offered alongside the adapted content."""
    visual: Optional[VisualFormat] = None
    audio: Optional[AudioFormat] = None
    interactive: InteractiveFormat
    simplified: Optional[SimplifiedFormat] = None


class AdaptedContent(BaseModel):
    """Result of transforming lesson content for one learner."""
    original_content: LessonContent
    adapted_content: AdaptedLesson
    adaptation_reason: str
    confidence_score: float = Field(..., ge=0.70, le=0.95)
    alternative_formats: AlternativeFormats


class Recommendation(BaseModel):
    type: str
    message: str
    action: str


class SimplificationFocus(str, Enum):
    ADHD = "adhd"
    AUTISM = "autism"
    DYSLEXIA = "dyslexia"
    GENERAL = "general"


class ContentSimplificationOptions(BaseModel):
    target_age: int = Field(8, ge=3, le=18)
    disability_type: SimplificationFocus = SimplificationFocus.GENERAL


class SimplifiedContent(BaseModel):
    simplified_text: str
    key_points: List[str] = Field(default_factory=list)
    visual_cues: List[str] = Field(default_factory=list)
    interactive_elements: List[str] = Field(default_factory=list)
    estimated_reading_time: int = Field(..., ge=0, description="Minutes")


# Request/response bodies

class EvaluateRequest(BaseModel):
    profile: LearnerProfile
    settings: AccessibilitySettings = Field(default_factory=AccessibilitySettings)


class TransformRequest(BaseModel):
    content: LessonContent
    parameters: ContentAdaptationParameters
    profile: LearnerProfile


class AdaptRequest(BaseModel):
    content: LessonContent


class SimplifyRequest(BaseModel):
    text: str = ""


class SimplifyResponse(BaseModel):
    original_text: str
    simplified_text: str


class SimplifyContentRequest(BaseModel):
    text: str = Field(..., min_length=1)
    options: ContentSimplificationOptions = Field(default_factory=ContentSimplificationOptions)
