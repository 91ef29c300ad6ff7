"""Rule-based content adaptation engine."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..logging_config import get_logger
from ..schemas.accessibility import AccessibilitySettings
from ..schemas.adaptation import (
    AdaptedContent, AdaptedLesson, AlternativeFormats, AudioFormat,
    ContentAdaptationParameters, ContentStep, FeedbackStyle, InteractionType,
    InteractiveElements, InteractiveFormat, LessonContent, Pacing,
    Recommendation, RepetitionLevel, SimplifiedFormat, StepScaffolding,
    SupportLevel, TextComplexity, VisualAids, VisualElement, VisualFormat
)
from ..schemas.learner import CapacityLevel, DisabilityType, LearnerProfile, ProcessingSpeed
from .text_simplifier import simplify

logger = get_logger(__name__)

BASE_CONFIDENCE = 0.70
MAX_CONFIDENCE = 0.95
CONFIDENCE_STEP = 0.10
HIGH_ACCURACY_THRESHOLD = 0.8
LOW_ACCURACY_THRESHOLD = 0.6
MAX_STRUGGLING_CONCEPTS = 3

VISUAL_ELEMENTS = [
    VisualElement(type="diagram", description="Visual representation of the concept"),
    VisualElement(type="infographic", description="Step-by-step visual guide"),
    VisualElement(type="animation", description="Animated explanation"),
]

HINTS = [
    "Take your time and read each instruction carefully",
    "If you get stuck, try breaking the problem into smaller parts",
    "Remember to use the visual aids to help you understand",
    "Don't worry about making mistakes - they help you learn!",
]

ADAPTED_ONLY_FIELDS = {"visual_aids", "hints"}


def _disability_tags(profile: LearnerProfile) -> set:
    tags = getattr(profile, "disability_types", None) or []
    return {getattr(tag, "value", tag) for tag in tags}


def _has_tag(tag: DisabilityType) -> Callable[[LearnerProfile, AccessibilitySettings], bool]:
    def _check(profile: LearnerProfile, settings: AccessibilitySettings) -> bool:
        return tag.value in _disability_tags(profile)
    return _check


def _low_working_memory(profile: LearnerProfile, settings: AccessibilitySettings) -> bool:
    cognitive = getattr(profile, "cognitive_profile", None)
    return getattr(cognitive, "working_memory_capacity", None) == CapacityLevel.LOW


def _slow_processing(profile: LearnerProfile, settings: AccessibilitySettings) -> bool:
    preferences = getattr(profile, "learning_preferences", None)
    return getattr(preferences, "processing_speed", None) == ProcessingSpeed.SLOW


def _audio_enabled(profile: LearnerProfile, settings: AccessibilitySettings) -> bool:
    return bool(getattr(settings, "audio_enabled", False))


def _simplified_interface(profile: LearnerProfile, settings: AccessibilitySettings) -> bool:
    return bool(getattr(settings, "simplified_interface", False))


@dataclass(frozen=True)
class AdaptationRule:
    """A condition and the parameter values it forces when it holds."""
    name: str
    applies: Callable[[LearnerProfile, AccessibilitySettings], bool]
    overrides: Dict[str, Any] = field(default_factory=dict)


# Applied in this order; a later rule overwrites fields set by an earlier one.
ADAPTATION_RULES: List[AdaptationRule] = [
    AdaptationRule("dyslexia", _has_tag(DisabilityType.DYSLEXIA), {
        "text_complexity": TextComplexity.SIMPLE,
        "visual_support": SupportLevel.EXTENSIVE,
        "audio_support": True,
    }),
    AdaptationRule("adhd", _has_tag(DisabilityType.ADHD), {
        "pacing": Pacing.GUIDED,
        "feedback_style": FeedbackStyle.IMMEDIATE,
        "repetition_level": RepetitionLevel.HIGH,
    }),
    AdaptationRule("autism", _has_tag(DisabilityType.AUTISM), {
        "scaffolding": SupportLevel.EXTENSIVE,
        "pacing": Pacing.SELF_PACED,
        "interaction_type": InteractionType.CLICK,
    }),
    AdaptationRule("intellectual_disability", _has_tag(DisabilityType.INTELLECTUAL_DISABILITY), {
        "text_complexity": TextComplexity.SIMPLE,
        "visual_support": SupportLevel.EXTENSIVE,
        "repetition_level": RepetitionLevel.HIGH,
        "scaffolding": SupportLevel.EXTENSIVE,
    }),
    AdaptationRule("visual_impairment", _has_tag(DisabilityType.VISUAL_IMPAIRMENT), {
        "audio_support": True,
        "text_complexity": TextComplexity.SIMPLE,
        "interaction_type": InteractionType.VOICE,
    }),
    AdaptationRule("hearing_impairment", _has_tag(DisabilityType.HEARING_IMPAIRMENT), {
        "visual_support": SupportLevel.EXTENSIVE,
        "audio_support": False,
    }),
    AdaptationRule("low_working_memory", _low_working_memory, {
        "scaffolding": SupportLevel.EXTENSIVE,
        "repetition_level": RepetitionLevel.HIGH,
    }),
    AdaptationRule("slow_processing", _slow_processing, {
        "pacing": Pacing.SELF_PACED,
        "text_complexity": TextComplexity.SIMPLE,
    }),
    AdaptationRule("audio_enabled", _audio_enabled, {
        "audio_support": True,
    }),
    AdaptationRule("simplified_interface", _simplified_interface, {
        "text_complexity": TextComplexity.SIMPLE,
        "scaffolding": SupportLevel.EXTENSIVE,
    }),
]


class AdaptationEngine:
    """Maps learner profiles to adaptation parameters and adapts lessons.

    The engine holds no state; construct one wherever it is needed.
    """

    def __init__(self, rules: Optional[List[AdaptationRule]] = None):
        self.rules = list(ADAPTATION_RULES if rules is None else rules)

    def matching_rules(
        self,
        profile: LearnerProfile,
        settings: Optional[AccessibilitySettings] = None
    ) -> List[AdaptationRule]:
        """Rules whose condition holds, in application order."""
        settings = settings or AccessibilitySettings()
        return [rule for rule in self.rules if rule.applies(profile, settings)]

    def evaluate(
        self,
        profile: LearnerProfile,
        settings: Optional[AccessibilitySettings] = None
    ) -> ContentAdaptationParameters:
        """Derive adaptation parameters from a profile and settings.

        Starts from the baseline parameter set and applies each matching
        rule's overrides in the fixed rule order, regardless of the order
        of the profile's tags. Unrecognised tags match no rule.
        """
        params = ContentAdaptationParameters()
        applied = self.matching_rules(profile, settings)
        for rule in applied:
            params = params.model_copy(update=rule.overrides)

        logger.debug(
            "Adaptation parameters evaluated",
            profile_id=getattr(profile, "id", None),
            applied_rules=[rule.name for rule in applied],
        )
        return params

    def transform(
        self,
        content: LessonContent,
        params: ContentAdaptationParameters,
        profile: LearnerProfile
    ) -> AdaptedContent:
        """Apply adaptation parameters to lesson content."""
        original = content.model_copy(deep=True)
        # Carried-through keys named like the adapted lesson's own fields are replaced
        adapted = AdaptedLesson.model_validate(content.model_dump(exclude=ADAPTED_ONLY_FIELDS))
        formats: Dict[str, Any] = {}

        if params.text_complexity == TextComplexity.SIMPLE:
            adapted.instructions = simplify(content.instructions)
            adapted.description = simplify(content.description)
            formats["simplified"] = SimplifiedFormat(
                instructions=adapted.instructions,
                description=adapted.description,
            )

        if params.visual_support == SupportLevel.EXTENSIVE:
            adapted.visual_aids = VisualAids()
            formats["visual"] = VisualFormat(elements=[e.model_copy() for e in VISUAL_ELEMENTS])

        if params.audio_support:
            formats["audio"] = AudioFormat(narration=adapted.instructions or adapted.description)

        if params.scaffolding == SupportLevel.EXTENSIVE:
            adapted.steps = self.add_scaffolding(adapted.steps)
            adapted.hints = list(HINTS)

        formats["interactive"] = self.interactive_format(params.interaction_type)

        result = AdaptedContent(
            original_content=original,
            adapted_content=adapted,
            adaptation_reason=self.adaptation_reason(params),
            confidence_score=self.confidence_score(profile),
            alternative_formats=AlternativeFormats(**formats),
        )

        logger.info(
            "Content adapted",
            profile_id=getattr(profile, "id", None),
            content_id=content.id,
            formats=sorted(formats),
            confidence_score=result.confidence_score,
        )
        return result

    def adapt(
        self,
        content: LessonContent,
        profile: LearnerProfile,
        settings: Optional[AccessibilitySettings] = None
    ) -> AdaptedContent:
        """Evaluate the profile and transform the content in one step."""
        return self.transform(content, self.evaluate(profile, settings), profile)

    def recommend(self, profile: LearnerProfile) -> List[Recommendation]:
        """Suggest next steps from the learner's performance history."""
        history = profile.performance_history
        recommendations = []

        if history.average_accuracy < LOW_ACCURACY_THRESHOLD:
            recommendations.append(Recommendation(
                type="difficulty",
                message="Consider trying easier content to build confidence",
                action="reduce_difficulty",
            ))

        if len(history.struggling_concepts) > MAX_STRUGGLING_CONCEPTS:
            recommendations.append(Recommendation(
                type="review",
                message="Review previous concepts before moving forward",
                action="suggest_review",
            ))

        return recommendations

    @staticmethod
    def add_scaffolding(steps: List[ContentStep]) -> List[ContentStep]:
        total = len(steps)
        return [
            step.model_copy(update={
                "scaffolding": StepScaffolding(step_number=index, total_steps=total)
            })
            for index, step in enumerate(steps, start=1)
        ]

    @staticmethod
    def interactive_format(interaction_type: InteractionType) -> InteractiveFormat:
        return InteractiveFormat(
            interaction_type=interaction_type,
            adaptive_elements=InteractiveElements(
                drag_and_drop=interaction_type == InteractionType.DRAG,
                click_to_reveal=interaction_type == InteractionType.CLICK,
                voice_commands=interaction_type == InteractionType.VOICE,
                gesture_controls=interaction_type == InteractionType.GESTURE,
            ),
        )

    @staticmethod
    def adaptation_reason(params: ContentAdaptationParameters) -> str:
        # With no clauses the sentence reads "adapted with  based on"
        reasons = []
        if params.text_complexity == TextComplexity.SIMPLE:
            reasons.append("simplified language for better comprehension")
        if params.audio_support:
            reasons.append("audio support for accessibility")
        if params.scaffolding == SupportLevel.EXTENSIVE:
            reasons.append("additional guidance and support")
        return f"Content adapted with {', '.join(reasons)} based on your learning profile."

    @staticmethod
    def confidence_score(profile: LearnerProfile) -> float:
        score = BASE_CONFIDENCE
        history = getattr(profile, "performance_history", None)
        if getattr(history, "average_accuracy", 0.0) > HIGH_ACCURACY_THRESHOLD:
            score += CONFIDENCE_STEP
        if _disability_tags(profile):
            score += CONFIDENCE_STEP
        return round(min(score, MAX_CONFIDENCE), 2)
