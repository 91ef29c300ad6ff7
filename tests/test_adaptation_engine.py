"""Tests for the rule-based adaptation engine."""

import pytest

from adaptiq.schemas.accessibility import AccessibilitySettings
from adaptiq.schemas.adaptation import (
    ContentAdaptationParameters, ContentStep, FeedbackStyle, InteractionType,
    LessonContent, Pacing, RepetitionLevel, SupportLevel, TextComplexity
)
from adaptiq.schemas.learner import (
    CognitiveProfile, LearnerProfile, LearningPreferences, PerformanceHistory
)
from adaptiq.services.adaptation_engine import HINTS, AdaptationEngine

BASELINE = ContentAdaptationParameters(
    text_complexity=TextComplexity.MODERATE,
    visual_support=SupportLevel.MODERATE,
    audio_support=False,
    interaction_type=InteractionType.CLICK,
    pacing=Pacing.SELF_PACED,
    feedback_style=FeedbackStyle.IMMEDIATE,
    repetition_level=RepetitionLevel.MEDIUM,
    scaffolding=SupportLevel.MODERATE,
)


def profile_with(*tags, **kwargs) -> LearnerProfile:
    return LearnerProfile(id="learner", disability_types=list(tags), **kwargs)


class TestEvaluate:
    """Rule evaluation."""

    def test_no_needs_and_default_settings_yield_baseline(self, engine, plain_profile, default_settings):
        assert engine.evaluate(plain_profile, default_settings) == BASELINE

    def test_settings_are_optional(self, engine, plain_profile):
        assert engine.evaluate(plain_profile) == BASELINE

    def test_dyslexia(self, engine):
        params = engine.evaluate(profile_with("dyslexia"))
        assert params.text_complexity == TextComplexity.SIMPLE
        assert params.visual_support == SupportLevel.EXTENSIVE
        assert params.audio_support is True

    def test_adhd(self, engine):
        params = engine.evaluate(profile_with("adhd"))
        assert params.pacing == Pacing.GUIDED
        assert params.feedback_style == FeedbackStyle.IMMEDIATE
        assert params.repetition_level == RepetitionLevel.HIGH

    def test_autism(self, engine):
        params = engine.evaluate(profile_with("autism"))
        assert params.scaffolding == SupportLevel.EXTENSIVE
        assert params.pacing == Pacing.SELF_PACED
        assert params.interaction_type == InteractionType.CLICK

    def test_autism_restores_self_pacing_after_adhd(self, engine):
        params = engine.evaluate(profile_with("adhd", "autism"))
        assert params.pacing == Pacing.SELF_PACED
        assert params.repetition_level == RepetitionLevel.HIGH

    def test_intellectual_disability(self, engine):
        params = engine.evaluate(profile_with("intellectual_disability"))
        assert params.text_complexity == TextComplexity.SIMPLE
        assert params.visual_support == SupportLevel.EXTENSIVE
        assert params.repetition_level == RepetitionLevel.HIGH
        assert params.scaffolding == SupportLevel.EXTENSIVE

    def test_visual_impairment(self, engine):
        params = engine.evaluate(profile_with("visual_impairment"))
        assert params.audio_support is True
        assert params.text_complexity == TextComplexity.SIMPLE
        assert params.interaction_type == InteractionType.VOICE

    def test_hearing_impairment(self, engine):
        params = engine.evaluate(profile_with("hearing_impairment"))
        assert params.visual_support == SupportLevel.EXTENSIVE
        assert params.audio_support is False

    def test_hearing_impairment_cancels_dyslexia_audio(self, engine):
        params = engine.evaluate(profile_with("dyslexia", "hearing_impairment"))
        assert params.audio_support is False
        assert params.text_complexity == TextComplexity.SIMPLE

    def test_tag_order_does_not_change_rule_order(self, engine):
        forward = engine.evaluate(profile_with("dyslexia", "hearing_impairment"))
        backward = engine.evaluate(profile_with("hearing_impairment", "dyslexia"))
        assert forward == backward
        assert backward.audio_support is False

    def test_audio_setting_overrides_hearing_impairment(self, engine):
        params = engine.evaluate(
            profile_with("hearing_impairment"),
            AccessibilitySettings(audio_enabled=True),
        )
        assert params.audio_support is True

    def test_low_working_memory(self, engine):
        profile = profile_with(cognitive_profile=CognitiveProfile(working_memory_capacity="low"))
        params = engine.evaluate(profile)
        assert params.scaffolding == SupportLevel.EXTENSIVE
        assert params.repetition_level == RepetitionLevel.HIGH

    def test_slow_processing(self, engine):
        profile = profile_with("adhd", learning_preferences=LearningPreferences(processing_speed="slow"))
        params = engine.evaluate(profile)
        assert params.pacing == Pacing.SELF_PACED
        assert params.text_complexity == TextComplexity.SIMPLE

    def test_simplified_interface(self, engine, plain_profile):
        params = engine.evaluate(plain_profile, AccessibilitySettings(simplified_interface=True))
        assert params.text_complexity == TextComplexity.SIMPLE
        assert params.scaffolding == SupportLevel.EXTENSIVE

    def test_unknown_tag_matches_no_rule(self, engine):
        profile = LearnerProfile.model_construct(
            id="raw",
            disability_types=["dyscalculia"],
            learning_preferences=LearningPreferences(),
            cognitive_profile=CognitiveProfile(),
            performance_history=PerformanceHistory(),
        )
        assert engine.evaluate(profile) == BASELINE

    def test_missing_sections_fall_back_to_baseline(self, engine):
        profile = LearnerProfile.model_construct(id="bare")
        assert engine.evaluate(profile) == BASELINE

    def test_evaluate_is_repeatable(self, engine):
        profile = profile_with("autism", "visual_impairment")
        settings = AccessibilitySettings(audio_enabled=True)
        assert engine.evaluate(profile, settings) == engine.evaluate(profile, settings)

    def test_matching_rules_follow_rule_order(self, engine):
        profile = profile_with("hearing_impairment", "dyslexia")
        names = [rule.name for rule in engine.matching_rules(profile)]
        assert names == ["dyslexia", "hearing_impairment"]


class TestTransform:
    """Content transformation."""

    def test_simple_text_is_simplified(self, engine, sample_lesson, plain_profile):
        params = ContentAdaptationParameters(text_complexity=TextComplexity.SIMPLE)
        result = engine.transform(sample_lesson, params, plain_profile)

        assert result.adapted_content.instructions == "We will use blocks to show counting."
        assert "get" in result.adapted_content.description
        assert result.alternative_formats.simplified is not None
        assert result.alternative_formats.simplified.instructions == result.adapted_content.instructions

    def test_moderate_text_is_untouched(self, engine, sample_lesson, plain_profile):
        result = engine.transform(sample_lesson, ContentAdaptationParameters(), plain_profile)

        assert result.adapted_content.instructions == sample_lesson.instructions
        assert result.alternative_formats.simplified is None
        assert result.alternative_formats.visual is None
        assert result.alternative_formats.audio is None
        assert result.adapted_content.visual_aids is None
        assert result.adapted_content.hints == []

    def test_missing_text_stays_missing(self, engine, plain_profile):
        params = ContentAdaptationParameters(text_complexity=TextComplexity.SIMPLE)
        result = engine.transform(LessonContent(), params, plain_profile)
        assert result.adapted_content.instructions is None
        assert result.adapted_content.description is None

    def test_extensive_visual_support(self, engine, sample_lesson, plain_profile):
        params = ContentAdaptationParameters(visual_support=SupportLevel.EXTENSIVE)
        result = engine.transform(sample_lesson, params, plain_profile)

        aids = result.adapted_content.visual_aids
        assert aids.visual_cues and aids.color_coding and aids.icon_support and aids.progress_indicators
        elements = result.alternative_formats.visual.elements
        assert [e.type for e in elements] == ["diagram", "infographic", "animation"]
        assert all(e.description for e in elements)

    def test_audio_narrates_adapted_instructions(self, engine, sample_lesson, plain_profile):
        params = ContentAdaptationParameters(audio_support=True, text_complexity=TextComplexity.SIMPLE)
        audio = engine.transform(sample_lesson, params, plain_profile).alternative_formats.audio

        assert audio.narration == "We will use blocks to show counting."
        assert audio.sound_effects is True
        assert audio.background_music is False
        assert audio.speed == "normal"

    def test_audio_falls_back_to_description(self, engine, plain_profile):
        content = LessonContent(description="Listen carefully.")
        params = ContentAdaptationParameters(audio_support=True)
        audio = engine.transform(content, params, plain_profile).alternative_formats.audio
        assert audio.narration == "Listen carefully."

    def test_extensive_scaffolding_wraps_each_step(self, engine, sample_lesson, plain_profile):
        params = ContentAdaptationParameters(scaffolding=SupportLevel.EXTENSIVE)
        result = engine.transform(sample_lesson, params, plain_profile)

        steps = result.adapted_content.steps
        assert len(steps) == 3
        assert [s.scaffolding.step_number for s in steps] == [1, 2, 3]
        assert all(s.scaffolding.total_steps == 3 for s in steps)
        assert all(
            s.scaffolding.prerequisite_check and s.scaffolding.guided_practice and s.scaffolding.immediate_support
            for s in steps
        )
        assert [s.content for s in steps] == [s.content for s in sample_lesson.steps]
        assert result.adapted_content.hints == HINTS

    def test_scaffolding_without_steps(self, engine, plain_profile):
        params = ContentAdaptationParameters(scaffolding=SupportLevel.EXTENSIVE)
        result = engine.transform(LessonContent(instructions="Go"), params, plain_profile)
        assert result.adapted_content.steps == []
        assert len(result.adapted_content.hints) == 4

    @pytest.mark.parametrize("interaction_type, flag", [
        (InteractionType.DRAG, "drag_and_drop"),
        (InteractionType.CLICK, "click_to_reveal"),
        (InteractionType.VOICE, "voice_commands"),
        (InteractionType.GESTURE, "gesture_controls"),
    ])
    def test_interactive_format_sets_one_flag(self, engine, sample_lesson, plain_profile, interaction_type, flag):
        params = ContentAdaptationParameters(interaction_type=interaction_type)
        interactive = engine.transform(sample_lesson, params, plain_profile).alternative_formats.interactive

        flags = interactive.adaptive_elements.model_dump()
        assert [name for name, value in flags.items() if value] == [flag]
        assert interactive.interaction_type == interaction_type

    def test_reason_lists_applied_adaptations(self, engine, sample_lesson, plain_profile):
        params = ContentAdaptationParameters(
            text_complexity=TextComplexity.SIMPLE,
            audio_support=True,
            scaffolding=SupportLevel.EXTENSIVE,
        )
        result = engine.transform(sample_lesson, params, plain_profile)
        assert result.adaptation_reason == (
            "Content adapted with simplified language for better comprehension, "
            "audio support for accessibility, additional guidance and support "
            "based on your learning profile."
        )

    def test_reason_without_adaptations(self, engine, sample_lesson, plain_profile):
        result = engine.transform(sample_lesson, ContentAdaptationParameters(), plain_profile)
        assert result.adaptation_reason == "Content adapted with  based on your learning profile."

    @pytest.mark.parametrize("tags, accuracy, expected", [
        ([], 0.5, 0.7),
        ([], 0.9, 0.8),
        (["adhd"], 0.5, 0.8),
        (["adhd"], 0.81, 0.9),
        (["adhd"], 0.8, 0.8),
    ])
    def test_confidence_score(self, engine, sample_lesson, tags, accuracy, expected):
        profile = profile_with(*tags, performance_history=PerformanceHistory(average_accuracy=accuracy))
        result = engine.transform(sample_lesson, ContentAdaptationParameters(), profile)
        assert result.confidence_score == pytest.approx(expected)

    def test_inputs_are_not_mutated(self, engine, sample_lesson, plain_profile):
        before = sample_lesson.model_dump()
        params = ContentAdaptationParameters(
            text_complexity=TextComplexity.SIMPLE,
            scaffolding=SupportLevel.EXTENSIVE,
            visual_support=SupportLevel.EXTENSIVE,
        )
        result = engine.transform(sample_lesson, params, plain_profile)

        assert sample_lesson.model_dump() == before
        assert result.original_content.model_dump() == before
        assert all(step.scaffolding is None for step in sample_lesson.steps)

    def test_extra_content_fields_are_kept(self, engine, sample_lesson, plain_profile):
        result = engine.transform(sample_lesson, ContentAdaptationParameters(), plain_profile)
        assert result.adapted_content.model_dump()["subject"] == "math"

    def test_extra_step_fields_are_kept(self, engine, plain_profile):
        content = LessonContent(steps=[ContentStep(content="Clap", image="clap.png")])
        params = ContentAdaptationParameters(scaffolding=SupportLevel.EXTENSIVE)
        step = engine.transform(content, params, plain_profile).adapted_content.steps[0]
        assert step.model_dump()["image"] == "clap.png"

    def test_lesson_carrying_its_own_hints_and_visual_aids(self, engine, plain_profile):
        content = LessonContent(
            instructions="Count",
            hints=[{"text": "Use fingers"}],
            visual_aids="picture.png",
        )

        result = engine.transform(content, ContentAdaptationParameters(), plain_profile)

        assert result.adapted_content.hints == []
        assert result.adapted_content.visual_aids is None
        assert result.original_content.model_dump()["visual_aids"] == "picture.png"

    def test_lesson_hints_replaced_when_scaffolded(self, engine, plain_profile):
        content = LessonContent(instructions="Count", hints="look closely", visual_aids=["a", "b"])
        params = ContentAdaptationParameters(
            scaffolding=SupportLevel.EXTENSIVE,
            visual_support=SupportLevel.EXTENSIVE,
        )

        result = engine.transform(content, params, plain_profile)

        assert result.adapted_content.hints == HINTS
        assert result.adapted_content.visual_aids.color_coding is True


class TestAdaptAndRecommend:
    """Combined adaptation and recommendations."""

    def test_adapt_evaluates_then_transforms(self, engine, sample_lesson):
        profile = profile_with("dyslexia")
        result = engine.adapt(sample_lesson, profile, AccessibilitySettings())

        assert result.alternative_formats.audio is not None
        assert result.alternative_formats.visual is not None
        assert result.adapted_content.instructions == "We will use blocks to show counting."
        assert result.confidence_score == pytest.approx(0.8)

    def test_no_recommendations_for_strong_learner(self, engine):
        profile = profile_with(performance_history=PerformanceHistory(average_accuracy=0.9))
        assert engine.recommend(profile) == []

    def test_low_accuracy_suggests_easier_content(self, engine):
        profile = profile_with(performance_history=PerformanceHistory(average_accuracy=0.4))
        actions = [r.action for r in engine.recommend(profile)]
        assert actions == ["reduce_difficulty"]

    def test_many_struggling_concepts_suggest_review(self, engine):
        history = PerformanceHistory(
            average_accuracy=0.7,
            struggling_concepts=["a", "b", "c", "d"],
        )
        actions = [r.action for r in engine.recommend(profile_with(performance_history=history))]
        assert actions == ["suggest_review"]

    def test_three_struggling_concepts_are_not_enough(self, engine):
        history = PerformanceHistory(average_accuracy=0.7, struggling_concepts=["a", "b", "c"])
        assert engine.recommend(profile_with(performance_history=history)) == []
