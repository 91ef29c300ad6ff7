"""Heuristic text simplification for lesson content.

These routines are deterministic string rewrites, not language models:
a fixed vocabulary table, a sentence-length rule and a handful of keyword
tables. They stand in for a real simplification model and keep its call
shape so one can be swapped in later.
"""

import math
import re
from typing import Dict, List, Optional

from ..logging_config import get_logger
from ..schemas.adaptation import (
    ContentSimplificationOptions, SimplificationFocus, SimplifiedContent
)

logger = get_logger(__name__)

VOCABULARY: Dict[str, str] = {
    "utilize": "use",
    "demonstrate": "show",
    "approximately": "about",
    "consequently": "so",
    "furthermore": "also",
    "nevertheless": "but",
    "subsequently": "then",
    "comprehend": "understand",
    "acquire": "get",
    "facilitate": "help",
}

MAX_SENTENCE_LENGTH = 50
SENTENCE_SEPARATOR = ". "

_VOCABULARY_PATTERNS = [
    (re.compile(rf"\b{word}\b", re.IGNORECASE), replacement)
    for word, replacement in VOCABULARY.items()
]


def _match_case(replacement: str):
    def _replace(match: re.Match) -> str:
        if match.group(0)[0].isupper():
            return replacement[0].upper() + replacement[1:]
        return replacement
    return _replace


def simplify_vocabulary(text: str, match_case: bool = True) -> str:
    """Replace complex words with simpler ones, whole words only.

    With ``match_case`` off the replacement is always inserted lower-case.
    """
    for pattern, replacement in _VOCABULARY_PATTERNS:
        text = pattern.sub(_match_case(replacement) if match_case else replacement, text)
    return text


def shorten_sentences(text: str) -> str:
    """Cut sentences longer than the limit at their first comma.

    Everything after the first comma of a long sentence is dropped and a
    period is appended, even when the sentence has no comma at all.
    """
    sentences = text.split(SENTENCE_SEPARATOR)
    return SENTENCE_SEPARATOR.join(
        sentence.split(",")[0] + "." if len(sentence) > MAX_SENTENCE_LENGTH else sentence
        for sentence in sentences
    )


def simplify(text: Optional[str]) -> Optional[str]:
    """Simplify text with vocabulary substitution and sentence shortening.

    Empty or missing text is returned unchanged.
    """
    if not text:
        return text
    return shorten_sentences(simplify_vocabulary(text))


# Keyword tables for the content simplifier. Matching is case-sensitive
# substring containment.
CONJUNCTIONS = ["and", "but", "or", "because", "since", "while", "although"]

STRUCTURE_MARKERS = [
    (("first", "second", "then"), "\U0001F4CB"),
    (("important", "remember"), "⚠️"),
    (("example", "like"), "\U0001F4A1"),
]

KEY_POINT_WORDS = ("important", "key", "main", "remember", "must")

VISUAL_CUES = [
    (("number", "count"), "Use counting blocks or fingers"),
    (("color", "red", "blue"), "Show with colorful objects"),
    (("big", "small", "size"), "Compare with familiar objects"),
    (("move", "action"), "Act it out with body movements"),
]
DEFAULT_VISUAL_CUES = ["Use pictures and diagrams", "Point to examples"]

INTERACTIVE_ELEMENTS = [
    (("question", "?"), "Ask and answer questions"),
    (("practice", "try"), "Hands-on practice activity"),
    (("draw", "write"), "Drawing or writing exercise"),
]
ALWAYS_INTERACTIVE = ["Take breaks every 5 minutes", "Repeat in your own words"]

MAX_KEY_POINTS = 5
MIN_KEY_POINT_LENGTH = 20

_CONJUNCTION_PATTERNS = [
    (re.compile(rf"\s+{word}\s+", re.IGNORECASE), f". {word.capitalize()} ")
    for word in CONJUNCTIONS
]
_LONE_LETTERS = [
    (re.compile(r"\bb\b"), "be"),
    (re.compile(r"\bd\b"), "the"),
]
_REPEATED_LETTERS = re.compile(r"([a-z])\1{2,}")


def _contains_any(text: str, words) -> bool:
    return any(word in text for word in words)


class ContentSimplifier:
    """Builds a simplified reading of a passage for a target learner."""

    def simplify_content(
        self,
        text: str,
        options: Optional[ContentSimplificationOptions] = None
    ) -> SimplifiedContent:
        """Simplify a passage and derive reading aids from it."""
        options = options or ContentSimplificationOptions()
        sentences = self.split_sentences(text)

        simplified_text = SENTENCE_SEPARATOR.join(
            self._simplify_sentence(sentence.strip(), options.disability_type)
            for sentence in sentences
        )
        simplified_text = simplify_vocabulary(simplified_text, match_case=False)

        result = SimplifiedContent(
            simplified_text=simplified_text,
            key_points=self.extract_key_points(sentences),
            visual_cues=self.generate_visual_cues(text),
            interactive_elements=self.generate_interactive_elements(text),
            estimated_reading_time=self.estimate_reading_time(simplified_text, options.target_age),
        )

        logger.debug(
            "Content simplified",
            disability_type=options.disability_type.value,
            sentences=len(sentences),
            key_points=len(result.key_points),
        )
        return result

    @staticmethod
    def split_sentences(text: str) -> List[str]:
        return [s for s in re.split(r"[.!?]+", text) if s.strip()]

    def _simplify_sentence(self, sentence: str, focus: SimplificationFocus) -> str:
        if focus == SimplificationFocus.ADHD:
            return self.break_down_sentence(sentence)
        if focus == SimplificationFocus.AUTISM:
            return self.add_structure_marker(sentence)
        if focus == SimplificationFocus.DYSLEXIA:
            return self.improve_readability(sentence)
        return sentence

    @staticmethod
    def break_down_sentence(sentence: str) -> str:
        """Split a sentence at its conjunctions."""
        for pattern, replacement in _CONJUNCTION_PATTERNS:
            sentence = pattern.sub(replacement, sentence)
        return sentence

    @staticmethod
    def add_structure_marker(sentence: str) -> str:
        """Prefix sequence, warning and example sentences with a marker."""
        for words, marker in STRUCTURE_MARKERS:
            if _contains_any(sentence, words):
                return f"{marker} {sentence}"
        return sentence

    @staticmethod
    def improve_readability(sentence: str) -> str:
        """Spell out lone "b" and "d", then collapse letter runs to two."""
        for pattern, replacement in _LONE_LETTERS:
            sentence = pattern.sub(replacement, sentence)
        return _REPEATED_LETTERS.sub(r"\1\1", sentence)

    @staticmethod
    def extract_key_points(sentences: List[str]) -> List[str]:
        key_points = [
            f"• {sentence.strip()}"
            for sentence in sentences
            if len(sentence.strip()) > MIN_KEY_POINT_LENGTH
            and _contains_any(sentence, KEY_POINT_WORDS)
        ]
        if not key_points:
            return [f"• {sentence.strip()}" for sentence in sentences[:3]]
        return key_points[:MAX_KEY_POINTS]

    @staticmethod
    def generate_visual_cues(text: str) -> List[str]:
        cues = [cue for words, cue in VISUAL_CUES if _contains_any(text, words)]
        return cues or list(DEFAULT_VISUAL_CUES)

    @staticmethod
    def generate_interactive_elements(text: str) -> List[str]:
        elements = [element for words, element in INTERACTIVE_ELEMENTS if _contains_any(text, words)]
        return elements + ALWAYS_INTERACTIVE

    @staticmethod
    def estimate_reading_time(text: str, target_age: int) -> int:
        """Minutes to read the text at an age-scaled words-per-minute rate."""
        words = len(text.split())
        words_per_minute = max(50, min(200, target_age * 20))
        return math.ceil(words / words_per_minute)
