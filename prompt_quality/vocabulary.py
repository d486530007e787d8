"""
Fixed vocabularies and the text feature checks built on them.

Every check is a plain case-insensitive substring test, not a word match:
"warmth" contains "warm" and "shortcut" contains "short". The analyzer and
the intent validator depend on these exact hits, so keep it that way.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

STYLE_TERMS = (
    "photorealistic",
    "realistic",
    "cartoon",
    "illustration",
    "artistic",
    "painting",
    "abstract",
    "minimalist",
    "watercolor",
    "oil painting",
    "digital art",
    "sketch",
    "drawing",
)

COMPOSITION_TERMS = (
    "centered",
    "close-up",
    "full body",
    "portrait",
    "landscape",
    "rule of thirds",
    "framed",
)

BACKGROUND_TERMS = (
    "background",
    "setting",
    "indoor",
    "outdoor",
    "studio",
    "environment",
    "scene",
    "garden",
    "library",
    "beach",
    "forest",
    "city",
    "room",
)

QUALITY_TERMS = (
    "high quality",
    "high-resolution",
    "professional",
    "detailed",
    "sharp",
    "crisp",
    "8k",
    "4k",
)

TONE_TERMS = (
    "professional",
    "casual",
    "formal",
    "friendly",
    "serious",
    "humorous",
    "technical",
)

FORMAT_TERMS = (
    "paragraph",
    "list",
    "bullet points",
    "structured",
    "outline",
    "essay",
    "article",
)

DURATION_TERMS = (
    "second",
    "minute",
    "hour",
    "duration",
    "length",
    "short",
    "long",
)

TECHNICAL_SPEC_TERMS = (
    "fps",
    "resolution",
    "bitrate",
    "codec",
    "format",
    "quality",
    "hd",
    "4k",
    "8k",
)

COLOR_TERMS = (
    "red",
    "blue",
    "green",
    "yellow",
    "orange",
    "purple",
    "pink",
    "brown",
    "black",
    "white",
    "gray",
    "grey",
    "gold",
    "silver",
    "vibrant",
    "warm",
    "cool",
    "pastel",
    "neon",
    "orange tabby",
    "calico",
    "tabby",
)

MOOD_TERMS = (
    "cozy",
    "dramatic",
    "peaceful",
    "energetic",
    "mysterious",
    "happy",
    "sad",
    "romantic",
    "playful",
    "serious",
    "relaxed",
    "tense",
    "atmosphere",
    "mood",
)

# Prompts longer than this many words are assumed to carry some context
CONTEXT_WORD_THRESHOLD = 10


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in the text."""
    return len(text.split())


def contains_any(text: str, terms: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(term in lowered for term in terms)


def extract_terms(
    text: str, terms: Iterable[str], found: Optional[list[str]] = None
) -> list[str]:
    """
    Collect the vocabulary terms contained in text.

    Terms already in `found` are not added again, so calling this on several
    texts with the same list builds their union in discovery order.

    Returns:
        The `found` list (a new one if none was given)
    """
    if found is None:
        found = []
    lowered = text.lower()
    for term in terms:
        if term in lowered and term not in found:
            found.append(term)
    return found


# ── Presence checks used by the analyzer ───────────────────────


def has_style(text: str) -> bool:
    return contains_any(text, STYLE_TERMS)


def has_composition(text: str) -> bool:
    return contains_any(text, COMPOSITION_TERMS)


def has_background(text: str) -> bool:
    return contains_any(text, BACKGROUND_TERMS)


def has_quality_indicators(text: str) -> bool:
    return contains_any(text, QUALITY_TERMS)


def has_tone(text: str) -> bool:
    return contains_any(text, TONE_TERMS)


def has_format(text: str) -> bool:
    return contains_any(text, FORMAT_TERMS)


def has_context(text: str) -> bool:
    return count_words(text) > CONTEXT_WORD_THRESHOLD


def has_duration(text: str) -> bool:
    return contains_any(text, DURATION_TERMS)


def has_technical_specs(text: str) -> bool:
    return contains_any(text, TECHNICAL_SPEC_TERMS)


# ── Lexical extraction used by the intent validator ────────────


@dataclass
class LexicalDetails:
    """Creative specifics found in one or more texts, per category."""
    colors: list[str] = field(default_factory=list)
    styles: list[str] = field(default_factory=list)
    backgrounds: list[str] = field(default_factory=list)
    moods: list[str] = field(default_factory=list)


def extract_details(text: str, into: Optional[LexicalDetails] = None) -> LexicalDetails:
    """Extract colors, styles, backgrounds and moods from text."""
    details = into if into is not None else LexicalDetails()
    extract_terms(text, COLOR_TERMS, details.colors)
    extract_terms(text, STYLE_TERMS, details.styles)
    extract_terms(text, BACKGROUND_TERMS, details.backgrounds)
    extract_terms(text, MOOD_TERMS, details.moods)
    return details
