"""
Heuristic prompt analyzer.

Scores a single prompt for completeness, clarity, specificity and structure,
and lists the grammar and structure issues found. Everything here is a pure
function of the prompt text and media type.
"""

import logging
import math
import re
from typing import Callable, Optional, Union

from prompt_quality.cache import TTLCache, generate_analysis_cache_key
from prompt_quality.errors import require_text
from prompt_quality.models import MediaType, PromptAnalysisResult, parse_media_type
from prompt_quality import vocabulary

logger = logging.getLogger(__name__)

# (element name, presence check) per media type, in reporting order
ELEMENT_CHECKS: dict[MediaType, list[tuple[str, Callable[[str], bool]]]] = {
    MediaType.IMAGE: [
        ("style", vocabulary.has_style),
        ("composition", vocabulary.has_composition),
        ("background", vocabulary.has_background),
        ("quality_indicators", vocabulary.has_quality_indicators),
    ],
    MediaType.TEXT: [
        ("tone", vocabulary.has_tone),
        ("format", vocabulary.has_format),
        ("context", vocabulary.has_context),
    ],
    MediaType.VIDEO: [
        ("duration", vocabulary.has_duration),
        ("style", vocabulary.has_style),
        ("technical_specs", vocabulary.has_technical_specs),
    ],
    MediaType.AUDIO: [
        ("duration", vocabulary.has_duration),
        ("style", vocabulary.has_style),
        ("technical_specs", vocabulary.has_technical_specs),
    ],
}

MISSING_ARTICLE = "Missing article (a/an/the)"
INFORMAL_LANGUAGE = 'Informal language - consider using "create" instead of "draw me"'
TOO_SHORT = "Prompt is too short"
LACKS_PUNCTUATION = "Prompt lacks proper punctuation and structure"

_NOUN = re.compile(r"\b(cat|dog|image|picture|photo)\b", re.IGNORECASE)
_ARTICLE_NOUN = re.compile(r"\b(a|an|the)\s+(cat|dog|image|picture|photo)\b", re.IGNORECASE)
_INFORMAL = re.compile(r"\b(draw|make|create)\s+me\s+", re.IGNORECASE)
_PUNCTUATION = re.compile(r"[.,;:]")
_DESCRIPTIVE = re.compile(r"\b(beautiful|detailed|specific|clear|precise|exact)\b", re.IGNORECASE)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return math.floor(value + 0.5)


def _clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


# ── Issue detection ────────────────────────────────────────────


def check_grammar(prompt: str) -> list[str]:
    issues = []
    if _NOUN.search(prompt) and not _ARTICLE_NOUN.search(prompt):
        issues.append(MISSING_ARTICLE)
    if _INFORMAL.search(prompt):
        issues.append(INFORMAL_LANGUAGE)
    return issues


def check_structure(prompt: str) -> list[str]:
    issues = []
    word_count = vocabulary.count_words(prompt)
    if word_count < 3:
        issues.append(TOO_SHORT)
    if not _PUNCTUATION.search(prompt) and word_count > 5:
        issues.append(LACKS_PUNCTUATION)
    return issues


def find_missing_elements(prompt: str, media_type: MediaType) -> list[str]:
    return [name for name, present in ELEMENT_CHECKS[media_type] if not present(prompt)]


# ── Scores (0-100) ─────────────────────────────────────────────


def completeness_score(missing_count: int, media_type: MediaType) -> int:
    max_missing = len(ELEMENT_CHECKS[media_type])
    return round_half_up(max(0, 100 - (missing_count / max_missing) * 100))


def clarity_score(prompt: str, grammar_issues: list[str], word_count: int) -> float:
    score = 100 - len(grammar_issues) * 15
    if len(prompt) < 10:
        score -= 20
    if not _PUNCTUATION.search(prompt) and word_count > 5:
        score -= 10
    return _clamp(score)


def specificity_score(prompt: str, word_count: int) -> float:
    """More words and more descriptive words mean a more specific prompt."""
    descriptive_bonus = len(_DESCRIPTIVE.findall(prompt)) * 5
    base = min(100, (word_count / 20) * 100)
    return _clamp(base + descriptive_bonus)


def structure_score(prompt: str, structure_issues: list[str], word_count: int) -> float:
    score = 100 - len(structure_issues) * 20
    if _PUNCTUATION.search(prompt):
        score += 10
    if word_count > 5:
        score += 5
    return _clamp(score)


def analyze_prompt(prompt: str, media_type: Union[MediaType, str]) -> PromptAnalysisResult:
    """
    Analyze a prompt to identify what's missing and what needs improvement.

    Args:
        prompt: The prompt text (may be empty)
        media_type: One of text, image, video, audio

    Returns:
        PromptAnalysisResult with sub-scores, missing elements and issues

    Raises:
        InvalidArgumentError: prompt is not a string or media_type is unknown
    """
    prompt = require_text(prompt, "prompt")
    media_type = parse_media_type(media_type)

    word_count = vocabulary.count_words(prompt)
    missing = find_missing_elements(prompt, media_type)
    grammar_issues = check_grammar(prompt)
    structure_issues = check_structure(prompt)

    return PromptAnalysisResult(
        completeness_score=completeness_score(len(missing), media_type),
        missing_elements=missing,
        grammar_fixed=bool(grammar_issues),
        structure_improved=bool(structure_issues),
        word_count=word_count,
        clarity_score=clarity_score(prompt, grammar_issues, word_count),
        specificity_score=specificity_score(prompt, word_count),
        structure_score=structure_score(prompt, structure_issues, word_count),
        issues=grammar_issues + structure_issues,
    )


class PromptAnalyzer:
    """
    Prompt analyzer with optional memoization.

    Usage:
        analyzer = PromptAnalyzer(cache=registry.optimizations)
        result = analyzer.analyze("create image of cat", "image", target_model="dall-e-3")

    Results are only cached when a target model is given, since the cache
    key is built from (prompt, media type, target model).
    """

    def __init__(self, cache: Optional[TTLCache] = None):
        self.cache = cache

    def analyze(
        self,
        prompt: str,
        media_type: Union[MediaType, str],
        target_model: Optional[str] = None,
    ) -> PromptAnalysisResult:
        prompt = require_text(prompt, "prompt")
        media_type = parse_media_type(media_type)

        key = None
        if self.cache is not None and target_model:
            key = generate_analysis_cache_key(prompt, media_type.value, target_model)
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("Analysis cache hit key=%s", key)
                return cached.model_copy(deep=True)

        result = analyze_prompt(prompt, media_type)
        logger.debug(
            "Analyzed prompt (length=%d, media=%s, words=%d, missing=%d)",
            len(prompt),
            media_type.value,
            result.word_count,
            len(result.missing_elements),
        )

        if key is not None:
            self.cache.set(key, result.model_copy(deep=True))
        return result
