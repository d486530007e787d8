"""
Comprehensive quality scoring.

Analyzes the original and optimized prompts, validates intent preservation,
and combines five dimensions into one weighted score:

    clarity 25%, specificity 25%, structure 20%,
    completeness 15%, intent preservation 15%
"""

import logging
from functools import lru_cache
from typing import Optional, Union

import tiktoken

from prompt_quality.analyzer import PromptAnalyzer, analyze_prompt, round_half_up
from prompt_quality.config import TOKEN_ENCODING
from prompt_quality.errors import require_text
from prompt_quality.intent import UserAnswers, validate_intent_preservation
from prompt_quality.models import (
    ComprehensiveQualityScore,
    DimensionScore,
    IntentPreservationResult,
    MediaType,
    OptimizationMetadata,
    PromptAnalysisResult,
    QualityBreakdown,
    QualityReport,
    QualitySummary,
    ScorePair,
    ScoreRequest,
    parse_media_type,
)

logger = logging.getLogger(__name__)

WEIGHTS = {
    "clarity": 0.25,
    "specificity": 0.25,
    "structure": 0.20,
    "completeness": 0.15,
    "intent_preservation": 0.15,
}

HIGH_SCORE = 80
MODERATE_SCORE = 60


def weighted_overall(
    clarity: float,
    specificity: float,
    structure: float,
    completeness: float,
    intent_preservation: float,
) -> int:
    return round_half_up(
        clarity * WEIGHTS["clarity"]
        + specificity * WEIGHTS["specificity"]
        + structure * WEIGHTS["structure"]
        + completeness * WEIGHTS["completeness"]
        + intent_preservation * WEIGHTS["intent_preservation"]
    )


def _points(value: float) -> str:
    return format(value, "g")


def _delta_factor(label: str, before: float, after: float) -> str:
    change = after - before
    if change > 0:
        return f"{label} improved by {_points(change)} points"
    if change < 0:
        return f"{label} decreased by {_points(abs(change))} points"
    return f"{label} maintained"


def _level_factor(score: float, high: str, moderate: str, low: str) -> str:
    if score >= HIGH_SCORE:
        return high
    if score >= MODERATE_SCORE:
        return moderate
    return low


# ── Per-dimension breakdowns ───────────────────────────────────


def clarity_dimension(original: PromptAnalysisResult, optimized: PromptAnalysisResult) -> DimensionScore:
    return DimensionScore(
        score=optimized.clarity_score,
        factors=[
            _delta_factor("Clarity", original.clarity_score, optimized.clarity_score),
            _level_factor(
                optimized.clarity_score,
                "High clarity achieved",
                "Moderate clarity",
                "Clarity needs improvement",
            ),
        ],
    )


def specificity_dimension(original: PromptAnalysisResult, optimized: PromptAnalysisResult) -> DimensionScore:
    factors = [_delta_factor("Specificity", original.specificity_score, optimized.specificity_score)]
    word_increase = optimized.word_count - original.word_count
    if word_increase > 0:
        factors.append(f"Added {word_increase} words for detail")
    factors.append(
        _level_factor(
            optimized.specificity_score,
            "Highly specific",
            "Moderately specific",
            "Needs more specificity",
        )
    )
    return DimensionScore(score=optimized.specificity_score, factors=factors)


def structure_dimension(original: PromptAnalysisResult, optimized: PromptAnalysisResult) -> DimensionScore:
    return DimensionScore(
        score=optimized.structure_score,
        factors=[
            _delta_factor("Structure", original.structure_score, optimized.structure_score),
            _level_factor(
                optimized.structure_score,
                "Well-structured prompt",
                "Adequate structure",
                "Structure needs improvement",
            ),
        ],
    )


def completeness_dimension(optimized: PromptAnalysisResult) -> DimensionScore:
    return DimensionScore(
        score=optimized.completeness_score,
        factors=[
            f"Missing elements: {len(optimized.missing_elements)}",
            f"Completeness: {optimized.completeness_score}%",
        ],
    )


def intent_dimension(intent: IntentPreservationResult) -> DimensionScore:
    if intent.preserved:
        factors = ["Intent fully preserved"]
    else:
        factors = ["Intent violations detected", *intent.violations]
    return DimensionScore(score=intent.score, factors=factors)


def combine_scores(
    original: PromptAnalysisResult,
    optimized: PromptAnalysisResult,
    intent: IntentPreservationResult,
) -> ComprehensiveQualityScore:
    """Combine two analyses and an intent check into a weighted score."""
    breakdown = QualityBreakdown(
        clarity=clarity_dimension(original, optimized),
        specificity=specificity_dimension(original, optimized),
        structure=structure_dimension(original, optimized),
        completeness=completeness_dimension(optimized),
        intent_preservation=intent_dimension(intent),
    )
    return ComprehensiveQualityScore(
        overall=weighted_overall(
            optimized.clarity_score,
            optimized.specificity_score,
            optimized.structure_score,
            optimized.completeness_score,
            intent.score,
        ),
        clarity=optimized.clarity_score,
        specificity=optimized.specificity_score,
        structure=optimized.structure_score,
        completeness=optimized.completeness_score,
        intent_preservation=intent.score,
        breakdown=breakdown,
    )


def calculate_comprehensive_quality_score(
    original_prompt: str,
    optimized_prompt: str,
    media_type: Union[MediaType, str],
    user_answers: Optional[UserAnswers] = None,
    additional_details: Optional[str] = None,
) -> ComprehensiveQualityScore:
    """
    Score an optimized prompt against the original it was built from.

    Args:
        original_prompt: The prompt as the user wrote it
        optimized_prompt: The rewritten prompt
        media_type: One of text, image, video, audio
        user_answers: Answers to clarifying questions, keyed by question id
        additional_details: Free-form details the user added

    Returns:
        ComprehensiveQualityScore with the overall score and a per-dimension breakdown

    Raises:
        InvalidArgumentError: a prompt is not a string or media_type is unknown
    """
    original_prompt = require_text(original_prompt, "original_prompt")
    optimized_prompt = require_text(optimized_prompt, "optimized_prompt")
    media_type = parse_media_type(media_type)

    return combine_scores(
        analyze_prompt(original_prompt, media_type),
        analyze_prompt(optimized_prompt, media_type),
        validate_intent_preservation(original_prompt, optimized_prompt, user_answers, additional_details),
    )


# ── Optimization metadata ──────────────────────────────────────


@lru_cache(maxsize=1)
def _tokenizer():
    try:
        return tiktoken.get_encoding(TOKEN_ENCODING)
    except Exception as e:
        logger.warning("tiktoken encoding %s not available, token counts will be estimated: %s", TOKEN_ENCODING, e)
        return None


def count_tokens(text: str) -> int:
    """Count tokens in text."""
    tokenizer = _tokenizer()
    if tokenizer is not None:
        # special-token text such as <|endoftext|> is counted as plain text
        return len(tokenizer.encode(text, disallowed_special=()))
    # Rough estimate: ~4 chars per token
    return len(text) // 4


def build_optimization_metadata(
    original: PromptAnalysisResult,
    optimized: PromptAnalysisResult,
    original_prompt: str,
    optimized_prompt: str,
) -> OptimizationMetadata:
    return OptimizationMetadata(
        word_count=ScorePair(before=original.word_count, after=optimized.word_count),
        token_count=ScorePair(before=count_tokens(original_prompt), after=count_tokens(optimized_prompt)),
        clarity_score=ScorePair(before=original.clarity_score, after=optimized.clarity_score),
        specificity_score=ScorePair(before=original.specificity_score, after=optimized.specificity_score),
        structure_score=ScorePair(before=original.structure_score, after=optimized.structure_score),
        completeness_score=optimized.completeness_score,
    )


def summarize_quality(original: PromptAnalysisResult, score: ComprehensiveQualityScore) -> QualitySummary:
    """
    Compact before/after view of a score.

    `before` scores the original prompt on its own (its intent is trivially
    preserved); `improvements` lists the factors that report a gain.
    """
    before = weighted_overall(
        original.clarity_score,
        original.specificity_score,
        original.structure_score,
        original.completeness_score,
        100,
    )
    improvements = [
        factor
        for dimension in (score.breakdown.clarity, score.breakdown.specificity, score.breakdown.structure)
        for factor in dimension.factors
        if " improved by " in factor or factor.startswith("Added ")
    ]
    return QualitySummary(
        before=before,
        after=score.overall,
        improvements=improvements,
        # only a violation-free check scores 100
        intent_preserved=score.intent_preservation == 100,
    )


class QualityScorer:
    """
    Scores optimizations and builds the report stored alongside them.

    Usage:
        scorer = QualityScorer(PromptAnalyzer(cache=registry.optimizations))
        report = scorer.evaluate(ScoreRequest.parse_payload(payload))
    """

    def __init__(self, analyzer: Optional[PromptAnalyzer] = None):
        self.analyzer = analyzer or PromptAnalyzer()

    def score(
        self,
        original_prompt: str,
        optimized_prompt: str,
        media_type: Union[MediaType, str],
        user_answers: Optional[UserAnswers] = None,
        additional_details: Optional[str] = None,
        target_model: Optional[str] = None,
    ) -> ComprehensiveQualityScore:
        """Same as calculate_comprehensive_quality_score, with analyses memoized per target model."""
        return self._score(
            original_prompt, optimized_prompt, media_type, user_answers, additional_details, target_model
        )[2]

    def evaluate(self, request: ScoreRequest) -> QualityReport:
        """Full report for a request: score, before/after metadata and summary."""
        if request.optimized_prompt is None:
            analysis = self.analyzer.analyze(request.original_prompt, request.media_type, request.target_model)
            return QualityReport(analysis=analysis)

        original, optimized, score = self._score(
            request.original_prompt,
            request.optimized_prompt,
            request.media_type,
            request.user_answers,
            request.additional_details,
            request.target_model,
        )
        logger.info(
            "Scored optimization (media=%s, overall=%d, intent=%d)",
            request.media_type.value,
            score.overall,
            score.intent_preservation,
        )
        return QualityReport(
            analysis=original,
            score=score,
            metadata=build_optimization_metadata(
                original, optimized, request.original_prompt, request.optimized_prompt
            ),
            summary=summarize_quality(original, score),
        )

    def _score(
        self,
        original_prompt: str,
        optimized_prompt: str,
        media_type: Union[MediaType, str],
        user_answers: Optional[UserAnswers],
        additional_details: Optional[str],
        target_model: Optional[str],
    ) -> tuple[PromptAnalysisResult, PromptAnalysisResult, ComprehensiveQualityScore]:
        original_prompt = require_text(original_prompt, "original_prompt")
        optimized_prompt = require_text(optimized_prompt, "optimized_prompt")
        media_type = parse_media_type(media_type)

        original = self.analyzer.analyze(original_prompt, media_type, target_model)
        optimized = self.analyzer.analyze(optimized_prompt, media_type, target_model)
        intent = validate_intent_preservation(original_prompt, optimized_prompt, user_answers, additional_details)
        return original, optimized, combine_scores(original, optimized, intent)
