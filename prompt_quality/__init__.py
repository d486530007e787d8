"""
Prompt Quality: heuristic prompt scoring and intent preservation.

Usage:
    from prompt_quality import analyze_prompt, calculate_comprehensive_quality_score
    analysis = analyze_prompt("create image of cat", "image")
    score = calculate_comprehensive_quality_score(original, optimized, "image")
"""

from prompt_quality.analyzer import PromptAnalyzer, analyze_prompt
from prompt_quality.cache import (
    CacheRegistry,
    CacheSweeper,
    TTLCache,
    create_cache_registry,
    generate_analysis_cache_key,
    generate_questions_cache_key,
)
from prompt_quality.errors import InvalidArgumentError, PromptQualityError
from prompt_quality.intent import validate_intent_preservation
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
    QuestionAnswer,
    ScoreRequest,
)
from prompt_quality.scoring import QualityScorer, calculate_comprehensive_quality_score

__version__ = "0.1.0"

__all__ = [
    "PromptAnalyzer",
    "QualityScorer",
    "analyze_prompt",
    "validate_intent_preservation",
    "calculate_comprehensive_quality_score",
    "TTLCache",
    "CacheRegistry",
    "CacheSweeper",
    "create_cache_registry",
    "generate_analysis_cache_key",
    "generate_questions_cache_key",
    "PromptQualityError",
    "InvalidArgumentError",
    "MediaType",
    "QuestionAnswer",
    "PromptAnalysisResult",
    "IntentPreservationResult",
    "DimensionScore",
    "QualityBreakdown",
    "ComprehensiveQualityScore",
    "OptimizationMetadata",
    "QualitySummary",
    "QualityReport",
    "ScoreRequest",
]
