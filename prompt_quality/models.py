"""Pydantic models for prompt quality data structures."""

from __future__ import annotations
from enum import Enum
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from prompt_quality.errors import InvalidArgumentError


class MediaType(str, Enum):
    """Kind of content a prompt is written for."""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class AnswerType(str, Enum):
    """How a clarifying question was answered."""
    OPTION = "option"
    CUSTOM = "custom"
    DEFAULT = "default"
    SKIPPED = "skipped"


class QuestionAnswer(BaseModel):
    """A user's answer to one clarifying question."""
    model_config = ConfigDict(populate_by_name=True)

    type: AnswerType
    value: str = ""
    custom_text: Optional[str] = Field(default=None, alias="customText")


class PromptAnalysisSummary(BaseModel):
    """The subset of an analysis stored alongside an optimization."""
    completeness_score: int = Field(ge=0, le=100)
    missing_elements: list[str] = Field(default_factory=list)
    grammar_fixed: bool = False
    structure_improved: bool = False


class PromptAnalysisResult(BaseModel):
    """Heuristic analysis of a single prompt."""
    completeness_score: int = Field(ge=0, le=100)
    missing_elements: list[str] = Field(default_factory=list)
    grammar_fixed: bool = Field(
        default=False, description="True when at least one grammar issue was detected"
    )
    structure_improved: bool = Field(
        default=False, description="True when at least one structure issue was detected"
    )
    word_count: int = Field(ge=0)
    clarity_score: float = Field(ge=0, le=100)
    specificity_score: float = Field(ge=0, le=100)
    structure_score: float = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list, description="Grammar issues, then structure issues")

    def summary(self) -> PromptAnalysisSummary:
        return PromptAnalysisSummary(
            completeness_score=self.completeness_score,
            missing_elements=list(self.missing_elements),
            grammar_fixed=self.grammar_fixed,
            structure_improved=self.structure_improved,
        )


class IntentPreservationResult(BaseModel):
    """Whether an optimized prompt kept to what the user asked for."""
    preserved: bool
    violations: list[str] = Field(default_factory=list)
    added_details: list[str] = Field(default_factory=list)
    score: int = Field(ge=0, le=100, description="100 = perfect preservation")


class DimensionScore(BaseModel):
    """A single dimension score with the factors that explain it."""
    score: float = Field(ge=0, le=100)
    factors: list[str] = Field(default_factory=list)


class QualityBreakdown(BaseModel):
    """All 5 scoring dimensions with their factors."""
    clarity: DimensionScore
    specificity: DimensionScore
    structure: DimensionScore
    completeness: DimensionScore
    intent_preservation: DimensionScore


class ComprehensiveQualityScore(BaseModel):
    """Weighted quality score of an optimized prompt against its original."""
    overall: int = Field(ge=0, le=100)
    clarity: float = Field(ge=0, le=100)
    specificity: float = Field(ge=0, le=100)
    structure: float = Field(ge=0, le=100)
    completeness: int = Field(ge=0, le=100)
    intent_preservation: int = Field(ge=0, le=100)
    breakdown: QualityBreakdown


class ScorePair(BaseModel):
    """A measurement taken before and after optimization."""
    before: float = Field(ge=0)
    after: float = Field(ge=0)


class OptimizationMetadata(BaseModel):
    """Before/after measurements recorded for an optimization."""
    word_count: ScorePair
    token_count: ScorePair
    clarity_score: ScorePair
    specificity_score: ScorePair
    structure_score: ScorePair
    completeness_score: int = Field(ge=0, le=100)


class QualitySummary(BaseModel):
    """Compact quality score persisted with an optimization."""
    before: int = Field(ge=0, le=100)
    after: int = Field(ge=0, le=100)
    improvements: list[str] = Field(default_factory=list)
    intent_preserved: bool


class QualityReport(BaseModel):
    """Everything recorded for one scoring request."""
    analysis: PromptAnalysisResult
    score: Optional[ComprehensiveQualityScore] = None
    metadata: Optional[OptimizationMetadata] = None
    summary: Optional[QualitySummary] = None


class ScoreRequest(BaseModel):
    """Request payload for scoring an optimized prompt."""
    model_config = ConfigDict(populate_by_name=True)

    original_prompt: str = Field(alias="originalPrompt", description="The prompt as the user wrote it")
    optimized_prompt: Optional[str] = Field(
        default=None, alias="optimizedPrompt", description="The rewritten prompt, if any"
    )
    media_type: MediaType = Field(alias="mediaType")
    target_model: Optional[str] = Field(default=None, alias="targetModel")
    user_answers: Optional[dict[str, QuestionAnswer]] = Field(default=None, alias="userAnswers")
    additional_details: Optional[str] = Field(default=None, alias="additionalDetails")

    @classmethod
    def parse_payload(cls, payload: Union[dict[str, Any], str]) -> "ScoreRequest":
        """Validate a dict or JSON payload, raising InvalidArgumentError on bad input."""
        try:
            if isinstance(payload, str):
                return cls.model_validate_json(payload)
            return cls.model_validate(payload)
        except ValidationError as e:
            first = e.errors()[0]
            argument = ".".join(str(part) for part in first["loc"]) or "payload"
            raise InvalidArgumentError(argument, first["msg"]) from e


def parse_media_type(value: Union[MediaType, str, None]) -> MediaType:
    """Resolve a media type, accepting enum members or case-insensitive names."""
    if isinstance(value, MediaType):
        return value
    if isinstance(value, str):
        try:
            return MediaType(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in MediaType)
    raise InvalidArgumentError("media_type", f"{value!r} is not one of: {allowed}")
