"""
Intent preservation check.

Flags creative specifics (colors, styles, backgrounds, moods) that an
optimized prompt introduces without the user having asked for them in the
original prompt, their answers to clarifying questions, or their
additional details.
"""

import logging
from typing import Any, Mapping, Optional, Union

from prompt_quality.errors import InvalidArgumentError, require_text
from prompt_quality.models import IntentPreservationResult, QuestionAnswer
from prompt_quality.vocabulary import LexicalDetails, extract_details

logger = logging.getLogger(__name__)

# Answer values that mean "the user did not specify anything"
NO_PREFERENCE_VALUES = frozenset({"no_preference", "default"})

# Evaluation order of the lexical categories
CATEGORIES = ("colors", "styles", "backgrounds", "moods")

VIOLATION_PENALTY = 20
LONG_PROMPT_LENGTH = 100
LONG_PROMPT_BONUS = 5

UserAnswers = Mapping[str, Union[QuestionAnswer, Mapping[str, Any]]]


def _answer_text(answer: Any) -> str:
    """The text a user gave for one answer: custom text first, then the value."""
    if isinstance(answer, QuestionAnswer):
        return answer.custom_text or answer.value or ""
    if isinstance(answer, Mapping):
        for field in ("customText", "custom_text", "value"):
            text = answer.get(field)
            if isinstance(text, str) and text:
                return text
    return ""


def extract_user_specified_details(
    original_prompt: str,
    user_answers: Optional[UserAnswers] = None,
    additional_details: Optional[str] = None,
) -> LexicalDetails:
    """Union of the specifics found in everything the user wrote."""
    details = extract_details(original_prompt)

    if user_answers:
        for answer in user_answers.values():
            text = _answer_text(answer)
            if text and text not in NO_PREFERENCE_VALUES:
                extract_details(text, into=details)

    if additional_details:
        extract_details(additional_details, into=details)

    return details


def preservation_score(violation_count: int, prompt_length: int) -> int:
    """
    Score from 0-100, 100 meaning nothing unsolicited was added.

    Each violating category costs 20 points; prompts longer than 100
    characters get 5 points back since they may carry more context.
    """
    if violation_count == 0:
        return 100
    bonus = LONG_PROMPT_BONUS if prompt_length > LONG_PROMPT_LENGTH else 0
    return max(0, min(100, 100 - violation_count * VIOLATION_PENALTY + bonus))


def validate_intent_preservation(
    original_prompt: str,
    optimized_prompt: str,
    user_answers: Optional[UserAnswers] = None,
    additional_details: Optional[str] = None,
) -> IntentPreservationResult:
    """
    Check that an optimized prompt preserves the user's intent.

    Args:
        original_prompt: The prompt as the user wrote it
        optimized_prompt: The rewritten prompt
        user_answers: Answers to clarifying questions, keyed by question id
        additional_details: Free-form details the user added

    Returns:
        IntentPreservationResult with one violation per category that gained
        unsolicited terms
    """
    original_prompt = require_text(original_prompt, "original_prompt")
    optimized_prompt = require_text(optimized_prompt, "optimized_prompt")
    if user_answers is not None and not isinstance(user_answers, Mapping):
        raise InvalidArgumentError("user_answers", "expected a mapping of question id to answer")

    specified = extract_user_specified_details(original_prompt, user_answers, additional_details)
    optimized = extract_details(optimized_prompt)

    violations: list[str] = []
    added: list[str] = []
    for category in CATEGORIES:
        allowed = getattr(specified, category)
        unsolicited = [term for term in getattr(optimized, category) if term not in allowed]
        if unsolicited:
            violations.append(f"Added {category} not specified: {', '.join(unsolicited)}")
            added.extend(unsolicited)

    if violations:
        logger.debug("Intent violations: %s", violations)

    return IntentPreservationResult(
        preserved=not violations,
        violations=violations,
        added_details=added,
        score=preservation_score(len(violations), len(optimized_prompt)),
    )
