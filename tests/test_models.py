"""Tests for request parsing and result models."""

import pytest
from pydantic import ValidationError

from prompt_quality.errors import InvalidArgumentError
from prompt_quality.models import (
    AnswerType,
    DimensionScore,
    MediaType,
    QuestionAnswer,
    ScoreRequest,
    parse_media_type,
)


class TestScoreRequest:
    """Boundary payload validation."""

    def test_camel_case_payload(self):
        request = ScoreRequest.parse_payload(
            {
                "originalPrompt": "create image of cat",
                "optimizedPrompt": "Create an image of a cat",
                "mediaType": "image",
                "targetModel": "DALL-E 3",
                "userAnswers": {"style": {"type": "option", "value": "photorealistic"}},
                "additionalDetails": "orange tabby, golden hour",
            }
        )

        assert request.media_type is MediaType.IMAGE
        assert request.user_answers["style"].type is AnswerType.OPTION
        assert request.additional_details == "orange tabby, golden hour"

    def test_json_payload(self):
        request = ScoreRequest.parse_payload('{"originalPrompt": "cat", "mediaType": "text"}')
        assert request.optimized_prompt is None
        assert request.media_type is MediaType.TEXT

    def test_invalid_media_type(self):
        with pytest.raises(InvalidArgumentError) as exc:
            ScoreRequest.parse_payload({"originalPrompt": "cat", "mediaType": "invalid"})
        assert exc.value.argument == "mediaType"

    def test_missing_prompt(self):
        with pytest.raises(InvalidArgumentError) as exc:
            ScoreRequest.parse_payload({"mediaType": "image"})
        assert exc.value.argument == "originalPrompt"

    def test_invalid_answer_type(self):
        with pytest.raises(InvalidArgumentError):
            ScoreRequest.parse_payload(
                {
                    "originalPrompt": "cat",
                    "mediaType": "image",
                    "userAnswers": {"style": {"type": "guess", "value": "x"}},
                }
            )


class TestModels:
    """Result model constraints."""

    def test_question_answer_alias(self):
        answer = QuestionAnswer.model_validate({"type": "custom", "value": "x", "customText": "orange tabby"})
        assert answer.custom_text == "orange tabby"

    def test_scores_are_bounded(self):
        with pytest.raises(ValidationError):
            DimensionScore(score=101)
        with pytest.raises(ValidationError):
            DimensionScore(score=-1)

    def test_parse_media_type(self):
        assert parse_media_type(" Video ") is MediaType.VIDEO
        assert parse_media_type(MediaType.AUDIO) is MediaType.AUDIO
        with pytest.raises(InvalidArgumentError):
            parse_media_type(None)
