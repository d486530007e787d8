"""Tests for the heuristic prompt analyzer."""

import pytest

from prompt_quality.analyzer import (
    INFORMAL_LANGUAGE,
    LACKS_PUNCTUATION,
    MISSING_ARTICLE,
    TOO_SHORT,
    PromptAnalyzer,
    analyze_prompt,
    completeness_score,
    round_half_up,
)
from prompt_quality.cache import TTLCache
from prompt_quality.errors import InvalidArgumentError
from prompt_quality.models import MediaType

LONG_IMAGE_PROMPT = (
    "Create a high-quality, photorealistic image of a beautiful orange tabby cat, "
    "centered in the frame, with soft natural lighting, blurred background, warm "
    "vibrant colors, showcasing detailed fur texture, professional photography style"
)


class TestImagePrompts:
    """Analysis of image prompts."""

    def test_simple_image_prompt(self):
        result = analyze_prompt("create image of cat", "image")

        assert result.word_count == 4
        assert result.missing_elements == ["style", "composition", "background", "quality_indicators"]
        assert result.completeness_score == 0
        assert result.issues == [MISSING_ARTICLE]
        assert result.grammar_fixed is True
        assert result.structure_improved is False
        assert result.clarity_score == 85
        assert result.specificity_score == 20
        assert result.structure_score == 100

    def test_informal_language(self):
        result = analyze_prompt("draw me a cat", "image")

        assert result.issues == [INFORMAL_LANGUAGE]
        assert result.clarity_score == 85
        assert result.completeness_score < 100

    def test_detailed_prompt_is_complete(self):
        result = analyze_prompt(LONG_IMAGE_PROMPT, "image")

        assert result.word_count > 10
        assert result.missing_elements == []
        assert result.completeness_score == 100
        assert result.specificity_score == 100

    def test_background_detected(self):
        result = analyze_prompt("create image of cat in a garden", "image")
        assert "background" not in result.missing_elements
        assert result.completeness_score == 25

    def test_very_short_prompt(self):
        result = analyze_prompt("cat", "image")

        assert result.word_count == 1
        assert result.issues == [MISSING_ARTICLE, TOO_SHORT]
        assert result.clarity_score == 65
        assert result.specificity_score == 5
        assert result.structure_score == 80


class TestOtherMediaTypes:
    """Missing-element vocabularies for text, video and audio."""

    def test_text_missing_everything(self):
        result = analyze_prompt("write something", "text")

        assert result.missing_elements == ["tone", "format", "context"]
        assert result.completeness_score == 0
        assert result.issues == [TOO_SHORT]
        assert result.clarity_score == 100
        assert result.structure_score == 80

    def test_text_complete_but_unpunctuated(self):
        prompt = "Write a friendly article about the history of coffee in Europe for beginners"
        result = analyze_prompt(prompt, MediaType.TEXT)

        assert result.word_count == 13
        assert result.missing_elements == []
        assert result.completeness_score == 100
        assert result.issues == [LACKS_PUNCTUATION]
        assert result.structure_improved is True
        assert result.clarity_score == 90
        assert result.structure_score == 85

    def test_video_missing_style(self):
        result = analyze_prompt("A short clip of waves, 4k at 30 fps", "video")

        assert result.missing_elements == ["style"]
        assert result.completeness_score == 67

    def test_audio_uses_video_checks(self):
        result = analyze_prompt("relaxing piano music", "audio")
        assert result.missing_elements == ["duration", "style", "technical_specs"]
        assert result.completeness_score == 0


class TestScores:
    """Score formulas and bounds."""

    def test_descriptive_words_bonus(self):
        result = analyze_prompt("A beautiful, detailed and precise image", "image")
        # 6 words -> 30, plus 3 descriptive words
        assert result.specificity_score == 45

    def test_completeness_rounding(self):
        assert completeness_score(1, MediaType.IMAGE) == 75
        assert completeness_score(1, MediaType.TEXT) == 67
        assert completeness_score(2, MediaType.VIDEO) == 33
        assert round_half_up(62.5) == 63
        assert round_half_up(62.4) == 62

    def test_empty_prompt(self):
        result = analyze_prompt("", "image")

        assert result.word_count == 0
        assert result.issues == [TOO_SHORT]
        assert result.clarity_score == 80
        assert result.specificity_score == 0
        assert result.structure_score == 80
        assert result.completeness_score == 0

    @pytest.mark.parametrize("media_type", ["text", "image", "video", "audio"])
    @pytest.mark.parametrize(
        "prompt",
        ["", " ", "cat", "draw me the dog", "a" * 5000, "create image of 猫 🐱 @#$%^&*()", LONG_IMAGE_PROMPT],
    )
    def test_scores_stay_in_range(self, prompt, media_type):
        result = analyze_prompt(prompt, media_type)

        for value in (
            result.completeness_score,
            result.clarity_score,
            result.specificity_score,
            result.structure_score,
        ):
            assert 0 <= value <= 100
        assert result.word_count >= 0

    def test_idempotent(self):
        assert analyze_prompt(LONG_IMAGE_PROMPT, "image") == analyze_prompt(LONG_IMAGE_PROMPT, "image")

    def test_summary_keeps_flags(self):
        summary = analyze_prompt("create image of cat", "image").summary()
        assert summary.grammar_fixed is True
        assert summary.structure_improved is False
        assert summary.completeness_score == 0


class TestInvalidInput:
    """Boundary validation."""

    def test_none_prompt_rejected(self):
        with pytest.raises(InvalidArgumentError):
            analyze_prompt(None, "image")

    def test_non_string_prompt_rejected(self):
        with pytest.raises(ValueError):
            analyze_prompt(42, "image")

    def test_unknown_media_type_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc:
            analyze_prompt("create image of cat", "gif")
        assert exc.value.argument == "media_type"

    def test_media_type_case_insensitive(self):
        assert analyze_prompt("cat", "IMAGE") == analyze_prompt("cat", "image")


class TestPromptAnalyzer:
    """Memoizing analyzer."""

    def test_caches_per_target_model(self, clock):
        cache = TTLCache(default_ttl=60, clock=clock)
        analyzer = PromptAnalyzer(cache=cache)

        first = analyzer.analyze("create image of cat", "image", target_model="DALL-E 3")
        second = analyzer.analyze("  Create image of cat ", "image", target_model="dall-e 3")

        assert cache.size() == 1
        assert first == second

    def test_cached_result_is_a_copy(self, clock):
        cache = TTLCache(default_ttl=60, clock=clock)
        analyzer = PromptAnalyzer(cache=cache)

        first = analyzer.analyze("create image of cat", "image", target_model="m")
        first.issues.append("tampered")
        second = analyzer.analyze("create image of cat", "image", target_model="m")

        assert second.issues == [MISSING_ARTICLE]

    def test_no_caching_without_target_model(self, clock):
        cache = TTLCache(default_ttl=60, clock=clock)
        PromptAnalyzer(cache=cache).analyze("create image of cat", "image")
        assert cache.size() == 0

    def test_expired_analysis_recomputed(self, clock):
        cache = TTLCache(default_ttl=60, clock=clock)
        analyzer = PromptAnalyzer(cache=cache)
        analyzer.analyze("cat", "image", target_model="m")

        clock.advance(61)
        assert cache.size() == 1
        analyzer.analyze("cat", "image", target_model="m")
        assert cache.size() == 1

    def test_rejects_invalid_input_before_cache(self, clock):
        analyzer = PromptAnalyzer(cache=TTLCache(clock=clock))
        with pytest.raises(InvalidArgumentError):
            analyzer.analyze(None, "image", target_model="m")
