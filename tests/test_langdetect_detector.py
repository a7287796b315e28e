"""Tests for the langdetect-backed language detector."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from langdetect import LangDetectException

from spellcheck_locale.error_handling import ErrorCode, SpellcheckLocaleError
from spellcheck_locale.implementations.langdetect_detector import LangDetectLanguageDetector

DETECT = "spellcheck_locale.implementations.langdetect_detector.detect"


class TestLangDetectLanguageDetector:
    @pytest.mark.asyncio
    async def test_returns_bare_language(self) -> None:
        with patch(DETECT, return_value="fr") as detect:
            language = await LangDetectLanguageDetector().detect("Bonjour tout le monde")

        assert language == "fr"
        detect.assert_called_once_with("Bonjour tout le monde")

    @pytest.mark.asyncio
    async def test_regional_result_is_reduced_to_language(self) -> None:
        with patch(DETECT, return_value="zh-cn"):
            assert await LangDetectLanguageDetector().detect("你好世界") == "zh"

    @pytest.mark.asyncio
    async def test_undecidable_text_raises(self) -> None:
        with patch(DETECT, side_effect=LangDetectException(0, "No features in text.")):
            with pytest.raises(SpellcheckLocaleError) as exc_info:
                await LangDetectLanguageDetector().detect("123")

        assert exc_info.value.has_code(ErrorCode.LANGUAGE_DETECTION_FAILED)
        assert exc_info.value.error_detail.details["text_length"] == 3

    @pytest.mark.asyncio
    async def test_real_detection_of_english_prose(self) -> None:
        detector = LangDetectLanguageDetector(seed=0)

        language = await detector.detect(
            "The quick brown fox jumps over the lazy dog while the children watch "
            "from the garden and their parents prepare dinner in the kitchen."
        )

        assert language == "en"
