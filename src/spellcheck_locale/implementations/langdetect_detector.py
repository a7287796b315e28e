"""Language detector backed by langdetect."""

from __future__ import annotations

import asyncio

from langdetect import DetectorFactory, LangDetectException, detect

from spellcheck_locale.error_handling import raise_language_detection_failed
from spellcheck_locale.logging_utils import create_service_logger
from spellcheck_locale.protocols import LanguageDetectorProtocol

logger = create_service_logger("spellcheck_locale.implementations.langdetect_detector")


class LangDetectLanguageDetector(LanguageDetectorProtocol):
    """Detects the bare language of a text sample using langdetect."""

    def __init__(self, seed: int = 0) -> None:
        # langdetect is non-deterministic unless the factory is seeded
        DetectorFactory.seed = seed

    async def detect(self, text: str) -> str:
        """Detect the language of the given text.

        Args:
            text: Text to analyze

        Returns:
            Bare ISO 639-1 language code (``zh-cn`` is reported as ``zh``)

        Raises:
            SpellcheckLocaleError: LANGUAGE_DETECTION_FAILED if langdetect cannot decide
        """
        try:
            detected = await asyncio.to_thread(detect, text)
        except LangDetectException as e:
            raise_language_detection_failed(
                operation="detect",
                message=f"Could not detect language: {e}",
                text_length=len(text),
            )

        language = detected.split("-", 1)[0].lower()
        logger.debug(f"Detected language {language} for text of length {len(text)}")
        return language
