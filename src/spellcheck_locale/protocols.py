from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from spellcheck_locale.config import PlatformFamily
from spellcheck_locale.models import DictionaryPayload, SpellingIssueSpan

# Host callback: (words, optional delivery callback) -> True when nothing is misspelled
SpellCheckCallback = Callable[[list[str], Callable[[list[str]], None] | None], bool]


class SpellEngineProtocol(Protocol):
    """Native per-word spelling engine."""

    def set_dictionary(self, language: str, payload: DictionaryPayload | None = None) -> None:
        """Load the dictionary for ``language``.

        Engines that own their dictionaries ignore ``payload``; the others require it.
        """
        ...

    def is_misspelled(self, word: str) -> bool:
        """Single-word verdict."""
        ...

    def check_spelling(self, text: str) -> Sequence[SpellingIssueSpan]:
        """Detailed check returning the spans the engine considers misspelled."""
        ...

    def get_corrections_for_misspelling(self, word: str) -> list[str]:
        """Ordered suggestions for a misspelled word."""
        ...

    def add(self, word: str) -> None:
        """Persist a user addition."""
        ...

    def get_available_dictionaries(self) -> list[str]:
        """Raw locale strings of the dictionaries installed with the engine."""
        ...


class DictionarySourceProtocol(Protocol):
    async def load_dictionary_for_language(
        self,
        language: str,
        cache_only: bool = False,
    ) -> DictionaryPayload:
        """Fetch the dictionary for ``language``.

        Args:
            language: Canonical language code (e.g. "en-US")
            cache_only: Only return cache-resident data, never fetch

        Raises:
            SpellcheckLocaleError: DICTIONARY_FETCH_ERROR when no dictionary can be produced
        """
        ...


class LanguageDetectorProtocol(Protocol):
    """Protocol for language detection."""

    async def detect(self, text: str) -> str:
        """Detect the language of the given text.

        Args:
            text: Text to analyze

        Returns:
            Bare ISO 639-1 language code (e.g., "en", "fr")

        Raises:
            SpellcheckLocaleError: LANGUAGE_DETECTION_FAILED for short or ambiguous input
        """
        ...


class SpellCheckProviderHookProtocol(Protocol):
    """Host UI hook that receives the per-text-run spell check callback."""

    def set_spell_check_provider(self, language: str, spell_check: SpellCheckCallback) -> None:
        """Register ``spell_check`` for ``language``, replacing any earlier registration."""
        ...


class PlatformCapabilitiesProtocol(Protocol):
    """What the current OS family can and cannot do for spell checking."""

    @property
    def family(self) -> PlatformFamily: ...

    async def probe_locales(self) -> list[str]:
        """Raw locale-ish strings describing what the user's machine prefers."""
        ...

    def needs_explicit_dictionary(self) -> bool:
        """True when the engine must be handed a dictionary payload."""
        ...

    def can_reuse_engine_across_languages(self) -> bool:
        """True when one engine instance can switch languages in place."""
        ...

    def supports_user_additions(self) -> bool:
        """True when ``SpellEngineProtocol.add`` persists anything."""
        ...

    def environment_override(self) -> str | None:
        """Raw locale that pins its bare language's entry in the likely-locale table."""
        ...
