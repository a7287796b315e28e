"""
SpellCheckSession owns the current language and native engine for one text input.

Typical host usage::

    session = SpellCheckSession(...)
    await session.switch_language("en-US")
    await session.provide_hint_text(existing_thread_text)

The session attempts to pick the user's locale (``en-GB`` vs ``en-US``) from what
the machine has installed, falls back through the dictionary resolver when a
dictionary is missing, and registers its per-word callback with the host hook on
every language change so word-boundary rules follow the language.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from spellcheck_locale.dictionary_resolver import DictionaryResolver
from spellcheck_locale.likely_locale_table import LikelyLocaleTable
from spellcheck_locale.logging_utils import create_service_logger
from spellcheck_locale.metrics import get_metrics
from spellcheck_locale.misspelling_cache import MisspellingCache
from spellcheck_locale.models import DictionaryPayload
from spellcheck_locale.protocols import (
    LanguageDetectorProtocol,
    PlatformCapabilitiesProtocol,
    SpellCheckProviderHookProtocol,
    SpellEngineProtocol,
)

logger = create_service_logger("spellcheck_locale.session")

EngineFactory = Callable[[], SpellEngineProtocol]


class SpellCheckSession:
    """State machine: Uninitialized -> Active(language), driven by switch_language()."""

    def __init__(
        self,
        capabilities: PlatformCapabilitiesProtocol,
        resolver: DictionaryResolver,
        likely_locales: LikelyLocaleTable,
        misspelling_cache: MisspellingCache,
        engine_factory: EngineFactory,
        language_detector: LanguageDetectorProtocol,
        provider_hook: SpellCheckProviderHookProtocol | None = None,
        hint_delay_seconds: float = 0.01,
        hint_sample_max_chars: int = 512,
    ) -> None:
        self._capabilities = capabilities
        self._resolver = resolver
        self._likely_locales = likely_locales
        self._cache = misspelling_cache
        self._engine_factory = engine_factory
        self._detector = language_detector
        self._provider_hook = provider_hook
        self._hint_delay_seconds = hint_delay_seconds
        self._hint_sample_max_chars = hint_sample_max_chars

        self._engine: SpellEngineProtocol | None = None
        self._current_language: str | None = None
        # One language switch mutates session state at a time
        self._switch_lock = asyncio.Lock()

    @property
    def current_language(self) -> str | None:
        return self._current_language

    @property
    def has_engine(self) -> bool:
        return self._engine is not None

    async def switch_language(self, language: str) -> None:
        """Explicitly switch to ``language`` (e.g. ``en-US``).

        On families that need dictionary payloads the resolver may settle on another
        locale of the same language. When nothing loads, checking is disabled while
        ``current_language`` still reports the requested language.

        Raises:
            SpellcheckLocaleError: On hard failures; session state is left untouched
        """
        switches = get_metrics()["language_switches_total"]

        async with self._switch_lock:
            payload: DictionaryPayload | None = None
            if not self._capabilities.needs_explicit_dictionary():
                actual_language = language
            else:
                try:
                    resolution = await self._resolver.resolve(language)
                except Exception as e:
                    logger.error(f"Failed to load dictionary {language}: {e}")
                    switches.labels(outcome="failed").inc()
                    raise

                if not resolution.available:
                    logger.info(f"Dictionary for {language} is not available, disabling checks")
                    self._current_language = resolution.language
                    self._cache.clear()
                    self._engine = None
                    switches.labels(outcome="no_dictionary").inc()
                    return

                actual_language = resolution.language
                payload = resolution.dictionary

            logger.info(
                f"Setting current spellchecker to {actual_language}, "
                f"requested language was {language}"
            )
            if self._current_language == actual_language and self._engine is not None:
                switches.labels(outcome="unchanged").inc()
                return

            try:
                engine = self._prepare_engine(actual_language, payload)
            except Exception as e:
                logger.error(f"Failed to set dictionary {actual_language}: {e}")
                switches.labels(outcome="failed").inc()
                raise

            # No awaits below: per-word checks never observe a half-swapped engine
            self._cache.clear()
            self._engine = engine
            self._current_language = actual_language
            if self._provider_hook is not None:
                self._provider_hook.set_spell_check_provider(
                    actual_language, self.handle_spell_check
                )
            switches.labels(outcome="switched").inc()

    def _prepare_engine(
        self, language: str, payload: DictionaryPayload | None
    ) -> SpellEngineProtocol:
        if self._engine is not None and self._capabilities.can_reuse_engine_across_languages():
            engine = self._engine
        else:
            logger.debug("Creating native spellchecker instance")
            engine = self._engine_factory()

        if self._capabilities.needs_explicit_dictionary():
            engine.set_dictionary(language, payload)
        else:
            engine.set_dictionary(language)
        return engine

    async def provide_hint_text(self, text: str) -> None:
        """Switch to the language of ``text``, a sample likely in the user's language.

        The locale is inferred from the machine. Detection failures are logged and
        leave the current language unchanged.
        """
        try:
            detected = await self.detect_language_for_text(text[: self._hint_sample_max_chars])
        except Exception as e:
            logger.info(
                f"Couldn't detect language for text of length {len(text)}: {e}, ignoring sample"
            )
            return

        language = await self.get_likely_locale_for_language(detected)
        if language:
            await self.switch_language(language)

    async def detect_language_for_text(self, text: str) -> str:
        """Bare language of ``text``, asked of the detector after the hint delay."""
        await asyncio.sleep(self._hint_delay_seconds)
        return await self._detector.detect(text)

    async def get_likely_locale_for_language(self, language: str) -> str | None:
        """Locale the machine prefers for ``language`` (``en`` -> ``en-GB``)."""
        return await self._likely_locales.get_likely_locale(language.lower())

    def is_misspelled(self, word: str) -> bool:
        return self._cache.is_misspelled(word, self._engine)

    def handle_spell_check(
        self,
        words: list[str],
        callback: Callable[[list[str]], None] | None = None,
    ) -> bool:
        """Callback registered with the host hook.

        Returns True when every word is spelled correctly; the misspelled subset is
        delivered through ``callback``.
        """
        if self._engine is None:
            return True

        misspelled = [word for word in words if self.is_misspelled(word)]
        if callback is not None:
            callback(misspelled)
        return not misspelled

    async def get_corrections_for_misspelling(self, word: str) -> list[str] | None:
        if self._engine is None:
            return None
        return self._engine.get_corrections_for_misspelling(word)

    async def add_to_dictionary(self, word: str) -> None:
        if not self._capabilities.supports_user_additions():
            return
        if self._engine is None:
            return
        self._engine.add(word)
