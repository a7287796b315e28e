"""Dependency injection configuration for spell check sessions using Dishka."""

from __future__ import annotations

from dishka import Provider, Scope, provide

from spellcheck_locale.config import Settings, settings
from spellcheck_locale.dictionary_resolver import DictionaryResolver
from spellcheck_locale.implementations.hunspell_dictionary_source import (
    HunspellDictionarySource,
)
from spellcheck_locale.implementations.langdetect_detector import LangDetectLanguageDetector
from spellcheck_locale.likely_locale_table import LikelyLocaleTable
from spellcheck_locale.misspelling_cache import MisspellingCache
from spellcheck_locale.platform_capabilities import detect_platform_capabilities
from spellcheck_locale.protocols import (
    DictionarySourceProtocol,
    LanguageDetectorProtocol,
    PlatformCapabilitiesProtocol,
    SpellCheckProviderHookProtocol,
    SpellEngineProtocol,
)
from spellcheck_locale.session import EngineFactory, SpellCheckSession
from spellcheck_locale.shared_state import LocaleResolutionState, default_resolution_state


def _list_engine_dictionaries() -> list[str]:
    # Imported lazily: enchant needs its C library only when actually used
    from spellcheck_locale.implementations.enchant_engine import list_installed_dictionaries

    return list_installed_dictionaries()


def _create_enchant_engine() -> SpellEngineProtocol:
    from spellcheck_locale.implementations.enchant_engine import EnchantSpellEngine

    return EnchantSpellEngine(data_dir=settings.effective_dictionary_cache_dir / "enchant")


class SpellCheckLocaleProvider(Provider):
    """Provider for spell check session dependencies."""

    def __init__(
        self,
        provider_hook: SpellCheckProviderHookProtocol | None = None,
        engine_factory: EngineFactory | None = None,
    ) -> None:
        """Initialize provider with host integration points.

        Args:
            provider_hook: Host hook receiving the per-word callback, if the host has one
            engine_factory: Builds native engines; defaults to PyEnchant
        """
        super().__init__()
        self._provider_hook = provider_hook
        self._engine_factory = engine_factory or _create_enchant_engine

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide library settings."""
        return settings

    @provide(scope=Scope.APP)
    def provide_resolution_state(self) -> LocaleResolutionState:
        """Provide the process-wide alternates memo and fallback table."""
        return default_resolution_state

    @provide(scope=Scope.APP)
    def provide_platform_capabilities(self, settings: Settings) -> PlatformCapabilitiesProtocol:
        """Provide capabilities of the configured or detected platform family."""
        return detect_platform_capabilities(settings, list_dictionaries=_list_engine_dictionaries)

    @provide(scope=Scope.APP)
    def provide_dictionary_source(self, settings: Settings) -> DictionarySourceProtocol:
        """Provide the cached Hunspell dictionary source."""
        return HunspellDictionarySource(
            cache_dir=settings.effective_dictionary_cache_dir,
            url_template=settings.DICTIONARY_URL_TEMPLATE,
            timeout_seconds=settings.DICTIONARY_FETCH_TIMEOUT_SECONDS,
        )

    @provide(scope=Scope.APP)
    def provide_language_detector(self, settings: Settings) -> LanguageDetectorProtocol:
        """Provide language detector."""
        return LangDetectLanguageDetector(seed=settings.DETECTOR_SEED)

    @provide(scope=Scope.APP)
    def provide_likely_locale_table(
        self,
        capabilities: PlatformCapabilitiesProtocol,
        resolution_state: LocaleResolutionState,
    ) -> LikelyLocaleTable:
        """Provide the likely-locale table for the application's session."""
        return LikelyLocaleTable(capabilities, resolution_state)

    @provide(scope=Scope.APP)
    def provide_dictionary_resolver(
        self,
        dictionary_source: DictionarySourceProtocol,
        likely_locales: LikelyLocaleTable,
        resolution_state: LocaleResolutionState,
    ) -> DictionaryResolver:
        """Provide the fallback-chain dictionary resolver."""
        return DictionaryResolver(dictionary_source, likely_locales, resolution_state)

    @provide(scope=Scope.APP)
    def provide_misspelling_cache(
        self, settings: Settings, capabilities: PlatformCapabilitiesProtocol
    ) -> MisspellingCache:
        """Provide the per-word verdict cache."""
        return MisspellingCache(
            capabilities,
            maxsize=settings.MISSPELLING_CACHE_SIZE,
            ttl_seconds=settings.MISSPELLING_CACHE_TTL_SECONDS,
        )

    @provide(scope=Scope.APP)
    async def provide_session(
        self,
        settings: Settings,
        capabilities: PlatformCapabilitiesProtocol,
        resolver: DictionaryResolver,
        likely_locales: LikelyLocaleTable,
        misspelling_cache: MisspellingCache,
        language_detector: LanguageDetectorProtocol,
    ) -> SpellCheckSession:
        """Provide a session already switched to DEFAULT_LANGUAGE."""
        session = SpellCheckSession(
            capabilities=capabilities,
            resolver=resolver,
            likely_locales=likely_locales,
            misspelling_cache=misspelling_cache,
            engine_factory=self._engine_factory,
            language_detector=language_detector,
            provider_hook=self._provider_hook,
            hint_delay_seconds=settings.HINT_DETECTION_DELAY_SECONDS,
            hint_sample_max_chars=settings.HINT_SAMPLE_MAX_CHARS,
        )
        await session.switch_language(settings.DEFAULT_LANGUAGE)
        return session
