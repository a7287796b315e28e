"""Locale resolution and misspelling verdict caching for host spell checkers."""

from spellcheck_locale.dictionary_resolver import DictionaryResolver
from spellcheck_locale.fallback_locales import FALLBACK_LOCALES
from spellcheck_locale.likely_locale_table import LikelyLocaleTable
from spellcheck_locale.locale_normalizer import normalize_language_code
from spellcheck_locale.misspelling_cache import MisspellingCache
from spellcheck_locale.models import DictionaryPayload, DictionaryResolution, SpellingIssueSpan
from spellcheck_locale.platform_capabilities import (
    EngineDictionariesCapabilities,
    KeyboardLayoutsCapabilities,
    SystemLocalesCapabilities,
    detect_platform_capabilities,
)
from spellcheck_locale.session import SpellCheckSession
from spellcheck_locale.shared_state import LocaleResolutionState, default_resolution_state

__all__ = [
    "FALLBACK_LOCALES",
    "DictionaryPayload",
    "DictionaryResolution",
    "DictionaryResolver",
    "EngineDictionariesCapabilities",
    "KeyboardLayoutsCapabilities",
    "LikelyLocaleTable",
    "LocaleResolutionState",
    "MisspellingCache",
    "SpellCheckSession",
    "SpellingIssueSpan",
    "SystemLocalesCapabilities",
    "default_resolution_state",
    "detect_platform_capabilities",
    "normalize_language_code",
]
