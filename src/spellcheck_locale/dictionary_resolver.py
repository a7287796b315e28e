"""
Dictionary resolution with ordered fallbacks and a cross-session memo.

A request for ``en-AU`` on a machine without that dictionary tries, in order, the
memoized alternate from an earlier request, the exact code, the locale the machine
prefers for ``en`` and the static default for ``en``. The first candidate that
yields a non-empty dictionary wins and is memoized process-wide.
"""

from __future__ import annotations

import json

from spellcheck_locale.error_handling import SpellcheckLocaleError
from spellcheck_locale.likely_locale_table import LikelyLocaleTable
from spellcheck_locale.logging_utils import create_service_logger
from spellcheck_locale.metrics import get_metrics
from spellcheck_locale.models import DictionaryPayload, DictionaryResolution
from spellcheck_locale.protocols import DictionarySourceProtocol
from spellcheck_locale.shared_state import LocaleResolutionState

logger = create_service_logger("spellcheck_locale.dictionary_resolver")


class DictionaryResolver:
    """Resolves a requested language to the first dictionary that actually loads."""

    def __init__(
        self,
        dictionary_source: DictionarySourceProtocol,
        likely_locales: LikelyLocaleTable,
        resolution_state: LocaleResolutionState,
    ) -> None:
        self._dictionary_source = dictionary_source
        self._likely_locales = likely_locales
        self._resolution_state = resolution_state

    async def candidate_languages(self, requested: str) -> list[str | None]:
        """Ordered candidates for ``requested``; duplicates and gaps are kept."""
        return [
            requested,
            await self._likely_locales.get_likely_locale(requested),
            self._resolution_state.fallback_for(requested),
        ]

    async def resolve(self, requested: str, cache_only: bool = False) -> DictionaryResolution:
        """Find a dictionary for ``requested``.

        Args:
            requested: Canonical language code
            cache_only: Only consider cache-resident dictionaries. A memoized alternate
                is always tried from cache first.

        Returns:
            The resolved language and its dictionary; ``dictionary`` is None when every
            candidate failed.

        Raises:
            SpellcheckLocaleError: MALFORMED_LOCALE if the likely-locale table cannot be built
        """
        metrics = get_metrics()
        candidates = await self.candidate_languages(requested)

        memoized = self._resolution_state.memoized_alternate(requested)
        if memoized:
            dictionary = await self._try_load(memoized, cache_only=True)
            if dictionary:
                metrics["dictionary_resolutions_total"].labels(source="memo").inc()
                return DictionaryResolution(language=memoized, dictionary=dictionary)

            logger.info(f"Failed to load language {requested}, memoized alternate={memoized}")
            self._resolution_state.forget_alternate(requested)

        logger.debug(f"Requesting to load {requested}, alternatives are {json.dumps(candidates)}")
        for candidate in candidates:
            if not candidate:
                continue

            dictionary = await self._try_load(candidate, cache_only)
            if dictionary:
                self._resolution_state.remember_alternate(requested, candidate)
                metrics["dictionary_resolutions_total"].labels(source="candidate").inc()
                return DictionaryResolution(language=candidate, dictionary=dictionary)

        logger.info(f"No dictionary available for {requested} after trying {candidates}")
        metrics["dictionary_resolutions_total"].labels(source="unavailable").inc()
        return DictionaryResolution(language=requested, dictionary=None)

    async def _try_load(self, language: str, cache_only: bool) -> DictionaryPayload | None:
        try:
            dictionary = await self._dictionary_source.load_dictionary_for_language(
                language, cache_only=cache_only
            )
        except SpellcheckLocaleError as e:
            logger.debug(f"Dictionary for {language} unavailable: {e}")
            return None
        except Exception as e:
            logger.warning(f"Dictionary source failed for {language}: {e}", exc_info=True)
            return None

        if not dictionary:
            logger.debug(f"Dictionary for {language} is empty")
            return None
        return dictionary
