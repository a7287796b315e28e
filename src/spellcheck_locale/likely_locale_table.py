"""
Per-session table answering "which locale does this machine prefer for a language?".

The table is built once, lazily, from the platform probe and kept for the lifetime
of the owning session. Building never touches the network.
"""

from __future__ import annotations

import asyncio

from spellcheck_locale.error_handling import raise_malformed_locale_error
from spellcheck_locale.locale_normalizer import (
    bare_language,
    extract_language_region,
    normalize_language_code,
)
from spellcheck_locale.logging_utils import create_service_logger
from spellcheck_locale.protocols import PlatformCapabilitiesProtocol
from spellcheck_locale.shared_state import LocaleResolutionState

logger = create_service_logger("spellcheck_locale.likely_locale_table")


class LikelyLocaleTable:
    """Lazily built mapping from bare language to the machine's preferred locale."""

    def __init__(
        self,
        capabilities: PlatformCapabilitiesProtocol,
        resolution_state: LocaleResolutionState,
    ) -> None:
        self._capabilities = capabilities
        self._resolution_state = resolution_state
        self._table: dict[str, str] | None = None
        self._build_lock = asyncio.Lock()

    async def lookup(self, language: str) -> str | None:
        """Table entry for the bare language of ``language``, without fallback."""
        table = await self._get_table()
        return table.get(bare_language(language))

    async def get_likely_locale(self, language: str) -> str | None:
        """Table entry for ``language``, else the static fallback (``en`` -> ``en-GB``)."""
        likely = await self.lookup(language)
        if likely:
            return likely
        return self._resolution_state.fallback_for(language)

    def invalidate(self) -> None:
        """Drop the cached table; the next lookup probes the OS again."""
        self._table = None

    async def _get_table(self) -> dict[str, str]:
        if self._table is not None:
            return self._table

        async with self._build_lock:
            if self._table is None:
                self._table = await self.build()
            return self._table

    async def build(self) -> dict[str, str]:
        """Probe the OS and build a fresh table.

        Raises:
            SpellcheckLocaleError: MALFORMED_LOCALE when a chosen locale cannot be normalized
        """
        raw_locales = await self._capabilities.probe_locales()
        logger.debug(f"Raw locale list: {raw_locales}")

        candidates = self._filter_candidates(raw_locales)
        logger.debug(f"Filtered locale list: {candidates}")

        # Some distros dump every possible locale for a language into `locale -a`,
        # so a language with more than one distinct region says nothing useful.
        grouped: dict[str, list[str]] = {}
        for candidate in candidates:
            variants = grouped.setdefault(bare_language(candidate), [])
            if candidate.replace("_", "-") not in (v.replace("_", "-") for v in variants):
                variants.append(candidate)

        table: dict[str, str] = {}
        for language, variants in grouped.items():
            if len(variants) > 1:
                logger.debug(f"Dropping ambiguous language {language}: {variants}")
                continue
            table[language] = self._require_normalized(variants[0])

        override = self._capabilities.environment_override()
        if override:
            pinned = extract_language_region(override)
            if pinned:
                table[bare_language(pinned)] = self._require_normalized(pinned)
            else:
                logger.debug(f"Ignoring environment locale override {override!r}")

        logger.info(f"Likely locale table built: {table}")
        return table

    def _filter_candidates(self, raw_locales: list[str]) -> list[str]:
        fallback_locales = self._resolution_state.fallback_locales
        candidates: list[str] = []
        for raw in raw_locales:
            extracted = extract_language_region(raw)
            if extracted:
                candidates.append(extracted)
                continue

            normalized = normalize_language_code(raw, fallback_locales)
            if normalized:
                candidates.append(normalized)
        return candidates

    def _require_normalized(self, locale: str) -> str:
        normalized = normalize_language_code(locale, self._resolution_state.fallback_locales)
        if not normalized:
            raise_malformed_locale_error(operation="build_likely_locale_table", locale=locale)
        return normalized
