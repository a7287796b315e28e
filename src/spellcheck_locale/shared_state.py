"""
Process-wide locale resolution state shared by every spell check session.

Holds the static fallback table and the alternates memo (requested code ->
resolved code that last loaded successfully). Writers only ever upsert or delete
a single key, so no cross-entry consistency is required; the lock serialises
those writes for hosts that drive sessions from more than one thread.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping

from spellcheck_locale.fallback_locales import FALLBACK_LOCALES
from spellcheck_locale.locale_normalizer import bare_language


class LocaleResolutionState:
    """Alternates memo plus the read-only fallback locale table."""

    def __init__(self, fallback_locales: Mapping[str, str] = FALLBACK_LOCALES) -> None:
        self._fallback_locales = fallback_locales
        self._alternates: dict[str, str] = {}
        self._write_lock = threading.Lock()

    @property
    def fallback_locales(self) -> Mapping[str, str]:
        return self._fallback_locales

    def fallback_for(self, language: str) -> str | None:
        """Static default locale for the bare language of ``language``."""
        return self._fallback_locales.get(bare_language(language))

    def memoized_alternate(self, requested: str) -> str | None:
        return self._alternates.get(requested)

    def remember_alternate(self, requested: str, resolved: str) -> None:
        with self._write_lock:
            self._alternates[requested] = resolved

    def forget_alternate(self, requested: str) -> None:
        with self._write_lock:
            self._alternates.pop(requested, None)

    def alternates_snapshot(self) -> dict[str, str]:
        return dict(self._alternates)

    def clear_alternates(self) -> None:
        with self._write_lock:
            self._alternates.clear()


# Shared by every session in the process unless a host injects its own
default_resolution_state = LocaleResolutionState()
