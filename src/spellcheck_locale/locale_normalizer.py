"""
Canonicalisation of OS-reported locale strings.

Linux and Windows report locales with an underscore (``en_US``, ``en_US.UTF-8``)
while the canonical form used everywhere else is ``en-US``. Bare two-letter codes
are expanded through the fallback table.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from spellcheck_locale.fallback_locales import FALLBACK_LOCALES

# Full locale anywhere inside a raw string, e.g. "en_US" in "en_US.UTF-8"
LANGUAGE_REGION_PATTERN = re.compile(r"[a-z]{2}[-_][A-Z]{2}")

_CANONICAL_PATTERN = re.compile(r"^([A-Za-z]{2})[-_]([A-Za-z]{2})$")
_BARE_PATTERN = re.compile(r"^[A-Za-z]{2}$")
_SEPARATORS = re.compile(r"[-_.@]")


def bare_language(code: str) -> str:
    """Return the lowercase language component of a locale (``en`` for ``en_US.UTF-8``)."""
    return _SEPARATORS.split(code.strip(), maxsplit=1)[0].lower()


def normalize_language_code(
    raw: str,
    fallback_table: Mapping[str, str] = FALLBACK_LOCALES,
) -> str | None:
    """
    Map a raw locale-ish string to a canonical ``ll-RR`` code.

    Args:
        raw: e.g. ``en_US``, ``en-us``, ``EN``, ``en_GB.UTF-8``
        fallback_table: bare language -> default locale, used for two-letter input

    Returns:
        The canonical code, or None when the input cannot be normalized
    """
    candidate = raw.strip().split(".", 1)[0].split("@", 1)[0]

    match = _CANONICAL_PATTERN.match(candidate)
    if match:
        return f"{match.group(1).lower()}-{match.group(2).upper()}"

    if _BARE_PATTERN.match(candidate):
        return fallback_table.get(candidate.lower())

    return None


def extract_language_region(raw: str) -> str | None:
    """Return the first ``ll_RR``/``ll-RR`` token embedded in a raw string, if any."""
    match = LANGUAGE_REGION_PATTERN.search(raw)
    return match.group(0) if match else None
