"""
Memoized per-word misspelling verdicts.

Per-word checks run on the host's UI path, so verdicts are cached in a bounded,
time-limited LRU cache in front of the native engine. The cache is cleared by the
session whenever the active dictionary changes.
"""

from __future__ import annotations

import re
import time
from collections.abc import Callable

from cachetools import TTLCache

from spellcheck_locale.logging_utils import create_service_logger
from spellcheck_locale.metrics import get_metrics
from spellcheck_locale.protocols import PlatformCapabilitiesProtocol, SpellEngineProtocol

logger = create_service_logger("spellcheck_locale.misspelling_cache")

# Native checkers flag the stem of a contraction ("couldn" in "couldn't") as a
# misspelling. Stems of these are never reported, at the cost of letting a
# misspelled stem through.
CONTRACTIONS: tuple[str, ...] = (
    "ain't", "aren't", "can't", "could've", "couldn't", "couldn't've", "didn't", "doesn't",
    "don't", "hadn't", "hadn't've", "hasn't", "haven't", "he'd", "he'd've", "he'll", "he's",
    "how'd", "how'll", "how's", "I'd", "I'd've", "I'll", "I'm", "I've", "isn't", "it'd",
    "it'd've", "it'll", "it's", "let's", "ma'am", "mightn't", "mightn't've", "might've",
    "mustn't", "must've", "needn't", "not've", "o'clock", "shan't", "she'd", "she'd've",
    "she'll", "she's", "should've", "shouldn't", "shouldn't've", "that'll", "that's",
    "there'd", "there'd've", "there're", "there's", "they'd", "they'd've", "they'll",
    "they're", "they've", "wasn't", "we'd", "we'd've", "we'll", "we're", "we've", "weren't",
    "what'll", "what're", "what's", "what've", "when's", "where'd", "where's", "where've",
    "who'd", "who'll", "who're", "who's", "who've", "why'll", "why're", "why's", "won't",
    "would've", "wouldn't", "wouldn't've", "y'all", "y'all'd've", "you'd", "you'd've",
    "you'll", "you're", "you've",
)  # fmt: skip

_APOSTROPHE = re.compile(r"['’]")

CONTRACTION_STEMS: frozenset[str] = frozenset(
    _APOSTROPHE.split(word, maxsplit=1)[0].lower() for word in CONTRACTIONS
)


def is_contraction_stem(word: str) -> bool:
    """True when ``word`` up to its first apostrophe is a known contraction stem."""
    return _APOSTROPHE.split(word, maxsplit=1)[0].lower() in CONTRACTION_STEMS


class MisspellingCache:
    """Bounded, time-expiring cache from exact word text to misspelling verdict."""

    def __init__(
        self,
        capabilities: PlatformCapabilitiesProtocol,
        maxsize: int = 512,
        ttl_seconds: float = 4.0,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._capabilities = capabilities
        self._verdicts: TTLCache[str, bool] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds, timer=timer
        )

    def __len__(self) -> int:
        return len(self._verdicts)

    def __contains__(self, word: object) -> bool:
        return word in self._verdicts

    def clear(self) -> None:
        self._verdicts.clear()

    def is_misspelled(self, word: str, engine: SpellEngineProtocol | None) -> bool:
        """Verdict for ``word`` against ``engine``; never raises.

        Args:
            word: Word text, matched case-sensitively
            engine: Active native engine, or None when no dictionary is loaded
        """
        lookups = get_metrics()["verdict_lookups_total"]

        if is_contraction_stem(word):
            lookups.labels(result="contraction").inc()
            return False

        cached = self._verdicts.get(word)
        if cached is not None:
            lookups.labels(result="hit").inc()
            return cached

        lookups.labels(result="miss").inc()
        if engine is None:
            return False

        try:
            verdict = self._compute_verdict(word, engine)
        except Exception as e:
            logger.warning(f"Spell check failed for word of length {len(word)}: {e}")
            return False

        self._verdicts[word] = verdict
        return verdict

    def _compute_verdict(self, word: str, engine: SpellEngineProtocol) -> bool:
        if not self._capabilities.needs_explicit_dictionary():
            return engine.is_misspelled(word)

        # Hunspell-backed engines flag a capitalised sentence-initial word at offset 0
        # even when it is spelled correctly; retry those lowercased.
        issues = engine.check_spelling(word)
        if not issues:
            return False

        if issues[0].start != 0:
            return True

        return engine.is_misspelled(word.lower())
