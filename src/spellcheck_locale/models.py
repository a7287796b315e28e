"""Value types passed between the resolver, the session and the native engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DictionaryPayload:
    """Hunspell dictionary contents (``.dic`` word list plus ``.aff`` affix rules)."""

    dic: bytes
    aff: bytes

    def __bool__(self) -> bool:
        return bool(self.dic) and bool(self.aff)


@dataclass(frozen=True)
class SpellingIssueSpan:
    """Offsets of a suspicious region reported by the engine's detailed check."""

    start: int
    end: int


@dataclass(frozen=True)
class DictionaryResolution:
    """Outcome of resolving a requested language to a loadable dictionary.

    ``dictionary`` is None when every candidate was exhausted; ``language`` is then
    the requested code so the session can still display it.
    """

    language: str
    dictionary: DictionaryPayload | None = None

    @property
    def available(self) -> bool:
        return bool(self.dictionary)
