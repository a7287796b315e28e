"""
Native spelling engine adapter over PyEnchant.

Requires: pip install pyenchant (plus the enchant C library, e.g. brew install enchant)
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import enchant
from enchant.checker import SpellChecker
from enchant.errors import DictNotFoundError

from spellcheck_locale.error_handling import raise_engine_error
from spellcheck_locale.logging_utils import create_service_logger
from spellcheck_locale.models import DictionaryPayload, SpellingIssueSpan
from spellcheck_locale.protocols import SpellEngineProtocol

logger = create_service_logger("spellcheck_locale.implementations.enchant_engine")


def enchant_tag(language: str) -> str:
    """Enchant names dictionaries with an underscore (``en_US``)."""
    return language.replace("-", "_")


def list_installed_dictionaries() -> list[str]:
    return list(enchant.list_languages())


class EnchantSpellEngine(SpellEngineProtocol):
    """Spell engine backed by an ``enchant.Dict``.

    Without a payload the dictionary is requested from the providers enchant already
    knows about. With a payload the Hunspell files are written to a private config
    directory that enchant's Hunspell provider searches. ``ENCHANT_CONFIG_DIR`` points
    at that directory only while the broker is constructed and is restored afterwards.
    """

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data_dir = Path(data_dir) if data_dir else Path(tempfile.mkdtemp(prefix="enchant-"))
        self._dictionary: enchant.Dict | None = None
        self._language: str | None = None

    @property
    def language(self) -> str | None:
        return self._language

    def set_dictionary(self, language: str, payload: DictionaryPayload | None = None) -> None:
        tag = enchant_tag(language)
        try:
            if payload is None:
                dictionary = enchant.Dict(tag)
            else:
                dictionary = self._request_from_payload(tag, payload)
        except DictNotFoundError as e:
            raise_engine_error(
                operation="set_dictionary",
                language=language,
                message=f"Enchant has no dictionary for {tag}: {e}",
            )

        self._dictionary = dictionary
        self._language = language

    def _request_from_payload(self, tag: str, payload: DictionaryPayload) -> enchant.Dict:
        hunspell_dir = self._data_dir / "hunspell"
        hunspell_dir.mkdir(parents=True, exist_ok=True)
        (hunspell_dir / f"{tag}.dic").write_bytes(payload.dic)
        (hunspell_dir / f"{tag}.aff").write_bytes(payload.aff)

        # Enchant reads its user config dir when a broker loads its providers
        previous = os.environ.get("ENCHANT_CONFIG_DIR")
        os.environ["ENCHANT_CONFIG_DIR"] = str(self._data_dir)
        try:
            broker = enchant.Broker()
        finally:
            if previous is None:
                os.environ.pop("ENCHANT_CONFIG_DIR", None)
            else:
                os.environ["ENCHANT_CONFIG_DIR"] = previous
        return broker.request_dict(tag)

    def is_misspelled(self, word: str) -> bool:
        if self._dictionary is None:
            return False
        return not self._dictionary.check(word)

    def check_spelling(self, text: str) -> list[SpellingIssueSpan]:
        if self._dictionary is None:
            return []

        checker = SpellChecker(self._dictionary)
        checker.set_text(text)
        return [
            SpellingIssueSpan(start=error.wordpos, end=error.wordpos + len(error.word))
            for error in checker
        ]

    def get_corrections_for_misspelling(self, word: str) -> list[str]:
        if self._dictionary is None:
            return []
        return list(self._dictionary.suggest(word))

    def add(self, word: str) -> None:
        if self._dictionary is None:
            return
        self._dictionary.add(word)

    def get_available_dictionaries(self) -> list[str]:
        return list_installed_dictionaries()
