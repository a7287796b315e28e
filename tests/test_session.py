"""Tests for the SpellCheckSession language state machine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import pytest

from spellcheck_locale.config import PlatformFamily
from spellcheck_locale.dictionary_resolver import DictionaryResolver
from spellcheck_locale.error_handling import ErrorCode, SpellcheckLocaleError
from spellcheck_locale.likely_locale_table import LikelyLocaleTable
from spellcheck_locale.misspelling_cache import MisspellingCache
from spellcheck_locale.session import SpellCheckSession
from spellcheck_locale.shared_state import LocaleResolutionState
from tests.fakes import (
    FakeCapabilities,
    FakeDictionarySource,
    FakeEngineFactory,
    FakeLanguageDetector,
    RecordingProviderHook,
    payload_for,
)


@dataclass
class SessionHarness:
    session: SpellCheckSession
    capabilities: FakeCapabilities
    source: FakeDictionarySource
    engines: FakeEngineFactory
    detector: FakeLanguageDetector
    hook: RecordingProviderHook
    cache: MisspellingCache


def make_session(
    state: LocaleResolutionState,
    family: PlatformFamily = PlatformFamily.SYSTEM_LOCALES,
    available: list[str] | None = None,
    locales: list[str] | None = None,
    detected: str | None = "en",
    known_words: list[str] | None = None,
) -> SessionHarness:
    capabilities = FakeCapabilities(family=family, locales=locales or [])
    source = FakeDictionarySource(available or [])
    likely = LikelyLocaleTable(capabilities, state)
    cache = MisspellingCache(capabilities)
    engines = FakeEngineFactory(known_words or [])
    detector = FakeLanguageDetector(detected)
    hook = RecordingProviderHook()
    session = SpellCheckSession(
        capabilities=capabilities,
        resolver=DictionaryResolver(source, likely, state),
        likely_locales=likely,
        misspelling_cache=cache,
        engine_factory=engines,
        language_detector=detector,
        provider_hook=hook,
        hint_delay_seconds=0,
    )
    return SessionHarness(session, capabilities, source, engines, detector, hook, cache)


class TestSwitchLanguage:
    @pytest.mark.asyncio
    async def test_cold_start_loads_requested_dictionary(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-US"])

        await harness.session.switch_language("en-US")

        assert harness.session.current_language == "en-US"
        assert harness.session.has_engine
        assert harness.engines.created[0].dictionaries == [("en-US", payload_for("en-US"))]
        assert len(harness.cache) == 0

    @pytest.mark.asyncio
    async def test_resolved_alternate_becomes_current_language(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-GB"], locales=["en_GB.UTF-8"])

        await harness.session.switch_language("en-AU")

        assert harness.session.current_language == "en-GB"
        assert harness.hook.registrations[-1][0] == "en-GB"

    @pytest.mark.asyncio
    async def test_switch_clears_verdict_cache(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-US", "fr-FR"])
        await harness.session.switch_language("en-US")
        harness.session.is_misspelled("bonjour")
        assert "bonjour" in harness.cache

        await harness.session.switch_language("fr-FR")

        assert "bonjour" not in harness.cache
        assert harness.session.current_language == "fr-FR"

    @pytest.mark.asyncio
    async def test_same_language_keeps_engine_and_cache(
        self,
        resolution_state: LocaleResolutionState,
        counter_value: Callable[[str, str, str], float],
    ) -> None:
        harness = make_session(resolution_state, available=["en-US"])
        await harness.session.switch_language("en-US")
        harness.session.is_misspelled("teh")

        await harness.session.switch_language("en-US")

        assert len(harness.engines.created) == 1
        assert "teh" in harness.cache
        assert len(harness.hook.registrations) == 1
        assert counter_value("language_switches_total", "outcome", "unchanged") == 1

    @pytest.mark.asyncio
    async def test_missing_dictionary_disables_checking(
        self,
        resolution_state: LocaleResolutionState,
        counter_value: Callable[[str, str, str], float],
    ) -> None:
        harness = make_session(resolution_state, available=["en-US"])
        await harness.session.switch_language("en-US")

        await harness.session.switch_language("tlh-KL")

        assert harness.session.current_language == "tlh-KL"
        assert not harness.session.has_engine
        assert harness.session.is_misspelled("qapla") is False
        assert harness.session.handle_spell_check(["qapla"]) is True
        assert counter_value("language_switches_total", "outcome", "no_dictionary") == 1

    @pytest.mark.asyncio
    async def test_switch_to_missing_dictionary_drops_cached_verdicts(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-US"])
        await harness.session.switch_language("en-US")
        assert harness.session.is_misspelled("qapla") is True
        assert "qapla" in harness.cache

        await harness.session.switch_language("tlh-KL")

        assert not harness.session.has_engine
        assert "qapla" not in harness.cache
        assert len(harness.cache) == 0
        assert harness.session.is_misspelled("qapla") is False

    @pytest.mark.asyncio
    async def test_engine_failure_leaves_prior_state(
        self,
        resolution_state: LocaleResolutionState,
        counter_value: Callable[[str, str, str], float],
    ) -> None:
        harness = make_session(
            resolution_state, family=PlatformFamily.ENGINE_DICTIONARIES, available=[]
        )
        await harness.session.switch_language("en-US")
        engine = harness.engines.created[0]
        harness.session.is_misspelled("teh")
        engine.fail_on_set_dictionary = RuntimeError("no such dictionary")

        with pytest.raises(RuntimeError):
            await harness.session.switch_language("fr-FR")

        assert harness.session.current_language == "en-US"
        assert harness.session.has_engine
        assert "teh" in harness.cache
        assert counter_value("language_switches_total", "outcome", "failed") == 1

    @pytest.mark.asyncio
    async def test_malformed_locale_propagates_without_mutation(self) -> None:
        state = LocaleResolutionState({"xx": "not-a-locale", "en": "en-US"})
        harness = make_session(state, available=["en-US"], locales=["xx"])

        with pytest.raises(SpellcheckLocaleError) as exc_info:
            await harness.session.switch_language("en-US")

        assert exc_info.value.has_code(ErrorCode.MALFORMED_LOCALE)
        assert harness.session.current_language is None
        assert not harness.session.has_engine


class TestEngineReuse:
    @pytest.mark.asyncio
    async def test_engine_family_reuses_engine_without_payload(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, family=PlatformFamily.ENGINE_DICTIONARIES)

        await harness.session.switch_language("en-US")
        await harness.session.switch_language("de-DE")

        assert len(harness.engines.created) == 1
        assert harness.engines.created[0].dictionaries == [("en-US", None), ("de-DE", None)]
        assert harness.source.calls == []

    @pytest.mark.asyncio
    async def test_payload_families_rebuild_engine(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(
            resolution_state,
            family=PlatformFamily.KEYBOARD_LAYOUTS,
            available=["en-US", "de-DE"],
        )

        await harness.session.switch_language("en-US")
        await harness.session.switch_language("de-DE")

        assert len(harness.engines.created) == 2
        assert harness.engines.created[1].dictionaries == [("de-DE", payload_for("de-DE"))]


class TestProviderHook:
    @pytest.mark.asyncio
    async def test_hook_receives_session_callback_on_every_change(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-US", "fr-FR"])

        await harness.session.switch_language("en-US")
        await harness.session.switch_language("fr-FR")

        assert [language for language, _ in harness.hook.registrations] == ["en-US", "fr-FR"]
        assert harness.hook.registrations[-1][1] == harness.session.handle_spell_check


class TestHintText:
    @pytest.mark.asyncio
    async def test_french_hint_switches_to_fallback_locale(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-US", "fr-FR"], detected="fr")
        await harness.session.switch_language("en-US")

        await harness.session.provide_hint_text("Bonjour tout le monde, comment allez-vous ?")

        assert harness.session.current_language == "fr-FR"

    @pytest.mark.asyncio
    async def test_hint_uses_machine_preferred_locale(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(
            resolution_state,
            available=["en-US", "en-GB"],
            locales=["en_GB.UTF-8"],
            detected="en",
        )

        await harness.session.provide_hint_text("The colour of the sky")

        assert harness.session.current_language == "en-GB"

    @pytest.mark.asyncio
    async def test_detection_failure_is_ignored(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-US"], detected=None)
        await harness.session.switch_language("en-US")

        await harness.session.provide_hint_text("?")

        assert harness.session.current_language == "en-US"

    @pytest.mark.asyncio
    async def test_unknown_language_is_ignored(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-US"], detected="zz")
        await harness.session.switch_language("en-US")

        await harness.session.provide_hint_text("zzz zzz zzz")

        assert harness.session.current_language == "en-US"

    @pytest.mark.asyncio
    async def test_sample_is_truncated(self, resolution_state: LocaleResolutionState) -> None:
        harness = make_session(resolution_state, available=["en-US"])

        await harness.session.provide_hint_text("a" * 2000)

        assert len(harness.detector.samples[0]) == 512


class TestWordOperations:
    @pytest.mark.asyncio
    async def test_handle_spell_check_reports_misspelled_words(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(
            resolution_state,
            family=PlatformFamily.ENGINE_DICTIONARIES,
            known_words=["hello", "world"],
        )
        await harness.session.switch_language("en-US")
        delivered: list[list[str]] = []

        all_correct = harness.session.handle_spell_check(
            ["hello", "wrold", "couldn", "world"], delivered.append
        )

        assert all_correct is False
        assert delivered == [["wrold"]]

    @pytest.mark.asyncio
    async def test_handle_spell_check_all_correct(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(
            resolution_state, family=PlatformFamily.ENGINE_DICTIONARIES, known_words=["hello"]
        )
        await harness.session.switch_language("en-US")

        assert harness.session.handle_spell_check(["hello"]) is True

    @pytest.mark.asyncio
    async def test_corrections_and_additions(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(
            resolution_state,
            family=PlatformFamily.ENGINE_DICTIONARIES,
            known_words=["world", "word"],
        )
        assert await harness.session.get_corrections_for_misspelling("wrold") is None

        await harness.session.switch_language("en-US")
        assert await harness.session.get_corrections_for_misspelling("wrold") == [
            "word",
            "world",
        ]

        await harness.session.add_to_dictionary("wrold")
        assert harness.engines.created[0].added == ["wrold"]

    @pytest.mark.asyncio
    async def test_additions_are_skipped_where_unsupported(
        self, resolution_state: LocaleResolutionState
    ) -> None:
        harness = make_session(resolution_state, available=["en-US"])
        await harness.session.switch_language("en-US")

        await harness.session.add_to_dictionary("wrold")

        assert harness.engines.created[0].added == []
