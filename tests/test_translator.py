"""Tests for Translator negotiation, fallback and error behavior."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlcatalog import (
    FallbackInfo,
    FallbackLocaleMissingError,
    InvalidKeyFormatError,
    InvalidLocaleError,
    MessageNotFoundError,
    NoLocalesRegisteredError,
    ResourceStore,
    Translator,
)
from strategies import message_ids


@pytest.fixture
def translator(store: ResourceStore) -> Translator:
    store.load_resource(
        "en",
        "hello = Hello, { $name }!\n"
        "bye = Goodbye\n"
        "button = Save\n    .tooltip = Save the document\n",
    )
    store.load_resource("de", "hello = Hallo, { $name }!\n")
    store.load_resource("en-GB", "bye = Cheerio\n")
    return Translator(store, "en")


class TestTranslate:
    def test_requested_locale_wins(self, translator: Translator) -> None:
        assert translator.translate("de", "hello", {"name": "Anna"}) == "Hallo, Anna!"

    def test_regional_request_uses_language(self, translator: Translator) -> None:
        assert translator.translate("de-AT", "hello", {"name": "Anna"}) == "Hallo, Anna!"

    def test_exact_region_preferred(self, translator: Translator) -> None:
        assert translator.translate("en-GB", "bye") == "Cheerio"

    def test_language_request_negotiates_region(self, translator: Translator) -> None:
        assert translator.translate("en", "bye") == "Goodbye"

    def test_missing_in_candidate_uses_fallback(self, translator: Translator) -> None:
        assert translator.translate("de", "bye") == "Goodbye"

    def test_unknown_locale_uses_fallback(self, translator: Translator) -> None:
        assert translator.translate("ja", "bye") == "Goodbye"

    def test_attribute(self, translator: Translator) -> None:
        assert translator.translate("de", "button.tooltip") == "Save the document"

    def test_missing_key_raises(self, translator: Translator) -> None:
        with pytest.raises(MessageNotFoundError) as exc_info:
            translator.translate("de", "nope")
        assert exc_info.value.key == "nope"
        assert exc_info.value.fallback_locale == "en"

    def test_message_not_found_is_lookup_error(self, translator: Translator) -> None:
        with pytest.raises(LookupError):
            translator.translate("en", "button.missing")

    def test_malformed_key_raises(self, translator: Translator) -> None:
        with pytest.raises(InvalidKeyFormatError):
            translator.translate("en", "a.b.c")

    def test_engine_errors_are_logged_not_raised(
        self, translator: Translator, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="ftlcatalog.localization.translator"):
            result = translator.translate("en", "hello")
        assert result.startswith("Hello, ")
        assert any("hello" in record.getMessage() for record in caplog.records)


class TestFailureOrder:
    def test_no_locales(self) -> None:
        translator = Translator(ResourceStore(), "en")
        with pytest.raises(NoLocalesRegisteredError):
            translator.translate("en", "hello")

    def test_no_locales_checked_before_key_format(self) -> None:
        translator = Translator(ResourceStore(), "en")
        with pytest.raises(NoLocalesRegisteredError):
            translator.translate("en", "a.b.c")

    def test_candidate_hit_without_fallback_locale(self, store: ResourceStore) -> None:
        store.load_resource("de", "hello = Hallo")
        translator = Translator(store, "en")
        assert translator.translate("de", "hello") == "Hallo"

    def test_fallback_locale_missing_on_candidate_miss(self, store: ResourceStore) -> None:
        store.load_resource("de", "hello = Hallo")
        translator = Translator(store, "en")
        with pytest.raises(FallbackLocaleMissingError) as exc_info:
            translator.translate("de", "bye")
        assert "fallback locale: en" in str(exc_info.value)

    def test_fallback_locale_missing_when_nothing_negotiated(
        self, store: ResourceStore
    ) -> None:
        store.load_resource("de", "hello = Hallo")
        translator = Translator(store, "en")
        with pytest.raises(FallbackLocaleMissingError):
            translator.translate("ja", "hello")

    def test_fallback_loaded_after_construction(self, store: ResourceStore) -> None:
        store.load_resource("de", "hello = Hallo")
        translator = Translator(store, "en")
        store.load_resource("en", "hello = Hello")
        assert translator.translate("de", "hello") == "Hallo"

    def test_invalid_fallback_locale(self, store: ResourceStore) -> None:
        with pytest.raises(InvalidLocaleError):
            Translator(store, "en_US")


class TestFallbackCallback:
    def test_called_when_resolved_from_fallback(self, store: ResourceStore) -> None:
        store.load_resource("en", "bye = Goodbye")
        store.load_resource("de", "hello = Hallo")
        events: list[FallbackInfo] = []
        translator = Translator(store, "en", on_fallback=events.append)

        translator.translate("de", "bye")
        assert events == [FallbackInfo("de", "en", "bye")]

    def test_not_called_for_best_candidate(self, store: ResourceStore) -> None:
        store.load_resource("en", "hello = Hello")
        store.load_resource("de", "hello = Hallo")
        events: list[FallbackInfo] = []
        translator = Translator(store, "en", on_fallback=events.append)

        translator.translate("de", "hello")
        assert events == []


class TestAccessors:
    def test_bind(self, translator: Translator) -> None:
        t = translator.bind("de")
        assert t("hello", {"name": "Anna"}) == "Hallo, Anna!"
        assert t("bye") == "Goodbye"

    def test_has_message(self, translator: Translator) -> None:
        assert translator.has_message("de", "hello")
        assert translator.has_message("de", "bye")
        assert not translator.has_message("de", "nope")

    def test_locales_and_fallback(self, translator: Translator) -> None:
        assert translator.fallback_locale == "en"
        assert translator.get_locales() == ["en", "de", "en-GB"]

    def test_custom_negotiator(self, translator: Translator, store: ResourceStore) -> None:
        custom = Translator(store, "en", negotiator=lambda requested, available: ["de"])
        assert custom.translate("fr", "hello", {"name": "Anna"}) == "Hallo, Anna!"


class TestFallbackCompleteness:
    """Any key defined in the fallback locale translates for any request."""

    @given(
        ids=st.lists(message_ids(), min_size=1, max_size=5, unique=True),
        requested=st.sampled_from(["en", "en-US", "de", "de-CH", "fr", "ja", "pt-BR"]),
    )
    def test_every_fallback_key_translates(self, ids: list[str], requested: str) -> None:
        store = ResourceStore(use_isolating=False)
        store.load_resource("en", "".join(f"{mid} = en {mid}\n" for mid in ids))
        store.load_resource("de", f"{ids[0]} = de {ids[0]}\n")
        translator = Translator(store, "en")
        for mid in ids:
            assert translator.translate(requested, mid).endswith(mid)


class TestCaseVariantLocales:
    def test_second_case_variant_is_consulted(self, store: ResourceStore) -> None:
        store.load_resource("en", "fallback-only = Fallback\n")
        store.load_resource("en-US", "hello = Howdy\n")
        store.load_resource("en-us", "bye = So long\n")
        translator = Translator(store, "en")
        assert translator.translate("en-US", "bye") == "So long"
