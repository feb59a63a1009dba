"""Tests for locale tag validation."""

from __future__ import annotations

import pytest
from hypothesis import given

from ftlcatalog import InvalidLocaleError
from ftlcatalog.locale_utils import is_valid_locale, split_subtags, validate_locale
from strategies import locale_tags


class TestIsValidLocale:
    @pytest.mark.parametrize("tag", ["en", "en-US", "zh-Hans-CN", "de-1996", "X"])
    def test_valid_tags(self, tag: str) -> None:
        assert is_valid_locale(tag)

    @pytest.mark.parametrize(
        "tag",
        ["", "-", "en-", "-en", "en--US", "en_US", "en US", "en/US", "../en", "ñ", "en-ü"],
    )
    def test_invalid_tags(self, tag: str) -> None:
        assert not is_valid_locale(tag)

    def test_non_string(self) -> None:
        assert not is_valid_locale(None)
        assert not is_valid_locale(42)

    @given(locale_tags())
    def test_generated_tags_are_valid(self, tag: str) -> None:
        assert is_valid_locale(tag)


class TestValidateLocale:
    def test_returns_valid_tag_unchanged(self) -> None:
        assert validate_locale("pt-BR") == "pt-BR"

    def test_raises_for_invalid_tag(self) -> None:
        with pytest.raises(InvalidLocaleError) as exc_info:
            validate_locale("en_US")
        assert exc_info.value.locale == "en_US"
        assert "seems invalid" in str(exc_info.value)


class TestSplitSubtags:
    def test_lowercases(self) -> None:
        assert split_subtags("zh-Hans-CN") == ("zh", "hans", "cn")

    @given(locale_tags())
    def test_case_insensitive(self, tag: str) -> None:
        assert split_subtags(tag.upper()) == split_subtags(tag.lower())
