"""Tests for error types and diagnostic formatting."""

from __future__ import annotations

import pytest

from ftlcatalog import (
    DuplicateKeyError,
    FallbackLocaleMissingError,
    FormattingEngineError,
    FTLCatalogError,
    MessageNotFoundError,
    ResourceSyntaxError,
    SourceFileVanishedError,
)
from ftlcatalog.diagnostics import Diagnostic, DiagnosticCode


class TestDiagnostic:
    def test_format_error_with_source_and_hint(self) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.DUPLICATE_KEY,
            message="duplicate key 'hello'",
            hint="Remove one of the definitions",
            source="locales/en/main.ftl",
            severity="warning",
        )
        assert diagnostic.format_error() == (
            "warning[DUPLICATE_KEY]: duplicate key 'hello'\n"
            "  --> locales/en/main.ftl\n"
            "  = help: Remove one of the definitions"
        )

    def test_control_characters_escaped(self) -> None:
        diagnostic = Diagnostic(code=DiagnosticCode.RESOURCE_SYNTAX, message="bad\x1b[31m")
        assert "\x1b" not in diagnostic.format_error()

    def test_str_is_message(self) -> None:
        assert str(Diagnostic(DiagnosticCode.MESSAGE_NOT_FOUND, "missing")) == "missing"


class TestErrors:
    def test_plain_message(self) -> None:
        error = FTLCatalogError("boom")
        assert str(error) == "boom"
        assert error.diagnostic is None

    def test_duplicate_wording(self) -> None:
        same = DuplicateKeyError("hello", "a.ftl", "a.ftl")
        other = DuplicateKeyError("hello", "a.ftl", "b.ftl")
        assert str(same) == "duplicate key: 'hello' was already specified in the same file before"
        assert str(other) == (
            "duplicate key: 'hello' was already specified in a.ftl "
            "but b.ftl is trying to override"
        )
        assert other.diagnostic is not None
        assert other.diagnostic.severity == "warning"

    def test_fallback_missing_is_message_not_found(self) -> None:
        error = FallbackLocaleMissingError("hello", "en")
        assert isinstance(error, MessageNotFoundError)
        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.FALLBACK_LOCALE_MISSING

    def test_message_not_found_names_key_and_locale(self) -> None:
        message = str(MessageNotFoundError("hello", "en"))
        assert "'hello'" in message
        assert "'en'" in message

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (ResourceSyntaxError("!!!", "a.ftl"), DiagnosticCode.RESOURCE_SYNTAX),
            (SourceFileVanishedError("a.ftl"), DiagnosticCode.SOURCE_FILE_VANISHED),
            (FormattingEngineError("k", "en", ValueError("x")), DiagnosticCode.FORMATTING_FAILED),
        ],
    )
    def test_codes(self, error: FTLCatalogError, code: DiagnosticCode) -> None:
        assert error.diagnostic is not None
        assert error.diagnostic.code is code
