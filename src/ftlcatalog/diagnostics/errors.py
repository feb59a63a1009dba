"""FTLCatalog exception hierarchy with structured diagnostics.

All exceptions optionally carry a Diagnostic for rich error information.
Load-time errors (syntax, duplicates) are collected and returned as lists;
translation errors are raised.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = [
    "DuplicateKeyError",
    "FTLCatalogError",
    "FallbackLocaleMissingError",
    "FormattingEngineError",
    "InvalidKeyFormatError",
    "InvalidLocaleError",
    "MessageNotFoundError",
    "NoLocalesRegisteredError",
    "ResourceSyntaxError",
    "SourceFileVanishedError",
]


class FTLCatalogError(Exception):
    """Base exception for all FTLCatalog errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FTLCatalogError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidLocaleError(FTLCatalogError, ValueError):
    """Locale tag is not made of non-empty alphanumeric subtags.

    Programmer or configuration error: raised, never collected.
    """

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.INVALID_LOCALE,
                message=f"The locale {locale!r} seems invalid",
                hint="Use '-' separated alphanumeric subtags, e.g. 'en' or 'pt-BR'",
            )
        )


class InvalidKeyFormatError(FTLCatalogError, ValueError):
    """Message key is not 'id' or 'id.attribute'."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.INVALID_KEY_FORMAT,
                message=f"Invalid message key segments in key: {key!r}",
                hint="Keys have the form 'message' or 'message.attribute'",
            )
        )


class DuplicateKeyError(FTLCatalogError):
    """A message or attribute key was defined more than once.

    Non-fatal: collected as a diagnostic while loading or extracting.

    Attributes:
        key: Fully-qualified key ("id" or "id.attribute")
        original_source: Source of the definition that was seen first
        new_source: Source of the repeated definition
    """

    def __init__(self, key: str, original_source: str, new_source: str) -> None:
        self.key = key
        self.original_source = original_source
        self.new_source = new_source
        if original_source == new_source:
            where = "the same file before"
        else:
            where = f"{original_source} but {new_source} is trying to override"
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.DUPLICATE_KEY,
                message=f"duplicate key: {key!r} was already specified in {where}",
                source=new_source,
                severity="warning",
            )
        )


class ResourceSyntaxError(FTLCatalogError):
    """Unparseable content (a Junk entry) found in a resource.

    Attributes:
        content: The junk source text
        source: Resource the junk came from
    """

    def __init__(self, content: str, source: str) -> None:
        self.content = content
        self.source = source
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.RESOURCE_SYNTAX,
                message=f"Syntax error: {content.strip()[:100]!r}",
                source=source,
            )
        )


class NoLocalesRegisteredError(FTLCatalogError):
    """translate() was called before any resource was loaded."""

    def __init__(self) -> None:
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.NO_LOCALES_REGISTERED,
                message="There are no locales available for translating the message",
                hint="Load at least the fallback locale's resources first",
            )
        )


class MessageNotFoundError(FTLCatalogError, LookupError):
    """Message (or attribute) missing from the fallback locale.

    The fallback locale must hold every key the application references.

    Attributes:
        key: Requested key
        fallback_locale: Locale consulted last
    """

    def __init__(
        self, key: str, fallback_locale: str, message: str | Diagnostic | None = None
    ) -> None:
        self.key = key
        self.fallback_locale = fallback_locale
        if message is None:
            message = Diagnostic(
                code=DiagnosticCode.MESSAGE_NOT_FOUND,
                message=(
                    f"Couldn't find {key!r} in the fallback locale {fallback_locale!r}. "
                    "At least the fallback locale must have all the messages you reference."
                ),
                source=fallback_locale,
            )
        super().__init__(message)


class FallbackLocaleMissingError(MessageNotFoundError):
    """The fallback locale has no resources loaded at all."""

    def __init__(self, key: str, fallback_locale: str) -> None:
        super().__init__(
            key,
            fallback_locale,
            Diagnostic(
                code=DiagnosticCode.FALLBACK_LOCALE_MISSING,
                message=(
                    "There are no resources available for the fallback locale: "
                    f"{fallback_locale}"
                ),
                source=fallback_locale,
            ),
        )


class FormattingEngineError(FTLCatalogError):
    """Error reported by the formatting engine while rendering a pattern.

    Logged, never raised: the best-effort string is still returned.

    Attributes:
        key: Key being rendered
        locale: Locale whose pattern was rendered
        cause: Original engine error
    """

    def __init__(self, key: str, locale: str, cause: Exception) -> None:
        self.key = key
        self.locale = locale
        self.cause = cause
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.FORMATTING_FAILED,
                message=f"Formatting {key!r} in {locale!r}: {cause}",
                source=locale,
                severity="warning",
            )
        )


class SourceFileVanishedError(FTLCatalogError):
    """Tracked source file disappeared between an event and the read.

    Self-healed by dropping the file from the watched set.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            Diagnostic(
                code=DiagnosticCode.SOURCE_FILE_VANISHED,
                message="stopped watching: file not found",
                source=path,
                severity="warning",
            )
        )
