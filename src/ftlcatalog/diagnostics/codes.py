"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
FTLCatalog exception.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Input errors (malformed locale tags and message keys)
        2000-2999: Load errors (resource parsing and duplicate definitions)
        3000-3999: Translation errors (missing locales and messages)
        4000-4999: Formatting errors (reported by the formatting engine)
        5000-5999: Source file errors (schema extraction and watch mode)
        6000-6999: Structural limits (expression nesting)
    """

    # Input errors (1000-1999)
    INVALID_LOCALE = 1001
    INVALID_KEY_FORMAT = 1002

    # Load errors (2000-2999)
    RESOURCE_SYNTAX = 2001
    DUPLICATE_KEY = 2002

    # Translation errors (3000-3999)
    NO_LOCALES_REGISTERED = 3001
    FALLBACK_LOCALE_MISSING = 3002
    MESSAGE_NOT_FOUND = 3003

    # Formatting errors (4000-4999)
    FORMATTING_FAILED = 4001

    # Source file errors (5000-5999)
    SOURCE_FILE_VANISHED = 5001

    # Structural limits (6000-6999)
    DEPTH_EXCEEDED = 6001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        source: Resource file or locale the diagnostic refers to
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    source: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[DUPLICATE_KEY]: duplicate key 'hello'
              --> locales/en/main.ftl
              = help: Remove one of the definitions

        Control characters in the message are escaped so that resource
        content cannot inject terminal sequences into logs.

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.source is not None:
            lines.append(f"  --> {_escape(self.source)}")
        if self.hint is not None:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    """Escape control characters while keeping Unicode letters readable."""
    if text.isprintable():
        return text
    return repr(text)[1:-1]
