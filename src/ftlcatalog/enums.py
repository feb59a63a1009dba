"""Enumerations for FTLCatalog type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of loading one resource file.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """File read and handed to the resource store."""

    NOT_FOUND = "not_found"
    """File disappeared before it could be read."""

    ERROR = "error"
    """File could not be read (permissions, encoding, ...)."""


class NegotiationStrategy(StrEnum):
    """Locale negotiation strategy.

    StrEnum provides automatic string conversion: str(NegotiationStrategy.LOOKUP) == "lookup"
    """

    FILTERING = "filtering"
    """Return every matching locale, most specific first."""

    LOOKUP = "lookup"
    """Return exactly one locale, the default when nothing matches."""


class FileEventKind(StrEnum):
    """Kind of file-system change observed in watch mode."""

    CREATE = "create"
    MODIFY = "modify"
    REMOVE = "remove"


class SchemaFormat(StrEnum):
    """Output format of the generated schema artifact."""

    JSON = "json"
    """JSON object mapping message keys to sorted variable lists."""

    PYTHON = "python"
    """Python typing module with a MessageKey alias and a variables mapping."""


__all__ = [
    "FileEventKind",
    "LoadStatus",
    "NegotiationStrategy",
    "SchemaFormat",
]
