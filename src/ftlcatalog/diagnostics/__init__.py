"""Diagnostic system for FTLCatalog errors.

Provides structured error diagnostics with codes, sources, and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    DuplicateKeyError,
    FallbackLocaleMissingError,
    FormattingEngineError,
    FTLCatalogError,
    InvalidKeyFormatError,
    InvalidLocaleError,
    MessageNotFoundError,
    NoLocalesRegisteredError,
    ResourceSyntaxError,
    SourceFileVanishedError,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
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
