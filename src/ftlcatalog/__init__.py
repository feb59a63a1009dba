"""FTLCatalog - Fluent message catalogs for multi-locale applications.

Resolves localized Fluent (FTL) messages with locale negotiation and a
mandatory fallback locale, and derives a static schema of the variables
each message requires.

Public API:
    ResourceStore - Load FTL resources per locale
    Translator - Translate keys with negotiation and fallback
    load_locales_directory - Fill a store from a locales directory
    negotiate_languages - Locale matching
    parse_key - Parse "id" / "id.attribute" keys
    SchemaExtractor - Extract message variables from FTL files
    write_schema - Write the schema as JSON or a Python typing module

Exceptions:
    FTLCatalogError - Base exception class
    InvalidLocaleError, InvalidKeyFormatError - Malformed input
    NoLocalesRegisteredError, FallbackLocaleMissingError,
    MessageNotFoundError - Translation failures

Submodules:
    ftlcatalog.diagnostics - Error types and diagnostic codes
    ftlcatalog.localization - Runtime store, negotiation and translation
    ftlcatalog.schema - Schema extraction, writing and watch mode
    ftlcatalog.cli - The ftlcatalog command
"""

from .diagnostics import (
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
from .enums import NegotiationStrategy, SchemaFormat
from .keys import MessageKey, parse_key
from .localization import (
    FallbackInfo,
    LoadSummary,
    ResourceOptions,
    ResourceStore,
    Translator,
    load_locales_directory,
    negotiate_languages,
)
from .schema import SchemaExtractor, write_schema

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("ftlcatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DuplicateKeyError",
    "FTLCatalogError",
    "FallbackInfo",
    "FallbackLocaleMissingError",
    "FormattingEngineError",
    "InvalidKeyFormatError",
    "InvalidLocaleError",
    "LoadSummary",
    "MessageKey",
    "MessageNotFoundError",
    "NegotiationStrategy",
    "NoLocalesRegisteredError",
    "ResourceOptions",
    "ResourceStore",
    "ResourceSyntaxError",
    "SchemaExtractor",
    "SchemaFormat",
    "SourceFileVanishedError",
    "Translator",
    "__version__",
    "load_locales_directory",
    "negotiate_languages",
    "parse_key",
    "write_schema",
]
