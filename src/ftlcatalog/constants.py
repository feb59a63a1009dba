"""Shared constants for FTLCatalog.

Centralized defaults used across the localization and schema packages.
Placing them here avoids circular imports and gives every configurable
default a single home.

Constants are grouped by domain:
- Locale defaults: fallback locale used when none is configured
- Override policies: runtime loading vs. schema extraction
- Source files: extension and placeholder names
- Watch mode: polling cadence
- Depth limits: recursion protection for expression traversal

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_FALLBACK_LOCALE",
    # Override policies
    "DEFAULT_ALLOW_OVERRIDES",
    "DEFAULT_SCHEMA_ALLOW_OVERRIDES",
    # Source files
    "FTL_SUFFIX",
    "FALLBACK_SOURCE",
    # Watch mode
    "DEFAULT_POLL_INTERVAL",
    # Depth limits
    "MAX_DEPTH",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

DEFAULT_FALLBACK_LOCALE: str = "en"
"""Locale expected to contain every message key the application references."""

# ============================================================================
# OVERRIDE POLICIES
# ============================================================================
#
# The runtime loader and the schema extractor each own their duplicate-key
# policy. They share a default value but are configured independently:
# ResourceOptions.allow_overrides for loading, SchemaExtractor(allow_overrides=)
# for extraction.

DEFAULT_ALLOW_OVERRIDES: bool = False
"""Runtime loading: keep the first definition of a key and report duplicates."""

DEFAULT_SCHEMA_ALLOW_OVERRIDES: bool = False
"""Schema extraction: keep the first definition of a key and report duplicates."""

# ============================================================================
# SOURCE FILES
# ============================================================================

FTL_SUFFIX: str = ".ftl"
"""File extension of tracked Fluent resources."""

FALLBACK_SOURCE: str = "<string>"
"""Source name recorded for resources loaded from in-memory strings."""

# ============================================================================
# WATCH MODE
# ============================================================================

DEFAULT_POLL_INTERVAL: float = 0.5
"""Seconds between file-system snapshots in watch mode."""

# ============================================================================
# DEPTH LIMITS
# ============================================================================

MAX_DEPTH: int = 100
"""Maximum expression nesting depth followed while collecting variables."""
