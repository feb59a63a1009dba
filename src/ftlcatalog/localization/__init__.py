"""Runtime message resolution.

Components:
    ResourceStore - Per-locale message collections backed by the formatting engine
    Translator - Locale negotiation, fallback and formatting
    negotiate_languages - Locale matching (FILTERING / LOOKUP)
    load_locales_directory - Fill a store from a locales/<tag>/*.ftl layout

Python 3.13+.
"""

from .loading import LoadSummary, ResourceLoadResult, load_locales_directory
from .negotiation import filtering_negotiator, match_distance, negotiate_languages
from .store import LocaleCollection, ResourceEntry, ResourceOptions, ResourceStore
from .translator import FallbackInfo, Translator
from .types import FTLSource, LocaleCode, Negotiator, TranslateFunction, Variables

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Storage
    "LocaleCollection",
    "ResourceEntry",
    "ResourceOptions",
    "ResourceStore",
    # Translation
    "FallbackInfo",
    "Translator",
    # Negotiation
    "filtering_negotiator",
    "match_distance",
    "negotiate_languages",
    # Loading
    "LoadSummary",
    "ResourceLoadResult",
    "load_locales_directory",
    # Type aliases
    "FTLSource",
    "LocaleCode",
    "Negotiator",
    "TranslateFunction",
    "Variables",
]
