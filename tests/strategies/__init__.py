"""Hypothesis strategies shared across the FTLCatalog test suite."""

from .keys import message_ids, raw_keys
from .locales import locale_tags, subtags

__all__ = [
    "locale_tags",
    "message_ids",
    "raw_keys",
    "subtags",
]
