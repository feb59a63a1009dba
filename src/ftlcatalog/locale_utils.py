"""Locale tag utilities.

Centralizes the shape check applied to locale tags at every entry point
(resource loading, fallback configuration, directory discovery) and the
case-insensitive subtag view used by negotiation.

Python 3.13+.
"""

from __future__ import annotations

import functools

from ftlcatalog.diagnostics import InvalidLocaleError

__all__ = [
    "is_valid_locale",
    "split_subtags",
    "validate_locale",
]


def is_valid_locale(locale: object) -> bool:
    """Check the basic IETF tag shape.

    A tag is one or more '-' separated subtags, each non-empty and made of
    ASCII letters and digits only. Subtag lengths are not checked.

    Args:
        locale: Candidate locale tag

    Returns:
        True if the tag has a valid shape

    Example:
        >>> is_valid_locale("zh-Hans-CN")
        True
        >>> is_valid_locale("en_US")
        False
        >>> is_valid_locale("en-")
        False
    """
    if not isinstance(locale, str):
        return False
    return all(subtag.isascii() and subtag.isalnum() for subtag in locale.split("-"))


def validate_locale(locale: str) -> str:
    """Return the locale unchanged, or raise if its shape is invalid.

    Raises:
        InvalidLocaleError: If the tag shape is invalid
    """
    if not is_valid_locale(locale):
        raise InvalidLocaleError(locale)
    return locale


@functools.lru_cache(maxsize=256)
def split_subtags(locale: str) -> tuple[str, ...]:
    """Split a tag into lower-cased subtags for comparison.

    Tag matching is case-insensitive ("en-US" and "EN-us" are the same
    tag), so comparisons always go through this view.

    Example:
        >>> split_subtags("zh-Hans-CN")
        ('zh', 'hans', 'cn')
    """
    return tuple(locale.lower().split("-"))
