"""Locale negotiation.

Chooses which available locales satisfy a requested locale, using
language-range matching on subtag boundaries:

- "en" matches "en", "en-US", "en-GB" (the request is a range)
- "en-US" matches "en-US" and "en" (the available tag is a range)
- "en-US" does not match "en-GB"

Two strategies:
- FILTERING: every match, most specific first; may be empty
- LOOKUP: exactly one tag, the configured default when nothing matches

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import assert_never

from ftlcatalog.enums import NegotiationStrategy
from ftlcatalog.locale_utils import split_subtags

__all__ = [
    "filtering_negotiator",
    "match_distance",
    "negotiate_languages",
]


def match_distance(requested: str, available: str) -> tuple[int, int] | None:
    """Rank how well an available tag matches a requested tag.

    Args:
        requested: Requested locale tag
        available: Available locale tag

    Returns:
        None if the tags do not match. Otherwise a sort key where lower is
        better: (number of differing trailing subtags, 0 if the available
        tag extends the request else 1). An exact match ranks (0, 0).

    Example:
        >>> match_distance("en", "en-US")
        (1, 0)
        >>> match_distance("en-US", "en")
        (1, 1)
        >>> match_distance("en-US", "en-GB") is None
        True
    """
    want = split_subtags(requested)
    have = split_subtags(available)
    shorter = min(len(want), len(have))
    if want[:shorter] != have[:shorter]:
        return None
    return (abs(len(have) - len(want)), 0 if len(have) >= len(want) else 1)


def negotiate_languages(
    requested: str | Sequence[str],
    available: Sequence[str],
    *,
    strategy: NegotiationStrategy = NegotiationStrategy.FILTERING,
    default_locale: str | None = None,
) -> list[str]:
    """Negotiate candidate locales.

    Matches for each requested tag are ranked by match_distance(); ties keep
    the order of ``available``. With several requested tags, their matches
    are concatenated in request order without repeating a tag. Returned tags
    keep the spelling used in ``available``; tags differing only in case are
    distinct candidates, since the store keys locales by their exact tag.

    Args:
        requested: Requested locale tag, or tags in preference order
        available: Locales that have resources
        strategy: FILTERING (all matches) or LOOKUP (single best match)
        default_locale: Result of LOOKUP when nothing matches

    Returns:
        Candidate locales in preference order

    Raises:
        ValueError: LOOKUP requested without a default_locale

    Example:
        >>> negotiate_languages("en", ["fr", "en-US", "en"])
        ['en', 'en-US']
        >>> negotiate_languages("de", ["fr", "en"], strategy=NegotiationStrategy.LOOKUP,
        ...                     default_locale="en")
        ['en']
    """
    if strategy is NegotiationStrategy.LOOKUP and default_locale is None:
        msg = "LOOKUP strategy requires a default_locale"
        raise ValueError(msg)

    wanted = [requested] if isinstance(requested, str) else list(requested)
    result: list[str] = []
    seen: set[str] = set()

    for tag in wanted:
        ranked: list[tuple[tuple[int, int], int, str]] = []
        for index, candidate in enumerate(available):
            distance = match_distance(tag, candidate)
            if distance is not None:
                ranked.append((distance, index, candidate))
        ranked.sort()
        for _, _, candidate in ranked:
            if candidate not in seen:
                seen.add(candidate)
                result.append(candidate)

    match strategy:
        case NegotiationStrategy.FILTERING:
            return result
        case NegotiationStrategy.LOOKUP:
            return result[:1] if result else [default_locale]  # type: ignore[list-item]
        case _ as unreachable:
            assert_never(unreachable)


def filtering_negotiator(requested: str | Sequence[str], available: Sequence[str]) -> list[str]:
    """Default Translator negotiator: FILTERING strategy."""
    return negotiate_languages(requested, available, strategy=NegotiationStrategy.FILTERING)
