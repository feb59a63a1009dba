"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating Translator call sites.

Python 3.13+.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ftllexengine import FluentValue

__all__ = [
    "FTLSource",
    "LocaleCode",
    "Negotiator",
    "TranslateFunction",
    "Variables",
]

type LocaleCode = str
"""IETF-style locale tag (e.g., 'en', 'pt-BR', 'zh-Hans-CN')."""

type FTLSource = str
"""Raw FTL source text as a Python string."""

type Variables = Mapping[str, FluentValue]
"""Variable bindings passed to the formatting engine."""

type Negotiator = Callable[[LocaleCode | Sequence[LocaleCode], Sequence[LocaleCode]], list[LocaleCode]]
"""Chooses candidate locales: (requested, available) -> ordered candidates."""

type TranslateFunction = Callable[..., str]
"""translate() bound to one locale: (key, variables=None) -> str."""
