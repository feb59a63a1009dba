"""Locale-aware message translation with fallback.

The Translator turns (requested locale, key, variables) into a string:

1. negotiate candidate locales among those loaded into the store
2. format the key from the first candidate that defines it
3. otherwise format it from the fallback locale, which must define every key

Formatting problems reported by the engine are logged and the best-effort
string is still returned. Missing locales and keys are raised.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ftlcatalog.constants import DEFAULT_FALLBACK_LOCALE
from ftlcatalog.diagnostics import (
    FallbackLocaleMissingError,
    FormattingEngineError,
    MessageNotFoundError,
    NoLocalesRegisteredError,
)
from ftlcatalog.keys import parse_key
from ftlcatalog.locale_utils import validate_locale
from ftlcatalog.localization.negotiation import filtering_negotiator

if TYPE_CHECKING:
    from ftlcatalog.keys import MessageKey
    from ftlcatalog.localization.store import LocaleCollection, ResourceStore
    from ftlcatalog.localization.types import (
        LocaleCode,
        Negotiator,
        TranslateFunction,
        Variables,
    )

__all__ = ["FallbackInfo", "Translator"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Passed to the on_fallback callback when a message is resolved from a
    locale other than the best negotiated one.

    Attributes:
        requested_locale: Locale the caller asked for
        resolved_locale: Locale that actually contained the message
        message_id: Key that was resolved ("id" or "id.attribute")

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"{info.message_id}: {info.resolved_locale} "
        ...           f"(requested {info.requested_locale})")
        >>> translator = Translator(store, "en", on_fallback=log_fallback)
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    message_id: str


class Translator:
    """Resolves message keys to formatted strings across locales.

    The store may keep receiving resources after the Translator is built;
    available locales and the fallback collection are looked up per call.

    Example:
        >>> store = ResourceStore(use_isolating=False)
        >>> store.load_resource("en", "hello = Hello, { $name }!")
        []
        >>> translator = Translator(store, "en")
        >>> translator.translate("en-US", "hello", {"name": "Anna"})
        'Hello, Anna!'
    """

    __slots__ = ("_fallback_locale", "_negotiator", "_on_fallback", "_store")

    def __init__(
        self,
        store: ResourceStore,
        fallback_locale: LocaleCode = DEFAULT_FALLBACK_LOCALE,
        *,
        negotiator: Negotiator = filtering_negotiator,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize the translator.

        Args:
            store: Resource store holding the loaded locales
            fallback_locale: Locale expected to define every key
            negotiator: Chooses candidate locales for a request
            on_fallback: Called when a message resolves from a locale other
                than the best candidate

        Raises:
            InvalidLocaleError: If fallback_locale is malformed
        """
        self._store = store
        self._fallback_locale = validate_locale(fallback_locale)
        self._negotiator = negotiator
        self._on_fallback = on_fallback

    @property
    def fallback_locale(self) -> LocaleCode:
        """Locale consulted when no negotiated candidate defines a key."""
        return self._fallback_locale

    def __repr__(self) -> str:
        return (
            f"Translator(fallback_locale={self._fallback_locale!r}, "
            f"locales={self._store.get_locales()!r})"
        )

    def get_locales(self) -> list[LocaleCode]:
        """Locales currently available in the store."""
        return self._store.get_locales()

    def has_message(self, locale: LocaleCode, key: str) -> bool:
        """Check whether translate(locale, key) would find a definition.

        Raises:
            InvalidKeyFormatError: If the key is malformed
        """
        message_key = parse_key(key)
        if self._find(locale, message_key) is not None:
            return True
        fallback = self._store.get_collection(self._fallback_locale)
        return fallback is not None and message_key in fallback

    def translate(
        self,
        locale: LocaleCode,
        key: str,
        variables: Variables | None = None,
    ) -> str:
        """Format a message for the requested locale.

        Args:
            locale: Requested locale tag
            key: Message key, "id" or "id.attribute"
            variables: Variable bindings for placeables

        Returns:
            Formatted string

        Raises:
            NoLocalesRegisteredError: Nothing was loaded into the store
            InvalidKeyFormatError: The key is malformed
            FallbackLocaleMissingError: No candidate defines the key and the
                fallback locale has no resources
            MessageNotFoundError: Neither a candidate nor the fallback locale
                defines the key
        """
        if not self._store.get_locales():
            raise NoLocalesRegisteredError

        message_key = parse_key(key)
        candidates = self._negotiator(locale, self._store.get_locales())
        found = self._find_in(candidates, message_key)
        if found is not None:
            if found.locale != candidates[0]:
                self._notify(locale, found.locale, message_key)
            return self._format(found, message_key, variables)

        fallback = self._store.get_collection(self._fallback_locale)
        if fallback is None:
            raise FallbackLocaleMissingError(str(message_key), self._fallback_locale)
        if message_key not in fallback:
            raise MessageNotFoundError(str(message_key), self._fallback_locale)

        logger.debug(
            "No candidate for %r defines %s, using fallback %r",
            locale,
            message_key,
            self._fallback_locale,
        )
        self._notify(locale, self._fallback_locale, message_key)
        return self._format(fallback, message_key, variables)

    def bind(self, locale: LocaleCode) -> TranslateFunction:
        """Return a translate function fixed to one requested locale.

        Example:
            >>> t = translator.bind("de")
            >>> t("hello", {"name": "Anna"})
            'Hallo, Anna!'
        """

        def translate(key: str, variables: Variables | None = None) -> str:
            return self.translate(locale, key, variables)

        return translate

    def _find(self, locale: LocaleCode, key: MessageKey) -> LocaleCollection | None:
        return self._find_in(self._negotiator(locale, self._store.get_locales()), key)

    def _find_in(self, candidates: list[LocaleCode], key: MessageKey) -> LocaleCollection | None:
        for candidate in candidates:
            collection = self._store.get_collection(candidate)
            if collection is not None and key in collection:
                return collection
        return None

    def _notify(self, requested: LocaleCode, resolved: LocaleCode, key: MessageKey) -> None:
        if self._on_fallback is not None:
            self._on_fallback(
                FallbackInfo(
                    requested_locale=requested,
                    resolved_locale=resolved,
                    message_id=str(key),
                )
            )

    def _format(
        self,
        collection: LocaleCollection,
        key: MessageKey,
        variables: Variables | None,
    ) -> str:
        value, errors = collection.format(key, variables)
        for cause in errors:
            error = FormattingEngineError(str(key), collection.locale, cause)
            logger.warning("%s", error)
        return value
