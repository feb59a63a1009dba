"""Per-locale resource storage.

The ResourceStore owns one LocaleCollection per locale. A collection maps
MessageKey objects to the pattern that won the duplicate-key policy and
keeps a FluentBundle mirroring exactly those patterns, so the formatting
engine always renders the entry the store resolved.

Duplicate policy (per key, values and attributes independently):
- allow_overrides=False: the first definition is kept, a DuplicateKeyError
  naming both sources is collected, the rest of the resource still loads
- allow_overrides=True: the new definition replaces the old one and the
  replacement is logged at WARNING

Not designed for concurrent writers: callers must serialize load_resource()
calls when sharing a store between threads.

Python 3.13+. External dependency: ftllexengine (FTL parser and formatter).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ftllexengine import FluentBundle, FluentSyntaxError, parse_ftl, serialize_ftl
from ftllexengine.syntax.ast import Junk, Message, Term

from ftlcatalog.constants import (
    DEFAULT_ALLOW_OVERRIDES,
    DEFAULT_FALLBACK_LOCALE,
    FALLBACK_SOURCE,
)
from ftlcatalog.diagnostics import DuplicateKeyError, FTLCatalogError, ResourceSyntaxError
from ftlcatalog.keys import MessageKey
from ftlcatalog.locale_utils import validate_locale

if TYPE_CHECKING:
    from ftllexengine import FluentValue
    from ftllexengine.syntax.ast import Attribute, Pattern, Resource

    from ftlcatalog.localization.types import FTLSource, LocaleCode, Variables

__all__ = [
    "LocaleCollection",
    "ResourceEntry",
    "ResourceOptions",
    "ResourceStore",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceOptions:
    """Options applied to a single load_resource() call.

    Attributes:
        allow_overrides: Replace existing keys instead of reporting duplicates
    """

    allow_overrides: bool = DEFAULT_ALLOW_OVERRIDES


@dataclass(frozen=True, slots=True)
class ResourceEntry:
    """One resolvable pattern: a message value or a single attribute.

    Attributes:
        key: Key the pattern is reachable under
        pattern: Parsed pattern AST
        source: Where the pattern was loaded from
    """

    key: MessageKey
    pattern: Pattern
    source: str


class LocaleCollection:
    """Messages of one locale, keyed by MessageKey.

    Mutated only through ResourceStore.load_resource().
    """

    __slots__ = ("_bundle", "_entries", "_locale", "_messages")

    def __init__(
        self,
        locale: LocaleCode,
        *,
        use_isolating: bool = True,
        functions: Mapping[str, Callable[..., FluentValue]] | None = None,
    ) -> None:
        self._locale = locale
        self._entries: dict[MessageKey, ResourceEntry] = {}
        # Merged message nodes as handed to the bundle; attributes of one
        # message may come from several resources.
        self._messages: dict[str, Message] = {}
        self._bundle = _create_bundle(locale, use_isolating=use_isolating)
        for name, func in (functions or {}).items():
            self._bundle.add_function(name, func)

    @property
    def locale(self) -> LocaleCode:
        """Locale tag of this collection."""
        return self._locale

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"LocaleCollection(locale={self._locale!r}, entries={len(self._entries)})"

    def get(self, key: MessageKey) -> ResourceEntry | None:
        """Look up the entry for a key, or None."""
        return self._entries.get(key)

    def keys(self) -> list[MessageKey]:
        """All keys in load order."""
        return list(self._entries)

    def add_function(self, name: str, func: Callable[..., FluentValue]) -> None:
        """Register a custom formatting function on the underlying bundle."""
        self._bundle.add_function(name, func)

    def format(
        self, key: MessageKey, variables: Variables | None = None
    ) -> tuple[str, tuple[Exception, ...]]:
        """Render the entry stored under key with the formatting engine.

        Returns:
            (best-effort string, engine errors)
        """
        value, errors = self._bundle.format_pattern(key.id, variables, attribute=key.attribute)
        return value, tuple(errors)

    def load(
        self, resource: Resource, source: str, *, allow_overrides: bool
    ) -> list[FTLCatalogError]:
        """Merge a parsed resource into the collection.

        Returns:
            Collected syntax and duplicate-key errors
        """
        errors: list[FTLCatalogError] = []
        accepted: list[Message | Term] = []

        for entry in resource.entries:
            match entry:
                case Message():
                    merged = self._merge_message(entry, source, allow_overrides, errors)
                    if merged is not None:
                        accepted.append(merged)
                case Term():
                    # Terms are not addressable by key but patterns may reference them.
                    accepted.append(entry)
                case Junk():
                    errors.append(ResourceSyntaxError(entry.content, source))
                    logger.warning(
                        "Syntax error in %s: %s", source, repr(entry.content[:100])
                    )
                case _:
                    pass

        if accepted:
            # Duplicates were already resolved above; the bundle must take the
            # merged entries as they are.
            self._bundle.add_resource(
                serialize_ftl(replace(resource, entries=tuple(accepted))),
                allow_overwrite=True,
            )

        logger.info(
            "Loaded %s into %s: %d entries, %d error(s)",
            source,
            self._locale,
            len(self._entries),
            len(errors),
        )
        return errors

    def _merge_message(
        self,
        message: Message,
        source: str,
        allow_overrides: bool,
        errors: list[FTLCatalogError],
    ) -> Message | None:
        """Apply the duplicate policy to a message value and its attributes.

        Returns:
            The merged message node if anything was accepted, else None
        """
        message_id = message.id.name
        current = self._messages.get(message_id)
        value = current.value if current is not None else None
        attributes: dict[str, Attribute] = (
            {attr.id.name: attr for attr in current.attributes} if current is not None else {}
        )
        updated = False

        if message.value is not None and self._accept(
            MessageKey(message_id), message.value, source, allow_overrides, errors
        ):
            value = message.value
            updated = True

        for attr in message.attributes:
            if self._accept(
                MessageKey(message_id, attr.id.name), attr.value, source, allow_overrides, errors
            ):
                attributes[attr.id.name] = attr
                updated = True

        if not updated:
            return None

        merged = replace(message, value=value, attributes=tuple(attributes.values()))
        self._messages[message_id] = merged
        return merged

    def _accept(
        self,
        key: MessageKey,
        pattern: Pattern,
        source: str,
        allow_overrides: bool,
        errors: list[FTLCatalogError],
    ) -> bool:
        existing = self._entries.get(key)
        if existing is not None:
            if not allow_overrides:
                errors.append(DuplicateKeyError(str(key), existing.source, source))
                logger.debug("Kept first definition of %s in %s", key, self._locale)
                return False
            logger.warning(
                "Overriding %s in %s: %s replaces the definition from %s",
                key,
                self._locale,
                source,
                existing.source,
            )
        self._entries[key] = ResourceEntry(key=key, pattern=pattern, source=source)
        return True


class ResourceStore:
    """Holds one LocaleCollection per locale.

    Example:
        >>> store = ResourceStore(use_isolating=False)
        >>> store.load_resource("en", "welcome = Hello, { $name }!")
        []
        >>> store.get_locales()
        ['en']
    """

    __slots__ = ("_collections", "_functions", "_use_isolating")

    def __init__(
        self,
        *,
        use_isolating: bool = True,
        functions: Mapping[str, Callable[..., FluentValue]] | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            use_isolating: Wrap placeables in Unicode bidi isolation marks
            functions: Custom formatting functions installed on every locale
        """
        self._use_isolating = use_isolating
        self._functions: dict[str, Callable[..., FluentValue]] = dict(functions or {})
        self._collections: dict[LocaleCode, LocaleCollection] = {}

    def __repr__(self) -> str:
        return f"ResourceStore(locales={list(self._collections)!r})"

    def load_resource(
        self,
        locale: LocaleCode,
        source: FTLSource,
        options: ResourceOptions | None = None,
        *,
        source_path: str | None = None,
    ) -> list[FTLCatalogError]:
        """Parse FTL source and merge it into a locale's collection.

        Args:
            locale: Locale tag to load into
            source: FTL source text
            options: Duplicate-key policy (default: keep first definition)
            source_path: Name of the source in diagnostics

        Returns:
            Non-fatal errors collected while loading (syntax errors,
            duplicate keys). Empty list on a clean load.

        Raises:
            InvalidLocaleError: If the locale tag is malformed
        """
        validate_locale(locale)
        options = options or ResourceOptions()
        source_name = source_path or FALLBACK_SOURCE

        collection = self._collections.get(locale)
        if collection is None:
            collection = LocaleCollection(
                locale, use_isolating=self._use_isolating, functions=self._functions
            )
            self._collections[locale] = collection
            logger.debug("Creating a collection for the locale %r", locale)

        try:
            resource = parse_ftl(source)
        except FluentSyntaxError as e:
            logger.error("Failed to parse resource %s: %s", source_name, e)
            return [ResourceSyntaxError(str(e), source_name)]

        return collection.load(resource, source_name, allow_overrides=options.allow_overrides)

    def get_locales(self) -> list[LocaleCode]:
        """All locales with at least one loaded resource."""
        return list(self._collections)

    def has_locale(self, locale: LocaleCode) -> bool:
        return locale in self._collections

    def get_collection(self, locale: LocaleCode) -> LocaleCollection | None:
        """Collection for a locale, or None if nothing was loaded for it."""
        return self._collections.get(locale)

    def add_function(self, name: str, func: Callable[..., FluentValue]) -> None:
        """Register a custom formatting function on all locales.

        Applied immediately to existing collections and stored for
        collections created later.

        Args:
            name: Function name (UPPERCASE by convention)
            func: Python function implementation
        """
        self._functions[name] = func
        for collection in self._collections.values():
            collection.add_function(name, func)


def _create_bundle(locale: LocaleCode, *, use_isolating: bool) -> FluentBundle:
    """Create the formatting bundle backing one collection.

    The bundle runs in non-strict mode so formatting problems come back as
    errors next to a best-effort string. Tags the CLDR data does not know
    still get a collection; their patterns are formatted with the rules of
    the primary language, or of DEFAULT_FALLBACK_LOCALE when that is unknown
    as well.
    """
    primary = locale.split("-", 1)[0]
    for formatting_locale in dict.fromkeys((locale, primary)):
        try:
            bundle = FluentBundle(formatting_locale, use_isolating=use_isolating, strict=False)
        except ValueError:
            continue
        if formatting_locale != locale:
            logger.warning(
                "Locale %r has no CLDR data; formatting with %r rules", locale, formatting_locale
            )
        return bundle

    logger.warning(
        "Locale %r has no CLDR data; formatting with %r rules", locale, DEFAULT_FALLBACK_LOCALE
    )
    return FluentBundle(DEFAULT_FALLBACK_LOCALE, use_isolating=use_isolating, strict=False)
