"""Variable schema extraction from FTL sources.

Derives, for every message value and attribute in a set of source files,
the variables a caller has to supply. The result is the static contract the
schema writer turns into a JSON or Python artifact.

Collection rules for one placeable expression:
- variable reference: its name
- function call: union over positional arguments; named arguments do not
  contribute (they are literal options such as minimumFractionDigits)
- select expression: the selector's name when it is a variable reference;
  variants are not inspected
- nested placeable: its inner expression
- anything else: nothing

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ftllexengine import FluentSyntaxError, parse_ftl
from ftllexengine.syntax.ast import (
    FunctionReference,
    Message,
    Placeable,
    SelectExpression,
    VariableReference,
)

from ftlcatalog.constants import DEFAULT_SCHEMA_ALLOW_OVERRIDES
from ftlcatalog.core.depth_guard import DepthGuard
from ftlcatalog.diagnostics import DuplicateKeyError, SourceFileVanishedError
from ftlcatalog.keys import MessageKey

if TYPE_CHECKING:
    from pathlib import Path

    from ftllexengine.syntax.ast import Expression, Pattern

__all__ = [
    "ExtractionResult",
    "SchemaExtractor",
    "collect_variables",
    "pattern_variables",
]

logger = logging.getLogger(__name__)

type Schema = dict[str, frozenset[str]]
"""Message key ("id" or "id.attribute") -> required variable names."""


def collect_variables(expression: Expression, guard: DepthGuard | None = None) -> frozenset[str]:
    """Collect the variable names one placeable expression requires.

    Args:
        expression: Expression inside a placeable
        guard: Depth guard shared across the recursion

    Returns:
        Variable names without the '$' prefix

    Raises:
        DepthLimitExceededError: If nesting exceeds MAX_DEPTH
    """
    guard = guard if guard is not None else DepthGuard()
    with guard:
        match expression:
            case VariableReference(id=identifier):
                return frozenset((identifier.name,))
            case FunctionReference(arguments=arguments):
                names: set[str] = set()
                for argument in arguments.positional:
                    names |= collect_variables(argument, guard)
                return frozenset(names)
            case SelectExpression(selector=VariableReference(id=identifier)):
                return frozenset((identifier.name,))
            case Placeable(expression=inner):
                return collect_variables(inner, guard)
            case _:
                return frozenset()


def pattern_variables(pattern: Pattern) -> frozenset[str]:
    """Union of collect_variables() over the placeables of a pattern.

    Example:
        >>> resource = parse_ftl("hello = Hello { $name }")
        >>> pattern_variables(resource.entries[0].value)
        frozenset({'name'})
    """
    names: set[str] = set()
    for element in pattern.elements:
        if isinstance(element, Placeable):
            names |= collect_variables(element.expression)
    return frozenset(names)


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Outcome of SchemaExtractor.extract().

    Attributes:
        schema: Key -> variables, in the order keys were first seen
        duplicates: Repeated definitions that were rejected
        missing: Files that vanished before they could be read
    """

    schema: Schema = field(default_factory=dict)
    duplicates: tuple[DuplicateKeyError, ...] = ()
    missing: tuple[SourceFileVanishedError, ...] = ()


class SchemaExtractor:
    """Builds a variable schema from a set of FTL files.

    Files that no longer exist are removed from the set passed to extract(),
    so a watched file set heals itself when files disappear.
    """

    __slots__ = ("_allow_overrides",)

    def __init__(self, *, allow_overrides: bool = DEFAULT_SCHEMA_ALLOW_OVERRIDES) -> None:
        self._allow_overrides = allow_overrides

    @property
    def allow_overrides(self) -> bool:
        return self._allow_overrides

    def extract(self, files: set[Path]) -> ExtractionResult:
        """Extract the schema of every message in files.

        Files are read in sorted order, so the result does not depend on set
        iteration order.

        Args:
            files: Source files; vanished entries are removed in place

        Returns:
            Schema plus collected diagnostics

        Raises:
            OSError: If a file exists but cannot be read
        """
        schema: Schema = {}
        sources: dict[str, str] = {}
        duplicates: list[DuplicateKeyError] = []
        missing: list[SourceFileVanishedError] = []

        for path in sorted(files):
            try:
                source = path.read_text(encoding="utf-8")
            except FileNotFoundError:
                files.discard(path)
                error = SourceFileVanishedError(str(path))
                missing.append(error)
                logger.info("%s: %s", error, path)
                continue

            try:
                resource = parse_ftl(source)
            except FluentSyntaxError as e:
                logger.error("Failed to parse %s: %s", path, e)
                continue

            for entry in resource.entries:
                if not isinstance(entry, Message):
                    continue
                if entry.value is not None:
                    self._record(
                        schema, sources, duplicates,
                        MessageKey(entry.id.name), entry.value, str(path),
                    )
                for attr in entry.attributes:
                    self._record(
                        schema, sources, duplicates,
                        MessageKey(entry.id.name, attr.id.name), attr.value, str(path),
                    )

        return ExtractionResult(
            schema=schema, duplicates=tuple(duplicates), missing=tuple(missing)
        )

    def _record(
        self,
        schema: Schema,
        sources: dict[str, str],
        duplicates: list[DuplicateKeyError],
        key: MessageKey,
        pattern: Pattern,
        source: str,
    ) -> None:
        name = str(key)
        if name in schema:
            if not self._allow_overrides:
                error = DuplicateKeyError(name, sources[name], source)
                duplicates.append(error)
                logger.error("%s", error)
                return
            logger.info("Overriding %s: %s replaces %s", name, source, sources[name])
        schema[name] = pattern_variables(pattern)
        sources[name] = source
