"""Loading a locales directory into a ResourceStore.

Expected layout:

    locales/
        common.ftl          loaded into every locale
        en/
            main.ftl
            errors/forms.ftl
        pt-BR/
            main.ftl

Each subdirectory named after a locale tag contributes its source files,
found recursively. Subdirectories that are not valid locale tags are
skipped with a warning.

Components:
    ResourceLoadResult - Immutable result of a single file load
    LoadSummary - Immutable aggregate of all load results
    load_locales_directory - Walks the layout and fills the store

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ftlcatalog.constants import FTL_SUFFIX
from ftlcatalog.enums import LoadStatus
from ftlcatalog.locale_utils import is_valid_locale
from ftlcatalog.schema.files import collect_source_files, is_hidden

if TYPE_CHECKING:
    from ftlcatalog.diagnostics import FTLCatalogError
    from ftlcatalog.localization.store import ResourceOptions, ResourceStore
    from ftlcatalog.localization.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
    # Loader
    "load_locales_directory",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading a single FTL file.

    Attributes:
        locale: Locale the file was loaded into
        source_path: Path of the file
        status: Load status (success, not_found, error)
        error: Exception if the file could not be read, None otherwise
        load_errors: Non-fatal errors returned by the store (syntax, duplicates)
    """

    locale: LocaleCode
    source_path: str
    status: LoadStatus
    error: Exception | None = None
    load_errors: tuple[FTLCatalogError, ...] = ()

    @property
    def is_success(self) -> bool:
        """Check if the file was read and loaded."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the file disappeared before it was read."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if reading the file failed."""
        return self.status == LoadStatus.ERROR

    @property
    def has_load_errors(self) -> bool:
        """Check if the store reported syntax or duplicate-key errors."""
        return len(self.load_errors) > 0


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the results of load_locales_directory().

    Attributes:
        results: All individual load results, in load order

    Example:
        >>> summary = load_locales_directory(store, "locales")
        >>> for result in summary.get_errors():
        ...     print(f"Failed: {result.source_path}: {result.error}")
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors}, "
            f"load_errors={self.load_error_count})"
        )

    @property
    def total_attempted(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.is_error)

    @property
    def load_error_count(self) -> int:
        """Total number of syntax and duplicate-key errors across all files."""
        return sum(len(r.load_errors) for r in self.results)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales that received at least one file, in load order."""
        return tuple(dict.fromkeys(r.locale for r in self.results))

    @property
    def all_clean(self) -> bool:
        """True if every file loaded without any kind of error."""
        return all(r.is_success and not r.has_load_errors for r in self.results)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_not_found)

    def get_with_load_errors(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.has_load_errors)


def load_locales_directory(
    store: ResourceStore,
    path: str | Path,
    *,
    options: ResourceOptions | None = None,
    suffix: str = FTL_SUFFIX,
) -> LoadSummary:
    """Load every locale subdirectory of path into the store.

    Files directly under path are common resources, loaded into every
    discovered locale before that locale's own files. Files are loaded in
    sorted path order.

    Args:
        store: Store to fill
        path: Root directory holding one subdirectory per locale
        options: Duplicate-key policy for every load
        suffix: Extension of resource files

    Returns:
        Summary of all load attempts

    Raises:
        FileNotFoundError: If path does not exist
        NotADirectoryError: If path is not a directory
    """
    root = Path(path).resolve(strict=True)
    if not root.is_dir():
        raise NotADirectoryError(str(root))

    common: list[Path] = []
    locale_dirs: list[tuple[LocaleCode, Path]] = []
    for child in sorted(root.iterdir()):
        if is_hidden(child):
            continue
        if child.is_dir():
            if is_valid_locale(child.name):
                locale_dirs.append((child.name, child))
            else:
                logger.warning("Skipping %s: %r is not a valid locale tag", child, child.name)
        elif child.is_file() and child.suffix == suffix:
            common.append(child)

    results: list[ResourceLoadResult] = []
    for locale, directory in locale_dirs:
        files = [*common, *sorted(collect_source_files(directory, suffix))]
        for file in files:
            results.append(_load_file(store, locale, file, options))

    summary = LoadSummary(results=tuple(results))
    logger.info("Loaded locales directory %s: %r", root, summary)
    return summary


def _load_file(
    store: ResourceStore,
    locale: LocaleCode,
    file: Path,
    options: ResourceOptions | None,
) -> ResourceLoadResult:
    source_path = str(file)
    try:
        source = file.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        logger.warning("Resource vanished before loading: %s", source_path)
        return ResourceLoadResult(locale, source_path, LoadStatus.NOT_FOUND, error=e)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", source_path, e)
        return ResourceLoadResult(locale, source_path, LoadStatus.ERROR, error=e)

    load_errors = store.load_resource(locale, source, options, source_path=source_path)
    for error in load_errors:
        diagnostic = error.diagnostic
        if diagnostic is None:
            logger.error("%s (in %s)", error, source_path)
            continue
        level = logging.WARNING if diagnostic.severity == "warning" else logging.ERROR
        logger.log(level, "%s", diagnostic.format_error())
    return ResourceLoadResult(
        locale, source_path, LoadStatus.SUCCESS, load_errors=tuple(load_errors)
    )
