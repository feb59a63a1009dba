"""Watch mode: keep the schema artifact in sync with FTL sources.

PollingWatcher turns periodic file-system snapshots into FileEvents.
WatchCoordinator maintains the tracked file set and regenerates the schema
after every event that affects it:

- create: ignored if already tracked; tracked if it is a regular file
- modify: tracked if it is a regular untracked file; schema regenerated
- remove: untracked and schema regenerated if it was tracked
- events naming several paths, or files with another suffix: ignored

Events are handled one at a time, each regeneration finishing before the
next event is read.

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ftlcatalog.constants import DEFAULT_POLL_INTERVAL, FTL_SUFFIX
from ftlcatalog.enums import FileEventKind
from ftlcatalog.schema.extractor import SchemaExtractor
from ftlcatalog.schema.files import collect_source_files, is_hidden, resolve_argument
from ftlcatalog.schema.writer import write_schema

if TYPE_CHECKING:
    from ftlcatalog.enums import SchemaFormat
    from ftlcatalog.schema.extractor import ExtractionResult

__all__ = ["FileEvent", "PollingWatcher", "WatchCoordinator"]

logger = logging.getLogger(__name__)

type Snapshot = dict[Path, tuple[int, int]]
"""Path -> (mtime_ns, size) of every regular file under the watched roots."""


@dataclass(frozen=True, slots=True)
class FileEvent:
    """A file-system change.

    Attributes:
        kind: What happened
        paths: Affected paths (the polling watcher always reports one)
    """

    kind: FileEventKind
    paths: tuple[Path, ...]


class PollingWatcher:
    """Detects file changes by comparing periodic snapshots.

    Iterating blocks, yielding events as they are detected, until close()
    is called.

    Example:
        >>> watcher = PollingWatcher([Path("locales")], interval=0.5)
        >>> for event in watcher:
        ...     print(event.kind, event.paths[0])
    """

    def __init__(self, roots: Iterable[Path], *, interval: float = DEFAULT_POLL_INTERVAL) -> None:
        if interval <= 0:
            msg = f"interval must be positive, got {interval}"
            raise ValueError(msg)
        self._roots = tuple(roots)
        self._interval = interval
        self._closed = False
        self._snapshot = self.snapshot()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Stop iteration after the event currently being handled."""
        self._closed = True

    def snapshot(self) -> Snapshot:
        """Stat every regular file under the roots."""
        snapshot: Snapshot = {}
        for root in self._roots:
            for path in _walk_files(root):
                try:
                    stat = path.stat()
                except FileNotFoundError:
                    continue
                snapshot[path] = (stat.st_mtime_ns, stat.st_size)
        return snapshot

    def poll(self) -> list[FileEvent]:
        """Take a new snapshot and report differences from the previous one."""
        current = self.snapshot()
        previous = self._snapshot
        self._snapshot = current

        events: list[FileEvent] = []
        for path in sorted(current.keys() | previous.keys()):
            if path not in previous:
                events.append(FileEvent(FileEventKind.CREATE, (path,)))
            elif path not in current:
                events.append(FileEvent(FileEventKind.REMOVE, (path,)))
            elif current[path] != previous[path]:
                events.append(FileEvent(FileEventKind.MODIFY, (path,)))
        return events

    def __iter__(self) -> Iterator[FileEvent]:
        while not self._closed:
            time.sleep(self._interval)
            for event in self.poll():
                if self._closed:
                    return
                yield event


def _walk_files(root: Path) -> Iterator[Path]:
    if root.is_file():
        yield root
        return
    visited: set[Path] = set()
    pending = [root]
    while pending:
        directory = pending.pop()
        if directory in visited:
            continue
        visited.add(directory)
        try:
            children = list(directory.iterdir())
        except FileNotFoundError:
            continue
        for child in children:
            if is_hidden(child):
                continue
            try:
                target = child.resolve(strict=True)
            except OSError:
                continue
            if target.is_dir():
                pending.append(target)
            elif target.is_file():
                yield target


class WatchCoordinator:
    """Keeps a schema artifact in sync with a changing set of source files."""

    def __init__(
        self,
        roots: Iterable[str | Path],
        output: str | Path,
        *,
        extractor: SchemaExtractor | None = None,
        suffix: str = FTL_SUFFIX,
        fmt: SchemaFormat | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            roots: Files and directories given on the command line
            output: Schema artifact path
            extractor: Schema extractor (default: overrides disallowed)
            suffix: Extension of tracked files
            fmt: Output format, inferred from the output suffix when None
        """
        self._arguments = tuple(roots)
        self._output = Path(output)
        self._extractor = extractor if extractor is not None else SchemaExtractor()
        self._suffix = suffix
        self._fmt = fmt
        self._roots: tuple[Path, ...] = ()
        self._files: set[Path] = set()

    @property
    def roots(self) -> tuple[Path, ...]:
        """Resolved roots, available after start()."""
        return self._roots

    @property
    def files(self) -> frozenset[Path]:
        """Currently tracked source files."""
        return frozenset(self._files)

    def start(self) -> ExtractionResult:
        """Resolve the roots, collect the initial files and write the schema.

        Raises:
            FileNotFoundError: If a root does not exist
        """
        roots: list[Path] = []
        for argument in self._arguments:
            root = resolve_argument(argument)
            roots.append(root)
            logger.info("watching %s", root)
            self._files |= collect_source_files(root, self._suffix)
        self._roots = tuple(roots)
        return self.regenerate()

    def handle(self, event: FileEvent) -> bool:
        """Apply one event to the tracked set.

        Returns:
            True if the schema was regenerated
        """
        if len(event.paths) != 1:
            return False
        path = Path(event.paths[0]).resolve()
        if path.suffix != self._suffix or is_hidden(path):
            return False

        match event.kind:
            case FileEventKind.CREATE:
                if path in self._files or not path.is_file():
                    return False
                self._files.add(path)
                logger.info("watching %s", path)
            case FileEventKind.MODIFY:
                if path.is_file() and path not in self._files:
                    self._files.add(path)
                    logger.info("watching %s", path)
            case FileEventKind.REMOVE:
                if path not in self._files:
                    return False
                self._files.discard(path)
                logger.info("stopped watching %s", path)
            case _:
                return False

        self.regenerate()
        return True

    def regenerate(self) -> ExtractionResult:
        """Extract the tracked files and rewrite the output."""
        result = self._extractor.extract(self._files)
        write_schema(self._output, result.schema, self._fmt)
        if result.duplicates or result.missing:
            logger.warning(
                "Schema regenerated with %d duplicate key(s) and %d vanished file(s)",
                len(result.duplicates),
                len(result.missing),
            )
        return result

    def run(self, events: Iterable[FileEvent]) -> int:
        """Handle events until the iterable is exhausted.

        Returns:
            Number of regenerations
        """
        regenerations = 0
        for event in events:
            if self.handle(event):
                regenerations += 1
        return regenerations
