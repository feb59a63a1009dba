"""Discovery of FTL source files on disk.

Command-line arguments may name files, directories or symlinks to either.
Everything is resolved to canonical absolute paths so the same file reached
through two routes is tracked once.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ftlcatalog.constants import FTL_SUFFIX

__all__ = ["collect_source_files", "is_hidden", "resolve_argument"]

logger = logging.getLogger(__name__)


def is_hidden(path: Path) -> bool:
    """Dot-prefixed names (".git", ".cache.ftl") are never tracked."""
    return path.name.startswith(".")


def resolve_argument(arg: str | Path) -> Path:
    """Resolve a path argument to its canonical absolute target.

    Symlinks are followed to their real target.

    Raises:
        FileNotFoundError: If the path (or a symlink target) does not exist
    """
    return Path(arg).expanduser().resolve(strict=True)


def collect_source_files(path: str | Path, suffix: str = FTL_SUFFIX) -> set[Path]:
    """Collect every source file reachable from a path.

    A file is returned as is when it carries the suffix. A directory is
    walked recursively; symlinked directories are followed once, so link
    cycles terminate.

    Args:
        path: File or directory to scan
        suffix: File extension to keep

    Returns:
        Canonical absolute paths of the matching files

    Raises:
        FileNotFoundError: If path does not exist
    """
    root = resolve_argument(path)
    if not root.is_dir():
        return {root} if root.is_file() and root.suffix == suffix else set()

    files: set[Path] = set()
    visited: set[Path] = set()
    pending = [root]

    while pending:
        directory = pending.pop()
        if directory in visited:
            continue
        visited.add(directory)

        try:
            children = sorted(directory.iterdir())
        except FileNotFoundError:
            logger.debug("Directory vanished while scanning: %s", directory)
            continue

        for child in children:
            if is_hidden(child):
                continue
            try:
                target = child.resolve(strict=True)
            except OSError as e:
                # Dangling symlinks and symlink loops.
                logger.warning("Skipping unresolvable path %s: %s", child, e)
                continue
            if target.is_dir():
                pending.append(target)
            elif target.is_file() and target.suffix == suffix:
                files.add(target)

    return files
