"""Static variable schema generation from FTL sources.

Python 3.13+.
"""

from .extractor import ExtractionResult, SchemaExtractor, collect_variables, pattern_variables
from .files import collect_source_files, resolve_argument
from .watch import FileEvent, PollingWatcher, WatchCoordinator
from .writer import infer_format, render_schema, write_schema

__all__ = [
    "ExtractionResult",
    "FileEvent",
    "PollingWatcher",
    "SchemaExtractor",
    "WatchCoordinator",
    "collect_source_files",
    "collect_variables",
    "infer_format",
    "pattern_variables",
    "render_schema",
    "resolve_argument",
    "write_schema",
]
