"""Rendering and writing the variable schema artifact.

Two output formats:
- JSON: {"key": ["var", ...], ...}
- PYTHON: a typing module with a MessageKey Literal alias and a
  MESSAGE_VARIABLES mapping, importable by application code and type checkers

Keys and variable names are sorted, so identical schemas always render to
identical bytes.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Set
from pathlib import Path
from typing import assert_never

from ftlcatalog.enums import SchemaFormat

__all__ = ["infer_format", "render_schema", "write_schema"]

logger = logging.getLogger(__name__)

_PYTHON_HEADER = "# Generated by ftlcatalog generate-schema. Do not edit by hand.\n"

_SUFFIX_FORMATS: dict[str, SchemaFormat] = {
    ".json": SchemaFormat.JSON,
    ".py": SchemaFormat.PYTHON,
    ".pyi": SchemaFormat.PYTHON,
}


def infer_format(path: str | Path) -> SchemaFormat:
    """Pick the output format from the file suffix (JSON when unknown)."""
    return _SUFFIX_FORMATS.get(Path(path).suffix.lower(), SchemaFormat.JSON)


def render_schema(schema: Mapping[str, Set[str]], fmt: SchemaFormat) -> str:
    """Render a schema in the given format.

    Example:
        >>> print(render_schema({"hello": {"name"}}, SchemaFormat.JSON))
        {
          "hello": [
            "name"
          ]
        }
        <BLANKLINE>
    """
    match fmt:
        case SchemaFormat.JSON:
            return _render_json(schema)
        case SchemaFormat.PYTHON:
            return _render_python(schema)
        case _ as unreachable:
            assert_never(unreachable)


def _render_json(schema: Mapping[str, Set[str]]) -> str:
    document = {key: sorted(schema[key]) for key in sorted(schema)}
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def _render_python(schema: Mapping[str, Set[str]]) -> str:
    keys = sorted(schema)
    lines = [_PYTHON_HEADER]

    if not keys:
        lines.append("from typing import Final, Never\n")
        lines.append("\n")
        lines.append("type MessageKey = Never\n")
        lines.append("\n")
        lines.append("MESSAGE_VARIABLES: Final[dict[MessageKey, frozenset[str]]] = {}\n")
        return "".join(lines)

    lines.append("from typing import Final, Literal\n")
    lines.append("\n")
    lines.append("type MessageKey = Literal[\n")
    lines.extend(f"    {json.dumps(key)},\n" for key in keys)
    lines.append("]\n")
    lines.append("\n")
    lines.append("MESSAGE_VARIABLES: Final[dict[MessageKey, frozenset[str]]] = {\n")
    for key in keys:
        variables = sorted(schema[key])
        if variables:
            members = ", ".join(json.dumps(name) for name in variables)
            lines.append(f"    {json.dumps(key)}: frozenset({{{members}}}),\n")
        else:
            lines.append(f"    {json.dumps(key)}: frozenset(),\n")
    lines.append("}\n")
    return "".join(lines)


def write_schema(
    path: str | Path,
    schema: Mapping[str, Set[str]],
    fmt: SchemaFormat | None = None,
) -> Path:
    """Render the schema and write it to path.

    Args:
        path: Output file; parent directories are created
        schema: Key -> variable names
        fmt: Output format, inferred from the suffix when None

    Returns:
        The written path
    """
    output = Path(path)
    fmt = fmt if fmt is not None else infer_format(output)
    content = render_schema(schema, fmt)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    logger.info("Wrote %d key(s) to %s (%s)", len(schema), output, fmt)
    return output
