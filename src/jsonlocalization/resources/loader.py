"""JSON resource file loading and flattening.

Parses one JSON resource file into a flat ``key -> string`` table. Nested
objects become dot-joined paths and arrays become bracket-indexed paths:

    {"Book": {"Page": {"One": "Page Un"}}}   ->  Book.Page.One = "Page Un"
    {"Articles": [{"Content": "C1"}]}        ->  Articles[0].Content = "C1"

Parsing is lenient (``//`` and ``/* */`` comments, trailing commas) via the
json5 library.

Python 3.13+. External dependency: json5.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import json5

from jsonlocalization.constants import MAX_DEPTH
from jsonlocalization.errors import ResourceParseError

__all__ = ["flatten_resource", "load_json_resource", "stringify_scalar"]

logger = logging.getLogger(__name__)


def stringify_scalar(value: Any) -> str:
    """Convert a JSON scalar into its resource string.

    Strings are returned unchanged, booleans as "True"/"False", null as ""
    and numbers with their literal digits (floats are parsed as Decimal).
    """
    match value:
        case str():
            return value
        case bool():
            return "True" if value else "False"
        case None:
            return ""
        case _:
            return str(value)


def flatten_resource(document: dict[str, Any], *, max_depth: int = MAX_DEPTH) -> dict[str, str]:
    """Flatten a parsed JSON object into dotted/indexed keys.

    On key collisions (``{"a.b": 1, "a": {"b": 2}}``) the first value wins.

    Args:
        document: Parsed JSON object (the document root)
        max_depth: Maximum nesting depth before the document is rejected

    Returns:
        Flat mapping of key paths to string values

    Raises:
        ResourceParseError: If nesting exceeds max_depth
    """
    result: dict[str, str] = {}

    def visit(node: Any, path: str, depth: int) -> None:
        if depth > max_depth:
            msg = f"Resource nesting exceeds maximum depth of {max_depth} at '{path}'"
            raise ResourceParseError(msg, path="")
        match node:
            case dict():
                for key, child in node.items():
                    visit(child, f"{path}.{key}" if path else str(key), depth + 1)
            case list():
                for index, child in enumerate(node):
                    visit(child, f"{path}[{index}]", depth + 1)
            case _:
                if path not in result:
                    result[path] = stringify_scalar(node)

    visit(document, "", 0)
    return result


def load_json_resource(file_path: str | Path) -> dict[str, str]:
    """Load and flatten one JSON resource file.

    Args:
        file_path: Path of the JSON file

    Returns:
        Flat key -> value mapping; empty if the file does not exist

    Raises:
        ResourceParseError: If the file is not valid (lenient) JSON, its root
            is not an object, or it is nested too deeply
        OSError: If the file exists but cannot be read
    """
    path = Path(file_path)
    if not path.is_file():
        return {}

    try:
        # utf-8-sig tolerates the BOM some editors write
        source = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        msg = f"Resource file '{path}' is not valid UTF-8: {e}"
        raise ResourceParseError(msg, path=str(path)) from e

    try:
        document = json5.loads(source, parse_float=Decimal)
    except RecursionError as e:
        msg = f"Resource file '{path}' is nested too deeply to parse"
        raise ResourceParseError(msg, path=str(path)) from e
    except ValueError as e:
        msg = f"Invalid JSON in resource file '{path}': {e}"
        raise ResourceParseError(msg, path=str(path)) from e

    if not isinstance(document, dict):
        msg = (
            f"Resource file '{path}' must contain a JSON object at the root, "
            f"got {type(document).__name__}"
        )
        raise ResourceParseError(msg, path=str(path))

    try:
        resources = flatten_resource(document)
    except ResourceParseError as e:
        msg = f"{e} in '{path}'"
        raise ResourceParseError(msg, path=str(path)) from e

    logger.debug("Loaded %d resources from %s", len(resources), path)
    return resources
