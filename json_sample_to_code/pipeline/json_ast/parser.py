"""
Converts decoded JSON into the JsonValue tagged union.

Phase 1 of the pipeline: turn the output of ``json.loads`` into explicit
nodes without doing any inference.
"""

from __future__ import annotations

import json
from typing import Any

from .nodes import (
    JsonArray,
    JsonBool,
    JsonFloat,
    JsonInt,
    JsonNull,
    JsonObject,
    JsonString,
    JsonValue,
)


class JsonParser:
    """Builds JsonValue trees from decoded JSON."""

    ROOT_PATH = "$"

    def parse(self, value: Any, path: str = ROOT_PATH) -> JsonValue:
        """
        Convert a decoded JSON value into a JsonValue node.

        Args:
            value: A value as produced by ``json.loads``
            path: Source path of the value, used for debugging output

        Returns:
            The equivalent JsonValue node

        Raises:
            TypeError: If the value is not something ``json.loads`` produces
        """
        if value is None:
            return JsonNull(source_path=path)

        # bool is a subclass of int, so it must be checked first
        if isinstance(value, bool):
            return JsonBool(source_path=path, value=value)

        if isinstance(value, int):
            return JsonInt(source_path=path, value=value)

        if isinstance(value, float):
            return JsonFloat(source_path=path, value=value)

        if isinstance(value, str):
            return JsonString(source_path=path, value=value)

        if isinstance(value, (list, tuple)):
            return JsonArray(
                source_path=path,
                items=[self.parse(item, f"{path}[{i}]") for i, item in enumerate(value)],
            )

        if isinstance(value, dict):
            return JsonObject(
                source_path=path,
                members={str(key): self.parse(item, f"{path}.{key}") for key, item in value.items()},
            )

        raise TypeError(f"Cannot convert {type(value).__name__} at {path} to a JSON value")

    def parse_text(self, text: str) -> JsonValue:
        """Decode JSON text and convert it. Raises json.JSONDecodeError on bad input."""
        return self.parse(json.loads(text))
