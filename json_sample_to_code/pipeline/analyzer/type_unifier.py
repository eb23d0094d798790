"""
Type unifier.

Classifies single JSON values and reconciles a set of values into one
inferred type tag. Ambiguity never raises; it resolves to ``None``, which
callers treat as the Mixed type.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..json_ast.nodes import (
    JsonArray,
    JsonBool,
    JsonFloat,
    JsonInt,
    JsonNull,
    JsonObject,
    JsonString,
    JsonValue,
)
from .ir_nodes import JsonType

_NUMERIC = frozenset({JsonType.INT, JsonType.FLOAT})


def classify(value: JsonValue) -> JsonType | None:
    """Return the type tag of a value, or None for null and unknown nodes."""
    if isinstance(value, JsonNull):
        return None
    if isinstance(value, JsonString):
        return JsonType.STRING
    if isinstance(value, JsonBool):
        return JsonType.BOOL
    if isinstance(value, JsonInt):
        return JsonType.INT
    if isinstance(value, JsonFloat):
        return JsonType.FLOAT
    if isinstance(value, JsonObject):
        return JsonType.OBJECT
    if isinstance(value, JsonArray):
        return JsonType.ARRAY
    return None


def unify_many(values: Iterable[JsonValue]) -> JsonType | None:
    """
    Reconcile the types of several values into a single tag.

    Null values carry no type information and are skipped.

    Args:
        values: JSON values observed for the same slot

    Returns:
        The common tag, FLOAT when only ints and floats were seen,
        or None (Mixed) when nothing or conflicting types were seen
    """
    tags = {tag for tag in map(classify, values) if tag is not None}

    if len(tags) == 1:
        return next(iter(tags))

    # int and float are compatible, widen to float
    if tags == _NUMERIC:
        return JsonType.FLOAT

    return None
