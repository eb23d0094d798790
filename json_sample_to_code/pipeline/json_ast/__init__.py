"""
JSON value AST module.

Contains the tagged-union node definitions and the parser that builds them.
"""

from __future__ import annotations

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
from .parser import JsonParser

__all__ = [
    "JsonValue",
    "JsonNull",
    "JsonBool",
    "JsonInt",
    "JsonFloat",
    "JsonString",
    "JsonArray",
    "JsonObject",
    "JsonParser",
]
