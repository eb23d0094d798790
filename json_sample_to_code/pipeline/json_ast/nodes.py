"""
Node definitions for parsed JSON sample values.

A JSON document decoded by the ``json`` module is converted into this
tagged union before inference, so that every later phase can dispatch on
an explicit node type instead of probing raw Python values.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class JsonValue:
    """Base class for all JSON value nodes."""

    # Location of the value inside the sample (e.g. "$.address.city")
    source_path: str = field(default="", compare=False)


@dataclass
class JsonNull(JsonValue):
    """The JSON ``null`` literal."""


@dataclass
class JsonBool(JsonValue):
    """A JSON ``true`` or ``false``."""

    value: bool = False


@dataclass
class JsonInt(JsonValue):
    """A JSON number without fraction or exponent."""

    value: int = 0


@dataclass
class JsonFloat(JsonValue):
    """A JSON number with fraction or exponent."""

    value: float = 0.0


@dataclass
class JsonString(JsonValue):
    """A JSON string."""

    value: str = ""


@dataclass
class JsonArray(JsonValue):
    """A JSON array."""

    items: list[JsonValue] = field(default_factory=list)


@dataclass
class JsonObject(JsonValue):
    """A JSON object. Member order is the order of the source document."""

    members: dict[str, JsonValue] = field(default_factory=dict)

    def keys(self) -> tuple[str, ...]:
        return tuple(self.members)
