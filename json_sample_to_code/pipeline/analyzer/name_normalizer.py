"""
Name normalizer.

Turns arbitrary JSON keys into identifiers, builds class names from
nesting paths and resolves collisions between generated names.
"""

from __future__ import annotations

import logging
import re

from ...utils import snake_to_pascal_case

logger = logging.getLogger(__name__)

# Name used for the root class when the caller gives none
DEFAULT_ROOT_NAME = "JsonDataTransferObject"

# Characters that survive normalization; everything else becomes a word break
_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9_\s\-]")
_WORD_BOUNDARY = re.compile(r"[\s_\-]+")
_LEADING_DIGITS = "0123456789"


def normalize_field_name(key: str) -> str | None:
    """Convert a JSON key into a camelCase identifier.

    Examples:
        "first_name" -> "firstName"
        "@HowToReach" -> "howToReach"
        "123bad" -> "bad"
        "---" -> None

    Returns:
        The identifier, or None when nothing usable is left (the field is dropped)
    """
    cleaned = _DISALLOWED_CHARS.sub(" ", key).strip()
    words = [word for word in _WORD_BOUNDARY.split(cleaned) if word]
    if not words:
        return None

    first, rest = words[0], words[1:]
    camel = first[:1].lower() + first[1:] + "".join(word[:1].upper() + word[1:] for word in rest)
    camel = camel.lstrip(_LEADING_DIGITS)

    return camel or None


def needs_mapping(original_key: str, normalized_name: str) -> bool:
    """Whether the renderer must keep a wire-name mapping for this field."""
    return original_key != normalized_name


def join_path(path: str, name: str) -> str:
    """Append a segment to a dot-joined nesting path."""
    return f"{path}.{name}" if path else name


def build_class_name(path: str) -> str:
    """Build a class name from a nesting path.

    Examples:
        "" -> "JsonDataTransferObject"
        "address" -> "Address"
        "hotelImageList.image" -> "HotelImageListImage"
    """
    if not path:
        return DEFAULT_ROOT_NAME

    name = "".join(snake_to_pascal_case(segment) for segment in path.split("."))
    return name or DEFAULT_ROOT_NAME


class NameRegistry:
    """Hands out unique names within one scope.

    A name that is already taken gets the smallest free numeric suffix,
    starting at 2 (``Address``, ``Address2``, ...).
    """

    def __init__(self, kind: str = "name"):
        self.kind = kind
        self._taken: set[str] = set()

    def __contains__(self, name: str) -> bool:
        return name in self._taken

    def claim(self, name: str) -> str:
        if name not in self._taken:
            self._taken.add(name)
            return name

        suffix = 2
        while f"{name}{suffix}" in self._taken:
            suffix += 1
        unique = f"{name}{suffix}"
        self._taken.add(unique)
        logger.warning("%s %r is already in use, renamed to %r", self.kind.capitalize(), name, unique)
        return unique
