"""
Utility functions for the JSON sample to code generator.
"""

import keyword
import re

# Regex pattern to split text into words, handling camelCase boundaries and acronyms
_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "hotelImageList" -> "HotelImageList"
        "HTTPServer" -> "HttpServer"
        "first 3 rows" -> "First3Rows"

    Args:
        text: The text to convert (snake_case, camelCase, UPPER_SNAKE_CASE, or space-separated)

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def to_snake_case(text: str) -> str:
    """Convert PascalCase or camelCase text to snake_case.

    Examples:
        "NewDto" -> "new_dto"
        "hotelImageList" -> "hotel_image_list"
    """
    words = _split_into_words(_normalize_separators(text))
    return "_".join(word.lower() for word in words)


def is_valid_namespace(namespace: str, language: str = "python") -> bool:
    """Check that a dotted namespace is made of identifiers.

    Python namespaces are module paths, so keywords are rejected too.
    """
    if not namespace:
        return False
    for part in namespace.split("."):
        if not _IDENTIFIER.match(part):
            return False
        if language == "python" and keyword.iskeyword(part):
            return False
    return True
