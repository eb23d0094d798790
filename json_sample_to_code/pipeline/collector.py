"""
Sample collector.

Decodes raw input into JSON samples, detects JSON Lines and decides
between single and multipart mode. All input validation happens here so
that the schema builder only ever sees well-shaped samples.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..utils import is_valid_namespace

logger = logging.getLogger(__name__)

EXIT_INVALID_JSON = 2
EXIT_INVALID_NAMESPACE = 3
EXIT_INVALID_MULTIPART = 4


class SampleError(Exception):
    """Base class for input errors. Carries the CLI exit code."""

    exit_code = EXIT_INVALID_JSON

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class NotParsableInput(SampleError):
    """The input is neither JSON nor JSON Lines."""


class ExpectedObjectGotOther(SampleError):
    """The input has the wrong top-level shape."""


class EmptyMultipartList(SampleError):
    """Multipart mode was given an empty array."""

    exit_code = EXIT_INVALID_MULTIPART


class MixedPrimitiveAndObjectList(SampleError):
    """Multipart mode was given an array that is not made of objects only."""

    exit_code = EXIT_INVALID_MULTIPART


class InvalidNamespace(SampleError):
    """The target namespace is not a dotted identifier."""

    exit_code = EXIT_INVALID_NAMESPACE


@dataclass
class Samples:
    """Validated input for the schema builder.

    ``values`` is a single object (single mode) or a non-empty list of
    objects (multipart mode), as decoded by the ``json`` module.
    """

    values: Any = None
    multipart: bool = False
    jsonl: bool = field(default=False, compare=False)


def is_jsonl(content: str) -> bool:
    """True when every non-blank line decodes to a JSON object."""
    valid_lines = 0
    for line in content.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            decoded = json.loads(line)
        except json.JSONDecodeError:
            return False
        if not isinstance(decoded, dict):
            return False
        valid_lines += 1
    return valid_lines > 0


def parse_jsonl(content: str) -> list[dict[str, Any]]:
    """Decode JSON Lines content into a list of objects, skipping blank lines."""
    objects = []
    for line in content.splitlines():
        line = line.strip()
        if not line:
            continue
        decoded = json.loads(line)
        if isinstance(decoded, dict):
            objects.append(decoded)
    return objects


def check_samples(decoded: Any, multipart: bool) -> Samples:
    """
    Validate decoded JSON for the requested mode.

    Args:
        decoded: Value produced by ``json.loads``
        multipart: Whether an array of objects is expected

    Returns:
        The validated samples

    Raises:
        ExpectedObjectGotOther: Wrong top-level shape
        EmptyMultipartList: Empty array in multipart mode
        MixedPrimitiveAndObjectList: Non-object array element in multipart mode
    """
    if not multipart:
        if not isinstance(decoded, dict):
            raise ExpectedObjectGotOther("Input JSON must be an object (use --multipart for arrays of objects)")
        return Samples(values=decoded, multipart=False)

    if not isinstance(decoded, list):
        raise ExpectedObjectGotOther(
            "Multipart mode requires the input JSON to be an array of objects",
            exit_code=EXIT_INVALID_MULTIPART,
        )

    if not decoded:
        raise EmptyMultipartList("Multipart mode requires a non-empty array of objects")

    if not all(isinstance(item, dict) for item in decoded):
        raise MixedPrimitiveAndObjectList("Multipart mode requires all array elements to be objects, not primitive types")

    return Samples(values=decoded, multipart=True)


def collect_samples(content: str, multipart: bool = False) -> Samples:
    """
    Decode raw input text into validated samples.

    JSON Lines input always switches to multipart mode.

    Args:
        content: Raw text read from a file or stdin
        multipart: Whether the caller asked for multipart mode

    Returns:
        The validated samples

    Raises:
        SampleError: If the input cannot be used
    """
    if is_jsonl(content):
        objects = parse_jsonl(content)
        logger.debug("Detected JSON Lines input with %d objects", len(objects))
        samples = check_samples(objects, multipart=True)
        samples.jsonl = True
        return samples

    try:
        decoded = json.loads(content)
    except json.JSONDecodeError as e:
        raise NotParsableInput(f"Failed to parse JSON input: {e}") from e

    return check_samples(decoded, multipart)


def validate_namespace(namespace: str, language: str = "python") -> str:
    """Return the namespace unchanged, or raise InvalidNamespace."""
    if not is_valid_namespace(namespace, language):
        raise InvalidNamespace(f"Invalid namespace string: {namespace!r}")
    return namespace
