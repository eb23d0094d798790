"""
String format detection.

Probes are evaluated in a fixed priority order against one representative
string value; the first match wins. Hints are advisory metadata only and
never change the inferred type.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Callable
from datetime import date, datetime
from urllib.parse import urlparse

from .ir_nodes import FormatHint

_EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)
_UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
_DATE_TIME_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_email(value: str) -> bool:
    return bool(_EMAIL_PATTERN.match(value)) and ".." not in value


def is_url(value: str) -> bool:
    if any(c.isspace() for c in value):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_uuid(value: str) -> bool:
    return bool(_UUID_PATTERN.match(value))


def is_date_time(value: str) -> bool:
    if not _DATE_TIME_PREFIX.match(value):
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_date(value: str) -> bool:
    if not _DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


# Priority order matters: first match wins
FORMAT_PROBES: tuple[tuple[Callable[[str], bool], FormatHint], ...] = (
    (is_email, FormatHint.EMAIL),
    (is_url, FormatHint.URL),
    (is_uuid, FormatHint.UUID),
    (is_date_time, FormatHint.DATE_TIME),
    (is_date, FormatHint.DATE),
    (is_ip, FormatHint.IP),
)


def detect_format(value: str) -> FormatHint | None:
    """Return the format hint of a string sample, or None."""
    if not value:
        return None
    for probe, hint in FORMAT_PROBES:
        if probe(value):
            return hint
    return None
