"""Timestamp normalization at the store boundary.

Stores hand back RFC 3339 strings with anything from zero to nine
fractional digits. Everything leaving the persistence layer is an aware
datetime in UTC.
"""

import re
from datetime import datetime, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|z|[+-]\d{2}(?::?\d{2})?)?$"
)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Fractions beyond microseconds are truncated. A missing offset means UTC.

    Raises:
        ValueError: If value is not a timestamp
    """
    match = _RFC3339.match(value.strip())
    if not match:
        raise ValueError(f"Not an RFC 3339 timestamp: {value!r}")

    text = match["base"].replace(" ", "T")
    if match["fraction"]:
        text += "." + match["fraction"][:6].ljust(6, "0")

    offset = match["offset"]
    if offset is None or offset in ("Z", "z"):
        text += "+00:00"
    elif len(offset) == 3:
        text += f"{offset}:00"
    elif ":" not in offset:
        text += f"{offset[:3]}:{offset[3:]}"
    else:
        text += offset

    return datetime.fromisoformat(text).astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC string ending in 'Z'."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="microseconds").replace("+00:00", "Z")
