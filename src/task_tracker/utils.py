"""Provide helpers for integers, RFC3339 timestamps and relative ages."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def parse_decimal(raw: str) -> Optional[int]:
    """Parse a plain ASCII decimal integer; no whitespace, underscores or other digit sets."""
    if not _DECIMAL_RE.fullmatch(raw):
        return None
    return int(raw)


def _now_local() -> datetime:
    return datetime.now().astimezone().replace(microsecond=0)


def format_rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def parse_rfc3339(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        if not isinstance(value, str):
            value = str(value)
        if value.endswith(("Z", "z")):
            value = value[:-1] + "+00:00"
        dt = datetime.fromisoformat(value)
        # If a naive timestamp slips in, assume UTC to avoid crashes.
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    except ValueError:
        return None


_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


def format_relative(then: datetime, now: Optional[datetime] = None) -> str:
    """Render the distance between ``then`` and ``now`` as human-readable text.

    Args:
        then: Timestamp being described (naive values are treated as UTC).
        now: Reference point; defaults to the current time.

    Returns:
        Text such as ``"3 minutes ago"``, ``"in 2 days"`` or ``"just now"``.
        The zero timestamp left behind by an unparseable field renders as
        ``"unknown"``.
    """
    if then == ZERO_TIME:
        return "unknown"
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - then).total_seconds())
    future = seconds < 0
    seconds = abs(seconds)
    if seconds < 45:
        return "just now"

    phrase = f"{seconds} seconds"
    for unit, size in _UNITS:
        if seconds >= size:
            count = seconds // size
            if count == 1:
                phrase = f"an {unit}" if unit == "hour" else f"a {unit}"
            else:
                phrase = f"{count} {unit}s"
            break
    return f"in {phrase}" if future else f"{phrase} ago"
