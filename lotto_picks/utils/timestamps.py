"""ISO-8601 timestamp helpers."""

from __future__ import annotations

import re
from datetime import datetime, timezone

# Python 3.10's fromisoformat only takes 3 or 6 fractional digits.
_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")


def utc_now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""

    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _normalize_fraction(text: str) -> str:
    return _FRACTION.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text, count=1)


def parse_iso(value: object) -> datetime | None:
    """Parse an ISO-8601 string into an aware datetime; ``None`` when unparsable.

    A trailing ``Z`` is accepted, fractional seconds of any length are cut or
    padded to microseconds and naive values are taken as UTC.
    """

    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(_normalize_fraction(text))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
