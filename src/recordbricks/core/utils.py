import re
from datetime import datetime, timezone
from typing import Any, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string with millisecond precision, e.g. 2024-01-15T09:30:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def parse_int(value: Any) -> Optional[int]:
    """
    Read an integer the lenient way record ids arrive from callers.

    ints pass through, floats are truncated, strings are read up to the first
    non-digit ("12", " 7abc", "+3"). Anything else (None, bools, "", "abc")
    gives None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None
