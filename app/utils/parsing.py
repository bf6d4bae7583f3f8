"""FitTrack API - Lenient value parsing for client and AI supplied numbers."""

import re
from typing import Any, Optional


_INT_PATTERN = re.compile(r"\d+")
_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")


def parse_int_value(value: Any, default: int = 0) -> int:
    """First integer in ``value`` (``"3 sets"`` -> 3), else ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        match = _INT_PATTERN.search(value)
        return int(match.group(0)) if match else default
    return default


def parse_reps_value(value: Any, default: int = 10) -> int:
    """
    Normalize a reps value.

    "AMRAP" and "as many as possible" become 15; other strings yield
    their first integer or ``default``.
    """
    if isinstance(value, str):
        lowered = value.lower()
        if "as many" in lowered or "amrap" in lowered:
            return 15
    return parse_int_value(value, default)


def parse_number(value: Any) -> Optional[float]:
    """Numeric value of ``value`` or None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _NUMBER_PATTERN.search(value)
        return float(match.group(0)) if match else None
    return None
