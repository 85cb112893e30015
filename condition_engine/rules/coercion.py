"""
Value coercion for condition evaluation.

Every operator compares coerced forms of the field value and the expected
value. The coercions are total: they never raise, they report failure
through their return value instead.

``compare_values`` uses a fixed preference order: numeric if both sides
are numeric, temporal if both sides are instants, otherwise the string
forms are compared lexicographically.
"""

import re
from collections.abc import Mapping, Sized
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple


NUMBER_TYPES = (int, float, Decimal)

# Tried in order, first match wins
TIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%H:%M:%S",
)

_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def _is_number(value: Any) -> bool:
    return isinstance(value, NUMBER_TYPES) and not isinstance(value, bool)


def to_number(value: Any) -> Tuple[float, bool]:
    """Convert a value to float. Strings must be a number in their entirety."""
    if _is_number(value):
        try:
            return float(value), True
        except (OverflowError, ValueError, InvalidOperation):
            return 0.0, False

    if isinstance(value, str):
        if not value or value != value.strip() or "_" in value:
            return 0.0, False
        try:
            return float(value), True
        except ValueError:
            return 0.0, False

    return 0.0, False


def to_string(value: Any) -> str:
    """Render a value as text for string comparisons."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    # Integral floats print as integers while they are exact; larger ones keep exponent form
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


def is_empty(value: Any) -> bool:
    """None, empty strings and empty containers are empty; scalars never are."""
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return len(value) == 0
    if isinstance(value, Sized):
        return len(value) == 0
    # Channel-like objects (queue.Queue and friends)
    empty = getattr(value, "empty", None)
    if callable(empty) and hasattr(value, "qsize"):
        return bool(empty())
    return False


def to_bool(value: Any) -> bool:
    """Truthiness used by istrue/isfalse."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() == "true"
    if _is_number(value):
        return value != 0
    return not is_empty(value)


def to_time(value: Any) -> Tuple[Optional[datetime], bool]:
    """Convert a value to a timezone-aware datetime; naive instants are UTC."""
    if isinstance(value, datetime):
        return _as_aware(value), True

    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc), True

    if isinstance(value, str):
        text = _EXCESS_FRACTION.sub(r"\1", value)
        for fmt in TIME_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
            except ValueError:
                continue
            return _as_aware(parsed), True
        return None, False

    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc), True
        except (OverflowError, OSError, ValueError):
            return None, False

    return None, False


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _sign(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison returning -1, 0 or 1."""
    n1, ok1 = to_number(a)
    if ok1:
        n2, ok2 = to_number(b)
        if ok2:
            return _sign(n1, n2)

    t1, ok1 = to_time(a)
    if ok1:
        t2, ok2 = to_time(b)
        if ok2:
            return _sign(t1, t2)

    return _sign(to_string(a), to_string(b))


def _deep_equal(a: Any, b: Any) -> bool:
    # True == 1 in Python; keep booleans apart from numbers at every depth
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(_deep_equal(a[k], b[k]) for k in a)
    if (isinstance(a, list) and isinstance(b, list)) or (isinstance(a, tuple) and isinstance(b, tuple)):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    return bool(a == b)


def is_equal(a: Any, b: Any) -> bool:
    """Loose equality: structural, then numeric, then textual."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False

    if _deep_equal(a, b):
        return True

    n1, ok1 = to_number(a)
    if ok1:
        n2, ok2 = to_number(b)
        if ok2:
            return n1 == n2

    return to_string(a) == to_string(b)
