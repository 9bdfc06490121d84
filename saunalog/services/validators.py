"""
Input Validators

Centralized normalization for everything the session ledger accepts from a
caller: day keys, minute values, ratings, facility names and list indexes.

Strict validators raise the ledger's ValueError subclasses with
human-readable messages. Lenient normalizers (ratings, bulk minute lists)
never raise; they turn bad input into "absent" or drop it.
"""

import math
import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from saunalog.errors import InvalidDate, InvalidIndex, InvalidInput


# ASCII digits only; \d would also match full-width and other Unicode digits
DATE_KEY_PATTERN = re.compile(r"([0-9]{4})-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])")
INDEX_PATTERN = re.compile(r"-?[0-9]+")

# Upper bound of the INTEGER minutes column
MINUTES_MAX = 2_147_483_647

RATING_MIN = 1
RATING_MAX = 5

FACILITY_NAME_MAX_LENGTH = 255


def _is_empty(value: Any) -> bool:
    """Check if value is None or empty string."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def _to_number(value: Any) -> Optional[float]:
    """Read a finite number from an int, float, Decimal or numeric string.

    Returns None for anything else, including booleans, NaN and infinities.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        if _is_empty(value):
            return None
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def round_half_up(number: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(number + 0.5)


def parse_date_key(value: Any) -> date:
    """
    Parse a canonical YYYY-MM-DD day key.

    The digit-group shape is checked first, then the calendar itself, so
    keys like 2024-02-30 are rejected.

    Args:
        value: The day key string (a date object is accepted as-is)

    Returns:
        The parsed date

    Raises:
        InvalidDate: If the key is malformed or not a real calendar day
    """
    if isinstance(value, datetime):
        raise InvalidDate("Invalid date: expected a day, not a timestamp")
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_KEY_PATTERN.fullmatch(value):
        raise InvalidDate(f"Invalid date: {value!r} is not YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDate(f"Invalid date: {value} is not a calendar day")


def normalize_minutes(value: Any) -> int:
    """
    Round a session duration to whole minutes.

    Raises:
        InvalidInput: If the value is not a finite number or does not round
            to an integer in 1..MINUTES_MAX
    """
    number = _to_number(value)
    if number is None:
        raise InvalidInput(f"Invalid minutes: {value!r}")
    minutes = round_half_up(number)
    if minutes <= 0:
        raise InvalidInput(f"Invalid minutes: {value!r} must be positive")
    if minutes > MINUTES_MAX:
        raise InvalidInput(f"Invalid minutes: {value!r} is too large")
    return minutes


def clean_minutes_list(values: Any) -> List[int]:
    """Round every entry and keep only values in 1..MINUTES_MAX, in order.

    Invalid entries are dropped silently. None is treated as an empty list.
    """
    if values is None:
        return []
    if isinstance(values, (str, bytes, Mapping)) or not isinstance(values, Iterable):
        raise InvalidInput("Invalid minutes list")

    cleaned = []
    for value in values:
        number = _to_number(value)
        if number is None:
            continue
        minutes = round_half_up(number)
        if 0 < minutes <= MINUTES_MAX:
            cleaned.append(minutes)
    return cleaned


def normalize_rating(value: Any) -> Optional[int]:
    """Return a 1-5 rating or None.

    Fractions are truncated (3.9 -> 3). Out-of-range and non-numeric input
    becomes None rather than being clamped to a boundary.
    """
    number = _to_number(value)
    if number is None:
        return None
    rating = math.trunc(number)
    if RATING_MIN <= rating <= RATING_MAX:
        return rating
    return None


def normalize_facility_name(value: Any) -> Optional[str]:
    if _is_empty(value):
        return None
    name = str(value).strip()
    return name[:FACILITY_NAME_MAX_LENGTH]


def normalize_meta(data: Optional[Mapping]) -> Dict[str, Any]:
    """
    Normalize a day-metadata mapping.

    Only keys present in `data` are returned, so callers can tell an
    explicitly cleared field (present, None) from one that was not supplied.
    Unknown keys are ignored.

    Args:
        data: Mapping with any of facility_name, condition_rating,
            satisfaction_rating

    Returns:
        Dict of normalized values for the supplied fields
    """
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise InvalidInput("Invalid day metadata")

    normalized = {}
    if "facility_name" in data:
        normalized["facility_name"] = normalize_facility_name(data["facility_name"])
    if "condition_rating" in data:
        normalized["condition_rating"] = normalize_rating(data["condition_rating"])
    if "satisfaction_rating" in data:
        normalized["satisfaction_rating"] = normalize_rating(data["satisfaction_rating"])
    return normalized


def parse_index(value: Any) -> int:
    """Read a 0-based list index; the upper bound is checked by the caller."""
    if isinstance(value, bool):
        raise InvalidIndex(f"Invalid index: {value!r}")
    if isinstance(value, int):
        index = value
    elif isinstance(value, float) and value.is_integer():
        index = int(value)
    elif isinstance(value, str) and INDEX_PATTERN.fullmatch(value.strip()):
        try:
            index = int(value.strip())
        except ValueError:
            # int() refuses digit strings past the interpreter's length limit
            raise InvalidIndex(f"Invalid index: {value[:20]!r}...")
    else:
        raise InvalidIndex(f"Invalid index: {value!r}")

    if index < 0:
        raise InvalidIndex(f"Invalid index: {index}")
    return index
