"""
Type casting utilities for the Road Trip backup parser.

This module converts raw CSV cell text into the field types used by the
record shapes, and parses the two date layouts the app writes.
"""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

# Fill-ups carry a time of day, tire-log entries do not.
DATE_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d")


def safe_text(value: Any) -> Optional[str]:
    """Convert value to a stripped string.

    Args:
        value: Any value to convert to string

    Returns:
        String value or None if value is None/empty
    """
    if value is None:
        return None
    s = str(value).strip()
    return s if s else None


def zero_value(typ: str) -> Any:
    """Return the zero value used for a missing column or empty cell."""
    t = (typ or "string").lower()
    if t == "int":
        return 0
    if t == "float":
        return 0.0
    return ""


def cast_value(value: Any, typ: str) -> Any:
    """Cast a cell value to the specified type.

    Supported types:
    - string: String value
    - int: Integer value (``"3.0"`` is accepted as 3, ``"3.5"`` is not)
    - float: Python float
    - date: Date string, kept verbatim (see ``parse_date``)

    Empty or missing values become the type's zero value.

    Args:
        value: Value to cast
        typ: Target type name

    Returns:
        Casted value

    Raises:
        ValueError: When the value does not fit the type
    """
    s = safe_text(value)
    if s is None:
        return zero_value(typ)

    t = (typ or "string").lower()
    try:
        if t in ("string", "date"):
            return s
        if t == "int":
            d = Decimal(s)
            if d != d.to_integral_value():
                raise ValueError("not a whole number")
            return int(d)
        if t == "float":
            return float(s)
    except (ValueError, InvalidOperation, OverflowError) as e:
        raise ValueError(f"Failed to cast '{s}' to {t}: {e}")  # noqa: B904

    # Unknown type - log and return as string
    logger.debug(f"Unknown type '{typ}', treating as string")
    return s


def parse_date(text: Optional[str]) -> Tuple[Optional[datetime], bool]:
    """Parse a Road Trip date string.

    Tries ``year-month-day hour:minute`` first, then ``year-month-day``
    (midnight). Month and day may be one or two digits.

    Returns:
        Tuple of (datetime or None, ok). Never raises; callers decide
        whether an unparseable date matters.
    """
    s = safe_text(text)
    if s is None:
        return None, False

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt), True
        except ValueError:
            continue

    logger.debug(f"Cannot parse Road Trip date string '{s}'")
    return None, False
