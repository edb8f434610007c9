"""
Utilities Module

This module provides utility functions and helpers for the split ledger.

Features:
    - UTC timestamps in ISO format
    - India-locale (en-IN) date/time formatting
    - Process-wide settlement ID generation
    - Settlement ID coercion for text-based callers
    - Currency formatting

Functions:
    utc_now: Current UTC time as an aware datetime.
    to_iso: Format a datetime as an ISO-8601 string.
    parse_iso: Parse an ISO-8601 string back into a datetime.
    format_date_in: Format a datetime as an en-IN date (D/M/YYYY).
    format_time_in: Format a datetime as an en-IN time (h:mm:ss am/pm).
    next_settlement_id: Generate a unique settlement identifier.
    coerce_settlement_id: Convert a numeric-like value into a comparable ID.
    format_currency: Format amount with currency symbol.
    round_amount: Round a monetary value to 2 decimal places.
"""

import itertools
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from zoneinfo import ZoneInfo


# Settlement IDs are unique for the process lifetime, across ledgers and resets
_settlement_ids = itertools.count(1)


def utc_now() -> datetime:
    """
    Get the current UTC time.

    Returns:
        datetime: Timezone-aware datetime in UTC.
    """
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """
    Format a datetime as an ISO-8601 string.

    Microseconds are always included so that string forms have a fixed width.

    Args:
        moment: Timezone-aware datetime.

    Returns:
        str: ISO formatted timestamp.
    """
    return moment.isoformat(timespec="microseconds")


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp produced by to_iso()."""
    return datetime.fromisoformat(value)


def _localize(moment: datetime, tz_name: str) -> datetime:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(ZoneInfo(tz_name))


def format_date_in(moment: datetime, tz_name: str = "Asia/Kolkata") -> str:
    """
    Format a datetime the way the en-IN locale renders a short date.

    Args:
        moment: Datetime to format (naive values are treated as UTC).
        tz_name: IANA timezone to render in.

    Returns:
        str: Date like "5/3/2026" (day/month/year, no zero padding).
    """
    local = _localize(moment, tz_name)
    return f"{local.day}/{local.month}/{local.year}"


def format_time_in(moment: datetime, tz_name: str = "Asia/Kolkata") -> str:
    """
    Format a datetime the way the en-IN locale renders a time.

    Args:
        moment: Datetime to format (naive values are treated as UTC).
        tz_name: IANA timezone to render in.

    Returns:
        str: Time like "2:05:07 pm" (12-hour clock, lowercase meridiem).
    """
    local = _localize(moment, tz_name)
    hour = local.hour % 12 or 12
    meridiem = "am" if local.hour < 12 else "pm"
    return f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"


def next_settlement_id() -> int:
    """
    Generate a settlement identifier.

    Returns:
        int: Next value of the process-wide counter (never reused).
    """
    return next(_settlement_ids)


def coerce_settlement_id(value) -> Optional[Union[int, float]]:
    """
    Convert a settlement ID coming from a text-based interface into a number.

    Numbers pass through unchanged; strings are parsed as floating point
    (so "3" and "3.0" both match settlement 3).

    Args:
        value: Settlement ID as int, float or string.

    Returns:
        int | float | None: Comparable ID, or None if the value cannot be parsed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def round_amount(value) -> float:
    """
    Round a monetary value to 2 decimal places using ROUND_HALF_UP.

    Args:
        value: Number or Decimal.

    Returns:
        float: Rounded value as float.
    """
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_currency(amount: float, symbol: str = "₹") -> str:
    """
    Format a monetary amount with the appropriate currency symbol.

    Args:
        amount: The amount to format.
        symbol: Currency symbol (default: ₹).

    Returns:
        str: Formatted string like "₹1,234.56".
    """
    return f"{symbol}{amount:,.2f}"
