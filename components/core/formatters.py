"""Formatting and month-key helpers for amounts and dates."""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[str, date, datetime, None]


def parse_date(value: DateLike) -> Optional[date]:
    """
    Parse an ISO 8601 date (or datetime) into a calendar date.

    Only the date's own calendar components are used; a time or timezone
    suffix is ignored rather than converted. Empty values give ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    return date.fromisoformat(value[:10])


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format an amount like ``$1,234.56``; negative amounts get a leading minus."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date(value: DateLike) -> str:
    """Format a date for display, e.g. ``Jan 05, 2024``."""
    parsed = parse_date(value)
    return parsed.strftime("%b %d, %Y") if parsed else ""


def format_month_label(month_key: str) -> str:
    """Short chart label for a month key, e.g. ``2024-03`` -> ``Mar 2024``."""
    return datetime.strptime(month_key, "%Y-%m").strftime("%b %Y")


def get_current_month(today: Optional[date] = None) -> str:
    """Month key of ``today`` (defaults to the current date)."""
    return (today or date.today()).strftime("%Y-%m")


def month_key_of(value: DateLike) -> str:
    """
    Project a date onto its ``YYYY-MM`` month key.

    A missing or blank date falls back to the current month.
    """
    parsed = parse_date(value)
    if parsed is None:
        return get_current_month()
    return parsed.strftime("%Y-%m")


def shift_month(month_key: str, offset: int) -> str:
    """Move a month key by ``offset`` calendar months (negative goes back)."""
    year, month = (int(part) for part in month_key.split("-"))
    index = year * 12 + (month - 1) + offset
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def format_percentage(value: float, total: float) -> str:
    """Share of ``value`` in ``total`` with one decimal, ``0%`` when total is zero."""
    if total == 0:
        return "0%"
    return f"{value / total * 100:.1f}%"
