"""Helpers for date normalization."""

from datetime import date, datetime


def coerce_date(value) -> date:
    """Normalize date-like values returned by storage drivers.

    Args:
        value: A date, datetime, or ISO formatted string.

    Returns:
        date: Normalized calendar date.

    Raises:
        ValueError: If the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise ValueError(f"Unsupported date value: {value!r}")


__all__ = ["coerce_date"]
