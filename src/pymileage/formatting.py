"""Display helpers. These never touch stored data."""

from __future__ import annotations

import datetime as dt

from pymileage._constants import ITALIAN_MONTHS


def month_name(month: int) -> str:
    """Italian name of a zero-based *month* (``0`` → ``"gennaio"``)."""
    if not 0 <= month <= 11:
        raise ValueError(f"month must be between 0 and 11, got {month}")
    return ITALIAN_MONTHS[month]


def format_date(value: str | dt.date) -> str:
    """Render an ISO date as ``dd MMMM yyyy`` with Italian month names.

    ``"2024-03-10"`` → ``"10 marzo 2024"``. Datetime strings are accepted;
    only the calendar day is used. Raises :class:`ValueError` for strings
    that are not ISO dates.
    """
    if isinstance(value, dt.datetime):
        day = value.date()
    elif isinstance(value, dt.date):
        day = value
    else:
        text = value.strip()
        if "T" in text or " " in text:
            day = dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        else:
            day = dt.date.fromisoformat(text)
    return f"{day.day:02d} {ITALIAN_MONTHS[day.month - 1]} {day.year}"
