#!/usr/bin/env python3
"""Date predicates shared by the grid builder and the selection controller."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from models import Month


def is_same_date(a: date, b: date) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def is_same_month(day: date, month: Month) -> bool:
    return day.month == month.month and day.year == month.year


def is_between(day: date, lo: date, hi: date) -> bool:
    """True when ``lo <= day < hi``."""
    return lo <= day < hi


def month_index(year: int, month: int) -> int:
    """Linear month number, comparable across year boundaries."""
    return year * 12 + (month - 1)


def add_months(day: date, delta_months: int) -> date:
    year = day.year + ((day.month - 1 + delta_months) // 12)
    month = (day.month - 1 + delta_months) % 12 + 1
    # Clamp day to end of target month
    _, max_day = calendar.monthrange(year, month)
    return date(year, month, min(day.day, max_day))


def exclusive_last_day(max_date: date) -> date:
    """Last day covered by an exclusive upper bound."""
    return max_date - timedelta(days=1)


def start_of_week(day: date, first_weekday: int) -> date:
    return day - timedelta(days=(day.weekday() - first_weekday) % 7)


__all__ = [
    "is_same_date",
    "is_same_month",
    "is_between",
    "month_index",
    "add_months",
    "exclusive_last_day",
    "start_of_week",
]
