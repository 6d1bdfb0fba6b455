#!/usr/bin/env python3
"""Core models and validation helpers for daypick."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, NamedTuple, Sequence

DATE_FMT = "%Y-%m-%d"


SelectionMode = Literal["single", "multi", "range"]
SELECTION_MODES: Sequence[SelectionMode] = (
    "single",
    "multi",
    "range",
)
DEFAULT_MODE: SelectionMode = "single"

RangeState = Literal["none", "first", "middle", "last"]

WEEKDAY_NAMES: Sequence[str] = tuple(name.lower() for name in calendar.day_name)


class ConfigurationError(Exception):
    pass


class InvalidRangeError(ConfigurationError):
    pass


@dataclass(frozen=True)
class Month:
    month: int
    year: int
    first_day: date
    label: str

    def __str__(self) -> str:
        return self.label


@dataclass
class Cell:
    date: date
    is_current_month: bool
    is_selectable: bool
    is_selected: bool
    is_today: bool
    value: int
    range_state: RangeState = "none"


class CellIndex(NamedTuple):
    month: int
    week: int
    day: int


def parse_date(value: str) -> date:
    value = value.strip()
    try:
        return datetime.strptime(value, DATE_FMT).date()
    except ValueError:
        pass

    # Accept ISO-8601 datetimes and drop the time component
    candidate = value[:-1] if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(candidate.replace("T", " ")).date()
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid date format: '{value}'. Expected YYYY-MM-DD"
        ) from exc


def normalize_date(value: object | None, label: str = "date") -> date:
    """Return ``value`` as a plain date (midnight, no time component)."""
    if value is None:
        raise ConfigurationError(f"{label} must not be None")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date(value)
    raise ConfigurationError(f"{label} must be a date, got {type(value).__name__}")


def normalize_mode(raw_mode: object | None) -> SelectionMode:
    if raw_mode is None:
        raise ConfigurationError("Missing selection mode")
    mode = str(raw_mode).strip().lower()
    if mode not in SELECTION_MODES:
        valid = ", ".join(SELECTION_MODES)
        raise ConfigurationError(f"Unknown selection mode '{mode}'. Expected one of: {valid}")
    return mode  # type: ignore[return-value]


def parse_weekday(raw: object) -> int:
    """Accept 0..6 (Monday=0) or an English weekday name or abbreviation."""
    if isinstance(raw, bool):
        raise ConfigurationError(f"Invalid weekday: {raw!r}")
    if isinstance(raw, int):
        if 0 <= raw <= 6:
            return raw
        raise ConfigurationError(f"Weekday must be between 0 and 6, got {raw}")
    if isinstance(raw, str):
        needle = raw.strip().lower()
        if needle.isdigit():
            return parse_weekday(int(needle))
        for idx, name in enumerate(WEEKDAY_NAMES):
            if needle and (needle == name or (len(needle) >= 2 and name.startswith(needle))):
                return idx
    raise ConfigurationError(f"Invalid weekday: {raw!r}")


def cell_to_jsonable(cell: Cell) -> dict:
    return {
        "date": cell.date.strftime(DATE_FMT),
        "current_month": cell.is_current_month,
        "selectable": cell.is_selectable,
        "selected": cell.is_selected,
        "today": cell.is_today,
        "value": cell.value,
        "range_state": cell.range_state,
    }


__all__ = [
    "Cell",
    "CellIndex",
    "ConfigurationError",
    "InvalidRangeError",
    "Month",
    "RangeState",
    "SelectionMode",
    "SELECTION_MODES",
    "DEFAULT_MODE",
    "DATE_FMT",
    "WEEKDAY_NAMES",
    "parse_date",
    "normalize_date",
    "normalize_mode",
    "parse_weekday",
    "cell_to_jsonable",
]
