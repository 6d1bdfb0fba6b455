#!/usr/bin/env python3
"""Month/week/day grid construction and cell classification."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Collection, Iterator, List, NamedTuple, Optional, Tuple

from date_utils import (
    exclusive_last_day,
    is_between,
    is_same_date,
    month_index,
    start_of_week,
)
from models import (
    Cell,
    CellIndex,
    InvalidRangeError,
    Month,
    RangeState,
    normalize_date,
)

logger = logging.getLogger(__name__)

DEFAULT_MONTH_NAME_FORMAT = "%B %Y"

Week = List[Cell]


class Bounds(NamedTuple):
    min_date: date
    max_date: date  # exclusive

    def contains(self, day: date) -> bool:
        return is_between(day, self.min_date, self.max_date)


@dataclass
class Grid:
    """Months and their weeks, kept as parallel arrays indexed together."""

    bounds: Bounds
    today: date
    first_weekday: int
    months: List[Month] = field(default_factory=list)
    weeks: List[List[Week]] = field(default_factory=list)

    def cell(self, index: CellIndex) -> Cell:
        return self.weeks[index.month][index.week][index.day]

    def iter_cells(self) -> Iterator[Tuple[CellIndex, Cell]]:
        for m_idx, month_weeks in enumerate(self.weeks):
            for w_idx, week in enumerate(month_weeks):
                for d_idx, cell in enumerate(week):
                    yield CellIndex(m_idx, w_idx, d_idx), cell

    def find_selectable(self, day: date) -> Optional[CellIndex]:
        """First selectable cell for ``day``, scanning months in order."""
        for index, cell in self.iter_cells():
            if cell.is_selectable and is_same_date(cell.date, day):
                return index
        return None

    def month_index_of(self, day: date) -> Optional[int]:
        for idx, month in enumerate(self.months):
            if month.month == day.month and month.year == day.year:
                return idx
        return None


class _SelectionView(NamedTuple):
    dates: frozenset
    lo: Optional[date]
    hi: Optional[date]


def _selection_view(selected: Collection[date]) -> _SelectionView:
    dates = frozenset(selected)
    if len(dates) > 1:
        return _SelectionView(dates, min(dates), max(dates))
    return _SelectionView(dates, None, None)


def _range_state(day: date, view: _SelectionView) -> RangeState:
    if view.lo is None or view.hi is None:
        return "none"
    if day == view.lo:
        return "first"
    if day == view.hi:
        return "last"
    if view.lo < day < view.hi:
        return "middle"
    return "none"


def _classify(day: date, month: Month, view: _SelectionView, today: date, bounds: Bounds) -> Cell:
    is_current_month = day.month == month.month and day.year == month.year
    return Cell(
        date=day,
        is_current_month=is_current_month,
        is_selectable=is_current_month and bounds.contains(day),
        is_selected=is_current_month and day in view.dates,
        is_today=is_same_date(day, today),
        value=day.day,
        range_state=_range_state(day, view),
    )


def classify_cell(
    day: date,
    month: Month,
    selected: Collection[date],
    today: date,
    bounds: Bounds,
) -> Cell:
    """Derive a cell's flags from its date, the selection and the bounds.

    Pure: the returned cell is new and nothing passed in is modified.
    """
    return _classify(day, month, _selection_view(selected), today, bounds)


def build_weeks(
    month: Month,
    first_weekday: int,
    *,
    selected: Collection[date] = (),
    today: date,
    bounds: Bounds,
) -> List[Week]:
    view = _selection_view(selected)
    target = month_index(month.year, month.month)
    cursor = start_of_week(month.first_day, first_weekday)

    weeks: List[Week] = []
    while month_index(cursor.year, cursor.month) <= target:
        logger.debug("Building week row starting at %s", cursor)
        week: Week = []
        for _ in range(7):
            week.append(_classify(cursor, month, view, today, bounds))
            cursor += timedelta(days=1)
        weeks.append(week)
    return weeks


def build_grid(
    min_date: object,
    max_date: object,
    *,
    selected: Collection[date] = (),
    today: Optional[date] = None,
    first_weekday: int = calendar.MONDAY,
    month_name_format: str = DEFAULT_MONTH_NAME_FORMAT,
) -> Grid:
    """Build every month between ``min_date`` and the exclusive ``max_date``."""
    lo = normalize_date(min_date, "min_date")
    hi = normalize_date(max_date, "max_date")
    if lo > hi:
        raise InvalidRangeError(f"min_date must be before max_date. min_date: {lo} max_date: {hi}")
    if lo == hi:
        raise InvalidRangeError(f"Date window is empty. min_date: {lo} max_date: {hi}")

    bounds = Bounds(lo, hi)
    today = today or date.today()
    grid = Grid(bounds=bounds, today=today, first_weekday=first_weekday)

    last_day = exclusive_last_day(hi)
    last_index = month_index(last_day.year, last_day.month)
    year, month_no = lo.year, lo.month
    while month_index(year, month_no) <= last_index:
        first_day = date(year, month_no, 1)
        month = Month(
            month=month_no,
            year=year,
            first_day=first_day,
            label=first_day.strftime(month_name_format),
        )
        logger.debug("Adding month %s", month)
        grid.months.append(month)
        grid.weeks.append(
            build_weeks(month, first_weekday, selected=selected, today=today, bounds=bounds)
        )
        month_no += 1
        if month_no > 12:
            year, month_no = year + 1, 1
    return grid


def reannotate(grid: Grid, selected: Collection[date]) -> None:
    """Recompute every cell's flags in place; months and weeks are untouched."""
    view = _selection_view(selected)
    for m_idx, month in enumerate(grid.months):
        for week in grid.weeks[m_idx]:
            for cell in week:
                fresh = _classify(cell.date, month, view, grid.today, grid.bounds)
                cell.is_current_month = fresh.is_current_month
                cell.is_selectable = fresh.is_selectable
                cell.is_selected = fresh.is_selected
                cell.is_today = fresh.is_today
                cell.value = fresh.value
                cell.range_state = fresh.range_state


__all__ = [
    "Bounds",
    "Grid",
    "Week",
    "DEFAULT_MONTH_NAME_FORMAT",
    "build_grid",
    "build_weeks",
    "classify_cell",
    "reannotate",
]
