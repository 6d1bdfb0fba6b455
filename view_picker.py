#!/usr/bin/env python3
"""Month grid rendering for the picker."""

from __future__ import annotations

import calendar
import curses
from datetime import date, timedelta
from typing import List

from date_utils import add_months
from grid import Grid
from models import Cell, SelectionMode
from ui_base import clamp, safe_addnstr

_RANGE_MARKS = {"none": " ", "first": "[", "middle": "-", "last": "]"}


def weekday_labels(first_weekday: int) -> List[str]:
    return [calendar.day_abbr[(first_weekday + offset) % 7] for offset in range(7)]


def cell_text(cell: Cell, width: int) -> str:
    if not cell.is_current_month:
        return " " * width
    mark = _RANGE_MARKS[cell.range_state] if cell.is_selected else " "
    return f"{cell.value:2d}{mark}"[:width].ljust(width)


def cell_attr(cell: Cell, is_cursor: bool) -> int:
    attr = 0
    if not cell.is_current_month or not cell.is_selectable:
        attr |= curses.A_DIM
    if cell.is_today:
        attr |= curses.A_BOLD
    if cell.is_selected:
        attr |= curses.A_REVERSE
    if is_cursor:
        attr |= curses.A_UNDERLINE
    return attr


class PickerView:
    CELL_WIDTH = 5
    MIN_CELL_WIDTH = 3

    def __init__(self, grid: Grid):
        self.grid = grid

    def render(
        self,
        stdscr: "curses.window",  # type: ignore[name-defined]
        month_index: int,
        cursor_date: date,
        mode: SelectionMode,
    ) -> None:
        h, w = stdscr.getmaxyx()
        body_h = h - 1
        if body_h <= 2 or w <= 0 or not self.grid.months:
            return

        month_index = clamp(month_index, 0, len(self.grid.months) - 1)
        month = self.grid.months[month_index]
        position = f"{month_index + 1}/{len(self.grid.months)}"
        title = f"{month.label}   [{mode}]   {position}"
        safe_addnstr(stdscr, 1, 0, title, max(0, w - 1), curses.A_BOLD)

        cell_w = self.CELL_WIDTH
        if cell_w * 7 > w:
            cell_w = max(self.MIN_CELL_WIDTH, w // 7)

        header_y = 3
        for idx, name in enumerate(weekday_labels(self.grid.first_weekday)):
            safe_addnstr(stdscr, header_y, idx * cell_w, name[:cell_w].ljust(cell_w), cell_w, curses.A_DIM)

        for row_idx, week in enumerate(self.grid.weeks[month_index]):
            row_y = header_y + 1 + row_idx
            if row_y >= body_h:
                break
            for col_idx, cell in enumerate(week):
                is_cursor = cell.is_current_month and cell.date == cursor_date
                safe_addnstr(
                    stdscr,
                    row_y,
                    col_idx * cell_w,
                    cell_text(cell, cell_w),
                    cell_w,
                    cell_attr(cell, is_cursor),
                )

    def move_day(self, cursor: date, delta_days: int) -> date:
        return cursor + timedelta(days=delta_days)

    def move_week(self, cursor: date, delta_weeks: int) -> date:
        return cursor + timedelta(days=7 * delta_weeks)

    def move_month(self, cursor: date, delta_months: int) -> date:
        return add_months(cursor, delta_months)


__all__ = ["PickerView", "weekday_labels", "cell_text", "cell_attr"]
