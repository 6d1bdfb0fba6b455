#!/usr/bin/env python3
"""Orchestrator for the daypick terminal UI."""
from __future__ import annotations

import curses
import logging
import sys
from datetime import date
from typing import List, Optional

from config import Config
from date_utils import add_months
from events import DateAccepted, InvalidDateSelected
from help_content import HELP_LINES
from keys import (
    KEY_CAP_Q,
    KEY_CTRL_H,
    KEY_CTRL_L,
    KEY_ESC,
    KEY_H,
    KEY_HELP,
    KEY_J,
    KEY_K,
    KEY_L,
    KEY_MODE,
    KEY_NEXT_MONTH,
    KEY_PREV_MONTH,
    KEY_Q,
    KEY_TODAY,
    SELECT_KEYS,
)
from models import SELECTION_MODES, SelectionMode
from picker import CalendarPicker, PickerOptions, ScrollHint
from state import AppState
from store import SavedSelection, StorageError, load_selection, save_selection
from ui_base import draw_bar, draw_centered_box
from view_picker import PickerView

logger = logging.getLogger(__name__)

FULL_DATE_FORMAT = "%A, %B %d, %Y"


def initial_dates(saved: SavedSelection, mode: SelectionMode) -> List[date]:
    """Dates worth replaying into a fresh picker running in ``mode``."""
    if saved.mode != mode or not saved.dates:
        return []
    if mode == "range":
        lo, hi = min(saved.dates), max(saved.dates)
        return [lo] if lo == hi else [lo, hi]
    return list(saved.dates)


class Orchestrator:
    """Owns the curses lifecycle and acts as the picker's host."""

    def __init__(
        self,
        config: Config,
        *,
        min_date: Optional[date] = None,
        max_date: Optional[date] = None,
        mode: Optional[SelectionMode] = None,
        today: Optional[date] = None,
    ) -> None:
        self.config = config
        self.state = AppState()
        self.picker = CalendarPicker(
            host=self,
            today=today,
            first_weekday=config.first_weekday,
            month_name_format=config.month_name_format,
        )
        today = self.picker.today
        self.min_date = min_date or today
        self.max_date = max_date or add_months(self.min_date, config.months)
        self.mode: SelectionMode = mode or config.mode
        self.state.cursor_date = today

    # Setup
    def setup(self) -> None:
        saved = load_selection(self.config.selection_path)
        initializer = self.picker.init(self.min_date, self.max_date).in_mode(self.mode)
        dates = initial_dates(saved, self.mode)
        if dates:
            initializer.with_selected_dates(dates)
        self._follow_hint(initializer.scroll_hint)
        if self.picker.grid.month_index_of(self.state.cursor_date) is None:
            self.state.month_index = 0
            self.state.cursor_date = self.picker.grid.bounds.min_date

    def save(self) -> None:
        save_selection(self.config.selection_path, self.picker.mode, self.picker.selection_order)

    def run(self) -> int:
        try:
            self.setup()
        except StorageError as exc:
            print(f"Storage error: {exc}", file=sys.stderr)
            return 1

        try:
            curses.wrapper(self._curses_main)
        except curses.error:
            return 1

        try:
            self.save()
        except StorageError as exc:
            print(f"Storage error: {exc}", file=sys.stderr)
            return 1
        return 0

    def _curses_main(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        curses.curs_set(0)
        stdscr.timeout(100)
        self._draw(stdscr)

        while self.step(stdscr.getch()):
            if self.state.dirty:
                self._draw(stdscr)

    def step(self, ch: int) -> bool:
        """Feed one key to the UI. Returns False when the user quits."""
        if ch in (-1, curses.ERR):
            return True
        if ch in (KEY_Q, KEY_CAP_Q) and self.state.overlay == "none":
            return False
        if self.handle_key(ch):
            self.state.dirty = True
        return True

    # PickerHost
    def notify_changed(self) -> None:
        self.state.dirty = True

    def on_invalid_date(self, event: InvalidDateSelected) -> None:
        bounds = self.picker.grid.bounds
        self.state.overlay = "error"
        self.state.overlay_message = (
            f"{event.date.strftime(FULL_DATE_FORMAT)} can't be selected. "
            f"Pick a date from {bounds.min_date.strftime(FULL_DATE_FORMAT)} "
            f"up to (not including) {bounds.max_date.strftime(FULL_DATE_FORMAT)}."
        )

    def on_date_selected(self, event: DateAccepted) -> None:
        logger.debug("Selected %s", event.date)

    def request_scroll(self, month_index: int) -> None:
        self.state.pending_scrolls.append(month_index)

    # Rendering
    def _draw(self, stdscr: "curses.window") -> None:  # type: ignore[name-defined]
        self._consume_scrolls()
        stdscr.erase()
        draw_bar(stdscr, 0, f"daypick: {self._selection_summary()}")
        draw_bar(stdscr, -1, "q: quit   ?: help   hjkl: move   [ ]: month   Enter: select   m: mode")

        view = PickerView(self.picker.grid)
        view.render(stdscr, self.state.month_index, self.state.cursor_date, self.picker.mode)

        if self.state.overlay == "help":
            draw_centered_box(stdscr, [*HELP_LINES, "", "Esc to dismiss"])
        elif self.state.overlay in ("error", "message"):
            draw_centered_box(stdscr, [self.state.overlay_message, "", "Press any key to dismiss"])

        stdscr.refresh()
        self.state.dirty = False

    def _selection_summary(self) -> str:
        dates = self.picker.selected_dates
        if not dates:
            return "nothing selected"
        if self.picker.mode == "range" and len(dates) > 1:
            return f"{dates[0]:%Y-%m-%d} to {dates[-1]:%Y-%m-%d} ({len(dates)} days)"
        shown = ", ".join(f"{d:%Y-%m-%d}" for d in dates[:4])
        if len(dates) > 4:
            shown += f", … (+{len(dates) - 4})"
        return shown

    def _consume_scrolls(self) -> None:
        if not self.state.pending_scrolls:
            return
        target = self.state.pending_scrolls[-1]
        self.state.pending_scrolls.clear()
        if 0 <= target < len(self.picker.months):
            self.state.month_index = target
            month = self.picker.months[target]
            if self.picker.grid.month_index_of(self.state.cursor_date) != target:
                self.state.cursor_date = month.first_day

    def _follow_hint(self, hint: ScrollHint) -> None:
        if hint.month_index is not None:
            self.request_scroll(hint.month_index)
        self._consume_scrolls()

    # Key handling
    def handle_key(self, ch: int) -> bool:
        if self.state.overlay == "help":
            if ch in (KEY_ESC, KEY_HELP):
                self.state.overlay = "none"
                return True
            # Allow other keys to pass to main flow too
        elif self.state.overlay in ("error", "message"):
            self.state.overlay = "none"
            return True

        if ch == KEY_HELP:
            self.state.overlay = "help"
            return True
        if ch == KEY_ESC:
            self.state.overlay = "none"
            return True
        if ch == KEY_TODAY:
            return self._move_cursor(self.picker.today)
        if ch == KEY_MODE:
            return self._cycle_mode()
        if ch in SELECT_KEYS:
            self.picker.request_select(self.state.cursor_date)
            self._consume_scrolls()
            return True

        view = PickerView(self.picker.grid)
        cursor = self.state.cursor_date
        if ch == KEY_H:
            return self._move_cursor(view.move_day(cursor, -1))
        if ch == KEY_L:
            return self._move_cursor(view.move_day(cursor, +1))
        if ch == KEY_J:
            return self._move_cursor(view.move_week(cursor, +1))
        if ch == KEY_K:
            return self._move_cursor(view.move_week(cursor, -1))
        if ch in (KEY_PREV_MONTH, KEY_CTRL_H):
            return self._move_cursor(view.move_month(cursor, -1))
        if ch in (KEY_NEXT_MONTH, KEY_CTRL_L):
            return self._move_cursor(view.move_month(cursor, +1))
        return False

    def _move_cursor(self, target: date) -> bool:
        idx = self.picker.grid.month_index_of(target)
        if idx is None:
            return False
        self.state.cursor_date = target
        self.state.month_index = idx
        return True

    def _cycle_mode(self) -> bool:
        current = SELECTION_MODES.index(self.picker.mode)
        next_mode = SELECTION_MODES[(current + 1) % len(SELECTION_MODES)]
        state = self.picker.configure(PickerOptions(mode=next_mode))
        self.picker.apply(state)
        self.mode = next_mode
        self.state.overlay = "message"
        self.state.overlay_message = f"Selection mode: {next_mode}"
        return True


__all__ = ["Orchestrator", "initial_dates"]
