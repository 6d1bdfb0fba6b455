#!/usr/bin/env python3
"""Public configuration surface for the date picker."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, List, Literal, Optional, Sequence

from date_utils import is_same_month
from events import NullHost, PickerHost
from grid import DEFAULT_MONTH_NAME_FORMAT, Grid, build_grid
from models import (
    Cell,
    ConfigurationError,
    DEFAULT_MODE,
    Month,
    SelectionMode,
    normalize_date,
    normalize_mode,
    parse_weekday,
)
from selection import (
    SelectedDay,
    SelectionController,
    SelectionState,
    apply_selection,
    empty_selection,
    selected_dates_of,
)

logger = logging.getLogger(__name__)

ScrollReason = Literal["selected", "today", "none"]


@dataclass(frozen=True)
class PickerOptions:
    mode: SelectionMode = DEFAULT_MODE
    selected_dates: Sequence[date] = ()


@dataclass(frozen=True)
class ScrollHint:
    month_index: Optional[int]
    reason: ScrollReason = "none"


class CalendarPicker:
    """Grid plus selection, configured in two explicit phases.

    ``configure`` turns options into a selection state without touching the
    picker; ``apply`` installs it and returns where the host should scroll.
    """

    def __init__(
        self,
        *,
        host: Optional[PickerHost] = None,
        is_selectable: Optional[Callable[[date], bool]] = None,
        today: Optional[date] = None,
        first_weekday: int = calendar.MONDAY,
        month_name_format: str = DEFAULT_MONTH_NAME_FORMAT,
    ) -> None:
        self.host: PickerHost = host or NullHost()
        self.is_selectable = is_selectable
        self._today = today
        self.first_weekday = parse_weekday(first_weekday)
        self.month_name_format = month_name_format
        self._controller: Optional[SelectionController] = None

    # Setup
    def init(self, min_date: object, max_date: object) -> "Initializer":
        """Build the grid for ``[min_date, max_date)`` and reset to single mode.

        On invalid bounds nothing changes and the previous grid stays in place.
        """
        grid = build_grid(
            min_date,
            max_date,
            today=self.today,
            first_weekday=self.first_weekday,
            month_name_format=self.month_name_format,
        )
        self._controller = SelectionController(
            grid,
            mode=DEFAULT_MODE,
            is_selectable=self.is_selectable,
            host=self.host,
        )
        self.host.notify_changed()
        return Initializer(self)

    def configure(self, options: PickerOptions) -> SelectionState:
        mode = normalize_mode(options.mode)
        days = [normalize_date(d) for d in options.selected_dates]
        if mode == "single" and len(days) > 1:
            raise ConfigurationError("Single mode can't be used with multiple selected dates")

        controller = self.controller
        state = empty_selection(mode)
        for day in days:
            index = controller.grid.find_selectable(day)
            if index is None or not controller.is_selectable(day):
                logger.warning("Skipping initial date %s: not selectable", day)
                continue
            state = apply_selection(state, SelectedDay(day, index), controller.grid)
        return state

    def apply(self, state: SelectionState) -> ScrollHint:
        self.controller.install(state)
        return self.scroll_hint()

    def scroll_hint(self) -> ScrollHint:
        """First month holding a selected date, else today's month, else nothing."""
        grid = self.grid
        for idx, month in enumerate(grid.months):
            if any(is_same_month(d, month) for d in selected_dates_of(self.controller.state)):
                return ScrollHint(idx, "selected")
        today_idx = grid.month_index_of(grid.today)
        if today_idx is not None:
            return ScrollHint(today_idx, "today")
        return ScrollHint(None, "none")

    def set_locale(self, first_weekday: object) -> None:
        """Rebuild the weeks for another first weekday, keeping the selection."""
        weekday = parse_weekday(first_weekday)
        old = self.grid
        grid = build_grid(
            old.bounds.min_date,
            old.bounds.max_date,
            today=old.today,
            first_weekday=weekday,
            month_name_format=self.month_name_format,
        )
        self.first_weekday = weekday
        self.controller.rebind(grid)

    # Accessors
    @property
    def today(self) -> date:
        return self._today or date.today()

    @property
    def controller(self) -> SelectionController:
        if self._controller is None:
            raise ConfigurationError(
                "Must have at least one month to display. Did you forget to call init()?"
            )
        return self._controller

    @property
    def grid(self) -> Grid:
        return self.controller.grid

    @property
    def months(self) -> List[Month]:
        return self.grid.months

    @property
    def mode(self) -> SelectionMode:
        return self.controller.mode

    @property
    def selected_dates(self) -> List[date]:
        return self.controller.selected_dates

    @property
    def selected_date(self) -> Optional[date]:
        return self.controller.selected_date

    @property
    def selection_order(self) -> List[date]:
        """Selected dates in the order they were picked."""
        return selected_dates_of(self.controller.state)

    @property
    def selected_cells(self) -> List[Cell]:
        return self.controller.selected_cells

    # Interaction
    def request_select(self, day: object) -> bool:
        return self.controller.request_select(day)

    def select_date(self, day: object) -> bool:
        return self.controller.select_date(day)


class Initializer:
    """Fluent wrapper over configure/apply returned by ``CalendarPicker.init``."""

    def __init__(self, picker: CalendarPicker) -> None:
        self._picker = picker
        self.scroll_hint = ScrollHint(None)

    def in_mode(self, mode: SelectionMode) -> "Initializer":
        state = self._picker.configure(PickerOptions(mode=mode))
        return self._apply(state)

    def with_selected_date(self, selected: date) -> "Initializer":
        return self.with_selected_dates([selected])

    def with_selected_dates(self, selected: Iterable[date]) -> "Initializer":
        options = PickerOptions(mode=self._picker.mode, selected_dates=tuple(selected))
        return self._apply(self._picker.configure(options))

    def with_locale(self, first_weekday: object) -> "Initializer":
        self._picker.set_locale(first_weekday)
        self.scroll_hint = self._picker.scroll_hint()
        return self

    def _apply(self, state: SelectionState) -> "Initializer":
        self.scroll_hint = self._picker.apply(state)
        if self.scroll_hint.month_index is not None:
            self._picker.host.request_scroll(self.scroll_hint.month_index)
        return self


__all__ = [
    "CalendarPicker",
    "Initializer",
    "PickerOptions",
    "ScrollHint",
    "ScrollReason",
]
