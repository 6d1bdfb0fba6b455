#!/usr/bin/env python3
"""Selection state and the controller that applies taps to it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple, Union

from events import DateAccepted, InvalidDateSelected, NullHost, PickerHost
from grid import Grid, reannotate
from models import Cell, CellIndex, DEFAULT_MODE, SelectionMode, normalize_date, normalize_mode

logger = logging.getLogger(__name__)


class SelectedDay(NamedTuple):
    day: date
    index: CellIndex


@dataclass(frozen=True)
class SingleSelection:
    current: Optional[SelectedDay] = None
    mode: SelectionMode = "single"

    @property
    def entries(self) -> Tuple[SelectedDay, ...]:
        return (self.current,) if self.current is not None else ()


@dataclass(frozen=True)
class MultiSelection:
    chosen: Tuple[SelectedDay, ...] = ()
    mode: SelectionMode = "multi"

    @property
    def entries(self) -> Tuple[SelectedDay, ...]:
        return self.chosen


@dataclass(frozen=True)
class RangeSelection:
    anchors: Tuple[SelectedDay, ...] = ()
    span: Tuple[SelectedDay, ...] = ()
    mode: SelectionMode = "range"

    @property
    def entries(self) -> Tuple[SelectedDay, ...]:
        return self.anchors + self.span


SelectionState = Union[SingleSelection, MultiSelection, RangeSelection]


def empty_selection(mode: SelectionMode) -> SelectionState:
    mode = normalize_mode(mode)
    if mode == "multi":
        return MultiSelection()
    if mode == "range":
        return RangeSelection()
    return SingleSelection()


def selected_dates_of(state: SelectionState) -> List[date]:
    """Dates in insertion order."""
    return [entry.day for entry in state.entries]


def _apply_single(state: SingleSelection, pick: SelectedDay, grid: Grid) -> SingleSelection:
    return SingleSelection(current=pick)


def _apply_multi(state: MultiSelection, pick: SelectedDay, grid: Grid) -> MultiSelection:
    remaining = tuple(entry for entry in state.chosen if entry.day != pick.day)
    if len(remaining) != len(state.chosen):
        return MultiSelection(chosen=remaining)
    return MultiSelection(chosen=state.chosen + (pick,))


def _expand(first: SelectedDay, last: SelectedDay, grid: Grid) -> Tuple[SelectedDay, ...]:
    span: List[SelectedDay] = []
    seen = set()
    for index, cell in grid.iter_cells():
        if not cell.is_selectable or not first.day < cell.date < last.day:
            continue
        if cell.date in seen:
            continue
        seen.add(cell.date)
        span.append(SelectedDay(cell.date, index))
    return tuple(span)


def _apply_range(state: RangeSelection, pick: SelectedDay, grid: Grid) -> RangeSelection:
    if len(state.entries) > 1:
        return RangeSelection(anchors=(pick,))
    if not state.anchors:
        return RangeSelection(anchors=(pick,))

    start = state.anchors[0]
    if pick.day < start.day:
        return RangeSelection(anchors=(pick,))
    if pick.day == start.day:
        return state
    return RangeSelection(anchors=(start, pick), span=_expand(start, pick, grid))


_APPLIERS: Dict[type, Callable[..., SelectionState]] = {
    SingleSelection: _apply_single,
    MultiSelection: _apply_multi,
    RangeSelection: _apply_range,
}


def apply_selection(state: SelectionState, pick: SelectedDay, grid: Grid) -> SelectionState:
    """Return the state that results from selecting ``pick``; ``state`` is untouched."""
    return _APPLIERS[type(state)](state, pick, grid)


def remap_selection(state: SelectionState, grid: Grid) -> SelectionState:
    """Re-resolve cell indices against a rebuilt grid, dropping unreachable dates."""

    def _remap(entries: Tuple[SelectedDay, ...]) -> Tuple[SelectedDay, ...]:
        out: List[SelectedDay] = []
        for entry in entries:
            index = grid.find_selectable(entry.day)
            if index is not None:
                out.append(SelectedDay(entry.day, index))
        return tuple(out)

    if isinstance(state, SingleSelection):
        remapped = _remap(state.entries)
        return SingleSelection(current=remapped[0] if remapped else None)
    if isinstance(state, MultiSelection):
        return MultiSelection(chosen=_remap(state.chosen))
    anchors = _remap(state.anchors)
    if len(anchors) != len(state.anchors):
        return RangeSelection(anchors=anchors[:1])
    return replace(state, anchors=anchors, span=_remap(state.span))


def _always_selectable(day: date) -> bool:
    return True


class SelectionController:
    """Owns the selection for one grid and applies taps to it."""

    def __init__(
        self,
        grid: Grid,
        *,
        mode: SelectionMode = DEFAULT_MODE,
        is_selectable: Optional[Callable[[date], bool]] = None,
        host: Optional[PickerHost] = None,
    ) -> None:
        self._grid = grid
        self._state: SelectionState = empty_selection(mode)
        self.is_selectable = is_selectable or _always_selectable
        self.host: PickerHost = host or NullHost()

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def mode(self) -> SelectionMode:
        return self._state.mode

    @property
    def selected_dates(self) -> List[date]:
        """Selected dates, ascending."""
        return sorted(selected_dates_of(self._state))

    @property
    def selected_date(self) -> Optional[date]:
        """The first date that was selected, which is not necessarily the earliest."""
        entries = self._state.entries
        return entries[0].day if entries else None

    @property
    def selected_cells(self) -> List[Cell]:
        return [self._grid.cell(entry.index) for entry in self._state.entries]

    def set_mode(self, mode: SelectionMode) -> None:
        self._state = empty_selection(mode)
        self._refresh()

    def install(self, state: SelectionState) -> None:
        self._state = state
        self._refresh()

    def rebind(self, grid: Grid) -> None:
        """Switch to a rebuilt grid, carrying the current selection over."""
        self._grid = grid
        self._state = remap_selection(self._state, grid)
        self._refresh()

    def is_valid(self, day: date) -> bool:
        return self._grid.bounds.contains(day) and self.is_selectable(day)

    def request_select(self, day: object) -> bool:
        """Handle a tap on ``day``. Returns True when the date ends up selected."""
        day = normalize_date(day)
        index = self._grid.find_selectable(day) if self.is_valid(day) else None
        if index is None:
            logger.info("Rejected selection of %s outside %s..%s", day, *self._grid.bounds)
            self.host.on_invalid_date(InvalidDateSelected(day))
            return False

        accepted = self._select(SelectedDay(day, index))
        if accepted:
            self.host.on_date_selected(DateAccepted(day))
        return accepted

    def select_date(self, day: object) -> bool:
        """Programmatic selection; scrolls to the containing month when accepted."""
        day = normalize_date(day)
        index = self._grid.find_selectable(day)
        if index is None or not self.is_selectable(day):
            return False

        accepted = self._select(SelectedDay(day, index))
        if accepted:
            self.host.request_scroll(index.month)
        return accepted

    def _select(self, pick: SelectedDay) -> bool:
        self._state = apply_selection(self._state, pick, self._grid)
        self._refresh()
        return pick.day in selected_dates_of(self._state)

    def _refresh(self) -> None:
        reannotate(self._grid, selected_dates_of(self._state))
        self.host.notify_changed()


__all__ = [
    "SelectedDay",
    "SingleSelection",
    "MultiSelection",
    "RangeSelection",
    "SelectionState",
    "SelectionController",
    "empty_selection",
    "selected_dates_of",
    "apply_selection",
    "remap_selection",
]
