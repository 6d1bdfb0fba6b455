#!/usr/bin/env python3
"""Events emitted by the picker core and the host contract that receives them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Protocol, Union


@dataclass(frozen=True)
class InvalidDateSelected:
    date: date


@dataclass(frozen=True)
class DateAccepted:
    date: date


PickerEvent = Union[InvalidDateSelected, DateAccepted]


class PickerHost(Protocol):
    """Whatever draws the picker.

    ``request_scroll`` is fire-and-forget: the core never waits for it and a host
    may drop it entirely.
    """

    def notify_changed(self) -> None: ...

    def on_invalid_date(self, event: InvalidDateSelected) -> None: ...

    def on_date_selected(self, event: DateAccepted) -> None: ...

    def request_scroll(self, month_index: int) -> None: ...


class NullHost:
    def notify_changed(self) -> None:
        pass

    def on_invalid_date(self, event: InvalidDateSelected) -> None:
        pass

    def on_date_selected(self, event: DateAccepted) -> None:
        pass

    def request_scroll(self, month_index: int) -> None:
        pass


@dataclass
class RecordingHost:
    """Host that just remembers what it was told."""

    events: List[PickerEvent] = field(default_factory=list)
    scrolls: List[int] = field(default_factory=list)
    changes: int = 0

    def notify_changed(self) -> None:
        self.changes += 1

    def on_invalid_date(self, event: InvalidDateSelected) -> None:
        self.events.append(event)

    def on_date_selected(self, event: DateAccepted) -> None:
        self.events.append(event)

    def request_scroll(self, month_index: int) -> None:
        self.scrolls.append(month_index)

    @property
    def invalid(self) -> List[InvalidDateSelected]:
        return [ev for ev in self.events if isinstance(ev, InvalidDateSelected)]

    @property
    def accepted(self) -> List[DateAccepted]:
        return [ev for ev in self.events if isinstance(ev, DateAccepted)]


__all__ = [
    "InvalidDateSelected",
    "DateAccepted",
    "PickerEvent",
    "PickerHost",
    "NullHost",
    "RecordingHost",
]
