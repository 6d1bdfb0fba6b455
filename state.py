#!/usr/bin/env python3
"""App state container for the daypick terminal UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Literal

OverlayKind = Literal["none", "help", "error", "message"]


@dataclass
class AppState:
    overlay: OverlayKind = "none"
    overlay_message: str = ""
    cursor_date: date = field(default_factory=lambda: date.today())
    month_index: int = 0

    # Scroll intents received from the picker; the newest one wins
    pending_scrolls: List[int] = field(default_factory=list)
    dirty: bool = True


__all__ = ["AppState", "OverlayKind"]
