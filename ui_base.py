#!/usr/bin/env python3
"""Basic UI helpers for curses rendering."""

from __future__ import annotations

import curses
from typing import Iterable


def safe_addnstr(
    win: "curses.window",  # type: ignore[name-defined]
    y: int,
    x: int,
    text: str,
    width: int,
    attr: int = 0,
) -> None:
    """Write clipped text, ignoring writes that land past the window edge."""
    if width <= 0:
        return
    try:
        win.addnstr(y, x, text, width, attr)
    except curses.error:
        pass


def draw_bar(stdscr: "curses.window", row: int, text: str, attr: int = 0) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    if w <= 0 or h <= 0:
        return
    row = h - 1 if row < 0 else row
    safe_addnstr(stdscr, row, 0, text.ljust(max(1, w - 1)), max(0, w - 1), attr)


def draw_centered_box(stdscr: "curses.window", lines: Iterable[str]) -> None:  # type: ignore[name-defined]
    h, w = stdscr.getmaxyx()
    lines_list = list(lines) or [""]
    win_h = min(len(lines_list) + 2, h - 2)
    win_w = min(max(len(line) for line in lines_list) + 4, w - 2)
    if win_h < 3 or win_w < 5:
        return
    win = stdscr.derwin(win_h, win_w, (h - win_h) // 2, (w - win_w) // 2)
    win.erase()
    win.border()
    for idx, line in enumerate(lines_list[: win_h - 2], start=1):
        safe_addnstr(win, idx, 2, line, win_w - 4)
    win.refresh()


def clamp(value: int, min_value: int, max_value: int) -> int:
    return max(min_value, min(value, max_value))


__all__ = ["safe_addnstr", "draw_bar", "draw_centered_box", "clamp"]
