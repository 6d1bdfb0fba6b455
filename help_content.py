"""Help and cheatsheet content for the daypick TUI."""

from __future__ import annotations

HELP_LINES: tuple[str, ...] = (
    "daypick help",
    "",
    "Modes",
    "",
    "single       one date at a time",
    "multi        toggle any number of dates",
    "range        first tap starts, second tap ends the range",
    "",
    "Shortcuts",
    "",
    "q            quit and save the selection",
    "?            toggle this help",
    "t            jump to today",
    "hjkl         move the cursor by day/week",
    "[ / ]        prev/next month (also Ctrl+h/l)",
    "Enter/Space  select the date under the cursor",
    "m            cycle selection mode (clears selection)",
    "Esc          dismiss overlays",
)

__all__ = ["HELP_LINES"]
