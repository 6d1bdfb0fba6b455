#!/usr/bin/env python3
"""Key constants and mappings."""
from __future__ import annotations

# Key constants
KEY_Q = ord("q")
KEY_CAP_Q = ord("Q")
KEY_HELP = ord("?")
KEY_TODAY = ord("t")
KEY_MODE = ord("m")
KEY_ESC = 27
KEY_ENTER = 10
KEY_RETURN = 13
KEY_SPACE = ord(" ")

KEY_H = ord("h")
KEY_J = ord("j")
KEY_K = ord("k")
KEY_L = ord("l")

KEY_PREV_MONTH = ord("[")
KEY_NEXT_MONTH = ord("]")
KEY_CTRL_H = 8
KEY_CTRL_L = 12

SELECT_KEYS = (KEY_ENTER, KEY_RETURN, KEY_SPACE)


__all__ = [
    "KEY_Q",
    "KEY_CAP_Q",
    "KEY_HELP",
    "KEY_TODAY",
    "KEY_MODE",
    "KEY_ESC",
    "KEY_ENTER",
    "KEY_RETURN",
    "KEY_SPACE",
    "KEY_H",
    "KEY_J",
    "KEY_K",
    "KEY_L",
    "KEY_PREV_MONTH",
    "KEY_NEXT_MONTH",
    "KEY_CTRL_H",
    "KEY_CTRL_L",
    "SELECT_KEYS",
]
