#!/usr/bin/env python3
"""Configuration loading and path resolution for daypick."""

from __future__ import annotations

import calendar
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from grid import DEFAULT_MONTH_NAME_FORMAT
from models import ConfigurationError, DEFAULT_MODE, SelectionMode, normalize_mode, parse_weekday
from paths import APP_DIR_NAME, app_data_dir, ensure_dir, xdg_config_home


@dataclass
class Config:
    first_weekday: int = calendar.MONDAY
    mode: SelectionMode = DEFAULT_MODE
    months: int = 12
    month_name_format: str = DEFAULT_MONTH_NAME_FORMAT
    selection_path: Path = Path("selection.parquet")


DEFAULT_SELECTION_FILENAME = "selection.parquet"
CONFIG_FILENAME = "config.json"


def config_path() -> Path:
    return (xdg_config_home() / APP_DIR_NAME / CONFIG_FILENAME).expanduser()


def _read_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    raw_text = path.read_text()
    try:
        raw = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            raw = json.loads(_strip_trailing_commas(raw_text))
        except json.JSONDecodeError:
            return {}
    return raw if isinstance(raw, dict) else {}


def load_config(path: Path | None = None) -> Config:
    """Load config from the XDG path, falling back to defaults.

    Unreadable JSON falls back to defaults. Values that parse but make no
    sense (an unknown mode, a weekday of 9) raise ConfigurationError.
    """

    raw = _read_raw(path or config_path())

    months = raw.get("months", 12)
    if isinstance(months, bool) or not isinstance(months, int) or months < 1:
        raise ConfigurationError(f"'months' must be a positive integer, got {months!r}")

    month_name_format = raw.get("month_name_format") or DEFAULT_MONTH_NAME_FORMAT
    if not isinstance(month_name_format, str):
        raise ConfigurationError("'month_name_format' must be a string")

    selection_path = Path(
        raw.get("selection_path") or app_data_dir() / DEFAULT_SELECTION_FILENAME
    ).expanduser()
    ensure_dir(selection_path.parent)

    return Config(
        first_weekday=parse_weekday(raw.get("first_weekday", calendar.MONDAY)),
        mode=normalize_mode(raw.get("mode", DEFAULT_MODE)),
        months=months,
        month_name_format=month_name_format,
        selection_path=selection_path,
    )


def _strip_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


__all__ = ["Config", "load_config", "config_path", "CONFIG_FILENAME"]
