#!/usr/bin/env python3
"""Thin entrypoint for daypick."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from config import Config, load_config
from date_utils import add_months
from events import RecordingHost
from models import DATE_FMT, ConfigurationError, SelectionMode, cell_to_jsonable, normalize_mode, parse_date
from orchestrator import Orchestrator, initial_dates
from paths import app_data_dir, ensure_dir
from picker import CalendarPicker
from store import StorageError, load_selection, save_selection

__version__ = "0.1.0"

LOG_FILENAME = "daypick.log"


@dataclass
class CliArgs:
    show_help: bool = False
    show_version: bool = False
    debug: bool = False
    print_only: bool = False
    min_date: Optional[date] = None
    max_date: Optional[date] = None
    mode: Optional[SelectionMode] = None
    select: List[date] = field(default_factory=list)


def _print_help() -> None:
    print(
        "daypick - terminal date picker\n\n"
        "Usage:\n"
        "  daypick                          Launch curses UI\n"
        "  daypick -h                       Show this help\n"
        "  daypick -v                       Show installed version\n"
        "  daypick -d                       Write debug log to the data directory\n"
        "  daypick --min YYYY-MM-DD         First selectable date (default: today)\n"
        "  daypick --max YYYY-MM-DD         Exclusive end date (default: min + configured months)\n"
        "  daypick --mode single|multi|range\n"
        "  daypick -s YYYY-MM-DD [-s ...]   Select dates without the UI and save them\n"
        "  daypick --print                  Print the saved selection as JSON\n"
    )


def parse_args(argv: Sequence[str]) -> CliArgs:
    args = CliArgs()

    def _value(idx: int, flag: str, what: str) -> str:
        if idx >= len(argv):
            raise ConfigurationError(f"{flag} requires {what}")
        return argv[idx]

    idx = 0
    while idx < len(argv):
        arg = argv[idx]
        if arg == "-h":
            args.show_help = True
        elif arg == "-v":
            args.show_version = True
        elif arg == "-d":
            args.debug = True
        elif arg == "--print":
            args.print_only = True
        elif arg == "--min":
            idx += 1
            args.min_date = parse_date(_value(idx, arg, "a date argument"))
        elif arg == "--max":
            idx += 1
            args.max_date = parse_date(_value(idx, arg, "a date argument"))
        elif arg == "--mode":
            idx += 1
            args.mode = normalize_mode(_value(idx, arg, "a mode argument"))
        elif arg == "-s":
            idx += 1
            args.select.append(parse_date(_value(idx, arg, "a date argument")))
        else:
            raise ConfigurationError(f"Unknown flag '{arg}'")
        idx += 1
    return args


def _configure_logging(debug: bool) -> None:
    if not debug:
        logging.basicConfig(level=logging.WARNING)
        return
    log_dir = app_data_dir()
    ensure_dir(log_dir)
    logging.basicConfig(
        filename=str(log_dir / LOG_FILENAME),
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_saved(config: Config) -> int:
    saved = load_selection(config.selection_path)
    print(json.dumps({"mode": saved.mode, "dates": [d.strftime(DATE_FMT) for d in sorted(saved.dates)]}))
    return 0


def run_headless(config: Config, args: CliArgs, *, today: Optional[date] = None) -> int:
    """Replay ``args.select`` as taps, save the result and print it."""
    host = RecordingHost()
    picker = CalendarPicker(
        host=host,
        today=today,
        first_weekday=config.first_weekday,
        month_name_format=config.month_name_format,
    )
    min_date = args.min_date or picker.today
    max_date = args.max_date or _default_max(min_date, config)
    mode = args.mode or config.mode
    initializer = picker.init(min_date, max_date).in_mode(mode)
    saved = load_selection(config.selection_path)
    restored = initial_dates(saved, mode)
    if restored:
        initializer.with_selected_dates(restored)

    for day in args.select:
        picker.request_select(day)

    for event in host.invalid:
        print(f"Invalid date: {event.date.strftime(DATE_FMT)}", file=sys.stderr)

    stored = save_selection(config.selection_path, picker.mode, picker.selection_order)
    cells = sorted(picker.selected_cells, key=lambda cell: cell.date)
    payload = {
        "mode": stored.mode,
        "dates": [d.strftime(DATE_FMT) for d in picker.selected_dates],
        "cells": [cell_to_jsonable(cell) for cell in cells],
    }
    print(json.dumps(payload))
    return 1 if host.invalid else 0


def _default_max(min_date: date, config: Config) -> date:
    return add_months(min_date, config.months)


def main(argv: list[str] | None = None) -> int:
    # Make ESC detection snappy inside curses.
    os.environ.setdefault("ESCDELAY", "25")

    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parse_args(argv)
    except ConfigurationError as exc:
        print(str(exc))
        return 1

    if args.show_version:
        print(__version__)
        return 0

    if args.show_help:
        _print_help()
        return 0

    _configure_logging(args.debug)

    try:
        config = load_config()
        if args.print_only:
            return _print_saved(config)
        if args.select:
            return run_headless(config, args)
        orchestrator = Orchestrator(
            config,
            min_date=args.min_date,
            max_date=args.max_date,
            mode=args.mode,
        )
        return orchestrator.run()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    except StorageError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
