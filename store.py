#!/usr/bin/env python3
"""PyArrow-backed storage for the last picker selection."""
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Iterable, List

import pyarrow as pa
import pyarrow.parquet as pq

from models import ConfigurationError, DEFAULT_MODE, SelectionMode, normalize_mode


_SCHEMA = pa.schema(
    [
        ("mode", pa.string()),
        ("date", pa.date32()),
    ]
)


class StorageError(Exception):
    pass


@dataclass
class SavedSelection:
    mode: SelectionMode = DEFAULT_MODE
    dates: List[date] = field(default_factory=list)


def _selection_to_table(selection: SavedSelection) -> pa.Table:
    # An empty selection still records its mode in a single null-date row
    dates: List[date | None] = list(selection.dates) or [None]
    return pa.Table.from_pydict(
        {
            "mode": [selection.mode] * len(dates),
            "date": dates,
        },
        schema=_SCHEMA,
    )


def _table_to_selection(table: pa.Table) -> SavedSelection:
    # Validate schema shape explicitly
    if table.schema != _SCHEMA:
        raise StorageError("Parquet schema mismatch for selection file")
    modes = table.column("mode").to_pylist()
    dates = table.column("date").to_pylist()
    if not modes:
        return SavedSelection()
    if len(set(modes)) != 1:
        raise StorageError("Selection file mixes several modes")
    try:
        mode = normalize_mode(modes[0])
    except ConfigurationError as exc:
        raise StorageError(str(exc)) from exc
    return SavedSelection(mode=mode, dates=[d for d in dates if d is not None])


def load_selection(path: Path) -> SavedSelection:
    if not path.exists():
        return SavedSelection()
    try:
        table = pq.read_table(path)
        return _table_to_selection(table)
    except StorageError:
        raise
    except Exception as exc:
        raise StorageError(f"Failed to read selection from {path}: {exc}") from exc


def _write_atomic(path: Path, table: pa.Table) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=str(path.parent), delete=False) as tmp:
        tmp_path = Path(tmp.name)
    try:
        pq.write_table(table, tmp_path)
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            try:
                os.remove(tmp_path)
            except OSError:
                pass


def save_selection(path: Path, mode: SelectionMode, dates: Iterable[date]) -> SavedSelection:
    # Pick order, duplicates dropped
    ordered = list(dict.fromkeys(dates))
    if mode == "single" and len(ordered) > 1:
        raise StorageError("Single mode selection can't hold multiple dates")
    selection = SavedSelection(mode=mode, dates=ordered)
    _write_atomic(path, _selection_to_table(selection))
    return selection


__all__ = [
    "SavedSelection",
    "StorageError",
    "load_selection",
    "save_selection",
]
