import calendar
from datetime import date

import pytest

from config import Config
from keys import KEY_ENTER, KEY_ESC, KEY_H, KEY_HELP, KEY_L, KEY_MODE, KEY_NEXT_MONTH, KEY_PREV_MONTH, KEY_SPACE
from orchestrator import Orchestrator, initial_dates
from store import SavedSelection, load_selection


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        first_weekday=calendar.SUNDAY,
        mode="single",
        months=12,
        month_name_format="%B %Y",
        selection_path=tmp_path / "selection.parquet",
    )


def _make_orchestrator(config: Config, **kwargs) -> Orchestrator:
    kwargs.setdefault("min_date", date(2024, 1, 1))
    kwargs.setdefault("max_date", date(2024, 3, 1))
    kwargs.setdefault("today", date(2024, 1, 15))
    orchestrator = Orchestrator(config, **kwargs)
    orchestrator.setup()
    return orchestrator


def test_setup_scrolls_to_today(config) -> None:
    orchestrator = _make_orchestrator(config, today=date(2024, 2, 14))

    assert orchestrator.state.month_index == 1
    assert orchestrator.state.cursor_date == date(2024, 2, 14)


def test_setup_with_today_outside_window_starts_at_min(config) -> None:
    orchestrator = _make_orchestrator(config, today=date(2025, 6, 1))

    assert orchestrator.state.month_index == 0
    assert orchestrator.state.cursor_date == date(2024, 1, 1)


def test_cursor_moves_and_enter_selects(config) -> None:
    orchestrator = _make_orchestrator(config)

    assert orchestrator.handle_key(KEY_L)
    assert orchestrator.handle_key(KEY_ENTER)
    assert orchestrator.picker.selected_dates == [date(2024, 1, 16)]

    assert orchestrator.handle_key(KEY_NEXT_MONTH)
    assert orchestrator.state.cursor_date == date(2024, 2, 16)
    assert orchestrator.state.month_index == 1

    # March is outside the grid
    assert orchestrator.handle_key(KEY_NEXT_MONTH) is False
    assert orchestrator.state.cursor_date == date(2024, 2, 16)

    assert orchestrator.handle_key(KEY_PREV_MONTH)
    assert orchestrator.state.month_index == 0


def test_invalid_tap_shows_overlay_until_next_key(config) -> None:
    orchestrator = _make_orchestrator(config, min_date=date(2024, 1, 10))

    for _ in range(6):
        orchestrator.handle_key(KEY_H)
    assert orchestrator.state.cursor_date == date(2024, 1, 9)

    orchestrator.handle_key(KEY_SPACE)

    assert orchestrator.picker.selected_dates == []
    assert orchestrator.state.overlay == "error"
    assert "can't be selected" in orchestrator.state.overlay_message

    assert orchestrator.handle_key(KEY_L)
    assert orchestrator.state.overlay == "none"
    assert orchestrator.state.cursor_date == date(2024, 1, 9)


def test_help_overlay_toggles(config) -> None:
    orchestrator = _make_orchestrator(config)

    orchestrator.handle_key(KEY_HELP)
    assert orchestrator.state.overlay == "help"
    orchestrator.handle_key(KEY_ESC)
    assert orchestrator.state.overlay == "none"


def test_mode_key_cycles_and_clears(config) -> None:
    orchestrator = _make_orchestrator(config)
    orchestrator.handle_key(KEY_ENTER)

    orchestrator.handle_key(KEY_MODE)

    assert orchestrator.picker.mode == "multi"
    assert orchestrator.picker.selected_dates == []
    assert orchestrator.state.overlay == "message"


def test_save_and_restore_selection(config) -> None:
    orchestrator = _make_orchestrator(config, mode="range")
    orchestrator.picker.request_select(date(2024, 2, 5))
    orchestrator.picker.request_select(date(2024, 2, 8))
    orchestrator.save()

    saved = load_selection(config.selection_path)
    assert saved.mode == "range"
    assert len(saved.dates) == 4

    restored = _make_orchestrator(config, mode="range")
    assert restored.picker.selected_dates == sorted(saved.dates)
    assert restored.state.month_index == 1


def test_restore_skipped_when_mode_differs(config) -> None:
    orchestrator = _make_orchestrator(config, mode="multi")
    orchestrator.picker.request_select(date(2024, 1, 5))
    orchestrator.save()

    restored = _make_orchestrator(config, mode="single")
    assert restored.picker.selected_dates == []


def test_initial_dates_for_range_uses_endpoints() -> None:
    saved = SavedSelection(mode="range", dates=[date(2024, 1, 5), date(2024, 1, 6), date(2024, 1, 7)])

    assert initial_dates(saved, "range") == [date(2024, 1, 5), date(2024, 1, 7)]
    assert initial_dates(saved, "multi") == []
    assert initial_dates(SavedSelection(mode="range", dates=[date(2024, 1, 5)]), "range") == [date(2024, 1, 5)]


def test_multi_restore_keeps_first_picked_date(config) -> None:
    orchestrator = _make_orchestrator(config, mode="multi")
    orchestrator.picker.request_select(date(2024, 2, 20))
    orchestrator.picker.request_select(date(2024, 1, 3))
    orchestrator.save()

    restored = _make_orchestrator(config, mode="multi")

    assert restored.picker.selected_dates == [date(2024, 1, 3), date(2024, 2, 20)]
    assert restored.picker.selected_date == date(2024, 2, 20)


def test_step_marks_dirty_and_quits(config) -> None:
    orchestrator = _make_orchestrator(config)
    orchestrator.state.dirty = False

    assert orchestrator.step(-1)
    assert orchestrator.step(ord("x"))
    assert orchestrator.state.dirty is False

    assert orchestrator.step(KEY_L)
    assert orchestrator.state.dirty is True

    assert orchestrator.step(ord("q")) is False


def test_picker_changes_mark_host_dirty(config) -> None:
    orchestrator = _make_orchestrator(config)
    orchestrator.state.dirty = False

    assert orchestrator.picker.select_date(date(2024, 2, 2))

    assert orchestrator.state.dirty is True
    assert orchestrator.state.pending_scrolls == [1]
