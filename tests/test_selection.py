import calendar
from datetime import date, timedelta

import pytest

from events import DateAccepted, InvalidDateSelected, RecordingHost
from grid import build_grid
from selection import (
    MultiSelection,
    RangeSelection,
    SelectedDay,
    SelectionController,
    apply_selection,
    remap_selection,
)


def _make_controller(mode: str = "single", **kwargs) -> tuple[SelectionController, RecordingHost]:
    grid = build_grid(
        date(2024, 1, 1),
        date(2024, 3, 1),
        today=date(2024, 1, 15),
        first_weekday=calendar.SUNDAY,
    )
    host = RecordingHost()
    return SelectionController(grid, mode=mode, host=host, **kwargs), host


def _cell(controller: SelectionController, day: date):
    return controller.grid.cell(controller.grid.find_selectable(day))


def _assert_in_sync(controller: SelectionController) -> None:
    cells = controller.selected_cells
    assert len(cells) == len(controller.selected_dates)
    assert sorted(cell.date for cell in cells) == controller.selected_dates
    assert all(cell.is_selected for cell in cells)


def test_single_mode_replaces_previous_date() -> None:
    controller, host = _make_controller("single")

    assert controller.request_select(date(2024, 1, 5))
    assert controller.request_select(date(2024, 1, 8))

    assert controller.selected_dates == [date(2024, 1, 8)]
    assert not _cell(controller, date(2024, 1, 5)).is_selected
    assert _cell(controller, date(2024, 1, 8)).is_selected
    assert [ev.date for ev in host.accepted] == [date(2024, 1, 5), date(2024, 1, 8)]
    _assert_in_sync(controller)


def test_multi_mode_toggle_deselects() -> None:
    controller, host = _make_controller("multi")

    assert controller.request_select(date(2024, 1, 5)) is True
    assert controller.request_select(date(2024, 1, 5)) is False

    assert controller.selected_dates == []
    assert controller.selected_cells == []
    assert not _cell(controller, date(2024, 1, 5)).is_selected
    assert host.accepted == [DateAccepted(date(2024, 1, 5))]
    assert host.invalid == []


def test_range_mode_expands_between_anchors() -> None:
    controller, _ = _make_controller("range")

    controller.request_select(date(2024, 1, 5))
    controller.request_select(date(2024, 1, 10))

    expected = [date(2024, 1, 5) + timedelta(days=n) for n in range(6)]
    assert controller.selected_dates == expected
    assert _cell(controller, date(2024, 1, 5)).range_state == "first"
    assert _cell(controller, date(2024, 1, 10)).range_state == "last"
    for day in expected[1:-1]:
        assert _cell(controller, day).range_state == "middle"
    assert _cell(controller, date(2024, 1, 11)).range_state == "none"
    assert not _cell(controller, date(2024, 1, 11)).is_selected
    _assert_in_sync(controller)


def test_range_across_month_boundary_has_no_duplicates() -> None:
    controller, _ = _make_controller("range")

    controller.request_select(date(2024, 1, 30))
    controller.request_select(date(2024, 2, 2))

    assert controller.selected_dates == [
        date(2024, 1, 30),
        date(2024, 1, 31),
        date(2024, 2, 1),
        date(2024, 2, 2),
    ]
    _assert_in_sync(controller)

    # The trailing Jan 31 cell shown in February's first week stays untouched
    feb_first_week = controller.grid.weeks[1][0]
    leading = [cell for cell in feb_first_week if cell.date == date(2024, 1, 31)][0]
    assert not leading.is_selected


def test_range_inversion_starts_new_anchor() -> None:
    controller, _ = _make_controller("range")

    controller.request_select(date(2024, 1, 10))
    assert controller.request_select(date(2024, 1, 3))

    assert controller.selected_dates == [date(2024, 1, 3)]
    assert not _cell(controller, date(2024, 1, 10)).is_selected
    assert _cell(controller, date(2024, 1, 3)).range_state == "none"


def test_range_third_tap_starts_over() -> None:
    controller, _ = _make_controller("range")

    controller.request_select(date(2024, 1, 5))
    controller.request_select(date(2024, 1, 10))
    controller.request_select(date(2024, 1, 20))

    assert controller.selected_dates == [date(2024, 1, 20)]
    assert all(cell.range_state == "none" for _, cell in controller.grid.iter_cells())
    _assert_in_sync(controller)


def test_range_tapping_sole_anchor_again_keeps_it() -> None:
    controller, _ = _make_controller("range")

    controller.request_select(date(2024, 1, 5))
    assert controller.request_select(date(2024, 1, 5)) is True

    assert controller.selected_dates == [date(2024, 1, 5)]
    _assert_in_sync(controller)


@pytest.mark.parametrize("day", [date(2023, 12, 31), date(2024, 3, 1), date(2024, 6, 1)])
def test_out_of_bounds_tap_is_reported_not_applied(day: date) -> None:
    controller, host = _make_controller("multi")
    controller.request_select(date(2024, 1, 5))
    changes = host.changes

    assert controller.request_select(day) is False

    assert controller.selected_dates == [date(2024, 1, 5)]
    assert host.invalid == [InvalidDateSelected(day)]
    assert host.changes == changes


def test_host_predicate_rejects_dates() -> None:
    controller, host = _make_controller("single", is_selectable=lambda d: d.weekday() < 5)

    assert controller.request_select(date(2024, 1, 6)) is False  # Saturday
    assert controller.selected_dates == []
    assert host.invalid == [InvalidDateSelected(date(2024, 1, 6))]

    assert controller.request_select(date(2024, 1, 8)) is True


def test_selected_dates_sorted_but_selected_date_is_first_inserted() -> None:
    controller, _ = _make_controller("multi")

    for day in (date(2024, 1, 20), date(2024, 1, 5), date(2024, 1, 12)):
        controller.request_select(day)

    assert controller.selected_dates == [date(2024, 1, 5), date(2024, 1, 12), date(2024, 1, 20)]
    assert controller.selected_date == date(2024, 1, 20)


def test_select_date_requests_scroll_to_month() -> None:
    controller, host = _make_controller("single")

    assert controller.select_date(date(2024, 2, 10)) is True
    assert host.scrolls == [1]
    assert controller.selected_dates == [date(2024, 2, 10)]

    assert controller.select_date(date(2024, 3, 10)) is False
    assert host.scrolls == [1]
    assert controller.selected_dates == [date(2024, 2, 10)]
    assert host.invalid == []


def test_select_date_honours_predicate_without_side_effects() -> None:
    controller, host = _make_controller("single", is_selectable=lambda d: d.day != 13)
    changes = host.changes

    assert controller.select_date(date(2024, 1, 13)) is False
    assert host.changes == changes
    assert host.scrolls == []


def test_set_mode_resets_selection() -> None:
    controller, _ = _make_controller("multi")
    controller.request_select(date(2024, 1, 5))
    controller.request_select(date(2024, 1, 9))

    controller.set_mode("range")

    assert controller.mode == "range"
    assert controller.selected_dates == []
    assert not any(cell.is_selected for _, cell in controller.grid.iter_cells())


def test_apply_selection_leaves_input_state_alone() -> None:
    controller, _ = _make_controller("multi")
    grid = controller.grid
    pick = SelectedDay(date(2024, 1, 5), grid.find_selectable(date(2024, 1, 5)))

    before = MultiSelection()
    after = apply_selection(before, pick, grid)

    assert before.entries == ()
    assert after.entries == (pick,)


def test_remap_selection_after_rebuild() -> None:
    controller, _ = _make_controller("range")
    controller.request_select(date(2024, 1, 5))
    controller.request_select(date(2024, 1, 8))

    monday_grid = build_grid(date(2024, 1, 1), date(2024, 3, 1), today=date(2024, 1, 15), first_weekday=calendar.MONDAY)
    remapped = remap_selection(controller.state, monday_grid)

    assert isinstance(remapped, RangeSelection)
    assert [entry.day for entry in remapped.anchors] == [date(2024, 1, 5), date(2024, 1, 8)]
    for entry in remapped.entries:
        assert monday_grid.cell(entry.index).date == entry.day
