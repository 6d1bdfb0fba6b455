from datetime import date, datetime

import pytest

from models import (
    Cell,
    ConfigurationError,
    cell_to_jsonable,
    normalize_date,
    normalize_mode,
    parse_date,
    parse_weekday,
)


def test_parse_date_accepts_plain_and_iso_datetimes() -> None:
    assert parse_date("2024-01-05") == date(2024, 1, 5)
    assert parse_date(" 2024-01-05T13:45:00Z ") == date(2024, 1, 5)
    assert parse_date("2024-01-05 23:59") == date(2024, 1, 5)


def test_parse_date_rejects_garbage() -> None:
    with pytest.raises(ConfigurationError):
        parse_date("05/01/2024")


def test_normalize_date_drops_time_component() -> None:
    assert normalize_date(datetime(2024, 2, 29, 18, 30)) == date(2024, 2, 29)
    assert normalize_date(date(2024, 2, 29)) == date(2024, 2, 29)
    with pytest.raises(ConfigurationError):
        normalize_date(None, "min_date")
    with pytest.raises(ConfigurationError):
        normalize_date(20240101)


def test_normalize_mode_is_case_insensitive_and_strict() -> None:
    assert normalize_mode(" Range ") == "range"
    with pytest.raises(ConfigurationError):
        normalize_mode("week")
    with pytest.raises(ConfigurationError):
        normalize_mode(None)


def test_parse_weekday_names_and_numbers() -> None:
    assert parse_weekday(0) == 0
    assert parse_weekday("6") == 6
    assert parse_weekday("Sunday") == 6
    assert parse_weekday("sun") == 6
    assert parse_weekday("TH") == 3

    for bad in (7, -1, "t", "", "funday", True, None):
        with pytest.raises(ConfigurationError):
            parse_weekday(bad)


def test_cell_to_jsonable() -> None:
    cell = Cell(
        date=date(2024, 1, 5),
        is_current_month=True,
        is_selectable=True,
        is_selected=True,
        is_today=False,
        value=5,
        range_state="first",
    )
    assert cell_to_jsonable(cell) == {
        "date": "2024-01-05",
        "current_month": True,
        "selectable": True,
        "selected": True,
        "today": False,
        "value": 5,
        "range_state": "first",
    }
