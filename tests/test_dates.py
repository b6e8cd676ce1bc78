from datetime import date

import pytest

from statement_merger import format_date, parse_display_date
from statement_merger.dates import MONTH_ABBREVIATIONS


def test_today_uses_wall_clock():
    d = date.today()

    assert format_date("today") == f"{MONTH_ABBREVIATIONS[d.month - 1]} {d.day}, {d.year}"


def test_relative_tokens_resolve_against_pinned_clock(today):
    assert format_date("Today", today=today) == "Oct 16, 2026"
    assert format_date("yesterday", today=today) == "Oct 15, 2026"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("February 1, 2026", "Feb 1, 2026"),
        ("january 5 2026", "Jan 5, 2026"),
        ("Jan 05, 2026", "Jan 5, 2026"),
        ("2026-02-01", "Feb 1, 2026"),
        ("13/02/2026", "Feb 13, 2026"),
        ("02/13/26", "Feb 13, 2026"),
    ],
)
def test_format_date_normalizes_common_layouts(raw, expected, today):
    assert format_date(raw, today=today) == expected


def test_iso_date_keeps_its_year(today):
    assert "2026" in format_date("2026-02-01", today=today)


def test_missing_year_becomes_current_year(today):
    assert format_date("Mar 3", today=today) == "Mar 3, 2026"


def test_far_future_year_becomes_current_year(today):
    assert format_date("03/03/45", today=today) == "Mar 3, 2026"


def test_literal_year_in_raw_text_wins(today):
    assert format_date("Dec 31, 2025", today=today) == "Dec 31, 2025"


@pytest.mark.parametrize("raw", ["pending", "5", "n/a"])
def test_unparseable_dates_pass_through_verbatim(raw, today):
    assert format_date(raw, today=today) == raw


def test_empty_date_is_empty(today):
    assert format_date("", today=today) == ""
    assert format_date(None, today=today) == ""


def test_parse_display_date_round_trips_canonical_values():
    assert parse_display_date("Feb 1, 2026") == date(2026, 2, 1)
    assert parse_display_date("pending") is None
    assert parse_display_date("Feb 30, 2026") is None
    assert parse_display_date("2026-02-01") is None
