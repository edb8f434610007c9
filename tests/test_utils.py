from datetime import datetime, timezone

import pytest

from utils import (
    coerce_settlement_id,
    format_currency,
    format_date_in,
    format_time_in,
    next_settlement_id,
    parse_iso,
    round_amount,
    to_iso,
)


def test_iso_round_trip_keeps_fixed_width():
    moment = datetime(2026, 10, 19, 6, 0, tzinfo=timezone.utc)
    text = to_iso(moment)
    assert text == "2026-10-19T06:00:00.000000+00:00"
    assert parse_iso(text) == moment


@pytest.mark.parametrize(
    "moment, date, time",
    [
        (datetime(2026, 3, 5, 8, 35, 7, tzinfo=timezone.utc), "5/3/2026", "2:05:07 pm"),
        # 18:30 UTC is midnight in India, already the next day
        (datetime(2026, 12, 31, 18, 30, 0, tzinfo=timezone.utc), "1/1/2027", "12:00:00 am"),
        (datetime(2026, 7, 14, 6, 30, 9, tzinfo=timezone.utc), "14/7/2026", "12:00:09 pm"),
        (datetime(2026, 11, 20, 4, 0, 0, tzinfo=timezone.utc), "20/11/2026", "9:30:00 am"),
    ],
)
def test_indian_locale_formatting(moment, date, time):
    assert format_date_in(moment) == date
    assert format_time_in(moment) == time


def test_formatting_other_timezone_and_naive_input():
    moment = datetime(2026, 3, 5, 23, 15, 0)
    assert format_date_in(moment, "UTC") == "5/3/2026"
    assert format_time_in(moment, "UTC") == "11:15:00 pm"


def test_settlement_ids_increase():
    first = next_settlement_id()
    second = next_settlement_id()
    assert second > first


@pytest.mark.parametrize(
    "value, expected",
    [(7, 7), (7.5, 7.5), ("7", 7.0), ("7.25", 7.25), (" 12 ", 12.0)],
)
def test_coerce_settlement_id(value, expected):
    assert coerce_settlement_id(value) == expected


@pytest.mark.parametrize("value", ["", "seven", None, True, ["7"]])
def test_coerce_settlement_id_rejects(value):
    assert coerce_settlement_id(value) is None


def test_round_amount_half_up():
    assert round_amount(2.675) == 2.68
    assert round_amount(10) == 10.0


def test_format_currency():
    assert format_currency(1234.5) == "₹1,234.50"
    assert format_currency(3, "$") == "$3.00"
