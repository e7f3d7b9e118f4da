"""Epoch — tests for the recurrence grammar and both duration semantics.

Tests cover:
    - "1d" and "1d1x" parse to SingleDay; other day forms parse to Day
    - amount/coefficient defaults and the reference examples
    - lenient fallback (no unit letter) vs hard failure (unknown unit letter)
    - to_fixed_duration uses 365/30/7-day approximations
    - days_since walks months/years on the calendar and never clamps
    - spans beyond the datetime range raise CalendarConstructionError quickly
"""

from datetime import datetime, timedelta, timezone

import pytest

from event_pulse.core.epoch import (
    CalendarData, Day, Month, SingleDay, Week, Year,
    advance, days_since, format_epoch, frequency, new_epoch, parse_epoch,
    to_fixed_duration,
)
from event_pulse.core.errors import (
    CalendarConstructionError, InvalidInputStringError,
)


# ─── parse_epoch ─────────────────────────────────────────────────

@pytest.mark.parametrize("text", ["1d", "1d1x"])
def test_single_day_forms_normalize_to_single_day(text):
    assert parse_epoch(text) == SingleDay()


def test_single_day_is_never_day_one_one():
    assert parse_epoch("1d") != Day(CalendarData(1, 1))


@pytest.mark.parametrize("text,expected", [
    ("3m4x", Month(CalendarData(3, 4))),
    ("2y1x", Year(CalendarData(2, 1))),
    ("15d3x", Day(CalendarData(15, 3))),
    ("2w", Week(CalendarData(2, 1))),
    ("m", Month(CalendarData(1, 1))),
    ("y12x", Year(CalendarData(1, 12))),
    ("6mx", Month(CalendarData(6, 1))),
    ("1d2x", Day(CalendarData(1, 2))),
])
def test_parse_reference_forms(text, expected):
    assert parse_epoch(text) == expected


@pytest.mark.parametrize("text", ["", "123", "!!", "   "])
def test_no_unit_letter_falls_back_to_one_day(text):
    assert parse_epoch(text) == Day(CalendarData(1, 1))


@pytest.mark.parametrize("text", ["3q", "h", "2M", "5z2x"])
def test_unknown_unit_letter_is_rejected(text):
    with pytest.raises(InvalidInputStringError):
        parse_epoch(text)


def test_format_writes_defaults_out():
    assert format_epoch(parse_epoch("2w")) == "2w1x"
    assert format_epoch(SingleDay()) == "1d1x"


@pytest.mark.parametrize("text", ["3m4x", "2y1x", "15d3x", "4w2x", "1d1x"])
def test_format_of_canonical_text_parses_back(text):
    assert parse_epoch(format_epoch(parse_epoch(text))) == parse_epoch(text)


def test_new_epoch_unknown_unit_is_single_day():
    data = CalendarData(2, 1)
    assert new_epoch("y", data) == Year(data)
    assert new_epoch("q", data) == SingleDay()


def test_frequency_is_coefficient():
    assert frequency(Year(CalendarData(1, 3))) == 3
    assert frequency(SingleDay()) == 1


# ─── to_fixed_duration ───────────────────────────────────────────

def test_fixed_duration_of_one_year_is_365_days():
    assert to_fixed_duration(Year(CalendarData(1, 1))) == timedelta(days=365)


@pytest.mark.parametrize("epoch,days", [
    (SingleDay(), 1),
    (Month(CalendarData(3, 4)), 360),
    (Week(CalendarData(2, 3)), 42),
    (Day(CalendarData(15, 3)), 45),
    (Year(CalendarData(2, 2)), 1460),
])
def test_fixed_duration_multiplies_amount_and_coefficient(epoch, days):
    assert to_fixed_duration(epoch) == timedelta(days=days)


# ─── days_since ──────────────────────────────────────────────────

def test_one_month_from_leap_february_is_29_days():
    since = datetime(2024, 2, 1, 0, 0, 0)
    assert days_since(Month(CalendarData(1, 1)), since) == 29


def test_one_month_from_common_february_is_28_days():
    assert days_since(Month(CalendarData(1, 1)), datetime(2023, 2, 1)) == 28


def test_month_walk_rolls_over_the_year():
    since = datetime(2023, 11, 15, 9, 30, tzinfo=timezone.utc)
    # Nov 15 -> Feb 15 2024
    assert days_since(Month(CalendarData(1, 3)), since) == 92


def test_month_amount_larger_than_a_year_rolls_over():
    since = datetime(2024, 1, 10)
    assert days_since(Month(CalendarData(13, 1)), since) == (
        datetime(2025, 2, 10) - since
    ).days


def test_month_walk_fails_instead_of_clamping():
    with pytest.raises(CalendarConstructionError):
        days_since(Month(CalendarData(1, 1)), datetime(2024, 1, 31))


def test_year_from_leap_day_into_common_year_fails():
    with pytest.raises(CalendarConstructionError):
        days_since(Year(CalendarData(1, 1)), datetime(2024, 2, 29))


def test_year_spanning_a_leap_day_is_366_days():
    assert days_since(Year(CalendarData(1, 1)), datetime(2024, 1, 1)) == 366


def test_year_multiplies_amount_and_coefficient():
    since = datetime(2020, 2, 29)
    assert days_since(Year(CalendarData(2, 2)), since) == (
        datetime(2024, 2, 29) - since
    ).days


def test_time_of_day_is_held_fixed():
    since = datetime(2024, 3, 15, 23, 59, 59, 999999)
    assert days_since(Month(CalendarData(1, 1)), since) == 31


def test_week_and_day_are_pure_arithmetic():
    since = datetime(2024, 1, 31)
    assert days_since(Week(CalendarData(2, 3)), since) == 42
    assert days_since(Day(CalendarData(15, 3)), since) == 45
    assert days_since(SingleDay(), since) == 1


def test_advance_lands_on_same_day_of_month():
    since = datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)
    assert advance(Month(CalendarData(1, 1)), since) == datetime(
        2024, 2, 15, 8, 0, tzinfo=timezone.utc,
    )


def test_month_repeats_roll_over_in_one_step():
    since = datetime(2024, 1, 15)
    # 5 months x 3 repeats = 15 months -> 2025-04-15
    assert days_since(Month(CalendarData(5, 3)), since) == (
        datetime(2025, 4, 15) - since
    ).days


# ─── out-of-range spans ──────────────────────────────────────────

def test_huge_month_coefficient_fails_fast():
    epoch = parse_epoch("1m99999999999999999999x")
    with pytest.raises(CalendarConstructionError):
        days_since(epoch, datetime(2024, 1, 1))


def test_year_past_maxyear_is_calendar_error():
    with pytest.raises(CalendarConstructionError):
        days_since(Year(CalendarData(8000, 1)), datetime(2024, 1, 1))


def test_fixed_duration_overflow_is_calendar_error():
    with pytest.raises(CalendarConstructionError):
        to_fixed_duration(parse_epoch("9999999999d"))


def test_advance_past_maxyear_is_calendar_error():
    with pytest.raises(CalendarConstructionError):
        advance(Day(CalendarData(9_999_999, 1)), datetime(2024, 1, 1))
