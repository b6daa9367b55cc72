from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.core.exceptions import ValidationError
from app.utils.periods import (
    parse_period_key,
    period_bounds,
    period_key,
    period_label,
    previous_period,
    to_naive_utc,
    week_bounds,
)
from app.utils.rollover import reconcile_month_rollover


def test_offset_datetimes_become_naive_utc():
    eastern = timezone(timedelta(hours=-5))

    assert to_naive_utc(datetime(2024, 3, 31, 23, 30, tzinfo=eastern)) == datetime(2024, 4, 1, 4, 30)
    assert to_naive_utc(datetime(2024, 3, 31, 23, 30)) == datetime(2024, 3, 31, 23, 30)


def test_period_key_uses_the_calendar_month():
    assert period_key(date(2024, 3, 10)) == "2024-03"
    assert period_key(datetime(2024, 12, 31, 23, 59)) == "2024-12"


@pytest.mark.parametrize("key", ["2024-3", "24-03", "2024-00", "2024-13", "", "march"])
def test_parse_period_key_rejects_bad_keys(key):
    with pytest.raises(ValidationError):
        parse_period_key(key)


def test_period_helpers():
    assert parse_period_key("2024-02") == (2024, 2)
    assert period_bounds("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert previous_period("2024-01") == "2023-12"
    assert previous_period("2024-03") == "2024-02"
    assert period_label("2024-03") == "March 2024"


@pytest.mark.parametrize(
    "start_of_week, expected_start",
    [
        (0, date(2024, 3, 10)),  # Sunday
        (1, date(2024, 3, 4)),   # Monday
        (6, date(2024, 3, 9)),   # Saturday
    ],
)
def test_week_bounds(start_of_week, expected_start):
    start, end = week_bounds(date(2024, 3, 10), start_of_week)

    assert start == expected_start
    assert (end - start).days == 6


def _settings(last_seen=None):
    return SimpleNamespace(user_id="u1", last_seen_period=last_seen, month_end_report_period=None)


def test_first_reconciliation_only_records_the_period():
    user_settings = _settings()

    assert reconcile_month_rollover(user_settings, date(2024, 3, 10)) is None
    assert user_settings.last_seen_period == "2024-03"
    assert user_settings.month_end_report_period is None


def test_same_month_is_a_no_op():
    user_settings = _settings("2024-03")

    assert reconcile_month_rollover(user_settings, date(2024, 3, 31)) is None
    assert user_settings.month_end_report_period is None


def test_new_month_flags_the_closed_month():
    user_settings = _settings("2024-02")

    assert reconcile_month_rollover(user_settings, date(2024, 3, 1)) == "2024-02"
    assert user_settings.month_end_report_period == "2024-02"
    assert user_settings.last_seen_period == "2024-03"


def test_clock_going_backwards_keeps_the_marker():
    user_settings = _settings("2024-04")

    assert reconcile_month_rollover(user_settings, date(2024, 3, 1)) is None
    assert user_settings.last_seen_period == "2024-04"
