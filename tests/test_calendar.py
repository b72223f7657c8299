"""Tests for calendar adapters, bucket names and transaction bucketing."""

import logging
from datetime import date

import pytest

from ledgerchart.domain.balance import make_daily_balance_map
from ledgerchart.domain.calendar import (
    GregorianCalendar,
    ImperialDate,
    TravellerCalendar,
    bucket_key,
    bucket_sort_key,
    bucket_transactions,
    clamp_date_range,
    get_calendar,
    make_bucket_names,
)
from ledgerchart.domain.entities import Interval
from ledgerchart.domain.errors import ValidationError


def test_bucket_key_pads_day_of_year():
    assert bucket_key(date(2023, 1, 5)) == "2023.005"
    assert bucket_key(date(2023, 12, 31)) == "2023.365"


def test_bucket_key_keeps_leap_day():
    assert bucket_key(date(2024, 12, 31)) == "2024.366"


def test_make_bucket_names_flags_leap_day_once(caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("ledgerchart"), "propagate", True)
    with caplog.at_level(logging.WARNING, logger="ledgerchart"):
        names = make_bucket_names(Interval.DAY, date(2024, 12, 30), date(2025, 1, 1))
        make_daily_balance_map(["Assets:Bank"], {"2024.366": {}}, date(2024, 12, 30), date(2025, 1, 1))

    assert names == ["2024.365", "2024.366", "2025.001"]
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "2024.366" in warnings[0].getMessage()


def test_bucket_sort_key_compares_year_numerically():
    keys = ["10000.001", "999.365", "2023.010", "2023.002"]
    assert sorted(keys, key=bucket_sort_key) == [
        "999.365",
        "2023.002",
        "2023.010",
        "10000.001",
    ]


def test_make_bucket_names_daily():
    names = make_bucket_names(Interval.DAY, date(2023, 5, 30), date(2023, 6, 2))
    assert names == ["2023.150", "2023.151", "2023.152", "2023.153"]


def test_make_bucket_names_crosses_year_boundary():
    names = make_bucket_names(Interval.DAY, date(2022, 12, 30), date(2023, 1, 2))
    assert names == ["2022.364", "2022.365", "2023.001", "2023.002"]


def test_make_bucket_names_single_day():
    assert make_bucket_names(Interval.DAY, date(2023, 3, 1), date(2023, 3, 1)) == ["2023.060"]


def test_make_bucket_names_inverted_range_is_empty():
    assert make_bucket_names(Interval.DAY, date(2023, 3, 2), date(2023, 3, 1)) == []


def test_bucket_transactions_uses_latest_bucket_not_after_date(transaction_factory):
    bucket_names = ["2023.100", "2023.110", "2023.120"]
    inside = transaction_factory(date(2023, 4, 25), ("Assets:Bank", 1))  # day 115
    before = transaction_factory(date(2023, 4, 5), ("Assets:Bank", 2))  # day 95
    after = transaction_factory(date(2023, 5, 10), ("Assets:Bank", 3))  # day 130

    buckets = bucket_transactions(bucket_names, [inside, before, after])

    assert buckets["2023.110"] == [inside]
    assert buckets["2023.100"] == [before]
    assert buckets["2023.120"] == [after]


def test_bucket_transactions_exact_match(transaction_factory):
    txn = transaction_factory(date(2023, 4, 20), ("Assets:Bank", 1))  # day 110
    buckets = bucket_transactions(["2023.100", "2023.110"], [txn])
    assert buckets == {"2023.100": [], "2023.110": [txn]}


def test_bucket_transactions_initializes_every_bucket():
    buckets = bucket_transactions(["2023.001", "2023.002"], [])
    assert buckets == {"2023.001": [], "2023.002": []}


def test_bucket_transactions_without_buckets(transaction_factory):
    txn = transaction_factory(date(2023, 1, 1), ("Assets:Bank", 1))
    assert bucket_transactions([], [txn]) == {}


def test_bucket_transactions_across_year_boundary(transaction_factory):
    txn = transaction_factory(date(2023, 1, 1), ("Assets:Bank", 1))
    buckets = bucket_transactions(["2022.365", "2023.001"], [txn])
    assert buckets["2023.001"] == [txn]


def test_gregorian_calendar_operations():
    calendar = GregorianCalendar()
    value = date(2023, 2, 28)

    assert calendar.year(value) == 2023
    assert calendar.day_of_year(value) == 59
    assert calendar.add_days(value, 1) == date(2023, 3, 1)
    assert calendar.add_days(value, -59) == date(2022, 12, 31)
    assert calendar.compare(value, date(2023, 3, 1)) < 0
    assert calendar.compare(value, value) == 0
    assert calendar.clone(value) == value
    assert calendar.parse("2023.059") == value


def test_traveller_calendar_rolls_over_at_365():
    calendar = TravellerCalendar()

    assert calendar.add_days(ImperialDate(1105, 365), 1) == ImperialDate(1106, 1)
    assert calendar.add_days(ImperialDate(1105, 1), -1) == ImperialDate(1104, 365)
    assert calendar.add_days(ImperialDate(1105, 100), 730) == ImperialDate(1107, 100)
    assert calendar.compare(ImperialDate(1105, 365), ImperialDate(1106, 1)) < 0


def test_traveller_calendar_parse():
    calendar = TravellerCalendar()

    assert calendar.parse("1105-042") == ImperialDate(1105, 42)
    assert calendar.parse("1105.042") == ImperialDate(1105, 42)
    with pytest.raises(ValueError, match="day must be"):
        calendar.parse("1105-366")
    with pytest.raises(ValueError, match="expected YEAR-DAY"):
        calendar.parse("2023-06-01")


def test_traveller_bucket_names():
    calendar = TravellerCalendar()
    names = make_bucket_names(
        Interval.DAY, ImperialDate(1105, 364), ImperialDate(1106, 1), calendar
    )
    assert names == ["1105.364", "1105.365", "1106.001"]


def test_get_calendar():
    assert isinstance(get_calendar("Traveller"), TravellerCalendar)
    with pytest.raises(ValidationError, match="Unknown calendar"):
        get_calendar("julian")


def test_clamp_date_range_within_window():
    start, end, clamped = clamp_date_range(date(2023, 6, 1), date(2023, 6, 16), 15)
    assert (start, end, clamped) == (date(2023, 6, 1), date(2023, 6, 16), False)


def test_clamp_date_range_moves_start_forward():
    start, end, clamped = clamp_date_range(date(2023, 5, 1), date(2023, 6, 16), 15)
    assert (start, end, clamped) == (date(2023, 6, 1), date(2023, 6, 16), True)


def test_make_bucket_names_ends_on_last_representable_date():
    names = make_bucket_names(Interval.DAY, date(9999, 12, 30), date.max)
    assert names == ["9999.364", "9999.365"]


def test_clamp_date_range_keep_start_moves_end_back():
    start, end, clamped = clamp_date_range(
        date(2023, 1, 1), date(2023, 6, 16), 15, keep_start=True
    )
    assert (start, end, clamped) == (date(2023, 1, 1), date(2023, 1, 16), True)


def test_clamp_date_range_near_last_representable_date():
    start, end, clamped = clamp_date_range(date(9999, 12, 30), date.max, 15, keep_start=True)
    assert (start, end, clamped) == (date(9999, 12, 30), date.max, False)


def test_imperial_date_str_parses_back():
    calendar = TravellerCalendar()
    value = ImperialDate(1105, 42)

    assert str(value) == "1105-042"
    assert calendar.parse(str(value)) == value
