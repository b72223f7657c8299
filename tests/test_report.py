"""Tests for the chart report service."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerchart.config import Settings
from ledgerchart.domain.calendar import ImperialDate, TravellerCalendar
from ledgerchart.domain.errors import NotFoundError
from ledgerchart.domain.report import ChartService


def _values(series):
    return [point.y for point in series]


def test_first_and_last_date(sample_transactions):
    service = ChartService(list(reversed(sample_transactions)))
    assert service.first_date() == date(2023, 5, 30)
    assert service.last_date() == date(2023, 6, 5)


def test_empty_ledger_dates():
    service = ChartService([])
    assert service.first_date() is None
    assert service.last_date() is None


def test_build_chart_report(sample_transactions):
    service = ChartService(sample_transactions)

    report = service.build_chart_report(
        date(2023, 6, 1),
        date(2023, 6, 5),
        accounts=("Assets:Bank", "Liabilities:Credit"),
    )

    assert report.bucket_names == ("2023.152", "2023.153", "2023.154", "2023.155", "2023.156")
    assert report.bucket_before == "2023.151"
    assert _values(report.net_worth) == [
        Decimal("1500"), Decimal("1500"), Decimal("1450"), Decimal("1450"), Decimal("1450"),
    ]
    assert _values(report.balances["Assets:Bank"]) == [
        Decimal("1500"), Decimal("1500"), Decimal("1500"), Decimal("1500"), Decimal("1454.75"),
    ]
    assert _values(report.deltas["Assets:Bank"]) == [
        Decimal("500"), Decimal("0"), Decimal("0"), Decimal("0"), Decimal("-45.25"),
    ]
    assert _values(report.balances["Liabilities:Credit"]) == [
        Decimal("0"), Decimal("0"), Decimal("-50"), Decimal("-50"), Decimal("-4.75"),
    ]


def test_build_chart_report_includes_history_before_range(sample_transactions):
    service = ChartService(sample_transactions)
    report = service.build_chart_report(date(2023, 6, 10), date(2023, 6, 11))
    assert _values(report.net_worth) == [Decimal("1450"), Decimal("1450")]


def test_build_chart_report_respects_settings(sample_transactions):
    service = ChartService(sample_transactions, settings=Settings(assets_prefix="Assets", liabilities_prefix="Nothing"))
    report = service.build_chart_report(date(2023, 6, 5), date(2023, 6, 5))
    assert _values(report.net_worth) == [Decimal("1454.75")]


def test_build_chart_report_unknown_account(sample_transactions):
    service = ChartService(sample_transactions)
    with pytest.raises(NotFoundError, match="Assets:Nope"):
        service.build_chart_report(date(2023, 6, 1), date(2023, 6, 2), accounts=("Assets:Nope",))


def test_build_chart_report_empty_ledger():
    service = ChartService([])
    report = service.build_chart_report(date(2023, 1, 1), date(2023, 1, 2), accounts=())
    assert _values(report.net_worth) == [Decimal("0"), Decimal("0")]


def test_build_chart_report_inverted_range(sample_transactions):
    service = ChartService(sample_transactions)
    report = service.build_chart_report(date(2023, 6, 5), date(2023, 6, 1), accounts=("Assets",))
    assert report.bucket_names == ()
    assert report.net_worth == ()
    assert report.balances["Assets"] == ()


def test_bucket_transactions(sample_transactions):
    service = ChartService(sample_transactions)

    buckets = service.bucket_transactions(date(2023, 6, 1), date(2023, 6, 3))

    assert [txn.payee for txn in buckets["2023.152"]] == ["Opening balance", "Paycheck"]
    assert buckets["2023.153"] == []
    assert [txn.payee for txn in buckets["2023.154"]] == ["Groceries", "Coffee", "Card payment"]


def test_display_accounts(sample_transactions, transaction_factory):
    txns = sample_transactions + [
        transaction_factory(date(2023, 6, 6), ("Assets", 0), ("Equity:Opening", 0)),
    ]
    service = ChartService(txns)

    assert service.display_accounts() == [
        "Assets:Bank:Checking",
        "Equity:Opening",
        "Expenses:Food",
        "Income:Salary",
        "Liabilities:Credit:Chase",
        "Liabilities:Credit:Citi",
    ]


def test_chart_report_with_traveller_calendar(transaction_factory):
    calendar = TravellerCalendar()
    txns = [
        transaction_factory(ImperialDate(1105, 360), ("Assets:Credits", 100), ("Income:Trade", -100)),
        transaction_factory(ImperialDate(1106, 1), ("Liabilities:Ship", -20), ("Expenses:Fuel", 20)),
    ]
    service = ChartService(txns, calendar=calendar)

    report = service.build_chart_report(ImperialDate(1105, 365), ImperialDate(1106, 2), accounts=("Assets",))

    assert report.bucket_names == ("1105.365", "1106.001", "1106.002")
    assert report.bucket_before == "1105.364"
    assert _values(report.net_worth) == [Decimal("100"), Decimal("80"), Decimal("80")]
    assert _values(report.deltas["Assets"]) == [Decimal("0"), Decimal("0"), Decimal("0")]
