"""Shared pytest fixtures for ledgerchart tests."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerchart.config import Settings
from ledgerchart.domain.entities import AccountLine, CommentLine, Transaction

SAMPLE_LEDGER = """\
; Household ledger
alias chk=Assets:Bank:Checking

2023/05/30 * Opening balance
    chk                     $1,000.00
    Equity:Opening

2023/06/01 * Paycheck
    ; direct deposit
    chk                     $500.00
    Income:Salary

2023/06/03 Groceries
    Expenses:Food           $45.25
    Liabilities:Credit:Chase

2023/06/03 Coffee
    Expenses:Food           $4.75
    Liabilities:Credit:Citi

2023/06/05 Card payment
    Liabilities:Credit:Chase  $45.25
    chk
"""


def make_transaction(txn_date, *postings, payee=""):
    """Build a transaction from (account, amount) pairs and comment strings."""
    lines = []
    for posting in postings:
        if isinstance(posting, str):
            lines.append(CommentLine(posting))
        else:
            account, amount = posting
            lines.append(AccountLine(account=account, amount=Decimal(str(amount))))
    return Transaction(date=txn_date, lines=tuple(lines), payee=payee)


@pytest.fixture
def settings():
    """Default account prefixes."""
    return Settings()


@pytest.fixture
def sample_transactions():
    """Transactions equivalent to SAMPLE_LEDGER."""
    checking = "Assets:Bank:Checking"
    return [
        make_transaction(
            date(2023, 5, 30),
            (checking, "1000.00"),
            ("Equity:Opening", "-1000.00"),
            payee="Opening balance",
        ),
        make_transaction(
            date(2023, 6, 1),
            "direct deposit",
            (checking, "500.00"),
            ("Income:Salary", "-500.00"),
            payee="Paycheck",
        ),
        make_transaction(
            date(2023, 6, 3),
            ("Expenses:Food", "45.25"),
            ("Liabilities:Credit:Chase", "-45.25"),
            payee="Groceries",
        ),
        make_transaction(
            date(2023, 6, 3),
            ("Expenses:Food", "4.75"),
            ("Liabilities:Credit:Citi", "-4.75"),
            payee="Coffee",
        ),
        make_transaction(
            date(2023, 6, 5),
            ("Liabilities:Credit:Chase", "45.25"),
            (checking, "-45.25"),
            payee="Card payment",
        ),
    ]


@pytest.fixture
def ledger_file(tmp_path):
    """Write SAMPLE_LEDGER to a temporary file and return its path."""
    path = tmp_path / "household.ledger"
    path.write_text(SAMPLE_LEDGER, encoding="utf-8")
    return str(path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def transaction_factory():
    """Return the make_transaction helper."""
    return make_transaction
