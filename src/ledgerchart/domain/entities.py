"""Domain model entities for ledgerchart.

These are pure data classes describing ledger transactions and the chart
series derived from them. None of them outlive a single computation: every
report is rebuilt from the transaction list on each call.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Union


class Interval(Enum):
    """Bucket width for chart series. Only daily buckets are supported."""

    DAY = "day"


@dataclass(frozen=True)
class AccountLine:
    """A posting that moves an amount into or out of an account."""

    account: str
    amount: Decimal


@dataclass(frozen=True)
class CommentLine:
    """A comment inside a transaction. Has no effect on balances."""

    text: str = ""


TransactionLine = Union[AccountLine, CommentLine]


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction domain entity.

    ``date`` is a value understood by the active calendar adapter, a
    ``datetime.date`` for the Gregorian calendar.
    """

    date: Any
    lines: tuple[TransactionLine, ...]
    payee: str = ""

    @property
    def account_lines(self) -> tuple[AccountLine, ...]:
        return tuple(line for line in self.lines if isinstance(line, AccountLine))


@dataclass(frozen=True)
class ChartPoint:
    """One sample of a chart series."""

    x: str
    y: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": float(self.y)}


ChartData = list[ChartPoint]


@dataclass(frozen=True)
class ChartReport:
    """Chart series for a date range, ready for formatting."""

    interval: Interval
    bucket_names: tuple[str, ...]
    bucket_before: str
    net_worth: tuple[ChartPoint, ...]
    balances: dict[str, tuple[ChartPoint, ...]] = field(default_factory=dict)
    deltas: dict[str, tuple[ChartPoint, ...]] = field(default_factory=dict)
