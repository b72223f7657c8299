"""Daily balance change and running balance maps."""

from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from ledgerchart.domain.calendar import (
    DEFAULT_CALENDAR,
    CalendarAdapter,
    bucket_key,
    iter_dates,
)
from ledgerchart.domain.entities import AccountLine, Transaction
from ledgerchart.logging_setup import get_logger
from ledgerchart.utils.maps import get_or_insert

logger = get_logger(__name__)

ZERO = Decimal("0")

# Of the form {"2023.150": {"Liabilities:Credit:Chase": Decimal("-450")}}
DailyAccountBalanceChangeMap = dict[str, dict[str, Decimal]]

# Every tracked account on every day; inner maps are read-only snapshots.
DailyBalanceMap = dict[str, Mapping[str, Decimal]]


def make_daily_account_balance_change_map(
    transactions: Sequence[Transaction],
    calendar: CalendarAdapter = DEFAULT_CALENDAR,
) -> DailyAccountBalanceChangeMap:
    """Create a sparse map of the net balance change per day and account.

    If an account has no balance change on a date, that key is not included
    in the inner map. If a date has no transactions, that key is not
    included in the outer map. Comment lines are skipped.
    """
    result: DailyAccountBalanceChangeMap = {}
    for txn in transactions:
        accounts = get_or_insert(result, bucket_key(txn.date, calendar), dict)
        for line in txn.lines:
            if not isinstance(line, AccountLine):
                continue
            accounts[line.account] = accounts.get(line.account, ZERO) + line.amount

    logger.debug("Built balance changes for %d day(s)", len(result))
    return result


def make_daily_balance_map(
    accounts: Sequence[str],
    changes: DailyAccountBalanceChangeMap,
    first_date: Any,
    last_date: Any,
    calendar: CalendarAdapter = DEFAULT_CALENDAR,
) -> DailyBalanceMap:
    """Roll a sparse change map into the balance of every account on every day.

    Every account starts at zero on the day before first_date, so changes
    dated earlier are not reflected. Days without changes share the previous
    day's snapshot instead of copying it.
    """
    result: DailyBalanceMap = {}
    previous: Mapping[str, Decimal] = MappingProxyType({account: ZERO for account in accounts})

    for current in iter_dates(first_date, last_date, 1, calendar):
        key = bucket_key(current, calendar)
        day_changes = changes.get(key)
        if day_changes is not None:
            previous = MappingProxyType(
                {
                    account: previous.get(account, ZERO) + day_changes.get(account, ZERO)
                    for account in accounts
                }
            )
        result[key] = previous

    logger.debug("Rolled balances for %d account(s) over %d day(s)", len(accounts), len(result))
    return result
