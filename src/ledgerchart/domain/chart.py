"""Chart series derived from daily balances."""

from decimal import Decimal
from typing import Mapping, Sequence

from ledgerchart.config import Settings
from ledgerchart.domain.balance import ZERO, DailyBalanceMap
from ledgerchart.domain.entities import ChartData, ChartPoint


def calc_net_worth(balances: Mapping[str, Decimal], settings: Settings) -> Decimal:
    """Sum the balances of asset and liability accounts.

    Matching is a plain string prefix test against the configured prefixes.
    """
    return sum(
        (
            balance
            for account, balance in balances.items()
            if account.startswith(settings.assets_prefix)
            or account.startswith(settings.liabilities_prefix)
        ),
        ZERO,
    )


def make_net_worth_data(
    daily_balances: DailyBalanceMap,
    bucket_names: Sequence[str],
    settings: Settings,
) -> ChartData:
    """Net worth at each bucket. Buckets missing from the map plot as zero."""
    data: ChartData = []
    for bucket in bucket_names:
        balances = daily_balances.get(bucket)
        net_worth = calc_net_worth(balances, settings) if balances is not None else ZERO
        data.append(ChartPoint(x=bucket, y=net_worth))
    return data


def find_child_accounts(account: str, accounts: Sequence[str]) -> list[str]:
    """Return the accounts nested anywhere below ``account``."""
    prefix = account + ":"
    return [candidate for candidate in accounts if candidate.startswith(prefix)]


def _balance_of(balances: Mapping[str, Decimal] | None, account: str) -> Decimal:
    if balances is None:
        return ZERO
    return balances.get(account, ZERO)


def make_balance_data(
    daily_balances: DailyBalanceMap,
    bucket_names: Sequence[str],
    account: str,
    all_accounts: Sequence[str],
) -> ChartData:
    """Balance of an account and all of its descendants at each bucket."""
    accounts = [*find_child_accounts(account, all_accounts), account]
    data: ChartData = []
    for bucket in bucket_names:
        balances = daily_balances.get(bucket)
        total = sum((_balance_of(balances, name) for name in accounts), ZERO)
        data.append(ChartPoint(x=bucket, y=total))
    return data


def make_delta_data(
    daily_balances: DailyBalanceMap,
    bucket_before: str,
    bucket_names: Sequence[str],
    account: str,
    all_accounts: Sequence[str],
) -> ChartData:
    """Change in balance of an account and its descendants between buckets.

    The first bucket is compared against ``bucket_before``. Each account's
    change is computed separately and the changes are summed.
    """
    accounts = [*find_child_accounts(account, all_accounts), account]
    data: ChartData = []
    for i, bucket in enumerate(bucket_names):
        previous_bucket = bucket_before if i == 0 else bucket_names[i - 1]
        balances = daily_balances.get(bucket)
        previous_balances = daily_balances.get(previous_bucket)

        delta = ZERO
        for name in accounts:
            delta += _balance_of(balances, name) - _balance_of(previous_balances, name)
        data.append(ChartPoint(x=bucket, y=delta))
    return data
