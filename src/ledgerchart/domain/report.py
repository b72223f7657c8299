"""Chart report domain service."""

from typing import Any, Optional, Sequence

from ledgerchart.config import Settings
from ledgerchart.domain.accounts import collect_accounts, remove_duplicate_accounts
from ledgerchart.domain.balance import (
    make_daily_account_balance_change_map,
    make_daily_balance_map,
)
from ledgerchart.domain.calendar import (
    DEFAULT_CALENDAR,
    CalendarAdapter,
    bucket_key,
    bucket_transactions,
    make_bucket_names,
)
from ledgerchart.domain.chart import make_balance_data, make_delta_data, make_net_worth_data
from ledgerchart.domain.entities import ChartReport, Interval, Transaction
from ledgerchart.domain.errors import NotFoundError, account_not_found
from ledgerchart.logging_setup import get_logger

logger = get_logger(__name__)


class ChartService:
    """Service for building chart series from a list of transactions."""

    def __init__(
        self,
        transactions: Sequence[Transaction],
        settings: Optional[Settings] = None,
        calendar: CalendarAdapter = DEFAULT_CALENDAR,
    ):
        """Initialize chart service.

        Args:
            transactions: Every transaction in the ledger
            settings: Account prefixes; defaults to ``Settings()``
            calendar: Calendar adapter the transaction dates belong to
        """
        self.transactions = list(transactions)
        self.settings = settings or Settings()
        self.calendar = calendar
        self.accounts = collect_accounts(self.transactions)

    def first_date(self) -> Optional[Any]:
        """Earliest transaction date, or None for an empty ledger."""
        return self._extreme_date(-1)

    def last_date(self) -> Optional[Any]:
        """Latest transaction date, or None for an empty ledger."""
        return self._extreme_date(1)

    def _extreme_date(self, direction: int) -> Optional[Any]:
        result = None
        for txn in self.transactions:
            if result is None or self.calendar.compare(txn.date, result) * direction > 0:
                result = txn.date
        return result

    def display_accounts(self) -> list[str]:
        """Sorted account list with single-child pass-through accounts removed."""
        return remove_duplicate_accounts(sorted(self.accounts))

    def bucket_transactions(
        self, start_date: Any, end_date: Any, interval: Interval = Interval.DAY
    ) -> dict[str, list[Transaction]]:
        """Group the ledger's transactions into buckets between two dates."""
        bucket_names = make_bucket_names(interval, start_date, end_date, self.calendar)
        return bucket_transactions(bucket_names, self.transactions, self.calendar)

    def build_chart_report(
        self,
        start_date: Any,
        end_date: Any,
        interval: Interval = Interval.DAY,
        accounts: Sequence[str] = (),
    ) -> ChartReport:
        """Build net worth plus balance and delta series for accounts.

        Balances accumulate from the ledger's first transaction so the
        series reflect full history rather than only the visible range.

        Args:
            start_date: First bucket date
            end_date: Last bucket date
            interval: Bucket width
            accounts: Accounts to build balance and delta series for

        Returns:
            ChartReport for the range

        Raises:
            NotFoundError: If a requested account never appears in the ledger
        """
        for account in accounts:
            if account not in self.accounts and not any(
                candidate.startswith(account + ":") for candidate in self.accounts
            ):
                raise NotFoundError(account_not_found(account))

        bucket_names = make_bucket_names(interval, start_date, end_date, self.calendar)
        day_before = self.calendar.add_days(start_date, -1)
        bucket_before = bucket_key(day_before, self.calendar)

        first_date = day_before
        ledger_start = self.first_date()
        if ledger_start is not None and self.calendar.compare(ledger_start, first_date) < 0:
            first_date = ledger_start

        changes = make_daily_account_balance_change_map(self.transactions, self.calendar)
        daily_balances = make_daily_balance_map(
            self.accounts, changes, first_date, end_date, self.calendar
        )
        logger.debug(
            "Chart range %s..%s over %d bucket(s)",
            bucket_names[0] if bucket_names else None,
            bucket_names[-1] if bucket_names else None,
            len(bucket_names),
        )

        balances = {}
        deltas = {}
        for account in accounts:
            balances[account] = tuple(
                make_balance_data(daily_balances, bucket_names, account, self.accounts)
            )
            deltas[account] = tuple(
                make_delta_data(
                    daily_balances, bucket_before, bucket_names, account, self.accounts
                )
            )

        return ChartReport(
            interval=interval,
            bucket_names=tuple(bucket_names),
            bucket_before=bucket_before,
            net_worth=tuple(make_net_worth_data(daily_balances, bucket_names, self.settings)),
            balances=balances,
            deltas=deltas,
        )
