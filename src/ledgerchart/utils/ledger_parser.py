"""Plain-text ledger parsing.

Supported syntax::

    ; top-level comment
    alias b=Assets:Bank

    2023/06/01 * Paycheck
        ; posting comment
        b:Checking          $1,000.00
        Income:Salary

Transaction headers start in the first column with a date, optionally
followed by a ``*`` or ``!`` status mark and a payee. Postings are indented
and separate the account from the amount with two or more spaces or a tab.
One posting per transaction may leave out its amount, which then balances
the transaction.
"""

import re
from decimal import Decimal
from pathlib import Path
from typing import Optional

from ledgerchart.domain.calendar import DEFAULT_CALENDAR, CalendarAdapter
from ledgerchart.domain.entities import AccountLine, CommentLine, Transaction, TransactionLine
from ledgerchart.domain.errors import LedgerParseError, multiple_elided_amounts
from ledgerchart.logging_setup import get_logger
from ledgerchart.utils.amount_parser import parse_amount

logger = get_logger(__name__)

_HEADER_RE = re.compile(r"^(?P<date>\S+)(?:\s+[*!])?(?:\s+(?P<payee>.*))?$")
_POSTING_RE = re.compile(r"^(?P<account>\S(?:.*?\S)??)(?:(?: {2,}|\t)\s*(?P<amount>.+))?$")
_ALIAS_RE = re.compile(r"^alias\s+(?P<name>[^=]+?)\s*=\s*(?P<account>.+?)\s*$")
_COMMENT_CHARS = (";", "#", "%", "*", "|")


def resolve_alias(account: str, aliases: dict[str, str]) -> str:
    """Replace an aliased account name or aliased first segment."""
    if account in aliases:
        return aliases[account]
    first, sep, rest = account.partition(":")
    if sep and first in aliases:
        return f"{aliases[first]}:{rest}"
    return account


class _PendingTransaction:
    def __init__(self, date, payee: str):
        self.date = date
        self.payee = payee
        self.lines: list[TransactionLine] = []
        self.elided_account: Optional[str] = None
        self.elided_index: Optional[int] = None

    def add_posting(self, line_number: int, account: str, amount_str: Optional[str]) -> None:
        if amount_str is None:
            if self.elided_account is not None:
                raise LedgerParseError(line_number, multiple_elided_amounts())
            self.elided_account = account
            self.elided_index = len(self.lines)
            # Placeholder, replaced once the other postings are known.
            self.lines.append(CommentLine())
            return
        try:
            amount = parse_amount(amount_str)
        except ValueError as e:
            raise LedgerParseError(line_number, str(e))
        self.lines.append(AccountLine(account=account, amount=amount))

    def build(self) -> Transaction:
        lines = list(self.lines)
        if self.elided_account is not None:
            total = sum(
                (line.amount for line in lines if isinstance(line, AccountLine)),
                Decimal("0"),
            )
            lines[self.elided_index] = AccountLine(account=self.elided_account, amount=-total)
        return Transaction(date=self.date, lines=tuple(lines), payee=self.payee)


def parse_ledger(text: str, calendar: CalendarAdapter = DEFAULT_CALENDAR) -> list[Transaction]:
    """Parse ledger text into transactions, in file order.

    Args:
        text: Ledger file contents
        calendar: Calendar used to read transaction dates

    Returns:
        List of transactions

    Raises:
        LedgerParseError: If a line cannot be parsed
    """
    transactions: list[Transaction] = []
    aliases: dict[str, str] = {}
    pending: Optional[_PendingTransaction] = None

    def finish() -> None:
        nonlocal pending
        if pending is not None:
            transactions.append(pending.build())
            pending = None

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.rstrip()
        if not line:
            finish()
            continue

        if line[0] in " \t":
            body = line.strip()
            if pending is None:
                if body.startswith(";"):
                    continue
                raise LedgerParseError(line_number, "Indented line outside of a transaction")
            if body.startswith(";"):
                pending.lines.append(CommentLine(text=body[1:].strip()))
                continue
            # Trailing comment after the amount
            body = body.split(";", 1)[0].rstrip()
            match = _POSTING_RE.match(body)
            if not match:
                raise LedgerParseError(line_number, f"Could not parse posting '{body}'")
            account = resolve_alias(match.group("account"), aliases)
            pending.add_posting(line_number, account, match.group("amount"))
            continue

        finish()
        if line.startswith(_COMMENT_CHARS):
            continue

        alias_match = _ALIAS_RE.match(line)
        if alias_match:
            aliases[alias_match.group("name")] = alias_match.group("account")
            continue

        header = _HEADER_RE.match(line)
        if not header:
            raise LedgerParseError(line_number, f"Could not parse transaction header '{line}'")
        try:
            txn_date = calendar.parse(header.group("date"))
        except ValueError as e:
            raise LedgerParseError(line_number, str(e))
        pending = _PendingTransaction(txn_date, (header.group("payee") or "").strip())

    finish()
    logger.debug("Parsed %d transaction(s) with %d alias(es)", len(transactions), len(aliases))
    return transactions


def load_ledger(path: str | Path, calendar: CalendarAdapter = DEFAULT_CALENDAR) -> list[Transaction]:
    """Read and parse a UTF-8 ledger file.

    Raises:
        FileNotFoundError: If the file does not exist
        LedgerParseError: If the file cannot be parsed
    """
    return parse_ledger(Path(path).read_text(encoding="utf-8"), calendar)
