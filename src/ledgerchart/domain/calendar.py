"""Calendar adapters, bucket keys and transaction bucketing.

A bucket key names one calendar day as ``{year}.{day-of-year:03d}``. Keys are
ordered with :func:`bucket_sort_key`, which compares the year numerically
before the day, so keys from years of different digit widths still sort
chronologically.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Iterator, NamedTuple, Sequence

from ledgerchart.domain.entities import Interval, Transaction
from ledgerchart.domain.errors import ValidationError, unknown_calendar
from ledgerchart.logging_setup import get_logger
from ledgerchart.utils.date_parser import parse_date

logger = get_logger(__name__)

DAYS_PER_YEAR = 365

_INTERVAL_DAYS = {Interval.DAY: 1}


class CalendarAdapter(ABC):
    """Date operations needed by the aggregation engine.

    Implementations decide what a date value is. The engine only ever
    touches dates through these methods.
    """

    name: str = ""

    @abstractmethod
    def year(self, value: Any) -> int:
        """Return the year of a date."""
        pass

    @abstractmethod
    def day_of_year(self, value: Any) -> int:
        """Return the 1-based ordinal day within the year."""
        pass

    @abstractmethod
    def add_days(self, value: Any, days: int) -> Any:
        """Return a new date ``days`` days after ``value``."""
        pass

    @abstractmethod
    def compare(self, left: Any, right: Any) -> int:
        """Return a negative number, zero or a positive number."""
        pass

    @abstractmethod
    def clone(self, value: Any) -> Any:
        """Return an independent copy of a date."""
        pass

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Parse a date written in this calendar.

        Raises:
            ValueError: If the text is not a date
        """
        pass


class GregorianCalendar(CalendarAdapter):
    """Adapter over ``datetime.date``."""

    name = "gregorian"

    def year(self, value):
        return value.year

    def day_of_year(self, value):
        return value.timetuple().tm_yday

    def add_days(self, value, days):
        return value.fromordinal(value.toordinal() + days)

    def compare(self, left, right):
        return (left > right) - (left < right)

    def clone(self, value):
        return value.fromordinal(value.toordinal())

    def parse(self, text):
        return parse_date(text)


class ImperialDate(NamedTuple):
    """A date in the Traveller calendar: year plus day 1-365."""

    year: int
    day: int

    def __str__(self) -> str:
        return f"{self.year}-{self.day:03d}"


_IMPERIAL_DATE_RE = re.compile(r"^(-?\d+)[-.](\d{1,3})$")


class TravellerCalendar(CalendarAdapter):
    """Traveller 2e calendar: every year has exactly 365 numbered days."""

    name = "traveller"

    def year(self, value):
        return value.year

    def day_of_year(self, value):
        return value.day

    def add_days(self, value, days):
        year, offset = divmod(value.year * DAYS_PER_YEAR + value.day - 1 + days, DAYS_PER_YEAR)
        return ImperialDate(year, offset + 1)

    def compare(self, left, right):
        left_key = (left.year, left.day)
        right_key = (right.year, right.day)
        return (left_key > right_key) - (left_key < right_key)

    def clone(self, value):
        return ImperialDate(value.year, value.day)

    def parse(self, text):
        """Parse ``YYYY-DDD`` or ``YYYY.DDD``."""
        match = _IMPERIAL_DATE_RE.match(text.strip())
        if not match:
            raise ValueError(f"Could not parse date '{text}': expected YEAR-DAY")
        year, day = int(match.group(1)), int(match.group(2))
        if not 1 <= day <= DAYS_PER_YEAR:
            raise ValueError(f"Could not parse date '{text}': day must be 1-{DAYS_PER_YEAR}")
        return ImperialDate(year, day)


DEFAULT_CALENDAR = GregorianCalendar()

CALENDARS = {
    GregorianCalendar.name: DEFAULT_CALENDAR,
    TravellerCalendar.name: TravellerCalendar(),
}


def get_calendar(name: str) -> CalendarAdapter:
    """Look up a calendar adapter by name.

    Raises:
        ValidationError: If no calendar has that name
    """
    try:
        return CALENDARS[name.strip().lower()]
    except KeyError:
        raise ValidationError(unknown_calendar(name))


def bucket_key(value: Any, calendar: CalendarAdapter = DEFAULT_CALENDAR) -> str:
    """Return the bucket key for a date, e.g. ``2023.005``."""
    day = calendar.day_of_year(value)
    if day > DAYS_PER_YEAR:
        # Leap days have no slot in a 365-day model; keep the key as-is.
        logger.debug("Day-of-year %d exceeds %d for date %s", day, DAYS_PER_YEAR, value)
    return f"{calendar.year(value)}.{day:03d}"


def bucket_sort_key(key: str) -> tuple[int, int]:
    """Return ``(year, day)`` for ordering bucket keys chronologically."""
    year, _, day = key.rpartition(".")
    return int(year), int(day)


def iter_dates(
    start_date: Any,
    end_date: Any,
    step: int = 1,
    calendar: CalendarAdapter = DEFAULT_CALENDAR,
) -> Iterator[Any]:
    """Yield dates from start to end inclusive, ``step`` days apart."""
    current = calendar.clone(start_date)
    while calendar.compare(current, end_date) <= 0:
        yield current
        # Stepping past the last representable date would raise.
        if calendar.compare(current, end_date) == 0:
            break
        current = calendar.add_days(current, step)


def make_bucket_names(
    interval: Interval,
    start_date: Any,
    end_date: Any,
    calendar: CalendarAdapter = DEFAULT_CALENDAR,
) -> list[str]:
    """Create the bucket keys between start_date and end_date inclusive.

    Returns an empty list when start_date is after end_date.
    """
    names = [
        bucket_key(current, calendar)
        for current in iter_dates(start_date, end_date, _INTERVAL_DAYS[interval], calendar)
    ]
    overflow = [name for name in names if bucket_sort_key(name)[1] > DAYS_PER_YEAR]
    if overflow:
        logger.warning(
            "Day-of-year exceeds %d for bucket(s) %s", DAYS_PER_YEAR, ", ".join(overflow)
        )
    return names


def bucket_transactions(
    bucket_names: Sequence[str],
    transactions: Sequence[Transaction],
    calendar: CalendarAdapter = DEFAULT_CALENDAR,
) -> dict[str, list[Transaction]]:
    """Sort transactions into buckets.

    Each transaction lands in the latest bucket not after its own date.
    Transactions dated before every bucket land in the first bucket. Assumes
    bucket_names are in chronological order.
    """
    buckets: dict[str, list[Transaction]] = {name: [] for name in bucket_names}
    if not bucket_names:
        if transactions:
            logger.debug("No buckets; dropping %d transaction(s)", len(transactions))
        return buckets

    ordered = [(bucket_sort_key(name), name) for name in bucket_names]
    folded = 0
    for txn in transactions:
        txn_key = bucket_sort_key(bucket_key(txn.date, calendar))

        target = bucket_names[0]
        for sort_key, name in ordered:
            if sort_key > txn_key:
                break
            target = name
        if txn_key < ordered[0][0]:
            folded += 1

        buckets[target].append(txn)

    if folded:
        logger.debug("Folded %d transaction(s) dated before %s into it", folded, bucket_names[0])
    return buckets


def clamp_date_range(
    start_date: Any,
    end_date: Any,
    max_days: int,
    calendar: CalendarAdapter = DEFAULT_CALENDAR,
    keep_start: bool = False,
) -> tuple[Any, Any, bool]:
    """Limit a date range to at most ``max_days`` days after its start.

    When the window is too wide the start date moves forward so the range
    still ends on ``end_date``. With ``keep_start`` the end date moves back
    instead.

    Returns:
        Tuple of (start_date, end_date, clamped)
    """
    if calendar.compare(calendar.add_days(end_date, -max_days), start_date) <= 0:
        return start_date, end_date, False
    if keep_start:
        return start_date, calendar.add_days(start_date, max_days), True
    return calendar.add_days(end_date, -max_days), end_date, True
