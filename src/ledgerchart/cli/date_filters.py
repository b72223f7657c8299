"""CLI helpers for date range resolution."""

from typing import Any

import click

from ledgerchart.domain.calendar import CalendarAdapter, clamp_date_range
from ledgerchart.logging_setup import get_logger

logger = get_logger(__name__)


def date_range_options(command):
    """Attach --start-date and --end-date options to a command."""
    command = click.option(
        "--end-date",
        help="Last day to chart (YYYY-MM-DD or YYYY.DDD; defaults to the last transaction)",
    )(command)
    command = click.option(
        "--start-date",
        help="First day to chart (defaults to the widest window ending on the end date)",
    )(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    calendar: CalendarAdapter,
    default_end: Any,
    max_days: int,
) -> tuple[Any, Any]:
    """Resolve CLI start and end dates, limiting the window to max_days."""
    start = None
    end = None

    if start_date:
        try:
            start = calendar.parse(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = calendar.parse(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if end is None:
        if default_end is not None:
            end = default_end
        elif start is not None:
            end = start
        else:
            click.echo(
                "Error: Ledger has no transactions. Specify --start-date or --end-date.",
                err=True,
            )
            ctx.exit(1)

    if start is None:
        start = calendar.add_days(end, -max_days)

    if calendar.compare(start, end) > 0:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    # A start given without an end keeps the start and shortens the end.
    keep_start = bool(start_date) and not end_date
    start, end, clamped = clamp_date_range(start, end, max_days, calendar, keep_start=keep_start)
    if clamped:
        adjusted = "end" if keep_start else "start"
        logger.warning("Date range clamped to %d days", max_days)
        click.echo(
            f"Warning: Exceeded maximum time window of {max_days} days. Adjusting {adjusted} date.",
            err=True,
        )

    return start, end
