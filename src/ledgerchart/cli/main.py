"""Main CLI entry point."""

import dataclasses

import click

from ledgerchart.config import load_settings
from ledgerchart.domain.calendar import CALENDARS, get_calendar
from ledgerchart.domain.report import ChartService
from ledgerchart.logging_setup import configure_logging
from ledgerchart.utils.ledger_parser import load_ledger
from ledgerchart.cli.error_handling import handle_domain_error

# Import and register all commands at module level
from ledgerchart.cli.commands import accounts, buckets, chart


@click.group()
@click.option(
    "--ledger-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to ledger file (overrides LEDGERCHART_LEDGER_FILE environment variable)",
    envvar="LEDGERCHART_LEDGER_FILE",
)
@click.option("--assets-prefix", help="Account prefix counted as assets in net worth")
@click.option("--liabilities-prefix", help="Account prefix counted as liabilities in net worth")
@click.option(
    "--calendar",
    "calendar_name",
    type=click.Choice(sorted(CALENDARS)),
    default="gregorian",
    show_default=True,
    help="Calendar the ledger dates are written in",
)
@click.option("--log-level", help="Logging level (overrides LEDGERCHART_LOG_LEVEL)")
@click.pass_context
def cli(
    ctx,
    ledger_file: str | None,
    assets_prefix: str | None,
    liabilities_prefix: str | None,
    calendar_name: str,
    log_level: str | None,
):
    """Ledgerchart - balance charts for plain-text ledgers.

    Reads a ledger of dated transactions and prints daily net worth,
    account balance and account delta series.
    """
    ctx.ensure_object(dict)

    # Load the ledger only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    configure_logging(log_level)

    if ledger_file is None:
        click.echo(
            "Error: No ledger file given. Use --ledger-file or set LEDGERCHART_LEDGER_FILE.",
            err=True,
        )
        ctx.exit(1)

    try:
        settings = load_settings()
        calendar = get_calendar(calendar_name)
        transactions = load_ledger(ledger_file, calendar)
    except ValueError as e:
        handle_domain_error(ctx, e)

    overrides = {}
    if assets_prefix is not None:
        overrides["assets_prefix"] = assets_prefix
    if liabilities_prefix is not None:
        overrides["liabilities_prefix"] = liabilities_prefix
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    ctx.obj["settings"] = settings
    ctx.obj["calendar"] = calendar
    ctx.obj["service"] = ChartService(transactions, settings=settings, calendar=calendar)


# Register all commands
accounts.register_commands(cli)
buckets.register_commands(cli)
chart.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
