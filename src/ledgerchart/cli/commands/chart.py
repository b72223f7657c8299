"""Chart series commands."""

import json
from typing import Sequence

import click

from ledgerchart.cli.date_filters import date_range_options, resolve_cli_date_range
from ledgerchart.cli.error_handling import handle_domain_error
from ledgerchart.domain.entities import ChartPoint
from ledgerchart.domain.errors import DomainError


def _resolve_range(ctx, start_date, end_date):
    service = ctx.obj["service"]
    return resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        calendar=ctx.obj["calendar"],
        default_end=service.last_date(),
        max_days=ctx.obj["settings"].max_window_days,
    )


def _build_report(ctx, start_date, end_date, accounts=()):
    start, end = _resolve_range(ctx, start_date, end_date)
    try:
        return ctx.obj["service"].build_chart_report(start, end, accounts=accounts)
    except DomainError as e:
        handle_domain_error(ctx, e)


def _echo_series(title: str, series: Sequence[ChartPoint], output_format: str) -> None:
    """Print a chart series as a table or as JSON."""
    if output_format == "json":
        click.echo(json.dumps([point.to_dict() for point in series], indent=2))
        return

    if not series:
        click.echo("No buckets in range.")
        return

    click.echo(f"\n{title}")
    click.echo("-" * 30)
    click.echo(f"{'Bucket':<12} {'Value':>17}")
    click.echo("-" * 30)
    for point in series:
        click.echo(f"{point.x:<12} {point.y:>17,.2f}")


format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Output format",
)


@click.command("networth")
@date_range_options
@format_option
@click.pass_context
def networth(ctx, start_date: str, end_date: str, output_format: str):
    """Show net worth (assets plus liabilities) for each day."""
    report = _build_report(ctx, start_date, end_date)
    _echo_series("Net Worth", report.net_worth, output_format)


@click.command("balance")
@click.argument("account")
@date_range_options
@format_option
@click.pass_context
def balance(ctx, account: str, start_date: str, end_date: str, output_format: str):
    """Show the balance of ACCOUNT and its sub-accounts for each day."""
    report = _build_report(ctx, start_date, end_date, accounts=(account,))
    _echo_series(f"Balance: {account}", report.balances[account], output_format)


@click.command("delta")
@click.argument("account")
@date_range_options
@format_option
@click.pass_context
def delta(ctx, account: str, start_date: str, end_date: str, output_format: str):
    """Show the daily change in balance of ACCOUNT and its sub-accounts."""
    report = _build_report(ctx, start_date, end_date, accounts=(account,))
    _echo_series(f"Change: {account}", report.deltas[account], output_format)


def register_commands(cli):
    """Register chart commands with main CLI."""
    cli.add_command(networth)
    cli.add_command(balance)
    cli.add_command(delta)
