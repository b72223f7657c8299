"""Bucket listing command."""

import click

from ledgerchart.cli.date_filters import date_range_options, resolve_cli_date_range


@click.command("buckets")
@date_range_options
@click.pass_context
def list_buckets(ctx, start_date: str, end_date: str):
    """List daily buckets and the transactions assigned to each.

    Transactions dated before the first bucket are counted in the first one.
    """
    service = ctx.obj["service"]
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        calendar=ctx.obj["calendar"],
        default_end=service.last_date(),
        max_days=ctx.obj["settings"].max_window_days,
    )
    buckets = service.bucket_transactions(start, end)

    if not buckets:
        click.echo("No buckets in range.")
        return

    click.echo(f"\n{'Bucket':<12} {'Count':>6}  Payees")
    click.echo("-" * 60)
    for name, transactions in buckets.items():
        payees = ", ".join(txn.payee for txn in transactions if txn.payee)
        click.echo(f"{name:<12} {len(transactions):>6}  {payees[:40]}")


def register_commands(cli):
    """Register buckets command with main CLI."""
    cli.add_command(list_buckets)
