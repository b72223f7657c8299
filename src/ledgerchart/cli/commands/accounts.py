"""Account listing command."""

import click


@click.command("accounts")
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Show every account instead of hiding single-child parents",
)
@click.pass_context
def list_accounts(ctx, show_all: bool):
    """List the accounts used in the ledger."""
    service = ctx.obj["service"]
    names = sorted(service.accounts) if show_all else service.display_accounts()

    if not names:
        click.echo("No accounts found.")
        return

    for name in names:
        click.echo(name)


def register_commands(cli):
    """Register accounts command with main CLI."""
    cli.add_command(list_accounts)
