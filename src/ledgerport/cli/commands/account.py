"""Account management commands."""

import click
from ledgerport.cli.error_handling import handle_domain_error
from ledgerport.domain.account import AccountService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--bank", help="Bank name (defaults to account name if not provided)")
@click.option("--currency", default="USD", show_default=True, help="ISO currency code")
@click.pass_context
def create_account(ctx, name: str, bank: str | None, currency: str):
    """Create a new account.

    If --bank is not provided, the bank name will be set to the account name.

    Examples:
        ledgerport account create "Chase"
        ledgerport account create "My Checking" --bank "Chase"
        ledgerport account create "BDO Savings" --bank "BDO" --currency PHP
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    # If bank not provided, use account name as bank name
    bank_name = bank if bank is not None else name

    try:
        account_id = service.create_account(name=name, bank_name=bank_name, currency=currency)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{name}' (ID: {account_id}, Currency: {currency.upper()})")
    if bank is None:
        click.echo(f"Bank name set to '{bank_name}'")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | Bank: {acc.bank_name} | {acc.currency.code}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
