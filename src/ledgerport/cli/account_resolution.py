"""Account lookup for commands taking ``--account NAME|ID``."""

import click
from ledgerport.cli.error_handling import handle_domain_error
from ledgerport.domain.account import AccountService
from ledgerport.domain.entities import Account


def account_or_exit(ctx: click.Context, account: str) -> Account:
    """Return the account an --account value names, or exit with status 1."""
    try:
        return AccountService(ctx.obj["db"]).resolve_account(account)
    except ValueError as e:
        handle_domain_error(ctx, e)
