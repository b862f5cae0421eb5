"""CLI error rendering.

Every handled failure prints a single ``Error:`` line on stderr and exits
with status 1.
"""

import logging

import click
from sqlalchemy.exc import SQLAlchemyError

from ledgerport.domain.errors import DomainError, FormatDetectionError

logger = logging.getLogger(__name__)

DETECTION_HINT = "Hint: choose a bank preset with --preset or a saved mapping with --format."


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, FormatDetectionError):
        click.echo(DETECTION_HINT, err=True)
    ctx.exit(1)


def handle_repository_error(ctx: click.Context, error: SQLAlchemyError) -> None:
    """Report a failed batch write. Nothing from the batch was stored."""
    logger.debug("Batch write failed", exc_info=error)
    click.echo(
        f"Error: could not save transactions, nothing was imported ({type(error).__name__})",
        err=True,
    )
    ctx.exit(1)
