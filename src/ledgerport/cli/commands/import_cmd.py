"""CSV preview and import commands."""

from pathlib import Path

import click
from sqlalchemy.exc import SQLAlchemyError
from ledgerport.cli.account_resolution import account_or_exit
from ledgerport.cli.commands.format import echo_mapping
from ledgerport.cli.error_handling import handle_domain_error, handle_repository_error
from ledgerport.domain.csv_format import CSVFormatService
from ledgerport.domain.csv_import import CSVImportService, ImportSession
from ledgerport.domain.duplicate_detector import (
    DEFAULT_DATE_TOLERANCE_DAYS,
    DEFAULT_DUPLICATE_THRESHOLD,
    DuplicatePolicy,
)
from ledgerport.domain.import_models import Duplicate, ImportPreview, ImportTransactionPreview


def import_options(func):
    """Options shared by preview and import."""
    decorators = [
        click.argument("csv_file", type=click.Path(exists=True, dir_okay=False)),
        click.option("--account", required=True, help="Account name or ID"),
        click.option("--format", "format_name", help="Saved CSV format name"),
        click.option("--preset", help="Bank preset name (see 'format presets')"),
        click.option(
            "--threshold",
            type=click.FloatRange(0.0, 1.0),
            default=DEFAULT_DUPLICATE_THRESHOLD,
            show_default=True,
            envvar="LEDGERPORT_DUPLICATE_THRESHOLD",
            help="Minimum fuzzy score reported as a duplicate",
        ),
        click.option(
            "--date-tolerance",
            type=click.IntRange(min=0),
            default=DEFAULT_DATE_TOLERANCE_DAYS,
            show_default=True,
            envvar="LEDGERPORT_DATE_TOLERANCE_DAYS",
            help="Days apart that still count toward a duplicate match",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def start_import_session(
    ctx,
    csv_file: str,
    account: str,
    format_name: str | None,
    preset: str | None,
    threshold: float,
    date_tolerance: int,
) -> ImportSession:
    """Resolve the account and mapping, then parse and score the file."""
    db = ctx.obj["db"]
    account_id = account_or_exit(ctx, account).id
    try:
        content = Path(csv_file).read_text(encoding="utf-8-sig")
        mapping = CSVFormatService(db).resolve_mapping(format_name=format_name, preset=preset)
        policy = DuplicatePolicy(threshold=threshold, date_tolerance_days=date_tolerance)
        return CSVImportService(db, policy).start_session(content, account_id, mapping)
    except ValueError as e:
        handle_domain_error(ctx, e)


def describe_status(item: ImportTransactionPreview) -> str:
    if item.internal_duplicate_of is not None:
        return "DUP (repeated in file)"
    if isinstance(item.duplicate_status, Duplicate):
        return f"DUP ({item.duplicate_status.confidence:.0%})"
    return "NEW"


def echo_row_errors(preview: ImportPreview) -> None:
    for error in preview.errors:
        click.echo(f"    {error}", err=True)


@click.command("preview")
@import_options
@click.pass_context
def preview_csv(
    ctx,
    csv_file: str,
    account: str,
    format_name: str | None,
    preset: str | None,
    threshold: float,
    date_tolerance: int,
):
    """Show what importing CSV_FILE would do, without saving anything.

    Without --format or --preset the columns are detected from the header row.

    Examples:
        ledgerport preview export.csv --account Chase
        ledgerport preview export.csv --account 1 --preset "Wells Fargo"
    """
    session = start_import_session(
        ctx, csv_file, account, format_name, preset, threshold, date_tolerance
    )
    preview = session.preview

    if not format_name and not preset:
        click.echo("Detected format:")
        echo_mapping(session.mapping)

    click.echo(f"\n{'Date':<12} {'Amount':>14}  {'Merchant':<30} Status")
    click.echo("-" * 72)
    for item in preview.transactions:
        txn = item.transaction
        click.echo(
            f"{txn.date.isoformat():<12} {str(txn.amount):>14}  "
            f"{txn.merchant[:30]:<30} {describe_status(item)}"
        )

    click.echo(
        f"\nNew: {preview.new_count}, Duplicates: {preview.duplicate_count}, "
        f"Errors: {preview.error_count}"
    )
    if preview.errors:
        echo_row_errors(preview)


@click.command("import")
@import_options
@click.option(
    "--include-duplicates",
    is_flag=True,
    default=False,
    help="Also import rows flagged as duplicates",
)
@click.pass_context
def import_csv(
    ctx,
    csv_file: str,
    account: str,
    format_name: str | None,
    preset: str | None,
    threshold: float,
    date_tolerance: int,
    include_duplicates: bool,
):
    """Import transactions from CSV_FILE.

    Rows flagged as duplicates are skipped unless --include-duplicates is given.

    Examples:
        ledgerport import export.csv --account Chase
        ledgerport import export.csv --account 1 --format "My Chase"
    """
    session = start_import_session(
        ctx, csv_file, account, format_name, preset, threshold, date_tolerance
    )

    if include_duplicates:
        for item in session.preview.transactions:
            session.set_selected(item.id, True)

    try:
        result = session.commit()
    except SQLAlchemyError as e:
        handle_repository_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported_count} transactions")
    click.echo(f"  Skipped: {result.skipped_count}")
    click.echo(f"  Duplicates: {result.duplicate_count}")
    if result.errors:
        click.echo(f"  Errors: {result.error_count}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register preview and import commands with main CLI."""
    cli.add_command(preview_csv)
    cli.add_command(import_csv)
