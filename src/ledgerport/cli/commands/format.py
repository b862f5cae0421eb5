"""CSV format commands: presets, detection and saved mappings."""

from pathlib import Path

import click
from ledgerport.cli.account_resolution import account_or_exit
from ledgerport.cli.error_handling import handle_domain_error
from ledgerport.domain.column_mapping import BANK_PRESETS, ColumnMapping, get_preset
from ledgerport.domain.csv_format import CSVFormatService
from ledgerport.domain.row_extractor import CSVTransactionParser

DELIMITER_NAMES = {"comma": ",", "semicolon": ";", "tab": "\t", "pipe": "|"}


def describe_delimiter(delimiter: str) -> str:
    for name, char in DELIMITER_NAMES.items():
        if char == delimiter:
            return name
    return repr(delimiter)


def echo_mapping(mapping: ColumnMapping, indent: str = "  ") -> None:
    """Print a column mapping, one field per line."""
    click.echo(f"{indent}Date column: {mapping.date_column} ({mapping.date_format})")
    click.echo(f"{indent}Description column: {mapping.description_column}")
    if mapping.uses_debit_credit_columns:
        click.echo(f"{indent}Debit column: {mapping.debit_column}")
        click.echo(f"{indent}Credit column: {mapping.credit_column}")
    else:
        click.echo(f"{indent}Amount column: {mapping.amount_column}")
    click.echo(f"{indent}Delimiter: {describe_delimiter(mapping.delimiter)}")
    if not mapping.has_header:
        click.echo(f"{indent}No header row (columns are numbered from 1)")


@click.group()
def format_group():
    """Manage CSV formats."""
    pass


@format_group.command("presets")
def list_presets():
    """List built-in bank presets."""
    click.echo("\nBank presets:")
    click.echo("-" * 60)
    for name, mapping in BANK_PRESETS.items():
        click.echo(name)
        echo_mapping(mapping)


@format_group.command("detect")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def detect_format(ctx, csv_file: str):
    """Detect the column mapping of a CSV file."""
    try:
        content = Path(csv_file).read_text(encoding="utf-8-sig")
        mapping = CSVTransactionParser().detect_mapping(content)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Detected format for {Path(csv_file).name}:")
    echo_mapping(mapping)


@format_group.command("save")
@click.argument("name")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--preset", help="Copy a bank preset (see 'format presets')")
@click.option(
    "--detect",
    "detect_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Detect the mapping from a sample CSV file",
)
@click.option("--date-column", help="Date column name")
@click.option("--description-column", help="Description column name")
@click.option("--amount-column", help="Signed amount column name")
@click.option("--debit-column", help="Debit (outflow) column name")
@click.option("--credit-column", help="Credit (inflow) column name")
@click.option("--date-format", default="yyyy-MM-dd", show_default=True, help="Date pattern")
@click.option(
    "--delimiter",
    default="comma",
    show_default=True,
    help="comma, semicolon, tab, pipe or a single character",
)
@click.option("--no-header", is_flag=True, default=False, help="File has no header row")
@click.pass_context
def save_format(
    ctx,
    name: str,
    account: str,
    preset: str | None,
    detect_file: str | None,
    date_column: str | None,
    description_column: str | None,
    amount_column: str | None,
    debit_column: str | None,
    credit_column: str | None,
    date_format: str,
    delimiter: str,
    no_header: bool,
):
    """Save a column mapping under NAME for an account.

    Examples:
        ledgerport format save "My Chase" --account Chase --preset Chase
        ledgerport format save "Credit Union" --account 1 --detect export.csv
        ledgerport format save "Euro Bank" --account 2 --date-column Datum \\
            --description-column Omschrijving --amount-column Bedrag \\
            --date-format dd-MM-yyyy --delimiter semicolon
    """
    db = ctx.obj["db"]
    service = CSVFormatService(db)
    account_id = account_or_exit(ctx, account).id

    try:
        if preset and detect_file:
            raise click.UsageError("Use either --preset or --detect, not both")
        if preset:
            mapping = get_preset(preset)
        elif detect_file:
            content = Path(detect_file).read_text(encoding="utf-8-sig")
            mapping = CSVTransactionParser().detect_mapping(content)
        else:
            mapping = ColumnMapping(
                date_column=date_column or "",
                description_column=description_column or "",
                amount_column=amount_column,
                debit_column=debit_column,
                credit_column=credit_column,
                date_format=date_format,
                delimiter=DELIMITER_NAMES.get(delimiter.lower(), delimiter),
                has_header=not no_header,
            )
        format_id = service.save_format(name=name, account_id=account_id, mapping=mapping)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Saved CSV format '{name}' (ID: {format_id})")
    echo_mapping(mapping)


@format_group.command("list")
@click.option("--account", help="Filter by account name or ID")
@click.pass_context
def list_formats(ctx, account):
    """List saved CSV formats."""
    db = ctx.obj["db"]
    service = CSVFormatService(db)

    account_id = None
    if account:
        account_id = account_or_exit(ctx, account).id

    formats = service.list_formats(account_id=account_id)
    if not formats:
        click.echo("No CSV formats found.")
        return

    click.echo("\nCSV Formats:")
    click.echo("-" * 60)
    for fmt in formats:
        click.echo(f"{fmt.name} (ID: {fmt.id}, Account: {fmt.account_id})")
        echo_mapping(fmt.mapping)


def register_commands(cli):
    """Register format commands with main CLI."""
    cli.add_command(format_group, name="format")
