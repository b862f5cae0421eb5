"""Main CLI entry point."""

import logging

import click
from ledgerport import __version__
from ledgerport.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerport.cli.commands import (
    account,
    format,
    import_cmd,
)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(version=__version__, prog_name="ledgerport")
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERPORT_DB_PATH environment variable)",
    envvar="LEDGERPORT_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Ledgerport - bank CSV importer.

    Import transaction exports from any bank, auto-detect their columns,
    and review likely duplicates before they are saved.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
format.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
