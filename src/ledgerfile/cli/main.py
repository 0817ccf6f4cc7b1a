"""Main CLI entry point."""

import logging

import click
from ledgerfile.database.factories import create_sqlite_database
from ledgerfile.domain.extraction import PdfTextExtractor
from ledgerfile.domain.folder_scan import DEFAULT_DOCUMENT_EXTENSION

# Import and register all commands at module level
from ledgerfile.cli.commands import (
    counterparty,
    fiscal_year,
    folder,
    import_cmd,
    invoice,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERFILE_DB_PATH environment variable)",
    envvar="LEDGERFILE_DB_PATH",
)
@click.option(
    "--extension",
    default=DEFAULT_DOCUMENT_EXTENSION,
    show_default=True,
    help="Extension of importable documents (overrides LEDGERFILE_DOCUMENT_EXTENSION)",
    envvar="LEDGERFILE_DOCUMENT_EXTENSION",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx, db_path: str | None, extension: str, verbose: bool):
    """Ledgerfile - file scanned invoices by fiscal year.

    Import folders of scanned customer and supplier invoices, keep track of
    what is already on file, and map invoices to customers and suppliers.
    """
    ctx.ensure_object(dict)
    setup_logging(verbose)

    if not extension.startswith("."):
        extension = f".{extension}"
    ctx.obj["extension"] = extension
    ctx.obj.setdefault("extractor", PdfTextExtractor())

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
fiscal_year.register_commands(cli)
folder.register_commands(cli)
import_cmd.register_commands(cli)
counterparty.register_commands(cli)
invoice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
