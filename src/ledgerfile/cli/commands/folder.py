"""Watched folder commands."""

import click
from ledgerfile.cli.commands.import_cmd import echo_folder_result
from ledgerfile.cli.error_handling import handle_domain_error, resolve_fiscal_year_or_exit
from ledgerfile.domain.errors import DomainError
from ledgerfile.domain.ingestion import InvoiceImportService
from ledgerfile.domain.watched_folder import WatchedFolderService


@click.group()
def folder_group():
    """Manage folders registered for scanning."""
    pass


@folder_group.command("add")
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.pass_context
def add_folder(ctx, path: str):
    """Register a folder for scanning.

    Examples:
        ledgerfile folder add ~/Documents/Kvitton
    """
    service = WatchedFolderService(ctx.obj["db"])
    try:
        folder = service.add_folder(path)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Registered folder '{folder.path}' (ID: {folder.id})")


@folder_group.command("list")
@click.pass_context
def list_folders(ctx):
    """List registered folders."""
    folders = WatchedFolderService(ctx.obj["db"]).list_folders()
    if not folders:
        click.echo("No folders registered.")
        return

    click.echo("\nFolders:")
    click.echo("-" * 80)
    for folder in folders:
        scanned = folder.last_scanned.strftime("%Y-%m-%d %H:%M") if folder.last_scanned else "never"
        click.echo(f"ID: {folder.id:3d} | {folder.path} | Last scanned: {scanned}")


@folder_group.command("remove")
@click.argument("folder_id", type=int)
@click.pass_context
def remove_folder(ctx, folder_id: int):
    """Unregister a folder. Invoices imported from it are kept."""
    try:
        WatchedFolderService(ctx.obj["db"]).remove_folder(folder_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed folder {folder_id}")


@folder_group.command("scan")
@click.argument("folder_id", type=int)
@click.option("--year", type=int, help="Fiscal year to file invoices under (defaults to the active year)")
@click.pass_context
def scan_folder(ctx, folder_id: int, year: int | None):
    """Import new documents from a registered folder.

    Documents that are already on file are skipped.
    """
    fiscal_year_id = resolve_fiscal_year_or_exit(ctx, year)
    service = InvoiceImportService(ctx.obj["db"], ctx.obj["extractor"], ctx.obj["extension"])
    try:
        result = service.scan_and_import(folder_id, fiscal_year_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_folder_result(result)


def register_commands(cli):
    """Register folder commands with main CLI."""
    cli.add_command(folder_group, name="folder")
