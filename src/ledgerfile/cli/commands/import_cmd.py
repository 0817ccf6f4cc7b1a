"""Invoice import commands."""

import click
from ledgerfile.cli.error_handling import handle_domain_error, resolve_fiscal_year_or_exit
from ledgerfile.domain.errors import DomainError
from ledgerfile.domain.folder_scan import scan_year_folder
from ledgerfile.domain.ingestion import (
    ROOT_FOLDER_LABEL,
    FolderImportResult,
    InvoiceImportService,
    PossibleDuplicate,
)


def echo_possible_duplicates(duplicates: list[PossibleDuplicate]) -> None:
    """Print documents imported under a name that is already on file elsewhere."""
    if not duplicates:
        return
    click.echo(f"  Possible duplicates: {len(duplicates)}")
    for dup in duplicates:
        click.echo(f"    {dup.new_path}")
        click.echo(f"      same name as {dup.existing_kind.value} invoice {dup.existing_path}")


def echo_folder_result(result: FolderImportResult) -> None:
    """Print counts and errors of a folder import."""
    click.echo(f"\nImport complete ({result.folder_name}):")
    click.echo(f"  Imported: {result.imported} invoices")
    click.echo(f"    Customer: {result.customer_invoices}")
    click.echo(f"    Supplier: {result.supplier_invoices}")
    click.echo(f"  Skipped: {result.skipped} already imported")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)
    echo_possible_duplicates(result.possible_duplicates)


def _import_service(ctx) -> InvoiceImportService:
    return InvoiceImportService(ctx.obj["db"], ctx.obj["extractor"], ctx.obj["extension"])


@click.group("import")
def import_group():
    """Import scanned invoices."""
    pass


@import_group.command("preview")
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.pass_context
def preview_year(ctx, path: str):
    """Show what importing a year folder would pick up."""
    try:
        preview = scan_year_folder(path, ctx.obj["extension"])
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)

    detected = preview.detected_year if preview.detected_year is not None else "not detected"
    click.echo(f"\nFolder: {preview.folder_name}")
    click.echo(f"Year: {detected}")
    click.echo("-" * 60)
    for month_folder in preview.month_folders:
        month = f"{month_folder.month:02d}" if month_folder.month is not None else "??"
        click.echo(f"  [{month}] {month_folder.name:30s} {month_folder.document_count:4d} documents")
    if preview.root_document_count:
        click.echo(f"  [--] {ROOT_FOLDER_LABEL:30s} {preview.root_document_count:4d} documents")
    click.echo("-" * 60)
    click.echo(f"Total: {preview.total_document_count} documents")


@import_group.command("year")
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option("--year", type=int, help="Fiscal year (defaults to the year in the folder name)")
@click.pass_context
def import_year(ctx, path: str, year: int | None):
    """Import a year folder with one sub-folder per month.

    The fiscal year is created if it does not exist yet.

    Examples:
        ledgerfile import year "~/Bokföring 2025"
        ledgerfile import year ~/scans --year 2025
    """
    service = _import_service(ctx)
    try:
        if year is None:
            year = scan_year_folder(path, ctx.obj["extension"]).detected_year
            if year is None:
                raise DomainError("Could not detect a year from the folder name; use --year")
        result = service.import_year(path, year)
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)

    if result.fiscal_year_created:
        click.echo(f"Created fiscal year {result.year}")
    for folder_result in result.folder_results:
        click.echo(
            f"  {folder_result.folder_name:30s} imported {folder_result.imported:4d}, "
            f"skipped {folder_result.skipped:4d}"
        )
    click.echo(f"\nImport complete ({result.year}):")
    click.echo(f"  Imported: {result.total_imported} invoices")
    click.echo(f"  Skipped: {result.total_skipped} already imported")
    if result.total_errors:
        click.echo(f"  Errors: {len(result.total_errors)}")
        for error in result.total_errors:
            click.echo(f"    {error}", err=True)
    echo_possible_duplicates(result.total_possible_duplicates)


@import_group.command("folder")
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option("--year", type=int, help="Fiscal year (defaults to the active year)")
@click.pass_context
def import_folder(ctx, path: str, year: int | None):
    """Import the documents directly inside a folder."""
    fiscal_year_id = resolve_fiscal_year_or_exit(ctx, year)
    result = _import_service(ctx).import_folder(path, fiscal_year_id)
    echo_folder_result(result)


@import_group.command("files")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--year", type=int, help="Fiscal year (defaults to the active year)")
@click.pass_context
def import_files(ctx, paths: tuple[str, ...], year: int | None):
    """Import selected documents.

    A single document that is already on file is reported as an error;
    with several documents it is skipped.
    """
    fiscal_year_id = resolve_fiscal_year_or_exit(ctx, year)
    service = _import_service(ctx)

    if len(paths) == 1:
        try:
            invoice = service.import_file(paths[0], fiscal_year_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Imported {invoice.file_name} as {invoice.kind.value} invoice (ID: {invoice.id})")
        return

    echo_folder_result(service.import_files(paths, fiscal_year_id))


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_group, name="import")
