"""Fiscal year management commands."""

import click
from ledgerfile.cli.error_handling import handle_domain_error, resolve_fiscal_year_or_exit
from ledgerfile.domain.errors import DomainError
from ledgerfile.domain.fiscal_year import FiscalYearService


@click.group()
def year_group():
    """Manage fiscal years."""
    pass


@year_group.command("create")
@click.argument("year", type=int)
@click.option("--activate", is_flag=True, help="Make the new year the active one")
@click.pass_context
def create_year(ctx, year: int, activate: bool):
    """Create a fiscal year.

    Examples:
        ledgerfile year create 2025
        ledgerfile year create 2025 --activate
    """
    service = FiscalYearService(ctx.obj["db"])
    try:
        fiscal_year = service.create_fiscal_year(year, is_active=activate)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created fiscal year {fiscal_year.year} (ID: {fiscal_year.id})")
    if fiscal_year.is_active:
        click.echo("Fiscal year is now active")


@year_group.command("list")
@click.pass_context
def list_years(ctx):
    """List fiscal years, newest first."""
    service = FiscalYearService(ctx.obj["db"])

    fiscal_years = service.list_fiscal_years()
    if not fiscal_years:
        click.echo("No fiscal years found.")
        return

    click.echo("\nFiscal years:")
    click.echo("-" * 40)
    for fy in fiscal_years:
        marker = " (active)" if fy.is_active else ""
        click.echo(f"ID: {fy.id:3d} | {fy.year}{marker}")


@year_group.command("activate")
@click.argument("year", type=int)
@click.pass_context
def activate_year(ctx, year: int):
    """Make a fiscal year the active one.

    Commands that take --year default to the active fiscal year.
    """
    fiscal_year_id = resolve_fiscal_year_or_exit(ctx, year)
    try:
        FiscalYearService(ctx.obj["db"]).set_active_fiscal_year(fiscal_year_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Fiscal year {year} is now active")


@year_group.command("delete")
@click.argument("year", type=int)
@click.pass_context
def delete_year(ctx, year: int):
    """Delete a fiscal year that has no invoices."""
    fiscal_year_id = resolve_fiscal_year_or_exit(ctx, year)
    try:
        FiscalYearService(ctx.obj["db"]).delete_fiscal_year(fiscal_year_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted fiscal year {year}")


def register_commands(cli):
    """Register fiscal year commands with main CLI."""
    cli.add_command(year_group, name="year")
