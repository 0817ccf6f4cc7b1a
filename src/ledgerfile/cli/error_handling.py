"""CLI error handling helpers."""

from typing import NoReturn

import click

from ledgerfile.domain.errors import DomainError
from ledgerfile.domain.fiscal_year import FiscalYearService
from ledgerfile.utils.fiscal_year_resolver import resolve_fiscal_year


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> NoReturn:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def resolve_fiscal_year_or_exit(ctx: click.Context, year: str | int | None) -> int:
    """Resolve a fiscal year number (or the active year), or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_fiscal_year(FiscalYearService(ctx.obj["db"]), year)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
