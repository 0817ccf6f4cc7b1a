"""Utility for resolving fiscal year numbers to IDs."""

from typing import Optional

from ledgerfile.domain.errors import NotFoundError, fiscal_year_number_not_found
from ledgerfile.domain.fiscal_year import FiscalYearService


def resolve_fiscal_year(fiscal_year_service: FiscalYearService, year: Optional[str | int]) -> int:
    """Resolve a fiscal year number to its ID, defaulting to the active year.

    Args:
        fiscal_year_service: FiscalYearService instance
        year: Year number (e.g. 2025 or "2025"), or None for the active year

    Returns:
        Fiscal year ID

    Raises:
        NotFoundError: If the year does not exist or no year is active
    """
    if year is None:
        active = fiscal_year_service.get_active_fiscal_year()
        if active is None:
            raise NotFoundError("No active fiscal year. Use --year or 'ledgerfile year activate'")
        return active.id

    try:
        year_number = int(year)
    except (ValueError, TypeError):
        raise NotFoundError(f"Fiscal year '{year}' not found")

    fiscal_year = fiscal_year_service.get_fiscal_year_by_year(year_number)
    if fiscal_year is None:
        raise NotFoundError(fiscal_year_number_not_found(year_number))
    return fiscal_year.id
