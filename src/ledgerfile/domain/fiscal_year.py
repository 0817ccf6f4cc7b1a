"""Fiscal year domain service."""

import logging
from typing import Optional

from ledgerfile.database.base import Database
from ledgerfile.domain.entities import FiscalYear
from ledgerfile.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    delete_blocked,
    fiscal_year_not_found,
)

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2999


class FiscalYearService:
    """Service for managing fiscal years."""

    def __init__(self, db: Database):
        """Initialize fiscal year service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_fiscal_year(self, year: int, is_active: bool = False) -> FiscalYear:
        """Create a new fiscal year.

        Args:
            year: Four-digit year
            is_active: Make the new year the active one

        Returns:
            Created fiscal year

        Raises:
            ValidationError: If year is out of range
            ConflictError: If the year already exists
        """
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise ValidationError(f"Invalid fiscal year: {year}")

        fiscal_year_id = self.db.create_fiscal_year(year)
        if is_active:
            self.db.set_active_fiscal_year(fiscal_year_id)
        logger.info("Created fiscal year %d", year)
        return self.db.get_fiscal_year(fiscal_year_id)

    def get_fiscal_year(self, fiscal_year_id: int) -> Optional[FiscalYear]:
        """Get fiscal year by ID."""
        return self.db.get_fiscal_year(fiscal_year_id)

    def get_fiscal_year_by_year(self, year: int) -> Optional[FiscalYear]:
        """Get fiscal year by its year number."""
        return self.db.get_fiscal_year_by_year(year)

    def list_fiscal_years(self) -> list[FiscalYear]:
        """List fiscal years, newest first."""
        return self.db.list_fiscal_years()

    def get_active_fiscal_year(self) -> Optional[FiscalYear]:
        """Return the active fiscal year, if one is set."""
        for fiscal_year in self.db.list_fiscal_years():
            if fiscal_year.is_active:
                return fiscal_year
        return None

    def set_active_fiscal_year(self, fiscal_year_id: int) -> None:
        """Make a fiscal year the only active one.

        Raises:
            NotFoundError: If the fiscal year does not exist
        """
        self.db.set_active_fiscal_year(fiscal_year_id)

    def get_or_create(self, year: int) -> tuple[FiscalYear, bool]:
        """Look up a fiscal year by number, creating it inactive if missing.

        Returns:
            Tuple of (fiscal year, whether it was created)
        """
        existing = self.db.get_fiscal_year_by_year(year)
        if existing is not None:
            return existing, False
        return self.create_fiscal_year(year), True

    def delete_fiscal_year(self, fiscal_year_id: int) -> None:
        """Delete a fiscal year without invoices.

        Raises:
            NotFoundError: If the fiscal year does not exist
            DependencyError: If invoices are filed under it
        """
        fiscal_year = self.db.get_fiscal_year(fiscal_year_id)
        if fiscal_year is None:
            raise NotFoundError(fiscal_year_not_found(fiscal_year_id))

        invoice_count = self.db.count_invoices_for_fiscal_year(fiscal_year_id)
        if invoice_count > 0:
            raise DependencyError(delete_blocked(f"fiscal year {fiscal_year.year}", invoice_count))

        self.db.delete_fiscal_year(fiscal_year_id)
