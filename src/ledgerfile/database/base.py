"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerfile.domain.entities import (
    Counterparty,
    FiscalYear,
    Invoice,
    InvoiceKind,
    WatchedFolder,
)


class Database(ABC):
    """Abstract database interface for ledgerfile."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Fiscal year operations
    @abstractmethod
    def create_fiscal_year(self, year: int, is_active: bool = False) -> int:
        """Create a fiscal year. Returns fiscal year ID."""
        pass

    @abstractmethod
    def get_fiscal_year(self, fiscal_year_id: int) -> Optional[FiscalYear]:
        """Get fiscal year by ID."""
        pass

    @abstractmethod
    def get_fiscal_year_by_year(self, year: int) -> Optional[FiscalYear]:
        """Get fiscal year by its year number."""
        pass

    @abstractmethod
    def list_fiscal_years(self) -> list[FiscalYear]:
        """List fiscal years, newest first."""
        pass

    @abstractmethod
    def set_active_fiscal_year(self, fiscal_year_id: int) -> None:
        """Mark one fiscal year active and all others inactive."""
        pass

    @abstractmethod
    def delete_fiscal_year(self, fiscal_year_id: int) -> None:
        """Delete a fiscal year."""
        pass

    @abstractmethod
    def count_invoices_for_fiscal_year(self, fiscal_year_id: int) -> int:
        """Count invoices of both variants filed under a fiscal year."""
        pass

    # Counterparty operations
    @abstractmethod
    def create_counterparty(
        self,
        kind: InvoiceKind,
        name: str,
        org_number: Optional[str] = None,
        address: Optional[str] = None,
        postal_code: Optional[str] = None,
        city: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> int:
        """Create a customer or supplier. Returns its ID."""
        pass

    @abstractmethod
    def get_counterparty(self, kind: InvoiceKind, counterparty_id: int) -> Optional[Counterparty]:
        """Get customer or supplier by ID."""
        pass

    @abstractmethod
    def list_counterparties(
        self, kind: InvoiceKind, creation_order: bool = False
    ) -> list[Counterparty]:
        """List customers or suppliers.

        Args:
            kind: Which register to list
            creation_order: If True, order by ID (creation order) instead of name
        """
        pass

    @abstractmethod
    def search_counterparties(self, kind: InvoiceKind, query: str) -> list[Counterparty]:
        """Search name, registration number and email by substring."""
        pass

    @abstractmethod
    def update_counterparty(self, kind: InvoiceKind, counterparty_id: int, **fields: Any) -> None:
        """Update customer or supplier fields."""
        pass

    @abstractmethod
    def delete_counterparty(self, kind: InvoiceKind, counterparty_id: int) -> None:
        """Delete a customer or supplier."""
        pass

    @abstractmethod
    def count_invoices_for_counterparty(self, kind: InvoiceKind, counterparty_id: int) -> int:
        """Count invoices referencing a customer or supplier."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        kind: InvoiceKind,
        fiscal_year_id: int,
        file_path: str,
        file_name: str,
        parsed_content: Optional[str] = None,
        invoice_date: Optional[date] = None,
        amount: Optional[Decimal] = None,
        vat: Optional[Decimal] = None,
        total: Optional[Decimal] = None,
        counterparty_id: Optional[int] = None,
        invoice_number: Optional[str] = None,
        due_date: Optional[date] = None,
        status: str = "imported",
    ) -> int:
        """Create an invoice of the given variant. Returns invoice ID.

        Raises:
            ConflictError: If an invoice of this variant already has file_path
        """
        pass

    @abstractmethod
    def get_invoice(self, kind: InvoiceKind, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def list_invoices(
        self,
        kind: InvoiceKind,
        fiscal_year_id: Optional[int] = None,
        counterparty_id: Optional[int] = None,
    ) -> list[Invoice]:
        """List invoices of one variant, newest invoice date first.

        Args:
            kind: Invoice variant
            fiscal_year_id: Optional fiscal year filter
            counterparty_id: Optional customer/supplier filter
        """
        pass

    @abstractmethod
    def invoice_exists_for_path(self, file_path: str) -> bool:
        """Check whether an invoice of either variant has exactly this path."""
        pass

    @abstractmethod
    def find_invoice_by_file_name(self, file_name: str, exclude_path: str) -> Optional[Invoice]:
        """Find an invoice of either variant with this file name but another path."""
        pass

    @abstractmethod
    def update_invoice(self, kind: InvoiceKind, invoice_id: int, **fields: Any) -> None:
        """Update invoice fields."""
        pass

    @abstractmethod
    def delete_invoice(self, kind: InvoiceKind, invoice_id: int) -> None:
        """Delete an invoice."""
        pass

    # Watched folder operations
    @abstractmethod
    def create_watched_folder(self, path: str) -> int:
        """Register a folder. Returns folder ID."""
        pass

    @abstractmethod
    def get_watched_folder(self, folder_id: int) -> Optional[WatchedFolder]:
        """Get watched folder by ID."""
        pass

    @abstractmethod
    def get_watched_folder_by_path(self, path: str) -> Optional[WatchedFolder]:
        """Get watched folder by path."""
        pass

    @abstractmethod
    def list_watched_folders(self) -> list[WatchedFolder]:
        """List watched folders ordered by path."""
        pass

    @abstractmethod
    def update_watched_folder_scanned(self, folder_id: int, scanned_at: datetime) -> None:
        """Stamp the last-scanned timestamp of a folder."""
        pass

    @abstractmethod
    def delete_watched_folder(self, folder_id: int) -> None:
        """Unregister a folder."""
        pass
