"""Customer and supplier registry service."""

from typing import Any, Optional

from ledgerfile.database.base import Database
from ledgerfile.domain.entities import Counterparty, InvoiceKind
from ledgerfile.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    counterparty_not_found,
    delete_blocked,
)
from ledgerfile.domain.resolver import CounterpartyResolver


class CounterpartyService:
    """Service for managing customers or suppliers.

    One instance handles one registry, selected by ``kind``.
    """

    def __init__(self, db: Database, kind: InvoiceKind):
        """Initialize counterparty service.

        Args:
            db: Database instance
            kind: InvoiceKind.CUSTOMER or InvoiceKind.SUPPLIER
        """
        self.db = db
        self.kind = kind
        self.resolver = CounterpartyResolver(db, kind)

    def create_counterparty(
        self,
        name: str,
        org_number: Optional[str] = None,
        address: Optional[str] = None,
        postal_code: Optional[str] = None,
        city: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> int:
        """Create a customer or supplier.

        Returns:
            ID of the new record

        Raises:
            ValidationError: If name is empty
        """
        name = name.strip() if name else ""
        if not name:
            raise ValidationError(f"{self.kind.value.capitalize()} name cannot be empty")

        return self.db.create_counterparty(
            self.kind,
            name=name,
            org_number=org_number or None,
            address=address,
            postal_code=postal_code,
            city=city,
            email=email,
            phone=phone,
        )

    def get_counterparty(self, counterparty_id: int) -> Optional[Counterparty]:
        """Get customer or supplier by ID."""
        return self.db.get_counterparty(self.kind, counterparty_id)

    def list_counterparties(self) -> list[Counterparty]:
        """List all records ordered by name."""
        return self.db.list_counterparties(self.kind)

    def search_counterparties(self, query: str) -> list[Counterparty]:
        """Find records whose name, registration number or email contains query."""
        query = query.strip()
        if not query:
            return self.list_counterparties()
        return self.db.search_counterparties(self.kind, query)

    def update_counterparty(self, counterparty_id: int, **fields: Any) -> None:
        """Update fields of a record.

        Raises:
            ValidationError: If the name is blanked or a field is unknown
            NotFoundError: If the record does not exist
        """
        if "name" in fields and not (fields["name"] or "").strip():
            raise ValidationError(f"{self.kind.value.capitalize()} name cannot be empty")
        self.db.update_counterparty(self.kind, counterparty_id, **fields)

    def delete_counterparty(self, counterparty_id: int) -> None:
        """Delete a record that no invoice refers to.

        Raises:
            NotFoundError: If the record does not exist
            DependencyError: If invoices refer to it
        """
        if self.db.get_counterparty(self.kind, counterparty_id) is None:
            raise NotFoundError(counterparty_not_found(self.kind.value, counterparty_id))

        invoice_count = self.db.count_invoices_for_counterparty(self.kind, counterparty_id)
        if invoice_count > 0:
            raise DependencyError(delete_blocked(f"{self.kind.value} {counterparty_id}", invoice_count))

        self.db.delete_counterparty(self.kind, counterparty_id)

    def find_or_create(self, name: str, org_number: Optional[str] = None) -> int:
        """Resolve a name to an existing record or create a new one."""
        return self.resolver.find_or_create(name, org_number)
