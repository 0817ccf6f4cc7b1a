"""Invoice domain service."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from ledgerfile.database.base import Database
from ledgerfile.domain.amounts import extract_invoice_amounts
from ledgerfile.domain.classifier import suggest_counterparty_name
from ledgerfile.domain.entities import FiscalYear, Invoice, InvoiceKind
from ledgerfile.domain.errors import (
    DomainError,
    NotFoundError,
    ValidationError,
    counterparty_not_found,
    fiscal_year_not_found,
    invoice_not_found,
)
from ledgerfile.domain.resolver import CounterpartyResolver

logger = logging.getLogger(__name__)


@dataclass
class ReextractResult:
    """Outcome of re-running amount extraction over stored invoice text."""

    updated: int = 0
    unchanged: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class AssignResult:
    """Outcome of mapping invoices to counterparties by file name."""

    assigned: int = 0
    unmatched: list[str] = field(default_factory=list)


class InvoiceService:
    """Service for managing imported customer and supplier invoices."""

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_invoices(
        self,
        kind: InvoiceKind,
        fiscal_year_id: Optional[int] = None,
        counterparty_id: Optional[int] = None,
    ) -> list[Invoice]:
        """List invoices of one kind, newest invoice date first."""
        return self.db.list_invoices(kind, fiscal_year_id=fiscal_year_id, counterparty_id=counterparty_id)

    def get_invoice(self, kind: InvoiceKind, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        return self.db.get_invoice(kind, invoice_id)

    def _require_invoice(self, kind: InvoiceKind, invoice_id: int) -> Invoice:
        invoice = self.db.get_invoice(kind, invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(kind.value, invoice_id))
        return invoice

    def update_invoice(self, kind: InvoiceKind, invoice_id: int, **fields: Any) -> None:
        """Update invoice fields.

        Args:
            kind: Invoice kind
            invoice_id: Invoice ID
            **fields: Any of counterparty_id, invoice_number, invoice_date,
                due_date, amount, vat, total, status and (supplier only)
                payment_date

        Raises:
            NotFoundError: If the invoice or the referenced counterparty does not exist
            ValidationError: If a field is unknown or not valid for the kind
        """
        counterparty_id = fields.get("counterparty_id")
        if counterparty_id is not None and self.db.get_counterparty(kind, counterparty_id) is None:
            raise NotFoundError(counterparty_not_found(kind.value, counterparty_id))
        if "status" in fields and not (fields["status"] or "").strip():
            raise ValidationError("Status cannot be empty")

        self.db.update_invoice(kind, invoice_id, **fields)

    def update_amounts(
        self,
        kind: InvoiceKind,
        invoice_id: int,
        amount: Decimal,
        vat: Decimal,
        total: Optional[Decimal] = None,
    ) -> None:
        """Correct the amounts of an invoice.

        The total defaults to amount plus VAT.
        """
        if total is None:
            total = amount + vat
        self.db.update_invoice(kind, invoice_id, amount=amount, vat=vat, total=total)

    def delete_invoice(self, kind: InvoiceKind, invoice_id: int) -> None:
        """Delete an invoice.

        Raises:
            NotFoundError: If the invoice does not exist
        """
        self.db.delete_invoice(kind, invoice_id)

    def move_to_other_kind(self, kind: InvoiceKind, invoice_id: int) -> int:
        """Move a misclassified invoice to the other kind.

        The counterparty mapping and payment date are dropped since they refer
        to the old kind's registry.

        Returns:
            ID of the invoice in its new table
        """
        invoice = self._require_invoice(kind, invoice_id)
        new_id = self.db.create_invoice(
            kind.other,
            fiscal_year_id=invoice.fiscal_year_id,
            file_path=invoice.file_path,
            file_name=invoice.file_name,
            parsed_content=invoice.parsed_content,
            invoice_date=invoice.invoice_date,
            amount=invoice.amount,
            vat=invoice.vat,
            total=invoice.total,
            invoice_number=invoice.invoice_number,
            due_date=invoice.due_date,
            status=invoice.status,
        )
        self.db.delete_invoice(kind, invoice_id)
        logger.info("Moved %s invoice %d to %s invoice %d", kind.value, invoice_id, kind.other.value, new_id)
        return new_id

    def list_by_counterparty(
        self, kind: InvoiceKind, counterparty_id: int
    ) -> tuple[list[Invoice], list[FiscalYear]]:
        """List a counterparty's invoices and the fiscal years they span.

        Returns:
            Tuple of (invoices newest first, distinct fiscal years newest first)

        Raises:
            NotFoundError: If the counterparty does not exist
        """
        if self.db.get_counterparty(kind, counterparty_id) is None:
            raise NotFoundError(counterparty_not_found(kind.value, counterparty_id))

        invoices = self.db.list_invoices(kind, counterparty_id=counterparty_id)
        year_ids = {inv.fiscal_year_id for inv in invoices}
        years = [fy for fy in self.db.list_fiscal_years() if fy.id in year_ids]
        return invoices, years

    def reextract_amounts(self, fiscal_year_id: int) -> ReextractResult:
        """Re-run amount extraction on the stored text of every invoice in a year.

        Invoices without stored text, or whose text yields no amounts, are
        left unchanged.

        Raises:
            NotFoundError: If the fiscal year does not exist
        """
        if self.db.get_fiscal_year(fiscal_year_id) is None:
            raise NotFoundError(fiscal_year_not_found(fiscal_year_id))

        result = ReextractResult()
        for kind in InvoiceKind:
            for invoice in self.db.list_invoices(kind, fiscal_year_id=fiscal_year_id):
                amounts = extract_invoice_amounts(invoice.parsed_content)
                if not amounts.found:
                    result.unchanged += 1
                    continue
                try:
                    self.db.update_invoice(
                        kind, invoice.id, amount=amounts.amount, vat=amounts.vat, total=amounts.total
                    )
                except DomainError as e:
                    result.errors.append(f"{invoice.file_name}: {e}")
                    continue
                result.updated += 1
        return result

    def assign_counterparty_from_filename(self, kind: InvoiceKind, invoice_id: int) -> int:
        """Map an invoice to a counterparty named in its file name.

        The name is resolved through the find-or-create cascade, so an
        unknown name creates a new customer or supplier.

        Returns:
            ID of the assigned counterparty

        Raises:
            NotFoundError: If the invoice does not exist
            ValidationError: If the file name holds no usable name
        """
        invoice = self._require_invoice(kind, invoice_id)
        name = suggest_counterparty_name(invoice.file_name)
        if name is None:
            raise ValidationError(f"No {kind.value} name found in '{invoice.file_name}'")

        counterparty_id = CounterpartyResolver(self.db, kind).find_or_create(name)
        self.db.update_invoice(kind, invoice_id, counterparty_id=counterparty_id)
        return counterparty_id

    def assign_unmapped_from_filenames(self, kind: InvoiceKind, fiscal_year_id: int) -> AssignResult:
        """Map every invoice of a year that has no counterparty yet.

        File names without a usable name are reported, not treated as errors.
        """
        if self.db.get_fiscal_year(fiscal_year_id) is None:
            raise NotFoundError(fiscal_year_not_found(fiscal_year_id))

        result = AssignResult()
        for invoice in self.db.list_invoices(kind, fiscal_year_id=fiscal_year_id):
            if invoice.counterparty_id is not None:
                continue
            try:
                self.assign_counterparty_from_filename(kind, invoice.id)
            except ValidationError:
                result.unmatched.append(invoice.file_name)
                continue
            result.assigned += 1
        return result
