"""Mapper functions to convert between domain models and SQLAlchemy models.

Customer and supplier rows live in separate tables but map onto the same
domain entities, tagged with their ``InvoiceKind``.
"""

from ledgerfile.domain import entities as domain
from ledgerfile.domain.entities import InvoiceKind
from ledgerfile.database.models import (
    FiscalYear as ORMFiscalYear,
    Customer as ORMCustomer,
    Supplier as ORMSupplier,
    CustomerInvoice as ORMCustomerInvoice,
    SupplierInvoice as ORMSupplierInvoice,
    WatchedFolder as ORMWatchedFolder,
)


def fiscal_year_to_domain(orm_year: ORMFiscalYear) -> domain.FiscalYear:
    """Convert SQLAlchemy FiscalYear model to domain FiscalYear entity."""
    return domain.FiscalYear(
        id=orm_year.id,
        year=orm_year.year,
        is_active=bool(orm_year.is_active),
        created_at=orm_year.created_at,
    )


def counterparty_to_domain(orm_party: ORMCustomer | ORMSupplier) -> domain.Counterparty:
    """Convert a SQLAlchemy Customer or Supplier row to a domain Counterparty."""
    kind = InvoiceKind.CUSTOMER if isinstance(orm_party, ORMCustomer) else InvoiceKind.SUPPLIER
    return domain.Counterparty(
        id=orm_party.id,
        kind=kind,
        name=orm_party.name,
        org_number=orm_party.org_number,
        created_at=orm_party.created_at,
        address=orm_party.address,
        postal_code=orm_party.postal_code,
        city=orm_party.city,
        email=orm_party.email,
        phone=orm_party.phone,
    )


def customer_invoice_to_domain(orm_invoice: ORMCustomerInvoice) -> domain.Invoice:
    """Convert SQLAlchemy CustomerInvoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        kind=InvoiceKind.CUSTOMER,
        fiscal_year_id=orm_invoice.fiscal_year_id,
        counterparty_id=orm_invoice.customer_id,
        invoice_number=orm_invoice.invoice_number,
        invoice_date=orm_invoice.invoice_date,
        due_date=orm_invoice.due_date,
        amount=orm_invoice.amount,
        vat=orm_invoice.vat,
        total=orm_invoice.total,
        file_path=orm_invoice.file_path,
        file_name=orm_invoice.file_name,
        parsed_content=orm_invoice.parsed_content,
        status=orm_invoice.status,
        created_at=orm_invoice.created_at,
    )


def supplier_invoice_to_domain(orm_invoice: ORMSupplierInvoice) -> domain.Invoice:
    """Convert SQLAlchemy SupplierInvoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        kind=InvoiceKind.SUPPLIER,
        fiscal_year_id=orm_invoice.fiscal_year_id,
        counterparty_id=orm_invoice.supplier_id,
        invoice_number=orm_invoice.invoice_number,
        invoice_date=orm_invoice.invoice_date,
        due_date=orm_invoice.due_date,
        amount=orm_invoice.amount,
        vat=orm_invoice.vat,
        total=orm_invoice.total,
        file_path=orm_invoice.file_path,
        file_name=orm_invoice.file_name,
        parsed_content=orm_invoice.parsed_content,
        status=orm_invoice.status,
        created_at=orm_invoice.created_at,
        payment_date=orm_invoice.payment_date,
    )


def invoice_to_domain(orm_invoice: ORMCustomerInvoice | ORMSupplierInvoice) -> domain.Invoice:
    """Convert either invoice variant to a domain Invoice entity."""
    if isinstance(orm_invoice, ORMCustomerInvoice):
        return customer_invoice_to_domain(orm_invoice)
    return supplier_invoice_to_domain(orm_invoice)


def watched_folder_to_domain(orm_folder: ORMWatchedFolder) -> domain.WatchedFolder:
    """Convert SQLAlchemy WatchedFolder model to domain WatchedFolder entity."""
    return domain.WatchedFolder(
        id=orm_folder.id,
        path=orm_folder.path,
        last_scanned=orm_folder.last_scanned,
        created_at=orm_folder.created_at,
    )
