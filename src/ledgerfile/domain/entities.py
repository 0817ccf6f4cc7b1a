"""Domain model entities for ledgerfile.

These are pure data classes representing business concepts, independent of
database schema. Customer and supplier records share one shape and are told
apart by their ``kind``, mirroring the two tables they are stored in.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class InvoiceKind(str, Enum):
    """Which side of the business a document or counterparty belongs to."""

    CUSTOMER = "customer"
    SUPPLIER = "supplier"

    @property
    def other(self) -> "InvoiceKind":
        return InvoiceKind.SUPPLIER if self is InvoiceKind.CUSTOMER else InvoiceKind.CUSTOMER


@dataclass(frozen=True)
class FiscalYear:
    """Fiscal year domain entity."""

    id: int
    year: int
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Counterparty:
    """Customer or supplier domain entity."""

    id: int
    kind: InvoiceKind
    name: str
    org_number: Optional[str]
    created_at: datetime
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class Invoice:
    """Customer or supplier invoice domain entity."""

    id: int
    kind: InvoiceKind
    fiscal_year_id: int
    counterparty_id: Optional[int]
    invoice_number: Optional[str]
    invoice_date: Optional[date]
    due_date: Optional[date]
    amount: Optional[Decimal]
    vat: Optional[Decimal]
    total: Optional[Decimal]
    file_path: str
    file_name: str
    parsed_content: Optional[str]
    status: str
    created_at: datetime
    payment_date: Optional[date] = None


@dataclass(frozen=True)
class WatchedFolder:
    """Directory registered for repeated scanning."""

    id: int
    path: str
    last_scanned: Optional[datetime]
    created_at: datetime
