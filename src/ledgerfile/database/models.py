"""SQLAlchemy models for ledgerfile database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    Index,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FiscalYear(Base):
    """Fiscal year model."""

    __tablename__ = "fiscal_years"

    id = Column(Integer, primary_key=True)
    year = Column(Integer, unique=True, nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Customer(Base):
    """Customer register model."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    org_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    city = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    invoices = relationship("CustomerInvoice", back_populates="customer")


class Supplier(Base):
    """Supplier register model."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    org_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    city = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    invoices = relationship("SupplierInvoice", back_populates="supplier")


class CustomerInvoice(Base):
    """Outgoing invoice model."""

    __tablename__ = "customer_invoices"

    id = Column(Integer, primary_key=True)
    fiscal_year_id = Column(Integer, ForeignKey("fiscal_years.id"), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    invoice_number = Column(String, nullable=True)
    invoice_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    vat = Column(Numeric(12, 2), nullable=True)
    total = Column(Numeric(12, 2), nullable=True)
    file_path = Column(String, nullable=False)
    file_name = Column(String, nullable=False)
    parsed_content = Column(Text, nullable=True)
    status = Column(String, default="imported", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # The file path is the de-duplication key for imports
    __table_args__ = (
        UniqueConstraint("file_path", name="uq_customer_invoice_file_path"),
        Index("idx_customer_invoices_fiscal_year", "fiscal_year_id"),
        Index("idx_customer_invoices_customer", "customer_id"),
    )

    customer = relationship("Customer", back_populates="invoices")
    fiscal_year = relationship("FiscalYear")


class SupplierInvoice(Base):
    """Incoming invoice model."""

    __tablename__ = "supplier_invoices"

    id = Column(Integer, primary_key=True)
    fiscal_year_id = Column(Integer, ForeignKey("fiscal_years.id"), nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    invoice_number = Column(String, nullable=True)
    invoice_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    vat = Column(Numeric(12, 2), nullable=True)
    total = Column(Numeric(12, 2), nullable=True)
    file_path = Column(String, nullable=False)
    file_name = Column(String, nullable=False)
    parsed_content = Column(Text, nullable=True)
    status = Column(String, default="imported", nullable=False)
    payment_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("file_path", name="uq_supplier_invoice_file_path"),
        Index("idx_supplier_invoices_fiscal_year", "fiscal_year_id"),
        Index("idx_supplier_invoices_supplier", "supplier_id"),
    )

    supplier = relationship("Supplier", back_populates="invoices")
    fiscal_year = relationship("FiscalYear")


class WatchedFolder(Base):
    """Folder registered for scanning."""

    __tablename__ = "invoice_folders"

    id = Column(Integer, primary_key=True)
    path = Column(String, unique=True, nullable=False)
    last_scanned = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


def create_database_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for a database URL."""
    return create_engine(database_url, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory bound to an engine."""
    return sessionmaker(bind=engine)
