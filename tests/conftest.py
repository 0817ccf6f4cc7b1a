"""Shared pytest fixtures for ledgerfile tests."""

import tempfile
import os
from pathlib import Path
import pytest

from ledgerfile.database.factories import create_sqlite_database
from ledgerfile.domain.counterparty import CounterpartyService
from ledgerfile.domain.entities import InvoiceKind
from ledgerfile.domain.extraction import ExtractionError
from ledgerfile.domain.fiscal_year import FiscalYearService
from ledgerfile.domain.ingestion import InvoiceImportService
from ledgerfile.domain.invoice import InvoiceService
from ledgerfile.domain.watched_folder import WatchedFolderService


class FakeExtractor:
    """Text extractor that reads documents as plain text.

    Documents with "corrupt" in their name fail like a damaged PDF would.
    """

    def __init__(self):
        self.calls = []

    def extract(self, file_path: str) -> str:
        self.calls.append(file_path)
        path = Path(file_path)
        if "corrupt" in path.name.lower():
            raise ExtractionError("Could not extract text: file is damaged")
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ExtractionError(f"Could not extract text: {e}") from e


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def fiscal_year_service(temp_db):
    """Create a FiscalYearService with a temporary database."""
    return FiscalYearService(temp_db)


@pytest.fixture
def customer_service(temp_db):
    """Create a CounterpartyService for customers."""
    return CounterpartyService(temp_db, InvoiceKind.CUSTOMER)


@pytest.fixture
def supplier_service(temp_db):
    """Create a CounterpartyService for suppliers."""
    return CounterpartyService(temp_db, InvoiceKind.SUPPLIER)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def watched_folder_service(temp_db):
    """Create a WatchedFolderService with a temporary database."""
    return WatchedFolderService(temp_db)


@pytest.fixture
def extractor():
    """Create a fake text extractor."""
    return FakeExtractor()


@pytest.fixture
def import_service(temp_db, extractor):
    """Create an InvoiceImportService using the fake extractor."""
    return InvoiceImportService(temp_db, extractor)


@pytest.fixture
def sample_fiscal_year(fiscal_year_service):
    """Create an active fiscal year 2025."""
    return fiscal_year_service.create_fiscal_year(2025, is_active=True)


@pytest.fixture
def write_document():
    """Return a helper that writes a document with the given text."""

    def _write(folder: Path, name: str, text: str = "") -> Path:
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
