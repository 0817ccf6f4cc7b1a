"""Invoice import domain service.

Documents are imported without a customer or supplier; mapping them to a
counterparty is a separate step (see ``InvoiceService``).
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from ledgerfile.database.base import Database
from ledgerfile.domain.amounts import extract_invoice_amounts
from ledgerfile.domain.classifier import classify, extract_date
from ledgerfile.domain.entities import Invoice, InvoiceKind
from ledgerfile.domain.errors import (
    AlreadyImportedError,
    ConflictError,
    NotFoundError,
    ValidationError,
    already_imported,
    fiscal_year_not_found,
    path_not_storable,
    watched_folder_not_found,
)
from ledgerfile.domain.extraction import ExtractionError, TextExtractor
from ledgerfile.domain.fiscal_year import FiscalYearService
from ledgerfile.domain.folder_scan import DEFAULT_DOCUMENT_EXTENSION, has_extension, scan_year_folder

logger = logging.getLogger(__name__)

ROOT_FOLDER_LABEL = "(root folder)"
SELECTED_FILES_LABEL = "(selected files)"


class ImportStatus(str, Enum):
    IMPORTED = "imported"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PossibleDuplicate:
    """A new document sharing its file name with an invoice filed elsewhere."""

    file_name: str
    new_path: str
    existing_path: str
    existing_kind: InvoiceKind


@dataclass(frozen=True)
class FileOutcome:
    """What happened to one document during a batch import."""

    file_name: str
    file_path: str
    status: ImportStatus
    kind: Optional[InvoiceKind] = None
    invoice_id: Optional[int] = None
    error: Optional[str] = None
    possible_duplicate: Optional[PossibleDuplicate] = None


@dataclass
class FolderImportResult:
    """Counts and errors for one imported folder (or file selection)."""

    folder_name: str
    month: Optional[int] = None
    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    customer_invoices: int = 0
    supplier_invoices: int = 0
    possible_duplicates: list[PossibleDuplicate] = field(default_factory=list)
    outcomes: list[FileOutcome] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        """Add one file's outcome to the counts."""
        self.outcomes.append(outcome)
        if outcome.possible_duplicate is not None:
            self.possible_duplicates.append(outcome.possible_duplicate)
        if outcome.status is ImportStatus.IMPORTED:
            self.imported += 1
            if outcome.kind is InvoiceKind.CUSTOMER:
                self.customer_invoices += 1
            else:
                self.supplier_invoices += 1
        elif outcome.status is ImportStatus.SKIPPED:
            self.skipped += 1
        else:
            self.errors.append(f"{outcome.file_name}: {outcome.error}")


@dataclass
class YearImportResult:
    """Aggregate of importing every month folder of a year folder."""

    year: int
    fiscal_year_id: int
    fiscal_year_created: bool
    month_results: list[FolderImportResult] = field(default_factory=list)
    root_result: Optional[FolderImportResult] = None

    @property
    def folder_results(self) -> list[FolderImportResult]:
        results = list(self.month_results)
        if self.root_result is not None:
            results.append(self.root_result)
        return results

    @property
    def total_imported(self) -> int:
        return sum(r.imported for r in self.folder_results)

    @property
    def total_skipped(self) -> int:
        return sum(r.skipped for r in self.folder_results)

    @property
    def total_errors(self) -> list[str]:
        return [error for r in self.folder_results for error in r.errors]

    @property
    def total_possible_duplicates(self) -> list[PossibleDuplicate]:
        return [dup for r in self.folder_results for dup in r.possible_duplicates]


class InvoiceImportService:
    """Service for importing scanned invoice documents."""

    def __init__(
        self,
        db: Database,
        extractor: TextExtractor,
        document_extension: str = DEFAULT_DOCUMENT_EXTENSION,
    ):
        """Initialize import service.

        Args:
            db: Database instance
            extractor: Text extractor used for every document
            document_extension: Extension of importable documents, e.g. ".pdf"
        """
        self.db = db
        self.extractor = extractor
        self.document_extension = document_extension
        self.fiscal_year_service = FiscalYearService(db)

    def list_documents(self, folder_path: str) -> list[Path]:
        """List importable documents directly inside a folder, sorted by name.

        Raises:
            OSError: If the folder cannot be read
        """
        with os.scandir(folder_path) as entries:
            paths = [
                Path(entry.path)
                for entry in entries
                if entry.is_file() and has_extension(entry.name, self.document_extension)
            ]
        return sorted(paths, key=lambda p: p.name)

    def import_folder(
        self,
        folder_path: str,
        fiscal_year_id: int,
        label: Optional[str] = None,
        month: Optional[int] = None,
    ) -> FolderImportResult:
        """Import every document directly inside a folder.

        Documents already on file are skipped and failed extractions are
        collected as errors; neither stops the import.

        Args:
            folder_path: Folder to import
            fiscal_year_id: Fiscal year the invoices are filed under
            label: Name reported in the result (defaults to the folder name)
            month: Month the folder holds, if known

        Returns:
            FolderImportResult with counts, errors and per-file outcomes
        """
        result = FolderImportResult(folder_name=label or Path(folder_path).name, month=month)
        try:
            documents = self.list_documents(folder_path)
        except OSError as e:
            logger.warning("Could not read folder %s: %s", folder_path, e)
            result.errors.append(f"Could not read folder: {e}")
            return result

        for document in documents:
            result.record(self._import_document(document, fiscal_year_id))

        logger.info(
            "Imported %s: %d imported, %d skipped, %d errors",
            result.folder_name, result.imported, result.skipped, len(result.errors),
        )
        return result

    def import_year(self, root_path: str, year: int) -> YearImportResult:
        """Import a year folder: every month folder, then loose root documents.

        The fiscal year is looked up by number and created (inactive) if it
        does not exist yet.

        Raises:
            NotFoundError: If the root folder does not exist
            OSError: If the root folder cannot be read
        """
        preview = scan_year_folder(root_path, self.document_extension)
        fiscal_year, created = self.fiscal_year_service.get_or_create(year)
        result = YearImportResult(
            year=year, fiscal_year_id=fiscal_year.id, fiscal_year_created=created
        )

        for month_folder in preview.month_folders:
            result.month_results.append(
                self.import_folder(
                    month_folder.path, fiscal_year.id, label=month_folder.name, month=month_folder.month
                )
            )

        if preview.root_document_count > 0:
            result.root_result = self.import_folder(
                preview.folder_path, fiscal_year.id, label=ROOT_FOLDER_LABEL
            )

        return result

    def scan_and_import(self, folder_id: int, fiscal_year_id: int) -> FolderImportResult:
        """Import a registered folder and stamp its last-scanned time.

        Raises:
            NotFoundError: If the folder or fiscal year does not exist
        """
        folder = self.db.get_watched_folder(folder_id)
        if folder is None:
            raise NotFoundError(watched_folder_not_found(folder_id))
        self._require_fiscal_year(fiscal_year_id)

        result = self.import_folder(folder.path, fiscal_year_id)
        self.db.update_watched_folder_scanned(folder_id, datetime.now(timezone.utc))
        return result

    def import_files(self, file_paths: Iterable[str], fiscal_year_id: int) -> FolderImportResult:
        """Import an explicit selection of documents.

        Raises:
            NotFoundError: If the fiscal year does not exist
        """
        self._require_fiscal_year(fiscal_year_id)
        result = FolderImportResult(folder_name=SELECTED_FILES_LABEL)
        for file_path in file_paths:
            result.record(self._import_document(Path(file_path), fiscal_year_id))
        return result

    def import_file(self, file_path: str, fiscal_year_id: int) -> Invoice:
        """Import a single document.

        Returns:
            The created invoice

        Raises:
            NotFoundError: If the fiscal year does not exist
            ValidationError: If the path cannot be stored
            AlreadyImportedError: If the document is already on file
            ExtractionError: If text extraction fails
        """
        self._require_fiscal_year(fiscal_year_id)
        path = Path(file_path).absolute()
        if not _is_storable(path):
            raise ValidationError(path_not_storable(path.name))
        if self.db.invoice_exists_for_path(str(path)):
            raise AlreadyImportedError(already_imported(str(path)))

        content = self.extractor.extract(str(path))
        fields = self._invoice_fields(path, fiscal_year_id, content)
        try:
            kind, invoice_id = self._create_invoice(fields)
        except ConflictError as e:
            raise AlreadyImportedError(str(e)) from e
        return self.db.get_invoice(kind, invoice_id)

    def _require_fiscal_year(self, fiscal_year_id: int) -> None:
        if self.db.get_fiscal_year(fiscal_year_id) is None:
            raise NotFoundError(fiscal_year_not_found(fiscal_year_id))

    def _import_document(self, file_path: Path, fiscal_year_id: int) -> FileOutcome:
        path = file_path.absolute()
        outcome = {"file_name": path.name, "file_path": str(path)}

        if not _is_storable(path):
            logger.warning("Skipping %r, path is not valid UTF-8", str(path))
            return FileOutcome(
                status=ImportStatus.FAILED,
                error=path_not_storable(path.name),
                file_name=_printable(path.name),
                file_path=_printable(str(path)),
            )

        if self.db.invoice_exists_for_path(str(path)):
            logger.debug("Skipping %s, already imported", path)
            return FileOutcome(status=ImportStatus.SKIPPED, **outcome)

        try:
            content = self.extractor.extract(str(path))
        except ExtractionError as e:
            logger.warning("Failed to extract %s: %s", path, e)
            return FileOutcome(status=ImportStatus.FAILED, error=str(e), **outcome)

        try:
            fields = self._invoice_fields(path, fiscal_year_id, content)
        except (ValueError, ArithmeticError) as e:
            logger.warning("Failed to read invoice data from %s: %s", path, e)
            return FileOutcome(status=ImportStatus.FAILED, error=f"Could not read invoice data: {e}", **outcome)

        duplicate = self._find_possible_duplicate(path)
        try:
            kind, invoice_id = self._create_invoice(fields)
        except ConflictError:
            # Imported by someone else since the existence check
            return FileOutcome(status=ImportStatus.SKIPPED, **outcome)

        return FileOutcome(
            status=ImportStatus.IMPORTED,
            kind=kind,
            invoice_id=invoice_id,
            possible_duplicate=duplicate,
            **outcome,
        )

    def _find_possible_duplicate(self, path: Path) -> Optional[PossibleDuplicate]:
        existing = self.db.find_invoice_by_file_name(path.name, str(path))
        if existing is None:
            return None
        logger.info("%s has the same name as %s invoice %s", path, existing.kind.value, existing.file_path)
        return PossibleDuplicate(
            file_name=path.name,
            new_path=str(path),
            existing_path=existing.file_path,
            existing_kind=existing.kind,
        )

    def _invoice_fields(self, path: Path, fiscal_year_id: int, content: str) -> dict:
        amounts = extract_invoice_amounts(content)
        return {
            "kind": classify(path.name),
            "fiscal_year_id": fiscal_year_id,
            "file_path": str(path),
            "file_name": path.name,
            "parsed_content": content,
            "invoice_date": extract_date(path.name),
            "amount": amounts.amount,
            "vat": amounts.vat,
            "total": amounts.total,
        }

    def _create_invoice(self, fields: dict) -> tuple[InvoiceKind, int]:
        kind = fields["kind"]
        invoice_id = self.db.create_invoice(**fields)
        logger.debug("Imported %s as %s invoice %d", fields["file_name"], kind.value, invoice_id)
        return kind, invoice_id


def _is_storable(path: Path) -> bool:
    """Whether the path survives the round trip to the database as UTF-8.

    Undecodable bytes in file names show up as lone surrogates.
    """
    try:
        str(path).encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _printable(value: str) -> str:
    return value.encode("utf-8", "surrogatepass").decode("utf-8", "replace")
