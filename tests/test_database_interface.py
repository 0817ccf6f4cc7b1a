"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from ledgerfile.domain import entities
from ledgerfile.domain.entities import InvoiceKind
from ledgerfile.domain.errors import ConflictError, NotFoundError, ValidationError


@pytest.fixture
def fiscal_year_id(temp_db):
    return temp_db.create_fiscal_year(2025)


class TestFiscalYears:
    """Tests for fiscal year storage."""

    def test_get_fiscal_year_returns_domain_model(self, temp_db, fiscal_year_id):
        fiscal_year = temp_db.get_fiscal_year(fiscal_year_id)

        assert isinstance(fiscal_year, entities.FiscalYear)
        assert fiscal_year.year == 2025
        assert fiscal_year.is_active is False
        assert isinstance(fiscal_year.created_at, datetime)

    def test_duplicate_year(self, temp_db, fiscal_year_id):
        with pytest.raises(ConflictError, match="Fiscal year 2025 already exists"):
            temp_db.create_fiscal_year(2025)

    def test_list_newest_first(self, temp_db, fiscal_year_id):
        temp_db.create_fiscal_year(2023)
        temp_db.create_fiscal_year(2024)

        assert [fy.year for fy in temp_db.list_fiscal_years()] == [2025, 2024, 2023]

    def test_set_active_deactivates_others(self, temp_db, fiscal_year_id):
        other_id = temp_db.create_fiscal_year(2024)

        temp_db.set_active_fiscal_year(fiscal_year_id)
        temp_db.set_active_fiscal_year(other_id)

        active = [fy.year for fy in temp_db.list_fiscal_years() if fy.is_active]
        assert active == [2024]

    def test_set_active_unknown(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.set_active_fiscal_year(99)

    def test_count_invoices_counts_both_kinds(self, temp_db, fiscal_year_id):
        temp_db.create_invoice(InvoiceKind.CUSTOMER, fiscal_year_id, "/a.pdf", "a.pdf")
        temp_db.create_invoice(InvoiceKind.SUPPLIER, fiscal_year_id, "/b.pdf", "b.pdf")

        assert temp_db.count_invoices_for_fiscal_year(fiscal_year_id) == 2


class TestCounterparties:
    """Tests for customer and supplier storage."""

    def test_get_counterparty_returns_domain_model(self, temp_db):
        party_id = temp_db.create_counterparty(
            InvoiceKind.SUPPLIER, name="Telia", org_number="556430-0142", email="faktura@telia.se"
        )

        party = temp_db.get_counterparty(InvoiceKind.SUPPLIER, party_id)

        assert isinstance(party, entities.Counterparty)
        assert party.kind is InvoiceKind.SUPPLIER
        assert party.email == "faktura@telia.se"
        assert temp_db.get_counterparty(InvoiceKind.CUSTOMER, party_id) is None

    def test_list_by_name_or_creation_order(self, temp_db):
        temp_db.create_counterparty(InvoiceKind.CUSTOMER, name="Zenith")
        temp_db.create_counterparty(InvoiceKind.CUSTOMER, name="Acme")

        assert [p.name for p in temp_db.list_counterparties(InvoiceKind.CUSTOMER)] == ["Acme", "Zenith"]
        assert [
            p.name for p in temp_db.list_counterparties(InvoiceKind.CUSTOMER, creation_order=True)
        ] == ["Zenith", "Acme"]

    def test_search(self, temp_db):
        temp_db.create_counterparty(InvoiceKind.CUSTOMER, name="Acme Consulting", org_number="556677-8899")
        temp_db.create_counterparty(InvoiceKind.CUSTOMER, name="Zenith", email="info@acme.example")
        temp_db.create_counterparty(InvoiceKind.CUSTOMER, name="Other")

        assert [p.name for p in temp_db.search_counterparties(InvoiceKind.CUSTOMER, "acme")] == [
            "Acme Consulting",
            "Zenith",
        ]
        assert [p.name for p in temp_db.search_counterparties(InvoiceKind.CUSTOMER, "6677")] == [
            "Acme Consulting"
        ]

    def test_update_counterparty(self, temp_db):
        party_id = temp_db.create_counterparty(InvoiceKind.CUSTOMER, name="Acme")

        temp_db.update_counterparty(InvoiceKind.CUSTOMER, party_id, name="Acme AB", city="Lund")

        party = temp_db.get_counterparty(InvoiceKind.CUSTOMER, party_id)
        assert (party.name, party.city) == ("Acme AB", "Lund")

    def test_update_unknown_field(self, temp_db):
        party_id = temp_db.create_counterparty(InvoiceKind.CUSTOMER, name="Acme")

        with pytest.raises(ValidationError):
            temp_db.update_counterparty(InvoiceKind.CUSTOMER, party_id, colour="red")

    def test_delete_unknown(self, temp_db):
        with pytest.raises(NotFoundError, match="Supplier 5 not found"):
            temp_db.delete_counterparty(InvoiceKind.SUPPLIER, 5)


class TestInvoices:
    """Tests for invoice storage."""

    def test_create_and_get(self, temp_db, fiscal_year_id):
        invoice_id = temp_db.create_invoice(
            InvoiceKind.SUPPLIER,
            fiscal_year_id=fiscal_year_id,
            file_path="/scans/a.pdf",
            file_name="a.pdf",
            parsed_content="text",
            invoice_date=date(2025, 1, 6),
            total=Decimal("159.00"),
        )

        invoice = temp_db.get_invoice(InvoiceKind.SUPPLIER, invoice_id)

        assert isinstance(invoice, entities.Invoice)
        assert invoice.status == "imported"
        assert invoice.total == Decimal("159.00")
        assert invoice.invoice_date == date(2025, 1, 6)

    def test_path_unique_per_kind(self, temp_db, fiscal_year_id):
        temp_db.create_invoice(InvoiceKind.SUPPLIER, fiscal_year_id, "/scans/a.pdf", "a.pdf")

        with pytest.raises(ConflictError, match="File is already imported"):
            temp_db.create_invoice(InvoiceKind.SUPPLIER, fiscal_year_id, "/scans/a.pdf", "a.pdf")

        # The session stays usable after the conflict
        assert len(temp_db.list_invoices(InvoiceKind.SUPPLIER)) == 1

    def test_invoice_exists_for_path_checks_both_kinds(self, temp_db, fiscal_year_id):
        temp_db.create_invoice(InvoiceKind.CUSTOMER, fiscal_year_id, "/scans/a.pdf", "a.pdf")

        assert temp_db.invoice_exists_for_path("/scans/a.pdf")
        assert not temp_db.invoice_exists_for_path("/scans/A.pdf")
        assert not temp_db.invoice_exists_for_path("/scans/b.pdf")

    def test_find_invoice_by_file_name(self, temp_db, fiscal_year_id):
        temp_db.create_invoice(InvoiceKind.SUPPLIER, fiscal_year_id, "/2024/scan.pdf", "scan.pdf")
        temp_db.create_invoice(InvoiceKind.CUSTOMER, fiscal_year_id, "/2025/scan.pdf", "scan.pdf")

        found = temp_db.find_invoice_by_file_name("scan.pdf", "/2026/scan.pdf")
        assert (found.kind, found.file_path) == (InvoiceKind.CUSTOMER, "/2025/scan.pdf")

        found = temp_db.find_invoice_by_file_name("scan.pdf", "/2025/scan.pdf")
        assert (found.kind, found.file_path) == (InvoiceKind.SUPPLIER, "/2024/scan.pdf")

        assert temp_db.find_invoice_by_file_name("other.pdf", "/2026/other.pdf") is None

    def test_list_newest_first_with_filters(self, temp_db, fiscal_year_id):
        other_year = temp_db.create_fiscal_year(2024)
        party_id = temp_db.create_counterparty(InvoiceKind.CUSTOMER, name="Acme")
        temp_db.create_invoice(
            InvoiceKind.CUSTOMER, fiscal_year_id, "/a.pdf", "a.pdf", invoice_date=date(2025, 1, 1)
        )
        temp_db.create_invoice(
            InvoiceKind.CUSTOMER,
            fiscal_year_id,
            "/b.pdf",
            "b.pdf",
            invoice_date=date(2025, 3, 1),
            counterparty_id=party_id,
        )
        temp_db.create_invoice(InvoiceKind.CUSTOMER, other_year, "/c.pdf", "c.pdf")

        names = [i.file_name for i in temp_db.list_invoices(InvoiceKind.CUSTOMER, fiscal_year_id=fiscal_year_id)]
        assert names == ["b.pdf", "a.pdf"]
        by_party = temp_db.list_invoices(InvoiceKind.CUSTOMER, counterparty_id=party_id)
        assert [i.file_name for i in by_party] == ["b.pdf"]

    def test_update_counterparty_and_payment(self, temp_db, fiscal_year_id):
        party_id = temp_db.create_counterparty(InvoiceKind.SUPPLIER, name="Telia")
        invoice_id = temp_db.create_invoice(InvoiceKind.SUPPLIER, fiscal_year_id, "/a.pdf", "a.pdf")

        temp_db.update_invoice(
            InvoiceKind.SUPPLIER, invoice_id, counterparty_id=party_id, payment_date=date(2025, 2, 1)
        )

        invoice = temp_db.get_invoice(InvoiceKind.SUPPLIER, invoice_id)
        assert invoice.counterparty_id == party_id
        assert invoice.payment_date == date(2025, 2, 1)

    def test_customer_invoice_has_no_payment_date(self, temp_db, fiscal_year_id):
        invoice_id = temp_db.create_invoice(InvoiceKind.CUSTOMER, fiscal_year_id, "/a.pdf", "a.pdf")

        with pytest.raises(ValidationError):
            temp_db.update_invoice(InvoiceKind.CUSTOMER, invoice_id, payment_date=date(2025, 2, 1))

    def test_update_unknown_invoice(self, temp_db):
        with pytest.raises(NotFoundError, match="Customer invoice 7 not found"):
            temp_db.update_invoice(InvoiceKind.CUSTOMER, 7, status="paid")


class TestWatchedFolders:
    """Tests for watched folder storage."""

    def test_create_and_list(self, temp_db):
        temp_db.create_watched_folder("/scans/b")
        temp_db.create_watched_folder("/scans/a")

        folders = temp_db.list_watched_folders()
        assert [f.path for f in folders] == ["/scans/a", "/scans/b"]
        assert all(isinstance(f, entities.WatchedFolder) for f in folders)

    def test_duplicate_path(self, temp_db):
        temp_db.create_watched_folder("/scans")

        with pytest.raises(ConflictError):
            temp_db.create_watched_folder("/scans")

    def test_update_scanned(self, temp_db):
        folder_id = temp_db.create_watched_folder("/scans")
        scanned_at = datetime(2025, 3, 1, 12, 0)

        temp_db.update_watched_folder_scanned(folder_id, scanned_at)

        assert temp_db.get_watched_folder(folder_id).last_scanned == scanned_at
        assert temp_db.get_watched_folder_by_path("/scans").id == folder_id

    def test_delete_unknown(self, temp_db):
        with pytest.raises(NotFoundError, match="Folder 3 not found"):
            temp_db.delete_watched_folder(3)
