"""Tests for the command line interface."""

import pytest

from ledgerfile.cli.main import cli

INVOICE_TEXT = "Summa exkl. moms 1 000,00 SEK\nMoms 25%: 250,00\nAtt betala 1 250,00 SEK"


@pytest.fixture
def run(cli_runner, temp_db, extractor):
    """Return a helper that invokes the CLI against the test database."""

    def _run(*args):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, *args],
            obj={"extractor": extractor},
        )

    return _run


@pytest.fixture
def year_folder(tmp_path, write_document):
    """Create a year folder with two month folders."""
    root = tmp_path / "Bokföring 2025"
    write_document(root / "01 Januari", "2025-01-15 Faktura 1001 Acme.pdf", INVOICE_TEXT)
    write_document(root / "01 Januari", "2025-01-20 Telia.pdf", "Att betala: 500,00 kr")
    write_document(root / "02 Februari", "corrupt scan.pdf")
    write_document(root / "02 Februari", "notes.txt")
    return root


def test_help(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "import" in result.output
    assert "supplier" in result.output


class TestYearCommands:
    """Tests for fiscal year commands."""

    def test_create_and_list(self, run):
        result = run("year", "create", "2025", "--activate")
        assert result.exit_code == 0
        assert "Created fiscal year 2025 (ID: 1)" in result.output

        run("year", "create", "2024")
        result = run("year", "list")
        assert result.exit_code == 0
        assert "2025 (active)" in result.output
        assert result.output.index("2025") < result.output.index("2024")

    def test_list_empty(self, run):
        result = run("year", "list")

        assert "No fiscal years found." in result.output

    def test_create_duplicate(self, run):
        run("year", "create", "2025")
        result = run("year", "create", "2025")

        assert result.exit_code == 1
        assert "Error: Fiscal year 2025 already exists" in result.output

    def test_activate(self, run):
        run("year", "create", "2024")
        result = run("year", "activate", "2024")

        assert result.exit_code == 0
        assert "Fiscal year 2024 is now active" in result.output
        assert "2024 (active)" in run("year", "list").output

    def test_delete_unknown(self, run):
        result = run("year", "delete", "2030")

        assert result.exit_code == 1
        assert "Fiscal year 2030 not found" in result.output


class TestImportCommands:
    """Tests for import commands."""

    def test_preview(self, run, year_folder):
        result = run("import", "preview", str(year_folder))

        assert result.exit_code == 0
        assert "Year: 2025" in result.output
        assert "[01] 01 Januari" in result.output
        assert "[02] 02 Februari" in result.output
        assert "Total: 3 documents" in result.output

    def test_import_year(self, run, year_folder):
        result = run("import", "year", str(year_folder))

        assert result.exit_code == 0
        assert "Created fiscal year 2025" in result.output
        assert "Imported: 2 invoices" in result.output
        assert "Errors: 1" in result.output
        assert "corrupt scan.pdf" in result.output

    def test_import_year_twice_skips(self, run, year_folder):
        run("import", "year", str(year_folder))
        result = run("import", "year", str(year_folder))

        assert result.exit_code == 0
        assert "Created fiscal year" not in result.output
        assert "Imported: 0 invoices" in result.output
        assert "Skipped: 2 already imported" in result.output

    def test_import_year_without_detectable_year(self, run, tmp_path, write_document):
        write_document(tmp_path / "scans" / "01", "a.pdf")

        result = run("import", "year", str(tmp_path / "scans"))

        assert result.exit_code == 1
        assert "Could not detect a year" in result.output

    def test_import_year_with_explicit_year(self, run, tmp_path, write_document):
        write_document(tmp_path / "scans" / "01", "2024-01-03 Telia.pdf")

        result = run("import", "year", str(tmp_path / "scans"), "--year", "2024")

        assert result.exit_code == 0
        assert "Created fiscal year 2024" in result.output
        assert "Imported: 1 invoices" in result.output

    def test_import_folder_requires_active_year(self, run, tmp_path):
        result = run("import", "folder", str(tmp_path))

        assert result.exit_code == 1
        assert "No active fiscal year" in result.output

    def test_import_folder(self, run, tmp_path, write_document):
        run("year", "create", "2025", "--activate")
        write_document(tmp_path, "2025-01-15 Faktura 1001 Acme.pdf", INVOICE_TEXT)
        write_document(tmp_path, "2025-01-20 Telia.pdf")

        result = run("import", "folder", str(tmp_path))

        assert result.exit_code == 0
        assert "Imported: 2 invoices" in result.output
        assert "Customer: 1" in result.output
        assert "Supplier: 1" in result.output

    def test_import_single_file_twice(self, run, tmp_path, write_document):
        run("year", "create", "2025", "--activate")
        path = write_document(tmp_path, "2025-01-15 Faktura 1001 Acme.pdf", INVOICE_TEXT)

        result = run("import", "files", str(path))
        assert result.exit_code == 0
        assert "as customer invoice (ID: 1)" in result.output

        result = run("import", "files", str(path))
        assert result.exit_code == 1
        assert "already imported" in result.output

    def test_import_reports_possible_duplicates(self, run, tmp_path, write_document):
        run("year", "create", "2025", "--activate")
        write_document(tmp_path / "jan", "scan.pdf")
        write_document(tmp_path / "feb", "scan.pdf")
        run("import", "folder", str(tmp_path / "jan"))

        result = run("import", "folder", str(tmp_path / "feb"))

        assert result.exit_code == 0
        assert "Imported: 1 invoices" in result.output
        assert "Possible duplicates: 1" in result.output
        assert "same name as supplier invoice" in result.output

    def test_import_several_files(self, run, tmp_path, write_document):
        run("year", "create", "2025", "--activate")
        first = write_document(tmp_path, "2025-01-20 Telia.pdf")
        second = write_document(tmp_path, "2025-01-21 Ikea.pdf")
        run("import", "files", str(first))

        result = run("import", "files", str(first), str(second))

        assert result.exit_code == 0
        assert "Imported: 1 invoices" in result.output
        assert "Skipped: 1 already imported" in result.output


class TestFolderCommands:
    """Tests for watched folder commands."""

    def test_add_list_remove(self, run, tmp_path):
        result = run("folder", "add", str(tmp_path))
        assert result.exit_code == 0
        assert "(ID: 1)" in result.output

        result = run("folder", "list")
        assert "Last scanned: never" in result.output

        result = run("folder", "remove", "1")
        assert result.exit_code == 0
        assert "No folders registered." in run("folder", "list").output

    def test_scan(self, run, tmp_path, write_document):
        run("year", "create", "2025", "--activate")
        write_document(tmp_path, "2025-01-20 Telia.pdf")
        run("folder", "add", str(tmp_path))

        result = run("folder", "scan", "1")
        assert result.exit_code == 0
        assert "Imported: 1 invoices" in result.output

        result = run("folder", "scan", "1")
        assert "Skipped: 1 already imported" in result.output
        assert "Last scanned: never" not in run("folder", "list").output

    def test_scan_unknown_folder(self, run):
        run("year", "create", "2025", "--activate")

        result = run("folder", "scan", "9")

        assert result.exit_code == 1
        assert "Folder 9 not found" in result.output


class TestCounterpartyCommands:
    """Tests for customer and supplier commands."""

    def test_create_and_list(self, run):
        result = run("customer", "create", "Acme AB", "--org-number", "556677-8899")
        assert result.exit_code == 0
        assert "Created customer 'Acme AB' (ID: 1)" in result.output

        result = run("customer", "list")
        assert "Acme AB" in result.output
        assert "556677-8899" in result.output
        assert "No suppliers found." in run("supplier", "list").output

    def test_resolve(self, run):
        run("supplier", "create", "Telia Sverige AB")

        result = run("supplier", "resolve", "telia sverige")
        assert "Matched supplier 'Telia Sverige AB' (ID: 1)" in result.output

        result = run("supplier", "resolve", "Fortnox")
        assert "Created supplier 'Fortnox' (ID: 2)" in result.output

    def test_update_nothing(self, run):
        run("customer", "create", "Acme")

        result = run("customer", "update", "1")

        assert result.exit_code == 1
        assert "Nothing to update" in result.output

    def test_delete_with_invoices(self, run, tmp_path, write_document):
        run("year", "create", "2025", "--activate")
        write_document(tmp_path, "2025-01-06 Fortnox 159 kr.pdf")
        run("import", "folder", str(tmp_path))
        run("invoice", "assign", "supplier", "1")

        result = run("supplier", "delete", "1")

        assert result.exit_code == 1
        assert "Cannot delete supplier 1" in result.output


class TestInvoiceCommands:
    """Tests for invoice commands."""

    @pytest.fixture
    def imported(self, run, tmp_path, write_document):
        run("year", "create", "2025", "--activate")
        write_document(tmp_path, "2025-01-15 Faktura 1001 Acme.pdf", INVOICE_TEXT)
        write_document(tmp_path, "2025-01-06 Fortnox 159 kr.pdf")
        write_document(tmp_path, "scan.pdf")
        result = run("import", "folder", str(tmp_path))
        assert result.exit_code == 0

    def test_list(self, run, imported):
        result = run("invoice", "list", "customer")

        assert result.exit_code == 0
        assert "2025-01-15 Faktura 1001 Acme.pdf" in result.output
        assert "1,250.00" in result.output

    def test_assign_all(self, run, imported):
        result = run("invoice", "assign", "supplier", "--all")

        assert result.exit_code == 0
        assert "Assigned: 1 invoices" in result.output
        assert "scan.pdf" in result.output
        assert "Fortnox" in run("supplier", "list").output

    def test_assign_needs_id_or_all(self, run, imported):
        result = run("invoice", "assign", "supplier")

        assert result.exit_code == 1
        assert "Give either an INVOICE_ID or --all" in result.output

    def test_list_by_counterparty(self, run, imported):
        run("invoice", "assign", "customer", "--all")

        result = run("invoice", "list", "customer", "--counterparty", "1")

        assert "Fiscal years: 2025" in result.output
        assert "Acme.pdf" in result.output

    def test_update_amounts(self, run, imported):
        result = run("invoice", "update", "supplier", "1", "--amount", "127,20", "--vat", "31,80")

        assert result.exit_code == 0
        assert "159.00" in run("invoice", "list", "supplier").output

    def test_update_invalid_date(self, run, imported):
        result = run("invoice", "update", "supplier", "1", "--date", "not a date")

        assert result.exit_code == 1
        assert "Invalid date format" in result.output

    def test_update_customer_payment_date(self, run, imported):
        result = run("invoice", "update", "customer", "1", "--payment-date", "2025-02-01")

        assert result.exit_code == 1
        assert "no payment date" in result.output

    def test_move(self, run, imported):
        result = run("invoice", "move", "customer", "1")

        assert result.exit_code == 0
        assert "Moved to supplier invoices" in result.output
        assert "No customer invoices found." in run("invoice", "list", "customer").output

    def test_delete(self, run, imported):
        result = run("invoice", "delete", "customer", "1")

        assert result.exit_code == 0
        result = run("invoice", "delete", "customer", "1")
        assert result.exit_code == 1
        assert "Customer invoice 1 not found" in result.output

    def test_reextract(self, run, imported):
        result = run("invoice", "reextract")

        assert result.exit_code == 0
        assert "Updated: 1 invoices" in result.output
        assert "Unchanged: 2 invoices" in result.output
