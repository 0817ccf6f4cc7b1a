"""Invoice management commands."""

import click
from ledgerfile.cli.error_handling import handle_domain_error, resolve_fiscal_year_or_exit
from ledgerfile.domain.entities import Invoice, InvoiceKind
from ledgerfile.domain.errors import DomainError
from ledgerfile.domain.invoice import InvoiceService
from ledgerfile.utils.amount_parser import parse_amount
from ledgerfile.utils.date_parser import parse_date

KIND_CHOICE = click.Choice([kind.value for kind in InvoiceKind], case_sensitive=False)


def _format_amount(value) -> str:
    return f"{value:>12,.2f}" if value is not None else f"{'-':>12s}"


def _echo_invoice(invoice: Invoice) -> None:
    invoice_date = invoice.invoice_date.isoformat() if invoice.invoice_date else "----------"
    party = str(invoice.counterparty_id) if invoice.counterparty_id is not None else "-"
    click.echo(
        f"ID: {invoice.id:4d} | {invoice_date} | {_format_amount(invoice.total)} | "
        f"Party: {party:>4s} | {invoice.file_name}"
    )


@click.group()
def invoice_group():
    """Manage imported invoices."""
    pass


@invoice_group.command("list")
@click.argument("kind", type=KIND_CHOICE)
@click.option("--year", type=int, help="Fiscal year (defaults to the active year)")
@click.option("--counterparty", "counterparty_id", type=int, help="Only invoices of this customer/supplier")
@click.pass_context
def list_invoices(ctx, kind: str, year: int | None, counterparty_id: int | None):
    """List customer or supplier invoices.

    With --counterparty, invoices from every fiscal year are listed.

    Examples:
        ledgerfile invoice list supplier --year 2025
        ledgerfile invoice list customer --counterparty 3
    """
    invoice_kind = InvoiceKind(kind.lower())
    service = InvoiceService(ctx.obj["db"])

    if counterparty_id is not None:
        try:
            invoices, fiscal_years = service.list_by_counterparty(invoice_kind, counterparty_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        if fiscal_years:
            click.echo("Fiscal years: " + ", ".join(str(fy.year) for fy in fiscal_years))
    else:
        fiscal_year_id = resolve_fiscal_year_or_exit(ctx, year)
        invoices = service.list_invoices(invoice_kind, fiscal_year_id=fiscal_year_id)

    if not invoices:
        click.echo(f"No {invoice_kind.value} invoices found.")
        return

    click.echo(f"\n{invoice_kind.value.capitalize()} invoices:")
    click.echo("-" * 90)
    for invoice in invoices:
        _echo_invoice(invoice)


@invoice_group.command("update")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("invoice_id", type=int)
@click.option("--number", help="Invoice number")
@click.option("--date", "invoice_date", help="Invoice date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--due-date", help="Due date")
@click.option("--payment-date", help="Payment date (supplier invoices only)")
@click.option("--amount", help="Amount excluding VAT (e.g. '1 234,56')")
@click.option("--vat", help="VAT amount")
@click.option("--total", help="Total including VAT (defaults to amount + VAT when both are given)")
@click.option("--status", help="Status tag")
@click.option("--counterparty", "counterparty_id", type=int, help="Customer/supplier ID")
@click.pass_context
def update_invoice(
    ctx,
    kind: str,
    invoice_id: int,
    number: str | None,
    invoice_date: str | None,
    due_date: str | None,
    payment_date: str | None,
    amount: str | None,
    vat: str | None,
    total: str | None,
    status: str | None,
    counterparty_id: int | None,
) -> None:
    """Update an invoice.

    Updates only the fields that are provided.

    Examples:
        ledgerfile invoice update supplier 12 --amount 100 --vat 25
        ledgerfile invoice update customer 4 --counterparty 2 --number 1368
    """
    invoice_kind = InvoiceKind(kind.lower())
    fields = {}

    try:
        for field_name, value in (
            ("invoice_date", invoice_date),
            ("due_date", due_date),
            ("payment_date", payment_date),
        ):
            if value is not None:
                fields[field_name] = parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        for field_name, value in (("amount", amount), ("vat", vat), ("total", total)):
            if value is not None:
                fields[field_name] = parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    if total is None and "amount" in fields and "vat" in fields:
        fields["total"] = fields["amount"] + fields["vat"]

    if number is not None:
        fields["invoice_number"] = number
    if status is not None:
        fields["status"] = status
    if counterparty_id is not None:
        fields["counterparty_id"] = counterparty_id

    if not fields:
        click.echo("Error: Nothing to update", err=True)
        ctx.exit(1)

    try:
        InvoiceService(ctx.obj["db"]).update_invoice(invoice_kind, invoice_id, **fields)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated {invoice_kind.value} invoice {invoice_id}")


@invoice_group.command("delete")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("invoice_id", type=int)
@click.pass_context
def delete_invoice(ctx, kind: str, invoice_id: int):
    """Delete an invoice. The document on disk is left alone."""
    invoice_kind = InvoiceKind(kind.lower())
    try:
        InvoiceService(ctx.obj["db"]).delete_invoice(invoice_kind, invoice_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted {invoice_kind.value} invoice {invoice_id}")


@invoice_group.command("move")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("invoice_id", type=int)
@click.pass_context
def move_invoice(ctx, kind: str, invoice_id: int):
    """Move a misclassified invoice to the other kind.

    Example:
        ledgerfile invoice move supplier 7   # becomes a customer invoice
    """
    invoice_kind = InvoiceKind(kind.lower())
    try:
        new_id = InvoiceService(ctx.obj["db"]).move_to_other_kind(invoice_kind, invoice_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Moved to {invoice_kind.other.value} invoices (ID: {new_id})")


@invoice_group.command("assign")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("invoice_id", type=int, required=False)
@click.option("--all", "assign_all", is_flag=True, help="Assign every invoice of the year without one")
@click.option("--year", type=int, help="Fiscal year for --all (defaults to the active year)")
@click.pass_context
def assign_counterparty(ctx, kind: str, invoice_id: int | None, assign_all: bool, year: int | None):
    """Map invoices to customers/suppliers named in their file names.

    Unknown names create new customers or suppliers.

    Examples:
        ledgerfile invoice assign supplier 12
        ledgerfile invoice assign customer --all --year 2025
    """
    invoice_kind = InvoiceKind(kind.lower())
    service = InvoiceService(ctx.obj["db"])

    if assign_all == (invoice_id is not None):
        click.echo("Error: Give either an INVOICE_ID or --all", err=True)
        ctx.exit(1)

    if invoice_id is not None:
        try:
            party_id = service.assign_counterparty_from_filename(invoice_kind, invoice_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Assigned {invoice_kind.value} {party_id} to invoice {invoice_id}")
        return

    fiscal_year_id = resolve_fiscal_year_or_exit(ctx, year)
    result = service.assign_unmapped_from_filenames(invoice_kind, fiscal_year_id)
    click.echo(f"Assigned: {result.assigned} invoices")
    if result.unmatched:
        click.echo(f"No name found in {len(result.unmatched)} file names:")
        for file_name in result.unmatched:
            click.echo(f"  {file_name}")


@invoice_group.command("reextract")
@click.option("--year", type=int, help="Fiscal year (defaults to the active year)")
@click.pass_context
def reextract_amounts(ctx, year: int | None):
    """Re-read amounts from the stored text of every invoice in a year."""
    fiscal_year_id = resolve_fiscal_year_or_exit(ctx, year)
    result = InvoiceService(ctx.obj["db"]).reextract_amounts(fiscal_year_id)
    click.echo(f"Updated: {result.updated} invoices")
    click.echo(f"Unchanged: {result.unchanged} invoices")
    if result.errors:
        click.echo(f"Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"  {error}", err=True)


def register_commands(cli: click.Group) -> None:
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
