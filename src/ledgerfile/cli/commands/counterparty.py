"""Customer and supplier registry commands.

Both registries share one set of commands; ``customer`` and ``supplier``
groups are built from the same factory.
"""

import click
from ledgerfile.cli.error_handling import handle_domain_error
from ledgerfile.domain.counterparty import CounterpartyService
from ledgerfile.domain.entities import Counterparty, InvoiceKind
from ledgerfile.domain.errors import DomainError


def _echo_counterparty(party: Counterparty) -> None:
    org = party.org_number or "-"
    click.echo(f"ID: {party.id:3d} | {party.name:30s} | Org.nr: {org}")


def make_counterparty_group(kind: InvoiceKind) -> click.Group:
    """Build the command group for one registry."""
    label = kind.value

    @click.group(help=f"Manage {label}s.")
    def group():
        pass

    @group.command("create")
    @click.argument("name")
    @click.option("--org-number", help="Organisation/registration number")
    @click.option("--address", help="Street address")
    @click.option("--postal-code", help="Postal code")
    @click.option("--city", help="City")
    @click.option("--email", help="Email address")
    @click.option("--phone", help="Phone number")
    @click.pass_context
    def create(ctx, name, org_number, address, postal_code, city, email, phone):
        """Create a new record."""
        service = CounterpartyService(ctx.obj["db"], kind)
        try:
            party_id = service.create_counterparty(
                name=name,
                org_number=org_number,
                address=address,
                postal_code=postal_code,
                city=city,
                email=email,
                phone=phone,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Created {label} '{name}' (ID: {party_id})")

    @group.command("list")
    @click.pass_context
    def list_(ctx):
        """List all records."""
        parties = CounterpartyService(ctx.obj["db"], kind).list_counterparties()
        if not parties:
            click.echo(f"No {label}s found.")
            return

        click.echo(f"\n{label.capitalize()}s:")
        click.echo("-" * 70)
        for party in parties:
            _echo_counterparty(party)

    @group.command("search")
    @click.argument("query")
    @click.pass_context
    def search(ctx, query):
        """Search by name, registration number or email."""
        parties = CounterpartyService(ctx.obj["db"], kind).search_counterparties(query)
        if not parties:
            click.echo(f"No {label}s matching '{query}'.")
            return
        for party in parties:
            _echo_counterparty(party)

    @group.command("update")
    @click.argument("party_id", type=int)
    @click.option("--name", help="New name")
    @click.option("--org-number", help="Organisation/registration number")
    @click.option("--address", help="Street address")
    @click.option("--postal-code", help="Postal code")
    @click.option("--city", help="City")
    @click.option("--email", help="Email address")
    @click.option("--phone", help="Phone number")
    @click.pass_context
    def update(ctx, party_id, **options):
        """Update fields of a record. Only given options are changed."""
        fields = {key: value for key, value in options.items() if value is not None}
        if not fields:
            click.echo("Error: Nothing to update", err=True)
            ctx.exit(1)
        try:
            CounterpartyService(ctx.obj["db"], kind).update_counterparty(party_id, **fields)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Updated {label} {party_id}")

    @group.command("delete")
    @click.argument("party_id", type=int)
    @click.pass_context
    def delete(ctx, party_id):
        """Delete a record that no invoice refers to."""
        try:
            CounterpartyService(ctx.obj["db"], kind).delete_counterparty(party_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Deleted {label} {party_id}")

    @group.command("resolve")
    @click.argument("name")
    @click.option("--org-number", help="Organisation/registration number, matched first")
    @click.pass_context
    def resolve(ctx, name, org_number):
        """Find the record matching NAME, creating it if there is none.

        Matching tries the registration number, the exact name, the
        normalized name and finally the first two words of the name.
        """
        service = CounterpartyService(ctx.obj["db"], kind)
        existing_ids = {p.id for p in service.list_counterparties()}
        party_id = service.find_or_create(name, org_number)
        party = service.get_counterparty(party_id)
        if party_id in existing_ids:
            click.echo(f"Matched {label} '{party.name}' (ID: {party_id})")
        else:
            click.echo(f"Created {label} '{party.name}' (ID: {party_id})")

    return group


customer_group = make_counterparty_group(InvoiceKind.CUSTOMER)
supplier_group = make_counterparty_group(InvoiceKind.SUPPLIER)


def register_commands(cli):
    """Register customer and supplier commands with main CLI."""
    cli.add_command(customer_group, name="customer")
    cli.add_command(supplier_group, name="supplier")
