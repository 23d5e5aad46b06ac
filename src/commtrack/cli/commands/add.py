"""Add commission transaction command."""

import click
from commtrack.cli.error_handling import handle_domain_error, resolve_entity_or_exit
from commtrack.domain.amounts import parse_amount
from commtrack.domain.entity import EntityService
from commtrack.utils.date_parser import parse_month


@click.command("add")
@click.option("--entity", required=True, help="Entity name or ID")
@click.option(
    "--month",
    required=True,
    help="Commission month (YYYY-MM, 'Apr 2024' or relative like 'this month', 'last month')",
)
@click.option("--amount", required=True, help="Commission amount (e.g., 1500.00 or '1,04,976.24')")
@click.pass_context
def add_transaction(ctx, entity: str, month: str, amount: str):
    """Record a monthly commission for an entity.

    Examples:
        commtrack add --entity "ICICI Mutual Fund" --month 2024-04 --amount 12500
        commtrack add --entity 3 --month "last month" --amount "1,04,976.24"
    """
    service = EntityService(ctx.obj["db"])

    entity_id = resolve_entity_or_exit(ctx, service, entity)
    entity_obj = service.get_entity(entity_id)

    # Parse month
    try:
        txn_month = parse_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month format: {e}", err=True)
        ctx.exit(1)

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(entity_id=entity_id, month=txn_month, amount=txn_amount)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Entity: {entity_obj.name}")
    click.echo(f"  Month: {txn_month:%Y-%m}")
    click.echo(f"  Amount: ₹{txn_amount:,.2f}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
