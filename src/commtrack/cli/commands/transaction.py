"""Transaction management commands."""

import click
from commtrack.cli.error_handling import handle_domain_error, resolve_entity_or_exit
from commtrack.domain.amounts import parse_amount
from commtrack.domain.entity import EntityService
from commtrack.utils.date_parser import parse_month


@click.group()
def transaction_group():
    """Manage commission transactions."""
    pass


@transaction_group.command("list")
@click.option("--entity", help="Only list transactions of this entity (name or ID)")
@click.option("--from", "start_month", help="First month to include (e.g., 2024-04)")
@click.option("--to", "end_month", help="Last month to include (e.g., 2025-03)")
@click.option("--limit", type=int, help="Maximum number of transactions to show")
@click.pass_context
def list_transactions(
    ctx,
    entity: str | None,
    start_month: str | None,
    end_month: str | None,
    limit: int | None,
):
    """List transactions, newest month first.

    Examples:
        commtrack transaction list
        commtrack transaction list --from 2024-04 --to 2025-03
        commtrack transaction list --entity "ICICI Mutual Fund"
    """
    service = EntityService(ctx.obj["db"])

    start = end = None
    try:
        if start_month:
            start = parse_month(start_month)
        if end_month:
            end = parse_month(end_month)
    except ValueError as e:
        click.echo(f"Error: Invalid month format: {e}", err=True)
        ctx.exit(1)

    details = service.list_transactions(start_date=start, end_date=end)
    if entity is not None:
        entity_id = resolve_entity_or_exit(ctx, service, entity)
        details = [detail for detail in details if detail.entity.id == entity_id]
    if limit is not None:
        details = details[:limit]

    if not details:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'ID':>5}  {'Month':7}  {'Entity':30}  {'Type':20}  {'Amount':>15}")
    click.echo("-" * 85)
    for detail in details:
        txn = detail.transaction
        click.echo(
            f"{txn.id:>5}  {txn.month:%Y-%m}  {detail.entity.name[:30]:30}  "
            f"{detail.entity_type.name[:20]:20}  {txn.amount:>15,.2f}"
        )


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--amount", required=True, help="Corrected commission amount")
@click.pass_context
def update_transaction(ctx, transaction_id: int, amount: str):
    """Correct the amount of a transaction.

    Examples:
        commtrack transaction update 12 --amount 15250.50
    """
    service = EntityService(ctx.obj["db"])

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        service.update_transaction_amount(transaction_id, txn_amount)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated transaction {transaction_id}: amount ₹{txn_amount:,.2f}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a transaction.

    Examples:
        commtrack transaction delete 12
        commtrack transaction delete 12 --yes
    """
    service = EntityService(ctx.obj["db"])

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id} ({txn.month:%Y-%m}, ₹{txn.amount:,.2f})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
