"""Entity type management commands."""

import click
from commtrack.cli.error_handling import handle_domain_error
from commtrack.domain.entity import EntityService


@click.group()
def entity_type_group():
    """Manage entity types (e.g. Mutual Fund, Insurance)."""
    pass


@entity_type_group.command("create")
@click.argument("name", metavar="TYPE_NAME")
@click.pass_context
def create_entity_type(ctx, name: str):
    """Create a new entity type.

    Examples:
        commtrack type create "Mutual Fund"
        commtrack type create "Insurance"
    """
    service = EntityService(ctx.obj["db"])

    try:
        entity_type_id = service.create_entity_type(name)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created entity type '{name.strip()}' (ID: {entity_type_id})")


@entity_type_group.command("list")
@click.pass_context
def list_entity_types(ctx):
    """List all entity types."""
    service = EntityService(ctx.obj["db"])

    entity_types = service.list_entity_types()
    if not entity_types:
        click.echo("No entity types found.")
        return

    click.echo("\nEntity types:")
    click.echo("-" * 40)
    for entity_type in entity_types:
        click.echo(f"ID: {entity_type.id:3d} | {entity_type.name}")


def register_commands(cli):
    """Register entity type commands with main CLI."""
    cli.add_command(entity_type_group, name="type")
