"""Entity management commands."""

import click
from commtrack.cli.error_handling import handle_domain_error, resolve_entity_type_or_exit
from commtrack.domain.entity import EntityService


@click.group()
def entity_group():
    """Manage entities (partners such as fund houses or insurers)."""
    pass


@entity_group.command("create")
@click.argument("name", metavar="ENTITY_NAME")
@click.option("--type", "entity_type", required=True, help="Entity type name or ID")
@click.pass_context
def create_entity(ctx, name: str, entity_type: str):
    """Create a new entity.

    Examples:
        commtrack entity create "ICICI Mutual Fund" --type "Mutual Fund"
        commtrack entity create "LIC" --type 2
    """
    service = EntityService(ctx.obj["db"])
    type_id = resolve_entity_type_or_exit(ctx, service, entity_type)

    try:
        entity_id = service.create_entity(name=name, type_id=type_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    type_obj = service.get_entity_type(type_id)
    click.echo(f"Created entity '{name.strip()}' (ID: {entity_id}) of type '{type_obj.name}'")


@entity_group.command("list")
@click.option("--type", "entity_type", help="Only list entities of this type (name or ID)")
@click.pass_context
def list_entities(ctx, entity_type: str | None):
    """List entities with their type."""
    service = EntityService(ctx.obj["db"])

    type_id = None
    if entity_type is not None:
        type_id = resolve_entity_type_or_exit(ctx, service, entity_type)

    entities = service.list_entities(type_id=type_id)
    if not entities:
        click.echo("No entities found.")
        return

    click.echo("\nEntities:")
    click.echo("-" * 60)
    for entity, type_obj in entities:
        click.echo(f"ID: {entity.id:3d} | {entity.name:30s} | Type: {type_obj.name}")


def register_commands(cli):
    """Register entity commands with main CLI."""
    cli.add_command(entity_group, name="entity")
