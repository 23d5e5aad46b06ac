"""CLI error handling helpers."""

import click

from commtrack.domain.entity import EntityService
from commtrack.domain.errors import DataAccessError, DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | DataAccessError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def resolve_entity_or_exit(ctx: click.Context, service: EntityService, entity: str | int) -> int:
    """Resolve an entity name or ID, or exit with a CLI error."""
    try:
        return service.resolve_entity(entity)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_entity_type_or_exit(
    ctx: click.Context, service: EntityService, entity_type: str | int
) -> int:
    """Resolve an entity type name or ID, or exit with a CLI error."""
    try:
        return service.resolve_entity_type(entity_type)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
