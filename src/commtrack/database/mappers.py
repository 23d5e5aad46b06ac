"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the coercion of
aggregate values (which some backends return as float or str) into Decimal.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from commtrack.domain import entities as domain
from commtrack.database.models import (
    Entity as ORMEntity,
    EntityTransaction as ORMEntityTransaction,
    EntityType as ORMEntityType,
)

CENTS = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Coerce a money value from the database into a two-place Decimal."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS)


def to_date(value: Any) -> date:
    """Coerce a date value returned by an aggregate (possibly a string) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def entity_type_to_domain(orm_type: ORMEntityType) -> domain.EntityType:
    """Convert SQLAlchemy EntityType model to domain EntityType entity."""
    return domain.EntityType(
        id=orm_type.id,
        name=orm_type.name,
        created_at=orm_type.created_at,
        updated_at=orm_type.updated_at,
    )


def entity_to_domain(orm_entity: ORMEntity) -> domain.Entity:
    """Convert SQLAlchemy Entity model to domain Entity entity."""
    return domain.Entity(
        id=orm_entity.id,
        name=orm_entity.name,
        type_id=orm_entity.type_id,
        created_at=orm_entity.created_at,
        updated_at=orm_entity.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMEntityTransaction) -> domain.CommissionTransaction:
    """Convert SQLAlchemy EntityTransaction model to domain CommissionTransaction."""
    return domain.CommissionTransaction(
        id=orm_transaction.id,
        entity_id=orm_transaction.entity_id,
        month=orm_transaction.month,
        amount=to_decimal(orm_transaction.amount),
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def transaction_detail_to_domain(
    orm_transaction: ORMEntityTransaction,
    orm_entity: ORMEntity,
    orm_type: ORMEntityType,
) -> domain.TransactionDetail:
    """Convert a joined transaction/entity/type row to a domain TransactionDetail."""
    return domain.TransactionDetail(
        transaction=transaction_to_domain(orm_transaction),
        entity=entity_to_domain(orm_entity),
        entity_type=entity_type_to_domain(orm_type),
    )
