"""Entity, entity type and transaction domain service."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from commtrack.domain.amounts import parse_amount
from commtrack.domain.entities import (
    CommissionTransaction,
    Entity,
    EntityType,
    TransactionDetail,
    first_of_month,
)
from commtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_entity_type,
    empty_name,
    entity_not_found,
    entity_type_not_found,
    transaction_not_found,
)

if TYPE_CHECKING:
    from commtrack.database.base import Database


def _clean_name(name: Optional[str], kind: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(empty_name(kind))
    return cleaned


class EntityService:
    """Service for managing entity types, entities and their transactions."""

    def __init__(self, db: "Database"):
        """Initialize entity service.

        Args:
            db: Database instance
        """
        self.db = db

    # Entity types
    def create_entity_type(self, name: str) -> int:
        """Create an entity type.

        Args:
            name: Entity type name, e.g. 'Mutual Fund'

        Returns:
            Entity type ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If an entity type with that name exists
        """
        name = _clean_name(name, "Entity type")
        if self.db.get_entity_type_by_name(name) is not None:
            raise ConflictError(duplicate_entity_type(name))
        return self.db.create_entity_type(name)

    def get_entity_type(self, entity_type_id: int) -> Optional[EntityType]:
        """Get entity type by ID."""
        return self.db.get_entity_type(entity_type_id)

    def list_entity_types(self) -> list[EntityType]:
        """List all entity types ordered by name."""
        return self.db.list_entity_types()

    # Entities
    def create_entity(self, name: str, type_id: int) -> int:
        """Create an entity.

        Args:
            name: Entity name, e.g. 'ICICI Mutual Fund'
            type_id: Entity type ID

        Returns:
            Entity ID

        Raises:
            ValidationError: If the name is empty
            NotFoundError: If the entity type doesn't exist
        """
        name = _clean_name(name, "Entity")
        if self.db.get_entity_type(type_id) is None:
            raise NotFoundError(entity_type_not_found(type_id))
        return self.db.create_entity(name=name, type_id=type_id)

    def get_entity(self, entity_id: int) -> Optional[Entity]:
        """Get entity by ID."""
        return self.db.get_entity(entity_id)

    def list_entities(self, type_id: Optional[int] = None) -> list[tuple[Entity, EntityType]]:
        """List entities with their types, optionally filtered by type."""
        return self.db.list_entities(type_id=type_id)

    def resolve_entity_type(self, value: str | int) -> int:
        """Resolve an entity type name or ID to an ID.

        Raises:
            NotFoundError: If no entity type matches
        """
        try:
            entity_type_id = int(value)
        except (TypeError, ValueError):
            entity_type = self.db.get_entity_type_by_name(str(value))
            if entity_type is None:
                raise NotFoundError(f"Entity type '{value}' not found") from None
            return entity_type.id

        if self.db.get_entity_type(entity_type_id) is None:
            raise NotFoundError(entity_type_not_found(entity_type_id))
        return entity_type_id

    def resolve_entity(self, value: str | int) -> int:
        """Resolve an entity name or ID to an ID.

        Raises:
            NotFoundError: If no entity matches
            ConflictError: If the name matches more than one entity
        """
        try:
            entity_id = int(value)
        except (TypeError, ValueError):
            matches = [entity for entity, _ in self.db.list_entities() if entity.name == value]
            if not matches:
                raise NotFoundError(f"Entity '{value}' not found") from None
            if len(matches) > 1:
                ids = ", ".join(str(entity.id) for entity in matches)
                raise ConflictError(f"Entity name '{value}' is ambiguous (IDs: {ids}); use an ID") from None
            return matches[0].id

        if self.db.get_entity(entity_id) is None:
            raise NotFoundError(entity_not_found(entity_id))
        return entity_id

    # Transactions
    def create_transaction(
        self, entity_id: int, month: date, amount: Decimal | int | float | str
    ) -> int:
        """Record a monthly commission amount for an entity.

        Args:
            entity_id: Entity ID
            month: Any date in the month; stored as the first of the month
            amount: Commission amount

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the entity doesn't exist
            ValidationError: If the amount is not a finite number or is too large
        """
        if self.db.get_entity(entity_id) is None:
            raise NotFoundError(entity_not_found(entity_id))
        return self.db.create_transaction(
            entity_id=entity_id,
            month=first_of_month(month),
            amount=parse_amount(amount),
        )

    def get_transaction(self, transaction_id: int) -> Optional[CommissionTransaction]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def update_transaction_amount(
        self, transaction_id: int, amount: Decimal | int | float | str
    ) -> None:
        """Correct the amount of an existing transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the amount is not a finite number or is too large
        """
        value = parse_amount(amount)
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.update_transaction_amount(transaction_id, value)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[TransactionDetail]:
        """List transactions with entity and type, newest month first."""
        return self.db.list_transaction_details(start_date=start_date, end_date=end_date, limit=limit)

    def list_entity_transactions(self, entity_id: int) -> list[CommissionTransaction]:
        """List transactions of one entity, newest month first.

        Raises:
            NotFoundError: If the entity doesn't exist
        """
        if self.db.get_entity(entity_id) is None:
            raise NotFoundError(entity_not_found(entity_id))
        return self.db.list_entity_transactions(entity_id)
