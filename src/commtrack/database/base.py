"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Mapping, Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from commtrack.domain.entities import (
    CommissionTransaction,
    Entity,
    EntityType,
    EntityTypePeriodTotals,
    MonthlyTotal,
    PartnerTotal,
    PeriodBoundary,
    PeriodTotals,
    TransactionDetail,
    TransactionStats,
)


class Database(ABC):
    """Abstract database interface for commtrack."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Entity type operations
    @abstractmethod
    def create_entity_type(self, name: str) -> int:
        """Create a new entity type. Returns entity type ID."""
        pass

    @abstractmethod
    def get_entity_type(self, entity_type_id: int) -> Optional[EntityType]:
        """Get entity type by ID."""
        pass

    @abstractmethod
    def get_entity_type_by_name(self, name: str) -> Optional[EntityType]:
        """Get entity type by name."""
        pass

    @abstractmethod
    def list_entity_types(self) -> list[EntityType]:
        """List all entity types ordered by name."""
        pass

    # Entity operations
    @abstractmethod
    def create_entity(self, name: str, type_id: int) -> int:
        """Create a new entity. Returns entity ID."""
        pass

    @abstractmethod
    def get_entity(self, entity_id: int) -> Optional[Entity]:
        """Get entity by ID."""
        pass

    @abstractmethod
    def list_entities(self, type_id: Optional[int] = None) -> list[tuple[Entity, EntityType]]:
        """List entities with their types, optionally filtered by type."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, entity_id: int, month: date, amount: Decimal) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[CommissionTransaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction_amount(self, transaction_id: int, amount: Decimal) -> None:
        """Correct the amount of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_entity_transactions(self, entity_id: int) -> list[CommissionTransaction]:
        """List transactions of one entity, newest month first."""
        pass

    @abstractmethod
    def list_transaction_details(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
        order_by: str = "month",
    ) -> list[TransactionDetail]:
        """List transactions joined with entity and entity type.

        Args:
            start_date: Optional first month to include
            end_date: Optional last month to include
            limit: Optional maximum number of rows
            order_by: 'month' (newest month first) or 'created_at' (newest first)

        Raises:
            DataAccessError: If the query fails
        """
        pass

    # Aggregation operations
    @abstractmethod
    def get_period_totals(
        self,
        boundaries: Mapping[str, PeriodBoundary],
        distinct_months_for: Optional[str] = None,
    ) -> PeriodTotals:
        """Compute the all-time total and one total per named boundary in one query.

        Raises:
            DataAccessError: If the query fails
        """
        pass

    @abstractmethod
    def get_entity_type_period_totals(
        self, boundaries: Mapping[str, PeriodBoundary]
    ) -> list[EntityTypePeriodTotals]:
        """Compute per-entity-type totals for each named boundary in one grouped query.

        Raises:
            DataAccessError: If the query fails
        """
        pass

    @abstractmethod
    def get_transaction_stats(self) -> TransactionStats:
        """Get total, count, average, max and min over all transactions."""
        pass

    @abstractmethod
    def count_entities(self) -> int:
        """Count entities."""
        pass

    @abstractmethod
    def count_entity_types(self) -> int:
        """Count entity types."""
        pass

    @abstractmethod
    def get_monthly_totals(self, limit: int = 12) -> list[MonthlyTotal]:
        """Get per-month totals for the most recent months, oldest first."""
        pass

    @abstractmethod
    def get_top_entities(self, limit: int = 5) -> list[PartnerTotal]:
        """Get entities with the highest all-time commission totals."""
        pass
