"""Domain model entities for commtrack.

These are pure data classes representing business concepts, independent of
database schema. Storage rows are converted into these by the mappers in
the database layer, and aggregation results are returned as these too.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum

from commtrack.domain.errors import ValidationError, invalid_period


class PeriodKind(str, Enum):
    """Granularity of period-over-period aggregation."""

    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "str | PeriodKind") -> "PeriodKind":
        """Parse a period kind. Only the exact values month, quarter and year match."""
        if isinstance(value, PeriodKind):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(invalid_period(value)) from None


@dataclass(frozen=True)
class EntityType:
    """Entity type (product category) domain entity."""

    id: int
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Entity:
    """Entity (commission-paying partner) domain entity."""

    id: int
    name: str
    type_id: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CommissionTransaction:
    """Monthly commission amount booked against an entity."""

    id: int
    entity_id: int
    month: date
    amount: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TransactionDetail:
    """Transaction together with its entity and entity type."""

    transaction: CommissionTransaction
    entity: Entity
    entity_type: EntityType


@dataclass(frozen=True)
class TransactionStats:
    """Simple statistics over every stored transaction."""

    total_amount: Decimal
    transaction_count: int
    average_amount: Decimal
    max_amount: Decimal
    min_amount: Decimal


@dataclass(frozen=True)
class PeriodBoundary:
    """Closed date interval [start, end]."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(
                f"Period start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )


@dataclass(frozen=True)
class PeriodBoundaries:
    """Current period plus the two periods it is compared against."""

    kind: PeriodKind
    current: PeriodBoundary
    previous: PeriodBoundary
    same_period_last_year: PeriodBoundary

    def as_named(self) -> dict[str, PeriodBoundary]:
        """Return the boundaries keyed by the names used in aggregation queries."""
        return {
            "current": self.current,
            "previous": self.previous,
            "same_period_last_year": self.same_period_last_year,
        }


@dataclass(frozen=True)
class PeriodTotals:
    """Raw output of a single conditional aggregation query."""

    total_all_time: Decimal
    totals: dict[str, Decimal]
    distinct_months: int = 0


@dataclass(frozen=True)
class EntityTypePeriodTotals:
    """Grouped conditional aggregation output for one entity type."""

    entity_type_id: int
    entity_type_name: str
    totals: dict[str, Decimal]


@dataclass(frozen=True)
class PeriodSummary:
    """Total for the current period of a stats result."""

    total: Decimal
    start: date
    end: date


@dataclass(frozen=True)
class PeriodComparison:
    """Total for a comparison period and the change relative to it."""

    total: Decimal
    start: date
    end: date
    pct_change: float


@dataclass(frozen=True)
class PeriodStats:
    """Period-over-period commission statistics."""

    period: PeriodKind
    current: PeriodSummary
    previous: PeriodComparison
    same_period_last_year: PeriodComparison


@dataclass(frozen=True)
class PeriodChange:
    """Total for a period and its change against the comparison period."""

    total: Decimal
    pct_change: float


@dataclass(frozen=True)
class CommissionStats:
    """All-time, financial-year and month commission figures."""

    total_commissions: Decimal
    current_financial_year: PeriodChange
    current_month: PeriodChange
    monthly_average: Decimal


@dataclass(frozen=True)
class EntityTypeTotal:
    """Financial-year totals for a single entity type."""

    entity_type_id: int
    entity_type_name: str
    current_fy_total: Decimal
    previous_fy_total: Decimal
    pct_change: float


@dataclass(frozen=True)
class GrandTotal:
    """Financial-year totals summed over every entity type."""

    current_fy_total: Decimal
    previous_fy_total: Decimal
    pct_change: float


@dataclass(frozen=True)
class RecentCommissionsData:
    """Latest transactions plus the financial-year breakdown by entity type."""

    transactions: tuple[TransactionDetail, ...]
    grand_total: GrandTotal
    entity_type_totals: tuple[EntityTypeTotal, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OverviewStats:
    """Headline counters for the landing page."""

    total_commissions: Decimal
    total_partners: int
    total_product_types: int
    avg_commission_per_transaction: Decimal


@dataclass(frozen=True)
class MonthlyTotal:
    """Commission total for one calendar month."""

    month: date
    total: Decimal


@dataclass(frozen=True)
class PartnerTotal:
    """All-time commission total for one entity."""

    entity_id: int
    name: str
    total_commission: Decimal


@dataclass(frozen=True)
class LandingPageAnalytics:
    """Everything the landing page renders, fetched together."""

    summary_stats: OverviewStats
    monthly_trend: tuple[MonthlyTotal, ...]
    top_partners: tuple[PartnerTotal, ...]
    recent_transactions: tuple[TransactionDetail, ...]


def first_of_month(day: date) -> date:
    """Normalize a date to the first day of its month."""
    return day.replace(day=1)

