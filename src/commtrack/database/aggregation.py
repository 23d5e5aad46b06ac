"""Conditional aggregation queries over commission transactions.

Every total for a stats result is computed in one SELECT with one
CASE-filtered SUM per period, so all totals come from the same snapshot of
the table and a single round-trip.
"""

from typing import Mapping, Optional

from sqlalchemy import Select, and_, case, distinct, func, literal, select

from commtrack.database.models import Entity, EntityTransaction, EntityType
from commtrack.domain.entities import PeriodBoundary

TOTAL_ALL_TIME_LABEL = "total_all_time"
DISTINCT_MONTHS_LABEL = "distinct_months"


def in_period(boundary: PeriodBoundary):
    """Predicate: transaction month falls inside the closed boundary."""
    return and_(
        EntityTransaction.month >= boundary.start,
        EntityTransaction.month <= boundary.end,
    )


def period_sum(boundary: PeriodBoundary):
    """COALESCE(SUM(CASE WHEN month in period THEN amount ELSE 0 END), 0)."""
    return func.coalesce(
        func.sum(case((in_period(boundary), EntityTransaction.amount), else_=literal(0))),
        literal(0),
    )


def distinct_month_count(boundary: PeriodBoundary):
    """Number of distinct months with at least one transaction in the period.

    Months are stored normalized to the first of the month, so the month
    column itself identifies the calendar month.
    """
    return func.count(distinct(case((in_period(boundary), EntityTransaction.month))))


def _check_labels(boundaries: Mapping[str, PeriodBoundary]) -> None:
    reserved = {TOTAL_ALL_TIME_LABEL, DISTINCT_MONTHS_LABEL, "entity_type_id", "entity_type_name"}
    clash = reserved.intersection(boundaries)
    if clash:
        raise ValueError(f"Reserved boundary names: {', '.join(sorted(clash))}")


def build_period_totals_query(
    boundaries: Mapping[str, PeriodBoundary],
    distinct_months_for: Optional[str] = None,
) -> Select:
    """Build the single-row totals query.

    Args:
        boundaries: Named boundaries; each name becomes a result column
        distinct_months_for: Name of the boundary to count distinct months for

    Returns:
        SELECT with the all-time total, one sum per boundary and optionally
        the distinct month count
    """
    _check_labels(boundaries)
    columns = [
        func.coalesce(func.sum(EntityTransaction.amount), literal(0)).label(TOTAL_ALL_TIME_LABEL)
    ]
    columns.extend(period_sum(boundary).label(name) for name, boundary in boundaries.items())
    if distinct_months_for is not None:
        columns.append(distinct_month_count(boundaries[distinct_months_for]).label(DISTINCT_MONTHS_LABEL))
    return select(*columns).select_from(EntityTransaction)


def build_entity_type_totals_query(boundaries: Mapping[str, PeriodBoundary]) -> Select:
    """Build the grouped per-entity-type totals query."""
    _check_labels(boundaries)
    columns = [
        EntityType.id.label("entity_type_id"),
        EntityType.name.label("entity_type_name"),
    ]
    columns.extend(period_sum(boundary).label(name) for name, boundary in boundaries.items())
    return (
        select(*columns)
        .select_from(EntityTransaction)
        .join(Entity, EntityTransaction.entity_id == Entity.id)
        .join(EntityType, Entity.type_id == EntityType.id)
        .group_by(EntityType.id, EntityType.name)
        .order_by(EntityType.name)
    )
