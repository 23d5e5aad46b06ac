"""Commission statistics domain service.

Combines period boundaries with the totals of a single aggregation query and
computes percentage changes. Results are cached per period kind and
reference date for a few minutes.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional

from commtrack.domain.entities import (
    CommissionStats,
    EntityTypeTotal,
    GrandTotal,
    PeriodChange,
    PeriodComparison,
    PeriodKind,
    PeriodStats,
    PeriodSummary,
    RecentCommissionsData,
    TransactionDetail,
    TransactionStats,
)
from commtrack.domain.periods import (
    financial_year_bounds,
    get_period_boundaries,
    get_period_range,
    month_bounds,
    shift_years,
)
from commtrack.utils.cache import TTLCache, build_stats_cache_key

if TYPE_CHECKING:
    from commtrack.database.base import Database

logger = logging.getLogger(__name__)

RECENT_TRANSACTIONS_LIMIT = 10
CENTS = Decimal("0.01")


def pct_change(current: Decimal, comparison: Decimal) -> float:
    """Percentage change from comparison to current.

    Returns 0 when the comparison total is 0, whatever the current total is.
    """
    if comparison == 0:
        return 0.0
    return float((current - comparison) / comparison * 100)


class CommissionStatsService:
    """Service computing period-over-period commission statistics."""

    def __init__(
        self,
        db: "Database",
        cache: Optional[TTLCache] = None,
        today: Callable[[], date] = date.today,
    ):
        """Initialize commission stats service.

        Args:
            db: Database instance
            cache: Cache for computed stats; a private one is created if None
            today: Callable returning the reference date used when none is given
        """
        self.db = db
        self.cache = cache if cache is not None else TTLCache()
        self.today = today

    def _cached(self, key: str, compute: Callable[[], object]):
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached
        logger.debug("Cache miss for %s", key)
        result = compute()
        self.cache.set(key, result)
        return result

    def get_commission_stats_by_period(
        self, period: PeriodKind | str, reference_date: Optional[date] = None
    ) -> PeriodStats:
        """Get current vs previous vs same-period-last-year totals.

        Args:
            period: Period kind ('month', 'quarter' or 'year')
            reference_date: Date inside the current period; today if None

        Returns:
            PeriodStats for the period containing the reference date

        Raises:
            ValidationError: If period is not a known period kind
            DataAccessError: If the aggregation query fails
        """
        kind = PeriodKind.parse(period)
        key = build_stats_cache_key(kind.value, reference_date)
        return self._cached(
            key, lambda: self._compute_period_stats(kind, reference_date or self.today())
        )

    def _compute_period_stats(self, kind: PeriodKind, reference_date: date) -> PeriodStats:
        boundaries = get_period_boundaries(kind, reference_date)
        totals = self.db.get_period_totals(boundaries.as_named()).totals

        current_total = totals["current"]
        previous_total = totals["previous"]
        last_year_total = totals["same_period_last_year"]

        return PeriodStats(
            period=kind,
            current=PeriodSummary(
                total=current_total,
                start=boundaries.current.start,
                end=boundaries.current.end,
            ),
            previous=PeriodComparison(
                total=previous_total,
                start=boundaries.previous.start,
                end=boundaries.previous.end,
                pct_change=pct_change(current_total, previous_total),
            ),
            same_period_last_year=PeriodComparison(
                total=last_year_total,
                start=boundaries.same_period_last_year.start,
                end=boundaries.same_period_last_year.end,
                pct_change=pct_change(current_total, last_year_total),
            ),
        )

    def get_commission_stats(self) -> CommissionStats:
        """Get all-time total, current financial year and current month figures.

        The financial year is compared with the previous financial year and
        the month with the same month last year. The monthly average divides
        the financial-year total by the number of months that have data.
        """
        return self._cached(build_stats_cache_key(), lambda: self._compute_commission_stats(self.today()))

    def _compute_commission_stats(self, reference_date: date) -> CommissionStats:
        current_fy = financial_year_bounds(reference_date)
        current_month = month_bounds(reference_date.year, reference_date.month)
        boundaries = {
            "current_fy": current_fy,
            "previous_fy": shift_years(current_fy, -1),
            "current_month": current_month,
            "last_year_same_month": month_bounds(reference_date.year - 1, reference_date.month),
        }
        result = self.db.get_period_totals(boundaries, distinct_months_for="current_fy")
        totals = result.totals

        months_with_data = result.distinct_months or 1
        return CommissionStats(
            total_commissions=result.total_all_time,
            current_financial_year=PeriodChange(
                total=totals["current_fy"],
                pct_change=pct_change(totals["current_fy"], totals["previous_fy"]),
            ),
            current_month=PeriodChange(
                total=totals["current_month"],
                pct_change=pct_change(totals["current_month"], totals["last_year_same_month"]),
            ),
            monthly_average=(totals["current_fy"] / months_with_data).quantize(CENTS),
        )

    def get_recent_commissions_data(
        self, reference_date: Optional[date] = None, limit: int = RECENT_TRANSACTIONS_LIMIT
    ) -> RecentCommissionsData:
        """Get latest transactions and the financial-year breakdown by entity type.

        The grand total is the sum of the per-type totals rather than a
        separate query, so the breakdown always adds up to it.
        """
        reference_date = reference_date or self.today()
        current_fy = financial_year_bounds(reference_date)
        boundaries = {"current_fy": current_fy, "previous_fy": shift_years(current_fy, -1)}

        recent = self.db.list_transaction_details(limit=limit, order_by="created_at")
        grouped = self.db.get_entity_type_period_totals(boundaries)

        entity_type_totals = tuple(
            EntityTypeTotal(
                entity_type_id=row.entity_type_id,
                entity_type_name=row.entity_type_name,
                current_fy_total=row.totals["current_fy"],
                previous_fy_total=row.totals["previous_fy"],
                pct_change=pct_change(row.totals["current_fy"], row.totals["previous_fy"]),
            )
            for row in grouped
        )

        grand_current = sum((t.current_fy_total for t in entity_type_totals), Decimal("0.00"))
        grand_previous = sum((t.previous_fy_total for t in entity_type_totals), Decimal("0.00"))

        return RecentCommissionsData(
            transactions=tuple(recent),
            grand_total=GrandTotal(
                current_fy_total=grand_current,
                previous_fy_total=grand_previous,
                pct_change=pct_change(grand_current, grand_previous),
            ),
            entity_type_totals=entity_type_totals,
        )

    def get_transactions_by_period(
        self, period: PeriodKind | str, reference_date: Optional[date] = None
    ) -> list[TransactionDetail]:
        """Get transactions of the period containing the reference date, newest month first."""
        kind = PeriodKind.parse(period)
        boundary = get_period_range(kind, reference_date or self.today())
        return self.db.list_transaction_details(start_date=boundary.start, end_date=boundary.end)

    def get_transaction_stats(self) -> TransactionStats:
        """Get total, count, average, max and min over all transactions."""
        return self.db.get_transaction_stats()

    def clear_cache(self) -> None:
        """Drop every cached stats result."""
        self.cache.clear()
        logger.info("Commission stats cache cleared")
