"""Landing page analytics domain service."""

from decimal import Decimal
from typing import TYPE_CHECKING

from commtrack.domain.entities import (
    LandingPageAnalytics,
    MonthlyTotal,
    OverviewStats,
    PartnerTotal,
    TransactionDetail,
)

if TYPE_CHECKING:
    from commtrack.database.base import Database


class AnalyticsService:
    """Service for the headline numbers and lists shown on the landing page."""

    def __init__(self, db: "Database"):
        """Initialize analytics service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_overview_stats(self) -> OverviewStats:
        """Get total commissions, partner and type counts and the average per transaction."""
        stats = self.db.get_transaction_stats()
        average = Decimal("0.00")
        if stats.transaction_count > 0:
            average = (stats.total_amount / stats.transaction_count).quantize(Decimal("0.01"))
        return OverviewStats(
            total_commissions=stats.total_amount,
            total_partners=self.db.count_entities(),
            total_product_types=self.db.count_entity_types(),
            avg_commission_per_transaction=average,
        )

    def get_monthly_trend(self, months: int = 12) -> list[MonthlyTotal]:
        """Get per-month totals for the latest months with data, oldest first."""
        return self.db.get_monthly_totals(limit=months)

    def get_top_partners(self, limit: int = 5) -> list[PartnerTotal]:
        """Get the entities with the highest all-time commissions."""
        return self.db.get_top_entities(limit=limit)

    def get_recent_transactions(self, limit: int = 10) -> list[TransactionDetail]:
        """Get the latest transactions by month."""
        return self.db.list_transaction_details(limit=limit)

    def get_landing_page_analytics(self) -> LandingPageAnalytics:
        """Get everything the landing page shows."""
        return LandingPageAnalytics(
            summary_stats=self.get_overview_stats(),
            monthly_trend=tuple(self.get_monthly_trend()),
            top_partners=tuple(self.get_top_partners()),
            recent_transactions=tuple(self.get_recent_transactions()),
        )
