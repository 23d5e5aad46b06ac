"""Domain layer for commtrack application."""

from commtrack.domain.entity import EntityService
from commtrack.domain.stats import CommissionStatsService
from commtrack.domain.analytics import AnalyticsService

__all__ = [
    "EntityService",
    "CommissionStatsService",
    "AnalyticsService",
]
