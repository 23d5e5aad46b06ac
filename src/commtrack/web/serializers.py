"""Convert domain results into JSON-ready dictionaries.

Keys are camelCase, money values become floats and dates ISO strings.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from commtrack.domain.entities import (
    CommissionStats,
    CommissionTransaction,
    Entity,
    EntityType,
    LandingPageAnalytics,
    PeriodStats,
    RecentCommissionsData,
    TransactionDetail,
    TransactionStats,
)


def money(value: Decimal) -> float:
    return float(value)


def iso(value: Optional[date | datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def entity_type_to_dict(entity_type: EntityType) -> dict[str, Any]:
    return {
        "id": entity_type.id,
        "name": entity_type.name,
        "createdAt": iso(entity_type.created_at),
        "updatedAt": iso(entity_type.updated_at),
    }


def entity_to_dict(entity: Entity, entity_type: Optional[EntityType] = None) -> dict[str, Any]:
    data = {
        "id": entity.id,
        "name": entity.name,
        "typeId": entity.type_id,
        "createdAt": iso(entity.created_at),
        "updatedAt": iso(entity.updated_at),
    }
    if entity_type is not None:
        data["entityType"] = entity_type_to_dict(entity_type)
    return data


def transaction_to_dict(transaction: CommissionTransaction) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "entityId": transaction.entity_id,
        "month": iso(transaction.month),
        "amount": money(transaction.amount),
        "createdAt": iso(transaction.created_at),
        "updatedAt": iso(transaction.updated_at),
    }


def transaction_detail_to_dict(detail: TransactionDetail) -> dict[str, Any]:
    return {
        "transaction": transaction_to_dict(detail.transaction),
        "entity": entity_to_dict(detail.entity),
        "entityType": entity_type_to_dict(detail.entity_type),
    }


def transaction_details_to_list(details: Iterable[TransactionDetail]) -> list[dict[str, Any]]:
    return [transaction_detail_to_dict(detail) for detail in details]


def transaction_stats_to_dict(stats: TransactionStats) -> dict[str, Any]:
    return {
        "totalAmount": money(stats.total_amount),
        "transactionCount": stats.transaction_count,
        "averageAmount": money(stats.average_amount),
        "maxAmount": money(stats.max_amount),
        "minAmount": money(stats.min_amount),
    }


def period_stats_to_dict(stats: PeriodStats) -> dict[str, Any]:
    return {
        "period": stats.period.value,
        "currentPeriod": {
            "total": money(stats.current.total),
            "startDate": iso(stats.current.start),
            "endDate": iso(stats.current.end),
        },
        "previousPeriod": {
            "total": money(stats.previous.total),
            "startDate": iso(stats.previous.start),
            "endDate": iso(stats.previous.end),
            "percentageChange": stats.previous.pct_change,
        },
        "samePeriodLastYear": {
            "total": money(stats.same_period_last_year.total),
            "startDate": iso(stats.same_period_last_year.start),
            "endDate": iso(stats.same_period_last_year.end),
            "percentageChange": stats.same_period_last_year.pct_change,
        },
    }


def commission_stats_to_dict(stats: CommissionStats) -> dict[str, Any]:
    return {
        "totalCommissions": money(stats.total_commissions),
        "currentFinancialYear": {
            "total": money(stats.current_financial_year.total),
            "percentageChange": stats.current_financial_year.pct_change,
        },
        "currentMonth": {
            "total": money(stats.current_month.total),
            "percentageChange": stats.current_month.pct_change,
        },
        "monthlyAverage": money(stats.monthly_average),
    }


def recent_commissions_to_dict(data: RecentCommissionsData) -> dict[str, Any]:
    return {
        "transactions": transaction_details_to_list(data.transactions),
        "grandTotal": {
            "currentFYTotal": money(data.grand_total.current_fy_total),
            "previousFYTotal": money(data.grand_total.previous_fy_total),
            "percentageChange": data.grand_total.pct_change,
        },
        "entityTypeTotals": [
            {
                "entityTypeId": total.entity_type_id,
                "entityTypeName": total.entity_type_name,
                "currentFYTotal": money(total.current_fy_total),
                "previousFYTotal": money(total.previous_fy_total),
                "percentageChange": total.pct_change,
            }
            for total in data.entity_type_totals
        ],
    }


def landing_page_to_dict(data: LandingPageAnalytics) -> dict[str, Any]:
    summary = data.summary_stats
    return {
        "summaryStats": {
            "totalCommissions": money(summary.total_commissions),
            "totalPartners": summary.total_partners,
            "totalProductTypes": summary.total_product_types,
            "avgCommissionPerTransaction": money(summary.avg_commission_per_transaction),
        },
        "monthlyTrend": [
            {"month": iso(item.month), "total": money(item.total)} for item in data.monthly_trend
        ],
        "topPartners": [
            {"id": item.entity_id, "name": item.name, "totalCommission": money(item.total_commission)}
            for item in data.top_partners
        ],
        "recentTransactions": transaction_details_to_list(data.recent_transactions),
    }
