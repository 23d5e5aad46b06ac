"""
Commission API Routes

Provides endpoints for:
- Period-over-period performance (month, quarter, financial year)
- Entity types, entities and their monthly commission transactions
- Landing page overview
"""

import logging
from typing import Any, Optional

from flask import Blueprint, jsonify, request

from commtrack.domain.entities import PeriodKind
from commtrack.domain.errors import (
    ConflictError,
    DataAccessError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from commtrack.utils.date_parser import parse_iso_date
from commtrack.web import get_services
from commtrack.web.serializers import (
    commission_stats_to_dict,
    entity_to_dict,
    entity_type_to_dict,
    landing_page_to_dict,
    period_stats_to_dict,
    recent_commissions_to_dict,
    transaction_details_to_list,
    transaction_stats_to_dict,
    transaction_to_dict,
)

logger = logging.getLogger(__name__)

performance_bp = Blueprint("performance", __name__)
analytics_bp = Blueprint("analytics", __name__)

DEFAULT_PERIOD = PeriodKind.MONTH.value


def _success(data: Any, message: Optional[str] = None, status: int = 200):
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def _failure(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def _error_status(error: DomainError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ConflictError):
        return 409
    return 400


def _json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _int_field(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer") from None


def _date_field(value: Any, field: str):
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO date string")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date, got '{value}'") from None


# Performance

@performance_bp.route("/performance", methods=["GET"])
def get_performance():
    """
    Get transactions and period-over-period totals for one period.

    Query params:
        - period: month, quarter or year (default month)
        - date: ISO reference date inside the period (default today)
    """
    period_param = request.args.get("period") or DEFAULT_PERIOD
    custom_date = request.args.get("date") or None

    try:
        period = PeriodKind.parse(period_param)
    except ValidationError:
        return jsonify({"error": "Invalid period parameter"}), 400

    reference_date = None
    if custom_date is not None:
        try:
            reference_date = parse_iso_date(custom_date)
        except ValueError:
            return jsonify({"error": "Invalid date parameter"}), 400

    services = get_services()
    try:
        transactions = services.stats.get_transactions_by_period(period, reference_date)
        commission_stats = services.stats.get_commission_stats_by_period(period, reference_date)
    except DataAccessError:
        logger.exception("Error fetching performance data (period=%s, date=%s)", period.value, custom_date)
        return jsonify({"error": "Failed to fetch performance data"}), 500

    return jsonify({
        "transactions": transaction_details_to_list(transactions),
        "commissionStats": period_stats_to_dict(commission_stats),
        "period": period.value,
        "customDate": custom_date,
    })


# Entity types

@analytics_bp.route("/entity-types", methods=["GET"])
def list_entity_types():
    entity_types = get_services().entities.list_entity_types()
    return _success([entity_type_to_dict(t) for t in entity_types])


@analytics_bp.route("/entity-types", methods=["POST"])
def create_entity_type():
    services = get_services()
    try:
        body = _json_body()
        entity_type_id = services.entities.create_entity_type(body.get("name"))
    except DomainError as e:
        return _failure(str(e), _error_status(e))

    entity_type = services.entities.get_entity_type(entity_type_id)
    return _success(entity_type_to_dict(entity_type), "Entity type created", 201)


# Entities

@analytics_bp.route("/entities", methods=["GET"])
def list_entities():
    """
    List entities with their entity type.

    Query params:
        - typeId: only entities of this type (optional)
    """
    services = get_services()
    type_id = None
    try:
        if request.args.get("typeId"):
            type_id = _int_field(request.args["typeId"], "typeId")
    except ValidationError as e:
        return _failure(str(e), 400)

    entities = services.entities.list_entities(type_id=type_id)
    return _success([entity_to_dict(entity, entity_type) for entity, entity_type in entities])


@analytics_bp.route("/entities", methods=["POST"])
def create_entity():
    services = get_services()
    try:
        body = _json_body()
        type_id = _int_field(body.get("typeId"), "typeId")
        entity_id = services.entities.create_entity(body.get("name"), type_id)
    except DomainError as e:
        return _failure(str(e), _error_status(e))

    entity = services.entities.get_entity(entity_id)
    return _success(entity_to_dict(entity), "Entity created", 201)


# Transactions

def _create_transaction_from_body():
    services = get_services()
    try:
        body = _json_body()
        entity_id = _int_field(body.get("entityId"), "entityId")
        month = _date_field(body.get("month"), "month")
        if body.get("amount") is None:
            raise ValidationError("amount is required")
        transaction_id = services.entities.create_transaction(entity_id, month, body["amount"])
    except DomainError as e:
        return _failure(str(e), _error_status(e))

    transaction = services.entities.get_transaction(transaction_id)
    return _success(transaction_to_dict(transaction), "Transaction created", 201)


@analytics_bp.route("/transactions", methods=["GET"])
def get_transactions():
    """Get recent transactions with headline stats and the financial-year breakdown."""
    services = get_services()
    try:
        data = {
            "transactions": transaction_details_to_list(services.entities.list_transactions()),
            "stats": transaction_stats_to_dict(services.stats.get_transaction_stats()),
            "commissionStats": commission_stats_to_dict(services.stats.get_commission_stats()),
            "recentCommissionsData": recent_commissions_to_dict(
                services.stats.get_recent_commissions_data()
            ),
        }
    except DataAccessError:
        logger.exception("Error fetching transactions")
        return _failure("Failed to fetch transactions", 500)
    return _success(data)


@analytics_bp.route("/transactions", methods=["POST"])
def create_transaction():
    return _create_transaction_from_body()


@analytics_bp.route("/transactions/<int:transaction_id>", methods=["PATCH"])
def update_transaction(transaction_id: int):
    services = get_services()
    try:
        body = _json_body()
        if body.get("amount") is None:
            raise ValidationError("amount is required")
        services.entities.update_transaction_amount(transaction_id, body["amount"])
    except DomainError as e:
        return _failure(str(e), _error_status(e))

    transaction = services.entities.get_transaction(transaction_id)
    return _success(transaction_to_dict(transaction), "Transaction updated")


@analytics_bp.route("/transactions/<int:transaction_id>", methods=["DELETE"])
def delete_transaction(transaction_id: int):
    try:
        get_services().entities.delete_transaction(transaction_id)
    except DomainError as e:
        return _failure(str(e), _error_status(e))
    return _success(None, "Transaction deleted")


@analytics_bp.route("/entity-transactions", methods=["GET"])
def get_entity_transactions():
    """
    List one entity's transactions, newest month first.

    Query params:
        - entityId: entity ID (required)
    """
    entity_id = request.args.get("entityId")
    if not entity_id:
        return _failure("Entity ID is required", 400)

    try:
        transactions = get_services().entities.list_entity_transactions(_int_field(entity_id, "entityId"))
    except DomainError as e:
        return _failure(str(e), _error_status(e))
    return _success([transaction_to_dict(t) for t in transactions])


@analytics_bp.route("/entity-transactions", methods=["POST"])
def create_entity_transaction():
    return _create_transaction_from_body()


# Overview

@analytics_bp.route("/overview", methods=["GET"])
def get_overview():
    """Get summary stats, monthly trend, top partners and recent transactions."""
    try:
        analytics = get_services().analytics.get_landing_page_analytics()
    except DataAccessError:
        logger.exception("Error fetching overview analytics")
        return _failure("Failed to fetch overview", 500)
    return _success(landing_page_to_dict(analytics))


# Cache

@analytics_bp.route("/cache", methods=["GET", "DELETE"])
def stats_cache():
    """
    Stats cache management endpoint.

    GET: Return cache statistics
    DELETE: Clear cache
    """
    services = get_services()
    if request.method == "DELETE":
        services.stats.clear_cache()
        return _success(None, message="Cache cleared")
    return _success(services.cache.stats())
