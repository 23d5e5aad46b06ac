"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from commtrack.domain import entities
from commtrack.domain.entities import PeriodBoundary
from commtrack.domain.errors import DataAccessError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_entity_type_returns_domain_model(self, temp_db):
        """Test that get_entity_type returns a domain EntityType entity."""
        entity_type_id = temp_db.create_entity_type("Mutual Fund")

        entity_type = temp_db.get_entity_type(entity_type_id)

        assert isinstance(entity_type, entities.EntityType)
        assert entity_type.id == entity_type_id
        assert entity_type.name == "Mutual Fund"
        assert isinstance(entity_type.created_at, datetime)

    def test_get_missing_returns_none(self, temp_db):
        """Test that lookups of unknown IDs return None."""
        assert temp_db.get_entity_type(999) is None
        assert temp_db.get_entity_type_by_name("Nope") is None
        assert temp_db.get_entity(999) is None
        assert temp_db.get_transaction(999) is None

    def test_list_entities_returns_pairs(self, temp_db):
        """Test that list_entities returns (Entity, EntityType) pairs ordered by name."""
        type_id = temp_db.create_entity_type("Insurance")
        temp_db.create_entity("LIC", type_id)
        temp_db.create_entity("HDFC Life", type_id)

        rows = temp_db.list_entities()

        assert [entity.name for entity, _ in rows] == ["HDFC Life", "LIC"]
        for entity, entity_type in rows:
            assert isinstance(entity, entities.Entity)
            assert isinstance(entity_type, entities.EntityType)
            assert entity_type.name == "Insurance"

    def test_create_entity_unknown_type(self, temp_db):
        """Test creating an entity with an unknown type fails."""
        with pytest.raises(ValueError, match="not found"):
            temp_db.create_entity("Orphan", 42)

    def test_transaction_round_trip(self, temp_db):
        """Test that a stored transaction comes back as a domain model with Decimal amount."""
        type_id = temp_db.create_entity_type("Mutual Fund")
        entity_id = temp_db.create_entity("ICICI Mutual Fund", type_id)
        txn_id = temp_db.create_transaction(entity_id, date(2024, 4, 1), Decimal("1234.56"))

        txn = temp_db.get_transaction(txn_id)

        assert isinstance(txn, entities.CommissionTransaction)
        assert txn.month == date(2024, 4, 1)
        assert txn.amount == Decimal("1234.56")
        assert isinstance(txn.amount, Decimal)

    def test_update_and_delete_transaction(self, temp_db):
        """Test correcting and deleting a transaction."""
        type_id = temp_db.create_entity_type("Mutual Fund")
        entity_id = temp_db.create_entity("ICICI Mutual Fund", type_id)
        txn_id = temp_db.create_transaction(entity_id, date(2024, 4, 1), Decimal("100.00"))

        temp_db.update_transaction_amount(txn_id, Decimal("150.00"))
        assert temp_db.get_transaction(txn_id).amount == Decimal("150.00")

        temp_db.delete_transaction(txn_id)
        assert temp_db.get_transaction(txn_id) is None

        with pytest.raises(ValueError, match="not found"):
            temp_db.delete_transaction(txn_id)

    def test_list_transaction_details_filters_and_orders(self, temp_db, sample_data):
        """Test date filtering and newest-month-first ordering."""
        details = temp_db.list_transaction_details(start_date=date(2023, 4, 1), end_date=date(2024, 3, 31))

        months = [detail.transaction.month for detail in details]
        assert len(details) == 4
        assert months == sorted(months, reverse=True)
        assert all(isinstance(detail, entities.TransactionDetail) for detail in details)

    def test_list_transaction_details_limit(self, temp_db, sample_data):
        """Test that limit caps the number of rows."""
        assert len(temp_db.list_transaction_details(limit=3)) == 3

    def test_list_transaction_details_unknown_ordering(self, temp_db):
        with pytest.raises(ValueError, match="Unknown ordering"):
            temp_db.list_transaction_details(order_by="amount")


class TestAggregateQueries:
    """Tests for the conditional aggregation queries."""

    def test_period_totals_in_one_result(self, temp_db, sample_data):
        """Test that every named boundary gets its own total."""
        result = temp_db.get_period_totals(
            {
                "fy_2023": PeriodBoundary(date(2023, 4, 1), date(2024, 3, 31)),
                "fy_2022": PeriodBoundary(date(2022, 4, 1), date(2023, 3, 31)),
                "empty": PeriodBoundary(date(2010, 1, 1), date(2010, 12, 31)),
            }
        )

        assert isinstance(result, entities.PeriodTotals)
        assert result.total_all_time == Decimal("2500.00")
        assert result.totals == {
            "fy_2023": Decimal("1300.00"),
            "fy_2022": Decimal("1200.00"),
            "empty": Decimal("0.00"),
        }
        assert result.distinct_months == 0

    def test_period_totals_boundaries_are_inclusive(self, temp_db, sample_data):
        """Test that transactions on the first day of both ends are counted."""
        result = temp_db.get_period_totals({"one_day": PeriodBoundary(date(2024, 3, 1), date(2024, 3, 1))})

        assert result.totals["one_day"] == Decimal("400.00")

    def test_distinct_months(self, temp_db, sample_data):
        """Test counting months with data inside one boundary."""
        result = temp_db.get_period_totals(
            {"fy": PeriodBoundary(date(2023, 4, 1), date(2024, 3, 31))},
            distinct_months_for="fy",
        )

        assert result.distinct_months == 4

    def test_period_totals_empty_table(self, temp_db):
        """Test that totals over no rows are zero, not None."""
        result = temp_db.get_period_totals({"any": PeriodBoundary(date(2024, 1, 1), date(2024, 12, 31))})

        assert result.total_all_time == Decimal("0.00")
        assert result.totals["any"] == Decimal("0.00")

    def test_reserved_boundary_name_rejected(self, temp_db):
        with pytest.raises(ValueError, match="Reserved"):
            temp_db.get_period_totals({"total_all_time": PeriodBoundary(date(2024, 1, 1), date(2024, 1, 31))})

    def test_entity_type_period_totals(self, temp_db, sample_data):
        """Test grouped totals per entity type, ordered by type name."""
        rows = temp_db.get_entity_type_period_totals(
            {
                "current_fy": PeriodBoundary(date(2023, 4, 1), date(2024, 3, 31)),
                "previous_fy": PeriodBoundary(date(2022, 4, 1), date(2023, 3, 31)),
            }
        )

        assert [row.entity_type_name for row in rows] == ["Insurance", "Mutual Fund"]
        by_name = {row.entity_type_name: row.totals for row in rows}
        assert by_name["Mutual Fund"] == {"current_fy": Decimal("1000.00"), "previous_fy": Decimal("800.00")}
        assert by_name["Insurance"] == {"current_fy": Decimal("300.00"), "previous_fy": Decimal("400.00")}

    def test_transaction_stats(self, temp_db, sample_data):
        stats = temp_db.get_transaction_stats()

        assert stats.transaction_count == 7
        assert stats.total_amount == Decimal("2500.00")
        assert stats.average_amount == Decimal("357.14")
        assert stats.max_amount == Decimal("500.00")
        assert stats.min_amount == Decimal("250.00")

    def test_monthly_totals_oldest_first(self, temp_db, sample_data):
        totals = temp_db.get_monthly_totals(limit=3)

        assert [item.month for item in totals] == [date(2023, 12, 1), date(2024, 1, 1), date(2024, 3, 1)]
        assert [item.total for item in totals] == [Decimal("300.00"), Decimal("350.00"), Decimal("400.00")]

    def test_top_entities(self, temp_db, sample_data):
        top = temp_db.get_top_entities(limit=2)

        assert [item.name for item in top] == ["ICICI Mutual Fund", "HDFC Mutual Fund"]
        assert top[0].total_commission == Decimal("1100.00")

    def test_aggregate_failure_raises_data_access_error(self, temp_db, monkeypatch):
        """Test that storage failures surface as DataAccessError."""
        from sqlalchemy.exc import OperationalError

        session = temp_db._get_session()

        def broken_execute(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "execute", broken_execute)

        with pytest.raises(DataAccessError):
            temp_db.get_transaction_stats()

    def test_transaction_listing_failure_raises_data_access_error(self, temp_db, monkeypatch):
        """Test that a failed transaction listing surfaces as DataAccessError."""
        from sqlalchemy.exc import OperationalError

        session = temp_db._get_session()

        def broken_execute(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "execute", broken_execute)

        with pytest.raises(DataAccessError, match="transaction details"):
            temp_db.list_transaction_details(start_date=date(2024, 1, 1), end_date=date(2024, 3, 31))
