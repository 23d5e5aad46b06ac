"""Shared pytest fixtures for commtrack tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from commtrack.config import Settings
from commtrack.database.factories import create_sqlite_database
from commtrack.domain.analytics import AnalyticsService
from commtrack.domain.entity import EntityService
from commtrack.domain.stats import CommissionStatsService
from commtrack.utils.cache import TTLCache

# Fixed "today" for tests that depend on the current period: FY 2023-24, Q1, March.
TODAY = date(2024, 3, 10)


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def fake_clock():
    """Create a clock that only moves when told to."""
    return FakeClock()


@pytest.fixture
def cache(fake_clock):
    """Create a stats cache driven by the fake clock."""
    return TTLCache(ttl=300, maxsize=100, clock=fake_clock)


@pytest.fixture
def entity_service(temp_db):
    """Create an EntityService with a temporary database."""
    return EntityService(temp_db)


@pytest.fixture
def stats_service(temp_db, cache):
    """Create a CommissionStatsService pinned to TODAY."""
    return CommissionStatsService(temp_db, cache=cache, today=lambda: TODAY)


@pytest.fixture
def analytics_service(temp_db):
    """Create an AnalyticsService with a temporary database."""
    return AnalyticsService(temp_db)


@pytest.fixture
def sample_data(entity_service):
    """Create two entity types, three entities and transactions across two financial years.

    Totals by financial year:
        FY 2023-24: Mutual Fund 1000.00 (ICICI 600 + HDFC 400), Insurance 300.00
        FY 2022-23: Mutual Fund 800.00, Insurance 400.00
    """
    mutual_fund = entity_service.create_entity_type("Mutual Fund")
    insurance = entity_service.create_entity_type("Insurance")

    icici = entity_service.create_entity("ICICI Mutual Fund", mutual_fund)
    hdfc = entity_service.create_entity("HDFC Mutual Fund", mutual_fund)
    lic = entity_service.create_entity("LIC", insurance)

    transactions = [
        # FY 2022-23
        (icici, date(2022, 4, 1), "500.00"),
        (hdfc, date(2023, 3, 1), "300.00"),
        (lic, date(2023, 3, 1), "400.00"),
        # FY 2023-24
        (icici, date(2023, 4, 1), "250.00"),
        (icici, date(2024, 1, 1), "350.00"),
        (hdfc, date(2024, 3, 1), "400.00"),
        (lic, date(2023, 12, 1), "300.00"),
    ]
    for entity_id, month, amount in transactions:
        entity_service.create_transaction(entity_id, month, Decimal(amount))

    return {
        "types": {"Mutual Fund": mutual_fund, "Insurance": insurance},
        "entities": {"ICICI Mutual Fund": icici, "HDFC Mutual Fund": hdfc, "LIC": lic},
    }


@pytest.fixture
def app(temp_db, cache):
    """Create a Flask app serving the temporary database."""
    from commtrack.web import create_app

    app = create_app(settings=Settings(), db=temp_db, cache=cache, today=lambda: TODAY)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
