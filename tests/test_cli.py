"""Tests for CLI commands."""

from datetime import date
from decimal import Decimal

from commtrack.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


class TestEntityTypeCommands:
    """Tests for 'type' commands."""

    def test_create(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "type", "create", "Mutual Fund")

        assert result.exit_code == 0
        assert "Created entity type 'Mutual Fund'" in result.output
        assert "ID:" in result.output

    def test_create_duplicate(self, cli_runner, temp_db):
        _invoke(cli_runner, temp_db, "type", "create", "Mutual Fund")
        result = _invoke(cli_runner, temp_db, "type", "create", "Mutual Fund")

        assert result.exit_code == 1
        assert "already exists" in result.output.lower()

    def test_list_empty(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "type", "list")

        assert result.exit_code == 0
        assert "No entity types found" in result.output


class TestEntityCommands:
    """Tests for 'entity' commands."""

    def test_create_by_type_name(self, cli_runner, temp_db, entity_service):
        entity_service.create_entity_type("Insurance")

        result = _invoke(cli_runner, temp_db, "entity", "create", "LIC", "--type", "Insurance")

        assert result.exit_code == 0
        assert "Created entity 'LIC'" in result.output
        assert "of type 'Insurance'" in result.output

    def test_create_unknown_type(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "entity", "create", "LIC", "--type", "Insurance")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_list(self, cli_runner, temp_db, sample_data):
        result = _invoke(cli_runner, temp_db, "entity", "list", "--type", "Mutual Fund")

        assert result.exit_code == 0
        assert "ICICI Mutual Fund" in result.output
        assert "LIC" not in result.output


class TestAddCommand:
    """Tests for the 'add' command."""

    def test_add(self, cli_runner, temp_db, sample_data, entity_service):
        result = _invoke(
            cli_runner, temp_db, "add", "--entity", "LIC", "--month", "Apr 2024", "--amount", "₹1,04,976.24"
        )

        assert result.exit_code == 0
        assert "Created transaction" in result.output
        assert "Month: 2024-04" in result.output
        assert "₹104,976.24" in result.output

        temp_db.disconnect()
        lic = sample_data["entities"]["LIC"]
        amounts = [t.amount for t in entity_service.list_entity_transactions(lic) if t.month == date(2024, 4, 1)]
        assert amounts == [Decimal("104976.24")]

    def test_add_unknown_entity(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "add", "--entity", "Nobody", "--month", "2024-04", "--amount", "10")

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_add_invalid_amount(self, cli_runner, temp_db, sample_data):
        result = _invoke(cli_runner, temp_db, "add", "--entity", "LIC", "--month", "2024-04", "--amount", "lots")

        assert result.exit_code == 1
        assert "Invalid amount format" in result.output


class TestTransactionCommands:
    """Tests for 'transaction' commands."""

    def test_list_range(self, cli_runner, temp_db, sample_data):
        result = _invoke(cli_runner, temp_db, "transaction", "list", "--from", "2024-01", "--to", "2024-03")

        assert result.exit_code == 0
        assert "2024-03" in result.output
        assert "2024-01" in result.output
        assert "2023-12" not in result.output

    def test_list_empty(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "transaction", "list")

        assert "No transactions found" in result.output

    def test_update(self, cli_runner, temp_db, sample_data, entity_service):
        txn = entity_service.list_entity_transactions(sample_data["entities"]["LIC"])[0]

        result = _invoke(cli_runner, temp_db, "transaction", "update", str(txn.id), "--amount", "999.99")
        temp_db.disconnect()

        assert result.exit_code == 0
        assert entity_service.get_transaction(txn.id).amount == Decimal("999.99")

    def test_update_missing(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "transaction", "update", "999", "--amount", "1")

        assert result.exit_code == 1
        assert "Transaction 999 not found" in result.output

    def test_delete_with_confirmation(self, cli_runner, temp_db, sample_data, entity_service):
        txn = entity_service.list_entity_transactions(sample_data["entities"]["LIC"])[0]

        result = _invoke(cli_runner, temp_db, "transaction", "delete", str(txn.id), input="y\n")
        temp_db.disconnect()

        assert result.exit_code == 0
        assert f"Deleted transaction {txn.id}" in result.output
        assert entity_service.get_transaction(txn.id) is None

    def test_delete_cancelled(self, cli_runner, temp_db, sample_data, entity_service):
        txn = entity_service.list_entity_transactions(sample_data["entities"]["LIC"])[0]

        result = _invoke(cli_runner, temp_db, "transaction", "delete", str(txn.id), input="n\n")

        assert "Deletion cancelled" in result.output
        assert entity_service.get_transaction(txn.id) is not None


class TestStatsCommands:
    """Tests for 'stats' commands."""

    def test_period_quarter(self, cli_runner, temp_db, sample_data):
        result = _invoke(cli_runner, temp_db, "stats", "period", "--period", "quarter", "--date", "2024-03-10")

        assert result.exit_code == 0
        assert "Commission stats (quarter)" in result.output
        assert "2024-01-01 to 2024-03-31" in result.output
        assert "750.00" in result.output
        assert "+150.0%" in result.output

    def test_period_year(self, cli_runner, temp_db, sample_data):
        result = _invoke(cli_runner, temp_db, "stats", "period", "--period", "year", "--date", "2024-03-10")

        assert result.exit_code == 0
        assert "2023-04-01 to 2024-03-31" in result.output
        assert "1,300.00" in result.output

    def test_period_invalid(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "stats", "period", "--period", "week")

        assert result.exit_code == 2

    def test_types(self, cli_runner, temp_db, sample_data):
        result = _invoke(cli_runner, temp_db, "stats", "types", "--date", "2024-03-10")

        assert result.exit_code == 0
        assert "Mutual Fund" in result.output
        assert "+25.0%" in result.output
        assert "-25.0%" in result.output
        assert "1,300.00" in result.output

    def test_overview(self, cli_runner, temp_db, sample_data):
        result = _invoke(cli_runner, temp_db, "stats", "overview")

        assert result.exit_code == 0
        assert "2,500.00" in result.output
        assert "Partners" in result.output


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Commtrack" in result.output
