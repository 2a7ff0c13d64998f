"""Tests for settleup CLI."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from settleup.audit import read_log
from settleup.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


class TestCLI:
    """Tests for top-level CLI behaviour."""

    def test_version(self, runner: CliRunner) -> None:
        """Test --version flag."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "shared-expense events" in result.output


class TestBalancesCommand:
    """Tests for the balances command."""

    def test_text_output(self, runner: CliRunner, snapshot_file: Path, log_path: Path) -> None:
        result = runner.invoke(cli, ["balances", "ev1", "--snapshot", str(snapshot_file)])

        assert result.exit_code == 0
        assert "• Ana: +33.33" in result.output
        assert "• Ben: 0.00" in result.output
        assert "• Cleo: -33.33" in result.output

    def test_json_output(self, runner: CliRunner, snapshot_file: Path, log_path: Path) -> None:
        result = runner.invoke(
            cli, ["balances", "ev1", "--snapshot", str(snapshot_file), "--json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {"A": "33.33", "B": "0.00", "C": "-33.33"}

    def test_audited(self, runner: CliRunner, snapshot_file: Path, log_path: Path) -> None:
        runner.invoke(cli, ["balances", "ev1", "--snapshot", str(snapshot_file)])

        entries = read_log(log_path)
        assert entries[-1].operation == "balances"
        assert entries[-1].status == "ok"

    def test_no_audit(self, runner: CliRunner, snapshot_file: Path, log_path: Path) -> None:
        runner.invoke(cli, ["balances", "ev1", "--snapshot", str(snapshot_file), "--no-audit"])

        assert not log_path.exists()

    def test_unknown_event(self, runner: CliRunner, snapshot_file: Path, log_path: Path) -> None:
        result = runner.invoke(cli, ["balances", "nope", "--snapshot", str(snapshot_file)])

        assert result.exit_code == 1
        assert "❌ Event 'nope' not found" in result.output
        assert read_log(log_path)[-1].status == "error"

    def test_no_source(
        self, runner: CliRunner, log_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SETTLEUP_SUPABASE_URL", raising=False)
        monkeypatch.delenv("SETTLEUP_SUPABASE_KEY", raising=False)

        result = runner.invoke(cli, ["balances", "ev1"])

        assert result.exit_code == 1
        assert "No data source" in result.output

    def test_unknown_participant(self, runner: CliRunner, tmp_path: Path, log_path: Path) -> None:
        """Test a ledger error is reported with exit status 1."""
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps(
                {
                    "event_id": "ev1",
                    "participants": [{"id": "A", "name": "Ana"}],
                    "expenses": [
                        {
                            "id": "e1",
                            "event_id": "ev1",
                            "payer_id": "A",
                            "amount": "10",
                            "consumers": ["A", "Z"],
                        }
                    ],
                }
            ),
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["balances", "ev1", "--snapshot", str(path)])

        assert result.exit_code == 1
        assert "Unknown participant 'Z'" in result.output
        assert read_log(log_path)[-1].error_msg == "Unknown participant 'Z' in expense e1"


class TestSettleCommand:
    """Tests for the settle command."""

    def test_text_output(self, runner: CliRunner, snapshot_file: Path, log_path: Path) -> None:
        result = runner.invoke(cli, ["settle", "ev1", "--snapshot", str(snapshot_file)])

        assert result.exit_code == 0
        assert "• Ben → Ana: 33.33 (payment pay-b)" in result.output
        assert "• Cleo → Ana: 33.33" in result.output

    def test_json_output(self, runner: CliRunner, snapshot_file: Path, log_path: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "settle",
                "ev1",
                "--snapshot",
                str(snapshot_file),
                "--json",
                "--policy",
                "reconstruct",
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "balances": {"A": "33.33", "B": "0.00", "C": "-33.33"},
            "settlements": [
                {"from": "B", "to": "A", "amount": "33.33", "payment_reference": "pay-b"},
                {"from": "C", "to": "A", "amount": "33.33", "payment_reference": None},
            ],
        }

    def test_policy_from_env(
        self,
        runner: CliRunner,
        snapshot_file: Path,
        log_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("SETTLEUP_POLICY", "bogus")

        result = runner.invoke(cli, ["settle", "ev1", "--snapshot", str(snapshot_file)])

        assert result.exit_code == 1
        assert "Unknown policy 'bogus'" in result.output

    def test_invalid_policy_option(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            cli, ["settle", "ev1", "--snapshot", str(snapshot_file), "--policy", "blend"]
        )
        assert result.exit_code == 2


class TestSplitCommand:
    """Tests for the split command."""

    def test_split(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["split", "100", "3"])

        assert result.exit_code == 0
        assert result.output.strip() == "33.34, 33.33, 33.33"

    def test_zero_ways(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["split", "100", "0"])

        assert result.exit_code == 1
        assert "zero consumers" in result.output

    def test_bad_amount(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["split", "abc", "2"])
        assert result.exit_code == 1

    def test_amount_out_of_range(self, runner: CliRunner) -> None:
        """Test an amount with too many digits is reported, not crashed on."""
        result = runner.invoke(cli, ["split", "1e30", "2"])

        assert result.exit_code == 1
        assert "❌ Amount out of range" in result.output


class TestEventsCommand:
    """Tests for the events command."""

    def test_lists_events(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(cli, ["events", str(snapshot_file)])

        assert result.exit_code == 0
        assert "ev1 Road Trip - 3 participants, 1 expenses, 1 payments" in result.output

    def test_empty_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text('{"events": {}}', encoding="utf-8")

        result = runner.invoke(cli, ["events", str(path)])

        assert result.exit_code == 0
        assert "No events found." in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["events", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


class TestSupabaseSource:
    """Tests for commands reading from Supabase."""

    SUPABASE = ["--supabase-url", "https://xyz.supabase.co", "--supabase-key", "anon-key"]

    @pytest.fixture
    def rows(self, mock_requests_get: MagicMock) -> MagicMock:
        """Serve one row set per table from the mocked GET."""
        tables = {
            "participants": [
                {"id": "A", "event_id": "ev1", "name": "Ana"},
                {"id": "B", "event_id": "ev1", "name": "Ben"},
            ],
            "expenses": [
                {
                    "id": "e1",
                    "event_id": "ev1",
                    "payer_id": "A",
                    "amount": 20,
                    "consumers": ["A", "B"],
                }
            ],
            "payments": [],
        }

        def respond(url: str, **kwargs: object) -> MagicMock:
            response = MagicMock()
            response.json.return_value = tables[url.rsplit("/", 1)[-1]]
            return response

        mock_requests_get.side_effect = respond
        return mock_requests_get

    def fetched_tables(self, mock_get: MagicMock) -> list[str]:
        return [call.args[0].rsplit("/", 1)[-1] for call in mock_get.call_args_list]

    @pytest.mark.parametrize("command", ["balances", "settle"])
    def test_reads_each_table_once(
        self, runner: CliRunner, rows: MagicMock, log_path: Path, command: str
    ) -> None:
        """Test one snapshot read per computation, names included."""
        result = runner.invoke(cli, [command, "ev1", *self.SUPABASE])

        assert result.exit_code == 0
        assert "Ben" in result.output
        assert sorted(self.fetched_tables(rows)) == ["expenses", "participants", "payments"]
