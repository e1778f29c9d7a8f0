"""Test the click CLI end to end against a temporary journal."""

import json

import pytest
from click.testing import CliRunner

from edge_journal.cli import main
from edge_journal.journal.export import TradeExporter
from edge_journal.journal.store import JournalStore

from .journal.conftest import make_trade

_CSV = (
    "id,timestamp,delta,oi,mfe,mae,entryType,exitType,taLevels,strategyNames,direction\n"
    "c1,2025-12-02T09:44:00,12,300000,10,1,SFP,TP,A|B,scalp,Long\n"
    "c2,2025-12-03T13:00:00,2,100000,20,2,SFP,TP,A,scalp,Short\n"
    "c3,2025-12-04T21:00:00,25,900000,6,1,Retest,TP,B|A,breakout,Long\n"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "journal.json"


@pytest.fixture
def base_args(tmp_path, store_path):
    return ["--config", str(tmp_path / "missing.toml"), "--store", str(store_path)]


@pytest.fixture
def imported(runner, tmp_path, base_args):
    csv_path = tmp_path / "trades.csv"
    csv_path.write_text(_CSV)
    result = runner.invoke(main, [*base_args, "import-csv", str(csv_path)])
    assert result.exit_code == 0, result.output
    return csv_path


class TestImportCSV:
    def test_imports_and_saves(self, runner, imported, store_path, base_args):
        trades = JournalStore(store_path).load().trades
        assert [t.id for t in trades] == ["c1", "c2", "c3"]

    def test_message(self, runner, tmp_path, base_args):
        csv_path = tmp_path / "trades.csv"
        csv_path.write_text(_CSV)
        result = runner.invoke(main, [*base_args, "import-csv", str(csv_path)])
        assert "Imported 3 new trades." in result.output

    def test_reimport_adds_nothing(self, runner, imported, base_args):
        result = runner.invoke(main, [*base_args, "import-csv", str(imported)])
        assert result.exit_code == 0
        assert "No new trades found." in result.output

    def test_missing_columns(self, runner, tmp_path, base_args):
        csv_path = tmp_path / "bad.csv"
        csv_path.write_text("timestamp,mfe\n2025-12-02T09:44:00,1\n")
        result = runner.invoke(main, [*base_args, "import-csv", str(csv_path)])
        assert result.exit_code != 0
        assert "missing required columns" in result.output


class TestAnalyze:
    def test_report_json(self, runner, imported, base_args):
        result = runner.invoke(main, [*base_args, "analyze"])
        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)

        assert report["total_trades"] == 3
        levels = {r["level"]: r for r in report["single_factor"]}
        assert levels["A"]["count"] == 3
        assert levels["A"]["avg_mfe"] == pytest.approx(12.0)
        assert report["pairs"] == [{"pair": ["A", "B"], "avg_mfe": 8.0, "count": 2}]

    def test_strategy_filter(self, runner, imported, base_args):
        result = runner.invoke(main, [*base_args, "analyze", "--strategy", "breakout"])
        assert json.loads(result.stdout)["total_trades"] == 1

    def test_date_and_direction_filters(self, runner, imported, base_args):
        result = runner.invoke(main, [
            *base_args, "analyze",
            "--start", "2025-12-03", "--end", "2025-12-04", "--direction", "Long",
        ])
        report = json.loads(result.stdout)
        assert report["total_trades"] == 1
        assert report["filters"]["direction"] == "Long"

    def test_mixed_offset_timestamps(self, runner, store_path, base_args):
        store_path.write_text(json.dumps({"trades": [{
            "id": "m1",
            "timestamp": "2025-12-02T09:44:00.000Z",
            "exitTimestamp": "2025-12-02T11:49:00",
            "taLevels": ["POC"], "mfe": 2, "mae": 1,
        }]}))
        result = runner.invoke(main, [*base_args, "analyze"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["durations"][0]["duration"] == 125.0

    def test_empty_journal(self, runner, base_args):
        result = runner.invoke(main, [*base_args, "analyze"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["total_trades"] == 0

    def test_corrupt_store(self, runner, store_path, base_args):
        store_path.write_text("{oops")
        result = runner.invoke(main, [*base_args, "analyze"])
        assert result.exit_code != 0
        assert "Corrupt journal file" in result.output

    def test_bad_config(self, runner, tmp_path, store_path):
        config = tmp_path / "bad.toml"
        config.write_text("[journal\n")
        result = runner.invoke(main, ["--config", str(config), "--store", str(store_path), "analyze"])
        assert result.exit_code != 0
        assert "Invalid TOML" in result.output


class TestExportCSV:
    def test_writes_filtered_rows(self, runner, imported, tmp_path, base_args):
        out = tmp_path / "out.csv"
        result = runner.invoke(main, [*base_args, "export-csv", str(out), "--direction", "Short"])
        assert result.exit_code == 0, result.output
        assert f"Exported 1 trades to {out}" in result.output
        (trade,) = TradeExporter().from_csv(out.read_text()).trades
        assert trade.id == "c2"


class TestInsight:
    def test_no_trades(self, runner, base_args):
        result = runner.invoke(main, [*base_args, "insight"])
        assert result.exit_code != 0
        assert "0 trades" in result.output

    def test_without_api_key(self, runner, store_path, base_args, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        store = JournalStore(store_path)
        store.add_trade(make_trade(["A"]))
        store.save()

        result = runner.invoke(main, [*base_args, "insight"])
        assert result.exit_code == 0
        assert "API key not configured" in result.output
