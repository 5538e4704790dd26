"""
Integration tests for the opportunity_report runner.
"""

import json

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from opportunity_report import run_opportunity_report, load_tables, main
from config_schema import default_risk_config, default_fee_config
from errors import AnalyticsError


@pytest.fixture
def batch_file(tmp_path, sample_batch_dicts):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(sample_batch_dicts))
    return path


class TestRunOpportunityReport:

    @pytest.mark.integration
    def test_report_structure(self, sample_batch_dicts):
        report = run_opportunity_report(sample_batch_dicts)

        assert report["parameters"] == {
            "investment_amount": 10000,
            "holding_period_days": 365,
            "yield_basis": "net",
            "opportunities": 4,
        }
        assert [o["protocol"] for o in report["opportunities"]] == ["Aave", "Venus", "Raydium", "Benqi"]
        assert set(report["summary"]) == {"sweet-spot", "high-risk", "safe-haven", "avoid"}
        assert sum(q["count"] for q in report["summary"].values()) == 4
        assert "timestamp" in report

    @pytest.mark.integration
    def test_report_is_json_serialisable(self, sample_batch_dicts):
        report = run_opportunity_report(sample_batch_dicts, use_net_yield=False)
        assert json.loads(json.dumps(report))["parameters"]["yield_basis"] == "gross"

    @pytest.mark.integration
    def test_empty_batch(self):
        report = run_opportunity_report([])
        assert report["opportunities"] == []


class TestLoadTables:

    @pytest.mark.integration
    def test_defaults(self):
        risk_config, fee_config = load_tables(None, None)
        assert risk_config is default_risk_config()
        assert fee_config is default_fee_config()

    @pytest.mark.integration
    def test_invalid_fee_table_rejected(self, tmp_path, fee_config_dict):
        fee_config_dict["protocols"]["Yearn"]["performance_fee_rate"] = 2
        path = tmp_path / "fees.json"
        path.write_text(json.dumps(fee_config_dict))

        with pytest.raises(AnalyticsError, match="performance_fee_rate"):
            load_tables(None, str(path))


class TestMain:

    @pytest.mark.integration
    def test_writes_output_file(self, batch_file, tmp_path, capsys):
        output = tmp_path / "report.json"

        assert main(["--config", str(batch_file), "--output", str(output), "--period", "180"]) == 0

        report = json.loads(output.read_text())
        assert report["parameters"]["holding_period_days"] == 180
        assert "QUADRANT SUMMARY" in capsys.readouterr().out

    @pytest.mark.integration
    def test_example(self, capsys):
        assert main(["--example"]) == 0
        batch = json.loads(capsys.readouterr().out)
        assert batch[0]["protocol"] == "Aave"

    @pytest.mark.integration
    def test_no_config_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    @pytest.mark.integration
    def test_invalid_amount_reports_error(self, batch_file, capsys):
        assert main(["--config", str(batch_file), "--amount", "0"]) == 2
        assert "investment_amount" in capsys.readouterr().err
