"""
Unit tests for run.py -- CLI overrides, row building and exit behavior.
"""

import json
from unittest.mock import patch

import httpx
import pytest
import respx
from pydantic import ValidationError

from config import Config
from gas.models import BasicGasEstimates
import run

URL = "https://ethgasstation.info/json/ethgasAPI.json"


def _payload() -> dict:
    return {
        "average": 200,
        "avgWait": 2.5,
        "block_time": 13.0,
        "blockNum": 11111111,
        "fast": 250,
        "fastest": 400,
        "fastestWait": 0.5,
        "fastWait": 1,
        "safeLow": 150,
        "safeLowWait": 90,
        "speed": 0.9,
    }


def _estimates() -> BasicGasEstimates:
    return BasicGasEstimates.from_payload(_payload())


def _config(**overrides) -> Config:
    return Config(_env_file=None, **overrides)


class TestApplyOverrides:
    def test_no_flags_keeps_config(self):
        cfg = _config()
        args = run.parse_args([])
        assert run.apply_overrides(cfg, args) is cfg

    def test_flags_override(self):
        args = run.parse_args(["--gas-limit", "50000", "--conversion-rate", "1800", "--currency", "eur"])
        cfg = run.apply_overrides(_config(), args)
        assert cfg.gas_limit == 50000
        assert cfg.conversion_rate == 1800.0
        assert cfg.currency_code == "eur"

    def test_invalid_override_raises(self):
        args = run.parse_args(["--gas-limit", "-5"])
        with pytest.raises(ValidationError):
            run.apply_overrides(_config(), args)


class TestBuildRows:
    def test_rows_per_speed(self):
        rows = run.build_rows(_estimates(), _config())
        assert [r["speed"] for r in rows] == ["safeLow", "average", "fast", "fastest"]

    def test_average_row(self):
        rows = run.build_rows(_estimates(), _config())
        average = rows[1]
        # 200 tenths = 20 gwei; 20 gwei * 21000 = 0.00042 ether
        assert average["gwei"] == "20"
        assert average["fee_eth"] == "0.00042"
        assert average["wait"] == "2m"
        assert "fee_fiat" not in average

    def test_wait_labels_from_config(self):
        rows = run.build_rows(_estimates(), _config(hour_label=" hr"))
        assert rows[0]["wait"] == "1 hr"
        assert rows[3]["wait"] == "30s"

    def test_fiat_column_when_rate_set(self):
        rows = run.build_rows(_estimates(), _config(conversion_rate=2000))
        assert rows[1]["fee_fiat"] == "$0.84"

    def test_gas_limit_from_config(self):
        rows = run.build_rows(_estimates(), _config(gas_limit=42000))
        assert rows[1]["fee_eth"] == "0.00084"


class TestFormatTable:
    def test_table_lists_block_and_speeds(self):
        est = _estimates()
        table = run.format_table(run.build_rows(est, _config(conversion_rate=2000)), est)
        assert "Block 11111111" in table
        assert "FEE (FIAT)" in table
        assert "fastest" in table


class TestMain:
    @respx.mock
    @patch("run.setup_logging")
    @patch("run.load_config")
    def test_prints_json(self, mock_load, mock_logging, capsys):
        mock_load.return_value = _config()
        respx.get(URL).mock(return_value=httpx.Response(200, json=_payload()))

        run.main(["--json", "--conversion-rate", "2000"])
        out = json.loads(capsys.readouterr().out)
        assert out["gas_limit"] == 21000
        assert out["estimates"]["averageWait"] == 2.5
        assert out["estimates"]["blockTime"] == 13.0
        assert out["rows"][1]["fee_fiat"] == "$0.84"

    @respx.mock
    @patch("run.setup_logging")
    @patch("run.load_config")
    def test_prints_table(self, mock_load, mock_logging, capsys):
        mock_load.return_value = _config()
        respx.get(URL).mock(return_value=httpx.Response(200, json=_payload()))

        run.main([])
        out = capsys.readouterr().out
        assert "safeLow" in out
        assert "0.00042" in out

    @respx.mock
    @patch("run.setup_logging")
    @patch("run.load_config")
    def test_network_failure_exits_1(self, mock_load, mock_logging):
        mock_load.return_value = _config()
        respx.get(URL).mock(side_effect=httpx.ConnectError("Connection refused"))

        with pytest.raises(SystemExit) as exc_info:
            run.main([])
        assert exc_info.value.code == 1

    @respx.mock
    @patch("run.setup_logging")
    @patch("run.load_config")
    def test_bad_body_exits_1(self, mock_load, mock_logging):
        mock_load.return_value = _config()
        respx.get(URL).mock(return_value=httpx.Response(200, text="not json"))

        with pytest.raises(SystemExit) as exc_info:
            run.main([])
        assert exc_info.value.code == 1
