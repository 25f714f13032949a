"""Tests for the sidecar entry point (dispatch and message loop)."""

from __future__ import annotations

import json
from io import StringIO
from typing import Any
from unittest.mock import patch

import pytest

from investproj.config import Settings
from investproj.main import dispatch, main


@pytest.fixture
def scenario() -> dict[str, Any]:
    return {
        "initialAmount": 10_000,
        "monthlyContributionAverage": 1_000,
        "monthlyContributionGoal": 1_500,
        "annualReturn": 0.1,
        "annualVolatility": 0.12,
        "horizonYears": 3,
        "targetAmount": 60_000,
        "targetDate": "2027-01-01",
    }


def _run_loop(*requests: str) -> list[dict[str, Any]]:
    stdin = StringIO("".join(line + "\n" for line in requests))
    stdout = StringIO()
    with (
        patch("sys.stdin", stdin),
        patch("sys.stdout", stdout),
        patch.dict("os.environ", {}, clear=True),
    ):
        main()
    return [json.loads(line) for line in stdout.getvalue().splitlines() if line]


class TestDispatch:
    """Tests for the dispatch function."""

    def test_unknown_method_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown method"):
            dispatch("nonexistent.method", {})

    def test_unknown_method_includes_name(self) -> None:
        with pytest.raises(ValueError, match=r"foo\.bar"):
            dispatch("foo.bar", {})

    def test_projection_run(self, scenario: dict[str, Any]) -> None:
        result = dispatch(
            "projection.run",
            {"scenario": scenario, "path_count": 25, "as_of": "2025-01-15"},
        )
        assert result["pathCount"] == 25
        assert result["monthsToTarget"] == 24
        assert len(result["annualDeterministicSeries"]) == 4

    def test_path_count_from_settings(self, scenario: dict[str, Any]) -> None:
        result = dispatch(
            "projection.run", {"scenario": scenario}, Settings(path_count=12)
        )
        assert result["pathCount"] == 12

    def test_projection_seed(self, scenario: dict[str, Any]) -> None:
        result = dispatch("projection.seed", {"scenario": scenario})
        assert 0 <= result["seed"] < 2**32
        assert result["canonical"].startswith("initialAmount=10000.0000000000|")

    def test_run_is_reproducible(self, scenario: dict[str, Any]) -> None:
        params = {"scenario": scenario, "path_count": 30, "as_of": "2025-01-15"}
        assert dispatch("projection.run", params) == dispatch("projection.run", params)

    def test_sensitivity(self, scenario: dict[str, Any]) -> None:
        rows = dispatch(
            "projection.sensitivity",
            {
                "scenario": scenario,
                "vary_param": "annual_return",
                "values": [0.05, 0.1],
                "path_count": 10,
            },
        )
        assert [row["param_value"] for row in rows] == [0.05, 0.1]

    def test_contributions_summarize(self) -> None:
        result = dispatch(
            "contributions.summarize",
            {"records": [{"date": "2024-01-01", "amount": 300.0}]},
        )
        assert result["monthly_contribution_average"] == 300.0

    def test_export_csv(self, scenario: dict[str, Any]) -> None:
        content = dispatch(
            "export.projection_csv", {"scenario": scenario, "path_count": 10}
        )
        assert "year,average,goal,p10,p50,p90" in content

    def test_invalid_scenario_raises(self, scenario: dict[str, Any]) -> None:
        scenario["horizonYears"] = 0
        with pytest.raises(ValueError, match="horizon_years"):
            dispatch("projection.run", {"scenario": scenario, "path_count": 10})


class TestMain:
    """Tests for the stdin/stdout message loop."""

    def test_valid_request_returns_response(self) -> None:
        request = json.dumps({"id": "1", "method": "ping", "params": {}})
        with patch("investproj.main.dispatch", return_value={"status": "ok"}):
            responses = _run_loop(request)
        assert responses == [{"id": "1", "result": {"status": "ok"}}]

    def test_projection_request(self, scenario: dict[str, Any]) -> None:
        request = json.dumps(
            {
                "id": "p1",
                "method": "projection.run",
                "params": {"scenario": scenario, "path_count": 10},
            }
        )
        (response,) = _run_loop(request)
        assert response["id"] == "p1"
        assert response["result"]["pathCount"] == 10

    def test_invalid_json_returns_error(self) -> None:
        (response,) = _run_loop("not valid json")
        assert response["id"] == "unknown"
        assert "error" in response

    def test_missing_method_returns_error(self) -> None:
        (response,) = _run_loop(json.dumps({"id": "2"}))
        assert response["id"] == "2"
        assert "error" in response

    def test_empty_lines_are_skipped(self) -> None:
        request = json.dumps({"id": "3", "method": "test", "params": {}})
        with patch("investproj.main.dispatch", return_value="ok"):
            responses = _run_loop("", "", request, "")
        assert len(responses) == 1

    def test_validation_error_type_reported(self, scenario: dict[str, Any]) -> None:
        scenario["annualVolatility"] = -1
        request = json.dumps(
            {"id": "4", "method": "projection.run", "params": {"scenario": scenario}}
        )
        (response,) = _run_loop(request)
        assert response["error"]["type"] == "InvalidRateError"
        assert "traceback" in response["error"]
