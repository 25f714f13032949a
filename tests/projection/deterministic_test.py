"""Tests for the deterministic projector."""

from __future__ import annotations

import dataclasses

import pytest

from investproj.analysis.returns import monthly_rate
from investproj.projection.deterministic import (
    composition,
    project_deterministic,
    run_path,
)
from investproj.projection.models import ProjectionInput


def _annuity_input(**overrides: float) -> ProjectionInput:
    fields: dict[str, float] = {
        "initial_amount": 0.0,
        "monthly_contribution_average": 1_000.0,
        "monthly_contribution_goal": 1_000.0,
        "annual_return": 0.12,
        "annual_volatility": 0.0,
    }
    fields.update(overrides)
    return ProjectionInput(horizon_years=1, **fields)  # type: ignore[arg-type]


class TestRunPath:
    """Tests for a single compounding path."""

    def test_ordinary_annuity_one_year(self) -> None:
        mu = monthly_rate(0.12)
        path = run_path(0.0, 1_000.0, mu, 0.0, 12)
        expected = 1_000.0 * ((1.0 + mu) ** 12 - 1.0) / mu
        assert path.final_value == pytest.approx(expected, rel=1e-12)
        assert path.final_value == pytest.approx(12_646.5, abs=0.5)

    def test_zero_rate_is_plain_addition(self) -> None:
        path = run_path(100.0, 50.0, 0.0, 0.0, 24)
        assert path.final_value == 100.0 + 50.0 * 24
        assert path.annual_values == [100.0, 700.0, 1_300.0]

    def test_snapshots_yearly(self) -> None:
        path = run_path(0.0, 10.0, 0.0, 0.0, 36)
        assert path.annual_values == [0.0, 120.0, 240.0, 360.0]

    def test_cumulative_contribution_with_growth(self) -> None:
        g = 0.01
        path = run_path(0.0, 100.0, 0.0, g, 3)
        assert path.cumulative_contribution == pytest.approx(100.0 + 101.0 + 102.01)

    def test_initial_only_compounds(self) -> None:
        mu = monthly_rate(0.10)
        path = run_path(1_000.0, 0.0, mu, 0.0, 12)
        assert path.final_value == pytest.approx(1_100.0)

    def test_non_positive_months_raises(self) -> None:
        with pytest.raises(ValueError, match="n_months"):
            run_path(0.0, 1.0, 0.01, 0.0, 0)


class TestComposition:
    """Tests for the contribution / growth split."""

    def test_sums_to_hundred(self) -> None:
        comp = composition(75_000.0, 100_000.0)
        assert comp.contribution_share_pct == pytest.approx(75.0)
        total = comp.contribution_share_pct + comp.growth_share_pct
        assert total == pytest.approx(100.0)

    def test_clamped_when_losses_exceed_growth(self) -> None:
        comp = composition(120.0, 100.0)
        assert comp.contribution_share_pct == 100.0
        assert comp.growth_share_pct == 0.0

    def test_zero_balance(self) -> None:
        comp = composition(0.0, 0.0)
        assert comp.contribution_share_pct == 0.0
        assert comp.growth_share_pct == 100.0


class TestProjectDeterministic:
    """Tests for the two-path projection."""

    def test_series_length(self, base_input: ProjectionInput) -> None:
        projection = project_deterministic(base_input)
        series = projection.annual_series()
        assert len(series) == base_input.horizon_years + 1
        assert [p.year_index for p in series] == list(range(11))

    def test_year_zero_is_initial(self, base_input: ProjectionInput) -> None:
        first = project_deterministic(base_input).annual_series()[0]
        assert first.average_value == base_input.initial_amount
        assert first.goal_value == base_input.initial_amount

    def test_goal_path_uses_goal_contribution(
        self, base_input: ProjectionInput
    ) -> None:
        projection = project_deterministic(base_input)
        assert projection.goal.final_value > projection.average.final_value

    def test_equal_contributions_equal_paths(self) -> None:
        projection = project_deterministic(_annuity_input())
        assert projection.average.final_value == projection.goal.final_value

    def test_composition_from_average_path(self, base_input: ProjectionInput) -> None:
        projection = project_deterministic(base_input)
        share = (
            projection.average.cumulative_contribution
            / projection.average.final_value
            * 100.0
        )
        assert projection.composition.contribution_share_pct == pytest.approx(share)

    def test_final_value_matches_last_snapshot(
        self, base_input: ProjectionInput
    ) -> None:
        projection = project_deterministic(base_input)
        assert projection.average.annual_values[-1] == projection.average.final_value

    @pytest.mark.parametrize(
        "field,low,high",
        [
            ("monthly_contribution_average", 500.0, 1_500.0),
            ("annual_return", 0.02, 0.15),
        ],
    )
    def test_monotonic(
        self,
        base_input: ProjectionInput,
        field: str,
        low: float,
        high: float,
    ) -> None:
        low_result = project_deterministic(
            dataclasses.replace(base_input, **{field: low})
        )
        high_result = project_deterministic(
            dataclasses.replace(base_input, **{field: high})
        )
        assert high_result.average.final_value >= low_result.average.final_value
