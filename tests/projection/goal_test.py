"""Tests for the goal solver."""

from __future__ import annotations

import dataclasses
from datetime import date

import numpy as np
import pytest

from investproj.analysis.returns import monthly_rate
from investproj.projection.deterministic import run_path
from investproj.projection.errors import InvalidRateError
from investproj.projection.goal import (
    months_between,
    months_to_target,
    probability_to_target,
    required_monthly_contribution,
    solve_goal,
)
from investproj.projection.models import ProjectionInput
from investproj.projection.monte_carlo import simulate_paths


class TestMonthsBetween:
    """Tests for calendar month differences."""

    def test_same_month(self) -> None:
        assert months_between(date(2025, 1, 1), date(2025, 1, 31)) == 0

    def test_across_years(self) -> None:
        assert months_between(date(2025, 11, 20), date(2027, 2, 1)) == 15

    def test_past_is_negative(self) -> None:
        assert months_between(date(2025, 6, 1), date(2024, 6, 1)) == -12


class TestMonthsToTarget:
    """Tests for target month resolution."""

    def test_no_target_amount(self, base_input: ProjectionInput, as_of: date) -> None:
        inp = dataclasses.replace(base_input, target_date=date(2030, 1, 1))
        assert months_to_target(inp, as_of) is None

    def test_no_target_date(self, base_input: ProjectionInput, as_of: date) -> None:
        inp = dataclasses.replace(base_input, target_amount=1_000.0)
        assert months_to_target(inp, as_of) is None

    def test_within_horizon(self, target_input: ProjectionInput, as_of: date) -> None:
        # 2025-01 -> 2030-01
        assert months_to_target(target_input, as_of) == 60

    def test_clamped_to_horizon(
        self, target_input: ProjectionInput, as_of: date
    ) -> None:
        inp = dataclasses.replace(target_input, target_date=date(2060, 1, 1))
        assert months_to_target(inp, as_of) == target_input.months

    def test_past_date_clamped_to_zero(
        self, target_input: ProjectionInput, as_of: date
    ) -> None:
        inp = dataclasses.replace(target_input, target_date=date(2020, 1, 1))
        assert months_to_target(inp, as_of) == 0


class TestRequiredMonthlyContribution:
    """Tests for the annuity inversion."""

    def test_zero_rate(self) -> None:
        assert required_monthly_contribution(0.0, 12_000.0, 0.0, 12) == 1_000.0

    def test_zero_rate_with_initial(self) -> None:
        assert required_monthly_contribution(2_000.0, 12_000.0, 0.0, 10) == 1_000.0

    def test_already_reached(self) -> None:
        r = monthly_rate(0.10)
        assert required_monthly_contribution(100_000.0, 50_000.0, r, 24) == 0.0

    def test_no_months_left(self) -> None:
        assert required_monthly_contribution(1_000.0, 5_000.0, 0.01, 0) == 4_000.0

    def test_total_loss(self) -> None:
        # Only the last contribution survives a -100% month
        assert required_monthly_contribution(1_000.0, 5_000.0, -1.0, 6) == 5_000.0

    def test_overflow_rejected(self) -> None:
        with pytest.raises(InvalidRateError, match="overflows"):
            required_monthly_contribution(1_000.0, 5_000.0, 1e200, 120)

    @pytest.mark.parametrize(
        "initial,target,annual,months",
        [
            (0.0, 100_000.0, 0.10, 60),
            (25_000.0, 500_000.0, 0.07, 240),
            (1_000.0, 20_000.0, 0.0, 36),
            (10_000.0, 30_000.0, -0.05, 48),
        ],
    )
    def test_round_trip(
        self, initial: float, target: float, annual: float, months: int
    ) -> None:
        r = monthly_rate(annual)
        contribution = required_monthly_contribution(initial, target, r, months)
        path = run_path(initial, contribution, r, 0.0, months)
        assert path.final_value == pytest.approx(target, rel=1e-9)


class TestProbabilityToTarget:
    """Tests for the empirical success probability."""

    def test_fraction_of_paths(self) -> None:
        paths = np.array([[0.0, 100.0], [0.0, 50.0], [0.0, 150.0], [0.0, 99.0]])
        assert probability_to_target(paths, 1, 100.0) == 0.5

    def test_inclusive_threshold(self) -> None:
        paths = np.array([[100.0], [100.0]])
        assert probability_to_target(paths, 0, 100.0) == 1.0


class TestSolveGoal:
    """Tests for the combined goal outputs."""

    def test_empty_without_target(
        self, base_input: ProjectionInput, as_of: date
    ) -> None:
        paths = simulate_paths(base_input, seed=1, path_count=10)
        solution = solve_goal(base_input, paths, as_of)
        assert solution.months_to_target is None
        assert solution.required_monthly_contribution is None
        assert solution.probability_to_target is None
        assert solution.target_percentile_rank is None

    def test_outputs_with_target(
        self, target_input: ProjectionInput, as_of: date
    ) -> None:
        paths = simulate_paths(target_input, seed=1, path_count=200)
        solution = solve_goal(target_input, paths, as_of)
        assert solution.months_to_target == 60
        assert solution.required_monthly_contribution is not None
        assert solution.required_monthly_contribution > 0
        assert solution.probability_to_target is not None
        assert 0.0 <= solution.probability_to_target <= 1.0
        assert solution.target_percentile_rank is not None
        assert 0.0 <= solution.target_percentile_rank <= 100.0

    @pytest.mark.parametrize("initial,expected", [(1_000.0, 0.0), (200_000.0, 1.0)])
    def test_past_target_date_uses_initial_amount(
        self,
        target_input: ProjectionInput,
        as_of: date,
        initial: float,
        expected: float,
    ) -> None:
        inp = dataclasses.replace(
            target_input, initial_amount=initial, target_date=date(2020, 1, 1)
        )
        paths = simulate_paths(inp, seed=1, path_count=50)
        solution = solve_goal(inp, paths, as_of)
        assert solution.months_to_target == 0
        assert solution.probability_to_target == expected
