"""Shared pytest fixtures for investproj tests."""

from __future__ import annotations

from datetime import date

import pytest

from investproj.projection.models import ProjectionInput


@pytest.fixture
def as_of() -> date:
    """Fixed "today" so target-date tests never depend on the clock."""
    return date(2025, 1, 15)


@pytest.fixture
def base_input() -> ProjectionInput:
    """Provide a typical ten-year projection with volatility."""
    return ProjectionInput(
        initial_amount=10_000.0,
        monthly_contribution_average=1_000.0,
        monthly_contribution_goal=1_500.0,
        annual_return=0.10,
        annual_volatility=0.12,
        horizon_years=10,
        contribution_annual_growth=0.03,
    )


@pytest.fixture
def zero_vol_input() -> ProjectionInput:
    """Provide a projection whose simulated paths are all deterministic."""
    return ProjectionInput(
        initial_amount=5_000.0,
        monthly_contribution_average=800.0,
        monthly_contribution_goal=1_200.0,
        annual_return=0.08,
        annual_volatility=0.0,
        horizon_years=5,
        contribution_annual_growth=0.05,
    )


@pytest.fixture
def target_input(base_input: ProjectionInput) -> ProjectionInput:
    """Base input with a target of 150k on 2030-01-01."""
    return ProjectionInput(
        initial_amount=base_input.initial_amount,
        monthly_contribution_average=base_input.monthly_contribution_average,
        monthly_contribution_goal=base_input.monthly_contribution_goal,
        annual_return=base_input.annual_return,
        annual_volatility=base_input.annual_volatility,
        horizon_years=base_input.horizon_years,
        contribution_annual_growth=base_input.contribution_annual_growth,
        target_amount=150_000.0,
        target_date=date(2030, 1, 1),
    )
