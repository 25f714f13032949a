"""Deterministic compound-growth projection.

Runs the same month-by-month recurrence twice, once with the average
contribution and once with the goal contribution:

    value = value * (1 + mu) + contribution
    contribution = contribution * (1 + g)

where ``mu`` and ``g`` are the monthly equivalents of the annual return
and the annual contribution growth. No randomness is involved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from investproj.analysis.returns import MONTHS_PER_YEAR, monthly_rate
from investproj.projection.models import Composition, DeterministicPoint

if TYPE_CHECKING:
    from investproj.projection.models import ProjectionInput


@dataclass(frozen=True)
class PathSummary:
    """One deterministic path sampled once a year.

    Attributes:
        annual_values: Balance at month 0, every 12th month and the last month.
        final_value: Balance at the end of the horizon.
        cumulative_contribution: Sum of all monthly contributions paid.

    """

    annual_values: list[float]
    final_value: float
    cumulative_contribution: float


@dataclass(frozen=True)
class DeterministicProjection:
    """Average and goal paths plus the composition of the average path."""

    average: PathSummary
    goal: PathSummary
    composition: Composition

    def annual_series(self) -> list[DeterministicPoint]:
        """Zip both paths into yearly points."""
        return [
            DeterministicPoint(year_index=year, average_value=avg, goal_value=goal)
            for year, (avg, goal) in enumerate(
                zip(self.average.annual_values, self.goal.annual_values, strict=True)
            )
        ]


def run_path(
    initial_amount: float,
    monthly_contribution: float,
    monthly_return: float,
    monthly_growth: float,
    n_months: int,
) -> PathSummary:
    """Compound a single balance month by month.

    Args:
        initial_amount: Starting balance.
        monthly_contribution: Contribution paid at the end of month 1.
        monthly_return: Monthly compounding rate.
        monthly_growth: Monthly growth of the contribution.
        n_months: Number of months to project. Must be positive.

    Returns:
        PathSummary with yearly snapshots.

    Raises:
        ValueError: If n_months <= 0.

    """
    if n_months <= 0:
        msg = f"n_months must be positive, got {n_months}"
        raise ValueError(msg)

    value = initial_amount
    contribution = monthly_contribution
    cumulative = 0.0
    snapshots: list[float] = []

    for month in range(n_months + 1):
        if month % MONTHS_PER_YEAR == 0 or month == n_months:
            snapshots.append(value)
        if month < n_months:
            value = value * (1.0 + monthly_return) + contribution
            cumulative += contribution
            contribution = contribution * (1.0 + monthly_growth)

    return PathSummary(
        annual_values=snapshots,
        final_value=value,
        cumulative_contribution=cumulative,
    )


def composition(cumulative_contribution: float, final_value: float) -> Composition:
    """Split a final balance into contributions and growth.

    The contribution share is clamped to [0, 100]; the growth share is
    its complement. A zero balance reports no contribution share.
    """
    if final_value <= 0:
        contribution_pct = 0.0
    else:
        share = cumulative_contribution / final_value * 100.0
        contribution_pct = min(max(share, 0.0), 100.0)
    return Composition(
        contribution_share_pct=contribution_pct,
        growth_share_pct=100.0 - contribution_pct,
    )


def project_deterministic(inp: ProjectionInput) -> DeterministicProjection:
    """Project the average and goal contribution paths.

    Args:
        inp: Validated projection input.

    Returns:
        DeterministicProjection. The composition is taken from the
        average path.

    """
    mu = monthly_rate(inp.annual_return)
    g = monthly_rate(inp.contribution_annual_growth)

    average = run_path(
        inp.initial_amount, inp.monthly_contribution_average, mu, g, inp.months
    )
    goal = run_path(
        inp.initial_amount, inp.monthly_contribution_goal, mu, g, inp.months
    )

    return DeterministicProjection(
        average=average,
        goal=goal,
        composition=composition(average.cumulative_contribution, average.final_value),
    )
