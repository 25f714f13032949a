"""Goal solving: required contribution and probability of success.

The required contribution inverts the ordinary-annuity future value at
the expected monthly rate ``r``:

    FV = initial * (1 + r)^n + c * ((1 + r)^n - 1) / r

solved for the level contribution ``c`` (``n`` when ``r == 0``). The
probability is the share of simulated paths at or above the target on
the target month.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from investproj.analysis.returns import monthly_rate
from investproj.analysis.statistics import percentile_rank
from investproj.projection.errors import InvalidRateError

if TYPE_CHECKING:
    from datetime import date

    from numpy.typing import NDArray

    from investproj.projection.models import ProjectionInput


@dataclass(frozen=True)
class GoalSolution:
    """Goal outputs; every field is None when there is no target and date."""

    months_to_target: int | None = None
    required_monthly_contribution: float | None = None
    probability_to_target: float | None = None
    target_percentile_rank: float | None = None


def months_between(start: date, end: date) -> int:
    """Calendar months from start to end, ignoring the day of month.

    Negative when end is before start.
    """
    return (end.year - start.year) * 12 + (end.month - start.month)


def months_to_target(inp: ProjectionInput, as_of: date) -> int | None:
    """Month index of the target date, clamped to the horizon.

    Returns:
        None without a target amount or target date; otherwise
        ``months_between(as_of, target_date)`` clamped to [0, months].

    """
    if not inp.has_target or inp.target_date is None:
        return None
    return min(max(months_between(as_of, inp.target_date), 0), inp.months)


def required_monthly_contribution(
    initial_amount: float,
    target_amount: float,
    monthly_return: float,
    n_months: int,
) -> float:
    """Level monthly contribution that grows initial_amount into target_amount.

    Args:
        initial_amount: Current balance.
        target_amount: Goal balance.
        monthly_return: Expected monthly rate.
        n_months: Months until the target date.

    Returns:
        Non-negative contribution. With ``n_months == 0`` there is no
        month left to compound, so the full remaining shortfall is returned.

    Raises:
        InvalidRateError: If the compounded growth overflows a float.

    """
    if n_months <= 0:
        return max(0.0, target_amount - initial_amount)
    try:
        growth = (1.0 + monthly_return) ** n_months
    except OverflowError as exc:
        msg = f"Monthly return {monthly_return} overflows over {n_months} months"
        raise InvalidRateError(msg) from exc
    fv0 = initial_amount * growth
    factor = n_months if monthly_return == 0 else (growth - 1.0) / monthly_return
    return max(0.0, (target_amount - fv0) / factor)


def probability_to_target(
    paths: NDArray[np.float64],
    month: int,
    target_amount: float,
) -> float:
    """Share of paths whose balance at ``month`` is at least target_amount."""
    column = paths[:, month]
    return float(np.count_nonzero(column >= target_amount) / column.shape[0])


def solve_goal(
    inp: ProjectionInput,
    paths: NDArray[np.float64],
    as_of: date,
) -> GoalSolution:
    """Compute every goal output for a projection.

    Args:
        inp: Validated projection input.
        paths: Simulated paths of shape (n_paths, months + 1).
        as_of: Date treated as "now" when counting months to the target.

    Returns:
        GoalSolution; empty when no target amount or date is set.

    """
    n_months = months_to_target(inp, as_of)
    if n_months is None:
        return GoalSolution()

    return GoalSolution(
        months_to_target=n_months,
        required_monthly_contribution=required_monthly_contribution(
            inp.initial_amount,
            inp.target_amount,
            monthly_rate(inp.annual_return),
            n_months,
        ),
        probability_to_target=probability_to_target(paths, n_months, inp.target_amount),
        target_percentile_rank=percentile_rank(paths[:, n_months], inp.target_amount),
    )
