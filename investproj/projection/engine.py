"""Projection entry point.

``project`` is the only public operation of the engine: it validates
nothing itself (a ProjectionInput cannot exist in an invalid state),
derives the seed, runs the simulator and the deterministic projector,
and merges everything into one ProjectionResult.

The function keeps no module-level state. The random stream lives inside
``simulate_paths``, so concurrent calls from worker threads never
interfere.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import TYPE_CHECKING

from investproj.analysis.returns import deflate
from investproj.projection.deterministic import project_deterministic
from investproj.projection.errors import InvalidRateError
from investproj.projection.goal import solve_goal
from investproj.projection.models import ProjectionResult
from investproj.projection.monte_carlo import DEFAULT_PATH_COUNT, simulate_paths
from investproj.projection.percentiles import aggregate
from investproj.projection.seed import derive_seed

if TYPE_CHECKING:
    from investproj.projection.models import ProjectionInput

logger = logging.getLogger(__name__)


def project(
    inp: ProjectionInput,
    path_count: int = DEFAULT_PATH_COUNT,
    *,
    seed: int | None = None,
    as_of: date | None = None,
) -> ProjectionResult:
    """Run the full projection pipeline.

    Args:
        inp: Validated projection input.
        path_count: Number of Monte Carlo paths.
        seed: Seed override. Defaults to ``derive_seed(inp)``.
        as_of: Date treated as "now" for the target date. Defaults to today.

    Returns:
        ProjectionResult. Goal outputs are set only when the input has a
        target amount and a target date.

    Raises:
        ValueError: If path_count < 1.
        InvalidRateError: If the assumptions overflow to non-finite values.

    """
    if path_count < 1:
        msg = f"path_count must be at least 1, got {path_count}"
        raise ValueError(msg)
    if seed is None:
        seed = derive_seed(inp)
    if as_of is None:
        as_of = date.today()  # noqa: DTZ011

    logger.info(
        "Running projection: %d months, %d paths, seed=%d",
        inp.months,
        path_count,
        seed,
    )

    paths = simulate_paths(inp, seed, path_count)
    bands = aggregate(paths)
    deterministic = project_deterministic(inp)
    goal = solve_goal(inp, paths, as_of)

    result = ProjectionResult(
        average_final_value=deterministic.average.final_value,
        goal_final_value=deterministic.goal.final_value,
        composition=deterministic.composition,
        annual_deterministic_series=deterministic.annual_series(),
        annual_percentile_bands=bands,
        seed=seed,
        path_count=path_count,
        real_average_final_value=deflate(
            deterministic.average.final_value, inp.annual_inflation, inp.months
        ),
        real_goal_final_value=deflate(
            deterministic.goal.final_value, inp.annual_inflation, inp.months
        ),
        required_monthly_contribution=goal.required_monthly_contribution,
        probability_to_target=goal.probability_to_target,
        months_to_target=goal.months_to_target,
        target_percentile_rank=goal.target_percentile_rank,
    )
    _ensure_finite(result)

    if goal.months_to_target is not None:
        logger.debug(
            "Goal: month %d, required %.2f/month, probability %.3f",
            goal.months_to_target,
            goal.required_monthly_contribution,
            goal.probability_to_target,
        )
    return result


def _ensure_finite(result: ProjectionResult) -> None:
    """Reject results that overflowed to inf or NaN."""
    values = [
        result.average_final_value,
        result.goal_final_value,
        result.real_average_final_value,
        result.real_goal_final_value,
        result.composition.contribution_share_pct,
    ]
    for point in result.annual_deterministic_series:
        values.extend((point.average_value, point.goal_value))
    for band in result.annual_percentile_bands:
        values.extend((band.p10, band.p50, band.p90))
    if result.required_monthly_contribution is not None:
        values.append(result.required_monthly_contribution)

    if not all(math.isfinite(v) for v in values):
        msg = "Assumptions produce non-finite values; reduce the return or horizon"
        raise InvalidRateError(msg)
