"""Sensitivity sweeps over one projection assumption.

Re-runs the full projection for each value of a single field while
holding everything else fixed, e.g. to chart how the final balance and
the probability of reaching the target respond to the expected return.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

from investproj.projection.engine import project
from investproj.projection.models import parse_horizon
from investproj.projection.monte_carlo import DEFAULT_PATH_COUNT

if TYPE_CHECKING:
    from datetime import date

    from investproj.projection.models import ProjectionInput

VARIABLE_PARAMS = frozenset(
    {
        "annual_return",
        "annual_volatility",
        "monthly_contribution_average",
        "horizon_years",
    }
)


def sensitivity_analysis(
    inp: ProjectionInput,
    vary_param: str,
    values: list[float],
    path_count: int = DEFAULT_PATH_COUNT,
    as_of: date | None = None,
) -> list[dict[str, Any]]:
    """Run the projection across a range of one parameter.

    Each run derives its own seed from its own input, so every row is
    reproducible on its own.

    Args:
        inp: Base projection input.
        vary_param: Field to vary. One of "annual_return",
            "annual_volatility", "monthly_contribution_average",
            "horizon_years".
        values: Values to test for the varied field.
        path_count: Number of Monte Carlo paths per run.
        as_of: Date treated as "now" for the target date.

    Returns:
        List of result dicts, one per value, with the varied value, the
        deterministic final values, the final median band and, when a
        target is set, the probability to target.

    Raises:
        ValueError: If vary_param is not recognized.
        ProjectionError: If a value makes the input invalid.

    """
    if vary_param not in VARIABLE_PARAMS:
        msg = f"vary_param must be one of {sorted(VARIABLE_PARAMS)}, got '{vary_param}'"
        raise ValueError(msg)

    rows: list[dict[str, Any]] = []
    for val in values:
        run_value = (
            parse_horizon(val) if vary_param == "horizon_years" else float(val)
        )
        run_input = dataclasses.replace(inp, **{vary_param: run_value})
        result = project(run_input, path_count, as_of=as_of)
        rows.append(
            {
                "param_name": vary_param,
                "param_value": run_value,
                "average_final_value": result.average_final_value,
                "goal_final_value": result.goal_final_value,
                "median_final_value": result.annual_percentile_bands[-1].p50,
                "probability_to_target": result.probability_to_target,
            }
        )
    return rows
