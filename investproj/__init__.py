"""investproj: seeded investment projection engine.

Typical use::

    from investproj import ProjectionInput, project

    inp = ProjectionInput(
        initial_amount=10_000,
        monthly_contribution_average=1_000,
        monthly_contribution_goal=1_500,
        annual_return=0.10,
        annual_volatility=0.12,
        horizon_years=10,
    )
    result = project(inp)
"""

from investproj.projection.engine import project
from investproj.projection.errors import (
    InvalidAmountError,
    InvalidHorizonError,
    InvalidRateError,
    InvalidTargetDateError,
    ProjectionError,
)
from investproj.projection.models import ProjectionInput, ProjectionResult

__all__ = [
    "InvalidAmountError",
    "InvalidHorizonError",
    "InvalidRateError",
    "InvalidTargetDateError",
    "ProjectionError",
    "ProjectionInput",
    "ProjectionResult",
    "project",
]
