"""Monte Carlo simulation of contribution-driven portfolio growth.

Each path compounds the balance monthly with a Gaussian-perturbed return
(a discrete approximation of geometric Brownian motion) and adds the
average contribution:

    r = mu + sigma * z,   sigma = annual_volatility / sqrt(12)
    value = value * (1 + r) + contribution

Normals come from one seeded stream that is advanced path by path and
month by month: path ``s`` month ``m`` uses normal number
``s * months + m``. Changing ``path_count`` therefore never changes the
earlier paths but does shift everything after them.

Default: 300 paths, which keeps a 50-year horizon well under a second.

"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from investproj.analysis.returns import (
    MONTHS_PER_YEAR,
    contribution_schedule,
    monthly_rate,
)
from investproj.projection.rng import Mulberry32, gaussian_draws

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from investproj.projection.models import ProjectionInput

logger = logging.getLogger(__name__)

DEFAULT_PATH_COUNT = 300


def simulate_paths(
    inp: ProjectionInput,
    seed: int,
    path_count: int = DEFAULT_PATH_COUNT,
) -> NDArray[np.float64]:
    """Simulate stochastic balance paths.

    Draws all normals sequentially from a single Mulberry32 stream, then
    evolves every path at once month by month with NumPy.

    Args:
        inp: Validated projection input.
        seed: Seed for the uniform stream.
        path_count: Number of independent paths.

    Returns:
        NDArray of shape (path_count, months + 1). Column 0 is the
        initial amount for every path.

    Raises:
        ValueError: If path_count < 1.

    """
    if path_count < 1:
        msg = f"path_count must be at least 1, got {path_count}"
        raise ValueError(msg)

    n_months = inp.months
    mu = monthly_rate(inp.annual_return)
    g = monthly_rate(inp.contribution_annual_growth)
    sigma = inp.annual_volatility / math.sqrt(MONTHS_PER_YEAR)

    # Row-major fill keeps the path-by-path draw order
    rng = Mulberry32(seed)
    shocks = gaussian_draws(rng, path_count * n_months).reshape(path_count, n_months)
    contributions = contribution_schedule(inp.monthly_contribution_average, g, n_months)

    paths = np.empty((path_count, n_months + 1), dtype=np.float64)
    paths[:, 0] = inp.initial_amount

    for month in range(n_months):
        returns = mu + sigma * shocks[:, month]
        paths[:, month + 1] = paths[:, month] * (1.0 + returns) + contributions[month]

    logger.debug(
        "Simulated %d paths x %d months (seed=%d, mu=%.6f, sigma=%.6f)",
        path_count,
        n_months,
        seed,
        mu,
        sigma,
    )
    return paths
