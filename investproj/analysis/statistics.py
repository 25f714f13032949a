"""Statistical helpers for simulated ensembles.

Nearest-rank percentiles (no interpolation between order statistics)
and percentile ranking of a target value within a distribution.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats

if TYPE_CHECKING:
    from numpy.typing import NDArray


def nearest_rank_index(percentile: float, n_values: int) -> int:
    """Index of a percentile in an ascending array of n_values.

    Uses ``floor(percentile / 100 * (n_values - 1))``.

    Raises:
        ValueError: If n_values < 1 or percentile is outside [0, 100].

    """
    if n_values < 1:
        msg = f"n_values must be at least 1, got {n_values}"
        raise ValueError(msg)
    if not 0.0 <= percentile <= 100.0:  # noqa: PLR2004
        msg = f"percentile must be within [0, 100], got {percentile}"
        raise ValueError(msg)
    return math.floor((percentile / 100.0) * (n_values - 1))


def nearest_rank(sorted_values: NDArray[np.float64], percentile: float) -> float:
    """Read a percentile from an already sorted array.

    Args:
        sorted_values: Values sorted ascending.
        percentile: Percentile level between 0 and 100.

    Returns:
        The order statistic at ``nearest_rank_index(percentile, len(sorted_values))``.

    """
    return float(sorted_values[nearest_rank_index(percentile, len(sorted_values))])


def percentile_rank(
    values: NDArray[np.float64],
    target: float,
) -> float:
    """Calculate the percentile rank of a target value within a distribution.

    Uses scipy.stats.percentileofscore with "rank" interpolation.

    Args:
        values: Array of observed values.
        target: The value to rank.

    Returns:
        Percentile rank as a float between 0 and 100.

    """
    return float(stats.percentileofscore(values, target, kind="rank"))
