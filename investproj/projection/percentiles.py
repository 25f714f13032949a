"""Annual percentile bands over a simulated ensemble."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from investproj.analysis.returns import MONTHS_PER_YEAR
from investproj.analysis.statistics import nearest_rank
from investproj.projection.models import PercentileBand

if TYPE_CHECKING:
    from numpy.typing import NDArray


def band_months(n_months: int) -> list[int]:
    """Months that get a band: 0, every 12th month, and the last month."""
    return [m for m in range(n_months + 1) if m % MONTHS_PER_YEAR == 0 or m == n_months]


def aggregate(paths: NDArray[np.float64]) -> list[PercentileBand]:
    """Reduce simulated paths to yearly p10 / p50 / p90 bands.

    Each cross-section is sorted once and the three percentiles are read
    from it by nearest rank, so ``p10 <= p50 <= p90`` always holds.

    Args:
        paths: Array of shape (n_paths, months + 1).

    Returns:
        One PercentileBand per year, year 0 included.

    Raises:
        ValueError: If paths is not a non-empty 2-D array.

    """
    if paths.ndim != 2 or paths.shape[0] == 0:  # noqa: PLR2004
        msg = f"paths must be a non-empty 2-D array, got shape {paths.shape}"
        raise ValueError(msg)

    n_months = paths.shape[1] - 1
    bands: list[PercentileBand] = []
    for month in band_months(n_months):
        column = np.sort(paths[:, month])
        bands.append(
            PercentileBand(
                year_index=month // MONTHS_PER_YEAR,
                p10=nearest_rank(column, 10),
                p50=nearest_rank(column, 50),
                p90=nearest_rank(column, 90),
            )
        )
    return bands
