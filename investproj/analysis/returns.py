"""Rate conversion utilities.

Converts annual rates into their monthly compounding equivalents and
builds the month-by-month contribution schedule shared by the
deterministic projector and the Monte Carlo simulator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

MONTHS_PER_YEAR = 12


def monthly_rate(annual_rate: float) -> float:
    """Convert an annual rate into the equivalent monthly compounding rate.

    Args:
        annual_rate: Annual rate as a decimal (e.g., 0.10 for 10%).
            Must be >= -1.

    Returns:
        Monthly rate ``(1 + annual_rate) ** (1/12) - 1``.

    Raises:
        ValueError: If annual_rate < -1.

    """
    if annual_rate < -1.0:
        msg = f"annual_rate must be >= -1, got {annual_rate}"
        raise ValueError(msg)
    return float((1.0 + annual_rate) ** (1.0 / MONTHS_PER_YEAR) - 1.0)


def contribution_schedule(
    monthly_contribution: float,
    monthly_growth: float,
    n_months: int,
) -> NDArray[np.float64]:
    """Build the contribution paid at the end of each month.

    The amount grows by ``(1 + monthly_growth)`` after every month. The
    growth is applied by repeated multiplication so the schedule matches
    a month-by-month loop exactly.

    Args:
        monthly_contribution: Contribution paid in the first month.
        monthly_growth: Monthly growth rate of the contribution.
        n_months: Number of months.

    Returns:
        NDArray of shape (n_months,).

    """
    schedule = np.empty(n_months, dtype=np.float64)
    contribution = monthly_contribution
    for month in range(n_months):
        schedule[month] = contribution
        contribution = contribution * (1.0 + monthly_growth)
    return schedule


def deflate(nominal_value: float, annual_inflation: float, n_months: int) -> float:
    """Express a nominal future value in today's money.

    Args:
        nominal_value: Value reached after n_months.
        annual_inflation: Annual inflation rate as a decimal.
        n_months: Months between today and the nominal value.

    Returns:
        ``nominal_value / (1 + monthly_inflation) ** n_months``, or 0.0
        when the deflator overflows.

    """
    inflation = monthly_rate(annual_inflation)
    try:
        deflator = (1.0 + inflation) ** n_months
    except OverflowError:
        return 0.0
    return float(nominal_value / deflator)
