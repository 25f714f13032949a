"""Projection input and result records.

Both records are frozen dataclasses created fresh on every call. The
JSON form uses camelCase field names so fixtures stay portable:

    {"initialAmount": 0, "monthlyContributionAverage": 1000,
     "monthlyContributionGoal": 1500, "annualReturn": 0.12,
     "annualVolatility": 0.15, "contributionAnnualGrowth": 0.0,
     "horizonYears": 10, "targetAmount": 250000,
     "targetDate": "2034-06-01"}

"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from investproj.analysis.returns import MONTHS_PER_YEAR
from investproj.projection.errors import (
    InvalidAmountError,
    InvalidHorizonError,
    InvalidRateError,
    InvalidTargetDateError,
)

# JSON key -> attribute name, in canonical (seed) order
INPUT_FIELDS: dict[str, str] = {
    "initialAmount": "initial_amount",
    "monthlyContributionAverage": "monthly_contribution_average",
    "monthlyContributionGoal": "monthly_contribution_goal",
    "annualReturn": "annual_return",
    "annualVolatility": "annual_volatility",
    "contributionAnnualGrowth": "contribution_annual_growth",
    "horizonYears": "horizon_years",
    "targetAmount": "target_amount",
    "targetDate": "target_date",
    "annualInflation": "annual_inflation",
}

_REQUIRED_KEYS = (
    "initialAmount",
    "monthlyContributionAverage",
    "monthlyContributionGoal",
    "annualReturn",
    "annualVolatility",
    "horizonYears",
)

_RATE_KEYS = frozenset(
    {"annualReturn", "annualVolatility", "contributionAnnualGrowth", "annualInflation"}
)

_OPTIONAL_OUTPUTS = (
    "required_monthly_contribution",
    "probability_to_target",
    "months_to_target",
    "target_percentile_rank",
)


@dataclass(frozen=True)
class ProjectionInput:
    """Financial assumptions for a single projection.

    Attributes:
        initial_amount: Current balance.
        monthly_contribution_average: Contribution for the "average"
            deterministic path and for every simulated path.
        monthly_contribution_goal: Contribution for the "goal"
            deterministic path only.
        annual_return: Expected annual return (0.10 for 10%).
        annual_volatility: Annual standard deviation of returns.
        horizon_years: Projection horizon in whole years.
        contribution_annual_growth: Annual growth of the contribution itself.
        target_amount: Goal amount; 0 means no goal.
        target_date: Date by which target_amount should be reached.
        annual_inflation: Inflation used for the real-value figures.

    """

    initial_amount: float
    monthly_contribution_average: float
    monthly_contribution_goal: float
    annual_return: float
    annual_volatility: float
    horizon_years: int
    contribution_annual_growth: float = 0.0
    target_amount: float = 0.0
    target_date: date | None = None
    annual_inflation: float = 0.0

    def __post_init__(self) -> None:
        """Reject invalid assumptions before any computation runs."""
        self.validate()

    @property
    def months(self) -> int:
        """Projection horizon in months."""
        return self.horizon_years * MONTHS_PER_YEAR

    @property
    def has_target(self) -> bool:
        """Whether a goal amount is set."""
        return self.target_amount > 0

    def validate(self) -> None:
        """Check every field.

        Raises:
            InvalidHorizonError: If horizon_years is not an integer >= 1.
            InvalidRateError: If a rate is non-finite or below -100%, or
                the volatility is negative.
            InvalidAmountError: If an amount is negative or non-finite.
            InvalidTargetDateError: If target_date is not a date.

        """
        if (
            isinstance(self.horizon_years, bool)
            or not isinstance(self.horizon_years, int)
            or self.horizon_years <= 0
        ):
            msg = (
                f"horizon_years must be a positive integer, got {self.horizon_years!r}"
            )
            raise InvalidHorizonError(msg)

        for name in (
            "initial_amount",
            "monthly_contribution_average",
            "monthly_contribution_goal",
            "target_amount",
        ):
            value = getattr(self, name)
            if not _is_finite_number(value) or value < 0:
                msg = f"{name} must be a finite non-negative amount, got {value!r}"
                raise InvalidAmountError(msg)

        for name in ("annual_return", "contribution_annual_growth"):
            value = getattr(self, name)
            if not _is_finite_number(value) or value < -1.0:
                msg = f"{name} must be a finite rate >= -1, got {value!r}"
                raise InvalidRateError(msg)

        inflation = self.annual_inflation
        if not _is_finite_number(inflation) or inflation <= -1.0:
            msg = f"annual_inflation must be a finite rate > -1, got {inflation!r}"
            raise InvalidRateError(msg)

        if not _is_finite_number(self.annual_volatility) or self.annual_volatility < 0:
            msg = (
                "annual_volatility must be a finite non-negative rate, "
                f"got {self.annual_volatility!r}"
            )
            raise InvalidRateError(msg)

        if self.target_date is not None and not isinstance(self.target_date, date):
            msg = f"target_date must be a date, got {self.target_date!r}"
            raise InvalidTargetDateError(msg)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectionInput:
        """Build an input from its camelCase JSON form.

        Args:
            data: Mapping with the keys listed in ``INPUT_FIELDS``.
                ``contributionAnnualGrowth``, ``targetAmount``,
                ``targetDate`` and ``annualInflation`` are optional.

        Returns:
            A validated ProjectionInput.

        Raises:
            ValueError: If a required key is missing.
            ProjectionError: If any field is invalid.

        """
        missing = [key for key in _REQUIRED_KEYS if data.get(key) is None]
        if missing:
            msg = f"Missing required projection fields: {', '.join(missing)}"
            raise ValueError(msg)

        kwargs: dict[str, Any] = {}
        for key, attr in INPUT_FIELDS.items():
            if data.get(key) is None:
                continue
            raw = data[key]
            if key == "targetDate":
                kwargs[attr] = parse_target_date(raw)
            elif key == "horizonYears":
                kwargs[attr] = parse_horizon(raw)
            elif isinstance(raw, bool) or not isinstance(raw, int | float):
                msg = f"{key} must be a number, got {raw!r}"
                raise _error_for(key)(msg)
            else:
                kwargs[attr] = float(raw)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON form."""
        out: dict[str, Any] = {}
        for key, attr in INPUT_FIELDS.items():
            value = getattr(self, attr)
            if key == "targetDate":
                value = value.isoformat() if value is not None else None
            out[key] = value
        return out


@dataclass(frozen=True)
class Composition:
    """Share of the final average balance that came from contributions."""

    contribution_share_pct: float
    growth_share_pct: float

    def to_dict(self) -> dict[str, float]:
        """Serialize to camelCase JSON."""
        return {
            "contributionSharePct": self.contribution_share_pct,
            "growthSharePct": self.growth_share_pct,
        }


@dataclass(frozen=True)
class DeterministicPoint:
    """Annual snapshot of both deterministic paths."""

    year_index: int
    average_value: float
    goal_value: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to camelCase JSON."""
        return {
            "yearIndex": self.year_index,
            "averageValue": self.average_value,
            "goalValue": self.goal_value,
        }


@dataclass(frozen=True)
class PercentileBand:
    """Annual p10 / p50 / p90 of the simulated ensemble."""

    year_index: int
    p10: float
    p50: float
    p90: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize to camelCase JSON."""
        return {
            "yearIndex": self.year_index,
            "p10": self.p10,
            "p50": self.p50,
            "p90": self.p90,
        }


@dataclass(frozen=True)
class ProjectionResult:
    """Merged output of one projection run.

    Attributes:
        average_final_value: Final balance of the average-contribution path.
        goal_final_value: Final balance of the goal-contribution path.
        composition: Contribution vs. growth share of the average path.
        annual_deterministic_series: One point per year, year 0 included.
        annual_percentile_bands: One band per year, year 0 included.
        seed: Seed that drove the simulation.
        path_count: Number of simulated paths.
        real_average_final_value: average_final_value in today's money.
        real_goal_final_value: goal_final_value in today's money.
        required_monthly_contribution: Level contribution reaching the
            target by the target date. Only set with a target and date.
        probability_to_target: Share of paths at or above the target on
            the target date. Only set with a target and date.
        months_to_target: Month index the goal outputs refer to.
        target_percentile_rank: Percentile rank of the target among the
            simulated balances on the target date.

    """

    average_final_value: float
    goal_final_value: float
    composition: Composition
    annual_deterministic_series: list[DeterministicPoint]
    annual_percentile_bands: list[PercentileBand]
    seed: int
    path_count: int
    real_average_final_value: float
    real_goal_final_value: float
    required_monthly_contribution: float | None = None
    probability_to_target: float | None = None
    months_to_target: int | None = None
    target_percentile_rank: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to camelCase JSON, omitting unset optional outputs."""
        out: dict[str, Any] = {
            "averageFinalValue": self.average_final_value,
            "goalFinalValue": self.goal_final_value,
            "composition": self.composition.to_dict(),
            "annualDeterministicSeries": [
                point.to_dict() for point in self.annual_deterministic_series
            ],
            "annualPercentileBands": [
                band.to_dict() for band in self.annual_percentile_bands
            ],
            "seed": self.seed,
            "pathCount": self.path_count,
            "realAverageFinalValue": self.real_average_final_value,
            "realGoalFinalValue": self.real_goal_final_value,
        }
        for attr in _OPTIONAL_OUTPUTS:
            value = getattr(self, attr)
            if value is not None:
                out[_camel(attr)] = value
        return out


def parse_target_date(raw: Any) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` target date.

    Empty strings and None mean "no target date".

    Raises:
        InvalidTargetDateError: If the value cannot be parsed.

    """
    if raw is None:
        return None
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        stripped = raw.strip()
        if not stripped:
            return None
        try:
            return date.fromisoformat(stripped[:10])
        except ValueError as exc:
            msg = f"targetDate is not a valid ISO date: {raw!r}"
            raise InvalidTargetDateError(msg) from exc
    msg = f"targetDate must be an ISO date string, got {raw!r}"
    raise InvalidTargetDateError(msg)


def parse_horizon(raw: Any) -> int:
    """Accept an int or a whole float as a horizon in years.

    Raises:
        InvalidHorizonError: If the value is a bool or has a fractional part.

    """
    if isinstance(raw, bool):
        msg = f"horizonYears must be a positive integer, got {raw!r}"
        raise InvalidHorizonError(msg)
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, int):
        return raw
    msg = f"horizonYears must be a positive integer, got {raw!r}"
    raise InvalidHorizonError(msg)


def _error_for(key: str) -> type[ValueError]:
    if key in _RATE_KEYS:
        return InvalidRateError
    return InvalidAmountError


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
