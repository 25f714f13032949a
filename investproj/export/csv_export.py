"""CSV export for projection results.

Writes one row per projection year with both deterministic paths and
the simulated percentile bands, preceded by ``#`` metadata lines.

"""

from __future__ import annotations

import csv
import io
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from investproj.projection.models import ProjectionResult

_FIELDNAMES = ["year", "average", "goal", "p10", "p50", "p90"]


def export_projection_csv(
    result: ProjectionResult,
    output_path: str | None = None,
) -> str:
    """Export the annual series and percentile bands to CSV.

    Values are written with two decimals.

    Args:
        result: Projection result.
        output_path: File path to write. If None, returns CSV string.

    Returns:
        The CSV content as a string, or file path if output_path given.

    """
    output = io.StringIO()
    extra = [f"Seed: {result.seed} | Paths: {result.path_count}"]
    if result.probability_to_target is not None:
        extra.append(f"Probability to target: {result.probability_to_target:.4f}")
    if result.required_monthly_contribution is not None:
        extra.append(
            f"Required monthly contribution: {result.required_monthly_contribution:.2f}"
        )
    _write_metadata_header(output, "Investment Projection Export", extra=extra)

    writer = csv.DictWriter(output, fieldnames=_FIELDNAMES, lineterminator="\n")
    writer.writeheader()

    bands = {band.year_index: band for band in result.annual_percentile_bands}
    for point in result.annual_deterministic_series:
        row: dict[str, Any] = {
            "year": point.year_index,
            "average": f"{point.average_value:.2f}",
            "goal": f"{point.goal_value:.2f}",
        }
        band = bands.get(point.year_index)
        if band is not None:
            row["p10"] = f"{band.p10:.2f}"
            row["p50"] = f"{band.p50:.2f}"
            row["p90"] = f"{band.p90:.2f}"
        writer.writerow(row)

    content = output.getvalue()
    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
        return output_path
    return content


def _write_metadata_header(
    output: io.StringIO,
    title: str,
    extra: list[str] | None = None,
) -> None:
    """Write metadata comment lines at the top of a CSV export.

    Args:
        output: StringIO buffer to write to.
        title: Export title.
        extra: Optional additional metadata lines.

    """
    now = datetime.now(tz=UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    output.write(f"# {title}\n")
    output.write(f"# Generated: {now}\n")
    for line in extra or []:
        output.write(f"# {line}\n")
