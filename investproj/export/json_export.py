"""JSON export for projection runs.

Bundles the input assumptions and the full result in the camelCase
JSON form, with a metadata block.

"""

from __future__ import annotations

import json
from datetime import UTC, date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from investproj.projection.models import ProjectionInput, ProjectionResult

FORMAT_VERSION = "1.0"


class ProjectionEncoder(json.JSONEncoder):
    """JSON encoder that handles NumPy types and dates."""

    def default(self, o: Any) -> Any:
        """Convert non-serializable types to JSON-safe values."""
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, np.integer):
            return int(o)
        if isinstance(o, np.floating):
            return float(o)
        if isinstance(o, datetime | date):
            return o.isoformat()
        return super().default(o)


def export_projection_json(
    inp: ProjectionInput,
    result: ProjectionResult,
    output_path: str | None = None,
) -> str:
    """Export a projection run to JSON format.

    Args:
        inp: Input assumptions of the run.
        result: Projection result.
        output_path: File path to write. If None, returns JSON string.

    Returns:
        JSON string, or file path if output_path given.

    """
    export_data: dict[str, Any] = {
        "metadata": {
            "export_date": datetime.now(tz=UTC).isoformat(),
            "format_version": FORMAT_VERSION,
            "source": "investproj",
            "seed": result.seed,
            "path_count": result.path_count,
        },
        "input": inp.to_dict(),
        "result": result.to_dict(),
    }

    content = json.dumps(export_data, cls=ProjectionEncoder, indent=2)

    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
        return output_path
    return content
