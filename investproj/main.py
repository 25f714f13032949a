"""investproj sidecar entry point.

Wraps the projection engine in a newline-delimited JSON protocol on
stdin/stdout so a UI process can call it without embedding Python.

Protocol:
    Request:  {"id": "uuid", "method": "string", "params": {}}
    Response: {"id": "uuid", "result": {}}
    Error:    {"id": "uuid", "error": {"message": "string", "type": "string"}}

Projection inputs travel as the camelCase ``scenario`` object, e.g.:
    {"id": "1", "method": "projection.run",
     "params": {"scenario": {"initialAmount": 0, ...}, "path_count": 300}}
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import date
from typing import Any

from investproj import log_config
from investproj.config import Settings
from investproj.export.csv_export import export_projection_csv
from investproj.export.json_export import ProjectionEncoder, export_projection_json
from investproj.ingest.contributions import (
    parse_contributions_csv,
    summarize_contributions,
)
from investproj.projection.engine import project
from investproj.projection.models import ProjectionInput
from investproj.projection.scenarios import sensitivity_analysis
from investproj.projection.seed import canonical_string, derive_seed

logger = logging.getLogger(__name__)

# Methods that receive the configured path count when the request omits it
_PATH_COUNT_METHODS = {
    "projection.run",
    "projection.sensitivity",
    "export.projection_csv",
    "export.projection_json",
}


def _parse_as_of(as_of: str | None) -> date | None:
    if as_of is None:
        return None
    return date.fromisoformat(as_of)


def _handle_projection_run(
    scenario: dict[str, Any],
    path_count: int,
    seed: int | None = None,
    as_of: str | None = None,
) -> dict[str, Any]:
    """Run a projection and return the camelCase result."""
    inp = ProjectionInput.from_dict(scenario)
    result = project(inp, path_count, seed=seed, as_of=_parse_as_of(as_of))
    return result.to_dict()


def _handle_projection_seed(scenario: dict[str, Any]) -> dict[str, Any]:
    """Return the derived seed and the canonical string it hashes."""
    inp = ProjectionInput.from_dict(scenario)
    return {"seed": derive_seed(inp), "canonical": canonical_string(inp)}


def _handle_projection_sensitivity(
    scenario: dict[str, Any],
    vary_param: str,
    values: list[float],
    path_count: int,
    as_of: str | None = None,
) -> list[dict[str, Any]]:
    """Sweep one assumption and return one row per value."""
    inp = ProjectionInput.from_dict(scenario)
    return sensitivity_analysis(
        inp, vary_param, values, path_count=path_count, as_of=_parse_as_of(as_of)
    )


def _handle_export_csv(
    scenario: dict[str, Any],
    path_count: int,
    output_path: str | None = None,
    seed: int | None = None,
    as_of: str | None = None,
) -> str:
    """Run a projection and export it as CSV."""
    inp = ProjectionInput.from_dict(scenario)
    result = project(inp, path_count, seed=seed, as_of=_parse_as_of(as_of))
    return export_projection_csv(result, output_path=output_path)


def _handle_export_json(
    scenario: dict[str, Any],
    path_count: int,
    output_path: str | None = None,
    seed: int | None = None,
    as_of: str | None = None,
) -> str:
    """Run a projection and export input and result as JSON."""
    inp = ProjectionInput.from_dict(scenario)
    result = project(inp, path_count, seed=seed, as_of=_parse_as_of(as_of))
    return export_projection_json(inp, result, output_path=output_path)


def dispatch(
    method: str,
    params: dict[str, Any],
    settings: Settings | None = None,
) -> Any:
    """Route a method call to the appropriate handler.

    Args:
        method: The method name (e.g., "projection.run").
        params: The parameters for the method.
        settings: Sidecar settings; defaults to ``Settings()``.

    Returns:
        The result of the method call.

    Raises:
        ValueError: If the method is not recognized.

    """
    handlers: dict[str, Any] = {
        # Projection
        "projection.run": _handle_projection_run,
        "projection.seed": _handle_projection_seed,
        "projection.sensitivity": _handle_projection_sensitivity,
        # Contribution history
        "contributions.parse_csv": parse_contributions_csv,
        "contributions.summarize": summarize_contributions,
        # Export
        "export.projection_csv": _handle_export_csv,
        "export.projection_json": _handle_export_json,
    }
    if method not in handlers:
        msg = f"Unknown method: {method}"
        raise ValueError(msg)

    if method in _PATH_COUNT_METHODS and params.get("path_count") is None:
        settings = settings or Settings()
        params = {**params, "path_count": settings.path_count}
    return handlers[method](**params)


def main() -> None:
    """Run the sidecar message loop.

    Reads newline-delimited JSON from stdin, dispatches to handlers,
    and writes JSON responses to stdout. Runs indefinitely until
    stdin is closed.
    """
    settings = Settings.from_env()
    log_config.setup(verbose=settings.verbose)
    logger.info("Sidecar started (default path count %d)", settings.path_count)

    for raw_line in sys.stdin:
        stripped = raw_line.strip()
        if not stripped:
            continue

        request: dict[str, Any] = {}
        try:
            request = json.loads(stripped)
            request_id = request.get("id", "unknown")
            method = request["method"]
            params = request.get("params", {})
            result = dispatch(method, params, settings)
            response: dict[str, Any] = {"id": request_id, "result": result}
        except Exception as exc:  # noqa: BLE001
            request_id = (
                request.get("id", "unknown") if isinstance(request, dict) else "unknown"
            )
            logger.warning("Request %s failed: %s", request_id, exc)
            response = {
                "id": request_id,
                "error": {
                    "message": str(exc),
                    "type": type(exc).__name__,
                    "traceback": traceback.format_exc(),
                },
            }
        sys.stdout.write(json.dumps(response, cls=ProjectionEncoder) + "\n")
        sys.stdout.flush()


if __name__ == "__main__":
    main()
