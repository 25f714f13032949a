"""Runtime settings for the sidecar, read from the environment.

Library functions never read these: ``project()`` and friends always
take their path count and seed as explicit arguments.

Environment variables:
    INVESTPROJ_PATH_COUNT: Default Monte Carlo path count (positive int, 300).
    INVESTPROJ_VERBOSE: "1", "true" or "yes" enables DEBUG logging.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from investproj.projection.monte_carlo import DEFAULT_PATH_COUNT

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Sidecar settings.

    Attributes:
        path_count: Path count used when a request does not give one.
        verbose: Log at DEBUG level.

    """

    path_count: int = DEFAULT_PATH_COUNT
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ValueError: If INVESTPROJ_PATH_COUNT is not a positive integer.

        """
        env: Mapping[str, str] = os.environ if environ is None else environ

        raw_count = env.get("INVESTPROJ_PATH_COUNT", "").strip()
        path_count = DEFAULT_PATH_COUNT
        if raw_count:
            try:
                path_count = int(raw_count)
            except ValueError as exc:
                msg = f"INVESTPROJ_PATH_COUNT must be an integer, got {raw_count!r}"
                raise ValueError(msg) from exc
            if path_count < 1:
                msg = f"INVESTPROJ_PATH_COUNT must be positive, got {path_count}"
                raise ValueError(msg)
            logger.info("Path count override via INVESTPROJ_PATH_COUNT=%d", path_count)

        verbose = env.get("INVESTPROJ_VERBOSE", "").strip().lower() in _TRUTHY
        return cls(path_count=path_count, verbose=verbose)
