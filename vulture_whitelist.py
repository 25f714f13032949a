"""Vulture whitelist: names that look unused but are reached indirectly.

Sidecar handlers are looked up by method name in ``dispatch``, pytest
fixtures are injected by name, and ``__post_init__`` is called by the
dataclass machinery.

Usage:
    uv run vulture investproj tests vulture_whitelist.py
"""

# ── Entry point (console script, not imported) ──
from investproj.main import main  # noqa: F401

# ── Pytest fixtures (injected by pytest, never called directly) ──
from tests.conftest import as_of  # noqa: F401
from tests.conftest import base_input  # noqa: F401
from tests.conftest import target_input  # noqa: F401
from tests.conftest import zero_vol_input  # noqa: F401

# ── Dataclass lifecycle hooks (called by @dataclass, not user code) ──
from investproj.projection.models import ProjectionInput

ProjectionInput.__post_init__  # noqa: B018
