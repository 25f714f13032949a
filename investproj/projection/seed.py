"""Reproducible seed derivation.

Every field of a ProjectionInput is serialized into a canonical string
in a fixed order and folded through 32-bit FNV-1a. Identical inputs
always give the identical seed, so the whole simulation is repeatable
without touching any ambient random source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from investproj.projection.models import INPUT_FIELDS

if TYPE_CHECKING:
    from investproj.projection.models import ProjectionInput

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
_UINT32_MASK = 0xFFFFFFFF

# Fixed precision for floats so the string never depends on repr()
_FLOAT_FORMAT = "{:.10f}"


def fnv1a_32(data: bytes) -> int:
    """Hash bytes with 32-bit FNV-1a.

    Args:
        data: Bytes to hash.

    Returns:
        Unsigned 32-bit hash.

    """
    h = FNV_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * FNV_PRIME) & _UINT32_MASK
    return h


def canonical_string(inp: ProjectionInput) -> str:
    """Serialize a projection input as ``name=value`` pairs joined by ``|``.

    Floats use ten fixed decimals, the horizon is a plain integer and the
    target date is ISO formatted (empty when absent).
    """
    parts: list[str] = []
    for key, attr in INPUT_FIELDS.items():
        value = getattr(inp, attr)
        if key == "targetDate":
            text = value.isoformat() if value is not None else ""
        elif key == "horizonYears":
            text = str(int(value))
        else:
            text = _FLOAT_FORMAT.format(float(value))
        parts.append(f"{key}={text}")
    return "|".join(parts)


def derive_seed(inp: ProjectionInput) -> int:
    """Map a projection input to a reproducible unsigned 32-bit seed."""
    return fnv1a_32(canonical_string(inp).encode("utf-8"))
