"""Seeded uniform stream and Box-Muller normal sampler.

The uniform generator is mulberry32: 32 bits of state, advanced by a
fixed odd increment and scrambled with xor-shifts and multiplies. It is
not cryptographic, only decorrelated enough for a few hundred paths of a
few hundred months.

Draw accounting: ``next_gaussian`` consumes exactly two uniforms per
call, so the n-th normal always comes from uniforms 2n and 2n+1.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import NDArray

_UINT32_MASK = 0xFFFFFFFF
_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0

# Lower bound for u1 so log(u1) stays finite
GAUSSIAN_EPSILON = 1e-12


class Mulberry32:
    """Callable uniform stream over [0, 1).

    State is held on the instance only; two instances built from the same
    seed produce the same infinite sequence.

    Args:
        seed: Any integer; only the low 32 bits are used.

    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _UINT32_MASK

    def __call__(self) -> float:
        """Return the next uniform draw in [0, 1)."""
        self._state = (self._state + _MULBERRY_INCREMENT) & _UINT32_MASK
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & _UINT32_MASK
        t ^= (t + ((t ^ (t >> 7)) * (t | 61))) & _UINT32_MASK
        return ((t ^ (t >> 14)) & _UINT32_MASK) / _TWO_POW_32


def next_gaussian(rng: Callable[[], float]) -> float:
    """Draw one standard normal value with the Box-Muller transform.

    Consumes exactly two uniform draws. The sine twin is discarded.
    """
    u1 = max(rng(), GAUSSIAN_EPSILON)
    u2 = rng()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def gaussian_draws(rng: Callable[[], float], count: int) -> NDArray[np.float64]:
    """Draw ``count`` successive standard normals in stream order."""
    draws = np.empty(count, dtype=np.float64)
    for i in range(count):
        draws[i] = next_gaussian(rng)
    return draws
