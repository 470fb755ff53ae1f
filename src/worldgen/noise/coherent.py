"""Coherent (value) noise on an integer lattice.

Each lattice corner gets a pseudo-random value from an integer hash of its
coordinates and the seed. Values between corners are blended with an
s-curve, giving smooth noise in [-1, 1].
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .base import as_result

_MASK32 = np.uint64(0xFFFFFFFF)
_MASK31 = np.uint64(0x7FFFFFFF)

# Hash constants, kept as uint64 so no mixed-type promotion happens
_X_PRIME = np.uint64(157)
_Y_PRIME = np.uint64(31337)
_SEED_PRIME = np.uint64(2633)
_SHIFT = np.uint64(13)
_C1 = np.uint64(15731)
_C2 = np.uint64(789221)
_C3 = np.uint64(1376312579)


def _to_u32(values: ArrayLike) -> NDArray[np.uint64]:
    """Two's complement low 32 bits of integer values, held in uint64."""
    return (np.asarray(values, dtype=np.int64) & 0xFFFFFFFF).astype(np.uint64)


def lattice_value(x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64]:
    """Pseudo-random value in (-1, 1] for integer lattice points.

    Arithmetic wraps at 32 bits; every product is masked before the next one
    so intermediate values fit in uint64.

    Args:
        x: Integer lattice x coordinates.
        y: Integer lattice y coordinates.
        seed: Seed, reduced to its low 32 bits.

    Returns:
        Array of lattice values broadcast from x and y.
    """
    xi = _to_u32(x)
    yi = _to_u32(y)
    s = np.uint64(seed & 0xFFFFFFFF)

    n = (xi * _X_PRIME + yi * _Y_PRIME + s * _SEED_PRIME) & _MASK31
    n = ((n << _SHIFT) ^ n) & _MASK32

    inner = (((n * n) & _MASK32) * _C1 + _C2) & _MASK32
    value = (n * inner + _C3) & _MASK31

    return 1.0 - value.astype(np.float64) / 1073741824.0


def s_curve(a: ArrayLike) -> NDArray[np.float64]:
    """Smooth Hermite weight a*a*(3 - 2a) for a in [0, 1]."""
    a = np.asarray(a, dtype=np.float64)
    return a * a * (3.0 - 2.0 * a)


def interpolate(v1: ArrayLike, v2: ArrayLike, a: ArrayLike) -> NDArray[np.float64]:
    """Linear interpolation between v1 and v2."""
    return (1.0 - a) * np.asarray(v1) + a * np.asarray(v2)


def _lattice_floor(v: NDArray[np.float64]) -> NDArray[np.int64]:
    # Positive values truncate, everything else steps one cell down.
    return np.where(v > 0.0, np.trunc(v), np.trunc(v - 1.0)).astype(np.int64)


@dataclass(frozen=True)
class CoherentNoise:
    """Smoothly interpolated lattice noise with no parameters of its own."""

    def generate(self, x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64] | float:
        xf = np.asarray(x, dtype=np.float64)
        yf = np.asarray(y, dtype=np.float64)

        x0 = _lattice_floor(xf)
        y0 = _lattice_floor(yf)
        x1 = x0 + 1
        y1 = y0 + 1

        xd = s_curve(xf - x0)
        yd = s_curve(yf - y0)

        top = interpolate(lattice_value(x0, y0, seed), lattice_value(x1, y0, seed), xd)
        bottom = interpolate(lattice_value(x0, y1, seed), lattice_value(x1, y1, seed), xd)

        return as_result(interpolate(top, bottom, yd), x, y)
