"""Noise sources.

A noise source maps (x, y, seed) to a scalar. ``PerlinNoise`` is the
recommended default; ``CoherentNoise`` is its single-octave building block.
"""

from .base import (
    ConstantNoise,
    FunctionNoise,
    NoiseFunction,
    RangeCheckedNoise,
)
from .coherent import CoherentNoise, interpolate, lattice_value, s_curve
from .perlin import PerlinNoise

__all__ = [
    "CoherentNoise",
    "ConstantNoise",
    "FunctionNoise",
    "NoiseFunction",
    "PerlinNoise",
    "RangeCheckedNoise",
    "interpolate",
    "lattice_value",
    "s_curve",
]
