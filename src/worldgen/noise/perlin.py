"""Octaved coherent noise (the usual "Perlin" terrain recipe)."""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import ConfigurationError
from .base import as_result
from .coherent import CoherentNoise

_COHERENT = CoherentNoise()


@dataclass(frozen=True)
class PerlinNoise:
    """Sum of coherent noise octaves at increasing frequency.

    Attributes:
        octaves: Number of coherent noise layers.
        frequency: Coordinate multiplier of the first octave. Controls the
            distance between hills and valleys.
        persistence: Amplitude multiplier between octaves.
        lacunarity: Frequency multiplier between octaves.
        normalize: Divide by the total amplitude so output stays in [-1, 1].
    """

    octaves: int = 8
    frequency: float = 1.0
    persistence: float = 0.5
    lacunarity: float = 2.0
    normalize: bool = True

    def __post_init__(self) -> None:
        if self.octaves < 1:
            raise ConfigurationError(f"octaves must be at least 1, got {self.octaves}")
        for name in ("frequency", "persistence", "lacunarity"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be finite")

    @property
    def max_amplitude(self) -> float:
        """Sum of the absolute amplitudes of all octaves; at least 1."""
        return sum(abs(self.persistence) ** i for i in range(self.octaves))

    def generate(self, x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64] | float:
        xf = np.asarray(x, dtype=np.float64) * self.frequency
        yf = np.asarray(y, dtype=np.float64) * self.frequency

        result = np.zeros(np.broadcast(xf, yf).shape, dtype=np.float64)
        amplitude = 1.0

        for octave in range(self.octaves):
            # Each octave gets its own seed so layers are uncorrelated
            result += amplitude * _COHERENT.generate(xf, yf, seed + octave)
            xf = xf * self.lacunarity
            yf = yf * self.lacunarity
            amplitude *= self.persistence

        if self.normalize:
            result /= self.max_amplitude

        return as_result(result, x, y)
