"""The noise function contract and simple noise sources."""

from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import NoiseRangeError


@runtime_checkable
class NoiseFunction(Protocol):
    """A deterministic mapping from (x, y, seed) to a scalar.

    Implementations must be pure and reentrant: the same inputs always give
    the same output, and one instance may be shared by any number of noise
    maps and threads. Coordinates may be scalars or broadcastable arrays.
    """

    def generate(self, x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64] | float:
        ...


def as_result(values: ArrayLike, x: ArrayLike, y: ArrayLike) -> NDArray[np.float64] | float:
    """Return a float for scalar coordinates, otherwise a float64 array."""
    if np.ndim(x) == 0 and np.ndim(y) == 0:
        return float(np.asarray(values))
    return np.asarray(values, dtype=np.float64)


@dataclass(frozen=True)
class ConstantNoise:
    """Noise source returning the same value everywhere."""

    value: float = 0.0

    def generate(self, x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64] | float:
        shape = np.broadcast(np.asarray(x), np.asarray(y)).shape
        return as_result(np.full(shape, self.value, dtype=np.float64), x, y)


@dataclass(frozen=True)
class FunctionNoise:
    """Adapts a scalar ``(x, y, seed) -> float`` callable to the array contract."""

    func: Callable[[float, float, int], float]

    def generate(self, x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64] | float:
        values = np.vectorize(self.func, otypes=[np.float64])(x, y, seed)
        return as_result(values, x, y)


@dataclass(frozen=True)
class RangeCheckedNoise:
    """Wraps a noise source and rejects non-finite or out-of-range output.

    Meant for debugging custom noise functions; the built-in sources never
    need it.
    """

    noise: NoiseFunction
    low: float = -1.0
    high: float = 1.0

    def generate(self, x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64] | float:
        result = self.noise.generate(x, y, seed)
        values = np.asarray(result, dtype=np.float64)

        if not np.all(np.isfinite(values)):
            raise NoiseRangeError(f"{self.noise!r} produced non-finite values")

        if values.size and (values.min() < self.low or values.max() > self.high):
            raise NoiseRangeError(
                f"{self.noise!r} produced values in [{values.min()}, {values.max()}], "
                f"outside [{self.low}, {self.high}]"
            )

        return result
