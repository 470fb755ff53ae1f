"""Threshold constraints over noise values.

A constraint compares the value of a noise map against a threshold. It can
be bound to its own noise map with ``source=`` (or ``.on(...)``); unbound
constraints use the default noise map of the world they are evaluated in.

    LT(-0.1)                   # value < -0.1 on the world's noise map
    GT(0.8, source=mountains)  # value > 0.8 on a specific map
    InRange(0.2, 0.4)          # 0.2 <= value <= 0.4
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import ConfigurationError
from .noisemap import NoiseMap


@dataclass(frozen=True)
class Constraint(ABC):
    """Base class for predicates over a sampled noise value."""

    source: NoiseMap | None = field(default=None, kw_only=True)

    @abstractmethod
    def test(self, values: ArrayLike) -> NDArray[np.bool_]:
        """Boolean mask of the values that satisfy this constraint."""

    def satisfied_by(self, value: float) -> bool:
        """Whether a single value satisfies this constraint."""
        return bool(self.test(np.asarray(value, dtype=np.float64)))

    def on(self, source: NoiseMap) -> "Constraint":
        """Return a copy bound to the given noise map."""
        return replace(self, source=source)

    def evaluate(self, x: int, y: int, source: NoiseMap | None = None) -> bool:
        """Sample the noise map at absolute cell (x, y) and test the value.

        Args:
            x: Absolute cell column.
            y: Absolute cell row.
            source: Noise map to use when this constraint is not bound.

        Raises:
            ConfigurationError: If there is no noise map to sample.
        """
        noise_map = self.source if self.source is not None else source
        if noise_map is None:
            raise ConfigurationError(f"{self!r} has no noise map to evaluate")
        return self.satisfied_by(noise_map.sample(x, y))


@dataclass(frozen=True)
class LT(Constraint):
    """Value strictly less than the threshold."""

    threshold: float

    def test(self, values: ArrayLike) -> NDArray[np.bool_]:
        return np.asarray(values) < self.threshold


@dataclass(frozen=True)
class LE(Constraint):
    """Value less than or equal to the threshold."""

    threshold: float

    def test(self, values: ArrayLike) -> NDArray[np.bool_]:
        return np.asarray(values) <= self.threshold


@dataclass(frozen=True)
class GT(Constraint):
    """Value strictly greater than the threshold."""

    threshold: float

    def test(self, values: ArrayLike) -> NDArray[np.bool_]:
        return np.asarray(values) > self.threshold


@dataclass(frozen=True)
class GE(Constraint):
    """Value greater than or equal to the threshold."""

    threshold: float

    def test(self, values: ArrayLike) -> NDArray[np.bool_]:
        return np.asarray(values) >= self.threshold


@dataclass(frozen=True)
class EQ(Constraint):
    """Value exactly equal to the threshold."""

    threshold: float

    def test(self, values: ArrayLike) -> NDArray[np.bool_]:
        return np.asarray(values) == self.threshold


@dataclass(frozen=True)
class InRange(Constraint):
    """Value within [low, high], or [low, high) when ``closed`` is False."""

    low: float
    high: float
    closed: bool = True

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ConfigurationError(
                f"InRange lower bound {self.low} is above upper bound {self.high}"
            )

    def test(self, values: ArrayLike) -> NDArray[np.bool_]:
        values = np.asarray(values)
        upper = values <= self.high if self.closed else values < self.high
        return (values >= self.low) & upper


@dataclass(frozen=True)
class Predicate(Constraint):
    """Arbitrary scalar predicate, applied to each value."""

    func: Callable[[float], bool]

    def test(self, values: ArrayLike) -> NDArray[np.bool_]:
        return np.vectorize(self.func, otypes=[np.bool_])(values)
