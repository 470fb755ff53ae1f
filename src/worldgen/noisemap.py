"""Noise maps: sampled noise fields and their algebraic combinations.

A ``NoiseField`` wraps a noise source with a seed, a coordinate step, a chunk
size and a cell offset:

    field = (
        NoiseField(PerlinNoise())
        .set(Seed.of("Hello!"))
        .set(Step.of(0.02, 0.02))
        .set(Size.of(80, 50))
    )

Fields (and combinations of them) are combined with ordinary arithmetic,
which builds an expression tree that is only evaluated per chunk:

    terrain = base + detail * 3

Multiplication binds tighter than addition, so this is ``base + (detail * 3)``.
Sums are not normalised; ``terrain.normalized()`` divides by the total weight
(4 here) to bring values back into [-1, 1].

Sizes are resolved lazily. Only one field in a combination needs a size;
the others inherit it. Two fields with different sizes cannot be combined,
and generating such a combination raises ``ConfigurationError``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from numbers import Real

import numpy as np
from numpy.typing import NDArray

from .chunks import world_coords
from .exceptions import ConfigurationError
from .noise import NoiseFunction
from .types import Offset, Seed, Size, Step

Property = Seed | Step | Size | Offset


class NoiseMap(ABC):
    """Base class for everything that produces a grid of noise values."""

    @abstractmethod
    def get_size(self) -> Size:
        """Configured chunk size, or an unset Size if none is configured."""

    @property
    @abstractmethod
    def weight(self) -> float:
        """Total absolute weight of the fields in this map."""

    @abstractmethod
    def generate_region(self, x0: int, y0: int, size: Size) -> NDArray[np.float64]:
        """Generate a grid whose top-left cell is the absolute cell (x0, y0).

        Returns:
            Array of shape (size.h, size.w).
        """

    @abstractmethod
    def set(self, prop: Property) -> "NoiseMap":
        """Return a copy with the property applied to every field."""

    def generate_sized_chunk(self, size: Size, chunk_x: int, chunk_y: int) -> NDArray[np.float64]:
        """Generate a chunk using an explicit chunk size.

        Raises:
            ConfigurationError: If the size is not positive, or the map
                itself combines fields of different sizes.
        """
        size.ensure_positive()
        # Resolving our own size surfaces mismatched combinations
        self.get_size()
        x0, y0 = world_coords(chunk_x, chunk_y, 0, 0, size)
        return self.generate_region(x0, y0, size)

    def generate_chunk(self, chunk_x: int, chunk_y: int) -> NDArray[np.float64]:
        """Generate the chunk at the given chunk coordinates."""
        return self.generate_sized_chunk(self.get_size().ensure_positive(), chunk_x, chunk_y)

    def sample(self, x: int, y: int) -> float:
        """Value at a single absolute cell."""
        self.get_size()
        return float(self.generate_region(x, y, Size.of(1, 1))[0, 0])

    def normalized(self) -> "NoiseMap":
        """Scale by the inverse weight so combined values stay in [-1, 1]."""
        return normalize(self)

    def __add__(self, other: object) -> "NoiseMap":
        if not isinstance(other, NoiseMap):
            return NotImplemented
        return Sum(self, other)

    def __sub__(self, other: object) -> "NoiseMap":
        if not isinstance(other, NoiseMap):
            return NotImplemented
        return Difference(self, other)

    def __mul__(self, factor: object) -> "NoiseMap":
        if not isinstance(factor, Real):
            return NotImplemented
        return Scaled(self, float(factor))

    __rmul__ = __mul__

    def __neg__(self) -> "NoiseMap":
        return Scaled(self, -1.0)


@dataclass(frozen=True)
class NoiseField(NoiseMap):
    """A noise source sampled on a grid of cells.

    Cell (i, j) of chunk (cx, cy) is sampled at
    ``x = (cx * w + j + offset.x) * step.x`` and
    ``y = (cy * h + i + offset.y) * step.y``.

    The noise source is shared, never copied; fields are immutable and
    ``set`` returns a new field.
    """

    noise: NoiseFunction
    seed: Seed = field(default_factory=Seed)
    step: Step = field(default_factory=Step)
    size: Size = field(default_factory=Size)
    offset: Offset = field(default_factory=Offset)

    def get_size(self) -> Size:
        return self.size

    @property
    def weight(self) -> float:
        return 1.0

    def set(self, prop: Property) -> "NoiseField":
        if isinstance(prop, Seed):
            return replace(self, seed=prop)
        if isinstance(prop, Step):
            return replace(self, step=prop)
        if isinstance(prop, Size):
            return replace(self, size=prop)
        if isinstance(prop, Offset):
            return replace(self, offset=prop)
        raise ConfigurationError(f"Unknown noise map property: {prop!r}")

    def generate_region(self, x0: int, y0: int, size: Size) -> NDArray[np.float64]:
        # Integer cell coordinates first, so chunk boundaries stay exact
        cols = np.arange(size.w, dtype=np.int64) + (x0 + self.offset.x)
        rows = np.arange(size.h, dtype=np.int64) + (y0 + self.offset.y)

        xs = cols * self.step.x
        ys = rows * self.step.y
        grid_x, grid_y = np.meshgrid(xs, ys)

        values = self.noise.generate(grid_x, grid_y, self.seed.value)
        return np.array(np.broadcast_to(values, size.shape), dtype=np.float64)


def _common_size(left: Size, right: Size) -> Size:
    if left.is_set and right.is_set and left != right:
        raise ConfigurationError(
            f"Cannot combine noise maps of size {left.w}x{left.h} and {right.w}x{right.h}"
        )
    return left if left.is_set else right


@dataclass(frozen=True)
class _Combination(NoiseMap):
    left: NoiseMap
    right: NoiseMap

    def get_size(self) -> Size:
        return _common_size(self.left.get_size(), self.right.get_size())

    @property
    def weight(self) -> float:
        return self.left.weight + self.right.weight

    def set(self, prop: Property) -> "_Combination":
        return replace(self, left=self.left.set(prop), right=self.right.set(prop))

    def generate_region(self, x0: int, y0: int, size: Size) -> NDArray[np.float64]:
        left = self.left.generate_region(x0, y0, size)
        right = self.right.generate_region(x0, y0, size)
        if left.shape != right.shape:
            raise ConfigurationError(
                f"Cannot combine grids of shape {left.shape} and {right.shape}"
            )
        return self._combine(left, right)

    @abstractmethod
    def _combine(self, left: NDArray[np.float64], right: NDArray[np.float64]) -> NDArray[np.float64]:
        ...


@dataclass(frozen=True)
class Sum(_Combination):
    """Cell-wise sum of two noise maps."""

    def _combine(self, left, right):
        return left + right


@dataclass(frozen=True)
class Difference(_Combination):
    """Cell-wise difference of two noise maps."""

    def _combine(self, left, right):
        return left - right


@dataclass(frozen=True)
class Scaled(NoiseMap):
    """A noise map multiplied by a constant factor."""

    source: NoiseMap
    factor: float

    def get_size(self) -> Size:
        return self.source.get_size()

    @property
    def weight(self) -> float:
        return abs(self.factor) * self.source.weight

    def set(self, prop: Property) -> "Scaled":
        return replace(self, source=self.source.set(prop))

    def generate_region(self, x0: int, y0: int, size: Size) -> NDArray[np.float64]:
        return self.source.generate_region(x0, y0, size) * self.factor


def add(a: NoiseMap, b: NoiseMap) -> NoiseMap:
    """Expression for a + b."""
    return Sum(a, b)


def subtract(a: NoiseMap, b: NoiseMap) -> NoiseMap:
    """Expression for a - b."""
    return Difference(a, b)


def scale(a: NoiseMap, factor: float) -> NoiseMap:
    """Expression for a * factor."""
    return Scaled(a, float(factor))


def normalize(a: NoiseMap) -> NoiseMap:
    """Expression for a divided by its total weight."""
    weight = a.weight
    if weight == 0:
        raise ConfigurationError("Cannot normalise a noise map with zero weight")
    return Scaled(a, 1.0 / weight)
