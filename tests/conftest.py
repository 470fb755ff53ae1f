"""Shared test fixtures for worldgen tests."""

from typing import Callable

import pytest

from worldgen.noise import ConstantNoise, FunctionNoise, PerlinNoise
from worldgen.noisemap import NoiseField
from worldgen.types import Seed, Size, Step


@pytest.fixture
def perlin() -> PerlinNoise:
    """Default Perlin noise source."""
    return PerlinNoise()


@pytest.fixture
def base_field(perlin: PerlinNoise) -> NoiseField:
    """16x12 broad Perlin field."""
    return (
        NoiseField(perlin)
        .set(Seed.of("Hello?"))
        .set(Step.of(0.05, 0.05))
        .set(Size.of(16, 12))
    )


@pytest.fixture
def detail_field(perlin: PerlinNoise) -> NoiseField:
    """16x12 fine Perlin field with a different seed."""
    return (
        NoiseField(perlin)
        .set(Seed.of("Hello!"))
        .set(Step.of(0.2, 0.2))
        .set(Size.of(16, 12))
    )


@pytest.fixture
def constant_field() -> Callable[..., NoiseField]:
    """Factory for fields returning the same value everywhere."""

    def make(value: float, w: int = 6, h: int = 4) -> NoiseField:
        return NoiseField(ConstantNoise(value), size=Size.of(w, h))

    return make


@pytest.fixture
def column_field() -> NoiseField:
    """4x2 field whose value is the absolute x coordinate of the cell."""
    return NoiseField(FunctionNoise(lambda x, y, seed: x), size=Size.of(4, 2))
