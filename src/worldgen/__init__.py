"""Seedable noise maps and threshold-based tile worlds."""

from .chunks import chunk_coords, local_coords, world_coords
from .constraints import EQ, GE, GT, LE, LT, Constraint, InRange, Predicate
from .exceptions import (
    ConfigurationError,
    NoiseRangeError,
    UnmatchedCellError,
    WorldgenError,
)
from .noise import (
    CoherentNoise,
    ConstantNoise,
    FunctionNoise,
    NoiseFunction,
    PerlinNoise,
    RangeCheckedNoise,
)
from .noisemap import (
    Difference,
    NoiseField,
    NoiseMap,
    Scaled,
    Sum,
    add,
    normalize,
    scale,
    subtract,
)
from .tiles import Tile
from .types import Offset, Seed, Size, Step
from .world import World

__all__ = [
    # Types
    "Seed",
    "Step",
    "Size",
    "Offset",
    # Noise
    "NoiseFunction",
    "CoherentNoise",
    "PerlinNoise",
    "ConstantNoise",
    "FunctionNoise",
    "RangeCheckedNoise",
    # Noise maps
    "NoiseMap",
    "NoiseField",
    "Sum",
    "Difference",
    "Scaled",
    "add",
    "subtract",
    "scale",
    "normalize",
    # Constraints
    "Constraint",
    "LT",
    "LE",
    "GT",
    "GE",
    "EQ",
    "InRange",
    "Predicate",
    # World
    "Tile",
    "World",
    # Chunks
    "chunk_coords",
    "local_coords",
    "world_coords",
    # Exceptions
    "WorldgenError",
    "ConfigurationError",
    "UnmatchedCellError",
    "NoiseRangeError",
]
