"""World configuration loading from TOML files.

A config declares named noise fields, weighted expressions over them, and
the tiles of the world:

    size = [80, 50]
    noise = "terrain"

    [[fields]]
    name = "base"
    seed = "Hello?"
    step = [0.005, 0.005]

    [[expressions]]
    name = "terrain"
    normalize = true
    terms = [{ source = "base" }, { source = "detail", weight = 3 }]

    [[tiles]]
    symbol = "~"
    constraints = [{ kind = "lt", value = -0.1 }]
"""

import tomllib
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, Field

from .constraints import EQ, GE, GT, LE, LT, Constraint, InRange
from .exceptions import ConfigurationError
from .noise import CoherentNoise, ConstantNoise, NoiseFunction, PerlinNoise
from .noisemap import NoiseField, NoiseMap, Scaled, normalize
from .tiles import Tile
from .types import Offset, Seed, Size, Step
from .world import World

logger = structlog.get_logger()


class PerlinConfig(BaseModel):
    """Perlin noise parameters."""

    octaves: int = Field(default=8, description="Number of coherent noise octaves")
    frequency: float = Field(default=1.0, description="Coordinate multiplier of the first octave")
    persistence: float = Field(default=0.5, description="Amplitude multiplier per octave")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    normalize: bool = Field(default=True, description="Keep output in [-1, 1]")


class NoiseSourceConfig(BaseModel):
    """Which noise function backs a field."""

    kind: Literal["perlin", "coherent", "constant"] = "perlin"
    value: float = Field(default=0.0, description="Value of a constant source")
    perlin: PerlinConfig = Field(default_factory=PerlinConfig)


class FieldConfig(BaseModel):
    """A named noise field."""

    name: str
    noise: NoiseSourceConfig = Field(default_factory=NoiseSourceConfig)
    seed: int | str = Field(default=0, description="Integer seed, or a string to hash")
    step: tuple[float, float] = Field(default=(1.0, 1.0), description="Coordinate step per cell")
    size: tuple[int, int] | None = Field(default=None, description="Chunk size (w, h)")
    offset: tuple[int, int] = Field(default=(0, 0), description="Cell offset (x, y)")


class TermConfig(BaseModel):
    """One weighted term of an expression."""

    source: str = Field(description="Name of a field or earlier expression")
    weight: float = 1.0


class ExpressionConfig(BaseModel):
    """A named weighted sum of noise maps."""

    name: str
    terms: list[TermConfig]
    normalize: bool = Field(default=False, description="Divide by the total weight")


class ConstraintConfig(BaseModel):
    """A threshold constraint on a tile."""

    kind: Literal["lt", "le", "gt", "ge", "eq", "range"]
    value: float | None = Field(default=None, description="Threshold for comparisons")
    low: float | None = Field(default=None, description="Lower bound for range")
    high: float | None = Field(default=None, description="Upper bound for range")
    closed: bool = Field(default=True, description="Include the upper bound of a range")
    source: str | None = Field(default=None, description="Noise map name (default: world noise)")


class TileConfig(BaseModel):
    """A tile symbol and its constraints."""

    symbol: str
    constraints: list[ConstraintConfig] = []


class WorldConfig(BaseModel):
    """Complete world configuration."""

    size: tuple[int, int] | None = Field(default=None, description="Chunk size (w, h)")
    offset: tuple[int, int] = Field(default=(0, 0), description="World cell offset (x, y)")
    noise: str | None = Field(default=None, description="Default noise map name")
    fields: list[FieldConfig] = []
    expressions: list[ExpressionConfig] = []
    tiles: list[TileConfig] = []


_COMPARISONS: dict[str, type[Constraint]] = {
    "lt": LT,
    "le": LE,
    "gt": GT,
    "ge": GE,
    "eq": EQ,
}


def load_config(config_path: Path) -> WorldConfig:
    """Parse a world TOML file into a WorldConfig.

    Raises:
        FileNotFoundError: If the file does not exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        pydantic.ValidationError: If the tables do not match the world schema.
    """
    with open(config_path, "rb") as f:
        return WorldConfig.model_validate(tomllib.load(f))


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Resolve a world config given as a file path or a bundled world name.

    Anything that looks like a path (contains "/" or ends in .toml) is used
    as-is; a bare name such as "island" refers to a bundled world.

    Raises:
        FileNotFoundError: If no such file or bundled world exists.
    """
    looks_like_path = "/" in name or name.endswith(".toml")
    path = Path(name) if looks_like_path else _configs_dir() / f"{name}.toml"
    if path.exists():
        return path

    if looks_like_path:
        raise FileNotFoundError(f"World config not found: {name}")
    raise FileNotFoundError(f"No bundled world '{name}'. Bundled worlds: {list_configs()}")


def list_configs() -> list[str]:
    """Names of the bundled worlds."""
    return sorted(p.stem for p in _configs_dir().glob("*.toml"))


def _make_noise(config: NoiseSourceConfig) -> NoiseFunction:
    if config.kind == "constant":
        return ConstantNoise(config.value)
    if config.kind == "coherent":
        return CoherentNoise()
    return PerlinNoise(**config.perlin.model_dump())


def _make_field(config: FieldConfig) -> NoiseField:
    seed = Seed.of_value(config.seed) if isinstance(config.seed, int) else Seed.of(config.seed)
    nm = NoiseField(
        _make_noise(config.noise),
        seed=seed,
        step=Step.of(*config.step),
        offset=Offset.of(*config.offset),
    )
    if config.size is not None:
        nm = nm.set(Size.of(*config.size))
    return nm


def _lookup(maps: dict[str, NoiseMap], name: str) -> NoiseMap:
    try:
        return maps[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown noise map '{name}'. Known maps: {sorted(maps)}"
        ) from None


def _make_expression(config: ExpressionConfig, maps: dict[str, NoiseMap]) -> NoiseMap:
    if not config.terms:
        raise ConfigurationError(f"Expression '{config.name}' has no terms")

    expression: NoiseMap | None = None
    for term in config.terms:
        nm = _lookup(maps, term.source)
        if term.weight != 1.0:
            nm = Scaled(nm, term.weight)
        expression = nm if expression is None else expression + nm

    return normalize(expression) if config.normalize else expression


def _make_constraint(config: ConstraintConfig, maps: dict[str, NoiseMap]) -> Constraint:
    source = _lookup(maps, config.source) if config.source is not None else None

    if config.kind == "range":
        if config.low is None or config.high is None:
            raise ConfigurationError("Range constraints need both 'low' and 'high'")
        return InRange(config.low, config.high, closed=config.closed, source=source)

    if config.value is None:
        raise ConfigurationError(f"'{config.kind}' constraints need a 'value'")
    return _COMPARISONS[config.kind](config.value, source=source)


def build_world(config: WorldConfig) -> World[str]:
    """Build a World of string symbols from its configuration.

    Raises:
        ConfigurationError: If a name is duplicated or unknown, or a
            constraint is missing its thresholds.
    """
    maps: dict[str, NoiseMap] = {}

    for field_config in config.fields:
        if field_config.name in maps:
            raise ConfigurationError(f"Duplicate noise map name '{field_config.name}'")
        maps[field_config.name] = _make_field(field_config)

    for expression_config in config.expressions:
        if expression_config.name in maps:
            raise ConfigurationError(f"Duplicate noise map name '{expression_config.name}'")
        maps[expression_config.name] = _make_expression(expression_config, maps)

    world: World[str] = World(
        noise=_lookup(maps, config.noise) if config.noise is not None else None,
        offset=Offset.of(*config.offset),
    )
    if config.size is not None:
        world = world.set(Size.of(*config.size))

    for tile_config in config.tiles:
        tile = Tile(tile_config.symbol)
        for constraint_config in tile_config.constraints:
            tile = tile.when(_make_constraint(constraint_config, maps))
        world = world.add(tile)

    logger.debug(
        "world_built",
        fields=len(config.fields),
        expressions=len(config.expressions),
        tiles=len(config.tiles),
    )
    return world
