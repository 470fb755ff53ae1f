"""Tests for world configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from worldgen.config import (
    ConstraintConfig,
    FieldConfig,
    WorldConfig,
    build_world,
    find_config,
    list_configs,
    load_config,
)
from worldgen.exceptions import ConfigurationError
from worldgen.noise import CoherentNoise, ConstantNoise, PerlinNoise
from worldgen.types import Seed, Size, Step

CONSTANT_WORLD = """
size = [5, 3]
noise = "flat"

[[fields]]
name = "flat"
noise = { kind = "constant", value = 0.2 }

[[tiles]]
symbol = "~"
constraints = [{ kind = "lt", value = -0.1 }]

[[tiles]]
symbol = ","
constraints = [{ kind = "lt", value = 0.45 }]

[[tiles]]
symbol = "n"
"""


@pytest.fixture
def constant_world_path(tmp_path: Path) -> Path:
    path = tmp_path / "flat.toml"
    path.write_text(CONSTANT_WORLD)
    return path


class TestModels:
    """Tests for configuration model defaults."""

    def test_field_defaults(self) -> None:
        config = FieldConfig(name="base")
        assert config.noise.kind == "perlin"
        assert config.seed == 0
        assert config.step == (1.0, 1.0)
        assert config.size is None
        assert config.offset == (0, 0)

    def test_world_defaults(self) -> None:
        config = WorldConfig()
        assert config.size is None
        assert config.noise is None
        assert config.fields == []
        assert config.tiles == []

    def test_unknown_constraint_kind(self) -> None:
        with pytest.raises(ValidationError):
            ConstraintConfig(kind="between", value=1.0)


class TestLoadConfig:
    """Tests for loading TOML files."""

    def test_load(self, constant_world_path: Path) -> None:
        config = load_config(constant_world_path)
        assert config.size == (5, 3)
        assert config.fields[0].noise.kind == "constant"
        assert [tile.symbol for tile in config.tiles] == ["~", ",", "n"]

    def test_schema_mismatch(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[[tiles]]\nsymbol = 5\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_find_config_by_path(self, constant_world_path: Path) -> None:
        assert find_config(str(constant_world_path)) == constant_world_path

    def test_find_config_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            find_config(str(tmp_path / "nope.toml"))

    def test_find_bundled_config(self) -> None:
        assert find_config("island").name == "island.toml"

    def test_find_unknown_name(self) -> None:
        with pytest.raises(FileNotFoundError):
            find_config("no-such-world")

    def test_list_configs(self) -> None:
        assert "island" in list_configs()


class TestBuildWorld:
    """Tests for building worlds from configuration."""

    def test_constant_world(self, constant_world_path: Path) -> None:
        world = build_world(load_config(constant_world_path))
        assert world.generate(0, 0) == [[","] * 5 for _ in range(3)]

    def test_field_settings(self) -> None:
        config = WorldConfig.model_validate(
            {
                "noise": "base",
                "fields": [
                    {
                        "name": "base",
                        "seed": "Hello?",
                        "step": [0.5, 0.25],
                        "size": [4, 2],
                        "offset": [1, 2],
                        "noise": {"kind": "perlin", "perlin": {"octaves": 3}},
                    }
                ],
                "tiles": [{"symbol": "n"}],
            }
        )
        nm = build_world(config).noise
        assert nm.seed == Seed.of("Hello?")
        assert nm.step == Step.of(0.5, 0.25)
        assert nm.size == Size.of(4, 2)
        assert (nm.offset.x, nm.offset.y) == (1, 2)
        assert nm.noise == PerlinNoise(octaves=3)

    def test_integer_seed_is_exact(self) -> None:
        config = WorldConfig.model_validate(
            {"noise": "a", "fields": [{"name": "a", "seed": 77}], "tiles": [{"symbol": "n"}]}
        )
        assert build_world(config).noise.seed == Seed.of_value(77)

    def test_noise_kinds(self) -> None:
        config = WorldConfig.model_validate(
            {
                "fields": [
                    {"name": "p"},
                    {"name": "c", "noise": {"kind": "coherent"}},
                    {"name": "k", "noise": {"kind": "constant", "value": 0.5}},
                ],
                "noise": "c",
                "tiles": [{"symbol": "n", "constraints": [{"kind": "lt", "value": 2, "source": "k"}]}],
            }
        )
        world = build_world(config)
        assert world.noise.noise == CoherentNoise()
        assert world.tiles[0].constraints[0].source.noise == ConstantNoise(0.5)

    def test_weighted_normalized_expression(self) -> None:
        """(0.2 + 3 * 0.4) / 4 = 0.35"""
        config = WorldConfig.model_validate(
            {
                "size": [3, 3],
                "noise": "mix",
                "fields": [
                    {"name": "a", "noise": {"kind": "constant", "value": 0.2}},
                    {"name": "b", "noise": {"kind": "constant", "value": 0.4}},
                ],
                "expressions": [
                    {
                        "name": "mix",
                        "normalize": True,
                        "terms": [{"source": "a"}, {"source": "b", "weight": 3}],
                    }
                ],
                "tiles": [
                    {"symbol": "x", "constraints": [{"kind": "range", "low": 0.34, "high": 0.36}]},
                    {"symbol": "?"},
                ],
            }
        )
        world = build_world(config)
        assert world.noise.sample(0, 0) == pytest.approx(0.35)
        assert world.generate(0, 0) == [["x"] * 3] * 3

    def test_expressions_can_reference_expressions(self) -> None:
        config = WorldConfig.model_validate(
            {
                "size": [2, 2],
                "noise": "outer",
                "fields": [{"name": "a", "noise": {"kind": "constant", "value": 0.25}}],
                "expressions": [
                    {"name": "inner", "terms": [{"source": "a"}, {"source": "a"}]},
                    {"name": "outer", "terms": [{"source": "inner", "weight": -1}]},
                ],
                "tiles": [{"symbol": "n"}],
            }
        )
        assert build_world(config).noise.sample(0, 0) == pytest.approx(-0.5)

    def test_range_bounds_open(self) -> None:
        config = WorldConfig.model_validate(
            {
                "size": [1, 1],
                "noise": "k",
                "fields": [{"name": "k", "noise": {"kind": "constant", "value": 0.5}}],
                "tiles": [
                    {
                        "symbol": "in",
                        "constraints": [{"kind": "range", "low": 0.0, "high": 0.5, "closed": False}],
                    },
                    {"symbol": "out"},
                ],
            }
        )
        assert build_world(config).generate(0, 0) == [["out"]]

    def test_world_offset(self) -> None:
        config = WorldConfig.model_validate(
            {"size": [2, 2], "offset": [3, 4], "tiles": [{"symbol": "n"}]}
        )
        world = build_world(config)
        assert (world.offset.x, world.offset.y) == (3, 4)
        assert world.size == Size.of(2, 2)

    def test_bundled_island_config(self) -> None:
        world = build_world(load_config(find_config("island")))
        rows = world.generate(0, 0)
        assert len(rows) == 50
        assert all(len(row) == 80 for row in rows)
        assert {value for row in rows for value in row} <= {"~", ",", "^", "n"}


class TestBuildErrors:
    """Tests for invalid configurations."""

    def _config(self, **overrides) -> WorldConfig:
        data = {
            "size": [2, 2],
            "noise": "a",
            "fields": [{"name": "a", "noise": {"kind": "constant", "value": 0.0}}],
            "tiles": [{"symbol": "n"}],
        }
        data.update(overrides)
        return WorldConfig.model_validate(data)

    def test_unknown_default_noise(self) -> None:
        with pytest.raises(ConfigurationError):
            build_world(self._config(noise="missing"))

    def test_unknown_constraint_source(self) -> None:
        tiles = [{"symbol": "n", "constraints": [{"kind": "lt", "value": 0, "source": "missing"}]}]
        with pytest.raises(ConfigurationError):
            build_world(self._config(tiles=tiles))

    def test_unknown_expression_term(self) -> None:
        expressions = [{"name": "e", "terms": [{"source": "missing"}]}]
        with pytest.raises(ConfigurationError):
            build_world(self._config(expressions=expressions))

    def test_empty_expression(self) -> None:
        with pytest.raises(ConfigurationError):
            build_world(self._config(expressions=[{"name": "e", "terms": []}]))

    def test_duplicate_names(self) -> None:
        fields = [{"name": "a"}, {"name": "a"}]
        with pytest.raises(ConfigurationError):
            build_world(self._config(fields=fields))

    def test_comparison_without_value(self) -> None:
        tiles = [{"symbol": "n", "constraints": [{"kind": "gt"}]}]
        with pytest.raises(ConfigurationError):
            build_world(self._config(tiles=tiles))

    def test_range_without_bounds(self) -> None:
        tiles = [{"symbol": "n", "constraints": [{"kind": "range", "low": 0.1}]}]
        with pytest.raises(ConfigurationError):
            build_world(self._config(tiles=tiles))

    def test_non_finite_step(self) -> None:
        fields = [{"name": "a", "step": [float("inf"), 1.0]}]
        with pytest.raises(ConfigurationError):
            build_world(self._config(fields=fields))
