"""Worlds: grids of tiles chosen by noise constraints.

A world holds an ordered list of tiles. For every cell of a chunk, the
first tile whose constraints all hold decides the cell:

    world = (
        World(terrain)
        .add(Tile("~").when(LT(-0.1)))   # water
        .add(Tile(",").when(LT(0.45)))   # grass
        .add(Tile("^").when(GT(0.8)))    # mountains
        .add(Tile("n"))                  # hills
    )
    rows = world.generate(0, 0)

A cell that no tile matches is an error; end the list with a tile that has
no constraints (or call ``otherwise``) to guarantee a match.
"""

from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar

import numpy as np
import structlog
from numpy.typing import NDArray

from .chunks import chunk_coords, local_coords, world_coords
from .constraints import Constraint
from .exceptions import ConfigurationError, UnmatchedCellError
from .noisemap import NoiseMap
from .tiles import Tile
from .types import Offset, Size

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass(frozen=True)
class World(Generic[T]):
    """Ordered tile rules over one or more noise maps.

    Attributes:
        noise: Default noise map for constraints without their own source.
        tiles: Tiles in priority order.
        size: Chunk size. When unset, the common size of the noise maps
            referenced by the tiles is used.
        offset: Cell offset applied before sampling any noise map.
    """

    noise: NoiseMap | None = None
    tiles: tuple[Tile[T], ...] = ()
    size: Size = field(default_factory=Size)
    offset: Offset = field(default_factory=Offset)

    def add(self, tile: Tile[T]) -> "World[T]":
        """Return a copy with the tile appended (lowest priority so far)."""
        return replace(self, tiles=self.tiles + (tile,))

    def otherwise(self, value: T) -> "World[T]":
        """Return a copy that places ``value`` wherever no other tile matches."""
        return self.add(Tile(value))

    def set(self, prop: Size | Offset) -> "World[T]":
        if isinstance(prop, Size):
            return replace(self, size=prop)
        if isinstance(prop, Offset):
            return replace(self, offset=prop)
        raise ConfigurationError(f"Unknown world property: {prop!r}")

    def _source_for(self, constraint: Constraint) -> NoiseMap:
        source = constraint.source if constraint.source is not None else self.noise
        if source is None:
            raise ConfigurationError(
                f"{constraint!r} has no noise map and the world has no default"
            )
        return source

    def _sources(self) -> list[NoiseMap]:
        sources: dict[int, NoiseMap] = {}
        if self.noise is not None:
            sources[id(self.noise)] = self.noise
        for tile in self.tiles:
            for constraint in tile.constraints:
                source = self._source_for(constraint)
                sources[id(source)] = source
        return list(sources.values())

    def get_size(self) -> Size:
        """Resolve the chunk size used for generation.

        Raises:
            ConfigurationError: If no size is set anywhere, or the referenced
                noise maps disagree.
        """
        if self.size.is_set:
            return self.size.ensure_positive()

        resolved = Size()
        for source in self._sources():
            source_size = source.get_size()
            if not source_size.is_set:
                continue
            if resolved.is_set and source_size != resolved:
                raise ConfigurationError(
                    f"Noise maps disagree on chunk size: {resolved.w}x{resolved.h} "
                    f"and {source_size.w}x{source_size.h}; set the world size"
                )
            resolved = source_size
        return resolved.ensure_positive()

    def _classify(
        self, x0: int, y0: int, size: Size, chunk_x: int, chunk_y: int
    ) -> NDArray[np.intp]:
        """Index of the winning tile for every cell of a region."""
        if not self.tiles:
            raise ConfigurationError("World has no tiles")

        # Fail before any noise is generated if a constraint has no source
        for source in self._sources():
            source.get_size()

        grids: dict[int, NDArray[np.float64]] = {}

        def values_for(constraint: Constraint) -> NDArray[np.float64]:
            source = self._source_for(constraint)
            key = id(source)
            if key not in grids:
                grids[key] = source.generate_region(x0, y0, size)
            return grids[key]

        choice = np.full(size.shape, -1, dtype=np.intp)
        for index, tile in enumerate(self.tiles):
            pending = choice < 0
            if not pending.any():
                break
            choice[tile.satisfied_by(values_for, size.shape) & pending] = index

        unmatched = np.argwhere(choice < 0)
        if len(unmatched):
            row, col = (int(v) for v in unmatched[0])
            raise UnmatchedCellError(chunk_x, chunk_y, row, col)

        return choice

    def generate(self, chunk_x: int, chunk_y: int) -> list[list[T]]:
        """Generate the tiles of one chunk as a list of rows.

        Generation is pure: the same world and chunk coordinates always give
        the same rows, and different chunks may be generated concurrently.

        Raises:
            ConfigurationError: If the world is misconfigured.
            UnmatchedCellError: If any cell matches no tile.
        """
        size = self.get_size()
        cx0, cy0 = world_coords(chunk_x, chunk_y, 0, 0, size)
        choice = self._classify(
            cx0 + self.offset.x, cy0 + self.offset.y, size, chunk_x, chunk_y
        )

        logger.debug(
            "chunk_generated",
            chunk_x=chunk_x,
            chunk_y=chunk_y,
            width=size.w,
            height=size.h,
            tiles=len(self.tiles),
        )

        values = [tile.value for tile in self.tiles]
        return [[values[i] for i in row] for row in choice.tolist()]

    def tile_at(self, x: int, y: int) -> T:
        """Tile value at a single absolute cell.

        Matches the value at the same cell of the chunk that contains it.
        """
        size = self.get_size()
        chunk_x, chunk_y = chunk_coords(x, y, size)
        col, row = local_coords(x, y, size)
        try:
            choice = self._classify(
                x + self.offset.x, y + self.offset.y, Size.of(1, 1), chunk_x, chunk_y
            )
        except UnmatchedCellError:
            raise UnmatchedCellError(chunk_x, chunk_y, row, col) from None
        return self.tiles[int(choice[0, 0])].value
