"""Custom exceptions for noise and tile generation."""


class WorldgenError(Exception):
    """Base exception for worldgen errors."""

    pass


class ConfigurationError(WorldgenError, ValueError):
    """Raised when generation parameters are invalid or missing."""

    pass


class UnmatchedCellError(WorldgenError):
    """Raised when a cell satisfies no tile and no catch-all tile exists."""

    def __init__(self, chunk_x: int, chunk_y: int, row: int, col: int):
        self.chunk_x = chunk_x
        self.chunk_y = chunk_y
        self.row = row
        self.col = col
        super().__init__(
            f"No tile matched cell (row={row}, col={col}) "
            f"of chunk ({chunk_x}, {chunk_y})"
        )


class NoiseRangeError(WorldgenError):
    """Raised when a range-checked noise source produces an invalid value."""

    pass
