"""Core value types for noise map and world configuration."""

import hashlib
import math

from pydantic import BaseModel, Field

from .exceptions import ConfigurationError


class Seed(BaseModel, frozen=True):
    """Seed used for noise generation."""

    value: int = 0

    @classmethod
    def of_value(cls, value: int) -> "Seed":
        """Seed with an exact integer value."""
        return cls(value=value)

    @classmethod
    def of(cls, value: str | bytes | int) -> "Seed":
        """Seed derived from the SHA-256 hash of any value.

        Strings are hashed as UTF-8, bytes as-is and anything else through
        its repr, so the same input gives the same seed in every process.
        """
        if isinstance(value, bytes):
            data = value
        elif isinstance(value, str):
            data = value.encode("utf-8")
        else:
            data = repr(value).encode("utf-8")
        digest = hashlib.sha256(data).digest()
        return cls(value=int.from_bytes(digest[:8], "big"))


class Step(BaseModel, frozen=True):
    """Coordinate increment per cell along each axis.

    A zero step produces the same noise value for every cell on that axis.
    """

    x: float = Field(default=1.0, allow_inf_nan=False)
    y: float = Field(default=1.0, allow_inf_nan=False)

    @classmethod
    def of(cls, x: float, y: float) -> "Step":
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ConfigurationError(f"Step must be finite, got ({x}, {y})")
        return cls(x=x, y=y)


class Size(BaseModel, frozen=True):
    """Chunk dimensions in cells.

    (0, 0) means the size has not been set yet; it can still be inherited
    from a sibling noise map or from the world it is used in.
    """

    w: int = 0
    h: int = 0

    @classmethod
    def of(cls, w: int, h: int) -> "Size":
        return cls(w=w, h=h)

    @property
    def is_set(self) -> bool:
        return self.w != 0 or self.h != 0

    @property
    def shape(self) -> tuple[int, int]:
        """Array shape (rows, cols) of a grid with this size."""
        return (self.h, self.w)

    def ensure_positive(self) -> "Size":
        """Return self, raising ConfigurationError unless both dimensions are positive."""
        if not self.is_set:
            raise ConfigurationError("Size is not set")
        if self.w <= 0 or self.h <= 0:
            raise ConfigurationError(
                f"Size must have positive dimensions, got {self.w}x{self.h}"
            )
        return self


class Offset(BaseModel, frozen=True):
    """Cell offset applied to every generated coordinate."""

    x: int = 0
    y: int = 0

    @classmethod
    def of(cls, x: int, y: int) -> "Offset":
        return cls(x=x, y=y)
