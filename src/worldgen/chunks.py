"""Conversion between absolute cell, chunk and in-chunk coordinates.

Chunks tile the infinite plane: chunk (cx, cy) of size w x h covers cells
cx * w .. cx * w + w - 1 horizontally and cy * h .. cy * h + h - 1
vertically. Negative cells belong to negative chunks.
"""

from .types import Size


def chunk_coords(x: int, y: int, size: Size) -> tuple[int, int]:
    """Convert absolute cell coordinates to chunk coordinates."""
    size.ensure_positive()
    return (x // size.w, y // size.h)


def local_coords(x: int, y: int, size: Size) -> tuple[int, int]:
    """Convert absolute cell coordinates to (column, row) within their chunk."""
    size.ensure_positive()
    return (x % size.w, y % size.h)


def world_coords(
    chunk_x: int, chunk_y: int, local_x: int, local_y: int, size: Size
) -> tuple[int, int]:
    """Convert chunk + local offset to absolute cell coordinates."""
    size.ensure_positive()
    return (chunk_x * size.w + local_x, chunk_y * size.h + local_y)
