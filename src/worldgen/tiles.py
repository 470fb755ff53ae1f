"""Tiles: symbols selected by noise constraints."""

from dataclasses import dataclass, replace
from typing import Callable, Generic, TypeVar

import numpy as np
from numpy.typing import NDArray

from .constraints import Constraint

T = TypeVar("T")


@dataclass(frozen=True)
class Tile(Generic[T]):
    """A symbol to place in the world when all of its constraints hold.

    The symbol is never inspected. A tile without constraints matches every
    cell, which makes it a catch-all when added last.
    """

    value: T
    constraints: tuple[Constraint, ...] = ()

    def when(self, constraint: Constraint) -> "Tile[T]":
        """Return a copy with an additional constraint."""
        return replace(self, constraints=self.constraints + (constraint,))

    @property
    def is_default(self) -> bool:
        return not self.constraints

    def satisfied_by(
        self,
        values_for: Callable[[Constraint], NDArray[np.float64]],
        shape: tuple[int, int],
    ) -> NDArray[np.bool_]:
        """Mask of the cells where every constraint holds.

        Args:
            values_for: Returns the noise grid a constraint is tested against.
            shape: Grid shape, used when the tile has no constraints.
        """
        mask = np.ones(shape, dtype=np.bool_)
        for constraint in self.constraints:
            mask &= constraint.test(values_for(constraint))
        return mask
