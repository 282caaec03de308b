from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Cardinal movement directions as (d_row, d_column) deltas."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


@dataclass(frozen=True, order=True)
class Position:
    """A cell on the unbounded integer grid, addressed as (row, column)."""

    row: int
    column: int

    def neighbor(self, direction: Direction) -> "Position":
        """Return the adjacent position in ``direction``. No bounds checking."""
        dr, dc = direction.delta
        return Position(self.row + dr, self.column + dc)


__all__ = ["Direction", "Position"]
