from __future__ import annotations

import logging
from typing import FrozenSet, Iterable, List, Set, Tuple

from .position import Direction, Position
from .tiles import Tile

logger = logging.getLogger(__name__)


class Level:
    """Mutable state of a single puzzle.

    Walls and target squares are fixed at construction. Boxes and the player
    move through ``step``. All queries are side-effect free and form the whole
    contract a presentation layer needs.

    Positions are members of unbounded integer space: a cell is blocked because
    it is in ``walls`` or ``boxes``, never because it falls outside an array.

    The constructor rejects boxes inside walls but does not check the player:
    a block without a player marker puts the player at the origin, whatever
    wall or box is drawn there. Such a player can still walk out.
    """

    __slots__ = ("_title", "_player", "_steps", "_walls", "_boxes", "_squares", "_extents")

    def __init__(
        self,
        player: Position,
        walls: Iterable[Position] = (),
        boxes: Iterable[Position] = (),
        squares: Iterable[Position] = (),
        title: str = "",
        steps: int = 0,
    ) -> None:
        self._walls: FrozenSet[Position] = frozenset(walls)
        self._squares: FrozenSet[Position] = frozenset(squares)
        self._boxes: Set[Position] = set(boxes)
        overlap = self._walls & self._boxes
        if overlap:
            raise ValueError(f"Boxes placed inside walls: {sorted(overlap)}")
        if steps < 0:
            raise ValueError("steps must be non-negative")
        self._player = player
        self._steps = int(steps)
        self._title = title
        self._extents = self._compute_extents()

    def _compute_extents(self) -> Tuple[int, int]:
        # The player seeds the maximum so an empty level still has extents.
        width, height = self._player.column, self._player.row
        for pos in self._walls | self._squares | self._boxes:
            if pos.column > width:
                width = pos.column
            if pos.row > height:
                height = pos.row
        return width + 1, height + 1

    # ------------------------ Queries ------------------------
    @property
    def title(self) -> str:
        return self._title

    def set_title(self, title: str) -> None:
        self._title = title

    @property
    def player(self) -> Position:
        return self._player

    @property
    def steps(self) -> int:
        return self._steps

    def get_steps(self) -> int:
        return self._steps

    @property
    def walls(self) -> FrozenSet[Position]:
        return self._walls

    @property
    def squares(self) -> FrozenSet[Position]:
        return self._squares

    @property
    def boxes(self) -> FrozenSet[Position]:
        """A read-only view of the current box positions."""
        return frozenset(self._boxes)

    def extents(self) -> Tuple[int, int]:
        """Return (width, height) in cells."""
        return self._extents

    def is_free(self, pos: Position) -> bool:
        return pos not in self._walls and pos not in self._boxes

    def is_box(self, pos: Position) -> bool:
        return pos in self._boxes

    def is_player(self, pos: Position) -> bool:
        return pos == self._player

    def is_square(self, pos: Position) -> bool:
        return pos in self._squares

    def is_wall(self, pos: Position) -> bool:
        return pos in self._walls

    def is_completed(self) -> bool:
        """True when every target square holds a box."""
        return self._squares <= self._boxes

    def boxes_on_squares(self) -> int:
        return len(self._squares & self._boxes)

    def remaining_squares(self) -> int:
        return len(self._squares - self._boxes)

    def tile_at(self, pos: Position) -> Tile:
        return Tile.compose(
            wall=pos in self._walls,
            square=pos in self._squares,
            box=pos in self._boxes,
            player=pos == self._player,
        )

    # ------------------------ Movement ------------------------
    def step(self, direction: Direction) -> bool:
        """Move the player one cell, pushing a box if one is in the way.

        A push succeeds only when the cell beyond the box is free. Blocked moves
        leave the level untouched and return False; they are not errors.
        """
        target = self._player.neighbor(direction)
        if self.is_free(target):
            return self._move_player(target)

        if self.is_box(target):
            beyond = target.neighbor(direction)
            if self.is_free(beyond):
                self._move_box(target, beyond)
                return self._move_player(target)
            logger.debug("Push %s from %s blocked at %s", direction.name, target, beyond)
            return False

        logger.debug("Move %s from %s blocked by wall", direction.name, self._player)
        return False

    def _move_player(self, pos: Position) -> bool:
        if pos == self._player:
            return False
        self._player = pos
        self._steps += 1
        return True

    def _move_box(self, src: Position, dst: Position) -> None:
        if src in self._boxes:
            self._boxes.remove(src)
            self._boxes.add(dst)
            logger.debug("Box pushed from %s to %s", src, dst)

    # ------------------------ Snapshots ------------------------
    def snapshot(self) -> "Level":
        """Return an independent deep copy of this level."""
        clone = Level.__new__(Level)
        clone._title = self._title
        clone._player = self._player
        clone._steps = self._steps
        clone._walls = self._walls
        clone._squares = self._squares
        clone._boxes = set(self._boxes)
        clone._extents = self._extents
        return clone

    def restore(self, snapshot: "Level") -> None:
        """Restore player, boxes, steps and title from ``snapshot``.

        Walls and squares are immutable and are left as they are.
        """
        self._player = snapshot._player
        self._boxes = set(snapshot._boxes)
        self._steps = snapshot._steps
        self._title = snapshot._title

    # ------------------------ Debugging ------------------------
    def to_lines(self) -> List[str]:
        width, height = self._extents
        rows: List[str] = []
        for r in range(height):
            row = "".join(self.tile_at(Position(r, c)).value for c in range(width))
            rows.append(row.rstrip())
        return rows

    def to_text(self) -> str:
        """Render the level back into the grid grammar."""
        return "\n".join(self.to_lines())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Level):
            return NotImplemented
        return (
            self._player == other._player
            and self._steps == other._steps
            and self._title == other._title
            and self._walls == other._walls
            and self._squares == other._squares
            and self._boxes == other._boxes
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        width, height = self._extents
        return (
            f"Level(title={self._title!r}, {width}x{height}, player={self._player!r}, "
            f"boxes={len(self._boxes)}, steps={self._steps})"
        )


__all__ = ["Level"]
