from __future__ import annotations

import logging
from typing import Optional, Set

from sokoban.exceptions import InvalidCharError

from .level import Level
from .position import Position
from .tiles import Tile

logger = logging.getLogger(__name__)


def parse_level(text: str) -> Level:
    """Build a Level from an ASCII block in the standard Sokoban notation.

    Rows are separated by ``\\n``; every other character must be one of the
    seven grid symbols (see :class:`Tile`). The first unknown character aborts
    the parse with an :class:`InvalidCharError` carrying its row and column.

    A block without a player marker is accepted and places the player at the
    origin.
    """
    walls: Set[Position] = set()
    boxes: Set[Position] = set()
    squares: Set[Position] = set()
    player: Optional[Position] = None

    row, col = 0, 0
    for char in text:
        if char == "\n":
            row += 1
            col = 0
            continue

        pos = Position(row, col)
        tile = Tile.from_char(char)
        if tile is None:
            raise InvalidCharError(char, pos)

        if tile.is_wall:
            walls.add(pos)
        if tile.has_square:
            squares.add(pos)
        if tile.has_box:
            boxes.add(pos)
        if tile.has_player:
            player = pos
        col += 1

    if player is None:
        logger.warning("Level block has no player marker; placing player at the origin")
        player = Position(0, 0)

    level = Level(player=player, walls=walls, boxes=boxes, squares=squares)
    logger.debug("Parsed %r", level)
    return level


__all__ = ["parse_level"]
