from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class Tile(Enum):
    """One character of the level grid grammar.

    Each member's value is the character it is written as. Lookup of any
    other character yields None, which the parser reports as invalid.
    """

    WALL = "#"
    SQUARE = "."
    BOX = "$"
    PLAYER = "@"
    PLAYER_ON_SQUARE = "+"
    BOX_ON_SQUARE = "*"
    FLOOR = " "

    @property
    def is_wall(self) -> bool:
        return self is Tile.WALL

    @property
    def has_square(self) -> bool:
        return self in (Tile.SQUARE, Tile.PLAYER_ON_SQUARE, Tile.BOX_ON_SQUARE)

    @property
    def has_box(self) -> bool:
        return self in (Tile.BOX, Tile.BOX_ON_SQUARE)

    @property
    def has_player(self) -> bool:
        return self in (Tile.PLAYER, Tile.PLAYER_ON_SQUARE)

    @classmethod
    def from_char(cls, char: str) -> Optional["Tile"]:
        return _BY_CHAR.get(char)

    @classmethod
    def compose(cls, *, wall: bool = False, square: bool = False, box: bool = False,
                player: bool = False) -> "Tile":
        """Return the tile for a cell with the given contents.

        Walls take precedence over anything else, then the player, then boxes.
        """
        if wall:
            return cls.WALL
        if player:
            return cls.PLAYER_ON_SQUARE if square else cls.PLAYER
        if box:
            return cls.BOX_ON_SQUARE if square else cls.BOX
        return cls.SQUARE if square else cls.FLOOR


_BY_CHAR: Dict[str, Tile] = {t.value: t for t in Tile}


__all__ = ["Tile"]
