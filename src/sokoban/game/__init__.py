"""Level engine: positions, the grid grammar, puzzle state and play sessions."""

from .events import GameEvent
from .grammar import parse_level
from .level import Level
from .position import Direction, Position
from .session import GameSession
from .tiles import Tile

__all__ = [
    "Direction",
    "GameEvent",
    "GameSession",
    "Level",
    "Position",
    "Tile",
    "parse_level",
]
