from enum import Enum, auto


class GameEvent(Enum):
    """Events emitted by GameSession to notify a host or UI."""

    PLAYER_MOVED = auto()
    BOX_PUSHED = auto()
    LEVEL_COMPLETED = auto()
    LEVEL_RESET = auto()
    LEVEL_CHANGED = auto()
    COLLECTION_FINISHED = auto()
