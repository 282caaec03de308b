from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from .events import GameEvent
from .level import Level
from .position import Direction

if TYPE_CHECKING:
    from sokoban.collection.loader import Source

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent, "GameSession"], None]


class GameSession:
    """Plays through an ordered collection of levels.

    Keeps a reference snapshot of the level being played so it can be reset,
    advances to the next level on completion (or on request) and reports what
    happens to listeners. Nothing is rendered here; the host polls ``current``
    through the Level query methods.
    """

    def __init__(self, levels: Sequence[Level], *, auto_advance: bool = True, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must be non-negative")
        self._levels: List[Level] = list(levels)
        self.auto_advance = auto_advance
        self._listeners: List[Listener] = []
        self._index = start
        self._current: Optional[Level] = None
        self._reference: Optional[Level] = None
        self._enter(start)

    @classmethod
    def from_source(cls, source: "Source", *, auto_advance: bool = True, start: int = 0) -> "GameSession":
        """Load a collection (path or stream) and start a session on it."""
        from sokoban.collection.loader import load_collection

        return cls(load_collection(source), auto_advance=auto_advance, start=start)

    def __len__(self) -> int:
        return len(self._levels)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Optional[Level]:
        return self._current

    @property
    def finished(self) -> bool:
        return self._current is None

    def add_listener(self, listener: Listener) -> None:
        """Subscribe to session events."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: GameEvent) -> None:
        for l in list(self._listeners):
            try:
                l(event, self)
            except Exception as ex:
                logger.exception("Listener errored on %s: %s", event, ex)

    def _enter(self, index: int) -> None:
        self._index = index
        if index >= len(self._levels):
            self._current = None
            self._reference = None
            logger.info("Collection finished after %d levels", len(self._levels))
            return
        # The collection entry stays pristine; play happens on a copy.
        self._reference = self._levels[index].snapshot()
        self._current = self._reference.snapshot()
        logger.info("Entering level %d/%d %r", index + 1, len(self._levels), self._current.title)

    # ------------------------ Host commands ------------------------
    def step(self, direction: Direction) -> bool:
        """Forward a directional command to the current level.

        Returns True if the player moved. Completing a level emits
        LEVEL_COMPLETED and, with ``auto_advance``, moves on to the next one.
        """
        level = self._current
        if level is None:
            return False

        boxes_before = level.boxes
        if not level.step(direction):
            return False

        self._emit(GameEvent.PLAYER_MOVED)
        if level.boxes != boxes_before:
            self._emit(GameEvent.BOX_PUSHED)

        if level.is_completed():
            logger.info("Level %r completed in %d steps", level.title, level.get_steps())
            self._emit(GameEvent.LEVEL_COMPLETED)
            if self.auto_advance:
                self.advance()
        return True

    def reset(self) -> None:
        """Restore the current level to its state when it was entered."""
        if self._current is None or self._reference is None:
            return
        self._current.restore(self._reference)
        logger.debug("Level %r reset", self._current.title)
        self._emit(GameEvent.LEVEL_RESET)

    def advance(self) -> bool:
        """Move to the next level. Returns False once the collection is exhausted."""
        if self._current is None:
            return False
        self._enter(self._index + 1)
        if self._current is None:
            self._emit(GameEvent.COLLECTION_FINISHED)
            return False
        self._emit(GameEvent.LEVEL_CHANGED)
        return True

    skip = advance


__all__ = ["GameSession", "Listener"]
