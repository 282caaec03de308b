"""
Sokoban level engine.

The package holds the puzzle model and its loaders only. Rendering, windowing
and command-line handling belong to the host application, which drives a
``GameSession`` (or a bare ``Level``) and reads state back through the Level
query methods.
"""

from .collection import load_bundled_collection, load_collection
from .exceptions import CollectionLoadError, InvalidCharError, LoadErrorKind, SokobanError
from .game import Direction, GameEvent, GameSession, Level, Position, parse_level

__version__ = "0.1.0"

__all__ = [
    "CollectionLoadError",
    "Direction",
    "GameEvent",
    "GameSession",
    "InvalidCharError",
    "Level",
    "LoadErrorKind",
    "Position",
    "SokobanError",
    "load_bundled_collection",
    "load_collection",
    "parse_level",
]
