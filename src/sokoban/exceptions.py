from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sokoban.game.position import Position


class SokobanError(Exception):
    """Base exception for the Sokoban engine."""


class InvalidCharError(SokobanError):
    """Raised when a level block contains a character outside the grid grammar."""

    def __init__(self, char: str, position: "Position") -> None:
        self.char = char
        self.position = position
        super().__init__(
            f"invalid character `{char}' at row {position.row}, column {position.column}"
        )


class LoadErrorKind(Enum):
    IO = "io"
    PARSE = "parse"
    SYNTAX = "syntax"


class CollectionLoadError(SokobanError):
    """Raised when a level collection cannot be loaded.

    Wraps storage failures, malformed container syntax and level parse errors
    into a single error for the host. The original exception is chained.
    """

    def __init__(self, message: str, kind: LoadErrorKind, source: str = "<stream>") -> None:
        super().__init__(message)
        self.kind = kind
        self.source = source


class ConfigError(SokobanError):
    """Raised for invalid settings values."""
