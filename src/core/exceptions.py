"""Exceptions raised by the Game and Service layers.

The rules engine itself never raises for rule violations: it returns typed failure values.
The layers above translate those into the exceptions below.
"""

from typing import Optional


class GameError(Exception):
    """Base class for everything the Othello backend raises on purpose."""


class IllegalMoveError(GameError):
    """A placement was attempted that the rules do not allow."""


class GameStateError(GameError):
    """The requested action is not allowed in the current state of the game."""


class InvalidRecordError(GameError):
    """A move log coming from outside the running process broke the rules of the game."""

    def __init__(
        self, message: str, index: Optional[int] = None, kind: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.index = index
        self.kind = kind


class RecordFormatError(GameError):
    """The Record Format text could not be parsed (bad JSON, schema violation, too large)."""


class RepositoryError(GameError):
    """Reading or writing the stored game failed."""
