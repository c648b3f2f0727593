"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the storage layer (lower) and the domain layer use the model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer or the record codec from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type alias to make MoveModel easier to read
PieceColorName = str

RECORD_FORMAT_VERSION = 1


@dataclass
class MoveModel:
    """Transport-safe representation of a single log entry."""

    move_number: int
    color: PieceColorName
    row: Optional[int]
    col: Optional[int]
    is_pass: bool


@dataclass
class GameModel:
    """The move log is everything that gets stored. Board, turn and status are always recomputed."""

    moves: list[MoveModel] = field(default_factory=list)
    format_version: int = RECORD_FORMAT_VERSION
