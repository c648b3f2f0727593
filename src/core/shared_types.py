"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class PieceColor(StrEnum):
    """Values double as the color names used in the Record Format."""

    BLACK = "BLACK"
    WHITE = "WHITE"

    @property
    def opponent(self) -> "PieceColor":
        return PieceColor.WHITE if self == PieceColor.BLACK else PieceColor.BLACK
