"""
A single entry of the move log.

The log (an ordered list of Move) is the only thing that is ever stored or exported;
everything else about a game is derived from it by replay.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.models import MoveModel
from src.core.shared_types import PieceColor
from src.othello.square import Position


@dataclass(frozen=True)
class Move:
    """Either a placement (position set, is_pass False) or a pass (no position, is_pass True)."""

    move_number: int
    color: PieceColor
    position: Optional[Position] = None
    is_pass: bool = False

    def __post_init__(self) -> None:
        if self.move_number < 1:
            raise ValueError(f"move_number must be positive, got {self.move_number}")
        if self.is_pass != (self.position is None):
            raise ValueError(
                "A pass has no position and a placement must have one "
                f"(is_pass={self.is_pass}, position={self.position})"
            )

    @classmethod
    def placement(cls, move_number: int, color: PieceColor, row: int, col: int) -> Self:
        return cls(move_number, color, Position(row, col), is_pass=False)

    @classmethod
    def pass_turn(cls, move_number: int, color: PieceColor) -> Self:
        return cls(move_number, color, None, is_pass=True)

    @classmethod
    def from_model(cls, model: MoveModel) -> Self:
        """Raises ValueError when the transport data does not describe a well-formed move."""
        color = PieceColor(model.color)
        if model.is_pass:
            return cls.pass_turn(model.move_number, color)
        if model.row is None or model.col is None:
            raise ValueError(f"Move {model.move_number}: placement without a position")
        return cls.placement(model.move_number, color, model.row, model.col)

    def to_model(self) -> MoveModel:
        return MoveModel(
            move_number=self.move_number,
            color=self.color.value,
            row=self.position.row if self.position else None,
            col=self.position.col if self.position else None,
            is_pass=self.is_pass,
        )

    def describe(self) -> str:
        """Short label for move history views, ex. '1. BLACK d3' or '7. WHITE pass'"""
        where = "pass" if self.position is None else self.position.to_algebraic()
        return f"{self.move_number}. {self.color.value} {where}"
