"""Record Format and request/response models"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, StrictBool, StrictInt, model_validator

from src.core.models import RECORD_FORMAT_VERSION
from src.core.shared_types import PieceColor
from src.othello.square import BOARD_SIZE


# --- RECORD FORMAT (moves-only / formatVersion=1) ---
class MoveRecord(BaseModel):
    """One move as it appears in an exported/imported record. Only the camelCase keys are accepted."""

    move_number: StrictInt = Field(alias="moveNumber")
    color: PieceColor
    row: Optional[StrictInt]
    col: Optional[StrictInt]
    is_pass: StrictBool = Field(alias="isPass")

    @model_validator(mode="after")
    def validate_position(self) -> "MoveRecord":
        if self.is_pass:
            if self.row is not None or self.col is not None:
                raise ValueError("when isPass=true, row and col must be null")
            return self

        if self.row is None or self.col is None:
            raise ValueError("when isPass=false, row and col must be numbers")
        if not (0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE):
            raise ValueError(f"row and col must be in range 0..{BOARD_SIZE - 1}")
        return self


class GameRecord(BaseModel):
    """
    The whole exported game: a format version and the move log. Nothing derived (board, turn, result) is included.

    ex)
    {"formatVersion": 1, "moves": [{"moveNumber": 1, "color": "BLACK", "row": 2, "col": 3, "isPass": false}]}
    """

    format_version: Literal[1] = Field(
        default=RECORD_FORMAT_VERSION, alias="formatVersion"
    )
    moves: list[MoveRecord]

    @model_validator(mode="before")
    @classmethod
    def require_format_version(cls, data: object) -> object:
        """The version must be written explicitly, even though 1 is the only one there is."""
        if isinstance(data, dict) and "formatVersion" not in data:
            raise ValueError("formatVersion is required")
        return data

    @model_validator(mode="after")
    def validate_move_numbers(self) -> "GameRecord":
        """moves must be sorted by moveNumber ascending, starting at 1, with no gaps"""
        for expected, move in enumerate(self.moves, start=1):
            if move.move_number != expected:
                raise ValueError(
                    f"moves must be sorted by moveNumber ascending with no gaps (expected {expected}, got {move.move_number})"
                )
        return self


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    row: int
    col: int


# --- RESPONSE MODELS ---
class GameResultResponse(BaseModel):
    black_count: int
    white_count: int
    winner: Optional[PieceColor]


class GameResponse(BaseModel):
    board: list[str]  # one string per row, 'B' / 'W' / '.'
    next_turn_color: PieceColor
    is_finished: bool
    legal_moves: list[str]  # algebraic notation, ex. "d3"
    must_pass: bool
    move_history: list[str]
    result: Optional[GameResultResponse]


class ImportPreviewResponse(BaseModel):
    game: GameResponse
    record_size_bytes: int
    move_count: int
