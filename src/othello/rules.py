"""
Othello rules engine
-----

Pure functions only: nothing here mutates a Board (boards are immutable values anyway),
reads the clock, or does I/O. Rule violations are returned as values (MoveRejected), never raised.

* applying a move (placement + flips)
* enumerating legal moves
* pass detection
* end of game detection and scoring
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from src.core.shared_types import PieceColor
from src.othello.board import Board
from src.othello.square import BOARD_SIZE, Position, is_within_bounds

Vector = tuple[int, int]

# (d_row, d_col) for the 8 compass directions
DIRECTIONS: tuple[Vector, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

CENTER = BOARD_SIZE // 2


class MoveErrorKind(StrEnum):
    INVALID_POSITION = "invalid position"
    ILLEGAL_MOVE = "illegal move"


@dataclass(frozen=True)
class GameState:
    board: Board
    next_turn_color: PieceColor
    is_finished: bool


@dataclass(frozen=True)
class MoveApplied:
    """apply_move succeeded. state.is_finished is always False: ending the game is decided by is_game_finished."""

    state: GameState


@dataclass(frozen=True)
class MoveRejected:
    kind: MoveErrorKind
    message: str


ApplyMoveResult = MoveApplied | MoveRejected


@dataclass(frozen=True)
class GameResult:
    black_count: int
    white_count: int
    winner: Optional[PieceColor]  # None means draw


def create_initial_board() -> Board:
    """Standard starting position: white on the main diagonal of the center 2x2, black on the other."""
    board = Board.empty()
    board = board.with_cells(
        [Position(CENTER - 1, CENTER - 1), Position(CENTER, CENTER)], PieceColor.WHITE
    )
    return board.with_cells(
        [Position(CENTER - 1, CENTER), Position(CENTER, CENTER - 1)], PieceColor.BLACK
    )


# --- FLIP RULES ---
def raycast_flips(
    board: Board, row: int, col: int, color: PieceColor, direction: Vector
) -> list[Position]:
    """
    Raycasting along one direction
    -----

    Walk away from (row, col) while we see opponent pieces.
    The run only counts if it is closed off by one of our own pieces before leaving the board or hitting an empty cell.
    Returns the positions that would be flipped (empty list if this direction flips nothing).
    """
    opponent_color = color.opponent
    d_row, d_col = direction
    run: list[Position] = []
    r, c = row + d_row, col + d_col
    while is_within_bounds(r, c) and board.cell(r, c) == opponent_color:
        run.append(Position(r, c))
        r += d_row
        c += d_col

    if run and is_within_bounds(r, c) and board.cell(r, c) == color:
        return run
    return []


def _flips(board: Board, row: int, col: int, color: PieceColor) -> list[Position]:
    """All flips for a placement. Every direction looks at the same (original) board."""
    flipped: list[Position] = []
    for direction in DIRECTIONS:
        flipped.extend(raycast_flips(board, row, col, color, direction))
    return flipped


def _is_legal_move(board: Board, row: int, col: int, color: PieceColor) -> bool:
    if not is_within_bounds(row, col) or board.cell(row, col) is not None:
        return False
    return any(raycast_flips(board, row, col, color, direction) for direction in DIRECTIONS)


# --- MOVE ENGINE ---
def apply_move(board: Board, color: PieceColor, row: int, col: int) -> ApplyMoveResult:
    """Place a piece of `color` on (row, col) and flip every closed run. The given board is left untouched."""
    if not is_within_bounds(row, col):
        return MoveRejected(
            MoveErrorKind.INVALID_POSITION,
            f"Invalid position ({row}, {col}): row and col must be in range 0..{BOARD_SIZE - 1}",
        )

    if board.cell(row, col) is not None:
        return MoveRejected(
            MoveErrorKind.ILLEGAL_MOVE,
            f"Illegal move at {Position(row, col).to_algebraic()}: cell is occupied",
        )

    flipped = _flips(board, row, col, color)
    if not flipped:
        return MoveRejected(
            MoveErrorKind.ILLEGAL_MOVE,
            f"Illegal move at {Position(row, col).to_algebraic()}: no pieces to flip",
        )

    new_board = board.with_cells([Position(row, col), *flipped], color)
    return MoveApplied(GameState(new_board, color.opponent, is_finished=False))


# --- LEGAL MOVES ---
def get_legal_moves(board: Board, color: PieceColor) -> list[Position]:
    """Row-major list of every position where `color` may play."""
    return [
        position
        for position in board.positions()
        if _is_legal_move(board, position.row, position.col, color)
    ]


def can_pass(board: Board, color: PieceColor) -> bool:
    """A pass is only allowed when there is nothing else to do."""
    return len(get_legal_moves(board, color)) == 0


# --- END OF GAME ---
def is_game_finished(
    board: Board, current_turn_color: PieceColor, previous_turn_color: PieceColor
) -> bool:
    """
    The game ends when
    * the board is full (no need to look at legal moves), or
    * neither the player about to move nor the player who just moved has a legal move (two passes in a row).
    """
    if board.is_full():
        return True
    return can_pass(board, current_turn_color) and can_pass(board, previous_turn_color)


def compute_game_result(board: Board) -> GameResult:
    """Only meaningful once the game is finished."""
    black_count = board.count(PieceColor.BLACK)
    white_count = board.count(PieceColor.WHITE)

    winner: Optional[PieceColor] = None
    if black_count > white_count:
        winner = PieceColor.BLACK
    elif white_count > black_count:
        winner = PieceColor.WHITE
    return GameResult(black_count, white_count, winner)
