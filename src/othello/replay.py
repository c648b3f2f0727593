"""
Move log replay
-----

Board, turn and end-of-game are never stored: they are recomputed from the move log.
There are two entry points, and which one a caller uses says where the log came from:

* recompute_board_from_moves: the log was built by this process (every move already went through apply_move).
* recompute_board_from_moves_validated: the log crossed a trust boundary (loaded from storage, imported from a file).
  Every rule is checked again and the first violation is reported.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Sequence

from src.core.shared_types import PieceColor
from src.othello.board import Board
from src.othello.moves import Move
from src.othello.rules import (
    GameState,
    MoveErrorKind,
    MoveRejected,
    apply_move,
    can_pass,
    create_initial_board,
    is_game_finished,
)

FIRST_TO_MOVE = PieceColor.BLACK


class ReplayErrorKind(StrEnum):
    TURN_MISMATCH = "turn mismatch"
    INVALID_PASS_CLAIM = "invalid pass claim"
    ILLEGAL_MOVE = "illegal move"
    INVALID_POSITION = "invalid position"


MOVE_ERROR_TO_REPLAY_ERROR: dict[MoveErrorKind, ReplayErrorKind] = {
    MoveErrorKind.ILLEGAL_MOVE: ReplayErrorKind.ILLEGAL_MOVE,
    MoveErrorKind.INVALID_POSITION: ReplayErrorKind.INVALID_POSITION,
}


@dataclass(frozen=True)
class ReplaySuccess:
    board: Board
    next_turn_color: PieceColor


@dataclass(frozen=True)
class ReplayFailure:
    """index is 1-based, the same number as the offending move's move_number."""

    index: int
    kind: ReplayErrorKind
    message: str


ReplayResult = ReplaySuccess | ReplayFailure


def recompute_board_from_moves(moves: Sequence[Move]) -> Board:
    """Fold a trusted log into a board. Passes leave the board as it is.

    A placement that does not apply means the log was not produced by this engine after all: that is a bug, so raise.
    """
    board = create_initial_board()
    for move in moves:
        if move.is_pass or move.position is None:
            continue
        result = apply_move(board, move.color, move.position.row, move.position.col)
        if isinstance(result, MoveRejected):
            raise ValueError(
                f"Trusted move log is inconsistent at move {move.move_number}: {result.message}"
            )
        board = result.state.board
    return board


def recompute_board_from_moves_validated(moves: Sequence[Move]) -> ReplayResult:
    """
    Rebuild the board from an untrusted log
    -----

    Starting from the initial board with black to move, for every move (1-based index i):
    1. the color must be the one whose turn it is
    2. a pass is only accepted when that color has no legal move
    3. a placement must be a legal move on the board so far
    4. the turn goes to the opponent (also after a pass)

    Stops at the first problem. Nothing is repaired or skipped.
    """
    board = create_initial_board()
    expected_color = FIRST_TO_MOVE

    for index, move in enumerate(moves, start=1):
        if move.color != expected_color:
            return ReplayFailure(
                index,
                ReplayErrorKind.TURN_MISMATCH,
                f"Move {index}: Expected {expected_color.value}, got {move.color.value}",
            )

        if move.is_pass:
            if not can_pass(board, expected_color):
                return ReplayFailure(
                    index,
                    ReplayErrorKind.INVALID_PASS_CLAIM,
                    f"Move {index}: Pass move invalid, {expected_color.value} has legal moves",
                )
        else:
            if move.position is None:
                return ReplayFailure(
                    index,
                    ReplayErrorKind.ILLEGAL_MOVE,
                    f"Move {index}: Placement without a position",
                )
            result = apply_move(
                board, expected_color, move.position.row, move.position.col
            )
            if isinstance(result, MoveRejected):
                return ReplayFailure(
                    index,
                    MOVE_ERROR_TO_REPLAY_ERROR[result.kind],
                    f"Move {index}: {result.message}",
                )
            board = result.state.board

        expected_color = expected_color.opponent

    return ReplaySuccess(board, expected_color)


def game_state_from_replay(replay: ReplaySuccess) -> GameState:
    """The player who made the last move is always the opponent of the one to move next (also for an empty log)."""
    current = replay.next_turn_color
    previous = current.opponent
    return GameState(
        board=replay.board,
        next_turn_color=current,
        is_finished=is_game_finished(replay.board, current, previous),
    )


def derive_game_state(moves: Sequence[Move]) -> GameState | ReplayFailure:
    """Validated replay + end of game detection in one call"""
    replay = recompute_board_from_moves_validated(moves)
    if isinstance(replay, ReplayFailure):
        return replay
    return game_state_from_replay(replay)
