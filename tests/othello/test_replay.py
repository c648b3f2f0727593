"""Unit tests for src/othello/replay.py"""

from unittest.mock import patch

import pytest

from src.core.shared_types import PieceColor
from src.othello.board import Board
from src.othello.game import Game
from src.othello.moves import Move
from src.othello.replay import (
    ReplayErrorKind,
    ReplayFailure,
    ReplaySuccess,
    derive_game_state,
    game_state_from_replay,
    recompute_board_from_moves,
    recompute_board_from_moves_validated,
)
from src.othello.rules import MoveApplied, apply_move, create_initial_board
from src.othello.square import Position

BLACK = PieceColor.BLACK
WHITE = PieceColor.WHITE


# --- VALIDATED REPLAY: HAPPY PATH ---
def test_empty_log() -> None:
    result = recompute_board_from_moves_validated([])
    assert result == ReplaySuccess(create_initial_board(), BLACK)

    state = derive_game_state([])
    assert not isinstance(state, ReplayFailure)
    assert state.board == create_initial_board()
    assert state.next_turn_color == BLACK
    assert state.is_finished is False


def test_opening(opening_moves: list[Move]) -> None:
    result = recompute_board_from_moves_validated(opening_moves)
    assert isinstance(result, ReplaySuccess)
    assert result.next_turn_color == WHITE
    assert result.board.count(BLACK) == 5
    assert result.board.count(WHITE) == 2
    assert result.board.cell(3, 3) == BLACK


def test_same_result_as_unchecked_replay(opening_moves: list[Move]) -> None:
    validated = recompute_board_from_moves_validated(opening_moves)
    assert isinstance(validated, ReplaySuccess)
    assert validated.board == recompute_board_from_moves(opening_moves)


def test_legitimate_pass_is_accepted() -> None:
    """Pretend black is stuck: the pass is accepted, the board stays and white moves next."""
    moves = [
        Move.pass_turn(1, BLACK),
        Move.placement(2, WHITE, 2, 4),
    ]
    with patch("src.othello.replay.can_pass", return_value=True) as mock_can_pass:
        result = recompute_board_from_moves_validated(moves)

    mock_can_pass.assert_called_once_with(create_initial_board(), BLACK)
    expected = apply_move(create_initial_board(), WHITE, 2, 4)
    assert isinstance(expected, MoveApplied)
    assert result == ReplaySuccess(expected.state.board, BLACK)


# --- VALIDATED REPLAY: FAILURES ---
def test_wrong_starting_color() -> None:
    result = recompute_board_from_moves_validated([Move.placement(1, WHITE, 2, 3)])
    assert isinstance(result, ReplayFailure)
    assert result.index == 1
    assert result.kind == ReplayErrorKind.TURN_MISMATCH
    assert "Expected BLACK" in result.message
    assert "WHITE" in result.message


def test_same_color_twice(opening_moves: list[Move]) -> None:
    moves = [opening_moves[0], Move.placement(2, BLACK, 2, 2)]
    result = recompute_board_from_moves_validated(moves)
    assert isinstance(result, ReplayFailure)
    assert result.index == 2
    assert result.kind == ReplayErrorKind.TURN_MISMATCH


def test_pass_while_legal_moves_exist() -> None:
    result = recompute_board_from_moves_validated([Move.pass_turn(1, BLACK)])
    assert isinstance(result, ReplayFailure)
    assert result.index == 1
    assert result.kind == ReplayErrorKind.INVALID_PASS_CLAIM
    assert "Pass move invalid" in result.message


def test_illegal_placement() -> None:
    result = recompute_board_from_moves_validated([Move.placement(1, BLACK, 0, 0)])
    assert isinstance(result, ReplayFailure)
    assert result.index == 1
    assert result.kind == ReplayErrorKind.ILLEGAL_MOVE
    assert result.message.startswith("Move 1:")


def test_placement_on_occupied_cell_later_in_the_log(opening_moves: list[Move]) -> None:
    moves = [*opening_moves, Move.placement(4, WHITE, 2, 3)]
    result = recompute_board_from_moves_validated(moves)
    assert isinstance(result, ReplayFailure)
    assert result.index == 4
    assert result.kind == ReplayErrorKind.ILLEGAL_MOVE


def test_out_of_range_position() -> None:
    """Move values are normally range checked by the record codec, the engine still refuses them."""
    move = Move(1, BLACK, Position(9, 3), is_pass=False)
    result = recompute_board_from_moves_validated([move])
    assert isinstance(result, ReplayFailure)
    assert result.kind == ReplayErrorKind.INVALID_POSITION


def test_fails_fast_at_first_problem() -> None:
    """Two problems in the log: only the first one is reported."""
    moves = [Move.placement(1, BLACK, 0, 0), Move.placement(2, BLACK, 0, 1)]
    result = recompute_board_from_moves_validated(moves)
    assert isinstance(result, ReplayFailure)
    assert result.index == 1


def test_input_log_is_not_modified(opening_moves: list[Move]) -> None:
    log = list(opening_moves)
    recompute_board_from_moves_validated(log)
    assert log == opening_moves


# --- PROPERTIES ---
def test_idempotent(finished_game: tuple[Game, list[Board]]) -> None:
    game, _ = finished_game
    first = recompute_board_from_moves_validated(game.moves)
    second = recompute_board_from_moves_validated(game.moves)
    assert isinstance(first, ReplaySuccess)
    assert first == second


def test_prefix_replay_matches_live_play(finished_game: tuple[Game, list[Board]]) -> None:
    """Replaying the first k moves gives exactly the board the live game had after k moves."""
    game, boards = finished_game
    assert len(boards) == len(game.moves) + 1

    for k in range(len(game.moves) + 1):
        result = recompute_board_from_moves_validated(game.moves[:k])
        assert isinstance(result, ReplaySuccess), k
        assert result.board == boards[k], k
        assert recompute_board_from_moves(game.moves[:k]) == boards[k], k


def test_full_log_gives_finished_state(finished_game: tuple[Game, list[Board]]) -> None:
    game, _ = finished_game
    state = derive_game_state(game.moves)
    assert not isinstance(state, ReplayFailure)
    assert state.is_finished
    assert state.board == game.board
    assert state.next_turn_color == game.next_turn_color


def test_game_state_from_replay_for_stuck_players() -> None:
    board = Board.from_text("\n".join(["BBBBBBBB"] * 7 + ["BBBBBBB."]))
    state = game_state_from_replay(ReplaySuccess(board, WHITE))
    assert state.is_finished


# --- UNCHECKED REPLAY ---
def test_unchecked_replay_skips_passes() -> None:
    """Passes never change the board"""
    moves = [Move.pass_turn(1, BLACK), Move.placement(2, WHITE, 2, 4)]
    expected = apply_move(create_initial_board(), WHITE, 2, 4)
    assert isinstance(expected, MoveApplied)
    assert recompute_board_from_moves(moves) == expected.state.board


def test_unchecked_replay_of_broken_log_raises() -> None:
    """An inconsistent trusted log is a bug in the caller, not a value to continue with."""
    with pytest.raises(ValueError, match="move 1"):
        recompute_board_from_moves([Move.placement(1, BLACK, 0, 0)])
