"""Test helper boards and a deterministic self-play loop, shared by several test modules."""

from src.othello.board import Board
from src.othello.game import Game

EMPTY_ROW = "........"

# Every cell black, except the bottom-right corner: nobody can move, but the board is not full.
BOTH_CANNOT_MOVE = "\n".join(["BBBBBBBB"] * 7 + ["BBBBBBB."])

# Black cannot flank the white corner piece, white can play at (0, 2).
BLACK_MUST_PASS = "\n".join(["WB......"] + [EMPTY_ROW] * 7)


def play_out(game: Game, max_turns: int = 200) -> list[Board]:
    """
    Deterministic self-play: always take the first legal move (row-major), pass when forced.
    Returns the board after every turn, starting with the board before the first one.
    """
    boards = [game.board]
    for _ in range(max_turns):
        if game.is_finished:
            break
        if game.must_pass():
            game.pass_turn()
        else:
            first = game.legal_moves()[0]
            game.place_stone(first.row, first.col)
        boards.append(game.board)
    return boards
