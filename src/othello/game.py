"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the move log of one game and is responsible for orchestrating the rules required to play a turn:
placing a stone, passing, and deciding when the game is over.
"""

from dataclasses import dataclass
from typing import Optional, Self, Sequence

from src.core.exceptions import GameStateError, IllegalMoveError, InvalidRecordError
from src.core.models import GameModel
from src.core.shared_types import PieceColor, Status
from src.othello.board import Board
from src.othello.moves import Move
from src.othello.replay import (
    FIRST_TO_MOVE,
    ReplayFailure,
    derive_game_state,
    recompute_board_from_moves,
)
from src.othello.rules import (
    GameResult,
    GameState,
    MoveRejected,
    apply_move,
    can_pass,
    compute_game_result,
    create_initial_board,
    get_legal_moves,
    is_game_finished,
)
from src.othello.square import Position


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    moves: list[Move]
    next_turn_color: PieceColor
    status: Status

    @classmethod
    def new_game(cls) -> Self:
        """Empty log: initial board, black to move."""
        return cls(
            board=create_initial_board(),
            moves=[],
            next_turn_color=FIRST_TO_MOVE,
            status=Status.IN_PROGRESS,
        )

    @classmethod
    def from_moves(cls, moves: Sequence[Move]) -> Self:
        """Rebuild a game from a log that came from outside this process. Every move is validated again."""
        state = derive_game_state(moves)
        if isinstance(state, ReplayFailure):
            raise InvalidRecordError(
                f"Invalid game record: {state.message}",
                index=state.index,
                kind=state.kind.value,
            )
        return cls(
            board=state.board,
            moves=list(moves),
            next_turn_color=state.next_turn_color,
            status=Status.FINISHED if state.is_finished else Status.IN_PROGRESS,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        try:
            moves = [Move.from_model(move_model) for move_model in model.moves]
        except ValueError as err:
            raise InvalidRecordError(f"Invalid game record: {err}") from err
        return cls.from_moves(moves)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses. Only the log: everything else is derived."""
        return GameModel(moves=[move.to_model() for move in self.moves])

    @property
    def state(self) -> GameState:
        return GameState(self.board, self.next_turn_color, self.is_finished)

    @property
    def is_finished(self) -> bool:
        return self.status == Status.FINISHED

    @property
    def result(self) -> Optional[GameResult]:
        """Piece counts and winner. None while the game is still being played."""
        if not self.is_finished:
            return None
        return compute_game_result(self.board)

    def legal_moves(self) -> list[Position]:
        """Where the player to move may place a stone (empty once the game is over)."""
        if self.is_finished:
            return []
        return get_legal_moves(self.board, self.next_turn_color)

    def must_pass(self) -> bool:
        return not self.is_finished and can_pass(self.board, self.next_turn_color)

    def place_stone(self, row: int, col: int) -> Move:
        """
        Attempt to place a stone for the player to move
        -----

        1. game must still be in progress
        2. the engine must accept the placement
        3. append to the log, update board and turn
        4. update game status
        """
        self._assert_in_progress()

        color = self.next_turn_color
        result = apply_move(self.board, color, row, col)
        if isinstance(result, MoveRejected):
            raise IllegalMoveError(result.message)

        move = Move.placement(self._next_move_number(), color, row, col)
        self.moves.append(move)
        self.board = result.state.board
        self.next_turn_color = result.state.next_turn_color
        self._update_game_status(previous_turn_color=color)
        return move

    def pass_turn(self) -> Move:
        """Record a pass. Only allowed when the player to move has no legal move."""
        self._assert_in_progress()

        color = self.next_turn_color
        if not can_pass(self.board, color):
            raise GameStateError(f"Cannot pass: {color.value} has legal moves")

        move = Move.pass_turn(self._next_move_number(), color)
        self.moves.append(move)
        self.next_turn_color = color.opponent
        self._update_game_status(previous_turn_color=color)
        return move

    def board_after(self, move_count: int) -> Board:
        """Board as it was after the first `move_count` moves (history view). Our own log, so no re-validation."""
        if not 0 <= move_count <= len(self.moves):
            raise ValueError(
                f"move_count must be between 0 and {len(self.moves)}, got {move_count}"
            )
        return recompute_board_from_moves(self.moves[:move_count])

    # -- PRIVATE HELPERS ---
    def _next_move_number(self) -> int:
        return len(self.moves) + 1

    def _assert_in_progress(self) -> None:
        if self.is_finished:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _update_game_status(self, previous_turn_color: PieceColor) -> None:
        """The turn has already been handed over: next_turn_color is the player about to move."""
        if is_game_finished(self.board, self.next_turn_color, previous_turn_color):
            self.status = Status.FINISHED
