"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import PieceColor
from src.db.schema import Base
from src.othello.board import Board
from src.othello.game import Game
from src.othello.moves import Move
from tests.helpers import EMPTY_ROW, play_out

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def board_from_rows() -> Callable[..., Board]:
    """Call the inner function with the rows of the board (top row first). Short rows are padded, missing rows are empty."""

    def _create_board(*rows: str) -> Board:
        all_rows = [row.ljust(8, ".") for row in rows] + [EMPTY_ROW] * (8 - len(rows))
        return Board.from_text("\n".join(all_rows))

    return _create_board


@pytest.fixture
def finished_game() -> tuple[Game, list[Board]]:
    """A complete game played by the engine itself, together with every intermediate board."""
    game = Game.new_game()
    boards = play_out(game)
    return game, boards


@pytest.fixture
def opening_moves() -> list[Move]:
    """A short legal opening: d3 (black), c3 (white), c4 (black)"""
    return [
        Move.placement(1, PieceColor.BLACK, 2, 3),
        Move.placement(2, PieceColor.WHITE, 2, 2),
        Move.placement(3, PieceColor.BLACK, 3, 2),
    ]
