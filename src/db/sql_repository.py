"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from dataclasses import asdict
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameModel, MoveModel
from src.db.schema import CURRENT_GAME_ID, DBCurrentGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def load_current(self) -> GameModel | None:
        """Get the stored game, if there is one."""
        try:
            game_db = self._fetch_current()
        except SQLAlchemyError as err:
            raise RepositoryError(f"Storage load error: {err}") from err
        if game_db is None:
            logger.debug("No stored game")
            return None
        return self._to_model(game_db)

    def save_current(self, game: GameModel) -> GameModel:
        """Replace whatever is stored with this game and return the stored data."""
        try:
            game_db = self._fetch_current()
            if game_db is None:
                game_db = DBCurrentGame(id=CURRENT_GAME_ID)
                self.db.add(game_db)
            game_db.format_version = game.format_version
            game_db.moves = self._moves_to_json(game)
            self.db.commit()
            self.db.refresh(game_db)
        except SQLAlchemyError as err:
            self.db.rollback()
            raise RepositoryError(f"Storage save error: {err}") from err
        logger.info("Saved current game (%d moves)", len(game.moves))
        return self._to_model(game_db)

    def clear_current(self) -> GameModel | None:
        """Remove the stored game and return it (None if nothing was stored)."""
        try:
            game_db = self._fetch_current()
            if game_db is None:
                return None
            game_model = self._to_model(game_db)
            self.db.delete(game_db)
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            raise RepositoryError(f"Failed to clear storage: {err}") from err
        logger.info("Cleared current game")
        return game_model

    def _fetch_current(self) -> DBCurrentGame | None:
        query = select(DBCurrentGame).where(DBCurrentGame.id == CURRENT_GAME_ID)
        return self.db.scalar(query)

    def _moves_to_json(self, game: GameModel) -> list[dict[str, Any]]:
        return [asdict(move) for move in game.moves]

    def _to_model(self, game_db: DBCurrentGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        try:
            moves = [MoveModel(**move) for move in game_db.moves]
        except TypeError as err:
            raise RepositoryError(f"Stored game is corrupt: {err}") from err
        return GameModel(moves=moves, format_version=game_db.format_version)
