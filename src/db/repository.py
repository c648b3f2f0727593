"""Protocol repository (implemented with SQL Alchemy; a file or in-memory version only needs these three methods)"""

from typing import Protocol

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence of the single "current game" slot"""

    def load_current(self) -> GameModel | None:
        """Get the stored game, if there is one."""
        ...

    def save_current(self, game: GameModel) -> GameModel:
        """Replace whatever is stored with this game and return the stored data."""
        ...

    def clear_current(self) -> GameModel | None:
        """Remove the stored game and return it (None if nothing was stored)."""
        ...
