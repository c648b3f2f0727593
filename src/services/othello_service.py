"""Orchestration of the single-device game: domain layer (Game) <-> persistence (GameRepository) <-> Record Format codec."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, Optional

from pydantic import ValidationError

from src.api.models import (
    GameResponse,
    GameResultResponse,
    ImportPreviewResponse,
    MoveRequest,
)
from src.api.record_format import (
    check_record_size,
    describe_validation_error,
    model_to_record,
    parse_record,
    record_size_bytes,
    record_to_model,
    serialize_record,
)
from src.core.config import Settings, get_settings
from src.core.exceptions import (
    GameError,
    InvalidRecordError,
    RecordFormatError,
)
from src.core.logging_config import configure_logging
from src.core.models import GameModel
from src.db.database import get_db
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.othello.game import Game

logger = logging.getLogger(__name__)

RECORD_FILE_ENCODING = "utf-8"


@dataclass(frozen=True)
class ImportPreview:
    """A record that passed schema and rule validation, waiting for the user to confirm it replaces the current game."""

    game: Game
    record_size_bytes: int


class OthelloService:
    """Orchestration of layers for the Othello game."""

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings or get_settings()

    # -- Game flow ---
    def initialize_game(self) -> GameResponse:
        """
        Start-up: restore the stored game, or start a fresh one when nothing is stored.
        ----
        The fresh game is not written to storage until the first action is taken.
        """
        return self._create_game_response(self._load_game())

    def get_game_state(self) -> GameResponse:
        return self._create_game_response(self._load_game())

    def place_stone(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt for the player whose turn it is."""

        # Retrieve and re-validate the stored log
        game = self._load_game()

        # Attempt the move (raises if not allowed; nothing is saved in that case)
        move = game.place_stone(request.row, request.col)
        logger.info("Placed %s", move.describe())

        # store in repository
        self._save(game)
        return self._create_game_response(game)

    def pass_turn(self) -> GameResponse:
        """Pass on behalf of the player whose turn it is. Only allowed without legal moves."""
        game = self._load_game()
        move = game.pass_turn()
        logger.info("Passed %s", move.describe())
        self._save(game)
        return self._create_game_response(game)

    def start_new_game(self) -> GameResponse:
        """Throw away the current game and store an empty log."""
        game = Game.new_game()
        self._save(game)
        logger.info("Started a new game")
        return self._create_game_response(game)

    def board_history(self) -> list[list[str]]:
        """Board after every move of the current game (index 0 is the initial board)."""
        game = self._load_game()
        return [
            game.board_after(count).to_text().splitlines()
            for count in range(len(game.moves) + 1)
        ]

    # -- Export ---
    def export_record(self) -> str:
        """Record Format JSON of the current game."""
        game = self._load_game()
        return serialize_record(game.to_model(), self.settings.max_record_bytes)

    def export_record_to_file(self, path: Path) -> Path:
        text = self.export_record()
        try:
            path.write_text(text, encoding=RECORD_FILE_ENCODING)
        except OSError as err:
            raise RecordFormatError(f"File write error: {err}") from err
        logger.info("Exported record to %s", path)
        return path

    # -- Import ---
    def prepare_import(self, text: str) -> ImportPreview:
        """
        Stage a record for import
        ----

        1. size limit
        2. Record Format schema
        3. rules of the game (validated replay)
        The current game is not touched.
        """
        record = parse_record(text, self.settings.max_record_bytes)
        try:
            game = Game.from_model(record_to_model(record))
        except InvalidRecordError as err:
            logger.warning("Import rejected: %s", err)
            raise InvalidRecordError(
                f"Rule validation failed: {err}", index=err.index, kind=err.kind
            ) from err
        return ImportPreview(game=game, record_size_bytes=record_size_bytes(text))

    def prepare_import_from_file(self, path: Path) -> ImportPreview:
        """Same as prepare_import, but the size limit is checked before the file is read."""
        try:
            check_record_size(path.stat().st_size, self.settings.max_record_bytes)
            text = path.read_text(encoding=RECORD_FILE_ENCODING)
        except (OSError, UnicodeDecodeError) as err:
            raise RecordFormatError(f"File read error: {err}") from err
        return self.prepare_import(text)

    def import_record(self, preview: ImportPreview) -> GameResponse:
        """The user confirmed: the staged game replaces the current one."""
        self._save(preview.game)
        logger.info("Imported record with %d moves", len(preview.game.moves))
        return self._create_game_response(preview.game)

    def preview_response(self, preview: ImportPreview) -> ImportPreviewResponse:
        return ImportPreviewResponse(
            game=self._create_game_response(preview.game),
            record_size_bytes=preview.record_size_bytes,
            move_count=len(preview.game.moves),
        )

    # -- Internal helpers --
    def _load_game(self) -> Game:
        """Stored data crossed a trust boundary: check the schema and replay with validation."""
        stored_model = self.repo.load_current()
        if stored_model is None:
            return Game.new_game()
        return self._restore(stored_model)

    def _restore(self, model: GameModel) -> Game:
        try:
            model_to_record(model)
        except ValidationError as err:
            raise InvalidRecordError(
                f"Invalid record format: {describe_validation_error(err)}"
            ) from err
        try:
            return Game.from_model(model)
        except GameError:
            logger.warning("Stored game failed validation")
            raise

    def _save(self, game: Game) -> None:
        self.repo.save_current(game.to_model())

    def _create_game_response(self, game: Game) -> GameResponse:
        """Convert a Game into a GameResponse."""
        result = game.result
        return GameResponse(
            board=game.board.to_text().splitlines(),
            next_turn_color=game.next_turn_color,
            is_finished=game.is_finished,
            legal_moves=[position.to_algebraic() for position in game.legal_moves()],
            must_pass=game.must_pass(),
            move_history=[move.describe() for move in game.moves],
            result=(
                GameResultResponse(
                    black_count=result.black_count,
                    white_count=result.white_count,
                    winner=result.winner,
                )
                if result
                else None
            ),
        )


@contextmanager
def create_service(
    settings: Optional[Settings] = None,
) -> Generator[OthelloService, None, None]:
    """
    Wire the service to the configured database (the entry point for a front end).
    The database session is closed when the block exits.

    ex)
    with create_service() as service:
        service.place_stone(MoveRequest(row=2, col=3))
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    db_sessions = get_db(settings)
    db = next(db_sessions)
    try:
        yield OthelloService(SQLGameRepository(db), settings)
    finally:
        db_sessions.close()
