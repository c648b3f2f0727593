"""
Record Format codec
-----

Purpose: export/import/restore the "current game" as UTF-8 JSON text (moves only, formatVersion=1).
Schema-level checks live here (field types, ranges, moveNumber contiguity). Whether the moves obey the rules
of the game is checked later by the validated replay in the domain layer.
"""

import logging

from pydantic import ValidationError

from src.api.models import GameRecord
from src.core.config import DEFAULT_MAX_RECORD_BYTES
from src.core.exceptions import RecordFormatError
from src.core.models import GameModel, MoveModel

logger = logging.getLogger(__name__)

JSON_INDENT = 2


def record_size_bytes(text: str) -> int:
    try:
        return len(text.encode("utf-8"))
    except UnicodeEncodeError as err:
        raise RecordFormatError(f"Record is not valid UTF-8 text: {err}") from err


def check_record_size(size: int, max_bytes: int = DEFAULT_MAX_RECORD_BYTES) -> None:
    if size > max_bytes:
        raise RecordFormatError(
            f"Record size exceeds limit: {size} bytes > {max_bytes} bytes"
        )


def parse_record(text: str, max_bytes: int = DEFAULT_MAX_RECORD_BYTES) -> GameRecord:
    """Parse JSON text into a GameRecord. Raises RecordFormatError on size, JSON or schema problems."""
    check_record_size(record_size_bytes(text), max_bytes)
    try:
        return GameRecord.model_validate_json(text)
    except ValidationError as err:
        message = describe_validation_error(err)
        logger.warning("Rejected record: %s", message)
        raise RecordFormatError(f"Record validation failed: {message}") from err


def serialize_record(game: GameModel, max_bytes: int = DEFAULT_MAX_RECORD_BYTES) -> str:
    """JSON text for the given game. The record is validated before it is written out, like it will be when read back."""
    try:
        record = model_to_record(game)
    except ValidationError as err:
        raise RecordFormatError(
            f"Validation failed before save: {describe_validation_error(err)}"
        ) from err
    text = record.model_dump_json(by_alias=True, indent=JSON_INDENT)
    check_record_size(record_size_bytes(text), max_bytes)
    return text


def record_to_model(record: GameRecord) -> GameModel:
    return GameModel(
        moves=[
            MoveModel(
                move_number=move.move_number,
                color=move.color.value,
                row=move.row,
                col=move.col,
                is_pass=move.is_pass,
            )
            for move in record.moves
        ],
        format_version=record.format_version,
    )


def model_to_record(game: GameModel) -> GameRecord:
    """Raises pydantic's ValidationError if the model would not make a valid record."""
    return GameRecord.model_validate(
        {
            "formatVersion": game.format_version,
            "moves": [
                {
                    "moveNumber": move.move_number,
                    "color": move.color,
                    "row": move.row,
                    "col": move.col,
                    "isPass": move.is_pass,
                }
                for move in game.moves
            ],
        }
    )


def describe_validation_error(err: ValidationError) -> str:
    """First problem found, with its location in the record, ex. 'moves.0.row: ...'"""
    first = err.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    message = first["msg"]
    return f"{location}: {message}" if location else message
