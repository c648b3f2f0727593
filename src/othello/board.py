"""The Board is an immutable 8x8 grid. Every change produces a new Board (copy-on-write)."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Self

from src.core.shared_types import PieceColor
from src.othello.square import BOARD_SIZE, Position

Cell = Optional[PieceColor]
Row = tuple[Cell, ...]

CELL_TO_CHAR: dict[Cell, str] = {
    None: ".",
    PieceColor.BLACK: "B",
    PieceColor.WHITE: "W",
}
CHAR_TO_CELL: dict[str, Cell] = {value: key for key, value in CELL_TO_CHAR.items()}


@dataclass(frozen=True)
class Board:
    rows: tuple[Row, ...]

    def __post_init__(self) -> None:
        if len(self.rows) != BOARD_SIZE or any(
            len(row) != BOARD_SIZE for row in self.rows
        ):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}.")

    @classmethod
    def empty(cls) -> Self:
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Construct a board from a compact text diagram.

        One line (or '/'-separated chunk) per row, top row first, one character per cell:
        'B' black, 'W' white, '.' empty. Whitespace around lines is ignored.
        ex. the standard starting position:
        ........
        ........
        ........
        ...WB...
        ...BW...
        ........
        ........
        ........
        """
        lines = [line.strip() for line in text.replace("/", "\n").splitlines()]
        lines = [line for line in lines if line]
        unknown = {char for line in lines for char in line} - set(CHAR_TO_CELL)
        if unknown:
            raise ValueError(f"Unknown cell character(s): {sorted(unknown)}")
        rows = tuple(tuple(CHAR_TO_CELL[char] for char in line) for line in lines)
        return cls(rows)

    def to_text(self) -> str:
        return "\n".join(
            "".join(CELL_TO_CHAR[cell] for cell in row) for row in self.rows
        )

    def __str__(self) -> str:
        return self.to_text()

    def cell(self, row: int, col: int) -> Cell:
        return self.rows[row][col]

    def at(self, position: Position) -> Cell:
        return self.rows[position.row][position.col]

    def with_cells(self, positions: Iterable[Position], color: PieceColor) -> Self:
        """New board with the given positions set to color. This board is left as it was."""
        grid = [list(row) for row in self.rows]
        for position in positions:
            grid[position.row][position.col] = color
        return type(self)(tuple(tuple(row) for row in grid))

    def positions(self) -> Iterator[Position]:
        """All 64 positions, row-major"""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                yield Position(row, col)

    def empty_positions(self) -> list[Position]:
        return [position for position in self.positions() if self.at(position) is None]

    def is_full(self) -> bool:
        return all(cell is not None for row in self.rows for cell in row)

    def count(self, color: PieceColor) -> int:
        return sum(1 for row in self.rows for cell in row if cell == color)
