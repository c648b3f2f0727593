"""
A position on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Othello is always played on 8x8.
BOARD_SIZE = 8
COLUMN_LETTERS = "abcdefgh"


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based (row, col). Ordering is row-major, which is also the order legal moves are listed in."""

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, name: str) -> Position:
        """Othello notation: 'a1' - 'h8' get converted to (0,0) - (7,7). The letter is the column, the digit the row."""
        if len(name) != 2 or name[0].lower() not in COLUMN_LETTERS or not name[1].isdigit():
            raise ValueError(f"Cannot interpret {name!r} as a square name.")
        col = COLUMN_LETTERS.index(name[0].lower())
        row = int(name[1]) - 1
        if not is_within_bounds(row, col):
            raise ValueError(f"Square {name!r} is not on the board.")
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{COLUMN_LETTERS[self.col]}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return is_within_bounds(self.row, self.col)


def is_within_bounds(row: int, col: int) -> bool:
    return (0 <= row < BOARD_SIZE) and (0 <= col < BOARD_SIZE)
