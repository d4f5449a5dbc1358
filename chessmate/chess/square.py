"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from chessmate.core.exceptions import InvalidRequestError

# Chess board is always 8x8 (rows, cols)
BOARD_DIMENSIONS = (8, 8)
FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True)
class Square:
    """
    Zero-based (row, col) coordinates.

    Row 0 is black's back rank (the 8th rank), row 7 is white's back rank (the 1st rank).
    Col 0 is the a-file.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' gets converted to (0, 0), 'h1' to (7, 7)"""
        if len(sq) != 2 or sq[0] not in FILES or sq[1] not in RANKS:
            raise InvalidRequestError(f"Cannot interpret {sq!r} as a square name.")
        return cls(BOARD_DIMENSIONS[0] - RANKS.index(sq[1]) - 1, FILES.index(sq[0]))

    def to_algebraic(self) -> str:
        return f"{chr(ord('a') + self.col)}{BOARD_DIMENSIONS[0] - self.row}"

    def is_on_board(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square reached by stepping (d_row, d_col). Might be off the board."""
        return Square(self.row + d_row, self.col + d_col)


def all_squares() -> list[Square]:
    """Scan order used everywhere a whole board is visited: top row to bottom row, left to right."""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
