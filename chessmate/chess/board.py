"""The Game board: where the pieces stand. Pure data plus coordinate checks; the rules live in moves.py / rules.py"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Self

from chessmate.chess.pieces import Color, Piece, PieceType
from chessmate.chess.square import BOARD_DIMENSIONS, Square, all_squares
from chessmate.core.exceptions import InvalidRequestError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_POSITION = "/".join(["8"] * 8)

Grid = list[list[Optional[Piece]]]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls([[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])])

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first group is the 8th rank (row 0 of the grid): black pieces, a-file first
        * black pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * rank 1 holds the white pieces
        """
        rows = fen_str.split("/")
        if len(rows) != BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"Board placement needs {BOARD_DIMENSIONS[0]} ranks, got {len(rows)}: {fen_str!r}"
            )

        grid: Grid = []
        for fen_one_rank in rows:
            row: list[Optional[Piece]] = []
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    row.extend([None] * int(character))
                else:
                    row.append(Piece.from_fen(character))
            if len(row) != BOARD_DIMENSIONS[1]:
                raise InvalidRequestError(
                    f"Rank {fen_one_rank!r} does not describe {BOARD_DIMENSIONS[1]} squares."
                )
            grid.append(row)
        return cls(grid)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    def _row_to_fen(self, row: list[Optional[Piece]]) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- QUERIES ---
    @staticmethod
    def is_on_board(square: Square) -> bool:
        return square.is_on_board()

    def piece_at(self, square: Square) -> Optional[Piece]:
        """Empty and off-board squares both hold no piece"""
        if not square.is_on_board():
            return None
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece_at(square) is None

    def squares_of(self, color: Color) -> list[Square]:
        """Squares holding a piece of the given color, in scan order"""
        return [
            square
            for square in all_squares()
            if (piece := self.piece_at(square)) is not None and piece.color == color
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        king = Piece(color, PieceType.KING)
        return next(
            (square for square in all_squares() if self.piece_at(square) == king), None
        )

    def count_pieces(self, color: Color) -> int:
        return len(self.squares_of(color))

    # --- MUTATIONS ---
    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        """Put a piece on a square (None clears it). Whatever stood there is overwritten."""
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.piece_at(square)
        self.place_piece(None, square)
        return piece

    @contextmanager
    def temporary_move(self, from_square: Square, to_square: Square) -> Iterator[None]:
        """
        Make a move on this board for the duration of the with-block only.

        Both squares get their previous contents back on every exit path, also when the block raises.
        """
        moving_piece = self.piece_at(from_square)
        target_piece = self.piece_at(to_square)
        self.place_piece(moving_piece, to_square)
        self.place_piece(None, from_square)
        try:
            yield
        finally:
            self.place_piece(moving_piece, from_square)
            self.place_piece(target_piece, to_square)
