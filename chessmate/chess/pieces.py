"""Defines the types of chess pieces"""

from dataclasses import dataclass
from typing import Self

from chessmate.core.exceptions import InvalidRequestError
from chessmate.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


# Material values used by the computer opponent. The king gets a huge value so capturing it always wins the comparison.
PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 100,
}


@dataclass(frozen=True)
class Piece:
    color: Color
    type: PieceType

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.type]

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        if character.lower() not in FEN_TO_PIECE:
            raise InvalidRequestError(f"Unknown piece code: {character!r}")
        color = Color.WHITE if character.isupper() else Color.BLACK
        return cls(color, FEN_TO_PIECE[character.lower()])

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type]
        )

    def promoted(self) -> Self:
        """Pawns always promote to a queen of the same color"""
        return type(self)(self.color, PieceType.QUEEN)
