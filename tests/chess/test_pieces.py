"""Unit tests for chessmate/chess/pieces.py"""

import pytest

from chessmate.chess.pieces import (
    FEN_TO_PIECE,
    PIECE_TO_FEN,
    PIECE_VALUES,
    Color,
    Piece,
    PieceType,
)
from chessmate.core.exceptions import InvalidRequestError


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("char", ["x", "1", "", "Kk"])
def test_unknown_piece_code(char: str) -> None:
    with pytest.raises(InvalidRequestError):
        Piece.from_fen(char)


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_fen(piece_type: PieceType) -> None:
    assert Piece(Color.WHITE, piece_type).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece(Color.BLACK, piece_type).to_fen() == PIECE_TO_FEN[piece_type]


@pytest.mark.parametrize(
    "piece_type, value",
    [
        (PieceType.PAWN, 1),
        (PieceType.KNIGHT, 3),
        (PieceType.BISHOP, 3),
        (PieceType.ROOK, 5),
        (PieceType.QUEEN, 9),
        (PieceType.KING, 100),
    ],
)
def test_piece_values(piece_type: PieceType, value: int) -> None:
    assert PIECE_VALUES[piece_type] == value
    assert Piece(Color.BLACK, piece_type).value == value


@pytest.mark.parametrize("color", list(Color))
def test_promotion_to_queen(color: Color) -> None:
    """Promotion creates a queen of the same color and leaves the (immutable) pawn alone"""
    pawn = Piece(color, PieceType.PAWN)
    queen = pawn.promoted()
    assert queen == Piece(color, PieceType.QUEEN)
    assert pawn.type == PieceType.PAWN


def test_opponent_color() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE
