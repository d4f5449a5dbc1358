"""Unit tests for chessmate/chess/board.py"""

from typing import Callable

import pytest

from chessmate.chess.board import EMPTY_POSITION, STARTING_POSITION, Board
from chessmate.chess.pieces import Color, Piece, PieceType
from chessmate.chess.square import Square
from chessmate.core.exceptions import InvalidRequestError

BACK_RANK = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


# -- CREATION LOGIC ---
def test_creating_board_in_starting_position() -> None:
    """Row 0 holds the black pieces, row 7 the white pieces, pawns in front of them"""
    board = Board.starting_position()

    for col, piece_type in enumerate(BACK_RANK):
        assert board.piece_at(Square(0, col)) == Piece(Color.BLACK, piece_type)
        assert board.piece_at(Square(1, col)) == Piece(Color.BLACK, PieceType.PAWN)
        assert board.piece_at(Square(6, col)) == Piece(Color.WHITE, PieceType.PAWN)
        assert board.piece_at(Square(7, col)) == Piece(Color.WHITE, piece_type)

    for row in range(2, 6):
        for col in range(8):
            assert board.piece_at(Square(row, col)) is None


def test_creating_board_after_e4() -> None:
    """White moved the pawn from e2 to e4"""
    board = Board.from_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR")
    assert board.piece_at(Square.from_algebraic("e4")) == Piece(Color.WHITE, PieceType.PAWN)
    assert board.piece_at(Square.from_algebraic("e2")) is None
    assert board.count_pieces(Color.WHITE) == 16
    assert board.count_pieces(Color.BLACK) == 16


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_POSITION,
        EMPTY_POSITION,
        "2kr1b1r/p1p1pppp/2p2n2/3q2B1/6Q1/2NP4/PPP2PPP/R4RK1",
        "7k/5Q2/6K1/8/8/8/8/8",
    ],
)
def test_fen_round_trip(fen: str) -> None:
    assert Board.from_fen(fen).to_fen() == fen


@pytest.mark.parametrize(
    "fen",
    [
        "8/8/8/8/8/8/8",  # only 7 ranks
        "9/8/8/8/8/8/8/8",  # rank too long
        "7/8/8/8/8/8/8/8",  # rank too short
        "rnbqkbnx/8/8/8/8/8/8/8",  # unknown piece
    ],
)
def test_invalid_fen(fen: str) -> None:
    with pytest.raises(InvalidRequestError):
        Board.from_fen(fen)


# -- QUERIES ---
def test_piece_at_off_board_square_is_none() -> None:
    board = Board.starting_position()
    assert board.piece_at(Square(-1, 0)) is None
    assert board.piece_at(Square(0, 8)) is None
    assert not board.is_on_board(Square(8, 8))
    assert board.is_on_board(Square(7, 7))


def test_squares_of_color_in_scan_order() -> None:
    board = Board.starting_position()
    black_squares = board.squares_of(Color.BLACK)
    assert black_squares[0] == Square(0, 0)
    assert black_squares[-1] == Square(1, 7)
    assert len(black_squares) == 16
    assert all(square.row in (6, 7) for square in board.squares_of(Color.WHITE))


def test_locate_king(build_board: Callable[[dict[str, str]], Board]) -> None:
    board = Board.starting_position()
    assert board.locate_king(Color.WHITE) == Square.from_algebraic("e1")
    assert board.locate_king(Color.BLACK) == Square.from_algebraic("e8")

    no_black_king = build_board({"d4": "K"})
    assert no_black_king.locate_king(Color.BLACK) is None


# -- MUTATIONS ---
def test_place_and_remove_piece() -> None:
    board = Board.empty()
    d4 = Square.from_algebraic("d4")
    queen = Piece(Color.WHITE, PieceType.QUEEN)

    board.place_piece(queen, d4)
    assert board.piece_at(d4) == queen
    assert board.remove_piece(d4) == queen
    assert board.is_empty(d4)
    assert board.remove_piece(d4) is None


def test_temporary_move_is_reverted() -> None:
    """Inside the with-block the move is visible, afterwards the board is back to what it was"""
    board = Board.from_fen("4k3/8/8/3p4/4P3/8/8/4K3")
    e4 = Square.from_algebraic("e4")
    d5 = Square.from_algebraic("d5")
    fen_before = board.to_fen()

    with board.temporary_move(e4, d5):
        assert board.piece_at(d5) == Piece(Color.WHITE, PieceType.PAWN)
        assert board.piece_at(e4) is None

    assert board.to_fen() == fen_before


def test_temporary_move_is_reverted_on_error() -> None:
    """The board is shared state: an exception inside the block must not leave the move on the board"""
    board = Board.from_fen("4k3/8/8/3p4/4P3/8/8/4K3")
    fen_before = board.to_fen()

    with pytest.raises(RuntimeError):
        with board.temporary_move(Square.from_algebraic("e4"), Square.from_algebraic("d5")):
            raise RuntimeError("query failed")

    assert board.to_fen() == fen_before
