"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chessmate.chess.board import Board
from chessmate.chess.pieces import Piece
from chessmate.chess.square import Square
from chessmate.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def build_board() -> Callable[[dict[str, str]], Board]:
    """
    Call the inner function with {square name: FEN piece character} to get an otherwise empty board.

    ex. build_board({"e1": "K", "e8": "k"}) : only the two kings on their usual squares.
    """

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.empty()
        for square_name, fen_char in pieces.items():
            board.place_piece(Piece.from_fen(fen_char), Square.from_algebraic(square_name))
        return board

    return _create_board
