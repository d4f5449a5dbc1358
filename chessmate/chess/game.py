"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the board and everything that changes while playing: whose turn it is, the move history and the captured pieces.

Two levels of API:
* The rules engine operations (`legal_moves`, `apply_move`, `undo_last`, `is_in_check`, `is_game_over`, `select_move`).
  These do exactly one thing; e.g. `apply_move` neither validates the move nor switches the turn.
* The session operations used by the service (`play_move`, `play_computer_move`, `undo`, `hint`, ...),
  which check turns/legality and keep the status up to date by combining the above.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Self

from chessmate.chess import ai, rules
from chessmate.chess.board import Board
from chessmate.chess.moves import Move
from chessmate.chess.pieces import Color, Piece
from chessmate.chess.square import Square
from chessmate.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
    NotYourTurnError,
)
from chessmate.core.models import GameModel
from chessmate.core.shared_types import Difficulty, GameMode, Status

_log = logging.getLogger(__name__)

# In AI mode, the human always plays white
COMPUTER_COLOR = Color.BLACK


def _no_captures() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    color_to_move: Color = Color.WHITE
    history: list[Move] = field(default_factory=list)
    captured: dict[Color, list[Piece]] = field(default_factory=_no_captures)
    mode: GameMode = GameMode.PVP
    difficulty: Difficulty = Difficulty.MEDIUM
    status: Status = Status.IN_PROGRESS
    selected_square: Optional[Square] = None

    @classmethod
    def new_game(
        cls, mode: GameMode = GameMode.PVP, difficulty: Difficulty = Difficulty.MEDIUM
    ) -> Self:
        """Standard starting position, white to move, nothing played / captured yet."""
        return cls(Board.starting_position(), mode=mode, difficulty=difficulty)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        try:
            color_to_move = Color(model.color_to_move)
            mode = GameMode(model.mode)
            difficulty = Difficulty(model.difficulty)
            status = Status(model.status)
            captured = {
                Color(color): [Piece.from_fen(code) for code in codes]
                for color, codes in model.captured_pieces.items()
            }
            board = Board.from_fen(model.board)
            history = [Move.from_record(record) for record in model.move_history]
            selected_square = (
                Square.from_algebraic(model.selected_square)
                if model.selected_square
                else None
            )
        except (ValueError, InvalidRequestError) as e:
            raise GameStateError(f"Invalid stored game: {e}") from e

        return cls(
            board=board,
            color_to_move=color_to_move,
            history=history,
            captured={**_no_captures(), **captured},
            mode=mode,
            difficulty=difficulty,
            status=status,
            selected_square=selected_square,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_fen(),
            color_to_move=str(self.color_to_move),
            move_history=[move.to_record() for move in self.history],
            captured_pieces={
                str(color): [piece.to_fen() for piece in pieces]
                for color, pieces in self.captured.items()
            },
            mode=str(self.mode),
            difficulty=str(self.difficulty),
            status=str(self.status),
            winner=str(self.winner) if self.winner else None,
            selected_square=(
                self.selected_square.to_algebraic() if self.selected_square else None
            ),
        )

    @property
    def winner(self) -> Optional[Color]:
        """
        Whoever is to move in a finished game could not move. The opponent wins, also in case of a stalemate.
        """
        if self.status != Status.FINISHED:
            return None
        return self.color_to_move.opponent

    @property
    def in_check(self) -> bool:
        """Is the side to move in check right now"""
        return self.is_in_check(self.color_to_move)

    @property
    def is_computer_turn(self) -> bool:
        return (
            self.mode == GameMode.AI
            and self.status == Status.IN_PROGRESS
            and self.color_to_move == COMPUTER_COLOR
        )

    # --- RULES ENGINE ---
    def legal_moves(self, square: Square) -> list[Move]:
        return rules.legal_moves(self.board, square)

    def legal_destinations(self, square: Square) -> set[Square]:
        return rules.legal_destinations(self.board, square)

    def is_legal_move(self, from_square: Square, to_square: Square) -> bool:
        return rules.is_legal_move(self.board, from_square, to_square)

    def all_legal_moves(self, color: Color) -> list[Move]:
        return rules.all_legal_moves(self.board, color)

    def is_in_check(self, color: Color) -> bool:
        return rules.is_in_check(self.board, color)

    def has_any_legal_move(self, color: Color) -> bool:
        return rules.has_any_legal_move(self.board, color)

    def is_game_over(self, color: Color) -> bool:
        return rules.is_game_over(self.board, color)

    def apply_move(self, from_square: Square, to_square: Square) -> Move:
        """
        Commit a move to the board.
        -----

        Caller makes sure the move is legal (see `is_legal_move()`), it is not checked again here.

        1. a piece standing on the target square is added to the captured pieces of its color
        2. move the piece (clearing the square it came from)
        3. a pawn reaching the opponent's back rank becomes a queen
        4. record the move (with the piece as it was before promoting) in the history

        The turn does NOT switch, see `switch_turn()`.
        """
        piece = self.board.piece_at(from_square)
        if piece is None:
            raise IllegalMoveError(f"No piece to move on {from_square.to_algebraic()}")

        move = Move(from_square, to_square, piece, self.board.piece_at(to_square))
        if move.captured is not None:
            self.captured[move.captured.color].append(move.captured)

        self.board.place_piece(piece, to_square)
        self.board.remove_piece(from_square)

        if move.is_promotion:
            self.board.place_piece(piece.promoted(), to_square)

        self.history.append(move)
        return move

    def undo_last(self) -> Optional[Move]:
        """
        Take back the most recent move. Nothing happens if no move was made yet.

        NOTE: the piece that goes back is the one currently standing on the target square.
        So a promoted pawn returns as a queen.
        """
        if not self.history:
            return None

        move = self.history.pop()
        self.board.place_piece(self.board.piece_at(move.to_square), move.from_square)
        self.board.place_piece(move.captured, move.to_square)

        if move.captured is not None:
            self._remove_last_captured(move.captured)
        return move

    def select_move(
        self,
        color: Color,
        difficulty: Optional[Difficulty] = None,
        rng: Optional[random.Random] = None,
    ) -> Optional[Move]:
        """Let the computer pick one of the legal moves of `color` (difficulty of this game unless specified)"""
        return ai.select_move(
            self.all_legal_moves(color), difficulty or self.difficulty, rng
        )

    def switch_turn(self) -> None:
        self.color_to_move = self.color_to_move.opponent

    # --- SESSION ---
    def can_select(self, square: Square) -> bool:
        """A human can pick up a piece of the side to move while the game is running"""
        piece = self.board.piece_at(square)
        return (
            self.status == Status.IN_PROGRESS
            and not self.is_computer_turn
            and piece is not None
            and piece.color == self.color_to_move
        )

    def select_square(self, square: Square) -> list[Square]:
        """
        Select one of your own pieces. Returns the squares it can move to (to be highlighted by a frontend).

        Selecting the selected square again deselects it (no squares returned).
        """
        self._assert_in_progress()
        if square == self.selected_square:
            self.deselect()
            return []
        if not self.can_select(square):
            raise NotYourTurnError(
                f"{square.to_algebraic()} does not hold a piece of {self.color_to_move}."
            )
        self.selected_square = square
        return [move.to_square for move in self.legal_moves(square)]

    def deselect(self) -> None:
        self.selected_square = None

    def play_move(self, from_square: Square, to_square: Square) -> Move:
        """
        Attempt to make a move for the side to move
        -----

        1. the game must be in progress and it must be a human's turn
        2. the piece must belong to the side to move and the move must be legal
        3. apply, switch turns, check if the new side to move can still move
        """
        self._assert_in_progress()
        if self.is_computer_turn:
            raise NotYourTurnError("Waiting for the computer to make a move first.")

        piece = self.board.piece_at(from_square)
        if piece is None:
            raise IllegalMoveError(f"No piece on {from_square.to_algebraic()}")
        if piece.color != self.color_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.color_to_move} to make a move first."
            )
        if not self.is_legal_move(from_square, to_square):
            raise IllegalMoveError(
                f"Move not allowed: {from_square.to_algebraic()}-{to_square.to_algebraic()}"
            )

        return self._commit(from_square, to_square)

    def play_computer_move(self, rng: Optional[random.Random] = None) -> Optional[Move]:
        """The computer moves for the side to move. None when it has no move (game over)."""
        self._assert_in_progress()
        move = self.select_move(self.color_to_move, rng=rng)
        if move is None:
            return None
        return self._commit(move.from_square, move.to_square)

    def undo(self) -> Optional[Move]:
        """
        Take back the last move and give the turn back. Reopens a finished game.

        In AI mode the computer's reply is taken back as well, so it is the human's turn again.
        """
        move = self._undo_ply()
        while self.is_computer_turn and self.history:
            move = self._undo_ply()
        return move

    def restart(self) -> None:
        """Start over in the same mode / difficulty."""
        restarted = self.new_game(self.mode, self.difficulty)
        self.board = restarted.board
        self.color_to_move = restarted.color_to_move
        self.history = restarted.history
        self.captured = restarted.captured
        self.status = restarted.status
        self.deselect()

    def hint(self) -> Optional[Move]:
        """The move the strongest computer policy would play for the side to move"""
        return self.select_move(self.color_to_move, Difficulty.HARD)

    def move_list(self) -> list[str]:
        """Numbered list of the moves played so far, ex. ['1. e2-e4', '2. e7-e5']"""
        return [
            f"{number}. {move.to_display()}"
            for number, move in enumerate(self.history, start=1)
        ]

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _commit(self, from_square: Square, to_square: Square) -> Move:
        move = self.apply_move(from_square, to_square)
        self.deselect()
        self.switch_turn()
        self._update_game_status()
        _log.debug("played %s, %s to move", move.to_record(), self.color_to_move)
        return move

    def _undo_ply(self) -> Optional[Move]:
        move = self.undo_last()
        if move is None:
            return None
        self.color_to_move = move.piece.color
        self.status = Status.IN_PROGRESS
        self.deselect()
        return move

    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended and changes status accordingly."""
        if self.is_game_over(self.color_to_move):
            self.status = Status.FINISHED
            _log.debug(
                "%s cannot move, %s wins", self.color_to_move, self.color_to_move.opponent
            )

    def _remove_last_captured(self, piece: Piece) -> None:
        """Remove the most recently added entry equal to `piece`"""
        pieces = self.captured[piece.color]
        for index in range(len(pieces) - 1, -1, -1):
            if pieces[index] == piece:
                del pieces[index]
                return
