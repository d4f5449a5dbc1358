"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional
from uuid import UUID

from chessmate.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    DeselectRequest,
    GameResponse,
    GetGameRequest,
    HintRequest,
    HintResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    RestartGameRequest,
    SelectSquareRequest,
    UndoMoveRequest,
)
from chessmate.chess.game import Game
from chessmate.chess.square import Square
from chessmate.core.config import Settings, get_settings
from chessmate.core.exceptions import RepositoryError
from chessmate.core.models import GameModel
from chessmate.core.shared_types import Color, Status
from chessmate.db.repository import GameRepository

_log = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(
        self,
        repository: GameRepository,
        rng: Optional[random.Random] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.repo = repository
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.settings.ai_seed)

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Set up a new game in the starting position (white to move)."""
        difficulty = request.difficulty or self.settings.default_difficulty
        new_game = Game.new_game(mode=request.mode, difficulty=difficulty)

        stored_game, game_id = self.repo.create_game(new_game.to_model())
        _log.info("created game %s (mode=%s, difficulty=%s)", game_id, request.mode, difficulty)
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def restart_game(self, request: RestartGameRequest) -> GameResponse:
        """Start over: same game ID, mode and difficulty."""
        game = self._load_game(request.game_id)
        game.restart()
        self._store_game(request.game_id, game)
        _log.info("restarted game %s", request.game_id)
        return self._create_game_response(request.game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = self._load_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """
        Retrieve the squares a piece can move to. Read only, nothing is stored.

        Only pieces of the side to move have moves. Any other square simply has none.
        """
        game = self._load_game(request.game_id)
        square = Square.from_algebraic(request.square)

        legal_moves: list[str] = []
        if game.can_select(square):
            legal_moves = [move.to_square.to_algebraic() for move in game.legal_moves(square)]

        return LegalMovesResponse(
            game_id=request.game_id, square=request.square, legal_moves=legal_moves
        )

    def select_square(self, request: SelectSquareRequest) -> LegalMovesResponse:
        """
        Select one of your pieces and retrieve the squares it can move to.

        Selecting the selected square again deselects it (no moves returned).
        """
        game = self._load_game(request.game_id)
        destinations = game.select_square(Square.from_algebraic(request.square))
        self._store_game(request.game_id, game)
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            legal_moves=[destination.to_algebraic() for destination in destinations],
        )

    def deselect(self, request: DeselectRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.deselect()
        self._store_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt.

        In AI mode the computer answers right away (in the same request) if the game is not over.
        """
        game = self._load_game(request.game_id)
        game.play_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )

        computer_move = None
        if game.is_computer_turn:
            move = game.play_computer_move(self.rng)
            computer_move = move.to_display() if move else None

        self._store_game(request.game_id, game)
        if game.status == Status.FINISHED:
            _log.info("game %s finished, %s wins", request.game_id, game.winner)
        return self._create_game_response(request.game_id, game, computer_move)

    def undo_move(self, request: UndoMoveRequest) -> GameResponse:
        """Take back the last move (and the computer's reply in AI mode). No moves played: nothing changes."""
        game = self._load_game(request.game_id)
        game.undo()
        self._store_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def hint(self, request: HintRequest) -> HintResponse:
        """Suggest a move for the side to move"""
        game = self._load_game(request.game_id)
        move = game.hint() if game.status == Status.IN_PROGRESS else None
        if move is None:
            return HintResponse(
                game_id=request.game_id,
                from_square=None,
                to_square=None,
                message="No moves available!",
            )
        return HintResponse(
            game_id=request.game_id,
            from_square=move.from_square.to_algebraic(),
            to_square=move.to_square.to_algebraic(),
            message=f"Hint: {move.describe()}",
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        deleted = self.repo.delete_game(request.game_id)
        if deleted is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        _log.info("deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(
        self, game_id: UUID, game: Game, computer_move: Optional[str] = None
    ) -> GameResponse:
        """Convert a Game into a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            board=game.board.to_fen(),
            color_to_move=game.color_to_move,
            mode=game.mode,
            difficulty=game.difficulty,
            status=game.status,
            winner=game.winner,
            in_check=game.in_check,
            move_history=game.move_list(),
            captured_pieces={
                Color(color): [piece.to_fen() for piece in pieces]
                for color, pieces in game.captured.items()
            },
            selected_square=(
                game.selected_square.to_algebraic() if game.selected_square else None
            ),
            computer_move=computer_move,
        )

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(self._fetch_game(game_id))

    def _store_game(self, game_id: UUID, game: Game) -> None:
        if self.repo.update_game(game_id, game.to_model()) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
