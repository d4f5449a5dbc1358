"""Implementation of (Game)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from chessmate.core.models import GameModel
from chessmate.db.schema import DBGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_fields(game, game_db)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_fields(game, game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_fields(self, game: GameModel, game_db: DBGame) -> None:
        """
        NOTE: lists/dicts are copied, so the JSON columns see a new object (SQLAlchemy does not track in-place changes)
        """
        game_db.board = game.board
        game_db.color_to_move = game.color_to_move
        game_db.move_history = list(game.move_history)
        game_db.captured_pieces = {
            color: list(pieces) for color, pieces in game.captured_pieces.items()
        }
        game_db.mode = game.mode
        game_db.difficulty = game.difficulty
        game_db.status = game.status
        game_db.winner = game.winner
        game_db.selected_square = game.selected_square

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            board=game_db.board,
            color_to_move=game_db.color_to_move,
            move_history=list(game_db.move_history),
            captured_pieces={
                color: list(pieces) for color, pieces in game_db.captured_pieces.items()
            },
            mode=game_db.mode,
            difficulty=game_db.difficulty,
            status=game_db.status,
            winner=game_db.winner,
            selected_square=game_db.selected_square,
        )
