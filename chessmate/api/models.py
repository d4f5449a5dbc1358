"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from chessmate.chess.square import Square
from chessmate.core.shared_types import Color, Difficulty, GameMode, Status

SquareName = str
PieceCode = str


def _validate_square_name(value: str) -> str:
    """Raises InvalidRequestError if the name is not a square on the board ('a1' - 'h8')"""
    Square.from_algebraic(value)
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    mode: GameMode = GameMode.PVP
    # None: use the configured default difficulty
    difficulty: Optional[Difficulty] = None


class GetGameRequest(BaseModel):
    game_id: UUID


class RestartGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class UndoMoveRequest(BaseModel):
    game_id: UUID


class HintRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class SelectSquareRequest(LegalMovesRequest):
    pass


class DeselectRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board: str
    color_to_move: Color
    mode: GameMode
    difficulty: Difficulty
    status: Status
    winner: Optional[Color]
    in_check: bool
    move_history: list[str]
    captured_pieces: dict[Color, list[PieceCode]]
    selected_square: Optional[SquareName] = None
    # the reply of the computer opponent to the move in this request (AI mode)
    computer_move: Optional[str] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: SquareName
    legal_moves: list[SquareName]


class HintResponse(BaseModel):
    game_id: UUID
    from_square: Optional[SquareName]
    to_square: Optional[SquareName]
    message: str


class SelectionPayload(BaseModel):
    """Body of a select request (the game ID is part of the URL)"""

    square: SquareName


class MovePayload(BaseModel):
    """Body of a move request (the game ID is part of the URL)"""

    from_square: SquareName
    to_square: SquareName
