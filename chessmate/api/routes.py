"""HTTP routes. Thin layer: build the request model, call the service, return its response model."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

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
    MovePayload,
    MoveRequest,
    RestartGameRequest,
    SelectionPayload,
    SelectSquareRequest,
    UndoMoveRequest,
)
from chessmate.db.database import get_db
from chessmate.db.sql_repository import SQLGameRepository
from chessmate.services.chess_service import ChessService

router = APIRouter(prefix="/games", tags=["games"])


def get_service(db: Session = Depends(get_db)) -> ChessService:
    return ChessService(SQLGameRepository(db))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_game(
    request: CreateGameRequest, service: ChessService = Depends(get_service)
) -> GameResponse:
    return service.create_new_game(request)


@router.get("/{game_id}")
def get_game(game_id: UUID, service: ChessService = Depends(get_service)) -> GameResponse:
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(game_id: UUID, service: ChessService = Depends(get_service)) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))


@router.post("/{game_id}/restart")
def restart_game(
    game_id: UUID, service: ChessService = Depends(get_service)
) -> GameResponse:
    return service.restart_game(RestartGameRequest(game_id=game_id))


@router.get("/{game_id}/legal-moves/{square}")
def legal_moves(
    game_id: UUID, square: str, service: ChessService = Depends(get_service)
) -> LegalMovesResponse:
    return service.legal_moves(LegalMovesRequest(game_id=game_id, square=square))


@router.post("/{game_id}/selection")
def select_square(
    game_id: UUID, payload: SelectionPayload, service: ChessService = Depends(get_service)
) -> LegalMovesResponse:
    return service.select_square(SelectSquareRequest(game_id=game_id, square=payload.square))


@router.delete("/{game_id}/selection")
def deselect(game_id: UUID, service: ChessService = Depends(get_service)) -> GameResponse:
    return service.deselect(DeselectRequest(game_id=game_id))


@router.post("/{game_id}/moves")
def make_move(
    game_id: UUID, payload: MovePayload, service: ChessService = Depends(get_service)
) -> GameResponse:
    request = MoveRequest(
        game_id=game_id, from_square=payload.from_square, to_square=payload.to_square
    )
    return service.make_move(request)


@router.post("/{game_id}/undo")
def undo_move(game_id: UUID, service: ChessService = Depends(get_service)) -> GameResponse:
    return service.undo_move(UndoMoveRequest(game_id=game_id))


@router.get("/{game_id}/hint")
def hint(game_id: UUID, service: ChessService = Depends(get_service)) -> HintResponse:
    return service.hint(HintRequest(game_id=game_id))
