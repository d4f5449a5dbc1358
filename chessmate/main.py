"""
FastAPI application factory.

Run with: uvicorn chessmate.main:create_app --factory
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from chessmate.api.routes import router
from chessmate.core.config import get_settings
from chessmate.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    InvalidRequestError,
    NotYourTurnError,
    RepositoryError,
)

_log = logging.getLogger(__name__)

# Domain errors a client can cause, and how they show up over HTTP. Anything else is a 500.
ERROR_STATUS_CODES: dict[type[GameError], int] = {
    RepositoryError: 404,
    InvalidRequestError: 422,
    IllegalMoveError: 409,
    NotYourTurnError: 409,
    GameStateError: 409,
}


async def handle_game_error(request: Request, exc: Exception) -> JSONResponse:
    status_code = next(
        code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)
    )
    _log.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="chessmate")
    app.include_router(router)
    for error_type in ERROR_STATUS_CODES:
        app.add_exception_handler(error_type, handle_game_error)
    return app
