"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PieceCode = str


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service, DB, and Game layers."""

    board: str  # piece placement, encoded like the first field of a FEN string
    color_to_move: str
    move_history: list[str]  # move records, see Move.to_record()
    captured_pieces: dict[PieceColor, list[PieceCode]]
    mode: str
    difficulty: str
    status: str
    winner: Optional[str] = None
    selected_square: Optional[str] = field(default=None)
