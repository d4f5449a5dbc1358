"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class GameMode(StrEnum):
    """pvp: two humans share the board. ai: the human plays white, the computer answers with black."""

    PVP = "pvp"
    AI = "ai"


class Difficulty(StrEnum):
    """Move selection policies of the computer opponent"""

    EASY = "easy"  # uniform random
    MEDIUM = "medium"  # captures first, otherwise random
    HARD = "hard"  # greedy material + centralization


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
