"""
The computer opponent.

No search: every policy looks at the list of legal moves for one side and picks one of them.
"""

import logging
import random
from typing import Callable, Optional

from chessmate.chess.moves import Move
from chessmate.core.shared_types import Difficulty

_log = logging.getLogger(__name__)

BOARD_CENTER = 3.5
CENTER_BONUS_WEIGHT = 0.1


def centralization_bonus(move: Move) -> float:
    """0.6 on the four center squares, down to 0.0 in the corners"""
    distance = abs(move.to_square.row - BOARD_CENTER) + abs(
        move.to_square.col - BOARD_CENTER
    )
    return CENTER_BONUS_WEIGHT * (7 - distance)


def score_move(move: Move) -> float:
    """Material won by the move plus a small bonus for landing close to the center"""
    material = move.captured.value if move.captured else 0
    return material + centralization_bonus(move)


def random_move(moves: list[Move], rng: random.Random) -> Move:
    return rng.choice(moves)


def capture_biased_move(moves: list[Move], rng: random.Random) -> Move:
    """Take something if you can (any capture, chosen at random), otherwise play a random move"""
    captures = [move for move in moves if move.is_capture]
    return rng.choice(captures) if captures else random_move(moves, rng)


def greedy_move(moves: list[Move], rng: random.Random) -> Move:
    """
    Highest `score_move()` wins.

    Ties keep the move seen first, so the order of `moves` decides (`max` returns the first maximal item).
    """
    return max(moves, key=score_move)


# -- STRATEGY PATTERN: SELECTION POLICIES ---
SelectMoveFn = Callable[[list[Move], random.Random], Move]
SELECTION_POLICIES: dict[Difficulty, SelectMoveFn] = {
    Difficulty.EASY: random_move,
    Difficulty.MEDIUM: capture_biased_move,
    Difficulty.HARD: greedy_move,
}


def select_move(
    moves: list[Move],
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
) -> Optional[Move]:
    """Pick a move from the legal moves of one side. Nothing to pick from: None."""
    if not moves:
        return None

    policy = SELECTION_POLICIES[difficulty]
    move = policy(moves, rng or random.Random())
    _log.debug(
        "%s policy picked %s out of %d moves (score %.1f)",
        difficulty,
        move.to_display(),
        len(moves),
        score_move(move),
    )
    return move
