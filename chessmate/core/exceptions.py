"""
Custom exceptions.

Everything raised on purpose by this package derives from GameError, so the service and API layers can
catch a single type. Empty results (a square without moves, a side without moves) are never errors.
"""


class GameError(Exception):
    """Top-level exception of the chess backend"""


class InvalidRequestError(GameError):
    """Input could not be interpreted (bad square name, unknown piece code, malformed record)."""


class GameStateError(GameError):
    """The game is not in a state that allows the requested action."""


class IllegalMoveError(GameError):
    """The requested move is not in the set of legal moves."""


class NotYourTurnError(GameError):
    """A piece of the side that is not to move was selected or moved."""


class RepositoryError(GameError):
    """Record could not be found / stored."""


class InternalConsistencyError(GameError):
    """
    Broken invariant of the domain layer, e.g. a side without a king.

    Should never happen during play. Not mapped to a client error.
    """
