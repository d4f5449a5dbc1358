"""
Rules that depend on the position as a whole: check, legal moves, end of the game.

Two explicit layers:
* `moves.pseudo_legal_moves()` knows how pieces move and nothing else. `is_in_check()` only ever uses this layer.
* `legal_moves()` is built on top: a pseudo-legal move is kept if, after making it, your own king is not in check.
"""

from chessmate.chess.board import Board
from chessmate.chess.moves import Move, pseudo_legal_moves
from chessmate.chess.pieces import Color
from chessmate.chess.square import Square
from chessmate.core.exceptions import InternalConsistencyError


# --- CHECK ---
def is_in_check(board: Board, color: Color) -> bool:
    """
    Is the king of `color` attacked?
    ----

    Generate the candidate moves of every opponent piece and see if any of them lands on the king's square.
    """
    king_square = board.locate_king(color)
    if king_square is None:
        raise InternalConsistencyError(f"No {color} king on the board: {board.to_fen()}")

    for square in board.squares_of(color.opponent):
        if any(move.to_square == king_square for move in pseudo_legal_moves(square, board)):
            return True
    return False


# --- LEGAL MOVES ---
def is_putting_yourself_in_check(board: Board, move: Move) -> bool:
    """Make the move on the shared board, ask for check, and take the move back (also if the check query raises)."""
    with board.temporary_move(move.from_square, move.to_square):
        return is_in_check(board, move.piece.color)


def legal_moves(board: Board, square: Square) -> list[Move]:
    """
    Legal moves of the piece standing on `square`, in generation order.

    Empty or off-board square: no moves.
    """
    return [
        move
        for move in pseudo_legal_moves(square, board)
        if not is_putting_yourself_in_check(board, move)
    ]


def legal_destinations(board: Board, square: Square) -> set[Square]:
    return {move.to_square for move in legal_moves(board, square)}


def is_legal_move(board: Board, from_square: Square, to_square: Square) -> bool:
    return to_square in legal_destinations(board, from_square)


def all_legal_moves(board: Board, color: Color) -> list[Move]:
    """Every legal move for a side. Squares in scan order, the moves of one square in generation order."""
    moves: list[Move] = []
    for square in board.squares_of(color):
        moves.extend(legal_moves(board, square))
    return moves


# --- END OF THE GAME ---
def has_any_legal_move(board: Board, color: Color) -> bool:
    return any(legal_moves(board, square) for square in board.squares_of(color))


def is_game_over(board: Board, color: Color) -> bool:
    """
    The game ends as soon as the side to move has no legal move left.

    NOTE: Checkmate and stalemate are not told apart here. Both count as a win for the opponent (see `winner()`).
    """
    return not has_any_legal_move(board, color)


def winner(board: Board, color_to_move: Color) -> Color | None:
    """The opponent of a side that cannot move wins, whether that side is mated or stalemated."""
    if is_game_over(board, color_to_move):
        return color_to_move.opponent
    return None


def is_checkmate(board: Board, color: Color) -> bool:
    """Informational only, does not change who wins"""
    return is_in_check(board, color) and is_game_over(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    """Informational only, does not change who wins"""
    return not is_in_check(board, color) and is_game_over(board, color)
