"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the pseudo-legal move sets for each piece type.
Pseudo-legal: obeys the way the piece moves, but might still leave your own king in check.

Legality is checked later (see rules.py). Nothing in here calls back into rules.py, so the check
detection can use these functions without recursing.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from chessmate.chess.pieces import Color, Piece, PieceType
from chessmate.chess.square import Square
from chessmate.core.exceptions import InvalidRequestError


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]  # (d_row, d_col)


@dataclass(frozen=True)
class Move:
    """
    A move annotated with what it does on the board.

    `piece` is the piece as it stood on the from-square (so a promoting move still records the pawn),
    `captured` is whatever stood on the to-square before the move.
    """

    from_square: Square
    to_square: Square
    piece: Piece
    captured: Optional[Piece] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_promotion(self) -> bool:
        """A pawn reaching the opponent's back rank: row 0 for white, row 7 for black"""
        if self.piece.type != PieceType.PAWN:
            return False
        return self.to_square.row == promotion_row(self.piece.color)

    @classmethod
    def from_record(cls, record: str) -> Self:
        """
        Reverse of `to_record()`

        examples:
        * "Pe2e4": white pawn from e2 to e4
        * "pd5e4xP": black pawn from d5 takes a white pawn on e4
        """
        body, _, captured = record.partition("x")
        if len(body) != 5 or (record.count("x") == 1 and len(captured) != 1):
            raise InvalidRequestError(f"Cannot interpret move record: {record!r}")
        return cls(
            from_square=Square.from_algebraic(body[1:3]),
            to_square=Square.from_algebraic(body[3:5]),
            piece=Piece.from_fen(body[0]),
            captured=Piece.from_fen(captured) if captured else None,
        )

    def to_record(self) -> str:
        """Compact text form used for persisting the move history"""
        capture = f"x{self.captured.to_fen()}" if self.captured else ""
        return f"{self.piece.to_fen()}{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{capture}"

    def to_display(self) -> str:
        """How a move list shows the move: e2-e4"""
        return f"{self.from_square.to_algebraic()}-{self.to_square.to_algebraic()}"

    def describe(self) -> str:
        description = f"Move {self.piece.type} from {self.from_square.to_algebraic()} to {self.to_square.to_algebraic()}"
        if self.captured:
            description += f" (captures {self.captured.type})"
        return description


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


def _move_to(square: Square, target_square: Square, board: Board) -> Move:
    piece = board.piece_at(square)
    # for the type checker: generators are only called for occupied squares
    assert piece is not None
    return Move(square, target_square, piece, board.piece_at(target_square))


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board. The square of the piece we hit is included if it is the opponent's (a capture).
    """
    player_color = _color_at(square, board)

    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_on_board():
            piece_found = board.piece_at(target_square)
            if piece_found is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if piece_found.color != player_color:
                    moves.append(_move_to(square, target_square, board))
                break

            moves.append(_move_to(square, target_square, board))
            target_square = target_square.offset(d_row, d_col)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    player_color = _color_at(square, board)

    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_on_board():
            continue

        piece_found = board.piece_at(target_square)
        if piece_found is None or piece_found.color != player_color:
            moves.append(_move_to(square, target_square, board))

    return moves


def _color_at(square: Square, board: Board) -> Color:
    piece = board.piece_at(square)
    assert piece is not None
    return piece.color


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally

    No en passant.
    """
    player_color = _color_at(square, board)
    # White moves up the board (towards row 0), Black moves down
    direction = -1 if player_color == Color.WHITE else 1
    starting_row = 6 if player_color == Color.WHITE else 1

    moves: list[Move] = []
    one_step = square.offset(direction, 0)
    if one_step.is_on_board() and board.piece_at(one_step) is None:
        moves.append(_move_to(square, one_step, board))

        two_steps = square.offset(2 * direction, 0)
        if square.row == starting_row and board.piece_at(two_steps) is None:
            moves.append(_move_to(square, two_steps, board))

    # pawns take diagonally:
    for d_col in (-1, 1):
        target_square = square.offset(direction, d_col)
        piece_found = board.piece_at(target_square)
        if piece_found is not None and piece_found.color != player_color:
            moves.append(_move_to(square, target_square, board))
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    knight_deltas: list[Vector] = [
        (-2, -1),
        (-2, 1),
        (-1, -2),
        (-1, 2),
        (1, -2),
        (1, 2),
        (2, -1),
        (2, 1),
    ]
    return single_step_move(square, board, knight_deltas)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    diagonals: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
    return raycasting_move(square, board, diagonals)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    stay_on_row: list[Vector] = [(0, 1), (0, -1)]
    stay_on_col: list[Vector] = [(1, 0), (-1, 0)]
    return raycasting_move(square, board, stay_on_row + stay_on_col)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    diagonal_moves = candidate_bishop_moves(square, board)
    return horizontal_and_vertical_moves + diagonal_moves


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time. No castling.
    """
    king_deltas: list[Vector] = [
        (-1, -1),
        (-1, 0),
        (-1, 1),
        (0, -1),
        (0, 1),
        (1, -1),
        (1, 0),
        (1, 1),
    ]
    return single_step_move(square, board, king_deltas)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}

# every piece type has exactly one movement rule
assert set(MOVEMENT_RULES) == set(PieceType)


def pseudo_legal_moves(square: Square, board: Board) -> list[Move]:
    """Candidate moves of whatever piece stands on the square. Empty / off-board square: no moves."""
    piece = board.piece_at(square)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(square, board)
