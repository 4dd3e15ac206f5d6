"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessreview.core import create_initial_board, legal_moves, E2

    board = create_initial_board()
    for to_sq in legal_moves(board, E2):
        print(to_sq)
"""

from chessreview.core.board import Board
from chessreview.core.enums import (
    PROMOTION_TYPES,
    Color,
    GameResult,
    GameStatus,
    PieceType,
)
from chessreview.core.errors import (
    ChessError,
    EmptySquareError,
    IllegalPromotionError,
    InvalidBoardError,
)
from chessreview.core.execution import (
    Applied,
    MoveApplication,
    PendingPromotion,
    apply_move,
    complete_promotion,
    replay,
)
from chessreview.core.move import Move
from chessreview.core.move_generator import (
    MoveGenerator,
    all_legal_moves,
    is_in_check,
    is_legal_move,
    is_square_attacked,
    legal_moves,
    pseudo_legal_moves,
)
from chessreview.core.notation import move_to_algebraic, movetext
from chessreview.core.piece import Piece
from chessreview.core.rules import (
    Rules,
    has_insufficient_material,
    is_checkmate,
    is_stalemate,
)
from chessreview.core.types import (
    Square,
    is_valid_square,
    parse_square,
    square_name,
)


def create_initial_board() -> Board:
    """Standard starting position."""
    return Board.initial()


def create_empty_board() -> Board:
    return Board.empty()


__all__ = [
    # Enums
    "Color",
    "GameResult",
    "GameStatus",
    "PieceType",
    "PROMOTION_TYPES",
    # Types / helpers
    "Square",
    "is_valid_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Applied",
    "Board",
    "Move",
    "MoveApplication",
    "MoveGenerator",
    "PendingPromotion",
    "Piece",
    "Rules",
    # Errors
    "ChessError",
    "EmptySquareError",
    "IllegalPromotionError",
    "InvalidBoardError",
    # Functions
    "all_legal_moves",
    "apply_move",
    "complete_promotion",
    "create_empty_board",
    "create_initial_board",
    "has_insufficient_material",
    "is_checkmate",
    "is_in_check",
    "is_legal_move",
    "is_square_attacked",
    "is_stalemate",
    "legal_moves",
    "move_to_algebraic",
    "movetext",
    "pseudo_legal_moves",
    "replay",
]
