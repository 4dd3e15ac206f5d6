"""Move application: validated squares in, new board and Move record out.

Promotion is a two-step state machine. :func:`apply_move` without a piece
choice returns :class:`PendingPromotion`; the caller commits nothing and
later passes its choice to :func:`complete_promotion`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from chessreview.core.board import Board
from chessreview.core.enums import PROMOTION_TYPES, Color, PieceType
from chessreview.core.errors import EmptySquareError, IllegalPromotionError
from chessreview.core.move import Move
from chessreview.core.move_generator import KINGSIDE_ROOK_COL, QUEENSIDE_ROOK_COL
from chessreview.core.piece import Piece
from chessreview.core.types import Square


@dataclass(frozen=True, slots=True)
class Applied:
    """A finished move: the board after it and its history record."""

    board: Board
    move: Move


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn reached the last rank and needs a piece choice.

    ``board`` is the untouched board before the move; ``preview`` shows the
    pawn standing on ``square`` and is for display only.
    """

    board: Board
    preview: Board
    from_sq: Square
    square: Square
    color: Color


MoveApplication: TypeAlias = Applied | PendingPromotion


def apply_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    promote_to: PieceType | None = None,
) -> MoveApplication:
    """Execute an already validated move on a copy of *board*.

    Handles en passant (the passed pawn is removed and recorded as the
    capture), castling (the rook lands next to the king) and promotion.
    """
    piece = board.get(from_sq)
    if piece is None:
        raise EmptySquareError(f"No piece on {from_sq}")

    is_pawn = piece.piece_type == PieceType.PAWN
    is_promotion = is_pawn and to_sq.row == piece.color.promotion_row

    if is_promotion and promote_to is None:
        preview = board.updated({from_sq: None, to_sq: piece.moved()})
        return PendingPromotion(board, preview, from_sq, to_sq, piece.color)
    if promote_to is not None and promote_to not in PROMOTION_TYPES:
        raise IllegalPromotionError(f"Cannot promote to {promote_to!s}")

    changes: dict[Square, Piece | None] = {from_sq: None}
    captured = board.get(to_sq)

    is_en_passant = is_pawn and to_sq.col != from_sq.col and captured is None
    if is_en_passant:
        passed_sq = Square(from_sq.row, to_sq.col)
        captured = board.get(passed_sq)
        changes[passed_sq] = None

    is_castling = (
        piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2
    )
    if is_castling:
        kingside = to_sq.col > from_sq.col
        rook_from = Square(
            from_sq.row, KINGSIDE_ROOK_COL if kingside else QUEENSIDE_ROOK_COL
        )
        rook_to = to_sq.offset(0, -1 if kingside else 1)
        rook = board.get(rook_from)
        if rook is not None:
            changes[rook_from] = None
            changes[rook_to] = rook.moved()

    if is_promotion:
        assert promote_to is not None
        changes[to_sq] = Piece(piece.color, promote_to, has_moved=True)
    else:
        changes[to_sq] = piece.moved()

    move = Move(
        from_sq,
        to_sq,
        piece,
        captured=captured,
        is_en_passant=is_en_passant,
        is_castling=is_castling,
        is_promotion=is_promotion,
        promoted_to=promote_to if is_promotion else None,
    )
    return Applied(board.updated(changes), move)


def complete_promotion(pending: PendingPromotion, piece_type: PieceType) -> Applied:
    """Finish a pending promotion with the chosen *piece_type*."""
    if piece_type not in PROMOTION_TYPES:
        raise IllegalPromotionError(f"Cannot promote to {piece_type!s}")
    result = apply_move(pending.board, pending.from_sq, pending.square, piece_type)
    assert isinstance(result, Applied)
    return result


def replay(start: Board, moves: Iterable[Move]) -> tuple[Board, list[Piece]]:
    """Rebuild the board reached by playing *moves* from *start*.

    Returns the board and every captured piece in the order taken.
    """
    board = start
    captured: list[Piece] = []
    for move in moves:
        result = apply_move(board, move.from_sq, move.to_sq, move.promoted_to)
        if not isinstance(result, Applied):
            raise IllegalPromotionError(f"Promotion without a piece in history: {move}")
        board = result.board
        if result.move.captured is not None:
            captured.append(result.move.captured)
    return board, captured
