"""Move record - an immutable entry in the game history."""

from __future__ import annotations

from dataclasses import dataclass

from chessreview.core.enums import Color, PieceType
from chessreview.core.piece import Piece
from chessreview.core.types import Square


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a committed move.

    ``piece`` is the piece as it stood before the move. ``captured`` is the
    piece this move removed from the board, which for en passant is the
    passed pawn rather than anything on ``to_sq``.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    is_en_passant: bool = False
    is_castling: bool = False
    is_promotion: bool = False
    promoted_to: PieceType | None = None

    @property
    def color(self) -> Color:
        return self.piece.color

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_kingside_castle(self) -> bool:
        return self.is_castling and self.to_sq.col > self.from_sq.col

    @property
    def is_double_pawn_push(self) -> bool:
        return (
            self.piece.piece_type == PieceType.PAWN
            and abs(self.to_sq.row - self.from_sq.row) == 2
        )

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Coordinate notation, e.g. ``e2e4`` or ``e7e8q``."""
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promoted_to is not None:
            base += self.promoted_to.letter.lower()
        return base
