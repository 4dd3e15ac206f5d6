"""Simple algebraic notation for committed moves.

Output only: no check suffixes, no disambiguation between pieces of the
same type that could reach the same square.
"""

from __future__ import annotations

from collections.abc import Iterable

from chessreview.core.enums import Color, PieceType
from chessreview.core.move import Move
from chessreview.core.types import square_name


def move_to_algebraic(move: Move) -> str:
    """Render *move* as e.g. ``Ne5``, ``dxe5``, ``e8=Q`` or ``O-O``."""
    if move.is_castling:
        return "O-O" if move.to_sq.col > move.from_sq.col else "O-O-O"

    text = ""
    if move.piece.piece_type == PieceType.PAWN:
        if move.captured is not None:
            text += move.from_sq.file
    else:
        text += move.piece.piece_type.letter

    if move.captured is not None:
        text += "x"

    text += square_name(move.to_sq)

    if move.is_promotion and move.promoted_to is not None:
        text += "=" + move.promoted_to.letter

    return text


def movetext(moves: Iterable[Move], first_to_move: Color = Color.WHITE) -> str:
    """Numbered move list, e.g. ``1. e4 e5 2. Nf3``.

    When black moves first the list opens with ``1... <move>``.
    """
    sans = [move_to_algebraic(m) for m in moves]
    parts: list[str] = []
    start = 0
    number = 1
    if first_to_move == Color.BLACK and sans:
        parts.append(f"1... {sans[0]}")
        start = 1
        number = 2
    for i in range(start, len(sans), 2):
        pair = " ".join(sans[i : i + 2])
        parts.append(f"{number + (i - start) // 2}. {pair}")
    return " ".join(parts)
