"""Exceptions raised by state-changing core operations.

Queries never raise; they fall back to empty results or ``False``.
"""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for rejected chess input."""


class InvalidBoardError(ChessError):
    """Board violates a structural invariant (king count, stranded pawn)."""


class EmptySquareError(ChessError):
    """A move was requested from a square with no piece on it."""


class IllegalPromotionError(ChessError):
    """Promotion target is not one of queen, rook, bishop or knight."""
