"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Row delta of a pawn step (white moves toward row 0)."""
        return -1 if self == Color.WHITE else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self == Color.WHITE else 7

    @property
    def pawn_start_row(self) -> int:
        return 6 if self == Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Notation letter, e.g. ``N`` for a knight."""
        return _LETTERS[self]

    @property
    def material(self) -> int:
        """Conventional material value in pawns."""
        return _MATERIAL[self]

    def __str__(self) -> str:
        return self.name.lower()


_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

_MATERIAL: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class GameStatus(IntEnum):
    """Terminal-state classification for the side to move."""

    IN_PROGRESS = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    INSUFFICIENT_MATERIAL = auto()


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
