"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessreview.core.enums import Color, PieceType
from chessreview.core.errors import InvalidBoardError
from chessreview.core.piece import Piece
from chessreview.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    return sq.row * 8 + sq.col


class Board:
    """Immutable 64-square board.

    Every mutation returns a fresh board that shares no mutable state with
    its source, so two snapshots can never alias each other.
    """

    __slots__ = ("_squares",)

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        elif len(squares) != 64:
            raise InvalidBoardError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = tuple(squares)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        if not sq.is_valid:
            raise IndexError(f"Square off the board: {sq!r}")
        return self._squares[_index(sq)]

    def get(self, sq: Square) -> Piece | None:
        """Piece on *sq*, or None when empty or off the board."""
        if not sq.is_valid:
            return None
        return self._squares[_index(sq)]

    def is_empty(self, sq: Square) -> bool:
        return self.get(sq) is None

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in row-major order."""
        for sq in ALL_SQUARES:
            piece = self._squares[_index(sq)]
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, piece in self
            if piece.color == color and piece.piece_type == piece_type
        ]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self if piece.color == color]

    def non_king_pieces(self) -> list[Piece]:
        return [piece for _, piece in self if piece.piece_type != PieceType.KING]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or None if it has none."""
        for sq, piece in self:
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        return None

    @property
    def piece_count(self) -> int:
        return sum(1 for _ in self)

    # -- Copy-on-write updates ---------------------------------------------

    def updated(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied; ``None`` clears a square."""
        cells = list(self._squares)
        for sq, piece in changes.items():
            if not sq.is_valid:
                raise IndexError(f"Square off the board: {sq!r}")
            cells[_index(sq)] = piece
        return Board(tuple(cells))

    def place(self, sq: Square, piece: Piece) -> Board:
        return self.updated({sq: piece})

    def remove(self, sq: Square) -> Board:
        return self.updated({sq: None})

    def validate(self) -> None:
        """Reject boards the engine cannot reason about.

        Requires exactly one king per color and no pawn on either back
        rank.
        """
        for color in Color:
            kings = len(self.pieces(color, PieceType.KING))
            if kings != 1:
                raise InvalidBoardError(
                    f"Expected exactly one {color!s} king, found {kings}"
                )
        for sq, piece in self:
            if piece.piece_type == PieceType.PAWN and sq.row in (0, 7):
                raise InvalidBoardError(f"Pawn on back rank at {sq}")

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, queen on the d-file."""
        changes: dict[Square, Piece | None] = {}
        for col, pt in enumerate(_BACK_RANK):
            changes[Square(7, col)] = Piece(Color.WHITE, pt)
            changes[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            changes[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            changes[Square(0, col)] = Piece(Color.BLACK, pt)
        return cls().updated(changes)

    @classmethod
    def from_diagram(cls, diagram: str) -> Board:
        """Build a board from eight rows of piece characters.

        Rows run from rank 8 down to rank 1; ``.`` marks an empty square
        and whitespace between cells is ignored, so ``repr(board)`` output
        (minus the coordinates) round-trips.
        """
        rows = ["".join(line.split()) for line in diagram.strip().splitlines()]
        rows = [text for text in rows if text]
        if len(rows) != 8:
            raise InvalidBoardError(f"Diagram must have 8 rows, got {len(rows)}")
        changes: dict[Square, Piece | None] = {}
        for row, text in enumerate(rows):
            if len(text) != 8:
                raise InvalidBoardError(
                    f"Diagram row {row} must have 8 cells: {text!r}"
                )
            for col, ch in enumerate(text):
                if ch != ".":
                    changes[Square(row, col)] = Piece.from_char(ch)
        return cls().updated(changes)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._squares[row * 8 + col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
