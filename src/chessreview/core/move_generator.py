"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from chessreview.core.board import Board
from chessreview.core.enums import Color, PieceType
from chessreview.core.move import Move
from chessreview.core.piece import Piece
from chessreview.core.types import ALL_SQUARES, Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))

KINGSIDE_ROOK_COL = 7
QUEENSIDE_ROOK_COL = 0


class MoveGenerator:
    """Move generation over one immutable :class:`Board` snapshot.

    ``last_move`` is only consulted for en passant. The generator never
    modifies the board it was given; legality checks run on scratch copies.
    """

    __slots__ = ("_board", "_last_move")

    def __init__(self, board: Board, last_move: Move | None = None) -> None:
        self._board = board
        self._last_move = last_move

    @property
    def board(self) -> Board:
        return self._board

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, from_sq: Square) -> list[Square]:
        """Destinations allowed by the piece's movement pattern alone."""
        piece = self._board.get(from_sq)
        if piece is None:
            return []

        pt = piece.piece_type
        if pt == PieceType.PAWN:
            return self._gen_pawn(from_sq, piece)
        if pt == PieceType.KNIGHT:
            return self._gen_steps(from_sq, piece, KNIGHT_OFFSETS)
        if pt == PieceType.BISHOP:
            return self._gen_sliding(from_sq, piece, BISHOP_DIRS)
        if pt == PieceType.ROOK:
            return self._gen_sliding(from_sq, piece, ROOK_DIRS)
        if pt == PieceType.QUEEN:
            return self._gen_sliding(from_sq, piece, ROOK_DIRS) + self._gen_sliding(
                from_sq, piece, BISHOP_DIRS
            )
        return self._gen_steps(from_sq, piece, KING_OFFSETS) + self._gen_castling(
            from_sq, piece
        )

    def is_legal_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Pseudo-legal and leaves the mover's king out of check."""
        piece = self._board.get(from_sq)
        if piece is None:
            return False
        if to_sq not in self.pseudo_legal_moves(from_sq):
            return False

        if piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
            # No castling out of or through check.
            if is_in_check(self._board, piece.color):
                return False
            step = 1 if to_sq.col > from_sq.col else -1
            middle = from_sq.offset(0, step)
            if is_in_check(self.simulate(from_sq, middle), piece.color):
                return False

        return not is_in_check(self.simulate(from_sq, to_sq), piece.color)

    def legal_moves(self, from_sq: Square) -> list[Square]:
        """Pseudo-legal destinations filtered by :meth:`is_legal_move`."""
        return [
            to_sq
            for to_sq in self.pseudo_legal_moves(from_sq)
            if self.is_legal_move(from_sq, to_sq)
        ]

    def all_legal_moves(self, color: Color) -> list[Move]:
        """Candidate move records for every legal move of *color*."""
        board = self._board
        moves: list[Move] = []
        for from_sq in board.all_pieces(color):
            piece = board[from_sq]
            assert piece is not None
            for to_sq in self.legal_moves(from_sq):
                en_passant = self._is_en_passant(from_sq, to_sq, piece)
                captured = (
                    board.get(Square(from_sq.row, to_sq.col))
                    if en_passant
                    else board.get(to_sq)
                )
                moves.append(
                    Move(
                        from_sq,
                        to_sq,
                        piece,
                        captured=captured,
                        is_en_passant=en_passant,
                        is_castling=piece.piece_type == PieceType.KING
                        and abs(to_sq.col - from_sq.col) == 2,
                        is_promotion=piece.piece_type == PieceType.PAWN
                        and to_sq.row == piece.color.promotion_row,
                    )
                )
        return moves

    def has_legal_move(self, color: Color) -> bool:
        """Whether *color* has at least one legal move (stops early)."""
        for from_sq in self._board.all_pieces(color):
            for to_sq in self.pseudo_legal_moves(from_sq):
                if self.is_legal_move(from_sq, to_sq):
                    return True
        return False

    # -- Simulation ---------------------------------------------------------

    def simulate(self, from_sq: Square, to_sq: Square) -> Board:
        """Scratch board with the piece moved and marked as moved.

        Whatever stood on *to_sq* is overwritten. An en passant capture also
        lifts the passed pawn. The rook of a castling move is not relocated;
        it never affects the safety of its own king.
        """
        piece = self._board.get(from_sq)
        if piece is None:
            return self._board
        changes: dict[Square, Piece | None] = {from_sq: None, to_sq: piece.moved()}
        if self._is_en_passant(from_sq, to_sq, piece):
            changes[Square(from_sq.row, to_sq.col)] = None
        return self._board.updated(changes)

    def _is_en_passant(self, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
        return (
            piece.piece_type == PieceType.PAWN
            and to_sq.col != from_sq.col
            and self._board.get(to_sq) is None
        )

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        direction = piece.color.pawn_direction

        forward = sq.offset(direction, 0)
        if forward.is_valid and board.is_empty(forward):
            moves.append(forward)
            if sq.row == piece.color.pawn_start_row:
                double = sq.offset(2 * direction, 0)
                if board.is_empty(double):
                    moves.append(double)

        last = self._last_move
        for d_col in (-1, 1):
            capture = sq.offset(direction, d_col)
            if not capture.is_valid:
                continue
            target = board[capture]
            if target is not None:
                if target.color != piece.color:
                    moves.append(capture)
            elif (
                last is not None
                and last.is_double_pawn_push
                and last.color != piece.color
                and last.to_sq == Square(sq.row, sq.col + d_col)
            ):
                moves.append(capture)
        return moves

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if not to_sq.is_valid:
                continue
            target = board[to_sq]
            if target is None or target.color != piece.color:
                moves.append(to_sq)
        return moves

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        for d_row, d_col in directions:
            to_sq = sq.offset(d_row, d_col)
            while to_sq.is_valid:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    to_sq = to_sq.offset(d_row, d_col)
                    continue
                if target.color != piece.color:
                    moves.append(to_sq)
                break
        return moves

    def _gen_castling(self, king_sq: Square, king: Piece) -> list[Square]:
        # Check safety is a legality concern, see is_legal_move.
        if king.has_moved:
            return []

        board = self._board
        moves: list[Square] = []
        for rook_col, step in ((KINGSIDE_ROOK_COL, 1), (QUEENSIDE_ROOK_COL, -1)):
            if rook_col == king_sq.col:
                continue
            rook = board[Square(king_sq.row, rook_col)]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != king.color
                or rook.has_moved
            ):
                continue
            low, high = sorted((king_sq.col, rook_col))
            if any(
                not board.is_empty(Square(king_sq.row, col))
                for col in range(low + 1, high)
            ):
                continue
            destination = king_sq.offset(0, 2 * step)
            if destination.is_valid:
                moves.append(destination)
        return moves


# -- Attack / check detection -----------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* among the pseudo-legal destinations of any *by_color* piece?

    En passant plays no part in attacks, so no last move is consulted.
    """
    gen = MoveGenerator(board)
    for from_sq in ALL_SQUARES:
        piece = board.get(from_sq)
        if piece is None or piece.color != by_color:
            continue
        if sq in gen.pseudo_legal_moves(from_sq):
            return True
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? A board without that king is never in check."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


# -- Function-level API -----------------------------------------------------


def pseudo_legal_moves(
    board: Board, from_sq: Square, last_move: Move | None = None
) -> list[Square]:
    return MoveGenerator(board, last_move).pseudo_legal_moves(from_sq)


def legal_moves(
    board: Board, from_sq: Square, last_move: Move | None = None
) -> list[Square]:
    return MoveGenerator(board, last_move).legal_moves(from_sq)


def is_legal_move(
    board: Board, from_sq: Square, to_sq: Square, last_move: Move | None = None
) -> bool:
    return MoveGenerator(board, last_move).is_legal_move(from_sq, to_sq)


def all_legal_moves(
    board: Board, color: Color, last_move: Move | None = None
) -> list[Move]:
    return MoveGenerator(board, last_move).all_legal_moves(color)
