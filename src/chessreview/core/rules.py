"""High-level chess rules: checkmate, stalemate, insufficient material."""

from __future__ import annotations

from chessreview.core.board import Board
from chessreview.core.enums import Color, GameResult, GameStatus, PieceType
from chessreview.core.move import Move
from chessreview.core.move_generator import MoveGenerator, is_in_check


class Rules:
    """Static rule-checker over a board and the side to move."""

    # Only automatic outcomes are detected: checkmate, stalemate and
    # insufficient material. Repetition and move-count draws are not tracked.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return is_in_check(board, color)

    @staticmethod
    def is_checkmate(
        board: Board, color: Color, last_move: Move | None = None
    ) -> bool:
        if not is_in_check(board, color):
            return False
        return not MoveGenerator(board, last_move).has_legal_move(color)

    @staticmethod
    def is_stalemate(
        board: Board, color: Color, last_move: Move | None = None
    ) -> bool:
        if is_in_check(board, color):
            return False
        return not MoveGenerator(board, last_move).has_legal_move(color)

    @staticmethod
    def has_insufficient_material(board: Board) -> bool:
        """K vs K, a lone minor piece, or any two bishops.

        The two-bishop case ignores square colours and ownership, so
        K+B vs K+B on opposite colours and K+B+B vs K both count as drawn.
        """
        remaining = board.non_king_pieces()

        if not remaining:
            return True

        if len(remaining) == 1:
            return remaining[0].piece_type in (PieceType.BISHOP, PieceType.KNIGHT)

        if len(remaining) == 2:
            return all(p.piece_type == PieceType.BISHOP for p in remaining)

        return False

    @staticmethod
    def game_status(
        board: Board, color: Color, last_move: Move | None = None
    ) -> GameStatus:
        """Classify the position for *color*, the side about to move."""
        if not MoveGenerator(board, last_move).has_legal_move(color):
            if is_in_check(board, color):
                return GameStatus.CHECKMATE
            return GameStatus.STALEMATE

        if Rules.has_insufficient_material(board):
            return GameStatus.INSUFFICIENT_MATERIAL

        return GameStatus.IN_PROGRESS

    @staticmethod
    def game_result(status: GameStatus, side_to_move: Color) -> GameResult:
        """Map a status for *side_to_move* to the game outcome."""
        if status == GameStatus.CHECKMATE:
            return (
                GameResult.BLACK_WINS
                if side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if status == GameStatus.IN_PROGRESS:
            return GameResult.IN_PROGRESS
        return GameResult.DRAW


# -- Function-level API -----------------------------------------------------


def is_checkmate(board: Board, color: Color, last_move: Move | None = None) -> bool:
    return Rules.is_checkmate(board, color, last_move)


def is_stalemate(board: Board, color: Color, last_move: Move | None = None) -> bool:
    return Rules.is_stalemate(board, color, last_move)


def has_insufficient_material(board: Board) -> bool:
    return Rules.has_insufficient_material(board)
