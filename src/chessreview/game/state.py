"""Game review session: board, turn, move history and promotion flow.

History navigation is event-sourced: undo, redo and jumps rebuild the board
and captured pieces by replaying the move log from the start board, never by
trusting a stored board reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum, auto

from chessreview.core.board import Board
from chessreview.core.enums import (
    PROMOTION_TYPES,
    Color,
    GameResult,
    GameStatus,
    PieceType,
)
from chessreview.core.errors import InvalidBoardError
from chessreview.core.execution import (
    Applied,
    PendingPromotion,
    apply_move,
    complete_promotion,
    replay,
)
from chessreview.core.move import Move
from chessreview.core.move_generator import MoveGenerator, is_in_check
from chessreview.core.notation import move_to_algebraic, movetext
from chessreview.core.piece import Piece
from chessreview.core.rules import Rules
from chessreview.core.types import Square
from chessreview.game.options import GameOptions

_LOGGER = logging.getLogger(__name__)


class GamePhase(IntEnum):
    """Finite-state-machine states for a review session."""

    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    GAME_OVER = auto()


class OutcomeKind(IntEnum):
    APPLIED = auto()
    PROMOTION_PENDING = auto()
    REJECTED = auto()


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What happened to a submitted move."""

    kind: OutcomeKind
    move: Move | None = None
    reason: str = ""

    @property
    def accepted(self) -> bool:
        return self.kind != OutcomeKind.REJECTED

    @classmethod
    def rejected(cls, reason: str) -> MoveOutcome:
        return cls(OutcomeKind.REJECTED, reason=reason)


@dataclass
class GameState:
    """Single-writer owner of the current board and its history.

    Pure data and logic; no threading and no UI.
    """

    options: GameOptions = field(default_factory=GameOptions)
    board: Board = field(init=False)
    turn: Color = field(default=Color.WHITE, init=False)
    phase: GamePhase = field(default=GamePhase.AWAITING_MOVE, init=False)
    status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    history: list[Move] = field(default_factory=list, init=False)
    history_index: int = field(default=-1, init=False)
    pending_promotion: PendingPromotion | None = field(default=None, init=False)
    start_board: Board = field(init=False)
    start_turn: Color = field(default=Color.WHITE, init=False)
    _captured: list[Piece] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, board: Board | None = None, turn: Color = Color.WHITE) -> None:
        """Initialise (or reset) the session.

        Without *board* the configured start layout is used. A custom,
        non-empty board must hold exactly one king per color unless
        validation is switched off in the options.
        """
        if board is None:
            board = self.options.start_layout.board()
        elif self.options.validate_setup and board.piece_count:
            try:
                board.validate()
            except InvalidBoardError:
                _LOGGER.warning("Rejected start board:\n%r", board)
                raise

        self.start_board = board
        self.start_turn = turn
        self.history.clear()
        self._rebuild(-1)

    def clear(self) -> None:
        """Empty the board and drop the history; the turn is kept."""
        self.setup(Board.empty(), self.turn)

    # ── Move submission ──────────────────────────────────────────────────

    def select(self, square: Square) -> list[Square]:
        """Legal destinations of the side to move's piece on *square*."""
        if self.phase != GamePhase.AWAITING_MOVE:
            return []
        piece = self.board.get(square)
        if piece is None or piece.color != self.turn:
            return []
        return MoveGenerator(self.board, self.last_move).legal_moves(square)

    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promote_to: PieceType | None = None,
    ) -> MoveOutcome:
        """Validate and apply a move for the side to move."""
        if self.phase == GamePhase.GAME_OVER:
            return self._reject("game is over", from_sq, to_sq)
        if self.phase == GamePhase.AWAITING_PROMOTION:
            return self._reject("promotion choice pending", from_sq, to_sq)
        if promote_to is not None and promote_to not in PROMOTION_TYPES:
            return self._reject("invalid promotion choice", from_sq, to_sq)

        piece = self.board.get(from_sq)
        if piece is None:
            return self._reject("no piece on origin", from_sq, to_sq)
        if piece.color != self.turn:
            return self._reject(f"not {piece.color!s}'s turn", from_sq, to_sq)
        gen = MoveGenerator(self.board, self.last_move)
        if not gen.is_legal_move(from_sq, to_sq):
            return self._reject("illegal move", from_sq, to_sq)

        result = apply_move(self.board, from_sq, to_sq, promote_to)
        if isinstance(result, PendingPromotion):
            self.pending_promotion = result
            self.phase = GamePhase.AWAITING_PROMOTION
            _LOGGER.debug("Promotion pending on %s for %s", result.square, result.color)
            return MoveOutcome(OutcomeKind.PROMOTION_PENDING)

        self._commit(result)
        return MoveOutcome(OutcomeKind.APPLIED, result.move)

    def complete_promotion(self, piece_type: PieceType) -> MoveOutcome:
        """Finish the pending promotion with *piece_type*."""
        pending = self.pending_promotion
        if pending is None:
            return MoveOutcome.rejected("no promotion pending")
        if piece_type not in PROMOTION_TYPES:
            return self._reject(
                "invalid promotion choice", pending.from_sq, pending.square
            )

        result = complete_promotion(pending, piece_type)
        self.pending_promotion = None
        self._commit(result)
        return MoveOutcome(OutcomeKind.APPLIED, result.move)

    def cancel_promotion(self) -> None:
        """Drop a pending promotion; the board was never changed."""
        if self.pending_promotion is not None:
            self.pending_promotion = None
            self._refresh_status()

    def _commit(self, result: Applied) -> None:
        # Moving from an earlier point in history discards the old future.
        del self.history[self.history_index + 1 :]
        self.history.append(result.move)
        self.history_index = len(self.history) - 1

        self.board = result.board
        if result.move.captured is not None:
            self._captured.append(result.move.captured)
        self.turn = self.turn.opposite
        _LOGGER.debug("Applied %s (%s)", move_to_algebraic(result.move), result.move)
        self._refresh_status()

    def _reject(self, reason: str, from_sq: Square, to_sq: Square) -> MoveOutcome:
        _LOGGER.warning("Rejected move %s-%s: %s", from_sq, to_sq, reason)
        return MoveOutcome.rejected(reason)

    # ── History navigation ───────────────────────────────────────────────

    def undo(self) -> bool:
        """Step back one move. Returns False at the start of the game."""
        if self.history_index < 0:
            return False
        self._rebuild(self.history_index - 1)
        return True

    def redo(self) -> bool:
        """Step forward one move. Returns False at the tip."""
        if self.history_index >= len(self.history) - 1:
            return False
        self._rebuild(self.history_index + 1)
        return True

    def jump_to(self, index: int) -> None:
        """Show the position after ``history[index]`` (-1 = start)."""
        if not -1 <= index < len(self.history):
            raise IndexError(f"History index out of range: {index}")
        self._rebuild(index)

    def _rebuild(self, index: int) -> None:
        self.board, self._captured = replay(
            self.start_board, self.history[: index + 1]
        )
        self.history_index = index
        self.turn = self.start_turn
        if (index + 1) % 2:
            self.turn = self.start_turn.opposite
        self.pending_promotion = None
        _LOGGER.debug("History cursor at %d of %d", index, len(self.history))
        self._refresh_status()

    def _refresh_status(self) -> None:
        if self.board.piece_count == 0:
            self.status = GameStatus.IN_PROGRESS
        else:
            self.status = Rules.game_status(self.board, self.turn, self.last_move)

        if self.status == GameStatus.IN_PROGRESS:
            self.phase = GamePhase.AWAITING_MOVE
            return
        if self.phase != GamePhase.GAME_OVER:
            _LOGGER.info("Game over: %s (%s)", self.status.name, self.result.name)
        self.phase = GamePhase.GAME_OVER

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def last_move(self) -> Move | None:
        if self.history_index < 0:
            return None
        return self.history[self.history_index]

    @property
    def ply_count(self) -> int:
        return self.history_index + 1

    @property
    def can_undo(self) -> bool:
        return self.history_index >= 0

    @property
    def can_redo(self) -> bool:
        return self.history_index < len(self.history) - 1

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self.status, self.turn)

    @property
    def in_check(self) -> bool:
        return is_in_check(self.board, self.turn)

    def captured(self, color: Color) -> list[Piece]:
        """Pieces of *color* taken so far, in capture order."""
        return [p for p in self._captured if p.color == color]

    @property
    def material_advantage(self) -> int:
        """White's captured material minus black's, in pawns."""
        white_gain = sum(p.value for p in self.captured(Color.BLACK))
        black_gain = sum(p.value for p in self.captured(Color.WHITE))
        return white_gain - black_gain

    def movetext(self) -> str:
        """Whole move list as numbered algebraic text."""
        return movetext(self.history, self.start_turn)
