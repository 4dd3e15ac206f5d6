"""Configuration for a review session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chessreview.core.board import Board


class StartLayout(IntEnum):
    """Board a new session starts from."""

    STANDARD = auto()
    EMPTY = auto()

    def board(self) -> Board:
        if self == StartLayout.EMPTY:
            return Board.empty()
        return Board.initial()


@dataclass(slots=True, frozen=True)
class GameOptions:
    """Immutable session settings.

    Args:
        start_layout: Position used by :meth:`GameState.setup` when no board
            is given.
        validate_setup: Reject custom start boards that break the
            one-king-per-color invariant.
    """

    start_layout: StartLayout = StartLayout.STANDARD
    validate_setup: bool = True
