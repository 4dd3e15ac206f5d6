"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessreview.core.board import Board
from chessreview.game.state import GameState

# Kings on a8/e1 with a white pawn one step from promotion.
PROMOTION_DIAGRAM = """
k . . . . . . .
. . . . P . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . K . . .
"""


@pytest.fixture
def initial_board() -> Board:
    return Board.initial()


@pytest.fixture
def promotion_board() -> Board:
    return Board.from_diagram(PROMOTION_DIAGRAM)


@pytest.fixture
def state() -> GameState:
    """Fresh review session from the standard start position."""
    return GameState()
