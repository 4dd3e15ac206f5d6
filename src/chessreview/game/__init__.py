"""Game review layer: a single-writer session over the core rules engine.

Quick start::

    from chessreview.game import GameState
    from chessreview.core.types import E2, E4

    state = GameState()
    state.submit_move(E2, E4)
    print(state.movetext())
"""

from chessreview.game.options import GameOptions, StartLayout
from chessreview.game.state import GamePhase, GameState, MoveOutcome, OutcomeKind

__all__ = [
    "GameOptions",
    "GamePhase",
    "GameState",
    "MoveOutcome",
    "OutcomeKind",
    "StartLayout",
]
