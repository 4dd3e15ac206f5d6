"""Chess rules engine and game-review session."""

__version__ = "0.1.0"
