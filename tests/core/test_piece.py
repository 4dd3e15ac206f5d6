"""Tests for Piece."""

import pytest

from chessreview.core.enums import Color, PieceType
from chessreview.core.piece import Piece


class TestPiece:
    def test_moved_returns_copy(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK)
        moved = rook.moved()
        assert moved.has_moved
        assert not rook.has_moved
        assert moved.moved() is moved

    def test_diagram_chars(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KNIGHT)) == "N"
        assert str(Piece(Color.BLACK, PieceType.QUEEN)) == "q"
        assert Piece.from_char("k") == Piece(Color.BLACK, PieceType.KING)

    def test_from_char_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    def test_unicode_symbols(self) -> None:
        assert Piece(Color.WHITE, PieceType.KING).symbol == "♔"
        assert Piece(Color.BLACK, PieceType.KNIGHT).symbol == "♞"

    def test_value_is_material(self) -> None:
        assert Piece(Color.BLACK, PieceType.QUEEN).value == 9
        assert Piece(Color.WHITE, PieceType.KING).value == 0
