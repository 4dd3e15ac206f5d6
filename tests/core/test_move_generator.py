"""Tests for pseudo-legal generation, attack/check detection and legality."""

import pytest

from chessreview.core.board import Board
from chessreview.core.enums import Color, PieceType
from chessreview.core.execution import Applied, apply_move
from chessreview.core.move_generator import (
    MoveGenerator,
    all_legal_moves,
    is_in_check,
    is_legal_move,
    is_square_attacked,
    legal_moves,
    pseudo_legal_moves,
)
from chessreview.core.piece import Piece
from chessreview.core.types import (
    ALL_SQUARES,
    A1, B3, C1, C2, D1, D4, E1, E2, E3, E4, E8, F1, F2, G1, H1,
    Square,
)

# Well-known "Kiwipete" test position: castling both ways, pins, captures.
KIWIPETE = """
r . . . k . . r
p . p p q p b .
b n . . p n p .
. . . P N . . .
. p . . P . . .
. . N . . Q . p
P P P B B P P P
R . . . K . . R
"""

CASTLING = """
k . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
R . . . K . . R
"""


def _lone(piece: Piece, sq: Square) -> Board:
    return Board.empty().place(sq, piece)


def _play(board: Board, from_sq: Square, to_sq: Square) -> Applied:
    result = apply_move(board, from_sq, to_sq)
    assert isinstance(result, Applied)
    return result


def _perft(board: Board, color: Color, depth: int, last_move=None) -> int:
    if depth == 0:
        return 1
    nodes = 0
    for move in all_legal_moves(board, color, last_move):
        result = _play(board, move.from_sq, move.to_sq)
        nodes += _perft(result.board, color.opposite, depth - 1, result.move)
    return nodes


class TestPseudoLegalPerPiece:
    def test_empty_origin_has_no_moves(self) -> None:
        assert pseudo_legal_moves(Board.initial(), E4) == []

    def test_knight_in_corner(self) -> None:
        board = _lone(Piece(Color.WHITE, PieceType.KNIGHT), A1)
        assert set(pseudo_legal_moves(board, A1)) == {B3, C2}

    def test_rook_on_empty_board(self) -> None:
        board = _lone(Piece(Color.WHITE, PieceType.ROOK), D4)
        assert len(pseudo_legal_moves(board, D4)) == 14

    def test_bishop_on_empty_board(self) -> None:
        board = _lone(Piece(Color.WHITE, PieceType.BISHOP), D4)
        assert len(pseudo_legal_moves(board, D4)) == 13

    def test_queen_is_rook_plus_bishop(self) -> None:
        board = _lone(Piece(Color.WHITE, PieceType.QUEEN), D4)
        assert len(pseudo_legal_moves(board, D4)) == 27

    def test_king_in_centre(self) -> None:
        board = _lone(Piece(Color.WHITE, PieceType.KING, has_moved=True), D4)
        assert len(pseudo_legal_moves(board, D4)) == 8

    def test_ray_stops_at_own_piece_and_takes_enemy(self) -> None:
        board = Board.from_diagram("""
            . . . . . . . .
            . . . . . . . .
            . . . p . . . .
            . . . . . . . .
            . . . R . . P .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
        """)
        moves = set(pseudo_legal_moves(board, D4))
        assert Square(2, 3) in moves  # d6 capture
        assert Square(1, 3) not in moves  # beyond the capture
        assert Square(4, 5) in moves  # f4
        assert Square(4, 6) not in moves  # own pawn on g4

    def test_knight_jumps_over_pieces(self, initial_board: Board) -> None:
        assert set(pseudo_legal_moves(initial_board, G1)) == {
            Square(5, 5),
            Square(5, 7),
        }


class TestPawnMoves:
    def test_single_and_double_step(self, initial_board: Board) -> None:
        assert set(pseudo_legal_moves(initial_board, E2)) == {E3, E4}

    def test_black_pawn_moves_down_the_board(self, initial_board: Board) -> None:
        assert set(pseudo_legal_moves(initial_board, Square(1, 3))) == {
            Square(2, 3),
            Square(3, 3),
        }

    def test_blocked_pawn(self, initial_board: Board) -> None:
        board = initial_board.place(E3, Piece(Color.BLACK, PieceType.KNIGHT))
        assert pseudo_legal_moves(board, E2) == []

    def test_double_step_blocked_on_far_square(self, initial_board: Board) -> None:
        board = initial_board.place(E4, Piece(Color.BLACK, PieceType.KNIGHT))
        assert pseudo_legal_moves(board, E2) == [E3]

    def test_double_step_keyed_off_start_rank(self) -> None:
        # has_moved is irrelevant; a pawn back on its start row may double step.
        board = _lone(Piece(Color.WHITE, PieceType.PAWN, has_moved=True), E2)
        assert set(pseudo_legal_moves(board, E2)) == {E3, E4}
        board = _lone(Piece(Color.WHITE, PieceType.PAWN), E3)
        assert pseudo_legal_moves(board, E3) == [E4]

    def test_diagonal_capture_only_of_enemy(self) -> None:
        board = Board.from_diagram("""
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . p . N . .
            . . . . P . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
        """)
        assert set(pseudo_legal_moves(board, E4)) == {Square(3, 4), Square(3, 3)}


class TestEnPassant:
    DIAGRAM = """
        . . . . . . . k
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . p . . . .
        . . . . . . . .
        . . . . P . . .
        K . . . . . . .
    """

    def test_capture_after_double_step(self) -> None:
        board = Board.from_diagram(self.DIAGRAM)
        push = _play(board, E2, E4)
        assert push.move.is_double_pawn_push

        black_pawn = Square(4, 3)
        assert E3 in legal_moves(push.board, black_pawn, push.move)

        capture = _play(push.board, black_pawn, E3)
        assert capture.move.is_en_passant
        assert capture.move.captured == Piece(Color.WHITE, PieceType.PAWN, True)
        assert capture.board[E4] is None
        assert capture.board[E3] == Piece(Color.BLACK, PieceType.PAWN, True)

    def test_needs_last_move_context(self) -> None:
        board = Board.from_diagram(self.DIAGRAM)
        push = _play(board, E2, E4)
        assert E3 not in legal_moves(push.board, Square(4, 3))

    def test_expires_after_another_move(self) -> None:
        board = Board.from_diagram(self.DIAGRAM)
        push = _play(board, E2, E4)
        shuffle = _play(push.board, Square(0, 7), Square(0, 6))
        assert E3 not in pseudo_legal_moves(shuffle.board, Square(4, 3), shuffle.move)

    def test_single_step_does_not_allow_it(self) -> None:
        board = Board.from_diagram(self.DIAGRAM)
        step = _play(board, E2, E3)
        step2 = _play(step.board, E3, E4)
        assert Square(5, 4) not in pseudo_legal_moves(
            step2.board, Square(4, 3), step2.move
        )


class TestCastling:
    def test_kingside_and_queenside_offered(self) -> None:
        board = Board.from_diagram(CASTLING)
        moves = set(legal_moves(board, E1))
        assert G1 in moves
        assert C1 in moves

    def test_kingside_execution_moves_rook(self) -> None:
        board = Board.from_diagram(CASTLING)
        result = _play(board, E1, G1)
        assert result.move.is_castling
        assert result.board[G1] == Piece(Color.WHITE, PieceType.KING, True)
        assert result.board[F1] == Piece(Color.WHITE, PieceType.ROOK, True)
        assert result.board[H1] is None
        assert result.board[E1] is None
        # The other rook is untouched.
        assert result.board[A1] == Piece(Color.WHITE, PieceType.ROOK)

    def test_queenside_execution_moves_rook(self) -> None:
        board = Board.from_diagram(CASTLING)
        result = _play(board, E1, C1)
        assert result.board[C1] == Piece(Color.WHITE, PieceType.KING, True)
        assert result.board[D1] == Piece(Color.WHITE, PieceType.ROOK, True)
        assert result.board[A1] is None

    def test_moved_rook_cannot_castle(self) -> None:
        board = Board.from_diagram(CASTLING).place(
            H1, Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        )
        assert G1 not in pseudo_legal_moves(board, E1)
        assert C1 in pseudo_legal_moves(board, E1)

    def test_moved_king_cannot_castle(self) -> None:
        board = Board.from_diagram(CASTLING).place(
            E1, Piece(Color.WHITE, PieceType.KING, has_moved=True)
        )
        assert set(pseudo_legal_moves(board, E1)).isdisjoint({G1, C1})

    def test_blocked_path(self) -> None:
        board = Board.from_diagram(CASTLING).place(
            Square(7, 1), Piece(Color.WHITE, PieceType.KNIGHT)
        )
        assert C1 not in pseudo_legal_moves(board, E1)
        assert G1 in pseudo_legal_moves(board, E1)

    def test_through_check_is_pseudo_legal_only(self) -> None:
        # Black rook on f8 covers f1.
        board = Board.from_diagram(CASTLING).place(
            Square(0, 5), Piece(Color.BLACK, PieceType.ROOK)
        )
        assert G1 in pseudo_legal_moves(board, E1)
        assert G1 not in legal_moves(board, E1)
        assert not is_legal_move(board, E1, G1)
        assert C1 in legal_moves(board, E1)

    def test_out_of_check_is_illegal(self) -> None:
        board = Board.from_diagram(CASTLING).place(
            E8, Piece(Color.BLACK, PieceType.ROOK)
        )
        assert is_in_check(board, Color.WHITE)
        assert G1 not in legal_moves(board, E1)
        assert C1 not in legal_moves(board, E1)

    def test_into_check_is_illegal(self) -> None:
        board = Board.from_diagram(CASTLING).place(
            Square(0, 6), Piece(Color.BLACK, PieceType.ROOK)
        )
        assert G1 not in legal_moves(board, E1)


class TestAttacksAndCheck:
    def test_rook_attacks_its_file(self) -> None:
        board = _lone(Piece(Color.BLACK, PieceType.ROOK), Square(0, 5))
        assert is_square_attacked(board, F1, Color.BLACK)
        assert not is_square_attacked(board, E1, Color.BLACK)
        assert not is_square_attacked(board, F1, Color.WHITE)

    def test_starting_position_not_in_check(self, initial_board: Board) -> None:
        assert not is_in_check(initial_board, Color.WHITE)
        assert not is_in_check(initial_board, Color.BLACK)

    def test_missing_king_is_never_in_check(self) -> None:
        board = _lone(Piece(Color.BLACK, PieceType.QUEEN), D4)
        assert not is_in_check(board, Color.WHITE)

    def test_knight_check(self) -> None:
        board = Board.from_diagram(CASTLING).place(
            Square(5, 3), Piece(Color.BLACK, PieceType.KNIGHT)
        )
        assert is_in_check(board, Color.WHITE)


class TestLegalMoves:
    def test_pinned_piece_cannot_leave_the_line(self) -> None:
        board = Board.from_diagram("""
            k . . . r . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . B . . .
            . . . . K . . .
        """)
        assert pseudo_legal_moves(board, E2)
        assert legal_moves(board, E2) == []

    def test_king_cannot_take_defended_piece(self) -> None:
        board = Board.from_diagram("""
            k . . . r . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . q . . .
            . . . . K . . .
        """)
        moves = legal_moves(board, E1)
        assert E2 not in moves
        assert set(moves) <= {Square(7, 3), F1, Square(6, 3), F2}

    def test_king_cannot_step_into_attack(self) -> None:
        board = Board.from_diagram(CASTLING).place(
            Square(0, 5), Piece(Color.BLACK, PieceType.ROOK)
        )
        moves = legal_moves(board, E1)
        assert F1 not in moves
        assert F2 not in moves

    def test_en_passant_removing_checker_is_legal(self) -> None:
        board = Board.from_diagram("""
            . . . . . . . .
            . . . . . . . .
            . . . . . . . .
            . . . . . k . .
            . . . . . . . .
            . . . . . . . .
            . . . . P . . .
            K . . . . . . .
        """).place(D4, Piece(Color.BLACK, PieceType.PAWN))
        push = _play(board, E2, E4)
        assert is_in_check(push.board, Color.BLACK)
        assert is_legal_move(push.board, D4, E3, push.move)

    def test_illegal_when_not_pseudo_legal(self, initial_board: Board) -> None:
        assert not is_legal_move(initial_board, E2, Square(3, 4))
        assert not is_legal_move(initial_board, E4, E3)

    def test_generator_does_not_mutate_board(self, initial_board: Board) -> None:
        snapshot = Board.initial()
        gen = MoveGenerator(initial_board)
        gen.all_legal_moves(Color.WHITE)
        assert initial_board == snapshot


class TestProperties:
    BOARDS = [
        Board.initial(),
        Board.from_diagram(KIWIPETE),
        Board.from_diagram(CASTLING),
    ]

    @pytest.mark.parametrize("board", BOARDS)
    def test_destinations_stay_on_board(self, board: Board) -> None:
        for sq in ALL_SQUARES:
            for to_sq in pseudo_legal_moves(board, sq):
                assert to_sq.is_valid

    @pytest.mark.parametrize("board", BOARDS)
    def test_legal_subset_of_pseudo_legal(self, board: Board) -> None:
        for sq in ALL_SQUARES:
            assert set(legal_moves(board, sq)) <= set(pseudo_legal_moves(board, sq))

    @pytest.mark.parametrize("board", BOARDS)
    def test_mover_never_left_in_check(self, board: Board) -> None:
        for color in Color:
            for move in all_legal_moves(board, color):
                after = _play(board, move.from_sq, move.to_sq)
                assert not is_in_check(after.board, color), f"{move} leaves check"


class TestMoveCounts:
    def test_starting_position(self, initial_board: Board) -> None:
        assert len(all_legal_moves(initial_board, Color.WHITE)) == 20
        assert len(all_legal_moves(initial_board, Color.BLACK)) == 20

    @pytest.mark.slow
    def test_starting_position_depth_2(self, initial_board: Board) -> None:
        assert _perft(initial_board, Color.WHITE, 2) == 400

    def test_kiwipete(self) -> None:
        board = Board.from_diagram(KIWIPETE)
        moves = all_legal_moves(board, Color.WHITE)
        assert len(moves) == 48
        assert sum(1 for m in moves if m.is_castling) == 2
        assert sum(1 for m in moves if m.is_capture) == 8
