"""FEN parsing and serialization tests."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.fen import STARTING_FEN, Setup, board_from_fen, setup_to_fen
from chessrules.core.piece import Piece
from chessrules.core.types import A1, A8, E1, E8, H1, H8, parse_square


class TestBoardFromFen:
    def test_starting_position(self) -> None:
        setup = board_from_fen(STARTING_FEN)
        assert setup.board == Board.initial()
        assert setup.side_to_move == Color.WHITE
        assert setup.en_passant is None

    def test_side_and_en_passant(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        setup = board_from_fen(fen)
        assert setup.side_to_move == Color.BLACK
        assert setup.en_passant == parse_square("e3")

    def test_clocks_are_optional(self) -> None:
        setup = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - -")
        assert setup.board.king_square(Color.WHITE) == E1

    def test_castling_letters_set_moved_flags(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1").board
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board[H1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board[A1] == Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)
        assert board[A8] == Piece(Color.BLACK, PieceType.ROOK)
        assert board[H8] == Piece(Color.BLACK, PieceType.ROOK, has_moved=True)

    def test_no_rights_marks_kings_moved(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w - - 0 1").board
        assert all(
            p.has_moved
            for _sq, p in board
            if p.piece_type in (PieceType.KING, PieceType.ROOK)
        )

    def test_king_off_home_square_is_moved(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/R4K1R w KQ - 0 1").board
        king = board[parse_square("f1")]
        assert king is not None and king.has_moved

    def test_pawns_never_moved(self) -> None:
        board = board_from_fen("4k3/8/8/4p3/4P3/8/8/4K3 w - - 0 1").board
        assert all(not p.has_moved for _sq, p in board if p.piece_type == PieceType.PAWN)

    @pytest.mark.parametrize(
        ("fen", "message"),
        [
            ("8/8/8/8/8/8/8 w - - 0 1", "8 ranks"),
            ("9/8/8/8/8/8/8/8 w - - 0 1", "digit"),
            ("ppppppppp/8/8/8/8/8/8/8 w - - 0 1", "width"),
            ("7/8/8/8/8/8/8/8 w - - 0 1", "width"),
            ("8/8/8/8/8/8/8/8 x - - 0 1", "side-to-move"),
            ("8/8/8/8/8/8/8/8 w KX - 0 1", "castling"),
            ("8/8/8/8/8/8/8/8 w KK - 0 1", "castling"),
            ("8/8/8/8/8/8/8/8 w - e3 0 1", "en-passant"),
            ("8/8/8/8/8/8/8/8 w - - x 1", "move counter"),
            ("8/8/8/8/8/8/8/8 w", "4-6 fields"),
            ("x7/8/8/8/8/8/8/8 w - - 0 1", "piece character"),
        ],
    )
    def test_invalid(self, fen: str, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            board_from_fen(fen)

    def test_invalid_en_passant_square_name(self) -> None:
        with pytest.raises(ValueError, match="Invalid square name"):
            board_from_fen("8/8/8/8/8/8/8/8 w - z9 0 1")


class TestSetupToFen:
    def test_starting_position(self) -> None:
        assert setup_to_fen(Setup(Board.initial())) == STARTING_FEN

    @pytest.mark.parametrize(
        "fen",
        [
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 1",
            "r3k2r/8/8/8/8/8/8/R3K2R b Kq - 0 1",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert setup_to_fen(board_from_fen(fen)) == fen

    def test_moved_king_drops_rights(self, play) -> None:
        board, ep, side = play("e2e4", "e7e5", "e1e2")
        fen = setup_to_fen(Setup(board, side, ep), fullmove_number=2)
        assert fen == "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPPKPPP/RNBQ1BNR b kq - 0 2"

    def test_halfmove_clock_is_not_tracked(self) -> None:
        fen = "4k3/8/8/8/8/8/8/4K3 w - - 12 40"
        assert setup_to_fen(board_from_fen(fen), 40) == "4k3/8/8/8/8/8/8/4K3 w - - 0 40"
