"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, MoveGenerator, Rules, parse_square

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.legal_moves(parse_square("e2")):
        print(move)
"""

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType, VerdictKind
from chessrules.core.fen import STARTING_FEN, Setup, board_from_fen, setup_to_fen
from chessrules.core.move import Move
from chessrules.core.move_applier import apply_move, derive_move
from chessrules.core.move_generator import MoveGenerator, promotion_choices
from chessrules.core.piece import PIECE_VALUES, PROMOTION_TYPES, Piece
from chessrules.core.rules import NO_VERDICT, Rules, Verdict
from chessrules.core.types import Square, is_on_board, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "PieceType",
    "VerdictKind",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "NO_VERDICT",
    "PIECE_VALUES",
    "PROMOTION_TYPES",
    "Piece",
    "Rules",
    "Verdict",
    # Move application
    "apply_move",
    "derive_move",
    "promotion_choices",
    # Position descriptions
    "STARTING_FEN",
    "Setup",
    "board_from_fen",
    "setup_to_fen",
]
