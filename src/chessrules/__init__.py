"""chessrules — a pure, deterministic chess rules engine."""

from chessrules.core.api import (
    apply_move,
    in_check,
    initial_board,
    is_checkmate,
    is_stalemate,
    legal_moves,
    material_score,
    next_en_passant,
    piece_glyph,
    verdict,
)
from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType, VerdictKind
from chessrules.core.fen import STARTING_FEN, Setup, board_from_fen, setup_to_fen
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.rules import Verdict
from chessrules.core.types import Square, parse_square
from chessrules.game.interfaces import GamePhase, SessionConfig
from chessrules.game.session import GameSession

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Color",
    "GamePhase",
    "GameSession",
    "Move",
    "Piece",
    "PieceType",
    "STARTING_FEN",
    "SessionConfig",
    "Setup",
    "Square",
    "Verdict",
    "VerdictKind",
    "apply_move",
    "board_from_fen",
    "in_check",
    "initial_board",
    "is_checkmate",
    "is_stalemate",
    "legal_moves",
    "material_score",
    "next_en_passant",
    "parse_square",
    "piece_glyph",
    "setup_to_fen",
    "verdict",
]
