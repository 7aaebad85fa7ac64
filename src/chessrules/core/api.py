"""Stateless function interface to the rules engine.

Every function takes values and returns values; nothing is cached between
calls, so any caller thread may use them on its own boards.
"""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color
from chessrules.core.move import Move
from chessrules.core.move_applier import apply_move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules, Verdict
from chessrules.core.types import Square


def initial_board() -> Board:
    """The standard starting position."""
    return Board.initial()


def legal_moves(
    board: Board, square: Square, en_passant: Square | None = None
) -> list[Move]:
    """Legal moves of the piece on *square*, for highlighting and selection."""
    return MoveGenerator(board, en_passant).legal_moves(square)


def in_check(board: Board, color: Color) -> bool:
    return Rules.is_in_check(board, color)


def is_checkmate(board: Board, color: Color, en_passant: Square | None = None) -> bool:
    return Rules.is_checkmate(board, color, en_passant)


def is_stalemate(board: Board, color: Color, en_passant: Square | None = None) -> bool:
    return Rules.is_stalemate(board, color, en_passant)


def verdict(
    board: Board, side_to_move: Color, en_passant: Square | None = None
) -> Verdict:
    return Rules.verdict(board, side_to_move, en_passant)


def material_score(board: Board, color: Color) -> int:
    return Rules.material_score(board, color)


def piece_glyph(piece: Piece) -> str:
    """Unicode display symbol for *piece*."""
    return piece.symbol


def next_en_passant(move: Move) -> Square | None:
    """En-passant target to track after *move* has been played."""
    return move.en_passant_square


__all__ = [
    "apply_move",
    "in_check",
    "initial_board",
    "is_checkmate",
    "is_stalemate",
    "legal_moves",
    "material_score",
    "next_en_passant",
    "piece_glyph",
    "verdict",
]
