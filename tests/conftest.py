"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color
from chessrules.core.move import Move
from chessrules.core.move_applier import apply_move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.types import Square, parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def find_move(
    board: Board, uci: str, en_passant: Square | None = None
) -> Move:
    """Legal move matching coordinates like ``"e2e4"``; fails the test if absent."""
    from_sq = parse_square(uci[0:2])
    to_sq = parse_square(uci[2:4])
    for move in MoveGenerator(board, en_passant).legal_moves(from_sq):
        if move.to_sq == to_sq:
            return move
    pytest.fail(f"{uci} is not legal on\n{board!r}")


def play_line(*moves: str) -> tuple[Board, Square | None, Color]:
    """Play coordinate moves from the initial position, tracking en passant."""
    board = Board.initial()
    en_passant: Square | None = None
    side = Color.WHITE
    for uci in moves:
        move = find_move(board, uci, en_passant)
        board = apply_move(board, move)
        en_passant = move.en_passant_square
        side = side.opposite
    return board, en_passant, side


@pytest.fixture
def find() -> Callable[..., Move]:
    """Look up a legal move by its coordinates."""
    return find_move


@pytest.fixture
def play() -> Callable[..., tuple[Board, Square | None, Color]]:
    """Play a line of coordinate moves from the initial position."""
    return play_line
