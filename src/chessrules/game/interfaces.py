"""Shared definitions for the game layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chessrules.core.enums import PieceType
from chessrules.core.piece import PROMOTION_TYPES

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game session."""

    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # pawn reached the last row, kind not chosen yet
    GAME_OVER = auto()


# ── Configuration ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable session settings.

    Args:
        checkmate_bonus: Points added to the winner's final score on mate.
        auto_promotion: Promote to this kind without asking the player.
    """

    checkmate_bonus: int = 10
    auto_promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if self.checkmate_bonus < 0:
            raise ValueError(f"checkmate_bonus must be >= 0, got {self.checkmate_bonus}")
        if self.auto_promotion is not None and self.auto_promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot auto-promote to {self.auto_promotion.name}")
