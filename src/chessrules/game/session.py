"""Game session — turn state the rules engine leaves to its caller.

The engine is stateless; a session owns the current board, whose turn it is,
the en-passant target, the linear move log and the verdict, and notifies
listeners through simple callbacks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType, VerdictKind
from chessrules.core.fen import Setup, board_from_fen, setup_to_fen
from chessrules.core.move import Move
from chessrules.core.move_applier import apply_move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import PROMOTION_TYPES
from chessrules.core.rules import NO_VERDICT, Rules, Verdict
from chessrules.core.types import Square
from chessrules.game.interfaces import GamePhase, SessionConfig

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move log."""

    move: Move
    board_after: Board
    en_passant_after: Square | None
    was_check: bool = False

    @property
    def was_capture(self) -> bool:
        return self.move.is_capture


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
PromotionCallback = Callable[[Move], None]  # the parked move
GameOverCallback = Callable[[Verdict], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_needed: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Tracks one game from a starting setup to its verdict.

    Designed to be driven from a single thread (the caller's UI thread).
    """

    __slots__ = (
        "_config",
        "_board",
        "_side_to_move",
        "_en_passant",
        "_phase",
        "_verdict",
        "_history",
        "_pending",
        "events",
    )

    def __init__(
        self, config: SessionConfig | None = None, setup: Setup | None = None
    ) -> None:
        setup = setup or Setup(Board.initial())
        self._config = config or SessionConfig()
        self._board = setup.board
        self._side_to_move = setup.side_to_move
        self._en_passant = setup.en_passant
        self._history: list[MoveRecord] = []
        self._pending: Move | None = None
        self._verdict = Rules.verdict(self._board, self._side_to_move, self._en_passant)
        self._phase = GamePhase.GAME_OVER if self._verdict.is_over else GamePhase.AWAITING_MOVE
        self.events = SessionEvents()

    @classmethod
    def new(
        cls, config: SessionConfig | None = None, fen: str | None = None
    ) -> GameSession:
        """Session from the initial position or from a FEN description."""
        setup = board_from_fen(fen) if fen is not None else None
        return cls(config, setup)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def board(self) -> Board:
        return self._board

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def en_passant(self) -> Square | None:
        return self._en_passant

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def verdict(self) -> Verdict:
        return self._verdict

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    @property
    def pending_promotion(self) -> Move | None:
        return self._pending

    @property
    def move_history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    @property
    def win_reason(self) -> str:
        if self._verdict.kind == VerdictKind.CHECKMATE:
            winner = str(self._verdict.winner).capitalize()
            return f"Checkmate! {winner} wins!"
        if self._verdict.kind == VerdictKind.STALEMATE:
            return "Stalemate - Draw!"
        return ""

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves of the side to move's piece on *sq*."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return []
        piece = self._board[sq]
        if piece is None or piece.color != self._side_to_move:
            return []
        return MoveGenerator(self._board, self._en_passant).legal_moves(sq)

    def targets(self, sq: Square) -> list[Square]:
        """Destination squares to highlight for the piece on *sq*."""
        return [m.to_sq for m in self.legal_moves(sq)]

    def in_check(self) -> bool:
        return Rules.is_in_check(self._board, self._side_to_move)

    def scores(self) -> dict[Color, int]:
        return {color: Rules.material_score(self._board, color) for color in Color}

    def final_scores(self) -> dict[Color, int]:
        """Material scores with the checkmate bonus credited to the winner."""
        scores = self.scores()
        if self._verdict.kind == VerdictKind.CHECKMATE and self._verdict.winner is not None:
            scores[self._verdict.winner] += self._config.checkmate_bonus
        return scores

    def to_fen(self) -> str:
        setup = Setup(self._board, self._side_to_move, self._en_passant)
        return setup_to_fen(setup, fullmove_number=self.ply_count // 2 + 1)

    # ── Move submission ──────────────────────────────────────────────────

    def submit(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord | None:
        """Play the legal move *from_sq* → *to_sq* for the side to move.

        Returns the new record, or ``None`` when the move is rejected or is
        parked waiting for :meth:`promote`.
        """
        if self._phase != GamePhase.AWAITING_MOVE:
            _LOGGER.debug("Move %s-%s rejected in phase %s", from_sq, to_sq, self._phase.name)
            return None

        move = next((m for m in self.legal_moves(from_sq) if m.to_sq == to_sq), None)
        if move is None:
            _LOGGER.debug("Illegal move %s-%s for %s", from_sq, to_sq, self._side_to_move)
            return None

        if not move.is_promotion:
            if promotion is not None:
                _LOGGER.debug("Ignoring promotion %s for non-promoting move %s", promotion, move)
            return self._commit(move)

        kind = promotion if promotion is not None else self._config.auto_promotion
        if kind is None:
            self._pending = move
            self._phase = GamePhase.AWAITING_PROMOTION
            for cb in self.events.on_promotion_needed:
                cb(move)
            return None
        if kind not in PROMOTION_TYPES:
            _LOGGER.debug("Cannot promote %s to %s", move, kind)
            return None
        move = move.with_promotion(kind)

        return self._commit(move)

    def promote(self, kind: PieceType) -> MoveRecord | None:
        """Complete the parked promotion with *kind*."""
        if self._pending is None:
            _LOGGER.debug("No promotion pending")
            return None
        move = self._pending.with_promotion(kind)
        self._pending = None
        self._phase = GamePhase.AWAITING_MOVE
        return self._commit(move)

    # ── Internal ─────────────────────────────────────────────────────────

    def _commit(self, move: Move) -> MoveRecord:
        self._board = apply_move(self._board, move)
        self._en_passant = move.en_passant_square
        self._side_to_move = self._side_to_move.opposite
        self._verdict = Rules.verdict(self._board, self._side_to_move, self._en_passant)

        record = MoveRecord(
            move=move,
            board_after=self._board,
            en_passant_after=self._en_passant,
            was_check=self.in_check(),
        )
        self._history.append(record)
        _LOGGER.debug("Played %s (ply %d)", move, len(self._history))

        for cb in self.events.on_move:
            cb(record)

        if self._verdict.is_over:
            self._phase = GamePhase.GAME_OVER
            _LOGGER.info("Game over: %s", self.win_reason)
            for cb in self.events.on_game_over:
                cb(self._verdict)

        return record
