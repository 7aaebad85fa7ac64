"""Qt bridge exposing a :class:`GameSession` to a board widget.

Requires the ``qt`` extra (PyQt6). The bridge owns the square selection
that a two-click board needs and forwards everything else to the session.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.enums import PieceType
from chessrules.core.move import Move
from chessrules.core.rules import Verdict
from chessrules.core.types import Square, is_on_board
from chessrules.game.interfaces import GamePhase
from chessrules.game.session import GameSession, MoveRecord

_LOGGER = logging.getLogger(__name__)


class SessionBridge(QObject):
    """Translates board clicks into session calls and session events into signals."""

    selection_changed = pyqtSignal(object, object)  # Square | None, list[Square]
    move_applied = pyqtSignal(object)  # MoveRecord
    move_rejected = pyqtSignal(object, object)  # from Square, to Square
    promotion_requested = pyqtSignal(object)  # Color
    promotion_rejected = pyqtSignal(int, str)  # requested kind, reason
    game_over = pyqtSignal(object)  # Verdict

    def __init__(self, session: GameSession, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._session = session
        self._selected: Square | None = None
        self._targets: list[Square] = []
        self._subscribe(session)

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def selected(self) -> Square | None:
        return self._selected

    @property
    def targets(self) -> list[Square]:
        return list(self._targets)

    def set_session(self, session: GameSession) -> None:
        """Switch to a new session (e.g. after the user starts a new game)."""
        self._unsubscribe(self._session)
        self._session = session
        self._subscribe(session)
        self._select(None)

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(int, int)
    def click_square(self, row: int, col: int) -> None:
        """Handle a click on (*row*, *col*)."""
        if not is_on_board(row, col):
            _LOGGER.debug("Ignoring click outside the board: (%d, %d)", row, col)
            return
        session = self._session
        if session.phase != GamePhase.AWAITING_MOVE:
            return

        sq = Square(row, col)
        piece = session.board[sq]
        own_piece = piece is not None and piece.color == session.side_to_move

        if self._selected is None:
            if own_piece:
                self._select(sq)
            return
        if sq == self._selected:
            self._select(None)
            return
        if own_piece:
            self._select(sq)
            return

        from_sq = self._selected
        if sq not in self._targets:
            _LOGGER.debug("Rejected click move %s-%s", from_sq, sq)
            self._select(None)
            self.move_rejected.emit(from_sq, sq)
            return

        self._select(None)
        session.submit(from_sq, sq)

    @pyqtSlot(int)
    def choose_promotion(self, piece_type: int) -> None:
        """Finish a pending promotion with the chosen piece kind.

        An unusable kind leaves the promotion pending and is reported through
        :attr:`promotion_rejected`.
        """
        try:
            self._session.promote(PieceType(piece_type))
        except ValueError as exc:
            _LOGGER.debug("Rejected promotion choice %d: %s", piece_type, exc)
            self.promotion_rejected.emit(piece_type, str(exc))

    # ── Internal ─────────────────────────────────────────────────────────

    def _subscribe(self, session: GameSession) -> None:
        session.events.on_move.append(self._on_move)
        session.events.on_promotion_needed.append(self._on_promotion_needed)
        session.events.on_game_over.append(self._on_game_over)

    def _unsubscribe(self, session: GameSession) -> None:
        session.events.on_move.remove(self._on_move)
        session.events.on_promotion_needed.remove(self._on_promotion_needed)
        session.events.on_game_over.remove(self._on_game_over)

    def _select(self, sq: Square | None) -> None:
        self._selected = sq
        self._targets = self._session.targets(sq) if sq is not None else []
        self.selection_changed.emit(self._selected, list(self._targets))

    def _on_move(self, record: MoveRecord) -> None:
        self.move_applied.emit(record)

    def _on_promotion_needed(self, move: Move) -> None:
        self.promotion_requested.emit(move.piece.color)

    def _on_game_over(self, verdict: Verdict) -> None:
        self.game_over.emit(verdict)
