"""Tests for the Qt session bridge."""

from __future__ import annotations

import pytest

pytest.importorskip("PyQt6.QtTest")

from PyQt6.QtTest import QSignalSpy  # noqa: E402

from chessrules.core.enums import Color, PieceType  # noqa: E402
from chessrules.core.rules import Verdict  # noqa: E402
from chessrules.core.types import Square  # noqa: E402
from chessrules.game.interfaces import GamePhase  # noqa: E402
from chessrules.game.session import GameSession  # noqa: E402
from chessrules.qt_bridge import SessionBridge  # noqa: E402

E2 = Square(6, 4)
E3 = Square(5, 4)
E4 = Square(4, 4)
D2 = Square(6, 3)


def _click(bridge: SessionBridge, *squares: Square) -> None:
    for sq in squares:
        bridge.click_square(sq.row, sq.col)


class TestSelection:
    def test_select_own_piece(self) -> None:
        bridge = SessionBridge(GameSession.new())
        changed = QSignalSpy(bridge.selection_changed)

        _click(bridge, E2)

        assert bridge.selected == E2
        assert set(bridge.targets) == {E3, E4}
        assert len(changed) == 1
        assert changed[0][0] == E2

    def test_empty_square_without_selection_is_ignored(self) -> None:
        bridge = SessionBridge(GameSession.new())
        changed = QSignalSpy(bridge.selection_changed)
        _click(bridge, E4)
        assert bridge.selected is None
        assert len(changed) == 0

    def test_opponent_piece_cannot_be_selected(self) -> None:
        bridge = SessionBridge(GameSession.new())
        _click(bridge, Square(1, 4))
        assert bridge.selected is None

    def test_same_square_deselects(self) -> None:
        bridge = SessionBridge(GameSession.new())
        _click(bridge, E2, E2)
        assert bridge.selected is None
        assert bridge.targets == []

    def test_other_own_piece_reselects(self) -> None:
        bridge = SessionBridge(GameSession.new())
        _click(bridge, E2, D2)
        assert bridge.selected == D2

    def test_click_outside_board_is_ignored(self) -> None:
        bridge = SessionBridge(GameSession.new())
        bridge.click_square(8, 0)
        bridge.click_square(-1, 3)
        assert bridge.selected is None


class TestMoves:
    def test_two_clicks_play_a_move(self) -> None:
        session = GameSession.new()
        bridge = SessionBridge(session)
        applied = QSignalSpy(bridge.move_applied)

        _click(bridge, E2, E4)

        assert len(applied) == 1
        assert str(applied[0][0].move) == "e2e4"
        assert session.side_to_move == Color.BLACK
        assert bridge.selected is None

    def test_non_target_click_is_rejected(self) -> None:
        session = GameSession.new()
        bridge = SessionBridge(session)
        rejected = QSignalSpy(bridge.move_rejected)

        _click(bridge, E2, Square(3, 4))

        assert len(rejected) == 1
        assert rejected[0][0] == E2
        assert rejected[0][1] == Square(3, 4)
        assert session.ply_count == 0
        assert bridge.selected is None

    def test_promotion_requested_and_chosen(self) -> None:
        session = GameSession.new(fen="8/4P3/8/8/8/8/8/k3K3 w - - 0 1")
        bridge = SessionBridge(session)
        requested = QSignalSpy(bridge.promotion_requested)
        applied = QSignalSpy(bridge.move_applied)

        _click(bridge, Square(1, 4), Square(0, 4))
        assert len(requested) == 1
        assert requested[0][0] == Color.WHITE
        assert len(applied) == 0

        bridge.choose_promotion(int(PieceType.QUEEN))
        assert len(applied) == 1
        assert applied[0][0].move.promotion == PieceType.QUEEN

    @pytest.mark.parametrize("kind", [int(PieceType.KING), int(PieceType.PAWN), 0, 42])
    def test_unusable_promotion_choice_is_rejected(self, kind: int) -> None:
        session = GameSession.new(fen="7k/P7/8/8/8/8/8/K7 w - - 0 1")
        bridge = SessionBridge(session)
        rejected = QSignalSpy(bridge.promotion_rejected)
        applied = QSignalSpy(bridge.move_applied)

        _click(bridge, Square(1, 0), Square(0, 0))
        assert session.phase == GamePhase.AWAITING_PROMOTION

        bridge.choose_promotion(kind)

        assert len(rejected) == 1
        assert rejected[0][0] == kind
        assert len(applied) == 0
        assert session.phase == GamePhase.AWAITING_PROMOTION
        assert session.pending_promotion is not None

        # A valid choice afterwards still completes the move.
        bridge.choose_promotion(int(PieceType.QUEEN))
        assert len(applied) == 1
        assert session.phase == GamePhase.AWAITING_MOVE

    def test_game_over_signal(self) -> None:
        bridge = SessionBridge(GameSession.new())
        over = QSignalSpy(bridge.game_over)

        _click(bridge, Square(6, 5), Square(5, 5))  # f2-f3
        _click(bridge, Square(1, 4), Square(3, 4))  # e7-e5
        _click(bridge, Square(6, 6), Square(4, 6))  # g2-g4
        _click(bridge, Square(0, 3), Square(4, 7))  # Qd8-h4

        assert len(over) == 1
        assert over[0][0] == Verdict.checkmate(Color.BLACK)
        # Clicks after the game has ended do nothing.
        _click(bridge, E2)
        assert bridge.selected is None


class TestSetSession:
    def test_old_session_is_detached(self) -> None:
        old = GameSession.new()
        bridge = SessionBridge(old)
        _click(bridge, E2)

        new = GameSession.new()
        bridge.set_session(new)
        applied = QSignalSpy(bridge.move_applied)

        assert bridge.session is new
        assert bridge.selected is None
        old.submit(E2, E4)
        assert len(applied) == 0
        new.submit(E2, E4)
        assert len(applied) == 1
