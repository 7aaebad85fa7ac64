"""High-level chess rules: check, checkmate, stalemate, material."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import Color, VerdictKind
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.types import Square


@dataclass(frozen=True, slots=True)
class Verdict:
    """Game-end verdict for the side to move."""

    kind: VerdictKind = VerdictKind.NONE
    winner: Color | None = None

    @property
    def is_over(self) -> bool:
        return self.kind != VerdictKind.NONE

    @classmethod
    def checkmate(cls, winner: Color) -> Verdict:
        return cls(VerdictKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> Verdict:
        return cls(VerdictKind.STALEMATE)


NO_VERDICT = Verdict()


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Draws by repetition and the fifty-move rule are not detected.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(
        board: Board, color: Color, en_passant: Square | None = None
    ) -> bool:
        gen = MoveGenerator(board, en_passant)
        if not gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(
        board: Board, color: Color, en_passant: Square | None = None
    ) -> bool:
        gen = MoveGenerator(board, en_passant)
        if gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def verdict(
        board: Board, side_to_move: Color, en_passant: Square | None = None
    ) -> Verdict:
        """Classify the position for *side_to_move*."""
        gen = MoveGenerator(board, en_passant)
        if gen.has_legal_move(side_to_move):
            return NO_VERDICT
        if gen.is_in_check(side_to_move):
            return Verdict.checkmate(side_to_move.opposite)
        return Verdict.stalemate()

    @staticmethod
    def material_score(board: Board, color: Color) -> int:
        """Sum of piece values over *color*'s remaining pieces."""
        return sum(piece.value for _sq, piece in board.pieces(color))
