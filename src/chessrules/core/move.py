"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import PieceType
from chessrules.core.piece import PROMOTION_TYPES, Piece
from chessrules.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable, self-describing record of a single move.

    ``piece`` and ``captured`` are stored by value as they were before the
    move, so a move can be applied to a scratch board without consulting the
    board it was generated from.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    is_en_passant: bool = False
    is_castling: bool = False
    promotion: PieceType | None = None

    # ── Classification ───────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_double_step(self) -> bool:
        return (
            self.piece.piece_type == PieceType.PAWN
            and abs(self.to_sq.row - self.from_sq.row) == 2
        )

    @property
    def is_promotion(self) -> bool:
        """Pawn arriving on its last row (promotion kind may still be unset)."""
        return (
            self.piece.piece_type == PieceType.PAWN
            and self.to_sq.row == self.piece.color.promotion_row
        )

    @property
    def en_passant_square(self) -> Square | None:
        """Square passed over by a two-square pawn advance."""
        if not self.is_double_step:
            return None
        return Square((self.from_sq.row + self.to_sq.row) // 2, self.from_sq.col)

    def with_promotion(self, piece_type: PieceType) -> Move:
        if piece_type not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {piece_type.name}")
        return replace(self, promotion=piece_type)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += str(Piece(self.piece.color, self.promotion)).lower()
        return base
