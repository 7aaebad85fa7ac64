"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import ALL_SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Immutable 64-square board value.

    Boards are never changed in place: :meth:`replace` returns a fresh board
    so hypothetical positions built during legality testing can never alias
    the game board.
    """

    __slots__ = ("_squares",)

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        elif len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = tuple(squares)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq[0] * 8 + sq[1]]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq[0] * 8 + sq[1]] is None

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in row-major order."""
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece is not None:
                yield sq, piece

    def rows(self) -> list[list[Piece | None]]:
        """Grid as nested lists, row 0 first."""
        return [list(self._squares[r * 8 : r * 8 + 8]) for r in range(8)]

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[tuple[Square, Piece]]:
        """(square, piece) pairs for every piece of *color*."""
        return [(sq, p) for sq, p in self if p.color == color]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` when it is absent."""
        for sq, piece in self:
            if piece.piece_type == PieceType.KING and piece.color == color:
                return sq
        return None

    # -- Copy-on-write ------------------------------------------------------

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied; ``None`` clears a square."""
        squares = list(self._squares)
        for sq, piece in changes.items():
            squares[sq[0] * 8 + sq[1]] = piece
        return Board(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        squares: list[Piece | None] = [None] * 64
        for col, pt in enumerate(_BACK_RANK):
            squares[col] = Piece(Color.BLACK, pt)
            squares[8 + col] = Piece(Color.BLACK, PieceType.PAWN)
            squares[48 + col] = Piece(Color.WHITE, PieceType.PAWN)
            squares[56 + col] = Piece(Color.WHITE, pt)
        return cls(tuple(squares))

    @classmethod
    def from_pieces(cls, placement: Mapping[Square, Piece]) -> Board:
        return cls().replace(placement)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = self._squares[row * 8 : row * 8 + 8]
            rows.append(f"{8 - row} {' '.join(str(p) if p else '.' for p in cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
