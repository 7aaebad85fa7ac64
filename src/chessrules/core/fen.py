"""FEN position descriptions: parsing and serialization.

Only the position is described; move notation is not supported. Castling
availability has no field of its own in this engine, so the FEN castling
letters are mapped onto the ``has_moved`` flags of kings and corner rooks.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# castling letter → (color, rook column)
_CASTLING_LETTERS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}


@dataclass(frozen=True, slots=True)
class Setup:
    """A board together with the turn state the caller tracks."""

    board: Board
    side_to_move: Color = Color.WHITE
    en_passant: Square | None = None


def board_from_fen(fen: str) -> Setup:
    """Parse a FEN string into a :class:`Setup`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 2. Castling
    rights: set[tuple[Color, int]] = set()
    if castling_part != "-":
        for ch in castling_part:
            right = _CASTLING_LETTERS.get(ch)
            if right is None or right in rights:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            rights.add(right)

    # 3. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    pieces: dict[Square, Piece] = {}
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                sq = Square(row, col)
                piece = Piece.from_char(ch)
                if _has_moved(piece, sq, rights):
                    piece = piece.moved()
                pieces[sq] = piece
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        # The target sits behind a pawn of the side that just moved.
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks are validated but not tracked.
    for field_text in parts[4:]:
        if not field_text.isdigit():
            raise ValueError(f"Invalid FEN move counter: {field_text!r}")

    return Setup(Board.from_pieces(pieces), side, ep)


def setup_to_fen(setup: Setup, fullmove_number: int = 1) -> str:
    """Serialise a :class:`Setup` to FEN (halfmove clock is always 0)."""
    board = setup.board

    # 1. Board
    rows: list[str] = []
    for cells in board.rows():
        empty = 0
        row = ""
        for piece in cells:
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if setup.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        letter
        for letter, (color, rook_col) in _CASTLING_LETTERS.items()
        if _can_castle(board, color, rook_col)
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(setup.en_passant) if setup.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} 0 {fullmove_number}"


def _has_moved(piece: Piece, sq: Square, rights: set[tuple[Color, int]]) -> bool:
    home_row = piece.color.home_row
    if piece.piece_type == PieceType.KING:
        on_home = sq == (home_row, 4)
        return not (on_home and any(color == piece.color for color, _ in rights))
    if piece.piece_type == PieceType.ROOK:
        return sq.row != home_row or (piece.color, sq.col) not in rights
    return False


def _can_castle(board: Board, color: Color, rook_col: int) -> bool:
    row = color.home_row
    king = board[Square(row, 4)]
    rook = board[Square(row, rook_col)]
    return (
        king is not None
        and king.piece_type == PieceType.KING
        and king.color == color
        and not king.has_moved
        and rook is not None
        and rook.piece_type == PieceType.ROOK
        and rook.color == color
        and not rook.has_moved
    )
