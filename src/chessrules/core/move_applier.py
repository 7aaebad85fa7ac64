"""Move application: board + move → new board."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import ALL_SQUARES, Square

# king target column → (rook origin column, rook target column)
_CASTLING_ROOK_COLS: dict[int, tuple[int, int]] = {
    6: (7, 5),
    2: (0, 3),
}


def apply_move(board: Board, move: Move) -> Board:
    """Return the board that results from playing *move* on *board*.

    The move is trusted: it must come from :class:`MoveGenerator` for this
    board. Side effects are applied in order: en-passant removal, rook
    relocation for castling, the piece itself, then promotion.
    """
    changes: dict[Square, Piece | None] = {}

    if move.is_en_passant:
        changes[Square(move.from_sq.row, move.to_sq.col)] = None

    if move.is_castling:
        row = move.from_sq.row
        rook_from_col, rook_to_col = _CASTLING_ROOK_COLS[move.to_sq.col]
        rook = board[Square(row, rook_from_col)]
        changes[Square(row, rook_from_col)] = None
        if rook is not None:
            changes[Square(row, rook_to_col)] = rook.moved()

    placed = move.piece.moved()
    if move.promotion is not None:
        placed = placed.promoted(move.promotion)
    changes[move.from_sq] = None
    changes[move.to_sq] = placed

    return board.replace(changes)


def derive_move(before: Board, after: Board) -> Move | None:
    """Recover the single move that turns *before* into *after*.

    Returns ``None`` when the two boards are not one move apart.
    """
    vacated: list[Square] = []
    arrived: list[Square] = []
    for sq in ALL_SQUARES:
        old, new = before[sq], after[sq]
        if old == new:
            continue
        if new is None:
            vacated.append(sq)
        else:
            arrived.append(sq)

    move: Move | None = None
    if len(arrived) == 2 and len(vacated) == 2:
        move = _derive_castling(before, after, vacated, arrived)
    elif len(arrived) == 1 and len(vacated) in (1, 2):
        move = _derive_piece_move(before, after, vacated, arrived[0])

    if move is None or apply_move(before, move) != after:
        return None
    return move


def _is_king(piece: Piece | None) -> bool:
    return piece is not None and piece.piece_type == PieceType.KING


def _derive_castling(
    before: Board, after: Board, vacated: list[Square], arrived: list[Square]
) -> Move | None:
    king_from = next((sq for sq in vacated if _is_king(before[sq])), None)
    king_to = next((sq for sq in arrived if _is_king(after[sq])), None)
    if king_from is None or king_to is None:
        return None
    if king_from.row != king_to.row or abs(king_from.col - king_to.col) != 2:
        return None
    king = before[king_from]
    assert king is not None
    return Move(king_from, king_to, king, is_castling=True)


def _derive_piece_move(
    before: Board, after: Board, vacated: list[Square], to_sq: Square
) -> Move | None:
    placed = after[to_sq]
    assert placed is not None
    origins = [
        sq for sq in vacated if getattr(before[sq], "color", None) == placed.color
    ]
    if len(origins) != 1:
        return None
    from_sq = origins[0]
    piece = before[from_sq]
    assert piece is not None

    promotion = placed.piece_type if placed.piece_type != piece.piece_type else None
    victims = [sq for sq in vacated if sq != from_sq]
    if victims:
        return Move(
            from_sq,
            to_sq,
            piece,
            captured=before[victims[0]],
            is_en_passant=True,
        )
    return Move(from_sq, to_sq, piece, captured=before[to_sq], promotion=promotion)
