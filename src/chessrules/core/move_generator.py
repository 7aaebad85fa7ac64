"""Legal and pseudo-legal move generation + attack detection.

Two tiers:

* the *attack* tier (``pseudo_moves(..., allow_castling=False)``) knows only
  piece geometry and occupancy and is what the check oracle uses;
* the *legal* tier filters pseudo moves by replaying each one on a scratch
  board and asking the check oracle about the mover's king.

The attack tier never calls back into the legal tier.
"""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.move import Move
from chessrules.core.move_applier import apply_move
from chessrules.core.piece import PROMOTION_TYPES, Piece
from chessrules.core.types import ALL_SQUARES, Square, is_on_board

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

# (rook column, columns that must be empty, king transit columns, king target column)
_CASTLING_PATHS: tuple[tuple[int, tuple[int, ...], tuple[int, ...], int], ...] = (
    (7, (5, 6), (5, 6), 6),
    (0, (1, 2, 3), (3, 2), 2),
)
_KING_HOME_COL = 4


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in ALL_SQUARES:
        targets.append(
            tuple(
                Square(sq.row + dr, sq.col + dc)
                for dr, dc in offsets
                if is_on_board(sq.row + dr, sq.col + dc)
            )
        )
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            row = sq.row + dr
            col = sq.col + dc
            ray: list[Square] = []
            while is_on_board(row, col):
                ray.append(Square(row, col))
                row += dr
                col += dc
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


def promotion_choices(move: Move) -> list[Move]:
    """Expand a last-row pawn move into one move per promotion kind."""
    if not move.is_promotion or move.promotion is not None:
        return [move]
    return [move.with_promotion(pt) for pt in PROMOTION_TYPES]


class MoveGenerator:
    """Generates moves for pieces on a fixed :class:`Board`.

    The generator holds no state besides its inputs; hypothetical positions
    are built as new boards and never written back.
    """

    __slots__ = ("_board", "_en_passant")

    def __init__(self, board: Board, en_passant: Square | None = None) -> None:
        self._board = board
        self._en_passant = en_passant

    @property
    def board(self) -> Board:
        return self._board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Move]:
        """Strictly legal moves of the piece on *sq* (empty square → [])."""
        return [m for m in self.pseudo_moves(sq) if self._is_legal(m)]

    def legal_moves_for(self, color: Color) -> list[Move]:
        """All strictly legal moves of every *color* piece."""
        moves: list[Move] = []
        for sq, _piece in self._board.pieces(color):
            moves.extend(self.legal_moves(sq))
        return moves

    def has_legal_move(self, color: Color) -> bool:
        """Whether *color* has at least one legal move (stops at the first)."""
        for sq, _piece in self._board.pieces(color):
            for move in self.pseudo_moves(sq):
                if self._is_legal(move):
                    return True
        return False

    def pseudo_moves(self, sq: Square, *, allow_castling: bool = True) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq* (may expose own king)."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        ptype = piece.piece_type
        idx = sq.index
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece, _KNIGHT_TARGETS[idx], moves)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(sq, piece, _BISHOP_RAYS[idx], moves)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(sq, piece, _ROOK_RAYS[idx], moves)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(sq, piece, _QUEEN_RAYS[idx], moves)
        else:
            self._gen_steps(sq, piece, _KING_TARGETS[idx], moves)
            if allow_castling:
                self._gen_castling(sq, piece, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? A missing king is never in check."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Can any *by_color* piece capture onto *sq*?

        Pawns only attack occupied squares in this model, so *sq* should hold
        a piece of the other side (castling probes place the king there first).
        """
        for from_sq, _piece in self._board.pieces(by_color):
            for move in self.pseudo_moves(from_sq, allow_castling=False):
                if move.to_sq == sq:
                    return True
        return False

    # -- Legality filter ----------------------------------------------------

    def _is_legal(self, move: Move) -> bool:
        scratch = apply_move(self._board, move)
        return not MoveGenerator(scratch).is_in_check(move.piece.color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, pawn: Piece, moves: list[Move]) -> None:
        board = self._board
        step = pawn.color.forward
        row = sq.row + step
        if not 0 <= row < 8:
            return

        one_step = Square(row, sq.col)
        if board.is_empty(one_step):
            moves.append(Move(sq, one_step, pawn))
            if sq.row == pawn.color.pawn_row:
                two_step = Square(row + step, sq.col)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, pawn))

        for col in (sq.col - 1, sq.col + 1):
            if not 0 <= col < 8:
                continue
            cap_sq = Square(row, col)
            target = board[cap_sq]
            if target is not None:
                if target.color != pawn.color:
                    moves.append(Move(sq, cap_sq, pawn, captured=target))
            elif cap_sq == self._en_passant:
                victim = board[Square(sq.row, col)]
                if (
                    victim is not None
                    and victim.piece_type == PieceType.PAWN
                    and victim.color != pawn.color
                ):
                    moves.append(
                        Move(sq, cap_sq, pawn, captured=victim, is_en_passant=True)
                    )

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq, piece))
            elif target.color != piece.color:
                moves.append(Move(sq, to_sq, piece, captured=target))

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, piece))
                    continue
                if target.color != piece.color:
                    moves.append(Move(sq, to_sq, piece, captured=target))
                break

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Move]) -> None:
        color = king.color
        row = color.home_row
        if king.has_moved or king_sq != (row, _KING_HOME_COL):
            return
        if self.is_in_check(color):
            return

        board = self._board
        for rook_col, between, transit, target_col in _CASTLING_PATHS:
            rook = board[Square(row, rook_col)]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != color
                or rook.has_moved
            ):
                continue
            if any(not board.is_empty(Square(row, col)) for col in between):
                continue
            if any(self._king_attacked_on(king_sq, king, Square(row, col)) for col in transit):
                continue
            moves.append(Move(king_sq, Square(row, target_col), king, is_castling=True))

    def _king_attacked_on(self, king_sq: Square, king: Piece, probe_sq: Square) -> bool:
        scratch = self._board.replace({king_sq: None, probe_sq: king})
        return MoveGenerator(scratch).is_in_check(king.color)
