"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the movement law of each piece kind.
Every rule answers "may a piece of this kind (and side) go from `from_square` to `to_square` on this board?".

A capture is just a move onto an enemy piece, so the same rules double as attack rules
(Check detection asks exactly this question for the square of the general).

Generic preconditions (destination on the board, not your own piece) and the
self-check / flying general lookahead are handled by the Board.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.core.exceptions import InvalidSquareError
from src.xiangqi.pieces import Piece, PieceKind, Side
from src.xiangqi.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...
    def count_between(self, from_square: Square, to_square: Square) -> int: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_iccs(cls, iccs: str) -> Self:
        """
        ICCS (Internet Chinese Chess Server) coordinate notation
        ---
        ---
        File letter a-i, rank digit 0-9, first the starting square then the destination.

        examples:
        * "h7e7": the piece on h7 (Red's right cannon in the opening) moves to e7
        * "H7-E7": same move, the dashed / upper case spelling is accepted as well
        """
        compact = iccs.replace("-", "").strip()
        if len(compact) != 4:
            raise InvalidSquareError(f"Cannot interpret {iccs!r} as an ICCS move.")
        return cls(Square.from_iccs(compact[:2]), Square.from_iccs(compact[2:]))

    def to_iccs(self) -> str:
        return f"{self.from_square.to_iccs()}{self.to_square.to_iccs()}"


@dataclass(frozen=True)
class AcceptedMove:
    """
    A move that has been played, with enough information to take it back.
    NOTE: Storing the captured piece is what allows an undo to restore the exact prior board.
    """

    move: Move
    moving_piece: Piece
    captured_piece: Optional[Piece] = None

    @classmethod
    def from_move_and_board(cls, move: Move, board: Board) -> Self:
        """Snapshot of the pieces involved. Must be created BEFORE the board is updated."""
        moving_piece = board.piece(move.from_square)
        # for the type checker: the Game only accepts moves that start on a piece
        assert moving_piece is not None
        return cls(move, moving_piece, board.piece(move.to_square))

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares strictly in between two squares on the same file or rank.

    Needed for the sliding pieces (chariot, cannon) and for the flying general rule.
    """
    if not from_square.on_same_line(to_square):
        raise ValueError(
            f"squares_between requires both squares to lie on the same file or rank. \n from: {from_square}\n to:{to_square}"
        )

    df = (to_square.file > from_square.file) - (to_square.file < from_square.file)
    dr = (to_square.rank > from_square.rank) - (to_square.rank < from_square.rank)
    squares_found: list[Square] = []
    square = from_square
    while square != to_square:
        next_square = square.shifted(df, dr)
        # both endpoints are on the board, so walking towards to_square never leaves it
        assert next_square is not None
        if next_square != to_square:
            squares_found.append(next_square)
        square = next_square
    return squares_found


# --- MOVEMENT RULES ---
def can_general_move(
    board: Board, from_square: Square, to_square: Square, side: Side
) -> bool:
    """One step along a file or rank, never leaving the palace"""
    if not to_square.in_palace(side):
        return False
    return from_square.chebyshev_distance(to_square) == 1 and from_square.on_same_line(
        to_square
    )


def can_advisor_move(
    board: Board, from_square: Square, to_square: Square, side: Side
) -> bool:
    """One step diagonally, never leaving the palace"""
    if not to_square.in_palace(side):
        return False
    return (
        from_square.file_distance(to_square) == 1
        and from_square.rank_distance(to_square) == 1
    )


def can_elephant_move(
    board: Board, from_square: Square, to_square: Square, side: Side
) -> bool:
    """
    Exactly two steps diagonally
    ----

    * cannot cross the river
    * blocked when the square in the middle (the 'elephant eye') is occupied
    """
    if not to_square.on_own_half(side):
        return False
    if (
        from_square.file_distance(to_square) != 2
        or from_square.rank_distance(to_square) != 2
    ):
        return False
    eye = Square(
        (from_square.file + to_square.file) // 2,
        (from_square.rank + to_square.rank) // 2,
    )
    return board.is_empty(eye)


def can_horse_move(
    board: Board, from_square: Square, to_square: Square, side: Side
) -> bool:
    """
    The horse moves such that {|delta_file|, |delta_rank|} = {1, 2}
    ----

    Unlike the knight in chess it can be 'hobbled': the square next to it along the long leg
    of the move must be empty.
    """
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank
    if {abs(df), abs(dr)} != {1, 2}:
        return False

    if abs(df) == 2:
        leg = from_square.shifted(df // 2, 0)
    else:
        leg = from_square.shifted(0, dr // 2)
    return leg is None or board.is_empty(leg)


def can_chariot_move(
    board: Board, from_square: Square, to_square: Square, side: Side
) -> bool:
    """Chariots move along a file or rank, as far as the path is clear"""
    if not from_square.on_same_line(to_square):
        return False
    return board.count_between(from_square, to_square) == 0


def can_cannon_move(
    board: Board, from_square: Square, to_square: Square, side: Side
) -> bool:
    """
    Cannons move like the chariot, but capture by jumping
    ----

    * to an empty square: the path must be clear
    * to capture: exactly one piece (the 'screen') must stand in between
    """
    if not from_square.on_same_line(to_square):
        return False
    pieces_between = board.count_between(from_square, to_square)
    if board.is_empty(to_square):
        return pieces_between == 0
    return pieces_between == 1


def can_soldier_move(
    board: Board, from_square: Square, to_square: Square, side: Side
) -> bool:
    """
    A soldier steps a single square
    ----

    * On its own half of the river: forward only (straight or diagonally).
    * Once across the river: forward or sideways.
    * Never backwards.
    """
    if from_square.chebyshev_distance(to_square) != 1:
        return False

    is_forward = (to_square.rank - from_square.rank) == side.forward
    is_sideways = from_square.rank == to_square.rank
    crossed_river = not from_square.on_own_half(side)
    if crossed_river:
        return is_forward or is_sideways
    return is_forward


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Board, Square, Square, Side], bool]
MOVEMENT_RULES: dict[PieceKind, MovementRuleFn] = {
    PieceKind.GENERAL: can_general_move,
    PieceKind.ADVISOR: can_advisor_move,
    PieceKind.ELEPHANT: can_elephant_move,
    PieceKind.HORSE: can_horse_move,
    PieceKind.CHARIOT: can_chariot_move,
    PieceKind.CANNON: can_cannon_move,
    PieceKind.SOLDIER: can_soldier_move,
}
