"""The Game board implements all rules that effect the `position` (in Xiangqi: the configuration of pieces on the board)"""

from copy import deepcopy
from dataclasses import dataclass, field
from string import digits
from typing import Optional, Self

from src.core.exceptions import InvalidFENError
from src.xiangqi.fen import STARTING_FEN, is_valid_position
from src.xiangqi.moves import MOVEMENT_RULES, Move, MovementRuleFn, squares_between
from src.xiangqi.pieces import Piece, PieceKind, Side
from src.xiangqi.square import BOARD_DIMENSIONS, Square


@dataclass
class Board:
    """
    Sparse placement of pieces: a square that is not a key of `position` is empty.

    Knows nothing about whose turn it is. Answers questions about the pieces standing on it:
    can this piece go there, is that side in check, do the generals face each other.
    """

    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the board part of a FEN string.

        ex. standard starting position:
        rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR
        means:
        * black pieces on rank 0, starting with a chariot on the a-file
        * rank 1 is empty (9 consecutive empty squares)
        * black cannons on rank 2, on the b- and h-file
        * black soldiers on rank 3, on every other file
        * ... and mirrored for red (capital letters), with its back rank on rank 9
        """
        if not is_valid_position(fen_str):
            raise InvalidFENError(f"Cannot interpret supplied string as a board position: {fen_str}")

        position: dict[Square, Piece] = {}
        # FEN string is read from rank 0 (top) to rank 9 (bottom)...
        for rank, fen_one_rank in enumerate(fen_str.split("/")):
            # ... and every rank from the a-file to the i-file
            file = 0
            for character in fen_one_rank:
                if character in digits:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                else:
                    position[Square(file, rank)] = Piece.from_fen(character)
                    file += 1
        return cls(position)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_FEN.split(" ")[0])

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1]))

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece(Square(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return square not in self.position

    def locate_side(self, side: Side) -> list[Square]:
        return [square for square, piece in self.position.items() if piece.side == side]

    def find_general(self, side: Side) -> Optional[Square]:
        """None once the general has been captured."""
        general = Piece(PieceKind.GENERAL, side)
        return next(
            (square for square, piece in self.position.items() if piece == general),
            None,
        )

    def count_between(self, from_square: Square, to_square: Square) -> int:
        """Number of pieces strictly in between two squares on the same file or rank."""
        return sum(
            1
            for square in squares_between(from_square, to_square)
            if not self.is_empty(square)
        )

    # --- UPDATES ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        return self.position.pop(square, None)

    def move_piece(self, move: Move) -> Optional[Piece]:
        """Update the position on the board. Returns the piece that got captured (if any)."""
        piece_that_moved = self.position.pop(move.from_square)
        captured = self.position.get(move.to_square)
        self.position[move.to_square] = piece_that_moved
        return captured

    # --- RULES ---
    def can_reach(self, from_square: Square, to_square: Square) -> bool:
        """
        Geometric movement rule only (+ cannot land on your own piece).

        Ignores whose turn it is and whether the mover exposes its own general.
        This is the 'raw attack' question check detection needs.
        """
        piece = self.piece(from_square)
        if piece is None or from_square == to_square:
            return False

        target = self.piece(to_square)
        if target is not None and target.side == piece.side:
            return False

        movement_rule: MovementRuleFn = MOVEMENT_RULES[piece.kind]
        return movement_rule(self, from_square, to_square, piece.side)

    def is_check(self, side: Side) -> bool:
        """
        Is the general of `side` attacked by any of the opponent's pieces?

        NOTE: Without a general on the board this returns False. The Game treats a missing general as a loss.
        """
        general_square = self.find_general(side)
        if general_square is None:
            return False

        return any(
            self.can_reach(attacker_square, general_square)
            for attacker_square in self.locate_side(side.opponent)
        )

    def generals_facing(self) -> bool:
        """Flying general: both generals on the same file with nothing in between."""
        red_general = self.find_general(Side.RED)
        black_general = self.find_general(Side.BLACK)
        if red_general is None or black_general is None:
            return False

        if red_general.file != black_general.file:
            return False
        return self.count_between(red_general, black_general) == 0

    def is_legal_move(self, from_square: Square, to_square: Square) -> bool:
        """
        Full legality test
        ----

        1. There must be a piece to move, and it must obey its movement law
        2. Copy the board and make the move
        3. Reject if the generals now face each other, or if the mover's own general is in check
        """
        piece = self.piece(from_square)
        if piece is None:
            return False

        if not self.can_reach(from_square, to_square):
            return False

        board = deepcopy(self)
        board.move_piece(Move(from_square, to_square))
        if board.generals_facing():
            return False
        return not board.is_check(piece.side)

    def legal_destinations(self, from_square: Square) -> list[Square]:
        """Every square the piece on `from_square` may legally move to."""
        if self.is_empty(from_square):
            return []
        return [
            to_square
            for to_square in Square.all_squares()
            if self.is_legal_move(from_square, to_square)
        ]

    def legal_moves(self, side: Side) -> list[Move]:
        return [
            Move(from_square, to_square)
            for from_square in self.locate_side(side)
            for to_square in self.legal_destinations(from_square)
        ]

    def has_legal_move(self, side: Side) -> bool:
        """Same sweep as legal_moves(), but stops at the first legal move found."""
        return any(
            self.is_legal_move(from_square, to_square)
            for from_square in self.locate_side(side)
            for to_square in Square.all_squares()
        )
