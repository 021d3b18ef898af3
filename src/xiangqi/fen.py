"""
Representation of a single position on the board. The part that can be encoded in a FEN string.
"""

from dataclasses import dataclass
from string import digits
from typing import Self

from src.core.exceptions import InvalidFENError
from src.xiangqi.pieces import FEN_TO_PIECE, Side
from src.xiangqi.square import BOARD_DIMENSIONS

STARTING_FEN = "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1"

# Red is written as "w" (inherited from chess FEN), but "r" shows up in the wild as well.
FEN_TO_SIDE: dict[str, Side] = {
    "w": Side.RED,
    "r": Side.RED,
    "b": Side.BLACK,
}


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation.
    """

    # there should be 6 parts to the string
    parts = fen.split()
    if len(parts) != 6:
        return False

    position = parts[0]
    if not is_valid_position(position):
        return False

    side = parts[1]
    if not is_valid_side_code(side):
        return False

    # parts[2] and parts[3] are the castling / en passant fields of chess FEN. Always "-" in Xiangqi, and not checked.

    half_move_counter = parts[4]
    full_move_counter = parts[5]
    if not (
        is_valid_move_counter(half_move_counter)
        and is_valid_move_counter(full_move_counter)
    ):
        return False
    return True


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_files, num_ranks = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    generals_found = {"k": 0, "K": 0}
    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character in digits:
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
                if character in generals_found:
                    generals_found[character] += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False

    # at most one general per side (zero is allowed: it has been captured)
    return all(count <= 1 for count in generals_found.values())


def is_valid_side_code(side: str) -> bool:
    return side.lower() in FEN_TO_SIDE


def is_valid_move_counter(counter: str) -> bool:
    return counter != "" and all(character in digits for character in counter)


def split_fen_and_moves(text: str) -> tuple[str, list[str]]:
    """
    Split a position followed by a list of moves into its FEN and the (ICCS) moves.

    Accepts both:
    * "position fen <fen> moves h7e7 h0g2"  (as sent over UCCI)
    * "<fen> moves h7e7 h0g2"
    """
    parts = text.split()
    if parts[:1] == ["position"]:
        parts = parts[1:]
    if parts[:1] == ["fen"]:
        parts = parts[1:]

    if len(parts) < 6:
        raise InvalidFENError(f"Cannot find a FEN at the start of: {text!r}")
    fen, rest = " ".join(parts[:6]), parts[6:]

    if rest[:1] != ["moves"]:
        raise InvalidFENError(f"Expected the keyword 'moves' after the FEN in: {text!r}")
    moves = rest[1:]
    if not moves:
        raise InvalidFENError(f"Empty list of moves in: {text!r}")
    return fen, moves


@dataclass
class FENState:
    """
    Data that can be constructed from a FEN string.
    ----

    FEN (Forsyth-Edwards Notation) as used for Xiangqi:

    <board position string><side to move><-><-><# half move clock><number of full moves>

    * The board is written from rank 0 (Black's back rank) down to rank 9 (Red's back rank), ranks separated by "/".
      Upper case letters are Red pieces, lower case Black. K=general, A=advisor, B=elephant, N=horse, R=chariot, C=cannon, P=soldier.
      A digit is the number of consecutive empty squares.
    * The side to move is "w" (Red) or "b" (Black).
    * Two "-" fields: chess FEN has castling rights and en passant here, Xiangqi has neither.
    * The half move clock counts the moves since the last capture.
    * The number of full moves starts at 1 and increments after every move Black makes.

    ex) The standard starting position has a FEN
    rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1
    """

    position: str
    side_to_move: Side
    half_move_clock: int
    num_moves: int

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Parse the FEN into data"""

        # raise an exception if invalid FEN:
        if not is_valid_fen(fen):
            raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen}")

        # extract the different components. FEN is space separated
        position, active_side, _, _, half_move_clock, num_moves = fen.split()

        return cls(
            position,
            FEN_TO_SIDE[active_side.lower()],
            int(half_move_clock),
            int(num_moves),
        )

    def to_fen(self) -> str:
        """reverse operation: write a FEN from the given data"""
        active_side = "w" if self.side_to_move.is_red else "b"
        return f"{self.position} {active_side} - - {self.half_move_clock} {self.num_moves}"

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_FEN)
