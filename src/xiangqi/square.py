"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Coordinates:
* file 0-8, left to right (ICCS letters a-i)
* rank 0-9, rank 0 is Black's back rank (top of the board), rank 9 is Red's back rank.
"""

from __future__ import annotations

from dataclasses import dataclass
from string import digits
from typing import TYPE_CHECKING, Optional

from src.core.exceptions import InvalidSquareError

if TYPE_CHECKING:
    from src.xiangqi.pieces import Side

# Xiangqi board: 9 files x 10 ranks (pieces stand on the intersections)
BOARD_DIMENSIONS = (9, 10)

# Palace: the 3x3 box the general and its advisors are confined to
PALACE_FILES = range(3, 6)
RED_PALACE_RANKS = range(7, 10)
BLACK_PALACE_RANKS = range(0, 3)

# River: splits the board between ranks 4 and 5
RED_HALF_RANKS = range(5, 10)
BLACK_HALF_RANKS = range(0, 5)

ICCS_FILES = "abcdefghi"


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    def __post_init__(self) -> None:
        if not Square.on_board(self.file, self.rank):
            raise InvalidSquareError(
                f"({self.file}, {self.rank}) is not on the board. Files run 0-{BOARD_DIMENSIONS[0] - 1}, ranks 0-{BOARD_DIMENSIONS[1] - 1}."
            )

    @staticmethod
    def on_board(file: int, rank: int) -> bool:
        return (0 <= file < BOARD_DIMENSIONS[0]) and (0 <= rank < BOARD_DIMENSIONS[1])

    @classmethod
    def all_squares(cls) -> list[Square]:
        """Every square, rank by rank from the top."""
        return [
            cls(file, rank)
            for rank in range(BOARD_DIMENSIONS[1])
            for file in range(BOARD_DIMENSIONS[0])
        ]

    @classmethod
    def from_iccs(cls, sq: str) -> Square:
        """ICCS notation: 'a0' - 'i9' get converted to (0,0) - (8,9)"""
        if len(sq) != 2:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as an ICCS square.")
        file_char, rank_char = sq[0].lower(), sq[1]
        if file_char not in ICCS_FILES or rank_char not in digits:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as an ICCS square.")
        return cls(ICCS_FILES.index(file_char), int(rank_char))

    def to_iccs(self) -> str:
        return f"{ICCS_FILES[self.file]}{self.rank}"

    def shifted(self, df: int, dr: int) -> Optional[Square]:
        """The square (df, dr) away, or None when that falls off the board."""
        file, rank = self.file + df, self.rank + dr
        if not Square.on_board(file, rank):
            return None
        return Square(file, rank)

    # --- geometry ---
    def file_distance(self, other: Square) -> int:
        return abs(self.file - other.file)

    def rank_distance(self, other: Square) -> int:
        return abs(self.rank - other.rank)

    def chebyshev_distance(self, other: Square) -> int:
        return max(self.file_distance(other), self.rank_distance(other))

    def on_same_line(self, other: Square) -> bool:
        """Same file or same rank"""
        return self.file == other.file or self.rank == other.rank

    def in_palace(self, side: Side) -> bool:
        palace_ranks = RED_PALACE_RANKS if side.is_red else BLACK_PALACE_RANKS
        return self.file in PALACE_FILES and self.rank in palace_ranks

    def on_own_half(self, side: Side) -> bool:
        """True if the square lies on the given side's half of the river."""
        own_half = RED_HALF_RANKS if side.is_red else BLACK_HALF_RANKS
        return self.rank in own_half
