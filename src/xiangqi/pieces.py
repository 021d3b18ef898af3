"""Defines the sides and the types of Xiangqi pieces"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.core.exceptions import InvalidFENError


class PieceKind(Enum):
    GENERAL = auto()
    ADVISOR = auto()
    ELEPHANT = auto()
    HORSE = auto()
    CHARIOT = auto()
    CANNON = auto()
    SOLDIER = auto()


class Side(Enum):
    """Red always moves first. Red starts at the bottom (ranks 5-9) and advances towards rank 0."""

    RED = auto()
    BLACK = auto()

    @property
    def is_red(self) -> bool:
        return self is Side.RED

    @property
    def opponent(self) -> Side:
        return Side.BLACK if self is Side.RED else Side.RED

    @property
    def forward(self) -> int:
        """Rank direction of a step forward."""
        return -1 if self is Side.RED else 1


FIRST_TO_MOVE = Side.RED

FEN_TO_PIECE: dict[str, PieceKind] = {
    "k": PieceKind.GENERAL,
    "a": PieceKind.ADVISOR,
    "b": PieceKind.ELEPHANT,
    "n": PieceKind.HORSE,
    "r": PieceKind.CHARIOT,
    "c": PieceKind.CANNON,
    "p": PieceKind.SOLDIER,
}

PIECE_TO_FEN: dict[PieceKind, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    side: Side

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # upper case: Red pieces, lower case: Black pieces
        if character.lower() not in FEN_TO_PIECE:
            raise InvalidFENError(f"Not a Xiangqi piece letter: {character!r}")
        side = Side.RED if character.isupper() else Side.BLACK
        return cls(FEN_TO_PIECE[character.lower()], side)

    def to_fen(self) -> str:
        letter = PIECE_TO_FEN[self.kind]
        return letter.upper() if self.side.is_red else letter
