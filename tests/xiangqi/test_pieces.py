"""Unit tests for /src/xiangqi/pieces.py"""

import pytest

from src.core.exceptions import InvalidFENError
from src.xiangqi.pieces import (
    FEN_TO_PIECE,
    FIRST_TO_MOVE,
    PIECE_TO_FEN,
    Piece,
    PieceKind,
    Side,
)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_red_piece_from_fen(char: str) -> None:
    """Capital letters are used for red pieces"""
    piece = Piece.from_fen(char)
    assert piece.kind == FEN_TO_PIECE[char.lower()]
    assert piece.side == Side.RED


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.kind == FEN_TO_PIECE[char.lower()]
    assert piece.side == Side.BLACK


@pytest.mark.parametrize("kind", list(PieceKind))
def test_pieces_to_fen(kind: PieceKind) -> None:
    assert Piece(kind, Side.RED).to_fen() == PIECE_TO_FEN[kind].upper()
    assert Piece(kind, Side.BLACK).to_fen() == PIECE_TO_FEN[kind].lower()


@pytest.mark.parametrize("char", ["x", "Q", "1", "-"])
def test_unknown_piece_letter(char: str) -> None:
    with pytest.raises(InvalidFENError):
        Piece.from_fen(char)


def test_every_kind_has_a_letter() -> None:
    """Closed set of seven kinds, each with its own letter"""
    assert set(PIECE_TO_FEN.keys()) == set(PieceKind)
    assert len(set(PIECE_TO_FEN.values())) == 7


def test_pieces_are_immutable_values() -> None:
    piece = Piece(PieceKind.CANNON, Side.BLACK)
    assert piece == Piece.from_fen("c")
    with pytest.raises(AttributeError):
        piece.kind = PieceKind.CHARIOT  # type: ignore[misc]


def test_sides() -> None:
    assert FIRST_TO_MOVE == Side.RED
    assert Side.RED.opponent == Side.BLACK
    assert Side.BLACK.opponent == Side.RED
    # red starts at the bottom (rank 9) and moves up the board
    assert Side.RED.forward == -1
    assert Side.BLACK.forward == 1
