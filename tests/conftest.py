"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.xiangqi.board import Board
from src.xiangqi.pieces import Piece
from src.xiangqi.square import Square

PiecesByICCS = dict[str, str]


@pytest.fixture
def board_with_pieces() -> Callable[[PiecesByICCS], Board]:
    """Call the inner function with a mapping of ICCS squares to FEN piece letters, e.g. {"e9": "K", "e0": "k"}"""

    def _create_board(pieces: PiecesByICCS) -> Board:
        return Board(
            {
                Square.from_iccs(square_name): Piece.from_fen(letter)
                for square_name, letter in pieces.items()
            }
        )

    return _create_board
