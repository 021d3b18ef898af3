"""Unit tests for /src/xiangqi/square.py"""

import pytest

from src.core.exceptions import InvalidSquareError
from src.xiangqi.pieces import Side
from src.xiangqi.square import BOARD_DIMENSIONS, ICCS_FILES, Square


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ICCS_FILES[file]}{rank}")
        for file in range(BOARD_DIMENSIONS[0])
        for rank in range(BOARD_DIMENSIONS[1])
    ],
)
def test_creating_from_iccs(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a0' indeed maps to file 0, rank 0, etc."""
    square = Square.from_iccs(notation)
    assert square.file == file
    assert square.rank == rank
    assert square.to_iccs() == notation


def test_from_iccs_accepts_upper_case() -> None:
    assert Square.from_iccs("E9") == Square(4, 9)


@pytest.mark.parametrize("notation", ["j0", "a10", "", "abc", "e", "9e", "e-", "e²", "e٣"])
def test_invalid_iccs(notation: str) -> None:
    with pytest.raises(InvalidSquareError):
        Square.from_iccs(notation)


@pytest.mark.parametrize("file, rank", [(9, 0), (0, 10), (-1, 0), (0, -1), (12, 12)])
def test_square_out_of_bounds_is_rejected(file: int, rank: int) -> None:
    """A Square can never be created off the board"""
    with pytest.raises(InvalidSquareError):
        Square(file, rank)


def test_all_squares() -> None:
    squares = Square.all_squares()
    assert len(squares) == 90
    assert len(set(squares)) == 90
    assert squares[0] == Square(0, 0)
    assert squares[-1] == Square(8, 9)


def test_shifted_stays_on_board() -> None:
    assert Square(4, 9).shifted(0, -1) == Square(4, 8)
    assert Square(4, 9).shifted(-2, -1) == Square(2, 8)


@pytest.mark.parametrize(
    "square, df, dr",
    [(Square(0, 0), -1, 0), (Square(0, 0), 0, -1), (Square(8, 9), 1, 0), (Square(8, 9), 0, 1)],
)
def test_shifted_off_board_is_none(square: Square, df: int, dr: int) -> None:
    assert square.shifted(df, dr) is None


def test_distances() -> None:
    a = Square(1, 9)
    b = Square(2, 7)
    assert a.file_distance(b) == 1
    assert a.rank_distance(b) == 2
    assert a.chebyshev_distance(b) == 2
    assert not a.on_same_line(b)
    assert a.on_same_line(Square(1, 0))
    assert a.on_same_line(Square(8, 9))


@pytest.mark.parametrize(
    "square, side, expected",
    [
        (Square(4, 9), Side.RED, True),
        (Square(3, 7), Side.RED, True),
        (Square(5, 8), Side.RED, True),
        (Square(4, 9), Side.BLACK, False),
        (Square(6, 8), Side.RED, False),
        (Square(4, 6), Side.RED, False),
        (Square(3, 0), Side.BLACK, True),
        (Square(5, 2), Side.BLACK, True),
        (Square(4, 3), Side.BLACK, False),
        (Square(2, 1), Side.BLACK, False),
    ],
)
def test_in_palace(square: Square, side: Side, expected: bool) -> None:
    assert square.in_palace(side) == expected


@pytest.mark.parametrize(
    "rank, red_half",
    [(rank, rank >= 5) for rank in range(BOARD_DIMENSIONS[1])],
)
def test_river_splits_board_between_rank_4_and_5(rank: int, red_half: bool) -> None:
    square = Square(0, rank)
    assert square.on_own_half(Side.RED) == red_half
    assert square.on_own_half(Side.BLACK) == (not red_half)
