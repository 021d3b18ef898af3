import pytest

from src.api.models import LegalMovesRequest, MoveRequest, RestartRequest
from src.core.exceptions import InvalidRequestError

STARTING_FEN = "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1"


# -- Validation - RestartRequest --
def test_valid_fen() -> None:
    """Test that RestartRequest accepts a valid FEN string."""
    request = RestartRequest(starting_fen=STARTING_FEN)
    assert request.starting_fen == STARTING_FEN


def test_starting_fen_is_optional() -> None:
    """Should be able to not supply a starting FEN, and validator just returns None."""
    assert RestartRequest().starting_fen is None
    assert RestartRequest(starting_fen=None).starting_fen is None


@pytest.mark.parametrize(
    "invalid_fen",
    [
        "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0",  # only 5 space-separated values
        "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1 extra",  # too many space-separated values
        "",
    ],
)
def test_invalid_fen(invalid_fen: str) -> None:
    """Structurally invalid FEN: more or less than 6 space-separated fields."""
    with pytest.raises(InvalidRequestError):
        _ = RestartRequest(starting_fen=invalid_fen)


# -- Validation - MoveRequest --
def test_valid_square_names() -> None:
    """Test that MoveRequest accepts correctly written squares in ICCS notation."""
    request = MoveRequest(from_square="h7", to_square="e7")
    assert request.from_square == "h7"
    assert request.to_square == "e7"


def test_square_names_are_lower_cased() -> None:
    request = MoveRequest(from_square="H7", to_square="E7")
    assert request.from_square == "h7"
    assert request.to_square == "e7"


INVALID_SQUARES = [
    "nonsense",  # anything more than two characters.
    "11",  # First character is not a letter
    "aa",  # second character is not a number
    "j0",  # there is no j-file
    "h²",  # only plain digits are ranks
    "",
]


@pytest.mark.parametrize("square", INVALID_SQUARES)
def test_invalid_from_square(square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square=square, to_square="e7")


@pytest.mark.parametrize("square", INVALID_SQUARES)
def test_invalid_to_square(square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(from_square="h7", to_square=square)


# -- Validation - LegalMovesRequest --
def test_legal_moves_request() -> None:
    assert LegalMovesRequest(square="B9").square == "b9"


@pytest.mark.parametrize("square", INVALID_SQUARES)
def test_invalid_legal_moves_request(square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = LegalMovesRequest(square=square)
