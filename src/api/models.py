"""Requests and Response models"""

from string import digits
from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import SideName, Status
from src.xiangqi.square import ICCS_FILES

ICCSSquare = str
PieceLetter = str


def _is_iccs_square(value: str) -> bool:
    """File letter a-i followed by a rank digit 0-9"""
    if len(value) != 2:
        return False
    file_character, rank_character = value[0].lower(), value[1]
    return file_character in ICCS_FILES and rank_character in digits


# --- REQUEST MODELS ---
class RestartRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        parts = value.strip().split()
        if len(parts) != 6:
            raise InvalidRequestError(
                "FEN string must contain 6 space-separated parts."
            )
        return value


class MoveRequest(BaseModel):
    from_square: ICCSSquare
    to_square: ICCSSquare

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_iccs_square(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value.lower()


class LegalMovesRequest(BaseModel):
    square: ICCSSquare

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_iccs_square(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value.lower()


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    fen_state: str
    starting_state: str
    side_to_move: SideName
    status: Status
    winner: Optional[SideName]
    in_check: bool
    pieces: dict[ICCSSquare, PieceLetter]
    move_history: list[str]


class LegalMovesResponse(BaseModel):
    square: ICCSSquare
    destinations: list[ICCSSquare]


class UndoResponse(BaseModel):
    undone: bool
    game: GameResponse
