"""
Custom exceptions used across layers.

Everything derives from GameError, so a caller (e.g. a UI loop) can catch a single type.
NOTE: Must not subclass ValueError. pydantic wraps a ValueError raised inside a validator into its own ValidationError.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while playing / loading a game."""


# --- MOVE REJECTIONS ---
class MoveError(GameError):
    """A submitted move was rejected. The game state is left untouched."""


class NoPieceAtSourceError(MoveError):
    """There is no piece on the square the move starts from."""


class NotYourTurnError(MoveError):
    """The piece on the starting square belongs to the side that is not on move."""


class IllegalMoveError(MoveError):
    """Fails the movement rule of the piece, is blocked, or leaves your own general exposed."""


class GameNotPlayingError(MoveError):
    """The game already ended (checkmate / stalemate)."""


# --- PARSING / INPUT ---
class InvalidSquareError(GameError):
    """Coordinates or ICCS text that do not describe a square on the 9x10 board."""


class InvalidFENError(GameError):
    """String cannot be interpreted as a Xiangqi FEN (or a FEN followed by a list of moves)."""


class InvalidRequestError(GameError):
    """Request data at the API boundary failed validation."""
