"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and the domain layer (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the API layer or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
FEN = str
SideName = str


@dataclass
class GameModel:
    """Transport-safe representation of a Xiangqi game used between API, Service, and Game layers."""

    current_fen: FEN
    starting_fen: FEN
    moves_iccs: list[str]
    status: str
    winner: Optional[SideName] = None
