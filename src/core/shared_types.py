"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


# NOTE: the domain layer uses its own Side enum (src/xiangqi/pieces.py). These are the plain string versions
# that cross the API boundary.
class SideName(StrEnum):
    RED = "red"
    BLACK = "black"
