"""Orchestration of communication from the UI / input layer to the business logic (and the reverse direction)."""

import logging
from typing import Optional

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    RestartRequest,
    UndoResponse,
)
from src.core.exceptions import MoveError
from src.core.models import GameModel
from src.core.shared_types import SideName, Status
from src.xiangqi.game import Game
from src.xiangqi.square import Square

_LOGGER = logging.getLogger(__name__)


class XiangqiService:
    """
    One two-player session at a single terminal.

    Owns the current Game. The UI only ever reads the responses and submits requests: it never touches the Game directly.
    """

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game if game is not None else Game.new_game()

    # -- UI logic ---
    def get_state(self) -> GameResponse:
        """Read-only snapshot of the current game. Used by the render loop after every request."""
        return self._create_game_response()

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. On rejection the MoveError propagates and the game is unchanged."""
        from_square = Square.from_iccs(request.from_square)
        to_square = Square.from_iccs(request.to_square)
        try:
            accepted = self.game.make_move(from_square, to_square)
        except MoveError as e:
            _LOGGER.warning(
                "Rejected move %s%s: %s", request.from_square, request.to_square, e
            )
            raise

        _LOGGER.debug("Accepted move %s", accepted.move.to_iccs())
        if self.game.status != Status.IN_PROGRESS:
            _LOGGER.info(
                "Game over: %s (winner: %s)", self.game.status, self.game.winner
            )
        return self._create_game_response()

    def legal_destinations(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Squares to highlight once the player selected a piece."""
        square = Square.from_iccs(request.square)
        return LegalMovesResponse(
            square=request.square,
            destinations=[
                destination.to_iccs()
                for destination in self.game.legal_destinations(square)
            ],
        )

    def undo(self) -> UndoResponse:
        undone = self.game.undo_move()
        _LOGGER.debug("Undo requested (undone: %s)", undone)
        return UndoResponse(undone=undone, game=self._create_game_response())

    def restart(self, request: RestartRequest) -> GameResponse:
        """Throw away the current game and start a fresh one (from the canonical opening unless a FEN is given)."""
        self.game = (
            Game.from_fen(request.starting_fen)
            if request.starting_fen
            else Game.new_game()
        )
        _LOGGER.info("Started new game from %s", self.game.starting_state.to_fen())
        return self._create_game_response()

    # -- Internal helpers --
    def _create_game_response(self) -> GameResponse:
        """Convert info in GameModel (+ a few live queries) to a GameResponse."""
        model: GameModel = self.game.to_model()
        return GameResponse(
            fen_state=model.current_fen,
            starting_state=model.starting_fen,
            side_to_move=SideName[self.game.side_to_move.name],
            status=Status(model.status),
            winner=SideName(model.winner) if model.winner else None,
            in_check=self.game.is_in_check(),
            pieces={
                square.to_iccs(): piece.to_fen()
                for square, piece in self.game.board.position.items()
            },
            move_history=model.moves_iccs,
        )
