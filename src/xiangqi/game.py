"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of Xiangqi:
whose turn it is, which moves are accepted, and when the game is over.
The rules of the pieces themselves live in the Board.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    GameError,
    GameNotPlayingError,
    IllegalMoveError,
    InvalidFENError,
    NoPieceAtSourceError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Status
from src.xiangqi.board import Board
from src.xiangqi.fen import STARTING_FEN, FENState, split_fen_and_moves
from src.xiangqi.moves import AcceptedMove, Move
from src.xiangqi.pieces import Side
from src.xiangqi.square import Square


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    side_to_move: Side
    starting_state: FENState
    history: list[AcceptedMove] = field(default_factory=list)
    status: Status = Status.IN_PROGRESS
    winner: Optional[Side] = None

    @classmethod
    def new_game(cls) -> Self:
        """Canonical opening position, Red to move."""
        return cls.from_fen(STARTING_FEN)

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Start a game from an arbitrary position. The position may already be decided (e.g. checkmate)."""
        state = FENState.from_fen(fen)
        game = cls(
            board=Board.from_fen(state.position),
            side_to_move=state.side_to_move,
            starting_state=state,
        )
        game._update_game_status()
        return game

    @classmethod
    def from_fen_with_moves(cls, text: str) -> Self:
        """
        Replay a list of ICCS moves from a starting FEN.
        ex) "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1 moves h7e7 h0g2"
        """
        fen, moves_iccs = split_fen_and_moves(text)
        game = cls.from_fen(fen)
        for move_iccs in moves_iccs:
            try:
                game.make_move_iccs(move_iccs)
            except GameError as e:
                raise InvalidFENError(f"Invalid move in history: {move_iccs!r}") from e
        return game

    def to_fen(self) -> str:
        state = FENState(
            position=self.board.to_fen(),
            side_to_move=self.side_to_move,
            half_move_clock=self._half_move_clock(),
            num_moves=self._full_move_number(),
        )
        return state.to_fen()

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        return GameModel(
            current_fen=self.to_fen(),
            starting_fen=self.starting_state.to_fen(),
            moves_iccs=self.moves_iccs(),
            status=self.status,
            winner=self.winner.name.lower() if self.winner else None,
        )

    # --- QUERIES ---
    @property
    def moves(self) -> list[Move]:
        return [accepted.move for accepted in self.history]

    def moves_iccs(self) -> list[str]:
        return [move.to_iccs() for move in self.moves]

    def is_in_check(self) -> bool:
        """Is the side to move currently in check?"""
        return self.board.is_check(self.side_to_move)

    def legal_moves(self) -> list[Move]:
        """All legal moves of the side to move. Empty once the game is over."""
        if self.status != Status.IN_PROGRESS:
            return []
        return self.board.legal_moves(self.side_to_move)

    def legal_destinations(self, square: Square) -> list[Square]:
        """Where the piece on `square` may go. Empty if it is not that piece's turn (or the game is over)."""
        piece = self.board.piece(square)
        if self.status != Status.IN_PROGRESS or piece is None or piece.side != self.side_to_move:
            return []
        return self.board.legal_destinations(square)

    # --- STATE TRANSITIONS ---
    def make_move(self, from_square: Square, to_square: Square) -> AcceptedMove:
        """
        Attempt to make a move
        -----

        1. game must still be in progress
        2. there must be a piece on the starting square
        3. ... of the side to move
        4. the move must be legal
        ----
        5. update the board (the destination's piece, if any, is captured)
        6. update the history of moves
        7. flip the side to move
        8. update game status (if needed)

        Every rejection raises before anything is changed.
        """
        # make sure the game is (still) in progress
        if self.status != Status.IN_PROGRESS:
            raise GameNotPlayingError(f"Game is not in progress. status: {self.status}")

        piece = self.board.piece(from_square)
        if piece is None:
            raise NoPieceAtSourceError(f"No piece on {from_square.to_iccs()}.")

        # make sure it is your turn
        if piece.side != self.side_to_move:
            raise NotYourTurnError(
                f"It is {self.side_to_move.name.lower()}'s turn to move."
            )

        # check if move is legal
        move = Move(from_square, to_square)
        if not self.board.is_legal_move(from_square, to_square):
            raise IllegalMoveError(f"Move not allowed: {move.to_iccs()}")

        # Store move info before update
        accepted_move = AcceptedMove.from_move_and_board(move, self.board)

        self.board.move_piece(move)
        self.history.append(accepted_move)
        self.side_to_move = self.side_to_move.opponent
        self._update_game_status()
        return accepted_move

    def make_move_iccs(self, move_iccs: str) -> AcceptedMove:
        """Convenience method: the move written in ICCS notation (e.g. "h7e7")"""
        try:
            move = Move.from_iccs(move_iccs)
        except GameError as e:
            raise IllegalMoveError(f"Cannot interpret {move_iccs!r} as a move.") from e
        return self.make_move(move.from_square, move.to_square)

    def undo_move(self) -> bool:
        """
        Take back the last move. Returns False if there was nothing to undo.

        The piece goes back to its starting square and a captured piece is put back on the board.
        """
        if not self.history:
            return False

        accepted_move = self.history.pop()
        move = accepted_move.move
        self.board.remove_piece(move.to_square)
        self.board.place_piece(accepted_move.moving_piece, move.from_square)
        if accepted_move.captured_piece is not None:
            self.board.place_piece(accepted_move.captured_piece, move.to_square)

        self.side_to_move = self.side_to_move.opponent
        self._change_status(Status.IN_PROGRESS)
        return True

    # -- PRIVATE HELPERS ---
    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended and changes status accordingly.

        NOTE the side to move has already been flipped. We look at the position from the point of view of the side that must answer.
        """
        side = self.side_to_move
        if self.board.find_general(side) is None:
            # general got captured: immediate loss
            self._change_status(Status.CHECKMATE, winner=side.opponent)
        elif self.board.find_general(side.opponent) is None:
            # only reachable from a loaded position
            self._change_status(Status.CHECKMATE, winner=side)
        elif self.board.has_legal_move(side):
            self._change_status(Status.IN_PROGRESS)
        elif self.board.is_check(side):
            self._change_status(Status.CHECKMATE, winner=side.opponent)
        else:
            self._change_status(Status.STALEMATE)

    def _change_status(self, new_status: Status, winner: Optional[Side] = None) -> None:
        self.status = new_status
        self.winner = winner

    # --- FEN COUNTERS ---
    def _half_move_clock(self) -> int:
        """Moves since the last capture."""
        for moves_since, accepted_move in enumerate(reversed(self.history)):
            if accepted_move.is_capture:
                return moves_since
        return self.starting_state.half_move_clock + len(self.history)

    def _full_move_number(self) -> int:
        """Starts at the loaded FEN's number and increments after every move Black makes."""
        black_moves = sum(
            1 for accepted_move in self.history if accepted_move.moving_piece.side == Side.BLACK
        )
        return self.starting_state.num_moves + black_moves
