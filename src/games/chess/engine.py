"""
Flavor simulation of four-player King of the Hill chess.

No chess rules are enforced: each tick narrates a move for the current
seat and, with a small probability, that seat's king takes the hill and
wins.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from games.chess.state import KING_START_SQUARES, ChessAction, ChessColor, ChessPhase, ChessPiece, ChessState
from games.logic.engine import BaseEngine, UpdateListener
from games.logic.enums import GameMode
from games.logic.exceptions import UnsupportedSettingsError
from games.logic.rng import chance
from games.logic.settings import (
    CHESS_NUM_PLAYERS,
    DEFAULT_CHESS_SEATS,
    ChessSettings,
    SeatConfig,
    validate_chess_settings,
)
from games.logic.state import Player

logger = structlog.get_logger()

FLAVOR_MOVES = (
    "advances toward center",
    "captures enemy piece",
    "defends king",
    "strategic positioning",
)


class ChessEngine(BaseEngine[ChessState]):
    game_mode = GameMode.CHESS
    display_name = "King of the Hill Chess"

    def __init__(
        self,
        on_update: UpdateListener | None = None,
        *,
        seed: str | None = None,
        seats: Sequence[SeatConfig] = DEFAULT_CHESS_SEATS,
        settings: ChessSettings | None = None,
    ) -> None:
        self._settings = settings or ChessSettings()
        validate_chess_settings(self._settings)
        if len(seats) != CHESS_NUM_PLAYERS:
            raise UnsupportedSettingsError(
                f"King of the Hill needs exactly {CHESS_NUM_PLAYERS} seats, got {len(seats)}"
            )
        self._seats = tuple(seats)
        super().__init__(on_update, seed=seed)

    def initialize_state(self) -> ChessState:
        size = self._settings.board_size
        board: list[list[str | None]] = [[None] * size for _ in range(size)]
        kings: dict[ChessColor, ChessPiece] = {}
        for color, (row, col) in KING_START_SQUARES.items():
            king = ChessPiece(id=f"{color}-king", kind="king", color=color, row=row, col=col)
            kings[color] = king
            board[row][col] = king.id
        return ChessState(
            players=[Player(id=seat.id, name=seat.name, color=seat.color) for seat in self._seats],
            board=board,
            kings=kings,
            hill=self._settings.hill,
        )

    def _on_start(self) -> None:
        self._state.phase = ChessPhase.MAIN

    def seat_color(self, seat: int) -> ChessColor:
        return list(ChessColor)[seat]

    def _advance(self) -> None:
        state = self._state
        seat = state.current_player_index
        player = state.players[seat]
        move = self._rng.choice(FLAVOR_MOVES)
        state.move_history.append(f"{player.name} {move}")
        self._log_entry(ChessAction.CHESS_MOVE, f"{player.name} {move}", actor=player.name)

        if chance(self._rng, self._settings.hill_capture_chance):
            self._take_hill(seat)
            return

        state.advance_player_index()
        state.round_number += 1

    def _take_hill(self, seat: int) -> None:
        state = self._state
        player = state.players[seat]
        color = self.seat_color(seat)
        king = state.kings[color]

        hill_row, hill_col = state.hill
        occupant = state.piece_at(hill_row, hill_col)
        if occupant is not None and occupant is not king:
            occupant.captured = True
        state.board[king.row][king.col] = None
        king.row, king.col = hill_row, hill_col
        king.has_moved = True
        state.board[hill_row][hill_col] = king.id
        state.king_of_hill = color

        logger.info("hill captured", color=color, player_id=player.id)
        self._log_entry(
            ChessAction.KING_OF_HILL,
            f"{player.name} has conquered the hill and wins the game!",
            actor=player.name,
        )
        self._end_game(player.id, f"{player.name} is King of the Hill")
