"""
State shared by all game variants.

Engine state is a mutable dataclass tree owned by exactly one engine. Only
the owning engine mutates it; hosts receive the live object and must treat
it as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from games.logic.enums import GameStatus

if TYPE_CHECKING:
    from games.monopoly.board import Property


@dataclass
class Player:
    """
    A seat in Monopoly, Spades or Chess.

    Only Monopoly uses money, position, properties and jail state; the other
    games keep the defaults.
    """

    id: str
    name: str
    color: str = ""
    money: int = 0
    position: int = 0  # board square 0-39
    owned_properties: list[Property] = field(default_factory=list)
    in_jail: bool = False
    jail_turns: int = 0


@dataclass
class BaseGameState:
    """Fields every game variant carries."""

    players: list[Player] = field(default_factory=list)
    current_player_index: int = 0
    game_status: GameStatus = GameStatus.WAITING
    round_number: int = 1
    winner_id: str | None = None

    @property
    def current_player(self) -> Player | None:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    def find_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def advance_player_index(self) -> None:
        """Move the turn to the next seat, wrapping around."""
        if self.players:
            self.current_player_index = (self.current_player_index + 1) % len(self.players)
