"""
DBA league state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal

from games.dba.betting import Bet
from games.dba.league import DBALeague, DBATeam
from games.dba.lore import LoreEntry, create_lore_catalog
from games.dba.players import DBAPlayer
from games.logic.enums import GameMode
from games.logic.state import BaseGameState


class DBAAction(StrEnum):
    """Log action types written by the DBA engine."""

    SEASON_START = "SEASON_START"
    WEEK_START = "WEEK_START"
    GAME_RESULT = "GAME_RESULT"
    WEEK_COMPLETE = "WEEK_COMPLETE"
    BET_PLACED = "BET_PLACED"
    BET_WON = "BET_WON"
    BET_LOST = "BET_LOST"
    BET_FAILED = "BET_FAILED"
    TRADE_PROPOSED = "TRADE_PROPOSED"
    TRADE_COMPLETED = "TRADE_COMPLETED"
    TRADE_REJECTED = "TRADE_REJECTED"
    TRADE_FAILED = "TRADE_FAILED"
    ENHANCEMENT_APPLIED = "ENHANCEMENT_APPLIED"
    ENHANCEMENT_FAILED = "ENHANCEMENT_FAILED"
    LORE_DISCOVERED = "LORE_DISCOVERED"
    LORE_FAILED = "LORE_FAILED"


@dataclass
class DBAState(BaseGameState):
    """
    Season state.

    `players` (seats) stays empty; the league teams play instead. The pool
    holds every generated player, drafted or not.
    """

    game_mode: Literal[GameMode.DBA] = GameMode.DBA
    league: DBALeague = field(default_factory=lambda: DBALeague(season=0, season_weeks=0))
    player_pool: list[DBAPlayer] = field(default_factory=list)
    bets: list[Bet] = field(default_factory=list)
    lore: list[LoreEntry] = field(default_factory=create_lore_catalog)
    user_team_id: str = ""

    @property
    def user_team(self) -> DBATeam | None:
        return self.league.find_team(self.user_team_id)

    @property
    def champion(self) -> DBATeam | None:
        return self.league.find_team(self.winner_id) if self.winner_id else None
