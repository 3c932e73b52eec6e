"""
Uniform, display-oriented summaries of any engine state.
"""

from __future__ import annotations

from typing import assert_never

from pydantic import BaseModel, ConfigDict

from games.chess.state import ChessState
from games.dba.state import DBAState
from games.logic.enums import GameMode, GameStatus
from games.monopoly.board import calculate_net_worth
from games.monopoly.state import MonopolyState
from games.spades.state import SpadesState

GameState = MonopolyState | SpadesState | DBAState | ChessState


class StateSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    game_mode: GameMode
    status: GameStatus
    round_number: int
    active: str | None = None
    leader: str | None = None
    winner_id: str | None = None
    headline: str = ""


def _monopoly_summary(state: MonopolyState) -> StateSummary:
    current = state.current_player
    richest = max(state.players, key=calculate_net_worth, default=None)
    return StateSummary(
        game_mode=state.game_mode,
        status=state.game_status,
        round_number=state.round_number,
        active=current.name if current else None,
        leader=richest.name if richest else None,
        winner_id=state.winner_id,
        headline=f"{len(state.players)} players, bank ${state.bank_money}, free parking ${state.free_parking_pot}",
    )


def _spades_summary(state: SpadesState) -> StateSummary:
    current = state.current_player
    score = state.score
    leader = None
    if score.team1 != score.team2:
        leader = "team1" if score.team1 > score.team2 else "team2"
    return StateSummary(
        game_mode=state.game_mode,
        status=state.game_status,
        round_number=state.round_number,
        active=current.name if current else None,
        leader=leader,
        winner_id=state.winner_id,
        headline=f"Team 1 {score.team1} - Team 2 {score.team2} ({state.phase})",
    )


def _dba_summary(state: DBAState) -> StateSummary:
    league = state.league
    top = league.standings[0] if league.standings else None
    return StateSummary(
        game_mode=state.game_mode,
        status=state.game_status,
        round_number=state.round_number,
        leader=top.name if top else None,
        winner_id=state.winner_id,
        headline=f"Season {league.season}, week {min(league.current_week, league.season_weeks)}",
    )


def _chess_summary(state: ChessState) -> StateSummary:
    current = state.current_player
    return StateSummary(
        game_mode=state.game_mode,
        status=state.game_status,
        round_number=state.round_number,
        active=current.name if current else None,
        leader=str(state.king_of_hill) if state.king_of_hill else None,
        winner_id=state.winner_id,
        headline=f"Hill at {state.hill}, {len(state.move_history)} moves played",
    )


def summarize_state(state: GameState) -> StateSummary:
    match state:
        case MonopolyState():
            return _monopoly_summary(state)
        case SpadesState():
            return _spades_summary(state)
        case DBAState():
            return _dba_summary(state)
        case ChessState():
            return _chess_summary(state)
        case _:
            assert_never(state)
