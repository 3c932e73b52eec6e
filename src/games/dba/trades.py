"""
Player-for-player trades between league teams.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from games.dba.league import DBALeague, DBATeam, refresh_team
from games.logic.exceptions import InvalidTradeError


class TradeStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass
class Trade:
    id: str
    from_team_id: str
    to_team_id: str
    offered_player_ids: tuple[str, ...]
    requested_player_ids: tuple[str, ...]
    offered_money: int
    proposed_week: int
    status: TradeStatus = TradeStatus.PENDING


def _require_team(league: DBALeague, team_id: str) -> DBATeam:
    team = league.find_team(team_id)
    if team is None:
        raise InvalidTradeError(f"Unknown team {team_id!r}")
    return team


def _require_players(team: DBATeam, player_ids: tuple[str, ...]) -> None:
    missing = [pid for pid in player_ids if team.find_player(pid) is None]
    if missing:
        raise InvalidTradeError(f"{team.name} does not roster {', '.join(missing)}")


def propose_trade(
    league: DBALeague,
    from_team_id: str,
    to_team_id: str,
    offered_player_ids: list[str],
    requested_player_ids: list[str],
    offered_money: int = 0,
) -> Trade:
    from_team = _require_team(league, from_team_id)
    to_team = _require_team(league, to_team_id)
    if from_team is to_team:
        raise InvalidTradeError("A team cannot trade with itself")
    if offered_money < 0:
        raise InvalidTradeError("Offered money must not be negative")
    if from_team.budget < offered_money:
        raise InvalidTradeError("Insufficient funds for trade offer")

    offered = tuple(offered_player_ids)
    requested = tuple(requested_player_ids)
    if not offered and not requested and offered_money == 0:
        raise InvalidTradeError("Trade must include players or money")
    if len(set(offered)) != len(offered) or len(set(requested)) != len(requested):
        raise InvalidTradeError("A player can only appear once in a trade")
    _require_players(from_team, offered)
    _require_players(to_team, requested)

    league.trades_proposed += 1
    trade = Trade(
        id=f"trade-{league.trades_proposed}",
        from_team_id=from_team.id,
        to_team_id=to_team.id,
        offered_player_ids=offered,
        requested_player_ids=requested,
        offered_money=offered_money,
        proposed_week=league.current_week,
    )
    league.active_trades.append(trade)
    return trade


def _pending_trade(league: DBALeague, trade_id: str) -> Trade:
    trade = next((t for t in league.active_trades if t.id == trade_id), None)
    if trade is None or trade.status != TradeStatus.PENDING:
        raise InvalidTradeError(f"Trade {trade_id} is not available")
    return trade


def _move_player(source: DBATeam, target: DBATeam, player_id: str) -> None:
    player = source.find_player(player_id)
    if player is None:
        raise InvalidTradeError(f"{source.name} no longer rosters {player_id}")
    source.players.remove(player)
    target.players.append(player)


def accept_trade(league: DBALeague, trade_id: str) -> Trade:
    """
    Execute a pending trade.

    Rosters and budgets are re-validated first because they may have changed
    since the proposal; both lineups are re-optimized afterwards.
    """
    trade = _pending_trade(league, trade_id)
    from_team = _require_team(league, trade.from_team_id)
    to_team = _require_team(league, trade.to_team_id)
    _require_players(from_team, trade.offered_player_ids)
    _require_players(to_team, trade.requested_player_ids)
    if from_team.budget < trade.offered_money:
        raise InvalidTradeError("Insufficient funds for trade offer")

    for player_id in trade.offered_player_ids:
        _move_player(from_team, to_team, player_id)
    for player_id in trade.requested_player_ids:
        _move_player(to_team, from_team, player_id)
    from_team.budget -= trade.offered_money
    to_team.budget += trade.offered_money

    refresh_team(from_team)
    refresh_team(to_team)

    trade.status = TradeStatus.ACCEPTED
    league.active_trades.remove(trade)
    return trade


def reject_trade(league: DBALeague, trade_id: str) -> Trade:
    trade = _pending_trade(league, trade_id)
    trade.status = TradeStatus.REJECTED
    league.active_trades.remove(trade)
    return trade
