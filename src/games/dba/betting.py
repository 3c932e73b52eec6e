"""
Wagers placed by the user team on scheduled league games.

Odds are derived from each team's expected (variance-free) score so they
do not consume randomness. Stakes are debited when a bet is placed and
payouts credited when the game completes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from games.dba.league import DBAGame, DBAGameStatus, DBALeague, DBATeam, expected_team_score
from games.logic.exceptions import InvalidBetError
from games.logic.settings import DBASettings

SPREAD_HOME_ODDS = 1.95
SPREAD_AWAY_ODDS = 1.85
FAVORED_TOTAL_ODDS = 1.8
LONGSHOT_TOTAL_ODDS = 2.1
PLAYER_PROP_ODDS = 1.9


class BetType(StrEnum):
    MONEYLINE = "moneyline"
    SPREAD = "spread"
    OVER_UNDER = "over_under"
    PLAYER_PROP = "player_prop"


class BetStatus(StrEnum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"


@dataclass
class Bet:
    """
    A single wager.

    `selection` depends on the bet type: a team id or name for moneyline,
    "home"/"away" for spread, "over"/"under" for totals, and a player id for
    player props (wins when the player beats their season scoring average).
    """

    id: str
    game_id: str
    bettor: str
    bet_type: BetType
    amount: int
    odds: float
    potential_payout: int
    selection: str
    status: BetStatus = BetStatus.PENDING


def _resolve_team(game: DBAGame, selection: str) -> DBATeam | None:
    for team in (game.home_team, game.away_team):
        if selection in (team.id, team.name):
            return team
    return None


def calculate_odds(game: DBAGame, bet_type: BetType, selection: str, settings: DBASettings) -> float:
    """Decimal odds for a selection; raises InvalidBetError for an unknown selection."""
    home_strength = expected_team_score(game.home_team, settings)
    away_strength = expected_team_score(game.away_team, settings)

    match bet_type:
        case BetType.MONEYLINE:
            team = _resolve_team(game, selection)
            if team is None:
                raise InvalidBetError(f"{selection!r} is not playing in {game.id}")
            strength = home_strength if team is game.home_team else away_strength
            probability = strength / (home_strength + away_strength)
            return round(1 / probability, 2)
        case BetType.SPREAD:
            if selection not in ("home", "away"):
                raise InvalidBetError(f"spread selection must be 'home' or 'away', got {selection!r}")
            return SPREAD_HOME_ODDS if selection == "home" else SPREAD_AWAY_ODDS
        case BetType.OVER_UNDER:
            if selection not in ("over", "under"):
                raise InvalidBetError(f"over/under selection must be 'over' or 'under', got {selection!r}")
            over_favored = home_strength + away_strength > settings.over_under_line
            favored = "over" if over_favored else "under"
            return FAVORED_TOTAL_ODDS if selection == favored else LONGSHOT_TOTAL_ODDS
        case BetType.PLAYER_PROP:
            if game.home_team.find_player(selection) is None and game.away_team.find_player(selection) is None:
                raise InvalidBetError(f"player {selection!r} is not on either roster in {game.id}")
            return PLAYER_PROP_ODDS
    raise InvalidBetError(f"unknown bet type {bet_type!r}")


def place_bet(
    league: DBALeague,
    bets: list[Bet],
    bettor: DBATeam,
    game_id: str,
    bet_type: str,
    amount: int,
    selection: str,
    settings: DBASettings,
) -> Bet:
    """Validate, price and record a bet, debiting the bettor's budget."""
    game = league.find_game(game_id)
    if game is None or game.status != DBAGameStatus.SCHEDULED:
        raise InvalidBetError(f"Cannot place bet on game {game_id} - game not available")
    if amount <= 0:
        raise InvalidBetError("Bet amount must be positive")
    if bettor.budget < amount:
        raise InvalidBetError(f"Insufficient funds for bet: budget {bettor.budget}, stake {amount}")
    try:
        kind = BetType(bet_type)
    except ValueError:
        raise InvalidBetError(f"unknown bet type {bet_type!r}") from None

    odds = calculate_odds(game, kind, selection, settings)
    bet = Bet(
        id=f"bet-{len(bets) + 1}",
        game_id=game_id,
        bettor=bettor.id,
        bet_type=kind,
        amount=amount,
        odds=odds,
        potential_payout=round(amount * odds),
        selection=selection,
    )
    bettor.budget -= amount
    bets.append(bet)
    return bet


def bet_won(bet: Bet, game: DBAGame, settings: DBASettings) -> bool:
    result = game.result
    if result is None:
        return False
    match bet.bet_type:
        case BetType.MONEYLINE:
            team = _resolve_team(game, bet.selection)
            return team is not None and team.id == result.winner_id
        case BetType.SPREAD:
            margin = result.home_score - result.away_score
            if bet.selection == "home":
                return margin > settings.spread_points
            return margin < -settings.spread_points
        case BetType.OVER_UNDER:
            if bet.selection == "over":
                return result.total_points > settings.over_under_line
            return result.total_points < settings.over_under_line
        case BetType.PLAYER_PROP:
            line = result.stat_line(bet.selection)
            player = game.home_team.find_player(bet.selection) or game.away_team.find_player(bet.selection)
            return line is not None and player is not None and line.points > player.stats.points
    return False


def settle_bets(bets: list[Bet], game: DBAGame, bettor: DBATeam, settings: DBASettings) -> list[Bet]:
    """Resolve pending bets on a completed game; returns the bets settled."""
    settled: list[Bet] = []
    for bet in bets:
        if bet.game_id != game.id or bet.status != BetStatus.PENDING:
            continue
        if bet_won(bet, game, settings):
            bet.status = BetStatus.WON
            bettor.budget += bet.potential_payout
        else:
            bet.status = BetStatus.LOST
        settled.append(bet)
    return settled
