"""
DBA fantasy basketball season simulation.

The pool, draft and schedule are built from the engine RNG when the state
is initialized, so a seeded engine always drafts the same league. One tick
simulates one week of games.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import structlog

from games.dba.betting import Bet, BetStatus, place_bet, settle_bets
from games.dba.enhancements import Enhancement, apply_enhancement, available_enhancements
from games.dba.league import (
    DBAGame,
    DBAGameStatus,
    DBALeague,
    DBATeam,
    draft_teams,
    generate_schedule,
    simulate_game,
    update_standings,
)
from games.dba.lore import LoreEntry, LoreKind, discover_lore
from games.dba.players import DBAPlayer, generate_player_pool
from games.dba.scoring import fantasy_points
from games.dba.state import DBAAction, DBAState
from games.dba.trades import accept_trade, propose_trade, reject_trade
from games.logic.engine import BaseEngine, UpdateListener
from games.logic.enums import GameMode, GameStatus
from games.logic.exceptions import GameRuleError
from games.logic.settings import DBASettings, validate_dba_settings

logger = structlog.get_logger()

LEAGUE_ACTOR = "LEAGUE"
LEADERBOARD_STATS = ("points", "rebounds", "assists", "steals", "blocks")
DEFAULT_LEADERBOARD_SIZE = 20

T = TypeVar("T")


class DBAEngine(BaseEngine[DBAState]):
    game_mode = GameMode.DBA
    display_name = "DBA Season"

    def __init__(
        self,
        on_update: UpdateListener | None = None,
        *,
        seed: str | None = None,
        settings: DBASettings | None = None,
    ) -> None:
        self._settings = settings or DBASettings()
        validate_dba_settings(self._settings)
        super().__init__(on_update, seed=seed)

    @property
    def settings(self) -> DBASettings:
        return self._settings

    def initialize_state(self) -> DBAState:
        settings = self._settings
        pool = generate_player_pool(self._rng, settings.generated_pool_size)
        teams, undrafted = draft_teams(pool, settings, self._rng)
        league = DBALeague(
            season=settings.season,
            season_weeks=settings.season_weeks,
            standings=sorted(teams, key=lambda team: team.total_value, reverse=True),
            schedule=generate_schedule(teams, settings),
            draft_order=[team.id for team in teams],
            free_agents=undrafted,
        )
        for rank, team in enumerate(league.standings, start=1):
            team.league_rank = rank
        logger.debug("league drafted", teams=len(teams), pool=len(pool), free_agents=len(undrafted))
        return DBAState(league=league, player_pool=pool, user_team_id=teams[0].id)

    def _on_start(self) -> None:
        self._log_entry(DBAAction.SEASON_START, f"DBA Season {self._settings.season} has begun!", actor=LEAGUE_ACTOR)

    # ------------------------------------------------------------------
    # weekly simulation
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        state = self._state
        league = state.league
        week = league.current_week
        self._log_entry(DBAAction.WEEK_START, f"Processing Week {week} games...", actor=LEAGUE_ACTOR)

        due = [g for g in league.schedule if g.week <= week and g.status == DBAGameStatus.SCHEDULED]
        for game in due:
            self._play_game(game)

        update_standings(league)
        league.current_week += 1
        state.round_number += 1
        self._log_entry(DBAAction.WEEK_COMPLETE, f"Week {week} completed", actor=LEAGUE_ACTOR)

        if league.current_week > league.season_weeks:
            champion = league.standings[0]
            self._end_game(
                champion.id,
                f"Season {league.season} complete! {champion.name} wins the championship "
                f"with a {champion.record.wins}-{champion.record.losses} record!",
            )

    def _play_game(self, game: DBAGame) -> None:
        result = simulate_game(game, self._settings, self._rng)
        winner, loser = (
            (game.home_team, game.away_team)
            if result.winner_id == game.home_team.id
            else (game.away_team, game.home_team)
        )
        high, low = max(result.home_score, result.away_score), min(result.home_score, result.away_score)
        overtime = f" ({result.overtime_periods}OT)" if result.overtime_periods else ""
        mvp = result.mvp
        mvp_text = ""
        if mvp is not None:
            mvp_text = f" MVP: {mvp.player_name} ({mvp.points}pts/{mvp.rebounds}reb/{mvp.assists}ast)"
        logger.debug("game simulated", game_id=game.id, home=result.home_score, away=result.away_score)
        self._log_entry(
            DBAAction.GAME_RESULT,
            f"{winner.name} defeated {loser.name} {high}-{low}{overtime}.{mvp_text}",
            actor=LEAGUE_ACTOR,
        )
        self._settle_bets(game)

    def _settle_bets(self, game: DBAGame) -> None:
        user_team = self._state.user_team
        if user_team is None:
            return
        for bet in settle_bets(self._state.bets, game, user_team, self._settings):
            if bet.status == BetStatus.WON:
                self._log_entry(DBAAction.BET_WON, f"Bet won! +{bet.potential_payout} payout on {bet.selection}")
            else:
                self._log_entry(DBAAction.BET_LOST, f"Bet lost: {bet.amount} on {bet.selection}")

    def advance_week(self) -> bool:
        """Simulate the current week now; only while the season is playing."""
        if self._state.game_status != GameStatus.PLAYING:
            logger.warning("advance_week refused", status=self._state.game_status)
            return False
        return self.advance()

    # ------------------------------------------------------------------
    # user actions
    # ------------------------------------------------------------------

    def _attempt(self, failure_action: DBAAction, action: Callable[[], T]) -> T | None:
        """Run a domain action; rule violations become a failure entry."""
        try:
            return action()
        except GameRuleError as e:
            logger.info("user action rejected", action=failure_action, reason=str(e))
            self._log_entry(failure_action, str(e))
            return None

    def place_bet(self, game_id: str, bet_type: str, amount: int, selection: str) -> bool:
        user_team = self._state.user_team
        if user_team is None:
            self._log_entry(DBAAction.BET_FAILED, "No user team to place bets for")
            return False
        bet = self._attempt(
            DBAAction.BET_FAILED,
            lambda: place_bet(
                self._state.league,
                self._state.bets,
                user_team,
                game_id,
                bet_type,
                amount,
                selection,
                self._settings,
            ),
        )
        if bet is None:
            return False
        self._log_entry(
            DBAAction.BET_PLACED,
            f"Placed {bet.amount} bet on {bet.selection} ({bet.bet_type}) at {bet.odds}x odds",
            actor=user_team.name,
        )
        return True

    def get_bets(self) -> list[Bet]:
        return list(self._state.bets)

    def propose_trade(
        self,
        from_team_id: str,
        to_team_id: str,
        offered_player_ids: list[str],
        requested_player_ids: list[str],
        offered_money: int = 0,
    ) -> bool:
        league = self._state.league
        trade = self._attempt(
            DBAAction.TRADE_FAILED,
            lambda: propose_trade(
                league, from_team_id, to_team_id, offered_player_ids, requested_player_ids, offered_money
            ),
        )
        if trade is None:
            return False
        from_team = league.find_team(trade.from_team_id)
        from_name = from_team.name if from_team else trade.from_team_id
        self._log_entry(
            DBAAction.TRADE_PROPOSED,
            f"Trade {trade.id} proposed: {from_name} offers {len(trade.offered_player_ids)} players "
            f"+ {trade.offered_money} for {len(trade.requested_player_ids)} players",
            actor=from_name,
        )
        return True

    def accept_trade(self, trade_id: str) -> bool:
        league = self._state.league
        trade = self._attempt(DBAAction.TRADE_FAILED, lambda: accept_trade(league, trade_id))
        if trade is None:
            return False
        teams = (league.find_team(trade.from_team_id), league.find_team(trade.to_team_id))
        names = [team.name for team in teams if team is not None]
        self._log_entry(DBAAction.TRADE_COMPLETED, f"Trade {trade.id} completed between {' and '.join(names)}")
        return True

    def reject_trade(self, trade_id: str) -> bool:
        trade = self._attempt(DBAAction.TRADE_FAILED, lambda: reject_trade(self._state.league, trade_id))
        if trade is None:
            return False
        self._log_entry(DBAAction.TRADE_REJECTED, f"Trade {trade.id} rejected")
        return True

    def get_available_enhancements(self) -> list[Enhancement]:
        return available_enhancements(self._settings)

    def apply_enhancement(self, player_id: str, enhancement_id: str) -> bool:
        user_team = self._state.user_team
        if user_team is None:
            self._log_entry(DBAAction.ENHANCEMENT_FAILED, "No user team to enhance")
            return False
        applied = self._attempt(
            DBAAction.ENHANCEMENT_FAILED,
            lambda: apply_enhancement(user_team, player_id, enhancement_id, self._settings),
        )
        if applied is None:
            return False
        enhancement, player = applied
        self._log_entry(
            DBAAction.ENHANCEMENT_APPLIED,
            f"{enhancement.name} applied to {player.name} ({player.rarity})",
            actor=user_team.name,
        )
        return True

    def discover_lore(self, lore_id: str) -> bool:
        entry = self._attempt(DBAAction.LORE_FAILED, lambda: discover_lore(self._state.lore, lore_id))
        if entry is None:
            return False
        self._log_entry(DBAAction.LORE_DISCOVERED, f"Discovered lore: {entry.name}")
        return True

    def get_lore_entries(self, kind: LoreKind | None = None) -> list[LoreEntry]:
        if kind is None:
            return list(self._state.lore)
        return [entry for entry in self._state.lore if entry.kind == kind]

    # ------------------------------------------------------------------
    # read accessors
    # ------------------------------------------------------------------

    def get_standings(self) -> list[DBATeam]:
        return list(self._state.league.standings)

    def get_user_team(self) -> DBATeam | None:
        return self._state.user_team

    def get_all_players(self) -> list[DBAPlayer]:
        return list(self._state.player_pool)

    def get_free_agents(self) -> list[DBAPlayer]:
        return list(self._state.league.free_agents)

    def get_weekly_matchups(self, week: int | None = None) -> list[DBAGame]:
        target = week if week is not None else self._state.league.current_week
        return self._state.league.games_for_week(target)

    def get_player_leaderboard(self, stat: str = "points", limit: int = DEFAULT_LEADERBOARD_SIZE) -> list[DBAPlayer]:
        """Rostered players ordered by a season-average stat."""
        if stat not in LEADERBOARD_STATS:
            logger.warning("unknown leaderboard stat, using points", stat=stat)
            stat = "points"
        rostered = [player for team in self._state.league.standings for player in team.players]
        rostered.sort(key=lambda player: getattr(player.stats, stat), reverse=True)
        return rostered[:limit]

    def get_game_fantasy_points(self, game_id: str) -> dict[str, float]:
        """Fantasy points per player for a completed game."""
        game = self._state.league.find_game(game_id)
        if game is None or game.result is None:
            return {}
        rules = self._settings.scoring
        return {line.player_id: fantasy_points(line, rules) for line in game.result.player_stats}
