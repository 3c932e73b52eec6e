"""
DBA fantasy basketball: scoring, drafting, schedule, season flow and the
user actions (bets, trades, enhancements).
"""

import random
from collections import Counter

import pytest

from games.dba.betting import BetStatus, BetType, calculate_odds
from games.dba.engine import DBAEngine
from games.dba.league import (
    DBAGameStatus,
    optimize_lineup,
    round_robin_rounds,
    simulate_game,
)
from games.dba.lore import LoreKind
from games.dba.players import Position, Rarity, generate_player_pool
from games.dba.scoring import StatLine, fantasy_points
from games.dba.state import DBAAction
from games.logic.enums import GameStatus, SystemAction
from games.logic.exceptions import UnsupportedSettingsError
from games.logic.settings import DBASettings, ScoringRules
from games.tests.helpers import FIXED_SEED, OTHER_SEED, EntryRecorder, run_to_end

RULES = ScoringRules()


def _line(**stats: int) -> StatLine:
    base = {"points": 0, "rebounds": 0, "assists": 0, "steals": 0, "blocks": 0}
    base.update(stats)
    return StatLine(player_id="p", player_name="P", **base)


def _engine(recorder: EntryRecorder | None = None, seed: str = FIXED_SEED) -> DBAEngine:
    engine = DBAEngine(recorder, seed=seed)
    engine.start()
    return engine


class TestFantasyPoints:
    def test_triple_double(self):
        assert fantasy_points(_line(points=10, rebounds=10, assists=10), RULES) == 52.0

    def test_single_category_has_no_bonus(self):
        assert fantasy_points(_line(points=30), RULES) == 30.0

    def test_double_double(self):
        assert fantasy_points(_line(points=10, rebounds=10), RULES) == 27.0

    def test_turnovers_and_threes(self):
        line = StatLine(
            player_id="p",
            player_name="P",
            points=9,
            rebounds=0,
            assists=0,
            steals=1,
            blocks=1,
            turnovers=2,
            three_pm=2,
        )
        # 9 + 3 + 3 + 2 * 0.5 - 2
        assert fantasy_points(line, RULES) == 14.0


class TestPlayerPool:
    def test_pool_size_and_unique_ids(self):
        pool = generate_player_pool(random.Random(1), 50)
        ids = [p.id for p in pool]
        assert len(set(ids)) == len(ids)
        assert len(pool) == 25 + 50

    def test_value_exceeds_salary(self):
        for player in generate_player_pool(random.Random(2), 20):
            assert player.value >= player.contract.salary


class TestSchedule:
    def test_round_robin_meets_everyone_once(self):
        rounds = round_robin_rounds(8)
        assert len(rounds) == 7
        pairs = Counter(frozenset(pair) for matchups in rounds for pair in matchups)
        assert len(pairs) == 28
        assert set(pairs.values()) == {1}

    def test_each_team_plays_once_per_week(self):
        engine = DBAEngine(seed=FIXED_SEED)
        league = engine.get_game_state().league
        assert len(league.schedule) == 18 * 4
        for week in range(1, 19):
            games = league.games_for_week(week)
            assert len(games) == 4
            teams = [team.id for game in games for team in (game.home_team, game.away_team)]
            assert sorted(teams) == sorted(team.id for team in league.standings)

    def test_game_dates_follow_weeks(self):
        league = DBAEngine(seed=FIXED_SEED).get_game_state().league
        first, second = league.games_for_week(1)[0], league.games_for_week(2)[0]
        assert (second.date - first.date).days == 7


class TestDraft:
    def test_no_player_on_two_rosters(self):
        state = DBAEngine(seed=FIXED_SEED).get_game_state()
        rostered = [p.id for team in state.league.standings for p in team.players]
        assert len(rostered) == len(set(rostered))
        free_agents = {p.id for p in state.league.free_agents}
        assert free_agents.isdisjoint(rostered)
        assert len(rostered) + len(free_agents) == len(state.player_pool)

    def test_lineup_is_subset_and_bench_is_rest(self):
        state = DBAEngine(seed=FIXED_SEED).get_game_state()
        for team in state.league.standings:
            assert len(team.players) == 5 + 10
            roster = {id(p) for p in team.players}
            starters = {id(p) for p in team.lineup_players()}
            bench = {id(p) for p in team.bench}
            assert starters <= roster
            assert bench == roster - starters
            for position, player in team.starting_lineup.items():
                assert player is None or player.position == position

    def test_optimize_lineup_picks_best_scorer(self):
        team = DBAEngine(seed=FIXED_SEED).get_game_state().league.standings[0]
        center = next(p for p in team.players if p.position == Position.C)
        center.stats.rebounds = 400
        optimize_lineup(team)
        assert team.starting_lineup[Position.C] is center

    def test_same_seed_drafts_same_league(self):
        a = DBAEngine(seed=FIXED_SEED).get_game_state().league
        b = DBAEngine(seed=FIXED_SEED).get_game_state().league
        rosters_a = [[p.name for p in t.players] for t in a.standings]
        rosters_b = [[p.name for p in t.players] for t in b.standings]
        assert rosters_a == rosters_b

    def test_user_team_is_first_drafted(self):
        engine = DBAEngine(seed=FIXED_SEED)
        user_team = engine.get_user_team()
        assert user_team is not None
        assert user_team.is_user
        assert user_team.id == "dba-team-0"
        assert user_team.budget == 100_000_000

    def test_odd_team_count_rejected(self):
        with pytest.raises(UnsupportedSettingsError):
            DBAEngine(settings=DBASettings(team_names=("A", "B", "C")))

    def test_pool_too_small_rejected(self):
        with pytest.raises(UnsupportedSettingsError, match="generated_pool_size"):
            DBAEngine(settings=DBASettings(generated_pool_size=10))


class TestSeason:
    def test_week_plays_scheduled_games(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        recorder.entries.clear()
        assert engine.advance_week() is True

        league = engine.get_game_state().league
        assert league.current_week == 2
        assert all(g.status == DBAGameStatus.COMPLETED for g in league.games_for_week(1))
        assert all(g.status == DBAGameStatus.SCHEDULED for g in league.games_for_week(2))
        assert recorder.action_types[0] == DBAAction.WEEK_START
        assert recorder.action_types.count(DBAAction.GAME_RESULT) == 4
        assert recorder.action_types[-1] == DBAAction.WEEK_COMPLETE
        assert all(entry.actor == "LEAGUE" for entry in recorder.entries)

    def test_advance_week_before_start_refused(self):
        assert DBAEngine(seed=FIXED_SEED).advance_week() is False

    def test_results_are_consistent(self):
        engine = _engine()
        engine.advance_week()
        for game in engine.get_weekly_matchups(1):
            result = game.result
            assert result is not None
            assert result.home_score != result.away_score
            winner = max((result.home_score, game.home_team.id), (result.away_score, game.away_team.id))[1]
            assert result.winner_id == winner
            roster_ids = {p.id for p in game.home_team.players} | {p.id for p in game.away_team.players}
            assert {line.player_id for line in result.player_stats} == roster_ids
            assert result.mvp is not None

    def test_replaying_completed_game_raises(self):
        engine = _engine()
        engine.advance_week()
        game = engine.get_weekly_matchups(1)[0]
        with pytest.raises(ValueError):
            simulate_game(game, engine.settings, random.Random(1))

    def test_standings_sorted_by_win_pct(self):
        engine = _engine()
        for _ in range(5):
            engine.advance_week()
        standings = engine.get_standings()
        keys = [(t.record.win_pct, t.record.wins) for t in standings]
        assert keys == sorted(keys, reverse=True)
        assert [t.league_rank for t in standings] == list(range(1, 9))

    def test_full_season(self, recorder: EntryRecorder):
        engine = DBAEngine(recorder, seed=OTHER_SEED)
        ticks = run_to_end(engine)
        state = engine.get_game_state()

        assert ticks == 18
        assert state.game_status == GameStatus.ENDED
        assert state.champion is state.league.standings[0]
        assert state.winner_id == state.league.standings[0].id
        assert sum(t.record.wins for t in state.league.standings) == 72
        assert sum(t.record.games for t in state.league.standings) == 144
        assert recorder.action_types[-1] == SystemAction.GAME_END

    def test_fantasy_points_for_completed_game(self):
        engine = _engine()
        game_id = engine.get_weekly_matchups(1)[0].id
        assert engine.get_game_fantasy_points(game_id) == {}
        engine.advance_week()
        points = engine.get_game_fantasy_points(game_id)
        assert len(points) == 30
        assert engine.get_game_fantasy_points("game-999") == {}


class TestAccessors:
    def test_leaderboard_sorted_and_limited(self):
        engine = DBAEngine(seed=FIXED_SEED)
        leaders = engine.get_player_leaderboard("rebounds", limit=5)
        assert len(leaders) == 5
        values = [p.stats.rebounds for p in leaders]
        assert values == sorted(values, reverse=True)

    def test_leaderboard_unknown_stat_uses_points(self):
        engine = DBAEngine(seed=FIXED_SEED)
        assert engine.get_player_leaderboard("dunks") == engine.get_player_leaderboard("points")

    def test_free_agents_and_pool(self):
        engine = DBAEngine(seed=FIXED_SEED)
        assert len(engine.get_all_players()) == 225
        assert len(engine.get_free_agents()) == 225 - 8 * 15

    def test_weekly_matchups_default_to_current_week(self):
        engine = _engine()
        assert engine.get_weekly_matchups() == engine.get_weekly_matchups(1)
        engine.advance_week()
        assert engine.get_weekly_matchups() == engine.get_weekly_matchups(2)


class TestBets:
    def test_bet_placed_and_settled(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        user_team = engine.get_user_team()
        game = next(g for g in engine.get_weekly_matchups(1) if g.involves(user_team.id))

        assert engine.place_bet(game.id, "moneyline", 1_000_000, user_team.id) is True
        assert user_team.budget == 99_000_000
        bet = engine.get_bets()[0]
        assert bet.status == BetStatus.PENDING
        assert bet.potential_payout == round(1_000_000 * bet.odds)
        assert recorder.action_types[-1] == DBAAction.BET_PLACED

        engine.advance_week()
        assert bet.status in (BetStatus.WON, BetStatus.LOST)
        won = game.result.winner_id == user_team.id
        assert bet.status == (BetStatus.WON if won else BetStatus.LOST)
        expected_budget = 99_000_000 + (bet.potential_payout if won else 0)
        assert user_team.budget == expected_budget
        assert (DBAAction.BET_WON if won else DBAAction.BET_LOST) in recorder.action_types

    def test_insufficient_funds(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        game = engine.get_weekly_matchups(1)[0]
        assert engine.place_bet(game.id, "spread", 200_000_000, "home") is False
        assert recorder.action_types[-1] == DBAAction.BET_FAILED
        assert engine.get_bets() == []
        assert engine.get_user_team().budget == 100_000_000

    def test_unknown_game_and_type(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        assert engine.place_bet("game-999", "moneyline", 100, "x") is False
        game = engine.get_weekly_matchups(1)[0]
        assert engine.place_bet(game.id, "parlay", 100, "home") is False
        assert engine.place_bet(game.id, "over_under", 100, "sideways") is False
        assert engine.place_bet(game.id, "spread", 0, "home") is False
        assert recorder.action_types.count(DBAAction.BET_FAILED) == 4

    def test_completed_game_not_bettable(self):
        engine = _engine()
        engine.advance_week()
        game = engine.get_weekly_matchups(1)[0]
        assert engine.place_bet(game.id, "spread", 100, "home") is False

    def test_moneyline_odds_favor_stronger_team(self):
        engine = DBAEngine(seed=FIXED_SEED)
        settings = engine.settings
        game = engine.get_weekly_matchups(1)[0]
        home = calculate_odds(game, BetType.MONEYLINE, game.home_team.id, settings)
        away = calculate_odds(game, BetType.MONEYLINE, game.away_team.id, settings)
        assert home > 1 and away > 1
        # implied probabilities sum to about one
        assert 1 / home + 1 / away == pytest.approx(1.0, abs=0.02)

    def test_player_prop_selection_must_play(self):
        engine = _engine()
        game = engine.get_weekly_matchups(1)[0]
        player = game.home_team.players[0]
        assert engine.place_bet(game.id, "player_prop", 100, player.id) is True
        assert engine.place_bet(game.id, "player_prop", 100, "nba-nobody") is False


class TestTrades:
    def _teams(self, engine: DBAEngine):
        standings = engine.get_standings()
        user_team = engine.get_user_team()
        other = next(t for t in standings if t is not user_team)
        return user_team, other

    def test_accepted_trade_swaps_players(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        user_team, other = self._teams(engine)
        offered = user_team.bench[0]
        requested = other.bench[0]

        assert engine.propose_trade(user_team.id, other.id, [offered.id], [requested.id], 1_000) is True
        assert recorder.action_types[-1] == DBAAction.TRADE_PROPOSED
        trade = engine.get_game_state().league.active_trades[0]
        assert trade.id == "trade-1"

        assert engine.accept_trade(trade.id) is True
        assert offered in other.players and offered not in user_team.players
        assert requested in user_team.players and requested not in other.players
        assert user_team.budget == 100_000_000 - 1_000
        assert other.budget == 100_000_000 + 1_000
        assert engine.get_game_state().league.active_trades == []
        assert recorder.action_types[-1] == DBAAction.TRADE_COMPLETED

        # lineups were rebuilt from the new rosters
        for team in (user_team, other):
            roster = {id(p) for p in team.players}
            assert {id(p) for p in team.lineup_players()} <= roster

    def test_rejected_trade_changes_nothing(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        user_team, other = self._teams(engine)
        roster_before = list(user_team.players)
        engine.propose_trade(user_team.id, other.id, [user_team.players[0].id], [])
        assert engine.reject_trade("trade-1") is True
        assert user_team.players == roster_before
        assert recorder.action_types[-1] == DBAAction.TRADE_REJECTED
        assert engine.accept_trade("trade-1") is False

    def test_invalid_proposals(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        user_team, other = self._teams(engine)
        assert engine.propose_trade(user_team.id, other.id, [other.players[0].id], []) is False
        assert engine.propose_trade(user_team.id, user_team.id, [user_team.players[0].id], []) is False
        assert engine.propose_trade(user_team.id, "dba-team-99", [], [], 10) is False
        assert engine.propose_trade(user_team.id, other.id, [], [], 0) is False
        assert engine.propose_trade(user_team.id, other.id, [], [], 10**12) is False
        assert recorder.action_types.count(DBAAction.TRADE_FAILED) == 5

    def test_stale_trade_fails_on_accept(self):
        engine = _engine()
        user_team, other = self._teams(engine)
        player = user_team.players[0]
        engine.propose_trade(user_team.id, other.id, [player.id], [])
        engine.propose_trade(user_team.id, other.id, [player.id], [other.players[0].id])
        assert engine.accept_trade("trade-1") is True
        assert engine.accept_trade("trade-2") is False

    def test_trade_ids_are_unique(self):
        engine = _engine()
        user_team, other = self._teams(engine)
        engine.propose_trade(user_team.id, other.id, [user_team.players[0].id], [])
        engine.reject_trade("trade-1")
        engine.propose_trade(user_team.id, other.id, [user_team.players[1].id], [])
        assert [t.id for t in engine.get_game_state().league.active_trades] == ["trade-2"]


class TestEnhancements:
    def test_catalog(self):
        engine = DBAEngine(seed=FIXED_SEED)
        ids = [e.id for e in engine.get_available_enhancements()]
        assert ids == ["enhancement-stat-boost", "enhancement-rarity-upgrade"]

    def test_stat_boost(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        user_team = engine.get_user_team()
        player = user_team.players[0]
        points_before = player.stats.points
        value_before = player.value

        assert engine.apply_enhancement(player.id, "enhancement-stat-boost") is True
        assert player.stats.points == round(points_before * (1 + engine.settings.stat_boost_ratio), 1)
        assert player.value >= value_before
        assert user_team.budget == 100_000_000 - 500_000
        assert recorder.action_types[-1] == DBAAction.ENHANCEMENT_APPLIED

    def test_rarity_upgrade(self):
        engine = _engine()
        user_team = engine.get_user_team()
        player = user_team.players[0]
        player.rarity = Rarity.EPIC
        assert engine.apply_enhancement(player.id, "enhancement-rarity-upgrade") is True
        assert player.rarity == Rarity.LEGENDARY
        assert user_team.budget == 100_000_000 - 1_000_000

    def test_legendary_cannot_upgrade(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        user_team = engine.get_user_team()
        player = user_team.players[0]
        player.rarity = Rarity.LEGENDARY
        assert engine.apply_enhancement(player.id, "enhancement-rarity-upgrade") is False
        assert player.rarity == Rarity.LEGENDARY
        assert user_team.budget == 100_000_000
        assert recorder.action_types[-1] == DBAAction.ENHANCEMENT_FAILED

    def test_unknown_player_or_enhancement(self):
        engine = _engine()
        other_player = engine.get_standings()[-1].players[0]
        if engine.get_user_team().find_player(other_player.id) is None:
            assert engine.apply_enhancement(other_player.id, "enhancement-stat-boost") is False
        assert engine.apply_enhancement(engine.get_user_team().players[0].id, "enhancement-x") is False


class TestLore:
    def test_catalog_filters_by_kind(self):
        engine = _engine()
        entries = engine.get_lore_entries()
        assert len(entries) == 5
        assert [entry.name for entry in engine.get_lore_entries(LoreKind.PLAYER)] == ["Nexus Prime", "Plasma Storm"]
        assert [entry.id for entry in entries if not entry.discovered] == ["lore-shadow-reapers"]

    def test_discover_hidden_entry(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        assert engine.discover_lore("lore-shadow-reapers") is True
        assert all(entry.discovered for entry in engine.get_lore_entries())
        assert recorder.action_types[-1] == DBAAction.LORE_DISCOVERED
        assert "Shadow Reapers" in recorder.entries[-1].detail

    def test_discover_twice_or_unknown_fails(self, recorder: EntryRecorder):
        engine = _engine(recorder)
        assert engine.discover_lore("lore-nexus-prime") is False
        assert recorder.action_types[-1] == DBAAction.LORE_FAILED
        assert engine.discover_lore("lore-missing") is False
        assert recorder.action_types[-1] == DBAAction.LORE_FAILED
        assert DBAAction.LORE_DISCOVERED not in recorder.action_types

    def test_reset_hides_entry_again(self):
        engine = _engine()
        engine.discover_lore("lore-shadow-reapers")
        engine.reset_game()
        hidden = [entry for entry in engine.get_lore_entries(LoreKind.ENEMY) if not entry.discovered]
        assert [entry.id for entry in hidden] == ["lore-shadow-reapers"]
