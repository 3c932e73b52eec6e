"""
Teams, drafting, schedule and game simulation for the DBA league.

Teams hold pool players by reference. The schedule references teams from
the standings list, so record updates are visible through every game.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING

from games.dba.players import DBAPlayer, Position
from games.dba.scoring import StatLine, fantasy_points, player_rating, position_score
from games.logic.settings import DBASettings

if TYPE_CHECKING:
    from games.dba.trades import Trade

USER_OWNER = "user"
DAYS_PER_WEEK = 7
# overtime periods add this many points per team until the tie breaks
OVERTIME_POINTS = (4, 16)


class DBAGameStatus(StrEnum):
    SCHEDULED = "scheduled"
    PLAYING = "playing"
    COMPLETED = "completed"


@dataclass
class Record:
    wins: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses

    @property
    def win_pct(self) -> float:
        return self.wins / self.games if self.games else 0.0


@dataclass(eq=False)
class DBATeam:
    """
    A fantasy team.

    Lineup slots reference roster players; `bench` is the roster minus the
    lineup and is rebuilt by `optimize_lineup`.
    """

    id: str
    name: str
    owner: str
    players: list[DBAPlayer] = field(default_factory=list)
    starting_lineup: dict[Position, DBAPlayer | None] = field(default_factory=dict)
    bench: list[DBAPlayer] = field(default_factory=list)
    budget: int = 0
    league_rank: int = 0
    record: Record = field(default_factory=Record)
    total_value: int = 0

    @property
    def is_user(self) -> bool:
        return self.owner == USER_OWNER

    def lineup_players(self) -> list[DBAPlayer]:
        return [player for player in self.starting_lineup.values() if player is not None]

    def find_player(self, player_id: str) -> DBAPlayer | None:
        return next((p for p in self.players if p.id == player_id), None)


@dataclass(frozen=True)
class DBAGameResult:
    home_score: int
    away_score: int
    winner_id: str
    mvp_player_id: str
    player_stats: tuple[StatLine, ...]
    overtime_periods: int = 0

    def stat_line(self, player_id: str) -> StatLine | None:
        return next((line for line in self.player_stats if line.player_id == player_id), None)

    @property
    def mvp(self) -> StatLine | None:
        return self.stat_line(self.mvp_player_id)

    @property
    def total_points(self) -> int:
        return self.home_score + self.away_score


@dataclass(eq=False)
class DBAGame:
    id: str
    week: int
    home_team: DBATeam
    away_team: DBATeam
    date: date
    status: DBAGameStatus = DBAGameStatus.SCHEDULED
    result: DBAGameResult | None = None

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team.id, self.away_team.id)


@dataclass
class DBALeague:
    season: int
    season_weeks: int
    current_week: int = 1
    standings: list[DBATeam] = field(default_factory=list)
    schedule: list[DBAGame] = field(default_factory=list)
    draft_order: list[str] = field(default_factory=list)
    free_agents: list[DBAPlayer] = field(default_factory=list)
    active_trades: list[Trade] = field(default_factory=list)
    trades_proposed: int = 0

    def find_team(self, team_id: str) -> DBATeam | None:
        return next((team for team in self.standings if team.id == team_id), None)

    def find_game(self, game_id: str) -> DBAGame | None:
        return next((game for game in self.schedule if game.id == game_id), None)

    def games_for_week(self, week: int) -> list[DBAGame]:
        return [game for game in self.schedule if game.week == week]


# ----------------------------------------------------------------------
# teams and drafting
# ----------------------------------------------------------------------


def optimize_lineup(team: DBATeam) -> None:
    """Fill each position slot with the rostered player scoring best there."""
    lineup: dict[Position, DBAPlayer | None] = {}
    for position in Position:
        candidates = [p for p in team.players if p.position == position]
        lineup[position] = max(candidates, key=lambda p: position_score(p, position), default=None)
    team.starting_lineup = lineup
    starters = {id(p) for p in team.lineup_players()}
    team.bench = [p for p in team.players if id(p) not in starters]


def team_value(team: DBATeam) -> int:
    return sum(player.value for player in team.players)


def refresh_team(team: DBATeam) -> None:
    optimize_lineup(team)
    team.total_value = team_value(team)


def draft_teams(
    pool: list[DBAPlayer],
    settings: DBASettings,
    rng: random.Random,
) -> tuple[list[DBATeam], list[DBAPlayer]]:
    """
    Draft every team from a shared pool without replacement.

    Each team takes one random player per position, then `bench_size`
    random players. Returns the teams and the undrafted players.
    """
    available = list(pool)
    teams: list[DBATeam] = []
    for index, name in enumerate(settings.team_names):
        roster: list[DBAPlayer] = []
        for position in Position:
            candidates = [p for p in available if p.position == position]
            if candidates:
                pick = rng.choice(candidates)
                roster.append(pick)
                available.remove(pick)
        for _ in range(min(settings.bench_size, len(available))):
            pick = available.pop(rng.randrange(len(available)))
            roster.append(pick)

        team = DBATeam(
            id=f"dba-team-{index}",
            name=name,
            owner=USER_OWNER if index == 0 else f"ai-{index}",
            players=roster,
            budget=settings.team_budget,
            league_rank=index + 1,
        )
        refresh_team(team)
        teams.append(team)
    return teams, available


# ----------------------------------------------------------------------
# schedule
# ----------------------------------------------------------------------


def round_robin_rounds(team_count: int) -> list[list[tuple[int, int]]]:
    """
    Circle-method pairings: n-1 rounds in which every index meets every other once.

    Index 0 stays fixed while the rest rotate one place per round.
    """
    indexes = list(range(team_count))
    rounds: list[list[tuple[int, int]]] = []
    for _ in range(team_count - 1):
        pairs = [(indexes[i], indexes[team_count - 1 - i]) for i in range(team_count // 2)]
        rounds.append(pairs)
        indexes = [indexes[0], indexes[-1], *indexes[1:-1]]
    return rounds


def generate_schedule(teams: list[DBATeam], settings: DBASettings) -> list[DBAGame]:
    """Cycle the round-robin rounds over the season, swapping home and away every other cycle."""
    rounds = round_robin_rounds(len(teams))
    schedule: list[DBAGame] = []
    for week in range(1, settings.season_weeks + 1):
        cycle, round_index = divmod(week - 1, len(rounds))
        game_date = settings.season_start + timedelta(days=DAYS_PER_WEEK * (week - 1))
        for home, away in rounds[round_index]:
            if cycle % 2:
                home, away = away, home
            schedule.append(
                DBAGame(
                    id=f"game-{len(schedule) + 1}",
                    week=week,
                    home_team=teams[home],
                    away_team=teams[away],
                    date=game_date,
                )
            )
    return schedule


def update_standings(league: DBALeague) -> None:
    """Sort by win percentage, then total wins, and assign ranks."""
    league.standings.sort(key=lambda team: (team.record.win_pct, team.record.wins), reverse=True)
    for rank, team in enumerate(league.standings, start=1):
        team.league_rank = rank


# ----------------------------------------------------------------------
# game simulation
# ----------------------------------------------------------------------


def lineup_rating(team: DBATeam) -> float:
    return sum(player_rating(player) for player in team.lineup_players())


def expected_team_score(team: DBATeam, settings: DBASettings) -> float:
    """Score a team would post with no random variance."""
    return max(settings.min_team_score, settings.base_team_score + lineup_rating(team) / 10)


def simulate_team_score(team: DBATeam, settings: DBASettings, rng: random.Random) -> int:
    variance = rng.uniform(-settings.score_variance, settings.score_variance)
    return round(max(settings.min_team_score, settings.base_team_score + lineup_rating(team) / 10 + variance))


def generate_stat_line(
    player: DBAPlayer,
    starter: bool,
    settings: DBASettings,
    rng: random.Random,
) -> StatLine:
    """Scale season averages by a random performance factor."""
    low, high = settings.performance_range
    performance = rng.uniform(low, high)
    minutes = rng.uniform(25, 40) if starter else rng.uniform(10, 24)
    stats = player.stats
    points = stats.points * performance
    return StatLine(
        player_id=player.id,
        player_name=player.name,
        points=round(points),
        rebounds=round(stats.rebounds * performance),
        assists=round(stats.assists * performance),
        steals=round(stats.steals * performance),
        blocks=round(stats.blocks * performance),
        turnovers=round(stats.assists * 0.3 * performance),
        fgm=round(points / 2.2),
        fga=round(points / 1.1),
        three_pm=round(points * 0.2 * stats.three_percent / 100),
        three_pa=round(points * 0.2),
        ftm=round(points * 0.15),
        fta=round(points * 0.2),
        minutes=round(minutes),
        plus_minus=round(rng.uniform(-10, 10)),
    )


def generate_box_score(game: DBAGame, settings: DBASettings, rng: random.Random) -> tuple[StatLine, ...]:
    lines: list[StatLine] = []
    for team in (game.home_team, game.away_team):
        starters = {id(p) for p in team.lineup_players()}
        for player in team.players:
            lines.append(generate_stat_line(player, id(player) in starters, settings, rng))
    return tuple(lines)


def simulate_game(game: DBAGame, settings: DBASettings, rng: random.Random) -> DBAGameResult:
    """
    Play one scheduled game and record the result on it.

    Ties go to overtime periods until one team leads. Records of both teams
    are updated; the result is set exactly once.
    """
    if game.status != DBAGameStatus.SCHEDULED:
        raise ValueError(f"game {game.id} is already {game.status}")
    game.status = DBAGameStatus.PLAYING

    home_score = simulate_team_score(game.home_team, settings, rng)
    away_score = simulate_team_score(game.away_team, settings, rng)
    overtime = 0
    while home_score == away_score:
        overtime += 1
        home_score += rng.randint(*OVERTIME_POINTS)
        away_score += rng.randint(*OVERTIME_POINTS)

    winner, loser = (
        (game.home_team, game.away_team) if home_score > away_score else (game.away_team, game.home_team)
    )
    winner.record.wins += 1
    loser.record.losses += 1

    box_score = generate_box_score(game, settings, rng)
    mvp = max(box_score, key=lambda line: fantasy_points(line, settings.scoring))

    result = DBAGameResult(
        home_score=home_score,
        away_score=away_score,
        winner_id=winner.id,
        mvp_player_id=mvp.player_id,
        player_stats=box_score,
        overtime_periods=overtime,
    )
    game.result = result
    game.status = DBAGameStatus.COMPLETED
    return result
