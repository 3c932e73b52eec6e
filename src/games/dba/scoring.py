"""
Fantasy scoring and player ratings.
"""

from __future__ import annotations

from dataclasses import dataclass

from games.dba.players import DBAPlayer, Position
from games.logic.settings import ScoringRules

DOUBLE_FIGURES = 10


@dataclass(frozen=True)
class StatLine:
    """One player's box score for one game."""

    player_id: str
    player_name: str
    points: int
    rebounds: int
    assists: int
    steals: int
    blocks: int
    turnovers: int = 0
    fgm: int = 0
    fga: int = 0
    three_pm: int = 0
    three_pa: int = 0
    ftm: int = 0
    fta: int = 0
    minutes: int = 0
    plus_minus: int = 0


def fantasy_points(line: StatLine, rules: ScoringRules) -> float:
    """
    Weighted box-score total with double-double and triple-double bonuses.

    A double-double needs two of points, rebounds, assists, steals and
    blocks in double figures; a third adds the triple-double bonus on top.
    Rounded to one decimal.
    """
    total = (
        line.points * rules.points_multiplier
        + line.rebounds * rules.rebounds_multiplier
        + line.assists * rules.assists_multiplier
        + line.steals * rules.steals_multiplier
        + line.blocks * rules.blocks_multiplier
        + line.three_pm * rules.threes_made_bonus
        + line.turnovers * rules.turnovers_multiplier
    )

    categories = (line.points, line.rebounds, line.assists, line.steals, line.blocks)
    double_figures = sum(1 for value in categories if value >= DOUBLE_FIGURES)
    if double_figures >= 2:
        total += rules.double_double_bonus
        if double_figures >= 3:
            total += rules.triple_double_bonus

    return round(total, 1)


def player_rating(player: DBAPlayer) -> float:
    stats = player.stats
    return (
        stats.points
        + stats.rebounds
        + stats.assists
        + stats.steals * 2
        + stats.blocks * 2
        + stats.fg_percent / 10
        + stats.three_percent / 10
    )


def position_score(player: DBAPlayer, position: Position) -> float:
    """How well a player fills a lineup slot; guards lean on playmaking, bigs on the glass."""
    stats = player.stats
    match position:
        case Position.PG:
            return stats.points + stats.assists * 1.5 + stats.steals * 2
        case Position.SG:
            return stats.points * 1.2 + stats.assists + stats.three_percent / 10
        case Position.SF:
            return stats.points + stats.rebounds + stats.assists
        case Position.PF:
            return stats.points + stats.rebounds * 1.2 + stats.blocks * 2
        case Position.C:
            return stats.rebounds * 1.5 + stats.blocks * 3 + stats.points
