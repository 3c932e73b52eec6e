"""
Paid upgrades the user can apply to players on their roster.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from games.dba.league import DBATeam, refresh_team
from games.dba.players import DBAPlayer, Rarity, calculate_value
from games.logic.exceptions import InvalidEnhancementError
from games.logic.settings import DBASettings

RARITY_LADDER = tuple(Rarity)


class EnhancementType(StrEnum):
    STAT_BOOST = "stat_boost"
    RARITY_UPGRADE = "rarity_upgrade"


@dataclass(frozen=True)
class Enhancement:
    id: str
    name: str
    description: str
    enhancement_type: EnhancementType
    cost: int


def available_enhancements(settings: DBASettings) -> list[Enhancement]:
    boost_pct = round(settings.stat_boost_ratio * 100)
    return [
        Enhancement(
            id="enhancement-stat-boost",
            name="Performance Enhancer",
            description=f"Boosts all counting stats by {boost_pct}%",
            enhancement_type=EnhancementType.STAT_BOOST,
            cost=settings.stat_boost_cost,
        ),
        Enhancement(
            id="enhancement-rarity-upgrade",
            name="Rarity Ascension",
            description="Upgrades player rarity to next tier (Epic or lower)",
            enhancement_type=EnhancementType.RARITY_UPGRADE,
            cost=settings.rarity_upgrade_cost,
        ),
    ]


def _boost_stats(player: DBAPlayer, ratio: float) -> None:
    stats = player.stats
    factor = 1 + ratio
    stats.points = round(stats.points * factor, 1)
    stats.rebounds = round(stats.rebounds * factor, 1)
    stats.assists = round(stats.assists * factor, 1)
    stats.steals = round(stats.steals * factor, 1)
    stats.blocks = round(stats.blocks * factor, 1)


def _upgrade_rarity(player: DBAPlayer) -> None:
    tier = RARITY_LADDER.index(player.rarity)
    if tier == len(RARITY_LADDER) - 1:
        raise InvalidEnhancementError(f"{player.name} is already {player.rarity}")
    player.rarity = RARITY_LADDER[tier + 1]


def apply_enhancement(
    team: DBATeam,
    player_id: str,
    enhancement_id: str,
    settings: DBASettings,
) -> tuple[Enhancement, DBAPlayer]:
    """
    Apply an enhancement to a rostered player and charge the team budget.

    Player market value is recomputed; the contract salary is unchanged.
    """
    enhancement = next((e for e in available_enhancements(settings) if e.id == enhancement_id), None)
    if enhancement is None:
        raise InvalidEnhancementError(f"Unknown enhancement {enhancement_id!r}")
    player = team.find_player(player_id)
    if player is None:
        raise InvalidEnhancementError(f"{team.name} does not roster {player_id}")
    if team.budget < enhancement.cost:
        raise InvalidEnhancementError(f"Insufficient funds: {enhancement.name} costs {enhancement.cost}")

    match enhancement.enhancement_type:
        case EnhancementType.STAT_BOOST:
            _boost_stats(player, settings.stat_boost_ratio)
        case EnhancementType.RARITY_UPGRADE:
            _upgrade_rarity(player)

    team.budget -= enhancement.cost
    player.value = calculate_value(player.stats, player.rarity)
    refresh_team(team)
    return enhancement, player
