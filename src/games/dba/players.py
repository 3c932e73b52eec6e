"""
Player pool generation for the DBA league.

The pool holds 25 named players (five per position) plus a configurable
number of generated players whose positions cycle PG, SG, SF, PF, C. Stats
come from a per-position template scaled by rarity and jittered; salary and
market value are derived from stats and rarity.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum

from games.logic.rng import weighted_choice

FREE_AGENT_TEAM = "FREE_AGENT"


class Position(StrEnum):
    PG = "PG"
    SG = "SG"
    SF = "SF"
    PF = "PF"
    C = "C"


class Rarity(StrEnum):
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


RARITY_WEIGHTS: tuple[tuple[Rarity, float], ...] = (
    (Rarity.COMMON, 0.50),
    (Rarity.UNCOMMON, 0.25),
    (Rarity.RARE, 0.15),
    (Rarity.EPIC, 0.08),
    (Rarity.LEGENDARY, 0.02),
)

RARITY_STAT_MULTIPLIER: dict[Rarity, float] = {
    Rarity.COMMON: 0.7,
    Rarity.UNCOMMON: 0.85,
    Rarity.RARE: 1.0,
    Rarity.EPIC: 1.2,
    Rarity.LEGENDARY: 1.5,
}

RARITY_SALARY_MULTIPLIER: dict[Rarity, float] = {
    Rarity.COMMON: 0.5,
    Rarity.UNCOMMON: 0.7,
    Rarity.RARE: 1.0,
    Rarity.EPIC: 1.5,
    Rarity.LEGENDARY: 2.5,
}

MARKET_VALUE_RATIO = 1.2


@dataclass
class PlayerStats:
    """Season averages."""

    points: float
    rebounds: float
    assists: float
    steals: float
    blocks: float
    fg_percent: float
    three_percent: float
    ft_percent: float


# points, rebounds, assists, steals, blocks, fg%, 3p%, ft%
POSITION_TEMPLATES: dict[Position, PlayerStats] = {
    Position.PG: PlayerStats(15, 4, 8, 1.5, 0.3, 45, 35, 80),
    Position.SG: PlayerStats(20, 5, 5, 1.2, 0.4, 47, 38, 85),
    Position.SF: PlayerStats(18, 7, 6, 1.3, 0.8, 48, 36, 82),
    Position.PF: PlayerStats(16, 10, 3, 0.8, 1.5, 50, 30, 75),
    Position.C: PlayerStats(14, 12, 2, 0.6, 2.2, 55, 25, 70),
}

# (name, pro team, power)
NAMED_PLAYERS: dict[Position, tuple[tuple[str, str, str], ...]] = {
    Position.PG: (
        ("Nexus Prime", "NEO-LAKERS", "Reality Warping"),
        ("Quantum Flash", "CYBER-WARRIORS", "Time Dilation"),
        ("Void Walker", "MATRIX-NETS", "Shadow Travel"),
        ("Pulse Master", "NEON-HEAT", "Energy Manipulation"),
        ("Mind Bender", "GHOST-SPURS", "Telepathy"),
    ),
    Position.SG: (
        ("Arcane Sniper", "PIXEL-CELTICS", "Perfect Aim"),
        ("Plasma Storm", "DIGITAL-BULLS", "Electric Control"),
        ("Crystal Shard", "HOLO-ROCKETS", "Crystal Generation"),
        ("Wind Dancer", "FLUX-CLIPPERS", "Aerokinesis"),
        ("Solar Flare", "NOVA-SUNS", "Heat Manipulation"),
    ),
    Position.SF: (
        ("Titanium Hawk", "STEEL-HAWKS", "Metal Control"),
        ("Void Reaper", "SHADOW-KINGS", "Darkness Manipulation"),
        ("Prism Knight", "LIGHT-BLAZERS", "Light Refraction"),
        ("Storm Bringer", "THUNDER-SONICS", "Weather Control"),
        ("Phoenix Wing", "FIRE-BIRDS", "Regeneration"),
    ),
    Position.PF: (
        ("Iron Colossus", "METAL-PISTONS", "Super Strength"),
        ("Earthquake", "GROUND-BUCKS", "Seismic Control"),
        ("Diamond Shield", "CRYSTAL-MAGIC", "Invulnerability"),
        ("Mountain Peak", "STONE-NUGGETS", "Earth Manipulation"),
        ("Avalanche", "ICE-WOLVES", "Ice Control"),
    ),
    Position.C: (
        ("Tower Titan", "SKY-SIXERS", "Size Manipulation"),
        ("Gravity Well", "VOID-PACERS", "Gravity Control"),
        ("Steel Fortress", "ARMOR-CAVS", "Defensive Mastery"),
        ("Thunder Giant", "STORM-GRIZZLIES", "Electric Power"),
        ("Mystic Guardian", "MAGIC-HORNETS", "Force Fields"),
    ),
}

FIRST_NAMES = ("Neo", "Matrix", "Cyber", "Digital", "Quantum", "Pixel", "Binary", "Code", "Data", "Virtual")
LAST_NAMES = ("Walker", "Runner", "Ghost", "Phantom", "Shadow", "Storm", "Lightning", "Thunder", "Blade", "Steel")


@dataclass
class Contract:
    team: str
    salary: int
    years_left: int


@dataclass(eq=False)
class DBAPlayer:
    """
    One pool player.

    Teams hold players by reference; a player is on at most one roster.
    """

    id: str
    name: str
    team: str
    position: Position
    stats: PlayerStats
    contract: Contract
    rarity: Rarity
    value: int
    power: str = ""


def random_rarity(rng: random.Random) -> Rarity:
    return weighted_choice(rng, RARITY_WEIGHTS)


def _jitter(rng: random.Random, low: float, high: float) -> float:
    return rng.uniform(low, high)


def generate_base_stats(position: Position, rarity: Rarity, rng: random.Random) -> PlayerStats:
    """Template stats for the position, scaled by rarity with +-20% jitter."""
    base = POSITION_TEMPLATES[position]
    mult = RARITY_STAT_MULTIPLIER[rarity]
    return PlayerStats(
        points=round(base.points * mult * _jitter(rng, 0.8, 1.2)),
        rebounds=round(base.rebounds * mult * _jitter(rng, 0.8, 1.2)),
        assists=round(base.assists * mult * _jitter(rng, 0.8, 1.2)),
        steals=round(base.steals * mult * _jitter(rng, 0.8, 1.2), 1),
        blocks=round(base.blocks * mult * _jitter(rng, 0.8, 1.2), 1),
        fg_percent=round(base.fg_percent * _jitter(rng, 0.9, 1.1)),
        three_percent=round(base.three_percent * _jitter(rng, 0.8, 1.2)),
        ft_percent=round(base.ft_percent * _jitter(rng, 0.9, 1.1)),
    )


def calculate_salary(stats: PlayerStats, rarity: Rarity) -> int:
    base_value = (
        stats.points * 500_000
        + stats.rebounds * 300_000
        + stats.assists * 400_000
        + stats.steals * 1_000_000
        + stats.blocks * 1_000_000
    )
    return round(base_value * RARITY_SALARY_MULTIPLIER[rarity])


def calculate_value(stats: PlayerStats, rarity: Rarity) -> int:
    """Market value runs above salary."""
    return round(calculate_salary(stats, rarity) * MARKET_VALUE_RATIO)


def generate_player_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def _build_player(
    player_id: str,
    name: str,
    team: str,
    position: Position,
    rng: random.Random,
    years_left: int,
    power: str = "",
) -> DBAPlayer:
    rarity = random_rarity(rng)
    stats = generate_base_stats(position, rarity, rng)
    return DBAPlayer(
        id=player_id,
        name=name,
        team=team,
        position=position,
        stats=stats,
        contract=Contract(team=team, salary=calculate_salary(stats, rarity), years_left=years_left),
        rarity=rarity,
        value=calculate_value(stats, rarity),
        power=power,
    )


def generate_player_pool(rng: random.Random, generated_count: int) -> list[DBAPlayer]:
    """Named players first, then `generated_count` free agents with cycling positions."""
    pool: list[DBAPlayer] = []
    for position, templates in NAMED_PLAYERS.items():
        for name, team, power in templates:
            pool.append(
                _build_player(
                    f"nba-{len(pool) + 1}",
                    name,
                    team,
                    position,
                    rng,
                    years_left=rng.randint(1, 4),
                    power=power,
                )
            )

    positions = list(Position)
    for i in range(generated_count):
        position = positions[i % len(positions)]
        pool.append(
            _build_player(
                f"nba-{len(pool) + 1}",
                generate_player_name(rng),
                FREE_AGENT_TEAM,
                position,
                rng,
                years_left=1,
            )
        )
    return pool
