"""
League lore catalog the user can unlock during a season.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from games.dba.players import Rarity
from games.logic.exceptions import InvalidActionError


class LoreKind(StrEnum):
    PLAYER = "player"
    ENVIRONMENT = "environment"
    ENEMY = "enemy"
    CREATURE = "creature"


@dataclass
class LoreEntry:
    id: str
    kind: LoreKind
    name: str
    description: str
    category: str
    rarity: Rarity
    discovered: bool = False


def create_lore_catalog() -> list[LoreEntry]:
    """Fresh catalog; most entries start discovered, hidden ones must be unlocked."""
    return [
        LoreEntry(
            id="lore-nexus-prime",
            kind=LoreKind.PLAYER,
            name="Nexus Prime",
            description="The first digital consciousness to achieve sentience in the basketball matrix.",
            category="Legendary Players",
            rarity=Rarity.LEGENDARY,
            discovered=True,
        ),
        LoreEntry(
            id="lore-plasma-storm",
            kind=LoreKind.PLAYER,
            name="Plasma Storm",
            description="A being of pure electrical energy contained within a digital shell.",
            category="Elite Players",
            rarity=Rarity.RARE,
            discovered=True,
        ),
        LoreEntry(
            id="lore-neo-lakers-arena",
            kind=LoreKind.ENVIRONMENT,
            name="Neo Lakers Arena",
            description="A floating arena that phases between digital and physical realms.",
            category="Legendary Arenas",
            rarity=Rarity.LEGENDARY,
            discovered=True,
        ),
        LoreEntry(
            id="lore-shadow-reapers",
            kind=LoreKind.ENEMY,
            name="Shadow Reapers",
            description="Dark entities that hunt digital consciousness in the basketball matrix.",
            category="Hostile Entities",
            rarity=Rarity.RARE,
        ),
        LoreEntry(
            id="lore-code-beasts",
            kind=LoreKind.CREATURE,
            name="Code Beasts",
            description="Wild algorithms that have evolved beyond their original programming.",
            category="Digital Wildlife",
            rarity=Rarity.UNCOMMON,
            discovered=True,
        ),
    ]


def discover_lore(catalog: list[LoreEntry], lore_id: str) -> LoreEntry:
    entry = next((e for e in catalog if e.id == lore_id), None)
    if entry is None:
        raise InvalidActionError(f"Unknown lore entry {lore_id!r}")
    if entry.discovered:
        raise InvalidActionError(f"{entry.name} is already discovered")
    entry.discovered = True
    return entry
