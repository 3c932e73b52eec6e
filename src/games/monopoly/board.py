"""
The 40-square Monopoly board.

Squares are created from a fixed table at engine initialization. Ownership,
mortgage and house counts mutate during the game; squares are never removed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from games.logic.state import Player

BOARD_SIZE = 40
JAIL_POSITION = 10
GO_POSITION = 0
HOTEL_LEVEL = 5


class SquareKind(StrEnum):
    PROPERTY = "property"
    RAILROAD = "railroad"
    UTILITY = "utility"
    CARD = "card"
    TAX = "tax"
    CORNER = "corner"


PURCHASABLE_KINDS = frozenset({SquareKind.PROPERTY, SquareKind.RAILROAD, SquareKind.UTILITY})


@dataclass
class Property:
    """
    One board square.

    `rent` is indexed by house count for ordinary properties and by number
    of same-kind holdings for railroads. Tax squares keep their amount in
    rent[0].
    """

    id: int
    name: str
    kind: SquareKind
    position: int
    price: int = 0
    rent: tuple[int, ...] = (0,)
    mortgage_value: int = 0
    color: str = ""
    house_price: int = 0
    owner: Player | None = field(default=None, repr=False, compare=False)
    mortgaged: bool = False
    houses: int = 0  # 0-4 houses, HOTEL_LEVEL = hotel

    @property
    def purchasable(self) -> bool:
        return self.kind in PURCHASABLE_KINDS


# (position, name, kind, price, rent, mortgage, color, house price)
_BOARD_TABLE: tuple[tuple[int, str, SquareKind, int, tuple[int, ...], int, str, int], ...] = (
    (0, "GO", SquareKind.CORNER, 0, (0,), 0, "#32CD32", 0),
    (1, "Mediterranean Avenue", SquareKind.PROPERTY, 60, (2, 10, 30, 90, 160, 250), 30, "#8B4513", 50),
    (2, "Community Chest", SquareKind.CARD, 0, (0,), 0, "#87CEEB", 0),
    (3, "Baltic Avenue", SquareKind.PROPERTY, 60, (4, 20, 60, 180, 320, 450), 30, "#8B4513", 50),
    (4, "Income Tax", SquareKind.TAX, 0, (200,), 0, "#FF6347", 0),
    (5, "Reading Railroad", SquareKind.RAILROAD, 200, (25, 50, 100, 200), 100, "#000000", 0),
    (6, "Oriental Avenue", SquareKind.PROPERTY, 100, (6, 30, 90, 270, 400, 550), 50, "#87CEEB", 50),
    (7, "Chance", SquareKind.CARD, 0, (0,), 0, "#FF6347", 0),
    (8, "Vermont Avenue", SquareKind.PROPERTY, 100, (6, 30, 90, 270, 400, 550), 50, "#87CEEB", 50),
    (9, "Connecticut Avenue", SquareKind.PROPERTY, 120, (8, 40, 100, 300, 450, 600), 60, "#87CEEB", 50),
    (10, "Jail", SquareKind.CORNER, 0, (0,), 0, "#FFA500", 0),
    (11, "St. Charles Place", SquareKind.PROPERTY, 140, (10, 50, 150, 450, 625, 750), 70, "#FF1493", 100),
    (12, "Electric Company", SquareKind.UTILITY, 150, (4, 10), 75, "#FFFFFF", 0),
    (13, "States Avenue", SquareKind.PROPERTY, 140, (10, 50, 150, 450, 625, 750), 70, "#FF1493", 100),
    (14, "Virginia Avenue", SquareKind.PROPERTY, 160, (12, 60, 180, 500, 700, 900), 80, "#FF1493", 100),
    (15, "Pennsylvania Railroad", SquareKind.RAILROAD, 200, (25, 50, 100, 200), 100, "#000000", 0),
    (16, "St. James Place", SquareKind.PROPERTY, 180, (14, 70, 200, 550, 750, 950), 90, "#FFA500", 100),
    (17, "Community Chest", SquareKind.CARD, 0, (0,), 0, "#87CEEB", 0),
    (18, "Tennessee Avenue", SquareKind.PROPERTY, 180, (14, 70, 200, 550, 750, 950), 90, "#FFA500", 100),
    (19, "New York Avenue", SquareKind.PROPERTY, 200, (16, 80, 220, 600, 800, 1000), 100, "#FFA500", 100),
    (20, "Free Parking", SquareKind.CORNER, 0, (0,), 0, "#32CD32", 0),
    (21, "Kentucky Avenue", SquareKind.PROPERTY, 220, (18, 90, 250, 700, 875, 1050), 110, "#FF0000", 150),
    (22, "Chance", SquareKind.CARD, 0, (0,), 0, "#FF6347", 0),
    (23, "Indiana Avenue", SquareKind.PROPERTY, 220, (18, 90, 250, 700, 875, 1050), 110, "#FF0000", 150),
    (24, "Illinois Avenue", SquareKind.PROPERTY, 240, (20, 100, 300, 750, 925, 1100), 120, "#FF0000", 150),
    (25, "B&O Railroad", SquareKind.RAILROAD, 200, (25, 50, 100, 200), 100, "#000000", 0),
    (26, "Atlantic Avenue", SquareKind.PROPERTY, 260, (22, 110, 330, 800, 975, 1150), 130, "#FFFF00", 150),
    (27, "Ventnor Avenue", SquareKind.PROPERTY, 260, (22, 110, 330, 800, 975, 1150), 130, "#FFFF00", 150),
    (28, "Water Works", SquareKind.UTILITY, 150, (4, 10), 75, "#FFFFFF", 0),
    (29, "Marvin Gardens", SquareKind.PROPERTY, 280, (24, 120, 360, 850, 1025, 1200), 140, "#FFFF00", 150),
    (30, "Go To Jail", SquareKind.CORNER, 0, (0,), 0, "#FF0000", 0),
    (31, "Pacific Avenue", SquareKind.PROPERTY, 300, (26, 130, 390, 900, 1100, 1275), 150, "#00FF00", 200),
    (32, "North Carolina Avenue", SquareKind.PROPERTY, 300, (26, 130, 390, 900, 1100, 1275), 150, "#00FF00", 200),
    (33, "Community Chest", SquareKind.CARD, 0, (0,), 0, "#87CEEB", 0),
    (34, "Pennsylvania Avenue", SquareKind.PROPERTY, 320, (28, 150, 450, 1000, 1200, 1400), 160, "#00FF00", 200),
    (35, "Short Line", SquareKind.RAILROAD, 200, (25, 50, 100, 200), 100, "#000000", 0),
    (36, "Chance", SquareKind.CARD, 0, (0,), 0, "#FF6347", 0),
    (37, "Park Place", SquareKind.PROPERTY, 350, (35, 175, 500, 1100, 1300, 1500), 175, "#000080", 200),
    (38, "Luxury Tax", SquareKind.TAX, 0, (100,), 0, "#FF6347", 0),
    (39, "Boardwalk", SquareKind.PROPERTY, 400, (50, 200, 600, 1400, 1700, 2000), 200, "#000080", 200),
)


def create_board() -> list[Property]:
    """Create the 40 unowned squares, ordered by board position."""
    return [
        Property(
            id=position,
            name=name,
            kind=kind,
            position=position,
            price=price,
            rent=rent,
            mortgage_value=mortgage,
            color=color,
            house_price=house_price,
        )
        for position, name, kind, price, rent, mortgage, color, house_price in _BOARD_TABLE
    ]


def count_owned(player: Player, kind: SquareKind) -> int:
    return sum(1 for prop in player.owned_properties if prop.kind == kind)


def calculate_rent(prop: Property, dice_sum: int) -> int:
    """
    Rent owed for landing on an owned square.

    Railroads scale with the owner's railroad count, utilities with the dice
    total (x4 for one utility, x10 for both).
    """
    if prop.owner is None:
        return 0
    if prop.kind == SquareKind.RAILROAD:
        owned = count_owned(prop.owner, SquareKind.RAILROAD)
        return prop.rent[max(0, min(owned - 1, len(prop.rent) - 1))]
    if prop.kind == SquareKind.UTILITY:
        owned = count_owned(prop.owner, SquareKind.UTILITY)
        multiplier = 4 if owned == 1 else 10
        return dice_sum * multiplier
    return prop.rent[min(prop.houses, HOTEL_LEVEL)]


def calculate_net_worth(player: Player) -> int:
    """Cash plus purchase price and building value of every owned square."""
    property_value = sum(
        prop.price + min(prop.houses, HOTEL_LEVEL) * prop.house_price for prop in player.owned_properties
    )
    return player.money + property_value
