"""
Monopoly game state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal

from games.logic.enums import GameMode
from games.logic.state import BaseGameState
from games.monopoly.board import Property


class MonopolyAction(StrEnum):
    """Log action types written by the Monopoly engine."""

    DICE_ROLL = "DICE_ROLL"
    PASS_GO = "PASS_GO"
    DOUBLES = "DOUBLES"
    PROPERTY_BOUGHT = "PROPERTY_BOUGHT"
    PROPERTY_PASS = "PROPERTY_PASS"
    RENT_PAID = "RENT_PAID"
    OWN_PROPERTY = "OWN_PROPERTY"
    BANKRUPTCY = "BANKRUPTCY"
    TAX_PAID = "TAX_PAID"
    CARD_DRAWN = "CARD_DRAWN"
    LANDED_GO = "LANDED_GO"
    FREE_PARKING = "FREE_PARKING"
    GO_TO_JAIL = "GO_TO_JAIL"
    VISITING_JAIL = "VISITING_JAIL"
    JAIL_PAYMENT = "JAIL_PAYMENT"
    JAIL_DOUBLES = "JAIL_DOUBLES"
    JAIL_STAY = "JAIL_STAY"


# entries that resolve the square a player landed on
LANDING_ACTIONS = frozenset(
    {
        MonopolyAction.PROPERTY_BOUGHT,
        MonopolyAction.PROPERTY_PASS,
        MonopolyAction.RENT_PAID,
        MonopolyAction.OWN_PROPERTY,
        MonopolyAction.BANKRUPTCY,
        MonopolyAction.TAX_PAID,
        MonopolyAction.CARD_DRAWN,
        MonopolyAction.LANDED_GO,
        MonopolyAction.FREE_PARKING,
        MonopolyAction.GO_TO_JAIL,
        MonopolyAction.VISITING_JAIL,
    }
)


class CardOutcome(StrEnum):
    """Chance / Community Chest outcomes."""

    ADVANCE_TO_GO = "Advance to GO (Collect $200)"
    POOR_TAX = "Pay poor tax of $15"
    BUILDING_LOAN = "Your building loan matures. Collect $150"
    GO_TO_JAIL = "Go to jail directly"


@dataclass
class MonopolyState(BaseGameState):
    """Full Monopoly board and economy state."""

    game_mode: Literal[GameMode.MONOPOLY] = GameMode.MONOPOLY
    properties: list[Property] = field(default_factory=list)
    dice_rolls: tuple[int, int] | None = None
    bank_money: int = 0
    free_parking_pot: int = 0

    def property_at(self, position: int) -> Property:
        return self.properties[position]

    def total_money(self) -> int:
        """Bank, player cash and the free parking pot; constant for a game."""
        return self.bank_money + sum(p.money for p in self.players) + self.free_parking_pot
