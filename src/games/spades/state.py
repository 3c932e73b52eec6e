"""
Spades game state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal

from games.logic.enums import GameMode
from games.logic.state import BaseGameState
from games.spades.cards import Card, Suit

TEAM_ONE_SEATS = (0, 2)
TEAM_TWO_SEATS = (1, 3)


class SpadesPhase(StrEnum):
    BIDDING = "bidding"
    PLAYING = "playing"
    SCORING = "scoring"


class SpadesAction(StrEnum):
    """Log action types written by the Spades engine."""

    DEAL = "DEAL"
    BID_PHASE = "BID_PHASE"
    BID_MADE = "BID_MADE"
    NIL_BID = "NIL_BID"
    PLAY_PHASE = "PLAY_PHASE"
    CARD_PLAYED = "CARD_PLAYED"
    SPADES_BROKEN = "SPADES_BROKEN"
    TRICK_WON = "TRICK_WON"
    HAND_END = "HAND_END"


@dataclass(frozen=True)
class PlayedCard:
    seat: int
    card: Card


@dataclass
class TeamScore:
    team1: int = 0
    team2: int = 0


@dataclass
class SpadesState(BaseGameState):
    """
    Deal, bidding and trick state for one Spades game.

    `hands`, `bids` and `tricks_won` are indexed by seat. `hand_tricks`
    holds the completed tricks of the current hand, so every card of the
    deck is in exactly one of hands, hand_tricks, current_trick or deck.
    """

    game_mode: Literal[GameMode.SPADES] = GameMode.SPADES
    phase: SpadesPhase = SpadesPhase.BIDDING
    hands: list[list[Card]] = field(default_factory=list)
    deck: list[Card] = field(default_factory=list)
    bids: list[int | None] = field(default_factory=list)
    tricks_won: list[int] = field(default_factory=list)
    current_trick: list[PlayedCard] = field(default_factory=list)
    hand_tricks: list[list[PlayedCard]] = field(default_factory=list)
    lead_seat: int = 0
    dealer: int = 3
    spades_broken: bool = False
    score: TeamScore = field(default_factory=TeamScore)
    hands_played: int = 0

    @property
    def lead_suit(self) -> Suit | None:
        return self.current_trick[0].card.suit if self.current_trick else None

    def team_bid(self, seats: tuple[int, int]) -> int:
        return sum(self.bids[seat] or 0 for seat in seats)

    def team_tricks(self, seats: tuple[int, int]) -> int:
        return sum(self.tricks_won[seat] for seat in seats)

    def card_count(self) -> int:
        in_hands = sum(len(hand) for hand in self.hands)
        in_tricks = sum(len(trick) for trick in self.hand_tricks)
        return in_hands + in_tricks + len(self.current_trick) + len(self.deck)
