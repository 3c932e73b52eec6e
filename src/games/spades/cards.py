"""
Standard 52-card deck for Spades.

Ranks run 2..14 with the ace high. Hands are kept sorted by suit (spades,
hearts, diamonds, clubs) and then by rank, highest first.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

ACE = 14
KING = 13
QUEEN = 12
JACK = 11
RANKS = tuple(range(2, ACE + 1))
DECK_SIZE = 52


class Suit(StrEnum):
    SPADES = "spades"
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"


SUIT_ORDER: dict[Suit, int] = {suit: index for index, suit in enumerate(Suit)}
SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}
RANK_NAMES: dict[int, str] = {JACK: "J", QUEEN: "Q", KING: "K", ACE: "A"}


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: int

    @property
    def id(self) -> str:
        return f"{self.suit}-{self.rank}"

    @property
    def is_spade(self) -> bool:
        return self.suit == Suit.SPADES

    def __str__(self) -> str:
        return f"{RANK_NAMES.get(self.rank, str(self.rank))}{SUIT_SYMBOLS[self.suit]}"


def create_deck() -> list[Card]:
    """Return the 52 cards in suit then rank order (unshuffled)."""
    return [Card(suit, rank) for suit in Suit for rank in RANKS]


def sort_hand(cards: list[Card]) -> list[Card]:
    return sorted(cards, key=lambda card: (SUIT_ORDER[card.suit], -card.rank))


def cards_of_suit(cards: list[Card], suit: Suit) -> list[Card]:
    return [card for card in cards if card.suit == suit]


def non_spades(cards: list[Card]) -> list[Card]:
    return [card for card in cards if not card.is_spade]
