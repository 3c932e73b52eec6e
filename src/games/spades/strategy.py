"""
Heuristics used by the autonomous Spades seats.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from games.logic.rng import chance
from games.spades.cards import Card, Suit, cards_of_suit, non_spades

if TYPE_CHECKING:
    import random

    from games.logic.settings import SpadesSettings


def choose_bid(hand: list[Card], settings: SpadesSettings, rng: random.Random) -> int:
    """Estimate tricks from spade length and high cards, with an occasional nil."""
    if chance(rng, settings.nil_bid_chance):
        return 0
    spade_count = sum(1 for card in hand if card.is_spade)
    high_cards = sum(1 for card in hand if card.rank >= settings.high_card_min_rank)
    estimate = spade_count * settings.spade_bid_weight + high_cards * settings.high_card_bid_weight
    return max(1, math.floor(estimate))


def _middle(cards: list[Card]) -> Card:
    return cards[len(cards) // 2]


def legal_leads(hand: list[Card], spades_broken: bool) -> list[Card]:
    if spades_broken:
        return list(hand)
    return non_spades(hand) or list(hand)


def choose_card(
    hand: list[Card],
    lead_suit: Suit | None,
    spades_broken: bool,
    rng: random.Random,
) -> Card:
    """
    Pick the card to play from a sorted hand.

    Leading takes the middle legal lead; following suit takes the middle
    card of that suit; when void, a random non-spade unless spades are
    broken or nothing else is held.
    """
    if not hand:
        raise ValueError("cannot play from an empty hand")
    if lead_suit is None:
        return _middle(legal_leads(hand, spades_broken))

    following = cards_of_suit(hand, lead_suit)
    if following:
        return _middle(following)

    candidates = list(hand) if spades_broken else (non_spades(hand) or list(hand))
    return rng.choice(candidates)
