from games.spades.cards import Suit
from games.spades.state import PlayedCard


def score_hand(bid: int, tricks: int) -> int:
    """
    Team score for one hand.

    A made contract scores ten per bid trick plus one per overtrick; a set
    contract loses ten per bid trick.
    """
    if tricks >= bid:
        return bid * 10 + (tricks - bid)
    return -bid * 10


def trick_winner(trick: list[PlayedCard]) -> PlayedCard:
    """Highest spade wins; without spades the highest card of the led suit."""
    if not trick:
        raise ValueError("cannot resolve an empty trick")
    spades = [played for played in trick if played.card.suit == Suit.SPADES]
    if spades:
        return max(spades, key=lambda played: played.card.rank)
    lead_suit = trick[0].card.suit
    following = [played for played in trick if played.card.suit == lead_suit]
    return max(following, key=lambda played: played.card.rank)
