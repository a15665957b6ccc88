"""Trick valuation: what a trick is worth to whoever wins it.

Winning a trick earns a flat reward; every heart in it costs its face value
and the queen of spades costs 26.  A trick whose net value stays at or above
a strategy's clean threshold is worth taking, anything below is poison.
"""
from peppa.models import Card, Suit

TRICK_REWARD = 10
QUEEN_OF_SPADES_PENALTY = -26
DEFAULT_CLEAN_THRESHOLD = 9

# (max remaining hand size, risk) pairs, checked in order
POISON_RISK_STEPS = (
    (4, 1.0),
    (7, 0.6),
    (10, 0.35),
)
POISON_RISK_FLOOR = 0.2


def card_penalty(card: Card) -> int:
    if card.is_queen_of_spades:
        return QUEEN_OF_SPADES_PENALTY
    if card.suit == Suit.HEARTS:
        return -card.value
    return 0


def net_trick_value(cards: list[Card]) -> int:
    return TRICK_REWARD + sum(card_penalty(c) for c in cards)


def is_worth_winning(cards: list[Card], threshold: int = DEFAULT_CLEAN_THRESHOLD) -> bool:
    return net_trick_value(cards) >= threshold


def is_clean(card: Card) -> bool:
    """Neither a heart nor the queen of spades."""
    return not card.is_penalty


def poison_risk(hand_size: int) -> float:
    """Chance-like weight that opponents are void and will dump poison on us.

    Grows as hands shrink: late in the deal more players are out of suits.
    """
    for limit, risk in POISON_RISK_STEPS:
        if hand_size <= limit:
            return risk
    return POISON_RISK_FLOOR
