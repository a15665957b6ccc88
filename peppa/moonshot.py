"""Moon-shot (cappotto) feasibility: is this hand strong enough to take every penalty card?"""
from dataclasses import dataclass

from peppa.models import Card, Rank, Suit

HIGH_OFF_SUIT_RANKS = (Rank.ACE, Rank.KING, Rank.QUEEN)


def hand_profile(hand: list[Card], high_heart_value: int = Rank.JACK) -> dict:
    """Count the figures the moon-shot rules look at."""
    hearts = [c for c in hand if c.suit == Suit.HEARTS]
    return {
        "hearts": len(hearts),
        "high_hearts": sum(1 for c in hearts if c.value >= high_heart_value),
        "queen_of_spades": any(c.is_queen_of_spades for c in hand),
        "high_off_suit": sum(1 for c in hand
                             if c.suit != Suit.HEARTS and not c.is_queen_of_spades
                             and c.rank in HIGH_OFF_SUIT_RANKS),
    }


@dataclass(frozen=True)
class MoonShotRule:
    """Thresholds a hand must meet before a bot switches to collecting points.

    Two personalities can share the detector and differ only in these numbers.
    """
    min_hearts: int
    min_high_hearts: int = 3
    high_heart_value: int = Rank.JACK
    require_queen_of_spades: bool = True
    min_high_off_suit: int = 0

    def wants_moon_shot(self, hand: list[Card]) -> bool:
        p = hand_profile(hand, self.high_heart_value)
        if self.require_queen_of_spades and not p["queen_of_spades"]:
            return False
        return (p["hearts"] >= self.min_hearts
                and p["high_hearts"] >= self.min_high_hearts
                and p["high_off_suit"] >= self.min_high_off_suit)


AGGRESSIVE_MOON_SHOT = MoonShotRule(min_hearts=8)
SACRIFICE_MOON_SHOT = MoonShotRule(min_hearts=7, min_high_off_suit=2)
