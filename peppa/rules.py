"""Suit-following rules: which cards a bot may play and where it sits in the trick."""
from enum import Enum
from typing import Optional

from peppa.errors import GameError
from peppa.models import Card, GameState, Suit, TrickEntry


class Position(Enum):
    LEAD = "lead"         # trick is empty
    FOLLOW = "follow"     # can match the lead suit
    DISCARD = "discard"   # void in the lead suit


def legal_cards(hand: list[Card], current_trick: list[TrickEntry],
                lead_suit: Optional[Suit], hearts_broken: bool,
                enforce_lead_hearts_restriction: bool = False) -> list[Card]:
    """Return the playable subset of *hand*, keeping hand order.

    Leading: hearts may only be led once broken, and only when the
    restriction is enforced and the hand has something else to lead.
    Following: the lead suit must be matched when possible; otherwise any
    card may be played (there is no trump).
    """
    if not hand:
        raise GameError("Cannot choose a card from an empty hand")

    if not current_trick:
        if enforce_lead_hearts_restriction and not hearts_broken:
            non_hearts = [c for c in hand if c.suit != Suit.HEARTS]
            if non_hearts:
                return non_hearts
        return list(hand)

    if lead_suit is not None:
        following = [c for c in hand if c.suit == lead_suit]
        if following:
            return following
    return list(hand)


def legal_cards_for(state: GameState, player_id,
                    enforce_lead_hearts_restriction: bool = False) -> list[Card]:
    """Legal cards for *player_id* in a game state snapshot."""
    player = state.get_player(player_id)
    return legal_cards(player.hand, state.current_trick, state.lead_suit,
                       state.hearts_broken, enforce_lead_hearts_restriction)


def trick_position(current_trick: list[TrickEntry], lead_suit: Optional[Suit],
                   legal: list[Card]) -> Position:
    if not current_trick:
        return Position.LEAD
    if lead_suit is not None and any(c.suit == lead_suit for c in legal):
        return Position.FOLLOW
    return Position.DISCARD


def highest_on_lead(current_trick: list[TrickEntry], lead_suit: Optional[Suit]) -> int:
    """Highest value played in the lead suit so far, -1 if none."""
    max_val = -1
    for entry in current_trick:
        if entry.card.suit == lead_suit and entry.card.value > max_val:
            max_val = entry.card.value
    return max_val
