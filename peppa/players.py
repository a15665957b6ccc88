"""Local bot strategies for Peppa Scivolosa.

Every personality shares the same skeleton (BasePlayer): legal-move
filtering, the forced-move short cut, the LEAD / FOLLOW / DISCARD dispatch
and the stable top-3 pass selection.  Personalities differ only in their
tunable constants and in the scoring / play routines they override.
"""
from typing import Optional

from peppa.decision_log import DecisionEvent, DecisionObserver, NullObserver
from peppa.errors import StrategyInvariantError
from peppa.models import Card, GameState, Rank, Suit
from peppa.moonshot import AGGRESSIVE_MOON_SHOT, SACRIFICE_MOON_SHOT, MoonShotRule
from peppa.rules import Position, highest_on_lead, legal_cards, trick_position
from peppa.valuation import DEFAULT_CLEAN_THRESHOLD, is_clean, is_worth_winning, poison_risk

PASS_COUNT = 3

# 7..J: too weak to win a trick cleanly, too strong to duck under later
MIDDLING_VALUES = range(Rank.SEVEN, Rank.JACK + 1)


def _lowest(cards: list[Card]) -> Card:
    """Lowest value; the earliest in hand order wins ties."""
    return min(cards, key=lambda c: c.value)


def _highest(cards: list[Card]) -> Card:
    """Highest value; the earliest in hand order wins ties."""
    return max(cards, key=lambda c: c.value)


# ---------------------------------------------------------------------------
# Player base
# ---------------------------------------------------------------------------

class BasePlayer:
    """Base class for bot strategies.

    The move routines implemented here are the default personality: duck
    poisoned tricks, take clean ones, shed danger when void.
    """

    name = "base"
    enforce_lead_hearts_restriction = False
    clean_threshold = DEFAULT_CLEAN_THRESHOLD
    high_risk = 0.6
    moon_shot_rule: Optional[MoonShotRule] = None

    def __init__(self, observer: Optional[DecisionObserver] = None):
        self.observer = observer or NullObserver()

    def wants_moon_shot(self, hand: list[Card]) -> bool:
        return self.moon_shot_rule is not None and self.moon_shot_rule.wants_moon_shot(hand)

    def risk_factor(self, hand_size: int) -> float:
        return poison_risk(hand_size)

    # ------------------------------------------------------------------
    # Decision routines: override these for a personality
    # ------------------------------------------------------------------

    def pass_score(self, card: Card, hand: list[Card], moon_shot: bool) -> int:
        """Undesirability of *card*: the higher, the more willing to pass it."""
        raise NotImplementedError

    def choose_lead(self, legal: list[Card], hand: list[Card],
                    moon_shot: bool, risk: float) -> tuple[Card, str]:
        """Pick the opening card of a trick.

        Returns (card, rationale tag).
        """
        if moon_shot:
            hearts = [c for c in legal if c.suit == Suit.HEARTS]
            if hearts:
                return _highest(hearts), "moon-lead-heart"
            return _highest([c for c in legal if c.suit != Suit.HEARTS]), "moon-lead-command"

        clean = [c for c in legal if is_clean(c)]
        if risk >= self.high_risk:
            return _lowest(clean or legal), "lead-low-clean"
        honours = [c for c in clean if c.rank in (Rank.ACE, Rank.KING)]
        if honours:
            return _highest(honours), "lead-clean-honour"
        if clean:
            return _highest(clean), "lead-high-clean"
        return _lowest(legal), "lead-low-poison"

    def choose_follow(self, legal: list[Card], state: GameState,
                      moon_shot: bool) -> tuple[Card, str]:
        """Pick a card of the lead suit: win clean tricks cheaply, duck poisoned ones."""
        max_val = highest_on_lead(state.current_trick, state.lead_suit)
        winning = [c for c in legal if c.value > max_val]
        under = [c for c in legal if c.value < max_val]

        if moon_shot or is_worth_winning(state.trick_cards, self.clean_threshold):
            if winning:
                return _lowest(winning), "win-cheap"
            return _lowest(legal), "cannot-win"
        if under:
            return _highest(under), "duck-high"
        if winning:
            return _lowest(winning), "forced-win"
        return _lowest(legal), "duck-low"

    def choose_discard(self, legal: list[Card], moon_shot: bool) -> tuple[Card, str]:
        """Void in the lead suit: dump poison on someone else's trick."""
        if moon_shot:
            non_hearts = [c for c in legal if c.suit != Suit.HEARTS]
            return _highest(non_hearts or legal), "moon-discard-high"

        queen = next((c for c in legal if c.is_queen_of_spades), None)
        if queen:
            return queen, "dump-queen"
        hearts = [c for c in legal if c.suit == Suit.HEARTS]
        if hearts:
            return _highest(hearts), "dump-heart"
        middling = [c for c in legal if c.value in MIDDLING_VALUES]
        if middling:
            return _highest(middling), "dump-middling"
        return _highest(legal), "dump-high"

    # ------------------------------------------------------------------
    # Action routines: these call the decision routines above
    # ------------------------------------------------------------------

    def select_pass_cards(self, hand: list[Card], moon_shot: Optional[bool] = None) -> list[str]:
        """Return the ids of the cards to give away before the round."""
        if moon_shot is None:
            moon_shot = self.wants_moon_shot(hand)

        scores = {c.id: self.pass_score(c, hand, moon_shot) for c in hand}
        # sorted() is stable with reverse=True: equal scores keep hand order
        ranked = sorted(hand, key=lambda c: scores[c.id], reverse=True)
        chosen = [c.id for c in ranked[:PASS_COUNT]]
        self._check_pass(hand, chosen)

        self.observer.notify(DecisionEvent(
            source=self.name, phase="pass", chosen=chosen,
            rationale="moon-shot" if moon_shot else "defensive", scores=scores,
        ))
        return chosen

    def legal_moves(self, state: GameState, hand: list[Card]) -> list[Card]:
        return legal_cards(hand, state.current_trick, state.lead_suit,
                           state.hearts_broken, self.enforce_lead_hearts_restriction)

    def select_move(self, state: GameState, player_id, moon_shot: Optional[bool] = None,
                    risk: Optional[float] = None) -> Card:
        """Return the card *player_id* plays next.  Raises BotNotFoundError.

        *moon_shot* and *risk* default to the strategy's own estimates.
        """
        player = state.get_player(player_id)
        hand = player.hand
        legal = self.legal_moves(state, hand)

        if len(legal) == 1:
            self._notify_move(player_id, legal[0], "forced", {})
            return legal[0]

        if moon_shot is None:
            moon_shot = self.wants_moon_shot(hand)
        if risk is None:
            risk = self.risk_factor(len(hand))
        position = trick_position(state.current_trick, state.lead_suit, legal)

        if position == Position.LEAD:
            card, rationale = self.choose_lead(legal, hand, moon_shot, risk)
        elif position == Position.FOLLOW:
            card, rationale = self.choose_follow(legal, state, moon_shot)
        else:
            card, rationale = self.choose_discard(legal, moon_shot)

        if card not in legal:
            raise StrategyInvariantError(
                f"{self.name} chose {card.id}, legal: {[c.id for c in legal]}")

        self._notify_move(player_id, card, rationale, {
            "position": position.value, "risk": risk, "moon_shot": moon_shot,
        })
        return card

    def _check_pass(self, hand: list[Card], chosen: list[str]):
        hand_ids = {c.id for c in hand}
        if (len(chosen) != min(PASS_COUNT, len(hand)) or len(set(chosen)) != len(chosen)
                or not hand_ids.issuperset(chosen)):
            raise StrategyInvariantError(f"{self.name} produced an invalid pass: {chosen}")

    def _notify_move(self, player_id, card: Card, rationale: str, details: dict):
        self.observer.notify(DecisionEvent(
            source=self.name, phase="move", player_id=player_id,
            chosen=[card.id], rationale=rationale, details=details,
        ))


# ---------------------------------------------------------------------------
# Personalities
# ---------------------------------------------------------------------------

class CalculatingPlayer(BasePlayer):
    """Aggressive, calculating bot: values every trick and goes for the moon
    with 8+ hearts, three of them high, plus the queen of spades."""

    name = "calculating"
    moon_shot_rule = AGGRESSIVE_MOON_SHOT

    QUEEN_SCORE = 1000
    HEART_BASE = 200
    HEART_PER_VALUE = 15
    MIDDLING_BONUS = 120
    HONOUR_KEEP = -180        # non-heart A/K win clean tricks
    SPADE_HONOUR_BONUS = 40   # ... but A/K of spades can catch a dumped queen
    LOW_KEEP = -200           # 2s and 3s are for ducking
    MOON_KEEP = -1000

    def pass_score(self, card, hand, moon_shot):
        if moon_shot and card.is_penalty:
            return self.MOON_KEEP

        score = 0
        if card.is_queen_of_spades:
            score += self.QUEEN_SCORE
        if card.suit == Suit.HEARTS:
            score += self.HEART_BASE + card.value * self.HEART_PER_VALUE
        if card.value in MIDDLING_VALUES:
            score += self.MIDDLING_BONUS
        if card.suit != Suit.HEARTS and card.rank in (Rank.ACE, Rank.KING):
            score += self.HONOUR_KEEP
        if card.suit == Suit.SPADES and card.rank in (Rank.ACE, Rank.KING):
            score += self.SPADE_HONOUR_BONUS
        if card.rank in (Rank.TWO, Rank.THREE):
            score += self.LOW_KEEP
        return score


class RuleTablePlayer(BasePlayer):
    """Conservative bot driven by a fixed rule table.

    Never passes low hearts, 2s, 3s or minor-suit aces; keeps its spades to
    guard the queen.  Does not lead hearts until they are broken.
    """

    name = "rule_table"
    enforce_lead_hearts_restriction = True

    PROTECTED_LOW_HEARTS = (Rank.THREE, Rank.FOUR, Rank.FIVE)
    DUCKING_RANKS = (Rank.TWO, Rank.THREE)
    CONTROL_SUITS = (Suit.CLUBS, Suit.DIAMONDS)
    EARLY_HAND_SIZE = 10

    BLOCKED = -1000
    DUCKING_KEEP = -500
    CONTROL_ACE_KEEP = -300
    MIDDLING_BONUS = 150
    MIDDLING_HEART_BONUS = 50
    SPADE_HONOUR_BONUS = 50
    SPADE_KEEP = -200
    HIGH_HEART_BONUS = 200
    HIGH_CARD_BONUS = 80

    def pass_score(self, card, hand, moon_shot):
        if moon_shot and card.is_penalty:
            return self.BLOCKED
        if card.suit == Suit.HEARTS and card.rank in self.PROTECTED_LOW_HEARTS:
            return self.BLOCKED
        if card.rank in self.DUCKING_RANKS:
            return self.DUCKING_KEEP

        score = 0
        if card.value in MIDDLING_VALUES:
            score += self.MIDDLING_BONUS
            if card.suit == Suit.HEARTS:
                score += self.MIDDLING_HEART_BONUS
        if card.suit == Suit.SPADES:
            if card.rank in (Rank.ACE, Rank.KING):
                score += self.SPADE_HONOUR_BONUS
            else:
                score += self.SPADE_KEEP
        if card.rank == Rank.ACE and card.suit in self.CONTROL_SUITS:
            return self.CONTROL_ACE_KEEP
        if card.suit == Suit.HEARTS and card.rank in (Rank.ACE, Rank.KING, Rank.QUEEN):
            score += self.HIGH_HEART_BONUS
        if card.value >= Rank.KING:
            score += self.HIGH_CARD_BONUS
        return score

    def choose_lead(self, legal, hand, moon_shot, risk):
        if moon_shot:
            return super().choose_lead(legal, hand, moon_shot, risk)
        # Early in the deal, take control with a minor-suit ace, then king
        if len(hand) > self.EARLY_HAND_SIZE:
            for rank in (Rank.ACE, Rank.KING):
                early = next((c for c in legal
                              if c.rank == rank and c.suit in self.CONTROL_SUITS), None)
                if early:
                    return early, f"early-{early.rank_name}"
        non_spades = [c for c in legal if c.suit != Suit.SPADES]
        return _lowest(non_spades or legal), "lead-low"

    def choose_follow(self, legal, state, moon_shot):
        if moon_shot:
            return super().choose_follow(legal, state, moon_shot)
        max_val = highest_on_lead(state.current_trick, state.lead_suit)
        under = [c for c in legal if c.value < max_val]
        if under:
            return _highest(under), "duck-high"
        # Forced to take it: get rid of the biggest card while at it
        return _highest(legal), "shed-high-winner"

    def choose_discard(self, legal, moon_shot):
        if moon_shot:
            return super().choose_discard(legal, moon_shot)
        queen = next((c for c in legal if c.is_queen_of_spades), None)
        if queen:
            return queen, "dump-queen"
        high_hearts = [c for c in legal if c.suit == Suit.HEARTS and c.value >= Rank.JACK]
        if high_hearts:
            return _highest(high_hearts), "dump-high-heart"
        spade_honour = next((c for c in legal
                             if c.suit == Suit.SPADES and c.value >= Rank.KING), None)
        if spade_honour:
            return spade_honour, "dump-spade-honour"
        middling = [c for c in legal if c.value in MIDDLING_VALUES]
        if middling:
            return _highest(middling), "dump-middling"
        return _highest(legal), "dump-high"


class SacrificePlayer(BasePlayer):
    """Weighted-sacrifice bot: ranks cards by how cheaply they can be given up.

    Defensive hands shed the queen and hearts, then build a void in short
    suits.  Moon-shot hands hoard penalty cards and honours instead.
    """

    name = "sacrifice"
    moon_shot_rule = SACRIFICE_MOON_SHOT

    HONOUR_RANKS = (Rank.ACE, Rank.KING, Rank.QUEEN)
    LOW_RANKS = (Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE)
    SHORT_SUIT = 2

    QUEEN_SCORE = 1000
    HEART_BASE = 500
    VOID_BONUS = 200
    LONG_SUIT_LOW_BONUS = 50
    MOON_QUEEN_KEEP = -1000
    MOON_HEART_KEEP = -500
    MOON_HIGH_HEART_KEEP = -100
    MOON_HONOUR_KEEP = -300
    MOON_SPARE_BASE = 10

    def pass_score(self, card, hand, moon_shot):
        if moon_shot:
            if card.is_queen_of_spades:
                return self.MOON_QUEEN_KEEP
            if card.suit == Suit.HEARTS:
                keep = self.MOON_HEART_KEEP
                if card.value >= Rank.JACK:
                    keep += self.MOON_HIGH_HEART_KEEP
                return keep
            if card.rank in self.HONOUR_RANKS:
                return self.MOON_HONOUR_KEEP
            return self.MOON_SPARE_BASE + card.value

        if card.is_queen_of_spades:
            return self.QUEEN_SCORE
        if card.suit == Suit.HEARTS:
            return self.HEART_BASE + card.value

        score = 0
        suit_length = sum(1 for c in hand if c.suit == card.suit)
        if suit_length <= self.SHORT_SUIT and card.rank not in self.HONOUR_RANKS:
            score += self.VOID_BONUS + card.value
        if card.rank in self.LOW_RANKS and suit_length > self.SHORT_SUIT:
            score += self.LONG_SUIT_LOW_BONUS
        return score


PLAYERS = {
    CalculatingPlayer.name: CalculatingPlayer,
    RuleTablePlayer.name: RuleTablePlayer,
    SacrificePlayer.name: SacrificePlayer,
}


def make_player(name: str, observer: Optional[DecisionObserver] = None) -> BasePlayer:
    try:
        cls = PLAYERS[name]
    except KeyError:
        raise ValueError(f"Unknown strategy: {name!r}") from None
    return cls(observer=observer)
