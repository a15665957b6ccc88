"""Card and game-state models for Peppa Scivolosa bots."""
from enum import IntEnum, Enum
from dataclasses import dataclass, field
from typing import Optional

from peppa.errors import BotNotFoundError


# === Enums ===

class Suit(Enum):
    HEARTS = "hearts"
    SPADES = "spades"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# === Mappings ===

RANK_NAMES = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

NAME_TO_RANK = {v: k for k, v in RANK_NAMES.items()}
NAME_TO_SUIT = {s.value: s for s in Suit}

SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}


# === Models ===

@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank
    id: str = ""

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, "id", f"{RANK_NAMES[self.rank]}_{self.suit.value}")

    @property
    def value(self) -> int:
        return int(self.rank)

    @property
    def rank_name(self) -> str:
        return RANK_NAMES[self.rank]

    @property
    def is_heart(self) -> bool:
        return self.suit == Suit.HEARTS

    @property
    def is_queen_of_spades(self) -> bool:
        return self.suit == Suit.SPADES and self.rank == Rank.QUEEN

    @property
    def is_penalty(self) -> bool:
        return self.is_heart or self.is_queen_of_spades

    def label(self) -> str:
        return f"{self.rank_name}{SUIT_SYMBOLS[self.suit]}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "suit": self.suit.value,
            "rank": self.rank_name,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        """Build a card from its wire form, rejecting inconsistent rank/value pairs."""
        suit_name = data.get("suit")
        rank_name = str(data.get("rank"))
        if suit_name not in NAME_TO_SUIT:
            raise ValueError(f"Unknown suit: {suit_name!r}")
        if rank_name not in NAME_TO_RANK:
            raise ValueError(f"Unknown rank: {rank_name!r}")
        rank = NAME_TO_RANK[rank_name]
        value = data.get("value")
        if value is not None and int(value) != rank.value:
            raise ValueError(f"Card value {value} does not match rank {rank_name}")
        return cls(suit=NAME_TO_SUIT[suit_name], rank=rank, id=str(data.get("id") or ""))


def hand_from_dicts(items) -> list[Card]:
    """Build a hand from wire cards.  Raises ValueError on a repeated id."""
    hand = [Card.from_dict(c) for c in items]
    seen = set()
    for c in hand:
        if c.id in seen:
            raise ValueError(f"Duplicate card id in hand: {c.id}")
        seen.add(c.id)
    return hand


@dataclass
class Player:
    id: int
    name: str
    hand: list[Card] = field(default_factory=list)

    def find_card(self, card_id: str) -> Optional[Card]:
        return next((c for c in self.hand if c.id == card_id), None)

    def to_dict(self, hide_hand: bool = False) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "hand": [] if hide_hand else [c.to_dict() for c in self.hand],
            "hand_count": len(self.hand),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        hand = hand_from_dicts(data.get("hand", []))
        return cls(id=data["id"], name=data.get("name", ""), hand=hand)


@dataclass
class TrickEntry:
    player_id: int
    card: Card

    def to_dict(self) -> dict:
        return {"playerId": self.player_id, "card": self.card.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "TrickEntry":
        player_id = data.get("playerId", data.get("player_id"))
        return cls(player_id=player_id, card=Card.from_dict(data["card"]))


@dataclass
class GameState:
    players: list[Player] = field(default_factory=list)
    current_trick: list[TrickEntry] = field(default_factory=list)
    lead_suit: Optional[Suit] = None
    hearts_broken: bool = False

    @property
    def trick_cards(self) -> list[Card]:
        return [t.card for t in self.current_trick]

    def get_player(self, player_id) -> Player:
        for p in self.players:
            if p.id == player_id:
                return p
        raise BotNotFoundError(f"Player {player_id} not found")

    def to_dict(self) -> dict:
        return {
            "players": [p.to_dict() for p in self.players],
            "currentTrick": [t.to_dict() for t in self.current_trick],
            "leadSuit": self.lead_suit.value if self.lead_suit else None,
            "heartsBroken": self.hearts_broken,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        """Accepts both the camelCase wire keys and snake_case keys."""
        trick = data.get("currentTrick", data.get("current_trick")) or []
        lead = data.get("leadSuit", data.get("lead_suit"))
        if lead is not None and lead not in NAME_TO_SUIT:
            raise ValueError(f"Unknown lead suit: {lead!r}")
        return cls(
            players=[Player.from_dict(p) for p in data.get("players", [])],
            current_trick=[TrickEntry.from_dict(t) for t in trick],
            lead_suit=NAME_TO_SUIT[lead] if lead else None,
            hearts_broken=bool(data.get("heartsBroken", data.get("hearts_broken", False))),
        )
