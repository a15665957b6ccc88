"""Unit tests for the card and game-state models."""
import pytest

from peppa.errors import BotNotFoundError
from peppa.models import Card, GameState, Player, Rank, Suit

from cards import card, make_state


class TestCard:

    def test_default_id_and_value(self):
        c = Card(suit=Suit.SPADES, rank=Rank.QUEEN)
        assert c.id == "Q_spades"
        assert c.value == 12
        assert c.is_queen_of_spades
        assert c.is_penalty

    def test_face_values(self):
        assert card("Jd").value == 11
        assert card("Kd").value == 13
        assert card("Ad").value == 14
        assert card("2d").value == 2

    def test_to_dict(self):
        assert card("10h").to_dict() == {
            "id": "10_hearts", "suit": "hearts", "rank": "10", "value": 10,
        }

    def test_from_dict_keeps_given_id(self):
        c = Card.from_dict({"suit": "clubs", "rank": "A", "id": "c-14", "value": 14})
        assert c.id == "c-14"
        assert c.rank == Rank.ACE
        assert c.suit == Suit.CLUBS

    def test_from_dict_rejects_inconsistent_value(self):
        with pytest.raises(ValueError):
            Card.from_dict({"suit": "clubs", "rank": "K", "value": 12})

    def test_from_dict_rejects_unknown_suit_and_rank(self):
        with pytest.raises(ValueError):
            Card.from_dict({"suit": "stars", "rank": "K"})
        with pytest.raises(ValueError):
            Card.from_dict({"suit": "clubs", "rank": "1"})

    def test_label(self):
        assert card("Qs").label() == "Q♠"


class TestPlayer:

    def test_find_card(self):
        p = Player(id=1, name="Bot", hand=[card("2c"), card("Kh")])
        assert p.find_card("K_hearts") == card("Kh")
        assert p.find_card("A_hearts") is None

    def test_from_dict_rejects_duplicate_ids(self):
        data = {"id": 1, "name": "Bot", "hand": [
            {"suit": "clubs", "rank": "2", "id": "x"},
            {"suit": "clubs", "rank": "3", "id": "x"},
        ]}
        with pytest.raises(ValueError):
            Player.from_dict(data)

    def test_hidden_hand(self):
        p = Player(id=1, name="Bot", hand=[card("2c")])
        d = p.to_dict(hide_hand=True)
        assert d["hand"] == []
        assert d["hand_count"] == 1


class TestGameState:

    def test_get_player_unknown_raises(self):
        state = make_state("2c 3c")
        with pytest.raises(BotNotFoundError):
            state.get_player(42)

    def test_trick_cards(self):
        state = make_state("2c", trick="5c Qs")
        assert state.trick_cards == [card("5c"), card("Qs")]
        assert state.lead_suit == Suit.CLUBS

    def test_from_dict_camel_case(self):
        state = GameState.from_dict({
            "players": [{"id": 1, "name": "Bot", "hand": [{"suit": "hearts", "rank": "2"}]}],
            "currentTrick": [{"playerId": 2, "card": {"suit": "clubs", "rank": "9"}}],
            "leadSuit": "clubs",
            "heartsBroken": True,
        })
        assert state.lead_suit == Suit.CLUBS
        assert state.hearts_broken is True
        assert state.current_trick[0].player_id == 2
        assert state.get_player(1).hand == [card("2h")]

    def test_from_dict_snake_case(self):
        state = GameState.from_dict({
            "players": [],
            "current_trick": [],
            "lead_suit": None,
            "hearts_broken": False,
        })
        assert state.current_trick == []
        assert state.lead_suit is None

    def test_to_dict_feeds_from_dict(self):
        state = make_state("2c Kh", trick="5c", hearts_broken=True)
        again = GameState.from_dict(state.to_dict())
        assert again == state
