"""Tests for trick valuation and the poison risk factor."""
import pytest

from peppa.valuation import (
    card_penalty, is_clean, is_worth_winning, net_trick_value, poison_risk,
)

from cards import card, cards


class TestPenalties:

    def test_card_penalty(self):
        assert card_penalty(card("Ah")) == -14
        assert card_penalty(card("2h")) == -2
        assert card_penalty(card("Qs")) == -26
        assert card_penalty(card("Ks")) == 0
        assert card_penalty(card("Qd")) == 0

    def test_clean_cards(self):
        assert is_clean(card("Ks"))
        assert not is_clean(card("Qs"))
        assert not is_clean(card("3h"))


class TestNetTrickValue:

    def test_empty_trick(self):
        assert net_trick_value([]) == 10

    def test_queen_of_spades(self):
        assert net_trick_value(cards("Qs")) == -16

    def test_hearts(self):
        assert net_trick_value(cards("10h Jh")) == -11

    def test_mixed(self):
        assert net_trick_value(cards("5c 9c 2h Qs")) == 10 - 2 - 26

    def test_worth_winning_threshold(self):
        assert is_worth_winning(cards("2c 5c"))
        assert not is_worth_winning(cards("5c 2h"))
        assert is_worth_winning(cards("5c 2h"), threshold=8)


@pytest.mark.parametrize("hand_size,risk", [
    (1, 1.0), (4, 1.0),
    (5, 0.6), (7, 0.6),
    (8, 0.35), (10, 0.35),
    (11, 0.2), (13, 0.2),
])
def test_poison_risk_steps(hand_size, risk):
    assert poison_risk(hand_size) == risk
