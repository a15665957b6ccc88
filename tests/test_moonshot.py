"""Unit tests for the moon-shot detector."""
import unittest

from peppa.moonshot import (
    AGGRESSIVE_MOON_SHOT, SACRIFICE_MOON_SHOT, MoonShotRule, hand_profile,
)

from cards import cards


class TestMoonShot(unittest.TestCase):
    """Hands are 13 cards unless stated otherwise."""

    EIGHT_HEARTS = "2h 3h 4h 5h 6h Jh Qh Kh Qs 2c 3c 4d 5d"
    SIX_HEARTS = "4h 5h 6h Jh Qh Kh Qs 2c 3c 4d 5d 6d 7d"
    SEVEN_HEARTS_TWO_HONOURS = "2h 3h 4h 5h Jh Qh Kh Qs As Kd 2c 3c 4c"

    def test_eight_hearts_with_queen(self):
        self.assertTrue(AGGRESSIVE_MOON_SHOT.wants_moon_shot(cards(self.EIGHT_HEARTS)))

    def test_six_hearts_is_not_enough(self):
        self.assertFalse(AGGRESSIVE_MOON_SHOT.wants_moon_shot(cards(self.SIX_HEARTS)))

    def test_queen_of_spades_required(self):
        hand = cards(self.EIGHT_HEARTS.replace("Qs", "Ks"))
        self.assertFalse(AGGRESSIVE_MOON_SHOT.wants_moon_shot(hand))

    def test_three_high_hearts_required(self):
        hand = cards(self.EIGHT_HEARTS.replace("Kh", "7h"))
        self.assertFalse(AGGRESSIVE_MOON_SHOT.wants_moon_shot(hand))

    def test_thresholds_differ_per_rule(self):
        hand = cards(self.SEVEN_HEARTS_TWO_HONOURS)
        self.assertTrue(SACRIFICE_MOON_SHOT.wants_moon_shot(hand))
        self.assertFalse(AGGRESSIVE_MOON_SHOT.wants_moon_shot(hand))

    def test_off_suit_honours_required(self):
        hand = cards(self.SEVEN_HEARTS_TWO_HONOURS.replace("Kd", "5d"))
        self.assertFalse(SACRIFICE_MOON_SHOT.wants_moon_shot(hand))

    def test_queen_optional(self):
        rule = MoonShotRule(min_hearts=6, require_queen_of_spades=False)
        hand = cards(self.SIX_HEARTS.replace("Qs", "Ks"))
        self.assertTrue(rule.wants_moon_shot(hand))

    def test_hand_profile(self):
        profile = hand_profile(cards(self.SEVEN_HEARTS_TWO_HONOURS))
        self.assertEqual(profile, {
            "hearts": 7,
            "high_hearts": 3,
            "queen_of_spades": True,
            "high_off_suit": 2,
        })


if __name__ == '__main__':
    unittest.main()
