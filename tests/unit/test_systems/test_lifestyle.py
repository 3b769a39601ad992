"""
Unit tests for gender and lifestyle draws.
"""

from collections import Counter

from engine.config import LifestyleConfig
from settings import GENDERS, LIFESTYLES, NONBINARY_GENDERS
from systems.lifestyle import choose_gender, choose_lifestyle, roll_nobility


class TestChooseGender:
    """Tests for choose_gender()."""

    def test_always_a_known_gender(self, rng):
        assert all(choose_gender(rng=rng) in GENDERS for _ in range(200))

    def test_single_acceptable(self, rng):
        """Even the rarest gender comes back when it's the only one allowed."""
        assert all(choose_gender(["Agender"], rng=rng) == "Agender" for _ in range(50))

    def test_unknown_whitelist_is_ignored(self, rng):
        assert choose_gender(["Robot"], rng=rng) in GENDERS

    def test_eschewing_cultures(self, rng):
        standard = Counter(choose_gender(rng=rng) for _ in range(1000))
        eschewing = Counter(choose_gender(eschews_gender=True, rng=rng) for _ in range(1000))
        assert sum(standard[g] for g in NONBINARY_GENDERS) < 50
        assert sum(eschewing[g] for g in NONBINARY_GENDERS) > 250


class TestChooseLifestyle:
    """Tests for choose_lifestyle() and roll_nobility()."""

    def test_unanchored(self, rng):
        counts = Counter(choose_lifestyle(rng=rng) for _ in range(1000))
        assert set(counts) <= set(LIFESTYLES)
        assert counts["Poor"] > counts["Middle"] > counts["Rich"]

    def test_anchored_stays_within_one_step(self, rng):
        assert "Rich" not in {choose_lifestyle("Poor", rng) for _ in range(300)}
        assert "Poor" not in {choose_lifestyle("Rich", rng) for _ in range(300)}

    def test_unknown_anchor_is_ignored(self, rng):
        assert choose_lifestyle("Royal", rng) in LIFESTYLES

    def test_only_the_rich_are_noble(self, rng):
        config = LifestyleConfig(noble_chance=1.0)
        assert roll_nobility("Rich", rng, config)
        assert not roll_nobility("Middle", rng, config)
        assert not roll_nobility(None, rng, config)

    def test_noble_chance(self, rng):
        assert not any(roll_nobility("Rich", rng, LifestyleConfig(noble_chance=0.0)) for _ in range(100))
