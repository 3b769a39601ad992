"""
Unit tests for the alignment model.
"""

import pytest

from settings import ALIGNMENTS
from systems.alignment import (
    alignment_distribution,
    alignments_for_axis,
    avg_alignment,
    disposition_distribution,
    generate_acceptable_random_alignment,
    generate_random_alignment,
    ideal_axes,
    join_alignment,
    split_alignment,
)


class TestAlignmentCodes:
    """Tests for splitting and joining codes."""

    def test_split(self):
        assert split_alignment("LG") == ("L", "G")
        assert split_alignment("N") == ("N", "N")

    def test_join(self):
        assert join_alignment("C", "E") == "CE"
        assert join_alignment("N", "N") == "N"
        assert join_alignment("L", "N") == "LN"


class TestAvgAlignment:
    """Tests for avg_alignment()."""

    def test_single(self):
        assert avg_alignment("CE") == "CE"

    def test_opposites_cancel(self):
        assert avg_alignment("LG", "CE") == "N"
        assert avg_alignment("CG", "LE") == "N"

    def test_three_way(self):
        assert avg_alignment("CG", "NG", "LE") == "NG"

    def test_symmetric(self):
        for a in ALIGNMENTS:
            for b in ALIGNMENTS:
                assert avg_alignment(a, b) == avg_alignment(b, a)

    def test_invalid_values_are_ignored(self):
        """None, empty strings and unknown codes are no opinion, not neutral."""
        assert avg_alignment("LG", None, "", "XX") == "LG"
        assert avg_alignment(3, "CG") == "CG"

    def test_nothing_valid(self):
        assert avg_alignment() is None
        assert avg_alignment(None, "") is None

    def test_one_third_reaches_threshold(self):
        """An average of exactly 1/3 on an axis is past the 0.33 threshold."""
        assert avg_alignment("LG", "N", "N") == "LG"

    def test_one_quarter_stays_neutral(self):
        assert avg_alignment("LG", "N", "N", "N") == "N"

    def test_axes_averaged_independently(self):
        assert avg_alignment("LG", "LN") == "LG"
        assert avg_alignment("LE", "CE") == "NE"

    def test_custom_threshold(self):
        assert avg_alignment("LG", "N", "N", "N", threshold=0.25) == "LG"


class TestDisposition:
    """Tests for the personal disposition."""

    def test_always_valid(self, rng):
        assert all(generate_random_alignment(rng) in ALIGNMENTS for _ in range(500))

    def test_distribution_sums_to_one(self):
        assert sum(disposition_distribution().values()) == pytest.approx(1.0)

    def test_neutral_is_most_likely(self):
        dist = disposition_distribution()
        assert max(dist, key=dist.get) == "N"
        assert dist["N"] == pytest.approx(0.466, abs=0.001)

    def test_influenced_distribution(self):
        dist = alignment_distribution(["LG"])
        assert sum(dist.values()) == pytest.approx(1.0)
        # Averaging with LG can never end up evil or chaotic
        assert not {"CE", "NE", "LE", "CG", "CN"} & {code for code, p in dist.items() if p > 0}


class TestAcceptableAlignment:
    """Tests for generate_acceptable_random_alignment()."""

    def test_single_acceptable_returned_as_is(self, rng):
        """A lone whitelisted code wins even against strong influences."""
        assert generate_acceptable_random_alignment(["LG", "LG"], ["CE"], rng) == "CE"

    def test_result_in_whitelist(self, rng):
        for _ in range(200):
            assert generate_acceptable_random_alignment(["LN"], ["LG", "CE", "N"], rng) in ("LG", "CE", "N")

    def test_empty_whitelist_is_unconstrained(self, rng):
        assert generate_acceptable_random_alignment([], [], rng) in ALIGNMENTS
        assert generate_acceptable_random_alignment(["NG"], None, rng) in ALIGNMENTS

    def test_unknown_codes_are_ignored(self, rng):
        assert generate_acceptable_random_alignment([], ["XX"], rng) in ALIGNMENTS

    def test_unreachable_whitelist_terminates(self, rng):
        """Influences pinning the result to LG still yield a whitelisted code."""
        result = generate_acceptable_random_alignment(["LG", "LG", "LG"], ["CE", "NE"], rng)
        assert result in ("CE", "NE")

    def test_unreachable_whitelist_draws_no_dispositions(self):
        """An unreachable whitelist goes straight to a uniform pick."""

        class UniformOnly:
            def randint(self, low, high):
                return high

        assert generate_acceptable_random_alignment(["LG", "LG", "LG"], ["CE", "NE"], UniformOnly()) == "CE"


class TestIdealAxes:
    """Tests for ideal_axes() and alignments_for_axis()."""

    @pytest.mark.parametrize("alignment,axes", [
        ("LG", ["any", "good", "lawful"]),
        ("CE", ["any", "evil", "chaotic"]),
        ("LN", ["any", "lawful", "neutral"]),
        ("NG", ["any", "good", "neutral"]),
        ("N", ["any", "neutral"]),
    ])
    def test_axes(self, alignment, axes):
        assert ideal_axes(alignment) == axes

    def test_alignments_for_axis(self):
        assert alignments_for_axis("lawful") == ["LG", "LN", "LE"]
        assert "N" in alignments_for_axis("neutral")
        assert "LG" not in alignments_for_axis("neutral")
        assert alignments_for_axis("unknown") == ALIGNMENTS
