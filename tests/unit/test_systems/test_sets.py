"""
Unit tests for the list set helpers.
"""

from systems.sets import attempt_intersection, intersection, union


class TestIntersection:
    """Tests for intersection()."""

    def test_common_elements(self):
        """Only elements found in every list are kept."""
        assert intersection([1, 2, 3], [2, 3, 4], [3, 2]) == [2, 3]

    def test_no_lists(self):
        assert intersection() == []

    def test_single_list_returned_as_is(self):
        assert intersection(["a", "b"]) == ["a", "b"]

    def test_non_lists_are_ignored(self):
        """Arguments that aren't lists don't constrain the result."""
        assert intersection(["a", "b"], None, "ab") == ["a", "b"]
        assert intersection(None, 5) == []

    def test_keeps_order_of_first_list(self):
        assert intersection(["c", "a", "b"], ["a", "b", "c"]) == ["c", "a", "b"]

    def test_disjoint(self):
        assert intersection(["a"], ["b"]) == []


class TestUnion:
    """Tests for union()."""

    def test_deduplicated_concatenation(self):
        assert union([1, 2], [2, 3], [3, 4]) == [1, 2, 3, 4]

    def test_empty(self):
        assert union() == []
        assert union([], []) == []


class TestAttemptIntersection:
    """Tests for attempt_intersection()."""

    def test_overlap_gives_intersection(self):
        assert attempt_intersection(["Ash", "Kit"], ["Kit", "Tam"]) == ["Kit"]

    def test_no_overlap_gives_union(self):
        """Name lists that share nothing are pooled together."""
        assert attempt_intersection(["Ash"], ["Tam"]) == ["Ash", "Tam"]
