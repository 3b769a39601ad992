"""
Unit tests for weighted random tables.
"""

import random
from collections import Counter

from systems.tables import (
    TableRow,
    make_table,
    random_acceptable_row_from_table,
    random_element,
    random_row_from_table,
    random_row_where,
    table_keys,
    table_kind,
)


class TestMakeTable:
    """Tests for building tables from mappings."""

    def test_bare_numbers_become_weights(self):
        rows = make_table({"a": 1, "b": 3})
        assert [row.weight for row in rows] == [1.0, 3.0]
        assert table_kind(rows) == "weight"

    def test_mapping_values_keep_extra_data(self):
        rows = make_table({"Human": {"percent": 50, "note": "most"}})
        assert rows[0].percent == 50
        assert rows[0].data == {"note": "most"}

    def test_table_kind(self):
        assert table_kind(make_table({"a": {"pop": 10}, "b": {"pop": 5}})) == "pop"
        assert table_kind(make_table({"a": {"percent": 10}})) == "percent"
        assert table_kind([]) == "weight"

    def test_deterministic(self):
        source = {"a": {"percent": 70}, "b": {"percent": 30}}
        assert make_table(source) == make_table(source)

    def test_table_keys(self):
        assert table_keys(make_table({"a": 1, "b": 2})) == ["a", "b"]

    def test_negative_mass_counts_as_zero(self):
        assert TableRow(key="a", weight=-3).mass == 0.0
        assert TableRow(key="a").mass == 0.0


class TestRandomRowFromTable:
    """Tests for weighted draws."""

    def test_empty_table(self, rng):
        assert random_row_from_table([], rng) is None

    def test_single_row(self, rng):
        rows = [TableRow(key="only", percent=100)]
        assert random_row_from_table(rows, rng).key == "only"

    def test_certain_entry_always_drawn(self, rng):
        rows = make_table({"sure": {"percent": 100}, "never": {"percent": 0}, "nope": {"percent": 0}})
        assert all(random_row_from_table(rows, rng).key == "sure" for _ in range(1000))

    def test_zero_weight_rows_never_drawn(self, rng):
        """A row without mass is skipped whatever the table kind."""
        for rows in (
            [TableRow(key="a", weight=0), TableRow(key="b", weight=1)],
            [TableRow(key="a", percent=0), TableRow(key="b", percent=100)],
            [TableRow(key="a", pop=0), TableRow(key="b", pop=5)],
        ):
            draws = {random_row_from_table(rows, rng).key for _ in range(200)}
            assert draws == {"b"}

    def test_all_zero_weights_fall_back_to_uniform(self, rng):
        rows = [TableRow(key="a", weight=0), TableRow(key="b", weight=0)]
        draws = {random_row_from_table(rows, rng).key for _ in range(100)}
        assert draws == {"a", "b"}

    def test_draws_follow_percentages(self, rng):
        rows = make_table({"common": {"percent": 90}, "rare": {"percent": 10}})
        counts = Counter(random_row_from_table(rows, rng).key for _ in range(2000))
        assert 1650 < counts["common"] < 1950

    def test_small_percent_table(self, rng):
        """Percentages below one still get drawn."""
        rows = [TableRow(key="tiny", percent=0.1)]
        assert random_row_from_table(rows, rng).key == "tiny"

    def test_fractional_percent_total_keeps_last_quantum(self):
        """A total of 98.99999999999999 still rolls over all 9900 hundredths."""

        class HighestRoll:
            def randint(self, low, high):
                self.bounds = (low, high)
                return high

        rows = make_table({
            "Female": {"percent": 49},
            "Male": {"percent": 49},
            "Non-binary": {"percent": 0.6},
            "Genderfluid": {"percent": 0.3},
            "Agender": {"percent": 0.1},
        })
        rng = HighestRoll()
        assert random_row_from_table(rows, rng).key == "Agender"
        assert rng.bounds == (0, 9899)

    def test_seeded_draws_repeat(self):
        rows = make_table({"a": 1, "b": 1, "c": 1})
        first_rng, second_rng = random.Random(5), random.Random(5)
        first = [random_row_from_table(rows, first_rng).key for _ in range(20)]
        second = [random_row_from_table(rows, second_rng).key for _ in range(20)]
        assert first == second


class TestWhitelistedDraws:
    """Tests for random_row_where() and random_acceptable_row_from_table()."""

    def test_whitelist_restricts(self, rng):
        rows = make_table({"a": 99, "b": 1})
        draws = {random_acceptable_row_from_table(rows, ["b"], rng).key for _ in range(50)}
        assert draws == {"b"}

    def test_disjoint_whitelist_is_ignored(self, rng):
        rows = make_table({"a": 1, "b": 1})
        draws = {random_acceptable_row_from_table(rows, ["zzz"], rng).key for _ in range(100)}
        assert draws == {"a", "b"}

    def test_empty_whitelist_is_ignored(self, rng):
        rows = make_table({"a": 1})
        assert random_acceptable_row_from_table(rows, [], rng).key == "a"
        assert random_acceptable_row_from_table(rows, None, rng).key == "a"

    def test_predicate_matching_nothing_uses_whole_table(self, rng):
        rows = make_table({"a": 1, "b": 1})
        assert random_row_where(rows, lambda row: False, rng).key in ("a", "b")


class TestRandomElement:
    def test_empty(self, rng):
        assert random_element([], rng) is None

    def test_pick(self, rng):
        assert random_element(["x", "y"], rng) in ("x", "y")
