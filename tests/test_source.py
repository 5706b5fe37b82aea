"""Tests for the array source -- random arrays and custom input parsing."""

import random

import pytest

from elements import Element, ElementState, ValidationError, create_random_array, parse_custom_array
from elements.source import CUSTOM_MAX_ITEMS


class TestRandomArray:
    def test_size_and_ids(self):
        arr = create_random_array(25, rng=random.Random(7))
        assert len(arr) == 25
        assert [e.id for e in arr] == list(range(25))
        assert all(e.state is ElementState.DEFAULT for e in arr)

    def test_values_in_half_open_range(self):
        arr = create_random_array(200, 10, 20, rng=random.Random(1))
        assert all(10 <= e.value < 20 for e in arr)

    def test_size_is_clamped(self):
        assert len(create_random_array(0)) == 1
        assert len(create_random_array(10_000)) == 500

    def test_degenerate_range_is_repaired(self):
        arr = create_random_array(5, 50, 50, rng=random.Random(3))
        assert all(e.value == 50 for e in arr)

    def test_seeded_generation_is_reproducible(self):
        a = create_random_array(30, rng=random.Random(42))
        b = create_random_array(30, rng=random.Random(42))
        assert a == b


class TestCustomArray:
    def test_example_input(self):
        arr = parse_custom_array("64, 34, 25, 12, 22, 11, 90")
        assert [e.value for e in arr] == [64, 34, 25, 12, 22, 11, 90]
        assert [e.id for e in arr] == list(range(7))

    def test_invalid_entries_are_dropped(self):
        arr = parse_custom_array("5, abc, 0, 501, 7, -3, 12xyz")
        assert [e.value for e in arr] == [5, 7, 12]

    def test_truncated_to_max_items(self):
        text = ", ".join(["3"] * (CUSTOM_MAX_ITEMS + 20))
        assert len(parse_custom_array(text)) == CUSTOM_MAX_ITEMS

    @pytest.mark.parametrize("text", ["", "abc, def", "0, 600, -1", ",,,"])
    def test_nothing_usable_raises(self, text):
        with pytest.raises(ValidationError):
            parse_custom_array(text)

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_custom_array("nope")


class TestElement:
    def test_with_state_returns_new_element(self):
        e = Element(value=4, id=0)
        e2 = e.with_state(ElementState.SORTED)
        assert e.state is ElementState.DEFAULT
        assert e2.state is ElementState.SORTED
        assert (e2.value, e2.id) == (4, 0)

    def test_dict_round_trip(self):
        e = Element(value=9, id=3, state=ElementState.PIVOT)
        assert Element.from_dict(e.to_dict()) == e
