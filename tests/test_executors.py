"""Tests for the instrumented sorting executors, run through generate_trace."""

import random
from collections import Counter

import pytest

from elements import ElementState
from algorithms import REGISTRY
from algorithms.merge import _split_point
from algorithms.shell import CIURA_GAPS, knuth_gaps
from algorithms.step import StepAction
from engine import generate_trace


ALL_VARIANTS = [
    (key, variant)
    for key, info in REGISTRY.items()
    for variant in info.executors
]

CUSTOM = [64, 34, 25, 12, 22, 11, 90]


def _random_values(seed: int, n: int = 24):
    rng = random.Random(seed)
    return [rng.randrange(1, 60) for _ in range(n)]


class TestBubbleExample:
    def test_counts_and_output(self):
        trace = generate_trace([5, 3, 8, 1], "bubble")
        final = trace.final
        assert final.values == [1, 3, 5, 8]
        assert final.stats.comparisons == 6
        assert final.stats.swaps == 4

    def test_pass_structure(self):
        trace = generate_trace([5, 3, 8, 1], "bubble")
        actions = [s.action for s in trace]
        assert actions.count(StepAction.COMPARE) == 6
        assert actions.count(StepAction.SWAP) == 4
        assert len(trace) == 18
        assert trace[0].message == "Starting Bubble Sort"
        assert trace.final.message == "Bubble Sort completed! 4 swaps, 6 comparisons"

    def test_swap_step_shows_array_before_exchange(self):
        trace = generate_trace([5, 3, 8, 1], "bubble")
        first_swap = next(s for s in trace if s.action is StepAction.SWAP)
        assert first_swap.values == [5, 3, 8, 1]
        assert first_swap.swap_pair.to_dict() == {"from": 0, "to": 1}
        assert first_swap.array[0].state is ElementState.SWAPPING
        assert first_swap.array[1].state is ElementState.SWAPPING


@pytest.mark.parametrize("algorithm,variant", ALL_VARIANTS)
class TestEveryExecutor:
    def test_custom_example_sorts(self, algorithm, variant):
        trace = generate_trace(CUSTOM, algorithm, variant)
        assert trace.final.values == [11, 12, 22, 25, 34, 64, 90]

    def test_every_snapshot_is_a_permutation(self, algorithm, variant):
        values = _random_values(11)
        expected = Counter(values)
        trace = generate_trace(values, algorithm, variant)
        for step in trace:
            assert Counter(step.values) == expected
            assert sorted(e.id for e in step.array) == list(range(len(values)))

    def test_final_snapshot_sorted_and_marked(self, algorithm, variant):
        values = _random_values(5)
        trace = generate_trace(values, algorithm, variant)
        final = trace.final
        assert final.values == sorted(values)
        assert all(e.state is ElementState.SORTED for e in final.array)

    def test_counters_are_monotonic_and_start_at_zero(self, algorithm, variant):
        trace = generate_trace(_random_values(9), algorithm, variant)
        assert trace[0].stats.comparisons == 0
        assert trace[0].stats.swaps == 0
        for prev, cur in zip(trace.steps, trace.steps[1:]):
            assert cur.stats.comparisons >= prev.stats.comparisons
            assert cur.stats.swaps >= prev.stats.swaps

    def test_each_counted_event_has_exactly_one_step(self, algorithm, variant):
        trace = generate_trace(_random_values(21), algorithm, variant)
        compare_steps = [s for s in trace if s.action is StepAction.COMPARE]
        paired_swaps  = [s for s in trace if s.action is StepAction.SWAP and s.swap_pair is not None]
        assert len(compare_steps) == trace.final.stats.comparisons
        assert len(paired_swaps) == trace.final.stats.swaps

    def test_completion_message_matches_counters(self, algorithm, variant):
        trace = generate_trace(_random_values(3), algorithm, variant)
        stats = trace.final.stats
        assert f"{stats.swaps} swap" in trace.final.message
        assert f"{stats.comparisons} comparison" in trace.final.message

    def test_finalized_progress(self, algorithm, variant):
        trace = generate_trace(_random_values(2, 10), algorithm, variant)
        total = len(trace)
        for k, step in enumerate(trace, start=1):
            assert step.stats.current_step == k
            assert step.stats.total_steps == total
            assert step.stats.progress == pytest.approx(100 * k / total)
            assert step.stats.time_elapsed == 0

    def test_replay_is_idempotent(self, algorithm, variant):
        values = _random_values(17)
        assert generate_trace(values, algorithm, variant).steps == generate_trace(values, algorithm, variant).steps

    @pytest.mark.parametrize("values", [[], [7], [2, 2, 2, 2], [1, 2, 3, 4, 5]])
    def test_edge_inputs(self, algorithm, variant, values):
        trace = generate_trace(values, algorithm, variant)
        assert len(trace) >= 2
        assert trace.final.values == sorted(values)


class TestMerge:
    @pytest.mark.parametrize("left,right,expected", [(0, 1, 0), (0, 4, 3), (0, 5, 3), (0, 7, 3), (4, 6, 5)])
    def test_split_point(self, left, right, expected):
        assert _split_point(left, right) == expected

    @pytest.mark.parametrize("seed,n", [(1, 5), (2, 6), (3, 7), (4, 13), (5, 32)])
    def test_variants_compare_identically(self, seed, n):
        values = _random_values(seed, n)
        top = generate_trace(values, "merge", "topDown")
        bottom = generate_trace(values, "merge", "bottomUp")
        assert top.final.values == bottom.final.values
        assert top.final.stats.comparisons == bottom.final.stats.comparisons

    def test_copy_back_is_not_counted_as_swap(self):
        trace = generate_trace([4, 3, 2, 1], "merge", "topDown")
        copy_backs = [s for s in trace if s.action is StepAction.SWAP]
        assert copy_backs
        assert all(s.swap_pair is None for s in copy_backs)
        assert trace.final.stats.swaps == 0


class TestQuick:
    def test_lomuto_partitions_left_range_first(self):
        trace = generate_trace([3, 7, 1, 9, 5], "quick", "lomuto")
        pivots = [s for s in trace if s.action is StepAction.PIVOT]
        # 5 settles at index 2; the next partition is the left range 0-1
        assert pivots[0].message.startswith("Partition indices 0-4")
        assert pivots[1].message.startswith("Partition indices 0-1")

    def test_hoare_uses_middle_pivot(self):
        trace = generate_trace([3, 7, 1, 9, 5], "quick", "hoare")
        first_pivot = next(s for s in trace if s.action is StepAction.PIVOT)
        assert first_pivot.indices == (2,)
        assert first_pivot.array[2].state is ElementState.PIVOT

    def test_hoare_sorts_reversed_input_in_one_partition(self):
        values = list(range(20, 0, -1))
        trace = generate_trace(values, "quick", "hoare")
        assert trace.final.values == sorted(values)
        # symmetric pairs swap once each, later partitions find nothing to move
        assert trace.final.stats.swaps == 10


class TestShellGaps:
    def test_knuth_gaps_descend_to_one(self):
        gaps = knuth_gaps()
        assert gaps[-3:] == [13, 4, 1]
        assert gaps == sorted(set(gaps), reverse=True)

    def test_ciura_gaps(self):
        assert CIURA_GAPS[-1] == 1
        assert list(CIURA_GAPS) == sorted(CIURA_GAPS, reverse=True)

    def test_only_gaps_below_length_are_used(self):
        trace = generate_trace(_random_values(8, 12), "shell", "ciura")
        gap_steps = [s.message for s in trace if s.message.startswith("Gap ")]
        assert [m.split(":")[0] for m in gap_steps] == ["Gap 10", "Gap 4", "Gap 1"]


class TestInsertionAndSelection:
    def test_insertion_on_sorted_input_is_linear(self):
        trace = generate_trace([1, 2, 3, 4, 5, 6], "insertion")
        assert trace.final.stats.comparisons == 5
        assert trace.final.stats.swaps == 0

    def test_selection_swap_count_bounded(self):
        values = _random_values(21, 15)
        trace = generate_trace(values, "selection")
        assert trace.final.stats.swaps <= len(values) - 1
        assert trace.final.stats.comparisons == len(values) * (len(values) - 1) // 2

    def test_cocktail_stops_early_on_sorted_input(self):
        trace = generate_trace([1, 2, 3, 4, 5], "cocktail")
        assert trace.final.stats.comparisons == 4
        assert trace.final.stats.swaps == 0
