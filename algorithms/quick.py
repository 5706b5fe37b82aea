"""
quick.py — Quick Sort (Lomuto & Hoare partitions)
==================================================
Both variants keep pending ranges on an explicit stack instead of
recursing.  After a partition the right sub-range is pushed first and the
left one second, so the left side is partitioned next.

  lomuto – pivot is the last element; one left-to-right scan swaps every
           value <= pivot into the low partition, then the pivot moves to
           its settled slot.
  hoare  – pivot is the middle element; two pointers converge with
           do/while scans and swap out-of-place pairs.  Fewer swaps.
"""

from typing import List, Tuple

from elements import ElementState
from algorithms.step import StepAction, StepContext


PSEUDOCODE: List[str] = [
    "stack ← [(0, n-1)]",
    "while stack:",
    "    (lo, hi) ← stack.pop()",
    "    p ← partition(lo, hi)",
    "    push right range, then left range",
]


def quick_sort_lomuto(ctx: StepContext) -> None:
    n = len(ctx)
    stack: List[Tuple[int, int]] = [(0, n - 1)] if n > 0 else []

    while stack:
        lo, hi = stack.pop()
        if lo >= hi or lo < 0 or hi >= n:
            continue

        pivot_value = ctx.value(hi)
        ctx.set_state(hi, ElementState.PIVOT)
        ctx.record(
            f"Partition indices {lo}-{hi} with pivot {pivot_value} at index {hi}",
            [hi], StepAction.PIVOT,
        )

        i = lo
        for j in range(lo, hi):
            ctx.set_state(j, ElementState.COMPARING)
            ctx.compare(f"Compare index {j} ({ctx.value(j)}) with pivot {pivot_value}", j, hi)

            if ctx.value(j) <= pivot_value:
                if i != j:
                    ctx.swap(i, j, f"Swap index {i} and {j}", j, i)
                ctx.set_state(i, ElementState.DEFAULT)
                i += 1

            ctx.set_state(j, ElementState.DEFAULT)

        if i != hi:
            ctx.swap(i, hi, f"Move pivot to index {i}", hi, i)
            ctx.set_state(hi, ElementState.DEFAULT)

        ctx.set_state(i, ElementState.SORTED)
        ctx.record(f"Pivot settled at index {i}", [i], StepAction.SORT)

        if i + 1 < hi:
            stack.append((i + 1, hi))
        if lo < i - 1:
            stack.append((lo, i - 1))

    ctx.mark_all_sorted(lambda idx: f"Index {idx} confirmed")


def quick_sort_hoare(ctx: StepContext) -> None:
    n = len(ctx)
    stack: List[Tuple[int, int]] = [(0, n - 1)] if n > 0 else []

    while stack:
        lo, hi = stack.pop()
        if lo >= hi:
            continue

        pivot_index = (lo + hi) // 2
        pivot_value = ctx.value(pivot_index)
        ctx.set_state(pivot_index, ElementState.PIVOT)
        ctx.record(
            f"Partition {lo}-{hi} using pivot {pivot_value} at index {pivot_index}",
            [pivot_index], StepAction.PIVOT,
        )

        left, right = lo - 1, hi + 1
        while True:
            # do { left++ } while a[left] < pivot
            while True:
                left += 1
                ctx.set_state(left, ElementState.COMPARING)
                ctx.compare(
                    f"Compare index {left} ({ctx.value(left)}) with pivot {pivot_value}",
                    left, pivot_index,
                )
                ctx.set_state(left, ElementState.DEFAULT)
                if ctx.value(left) >= pivot_value:
                    break

            # do { right-- } while a[right] > pivot
            while True:
                right -= 1
                ctx.set_state(right, ElementState.COMPARING)
                ctx.compare(
                    f"Compare index {right} ({ctx.value(right)}) with pivot {pivot_value}",
                    right, pivot_index,
                )
                ctx.set_state(right, ElementState.DEFAULT)
                if ctx.value(right) <= pivot_value:
                    break

            if left >= right:
                ctx.set_state(pivot_index, ElementState.DEFAULT)
                if right + 1 < hi:
                    stack.append((right + 1, hi))
                if lo < right:
                    stack.append((lo, right))
                break

            ctx.swap(left, right, f"Swap index {left} and {right}", right, left)
            ctx.set_states([left, right], ElementState.DEFAULT)

    ctx.mark_all_sorted(lambda idx: f"Index {idx} confirmed")
