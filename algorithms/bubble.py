"""
bubble.py — Bubble Sort
========================
n-1 passes over the unsorted prefix.  Each pass compares every adjacent
pair and swaps the ones that are out of order, so the largest remaining
value bubbles to the end and gets locked in place.

No early exit: every pass runs even when nothing moved.
"""

from typing import List

from elements import ElementState
from algorithms.step import StepAction, StepContext


PSEUDOCODE: List[str] = [
    "for i in 0 .. n-2:",
    "    for j in 0 .. n-i-2:",
    "        if a[j] > a[j+1]:",
    "            swap(a[j], a[j+1])",
    "    lock a[n-i-1]",
]


def bubble_sort(ctx: StepContext) -> None:
    n = len(ctx)
    for i in range(n - 1):
        ctx.record(f"Pass {i + 1}/{max(1, n - 1)}: scanning for next largest value", [], StepAction.SELECT)

        for j in range(n - i - 1):
            ctx.set_states([j, j + 1], ElementState.COMPARING)
            ctx.compare(
                f"Compare indices {j} and {j + 1}: {ctx.value(j)} vs {ctx.value(j + 1)}",
                j, j + 1,
            )

            if ctx.value(j) > ctx.value(j + 1):
                ctx.swap(j, j + 1, f"Swap values {ctx.value(j)} and {ctx.value(j + 1)}", j, j + 1)

            ctx.set_states([j, j + 1], ElementState.DEFAULT)

        sorted_index = n - i - 1
        ctx.set_state(sorted_index, ElementState.SORTED)
        ctx.record(f"Position {sorted_index} locked in place", [sorted_index], StepAction.SORT)

    if n > 0:
        ctx.set_state(0, ElementState.SORTED)
