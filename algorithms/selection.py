"""
selection.py — Selection Sort
==============================
For each position, scan the unsorted suffix for the minimum and swap it
into place.  At most one swap per position, which makes it the algorithm
with the fewest writes and the least stable behaviour.
"""

from typing import List

from elements import ElementState
from algorithms.step import StepAction, StepContext


PSEUDOCODE: List[str] = [
    "for i in 0 .. n-1:",
    "    min ← i",
    "    for j in i+1 .. n-1:",
    "        if a[j] < a[min]: min ← j",
    "    if min != i: swap(a[i], a[min])",
]


def selection_sort(ctx: StepContext) -> None:
    n = len(ctx)
    for i in range(n):
        min_index = i
        ctx.set_state(i, ElementState.CURRENT)
        ctx.record(f"Assume index {i} as current minimum", [i], StepAction.SELECT)

        for j in range(i + 1, n):
            ctx.set_state(j, ElementState.COMPARING)
            ctx.compare(
                f"Compare index {j} ({ctx.value(j)}) with current minimum "
                f"index {min_index} ({ctx.value(min_index)})",
                min_index, j,
            )

            if ctx.value(j) < ctx.value(min_index):
                ctx.set_state(min_index, ElementState.DEFAULT)
                min_index = j
                ctx.set_state(min_index, ElementState.CURRENT)
                ctx.record(f"Update current minimum to index {min_index}", [min_index], StepAction.SELECT)
                continue

            ctx.set_state(j, ElementState.DEFAULT)

        if min_index != i:
            ctx.swap(i, min_index, f"Swap index {i} with new minimum at index {min_index}", min_index, i)
            ctx.set_state(min_index, ElementState.DEFAULT)

        ctx.set_state(i, ElementState.SORTED)
        ctx.record(f"Position {i} confirmed", [i], StepAction.SORT)
