"""
insertion.py — Insertion Sort
==============================
Grow a sorted prefix one element at a time.  The new element is walked
left with one swap per shift while its predecessor compares greater.

Every comparison is narrated, including the one that stops the walk.
"""

from typing import List

from elements import ElementState
from algorithms.step import StepAction, StepContext


PSEUDOCODE: List[str] = [
    "for i in 1 .. n-1:",
    "    j ← i",
    "    while j > 0 and a[j-1] > a[j]:",
    "        swap(a[j-1], a[j])",
    "        j ← j - 1",
]


def insertion_sort(ctx: StepContext) -> None:
    n = len(ctx)
    for i in range(1, n):
        j = i
        ctx.set_state(i, ElementState.CURRENT)
        ctx.record(f"Insert value {ctx.value(i)} into sorted prefix", [i], StepAction.SELECT)

        while j > 0:
            ctx.set_state(j - 1, ElementState.COMPARING)
            ctx.compare(f"Compare {ctx.value(j - 1)} with {ctx.value(j)}", j - 1, j)
            if ctx.value(j - 1) <= ctx.value(j):
                ctx.set_state(j - 1, ElementState.SORTED)
                break

            ctx.swap(j - 1, j, f"Shift {ctx.value(j - 1)} right to make room", j - 1, j)
            ctx.set_state(j, ElementState.DEFAULT)
            j -= 1

        ctx.set_state(j, ElementState.SORTED)
        ctx.record(f"Placed value at index {j}", [j], StepAction.SORT)

        for k in range(i + 1):
            if ctx.state(k) is ElementState.DEFAULT:
                ctx.set_state(k, ElementState.SORTED)

    if n > 0:
        ctx.set_state(0, ElementState.SORTED)
