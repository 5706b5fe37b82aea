"""
cocktail.py — Cocktail Shaker Sort
===================================
Bubble sort in both directions.  A forward pass carries the largest value
to the right end, a backward pass carries the smallest to the left end,
and the active range shrinks from both sides.  Stops as soon as a pass
moves nothing.
"""

from typing import List

from elements import ElementState
from algorithms.step import StepAction, StepContext


PSEUDOCODE: List[str] = [
    "start ← 0, end ← n-1",
    "repeat:",
    "    forward bubble start..end;  end ← end - 1",
    "    if no swap: stop",
    "    backward bubble end..start; start ← start + 1",
    "until no swap",
]


def cocktail_sort(ctx: StepContext) -> None:
    n = len(ctx)
    if n == 0:
        return

    start, end = 0, n - 1
    pass_no = 1
    swapped = True

    while swapped:
        swapped = False
        ctx.record(f"Forward pass {pass_no}", [], StepAction.SELECT)

        for i in range(start, end):
            ctx.set_states([i, i + 1], ElementState.COMPARING)
            ctx.compare(f"Compare index {i} and {i + 1}", i, i + 1)
            if ctx.value(i) > ctx.value(i + 1):
                ctx.swap(i, i + 1, f"Swap index {i} and {i + 1}", i, i + 1)
                swapped = True
            ctx.set_states([i, i + 1], ElementState.DEFAULT)

        ctx.set_state(end, ElementState.SORTED)
        ctx.record(f"Position {end} sorted", [end], StepAction.SORT)
        end -= 1

        if not swapped:
            break

        swapped = False
        ctx.record(f"Backward pass {pass_no}", [], StepAction.SELECT)

        for i in range(end, start, -1):
            ctx.set_states([i - 1, i], ElementState.COMPARING)
            ctx.compare(f"Compare index {i - 1} and {i}", i - 1, i)
            if ctx.value(i - 1) > ctx.value(i):
                ctx.swap(i - 1, i, f"Swap index {i - 1} and {i}", i - 1, i)
                swapped = True
            ctx.set_states([i - 1, i], ElementState.DEFAULT)

        ctx.set_state(start, ElementState.SORTED)
        ctx.record(f"Position {start} sorted", [start], StepAction.SORT)
        start += 1
        pass_no += 1

    for i in range(start, end + 1):
        ctx.set_state(i, ElementState.SORTED)
        ctx.record(f"Index {i} sorted", [i], StepAction.SORT)
