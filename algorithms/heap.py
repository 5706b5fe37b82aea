"""
heap.py — Heap Sort
====================
Build a max-heap in place by sifting down from the last non-leaf, then
repeatedly swap the root behind the heap boundary and sift the new root
down the shrunken heap.

Each sift-down level compares the parent with its left child and, when it
exists, its right child before deciding on a swap.
"""

from typing import List

from elements import ElementState
from algorithms.step import StepAction, StepContext


PSEUDOCODE: List[str] = [
    "for i in n/2-1 .. 0: sift_down(i, n-1)",
    "for end in n-1 .. 1:",
    "    swap(a[0], a[end])",
    "    sift_down(0, end-1)",
]


def _swap_nodes(ctx: StepContext, i: int, j: int, message: str) -> None:
    ctx.swap(i, j, message, i, j)
    ctx.set_states([i, j], ElementState.DEFAULT)


def _sift_down(ctx: StepContext, start: int, end: int) -> None:
    root = start
    while root * 2 + 1 <= end:
        child = root * 2 + 1
        swap_index = root

        ctx.set_states([root, child], ElementState.COMPARING)
        ctx.compare(f"Compare parent {root} with left child {child}", root, child)
        if ctx.value(swap_index) < ctx.value(child):
            swap_index = child

        if child + 1 <= end:
            ctx.set_state(child + 1, ElementState.COMPARING)
            ctx.compare(f"Compare parent {root} with right child {child + 1}", root, child + 1)
            if ctx.value(swap_index) < ctx.value(child + 1):
                swap_index = child + 1
            ctx.set_state(child + 1, ElementState.DEFAULT)

        ctx.set_states([root, child], ElementState.DEFAULT)

        if swap_index == root:
            return

        _swap_nodes(ctx, root, swap_index, f"Swap node {root} with child {swap_index}")
        root = swap_index


def heap_sort(ctx: StepContext) -> None:
    length = len(ctx)

    ctx.record("Build max heap", [], StepAction.SELECT)
    for i in range(length // 2 - 1, -1, -1):
        _sift_down(ctx, i, length - 1)

    for end in range(length - 1, 0, -1):
        _swap_nodes(ctx, 0, end, f"Move max value to position {end}")
        ctx.set_state(end, ElementState.SORTED)
        ctx.record(f"Position {end} sorted", [end], StepAction.SORT)
        _sift_down(ctx, 0, end - 1)

    if length > 0:
        ctx.set_state(0, ElementState.SORTED)
        ctx.record("Final element sorted", [0], StepAction.SORT)
