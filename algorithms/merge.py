"""
merge.py — Merge Sort (top-down & bottom-up)
=============================================
Two variants sharing one merge routine:

  topDown  – recursive halving, merge on the way back up
  bottomUp – iterative, block size doubles every round; no recursion

Each merge compares the heads of the two runs one pair at a time into an
auxiliary buffer, then copies the merged block back in a single
swap-tagged step.  Copy-back is a block write, not an exchange, so it
carries no swap pair and leaves the swap counter alone.

The top-down split puts the largest power of two below the range size on
the left.  That is the same merge tree bottom-up builds, so both variants
perform exactly the same comparisons on the same input.
"""

from typing import List

from elements import Element, ElementState
from algorithms.step import StepAction, StepContext


PSEUDOCODE: List[str] = [
    "merge(lo, mid, hi):",
    "    i ← lo, j ← mid+1",
    "    while i <= mid and j <= hi:",
    "        take the smaller head into aux",
    "    append the leftovers",
    "    copy aux[lo..hi] back",
]


def _merge(ctx: StepContext, aux: List[Element], left: int, mid: int, right: int) -> None:
    ctx.record(f"Merge ranges [{left}, {mid}] and [{mid + 1}, {right}]", [left, right], StepAction.SELECT)

    i, j, k = left, mid + 1, left
    while i <= mid and j <= right:
        ctx.set_states([i, j], ElementState.COMPARING)
        ctx.compare(
            f"Compare {ctx.value(i)} (index {i}) with {ctx.value(j)} (index {j})",
            i, j,
        )

        if ctx.value(i) <= ctx.value(j):
            aux[k] = ctx.working[i].with_state(ElementState.DEFAULT)
            ctx.set_state(i, ElementState.DEFAULT)
            i += 1
        else:
            aux[k] = ctx.working[j].with_state(ElementState.DEFAULT)
            ctx.set_state(j, ElementState.DEFAULT)
            j += 1
        k += 1

    while i <= mid:
        aux[k] = ctx.working[i].with_state(ElementState.DEFAULT)
        i += 1
        k += 1

    while j <= right:
        aux[k] = ctx.working[j].with_state(ElementState.DEFAULT)
        j += 1
        k += 1

    for idx in range(left, right + 1):
        ctx.write(idx, aux[idx].with_state(ElementState.SWAPPING))
    ctx.record(f"Merged section [{left}, {right}]", [left, right], StepAction.SWAP)

    ctx.set_states(range(left, right + 1), ElementState.DEFAULT)


def _split_point(left: int, right: int) -> int:
    """Last index of the left run: largest power of two below the range size."""
    size = right - left + 1
    half = 1
    while half * 2 < size:
        half *= 2
    return left + half - 1


def merge_sort_top_down(ctx: StepContext) -> None:
    aux = list(ctx.working)

    def sort(left: int, right: int) -> None:
        if left >= right:
            return
        mid = _split_point(left, right)
        sort(left, mid)
        sort(mid + 1, right)
        _merge(ctx, aux, left, mid, right)

    sort(0, len(ctx) - 1)
    ctx.mark_all_sorted(lambda idx: f"Index {idx} in order")


def merge_sort_bottom_up(ctx: StepContext) -> None:
    n   = len(ctx)
    aux = list(ctx.working)

    size = 1
    while size < n:
        for left in range(0, n - size, size * 2):
            mid   = left + size - 1
            right = min(left + size * 2 - 1, n - 1)
            _merge(ctx, aux, left, mid, right)
        size *= 2

    ctx.mark_all_sorted(lambda idx: f"Index {idx} in order")
