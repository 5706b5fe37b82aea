"""
shell.py — Shell Sort (Ciura & Knuth gap sequences)
====================================================
Gapped insertion sort over a fixed, strictly decreasing gap sequence that
ends at 1.  Gaps not smaller than the array length are skipped.

  ciura – 701, 301, 132, 57, 23, 10, 4, 1
  knuth – (3^k - 1) / 2 for k = 2..10, largest first, then 1
"""

from typing import Callable, List, Sequence

from elements import ElementState
from algorithms.step import StepAction, StepContext


PSEUDOCODE: List[str] = [
    "for gap in gaps (gap < n):",
    "    for i in gap .. n-1:",
    "        j ← i",
    "        while j >= gap and a[j-gap] > a[j]:",
    "            swap(a[j-gap], a[j]); j ← j - gap",
]

CIURA_GAPS = (701, 301, 132, 57, 23, 10, 4, 1)


def knuth_gaps(max_k: int = 10) -> List[int]:
    return [(3 ** k - 1) // 2 for k in range(max_k, 1, -1)] + [1]


def shell_sort_with_gaps(gaps: Sequence[int]) -> Callable[[StepContext], None]:
    """Build a shell-sort executor bound to one gap sequence."""

    def shell_sort(ctx: StepContext) -> None:
        n = len(ctx)
        for gap in [g for g in gaps if 0 < g < n]:
            ctx.record(f"Gap {gap}: gapped insertion sort", [], StepAction.SELECT)

            for i in range(gap, n):
                j = i
                ctx.set_state(i, ElementState.CURRENT)
                ctx.record(f"Insert index {i} (value {ctx.value(i)})", [i], StepAction.SELECT)

                while j >= gap:
                    ctx.set_state(j - gap, ElementState.COMPARING)
                    ctx.compare(
                        f"Compare index {j - gap} ({ctx.value(j - gap)}) with index {j} ({ctx.value(j)})",
                        j - gap, j,
                    )
                    if ctx.value(j - gap) <= ctx.value(j):
                        ctx.set_state(j - gap, ElementState.DEFAULT)
                        break

                    ctx.swap(j - gap, j, f"Swap index {j} and {j - gap}", j - gap, j)
                    ctx.set_state(j, ElementState.DEFAULT)
                    j -= gap

                ctx.set_states([j, i], ElementState.DEFAULT)

        ctx.mark_all_sorted(lambda idx: f"Index {idx} sorted")

    return shell_sort


shell_sort_ciura = shell_sort_with_gaps(CIURA_GAPS)
shell_sort_knuth = shell_sort_with_gaps(knuth_gaps())
