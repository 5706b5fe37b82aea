"""
step.py — Sorting Step Snapshot
================================
Every sorting executor narrates its run as a list of Step objects.
A Step is a frozen-in-time picture of everything the visualizer needs
to render one frame:

    • The whole array (values, ids, per-element visual state)
    • Which positions are involved right now
    • What kind of event happened (compare / swap / select / sort / pivot)
    • For swaps, which two positions exchange and in which direction
    • Running comparison / swap counters
    • A plain-English message for the narration panel

Design decisions:
  - Step is a frozen dataclass and `array` is a tuple of frozen Elements,
    so a snapshot can never be disturbed by later mutation of the working
    array.  Full snapshots, not diffs.
  - A swap step shows the array BEFORE the exchange.  The playback layer
    commits the exchange once the swap animation has finished.
  - StepContext is the only writer.  One context per trace generation; it
    owns the working array and the counters for that run only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from elements import Element, ElementState


class StepAction(Enum):
    COMPARE = "compare"
    SWAP    = "swap"
    SELECT  = "select"
    SORT    = "sort"
    PIVOT   = "pivot"


@dataclass(frozen=True)
class SwapPair:
    """Positions exchanged by a swap step, in animation order."""

    from_index: int
    to_index:   int

    def to_dict(self) -> Dict[str, int]:
        return {"from": self.from_index, "to": self.to_index}


@dataclass(frozen=True)
class Stats:
    """
    Attributes:
        comparisons  : Running comparison count (never decreases).
        swaps        : Running swap count (never decreases).
        time_elapsed : Wall-clock ms since playback started.  Owned by the
                       controller; always 0 inside a freshly generated trace.
        progress     : Percent complete, back-filled after generation.
        current_step : 1-based position of the step in its trace.
        total_steps  : Final trace length.
    """

    comparisons:  int   = 0
    swaps:        int   = 0
    time_elapsed: float = 0.0
    progress:     float = 0.0
    current_step: int   = 0
    total_steps:  int   = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "comparisons":  self.comparisons,
            "swaps":        self.swaps,
            "time_elapsed": self.time_elapsed,
            "progress":     self.progress,
            "current_step": self.current_step,
            "total_steps":  self.total_steps,
        }


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        array     : Snapshot of every element at this moment.
        message   : Human-readable narration.
        indices   : Positions involved (first one drives the sound pitch).
        action    : StepAction.
        swap_pair : Exchanged positions for swap steps that animate, else None.
        stats     : Counter snapshot as of this step.
    """

    array:     Tuple[Element, ...]
    message:   str                 = ""
    indices:   Tuple[int, ...]     = ()
    action:    StepAction          = StepAction.SELECT
    swap_pair: Optional[SwapPair]  = None
    stats:     Stats               = field(default_factory=Stats)

    @property
    def values(self) -> List[float]:
        return [e.value for e in self.array]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "array":     [e.to_dict() for e in self.array],
            "message":   self.message,
            "indices":   list(self.indices),
            "action":    self.action.value,
            "swap_pair": self.swap_pair.to_dict() if self.swap_pair else None,
            "stats":     self.stats.to_dict(),
        }


# ---------------------------------------------------------------------------
# Per-run recorder handed to every executor
# ---------------------------------------------------------------------------
class StepContext:
    """
    Mutable scratch-pad that executors sort and narrate through.

    Usage inside an executor:
        ctx.set_state(j, ElementState.COMPARING)
        ctx.compare(f"Compare {a} vs {b}", j, j + 1)
        if ctx.value(j) > ctx.value(j + 1):
            ctx.swap(j, j + 1, "Swap ...")

    `compare` records first and then counts, `swap` records, exchanges, then
    counts: a step always shows the state just BEFORE its event.
    """

    def __init__(self, elements: Sequence[Element]):
        self.working:     List[Element] = list(elements)
        self.steps:       List[Step]    = []
        self.comparisons: int           = 0
        self.swaps:       int           = 0

    def __len__(self) -> int:
        return len(self.working)

    # -- reads --
    def value(self, idx: int) -> float:
        return self.working[idx].value

    def state(self, idx: int) -> ElementState:
        return self.working[idx].state

    # -- visual state --
    def set_state(self, idx: int, state: ElementState) -> None:
        self.working[idx] = self.working[idx].with_state(state)

    def set_states(self, indices: Sequence[int], state: ElementState) -> None:
        for idx in indices:
            self.set_state(idx, state)

    # -- recording --
    def record(
        self,
        message: str,
        indices: Sequence[int],
        action: StepAction,
        swap_pair: Optional[SwapPair] = None,
    ) -> Step:
        step = Step(
            array=tuple(self.working),
            message=message,
            indices=tuple(indices),
            action=action,
            swap_pair=swap_pair,
            stats=Stats(
                comparisons=self.comparisons,
                swaps=self.swaps,
                current_step=len(self.steps) + 1,
            ),
        )
        self.steps.append(step)
        return step

    def compare(self, message: str, i: int, j: int) -> None:
        self.record(message, [i, j], StepAction.COMPARE)
        self.comparisons += 1

    def swap(self, i: int, j: int, message: str, from_index: int, to_index: int) -> None:
        """Narrate, then exchange positions i and j.  Both are left SWAPPING."""
        self.set_state(i, ElementState.SWAPPING)
        self.set_state(j, ElementState.SWAPPING)
        self.record(message, [i, j], StepAction.SWAP, SwapPair(from_index, to_index))
        self.working[i], self.working[j] = self.working[j], self.working[i]
        self.swaps += 1

    def write(self, idx: int, element: Element) -> None:
        """Overwrite one slot (merge copy-back).  Not a swap."""
        self.working[idx] = element

    def mark_all_sorted(self, message_for=None) -> None:
        """
        Mark every element SORTED.  With `message_for(idx)` a `sort` step is
        recorded per index, otherwise the change is silent and shows up in
        the next recorded step.
        """
        for idx in range(len(self.working)):
            self.set_state(idx, ElementState.SORTED)
            if message_for is not None:
                self.record(message_for(idx), [idx], StepAction.SORT)
