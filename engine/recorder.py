"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete sorting run (the whole Trace), then computes the
analytics the Stats panel and Comparison Mode need.

Usage:
    rec = Recorder()
    metrics = rec.run([64, 34, 25, 12], "merge", "bottomUp")
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    POST /api/compare holds two Recorders (one per algorithm), runs both on
    the SAME array, then calls compare(rec1, rec2) → ComparisonResult.
"""

import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from numbers import Number
from typing import Any, Dict, Optional, Sequence, Union

from elements import Element
from algorithms import get_variant_label
from algorithms.step import StepAction
from engine.generator import Trace, generate_trace

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Stats panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm:       str   = ""
    variant:         str   = ""
    label:           str   = ""         # display name incl. variant
    variant_label:   str   = ""
    array_length:    int   = 0
    comparisons:     int   = 0
    swaps:           int   = 0
    total_steps:     int   = 0
    compare_steps:   int   = 0
    swap_steps:      int   = 0          # includes merge write-backs
    narration_steps: int   = 0          # select / sort / pivot
    wall_time_ms:    float = 0.0        # time spent generating the trace
    memory_bytes:    int   = 0          # approx size of the step buffer
    sorted_output:   bool  = False


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str  = ""   # which algo compared less
    winner_swaps:       str  = ""
    winner_steps:       str  = ""
    same_output:        bool = False


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        trace   : Trace of the last run.
        metrics : Computed RunMetrics (available after run()).
    """

    def __init__(self):
        self.trace:   Optional[Trace]      = None
        self.metrics: Optional[RunMetrics] = None

    def run(
        self,
        array: Sequence[Union[Element, Number]],
        algorithm: str,
        variant: Optional[str] = None,
    ) -> RunMetrics:
        """Generate the full trace for `array` and compute its metrics."""
        start = time.perf_counter()
        self.trace = generate_trace(array, algorithm, variant)
        wall_ms = (time.perf_counter() - start) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "Recorded %s: %d comparisons, %d swaps, %d steps",
            self.metrics.label, self.metrics.comparisons, self.metrics.swaps, self.metrics.total_steps,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        if self.trace is None:
            return {"algorithm": "", "variant": "", "initial": [], "metrics": {}, "steps": []}
        return {
            "algorithm": self.trace.algorithm,
            "variant":   self.trace.variant,
            "initial":   [e.to_dict() for e in self.trace.initial],
            "metrics":   asdict(self.metrics) if self.metrics else {},
            "steps":     [s.to_dict() for s in self.trace],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        trace = self.trace
        last  = trace.final.stats

        actions = [s.action for s in trace]
        compare_steps = actions.count(StepAction.COMPARE)
        swap_steps    = actions.count(StepAction.SWAP)

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(trace.steps)
        for s in trace:
            mem += sys.getsizeof(s) + sys.getsizeof(s.array)

        values = trace.final.values
        return RunMetrics(
            algorithm=trace.algorithm,
            variant=trace.variant,
            label=trace.name,
            variant_label=get_variant_label(trace.algorithm, trace.variant) or "",
            array_length=len(trace.initial),
            comparisons=last.comparisons,
            swaps=last.swaps,
            total_steps=len(trace),
            compare_steps=compare_steps,
            swap_steps=swap_steps,
            narration_steps=len(trace) - compare_steps - swap_steps,
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            sorted_output=all(a <= b for a, b in zip(values, values[1:])),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    same_output = (
        left.trace is not None
        and right.trace is not None
        and left.trace.final.values == right.trace.final.values
    )

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.label, r.label),
        winner_swaps      =winner(l.swaps, r.swaps, l.label, r.label),
        winner_steps      =winner(l.total_steps, r.total_steps, l.label, r.label),
        same_output=same_output,
    )
