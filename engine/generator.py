"""
generator.py — Trace Generator
===============================
Turns (input array, algorithm, variant) into a finished, immutable Trace.

    trace = generate_trace([5, 3, 8, 1], "bubble")
    trace[-1].values          # [1, 3, 5, 8]
    trace[-1].stats.swaps     # 4

Pipeline:
  1. copy the input into a private working array (states reset)
  2. resolve the executor for (algorithm, variant)
  3. record "Starting …", run the executor, record "… completed! …"
  4. back-fill current_step / total_steps / progress on every step

Generation is synchronous and all-or-nothing: a configuration error
raises before any step is produced.
"""

import logging
from dataclasses import dataclass, replace
from numbers import Number, Real
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

from elements import Element, ElementState, ValidationError
from algorithms import display_name, get_executor, resolve_variant
from algorithms.step import Step, StepAction, StepContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Trace:
    """
    Attributes:
        algorithm : Registry key that produced the trace.
        variant   : Resolved variant key ("default" for single-variant algorithms).
        name      : Display name used in narration, e.g. "Merge Sort (Bottom-up (iterative))".
        initial   : Input array as handed to the executor (all states default).
        steps     : Finalized steps.
    """

    algorithm: str
    variant:   str
    name:      str
    initial:   Tuple[Element, ...]
    steps:     Tuple[Step, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, idx):
        return self.steps[idx]

    @property
    def final(self) -> Step:
        return self.steps[-1]


def _check_value(idx: int, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"Value at index {idx} is not a number: {value!r}")
    if value < 0:
        raise ValidationError(f"Value at index {idx} is negative: {value!r}")


def _prepare_input(array: Sequence[Union[Element, Number]]) -> List[Element]:
    working: List[Element] = []
    for idx, item in enumerate(array):
        if isinstance(item, Element):
            _check_value(idx, item.value)
            working.append(item.with_state(ElementState.DEFAULT))
        else:
            _check_value(idx, item)
            working.append(Element(value=item, id=idx))
    return working


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def finalize_stats(steps: Sequence[Step]) -> Tuple[Step, ...]:
    total = len(steps)
    return tuple(
        replace(
            step,
            stats=replace(
                step.stats,
                current_step=idx + 1,
                total_steps=total,
                progress=((idx + 1) / total) * 100 if total > 0 else 0.0,
            ),
        )
        for idx, step in enumerate(steps)
    )


def generate_trace(
    array: Sequence[Union[Element, Number]],
    algorithm: str,
    variant: Optional[str] = None,
) -> Trace:
    """
    Run one instrumented sort and return its finalized Trace.

    Raises:
        ConfigurationError – unknown algorithm, or no executor for the variant.
        ValidationError    – a value is negative or not a number.
    """
    variant_key = resolve_variant(algorithm, variant)
    executor    = get_executor(algorithm, variant_key)
    name        = display_name(algorithm, variant_key)

    working = _prepare_input(array)
    initial = tuple(working)
    ctx     = StepContext(working)

    ctx.record(f"Starting {name}", [], StepAction.SELECT)
    executor(ctx)
    ctx.record(
        f"{name} completed! {_plural(ctx.swaps, 'swap')}, {_plural(ctx.comparisons, 'comparison')}",
        [], StepAction.SORT,
    )

    steps = finalize_stats(ctx.steps)
    logger.debug(
        "Generated %d steps for %s on %d elements (%d comparisons, %d swaps)",
        len(steps), name, len(initial), ctx.comparisons, ctx.swaps,
    )
    return Trace(algorithm=algorithm, variant=variant_key, name=name, initial=initial, steps=steps)
