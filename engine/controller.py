"""
controller.py — Playback Controller
====================================
The PlaybackController is the ONLY object the presentation layer talks to
during a run.  It owns the input array, the current Trace, the cursor into
it and the auto-advance timer, and exposes the play / pause / step / reset
API plus the "what should be on screen right now" view.

State machine:
    IDLE       →  prepare()          →  READY
    IDLE/READY →  start()            →  PLAYING
    PLAYING    →  pause()/toggle()   →  PAUSED
    PAUSED     →  resume()/toggle()  →  PLAYING
    PLAYING    →  (trace exhausted)  →  COMPLETED
    READY/PAUSED → step_forward()    →  PAUSED (or COMPLETED at the end)
    any        →  reset()            →  IDLE   (fresh random array)

Auto-advance:
    After applying step N the controller schedules step N+1 on its
    Scheduler.  Something outside (web polling loop, timer, test) must call
    tick().  Swap steps pause the chain: the visible array keeps its
    pre-swap order until the presentation calls acknowledge_swap() once the
    swap animation is done.

Commands that arrive in the wrong phase (double clicks, stale buttons) are
SequencingErrors: logged and ignored, never raised.

Thread safety:
  This class is NOT thread-safe.  Drive it from one thread / event loop.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Number
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from elements import (
    Element,
    ElementState,
    SequencingError,
    ValidationError,
    create_random_array,
    elements_from_values,
    parse_custom_array,
)
from algorithms import display_name, get_default_variant, require_algorithm
from algorithms.step import Stats, Step, StepAction, SwapPair
from engine.audio import SoundCue, completion_cue, cue_for_step
from engine.config import START_DELAY_MS, SortingConfig
from engine.generator import Trace, generate_trace
from engine.scheduler import Scheduler

logger = logging.getLogger(__name__)

READY_MESSAGE = "Ready to sort"


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------
class Phase(Enum):
    IDLE      = "idle"        # no trace
    READY     = "ready"       # trace generated, cursor = 0
    PLAYING   = "playing"     # auto-advancing
    PAUSED    = "paused"
    COMPLETED = "completed"   # cursor = len(trace)


# ---------------------------------------------------------------------------
# View — everything the presentation layer reads
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PlaybackView:
    phase:        Phase
    array:        List[Element]
    message:      str
    stats:        Stats
    cursor:       int
    total_steps:  int
    pending_swap: Optional[SwapPair]
    name:         str
    config:       SortingConfig

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase":        self.phase.value,
            "array":        [e.to_dict() for e in self.array],
            "message":      self.message,
            "stats":        self.stats.to_dict(),
            "cursor":       self.cursor,
            "total_steps":  self.total_steps,
            "pending_swap": self.pending_swap.to_dict() if self.pending_swap else None,
            "name":         self.name,
            "config":       self.config.to_dict(),
        }


ArraySource = Callable[[int], List[Element]]


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        config       : Current SortingConfig (replaced, never mutated).
        scheduler    : Deferred-callback scheduler driving auto-advance.
        phase        : Current Phase.
        trace        : Current Trace, or None in IDLE.
        cursor       : Number of trace steps applied so far (0..len(trace)).
        array        : Array currently on screen.
        message      : Narration currently on screen.
        stats        : Stats currently on screen.
        pending_swap : Swap announced but not yet acknowledged, or None.
        on_step      : Optional callback(PlaybackView) fired on every visible change.
        on_swap      : Optional callback(SwapPair) fired when a swap should animate.
        on_sound     : Optional callback(SoundCue) fired when sound is enabled.
        on_notify    : Optional callback(level, message) for toasts.
    """

    def __init__(
        self,
        config: Optional[SortingConfig] = None,
        scheduler: Optional[Scheduler] = None,
        array_source: Optional[ArraySource] = None,
        array: Optional[Sequence[Union[Element, Number]]] = None,
        on_step:   Optional[Callable[[PlaybackView], None]] = None,
        on_swap:   Optional[Callable[[SwapPair], None]]     = None,
        on_sound:  Optional[Callable[[SoundCue], None]]     = None,
        on_notify: Optional[Callable[[str, str], None]]     = None,
    ):
        self.config:       SortingConfig      = config or SortingConfig()
        self.scheduler:    Scheduler          = scheduler or Scheduler()
        self.array_source: ArraySource        = array_source or create_random_array
        self.on_step   = on_step
        self.on_swap   = on_swap
        self.on_sound  = on_sound
        self.on_notify = on_notify

        self.phase:        Phase              = Phase.IDLE
        self.trace:        Optional[Trace]    = None
        self.cursor:       int                = 0
        self.input_array:  List[Element]      = []
        self.array:        List[Element]      = []
        self.message:      str                = READY_MESSAGE
        self.stats:        Stats              = Stats()
        self.pending_swap: Optional[SwapPair] = None

        self._start_time:  Optional[float]    = None

        if array is not None:
            self.load_array(array)
        else:
            self.generate_array()

    # ------------------------------------------------------------------
    # Array source
    # ------------------------------------------------------------------
    def generate_array(self, size: Optional[int] = None, message: Optional[str] = None) -> None:
        """Replace the input with a fresh random array and drop the trace."""
        if size is not None:
            self.config = self.config.with_changes(array_size=size)
        elements = self.array_source(self.config.array_size)
        logger.info("Generated random array of %d elements", len(elements))
        self.load_array(
            elements,
            message or f"Array generated with {len(elements)} elements. Ready to sort.",
        )

    def load_array(self, values: Sequence[Union[Element, Number]], message: Optional[str] = None) -> None:
        values = list(values)
        if all(isinstance(v, Element) for v in values):
            elements = [v.with_state(ElementState.DEFAULT) for v in values]
        else:
            elements = elements_from_values(v.value if isinstance(v, Element) else v for v in values)
        self.input_array = elements
        self._discard_trace(message or f"Array loaded with {len(elements)} elements. Ready to sort.")

    def load_custom(self, text: str) -> bool:
        """
        Load a user-typed list.  On ValidationError the previous array stays,
        an error is notified and False is returned.
        """
        try:
            elements = parse_custom_array(text)
        except ValidationError as exc:
            logger.warning("Rejected custom array %r: %s", text, exc)
            self._notify("error", str(exc))
            return False

        self.config = self.config.with_changes(array_size=len(elements))
        self.load_array(elements, f"Custom array loaded with {len(elements)} elements. Ready to sort.")
        self._notify("success", f"Generated array with {len(elements)} elements")
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def prepare(self) -> Trace:
        """Generate the trace for the current array and config.  IDLE → READY."""
        self.scheduler.cancel()
        trace = generate_trace(self.input_array, self.config.algorithm, self.config.variant)

        self.trace        = trace
        self.cursor       = 0
        self.pending_swap = None
        self.array        = list(self.input_array)
        self.stats        = Stats(total_steps=len(trace))
        self.message      = f"Starting {trace.name}"
        self._set_phase(Phase.READY)
        self._emit()
        return trace

    def start(self) -> bool:
        if self.phase is Phase.COMPLETED:
            self._notify("info", "Algorithm already completed! Click Reset to start over.")
            return self._reject("start")
        if self.phase not in (Phase.IDLE, Phase.READY):
            return self._reject("start")

        if self.trace is None:
            self.prepare()
        if not len(self.trace):
            self._notify("error", "Unable to generate steps for the selected algorithm.")
            return False

        self._start_time = self._clock()
        self._set_phase(Phase.PLAYING)
        logger.info("Playback started: %s on %d elements", self.trace.name, len(self.input_array))
        self._notify("success", f"{self.trace.name} started!")
        self.scheduler.schedule(START_DELAY_MS, self._advance)
        return True

    def pause(self) -> bool:
        if self.phase is not Phase.PLAYING:
            return self._reject("pause")
        self.scheduler.cancel()
        self._set_phase(Phase.PAUSED)
        self.message = f"Paused at step {self.cursor}/{self.stats.total_steps}"
        self._notify("info", "Paused")
        self._emit()
        return True

    def resume(self) -> bool:
        if self.phase is not Phase.PAUSED or self._remaining() <= 0:
            return self._reject("resume")
        if self._start_time is None:
            self._start_time = self._clock()
        self._set_phase(Phase.PLAYING)
        # an unacknowledged swap resumes the chain from acknowledge_swap()
        if self.pending_swap is None:
            self.scheduler.schedule(START_DELAY_MS, self._advance)
        return True

    def toggle(self) -> bool:
        """The single play/pause button."""
        if self.phase is Phase.PLAYING:
            return self.pause()
        if self.phase is Phase.PAUSED and self._remaining() > 0:
            return self.resume()
        if self.phase is Phase.COMPLETED:
            self._notify("info", "Algorithm already completed! Click Reset to start over.")
            return self._reject("toggle")
        return self.start()

    def reset(self) -> None:
        """Cancel everything, draw a fresh random array.  → IDLE."""
        self.scheduler.cancel()
        size = self.config.array_size
        name = display_name(self.config.algorithm, self.config.variant)
        self.generate_array(size, f"Reset complete. Array size: {size}, Algorithm: {name}")
        self._notify("success", "Reset complete")

    # ------------------------------------------------------------------
    # Manual stepping
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        if self.phase in (Phase.PLAYING, Phase.COMPLETED):
            return self._reject("step_forward")
        if self.trace is None:
            self.prepare()
        if self._remaining() <= 0:
            return self._reject("step_forward")

        self.scheduler.cancel()
        step = self.trace[self.cursor]
        self.cursor += 1
        if self._remaining() > 0:
            self._set_phase(Phase.PAUSED)
        self._apply(step)

        if self._remaining() <= 0:
            self._finish()
        return True

    def step_backward(self) -> bool:
        if self.phase is Phase.PLAYING or self.trace is None or self.cursor <= 0:
            return self._reject("step_backward")

        self.scheduler.cancel()
        self.cursor -= 1
        self.pending_swap = None

        if self.cursor == 0:
            self.array   = list(self.input_array)
            self.message = READY_MESSAGE
            self.stats   = Stats(total_steps=len(self.trace))
        else:
            previous = self.trace[self.cursor - 1]
            self.array   = list(previous.array)
            self.message = previous.message
            self.stats   = previous.stats

        self._set_phase(Phase.PAUSED)
        self._emit()
        return True

    # ------------------------------------------------------------------
    # Presentation callbacks
    # ------------------------------------------------------------------
    def acknowledge_swap(self, cursor: Optional[int] = None) -> bool:
        """
        The swap animation finished: commit the exchange and carry on.

        ``cursor`` is the cursor the presentation saw when the swap was
        announced.  An acknowledgement for any other step is stale and
        ignored, so a late duplicate cannot commit the next swap early.
        """
        pair = self.pending_swap
        if pair is None:
            return self._reject("acknowledge_swap")
        if cursor is not None and cursor != self.cursor:
            return self._reject(f"acknowledge_swap(cursor={cursor}, pending at {self.cursor})")

        array = list(self.array)
        array[pair.from_index], array[pair.to_index] = array[pair.to_index], array[pair.from_index]
        self.array = array
        self.pending_swap = None
        self._emit()

        if self.phase is Phase.PLAYING:
            if self.config.step_by_step:
                self._set_phase(Phase.PAUSED)
                self._emit()
            else:
                self.scheduler.schedule(self.config.step_delay_ms, self._advance)
        return True

    def tick(self) -> bool:
        """Drive auto-advance once.  Returns True if a step was taken."""
        return self.scheduler.tick()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_algorithm(self, algorithm: str, variant: Optional[str] = None) -> None:
        info = require_algorithm(algorithm)
        if variant is None or variant not in info.executors:
            variant = get_default_variant(algorithm)
        self.scheduler.cancel()
        self.config = self.config.with_changes(algorithm=algorithm, variant=variant)
        self._discard_trace(f"Algorithm changed to {display_name(algorithm, variant)}. Ready to sort.")

    def set_variant(self, variant: Optional[str]) -> None:
        info = require_algorithm(self.config.algorithm)
        if variant is not None and variant not in info.executors:
            variant = get_default_variant(self.config.algorithm)
        if variant == self.config.variant:
            return
        self.scheduler.cancel()
        self.config = self.config.with_changes(variant=variant)
        self._discard_trace(
            f"Variant changed to {display_name(self.config.algorithm, variant)}. Ready to sort."
        )

    def set_speed(self, speed: Union[int, str]) -> None:
        self.config = self.config.with_changes(speed=speed)

    def set_step_mode(self, enabled: bool) -> None:
        self.config = self.config.with_changes(step_by_step=enabled)

    def set_array_size(self, size: int) -> None:
        new_config = self.config.with_changes(array_size=size)
        if new_config.array_size == self.config.array_size and self.input_array:
            return
        self.generate_array(
            new_config.array_size,
            f"Array size updated to {new_config.array_size}. Ready to sort.",
        )

    def update_config(self, **changes: Any) -> SortingConfig:
        """Apply a partial config update the way the control panel sends it."""
        algorithm = changes.pop("algorithm", None)
        has_variant = "variant" in changes
        variant = changes.pop("variant", None)
        size = changes.pop("array_size", None)

        if algorithm is not None and algorithm != self.config.algorithm:
            self.set_algorithm(algorithm, variant)
        elif has_variant:
            self.set_variant(variant)

        if size is not None:
            self.set_array_size(size)

        if changes:
            self.config = self.config.with_changes(**changes)
        return self.config

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def total_steps(self) -> int:
        return len(self.trace) if self.trace is not None else 0

    @property
    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.COMPLETED

    @property
    def current_step(self) -> Optional[Step]:
        if self.trace is not None and 0 < self.cursor <= len(self.trace):
            return self.trace[self.cursor - 1]
        return None

    def view(self) -> PlaybackView:
        return PlaybackView(
            phase=self.phase,
            array=list(self.array),
            message=self.message,
            stats=self.stats,
            cursor=self.cursor,
            total_steps=self.total_steps,
            pending_swap=self.pending_swap,
            name=display_name(self.config.algorithm, self.config.variant),
            config=self.config,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _advance(self) -> None:
        """Scheduled callback: apply the next step and line up the one after."""
        if self.phase is not Phase.PLAYING or self.trace is None:
            return
        if self._remaining() <= 0:
            self._finish()
            return

        step = self.trace[self.cursor]
        self.cursor += 1
        self._apply(step)

        if self._remaining() <= 0:
            self._finish()
            return
        if self.pending_swap is not None:
            return
        if self.config.step_by_step:
            self._set_phase(Phase.PAUSED)
            self._emit()
            return
        self.scheduler.schedule(self.config.step_delay_ms, self._advance)

    def _apply(self, step: Step) -> None:
        self.array   = list(step.array)
        self.message = step.message
        self.stats   = replace(step.stats, time_elapsed=self._elapsed_ms())
        self.pending_swap = (
            step.swap_pair if step.action is StepAction.SWAP and step.swap_pair is not None else None
        )
        self._emit()

        if self.pending_swap is not None and self.on_swap:
            self.on_swap(self.pending_swap)
        cue = cue_for_step(step, self.config.animation_speed)
        if cue is not None:
            self._sound(cue)

    def _finish(self) -> None:
        self.scheduler.cancel()
        elapsed = self._elapsed_ms()
        final   = self.trace[-1].stats
        self.stats = replace(final, time_elapsed=elapsed)
        self.message = (
            f"{self.trace.name} completed! {final.comparisons} comparisons, "
            f"{final.swaps} swaps, {elapsed / 1000:.1f}s"
        )
        self._start_time = None
        self._set_phase(Phase.COMPLETED)
        logger.info("Playback completed: %s", self.message)
        self._sound(completion_cue())
        self._notify("success", self.message)
        self._emit()

    def _discard_trace(self, message: str) -> None:
        self.scheduler.cancel()
        self.trace        = None
        self.cursor       = 0
        self.pending_swap = None
        self.array        = list(self.input_array)
        self.stats        = Stats()
        self.message      = message
        self._start_time  = None
        self._set_phase(Phase.IDLE)
        self._emit()

    def _remaining(self) -> int:
        return self.total_steps - self.cursor

    def _clock(self) -> float:
        return self.scheduler.clock()

    def _elapsed_ms(self) -> float:
        if self._start_time is None:
            return 0.0
        return (self._clock() - self._start_time) * 1000.0

    def _set_phase(self, phase: Phase) -> None:
        if phase is not self.phase:
            logger.debug("Phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def _reject(self, command: str) -> bool:
        logger.debug("Ignored: %s", SequencingError(command, self.phase))
        return False

    def _emit(self) -> None:
        if self.on_step:
            self.on_step(self.view())

    def _sound(self, cue: SoundCue) -> None:
        if self.config.sound_enabled and self.on_sound:
            self.on_sound(cue)

    def _notify(self, level: str, message: str) -> None:
        if self.on_notify:
            self.on_notify(level, message)
