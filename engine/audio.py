"""
audio.py — Sound Cues
======================
The engine does not make noise; it tells a listener what it would like to
hear.  Pitch follows the value of the first element a step touches so a
sort "sounds" its data.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from algorithms.step import Step, StepAction


COMPARE_BASE_HZ     = 400
SWAP_BASE_HZ        = 600
COMPARE_DURATION_MS = 120
COMPLETE_HZ         = 880
COMPLETE_DURATION_MS = 300


@dataclass(frozen=True)
class SoundCue:
    kind:        str      # "compare" | "swap" | "complete"
    frequency:   float
    duration_ms: int
    waveform:    str      # oscillator type for a Web Audio style synth

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":        self.kind,
            "frequency":   self.frequency,
            "duration_ms": self.duration_ms,
            "waveform":    self.waveform,
        }


def _base_value(step: Step) -> float:
    if step.indices and 0 <= step.indices[0] < len(step.array):
        return step.array[step.indices[0]].value
    return 0


def cue_for_step(step: Step, animation_speed_ms: int) -> Optional[SoundCue]:
    """Cue for a compare or swap step, None for narration steps."""
    if step.action is StepAction.COMPARE:
        return SoundCue("compare", COMPARE_BASE_HZ + _base_value(step), COMPARE_DURATION_MS, "sine")
    if step.action is StepAction.SWAP:
        return SoundCue("swap", SWAP_BASE_HZ + _base_value(step), animation_speed_ms, "square")
    return None


def completion_cue() -> SoundCue:
    return SoundCue("complete", COMPLETE_HZ, COMPLETE_DURATION_MS, "triangle")
