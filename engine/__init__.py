"""
engine/
-------
Trace generation, playback & recording layer.

    from engine import generate_trace, PlaybackController, Recorder, compare
"""

from engine.config     import SortingConfig, SPEED_PRESETS, VISUALIZATION_MODES, step_delay_ms
from engine.scheduler  import Scheduler
from engine.generator  import Trace, generate_trace, finalize_stats
from engine.audio      import SoundCue, cue_for_step, completion_cue
from engine.controller import PlaybackController, PlaybackView, Phase
from engine.recorder   import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "SortingConfig",
    "SPEED_PRESETS",
    "VISUALIZATION_MODES",
    "step_delay_ms",
    "Scheduler",
    "Trace",
    "generate_trace",
    "finalize_stats",
    "SoundCue",
    "cue_for_step",
    "completion_cue",
    "PlaybackController",
    "PlaybackView",
    "Phase",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
