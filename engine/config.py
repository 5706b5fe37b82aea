"""
config.py — Run Configuration
==============================
Everything the user can set from the control panel, as one frozen value.
The engine reads it and never mutates it; a change produces a new
SortingConfig via `with_changes`.
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional

from elements import ValidationError


# ---------------------------------------------------------------------------
# Speed presets (slider positions, 1 = slowest, 100 = fastest)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   10,     # teaching mode
    "medium": 50,
    "fast":   80,     # demo mode
    "turbo":  100,
}

MIN_STEP_DELAY_MS = 50
START_DELAY_MS    = 10

VISUALIZATION_MODES = {
    "bars":    "Bar Chart",
    "circles": "Bubble Diagram",
    "lines":   "Line Graph",
    "matrix":  "Grid View",
}


def step_delay_ms(speed: int) -> int:
    """Pause between auto-advanced steps.  Faster speed, shorter pause, floor 50 ms."""
    return max(MIN_STEP_DELAY_MS, 1100 - int(speed) * 10)


def _clamp(field: str, value: Any, lo: int, hi: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a whole number, got {value!r}") from None
    return max(lo, min(hi, number))


@dataclass(frozen=True)
class SortingConfig:
    array_size:         int           = 30
    speed:              int           = 50
    animation_speed:    int           = 300      # ms a swap animation lasts
    algorithm:          str           = "bubble"
    variant:            Optional[str] = None
    visualization_mode: str           = "bars"
    color_theme:        str           = "default"
    step_by_step:       bool          = False
    sound_enabled:      bool          = True

    @property
    def step_delay_ms(self) -> int:
        return step_delay_ms(self.speed)

    def with_changes(self, **changes: Any) -> "SortingConfig":
        """Return a copy with `changes` applied.  Unknown keys are ignored, numbers clamped."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in changes.items() if k in known}

        if "speed" in changes and isinstance(changes["speed"], str):
            changes["speed"] = SPEED_PRESETS.get(changes["speed"], SPEED_PRESETS["medium"])
        if "array_size" in changes:
            changes["array_size"] = _clamp("array_size", changes["array_size"], 1, 500)
        if "speed" in changes:
            changes["speed"] = _clamp("speed", changes["speed"], 1, 100)
        if "animation_speed" in changes:
            changes["animation_speed"] = _clamp("animation_speed", changes["animation_speed"], 50, 2000)
        if "visualization_mode" in changes and changes["visualization_mode"] not in VISUALIZATION_MODES:
            changes.pop("visualization_mode")
        for flag in ("step_by_step", "sound_enabled"):
            if flag in changes:
                changes[flag] = bool(changes[flag])

        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
