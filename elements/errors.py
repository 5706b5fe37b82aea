"""
errors.py — Error Taxonomy
===========================
Three failure families, all local to the core:

    ConfigurationError  – unknown algorithm / variant id.  Fatal to trace
                          generation; never yields a partial trace.
    ValidationError     – malformed custom input.  Rejected before
                          generation; the caller keeps its previous array.
    SequencingError     – a playback command arrived in a phase where it is
                          illegal (double-clicks, stale UI).  The controller
                          names it but never lets it escape.
"""


class SortVizError(Exception):
    """Base class for every error raised by the visualizer core."""


class ConfigurationError(SortVizError, ValueError):
    def __init__(self, algorithm: str, variant=None, reason: str = ""):
        self.algorithm = algorithm
        self.variant   = variant
        detail = reason or "not implemented"
        super().__init__(
            f'Sorting algorithm "{algorithm}" (variant: {variant or "default"}) {detail}.'
        )


class ValidationError(SortVizError, ValueError):
    pass


class SequencingError(SortVizError, RuntimeError):
    def __init__(self, command: str, phase):
        self.command = command
        self.phase   = phase
        super().__init__(f"'{command}' is not allowed while {getattr(phase, 'value', phase)}")
