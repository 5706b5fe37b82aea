"""
scheduler.py — Cancellable Deferred Callback
=============================================
Auto-advance never sleeps or spawns threads.  The controller asks the
scheduler to run one callback after a delay; an external driver (the web
app's polling loop, a desktop timer, a test) calls `tick()` and the
callback fires once its due time has passed.

At most one callback is pending.  Scheduling a new one replaces the old
one, `cancel()` simply forgets it.

    sched = Scheduler()
    sched.schedule(200, controller.advance)
    ...
    sched.tick()        # call every ~20-50 ms
"""

import time
from typing import Callable, Optional


class Scheduler:
    """
    Attributes:
        clock : Callable returning seconds (monotonic).  Injected in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._callback: Optional[Callable[[], None]] = None
        self._due_at:   float = 0.0

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._due_at   = self.clock() + max(0.0, delay_ms) / 1000.0

    def cancel(self) -> None:
        self._callback = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    @property
    def due_in_ms(self) -> Optional[float]:
        if self._callback is None:
            return None
        return max(0.0, (self._due_at - self.clock()) * 1000.0)

    def tick(self) -> bool:
        """Fire the pending callback if it is due.  Returns True if it fired."""
        if self._callback is None or self.clock() < self._due_at:
            return False
        callback, self._callback = self._callback, None
        callback()
        return True
