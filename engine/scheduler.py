"""
scheduler.py — Tick Scheduling
===============================
The player never sleeps or spawns threads.  It hands a callback to a
scheduler and the scheduler decides when to fire it.

    start(interval, on_tick)   begin firing on_tick every `interval` seconds
    stop()                     stop firing
    set_interval(interval)     takes effect from the next fire

PollingScheduler is the default: the host loop (a browser polling
/api/tick, a test, a GUI timer) calls poll(now) as often as it likes and
the callback fires when enough time has passed since the last fire.
"""

import time
from typing import Callable, Optional


class PollingScheduler:
    """
    Attributes:
        interval : Seconds between fires.
        running  : Whether start() is in effect.
        clock    : Time source; time.monotonic unless injected.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.interval: float = 0.0
        self.running:  bool  = False
        self.clock = clock
        self._on_tick: Optional[Callable[[], None]] = None
        self._last:    float = 0.0

    def start(self, interval: float, on_tick: Callable[[], None]) -> None:
        self.interval = interval
        self._on_tick = on_tick
        self._last    = self.clock()
        self.running  = True

    def stop(self) -> None:
        self.running  = False
        self._on_tick = None

    def set_interval(self, interval: float) -> None:
        self.interval = interval

    def poll(self, now: Optional[float] = None) -> bool:
        """Fire at most once.  Returns True if the callback ran."""
        if not self.running or self._on_tick is None:
            return False
        now = self.clock() if now is None else now
        if now - self._last < self.interval:
            return False
        self._last = now
        self._on_tick()
        return True
