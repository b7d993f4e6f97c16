"""
player.py — Auto-Play / Single-Step Playback
=============================================
The Player is the ONLY object the HTTP layer drives during a run.  It owns
the active stepper and decides who gets to call tick(): the scheduler
(auto-play) or the user (single step) — never both at once.

State machine:
    IDLE     →  load()                 →  PAUSED
    PAUSED   →  play()                 →  PLAYING
    PLAYING  →  pause() / step()       →  PAUSED
    PLAYING  →  (tick says stop)       →  FINISHED
    PAUSED   →  step() (tick says stop)→  FINISHED
    any      →  reset()                →  IDLE

Speed changes go to the scheduler's interval, so they apply from the next
scheduled tick; a tick already fired is never redone.

Thread safety:
  Not thread-safe.  The Flask app serialises calls with one lock.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

from structures.errors import InvalidInput
from algorithms.step import Tick, Step
from engine.scheduler import PollingScheduler

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlayerState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per tick)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,
    "turbo":  0.05,
}

MIN_INTERVAL = 0.02


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------
class Player:
    """
    Attributes:
        state     : Current PlayerState.
        stepper   : Active stepper (anything with tick() / snapshot() / done).
        interval  : Seconds between auto-play ticks.
        scheduler : Fires the auto-play callback.
        last_tick : Result of the most recent tick, or None.
        on_step   : Optional callback(Step) fired after every tick.
    """

    def __init__(
        self,
        scheduler: Optional[PollingScheduler] = None,
        speed: str = "medium",
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self.state:     PlayerState      = PlayerState.IDLE
        self.stepper:   Optional[Any]    = None
        self.scheduler: PollingScheduler = scheduler or PollingScheduler()
        self.interval:  float            = SPEED_PRESETS.get(speed, SPEED_PRESETS["medium"])
        self.last_tick: Optional[Tick]   = None
        self.on_step = on_step

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, stepper: Any) -> None:
        """Attach a freshly initialised stepper.  Any previous run is dropped."""
        self.scheduler.stop()
        self.stepper   = stepper
        self.last_tick = None
        self.state     = PlayerState.FINISHED if stepper.done else PlayerState.PAUSED
        log.info("loaded %r", stepper)

    def reset(self) -> None:
        """Back to IDLE — caller must load() again."""
        self.scheduler.stop()
        self.stepper   = None
        self.last_tick = None
        self.state     = PlayerState.IDLE

    # ------------------------------------------------------------------
    # Play / Pause / Step
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state != PlayerState.PAUSED:
            return
        self.state = PlayerState.PLAYING
        self.scheduler.start(self.interval, self._on_tick)

    def pause(self) -> None:
        if self.state != PlayerState.PLAYING:
            return
        self.scheduler.stop()
        self.state = PlayerState.PAUSED

    def step(self) -> Optional[Tick]:
        """Manual single step.  Stops auto-play first."""
        self.pause()
        if self.state != PlayerState.PAUSED:
            return None
        return self._advance()

    def poll(self, now: Optional[float] = None) -> bool:
        """Give the scheduler a chance to fire.  True if a tick ran."""
        return self.scheduler.poll(now)

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise InvalidInput(f"Unknown speed preset: {preset!r}")
        self.set_interval(SPEED_PRESETS[preset])

    def set_interval(self, seconds: float) -> None:
        self.interval = max(MIN_INTERVAL, seconds)
        self.scheduler.set_interval(self.interval)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        return self.stepper.snapshot() if self.stepper is not None else None

    @property
    def is_finished(self) -> bool:
        return self.state == PlayerState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == PlayerState.PLAYING

    def to_dict(self) -> dict:
        return {
            "state":    self.state.value,
            "interval": self.interval,
            "algo":     self.stepper.algo if self.stepper is not None else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _on_tick(self) -> None:
        self._advance()

    def _advance(self) -> Tick:
        tick = self.stepper.tick()
        self.last_tick = tick
        if not tick.proceed:
            self.scheduler.stop()
            self.state = PlayerState.FINISHED
            log.info("%s finished: %s", self.stepper.algo, self.stepper.status)
        if self.on_step is not None:
            self.on_step(self.stepper.snapshot())
        return tick
