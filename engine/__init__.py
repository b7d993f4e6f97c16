"""
engine/
-------
Playback, recording & undo layer.

    from engine import Player, Recorder, History, compare
"""

from structures.errors import InvalidInput
from engine.scheduler import PollingScheduler
from engine.player    import Player, PlayerState, SPEED_PRESETS, MIN_INTERVAL
from engine.recorder  import Recorder, RunMetrics, ComparisonResult, compare
from engine.history   import History, HISTORY_CAPACITY

__all__ = [
    "InvalidInput",
    "PollingScheduler",
    "Player",
    "PlayerState",
    "SPEED_PRESETS",
    "MIN_INTERVAL",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "History",
    "HISTORY_CAPACITY",
]
