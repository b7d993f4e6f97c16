"""
recorder.py — Run Recorder & Analytics
========================================
Drives a stepper to completion without any timer, keeping the Step
snapshot after every tick, then computes the numbers the analytics card
shows.

Usage:
    rec = Recorder()
    rec.start("bfs", graph, start=0)
    metrics = rec.run_to_completion()
    rec.export()                     # serialisable snapshot for replay

Comparison Mode:
    Two Recorders run on copies of the SAME model, then
    compare(rec1, rec2) → ComparisonResult.
"""

import logging
import sys
import time
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any

from structures.errors import InvalidInput
from algorithms import get_algorithm, AlgoInfo
from algorithms.step import Step

log = logging.getLogger(__name__)

# upper bound on ticks for one recorded run
MAX_TICKS = 100_000


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analytics card renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    kind:          str   = ""
    total_ticks:   int   = 0          # ticks that did work
    nodes_visited: int   = 0          # graph ids / tree keys / list indices
    order:         List[int] = field(default_factory=list)
    max_depth:     int   = 0          # tallest frame stack (tree walks only)
    final_status:  str   = ""
    finished:      bool  = False      # reached a terminal phase within MAX_TICKS
    wall_time_ms:  float = 0.0
    memory_bytes:  int   = 0          # approx size of the snapshot buffer


@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_ticks: str  = ""   # which run needed fewer ticks
    same_order:   bool = False


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Step after every tick, preceded by the initial snapshot.
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The stepper being driven.
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Any]        = None

        self._algo_info: Optional[AlgoInfo] = None
        self._params:    Dict[str, Any]     = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, model: Any, **params: Any) -> None:
        """Build the stepper for `algo_key` over `model`."""
        info = get_algorithm(algo_key)
        if info is None:
            raise InvalidInput(f"Unknown algorithm: {algo_key}")
        missing = [p for p in info.params if p not in params]
        if missing:
            raise InvalidInput(f"{info.label} needs: {', '.join(missing)}")

        self._algo_info = info
        self._params    = {p: params[p] for p in info.params}
        self.steps      = []
        self.metrics    = None
        self.stepper    = info.factory(model, *(params[p] for p in info.params))

    def run_to_completion(self) -> RunMetrics:
        """Tick until the stepper stops, record every Step, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        t0 = time.monotonic()
        self.steps = [self.stepper.snapshot()]
        for _ in range(MAX_TICKS):
            tick = self.stepper.tick()
            self.steps.append(self.stepper.snapshot())
            if not tick.proceed:
                break
        else:
            log.warning("%s did not finish within %d ticks", self._algo_info.key, MAX_TICKS)

        wall_ms = (time.monotonic() - t0) * 1000
        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "params":   dict(self._params),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None

        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            kind=info.kind,
            total_ticks=last.tick if last else 0,
            nodes_visited=len(last.visited) if last else 0,
            order=list(last.order) if last else [],
            max_depth=last.overlay.get("max_depth", 0) if last else 0,
            final_status=last.status if last else "",
            finished=bool(last and last.is_final),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    if l.total_ticks == r.total_ticks:
        winner = "tie"
    else:
        winner = l.algo_label if l.total_ticks < r.total_ticks else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_ticks=winner,
        same_order=l.order == r.order,
    )
