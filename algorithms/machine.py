"""
machine.py — Generic Phase Machine
===================================
BFS, DFS, the tree walk, the BST steppers and the list search are all the
same trick: a loop or a recursion turned inside out so that "where was I"
lives in an explicit `phase` instead of the interpreter's call stack.
Each of them is this class plus a transition table.

    RULES = {
        Phase.LOOP_CHECK: Rule(line=2, effect="_loop_check"),
        ...
        Phase.DONE:       Rule(line=6),            # terminal: no effect
    }

tick():
    • phase has no rule (idle, never initialised)  → no-op, Tick(False)
    • phase is terminal                            → no-op, Tick(False)
    • stepper is stale (model edited under it)     → no-op, Tick(False)
    • otherwise: highlight the rule's line, run the effect once, move to
      the phase it returns.  Landing on a terminal phase reports
      Tick(False) straight away so the scheduler stops on that tick.

An effect performs exactly one unit of work and may re-select the line
(e.g. "go left" vs "go right").  A terminal rule with `line=None` keeps
whatever line the final effect selected.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Any

from algorithms.step import Tick, Step, Pseudocode

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    line:   Optional[int]
    effect: Optional[str] = None     # method name; None marks a terminal phase

    @property
    def terminal(self) -> bool:
        return self.effect is None


class PhaseMachine:
    """
    Attributes:
        algo       : Registry key ("bfs", "bst_delete", …).
        pseudocode : The listing this stepper highlights.
        phase      : Current phase (an Enum member).
        status     : Human-readable status line.
        ticks      : Ticks that did work.
        rules      : {phase: Rule} — defaults to the class-level RULES.
    """

    KIND:  str = ""
    IDLE:  Optional[Enum] = None
    RULES: Dict[Enum, Rule] = {}

    def __init__(self, algo: str, pseudocode: Pseudocode):
        self.algo:       str        = algo
        self.pseudocode: Pseudocode = pseudocode
        self.phase:      Optional[Enum] = self.IDLE
        self.status:     str        = "Ready."
        self.ticks:      int        = 0
        self.rules:      Dict[Enum, Rule] = dict(self.RULES)

    # ------------------------------------------------------------------
    # The one entry point schedulers call
    # ------------------------------------------------------------------
    def tick(self) -> Tick:
        rule = self.rules.get(self.phase)
        if rule is None or rule.terminal or not self.ready():
            return Tick(False, self.line)

        if rule.line is not None:
            self.pseudocode.select(rule.line)
        nxt = getattr(self, rule.effect)()
        self.ticks += 1
        log.debug("%s tick %d: %s → %s (line %d)", self.algo, self.ticks,
                  _name(self.phase), _name(nxt), self.line)
        self.phase = nxt

        after = self.rules.get(nxt)
        if after is not None and after.terminal:
            if after.line is not None:
                self.pseudocode.select(after.line)
            log.info("%s finished after %d ticks: %s", self.algo, self.ticks, self.status)
            return Tick(False, self.line)
        return Tick(True, self.line)

    def ready(self) -> bool:
        """Hook: return False (and set a status) when the model moved underneath."""
        return True

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def line(self) -> int:
        return self.pseudocode.selected

    @property
    def done(self) -> bool:
        rule = self.rules.get(self.phase)
        return rule is not None and rule.terminal

    def snapshot(self) -> Step:
        return self._step()

    def _step(self, **fields: Any) -> Step:
        """Base snapshot; subclasses pass their own fields through."""
        return Step(
            kind=self.KIND,
            algo=self.algo,
            phase=_name(self.phase),
            tick=self.ticks,
            pseudocode_line=self.line,
            status=self.status,
            is_final=self.done,
            **fields,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(algo={self.algo}, phase={_name(self.phase)}, ticks={self.ticks})"


def _name(phase: Optional[Enum]) -> str:
    return phase.name if phase is not None else ""
