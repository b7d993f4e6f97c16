"""
step.py — Tick Result, Step Snapshot & Pseudocode Listing
==========================================================
Every stepper exposes two things to the outside world:

    tick()      → Tick      "should the scheduler keep going, and which
                             pseudocode line is executing"
    snapshot()  → Step      a frozen-in-time picture of everything the
                             renderer needs to draw one frame

Design decisions:
  - Step is a plain frozen dataclass.  It is a SNAPSHOT: the stepper is
    the only writer, renderers and the HTTP layer are pure readers.
  - Fields that don't apply to a stepper kind stay at their empty default
    (a list search has no `frontier`, a BFS has no `output`).
  - `overlay` is a free-form dict so each stepper can push extra info
    (path index, delete stage, frame stack, …).
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any, Tuple


@dataclass(frozen=True)
class Tick:
    """
    Attributes:
        proceed : False once the stepper has reached a terminal state (or
                  has nothing to do).  The scheduler stops on False.
        line    : 0-based index of the pseudocode line to highlight.
    """

    proceed: bool
    line:    int


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind            : "graph", "tree" or "list".
        algo            : Registry key of the running algorithm.
        phase           : Name of the phase the stepper is now in.
        tick            : Number of ticks executed so far.
        current         : Node id / tree key / list index being worked on.
        visited         : Graph ids or tree keys marked visited, in marking order.
        frontier        : Graph frontier contents, front/bottom first.
        order           : Graph expansion order, or tree-walk output.
        parent          : {node_id: predecessor or None} for graph traversals.
        last_edge       : (u, v) most recently traversed graph edge.
        path            : Tree keys along the precomputed path revealed so far.
        pseudocode_line : Line to highlight.
        status          : Human-readable status ("Found at index 1", …).
        is_final        : True once the stepper is terminal.
        overlay         : Free-form, per-stepper extras.
    """

    kind:            str                         = ""
    algo:            str                         = ""
    phase:           str                         = ""
    tick:            int                         = 0
    current:         Optional[int]               = None
    visited:         List[int]                   = field(default_factory=list)
    frontier:        List[int]                   = field(default_factory=list)
    order:           List[int]                   = field(default_factory=list)
    parent:          Dict[int, Optional[int]]    = field(default_factory=dict)
    last_edge:       Optional[Tuple[int, int]]   = None
    path:            List[int]                   = field(default_factory=list)
    pseudocode_line: int                         = 0
    status:          str                         = ""
    is_final:        bool                        = False
    overlay:         Dict[str, Any]              = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # JSON object keys must be strings
        data["parent"] = {str(k): v for k, v in self.parent.items()}
        return data


# ---------------------------------------------------------------------------
# Pseudocode listing — the "dry run" side panel
# ---------------------------------------------------------------------------
class Pseudocode:
    """
    Ordered list of display lines with one selected line.

    Line 0 is always the "// Title" comment header, so the first executable
    line is 1 — matching how the listings below number their lines.
    Selecting an index outside the listing is ignored.
    """

    def __init__(self, title: str, lines: List[str]):
        self.title: str = title
        self.lines: List[str] = [f"// {title}"] + list(lines)
        self.selected: int = 0

    def select(self, index: int) -> None:
        if 0 <= index < len(self.lines):
            self.selected = index

    @property
    def current(self) -> str:
        return self.lines[self.selected]

    def as_list(self) -> List[str]:
        return list(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]

    def __repr__(self) -> str:
        return f"Pseudocode({self.title!r}, lines={len(self.lines)}, selected={self.selected})"
