"""
traversal.py — Graph Traversal Stepper (BFS / DFS)
===================================================
One phase machine drains a frontier one micro-step at a time.  The only
difference between BFS and DFS is which end of the frontier EXPAND takes
from: the front (FIFO queue) or the top (LIFO stack).

    LOOP_CHECK      frontier empty?                 → DONE | EXPAND
    EXPAND          take a node, append to order,
                    snapshot its sorted neighbours  → NEIGHBOR_LOOP
    NEIGHBOR_LOOP   neighbours left?                → LOOP_CHECK | NEIGHBOR_TEST
    NEIGHBOR_TEST   unvisited → admit it            → NEIGHBOR_ADMIT
                    visited   → skip it             → NEIGHBOR_LOOP
    NEIGHBOR_ADMIT  advance the neighbour cursor    → NEIGHBOR_LOOP

Design decisions:
  - A node is marked visited when it is ADMITTED (pushed / enqueued), not
    when it is expanded.  That keeps any node from sitting in the frontier
    twice, for DFS as much as for BFS.
  - Neighbours are sorted ascending at expansion, so the visit order does
    not depend on edge insertion order.
  - The stepper remembers `graph.revision` from init().  Any graph edit
    after that makes it inert; the caller must init() again.
"""

import logging
from collections import deque
from enum import Enum
from typing import Deque, Dict, List, Optional, Set, Tuple

from graph import Graph
from algorithms.machine import PhaseMachine, Rule
from algorithms.step import Step, Pseudocode

log = logging.getLogger(__name__)


class Phase(Enum):
    INIT           = "init"
    LOOP_CHECK     = "loop_check"
    EXPAND         = "expand"
    NEIGHBOR_LOOP  = "neighbor_loop"
    NEIGHBOR_TEST  = "neighbor_test"
    NEIGHBOR_ADMIT = "neighbor_admit"
    DONE           = "done"


class Frontier(Enum):
    QUEUE = "queue"    # BFS: expand from the front
    STACK = "stack"    # DFS: expand from the top


class GraphTraversal(PhaseMachine):
    """
    Attributes:
        graph      : The graph being walked (read-only for this stepper).
        kind       : Frontier.QUEUE or Frontier.STACK.
        start      : Start node id of the current run (None before init).
        frontier   : Admitted-but-not-expanded node ids.
        visited    : Node ids in admission order.
        parent     : {node_id: predecessor id or None}.
        order      : Node ids in expansion order (append-only).
        current    : Node being expanded.
        neighbours : Sorted neighbour snapshot of `current`.
        cursor     : Index into `neighbours`.
        last_edge  : (current, v) of the most recent admission.
    """

    KIND = "graph"
    IDLE = Phase.INIT
    RULES = {
        Phase.LOOP_CHECK:     Rule(2, "_loop_check"),
        Phase.EXPAND:         Rule(3, "_expand"),
        Phase.NEIGHBOR_LOOP:  Rule(4, "_neighbor_loop"),
        Phase.NEIGHBOR_TEST:  Rule(5, "_neighbor_test"),
        Phase.NEIGHBOR_ADMIT: Rule(5, "_neighbor_admit"),
        Phase.DONE:           Rule(6),
    }

    def __init__(self, graph: Graph, kind: Frontier, algo: str, pseudocode: Pseudocode):
        super().__init__(algo, pseudocode)
        self.graph: Graph    = graph
        self.kind:  Frontier = kind
        self.start: Optional[int] = None
        self._revision: int  = -1
        self._clear()

    def _clear(self) -> None:
        self.frontier:   Deque[int]               = deque()
        self.visited:    List[int]                = []
        self._seen:      Set[int]                 = set()
        self.parent:     Dict[int, Optional[int]] = {}
        self.order:      List[int]                = []
        self.current:    Optional[int]            = None
        self.neighbours: List[int]                = []
        self.cursor:     int                      = 0
        self.last_edge:  Optional[Tuple[int, int]] = None
        self.ticks = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init(self, start: int) -> bool:
        """Reset everything and admit `start`.  False (and inert) if it doesn't exist."""
        self._clear()
        self.phase = Phase.INIT
        self.pseudocode.select(0)
        self.start = start
        if self.graph.node_count() == 0:
            self.status = "The graph is empty."
            return False
        if not self.graph.has_node(start):
            self.status = f"Start node {start} does not exist."
            return False

        self._revision = self.graph.revision
        self.parent = {nid: None for nid in self.graph.node_ids()}
        self._admit(start, None)
        self.current = start
        self.pseudocode.select(1)
        self.phase = Phase.LOOP_CHECK
        self.status = f"Start at node {start}."
        log.info("%s initialised at node %d on %r", self.algo, start, self.graph)
        return True

    def ready(self) -> bool:
        if self.graph.revision != self._revision:
            self.status = "The graph changed — run again to restart."
            return False
        return True

    # ------------------------------------------------------------------
    # Phase effects
    # ------------------------------------------------------------------
    def _loop_check(self) -> Phase:
        if not self.frontier:
            self.current = None
            self.status = f"Done. Order: {self.order}"
            return Phase.DONE
        return Phase.EXPAND

    def _expand(self) -> Phase:
        if self.kind is Frontier.QUEUE:
            node = self.frontier.popleft()
        else:
            node = self.frontier.pop()
        self.current = node
        self.order.append(node)
        self.neighbours = self.graph.sorted_neighbours(node)
        self.cursor = 0
        self.status = f"Expand node {node}."
        return Phase.NEIGHBOR_LOOP

    def _neighbor_loop(self) -> Phase:
        if self.cursor >= len(self.neighbours):
            return Phase.LOOP_CHECK
        return Phase.NEIGHBOR_TEST

    def _neighbor_test(self) -> Phase:
        v = self.neighbours[self.cursor]
        if v in self._seen:
            self.status = f"Neighbour {v} already visited — skip."
            self.cursor += 1
            return Phase.NEIGHBOR_LOOP
        self._admit(v, self.current)
        self.last_edge = (self.current, v)
        self.status = f"Neighbour {v} is new — mark visited and add it to the {self.kind.value}."
        return Phase.NEIGHBOR_ADMIT

    def _neighbor_admit(self) -> Phase:
        self.cursor += 1
        return Phase.NEIGHBOR_LOOP

    def _admit(self, node: int, parent: Optional[int]) -> None:
        self._seen.add(node)
        self.visited.append(node)
        self.parent[node] = parent
        self.frontier.append(node)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def is_visited(self, node: int) -> bool:
        return node in self._seen

    def path_to(self, node: int) -> List[int]:
        """Start → node along parent pointers.  Empty if node wasn't reached."""
        if node not in self._seen:
            return []
        path: List[int] = []
        cur: Optional[int] = node
        while cur is not None:
            path.append(cur)
            cur = self.parent.get(cur)
        path.reverse()
        return path

    def snapshot(self) -> Step:
        return self._step(
            current=self.current,
            visited=list(self.visited),
            frontier=list(self.frontier),
            order=list(self.order),
            parent=dict(self.parent),
            last_edge=self.last_edge,
            overlay={
                self.kind.value: list(self.frontier),
                "start":         self.start,
                "neighbours":    list(self.neighbours),
                "cursor":        self.cursor,
            },
        )
