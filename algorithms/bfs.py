"""
bfs.py — Breadth-First Search
==============================
BFS is the graph traversal stepper with a FIFO frontier: nodes are
expanded in the order they were discovered, so the walk spreads out
layer by layer from the start node.

Pseudocode lines are 0-indexed and match the line numbers in
traversal.GraphTraversal.RULES so the UI can highlight them live.
"""

from typing import List, Optional

from graph import Graph
from algorithms.step import Pseudocode
from algorithms.traversal import GraphTraversal, Frontier


TITLE = "Breadth-First Search (BFS)"

# ---------------------------------------------------------------------------
# Pseudocode — index 0 is the title header added by Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "Put START in the queue and mark it visited.",        # 1
    "While the queue is not empty:",                      # 2
    "    Take the front node out (call it u).",           # 3
    "    For each neighbour v of u (ascending):",         # 4
    "        If v is new, mark it visited and enqueue v.",  # 5
    "When the queue is empty, we are done.",              # 6
]


def bfs(graph: Graph, start: Optional[int] = None) -> GraphTraversal:
    """
    Build a BFS stepper over `graph`.

    Args:
        graph : The graph to walk.
        start : If given, the stepper is initialised at this node right away.
    """
    walker = GraphTraversal(graph, Frontier.QUEUE, "bfs", Pseudocode(TITLE, PSEUDOCODE))
    if start is not None:
        walker.init(start)
    return walker
