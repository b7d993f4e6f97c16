"""
dfs.py — Depth-First Search
=============================
DFS is the graph traversal stepper with a LIFO frontier: the most
recently admitted node is expanded next, so the walk dives deep before
backtracking.

Nodes are marked visited when pushed (not when popped), so no node is
ever on the stack twice.  The resulting order is that of the classic
iterative stack DFS, which can differ from recursive DFS — the two
explore siblings in different orders.
"""

from typing import List, Optional

from graph import Graph
from algorithms.step import Pseudocode
from algorithms.traversal import GraphTraversal, Frontier


TITLE = "Depth-First Search (DFS) — stack version"

PSEUDOCODE: List[str] = [
    "Put START on the stack and mark it visited.",        # 1
    "While the stack is not empty:",                      # 2
    "    Pop the top node (call it u).",                  # 3
    "    For each neighbour v of u (ascending):",         # 4
    "        If v is new, mark it visited and push v.",   # 5
    "When the stack is empty, we are done.",              # 6
]


def dfs(graph: Graph, start: Optional[int] = None) -> GraphTraversal:
    """Build a DFS stepper over `graph`, initialised at `start` if given."""
    walker = GraphTraversal(graph, Frontier.STACK, "dfs", Pseudocode(TITLE, PSEUDOCODE))
    if start is not None:
        walker.init(start)
    return walker
