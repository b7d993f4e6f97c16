"""
edge.py — Graph Edge
====================
Connects two nodes by their integer ids.

Design decisions:
  - `u` and `v` are node ids, NOT Node references.  Deleting a node
    renumbers every higher id, so edges are rebuilt through `remapped()`
    rather than patched in place.
  - An undirected edge is always stored canonically as (min, max, False).
    Build them through `Edge.make()` and two undirected edges over the same
    pair compare (and hash) equal — the graph's edge dict relies on that to
    keep at most one edge per unordered pair.
  - Edges are immutable value objects: no visual state, no meta.  The
    stepper records the "last traversed" edge itself.
"""

from typing import Dict, Any, Tuple


class Edge:
    """
    Attributes:
        u        : Tail node id (smaller id when undirected).
        v        : Head node id.
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("u", "v", "directed")

    def __init__(self, u: int, v: int, directed: bool = False):
        self.u:        int  = u
        self.v:        int  = v
        self.directed: bool = directed

    @classmethod
    def make(cls, u: int, v: int, directed: bool) -> "Edge":
        """Build an edge, canonicalising the endpoint order when undirected."""
        if directed:
            return cls(u, v, True)
        return cls(min(u, v), max(u, v), False)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def key(self) -> Tuple[int, int, bool]:
        return (self.u, self.v, self.directed)

    @property
    def pair(self) -> Tuple[int, int]:
        """Unordered endpoint pair, smaller id first."""
        return (min(self.u, self.v), max(self.u, self.v))

    def touches(self, node_id: int) -> bool:
        return self.u == node_id or self.v == node_id

    def remapped(self, removed: int) -> "Edge":
        """Endpoints renumbered after node `removed` was deleted."""
        nu = self.u - 1 if self.u > removed else self.u
        nv = self.v - 1 if self.v > removed else self.v
        return Edge.make(nu, nv, self.directed)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"u": self.u, "v": self.v, "directed": self.directed}

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.u}{arrow}{self.v})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)
