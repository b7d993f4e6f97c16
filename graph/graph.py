"""
graph.py — Graph Container
===========================
Single source of truth for the graph.  Steppers and the renderer both
talk to this object.

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get)
  2. Adjacency queries                      (neighbours, sorted_neighbours)
  3. Orientation toggle                     (undirected ↔ directed)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Node ids are dense integers: `nodes[i].id == i` always holds.  Deleting
    node k shifts every higher id down by one and remaps the edges with it.
  - `edges` is an insertion-ordered dict keyed by Edge.key, so iteration is
    stable and canonical undirected edges dedupe themselves.
  - `_adj[node_id] → [neighbour_id, …]` is NEVER edited directly; it is
    rebuilt from `edges` after every structural change so it can't drift.
  - `revision` increments on every structural change.  A stepper remembers
    the revision it was initialised against and goes inert when it moves,
    so stale ids fail predictably instead of pointing at the wrong node.
"""

import logging
import math
import random
from typing import Dict, List, Optional, Any

from graph.node import Node
from graph.edge import Edge
from structures.errors import InvalidInput

log = logging.getLogger(__name__)

# Upper bound on node count for every way a graph can grow (add, import, undo).
MAX_NODES = 500


class Graph:
    """
    Attributes:
        nodes    : [Node] — index == id
        edges    : {(u, v, directed): Edge}
        directed : bool – graph-level directedness; every edge agrees with it
        revision : int  – bumped on every structural change
        _adj     : {node_id: [neighbour_id, …]}
    """

    def __init__(self, directed: bool = False):
        self.nodes:    List[Node]      = []
        self.edges:    Dict[tuple, Edge] = {}
        self.directed: bool            = directed
        self.revision: int             = 0
        self._adj:     Dict[int, List[int]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, x: float = 0.0, y: float = 0.0) -> Node:
        if len(self.nodes) >= MAX_NODES:
            raise InvalidInput(f"A graph holds at most {MAX_NODES} nodes")
        node = Node(len(self.nodes), x, y)
        self.nodes.append(node)
        self._rebuild_adjacency()
        return node

    def remove_node(self, node_id: int) -> bool:
        """
        Delete node `node_id` and renumber.

        Incident edges go first, then every id above `node_id` drops by one
        and the surviving edges are remapped by the same rule before the
        adjacency is rebuilt.
        """
        if not self.has_node(node_id):
            return False
        survivors = [e for e in self.edges.values() if not e.touches(node_id)]
        del self.nodes[node_id]
        for i in range(node_id, len(self.nodes)):
            self.nodes[i].id = i
        self.edges = {}
        for e in survivors:
            moved = e.remapped(node_id)
            self.edges.setdefault(moved.key, moved)
        self._rebuild_adjacency()
        log.info("removed node %d; %d nodes remain", node_id, len(self.nodes))
        return True

    def has_node(self, node_id: int) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self.nodes)

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes[node_id] if self.has_node(node_id) else None

    def move_node(self, node_id: int, x: float, y: float) -> None:
        """Position-only change; ids and adjacency are untouched."""
        node = self.get_node(node_id)
        if node is not None:
            node.x, node.y = x, y

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, u: int, v: int) -> Optional[Edge]:
        """
        Add u→v (or u↔v).  Self-loops, unknown endpoints and duplicates are
        ignored — returns None in those cases.
        """
        if u == v or not self.has_node(u) or not self.has_node(v):
            return None
        edge = Edge.make(u, v, self.directed)
        if edge.key in self.edges:
            return None
        self.edges[edge.key] = edge
        self._rebuild_adjacency()
        return edge

    def remove_edge(self, u: int, v: int) -> bool:
        key = Edge.make(u, v, self.directed).key
        if key not in self.edges:
            return False
        del self.edges[key]
        self._rebuild_adjacency()
        return True

    def has_edge(self, u: int, v: int) -> bool:
        return Edge.make(u, v, self.directed).key in self.edges

    def edge_list(self) -> List[Edge]:
        return list(self.edges.values())

    # ==================================================================
    # ORIENTATION
    # ==================================================================
    def set_directed(self, directed: bool, rng: Optional[random.Random] = None) -> None:
        """
        Toggle graph orientation.

        undirected → directed : every edge gets a coin-flip orientation
        directed → undirected : edges over the same unordered pair merge into
                                one canonical edge, first occurrence wins

        `rng` defaults to the unseeded module generator, so toggling is
        neither deterministic nor reversible unless the caller passes one.
        """
        if directed == self.directed:
            return
        coin = rng or random
        merged: Dict[tuple, Edge] = {}
        for e in self.edges.values():
            if directed:
                nxt = Edge(e.u, e.v, True) if coin.random() < 0.5 else Edge(e.v, e.u, True)
            else:
                nxt = Edge.make(e.u, e.v, False)
            merged.setdefault(nxt.key, nxt)
        self.directed = directed
        self.edges = merged
        self._rebuild_adjacency()
        log.info("graph is now %s with %d edges", "directed" if directed else "undirected", len(self.edges))

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: int) -> List[int]:
        """Neighbour ids in adjacency (edge-insertion) order."""
        return list(self._adj.get(node_id, []))

    def sorted_neighbours(self, node_id: int) -> List[int]:
        return sorted(self._adj.get(node_id, []))

    def adjacency(self) -> Dict[int, List[int]]:
        return {k: list(v) for k, v in self._adj.items()}

    def _rebuild_adjacency(self) -> None:
        adj: Dict[int, List[int]] = {n.id: [] for n in self.nodes}
        for e in self.edges.values():
            adj[e.u].append(e.v)
            if not e.directed:
                adj[e.v].append(e.u)
        self._adj = adj
        self.revision += 1

    # ==================================================================
    # RESET
    # ==================================================================
    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self._rebuild_adjacency()

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Graph":
        """
        Bulk build: nodes are renumbered densely in id order, then edges with
        a self-loop, an unknown endpoint or a duplicate key are dropped.  The
        adjacency is rebuilt once at the end.
        """
        g = cls(directed=bool(data.get("directed", False)))
        raw_nodes = sorted(data.get("nodes", []), key=lambda d: int(d["id"]))
        if len(raw_nodes) > MAX_NODES:
            raise InvalidInput(f"A graph holds at most {MAX_NODES} nodes")
        g.nodes = [Node(i, nd.get("x", 0.0), nd.get("y", 0.0)) for i, nd in enumerate(raw_nodes)]
        g._bulk_edges((int(ed["u"]), int(ed["v"])) for ed in data.get("edges", []))
        return g

    def _bulk_edges(self, pairs) -> None:
        n = len(self.nodes)
        for u, v in pairs:
            if u == v or not (0 <= u < n and 0 <= v < n):
                continue
            edge = Edge.make(u, v, self.directed)
            self.edges.setdefault(edge.key, edge)
        self._rebuild_adjacency()

    def restore(self, data: Dict[str, Any]) -> None:
        """Replace this graph's contents in place (undo support)."""
        other = Graph.from_dict(data)
        self.nodes    = other.nodes
        self.edges    = other.edges
        self.directed = other.directed
        self._rebuild_adjacency()

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        directed: bool = False,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse a simple text adjacency list with integer node ids.

        Supported formats (one node per line):
            0: 1 2 3            → 0 connects to 1, 2, 3
            0 → 1,2,3           → alternate arrow syntax
            0 -> 1, 2

        Ids must be non-negative integers; the graph gets nodes 0..max id
        (so ids stay dense) laid out on a circle.
        """
        adjacency: Dict[int, List[int]] = {}

        for raw in text.strip().splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                parts = [line, ""]

            src = _parse_id(parts[0])
            adjacency.setdefault(src, [])
            for token in parts[1].replace(",", " ").split():
                tgt = _parse_id(token)
                adjacency.setdefault(tgt, [])
                adjacency[src].append(tgt)

        g = cls(directed=directed)
        if not adjacency:
            return g

        n = max(adjacency) + 1
        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        g.nodes = [
            Node(i, cx + radius * math.cos(2 * math.pi * i / n), cy + radius * math.sin(2 * math.pi * i / n))
            for i in range(n)
        ]
        g._bulk_edges((src, tgt) for src, targets in adjacency.items() for tgt in targets)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[int]:
        return [n.id for n in self.nodes]

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"


def _parse_id(token: str) -> int:
    token = token.strip()
    try:
        value = int(token)
    except ValueError:
        raise InvalidInput(f"Node id must be an integer, got {token!r}") from None
    if value < 0:
        raise InvalidInput(f"Node id must be non-negative, got {value}")
    if value >= MAX_NODES:
        raise InvalidInput(f"Node id must be below {MAX_NODES}, got {value}")
    return value
