from typing import Dict, Any


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Dense integer identity plus a canvas position.

    Attributes:
        id   : Position of the node in Graph.nodes.  Reassigned by the graph
               whenever a lower-numbered node is deleted.
        x, y : Canvas coordinates (pixel — the renderer decides scale).

    Traversal state (visited, parent, …) deliberately does NOT live here:
    it belongs to the stepper that is walking the graph, so a reset is just
    "throw the stepper away".
    """

    __slots__ = ("id", "x", "y")

    def __init__(self, node_id: int, x: float = 0.0, y: float = 0.0):
        self.id: int  = node_id
        self.x: float = x
        self.y: float = y

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y}

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, pos=({self.x:.1f},{self.y:.1f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
