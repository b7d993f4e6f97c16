"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every stepper the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, kind, factory, pseudocode, params, …),
        …
    }

Every factory takes the model for its `kind` first (Graph, BinaryTree or
LinkedList) followed by the names in `params`, and returns an initialised
stepper exposing tick() / snapshot().  Adding an algorithm is: write the
stepper, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional

# ---------------------------------------------------------------------------
# Import all stepper modules
# ---------------------------------------------------------------------------
from algorithms.bfs       import bfs as _bfs, PSEUDOCODE as _bfs_pc
from algorithms.dfs       import dfs as _dfs, PSEUDOCODE as _dfs_pc
from algorithms.tree_walk import inorder, preorder, postorder, listing, Order
from algorithms.bst_ops   import (
    bst_search, bst_insert, bst_delete,
    SEARCH_PSEUDOCODE as _bst_search_pc,
    INSERT_PSEUDOCODE as _bst_insert_pc,
    DELETE_PSEUDOCODE as _bst_delete_pc,
)
from algorithms.list_ops  import (
    list_search, list_insert, list_remove,
    SEARCH_PSEUDOCODE as _list_search_pc,
    INSERT_PSEUDOCODE as _list_insert_pc,
    REMOVE_PSEUDOCODE as _list_remove_pc,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each stepper
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    kind:             str                    # "graph" | "tree" | "list"
    factory:          Callable               # model, *params → stepper
    pseudocode:       List[str]              # lines for the side-panel
    params:           List[str] = field(default_factory=list)   # e.g. ["start"]
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str      = ""          # e.g. "O(V + E)"
    complexity_space: str      = ""          # e.g. "O(V)"
    description:      str      = ""          # one-liner for the UI card

    def to_dict(self) -> Dict[str, object]:
        return {
            "key": self.key, "label": self.label, "kind": self.kind,
            "params": list(self.params), "tags": list(self.tags),
            "pseudocode": list(self.pseudocode),
            "complexity_time": self.complexity_time,
            "complexity_space": self.complexity_space,
            "description": self.description,
        }


def _walk_lines(order: Order) -> List[str]:
    return listing(order).as_list()[1:]


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", kind="graph",
        factory=_bfs, pseudocode=_bfs_pc, params=["start"],
        tags=["traversal", "queue"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer from the start node.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", kind="graph",
        factory=_dfs, pseudocode=_dfs_pc, params=["start"],
        tags=["traversal", "stack"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking, using an explicit stack.",
    ),

    "inorder": AlgoInfo(
        key="inorder", label="In-order Traversal", kind="tree",
        factory=inorder, pseudocode=_walk_lines(Order.IN),
        tags=["traversal", "recursion"],
        complexity_time="O(n)", complexity_space="O(h)",
        description="Left, visit, right. Emits the keys of a BST in sorted order.",
    ),

    "preorder": AlgoInfo(
        key="preorder", label="Pre-order Traversal", kind="tree",
        factory=preorder, pseudocode=_walk_lines(Order.PRE),
        tags=["traversal", "recursion"],
        complexity_time="O(n)", complexity_space="O(h)",
        description="Visit, left, right. Parents are emitted before children.",
    ),

    "postorder": AlgoInfo(
        key="postorder", label="Post-order Traversal", kind="tree",
        factory=postorder, pseudocode=_walk_lines(Order.POST),
        tags=["traversal", "recursion"],
        complexity_time="O(n)", complexity_space="O(h)",
        description="Left, right, visit. Children are emitted before parents.",
    ),

    "bst_search": AlgoInfo(
        key="bst_search", label="BST Search", kind="tree",
        factory=bst_search, pseudocode=_bst_search_pc, params=["key"],
        tags=["search"],
        complexity_time="O(h)", complexity_space="O(h)",
        description="Follows one root-to-leaf path, left or right at each node.",
    ),

    "bst_insert": AlgoInfo(
        key="bst_insert", label="BST Insert", kind="tree",
        factory=bst_insert, pseudocode=_bst_insert_pc, params=["key"],
        tags=["mutation"],
        complexity_time="O(h)", complexity_space="O(h)",
        description="Searches for the empty slot, then attaches a new leaf there.",
    ),

    "bst_delete": AlgoInfo(
        key="bst_delete", label="BST Delete", kind="tree",
        factory=bst_delete, pseudocode=_bst_delete_pc, params=["key"],
        tags=["mutation", "successor"],
        complexity_time="O(h)", complexity_space="O(h)",
        description="Splices out a node; with two children, its in-order successor takes its place.",
    ),

    "list_search": AlgoInfo(
        key="list_search", label="Linked List Search", kind="list",
        factory=list_search, pseudocode=_list_search_pc, params=["value"],
        tags=["search"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walks the list from head, comparing each value.",
    ),

    "list_insert": AlgoInfo(
        key="list_insert", label="Linked List Insert", kind="list",
        factory=list_insert, pseudocode=_list_insert_pc, params=["index", "value"],
        tags=["mutation"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Links a new node in before the given index.",
    ),

    "list_remove": AlgoInfo(
        key="list_remove", label="Linked List Remove", kind="list",
        factory=list_remove, pseudocode=_list_remove_pc, params=["value"],
        tags=["mutation"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Unlinks the first node holding the value.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_kind(kind: str) -> List[AlgoInfo]:
    """Filter registry by model kind ("graph", "tree", "list")."""
    return [a for a in REGISTRY.values() if a.kind == kind]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_kind",
]
