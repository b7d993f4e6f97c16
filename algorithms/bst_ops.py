"""
bst_ops.py — Path-Based BST Steppers
=====================================
Search, insert and delete share one idea: compute the whole root-to-target
path up front (`BinaryTree.search_path`), then reveal one path node per
tick.  Nothing structural happens while the path is being revealed; the
single mutating tick comes after it (insert: attach; delete: splice), so
abandoning a stepper halfway leaves the tree untouched.

Delete has two animated legs when the target has two children:

    stage 0  LOCATE     walk the path to the target
    stage 1  SUCCESSOR  walk target.right, then left links, to the minimum
    stage 2  DELETED    copy successor key into target, splice successor out

A target with at most one child is spliced out on the tick that finds it.
A key that isn't in the tree is a normal terminal outcome (MISSING), not
an exception.
"""

import logging
from enum import Enum
from typing import List, Optional

from structures.tree import BinaryTree, TreeNode
from algorithms.machine import PhaseMachine, Rule
from algorithms.step import Step, Pseudocode

log = logging.getLogger(__name__)


class Phase(Enum):
    IDLE        = "idle"
    CREATE_ROOT = "create_root"
    WALK        = "walk"
    LOCATE      = "locate"
    SUCCESSOR   = "successor"
    FOUND       = "found"
    MISSING     = "missing"
    INSERTED    = "inserted"
    DUPLICATE   = "duplicate"
    DELETED     = "deleted"


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
SEARCH_PSEUDOCODE: List[str] = [
    "cur = root",                                   # 1
    "while cur != null:",                           # 2
    "    if cur.key == x: return cur",              # 3
    "    if x > cur.key: cur = cur.right",          # 4
    "    else: cur = cur.left",                     # 5
    "return NOT FOUND",                             # 6
]

INSERT_PSEUDOCODE: List[str] = [
    "if root == null: root = new Node(x); return",  # 1
    "cur = root",                                   # 2
    "if x == cur.key: return  // already present",  # 3
    "if x < cur.key: go left",                      # 4
    "else: go right",                               # 5
    "attach new Node(x) at the empty slot",         # 6
]

DELETE_PSEUDOCODE: List[str] = [
    "if cur == null: return NOT FOUND",             # 1
    "if x < cur.key: go left",                      # 2
    "if x > cur.key: go right",                     # 3
    "found: if left == null or right == null:",     # 4
    "    replace cur with its only child",          # 5
    "else: succ = min(cur.right)",                  # 6
    "    cur.key = succ.key",                       # 7
    "    delete succ from the right subtree",       # 8
]


class PathStepper(PhaseMachine):
    """
    Shared machinery: a precomputed path and a cursor into it.

    Attributes:
        tree       : The tree.
        key        : The key being searched / inserted / deleted.
        path       : Precomputed node path for the current leg.
        path_index : Index of the last revealed node (-1 before the first).
        current    : Last revealed node.
        visited    : Keys revealed so far, across legs.
    """

    KIND = "tree"
    IDLE = Phase.IDLE

    def __init__(self, tree: BinaryTree, key: int, algo: str, pseudocode: Pseudocode):
        super().__init__(algo, pseudocode)
        self.tree: BinaryTree = tree
        self.key:  int        = key
        self.path: List[TreeNode] = []
        self.path_index: int  = -1
        self.current: Optional[TreeNode] = None
        self.visited: List[int] = []
        self._revision: int = -1

    def _start(self, path: List[TreeNode], phase: Phase) -> None:
        self.path = path
        self.path_index = -1
        self.current = None
        self.visited = []
        self.ticks = 0
        self._revision = self.tree.revision
        self.phase = phase

    def ready(self) -> bool:
        if self.tree.revision != self._revision:
            self.status = "The tree changed — start the operation again."
            return False
        return True

    @property
    def exhausted(self) -> bool:
        return self.path_index + 1 >= len(self.path)

    def _reveal(self) -> TreeNode:
        self.path_index += 1
        node = self.path[self.path_index]
        self.current = node
        self.visited.append(node.key)
        return node

    def _steer(self, node: TreeNode, left_line: int, right_line: int) -> None:
        if self.key < node.key:
            self.pseudocode.select(left_line)
            self.status = f"{self.key} < {node.key} — go left."
        else:
            self.pseudocode.select(right_line)
            self.status = f"{self.key} > {node.key} — go right."

    def snapshot(self) -> Step:
        return self._step(
            current=self.current.key if self.current else None,
            visited=list(self.visited),
            path=[n.key for n in self.path[: self.path_index + 1]],
            overlay={
                "key":        self.key,
                "path_index": self.path_index,
                "path_keys":  [n.key for n in self.path],
            },
        )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
class BstSearch(PathStepper):
    RULES = {
        Phase.WALK:    Rule(2, "_walk"),
        Phase.FOUND:   Rule(3),
        Phase.MISSING: Rule(6),
    }

    def __init__(self, tree: BinaryTree, key: int):
        super().__init__(tree, key, "bst_search", Pseudocode("Search(x)", SEARCH_PSEUDOCODE))

    def init(self) -> None:
        self._start(self.tree.search_path(self.key), Phase.WALK)
        self.pseudocode.select(1)
        self.status = f"Searching {self.key}…"

    def _walk(self) -> Phase:
        if self.exhausted:
            self.current = None
            self.status = f"Value {self.key} is not in the BST."
            return Phase.MISSING
        node = self._reveal()
        if node.key == self.key:
            self.status = f"Found {self.key}."
            return Phase.FOUND
        # search steers right on line 4, left on line 5
        self._steer(node, left_line=5, right_line=4)
        return Phase.WALK


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------
class BstInsert(PathStepper):
    RULES = {
        Phase.CREATE_ROOT: Rule(1, "_create_root"),
        Phase.WALK:        Rule(2, "_walk"),
        Phase.INSERTED:    Rule(None),
        Phase.DUPLICATE:   Rule(3),
    }

    def __init__(self, tree: BinaryTree, key: int):
        super().__init__(tree, key, "bst_insert", Pseudocode("Insert(x)", INSERT_PSEUDOCODE))

    def init(self) -> None:
        if self.tree.root is None:
            self._start([], Phase.CREATE_ROOT)
        else:
            self._start(self.tree.search_path(self.key), Phase.WALK)
        self.pseudocode.select(0)
        self.status = f"Inserting {self.key}…"

    def _create_root(self) -> Phase:
        self.tree.insert(self.key)
        self.current = self.tree.root
        self.visited.append(self.key)
        self.status = f"Inserted {self.key} at root."
        log.info("bst_insert: %d became the root", self.key)
        return Phase.INSERTED

    def _walk(self) -> Phase:
        if self.exhausted:
            self.pseudocode.select(6)
            self.tree.insert(self.key)
            self.status = f"Inserted {self.key}."
            log.info("bst_insert: attached %d under %r", self.key, self.current)
            return Phase.INSERTED
        node = self._reveal()
        if node.key == self.key:
            self.status = "Value already exists."
            return Phase.DUPLICATE
        self._steer(node, left_line=4, right_line=5)
        return Phase.WALK


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------
class BstDelete(PathStepper):
    RULES = {
        Phase.LOCATE:    Rule(1, "_locate"),
        Phase.SUCCESSOR: Rule(6, "_successor"),
        Phase.DELETED:   Rule(None),
        Phase.MISSING:   Rule(1),
    }

    STAGES = {Phase.SUCCESSOR: 1, Phase.DELETED: 2}

    def __init__(self, tree: BinaryTree, key: int):
        super().__init__(tree, key, "bst_delete", Pseudocode("Delete(x)", DELETE_PSEUDOCODE))
        self.target: Optional[TreeNode] = None
        self.target_parent: Optional[TreeNode] = None
        self.successor: Optional[TreeNode] = None

    def init(self) -> None:
        self._start(self.tree.search_path(self.key), Phase.LOCATE)
        self.target = self.target_parent = self.successor = None
        self.pseudocode.select(0)
        self.status = f"Deleting {self.key}…"

    @property
    def stage(self) -> int:
        """0 = locate target, 1 = locate successor, 2 = applied."""
        return self.STAGES.get(self.phase, 0)

    def _locate(self) -> Phase:
        if self.exhausted:
            self.current = None
            self.status = f"Value {self.key} is not in the BST."
            return Phase.MISSING
        node = self._reveal()
        if node.key != self.key:
            self._steer(node, left_line=2, right_line=3)
            return Phase.LOCATE

        self.target = node
        self.target_parent = self.path[self.path_index - 1] if self.path_index > 0 else None
        if node.child_count < 2:
            self.pseudocode.select(5)
            self.tree.splice(node, self.target_parent)
            self.status = f"Deleted {self.key}."
            log.info("bst_delete: spliced out %d", self.key)
            return Phase.DELETED

        # two children: second leg walks to the in-order successor
        self.pseudocode.select(6)
        self.status = f"{self.key} has two children — find its in-order successor."
        self.path = self.tree.successor_path(node)
        self.path_index = -1
        return Phase.SUCCESSOR

    def _successor(self) -> Phase:
        if self.exhausted:
            succ = self.path[-1]
            succ_parent = self.path[-2] if len(self.path) > 1 else self.target
            self.successor = succ
            self.pseudocode.select(8)
            self.target.key = succ.key
            self.tree.splice(succ, succ_parent)
            self.current = self.target
            self.status = f"Deleted {self.key}: replaced by successor {succ.key}."
            log.info("bst_delete: %d replaced by successor %d", self.key, succ.key)
            return Phase.DELETED
        node = self._reveal()
        self.status = f"Successor candidate {node.key}."
        return Phase.SUCCESSOR

    def snapshot(self) -> Step:
        step = super().snapshot()
        step.overlay.update({
            "stage":     self.stage,
            "target":    self.target.key if self.target else None,
            "successor": self.successor.key if self.successor else None,
        })
        return step


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def bst_search(tree: BinaryTree, key: int) -> BstSearch:
    stepper = BstSearch(tree, key)
    stepper.init()
    return stepper


def bst_insert(tree: BinaryTree, key: int) -> BstInsert:
    stepper = BstInsert(tree, key)
    stepper.init()
    return stepper


def bst_delete(tree: BinaryTree, key: int) -> BstDelete:
    stepper = BstDelete(tree, key)
    stepper.init()
    return stepper
