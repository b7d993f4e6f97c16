"""
tree.py — Binary Search Tree
=============================
Plain, unbalanced BST over unique integer keys.

Two audiences use it:
  • the instant (non-animated) buttons — insert / delete / traversals
  • the steppers, which read `search_path` / `successor_path` up front and
    then call exactly one structural mutation (`insert`, `splice`) on the
    tick that commits the change

Ownership is exclusive: every node hangs off exactly one parent slot or
off `root`.  `revision` increments on every structural change, which is
the renderer's cue to relayout.
"""

import logging
from typing import Iterable, List, Optional, Dict, Any

log = logging.getLogger(__name__)


class TreeNode:
    __slots__ = ("key", "left", "right")

    def __init__(self, key: int):
        self.key: int = key
        self.left:  Optional["TreeNode"] = None
        self.right: Optional["TreeNode"] = None

    @property
    def child_count(self) -> int:
        return (self.left is not None) + (self.right is not None)

    def __repr__(self) -> str:
        return f"TreeNode({self.key})"


class BinaryTree:
    """
    Attributes:
        root     : Root node or None.
        revision : Structural-change counter.
    """

    def __init__(self):
        self.root: Optional[TreeNode] = None
        self.revision: int = 0

    @classmethod
    def from_keys(cls, keys: Iterable[int]) -> "BinaryTree":
        tree = cls()
        for k in keys:
            tree.insert(k)
        return tree

    # ==================================================================
    # MUTATION
    # ==================================================================
    def insert(self, key: int) -> bool:
        """Insert `key`.  Duplicates are a no-op and return False."""
        if self.root is None:
            self.root = TreeNode(key)
            self._touch()
            return True
        cur = self.root
        while True:
            if key == cur.key:
                return False
            side = "left" if key < cur.key else "right"
            child = getattr(cur, side)
            if child is None:
                setattr(cur, side, TreeNode(key))
                self._touch()
                return True
            cur = child

    def delete(self, key: int) -> bool:
        """
        Canonical two-case deletion.  A node with two children takes its
        in-order successor's key, then the successor (at most one child)
        is spliced out.
        """
        path = self.search_path(key)
        if not path or path[-1].key != key:
            return False
        target = path[-1]
        parent = path[-2] if len(path) > 1 else None
        if target.child_count < 2:
            self.splice(target, parent)
            return True
        succ_path = self.successor_path(target)
        succ = succ_path[-1]
        succ_parent = succ_path[-2] if len(succ_path) > 1 else target
        target.key = succ.key
        self.splice(succ, succ_parent)
        return True

    def splice(self, node: TreeNode, parent: Optional[TreeNode]) -> None:
        """Replace `node` (at most one child) with its sole child or None."""
        if node.child_count == 2:
            raise ValueError(f"cannot splice {node!r}: it has two children")
        child = node.left if node.left is not None else node.right
        if parent is None:
            self.root = child
        elif parent.left is node:
            parent.left = child
        else:
            parent.right = child
        node.left = node.right = None
        self._touch()

    def clear(self) -> None:
        self.root = None
        self._touch()

    def _touch(self) -> None:
        self.revision += 1
        log.debug("tree revision %d: %s", self.revision, self.inorder())

    # ==================================================================
    # PATHS  (what the steppers animate)
    # ==================================================================
    def search_path(self, key: int) -> List[TreeNode]:
        """Root-to-node path; stops at a match, else ends at the last real node."""
        path: List[TreeNode] = []
        cur = self.root
        while cur is not None:
            path.append(cur)
            if key == cur.key:
                break
            cur = cur.left if key < cur.key else cur.right
        return path

    @staticmethod
    def successor_path(node: TreeNode) -> List[TreeNode]:
        """node.right, then left links down to the minimum of that subtree."""
        path: List[TreeNode] = []
        cur = node.right
        while cur is not None:
            path.append(cur)
            cur = cur.left
        return path

    # ==================================================================
    # QUERIES
    # ==================================================================
    def contains(self, key: int) -> bool:
        path = self.search_path(key)
        return bool(path) and path[-1].key == key

    def minimum(self) -> Optional[int]:
        cur = self.root
        if cur is None:
            return None
        while cur.left is not None:
            cur = cur.left
        return cur.key

    def count(self) -> int:
        return len(self.inorder())

    def height(self) -> int:
        """Nodes on the longest root-to-leaf path (empty tree → 0)."""
        best = 0
        level = [self.root] if self.root else []
        while level:
            best += 1
            level = [c for n in level for c in (n.left, n.right) if c is not None]
        return best

    def keys(self) -> List[int]:
        return self.inorder()

    # ---------- instant traversals ----------
    # These are the non-animated answers; the explicit-stack TreeWalk must
    # reproduce them tick by tick.
    def inorder(self) -> List[int]:
        out: List[int] = []
        stack: List[TreeNode] = []
        cur = self.root
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            out.append(cur.key)
            cur = cur.right
        return out

    def preorder(self) -> List[int]:
        out: List[int] = []
        stack = [self.root] if self.root else []
        while stack:
            n = stack.pop()
            out.append(n.key)
            if n.right is not None:
                stack.append(n.right)
            if n.left is not None:
                stack.append(n.left)
        return out

    def postorder(self) -> List[int]:
        out: List[int] = []
        stack = [self.root] if self.root else []
        while stack:
            n = stack.pop()
            out.append(n.key)
            if n.left is not None:
                stack.append(n.left)
            if n.right is not None:
                stack.append(n.right)
        out.reverse()
        return out

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        def walk(n: Optional[TreeNode]) -> Optional[Dict[str, Any]]:
            if n is None:
                return None
            return {"key": n.key, "left": walk(n.left), "right": walk(n.right)}

        return {"root": walk(self.root), "count": self.count(), "height": self.height()}

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"BinaryTree(keys={self.inorder()})"
