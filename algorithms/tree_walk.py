"""
tree_walk.py — Explicit-Stack Tree Walk
========================================
In-order, pre-order and post-order traversal without Python recursion.

A recursive walk can't be paused between two calls, so the call stack is
made explicit: a list of Frames, each (node, state).  One tick advances the
top frame by one state:

    state 0  ENTER   "if root == null: return" — empty marker frames pop here
    state 1  ┐
    state 2  ├ the three statements of the body, in the order's sequence
    state 3  ┘ (push left child frame / visit / push right child frame)
    state 4  LEAVE   pop the frame

Only the body order differs between the three walks:

    PRE   visit, left,  right
    IN    left,  visit, right
    POST  left,  right, visit

Left is always scheduled before right, and a child frame runs to
completion (is popped) before its parent's next statement.  The whole
execution state is the stack — nothing lives in interpreter frames.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from structures.tree import BinaryTree, TreeNode
from algorithms.machine import PhaseMachine, Rule
from algorithms.step import Step, Pseudocode

log = logging.getLogger(__name__)


class Order(Enum):
    IN   = "inorder"
    PRE  = "preorder"
    POST = "postorder"


class Action(Enum):
    IDLE  = "idle"
    ENTER = "enter"
    SKIP  = "skip"       # empty subtree marker on top
    LEFT  = "left"
    VISIT = "visit"
    RIGHT = "right"
    LEAVE = "leave"
    DONE  = "done"


# state index → action, per order
SCHEDULES: Dict[Order, Tuple[Action, ...]] = {
    Order.PRE:  (Action.ENTER, Action.VISIT, Action.LEFT,  Action.RIGHT, Action.LEAVE),
    Order.IN:   (Action.ENTER, Action.LEFT,  Action.VISIT, Action.RIGHT, Action.LEAVE),
    Order.POST: (Action.ENTER, Action.LEFT,  Action.RIGHT, Action.VISIT, Action.LEAVE),
}

_STATEMENTS = {
    Action.LEFT:  "{name}(root.left)",
    Action.VISIT: "visit(root)",
    Action.RIGHT: "{name}(root.right)",
}


def listing(order: Order) -> Pseudocode:
    name = order.value.capitalize()
    body = [_STATEMENTS[a].format(name=order.value) for a in SCHEDULES[order][1:4]]
    return Pseudocode(f"{name}(root)", ["if root == null: return"] + body)


@dataclass
class Frame:
    node:  Optional[TreeNode]
    state: int = 0


class TreeWalk(PhaseMachine):
    """
    Attributes:
        tree      : The tree being walked.
        order     : Order.IN / PRE / POST.
        stack     : Explicit frame stack (top = last).
        output    : Keys in visit order.
        visited   : Same keys, used for highlighting.
        current   : Most recently visited node.
        max_depth : Tallest the stack has been during this run.
    """

    KIND = "tree"
    IDLE = Action.IDLE

    def __init__(self, tree: BinaryTree, order: Order):
        super().__init__(order.value, listing(order))
        self.tree:  BinaryTree = tree
        self.order: Order      = order
        self.schedule = SCHEDULES[order]
        self.rules = {
            Action.ENTER: Rule(1, "_enter"),
            Action.SKIP:  Rule(1, "_skip"),
            Action.LEAVE: Rule(len(self.pseudocode) - 1, "_leave"),
            Action.DONE:  Rule(0),
        }
        for line, action in enumerate(self.schedule[1:4], start=2):
            self.rules[action] = Rule(line, f"_{action.value}")
        self.stack:   List[Frame]        = []
        self.output:  List[int]          = []
        self.visited: List[int]          = []
        self.current: Optional[TreeNode] = None
        self.max_depth: int              = 0
        self._revision: int              = -1

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init(self) -> None:
        self.stack = []
        self.output = []
        self.visited = []
        self.current = None
        self.max_depth = 0
        self.ticks = 0
        self._revision = self.tree.revision
        self._push(self.tree.root)
        self.pseudocode.select(0)
        self.status = f"{self.order.value.capitalize()} traversal…"
        self.phase = self._derive()

    def ready(self) -> bool:
        if self.tree.revision != self._revision:
            self.status = "The tree changed — run the traversal again."
            return False
        return True

    # ------------------------------------------------------------------
    # Frame effects
    # ------------------------------------------------------------------
    def _enter(self) -> Action:
        self.stack[-1].state = 1
        return self._derive()

    def _skip(self) -> Action:
        self.stack.pop()
        return self._derive()

    def _left(self) -> Action:
        top = self._advance()
        self._push(top.node.left)
        return self._derive()

    def _right(self) -> Action:
        top = self._advance()
        self._push(top.node.right)
        return self._derive()

    def _visit(self) -> Action:
        top = self._advance()
        self.current = top.node
        self.output.append(top.node.key)
        self.visited.append(top.node.key)
        self.status = f"Visit {top.node.key}."
        return self._derive()

    def _leave(self) -> Action:
        self.stack.pop()
        return self._derive()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _advance(self) -> Frame:
        top = self.stack[-1]
        top.state += 1
        return top

    def _push(self, node: Optional[TreeNode]) -> None:
        self.stack.append(Frame(node))
        self.max_depth = max(self.max_depth, len(self.stack))

    def _derive(self) -> Action:
        """The phase is whatever the top frame's state says it is."""
        if not self.stack:
            self.status = f"{self.order.value.capitalize()}: " + " → ".join(map(str, self.output))
            return Action.DONE
        top = self.stack[-1]
        if top.node is None:
            return Action.SKIP
        return self.schedule[top.state]

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def snapshot(self) -> Step:
        return self._step(
            current=self.current.key if self.current else None,
            visited=list(self.visited),
            order=list(self.output),
            overlay={
                "order":     self.order.value,
                "frames":    [(f.node.key if f.node else None, f.state) for f in self.stack],
                "max_depth": self.max_depth,
            },
        )


def inorder(tree: BinaryTree) -> TreeWalk:
    walk = TreeWalk(tree, Order.IN)
    walk.init()
    return walk


def preorder(tree: BinaryTree) -> TreeWalk:
    walk = TreeWalk(tree, Order.PRE)
    walk.init()
    return walk


def postorder(tree: BinaryTree) -> TreeWalk:
    walk = TreeWalk(tree, Order.POST)
    walk.init()
    return walk
