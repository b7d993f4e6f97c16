"""
list_ops.py — Linked-List Steppers
===================================
Search is a small phase machine (WHILE_CHECK → COMPARE → ADVANCE → …).

Insert and remove don't get a phase enum at all.  Their listings are
authored with actions bound to individual lines; a program counter walks
the listing one line per tick and, when it lands on a bound line, runs
that action once.  The actions are ordinary atomic list mutations — only
the decision to invoke them is stepped.
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from structures.linked_list import LinkedList
from algorithms.machine import PhaseMachine, Rule
from algorithms.step import Tick, Step, Pseudocode

log = logging.getLogger(__name__)


SEARCH_PSEUDOCODE: List[str] = [
    "i = 0; cur = head",                   # 1
    "while cur != null:",                  # 2
    "    if cur.val == x: return i",       # 3
    "    i++, cur = cur.next",             # 4
    "return -1",                           # 5
]

INSERT_PSEUDOCODE: List[str] = [
    "if idx == 0: head = new Node(x, next=head)",          # 1
    "else: prev = nodeAt(idx-1)",                          # 2
    "n = new Node(x); n.next = prev.next; prev.next = n",  # 3
    "rebuild back-links if doubly",                        # 4
]

REMOVE_PSEUDOCODE: List[str] = [
    "prev = null; cur = head",                             # 1
    "while cur != null and cur.val != x: advance",         # 2
    "if cur == null: return NOT FOUND",                    # 3
    "unlink cur: prev.next = cur.next",                    # 4
    "rebuild back-links if doubly",                        # 5
]


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
class Phase(Enum):
    IDLE        = "idle"
    WHILE_CHECK = "while_check"
    COMPARE     = "compare"
    ADVANCE     = "advance"
    FOUND       = "found"
    NOT_FOUND   = "not_found"


class ListSearch(PhaseMachine):
    """
    Attributes:
        lst     : The list being searched.
        target  : Value searched for.
        index   : Cursor position.
        visited : Indices compared so far.
        found   : Index of the match, or None.
    """

    KIND = "list"
    IDLE = Phase.IDLE
    RULES = {
        Phase.WHILE_CHECK: Rule(2, "_while_check"),
        Phase.COMPARE:     Rule(3, "_compare"),
        Phase.ADVANCE:     Rule(4, "_advance"),
        Phase.FOUND:       Rule(None),
        Phase.NOT_FOUND:   Rule(5),
    }

    def __init__(self, lst: LinkedList, target: int):
        super().__init__("list_search", Pseudocode("Search(x)", SEARCH_PSEUDOCODE))
        self.lst: LinkedList = lst
        self.target: int = target
        self.index: int = 0
        self.visited: List[int] = []
        self.found: Optional[int] = None
        self._revision: int = -1

    def init(self) -> None:
        self.index = 0
        self.visited = []
        self.found = None
        self.ticks = 0
        self._revision = self.lst.revision
        self.pseudocode.select(1)
        self.phase = Phase.WHILE_CHECK
        self.status = f"Searching {self.target}…"

    def ready(self) -> bool:
        if self.lst.revision != self._revision:
            self.status = "The list changed — search again."
            return False
        return True

    def _while_check(self) -> Phase:
        if self.index >= len(self.lst):
            self.status = "Element not found"
            return Phase.NOT_FOUND
        return Phase.COMPARE

    def _compare(self) -> Phase:
        self.visited.append(self.index)
        node = self.lst.node_at(self.index)
        if node is not None and node.value == self.target:
            self.found = self.index
            self.status = f"Found at index {self.index}"
            return Phase.FOUND
        self.status = f"{node.value} != {self.target}"
        return Phase.ADVANCE

    def _advance(self) -> Phase:
        self.index += 1
        return Phase.WHILE_CHECK

    def snapshot(self) -> Step:
        return self._step(
            current=self.index if self.visited else None,
            visited=list(self.visited),
            overlay={"target": self.target, "found": self.found},
        )


# ---------------------------------------------------------------------------
# Program-counter operations (insert / remove)
# ---------------------------------------------------------------------------
class ScriptedOperation:
    """
    Walks a pseudocode listing one line per tick, firing the action bound
    to a line the first time the counter reaches it.

    An action may return False to end the run on its own line (e.g. the
    value to remove isn't there).  Every other action result continues.
    """

    KIND = "list"

    def __init__(self, lst: LinkedList, algo: str, pseudocode: Pseudocode,
                 actions: Dict[int, Callable[[], Optional[bool]]]):
        self.lst = lst
        self.algo = algo
        self.pseudocode = pseudocode
        self.actions = dict(actions)
        self.pc: int = 0
        self.ticks: int = 0
        self.fired: List[int] = []
        self.halted: bool = False
        self.status: str = "Ready."
        self._revision: int = lst.revision

    def tick(self) -> Tick:
        if self.done:
            return Tick(False, self.line)
        if self.lst.revision != self._revision:
            self.status = "The list changed — run the operation again."
            return Tick(False, self.line)

        self.pc += 1
        self.pseudocode.select(self.pc)
        self.ticks += 1
        action = self.actions.get(self.pc)
        if action is not None and self.pc not in self.fired:
            self.fired.append(self.pc)
            if action() is False:
                self.halted = True
            # our own mutation is not staleness
            self._revision = self.lst.revision
        log.debug("%s tick %d: line %d", self.algo, self.ticks, self.pc)

        if self.done:
            log.info("%s finished after %d ticks: %s", self.algo, self.ticks, self.status)
            return Tick(False, self.line)
        return Tick(True, self.line)

    @property
    def line(self) -> int:
        return self.pseudocode.selected

    @property
    def done(self) -> bool:
        return self.halted or self.pc + 1 >= len(self.pseudocode)

    def snapshot(self) -> Step:
        return Step(
            kind=self.KIND,
            algo=self.algo,
            phase="DONE" if self.done else f"LINE_{self.pc}",
            tick=self.ticks,
            pseudocode_line=self.line,
            status=self.status,
            is_final=self.done,
            overlay={"pc": self.pc, "fired": list(self.fired)},
        )

    def __repr__(self) -> str:
        return f"ScriptedOperation(algo={self.algo}, pc={self.pc}, done={self.done})"


def list_search(lst: LinkedList, target: int) -> ListSearch:
    stepper = ListSearch(lst, target)
    stepper.init()
    return stepper


def list_insert(lst: LinkedList, index: int, value: int) -> ScriptedOperation:
    """Animated insert.  The index is validated before anything is stepped."""
    lst.check_insert_index(index)

    def link() -> None:
        lst.insert(index, value)
        op.status = f"Inserted {value} at index {index}."

    line = 1 if index == 0 else 3
    op = ScriptedOperation(lst, "list_insert", Pseudocode("Insert(idx, x)", INSERT_PSEUDOCODE),
                           {line: link})
    op.status = f"Inserting {value} at index {index}…"
    return op


def list_remove(lst: LinkedList, value: int) -> ScriptedOperation:
    def check() -> bool:
        if lst.find(value) < 0:
            op.status = "Element not found"
            return False
        return True

    def unlink() -> None:
        lst.remove(value)
        op.status = f"Removed {value}."

    op = ScriptedOperation(lst, "list_remove", Pseudocode("Remove(x)", REMOVE_PSEUDOCODE),
                           {3: check, 4: unlink})
    op.status = f"Removing {value}…"
    return op
