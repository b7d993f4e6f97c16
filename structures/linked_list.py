"""
linked_list.py — Singly / Doubly Linked List
=============================================
One class, two modes.  `prev` pointers are all None while singly and
exactly mirror `next` while doubly.  Rather than patching `prev` at every
splice site, each mutation ends with `_relink()`, a full pass over the
list — lists here are a handful of nodes and the invariant stays trivial
to check.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from structures.errors import InvalidInput

log = logging.getLogger(__name__)


class ListNode:
    __slots__ = ("value", "next", "prev")

    def __init__(self, value: int):
        self.value: int = value
        self.next: Optional["ListNode"] = None
        self.prev: Optional["ListNode"] = None

    def __repr__(self) -> str:
        return f"ListNode({self.value})"


class LinkedList:
    """
    Attributes:
        head     : First node or None.
        doubly   : Whether back-links are maintained.
        revision : Structural-change counter (relayout cue for the renderer).
    """

    def __init__(self, values: Iterable[int] = (), doubly: bool = False):
        self.head: Optional[ListNode] = None
        self.doubly: bool = doubly
        self.revision: int = 0
        self.load(values)

    # ==================================================================
    # MUTATION
    # ==================================================================
    def load(self, values: Iterable[int]) -> None:
        self.head = None
        tail: Optional[ListNode] = None
        for v in values:
            node = ListNode(v)
            if tail is None:
                self.head = node
            else:
                tail.next = node
            tail = node
        self._relink()

    def clear(self) -> None:
        self.load(())

    def insert(self, index: int, value: int) -> ListNode:
        """Insert before position `index` (0 ≤ index ≤ len)."""
        self.check_insert_index(index)
        node = ListNode(value)
        if index == 0:
            node.next = self.head
            self.head = node
        else:
            prev = self.node_at(index - 1)
            node.next = prev.next
            prev.next = node
        self._relink()
        log.info("inserted %s at index %d", value, index)
        return node

    def remove(self, value: int) -> bool:
        """Unlink the first node holding `value`.  False when absent."""
        prev: Optional[ListNode] = None
        cur = self.head
        while cur is not None and cur.value != value:
            prev, cur = cur, cur.next
        if cur is None:
            return False
        if prev is None:
            self.head = cur.next
        else:
            prev.next = cur.next
        cur.next = cur.prev = None
        self._relink()
        log.info("removed %s", value)
        return True

    def pop(self, index: int) -> int:
        """Unlink the node at `index` and return its value."""
        if not 0 <= index < len(self):
            raise InvalidInput(f"Index {index} out of bounds for list of size {len(self)}")
        if index == 0:
            node = self.head
            self.head = node.next
        else:
            prev = self.node_at(index - 1)
            node = prev.next
            prev.next = node.next
        node.next = node.prev = None
        self._relink()
        return node.value

    def set_doubly(self, doubly: bool) -> None:
        self.doubly = doubly
        self._relink()

    def _relink(self) -> None:
        prev: Optional[ListNode] = None
        cur = self.head
        while cur is not None:
            cur.prev = prev if self.doubly else None
            prev, cur = cur, cur.next
        self.revision += 1

    # ==================================================================
    # QUERIES
    # ==================================================================
    def check_insert_index(self, index: int) -> None:
        if not 0 <= index <= len(self):
            raise InvalidInput(f"Index {index} out of bounds for list of size {len(self)}")

    def node_at(self, index: int) -> Optional[ListNode]:
        cur = self.head
        i = 0
        while cur is not None and i < index:
            cur = cur.next
            i += 1
        return cur

    def find(self, value: int) -> int:
        for i, node in enumerate(self.nodes()):
            if node.value == value:
                return i
        return -1

    def nodes(self) -> Iterator[ListNode]:
        cur = self.head
        while cur is not None:
            yield cur
            cur = cur.next

    def values(self) -> List[int]:
        return [n.value for n in self.nodes()]

    def to_dict(self) -> dict:
        return {"values": self.values(), "doubly": self.doubly, "size": len(self)}

    def __iter__(self) -> Iterator[int]:
        return iter(self.values())

    def __len__(self) -> int:
        return sum(1 for _ in self.nodes())

    def __repr__(self) -> str:
        sep = " ⇄ " if self.doubly else " → "
        return f"LinkedList({sep.join(map(str, self.values()))})"
