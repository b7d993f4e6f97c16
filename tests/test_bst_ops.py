"""
Tests for the path-based BST search / insert / delete steppers.
"""

import random

import pytest

from structures import BinaryTree
from algorithms.bst_ops import bst_search, bst_insert, bst_delete, Phase


def run(stepper, limit=10_000):
    for _ in range(limit):
        if not stepper.tick().proceed:
            return stepper
    raise AssertionError("stepper did not finish")


def is_bst(node, lo=None, hi=None):
    if node is None:
        return True
    if (lo is not None and node.key <= lo) or (hi is not None and node.key >= hi):
        return False
    return is_bst(node.left, lo, node.key) and is_bst(node.right, node.key, hi)


SAMPLE = [50, 30, 70, 20, 40, 60, 80, 65]


class TestSearch:
    """One path node per tick; a miss is a terminal outcome."""

    def test_found(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = run(bst_search(t, 65))
        assert s.phase is Phase.FOUND
        assert s.visited == [50, 70, 60, 65]
        assert s.current.key == 65
        assert s.ticks == 4

    def test_not_found(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = run(bst_search(t, 45))
        assert s.phase is Phase.MISSING
        assert s.visited == [50, 30, 40]
        assert s.line == 6
        assert "not in the BST" in s.status

    def test_empty_tree(self):
        s = run(bst_search(BinaryTree(), 1))
        assert s.phase is Phase.MISSING
        assert s.visited == []

    def test_reveals_one_node_per_tick(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = bst_search(t, 20)
        s.tick()
        assert s.path_index == 0 and s.visited == [50]
        assert s.line == 5      # 20 < 50, go left
        s.tick()
        assert s.path_index == 1 and s.visited == [50, 30]

    def test_search_never_mutates(self):
        t = BinaryTree.from_keys(SAMPLE)
        rev = t.revision
        run(bst_search(t, 65))
        run(bst_search(t, 1))
        assert t.revision == rev


class TestInsert:
    """Only the tick after the path is exhausted mutates the tree."""

    def test_empty_tree_single_tick(self):
        t = BinaryTree()
        s = bst_insert(t, 7)
        tick = s.tick()
        assert not tick.proceed
        assert t.root.key == 7
        assert s.phase is Phase.INSERTED

    def test_insert_after_walk(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = bst_insert(t, 67)
        ticks = 0
        while True:
            before = t.count()
            proceed = s.tick().proceed
            ticks += 1
            if proceed:
                assert t.count() == before
            else:
                break
        # 50, 70, 60, 65 revealed, then one insert tick
        assert ticks == 5
        assert t.inorder() == sorted(SAMPLE + [67])
        assert is_bst(t.root)

    def test_duplicate(self):
        t = BinaryTree.from_keys(SAMPLE)
        rev = t.revision
        s = run(bst_insert(t, 40))
        assert s.phase is Phase.DUPLICATE
        assert s.status == "Value already exists."
        assert t.revision == rev

    def test_done_is_idempotent(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = run(bst_insert(t, 1))
        keys = t.inorder()
        assert not s.tick().proceed
        assert t.inorder() == keys


class TestDelete:
    """Three cases, with the two-children case animated in two legs."""

    def test_leaf(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = run(bst_delete(t, 20))
        assert s.phase is Phase.DELETED
        assert s.stage == 2
        assert 20 not in t.inorder()

    def test_one_child_spliced_on_locate_tick(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = bst_delete(t, 60)
        s.tick()                    # 50
        s.tick()                    # 70
        assert t.contains(60)
        assert not s.tick().proceed # 60 found, one child → splice
        assert not t.contains(60)
        assert t.root.right.left.key == 65

    def test_two_children_walks_successor(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = bst_delete(t, 50)
        assert s.tick().proceed     # locate 50 → successor leg
        assert s.stage == 1
        assert s.phase is Phase.SUCCESSOR
        stages = []
        while s.tick().proceed:
            stages.append(s.stage)
            assert t.contains(50)
        assert stages == [1, 1]     # 70, 60
        assert s.stage == 2
        assert t.root.key == 60
        assert t.inorder() == sorted(k for k in SAMPLE if k != 50)
        assert s.visited == [50, 70, 60]
        assert is_bst(t.root)

    def test_two_children_successor_is_right_child(self):
        t = BinaryTree.from_keys([5, 3, 8])
        s = run(bst_delete(t, 5))
        assert s.successor.key == 8
        assert t.root.key == 8
        assert t.root.right is None

    def test_missing_key(self):
        t = BinaryTree.from_keys(SAMPLE)
        rev = t.revision
        s = run(bst_delete(t, 99))
        assert s.phase is Phase.MISSING
        assert t.revision == rev

    @pytest.mark.parametrize("seed", range(6))
    def test_two_children_always_takes_right_minimum(self, seed):
        rng = random.Random(seed)
        keys = rng.sample(range(300), 40)
        t = BinaryTree.from_keys(keys)
        for _ in range(15):
            two = [n for n in _nodes(t.root) if n.child_count == 2]
            if not two:
                break
            target = rng.choice(two)
            expected = _min_key(target.right)
            old = target.key
            run(bst_delete(t, old))
            assert target.key == expected
            assert not t.contains(old)
            assert is_bst(t.root)

    def test_edit_between_ticks_makes_stepper_stale(self):
        t = BinaryTree.from_keys(SAMPLE)
        s = bst_delete(t, 50)
        s.tick()
        t.insert(1)
        assert not s.tick().proceed
        assert t.contains(50)


def _nodes(node):
    if node is None:
        return []
    return [node] + _nodes(node.left) + _nodes(node.right)


def _min_key(node):
    while node.left is not None:
        node = node.left
    return node.key
