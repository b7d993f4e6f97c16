"""
Tests for the BST model and the explicit-stack tree walk.
"""

import random

import pytest

from structures import BinaryTree
from algorithms.tree_walk import inorder, preorder, postorder, Action, TreeWalk, Order


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


SAMPLE = [5, 3, 8, 1, 4]


class TestBinaryTree:
    """Instant operations on the plain BST."""

    def test_insert_and_traversals(self):
        t = BinaryTree.from_keys(SAMPLE)
        assert t.inorder() == [1, 3, 4, 5, 8]
        assert t.preorder() == [5, 3, 1, 4, 8]
        assert t.postorder() == [1, 4, 3, 8, 5]

    def test_duplicate_insert_is_noop(self):
        t = BinaryTree.from_keys(SAMPLE)
        rev = t.revision
        assert not t.insert(4)
        assert t.count() == 5
        assert t.revision == rev

    def test_search_path(self):
        t = BinaryTree.from_keys(SAMPLE)
        assert [n.key for n in t.search_path(4)] == [5, 3, 4]
        # miss ends at the last real node
        assert [n.key for n in t.search_path(7)] == [5, 8]
        assert t.search_path(1)[-1].key == 1
        assert BinaryTree().search_path(1) == []

    def test_successor_path(self):
        t = BinaryTree.from_keys([50, 30, 70, 60, 80, 65, 55])
        path = BinaryTree.successor_path(t.root)
        assert [n.key for n in path] == [70, 60, 55]

    def test_height_and_minimum(self):
        assert BinaryTree().height() == 0
        assert BinaryTree().minimum() is None
        t = BinaryTree.from_keys(SAMPLE)
        assert t.height() == 3
        assert t.minimum() == 1

    def test_delete_leaf_and_one_child(self):
        t = BinaryTree.from_keys([5, 3, 8, 1])
        assert t.delete(1)
        assert t.delete(3)
        assert t.inorder() == [5, 8]
        assert not t.delete(42)

    def test_delete_two_children_uses_successor(self):
        t = BinaryTree.from_keys([50, 30, 70, 60, 80, 55])
        assert t.delete(50)
        assert t.root.key == 55
        assert t.inorder() == [30, 55, 60, 70, 80]
        assert is_bst(t.root)

    def test_delete_root_with_single_child(self):
        t = BinaryTree.from_keys([5, 8])
        t.delete(5)
        assert t.root.key == 8

    def test_splice_refuses_two_children(self):
        t = BinaryTree.from_keys(SAMPLE)
        with pytest.raises(ValueError):
            t.splice(t.root, None)

    @pytest.mark.parametrize("seed", range(5))
    def test_random_deletes_keep_order(self, seed):
        rng = random.Random(seed)
        keys = rng.sample(range(100), 25)
        t = BinaryTree.from_keys(keys)
        doomed = rng.sample(keys, 12)
        for k in doomed:
            assert t.delete(k)
            assert is_bst(t.root)
        assert t.inorder() == sorted(set(keys) - set(doomed))

    def test_to_dict(self):
        d = BinaryTree.from_keys([2, 1]).to_dict()
        assert d["root"]["key"] == 2
        assert d["root"]["left"]["key"] == 1
        assert d["root"]["right"] is None
        assert d["count"] == 2 and d["height"] == 2


class TestTreeWalk:
    """The explicit-stack walk reproduces the recursive traversals."""

    def test_inorder(self):
        assert run(inorder(BinaryTree.from_keys(SAMPLE))).output == [1, 3, 4, 5, 8]

    def test_preorder(self):
        assert run(preorder(BinaryTree.from_keys(SAMPLE))).output == [5, 3, 1, 4, 8]

    def test_postorder(self):
        assert run(postorder(BinaryTree.from_keys(SAMPLE))).output == [1, 4, 3, 8, 5]

    @pytest.mark.parametrize("seed", range(6))
    def test_matches_instant_traversals(self, seed):
        rng = random.Random(seed)
        t = BinaryTree.from_keys(rng.sample(range(200), 30))
        assert run(inorder(t)).output == t.inorder()
        assert run(preorder(t)).output == t.preorder()
        assert run(postorder(t)).output == t.postorder()

    @pytest.mark.parametrize("factory", [inorder, preorder, postorder])
    def test_stack_depth_bounded_by_height(self, factory):
        rng = random.Random(11)
        t = BinaryTree.from_keys(rng.sample(range(500), 60))
        walk = factory(t)
        h = t.height()
        while True:
            real = [f for f in walk.stack if f.node is not None]
            assert len(real) <= h
            assert len(walk.stack) <= h + 1
            if not walk.tick().proceed:
                break
        assert walk.max_depth <= h + 1

    def test_empty_tree(self):
        walk = inorder(BinaryTree())
        assert walk.phase is Action.SKIP
        assert not walk.tick().proceed
        assert walk.output == []
        assert walk.done

    def test_first_tick_is_enter(self):
        walk = preorder(BinaryTree.from_keys([1]))
        assert walk.phase is Action.ENTER
        assert walk.tick().line == 1
        assert walk.phase is Action.VISIT

    def test_visit_lines_follow_order(self):
        # the visit statement sits on line 2 / 3 / 4 for pre / in / post
        for order, line in ((Order.PRE, 2), (Order.IN, 3), (Order.POST, 4)):
            assert TreeWalk(BinaryTree(), order).rules[Action.VISIT].line == line

    def test_done_is_idempotent(self):
        t = BinaryTree.from_keys(SAMPLE)
        walk = run(inorder(t))
        out = list(walk.output)
        assert not walk.tick().proceed
        assert walk.output == out
        assert walk.status == "Inorder: 1 → 3 → 4 → 5 → 8"

    def test_tree_edit_makes_walk_stale(self):
        t = BinaryTree.from_keys(SAMPLE)
        walk = inorder(t)
        walk.tick()
        t.insert(9)
        assert not walk.tick().proceed
        assert walk.output == []
