"""
Tests for the BFS / DFS traversal stepper.
"""

import random
from collections import deque

import pytest

from graph import Graph
from algorithms.bfs import bfs
from algorithms.dfs import dfs
from algorithms.traversal import Phase


def make_graph(n, edges, directed=False):
    g = Graph(directed=directed)
    for _ in range(n):
        g.add_node()
    for u, v in edges:
        g.add_edge(u, v)
    return g


def run(stepper, limit=10_000):
    for _ in range(limit):
        if not stepper.tick().proceed:
            return stepper
    raise AssertionError("stepper did not finish")


def reference_bfs(g, start):
    seen, order, q = {start}, [], deque([start])
    while q:
        u = q.popleft()
        order.append(u)
        for v in g.sorted_neighbours(u):
            if v not in seen:
                seen.add(v)
                q.append(v)
    return order


def reference_dfs(g, start):
    # mark-on-push stack DFS with ascending neighbours
    seen, order, stack = {start}, [], [start]
    while stack:
        u = stack.pop()
        order.append(u)
        for v in g.sorted_neighbours(u):
            if v not in seen:
                seen.add(v)
                stack.append(v)
    return order


def random_graph(seed, n=9, p=0.3, directed=False):
    rng = random.Random(seed)
    edges = [(u, v) for u in range(n) for v in range(n) if u != v and rng.random() < p]
    return make_graph(n, edges, directed=directed)


class TestOrder:
    """Stepper order matches a plain reference implementation."""

    def test_bfs_small(self):
        g = make_graph(5, [(0, 2), (0, 1), (1, 3), (2, 4)])
        assert run(bfs(g, 0)).order == [0, 1, 2, 3, 4]

    def test_dfs_small(self):
        g = make_graph(5, [(0, 2), (0, 1), (1, 3), (2, 4)])
        assert run(dfs(g, 0)).order == [0, 2, 4, 1, 3]

    @pytest.mark.parametrize("seed", range(8))
    @pytest.mark.parametrize("directed", [False, True])
    def test_matches_reference(self, seed, directed):
        g = random_graph(seed, directed=directed)
        for start in (0, 4):
            assert run(bfs(g, start)).order == reference_bfs(g, start)
            assert run(dfs(g, start)).order == reference_dfs(g, start)

    def test_order_independent_of_edge_insertion(self):
        a = make_graph(4, [(0, 3), (0, 2), (0, 1)])
        b = make_graph(4, [(0, 1), (0, 2), (0, 3)])
        assert run(bfs(a, 0)).order == run(bfs(b, 0)).order


class TestVisited:
    """Visited marking happens at admission, once per node."""

    def test_each_reachable_node_once(self):
        g = random_graph(3)
        for factory in (bfs, dfs):
            s = run(factory(g, 0))
            assert len(s.order) == len(set(s.order))
            assert sorted(s.visited) == sorted(s.order)

    def test_unreachable_nodes_not_visited(self):
        g = make_graph(4, [(0, 1), (2, 3)])
        s = run(bfs(g, 0))
        assert s.order == [0, 1]
        assert not s.is_visited(2)

    def test_marked_at_admission(self):
        g = make_graph(3, [(0, 1), (0, 2)])
        s = bfs(g, 0)
        while s.phase is not Phase.NEIGHBOR_ADMIT:
            s.tick()
        assert s.is_visited(1)
        assert 1 not in s.order
        assert s.last_edge == (0, 1)

    def test_parent_and_path(self):
        g = make_graph(4, [(0, 1), (1, 2), (2, 3)])
        s = run(bfs(g, 0))
        assert s.parent[3] == 2
        assert s.path_to(3) == [0, 1, 2, 3]
        assert s.path_to(0) == [0]


class TestLifecycle:
    """Edge cases around init, termination and staleness."""

    def test_pseudocode_lines(self):
        g = make_graph(2, [(0, 1)])
        s = bfs(g, 0)
        assert s.line == 1
        assert s.tick().line == 2       # loop check
        assert s.tick().line == 3       # expand
        assert s.tick().line == 4       # neighbour loop
        assert s.tick().line == 5       # neighbour test

    def test_done_is_idempotent(self):
        g = make_graph(3, [(0, 1), (1, 2)])
        s = run(dfs(g, 0))
        order, visited = list(s.order), list(s.visited)
        for _ in range(3):
            tick = s.tick()
            assert not tick.proceed
            assert tick.line == 6
        assert s.order == order and s.visited == visited
        assert s.snapshot().is_final

    def test_empty_graph_is_noop(self):
        s = bfs(Graph(), 0)
        assert s.phase is Phase.INIT
        assert not s.tick().proceed
        assert s.order == []

    def test_missing_start_is_noop(self):
        g = make_graph(2, [(0, 1)])
        s = dfs(g)
        assert not s.init(9)
        assert not s.tick().proceed
        assert "does not exist" in s.status

    def test_reinit_clears_previous_run(self):
        g = make_graph(3, [(0, 1), (1, 2)])
        s = run(bfs(g, 0))
        s.init(2)
        assert s.order == [] and s.visited == [2]
        assert run(s).order == [2, 1, 0]

    def test_graph_edit_makes_stepper_stale(self):
        g = make_graph(3, [(0, 1), (1, 2)])
        s = bfs(g, 0)
        s.tick()
        g.remove_node(2)
        order = list(s.order)
        assert not s.tick().proceed
        assert s.order == order
        assert "changed" in s.status

    def test_snapshot_overlay(self):
        g = make_graph(3, [(0, 1), (0, 2)])
        step = bfs(g, 0).snapshot()
        assert step.kind == "graph"
        assert step.overlay["queue"] == [0]
        assert step.frontier == [0]
        assert step.to_dict()["parent"] == {"0": None, "1": None, "2": None}
