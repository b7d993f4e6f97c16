"""
Tests for the graph model: canonical edges, reindexing, orientation toggle.
"""

import random

import pytest

from graph import Graph, Edge
from graph.graph import MAX_NODES
from structures import InvalidInput


def make_graph(n, edges, directed=False):
    g = Graph(directed=directed)
    for i in range(n):
        g.add_node(i * 10.0, 0.0)
    for u, v in edges:
        g.add_edge(u, v)
    return g


class TestEdges:
    """Edge canonicalisation and rejection rules."""

    def test_undirected_edge_is_canonical(self):
        e = Edge.make(3, 1, directed=False)
        assert (e.u, e.v) == (1, 3)
        assert e == Edge.make(1, 3, directed=False)

    def test_directed_edge_keeps_orientation(self):
        assert Edge.make(3, 1, directed=True).key == (3, 1, True)

    def test_duplicate_undirected_pair_is_ignored(self):
        g = make_graph(2, [(0, 1)])
        assert g.add_edge(1, 0) is None
        assert g.edge_count() == 1

    def test_self_loop_is_rejected(self):
        g = make_graph(2, [])
        assert g.add_edge(1, 1) is None
        assert g.edge_count() == 0

    def test_unknown_endpoint_is_rejected(self):
        g = make_graph(2, [])
        assert g.add_edge(0, 5) is None

    def test_edges_iterate_in_insertion_order(self):
        g = make_graph(4, [(2, 3), (0, 1), (1, 2)])
        assert [e.pair for e in g.edge_list()] == [(2, 3), (0, 1), (1, 2)]


class TestAdjacency:
    """Adjacency is derived from edges and tracks every change."""

    def test_undirected_adjacency_is_symmetric(self):
        g = make_graph(3, [(0, 1), (1, 2)])
        assert g.adjacency() == {0: [1], 1: [0, 2], 2: [1]}

    def test_directed_adjacency(self):
        g = make_graph(3, [(0, 1), (2, 1)], directed=True)
        assert g.neighbours(2) == [1]
        assert g.neighbours(1) == []

    def test_sorted_neighbours(self):
        g = make_graph(4, [(0, 3), (0, 1), (0, 2)])
        assert g.neighbours(0) == [3, 1, 2]
        assert g.sorted_neighbours(0) == [1, 2, 3]

    def test_remove_edge_updates_adjacency(self):
        g = make_graph(3, [(0, 1), (1, 2)])
        assert g.remove_edge(2, 1)
        assert g.neighbours(1) == [0]
        assert not g.remove_edge(2, 1)

    def test_revision_bumps_on_structural_change(self):
        g = make_graph(2, [])
        before = g.revision
        g.add_edge(0, 1)
        assert g.revision > before

    def test_move_is_not_a_structural_change(self):
        g = make_graph(2, [(0, 1)])
        before = g.revision
        g.move_node(1, 5.0, 6.0)
        assert (g.nodes[1].x, g.nodes[1].y) == (5.0, 6.0)
        assert g.revision == before


class TestRemoveNode:
    """Deleting a node reindexes everything above it."""

    def test_reindexes_nodes_and_edges(self):
        g = make_graph(4, [(0, 1), (1, 2), (2, 3)])
        assert g.remove_node(1)
        assert g.node_ids() == [0, 1, 2]
        assert [e.key for e in g.edge_list()] == [(1, 2, False)]

    def test_node_positions_follow_their_nodes(self):
        g = make_graph(3, [])
        g.remove_node(0)
        assert [n.x for n in g.nodes] == [10.0, 20.0]

    def test_remove_missing_node_is_noop(self):
        g = make_graph(2, [(0, 1)])
        assert not g.remove_node(7)
        assert g.node_count() == 2

    def test_adjacency_rebuilt_after_removal(self):
        g = make_graph(4, [(0, 3), (1, 3)])
        g.remove_node(1)
        assert g.adjacency() == {0: [2], 1: [], 2: [0]}


class TestOrientation:
    """Directed ↔ undirected toggling."""

    def test_round_trip_keeps_edge_count(self):
        g = make_graph(3, [(0, 1), (1, 2)])
        g.set_directed(True, rng=random.Random(7))
        assert all(e.directed for e in g.edge_list())
        g.set_directed(False)
        assert g.edge_count() == 2
        assert {e.pair for e in g.edge_list()} == {(0, 1), (1, 2)}
        g.set_directed(True, rng=random.Random(3))
        assert g.edge_count() == 2

    def test_opposite_directed_edges_merge(self):
        g = make_graph(2, [(0, 1), (1, 0)], directed=True)
        assert g.edge_count() == 2
        g.set_directed(False)
        assert g.edge_count() == 1

    def test_seeded_toggle_is_reproducible(self):
        a = make_graph(5, [(0, 1), (1, 2), (2, 3), (3, 4)])
        b = make_graph(5, [(0, 1), (1, 2), (2, 3), (3, 4)])
        a.set_directed(True, rng=random.Random(42))
        b.set_directed(True, rng=random.Random(42))
        assert [e.key for e in a.edge_list()] == [e.key for e in b.edge_list()]


class TestSerialisation:
    """Import and dict round-trips."""

    def test_dict_round_trip(self):
        g = make_graph(3, [(0, 1), (1, 2)])
        clone = Graph.from_dict(g.to_dict())
        assert clone.node_ids() == g.node_ids()
        assert [e.key for e in clone.edge_list()] == [e.key for e in g.edge_list()]

    def test_restore_replaces_in_place(self):
        g = make_graph(3, [(0, 1)])
        saved = g.to_dict()
        g.remove_node(2)
        g.restore(saved)
        assert g.node_count() == 3
        assert g.has_edge(0, 1)

    def test_adjacency_list_import(self):
        g = Graph.from_adjacency_list("0: 1 2\n1 -> 3\n# comment\n")
        assert g.node_count() == 4
        assert g.sorted_neighbours(1) == [0, 3]

    def test_adjacency_list_fills_missing_ids(self):
        g = Graph.from_adjacency_list("0: 3")
        assert g.node_ids() == [0, 1, 2, 3]

    def test_adjacency_list_rejects_names(self):
        with pytest.raises(InvalidInput):
            Graph.from_adjacency_list("A: B")

    def test_adjacency_list_caps_node_ids(self):
        with pytest.raises(InvalidInput):
            Graph.from_adjacency_list(str(MAX_NODES))
        with pytest.raises(InvalidInput):
            Graph.from_adjacency_list("0: 1 20000")

    def test_largest_import_rebuilds_adjacency_once(self):
        g = Graph.from_adjacency_list(f"0: {MAX_NODES - 1}")
        assert g.node_count() == MAX_NODES
        assert g.sorted_neighbours(MAX_NODES - 1) == [0]
        assert g.revision == 1

    def test_from_dict_drops_bad_edges(self):
        data = {
            "directed": False,
            "nodes": [{"id": 0, "x": 1.0, "y": 2.0}, {"id": 1, "x": 0.0, "y": 0.0}],
            "edges": [{"u": 0, "v": 1}, {"u": 1, "v": 0}, {"u": 1, "v": 1}, {"u": 0, "v": 9}],
        }
        g = Graph.from_dict(data)
        assert [e.key for e in g.edge_list()] == [(0, 1, False)]
        assert (g.nodes[0].x, g.nodes[0].y) == (1.0, 2.0)
        assert g.revision == 1

    def test_from_dict_rejects_oversized_graph(self):
        data = {"nodes": [{"id": i} for i in range(MAX_NODES + 1)], "edges": []}
        with pytest.raises(InvalidInput):
            Graph.from_dict(data)

    def test_add_node_stops_at_cap(self):
        g = Graph.from_adjacency_list(str(MAX_NODES - 1))
        with pytest.raises(InvalidInput):
            g.add_node()
        assert g.node_count() == MAX_NODES
