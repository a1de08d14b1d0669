"""Tests for dagedit.validation.cycles — whole-graph and proposed-edge checks."""

import itertools

import networkx as nx

from dagedit.ir.graph import Edge, GraphModel, Node
from dagedit.types import Position
from dagedit.validation.cycles import find_cycle, has_cycle, would_create_cycle


def make_graph(node_ids: list[str], *edges: tuple[str, str]) -> GraphModel:
    """Build a GraphModel from node ids and (src, tgt) pairs."""
    g = GraphModel()
    for node_id in node_ids:
        g.add_node(Node(id=node_id, label=node_id, position=Position(0.0, 0.0)))
    for i, (src, tgt) in enumerate(edges):
        g.add_edge(Edge(id=f"e{i}", source=src, target=tgt))
    return g


class TestHasCycle:
    def test_empty_graph(self):
        assert not has_cycle(GraphModel())

    def test_chain_is_acyclic(self):
        g = make_graph(["1", "2", "3"], ("1", "2"), ("2", "3"))
        assert not has_cycle(g)

    def test_diamond_is_acyclic(self):
        """Reaching a node twice via different paths is not a cycle."""
        g = make_graph(["a", "b", "c", "d"], ("a", "b"), ("a", "c"), ("b", "d"), ("c", "d"))
        assert not has_cycle(g)

    def test_two_cycle(self):
        g = make_graph(["1", "2"], ("1", "2"), ("2", "1"))
        assert has_cycle(g)

    def test_self_loop(self):
        g = make_graph(["1"], ("1", "1"))
        assert has_cycle(g)

    def test_cycle_not_reachable_from_first_node(self):
        g = make_graph(["1", "2", "3", "4"], ("1", "2"), ("3", "4"), ("4", "3"))
        assert has_cycle(g)

    def test_long_chain_does_not_hit_recursion_limit(self):
        ids = [str(i) for i in range(5000)]
        g = make_graph(ids, *zip(ids, ids[1:]))
        assert not has_cycle(g)
        assert has_cycle(g, extra_edge=(ids[-1], ids[0]))


class TestFindCycle:
    def test_returns_closed_path(self):
        g = make_graph(["1", "2", "3"], ("1", "2"), ("2", "3"), ("3", "1"))
        cycle = find_cycle(g)
        assert cycle is not None
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"1", "2", "3"}

    def test_self_loop_path(self):
        g = make_graph(["x"], ("x", "x"))
        assert find_cycle(g) == ["x", "x"]

    def test_acyclic_returns_none(self):
        g = make_graph(["1", "2"], ("1", "2"))
        assert find_cycle(g) is None


class TestWouldCreateCycle:
    def test_self_loop_is_always_a_cycle(self):
        g = make_graph(["1"])
        assert would_create_cycle(g, "1", "1")
        assert would_create_cycle(GraphModel(), "ghost", "ghost")

    def test_closing_edge(self):
        g = make_graph(["1", "2", "3"], ("1", "2"), ("2", "3"))
        assert would_create_cycle(g, "3", "1")
        assert would_create_cycle(g, "2", "1")

    def test_forward_edge(self):
        g = make_graph(["1", "2", "3"], ("1", "2"), ("2", "3"))
        assert not would_create_cycle(g, "1", "3")

    def test_does_not_mutate_graph(self):
        g = make_graph(["1", "2"], ("1", "2"))
        would_create_cycle(g, "2", "1")
        assert g.edge_count() == 1

    def test_matches_networkx_on_all_pairs(self):
        g = make_graph(
            ["a", "b", "c", "d", "e"],
            ("a", "b"),
            ("b", "c"),
            ("a", "d"),
            ("d", "c"),
            ("c", "e"),
        )
        for src, tgt in itertools.permutations(g.node_ids(), 2):
            dg = g.to_digraph()
            dg.add_edge(src, tgt)
            expected = not nx.is_directed_acyclic_graph(dg)
            assert would_create_cycle(g, src, tgt) == expected, (src, tgt)
