"""Graph model — the in-memory node/edge collection edited by a session.

This module owns the canonical graph data structure used by all downstream
phases (cycle detection, validation, layout). It only answers structural
queries and keeps edges attached to existing nodes; acyclicity is enforced
one level up, by the edit session.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import networkx as nx

from dagedit.errors import DuplicateIdError, UnknownNodeError
from dagedit.types import Position

logger = logging.getLogger(__name__)

DEFAULT_NODE_TYPE = "custom"


@dataclass
class Node:
    id: str
    label: str
    position: Position
    data: dict = field(default_factory=dict)
    type: str = DEFAULT_NODE_TYPE


@dataclass
class Edge:
    id: str
    source: str
    target: str
    data: dict = field(default_factory=dict)

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


class GraphModel:
    """Insertion-ordered nodes and edges with cascading removal.

    Nodes and edges are kept in dicts keyed by id, so iteration follows
    insertion order.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}

    @classmethod
    def from_records(cls, nodes: Iterable[Node], edges: Iterable[Edge]) -> GraphModel:
        """Build a graph wholesale; edges with a missing endpoint are dropped."""
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for edge in edges:
            if edge.source not in graph._nodes or edge.target not in graph._nodes:
                logger.warning("dropping dangling edge %s (%s -> %s)", edge.id, edge.source, edge.target)
                continue
            graph.add_edge(edge)
        return graph

    # ─── Queries ────────────────────────────────────────────────────────────

    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def node_ids(self) -> list[str]:
        return list(self._nodes)

    def node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edges

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def find_edge(self, source: str, target: str) -> Edge | None:
        for edge in self._edges.values():
            if edge.source == source and edge.target == target:
                return edge
        return None

    def incident_edges(self, node_id: str) -> list[Edge]:
        return [e for e in self._edges.values() if node_id in (e.source, e.target)]

    def max_numeric_id(self) -> int:
        """Highest node id that parses as an integer, or 0."""
        highest = 0
        for node_id in self._nodes:
            try:
                highest = max(highest, int(node_id))
            except ValueError:
                continue
        return highest

    # ─── Mutation ───────────────────────────────────────────────────────────

    def add_node(self, node: Node) -> None:
        if node.id in self._nodes:
            raise DuplicateIdError("node", node.id)
        self._nodes[node.id] = node

    def add_edge(self, edge: Edge) -> None:
        if edge.id in self._edges:
            raise DuplicateIdError("edge", edge.id)
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._nodes:
                raise UnknownNodeError(endpoint)
        self._edges[edge.id] = edge

    def remove_node(self, node_id: str) -> list[Edge]:
        """Remove a node together with every edge touching it."""
        if node_id not in self._nodes:
            raise UnknownNodeError(node_id)
        removed = self.incident_edges(node_id)
        for edge in removed:
            del self._edges[edge.id]
        del self._nodes[node_id]
        return removed

    def remove_edge(self, edge_id: str) -> Edge | None:
        return self._edges.pop(edge_id, None)

    def clear(self) -> None:
        self._nodes.clear()
        self._edges.clear()

    # ─── Views ──────────────────────────────────────────────────────────────

    def copy(self) -> GraphModel:
        clone = GraphModel()
        clone._nodes = {nid: copy.deepcopy(n) for nid, n in self._nodes.items()}
        clone._edges = {eid: copy.deepcopy(e) for eid, e in self._edges.items()}
        return clone

    def to_digraph(self) -> nx.DiGraph:
        """Topology as a networkx DiGraph; records are stored under ``data``.

        Parallel edges between the same pair collapse into one DiGraph edge.
        """
        digraph: nx.DiGraph = nx.DiGraph()
        for node in self._nodes.values():
            digraph.add_node(node.id, data=node)
        for edge in self._edges.values():
            digraph.add_edge(edge.source, edge.target, data=edge)
        return digraph

    def structurally_equal(self, other: GraphModel, tolerance: float = 1e-6) -> bool:
        """Same node ids, labels, positions (within tolerance) and edges."""
        if self.node_ids() != other.node_ids():
            return False
        for node in self._nodes.values():
            theirs = other._nodes[node.id]
            if node.label != theirs.label or not node.position.close_to(theirs.position, tolerance):
                return False
        mine = [(e.id, e.source, e.target) for e in self._edges.values()]
        return mine == [(e.id, e.source, e.target) for e in other._edges.values()]
