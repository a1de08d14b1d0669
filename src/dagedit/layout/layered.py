"""Layered (hierarchical) layout engine.

Phases:
  1. Layer assignment (longest path from a source, Kahn-style peeling)
  2. Crossing minimization (barycenter sweeps)
  3. Coordinate assignment

Nodes that cannot be peeled because they sit on or below a cycle are put in a
single terminal layer after the deepest resolved one, so any graph, valid or
not, gets a complete layout.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

import networkx as nx

from dagedit.config import LayoutConfig
from dagedit.ir.graph import GraphModel
from dagedit.layout.types import LayoutNode, LayoutResult

# ─── Layer Assignment ────────────────────────────────────────────────────────


@dataclass
class LayerAssignment:
    layers: dict[str, int]
    layer_count: int
    terminal_ids: list[str] = field(default_factory=list)

    @classmethod
    def assign(cls, graph: GraphModel) -> LayerAssignment:
        digraph = graph.to_digraph()
        in_deg: dict[str, int] = {node_id: digraph.in_degree(node_id) for node_id in digraph.nodes}
        depth: dict[str, int] = {node_id: 0 for node_id in digraph.nodes}
        resolved: dict[str, int] = {}

        queue: deque[str] = deque(node_id for node_id in digraph.nodes if in_deg[node_id] == 0)
        while queue:
            node_id = queue.popleft()
            resolved[node_id] = depth[node_id]
            for succ in digraph.successors(node_id):
                depth[succ] = max(depth[succ], depth[node_id] + 1)
                in_deg[succ] -= 1
                if in_deg[succ] == 0:
                    queue.append(succ)

        terminal_ids = [node_id for node_id in digraph.nodes if node_id not in resolved]
        if terminal_ids:
            terminal_layer = max(resolved.values()) + 1 if resolved else 0
            for node_id in terminal_ids:
                resolved[node_id] = terminal_layer

        layers = {node_id: resolved[node_id] for node_id in digraph.nodes}
        layer_count = (max(layers.values()) + 1) if layers else 0
        return cls(layers=layers, layer_count=layer_count, terminal_ids=terminal_ids)


# ─── Crossing Minimization ───────────────────────────────────────────────────


def initial_ordering(graph: GraphModel, la: LayerAssignment) -> list[list[str]]:
    """Group node ids by layer, keeping graph insertion order inside a layer."""
    ordering: list[list[str]] = [[] for _ in range(la.layer_count)]
    for node_id in graph.node_ids():
        ordering[la.layers[node_id]].append(node_id)
    return ordering


def minimise_crossings(ordering: list[list[str]], digraph: nx.DiGraph, max_passes: int = 24) -> list[list[str]]:
    """Reorder layers with the barycenter heuristic while crossings decrease."""
    best_ordering = [list(layer) for layer in ordering]
    best = count_crossings(best_ordering, digraph)
    current = [list(layer) for layer in ordering]

    for _pass in range(max_passes):
        if best == 0:
            break
        for layer_idx in range(1, len(current)):
            prev = {nid: float(i) for i, nid in enumerate(current[layer_idx - 1])}
            own = {nid: float(i) for i, nid in enumerate(current[layer_idx])}
            current[layer_idx].sort(key=lambda a, p=prev, o=own: _barycenter(a, digraph, p, o, "incoming"))

        for layer_idx in range(len(current) - 2, -1, -1):
            nxt = {nid: float(i) for i, nid in enumerate(current[layer_idx + 1])}
            own = {nid: float(i) for i, nid in enumerate(current[layer_idx])}
            current[layer_idx].sort(key=lambda a, n=nxt, o=own: _barycenter(a, digraph, n, o, "outgoing"))

        new = count_crossings(current, digraph)
        if new >= best:
            break
        best = new
        best_ordering = [list(layer) for layer in current]

    return best_ordering


def _barycenter(
    node_id: str,
    digraph: nx.DiGraph,
    neighbor_pos: dict[str, float],
    own_pos: dict[str, float],
    direction: str,
) -> float:
    neighbors = digraph.predecessors(node_id) if direction == "incoming" else digraph.successors(node_id)
    positions = [neighbor_pos[nb] for nb in neighbors if nb in neighbor_pos]
    if not positions:
        return own_pos[node_id]
    return sum(positions) / len(positions)


def count_crossings(ordering: list[list[str]], digraph: nx.DiGraph) -> int:
    """Count crossings between edges joining adjacent layers."""
    total = 0
    for l_idx in range(len(ordering) - 1):
        tgt_pos: dict[str, int] = {nid: i for i, nid in enumerate(ordering[l_idx + 1])}
        edges: list[tuple[int, int]] = []
        for sp, src_id in enumerate(ordering[l_idx]):
            for nb in digraph.successors(src_id):
                if nb in tgt_pos:
                    edges.append((sp, tgt_pos[nb]))
        for i in range(len(edges)):
            for j in range(i + 1, len(edges)):
                ei, ej = edges[i], edges[j]
                if (ei[0] < ej[0] and ei[1] > ej[1]) or (ei[0] > ej[0] and ei[1] < ej[1]):
                    total += 1
    return total


# ─── Coordinate Assignment ───────────────────────────────────────────────────


def assign_coordinates(ordering: list[list[str]], config: LayoutConfig) -> list[LayoutNode]:
    """Place layers top to bottom, each centred against the widest layer."""
    step_x = config.node_width + config.h_gap
    step_y = config.node_height + config.v_gap

    layer_widths = [len(layer) * step_x - config.h_gap if layer else 0.0 for layer in ordering]
    max_layer_w = max(layer_widths, default=0.0)

    nodes: list[LayoutNode] = []
    for layer_idx, layer_nodes in enumerate(ordering):
        offset = (max_layer_w - layer_widths[layer_idx]) / 2
        for order, node_id in enumerate(layer_nodes):
            nodes.append(
                LayoutNode(
                    id=node_id,
                    layer=layer_idx,
                    order=order,
                    x=offset + order * step_x,
                    y=layer_idx * step_y,
                    width=config.node_width,
                    height=config.node_height,
                )
            )
    return nodes


# ─── LayeredLayout Engine ────────────────────────────────────────────────────


class LayeredLayout:
    """Hierarchical layered layout engine."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def layout(self, graph: GraphModel) -> LayoutResult:
        if graph.node_count() == 0:
            return LayoutResult(nodes=[], layer_count=0)

        la = LayerAssignment.assign(graph)
        ordering = initial_ordering(graph, la)
        ordering = minimise_crossings(ordering, graph.to_digraph(), self.config.crossing_passes)
        layout_nodes = assign_coordinates(ordering, self.config)
        return LayoutResult(nodes=layout_nodes, layer_count=la.layer_count, terminal_ids=la.terminal_ids)
