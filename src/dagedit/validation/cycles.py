"""Cycle detection over a graph plus an optional hypothetical edge.

One depth-first traversal serves both uses: whole-graph validation (no extra
edge) and incremental edge checks (the proposed edge is added to the
adjacency before the search). The DFS keeps a global ``visited`` set and an
``on_path`` set for the active path; reaching a node that is still on the
path is a back-edge, hence a cycle. Every node is entered at most once over
all DFS roots, so a call costs O(V + E).
"""

from __future__ import annotations

from dagedit.ir.graph import GraphModel


def _adjacency(graph: GraphModel, extra_edge: tuple[str, str] | None) -> dict[str, list[str]]:
    adjacency: dict[str, list[str]] = {node_id: [] for node_id in graph.node_ids()}
    for edge in graph.edges():
        adjacency.setdefault(edge.source, []).append(edge.target)
    if extra_edge is not None:
        src, tgt = extra_edge
        adjacency.setdefault(src, []).append(tgt)
    return adjacency


def _search(adjacency: dict[str, list[str]]) -> list[str] | None:
    """Return the active path closed by the first back-edge found, or None."""
    visited: set[str] = set()
    on_path: set[str] = set()

    for root in adjacency:
        if root in visited:
            continue
        visited.add(root)
        on_path.add(root)
        path: list[str] = [root]
        # Each frame is (node, index of the next neighbour to explore).
        stack: list[tuple[str, int]] = [(root, 0)]

        while stack:
            node, idx = stack[-1]
            neighbors = adjacency.get(node, [])
            if idx >= len(neighbors):
                stack.pop()
                path.pop()
                on_path.discard(node)
                continue
            stack[-1] = (node, idx + 1)
            nxt = neighbors[idx]
            if nxt in on_path:
                return path[path.index(nxt) :] + [nxt]
            if nxt not in visited:
                visited.add(nxt)
                on_path.add(nxt)
                path.append(nxt)
                stack.append((nxt, 0))

    return None


def find_cycle(graph: GraphModel, extra_edge: tuple[str, str] | None = None) -> list[str] | None:
    """Node ids along one cycle, first node repeated at the end; None if acyclic."""
    return _search(_adjacency(graph, extra_edge))


def has_cycle(graph: GraphModel, extra_edge: tuple[str, str] | None = None) -> bool:
    return find_cycle(graph, extra_edge) is not None


def would_create_cycle(graph: GraphModel, source_id: str, target_id: str) -> bool:
    """True if adding ``source_id -> target_id`` would close a directed cycle.

    A self-loop is a degenerate cycle and is reported without searching.
    """
    if source_id == target_id:
        return True
    return has_cycle(graph, (source_id, target_id))
