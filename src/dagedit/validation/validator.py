"""DAG validator — structural checks producing a ValidationReport.

Rules run in a fixed order so reports are reproducible:

  1. Minimum size (warning)
  2. Cycles (error)
  3. Self-referential edges (error)
  4. Connectivity (two independent warnings)

The result depends only on the nodes and edges passed in.
"""

from __future__ import annotations

from dagedit.ir.graph import GraphModel
from dagedit.validation.cycles import has_cycle
from dagedit.validation.report import ValidationReport

MIN_NODES_WARNING = "Graph should have at least 2 nodes for meaningful connections"
CYCLE_ERROR = "Graph contains cycles - DAG must be acyclic"
SELF_LOOP_ERROR = "Self-referential edges are not allowed in a DAG"
DISCONNECTED_WARNING = "Some nodes are not connected to the graph"
NO_EDGES_WARNING = "No connections between nodes"


def validate(graph: GraphModel) -> ValidationReport:
    errors: list[str] = []
    warnings: list[str] = []

    node_count = graph.node_count()
    edges = graph.edges()

    if node_count < 2:
        warnings.append(MIN_NODES_WARNING)

    if has_cycle(graph):
        errors.append(CYCLE_ERROR)

    if any(edge.is_self_loop for edge in edges):
        errors.append(SELF_LOOP_ERROR)

    if node_count > 1:
        touched: set[str] = set()
        for edge in edges:
            touched.add(edge.source)
            touched.add(edge.target)
        if len(touched) < node_count and edges:
            warnings.append(DISCONNECTED_WARNING)
        if not edges:
            warnings.append(NO_EDGES_WARNING)

    return ValidationReport(errors=tuple(errors), warnings=tuple(warnings))
