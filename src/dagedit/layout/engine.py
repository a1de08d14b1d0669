"""Layout engine convenience functions."""

from __future__ import annotations

from dagedit.config import LayoutConfig
from dagedit.ir.graph import GraphModel
from dagedit.layout.layered import LayeredLayout
from dagedit.layout.types import LayoutResult
from dagedit.types import Position


def full_layout(graph: GraphModel, config: LayoutConfig | None = None) -> LayoutResult:
    """Run the layered layout pipeline."""
    return LayeredLayout(config).layout(graph)


def compute_layout(graph: GraphModel, config: LayoutConfig | None = None) -> dict[str, Position]:
    """Position for every node of ``graph``, keyed by node id."""
    return full_layout(graph, config).positions()
