"""Layout engine public API."""

from __future__ import annotations

from dagedit.layout.engine import compute_layout, full_layout
from dagedit.layout.layered import (
    LayerAssignment,
    LayeredLayout,
    assign_coordinates,
    count_crossings,
    initial_ordering,
    minimise_crossings,
)
from dagedit.layout.types import LayoutNode, LayoutResult

__all__ = [
    "LayerAssignment",
    "LayeredLayout",
    "LayoutNode",
    "LayoutResult",
    "assign_coordinates",
    "compute_layout",
    "count_crossings",
    "full_layout",
    "initial_ordering",
    "minimise_crossings",
]
