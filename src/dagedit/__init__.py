"""dagedit: DAG editing core — cycle-safe edits, validation and layered layout."""

from dagedit.config import EditorConfig, LayoutConfig
from dagedit.ir.graph import Edge, GraphModel, Node
from dagedit.layout import compute_layout
from dagedit.session import EditResult, EditSession
from dagedit.types import Position
from dagedit.validation import ValidationReport, validate, would_create_cycle

__all__ = [
    "Edge",
    "EditResult",
    "EditSession",
    "EditorConfig",
    "GraphModel",
    "LayoutConfig",
    "Node",
    "Position",
    "ValidationReport",
    "compute_layout",
    "validate",
    "would_create_cycle",
]
