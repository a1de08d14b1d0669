"""Intermediate representation: the editable graph model."""

from dagedit.ir.graph import Edge, GraphModel, Node

__all__ = [
    "Edge",
    "GraphModel",
    "Node",
]
