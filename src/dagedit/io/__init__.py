"""Serialized graph documents."""

from dagedit.io.document import (
    EdgeRecord,
    GraphDocument,
    NodeRecord,
    document_to_graph,
    edge_to_dict,
    graph_to_dict,
    node_to_dict,
    parse_document,
)

__all__ = [
    "EdgeRecord",
    "GraphDocument",
    "NodeRecord",
    "document_to_graph",
    "edge_to_dict",
    "graph_to_dict",
    "node_to_dict",
    "parse_document",
]
