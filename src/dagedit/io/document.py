"""Import/export document — the JSON shape exchanged with files and storage.

A document carries the editor's node and edge records plus an optional graph
name and timestamp::

    {
      "nodes": [{"id": "1", "type": "custom", "position": {"x": 0, "y": 0},
                 "data": {"label": "Start"}}],
      "edges": [{"id": "e1-2", "source": "1", "target": "2"}],
      "graphName": "Untitled Graph",
      "timestamp": "2025-07-02T14:10:36+00:00"
    }

``nodes`` and ``edges`` are required and must be arrays; anything else is a
malformed document. Unknown edge keys (styling, markers) are carried in the
edge's auxiliary data and written back on export.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dagedit.errors import DagEditError, MalformedImportError
from dagedit.ir.graph import DEFAULT_NODE_TYPE, Edge, GraphModel, Node
from dagedit.types import Position


def _coerce_id(value: Any) -> Any:
    # Older exports store numeric ids.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class PositionRecord(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    x: float = 0.0
    y: float = 0.0


class NodeRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    type: str = DEFAULT_NODE_TYPE
    position: PositionRecord = Field(default_factory=PositionRecord)
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_numeric_id(cls, value: Any) -> Any:
        return _coerce_id(value)


class EdgeRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    source: str
    target: str

    @field_validator("id", "source", "target", mode="before")
    @classmethod
    def coerce_numeric_ids(cls, value: Any) -> Any:
        return _coerce_id(value)


class GraphDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    nodes: list[NodeRecord]
    edges: list[EdgeRecord]
    graph_name: str | None = Field(default=None, alias="graphName")
    timestamp: str | None = None


# ─── Decoding ────────────────────────────────────────────────────────────────


def parse_document(payload: str | bytes | Mapping[str, Any]) -> GraphDocument:
    """Decode and shape-check a document.

    Raises:
        MalformedImportError: invalid JSON, or ``nodes``/``edges`` missing or
            not arrays, or a record missing required fields.
    """
    try:
        if isinstance(payload, (str, bytes)):
            return GraphDocument.model_validate_json(payload)
        if not isinstance(payload, Mapping):
            raise MalformedImportError("expected a JSON object")
        return GraphDocument.model_validate(dict(payload))
    except ValidationError as e:
        raise MalformedImportError(_summarise(e)) from e


def _summarise(error: ValidationError) -> str:
    first = error.errors()[0]
    where = ".".join(str(part) for part in first["loc"]) or "document"
    return f"{where}: {first['msg']}"


def edge_id_for(source: str, target: str) -> str:
    return f"e{source}-{target}"


def document_to_graph(doc: GraphDocument) -> GraphModel:
    """Build a graph model from a decoded document."""
    nodes: list[Node] = []
    for record in doc.nodes:
        data = dict(record.data)
        label = data.pop("label", record.id)
        nodes.append(
            Node(
                id=record.id,
                label=str(label),
                position=Position(x=record.position.x, y=record.position.y),
                data=data,
                type=record.type,
            )
        )

    edges: list[Edge] = []
    for record in doc.edges:
        edges.append(
            Edge(
                id=record.id or edge_id_for(record.source, record.target),
                source=record.source,
                target=record.target,
                data=dict(record.model_extra or {}),
            )
        )

    try:
        return GraphModel.from_records(nodes, edges)
    except DagEditError as e:
        raise MalformedImportError(str(e)) from e


# ─── Encoding ────────────────────────────────────────────────────────────────


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def node_to_dict(node: Node) -> dict[str, Any]:
    return {
        "id": node.id,
        "type": node.type,
        "position": node.position.to_dict(),
        "data": {**node.data, "label": node.label},
    }


def edge_to_dict(edge: Edge) -> dict[str, Any]:
    return {**edge.data, "id": edge.id, "source": edge.source, "target": edge.target}


def graph_to_dict(graph: GraphModel, graph_name: str | None = None, timestamp: str | None = None) -> dict[str, Any]:
    """Serializable export of ``graph``; the timestamp defaults to now (UTC)."""
    return {
        "nodes": [node_to_dict(n) for n in graph.nodes()],
        "edges": [edge_to_dict(e) for e in graph.edges()],
        "graphName": graph_name,
        "timestamp": timestamp or utc_timestamp(),
    }
