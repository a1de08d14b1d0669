"""Persistence collaborator interface and an in-memory implementation."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from dagedit.errors import StoreError
from dagedit.validation.report import ValidationReport


@dataclass
class StoredGraph:
    """A persisted graph row: serialized nodes/edges plus validation status."""

    id: str
    name: str
    nodes: list[dict[str, Any]]
    edges: list[dict[str, Any]]
    validation_status: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_document(self) -> dict[str, Any]:
        return {"nodes": self.nodes, "edges": self.edges, "graphName": self.name}


class GraphStore(Protocol):
    """Protocol that persistence backends must implement."""

    def save(
        self,
        graph_id: str,
        name: str,
        nodes: list[dict[str, Any]],
        edges: list[dict[str, Any]],
        report: ValidationReport,
    ) -> StoredGraph:
        """Persist a graph and return the stored row."""
        ...

    def load(self, graph_id: str) -> StoredGraph:
        """Return the stored row for ``graph_id``."""
        ...


class MemoryStore:
    """Dict-backed store that stamps rows like a database would."""

    def __init__(self) -> None:
        self._rows: dict[str, StoredGraph] = {}

    def __contains__(self, graph_id: str) -> bool:
        return graph_id in self._rows

    def save(
        self,
        graph_id: str,
        name: str,
        nodes: list[dict[str, Any]],
        edges: list[dict[str, Any]],
        report: ValidationReport,
    ) -> StoredGraph:
        now = datetime.now(timezone.utc)
        existing = self._rows.get(graph_id)
        row = StoredGraph(
            id=graph_id,
            name=name,
            nodes=copy.deepcopy(nodes),
            edges=copy.deepcopy(edges),
            validation_status=report.to_dict(),
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self._rows[graph_id] = row
        return copy.deepcopy(row)

    def load(self, graph_id: str) -> StoredGraph:
        try:
            return copy.deepcopy(self._rows[graph_id])
        except KeyError:
            raise StoreError(f"graph '{graph_id}' not found") from None
