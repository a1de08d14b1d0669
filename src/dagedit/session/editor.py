"""Edit session — owns the live graph and applies user intents to it.

Every mutation goes through here. Connections that would break acyclicity
are refused before they reach the graph model, and the validation report is
recomputed after each accepted change, so ``report`` always describes the
graph as it is right now. Rejections come back as ``EditResult`` values;
nothing raised by the model or the wire format escapes a public method.

Mutations and snapshot reads share one re-entrant lock: timers running
elsewhere (autosave, history capture) only ever see a settled graph.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from dagedit.config import EditorConfig
from dagedit.errors import (
    CycleError,
    DagEditError,
    DuplicateEdgeError,
    MalformedImportError,
    RejectedEdit,
    SelfLoopError,
    UnknownNodeError,
)
from dagedit.io.document import document_to_graph, edge_id_for, graph_to_dict, parse_document
from dagedit.ir.graph import Edge, GraphModel, Node
from dagedit.layout.engine import compute_layout
from dagedit.session.history import History, HistorySnapshot
from dagedit.session.store import GraphStore, StoredGraph
from dagedit.types import Position
from dagedit.validation.cycles import would_create_cycle
from dagedit.validation.report import ValidationReport
from dagedit.validation.validator import validate

logger = logging.getLogger(__name__)

Listener = Callable[[ValidationReport, HistorySnapshot], None]


@dataclass(frozen=True)
class EditResult:
    """Outcome of a session operation."""

    accepted: bool
    reason: str | None = None
    node_id: str | None = None
    edge_id: str | None = None

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def ok(cls, node_id: str | None = None, edge_id: str | None = None) -> EditResult:
        return cls(accepted=True, node_id=node_id, edge_id=edge_id)

    @classmethod
    def rejected(cls, reason: str) -> EditResult:
        return cls(accepted=False, reason=reason)


class EditSession:
    """Single owner of a graph being edited."""

    def __init__(
        self,
        graph: GraphModel | None = None,
        config: EditorConfig | None = None,
        name: str | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.name = name or self.config.graph_name
        self._graph = graph.copy() if graph is not None else GraphModel()
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        self._next_id = self._graph.max_numeric_id() + 1
        self._listeners: list[Listener] = []
        self._history = History(HistorySnapshot.capture(self._graph), self.config.history_size)
        self._report = validate(self._graph)

    # ─── Read side ──────────────────────────────────────────────────────────

    @property
    def report(self) -> ValidationReport:
        with self._lock:
            return self._report

    @property
    def graph(self) -> GraphModel:
        """A copy of the live graph; mutating it does not affect the session."""
        with self._lock:
            return self._graph.copy()

    @property
    def next_node_id(self) -> str:
        with self._lock:
            return str(self._next_id)

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def snapshot(self) -> HistorySnapshot:
        with self._lock:
            return HistorySnapshot.capture(self._graph)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(report, snapshot)`` after every applied mutation."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ─── Mutations ──────────────────────────────────────────────────────────

    def add_node(self, label: str = "", position: Position | None = None, data: dict | None = None) -> EditResult:
        with self._lock:
            node_id = str(self._next_id)
            self._next_id += 1
            if position is None:
                position = self._spawn_position()
            aux = dict(data or {})
            aux.pop("label", None)
            node = Node(id=node_id, label=label.strip() or f"Node {node_id}", position=position, data=aux)
            self._graph.add_node(node)
            logger.debug("added node %s (%s)", node_id, node.label)
            self._commit()
            return EditResult.ok(node_id=node_id)

    def connect(self, source_id: str, target_id: str) -> EditResult:
        """Append ``source_id -> target_id`` unless it is refused.

        Refused when an endpoint is unknown, on a self-loop, when the edge would
        close a cycle, and also when the same pair is already connected (the
        editor never holds two identical connections).
        """
        with self._lock:
            try:
                self._check_connection(source_id, target_id)
            except RejectedEdit as e:
                logger.warning("connect %s -> %s rejected: %s", source_id, target_id, e.reason)
                return EditResult.rejected(e.reason)

            edge = Edge(id=self._unique_edge_id(source_id, target_id), source=source_id, target=target_id)
            self._graph.add_edge(edge)
            logger.debug("connected %s -> %s as %s", source_id, target_id, edge.id)
            self._commit()
            return EditResult.ok(edge_id=edge.id)

    def delete_selection(self, node_ids: Iterable[str] = (), edge_ids: Iterable[str] = ()) -> EditResult:
        """Remove the given nodes (with their edges) and edges in one step.

        Ids that are not in the graph are ignored.
        """
        with self._lock:
            node_ids = [nid for nid in node_ids if self._graph.has_node(nid)]
            edge_ids = [eid for eid in edge_ids if self._graph.has_edge(eid)]
            if not node_ids and not edge_ids:
                return EditResult.ok()

            staged = self._graph.copy()
            for edge_id in edge_ids:
                staged.remove_edge(edge_id)
            for node_id in node_ids:
                staged.remove_node(node_id)
            self._graph = staged
            logger.debug("deleted nodes %s and edges %s", node_ids, edge_ids)
            self._commit()
            return EditResult.ok()

    def clear(self) -> EditResult:
        with self._lock:
            self._graph.clear()
            logger.debug("cleared graph")
            self._commit()
            return EditResult.ok()

    def auto_layout(self) -> EditResult:
        with self._lock:
            positions = compute_layout(self._graph, self.config.layout)
            for node in self._graph.nodes():
                node.position = positions[node.id]
            self._commit()
            return EditResult.ok()

    def load(self, nodes: Iterable[Node], edges: Iterable[Edge], name: str | None = None) -> EditResult:
        try:
            graph = GraphModel.from_records(nodes, edges)
        except DagEditError as e:
            logger.warning("load rejected: %s", e)
            return EditResult.rejected(str(e))
        return self.load_graph(graph, name)

    def load_graph(self, graph: GraphModel, name: str | None = None) -> EditResult:
        with self._lock:
            self._replace(graph.copy(), name)
            logger.info("loaded graph %r: %d nodes, %d edges", self.name, graph.node_count(), graph.edge_count())
            return EditResult.ok()

    def import_from(self, payload: str | bytes | Mapping[str, Any]) -> EditResult:
        """Replace the graph with a serialized document; malformed input changes nothing."""
        try:
            doc = parse_document(payload)
            graph = document_to_graph(doc)
        except MalformedImportError as e:
            logger.warning("import rejected: %s", e)
            return EditResult.rejected(str(e))
        with self._lock:
            self._replace(graph, doc.graph_name)
            logger.info("imported graph %r: %d nodes, %d edges", self.name, graph.node_count(), graph.edge_count())
            return EditResult.ok()

    def export_to(self) -> dict[str, Any]:
        with self._lock:
            return graph_to_dict(self._graph, self.name)

    # ─── History ────────────────────────────────────────────────────────────

    def undo(self) -> EditResult:
        with self._lock:
            return self._restore(self._history.undo(), "Nothing to undo")

    def redo(self) -> EditResult:
        with self._lock:
            return self._restore(self._history.redo(), "Nothing to redo")

    # ─── Persistence ────────────────────────────────────────────────────────

    def save(self, store: GraphStore, graph_id: str) -> StoredGraph:
        """Persist the current graph; a failing store leaves the session as it was."""
        with self._lock:
            doc = graph_to_dict(self._graph, self.name)
            report = self._report
        return store.save(graph_id, self.name, doc["nodes"], doc["edges"], report)

    def open(self, store: GraphStore, graph_id: str) -> EditResult:
        return self.import_from(store.load(graph_id).to_document())

    # ─── Internals ──────────────────────────────────────────────────────────

    def _check_connection(self, source_id: str, target_id: str) -> None:
        for endpoint in (source_id, target_id):
            if not self._graph.has_node(endpoint):
                raise UnknownNodeError(endpoint)
        if source_id == target_id:
            raise SelfLoopError()
        if self._graph.find_edge(source_id, target_id) is not None:
            raise DuplicateEdgeError()
        if would_create_cycle(self._graph, source_id, target_id):
            raise CycleError()

    def _unique_edge_id(self, source_id: str, target_id: str) -> str:
        base = edge_id_for(source_id, target_id)
        edge_id = base
        suffix = 1
        while self._graph.has_edge(edge_id):
            edge_id = f"{base}-{suffix}"
            suffix += 1
        return edge_id

    def _spawn_position(self) -> Position:
        ox, oy = self.config.spawn_origin
        extent = self.config.spawn_extent
        return Position(x=ox + self._rng.random() * extent, y=oy + self._rng.random() * extent)

    def _replace(self, graph: GraphModel, name: str | None) -> None:
        self._graph = graph
        if name:
            self.name = name
        self._next_id = max(self._next_id, graph.max_numeric_id() + 1)
        self._commit()

    def _restore(self, snapshot: HistorySnapshot | None, empty_reason: str) -> EditResult:
        if snapshot is None:
            return EditResult.rejected(empty_reason)
        self._graph = snapshot.to_graph()
        self._next_id = max(self._next_id, self._graph.max_numeric_id() + 1)
        self._commit(record=False)
        return EditResult.ok()

    def _commit(self, record: bool = True) -> None:
        self._report = validate(self._graph)
        snapshot = HistorySnapshot.capture(self._graph)
        if record:
            self._history.push(snapshot)
        for listener in list(self._listeners):
            try:
                listener(self._report, snapshot)
            except Exception:
                logger.exception("mutation listener %r failed", listener)
