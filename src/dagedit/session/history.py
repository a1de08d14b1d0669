"""Undo/redo history — a bounded list of immutable graph snapshots."""

from __future__ import annotations

import copy
import time
from dataclasses import dataclass

from dagedit.ir.graph import Edge, GraphModel, Node

MAX_HISTORY_SIZE = 50


@dataclass(frozen=True)
class HistorySnapshot:
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]
    timestamp: float

    @classmethod
    def capture(cls, graph: GraphModel) -> HistorySnapshot:
        return cls(
            nodes=tuple(copy.deepcopy(n) for n in graph.nodes()),
            edges=tuple(copy.deepcopy(e) for e in graph.edges()),
            timestamp=time.time(),
        )

    def to_graph(self) -> GraphModel:
        """A fresh, independently mutable graph built from this snapshot."""
        return GraphModel.from_records(
            (copy.deepcopy(n) for n in self.nodes),
            (copy.deepcopy(e) for e in self.edges),
        )


class History:
    """Linear history with a movable cursor.

    Pushing after an undo discards the redo tail. Once ``max_size`` entries
    are held, the oldest one is dropped.
    """

    def __init__(self, initial: HistorySnapshot, max_size: int = MAX_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError("history size must be at least 1")
        self.max_size = max_size
        self._entries: list[HistorySnapshot] = [initial]
        self._index = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def current(self) -> HistorySnapshot:
        return self._entries[self._index]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def push(self, snapshot: HistorySnapshot) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(snapshot)
        if len(self._entries) > self.max_size:
            del self._entries[0]
        self._index = len(self._entries) - 1

    def undo(self) -> HistorySnapshot | None:
        if not self.can_undo:
            return None
        self._index -= 1
        return self._entries[self._index]

    def redo(self) -> HistorySnapshot | None:
        if not self.can_redo:
            return None
        self._index += 1
        return self._entries[self._index]
