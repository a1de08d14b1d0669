"""Edit session and the collaborators it talks to."""

from dagedit.session.editor import EditResult, EditSession
from dagedit.session.history import MAX_HISTORY_SIZE, History, HistorySnapshot
from dagedit.session.store import GraphStore, MemoryStore, StoredGraph

__all__ = [
    "MAX_HISTORY_SIZE",
    "EditResult",
    "EditSession",
    "GraphStore",
    "History",
    "HistorySnapshot",
    "MemoryStore",
    "StoredGraph",
]
