"""Tests for dagedit.session.history — cursor movement and bounds."""

import pytest

from dagedit.ir.graph import GraphModel, Node
from dagedit.session.history import History, HistorySnapshot
from dagedit.types import Position


def _snapshot(*node_ids: str) -> HistorySnapshot:
    graph = GraphModel.from_records([Node(id=n, label=n, position=Position(0.0, 0.0)) for n in node_ids], [])
    return HistorySnapshot.capture(graph)


class TestHistory:
    def test_initial_state(self):
        h = History(_snapshot())
        assert len(h) == 1
        assert not h.can_undo
        assert not h.can_redo
        assert h.undo() is None
        assert h.redo() is None

    def test_undo_redo(self):
        h = History(_snapshot())
        h.push(_snapshot("1"))
        h.push(_snapshot("1", "2"))
        assert len(h.undo().nodes) == 1
        assert len(h.undo().nodes) == 0
        assert h.undo() is None
        assert len(h.redo().nodes) == 1

    def test_push_discards_redo_tail(self):
        h = History(_snapshot())
        h.push(_snapshot("1"))
        h.push(_snapshot("1", "2"))
        h.undo()
        h.push(_snapshot("1", "3"))
        assert not h.can_redo
        assert [n.id for n in h.current.nodes] == ["1", "3"]
        assert len(h) == 3

    def test_drops_oldest(self):
        h = History(_snapshot(), max_size=2)
        h.push(_snapshot("1"))
        h.push(_snapshot("1", "2"))
        assert len(h) == 2
        assert [n.id for n in h.undo().nodes] == ["1"]
        assert not h.can_undo

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            History(_snapshot(), max_size=0)


class TestSnapshot:
    def test_capture_is_a_copy(self):
        graph = GraphModel.from_records([Node(id="1", label="a", position=Position(0.0, 0.0))], [])
        snap = HistorySnapshot.capture(graph)
        graph.node("1").label = "changed"
        assert snap.nodes[0].label == "a"

    def test_to_graph_is_independent(self):
        snap = _snapshot("1")
        graph = snap.to_graph()
        graph.node("1").label = "changed"
        assert snap.nodes[0].label == "1"
