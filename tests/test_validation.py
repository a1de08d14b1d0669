"""Tests for dagedit.validation.validator — rule order, severities and purity."""

from dagedit.ir.graph import Edge, GraphModel, Node
from dagedit.types import Position
from dagedit.validation import (
    CYCLE_ERROR,
    DISCONNECTED_WARNING,
    MIN_NODES_WARNING,
    NO_EDGES_WARNING,
    SELF_LOOP_ERROR,
    ValidationReport,
    validate,
)


def _make_graph(node_ids: list[str], edges: list[tuple[str, str]] | None = None) -> GraphModel:
    nodes = [Node(id=n, label=n, position=Position(0.0, 0.0)) for n in node_ids]
    return GraphModel.from_records(
        nodes, [Edge(id=f"e{i}", source=s, target=t) for i, (s, t) in enumerate(edges or [])]
    )


class TestMinimumSize:
    def test_empty_graph(self):
        report = validate(GraphModel())
        assert report.is_valid
        assert report.errors == ()
        assert report.warnings == (MIN_NODES_WARNING,)
        assert "at least 2 nodes" in report.warnings[0]

    def test_single_node(self):
        report = validate(_make_graph(["1"]))
        assert report.is_valid
        assert report.warnings == (MIN_NODES_WARNING,)


class TestErrors:
    def test_two_cycle(self):
        report = validate(_make_graph(["1", "2"], [("1", "2"), ("2", "1")]))
        assert not report.is_valid
        assert report.errors == (CYCLE_ERROR,)

    def test_self_loop_reports_cycle_then_self_loop(self):
        report = validate(_make_graph(["1", "2"], [("1", "2"), ("2", "2")]))
        assert not report.is_valid
        assert report.errors == (CYCLE_ERROR, SELF_LOOP_ERROR)

    def test_self_loop_single_node(self):
        report = validate(_make_graph(["1"], [("1", "1")]))
        assert not report.is_valid
        assert SELF_LOOP_ERROR in report.errors
        assert report.warnings == (MIN_NODES_WARNING,)

    def test_valid_chain(self):
        report = validate(_make_graph(["1", "2", "3"], [("1", "2"), ("2", "3")]))
        assert report.is_valid
        assert report.errors == ()
        assert report.warnings == ()


class TestConnectivity:
    def test_no_edges(self):
        report = validate(_make_graph(["1", "2", "3"]))
        assert report.is_valid
        assert report.errors == ()
        assert report.warnings == (NO_EDGES_WARNING,)

    def test_isolated_node(self):
        report = validate(_make_graph(["1", "2", "3"], [("1", "2")]))
        assert report.is_valid
        assert report.warnings == (DISCONNECTED_WARNING,)

    def test_all_touched(self):
        report = validate(_make_graph(["1", "2", "3", "4"], [("1", "2"), ("3", "4")]))
        assert report.warnings == ()


class TestPurity:
    def test_repeatable(self):
        g = _make_graph(["1", "2", "3"], [("1", "2"), ("2", "1")])
        assert validate(g) == validate(g)

    def test_does_not_mutate(self):
        g = _make_graph(["1", "2"], [("1", "2")])
        before = g.copy()
        validate(g)
        assert g.structurally_equal(before)


class TestReport:
    def test_warnings_never_invalidate(self):
        report = ValidationReport(warnings=("careful",))
        assert report.is_valid

    def test_errors_always_invalidate(self):
        report = ValidationReport(errors=("broken",))
        assert not report.is_valid

    def test_to_dict_round_trip(self):
        report = ValidationReport(errors=(CYCLE_ERROR,), warnings=(NO_EDGES_WARNING,))
        data = report.to_dict()
        assert data == {"isValid": False, "errors": [CYCLE_ERROR], "warnings": [NO_EDGES_WARNING]}
        assert ValidationReport.from_dict(data) == report
