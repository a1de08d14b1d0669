"""CLI entry point for dagedit."""

from __future__ import annotations

import json
import sys

import click
import networkx as nx

from dagedit.config import EditorConfig, LayoutConfig
from dagedit.layout.engine import full_layout
from dagedit.log import setup_logging
from dagedit.session.editor import EditResult, EditSession
from dagedit.validation.cycles import find_cycle

EXIT_REJECTED = 1
EXIT_INVALID = 2


def _open_session(path: str, config: EditorConfig | None = None) -> EditSession:
    try:
        with open(path) as f:
            text = f.read()
    except OSError as e:
        click.echo(f"error: cannot read '{path}': {e}", err=True)
        sys.exit(EXIT_REJECTED)

    session = EditSession(config=config)
    result = session.import_from(text)
    if not result:
        click.echo(f"error: '{path}': {result.reason}", err=True)
        sys.exit(EXIT_REJECTED)
    return session


def _write_export(session: EditSession, output: str | None) -> None:
    rendered = json.dumps(session.export_to(), indent=2) + "\n"
    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(EXIT_REJECTED)
    else:
        click.echo(rendered, nl=False)


def _require(result: EditResult) -> None:
    if not result:
        click.echo(f"rejected: {result.reason}", err=True)
        sys.exit(EXIT_REJECTED)


_output_option = click.option(
    "--output", "-o", "output", type=str, default=None, help="Write the edited graph here instead of stdout"
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log edits and rejections to stderr")
def main(verbose: bool) -> None:
    """Edit and check DAG export files (JSON with nodes and edges)."""
    setup_logging(verbose)


@main.command()
@click.argument("input", type=click.Path(exists=True))
def validate(input: str) -> None:
    """Print the validation report; exit 2 if the graph is not a valid DAG."""
    report = _open_session(input).report
    click.echo("valid" if report.is_valid else "invalid")
    for error in report.errors:
        click.echo(f"error: {error}")
    for warning in report.warnings:
        click.echo(f"warning: {warning}")
    if not report.is_valid:
        sys.exit(EXIT_INVALID)


@main.command()
@click.argument("input", type=click.Path(exists=True))
@click.option("--h-gap", type=float, default=None, help="Horizontal gap between nodes in a layer")
@click.option("--v-gap", type=float, default=None, help="Vertical gap between layers")
@_output_option
def layout(input: str, h_gap: float | None, v_gap: float | None, output: str | None) -> None:
    """Apply the layered auto-layout and write the result."""
    layout_config = LayoutConfig()
    if h_gap is not None:
        layout_config.h_gap = h_gap
    if v_gap is not None:
        layout_config.v_gap = v_gap
    session = _open_session(input, EditorConfig(layout=layout_config))
    _require(session.auto_layout())
    _write_export(session, output)


@main.command("add-node")
@click.argument("input", type=click.Path(exists=True))
@click.argument("label")
@_output_option
def add_node(input: str, label: str, output: str | None) -> None:
    """Append a node labelled LABEL."""
    session = _open_session(input)
    result = session.add_node(label)
    _require(result)
    click.echo(f"added node {result.node_id}", err=True)
    _write_export(session, output)


@main.command()
@click.argument("input", type=click.Path(exists=True))
@click.argument("source")
@click.argument("target")
@_output_option
def connect(input: str, source: str, target: str, output: str | None) -> None:
    """Add an edge SOURCE -> TARGET unless it would create a cycle."""
    session = _open_session(input)
    _require(session.connect(source, target))
    _write_export(session, output)


@main.command()
@click.argument("input", type=click.Path(exists=True))
@click.option("--node", "node_ids", multiple=True, help="Node id to delete (repeatable)")
@click.option("--edge", "edge_ids", multiple=True, help="Edge id to delete (repeatable)")
@_output_option
def delete(input: str, node_ids: tuple[str, ...], edge_ids: tuple[str, ...], output: str | None) -> None:
    """Delete nodes (and their edges) and edges."""
    session = _open_session(input)
    _require(session.delete_selection(node_ids, edge_ids))
    _write_export(session, output)


@main.command()
@click.argument("input", type=click.Path(exists=True))
def info(input: str) -> None:
    """Summarise the graph: counts, layers, and order or cycle."""
    session = _open_session(input)
    graph = session.graph
    click.echo(f"name: {session.name}")
    click.echo(f"nodes: {graph.node_count()}")
    click.echo(f"edges: {graph.edge_count()}")

    result = full_layout(graph)
    for idx, layer in enumerate(result.layers()):
        click.echo(f"layer {idx}: {' '.join(layer)}")

    try:
        order = list(nx.topological_sort(graph.to_digraph()))
        click.echo(f"order: {' '.join(order)}")
    except nx.NetworkXUnfeasible:
        cycle = find_cycle(graph) or []
        click.echo(f"cycle: {' -> '.join(cycle)}")


if __name__ == "__main__":
    main()
