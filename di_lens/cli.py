"""Click CLI with analyze, smells, cycles, path, and diff subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from di_lens import __version__
from di_lens.document import DocumentError, GraphDocument, load_document
from di_lens.models import AnalysisConfig
from di_lens.pipeline import run_analysis, run_compare
from di_lens.analysis.connectivity import find_cycles, find_shortest_path
from di_lens.analysis.graph_builder import GraphBuilder
from di_lens.analysis.smells import detect_smells

_GRAPH_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)

_SMELL_COLORS = {
    "duplicate_providers": "yellow",
    "high_fan_out": "red",
    "high_fan_in": "magenta",
}


def _load(path: Path) -> GraphDocument:
    try:
        return load_document(path)
    except DocumentError as e:
        raise click.ClickException(str(e))


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


def _node_details(graph, node_id: str) -> dict:
    data = graph.get_node(node_id).to_dict()
    data["incoming"] = [e.to_dict() for e in graph.incoming(node_id)]
    data["outgoing"] = [e.to_dict() for e in graph.outgoing(node_id)]
    return data


def _echo_smells(smells) -> None:
    if not smells:
        click.echo("No smells detected.")
        return
    for finding in smells:
        color = _SMELL_COLORS.get(finding.type.value, "white")
        click.echo(f"  {click.style(finding.type.value, fg=color)}  {finding.description}")
        for node_id in finding.node_ids:
            click.echo(f"      {click.style(node_id, dim=True)}")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """di-lens: Analyze dependency-injection graphs exported by a scanner."""
    level = "DEBUG" if verbose else AnalysisConfig().log_level
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("graph_file", type=_GRAPH_FILE)
@click.option("--top", "top_n", type=int, default=None, help="Entries in fan-in/fan-out rankings")
@click.option("--paths", "max_paths", type=int, default=None, help="Longest paths to report")
@click.option("--node", "node_id", default=None, help="Also list incoming/outgoing edges of this node")
@click.option("--graph", "with_graph", is_flag=True, help="Include nodes and edges in JSON output")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text")
def analyze(graph_file: Path, top_n: int | None, max_paths: int | None,
            node_id: str | None, with_graph: bool, as_json: bool):
    """Analyze a graph: summary, rankings, longest paths, cycles, smells."""
    if top_n is not None and top_n < 1:
        raise click.UsageError("--top must be at least 1")
    if max_paths is not None and max_paths < 1:
        raise click.UsageError("--paths must be at least 1")

    config = AnalysisConfig(top_n=top_n or 0, max_paths=max_paths or 0)
    report = run_analysis(_load(graph_file), config)

    if node_id is not None and node_id not in report.graph:
        raise click.BadParameter(f"No node with id {node_id}", param_hint="--node")

    if as_json:
        data = report.to_dict(include_graph=with_graph)
        if node_id is not None:
            data["node"] = _node_details(report.graph, node_id)
        _echo_json(data)
        return

    summary = report.summary
    metrics = summary["metrics"]
    click.echo(click.style(str(graph_file), fg="cyan"))
    click.echo(
        f"  {metrics['node_count']} nodes, {metrics['edge_count']} edges, "
        f"{metrics['module_count']} modules, {metrics['package_count']} packages"
    )
    click.echo(f"  cycles: {metrics['cycle_count']}  max depth: {metrics['max_depth']}")
    for kind, count in summary["node_kinds"].items():
        click.echo(f"  {kind}: {count}")
    click.echo()

    click.echo("Modules:")
    for entry in summary["module_breakdown"]:
        click.echo(
            f"  {entry['module']}: {entry['node_count']} nodes "
            f"({entry['providers']} providers, {entry['consumers']} consumers, "
            f"{entry['types']} types), {entry['edge_count']} edges"
        )
    click.echo()

    if node_id is not None:
        details = _node_details(report.graph, node_id)
        click.echo(click.style(f"Node {node_id}", fg="cyan"))
        click.echo(f"  Incoming ({len(details['incoming'])}):")
        for edge in details["incoming"]:
            click.echo(f"    {edge['source']} -{edge['kind']}->")
        click.echo(f"  Outgoing ({len(details['outgoing'])}):")
        for edge in details["outgoing"]:
            click.echo(f"    -{edge['kind']}-> {edge['target']}")
        click.echo()

    click.echo("Highest fan-in:")
    for ranked_id, value in report.metrics.high_fan_in:
        click.echo(f"  {value:>4}  {ranked_id}")
    click.echo("Highest fan-out:")
    for ranked_id, value in report.metrics.high_fan_out:
        click.echo(f"  {value:>4}  {ranked_id}")
    click.echo()

    click.echo("Longest paths:")
    for entry in report.metrics.longest_paths:
        click.echo(f"  [{entry.length}] " + " -> ".join(entry.path))
    click.echo()

    click.echo("Cycles:")
    found = report.metrics.cycles
    if not found:
        click.echo("  none")
    for component in found:
        click.echo(f"  {component.id} ({component.size}): " + ", ".join(component.nodes))
    click.echo()

    click.echo("Smells:")
    _echo_smells(report.smells)


@cli.command()
@click.argument("graph_file", type=_GRAPH_FILE)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text")
def smells(graph_file: Path, as_json: bool):
    """List dependency smells."""
    graph = GraphBuilder().build(_load(graph_file))
    findings = detect_smells(graph)
    if as_json:
        _echo_json([f.to_dict() for f in findings])
        return
    _echo_smells(findings)


@cli.command()
@click.argument("graph_file", type=_GRAPH_FILE)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text")
def cycles(graph_file: Path, as_json: bool):
    """List dependency cycles (strongly connected components)."""
    graph = GraphBuilder().build(_load(graph_file))
    found = find_cycles(graph)
    if as_json:
        _echo_json([c.to_dict() for c in found])
        return
    if not found:
        click.echo("No cycles found.")
        return
    click.echo(f"Found {len(found)} cycle(s):\n")
    for component in found:
        click.echo(click.style(f"{component.id} ({component.size} nodes)", fg="red"))
        for node_id in component.nodes:
            click.echo(f"  {node_id}")


@cli.command()
@click.argument("graph_file", type=_GRAPH_FILE)
@click.argument("source")
@click.argument("target")
def path(graph_file: Path, source: str, target: str):
    """Print the shortest dependency path from SOURCE to TARGET."""
    graph = GraphBuilder().build(_load(graph_file))
    result = find_shortest_path(graph, source, target)
    if result is None:
        click.echo(f"No path from {source} to {target}.")
        click.get_current_context().exit(1)
    click.echo(" -> ".join(result))


@cli.command()
@click.argument("baseline", type=_GRAPH_FILE)
@click.argument("candidate", type=_GRAPH_FILE)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text")
def diff(baseline: Path, candidate: Path, as_json: bool):
    """Compare two graph snapshots."""
    report = run_compare(_load(baseline), _load(candidate))
    result = report.diff

    if as_json:
        _echo_json(report.to_dict())
        return

    if result.is_empty:
        click.echo("No differences.")
        return

    for node in result.added_nodes:
        click.echo(click.style(f"+ node {node.id}", fg="green"))
    for node in result.removed_nodes:
        click.echo(click.style(f"- node {node.id}", fg="red"))
    for change in result.changed_nodes:
        click.echo(click.style(f"~ node {change.before.id}", fg="yellow"))
    for edge in result.added_edges:
        click.echo(click.style(f"+ edge {edge.source} -{edge.kind.value}-> {edge.target}", fg="green"))
    for edge in result.removed_edges:
        click.echo(click.style(f"- edge {edge.source} -{edge.kind.value}-> {edge.target}", fg="red"))

    click.echo("\nMetrics delta:")
    for name, value in result.metrics_delta.to_dict().items():
        click.echo(f"  {name}: {value:+d}")


if __name__ == "__main__":
    cli()
