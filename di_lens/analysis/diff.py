"""Snapshot diff: compare two built graphs by node id and (source, target, kind) edge identity."""

from __future__ import annotations

from di_lens.analysis.graph_models import Graph, GraphDiff, MetricsDelta, NodeChange


def diff_graphs(baseline: Graph, candidate: Graph) -> GraphDiff:
    """Compare a baseline snapshot against a candidate.

    A node counts as changed when any attribute differs, derived fan-in and
    fan-out included. Edges are matched on their (source, target, kind) key
    only, so their synthetic ids never cause a change.
    """
    baseline_index = {n.id: n for n in baseline.nodes}
    candidate_index = {n.id: n for n in candidate.nodes}

    added_nodes = [n for n in candidate.nodes if n.id not in baseline_index]
    removed_nodes = [n for n in baseline.nodes if n.id not in candidate_index]

    changed_nodes: list[NodeChange] = []
    for node_id, before in baseline_index.items():
        after = candidate_index.get(node_id)
        if after is not None and after != before:
            changed_nodes.append(NodeChange(before=before, after=after))

    baseline_keys = {e.key for e in baseline.edges}
    candidate_keys = {e.key for e in candidate.edges}

    added_edges = [e for e in candidate.edges if e.key not in baseline_keys]
    removed_edges = [e for e in baseline.edges if e.key not in candidate_keys]

    before, after = baseline.metrics, candidate.metrics
    delta = MetricsDelta(
        node_count=after.node_count - before.node_count,
        edge_count=after.edge_count - before.edge_count,
        cycle_count=after.cycle_count - before.cycle_count,
        max_depth=after.max_depth - before.max_depth,
    )

    return GraphDiff(
        added_nodes=added_nodes,
        removed_nodes=removed_nodes,
        changed_nodes=changed_nodes,
        added_edges=added_edges,
        removed_edges=removed_edges,
        metrics_delta=delta,
    )
