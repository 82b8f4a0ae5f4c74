"""Graph summary: metric counts plus node-kind, edge-kind and per-module breakdowns."""

from __future__ import annotations

from collections import Counter

from di_lens.models import EdgeKind, NodeKind
from di_lens.analysis.graph_models import Graph


def module_breakdown(graph: Graph) -> list[dict]:
    """Per-module node counts by kind and the number of edges touching the module.

    An edge touches a module when either endpoint belongs to it, so an edge
    between two modules is counted once for each.
    """
    breakdown = []
    for module in graph.modules:
        members = [n for n in graph.nodes if n.module == module]
        member_ids = {n.id for n in members}
        kinds = Counter(n.kind for n in members)
        breakdown.append({
            "module": module,
            "node_count": len(members),
            "providers": kinds.get(NodeKind.PROVIDER, 0),
            "consumers": kinds.get(NodeKind.CONSUMER, 0),
            "types": kinds.get(NodeKind.TYPE, 0),
            "edge_count": sum(
                1 for e in graph.edges
                if e.source in member_ids or e.target in member_ids
            ),
        })
    return breakdown


def summarize_graph(graph: Graph) -> dict:
    """Summarize a built graph.

    Returns: {metrics, node_kinds, edge_kinds, modules, packages, module_breakdown}
    """
    node_counts = Counter(n.kind for n in graph.nodes)
    edge_counts = Counter(e.kind for e in graph.edges)

    return {
        "metrics": graph.metrics.to_dict(),
        "node_kinds": {kind.value: node_counts.get(kind, 0) for kind in NodeKind},
        "edge_kinds": {kind.value: edge_counts.get(kind, 0) for kind in EdgeKind},
        "modules": sorted(graph.modules),
        "packages": sorted(graph.packages),
        "module_breakdown": module_breakdown(graph),
    }
