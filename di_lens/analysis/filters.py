"""Filter predicates applied to a built graph before display."""

from __future__ import annotations

from dataclasses import dataclass, field

from di_lens.models import EdgeKind, NodeKind
from di_lens.analysis.graph_models import Edge, Graph, Node


@dataclass
class GraphFilters:
    search_term: str = ""
    node_kinds: set[NodeKind] = field(default_factory=lambda: set(NodeKind))
    edge_kinds: set[EdgeKind] = field(default_factory=lambda: set(EdgeKind))
    modules: set[str] = field(default_factory=set)    # empty = no module filter
    packages: set[str] = field(default_factory=set)   # empty = no package filter


@dataclass
class GraphView:
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)


def _node_matches(node: Node, filters: GraphFilters, term: str) -> bool:
    if term and term not in node.label.lower():
        return False
    if node.kind not in filters.node_kinds:
        return False
    # Nodes without a module/package are never hidden by those filters
    if filters.modules and node.module and node.module not in filters.modules:
        return False
    if filters.packages and node.package and node.package not in filters.packages:
        return False
    return True


def apply_filters(graph: Graph, filters: GraphFilters) -> GraphView:
    """Select the nodes and edges that pass ``filters``.

    An edge is kept only when its kind is selected and both of its endpoints
    passed the node filters.
    """
    term = filters.search_term.lower()
    nodes = [n for n in graph.nodes if _node_matches(n, filters, term)]
    kept = {n.id for n in nodes}
    edges = [
        e for e in graph.edges
        if e.kind in filters.edge_kinds and e.source in kept and e.target in kept
    ]
    return GraphView(nodes=nodes, edges=edges)
