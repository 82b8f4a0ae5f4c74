"""Graph builder: normalizes a scanner document into a Graph with fan-in/fan-out and summary counts."""

from __future__ import annotations

import logging

from di_lens.document import GraphDocument
from di_lens.analysis.connectivity import build_adjacency, calculate_max_depth, find_strongly_connected
from di_lens.analysis.graph_models import (
    ConsumerDetails,
    Edge,
    Graph,
    GraphSummary,
    Node,
    NodeDetails,
    ProviderDetails,
    TypeDetails,
)

logger = logging.getLogger(__name__)

_CONSTRUCTOR = "<init>"


def short_label(node_id: str) -> str:
    """Display label: ``Owner.Member`` from the last two segments, ``Owner`` for constructors."""
    parts = node_id.split(".")
    if len(parts) > 1:
        owner, member = parts[-2], parts[-1]
        if member == _CONSTRUCTOR:
            return owner
        return f"{owner}.{member}"
    return node_id


class GraphBuilder:
    """Build a Graph from a validated GraphDocument."""

    def build(self, document: GraphDocument) -> Graph:
        # Step 1: Collect node records keyed by id (last write wins)
        records: dict[str, dict] = {}

        for entry in document.types:
            self._put(records, entry.id, TypeDetails(),
                      module=entry.module, package=entry.package)

        for entry in document.providers:
            self._put(records, entry.id,
                      ProviderDetails(provides_type=entry.type, requires=tuple(entry.requires)),
                      module=entry.module, owner=entry.owner)

        for entry in document.consumers:
            self._put(records, entry.id, ConsumerDetails(needs_type=entry.needs),
                      module=entry.module, owner=entry.owner)

        # Step 2: Edges and fan counts
        fan_in = dict.fromkeys(records, 0)
        fan_out = dict.fromkeys(records, 0)
        edges: list[Edge] = []
        dangling = 0

        for index, entry in enumerate(document.edges):
            edges.append(Edge(
                id=f"edge-{index}",
                source=entry.source,
                target=entry.target,
                kind=entry.kind,
            ))
            if entry.source in fan_out:
                fan_out[entry.source] += 1
            else:
                dangling += 1
            if entry.target in fan_in:
                fan_in[entry.target] += 1
            else:
                dangling += 1

        if dangling:
            logger.debug("%d edge endpoint(s) reference unknown node ids", dangling)

        nodes = tuple(
            Node(
                id=node_id,
                label=short_label(node_id),
                fan_in=fan_in[node_id],
                fan_out=fan_out[node_id],
                **record,
            )
            for node_id, record in records.items()
        )

        # Step 3: Distinct modules / packages, first-seen order
        modules = tuple(dict.fromkeys(n.module for n in nodes if n.module))
        packages = tuple(dict.fromkeys(n.package for n in nodes if n.package))

        # Step 4: Derived metrics (the document's own metrics block is ignored)
        node_ids = [n.id for n in nodes]
        adjacency = build_adjacency(node_ids, edges)
        components = find_strongly_connected(node_ids, adjacency)
        cycle_count = sum(1 for c in components if len(c) > 1)
        max_depth = calculate_max_depth(node_ids, edges)

        summary = GraphSummary(
            node_count=len(nodes),
            edge_count=len(edges),
            module_count=len(modules),
            package_count=len(packages),
            cycle_count=cycle_count,
            max_depth=max_depth,
        )
        logger.debug(
            "Built graph: %d nodes, %d edges, %d cycle(s), max depth %d",
            summary.node_count, summary.edge_count, cycle_count, max_depth,
        )

        return Graph(
            nodes=nodes,
            edges=tuple(edges),
            modules=modules,
            packages=packages,
            metrics=summary,
        )

    @staticmethod
    def _put(
        records: dict[str, dict],
        node_id: str,
        details: NodeDetails,
        module: str | None = None,
        package: str | None = None,
        owner: str | None = None,
    ) -> None:
        if node_id in records:
            logger.debug("Duplicate node id %r overwrites earlier entry", node_id)
        records[node_id] = {
            "details": details,
            "module": module,
            "package": package,
            "owner": owner,
        }
