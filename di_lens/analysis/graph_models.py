"""Data models for the dependency-injection graph and its analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from di_lens.models import EdgeKind, NodeKind, SmellType


# ── Node payloads (one per node kind) ──────────────────────────

@dataclass(frozen=True)
class TypeDetails:
    kind = NodeKind.TYPE

    def to_dict(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class ProviderDetails:
    provides_type: str
    requires: tuple[str, ...] = ()

    kind = NodeKind.PROVIDER

    def to_dict(self) -> dict[str, Any]:
        return {"provides": self.provides_type, "requires": list(self.requires)}


@dataclass(frozen=True)
class ConsumerDetails:
    needs_type: str

    kind = NodeKind.CONSUMER

    def to_dict(self) -> dict[str, Any]:
        return {"needs": self.needs_type}


NodeDetails = Union[TypeDetails, ProviderDetails, ConsumerDetails]


@dataclass(frozen=True)
class Node:
    id: str
    label: str
    details: NodeDetails
    module: str | None = None
    package: str | None = None
    owner: str | None = None
    fan_in: int = 0
    fan_out: int = 0

    @property
    def kind(self) -> NodeKind:
        return self.details.kind

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "kind": self.kind.value,
            "module": self.module,
            "package": self.package,
            "owner": self.owner,
            "fan_in": self.fan_in,
            "fan_out": self.fan_out,
        }
        data.update(self.details.to_dict())
        return data


@dataclass(frozen=True)
class Edge:
    id: str
    source: str
    target: str
    kind: EdgeKind

    @property
    def key(self) -> tuple[str, str, EdgeKind]:
        """Identity used when comparing snapshots."""
        return (self.source, self.target, self.kind)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class GraphSummary:
    node_count: int = 0
    edge_count: int = 0
    module_count: int = 0
    package_count: int = 0
    cycle_count: int = 0
    max_depth: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "module_count": self.module_count,
            "package_count": self.package_count,
            "cycle_count": self.cycle_count,
            "max_depth": self.max_depth,
        }


@dataclass(frozen=True)
class Graph:
    """A built snapshot. Read-only once the builder returns it."""
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    modules: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()
    metrics: GraphSummary = field(default_factory=GraphSummary)
    _index: dict[str, Node] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {node.id: node for node in self.nodes})

    def get_node(self, node_id: str) -> Node | None:
        return self._index.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def incoming(self, node_id: str) -> list[Edge]:
        """Edges whose target is ``node_id``, in edge order."""
        return [e for e in self.edges if e.target == node_id]

    def outgoing(self, node_id: str) -> list[Edge]:
        """Edges whose source is ``node_id``, in edge order."""
        return [e for e in self.edges if e.source == node_id]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "modules": list(self.modules),
            "packages": list(self.packages),
            "metrics": self.metrics.to_dict(),
        }


# ── Analysis output ────────────────────────────────────────────

@dataclass(frozen=True)
class StronglyConnectedComponent:
    id: str
    nodes: tuple[str, ...]

    @property
    def size(self) -> int:
        return len(self.nodes)

    @property
    def is_cycle(self) -> bool:
        return self.size > 1

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "nodes": list(self.nodes), "size": self.size}


@dataclass(frozen=True)
class PathInfo:
    path: tuple[str, ...]

    @property
    def length(self) -> int:
        return len(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {"path": list(self.path), "length": self.length}


@dataclass
class GraphMetrics:
    high_fan_in: list[tuple[str, int]] = field(default_factory=list)   # (node_id, fan_in)
    high_fan_out: list[tuple[str, int]] = field(default_factory=list)  # (node_id, fan_out)
    longest_paths: list[PathInfo] = field(default_factory=list)
    components: list[StronglyConnectedComponent] = field(default_factory=list)

    @property
    def cycles(self) -> list[StronglyConnectedComponent]:
        return [c for c in self.components if c.is_cycle]

    def to_dict(self) -> dict[str, Any]:
        return {
            "high_fan_in": [{"node_id": n, "fan_in": v} for n, v in self.high_fan_in],
            "high_fan_out": [{"node_id": n, "fan_out": v} for n, v in self.high_fan_out],
            "longest_paths": [p.to_dict() for p in self.longest_paths],
            "strongly_connected_components": [c.to_dict() for c in self.components],
        }


@dataclass(frozen=True)
class Finding:
    type: SmellType
    description: str
    node_ids: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "node_ids": list(self.node_ids),
        }


@dataclass(frozen=True)
class MetricsDelta:
    node_count: int = 0
    edge_count: int = 0
    cycle_count: int = 0
    max_depth: int = 0

    @property
    def is_zero(self) -> bool:
        return not (self.node_count or self.edge_count or self.cycle_count or self.max_depth)

    def to_dict(self) -> dict[str, int]:
        return {
            "node_count_delta": self.node_count,
            "edge_count_delta": self.edge_count,
            "cycle_count_delta": self.cycle_count,
            "max_depth_delta": self.max_depth,
        }


@dataclass(frozen=True)
class NodeChange:
    before: Node
    after: Node

    def to_dict(self) -> dict[str, Any]:
        return {"before": self.before.to_dict(), "after": self.after.to_dict()}


@dataclass
class GraphDiff:
    added_nodes: list[Node] = field(default_factory=list)
    removed_nodes: list[Node] = field(default_factory=list)
    changed_nodes: list[NodeChange] = field(default_factory=list)
    added_edges: list[Edge] = field(default_factory=list)
    removed_edges: list[Edge] = field(default_factory=list)
    metrics_delta: MetricsDelta = field(default_factory=MetricsDelta)

    @property
    def is_empty(self) -> bool:
        return not (
            self.added_nodes or self.removed_nodes or self.changed_nodes
            or self.added_edges or self.removed_edges
        ) and self.metrics_delta.is_zero

    def to_dict(self) -> dict[str, Any]:
        return {
            "added_nodes": [n.to_dict() for n in self.added_nodes],
            "removed_nodes": [n.to_dict() for n in self.removed_nodes],
            "changed_nodes": [c.to_dict() for c in self.changed_nodes],
            "added_edges": [e.to_dict() for e in self.added_edges],
            "removed_edges": [e.to_dict() for e in self.removed_edges],
            "metrics_delta": self.metrics_delta.to_dict(),
        }
