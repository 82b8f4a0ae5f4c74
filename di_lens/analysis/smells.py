"""Dependency smells: duplicate providers, god objects, bottlenecks."""

from __future__ import annotations

from di_lens.models import NodeKind, SmellType
from di_lens.analysis.graph_models import Finding, Graph, Node, ProviderDetails

HIGH_FAN_OUT_THRESHOLD = 5
HIGH_FAN_IN_THRESHOLD = 5


def detect_smells(graph: Graph) -> list[Finding]:
    """Run every smell rule over a built graph.

    Findings come out grouped by rule: duplicate providers, then high
    fan-out, then high fan-in.
    """
    findings: list[Finding] = []
    findings.extend(_find_duplicate_providers(graph))
    findings.extend(_find_high_fan_out(graph))
    findings.extend(_find_high_fan_in(graph))
    return findings


def _find_duplicate_providers(graph: Graph) -> list[Finding]:
    """One finding per type provided from more than one module."""
    by_type: dict[str, list[Node]] = {}
    for node in graph.nodes:
        if node.kind is not NodeKind.PROVIDER:
            continue
        details: ProviderDetails = node.details  # type: ignore[assignment]
        if details.provides_type:
            by_type.setdefault(details.provides_type, []).append(node)

    results: list[Finding] = []
    for provided_type, providers in by_type.items():
        if len(providers) < 2:
            continue
        modules = list(dict.fromkeys(p.module for p in providers if p.module))
        if len(modules) < 2:
            continue
        results.append(Finding(
            type=SmellType.DUPLICATE_PROVIDERS,
            description=(
                f"Multiple providers for {provided_type} across modules: "
                f"{', '.join(modules)}"
            ),
            node_ids=tuple(p.id for p in providers),
        ))
    return results


def _find_high_fan_out(graph: Graph) -> list[Finding]:
    return [
        Finding(
            type=SmellType.HIGH_FAN_OUT,
            description=f"High fan-out ({node.fan_out}) suggests potential god object",
            node_ids=(node.id,),
        )
        for node in graph.nodes
        if node.fan_out > HIGH_FAN_OUT_THRESHOLD
    ]


def _find_high_fan_in(graph: Graph) -> list[Finding]:
    return [
        Finding(
            type=SmellType.HIGH_FAN_IN,
            description=f"High fan-in ({node.fan_in}) suggests potential bottleneck",
            node_ids=(node.id,),
        )
        for node in graph.nodes
        if node.fan_in > HIGH_FAN_IN_THRESHOLD
    ]
