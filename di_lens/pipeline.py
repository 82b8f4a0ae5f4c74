"""Analysis pipeline: document -> graph -> metrics -> smells, and two documents -> diff."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from di_lens.document import GraphDocument
from di_lens.models import AnalysisConfig
from di_lens.analysis.connectivity import compute_graph_metrics
from di_lens.analysis.diff import diff_graphs
from di_lens.analysis.graph_builder import GraphBuilder
from di_lens.analysis.graph_models import Finding, Graph, GraphDiff, GraphMetrics
from di_lens.analysis.smells import detect_smells
from di_lens.analysis.summary import summarize_graph

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


@dataclass
class AnalysisReport:
    graph: Graph
    metrics: GraphMetrics
    smells: list[Finding] = field(default_factory=list)
    summary: dict = field(default_factory=dict)

    def to_dict(self, include_graph: bool = False) -> dict:
        data = {
            "summary": self.summary,
            "metrics": self.metrics.to_dict(),
            "smells": [s.to_dict() for s in self.smells],
        }
        if include_graph:
            data["graph"] = self.graph.to_dict()
        return data


@dataclass
class ComparisonReport:
    baseline: Graph
    candidate: Graph
    diff: GraphDiff

    def to_dict(self) -> dict:
        return {
            "baseline": self.baseline.metrics.to_dict(),
            "candidate": self.candidate.metrics.to_dict(),
            "diff": self.diff.to_dict(),
        }


def run_analysis(
    document: GraphDocument,
    config: AnalysisConfig | None = None,
    progress: ProgressCallback | None = None,
) -> AnalysisReport:
    """Build a graph from ``document`` and run every analysis over it."""
    config = config or AnalysisConfig()

    # Stage 1: Build
    if progress:
        progress("Building", 0, 1)
    graph = GraphBuilder().build(document)
    if progress:
        progress("Building", 1, 1)

    # Stage 2: Connectivity
    if progress:
        progress("Analyzing", 0, 1)
    metrics = compute_graph_metrics(graph, top_n=config.top_n, max_paths=config.max_paths)
    if progress:
        progress("Analyzing", 1, 1)

    # Stage 3: Smells
    if progress:
        progress("Detecting smells", 0, 1)
    smells = detect_smells(graph)
    if progress:
        progress("Detecting smells", 1, 1)

    logger.info(
        "Analyzed %d nodes / %d edges: %d cycle(s), %d smell(s)",
        graph.metrics.node_count, graph.metrics.edge_count,
        graph.metrics.cycle_count, len(smells),
    )
    return AnalysisReport(
        graph=graph,
        metrics=metrics,
        smells=smells,
        summary=summarize_graph(graph),
    )


def run_compare(
    baseline_document: GraphDocument,
    candidate_document: GraphDocument,
    progress: ProgressCallback | None = None,
) -> ComparisonReport:
    """Build both snapshots independently and diff them."""
    builder = GraphBuilder()

    if progress:
        progress("Building", 0, 2)
    baseline = builder.build(baseline_document)
    if progress:
        progress("Building", 1, 2)
    candidate = builder.build(candidate_document)
    if progress:
        progress("Building", 2, 2)

    if progress:
        progress("Comparing", 0, 1)
    diff = diff_graphs(baseline, candidate)
    if progress:
        progress("Comparing", 1, 1)

    logger.info(
        "Compared snapshots: +%d/-%d nodes, %d changed, +%d/-%d edges",
        len(diff.added_nodes), len(diff.removed_nodes), len(diff.changed_nodes),
        len(diff.added_edges), len(diff.removed_edges),
    )
    return ComparisonReport(baseline=baseline, candidate=candidate, diff=diff)
