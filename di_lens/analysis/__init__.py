"""Graph analysis engine: builder, connectivity, smells, diff, filters."""

from di_lens.analysis.graph_builder import GraphBuilder, short_label
from di_lens.analysis.connectivity import (
    compute_graph_metrics,
    find_cycles,
    find_longest_paths,
    find_shortest_path,
    strongly_connected_components,
)
from di_lens.analysis.smells import detect_smells
from di_lens.analysis.diff import diff_graphs
from di_lens.analysis.filters import GraphFilters, GraphView, apply_filters
from di_lens.analysis.summary import module_breakdown, summarize_graph

__all__ = [
    "GraphBuilder",
    "short_label",
    "compute_graph_metrics",
    "find_cycles",
    "find_longest_paths",
    "find_shortest_path",
    "strongly_connected_components",
    "detect_smells",
    "diff_graphs",
    "GraphFilters",
    "GraphView",
    "apply_filters",
    "module_breakdown",
    "summarize_graph",
]
