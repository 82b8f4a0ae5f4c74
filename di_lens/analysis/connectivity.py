"""Connectivity analysis: strongly connected components, max depth, longest and shortest paths.

All functions take the graph's node ids and edges explicitly and keep their
working sets local, so concurrent calls over one Graph are safe.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, Iterator

from di_lens.analysis.graph_models import (
    Edge,
    Graph,
    GraphMetrics,
    PathInfo,
    StronglyConnectedComponent,
)

logger = logging.getLogger(__name__)

MAX_PATH_NODES = 20       # longest-path DFS abandons paths beyond this
PATH_VOLUME_FACTOR = 10   # stop starting new roots after max_paths * factor recordings


def build_adjacency(node_ids: Iterable[str], edges: Iterable[Edge]) -> dict[str, list[str]]:
    """source -> [targets], with an entry for every node id (dangling sources included)."""
    adjacency: dict[str, list[str]] = {node_id: [] for node_id in node_ids}
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)
    return adjacency


def find_strongly_connected(
    node_ids: Iterable[str],
    adjacency: dict[str, list[str]],
) -> list[list[str]]:
    """Tarjan's algorithm with an explicit work stack.

    Roots are taken in ``node_ids`` order, components come out in completion
    order and members in stack-pop order, so the result is deterministic.
    """
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    on_stack: set[str] = set()
    stack: list[str] = []
    components: list[list[str]] = []
    counter = 0

    for root in node_ids:
        if root in index:
            continue

        index[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        work: list[tuple[str, Iterator[str]]] = [(root, iter(adjacency.get(root, ())))]

        while work:
            node_id, neighbors = work[-1]
            descended = False

            for neighbor in neighbors:
                if neighbor not in index:
                    index[neighbor] = lowlink[neighbor] = counter
                    counter += 1
                    stack.append(neighbor)
                    on_stack.add(neighbor)
                    work.append((neighbor, iter(adjacency.get(neighbor, ()))))
                    descended = True
                    break
                if neighbor in on_stack:
                    lowlink[node_id] = min(lowlink[node_id], index[neighbor])

            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node_id])

            if lowlink[node_id] == index[node_id]:
                component: list[str] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node_id:
                        break
                components.append(component)

    return components


def strongly_connected_components(graph: Graph) -> list[StronglyConnectedComponent]:
    node_ids = [n.id for n in graph.nodes]
    adjacency = build_adjacency(node_ids, graph.edges)
    return [
        StronglyConnectedComponent(id=f"scc-{i}", nodes=tuple(members))
        for i, members in enumerate(find_strongly_connected(node_ids, adjacency))
    ]


def find_cycles(graph: Graph) -> list[StronglyConnectedComponent]:
    """Components with more than one member."""
    return [c for c in strongly_connected_components(graph) if c.is_cycle]


def calculate_max_depth(node_ids: Iterable[str], edges: Iterable[Edge]) -> int:
    """Longest layered chain via Kahn-style processing.

    Nodes inside a cycle never reach in-degree zero and are left out, so the
    value is only exact for acyclic graphs.
    """
    adjacency: dict[str, list[str]] = {}
    in_degree: dict[str, int] = {}
    for node_id in node_ids:
        adjacency[node_id] = []
        in_degree[node_id] = 0
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)
        in_degree[edge.target] = in_degree.get(edge.target, 0) + 1

    queue: deque[str] = deque()
    depth: dict[str, int] = {}
    for node_id, degree in in_degree.items():
        if degree == 0:
            queue.append(node_id)
            depth[node_id] = 0

    max_depth = 0
    while queue:
        current = queue.popleft()
        current_depth = depth.get(current, 0)
        max_depth = max(max_depth, current_depth)

        for neighbor in adjacency.get(current, []):
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)
                depth[neighbor] = current_depth + 1

    return max_depth


def find_longest_paths(graph: Graph, max_paths: int = 5) -> list[PathInfo]:
    """Heuristic longest simple paths.

    DFS from every node, skipping neighbours already on the current path.
    Paths past MAX_PATH_NODES are dropped and no new roots are started once
    ``max_paths * PATH_VOLUME_FACTOR`` paths were recorded. Neither exhaustive
    nor guaranteed to find the true longest path.
    """
    adjacency = build_adjacency((n.id for n in graph.nodes), graph.edges)
    paths: list[tuple[str, ...]] = []

    def dfs(node_id: str, current_path: list[str]) -> None:
        if len(current_path) > MAX_PATH_NODES:
            return

        extended = False
        for neighbor in adjacency.get(node_id, []):
            if neighbor not in current_path:
                extended = True
                current_path.append(neighbor)
                dfs(neighbor, current_path)
                current_path.pop()

        if not extended and len(current_path) > 1:
            paths.append(tuple(current_path))

    limit = max_paths * PATH_VOLUME_FACTOR
    for node in graph.nodes:
        if len(paths) >= limit:
            logger.debug("Longest-path search stopped after %d paths", len(paths))
            break
        dfs(node.id, [node.id])

    paths.sort(key=len, reverse=True)
    return [PathInfo(path=p) for p in paths[:max_paths]]


def find_shortest_path(graph: Graph, source_id: str, target_id: str) -> list[str] | None:
    """BFS over directed edges. Returns None when target is unreachable."""
    adjacency = build_adjacency((n.id for n in graph.nodes), graph.edges)

    queue = deque([source_id])
    visited = {source_id}
    parent: dict[str, str] = {}

    while queue:
        current = queue.popleft()
        if current == target_id:
            path = [current]
            while current != source_id:
                current = parent[current]
                path.append(current)
            path.reverse()
            return path

        for neighbor in adjacency.get(current, []):
            if neighbor not in visited:
                visited.add(neighbor)
                parent[neighbor] = current
                queue.append(neighbor)

    return None


def compute_graph_metrics(graph: Graph, top_n: int = 10, max_paths: int = 5) -> GraphMetrics:
    """Fan-in/fan-out rankings, longest paths and SCCs for a built graph."""
    by_fan_in = sorted(graph.nodes, key=lambda n: n.fan_in, reverse=True)[:top_n]
    by_fan_out = sorted(graph.nodes, key=lambda n: n.fan_out, reverse=True)[:top_n]

    return GraphMetrics(
        high_fan_in=[(n.id, n.fan_in) for n in by_fan_in],
        high_fan_out=[(n.id, n.fan_out) for n in by_fan_out],
        longest_paths=find_longest_paths(graph, max_paths=max_paths),
        components=strongly_connected_components(graph),
    )
