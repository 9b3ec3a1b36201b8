"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra with an O(V²) scan of the unvisited set, which
keeps the "which node is closest" choice visible and deterministic
(ties go to the first node in node order).

Yields a Snapshot at:
  1. Initialise distances (start = 0, rest = ∞)
  2. Select the closest unvisited node  →  `current`, finalised
  3. Each unvisited neighbour checked   →  edge highlighted
  4. Successful relaxation              →  distance / previous updated
  5. Terminal                           →  path, its weight, reachability

With `end` given the loop stops as soon as `end` is selected; with
`end=None` every reachable node is finalised.

Correctness note: Dijkstra requires non-negative weights.
"""

from typing import Dict, Generator, List, Optional

from graph import Graph
from algorithms.step import INF, PathSnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "dist[v] ← ∞ for all v;  dist[start] ← 0",      # 0
    "WHILE unvisited nodes remain:",                # 1
    "  u ← unvisited node with smallest dist",      # 2
    "  IF dist[u] = ∞ OR u = end: BREAK",           # 3
    "  mark u visited",                             # 4
    "  FOR each unvisited neighbour v of u:",       # 5
    "    alt ← dist[u] + weight(u, v)",             # 6
    "    IF alt < dist[v]:",                        # 7
    "      dist[v] ← alt;  previous[v] ← u",        # 8
    "RETURN path from start to end",                # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    graph: Graph,
    start: int,
    end: Optional[int] = None,
) -> Generator[Snapshot, None, None]:
    graph.require_node(start, "start")
    if end is not None:
        graph.require_node(end, "end")

    label = graph.label
    adj   = graph.adjacency()
    sb    = StepBuilder(PathSnapshot, graph=graph)

    dist:     Dict[int, float]         = {v: INF for v in graph.node_ids()}
    previous: Dict[int, Optional[int]] = {v: None for v in graph.node_ids()}
    visited:  List[int]                = []
    dist[start] = 0

    yield sb.build(
        f"Initialise: distance to {label(start)} is 0, every other node ∞", 0,
        highlight=[start], distances=dist, previous=previous,
    )

    while len(visited) < graph.node_count():
        u = _closest_unvisited(dist, visited)
        if u is None or u == end:
            break

        visited.append(u)
        yield sb.build(
            f"Visiting {label(u)} (distance {fmt(dist[u])})", 4,
            current=u, highlight=[u], visited=visited,
            distances=dist, previous=previous,
        )

        for v, weight in adj[u]:
            if v in visited:
                continue
            alt = dist[u] + weight
            yield sb.build(
                f"Checking edge {label(u)} → {label(v)}: "
                f"{fmt(dist[u])} + {fmt(weight)} = {fmt(alt)} vs {fmt(dist[v])}", 6,
                current=u, highlight=[u, v], edges_highlight=[(u, v)],
                visited=visited, distances=dist, previous=previous,
            )
            if alt < dist[v]:
                dist[v]     = alt
                previous[v] = u
                yield sb.build(
                    f"Updated distance of {label(v)} to {fmt(alt)} via {label(u)}", 8,
                    current=u, highlight=[u, v], edges_highlight=[(u, v)],
                    visited=visited, distances=dist, previous=previous,
                )

    yield terminal_snapshot(sb, graph, "Dijkstra", 9, start, end, dist, previous, visited=visited)


def generate_dijkstra(graph: Graph, start: int, end: Optional[int] = None) -> Trace:
    return record("dijkstra", PSEUDOCODE, dijkstra(graph, start, end))


# ---------------------------------------------------------------------------
# Helpers (shared with bellman_ford)
# ---------------------------------------------------------------------------
def _closest_unvisited(dist: Dict[int, float], visited: List[int]) -> Optional[int]:
    best, best_dist = None, INF
    for v, d in dist.items():
        if v not in visited and d < best_dist:
            best, best_dist = v, d
    return best


def reconstruct_path(previous: Dict[int, Optional[int]], start: int, end: int) -> List[int]:
    """start → … → end following `previous`; [] when end was never reached."""
    if end != start and previous.get(end) is None:
        return []
    path, cur = [], end
    while cur is not None:
        path.append(cur)
        if cur == start:
            break
        if len(path) > len(previous):
            return []
        cur = previous.get(cur)
    path.reverse()
    return path


def path_edges(path: List[int]) -> List[tuple]:
    return [(path[i], path[i + 1]) for i in range(len(path) - 1)]


def terminal_snapshot(sb, graph, name, code_line, start, end, dist, previous, **extra) -> Snapshot:
    """Final PathSnapshot for a single-source run, with or without an end node."""
    label = graph.label
    if end is None:
        summary = ", ".join(f"{label(v)}={fmt(d)}" for v, d in dist.items())
        return sb.build(
            f"{name} complete! Distances from {label(start)}: {summary}", code_line,
            distances=dist, previous=previous, **extra,
        )

    path = reconstruct_path(previous, start, end)
    if not path:
        return sb.build(
            f"{name} complete! {label(end)} is not reachable from {label(start)}", code_line,
            highlight=[start, end], distances=dist, previous=previous,
            shortest_path=[], path_weight=INF, reachable=False, **extra,
        )
    return sb.build(
        f"{name} complete! Shortest path {' → '.join(label(v) for v in path)} "
        f"with total weight {fmt(dist[end])}", code_line,
        highlight=path, edges_highlight=path_edges(path),
        distances=dist, previous=previous,
        shortest_path=path, path_weight=dist[end], reachable=True, **extra,
    )
