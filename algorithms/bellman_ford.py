"""
bellman_ford.py — Bellman-Ford Shortest-Path Algorithm
=======================================================
Handles negative edge weights and detects negative cycles.

Each undirected edge is relaxed in BOTH directions (from→to, then to→from,
in edge order), so on non-negative graphs the distances agree with
Dijkstra.  A consequence: any negative undirected edge is itself a
negative cycle (u → v → u).

Yields a Snapshot at:
  1. Initialise distances
  2. Start of pass i of V-1          (`iteration` = i)
  3. Each directed edge checked
  4. Each successful relaxation
  5. Terminal: negative cycle detected, or distances (+ path to `end`)

A pass that changes nothing ends the main loop early.  The extra
detection scan yields no snapshots of its own; its verdict is carried
by the terminal snapshot.
"""

from typing import Dict, Generator, List, Optional, Tuple

from graph import Graph
from algorithms.dijkstra import terminal_snapshot
from algorithms.step import INF, PathSnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record


PSEUDOCODE: List[str] = [
    "dist[v] ← ∞ for all v;  dist[start] ← 0",      # 0
    "REPEAT V-1 times:",                            # 1
    "  FOR each edge (u, v, w) in both directions:",    # 2
    "    IF dist[u] + w < dist[v]:",                # 3
    "      dist[v] ← dist[u] + w;  previous[v] ← u",    # 4
    "FOR each edge (u, v, w):",                     # 5
    "  IF dist[u] + w < dist[v]:",                  # 6
    "    REPORT negative cycle",                    # 7
    "RETURN distances",                             # 8
]


def bellman_ford(
    graph: Graph,
    start: int,
    end: Optional[int] = None,
) -> Generator[Snapshot, None, None]:
    graph.require_node(start, "start")
    if end is not None:
        graph.require_node(end, "end")

    label = graph.label
    sb    = StepBuilder(PathSnapshot, graph=graph)
    arcs  = _directed_arcs(graph)
    count = graph.node_count()

    dist:     Dict[int, float]         = {v: INF for v in graph.node_ids()}
    previous: Dict[int, Optional[int]] = {v: None for v in graph.node_ids()}
    dist[start] = 0

    yield sb.build(
        f"Initialise: distance to {label(start)} is 0, every other node ∞", 0,
        highlight=[start], distances=dist, previous=previous,
    )

    i = 0
    for i in range(1, count):
        yield sb.build(
            f"Pass {i} of {count - 1}: relaxing every edge", 1,
            distances=dist, previous=previous, iteration=i,
        )
        changed = False
        # two arcs per undirected edge, so each edge is checked once each way
        for u, v, w in arcs:
            yield sb.build(
                f"Checking edge {label(u)} → {label(v)} (weight {fmt(w)}): "
                f"{fmt(dist[u])} + {fmt(w)} vs {fmt(dist[v])}", 3,
                current=u, highlight=[u, v], edges_highlight=[(u, v)],
                distances=dist, previous=previous, iteration=i,
            )
            if dist[u] != INF and dist[u] + w < dist[v]:
                dist[v]     = dist[u] + w
                previous[v] = u
                changed     = True
                yield sb.build(
                    f"Relaxed: distance of {label(v)} is now {fmt(dist[v])} via {label(u)}", 4,
                    current=u, highlight=[u, v], edges_highlight=[(u, v)],
                    distances=dist, previous=previous, iteration=i,
                )
        if not changed:
            break

    offending = [
        (u, v) for u, v, w in arcs
        if dist[u] != INF and dist[u] + w < dist[v]
    ]
    if offending:
        yield sb.build(
            "Negative cycle detected! Shortest paths are undefined.", 7,
            highlight=sorted({n for pair in offending for n in pair}),
            edges_highlight=offending, distances=dist, previous=previous,
            negative_cycle=True, iteration=i,
        )
        return

    yield terminal_snapshot(sb, graph, "Bellman-Ford", 8, start, end, dist, previous, iteration=i)


def generate_bellman_ford(graph: Graph, start: int, end: Optional[int] = None) -> Trace:
    return record("bellman_ford", PSEUDOCODE, bellman_ford(graph, start, end))


def _directed_arcs(graph: Graph) -> List[Tuple[int, int, float]]:
    arcs = []
    for e in graph.edges:
        arcs.append((e.source, e.target, e.weight))
        arcs.append((e.target, e.source, e.weight))
    return arcs
