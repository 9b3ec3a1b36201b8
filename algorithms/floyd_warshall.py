"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The signature "matrix algorithm".  Every snapshot carries a full copy of
the V×V distance matrix so the renderer can draw it as a live grid.

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Yields a Snapshot for:
  1. Initialisation (edges → matrix, diagonal 0, parallel edges keep the min)
  2. Each i→k→j candidate whose two legs are both finite
  3. Each candidate that improves the matrix
  4. Final matrix

No negative-cycle detection: a negative diagonal is left for the viewer.
"""

from typing import Generator, List

from graph import Graph
from algorithms.step import INF, MatrixSnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "dist ← edge weights (0 on the diagonal, ∞ elsewhere)",    # 0
    "FOR k in 0 … n-1:",                            # 1
    "  FOR i in 0 … n-1:",                          # 2
    "    FOR j in 0 … n-1:",                        # 3
    "      IF dist[i][k] + dist[k][j] < dist[i][j]:",   # 4
    "        dist[i][j] ← dist[i][k] + dist[k][j]",     # 5
    "RETURN dist",                                  # 6
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def floyd_warshall(graph: Graph) -> Generator[Snapshot, None, None]:
    label = graph.label
    n     = graph.node_count()
    sb    = StepBuilder(MatrixSnapshot, graph=graph)
    dist  = initial_matrix(graph)

    yield sb.build(
        "Initialise the distance matrix from the edge weights", 0,
        matrix=dist,
    )

    for k in range(n):
        for i in range(n):
            for j in range(n):
                if dist[i][k] == INF or dist[k][j] == INF:
                    continue
                candidate = dist[i][k] + dist[k][j]
                yield sb.build(
                    f"Checking {label(i)} → {label(k)} → {label(j)}: "
                    f"{fmt(dist[i][k])} + {fmt(dist[k][j])} = {fmt(candidate)} "
                    f"vs {fmt(dist[i][j])}", 4,
                    current=k, highlight=[i, k, j], edges_highlight=[(i, k), (k, j)],
                    matrix=dist, active_triplet=[i, k, j],
                )
                if candidate < dist[i][j]:
                    dist[i][j] = candidate
                    yield sb.build(
                        f"Updated dist[{label(i)}][{label(j)}] to {fmt(candidate)} "
                        f"via {label(k)}", 5,
                        current=k, highlight=[i, k, j], edges_highlight=[(i, k), (k, j)],
                        matrix=dist, active_triplet=[i, k, j],
                    )

    yield sb.build(
        "Floyd-Warshall complete! All-pairs shortest distances computed.", 6,
        matrix=dist,
    )


def generate_floyd_warshall(graph: Graph) -> Trace:
    return record("floyd_warshall", PSEUDOCODE, floyd_warshall(graph))


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def initial_matrix(graph: Graph) -> List[List[float]]:
    n = graph.node_count()
    dist = [[INF] * n for _ in range(n)]
    for i in range(n):
        dist[i][i] = 0
    for e in graph.edges:
        if e.source == e.target:
            continue
        w = min(e.weight, dist[e.source][e.target])
        dist[e.source][e.target] = w
        dist[e.target][e.source] = w
    return dist
