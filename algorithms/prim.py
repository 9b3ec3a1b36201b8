"""
prim.py — Prim's Minimum Spanning Tree
=======================================
Array-based Prim rooted at node 0: each round picks the cheapest node
not yet in the tree (ties go to the first in node order), adds it, then
lowers the key of every outside neighbour reachable through a cheaper
incident edge.

On a disconnected graph the run stops once no outside node has a finite
key; the result is then a spanning tree of the root's component only and
the terminal snapshot reports `spanning=False`.
"""

from typing import Dict, Generator, List

from graph import Graph
from algorithms.step import INF, PrimSnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record

ROOT = 0


PSEUDOCODE: List[str] = [
    "key[v] ← ∞, parent[v] ← -1;  key[root] ← 0",   # 0
    "REPEAT V times:",                              # 1
    "  u ← node not in MST with smallest key",      # 2
    "  IF key[u] = ∞: BREAK",                       # 3
    "  add u to MST",                               # 4
    "  FOR each edge (u, v, w):",                   # 5
    "    IF v not in MST AND w < key[v]:",          # 6
    "      key[v] ← w;  parent[v] ← u",             # 7
    "RETURN MST edges (parent[v], v)",              # 8
]


def prim(graph: Graph) -> Generator[Snapshot, None, None]:
    n     = graph.node_count()
    label = graph.label
    sb    = StepBuilder(PrimSnapshot, graph=graph)

    key:    Dict[int, float] = {v: INF for v in graph.node_ids()}
    parent: Dict[int, int]   = {v: -1 for v in graph.node_ids()}
    mst_set: List[int] = []
    if n:
        key[ROOT] = 0

    yield sb.build(
        f"Initialise: key of {label(ROOT)} is 0, every other key ∞" if n
        else "Initialise: the graph has no nodes", 0,
        highlight=[ROOT] if n else [], parent=parent, key=key,
    )

    for _ in range(n):
        u, best = -1, INF
        for v in graph.node_ids():
            if v not in mst_set and key[v] < best:
                u, best = v, key[v]
        if u == -1:
            break

        mst_set.append(u)
        edges = _mst_edges(parent)
        yield sb.build(
            f"Added {label(u)} to the MST" +
            (f" via edge {label(parent[u])}-{label(u)} (weight {fmt(key[u])})" if parent[u] != -1 else ""), 4,
            current=u, highlight=[u], edges_highlight=[(parent[u], u)] if parent[u] != -1 else [],
            parent=parent, key=key, mst_set=mst_set, mst_edges=edges,
            total_weight=_weight(mst_set, key),
        )

        for e in graph.incident_edges(u):
            v = e.other_end(u)
            if v in mst_set or e.weight >= key[v]:
                continue
            key[v]    = e.weight
            parent[v] = u
            yield sb.build(
                f"Updated key of {label(v)} to {fmt(e.weight)} (parent {label(u)})", 7,
                current=u, highlight=[u, v], edges_highlight=[(u, v)],
                parent=parent, key=key, mst_set=mst_set, mst_edges=_mst_edges(parent),
                total_weight=_weight(mst_set, key),
            )

    edges    = _mst_edges(parent)
    total    = _weight(mst_set, key)
    spanning = len(mst_set) == n
    if spanning:
        description = f"Prim complete! MST total weight {fmt(total)} with {len(edges)} edges"
    else:
        description = (
            f"Prim stopped: the graph is disconnected. Spanning tree of "
            f"{label(ROOT)}'s component has total weight {fmt(total)}"
        )
    yield sb.build(
        description, 8,
        highlight=mst_set, edges_highlight=edges,
        parent=parent, key=key, mst_set=mst_set, mst_edges=edges,
        total_weight=total, spanning=spanning,
    )


def generate_prim(graph: Graph) -> Trace:
    return record("prim", PSEUDOCODE, prim(graph))


def _mst_edges(parent: Dict[int, int]) -> List[tuple]:
    # every defined parent link, tree edges and still-open candidates alike
    return [(p, v) for v, p in parent.items() if p != -1]


def _weight(mst_set: List[int], key: Dict[int, float]) -> float:
    return sum(key[v] for v in mst_set)
