"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Edges are scanned in ascending weight order (a stable sort, so equal
weights keep their edge order).  A DisjointSet decides whether an edge
would close a cycle.  The run stops as soon as V-1 edges are chosen.

Each snapshot carries the union-find parent table as `components`.
"""

from typing import Dict, Generator, List

from graph import Graph
from algorithms.step import KruskalSnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record


PSEUDOCODE: List[str] = [
    "SORT edges by weight",                         # 0
    "make-set(v) for every node",                   # 1
    "FOR each edge (u, v, w) in sorted order:",     # 2
    "  IF find(u) ≠ find(v): union(u, v), add edge",    # 3
    "  ELSE: skip (would form a cycle)",            # 4
    "  IF MST has V-1 edges: BREAK",                # 5
    "RETURN MST",                                   # 6
]


# ---------------------------------------------------------------------------
# Union-find
# ---------------------------------------------------------------------------
class DisjointSet:
    """Union-find with path compression and union by rank."""

    def __init__(self, items):
        self.parent: Dict[int, int] = {x: x for x in items}
        self.rank:   Dict[int, int] = {x: 0 for x in items}

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets of a and b.  False if they were already one set."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return True


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def kruskal(graph: Graph) -> Generator[Snapshot, None, None]:
    n      = graph.node_count()
    label  = graph.label
    sb     = StepBuilder(KruskalSnapshot, graph=graph)
    ds     = DisjointSet(graph.node_ids())
    ranked = sorted(graph.edges, key=lambda e: e.weight)

    mst:     List[tuple] = []
    checked: List[tuple] = []
    total = 0

    yield sb.build(
        f"Sorted {len(ranked)} edges by weight", 0,
        components=ds.parent,
    )

    for e in ranked:
        if len(mst) >= n - 1:
            break
        pair = (e.source, e.target)
        name = f"{label(e.source)}-{label(e.target)}"
        checked.append(pair)
        yield sb.build(
            f"Checking edge {name} (weight {fmt(e.weight)})", 2,
            highlight=list(pair), edges_highlight=[pair],
            mst_edges=mst, visited_edges=checked,
            components=ds.parent, total_weight=total,
        )

        if ds.union(e.source, e.target):
            mst.append(pair)
            total += e.weight
            yield sb.build(
                f"Added edge {name} to the MST (no cycle)", 3,
                highlight=list(pair), edges_highlight=[pair],
                mst_edges=mst, visited_edges=checked,
                components=ds.parent, total_weight=total,
            )
        else:
            yield sb.build(
                f"Skipped edge {name}: it would form a cycle", 4,
                highlight=list(pair), edges_highlight=[pair],
                mst_edges=mst, visited_edges=checked,
                components=ds.parent, total_weight=total,
            )

    spanning = n == 0 or len(mst) == n - 1
    if spanning:
        description = f"Kruskal complete! MST total weight {fmt(total)} with {len(mst)} edges"
    else:
        description = (
            f"Kruskal complete: the graph is disconnected, spanning forest "
            f"has total weight {fmt(total)} with {len(mst)} edges"
        )
    yield sb.build(
        description, 6,
        edges_highlight=mst, mst_edges=mst, visited_edges=checked,
        components=ds.parent, total_weight=total, spanning=spanning,
    )


def generate_kruskal(graph: Graph) -> Trace:
    return record("kruskal", PSEUDOCODE, kruskal(graph))
