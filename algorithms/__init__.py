"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, category, fn, pseudocode, inputs, …),
        …
    }

`fn` is the eager `generate_*` wrapper returning a Trace.  `inputs` names
the Selection fields it takes, in call order, so the engine can call any
algorithm without special cases.  Adding an algorithm is: write the
generator, add one entry here.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort    import generate_bubble_sort,    PSEUDOCODE as _bubble_pc
from algorithms.merge_sort     import generate_merge_sort,     PSEUDOCODE as _merge_pc
from algorithms.quick_sort     import generate_quick_sort,     PSEUDOCODE as _quick_pc
from algorithms.binary_search  import generate_binary_search,  PSEUDOCODE as _bs_pc
from algorithms.bfs            import generate_bfs,            PSEUDOCODE as _bfs_pc
from algorithms.dfs            import generate_dfs,            PSEUDOCODE as _dfs_pc
from algorithms.dijkstra       import generate_dijkstra,       PSEUDOCODE as _dij_pc
from algorithms.bellman_ford   import generate_bellman_ford,   PSEUDOCODE as _bf_pc
from algorithms.floyd_warshall import generate_floyd_warshall, PSEUDOCODE as _fw_pc
from algorithms.prim           import generate_prim,           PSEUDOCODE as _prim_pc
from algorithms.kruskal        import generate_kruskal,        PSEUDOCODE as _kruskal_pc

SORTING   = "sorting"
SEARCHING = "searching"
GRAPH     = "graph"

CATEGORIES: Tuple[str, ...] = (SORTING, SEARCHING, GRAPH)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    category:          str                    # SORTING / SEARCHING / GRAPH
    fn:                Callable               # generate_* → Trace
    pseudocode:        List[str]              # lines for the side-panel
    inputs:            Tuple[str, ...]        # Selection fields fn takes, in order
    supports_negative: bool = False           # meaningful on negative edges?
    complexity_time:   str  = ""              # e.g. "O(V + E)"
    complexity_space:  str  = ""              # e.g. "O(V)"
    description:       str  = ""              # one-liner for the UI card

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "category":          self.category,
            "pseudocode":        list(self.pseudocode),
            "inputs":            list(self.inputs),
            "supports_negative": self.supports_negative,
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", category=SORTING,
        fn=generate_bubble_sort, pseudocode=_bubble_pc, inputs=("values",),
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs; the largest value bubbles to the end.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", category=SORTING,
        fn=generate_merge_sort, pseudocode=_merge_pc, inputs=("values",),
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Divides the array in halves, sorts each, then merges the sorted runs.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", category=SORTING,
        fn=generate_quick_sort, pseudocode=_quick_pc, inputs=("values",),
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Partitions around the last element as pivot, then sorts both sides.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", category=SEARCHING,
        fn=generate_binary_search, pseudocode=_bs_pc, inputs=("values", "target"),
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves the sorted search range around the middle element each step.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", category=GRAPH,
        fn=generate_bfs, pseudocode=_bfs_pc, inputs=("graph", "start"),
        supports_negative=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Visits nodes in order of hop distance from the start, one layer at a time.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", category=GRAPH,
        fn=generate_dfs, pseudocode=_dfs_pc, inputs=("graph", "start"),
        supports_negative=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Follows one branch as far as it goes before backing up; paths found are not shortest.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", category=GRAPH,
        fn=generate_dijkstra, pseudocode=_dij_pc, inputs=("graph", "start", "end"),
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Greedily finalises the closest node. Optimal for non-negative weights.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", category=GRAPH,
        fn=generate_bellman_ford, pseudocode=_bf_pc, inputs=("graph", "start", "end"),
        supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Relaxes every edge up to V-1 times; accepts negative weights and reports negative cycles.",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd–Warshall", category=GRAPH,
        fn=generate_floyd_warshall, pseudocode=_fw_pc, inputs=("graph",),
        supports_negative=True,
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="Fills the all-pairs distance matrix by allowing one more intermediate node per round.",
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim's MST", category=GRAPH,
        fn=generate_prim, pseudocode=_prim_pc, inputs=("graph",),
        supports_negative=True,
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Grows one tree from the root, always adding the cheapest crossing edge.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's MST", category=GRAPH,
        fn=generate_kruskal, pseudocode=_kruskal_pc, inputs=("graph",),
        supports_negative=True,
        complexity_time="O(E log E)", complexity_space="O(V)",
        description="Takes edges cheapest first, skipping any that would close a cycle.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "CATEGORIES",
    "SORTING",
    "SEARCHING",
    "GRAPH",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
]
