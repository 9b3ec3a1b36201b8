"""
step.py — Algorithm Step Snapshots
==================================
Every algorithm is a generator that yields Snapshot objects.
A Snapshot is a frozen-in-time picture of everything the renderer
needs to draw one frame:

    • The working array (sorting / search) or the graph (graph algorithms)
    • Which indices / nodes / edges are compared, swapped, visited, chosen
    • Family-specific state: queue/stack, distance table, V×V matrix,
      MST key/parent arrays, union-find forest
    • Which line of pseudocode is executing right now
    • A plain-English description of what just happened

Design decisions:
  - One frozen dataclass per algorithm family, all sharing the base
    (`description`, `code_line`) and tagged by a class-level `kind`.
    The renderer switches on `kind` instead of probing optional fields.
  - A Snapshot is a SNAPSHOT.  StepBuilder copies every container it is
    handed at build time, so no two snapshots (and no snapshot and the
    generator's working state) ever share a mutable list / dict.
  - The Graph payload is immutable and therefore shared as-is.
"""

import math
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from graph import Graph

INF = float("inf")

EdgePair = Tuple[int, int]


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        description : Human-readable narration of this step.
        code_line   : 0-based index of the pseudocode line executing now.
    """

    kind: ClassVar[str] = "base"

    description: str = ""
    code_line:   int = 0

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view.  Infinite numbers become None."""
        data: Dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            data[f.name] = _jsonable(getattr(self, f.name))
        return data


# ---------------------------------------------------------------------------
# Array family (bubble / merge / quick sort, binary search)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ArraySnapshot(Snapshot):
    """
    Attributes:
        array     : Value copy of the working array at this instant.
        compare   : Indices being compared (0–2).
        swap      : Indices just swapped / written (0–2).
        sorted    : Indices known to be in their final position.
        highlight : Indices to emphasise.
        pivot     : Quick sort pivot index, -1 if none.
        segment   : [lo, hi] sub-range being divided / merged, empty if none.
    """

    kind: ClassVar[str] = "array"

    array:     List[float] = field(default_factory=list)
    compare:   List[int]   = field(default_factory=list)
    swap:      List[int]   = field(default_factory=list)
    sorted:    List[int]   = field(default_factory=list)
    highlight: List[int]   = field(default_factory=list)
    pivot:     int         = -1
    segment:   List[int]   = field(default_factory=list)


@dataclass(frozen=True)
class SearchSnapshot(ArraySnapshot):
    kind: ClassVar[str] = "search"

    low:    int             = -1
    high:   int             = -1
    mid:    int             = -1
    found:  int             = -1
    target: Optional[float] = None


# ---------------------------------------------------------------------------
# Graph families
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GraphSnapshot(Snapshot):
    """
    Attributes:
        graph           : The (immutable) graph the algorithm runs on.
        current         : Node under examination, -1 if none.
        highlight       : Node ids to emphasise.
        edges_highlight : Ordered (from, to) pairs to emphasise.
    """

    kind: ClassVar[str] = "graph"

    graph:           Optional[Graph] = None
    current:         int             = -1
    highlight:       List[int]       = field(default_factory=list)
    edges_highlight: List[EdgePair]  = field(default_factory=list)


@dataclass(frozen=True)
class TraversalSnapshot(GraphSnapshot):
    """BFS / DFS.  `frontier` is the queue (BFS) or stack (DFS), bottom first."""

    kind: ClassVar[str] = "traversal"

    visited:         List[int]      = field(default_factory=list)
    discovery_order: List[int]      = field(default_factory=list)
    frontier:        List[int]      = field(default_factory=list)
    frontier_kind:   str            = "queue"
    distances:       Dict[int, int] = field(default_factory=dict)
    parent:          Dict[int, int] = field(default_factory=dict)


@dataclass(frozen=True)
class PathSnapshot(GraphSnapshot):
    """Dijkstra / Bellman-Ford single-source shortest paths."""

    kind: ClassVar[str] = "path"

    visited:        List[int]                = field(default_factory=list)
    distances:      Dict[int, float]         = field(default_factory=dict)
    previous:       Dict[int, Optional[int]] = field(default_factory=dict)
    shortest_path:  List[int]                = field(default_factory=list)
    path_weight:    float                    = INF
    reachable:      bool                     = False
    negative_cycle: bool                     = False
    iteration:      int                      = 0


@dataclass(frozen=True)
class MatrixSnapshot(GraphSnapshot):
    """Floyd-Warshall.  `active_triplet` is [i, k, j] or empty."""

    kind: ClassVar[str] = "matrix"

    matrix:         List[List[float]] = field(default_factory=list)
    active_triplet: List[int]         = field(default_factory=list)


@dataclass(frozen=True)
class PrimSnapshot(GraphSnapshot):
    kind: ClassVar[str] = "prim"

    parent:       Dict[int, int]   = field(default_factory=dict)
    key:          Dict[int, float] = field(default_factory=dict)
    mst_set:      List[int]        = field(default_factory=list)
    mst_edges:    List[EdgePair]   = field(default_factory=list)
    total_weight: float            = 0
    spanning:     bool             = True


@dataclass(frozen=True)
class KruskalSnapshot(GraphSnapshot):
    """`components` is the union-find parent table at this instant."""

    kind: ClassVar[str] = "kruskal"

    mst_edges:     List[EdgePair] = field(default_factory=list)
    visited_edges: List[EdgePair] = field(default_factory=list)
    components:    Dict[int, int] = field(default_factory=dict)
    total_weight:  float          = 0
    spanning:      bool           = True


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to copy every container
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Scratch-pad that algorithms use to construct Snapshots cleanly.

    Fields passed to the constructor (the graph, the search target, …)
    are repeated on every snapshot; fields passed to build() are copied
    so the snapshot owns them outright.

    Usage inside an algorithm generator:
        sb = StepBuilder(TraversalSnapshot, graph=graph, frontier_kind="queue")
        yield sb.build(f"Dequeued {label}", 3, current=node, visited=visited)
    """

    def __init__(self, snapshot_cls: Type[Snapshot], **fixed: Any):
        self.snapshot_cls = snapshot_cls
        self.fixed = fixed

    def build(self, description: str, code_line: int, **payload: Any) -> Snapshot:
        values = dict(self.fixed)
        values.update(payload)
        owned = {name: _own(value) for name, value in values.items()}
        return self.snapshot_cls(description=description, code_line=code_line, **owned)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def fmt(value: float) -> str:
    """Number for descriptions: ∞ for infinity, no trailing .0 on integers."""
    if value == INF:
        return "∞"
    if value == -INF:
        return "-∞"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _own(value: Any) -> Any:
    """Deep value copy of the containers a snapshot is built from."""
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, list):
        return [_own(v) for v in value]
    if isinstance(value, dict):
        return {k: _own(v) for k, v in value.items()}
    return value


def _jsonable(value: Any) -> Any:
    if isinstance(value, Graph):
        return value.to_dict()
    if isinstance(value, float) and math.isinf(value):
        return None
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return value
