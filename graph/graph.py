"""
graph.py — Immutable Graph Container
=====================================
Single source of truth for the graph a trace is computed on.  Algorithms
and the renderer both read this object; nothing ever writes to it.

Responsibilities:
  1. Validation on construction            (dense ids, known endpoints)
  2. Adjacency queries                     (adjacency, incident_edges, …)
  3. The fixed demo topology               (create_default_graph)
  4. Edits that return a NEW graph         (with_weight)
  5. Serialisation round-trip              (to_dict / from_dict)

Design decisions:
  - Nodes & edges are tuples of frozen dataclasses.  A Graph can therefore
    be shared by every snapshot of every trace without any snapshot being
    able to change what another one sees.
  - Node ids are dense 0 … V-1 and equal to the node's position, so
    algorithms can index lists / matrices by id directly.
  - Edges are stored directionally but treated as undirected everywhere.
"""

import math
from numbers import Real
from typing import Dict, Iterable, List, Tuple

from graph.node import Node
from graph.edge import Edge


class InvalidGraph(ValueError):
    """Raised when a graph (or a node reference into it) is malformed."""


class Graph:
    """
    Attributes:
        nodes : Tuple[Node, …] — node i has id i.
        edges : Tuple[Edge, …] — in insertion order (the order algorithms scan).
    """

    __slots__ = ("_nodes", "_edges")

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge] = ()):
        nodes = tuple(nodes)
        edges = tuple(edges)
        _validate(nodes, edges)
        self._nodes: Tuple[Node, ...] = nodes
        self._edges: Tuple[Edge, ...] = edges

    # ==================================================================
    # READ-ONLY STRUCTURE
    # ==================================================================
    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    def get_node(self, node_id: int) -> Node:
        self.require_node(node_id)
        return self._nodes[node_id]

    def label(self, node_id: int) -> str:
        return self.get_node(node_id).label

    def require_node(self, node_id: int, role: str = "node") -> int:
        """Return node_id if it names a node of this graph, else raise InvalidGraph."""
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            raise InvalidGraph(f"{role} id must be an integer, got {node_id!r}")
        if not 0 <= node_id < len(self._nodes):
            raise InvalidGraph(
                f"{role} id {node_id} does not exist (graph has {len(self._nodes)} nodes)"
            )
        return node_id

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def adjacency(self) -> Dict[int, List[Tuple[int, float]]]:
        """
        {node_id: [(neighbour_id, weight), …]} built in ONE scan over the
        edges.  Each undirected edge contributes both directions, in edge
        order.
        """
        adj: Dict[int, List[Tuple[int, float]]] = {n.id: [] for n in self._nodes}
        for edge in self._edges:
            adj[edge.source].append((edge.target, edge.weight))
            adj[edge.target].append((edge.source, edge.weight))
        return adj

    def incident_edges(self, node_id: int) -> List[Edge]:
        """Edges touching node_id, in edge order."""
        return [e for e in self._edges if e.source == node_id or e.target == node_id]

    # ==================================================================
    # EDITS (always return a new Graph)
    # ==================================================================
    def with_weight(self, edge_index: int, weight: float) -> "Graph":
        """Copy of this graph with edges[edge_index] re-weighted."""
        if not 0 <= edge_index < len(self._edges):
            raise InvalidGraph(f"edge index {edge_index} does not exist")
        old = self._edges[edge_index]
        edges = list(self._edges)
        edges[edge_index] = Edge(old.source, old.target, weight)
        return Graph(self._nodes, edges)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self._nodes],
            "edges": [e.to_dict() for e in self._edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        try:
            nodes = [Node.from_dict(nd) for nd in data.get("nodes", [])]
            edges = [Edge.from_dict(ed) for ed in data.get("edges", [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidGraph(f"malformed graph data: {exc}") from exc
        return cls(nodes, edges)

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def node_ids(self) -> List[int]:
        return [n.id for n in self._nodes]

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self._edges)

    def __eq__(self, other) -> bool:
        return isinstance(other, Graph) and self._nodes == other._nodes and self._edges == other._edges

    def __hash__(self) -> int:
        return hash((self._nodes, self._edges))

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def _validate(nodes: Tuple[Node, ...], edges: Tuple[Edge, ...]) -> None:
    for position, node in enumerate(nodes):
        if node.id != position:
            raise InvalidGraph(
                f"node ids must be dense and ordered: position {position} holds id {node.id}"
            )
    count = len(nodes)
    for i, edge in enumerate(edges):
        for end in (edge.source, edge.target):
            if isinstance(end, bool) or not isinstance(end, int) or not 0 <= end < count:
                raise InvalidGraph(f"edge {i} references unknown node {end!r}")
        w = edge.weight
        if isinstance(w, bool) or not isinstance(w, Real) or not math.isfinite(w):
            raise InvalidGraph(f"edge {i} has a non-numeric or infinite weight {w!r}")


# ---------------------------------------------------------------------------
# Demo topology
# ---------------------------------------------------------------------------
def create_default_graph() -> Graph:
    """The fixed 6-node demo graph every graph algorithm starts from."""
    nodes = [
        Node(0, "A", 100, 200),
        Node(1, "B", 250, 100),
        Node(2, "C", 250, 300),
        Node(3, "D", 400, 100),
        Node(4, "E", 400, 300),
        Node(5, "F", 550, 200),
    ]
    edges = [
        Edge(0, 1, 4),
        Edge(0, 2, 2),
        Edge(1, 3, 3),
        Edge(1, 2, 1),
        Edge(2, 4, 5),
        Edge(3, 5, 6),
        Edge(4, 5, 2),
    ]
    return Graph(nodes, edges)
