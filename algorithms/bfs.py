"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS over the whole component of `start`.  Yields a
Snapshot at every meaningful event:
  1. Start marked visited and enqueued
  2. Dequeue a node                 →  it becomes `current`
  3. Examine each neighbour         →  edge (node, neighbour) highlighted
  4. Discover an unseen neighbour   →  visited, hop distance, parent, enqueued
  5. Final step                     →  discovery order + BFS spanning tree

Neighbours are examined in ascending label order, so the traversal is
fully deterministic.  `distances` are hop counts from `start`.
"""

from collections import deque
from typing import Dict, Generator, List

from graph import Graph
from algorithms.step import Snapshot, StepBuilder, TraversalSnapshot
from algorithms.trace import Trace, record


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = code_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "START: choose a start node",                   # 0
    "mark start visited;  queue ← [start]",         # 1
    "WHILE queue is not empty:",                    # 2
    "  node ← queue.dequeue()",                     # 3
    "  FOR each neighbour of node:",                # 4
    "    IF neighbour not visited:",                # 5
    "      mark visited;  parent = node;  enqueue", # 6
    "  END FOR",                                    # 7
    "END: every reachable node discovered",         # 8
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(graph: Graph, start: int) -> Generator[Snapshot, None, None]:
    graph.require_node(start, "start")

    label   = graph.label
    adj     = graph.adjacency()
    sb      = StepBuilder(TraversalSnapshot, graph=graph, frontier_kind="queue")
    queue   = deque()
    visited = set()
    order:  List[int]      = []
    dist:   Dict[int, int] = {}
    parent: Dict[int, int] = {}

    # --- initialisation ---
    yield sb.build(f"Starting BFS from node {label(start)}", 0)

    visited.add(start)
    order.append(start)
    dist[start] = 0
    queue.append(start)
    yield sb.build(
        f"Mark {label(start)} as visited and enqueue it", 1,
        current=start, highlight=[start], visited=visited,
        discovery_order=order, frontier=list(queue), distances=dist,
    )

    # --- main loop ---
    while queue:
        node = queue.popleft()
        yield sb.build(
            f"Dequeued {label(node)}, exploring its neighbours", 3,
            current=node, highlight=[node], visited=visited,
            discovery_order=order, frontier=list(queue),
            distances=dist, parent=parent,
        )

        for nbr, _ in sorted(adj[node], key=lambda item: label(item[0])):
            yield sb.build(
                f"Checking neighbour {label(nbr)} of {label(node)}", 5,
                current=node, highlight=[node, nbr], edges_highlight=[(node, nbr)],
                visited=visited, discovery_order=order, frontier=list(queue),
                distances=dist, parent=parent,
            )
            if nbr in visited:
                continue

            visited.add(nbr)
            order.append(nbr)
            dist[nbr]   = dist[node] + 1
            parent[nbr] = node
            queue.append(nbr)
            yield sb.build(
                f"Marking {label(nbr)} as visited and adding it to the queue", 6,
                current=node, highlight=[nbr], edges_highlight=[(node, nbr)],
                visited=visited, discovery_order=order, frontier=list(queue),
                distances=dist, parent=parent,
            )

    yield sb.build(
        f"BFS complete! Visit order: {', '.join(label(n) for n in order)}", 8,
        highlight=order, edges_highlight=tree_edges(order, parent),
        visited=visited, discovery_order=order, distances=dist, parent=parent,
    )


def generate_bfs(graph: Graph, start: int) -> Trace:
    return record("bfs", PSEUDOCODE, bfs(graph, start))


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def tree_edges(order: List[int], parent: Dict[int, int]) -> List[tuple]:
    """Spanning-tree edges (parent[v], v) in discovery order of v."""
    return [(parent[v], v) for v in order if v in parent]
