"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a Snapshot at:
  1. Push start onto the stack
  2. Pop a node  →  either visit it (`current`) or skip it (already visited)
  3. Examine each neighbour  →  edge (node, neighbour) highlighted
  4. Push unseen neighbour   →  parent link recorded (latest pusher wins)
  5. Stack empty             →  discovery order + DFS tree

Neighbours are pushed in DESCENDING label order so that pops visit them
ascending.  Combined with "mark on pop" and "latest pusher wins", the
visit order and the tree are exactly those of a recursive DFS that walks
neighbours in ascending label order.
"""

from typing import Dict, Generator, List

from graph import Graph
from algorithms.bfs import tree_edges
from algorithms.step import Snapshot, StepBuilder, TraversalSnapshot
from algorithms.trace import Trace, record


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "START: choose a start node",                   # 0
    "stack ← [start]",                              # 1
    "WHILE stack is not empty:",                    # 2
    "  node ← stack.pop()",                         # 3
    "  IF node visited: CONTINUE",                  # 4
    "  mark node visited",                          # 5
    "  FOR each neighbour (reverse order):",        # 6
    "    IF neighbour not visited:",                # 7
    "      parent = node;  stack.push(neighbour)",  # 8
    "END: every reachable node discovered",         # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(graph: Graph, start: int) -> Generator[Snapshot, None, None]:
    graph.require_node(start, "start")

    label   = graph.label
    adj     = graph.adjacency()
    sb      = StepBuilder(TraversalSnapshot, graph=graph, frontier_kind="stack")
    stack:  List[int]      = []
    visited = set()
    order:  List[int]      = []
    parent: Dict[int, int] = {}

    yield sb.build(f"Starting DFS from node {label(start)}", 0)

    stack.append(start)
    yield sb.build(
        f"Push {label(start)} onto the stack", 1,
        highlight=[start], frontier=stack,
    )

    while stack:
        node = stack.pop()

        if node in visited:
            yield sb.build(
                f"{label(node)} was already visited, skipping", 4,
                current=node, highlight=[node], visited=visited,
                discovery_order=order, frontier=stack, parent=parent,
            )
            continue

        visited.add(node)
        order.append(node)
        yield sb.build(
            f"Visiting node {label(node)}", 5,
            current=node, highlight=[node],
            edges_highlight=[(parent[node], node)] if node in parent else [],
            visited=visited, discovery_order=order, frontier=stack, parent=parent,
        )

        for nbr, _ in sorted(adj[node], key=lambda item: label(item[0]), reverse=True):
            yield sb.build(
                f"Checking neighbour {label(nbr)} of {label(node)}", 7,
                current=node, highlight=[node, nbr], edges_highlight=[(node, nbr)],
                visited=visited, discovery_order=order, frontier=stack, parent=parent,
            )
            if nbr in visited:
                continue

            parent[nbr] = node
            stack.append(nbr)
            yield sb.build(
                f"Pushing {label(nbr)} onto the stack (parent {label(node)})", 8,
                current=node, highlight=[nbr], edges_highlight=[(node, nbr)],
                visited=visited, discovery_order=order, frontier=stack, parent=parent,
            )

    yield sb.build(
        f"DFS complete! Discovery order: {' → '.join(label(n) for n in order)}", 9,
        highlight=order, edges_highlight=tree_edges(order, parent),
        visited=visited, discovery_order=order, parent=parent,
    )


def generate_dfs(graph: Graph, start: int) -> Trace:
    return record("dfs", PSEUDOCODE, dfs(graph, start))
