"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import InvalidGraph, create_default_graph
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph, InvalidGraph, create_default_graph

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "InvalidGraph",
    "create_default_graph",
]
