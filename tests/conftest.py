"""Shared graph fixtures."""

import pytest

from graph import Edge, Graph, Node, create_default_graph


@pytest.fixture
def default_graph() -> Graph:
    return create_default_graph()


@pytest.fixture
def disconnected_graph() -> Graph:
    """Two components: A-B and C-D."""
    nodes = [Node(i, label) for i, label in enumerate("ABCD")]
    return Graph(nodes, [Edge(0, 1, 1), Edge(2, 3, 1)])


@pytest.fixture
def negative_edge_graph(default_graph) -> Graph:
    """Demo graph with B-C re-weighted to -1."""
    return default_graph.with_weight(3, -1)
