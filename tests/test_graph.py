"""Tests for the immutable graph model and its validation."""

import math

import pytest

from graph import Edge, Graph, InvalidGraph, Node, create_default_graph

A, B, C, D, E, F = range(6)


class TestDefaultGraph:
    def test_shape(self, default_graph) -> None:
        assert default_graph.node_count() == 6
        assert default_graph.edge_count() == 7
        assert [n.label for n in default_graph.nodes] == list("ABCDEF")

    def test_edges(self, default_graph) -> None:
        triples = [(e.source, e.target, e.weight) for e in default_graph.edges]
        assert triples == [
            (A, B, 4), (A, C, 2), (B, D, 3), (B, C, 1), (C, E, 5), (D, F, 6), (E, F, 2),
        ]

    def test_fresh_copy_each_call(self) -> None:
        assert create_default_graph() == create_default_graph()


class TestAdjacency:
    def test_both_directions_in_edge_order(self, default_graph) -> None:
        adj = default_graph.adjacency()
        assert adj[A] == [(B, 4), (C, 2)]
        assert adj[B] == [(A, 4), (D, 3), (C, 1)]
        assert adj[F] == [(D, 6), (E, 2)]

    def test_incident_edges(self, default_graph) -> None:
        assert [e.other_end(C) for e in default_graph.incident_edges(C)] == [A, B, E]


class TestValidation:
    def test_edge_to_unknown_node(self) -> None:
        with pytest.raises(InvalidGraph, match="unknown node"):
            Graph([Node(0, "A")], [Edge(0, 3, 1)])

    def test_ids_must_be_dense(self) -> None:
        with pytest.raises(InvalidGraph, match="dense"):
            Graph([Node(0, "A"), Node(2, "C")])

    @pytest.mark.parametrize("weight", [math.inf, math.nan, "7", None, True])
    def test_bad_weight(self, weight) -> None:
        with pytest.raises(InvalidGraph):
            Graph([Node(0, "A"), Node(1, "B")], [Edge(0, 1, weight)])

    def test_invalid_graph_is_value_error(self) -> None:
        assert issubclass(InvalidGraph, ValueError)

    @pytest.mark.parametrize("node_id", [-1, 6, 2.0, "A", None])
    def test_require_node(self, default_graph, node_id) -> None:
        with pytest.raises(InvalidGraph):
            default_graph.require_node(node_id, "start")


class TestEdits:
    def test_with_weight_returns_new_graph(self, default_graph) -> None:
        edited = default_graph.with_weight(0, 10)
        assert edited.edges[0].weight == 10
        assert default_graph.edges[0].weight == 4
        assert edited != default_graph

    def test_with_weight_unknown_edge(self, default_graph) -> None:
        with pytest.raises(InvalidGraph):
            default_graph.with_weight(7, 1)

    def test_negative_edges(self, default_graph, negative_edge_graph) -> None:
        assert not default_graph.has_negative_edges()
        assert negative_edge_graph.has_negative_edges()


class TestSerialisation:
    def test_dict_uses_from_to(self, default_graph) -> None:
        data = default_graph.to_dict()
        assert data["edges"][0] == {"from": 0, "to": 1, "weight": 4}
        assert data["nodes"][0]["label"] == "A"

    def test_from_dict_restores_equal_graph(self, default_graph) -> None:
        assert Graph.from_dict(default_graph.to_dict()) == default_graph

    def test_from_dict_malformed(self) -> None:
        with pytest.raises(InvalidGraph, match="malformed"):
            Graph.from_dict({"nodes": [{"label": "A"}]})
