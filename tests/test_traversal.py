"""Tests for BFS and DFS traces."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from algorithms.bfs import generate_bfs
from algorithms.dfs import generate_dfs
from algorithms.step import TraversalSnapshot
from graph import Edge, Graph, InvalidGraph, Node

A, B, C, D, E, F = range(6)


def reachable(graph, start):
    adj = graph.adjacency()
    seen, todo = {start}, [start]
    while todo:
        for nbr, _ in adj[todo.pop()]:
            if nbr not in seen:
                seen.add(nbr)
                todo.append(nbr)
    return seen


@st.composite
def small_graphs(draw):
    n = draw(st.integers(min_value=1, max_value=8))
    pairs = draw(st.lists(
        st.tuples(st.integers(0, n - 1), st.integers(0, n - 1)), max_size=12,
    ))
    nodes = [Node(i, chr(ord("A") + i)) for i in range(n)]
    edges = [Edge(u, v, 1) for u, v in pairs]
    return Graph(nodes, edges), draw(st.integers(0, n - 1))


class TestBFS:
    def test_default_graph_order(self, default_graph) -> None:
        final = generate_bfs(default_graph, A).final
        assert final.discovery_order == [A, B, C, D, E, F]
        assert final.description == "BFS complete! Visit order: A, B, C, D, E, F"

    def test_hop_distances_and_tree(self, default_graph) -> None:
        final = generate_bfs(default_graph, A).final
        assert final.distances == {A: 0, B: 1, C: 1, D: 2, E: 2, F: 3}
        assert final.parent == {B: A, C: A, D: B, E: C, F: D}
        assert final.edges_highlight == [(A, B), (A, C), (B, D), (C, E), (D, F)]

    def test_event_sequence_starts_with_init_and_enqueue(self, default_graph) -> None:
        trace = generate_bfs(default_graph, A)
        assert trace[0].current == -1
        assert trace[1].frontier == [A]
        assert trace[2].code_line == 3 and trace[2].current == A
        assert trace[3].description == "Checking neighbour B of A"

    def test_frontier_is_a_queue(self, default_graph) -> None:
        trace = generate_bfs(default_graph, A)
        assert all(s.frontier_kind == "queue" for s in trace)
        assert all(isinstance(s, TraversalSnapshot) for s in trace)

    def test_disconnected(self, disconnected_graph) -> None:
        final = generate_bfs(disconnected_graph, 0).final
        assert final.visited == [0, 1]

    def test_unknown_start(self, default_graph) -> None:
        with pytest.raises(InvalidGraph):
            generate_bfs(default_graph, 9)


class TestDFS:
    def test_default_graph_order(self, default_graph) -> None:
        final = generate_dfs(default_graph, A).final
        assert final.discovery_order == [A, B, C, E, F, D]

    def test_latest_pusher_is_parent(self, default_graph) -> None:
        final = generate_dfs(default_graph, A).final
        # D is pushed by B first, then by F, and is reached through F
        assert final.parent == {B: A, C: B, E: C, F: E, D: F}

    def test_stale_stack_entries_are_skipped(self, default_graph) -> None:
        trace = generate_dfs(default_graph, A)
        skipped = [s.description for s in trace if s.code_line == 4]
        assert skipped == ["D was already visited, skipping", "C was already visited, skipping"]

    def test_frontier_is_a_stack(self, default_graph) -> None:
        trace = generate_dfs(default_graph, A)
        assert trace[1].frontier == [A]
        assert all(s.frontier_kind == "stack" for s in trace)
        assert trace.final.frontier == []

    def test_unknown_start(self, default_graph) -> None:
        with pytest.raises(InvalidGraph):
            generate_dfs(default_graph, -1)


class TestCompleteness:
    @pytest.mark.parametrize("generate", [generate_bfs, generate_dfs])
    @given(case=small_graphs())
    @settings(max_examples=80, deadline=None)
    def test_visits_exactly_the_reachable_set(self, generate, case) -> None:
        graph, start = case
        final = generate(graph, start).final
        assert set(final.visited) == reachable(graph, start)
        assert sorted(final.discovery_order) == sorted(final.visited)
        assert final.discovery_order[0] == start

    @pytest.mark.parametrize("generate", [generate_bfs, generate_dfs])
    def test_deterministic(self, generate, default_graph) -> None:
        assert generate(default_graph, C).same_as(generate(default_graph, C))
