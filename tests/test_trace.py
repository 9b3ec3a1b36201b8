"""Tests for the snapshot model, Trace contract, registry and Selection."""

import json
import math
import random

import pytest

from algorithms import CATEGORIES, REGISTRY, algorithms_by_category, get_algorithm, list_algorithms
from algorithms.bubble_sort import generate_bubble_sort
from algorithms.dijkstra import generate_dijkstra
from algorithms.step import ArraySnapshot, PathSnapshot, StepBuilder, fmt
from algorithms.trace import Trace, TraceError, record
from engine.recorder import Selection, build_trace, export, preset_array, random_array
from graph import InvalidGraph


class TestSnapshotIsolation:
    def test_mutating_one_array_leaves_others_alone(self) -> None:
        trace = generate_bubble_sort([5, 3, 8, 1])
        before = [list(s.array) for s in trace]
        trace[1].array.append(99)
        trace[1].sorted.append(7)
        assert [list(s.array) for i, s in enumerate(trace) if i != 1] == \
            [a for i, a in enumerate(before) if i != 1]
        assert trace[2].sorted == []

    def test_mutating_one_distance_table_leaves_others_alone(self, default_graph) -> None:
        trace = generate_dijkstra(default_graph, 0, 5)
        trace[1].distances[3] = -100
        assert all(s.distances[3] != -100 for i, s in enumerate(trace) if i != 1)

    def test_builder_copies_nested_containers(self) -> None:
        rows = [[1, 2], [3, 4]]
        snap = StepBuilder(ArraySnapshot).build("x", 0, array=rows)
        rows[0].append(5)
        assert snap.array == [[1, 2], [3, 4]]

    def test_sets_become_sorted_lists(self) -> None:
        snap = StepBuilder(PathSnapshot).build("x", 0, visited={3, 1, 2})
        assert snap.visited == [1, 2, 3]

    def test_snapshots_are_frozen(self) -> None:
        snap = generate_bubble_sort([2, 1]).final
        with pytest.raises(AttributeError):
            snap.description = "changed"


class TestSnapshotJSON:
    def test_kind_tag_and_infinity(self, default_graph) -> None:
        data = generate_dijkstra(default_graph, 0, 5).initial.to_dict()
        assert data["kind"] == "path"
        assert data["distances"]["0"] == 0
        assert data["distances"]["5"] is None
        assert data["graph"]["edges"][0] == {"from": 0, "to": 1, "weight": 4}
        json.dumps(data)

    def test_fmt(self) -> None:
        assert fmt(math.inf) == "∞"
        assert fmt(3.0) == "3"
        assert fmt(2.5) == "2.5"
        assert fmt(7) == "7"


class TestTraceContract:
    def test_empty_trace_rejected(self) -> None:
        with pytest.raises(TraceError, match="empty"):
            record("nothing", ["only line"], iter(()))

    def test_code_line_out_of_range_rejected(self) -> None:
        snaps = [ArraySnapshot(description="x", code_line=2)]
        with pytest.raises(TraceError, match="code line 2"):
            Trace("bad", ("a", "b"), tuple(snaps))

    def test_sequence_protocol(self) -> None:
        trace = generate_bubble_sort([2, 1])
        assert len(trace) == len(list(trace))
        assert trace[0] is trace.initial
        assert trace[-1] is trace.final
        assert trace.code_line_text(0) == "START: copy the input array"

    def test_every_registered_algorithm_honours_contract(self, default_graph) -> None:
        for info in list_algorithms():
            trace = build_trace(Selection(algorithm=info.key, graph=default_graph))
            assert len(trace) >= 2
            assert trace.pseudocode == tuple(info.pseudocode)
            assert trace.algorithm == info.key
            assert trace.initial.code_line == 0
            if info.key != "binary_search":   # a hit ends on the RETURN mid line
                assert trace.final.code_line == len(trace.pseudocode) - 1


class TestRegistry:
    def test_all_algorithms_present(self) -> None:
        assert set(REGISTRY) == {
            "bubble_sort", "merge_sort", "quick_sort", "binary_search",
            "bfs", "dfs", "dijkstra", "bellman_ford", "floyd_warshall", "prim", "kruskal",
        }

    def test_categories(self) -> None:
        assert CATEGORIES == ("sorting", "searching", "graph")
        assert [a.key for a in algorithms_by_category("searching")] == ["binary_search"]
        assert len(algorithms_by_category("graph")) == 7

    def test_unknown_key(self) -> None:
        assert get_algorithm("bogo_sort") is None

    def test_card_is_json_ready(self) -> None:
        card = get_algorithm("dijkstra").to_dict()
        assert card["inputs"] == ["graph", "start", "end"]
        json.dumps(card)


class TestSelection:
    def test_defaults(self) -> None:
        sel = Selection()
        assert sel.algorithm == "bubble_sort"
        assert sel.start == 0 and sel.end == 5
        assert sel.graph.node_count() == 6

    def test_replace_returns_new_selection(self) -> None:
        sel = Selection()
        other = sel.replace(values=[3, 2, 1])
        assert other.values == (3, 2, 1)
        assert sel.values != other.values

    def test_build_trace_routes_inputs(self) -> None:
        trace = build_trace(Selection(algorithm="binary_search", values=[4, 2, 9], target=9))
        assert trace.final.found == 2

    def test_dijkstra_end_none_runs_everything(self) -> None:
        trace = build_trace(Selection(algorithm="dijkstra", end=None))
        assert trace.final.distances[5] == 9

    @pytest.mark.parametrize("changes, error", [
        ({"algorithm": "bogo_sort"}, ValueError),
        ({"values": list(range(31))}, ValueError),
        ({"values": [1, "two"]}, ValueError),
        ({"values": [1, math.nan]}, ValueError),
        ({"algorithm": "binary_search", "target": None}, ValueError),
        ({"algorithm": "bfs", "start": 6}, InvalidGraph),
        ({"algorithm": "dijkstra", "end": -1}, InvalidGraph),
    ])
    def test_validation(self, changes, error) -> None:
        with pytest.raises(error):
            build_trace(Selection().replace(**changes))

    def test_unused_inputs_not_validated(self) -> None:
        # a bad start node does not matter to a sort
        trace = build_trace(Selection(algorithm="bubble_sort", start=99, values=[2, 1]))
        assert trace.final.array == [1, 2]

    def test_export(self) -> None:
        sel = Selection(values=[2, 1])
        data = export(sel, build_trace(sel))
        assert data["selection"]["values"] == [2, 1]
        assert data["trace"]["total_steps"] == len(data["trace"]["snapshots"])
        json.dumps(data)


class TestRandomArray:
    def test_length_and_range(self) -> None:
        values = random_array(20, rng=random.Random(1))
        assert len(values) == 20
        assert all(5 <= v <= 100 for v in values)

    def test_seeded_is_reproducible(self) -> None:
        assert random_array(rng=random.Random(7)) == random_array(rng=random.Random(7))

    def test_too_long(self) -> None:
        with pytest.raises(ValueError):
            random_array(31)


class TestPresetArray:
    def test_sorted_and_reversed(self) -> None:
        assert preset_array([5, 3, 8, 1], "sorted") == (1, 3, 5, 8)
        assert preset_array([5, 3, 8, 1], "reversed") == (8, 5, 3, 1)

    def test_keeps_duplicates(self) -> None:
        assert preset_array((2, 7, 2), "reversed") == (7, 2, 2)

    def test_unknown_preset(self) -> None:
        with pytest.raises(ValueError, match="unknown array preset"):
            preset_array([1, 2], "shuffled")
