"""Tests for the binary search trace generator."""

from hypothesis import given, settings
from hypothesis import strategies as st

from algorithms.binary_search import generate_binary_search
from algorithms.step import SearchSnapshot

VALUES = st.lists(st.integers(min_value=-50, max_value=50), max_size=30)


class TestBinarySearchSoundness:
    @given(values=VALUES, target=st.integers(min_value=-60, max_value=60))
    @settings(max_examples=150, deadline=None)
    def test_found_iff_present(self, values, target) -> None:
        trace = generate_binary_search(values, target)
        final = trace.final
        if target in values:
            assert final.found >= 0
            assert final.array[final.found] == target
        else:
            assert final.found == -1
            assert all(s.found == -1 for s in trace)

    @given(values=VALUES, target=st.integers(min_value=-60, max_value=60))
    @settings(max_examples=50, deadline=None)
    def test_array_is_sorted_throughout(self, values, target) -> None:
        trace = generate_binary_search(values, target)
        assert all(s.array == sorted(values) for s in trace)
        assert all(s.target == target for s in trace)


class TestBinarySearchSteps:
    def test_found_after_two_midpoints(self) -> None:
        trace = generate_binary_search([9, 1, 7, 3, 5], 7)
        assert trace.initial.array == [1, 3, 5, 7, 9]
        assert trace.initial.sorted == [0, 1, 2, 3, 4]
        assert [s.code_line for s in trace] == [0, 2, 4, 6, 2, 4, 4]
        compares = [s for s in trace if s.description.startswith("Comparing")]
        assert [s.mid for s in compares] == [2, 3]
        assert all(s.code_line == 4 for s in compares)
        assert trace.code_line_text(2) == "  IF array[mid] == target: RETURN mid"
        assert trace.final.found == 3
        assert trace.final.description == "Found 7 at index 3!"

    def test_left_half(self) -> None:
        trace = generate_binary_search([1, 3, 5, 7, 9], 1)
        assert [s.code_line for s in trace] == [0, 2, 4, 8, 2, 4, 4]
        left = trace[3]
        assert left.highlight == [0, 1]
        assert left.low == 0 and left.high == 4
        assert trace.final.found == 0

    def test_not_found(self) -> None:
        trace = generate_binary_search([1, 3, 5], 4)
        assert trace.final.code_line == 9
        assert trace.final.found == -1
        assert trace.final.description == "4 not found in the array"

    def test_right_half_highlights_new_range(self) -> None:
        trace = generate_binary_search([1, 3, 5, 7, 9], 9)
        right = next(s for s in trace if s.code_line == 6)
        assert right.highlight == [3, 4]
        assert right.description.endswith("right half [3-4]")

    def test_empty_array(self) -> None:
        trace = generate_binary_search([], 5)
        assert len(trace) == 2
        assert isinstance(trace.final, SearchSnapshot)
        assert trace.final.found == -1

    def test_input_not_mutated(self) -> None:
        values = [3, 1, 2]
        generate_binary_search(values, 2)
        assert values == [3, 1, 2]
