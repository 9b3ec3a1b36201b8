"""
binary_search.py — Binary Search
=================================
Searches a sorted private copy of the input.  Per iteration:

  search range [low-high]         (whole range highlighted)
  compare target with arr[mid]
  found                           → terminal, `found = mid`
  right half / left half          (new range highlighted)

If the range empties (or MAX_ITERATIONS is hit) the terminal snapshot
reports "not found" with `found = -1`.
"""

from typing import Generator, List, Sequence

from algorithms.step import SearchSnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record

MAX_ITERATIONS = 100


PSEUDOCODE: List[str] = [
    "START: sort the array",                        # 0
    "low = 0;  high = n - 1",                       # 1
    "WHILE low <= high:",                           # 2
    "  mid = (low + high) / 2",                     # 3
    "  IF array[mid] == target: RETURN mid",        # 4
    "  IF array[mid] < target:",                    # 5
    "    low = mid + 1",                            # 6
    "  ELSE:",                                      # 7
    "    high = mid - 1",                           # 8
    "RETURN -1 (not found)",                        # 9
]


def binary_search(values: Sequence[float], target: float) -> Generator[Snapshot, None, None]:
    arr = sorted(values)
    everything = list(range(len(arr)))
    sb  = StepBuilder(SearchSnapshot, array=arr, sorted=everything, target=target)

    yield sb.build(f"Binary Search: searching for {fmt(target)} in the sorted array", 0)

    low, high = 0, len(arr) - 1
    iterations = 0
    while low <= high and iterations < MAX_ITERATIONS:
        iterations += 1
        mid = (low + high) // 2

        yield sb.build(
            f"Search range: indices [{low}-{high}], checking the middle element", 2,
            compare=[mid], highlight=list(range(low, high + 1)),
            low=low, high=high, mid=mid,
        )
        yield sb.build(
            f"Comparing target {fmt(target)} with middle element {fmt(arr[mid])} (index {mid})", 4,
            compare=[mid], highlight=[mid], low=low, high=high, mid=mid,
        )

        if arr[mid] == target:
            yield sb.build(
                f"Found {fmt(target)} at index {mid}!", 4,
                highlight=[mid], low=low, high=high, mid=mid, found=mid,
            )
            return

        if arr[mid] < target:
            old_low, low = low, mid + 1
            yield sb.build(
                f"{fmt(arr[mid])} < {fmt(target)}, target must be in the right half [{low}-{high}]", 6,
                compare=[mid], highlight=list(range(low, high + 1)),
                low=old_low, high=mid, mid=mid,
            )
        else:
            old_high, high = high, mid - 1
            yield sb.build(
                f"{fmt(arr[mid])} > {fmt(target)}, target must be in the left half [{low}-{high}]", 8,
                compare=[mid], highlight=list(range(low, high + 1)),
                low=low, high=old_high, mid=mid,
            )

    yield sb.build(f"{fmt(target)} not found in the array", 9)


def generate_binary_search(values: Sequence[float], target: float) -> Trace:
    return record("binary_search", PSEUDOCODE, binary_search(values, target))
