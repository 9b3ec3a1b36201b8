"""
bubble_sort.py — Bubble Sort
=============================
Generator-based bubble sort.  Yields a Snapshot at every meaningful event:
  1. Compare arr[j] and arr[j+1]   →  both in `compare`
  2. Swap them if out of order     →  both in `swap`
  3. End of outer pass i           →  index n-1-i joins `sorted`
  4. Final step                    →  every index sorted

Trace length is therefore exactly
    2 + n(n-1)/2 comparisons + swaps performed + n pass markers.
"""

from typing import Generator, List, Sequence

from algorithms.step import ArraySnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record


PSEUDOCODE: List[str] = [
    "START: copy the input array",                  # 0
    "FOR i from 0 to n-1:",                         # 1
    "  FOR j from 0 to n-i-2:",                     # 2
    "    IF array[j] > array[j+1]:",                # 3
    "      SWAP array[j] and array[j+1]",           # 4
    "  MARK array[n-1-i] as sorted",                # 5
    "END: array is sorted",                         # 6
]


def bubble_sort(values: Sequence[float]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    n   = len(arr)
    sb  = StepBuilder(ArraySnapshot)

    yield sb.build("Starting Bubble Sort", 0, array=arr)

    for i in range(n):
        done = [n - 1 - k for k in range(i)]
        for j in range(n - i - 1):
            yield sb.build(
                f"Comparing {fmt(arr[j])} and {fmt(arr[j + 1])}", 3,
                array=arr, compare=[j, j + 1], sorted=done, highlight=[j, j + 1],
            )
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                yield sb.build(
                    f"Swapped {fmt(arr[j + 1])} and {fmt(arr[j])}: "
                    f"{fmt(arr[j + 1])} > {fmt(arr[j])}", 4,
                    array=arr, compare=[j, j + 1], swap=[j, j + 1],
                    sorted=done, highlight=[j, j + 1],
                )
        yield sb.build(
            f"Element {fmt(arr[n - 1 - i])} is now in its correct position", 5,
            array=arr, sorted=done + [n - 1 - i], highlight=[n - 1 - i],
        )

    yield sb.build(
        "Bubble Sort complete! Array is now sorted.", 6,
        array=arr, sorted=list(range(n)),
    )


def generate_bubble_sort(values: Sequence[float]) -> Trace:
    return record("bubble_sort", PSEUDOCODE, bubble_sort(values))
