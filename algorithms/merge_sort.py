"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort as a recursive generator (`yield from`), so the
snapshot order follows the call order exactly:

  divide(start, end):
      "dividing left half"   → divide(start, mid)
      "dividing right half"  → divide(mid+1, end)
      merge(start, mid, end):
          "merging [start-mid] and [mid+1-end]"
          compare left[i] / right[j]   (one snapshot per pair)
          placed element at k          (one snapshot per write,
                                        leftover copies included)

Recursion depth is log2(n); the merge is stable (ties take the left run).
"""

from typing import Generator, List, Sequence

from algorithms.step import ArraySnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record


PSEUDOCODE: List[str] = [
    "START: copy the input array",                              # 0
    "FUNCTION mergeSort(start, end):",                          # 1
    "  IF start < end:",                                        # 2
    "    mid = (start + end) / 2",                              # 3
    "    mergeSort(start, mid)",                                # 4
    "    mergeSort(mid + 1, end)",                              # 5
    "    merge(start, mid, end)",                               # 6
    "FUNCTION merge(start, mid, end):",                         # 7
    "  WHILE both runs have elements:",                         # 8
    "    IF left[i] <= right[j]: take left[i] ELSE take right[j]",  # 9
    "    array[k] = taken element",                             # 10
    "  COPY remaining left elements",                           # 11
    "  COPY remaining right elements",                          # 12
    "END: array is sorted",                                     # 13
]


def merge_sort(values: Sequence[float]) -> Generator[Snapshot, None, None]:
    arr = list(values)
    sb  = StepBuilder(ArraySnapshot)

    def merge(start: int, mid: int, end: int):
        left  = arr[start:mid + 1]
        right = arr[mid + 1:end + 1]
        i = j = 0
        k = start

        yield sb.build(
            f"Merging sorted runs [{start}-{mid}] and [{mid + 1}-{end}]", 6,
            array=arr, highlight=list(range(start, end + 1)), segment=[start, end],
        )

        while i < len(left) and j < len(right):
            yield sb.build(
                f"Comparing {fmt(left[i])} and {fmt(right[j])}", 9,
                array=arr, compare=[start + i, mid + 1 + j],
                highlight=[start + i, mid + 1 + j], segment=[start, end],
            )
            if left[i] <= right[j]:
                arr[k] = left[i]
                i += 1
            else:
                arr[k] = right[j]
                j += 1
            yield sb.build(
                f"Placed {fmt(arr[k])} at position {k}", 10,
                array=arr, swap=[k], highlight=list(range(start, k + 1)),
                segment=[start, end],
            )
            k += 1

        while i < len(left):
            arr[k] = left[i]
            i += 1
            yield sb.build(
                f"Copying remaining {fmt(arr[k])} from the left run to position {k}", 11,
                array=arr, swap=[k], highlight=list(range(start, k + 1)),
                segment=[start, end],
            )
            k += 1

        while j < len(right):
            arr[k] = right[j]
            j += 1
            yield sb.build(
                f"Copying remaining {fmt(arr[k])} from the right run to position {k}", 12,
                array=arr, swap=[k], highlight=list(range(start, k + 1)),
                segment=[start, end],
            )
            k += 1

    def divide(start: int, end: int):
        if start >= end:
            return
        mid = (start + end) // 2

        yield sb.build(
            f"Dividing left half: [{start}-{mid}]", 4,
            array=arr, highlight=list(range(start, mid + 1)), segment=[start, mid],
        )
        yield from divide(start, mid)

        yield sb.build(
            f"Dividing right half: [{mid + 1}-{end}]", 5,
            array=arr, highlight=list(range(mid + 1, end + 1)), segment=[mid + 1, end],
        )
        yield from divide(mid + 1, end)

        yield from merge(start, mid, end)

    yield sb.build("Starting Merge Sort", 0, array=arr)
    yield from divide(0, len(arr) - 1)
    yield sb.build(
        "Merge Sort complete! Array is now sorted.", 13,
        array=arr, sorted=list(range(len(arr))),
    )


def generate_merge_sort(values: Sequence[float]) -> Trace:
    return record("merge_sort", PSEUDOCODE, merge_sort(values))
