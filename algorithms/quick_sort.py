"""
quick_sort.py — Quick Sort (Lomuto partition)
==============================================
The pivot is always the last element of the current range.  Each
partition yields:

  selecting pivot               (pivot index highlighted)
  compare arr[j] with pivot     (one per j in [low, high))
  swap arr[i] and arr[j]        (only when arr[j] < pivot)
  placed pivot at i+1
  pivot now in final position   (joins the cumulative `sorted` set)

then recurses left, then right.  Ranges of length 0 or 1 yield nothing.
"""

from typing import Generator, List, Sequence

from algorithms.step import ArraySnapshot, Snapshot, StepBuilder, fmt
from algorithms.trace import Trace, record


PSEUDOCODE: List[str] = [
    "START: copy the input array",                  # 0
    "FUNCTION quickSort(low, high):",               # 1
    "  IF low < high:",                             # 2
    "    p = partition(low, high)",                 # 3
    "    quickSort(low, p - 1)",                    # 4
    "    quickSort(p + 1, high)",                   # 5
    "FUNCTION partition(low, high):",               # 6
    "  pivot = array[high];  i = low - 1",          # 7
    "  FOR j from low to high-1:",                  # 8
    "    IF array[j] < pivot:",                     # 9
    "      i++;  SWAP array[i] and array[j]",       # 10
    "  SWAP array[i+1] and array[high]",            # 11
    "  RETURN i + 1",                               # 12
    "END: array is sorted",                         # 13
]


def quick_sort(values: Sequence[float]) -> Generator[Snapshot, None, None]:
    arr    = list(values)
    sb     = StepBuilder(ArraySnapshot)
    placed = []

    def partition(low: int, high: int):
        pivot = arr[high]
        i = low - 1

        yield sb.build(
            f"Selecting {fmt(pivot)} as pivot (last element)", 7,
            array=arr, sorted=placed, highlight=[high], pivot=high,
        )

        for j in range(low, high):
            yield sb.build(
                f"Comparing {fmt(arr[j])} with pivot {fmt(pivot)}", 9,
                array=arr, compare=[j, high], sorted=placed,
                highlight=[j, high], pivot=high,
            )
            if arr[j] < pivot:
                i += 1
                arr[i], arr[j] = arr[j], arr[i]
                yield sb.build(
                    f"{fmt(arr[i])} < {fmt(pivot)}, swapping {fmt(arr[i])} to position {i}", 10,
                    array=arr, compare=[i, j], swap=[i, j], sorted=placed,
                    highlight=[i, j], pivot=high,
                )

        arr[i + 1], arr[high] = arr[high], arr[i + 1]
        yield sb.build(
            f"Placed pivot {fmt(pivot)} at position {i + 1}", 11,
            array=arr, swap=[i + 1, high], sorted=placed,
            highlight=[i + 1], pivot=i + 1,
        )
        return i + 1

    def sort(low: int, high: int):
        if low >= high:
            return
        p = yield from partition(low, high)
        placed.append(p)
        yield sb.build(
            f"Pivot {fmt(arr[p])} is now in its correct position", 12,
            array=arr, sorted=placed, highlight=[p], pivot=p,
        )
        yield from sort(low, p - 1)
        yield from sort(p + 1, high)

    yield sb.build("Starting Quick Sort", 0, array=arr)
    yield from sort(0, len(arr) - 1)
    yield sb.build(
        "Quick Sort complete! Array is now sorted.", 13,
        array=arr, sorted=list(range(len(arr))),
    )


def generate_quick_sort(values: Sequence[float]) -> Trace:
    return record("quick_sort", PSEUDOCODE, quick_sort(values))
