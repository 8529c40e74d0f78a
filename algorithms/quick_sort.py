"""
quick_sort.py — Quick Sort (Lomuto partition)
==============================================
Pivot = last element of the active subrange.  Yields a SortFrame when a
pivot is selected, for every comparison against the pivot, and for every
swap including the final pivot-to-position swap.
"""

from typing import Generator, List

from algorithms.frames import FrameEvent, SortFrame, sort_frame


PSEUDOCODE: List[str] = [
    "def quick_sort(a, low, high):",                # 0
    "    if low < high:",                           # 1
    "        p ← partition(a, low, high)",          # 2
    "        quick_sort(a, low, p - 1)",            # 3
    "        quick_sort(a, p + 1, high)",           # 4
    "def partition(a, low, high):",                 # 5
    "    pivot ← a[high]; i ← low - 1",             # 6
    "    for j in low .. high-1:",                  # 7
    "        if a[j] <= pivot:",                    # 8
    "            i ← i + 1; swap(a[i], a[j])",      # 9
    "    swap(a[i+1], a[high])",                    # 10
    "    return i + 1",                             # 11
]


def quick_sort(values: List[float]) -> Generator[SortFrame, None, None]:
    array = list(values)

    if len(array) < 2:
        yield sort_frame(
            array,
            "Sorting complete! An array with fewer than two elements is already sorted.",
            FrameEvent.CONCLUDE, line=0,
        )
        return

    yield sort_frame(array, "Starting Quick Sort algorithm", FrameEvent.START, line=0)
    yield from _sort(array, 0, len(array) - 1)
    yield sort_frame(
        array,
        "Sorting complete! The array is now sorted in ascending order.",
        FrameEvent.CONCLUDE, line=0,
    )


def _sort(array: List[float], low: int, high: int) -> Generator[SortFrame, None, None]:
    if low >= high:
        return
    p = yield from _partition(array, low, high)
    yield from _sort(array, low, p - 1)
    yield from _sort(array, p + 1, high)


def _partition(array: List[float], low: int, high: int) -> Generator[SortFrame, None, int]:
    pivot = array[high]
    yield sort_frame(
        array,
        f"Selecting pivot {pivot} (last element of range {low}..{high})",
        FrameEvent.PIVOT, line=6, comparing=(high,),
    )

    i = low - 1
    for j in range(low, high):
        yield sort_frame(
            array,
            f"Comparing {array[j]} at index {j} with pivot {pivot}",
            FrameEvent.COMPARE, line=8, comparing=(j, high),
        )
        if array[j] <= pivot:
            i += 1
            array[i], array[j] = array[j], array[i]
            yield sort_frame(
                array,
                f"{array[i]} <= {pivot}: swapping indices {i} and {j}",
                FrameEvent.SWAP, line=9, swapped=(i, j),
            )

    array[i + 1], array[high] = array[high], array[i + 1]
    yield sort_frame(
        array,
        f"Placing pivot {pivot} at its final position {i + 1}",
        FrameEvent.SWAP, line=10, swapped=(i + 1, high),
    )
    return i + 1
