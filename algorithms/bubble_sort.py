"""
bubble_sort.py — Bubble Sort
=============================
Generator-based bubble sort.  Yields a SortFrame at:
  1. Start  →  the untouched input
  2. Each adjacent comparison  →  comparing_indices = (j, j+1)
  3. Each swap  →  swapped_indices = (j, j+1)
  4. End of each pass
  5. Final  →  the sorted array

Stops early once a full pass makes no swap.
"""

from typing import Generator, List

from algorithms.frames import FrameEvent, SortFrame, sort_frame


PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                          # 0
    "    for i in 0 .. n-1:",                       # 1
    "        swapped ← false",                      # 2
    "        for j in 0 .. n-i-2:",                 # 3
    "            if a[j] > a[j+1]:",                # 4
    "                swap(a[j], a[j+1])",           # 5
    "                swapped ← true",               # 6
    "        if not swapped: break",                # 7
    "    return a",                                 # 8
]


def bubble_sort(values: List[float]) -> Generator[SortFrame, None, None]:
    array = list(values)
    n = len(array)

    if n < 2:
        yield sort_frame(
            array,
            "Sorting complete! An array with fewer than two elements is already sorted.",
            FrameEvent.CONCLUDE, line=8,
        )
        return

    yield sort_frame(array, "Starting Bubble Sort algorithm", FrameEvent.START, line=0)

    for i in range(n):
        swapped = False
        for j in range(n - i - 1):
            yield sort_frame(
                array,
                f"Comparing elements at indices {j} ({array[j]}) and {j + 1} ({array[j + 1]})",
                FrameEvent.COMPARE, line=4, comparing=(j, j + 1),
            )

            if array[j] > array[j + 1]:
                array[j], array[j + 1] = array[j + 1], array[j]
                swapped = True
                yield sort_frame(
                    array,
                    f"{array[j]} is less than {array[j + 1]}, so we swap them",
                    FrameEvent.SWAP, line=5, swapped=(j, j + 1),
                )
            else:
                yield sort_frame(
                    array,
                    f"{array[j]} is already less than or equal to {array[j + 1]}, no swap needed",
                    FrameEvent.NOTE, line=4,
                )

        if not swapped:
            yield sort_frame(
                array,
                f"Pass {i + 1} made no swaps, so the array is already sorted. Stopping early.",
                FrameEvent.NOTE, line=7,
            )
            break

        if i < n - 1:
            plural = "elements are" if i > 0 else "element is"
            yield sort_frame(
                array,
                f"Completed iteration {i + 1}. The largest {i + 1} {plural} now at the end of the array.",
                FrameEvent.NOTE, line=1,
            )

    yield sort_frame(
        array,
        "Sorting complete! The array is now sorted in ascending order.",
        FrameEvent.CONCLUDE, line=8,
    )
