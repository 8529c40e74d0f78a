"""
heap_sort.py — Heap Sort
=========================
Builds a max-heap bottom-up (sift-down from n/2 - 1 to 0), then
repeatedly swaps the root with the last unsorted element and sifts the
new root down.  Yields a SortFrame for each parent/child comparison and
each swap.
"""

from typing import Generator, List

from algorithms.frames import FrameEvent, SortFrame, sort_frame


PSEUDOCODE: List[str] = [
    "def heap_sort(a):",                            # 0
    "    for i in n/2 - 1 down to 0:",              # 1
    "        sift_down(a, n, i)",                   # 2
    "    for end in n-1 down to 1:",                # 3
    "        swap(a[0], a[end])",                   # 4
    "        sift_down(a, end, 0)",                 # 5
    "def sift_down(a, n, i):",                      # 6
    "    largest ← max of i, 2i+1, 2i+2",           # 7
    "    if largest != i:",                         # 8
    "        swap(a[i], a[largest])",               # 9
    "        sift_down(a, n, largest)",             # 10
]


def heap_sort(values: List[float]) -> Generator[SortFrame, None, None]:
    array = list(values)
    n = len(array)

    if n < 2:
        yield sort_frame(
            array,
            "Sorting complete! An array with fewer than two elements is already sorted.",
            FrameEvent.CONCLUDE, line=0,
        )
        return

    yield sort_frame(array, "Starting Heap Sort algorithm", FrameEvent.START, line=0)

    for i in range(n // 2 - 1, -1, -1):
        yield from _sift_down(array, n, i)

    yield sort_frame(
        array,
        f"Max-heap built; the largest element {array[0]} is at the root",
        FrameEvent.NOTE, line=3,
    )

    for end in range(n - 1, 0, -1):
        array[0], array[end] = array[end], array[0]
        yield sort_frame(
            array,
            f"Moving max {array[end]} from the root to its final position {end}",
            FrameEvent.SWAP, line=4, swapped=(0, end),
        )
        yield from _sift_down(array, end, 0)

    yield sort_frame(
        array,
        "Sorting complete! The array is now sorted in ascending order.",
        FrameEvent.CONCLUDE, line=0,
    )


def _sift_down(array: List[float], n: int, i: int) -> Generator[SortFrame, None, None]:
    # iterative form of the recursive heapify
    while True:
        largest = i
        left, right = 2 * i + 1, 2 * i + 2

        if left < n:
            yield sort_frame(
                array,
                f"Comparing parent {array[largest]} at index {largest} with left child {array[left]} at index {left}",
                FrameEvent.COMPARE, line=7, comparing=(largest, left),
            )
            if array[left] > array[largest]:
                largest = left

        if right < n:
            yield sort_frame(
                array,
                f"Comparing {array[largest]} at index {largest} with right child {array[right]} at index {right}",
                FrameEvent.COMPARE, line=7, comparing=(largest, right),
            )
            if array[right] > array[largest]:
                largest = right

        if largest == i:
            return

        array[i], array[largest] = array[largest], array[i]
        yield sort_frame(
            array,
            f"Swapping {array[largest]} down to index {largest} and {array[i]} up to index {i}",
            FrameEvent.SWAP, line=9, swapped=(i, largest),
        )
        i = largest
