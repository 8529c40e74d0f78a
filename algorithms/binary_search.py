"""
binary_search.py — Binary Search
=================================
Bisection over a non-decreasing array.

The input is checked before searching.  An unsorted array produces a
single frame explaining the failed precondition and the trace stops
there: no midpoint is ever computed.

Otherwise, per iteration:
  1. Compute mid = (low + high) // 2  →  current_index = mid
  2. Compare a[mid] with the target
  3. Narrate which half is discarded
Ends with a found frame (+ summary) or a not-found frame once low > high.
"""

from typing import Generator, List, Sequence

from algorithms.frames import FrameEvent, SearchFrame


PSEUDOCODE: List[str] = [
    "def binary_search(a, target):",                # 0
    "    require a is sorted",                      # 1
    "    low ← 0; high ← n - 1",                    # 2
    "    while low <= high:",                       # 3
    "        mid ← (low + high) / 2",               # 4
    "        if a[mid] == target: return mid",      # 5
    "        elif a[mid] < target: low ← mid + 1",  # 6
    "        else: high ← mid - 1",                 # 7
    "    return NOT FOUND",                         # 8
]


def is_non_decreasing(values: Sequence[float]) -> bool:
    return all(values[i - 1] <= values[i] for i in range(1, len(values)))


def binary_search(values: List[float], target: float) -> Generator[SearchFrame, None, None]:
    array = tuple(values)

    yield SearchFrame(
        array=array,
        description=f"Starting binary search for target value {target} in array of length {len(array)}",
        event=FrameEvent.START,
        pseudocode_line=0,
    )

    if not array:
        yield SearchFrame(
            array=array,
            description="Array is empty, search cannot be performed",
            event=FrameEvent.NOT_FOUND,
            pseudocode_line=8,
        )
        return

    if not is_non_decreasing(array):
        yield SearchFrame(
            array=array,
            description="Binary search requires a sorted array. This array is not sorted!",
            event=FrameEvent.PRECONDITION,
            pseudocode_line=1,
        )
        return

    low, high = 0, len(array) - 1
    yield SearchFrame(
        array=array,
        description=f"Setting initial search boundaries: left = {low}, right = {high}",
        event=FrameEvent.NOTE,
        pseudocode_line=2,
    )

    while low <= high:
        mid = (low + high) // 2
        yield SearchFrame(
            array=array,
            current_index=mid,
            description=f"Calculating middle index: ({low} + {high}) / 2 = {mid}",
            event=FrameEvent.NOTE,
            pseudocode_line=4,
        )
        yield SearchFrame(
            array=array,
            current_index=mid,
            description=f"Comparing element at index {mid} (value: {array[mid]}) with target {target}",
            event=FrameEvent.EXAMINE,
            pseudocode_line=5,
        )

        if array[mid] == target:
            yield SearchFrame(
                array=array,
                found_index=mid,
                description=f"Found target {target} at index {mid}!",
                event=FrameEvent.FOUND,
                pseudocode_line=5,
            )
            yield SearchFrame(
                array=array,
                found_index=mid,
                description=f"Binary search complete. Target {target} found at index {mid}.",
                event=FrameEvent.CONCLUDE,
                pseudocode_line=5,
            )
            return

        if array[mid] < target:
            low = mid + 1
            yield SearchFrame(
                array=array,
                description=(
                    f"{array[mid]} < {target}, so target must be in the right half. "
                    f"Setting left = {low}, right remains {high}"
                ),
                event=FrameEvent.NOTE,
                pseudocode_line=6,
            )
        else:
            high = mid - 1
            yield SearchFrame(
                array=array,
                description=(
                    f"{array[mid]} > {target}, so target must be in the left half. "
                    f"Setting right = {high}, left remains {low}"
                ),
                event=FrameEvent.NOTE,
                pseudocode_line=7,
            )

        if low <= high:
            yield SearchFrame(
                array=array,
                description=f"New search range: indices {low} to {high}",
                event=FrameEvent.NOTE,
                pseudocode_line=3,
            )

    yield SearchFrame(
        array=array,
        description=f"Binary search complete. Target {target} not found in the array.",
        event=FrameEvent.NOT_FOUND,
        pseudocode_line=8,
    )
