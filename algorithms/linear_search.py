"""
linear_search.py — Linear Search
=================================
Scans indices 0..n-1 in order.  One frame per element examined; on a
match a found frame plus a terminal summary, otherwise a single
"not found" terminal frame.
"""

from typing import Generator, List

from algorithms.frames import FrameEvent, SearchFrame


PSEUDOCODE: List[str] = [
    "def linear_search(a, target):",                # 0
    "    for i in 0 .. n-1:",                       # 1
    "        if a[i] == target:",                   # 2
    "            return i",                         # 3
    "    return NOT FOUND",                         # 4
]


def linear_search(values: List[float], target: float) -> Generator[SearchFrame, None, None]:
    array = tuple(values)

    yield SearchFrame(
        array=array,
        description=f"Starting linear search for target value {target} in array of length {len(array)}",
        event=FrameEvent.START,
        pseudocode_line=0,
    )

    for i, value in enumerate(array):
        yield SearchFrame(
            array=array,
            current_index=i,
            description=f"Comparing element at index {i} (value: {value}) with target {target}",
            event=FrameEvent.EXAMINE,
            pseudocode_line=2,
        )
        if value == target:
            yield SearchFrame(
                array=array,
                found_index=i,
                description=f"Found target {target} at index {i}!",
                event=FrameEvent.FOUND,
                pseudocode_line=3,
            )
            yield SearchFrame(
                array=array,
                found_index=i,
                description=f"Linear search complete. Target {target} found at index {i}.",
                event=FrameEvent.CONCLUDE,
                pseudocode_line=3,
            )
            return

    yield SearchFrame(
        array=array,
        description=f"Linear search complete. Target {target} not found in the array.",
        event=FrameEvent.NOT_FOUND,
        pseudocode_line=4,
    )
