"""
merge_sort.py — Merge Sort (top-down)
======================================
Splits at mid = low + (high - low) // 2, sorts each half, then merges
through an auxiliary copy.  Ties keep the left element first, so the
sort is stable.

Yields a SortFrame on every subdivision, every comparison during a merge
and every placement back into the array.  Placement frames say which
side the element came from and whether the other side was exhausted.
"""

from typing import Generator, List

from algorithms.frames import FrameEvent, SortFrame, sort_frame


PSEUDOCODE: List[str] = [
    "def merge_sort(a, low, high):",                # 0
    "    if low >= high: return",                   # 1
    "    mid ← low + (high - low) / 2",             # 2
    "    merge_sort(a, low, mid)",                  # 3
    "    merge_sort(a, mid + 1, high)",             # 4
    "    aux ← copy of a[low..high]",               # 5
    "    while both halves remain:",                # 6
    "        if aux[i] <= aux[j]: a[k] ← aux[i++]", # 7
    "        else: a[k] ← aux[j++]",                # 8
    "    copy what is left of either half",         # 9
]


def merge_sort(values: List[float]) -> Generator[SortFrame, None, None]:
    array = list(values)

    if len(array) < 2:
        yield sort_frame(
            array,
            "Sorting complete! An array with fewer than two elements is already sorted.",
            FrameEvent.CONCLUDE, line=1,
        )
        return

    yield sort_frame(array, "Starting Merge Sort algorithm", FrameEvent.START, line=0)
    yield from _sort(array, 0, len(array) - 1)
    yield sort_frame(
        array,
        "Sorting complete! The array is now sorted in ascending order.",
        FrameEvent.CONCLUDE, line=0,
    )


def _sort(array: List[float], low: int, high: int) -> Generator[SortFrame, None, None]:
    if low >= high:
        return
    mid = low + (high - low) // 2
    yield sort_frame(
        array,
        f"Dividing range {low}..{high} into {low}..{mid} and {mid + 1}..{high}",
        FrameEvent.DIVIDE, line=2,
    )
    yield from _sort(array, low, mid)
    yield from _sort(array, mid + 1, high)
    yield from _merge(array, low, mid, high)


def _merge(array: List[float], low: int, mid: int, high: int) -> Generator[SortFrame, None, None]:
    aux = array[low:high + 1]
    left_end  = mid - low          # last aux index of the left half
    right_end = high - low         # last aux index of the right half
    i, j, k = 0, left_end + 1, low

    # a[low..k-1] is merged output, a[k..high] holds what is left of the
    # left half followed by what is left of the right half
    while i <= left_end and j <= right_end:
        yield sort_frame(
            array,
            f"Comparing {aux[i]} (left) with {aux[j]} (right)",
            FrameEvent.COMPARE, line=7, comparing=(k, k + left_end + 1 - i),
        )
        if aux[i] <= aux[j]:
            array[k] = aux[i]
            i += 1
            side = "left"
        else:
            array[k] = aux[j]
            j += 1
            side = "right"
        _restore_tail(array, aux, i, left_end, j, right_end, k + 1, high)
        yield sort_frame(
            array,
            f"Placing {array[k]} from the {side} subarray at index {k}",
            FrameEvent.PLACE, line=7 if side == "left" else 8, swapped=(k,),
        )
        k += 1

    while i <= left_end:
        array[k] = aux[i]
        i += 1
        _restore_tail(array, aux, i, left_end, j, right_end, k + 1, high)
        yield sort_frame(
            array,
            f"Right subarray exhausted; placing remaining left element {array[k]} at index {k}",
            FrameEvent.PLACE, line=9, swapped=(k,),
        )
        k += 1

    while j <= right_end:
        array[k] = aux[j]
        j += 1
        _restore_tail(array, aux, i, left_end, j, right_end, k + 1, high)
        yield sort_frame(
            array,
            f"Left subarray exhausted; placing remaining right element {array[k]} at index {k}",
            FrameEvent.PLACE, line=9, swapped=(k,),
        )
        k += 1


def _restore_tail(
    array: List[float], aux: List[float],
    i: int, left_end: int, j: int, right_end: int,
    start: int, high: int,
) -> None:
    """Lay the unmerged elements out after the output so `array` stays a permutation."""
    array[start:high + 1] = aux[i:left_end + 1] + aux[j:right_end + 1]
