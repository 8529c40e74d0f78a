"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, trace

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, category, fn, pseudocode, inputs, …),
        …
    }

`category` is one of "sorting", "search", "graph", "tree".  `inputs`
names the keyword arguments the tracer takes, so `trace()` can pick
them out of a larger bag of request parameters.

Adding an algorithm: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble_sort   import bubble_sort   as _bubble,   PSEUDOCODE as _bubble_pc
from algorithms.quick_sort    import quick_sort    as _quick,    PSEUDOCODE as _quick_pc
from algorithms.merge_sort    import merge_sort    as _merge,    PSEUDOCODE as _merge_pc
from algorithms.heap_sort     import heap_sort     as _heap,     PSEUDOCODE as _heap_pc
from algorithms.linear_search import linear_search as _linear,   PSEUDOCODE as _linear_pc
from algorithms.binary_search import binary_search as _binary,   PSEUDOCODE as _binary_pc
from algorithms.bfs           import bfs           as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs           import dfs           as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.dijkstra      import dijkstra      as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.bst           import bst_insert_all as _bst,     PSEUDOCODE as _bst_pc
from algorithms.bst           import bst_search    as _bst_find, SEARCH_PSEUDOCODE as _bst_find_pc
from algorithms.avl           import avl_insert_all as _avl,     PSEUDOCODE as _avl_pc
from algorithms.red_black     import rb_insert_all as _rb,       PSEUDOCODE as _rb_pc
from algorithms.frames        import Frame

from engine.errors import UnknownAlgorithmError

CATEGORIES = ("sorting", "search", "graph", "tree")


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label, e.g. "Breadth-First Search"
    category:         str                    # sorting | search | graph | tree
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    inputs:           List[str] = field(default_factory=list)   # tracer kwargs
    complexity_time:  str      = ""          # e.g. "O(V + E)"
    complexity_space: str      = ""          # e.g. "O(V)"
    description:      str      = ""          # one-liner for the catalog card

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":             self.key,
            "label":           self.label,
            "category":        self.category,
            "inputs":          list(self.inputs),
            "pseudocode":      list(self.pseudocode),
            "complexityTime":  self.complexity_time,
            "complexitySpace": self.complexity_space,
            "description":     self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", category="sorting",
        fn=_bubble, pseudocode=_bubble_pc, inputs=["values"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent elements that are out of order. Stops early on a clean pass.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", category="sorting",
        fn=_quick, pseudocode=_quick_pc, inputs=["values"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Partitions around the last element (Lomuto), then recurses on both sides.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", category="sorting",
        fn=_merge, pseudocode=_merge_pc, inputs=["values"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits at the midpoint and merges the sorted halves. Stable.",
    ),

    "heap_sort": AlgoInfo(
        key="heap_sort", label="Heap Sort", category="sorting",
        fn=_heap, pseudocode=_heap_pc, inputs=["values"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a max-heap, then moves the root to the end one element at a time.",
    ),

    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", category="search",
        fn=_linear, pseudocode=_linear_pc, inputs=["values", "target"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Examines every element in order until the target turns up.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", category="search",
        fn=_binary, pseudocode=_binary_pc, inputs=["values", "target"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves the search range each step. Requires a sorted array.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", category="graph",
        fn=_bfs, pseudocode=_bfs_pc, inputs=["graph", "start"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds shortest path by hop count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", category="graph",
        fn=_dfs, pseudocode=_dfs_pc, inputs=["graph", "start"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", category="graph",
        fn=_dijkstra, pseudocode=_dij_pc, inputs=["graph", "start", "end"],
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Greedily settles the closest node. Optimal for non-negative weights.",
    ),

    "bst": AlgoInfo(
        key="bst", label="Binary Search Tree", category="tree",
        fn=_bst, pseudocode=_bst_pc, inputs=["keys"],
        complexity_time="O(h) per insert", complexity_space="O(n)",
        description="Plain ordered binary tree. No rebalancing; duplicate keys are ignored.",
    ),

    "avl": AlgoInfo(
        key="avl", label="AVL Tree", category="tree",
        fn=_avl, pseudocode=_avl_pc, inputs=["keys"],
        complexity_time="O(log n) per insert", complexity_space="O(n)",
        description="Height-balanced BST. Rotates whenever a balance factor leaves [-1, 1].",
    ),

    "red_black": AlgoInfo(
        key="red_black", label="Red-Black Tree", category="tree",
        fn=_rb, pseudocode=_rb_pc, inputs=["keys"],
        complexity_time="O(log n) per insert", complexity_space="O(n)",
        description="Colour-balanced BST. Recolours and rotates to keep black heights equal.",
    ),

    "bst_search": AlgoInfo(
        key="bst_search", label="BST Lookup", category="tree",
        fn=_bst_find, pseudocode=_bst_find_pc, inputs=["keys", "target"],
        complexity_time="O(h)", complexity_space="O(1)",
        description="Walks down a BST comparing the target with each node on the way.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


def find_by_label(category: str, label: str) -> Optional[AlgoInfo]:
    for info in algorithms_by_category(category):
        if info.label == label:
            return info
    return None


def trace(key: str, **inputs: Any) -> List[Frame]:
    """
    Run the tracer registered under `key` to completion.

    Only the keyword arguments the tracer declares in `inputs` are passed
    on; missing optional ones fall back to the tracer's defaults.

    Raises:
        UnknownAlgorithmError: `key` is not registered.
    """
    info = REGISTRY.get(key)
    if info is None:
        raise UnknownAlgorithmError(f"Unknown algorithm: {key}")
    kwargs = {name: inputs[name] for name in info.inputs if name in inputs}
    return list(info.fn(**kwargs))


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "CATEGORIES",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "find_by_label",
    "trace",
]
