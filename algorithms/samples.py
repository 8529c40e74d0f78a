"""
samples.py — Sample inputs for demonstrations
==============================================
Random arrays, sorted arrays and connected graphs sized for interactive
playback.  Values are integers in [0, max_value).  Pass `seed` to get a
reproducible sample; by default every call is different.
"""

import random
from typing import List, Optional

from graph import Graph


DEFAULT_TREE_KEYS: List[int] = [30, 20, 40, 10, 25, 35, 50]


def random_array(size: int = 15, max_value: int = 100, seed: Optional[int] = None) -> List[int]:
    rng = random.Random(seed)
    return [rng.randrange(max_value) for _ in range(size)]


def random_sorted_array(size: int = 15, max_value: int = 100, seed: Optional[int] = None) -> List[int]:
    return sorted(random_array(size, max_value, seed))


def random_connected_graph(
    node_count: int = 6,
    edge_density: float = 0.4,
    seed: Optional[int] = None,
) -> Graph:
    """See `Graph.generate_random_connected` for the layout and weight rules."""
    return Graph.generate_random_connected(node_count=node_count, edge_density=edge_density, seed=seed)
