"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Classic O(V²) Dijkstra: every iteration scans the unvisited set for the
node with the smallest tentative distance (ties go to the node that
comes first in node order).  No priority queue.

Yields a GraphFrame at:
  1. Start  →  all distances ∞ except start = 0
  2. Visit the closest unvisited node  →  CURRENT
  3. Each relaxation check of an out-edge
  4. Each actual distance update
  5. Final  →  shortest path to `end`, or "no path"

Stops as soon as the closest candidate is `end`, when nothing is left,
or when the closest candidate is unreachable (∞).  With end=None the
loop runs until every reachable node is settled.

Correctness note: Dijkstra requires non-negative weights.
The caller (or the UI) should reject graphs with negative edges.
"""

from typing import Dict, Generator, List, Optional

from graph import Graph
from algorithms.frames import FrameEvent, GraphFrame, GraphFrameBuilder


PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start, end):",             # 0
    "    dist ← {v: ∞}; dist[start] ← 0",           # 1
    "    prev ← {v: none}; unvisited ← V",          # 2
    "    while unvisited is not empty:",            # 3
    "        u ← argmin dist over unvisited",       # 4
    "        if u == end or dist[u] == ∞: break",   # 5
    "        unvisited.remove(u)",                  # 6
    "        for (v, w) in adj(u):",                # 7
    "            if dist[u] + w < dist[v]:",        # 8
    "                dist[v] ← dist[u] + w",        # 9
    "                prev[v] ← u",                  # 10
    "    return path(prev, end)",                   # 11
]

INF = float("inf")


def dijkstra(
    graph: Graph,
    start: int,
    end: Optional[int] = None,
) -> Generator[GraphFrame, None, None]:
    adjacency = graph.adjacency()
    order = graph.node_ids()

    distances: Dict[int, float] = {nid: INF for nid in order}
    previous: Dict[int, Optional[int]] = {nid: None for nid in order}
    distances[start] = 0
    previous.setdefault(start, None)
    unvisited = set(order)

    fb = GraphFrameBuilder(graph, distances=distances, previous=previous)

    def settled() -> List[int]:
        return [nid for nid in order if nid not in unvisited]

    yield fb.build(f"Starting Dijkstra's algorithm from node {start}", FrameEvent.START, line=1)

    while unvisited:
        current: Optional[int] = None
        min_distance = INF
        for nid in order:
            if nid in unvisited and distances[nid] < min_distance:
                min_distance = distances[nid]
                current = nid

        if current is None or current == end or min_distance == INF:
            break

        unvisited.discard(current)
        fb.current = current
        fb.visited = settled()
        fb.path = reconstruct_path(previous, current)
        yield fb.build(
            f"Visiting node {current} with current distance {distances[current]}",
            FrameEvent.VISIT, line=6,
        )

        for nbr, weight in adjacency.get(current, []):
            new_distance = distances[current] + weight
            old_distance = distances.get(nbr, INF)
            fb.path = reconstruct_path(previous, current)
            yield fb.build(
                f"Checking neighbor {nbr}, current distance: {_fmt(old_distance)}, "
                f"new potential distance: {new_distance}",
                FrameEvent.RELAX, line=8,
            )

            if new_distance < old_distance:
                distances[nbr] = new_distance
                previous[nbr] = current
                fb.path = reconstruct_path(previous, nbr)
                yield fb.build(
                    f"Updated distance to node {nbr} to {new_distance}",
                    FrameEvent.UPDATE, line=9,
                )

    fb.current = None
    fb.visited = settled()

    if end is None:
        fb.path = []
        reached = sum(1 for d in distances.values() if d != INF)
        yield fb.build(
            f"Dijkstra's algorithm complete. Shortest distances found to {reached} reachable node(s).",
            FrameEvent.CONCLUDE, line=11,
        )
        return

    if distances.get(end, INF) == INF:
        fb.path = []
        yield fb.build(f"No path found to node {end}", FrameEvent.CONCLUDE, line=11)
        return

    fb.path = reconstruct_path(previous, end)
    yield fb.build(
        f"Found shortest path with distance {distances[end]}: "
        + " → ".join(str(n) for n in fb.path),
        FrameEvent.CONCLUDE, line=11,
    )


# ---------------------------------------------------------------------------
def reconstruct_path(previous: Dict[int, Optional[int]], target: int) -> List[int]:
    """Walk `previous` back from target; returns [start, …, target]."""
    path: List[int] = []
    cur: Optional[int] = target
    while cur is not None:
        path.append(cur)
        cur = previous.get(cur)
    path.reverse()
    return path


def _fmt(d: float) -> str:
    return "∞" if d == INF else str(d)
