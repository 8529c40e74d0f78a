"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS traversal.  Yields a GraphFrame at every event:
  1. Start, then enqueue the start node
  2. Dequeue a node  →  CURRENT
  3. Skip it if it was already visited
  4. Mark it visited (visited is set at dequeue time, not enqueue time)
  5. One frame per neighbour: enqueued, or already visited / queued
  6. Final  →  every reachable node has been visited

A neighbour already sitting in the queue is not enqueued again.
`path` is the visiting order.
"""

from collections import deque
from typing import Generator, List

from graph import Graph
from algorithms.frames import FrameEvent, GraphFrame, GraphFrameBuilder


PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                       # 0
    "    queue ← [start]",                          # 1
    "    visited ← {}",                             # 2
    "    while queue is not empty:",                # 3
    "        node ← queue.dequeue()",               # 4
    "        if node in visited: continue",         # 5
    "        visited.add(node)",                    # 6
    "        for neighbour in adj(node):",          # 7
    "            if neighbour not visited",         # 8
    "               and not in queue:",             # 9
    "                queue.enqueue(neighbour)",     # 10
    "    return visited",                           # 11
]


def bfs(graph: Graph, start: int) -> Generator[GraphFrame, None, None]:
    """
    Args:
        graph : The directed graph to traverse.
        start : Starting node id.

    Yields:
        GraphFrame – one per event, with `queue` populated.
    """
    adjacency = graph.adjacency()
    visited: set = set()
    queue: deque = deque()
    fb = GraphFrameBuilder(graph, queue=[])

    yield fb.build(f"Starting BFS from node {start}", FrameEvent.START, line=0)

    queue.append(start)
    fb.queue = list(queue)
    yield fb.build(f"Enqueued start node {start}", FrameEvent.ENQUEUE, line=1)

    while queue:
        node = queue.popleft()
        fb.current = node
        fb.queue = list(queue)
        yield fb.build(f"Dequeued node {node}", FrameEvent.DEQUEUE, line=4)

        if node in visited:
            yield fb.build(
                f"Node {node} has already been visited, skipping", FrameEvent.SKIP, line=5
            )
            continue

        visited.add(node)
        fb.visited.append(node)
        fb.path.append(node)
        yield fb.build(f"Marked node {node} as visited", FrameEvent.VISIT, line=6)

        for nbr, _ in adjacency.get(node, []):
            if nbr not in visited and nbr not in queue:
                queue.append(nbr)
                fb.queue = list(queue)
                yield fb.build(
                    f"Enqueued unvisited neighbor {nbr}", FrameEvent.ENQUEUE, line=10
                )
            else:
                why = "visited" if nbr in visited else "enqueued"
                yield fb.build(
                    f"Neighbor {nbr} has already been {why}, not enqueueing",
                    FrameEvent.SKIP, line=8,
                )

    fb.current = None
    fb.queue = []
    yield fb.build(
        "BFS traversal complete! All reachable nodes have been visited.",
        FrameEvent.CONCLUDE, line=11,
    )
