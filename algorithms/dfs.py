"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a GraphFrame at:
  1. Start, then push the start node
  2. Pop a node  →  CURRENT
  3. Skip it if already visited
  4. Mark it visited
  5. One frame per neighbour: pushed, or already visited
  6. Stack empty  →  traversal complete

Neighbours are pushed in reverse adjacency order so they pop in forward
order.  Unlike BFS there is no "already on the stack" check: a node can
be pushed several times and is filtered when popped.
"""

from typing import Generator, List

from graph import Graph
from algorithms.frames import FrameEvent, GraphFrame, GraphFrameBuilder


PSEUDOCODE: List[str] = [
    "def DFS(graph, start):",                       # 0
    "    stack ← [start]",                          # 1
    "    visited ← {}",                             # 2
    "    while stack is not empty:",                # 3
    "        node ← stack.pop()",                   # 4
    "        if node in visited: continue",         # 5
    "        visited.add(node)",                    # 6
    "        for neighbour in reversed(adj(node)):",# 7
    "            if neighbour not visited:",        # 8
    "                stack.push(neighbour)",        # 9
    "    return visited",                           # 10
]


def dfs(graph: Graph, start: int) -> Generator[GraphFrame, None, None]:
    adjacency = graph.adjacency()
    visited: set = set()
    stack: List[int] = []
    fb = GraphFrameBuilder(graph, stack=[])

    yield fb.build(f"Starting DFS from node {start}", FrameEvent.START, line=0)

    stack.append(start)
    fb.stack = list(stack)
    yield fb.build(f"Pushed start node {start} to the stack", FrameEvent.PUSH, line=1)

    while stack:
        node = stack.pop()
        fb.current = node
        fb.stack = list(stack)
        yield fb.build(f"Popped node {node} from stack", FrameEvent.POP, line=4)

        # can happen: a node may be pushed more than once before it is popped
        if node in visited:
            yield fb.build(
                f"Node {node} has already been visited, skipping", FrameEvent.SKIP, line=5
            )
            continue

        visited.add(node)
        fb.visited.append(node)
        fb.path.append(node)
        yield fb.build(f"Marked node {node} as visited", FrameEvent.VISIT, line=6)

        for nbr, _ in reversed(adjacency.get(node, [])):
            if nbr not in visited:
                stack.append(nbr)
                fb.stack = list(stack)
                yield fb.build(
                    f"Pushed unvisited neighbor {nbr} to stack", FrameEvent.PUSH, line=9
                )
            else:
                yield fb.build(
                    f"Neighbor {nbr} has already been visited, not pushing to stack",
                    FrameEvent.SKIP, line=8,
                )

    fb.current = None
    fb.stack = []
    yield fb.build(
        "DFS traversal complete! All reachable nodes have been visited.",
        FrameEvent.CONCLUDE, line=10,
    )
