"""
frames.py — Animation Frame Snapshots
======================================
Every tracer is a generator that yields frames.  A frame is a
frozen-in-time picture of everything the playback layer needs to draw
one moment of an algorithm:

    • SortFrame    – the working array + indices being compared / mutated
    • SearchFrame  – the array + the index under examination / found
    • GraphFrame   – traversal state (visited, queue / stack, distances)
    • TreeFrame    – a deep snapshot of the whole tree + highlights

Design decisions:
  - Frames are frozen dataclasses.  The tracer is the only writer; the
    recorder / stepper / HTTP layer are pure readers.
  - Sequences are stored as tuples and dicts are copied on construction
    by the builders, so no frame aliases another frame's state.
  - `event` is a structured FrameEvent.  Consumers count comparisons,
    visits and updates from it instead of pattern-matching descriptions.
  - `pseudocode_line` indexes into the PSEUDOCODE list exported next to
    each tracer so a side panel can highlight the executing line.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from graph import Graph
from trees import NodeKind, TreeArena, TreeSnapshot, snapshot_to_dict


# ---------------------------------------------------------------------------
# Event kinds
# ---------------------------------------------------------------------------
class FrameEvent(Enum):
    START              = "start"
    COMPARE            = "compare"
    SWAP               = "swap"
    PLACE              = "place"
    PIVOT              = "pivot"
    DIVIDE             = "divide"
    NOTE               = "note"
    EXAMINE            = "examine"
    FOUND              = "found"
    NOT_FOUND          = "not_found"
    PRECONDITION       = "precondition"
    ENQUEUE            = "enqueue"
    DEQUEUE            = "dequeue"
    PUSH               = "push"
    POP                = "pop"
    SKIP               = "skip"
    VISIT              = "visit"
    RELAX              = "relax"
    UPDATE             = "update"
    INSERT             = "insert"
    DUPLICATE          = "duplicate"
    BALANCE            = "balance"
    ROTATE             = "rotate"
    RECOLOR            = "recolor"
    INSERTION_COMPLETE = "insertion_complete"
    CONCLUDE           = "conclude"


# events that count as a "comparison" / a "mutation" in run metrics
COMPARISON_EVENTS = frozenset({FrameEvent.COMPARE, FrameEvent.EXAMINE, FrameEvent.RELAX})
MUTATION_EVENTS   = frozenset({
    FrameEvent.SWAP, FrameEvent.PLACE, FrameEvent.INSERT,
    FrameEvent.ROTATE, FrameEvent.RECOLOR,
})


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SortFrame:
    """
    Attributes:
        array             : Full snapshot of the working array.
        comparing_indices : 0–2 indices being compared right now.
        swapped_indices   : 0–2 indices that were just written / swapped.
        description       : Narration for this moment.
        event             : What kind of moment this is.
        pseudocode_line   : Executing line of the tracer's PSEUDOCODE.
    """

    array:             Tuple[float, ...]
    comparing_indices: Tuple[int, ...]   = ()
    swapped_indices:   Tuple[int, ...]   = ()
    description:       str               = ""
    event:             FrameEvent        = FrameEvent.NOTE
    pseudocode_line:   int               = 0

    def __post_init__(self):
        if self.comparing_indices and self.swapped_indices:
            raise ValueError("a sort frame depicts a comparison or a mutation, not both")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "array":            list(self.array),
            "comparingIndices": list(self.comparing_indices),
            "swappedIndices":   list(self.swapped_indices),
            "description":      self.description,
            "event":            self.event.value,
            "pseudocodeLine":   self.pseudocode_line,
        }


def sort_frame(
    array: List[float],
    description: str,
    event: FrameEvent,
    line: int,
    comparing: Tuple[int, ...] = (),
    swapped: Tuple[int, ...] = (),
) -> SortFrame:
    """Snapshot the working array into a new SortFrame."""
    return SortFrame(
        array=tuple(array),
        comparing_indices=tuple(comparing),
        swapped_indices=tuple(swapped),
        description=description,
        event=event,
        pseudocode_line=line,
    )


# ---------------------------------------------------------------------------
# Searching
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchFrame:
    array:           Tuple[float, ...]
    current_index:   Optional[int]     = None
    found_index:     Optional[int]     = None
    description:     str               = ""
    event:           FrameEvent        = FrameEvent.NOTE
    pseudocode_line: int               = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "array":          list(self.array),
            "currentIndex":   self.current_index,
            "foundIndex":     self.found_index,
            "description":    self.description,
            "event":          self.event.value,
            "pseudocodeLine": self.pseudocode_line,
        }


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GraphFrame:
    """
    Exactly one of `queue` (BFS), `stack` (DFS) or `distances` / `previous`
    (Dijkstra) is populated; the others stay None.

    `graph` is shared by every frame of a trace.  Tracers never mutate it.
    """

    graph:           Graph
    current_node:    Optional[int]                    = None
    visited_nodes:   Tuple[int, ...]                  = ()
    queue:           Optional[Tuple[int, ...]]        = None
    stack:           Optional[Tuple[int, ...]]        = None
    distances:       Optional[Dict[int, float]]       = None
    previous:        Optional[Dict[int, Optional[int]]] = None
    path:            Tuple[int, ...]                  = ()
    description:     str                              = ""
    event:           FrameEvent                       = FrameEvent.NOTE
    pseudocode_line: int                              = 0

    def to_dict(self, include_graph: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "currentNode":    self.current_node,
            "visitedNodes":   list(self.visited_nodes),
            "path":           list(self.path),
            "description":    self.description,
            "event":          self.event.value,
            "pseudocodeLine": self.pseudocode_line,
        }
        if self.queue is not None:
            d["queue"] = list(self.queue)
        if self.stack is not None:
            d["stack"] = list(self.stack)
        if self.distances is not None:
            # JSON has no infinity; unreachable is null
            d["distances"] = {
                str(k): (None if math.isinf(v) else v) for k, v in self.distances.items()
            }
        if self.previous is not None:
            d["previous"] = {str(k): v for k, v in self.previous.items()}
        if include_graph:
            d["graph"] = self.graph.to_dict()
        return d


class GraphFrameBuilder:
    """
    Mutable scratch-pad the graph tracers use to build GraphFrames.

    The tracer keeps the live traversal state here and calls `build()`
    at every event; `build()` copies every container so later mutations
    never leak into frames already emitted.

        fb = GraphFrameBuilder(graph, queue=[])
        fb.queue.append(start)
        yield fb.build("Enqueued start node 0", FrameEvent.ENQUEUE, line=1)
    """

    def __init__(
        self,
        graph: Graph,
        queue: Optional[List[int]] = None,
        stack: Optional[List[int]] = None,
        distances: Optional[Dict[int, float]] = None,
        previous: Optional[Dict[int, Optional[int]]] = None,
    ):
        self.graph:     Graph                               = graph
        self.current:   Optional[int]                       = None
        self.visited:   List[int]                           = []
        self.queue:     Optional[List[int]]                 = queue
        self.stack:     Optional[List[int]]                 = stack
        self.distances: Optional[Dict[int, float]]          = distances
        self.previous:  Optional[Dict[int, Optional[int]]]  = previous
        self.path:      List[int]                           = []

    def build(self, description: str, event: FrameEvent, line: int = 0) -> GraphFrame:
        return GraphFrame(
            graph=self.graph,
            current_node=self.current,
            visited_nodes=tuple(self.visited),
            queue=tuple(self.queue) if self.queue is not None else None,
            stack=tuple(self.stack) if self.stack is not None else None,
            distances=dict(self.distances) if self.distances is not None else None,
            previous=dict(self.previous) if self.previous is not None else None,
            path=tuple(self.path),
            description=description,
            event=event,
            pseudocode_line=line,
        )


# ---------------------------------------------------------------------------
# Trees
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RotationEdge:
    source: int    # key of the node that moves down
    target: int    # key of the node that moves up

    def to_dict(self) -> Dict[str, int]:
        return {"from": self.source, "to": self.target}


@dataclass(frozen=True)
class TreeFrame:
    """
    Attributes:
        tree              : Independent snapshot of the whole tree (or None).
        highlighted_nodes : Keys being looked at.
        changed_nodes     : Keys whose structure or colour just changed.
        rotation_edge     : The edge a rotation pivoted around, if any.
        balance_factors   : {key: left height − right height}, AVL only.
    """

    tree:              Optional[TreeSnapshot]
    highlighted_nodes: Tuple[int, ...]           = ()
    changed_nodes:     Tuple[int, ...]           = ()
    rotation_edge:     Optional[RotationEdge]    = None
    balance_factors:   Optional[Dict[int, int]]  = None
    description:       str                       = ""
    event:             FrameEvent                = FrameEvent.NOTE
    pseudocode_line:   int                       = 0

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "tree":             snapshot_to_dict(self.tree),
            "highlightedNodes": list(self.highlighted_nodes),
            "changedNodes":     list(self.changed_nodes),
            "description":      self.description,
            "event":            self.event.value,
            "pseudocodeLine":   self.pseudocode_line,
        }
        if self.rotation_edge is not None:
            d["rotationEdge"] = self.rotation_edge.to_dict()
        if self.balance_factors is not None:
            d["balanceFactor"] = {str(k): v for k, v in self.balance_factors.items()}
        return d


def tree_frame(
    arena: TreeArena,
    description: str,
    event: FrameEvent,
    line: int = 0,
    highlighted: Tuple[int, ...] = (),
    changed: Tuple[int, ...] = (),
    rotation: Optional[RotationEdge] = None,
) -> TreeFrame:
    """Snapshot the whole arena tree into a new TreeFrame (AVL adds balance factors)."""
    return TreeFrame(
        tree=arena.snapshot(),
        highlighted_nodes=tuple(highlighted),
        changed_nodes=tuple(changed),
        rotation_edge=rotation,
        balance_factors=arena.balance_factors() if arena.kind is NodeKind.AVL else None,
        description=description,
        event=event,
        pseudocode_line=line,
    )


Frame = Union[SortFrame, SearchFrame, GraphFrame, TreeFrame]
