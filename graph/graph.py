"""
graph.py — Graph Container & Generator
=======================================
The weighted directed graph the graph tracers traverse.

Responsibilities:
  1. Node / edge storage                    (add / get)
  2. Adjacency list, built once per trace   (adjacency)
  3. Random connected sample graphs         (generate_random_connected)
  4. Import from adjacency-list text        (from_adjacency_list)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes are stored in a dict keyed by id; insertion order is the node
    order every tracer iterates in.
  - Edges are an ordered list.  Out-neighbour order in `adjacency()` is
    edge-list order, which fixes BFS / DFS visiting order.
  - The tracers only read a Graph.  Frames of one trace share the same
    instance as their `graph` field.
"""

import math
import random
from typing import Dict, List, Optional, Set, Tuple

from graph.node import Node
from graph.edge import Edge


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}
        edges : [Edge]
    """

    def __init__(self):
        self.nodes: Dict[int, Node] = {}
        self.edges: List[Edge]      = []

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        return node

    def create_node(self, node_id: int, x: float = 0.0, y: float = 0.0, label: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id=node_id, x=x, y=y, label=label))

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    def has_node(self, node_id: int) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        self.edges.append(edge)
        return edge

    def create_edge(self, source: int, target: int, weight: int = 1) -> Edge:
        return self.add_edge(Edge(source=source, target=target, weight=weight))

    def has_link(self, a: int, b: int) -> bool:
        """True if an edge joins a and b in either direction."""
        return any(e.connects(a, b, either_direction=True) for e in self.edges)

    # ==================================================================
    # ADJACENCY
    # ==================================================================
    def adjacency(self) -> Dict[int, List[Tuple[int, int]]]:
        """{node_id: [(neighbour_id, weight), …]} in edge-list order."""
        adj: Dict[int, List[Tuple[int, int]]] = {nid: [] for nid in self.nodes}
        for e in self.edges:
            adj.setdefault(e.source, []).append((e.target, e.weight))
        return adj

    def reachable_from(self, start: int) -> Set[int]:
        """Node ids reachable from `start` along directed edges (start included)."""
        adj = self.adjacency()
        seen = {start}
        frontier = [start]
        while frontier:
            node = frontier.pop()
            for nbr, _ in adj.get(node, []):
                if nbr not in seen:
                    seen.add(nbr)
                    frontier.append(nbr)
        return seen

    def path_weight(self, path: List[int]) -> Optional[float]:
        """Summed weight along `path` (cheapest of parallel edges), or None if some hop has no edge."""
        total = 0.0
        for a, b in zip(path, path[1:]):
            weights = [e.weight for e in self.edges if e.source == a and e.target == b]
            if not weights:
                return None
            total += min(weights)
        return total

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            g.add_edge(Edge.from_dict(ed))
        return g

    # ==================================================================
    # GENERATORS: Factory class-methods
    # ==================================================================
    @classmethod
    def generate_random_connected(
        cls,
        node_count: int = 6,
        edge_density: float = 0.4,
        radius: float = 150,
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Random directed graph laid out on a circle.

        Every ordered pair (i, j), i != j, gets an edge with probability
        `edge_density`.  Afterwards, for every i with no edge between i
        and i+1 in either direction, an edge i → i+1 is added, so the
        chain 0 → 1 → … keeps the graph weakly connected.

        Weight = Euclidean distance between the endpoints / 10, rounded
        half-up to an integer.
        """
        rng = random.Random(seed)
        g = cls()

        offset = radius + 50
        for i in range(node_count):
            angle = (i / node_count) * 2 * math.pi
            g.create_node(
                i,
                x=math.cos(angle) * radius + offset,
                y=math.sin(angle) * radius + offset,
            )

        def weight(a: int, b: int) -> int:
            return int(math.floor(g.nodes[a].distance_to(g.nodes[b]) / 10 + 0.5))

        for i in range(node_count):
            for j in range(node_count):
                if i != j and rng.random() < edge_density:
                    g.create_edge(i, j, weight(i, j))

        # patch the forward chain
        for i in range(node_count - 1):
            if not g.has_link(i, i + 1):
                g.create_edge(i, i + 1, weight(i, i + 1))

        return g

    @classmethod
    def from_adjacency_list(cls, text: str, radius: float = 150) -> "Graph":
        """
        Parse a text adjacency list with integer node ids.

        Supported formats (one node per line):
            0: 1 2 3            → 0→1, 0→2, 0→3  (weight 1)
            0: 1(5), 2(3)       → 0→1 weight 5, 0→2 weight 3
            0 -> 1(4) 2         → alternate arrow syntax

        Blank lines and lines starting with '#' are ignored.  Nodes are
        laid out on a circle.  Raises ValueError on a non-integer id or
        weight.
        """
        g = cls()
        adjacency: Dict[int, List[Tuple[int, int]]] = {}

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                src_raw, rest = line.split(":", 1)
            elif "->" in line:
                src_raw, rest = line.split("->", 1)
            elif "→" in line:
                src_raw, rest = line.split("→", 1)
            else:
                src_raw, rest = line, ""

            src = _parse_id(src_raw)
            adjacency.setdefault(src, [])

            for token in rest.replace(",", " ").split():
                # optional weight: "3(7)" or "3"
                if "(" in token and token.endswith(")"):
                    tgt_raw, w_raw = token[:-1].split("(", 1)
                    w = _parse_id(w_raw, what="weight")
                else:
                    tgt_raw, w = token, 1
                tgt = _parse_id(tgt_raw)
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        n = len(adjacency)
        offset = radius + 50
        for i, nid in enumerate(adjacency):
            angle = 2 * math.pi * i / n
            g.create_node(nid, x=math.cos(angle) * radius + offset, y=math.sin(angle) * radius + offset)

        for src, targets in adjacency.items():
            for tgt, w in targets:
                g.create_edge(src, tgt, w)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"


def _parse_id(raw: str, what: str = "node id") -> int:
    raw = raw.strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid {what}: {raw!r}") from None
