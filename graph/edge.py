"""
edge.py — Directed Graph Edge
==============================
Connects two nodes by id and carries an integer weight.

Design decisions:
  - `source` and `target` are node ids, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Edges are always directed.  An undirected link is two edges.
"""


class Edge:
    """
    Attributes:
        source : ID of the tail node.
        target : ID of the head node.
        weight : Non-negative cost for Dijkstra; BFS / DFS ignore it.
    """

    __slots__ = ("source", "target", "weight")

    def __init__(self, source: int, target: int, weight: int = 1):
        self.source: int = source
        self.target: int = target
        self.weight: int = weight

    def connects(self, a: int, b: int, either_direction: bool = False) -> bool:
        if self.source == a and self.target == b:
            return True
        return either_direction and self.source == b and self.target == a

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=int(data["source"]),
            target=int(data["target"]),
            weight=data.get("weight", 1),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Edge)
            and (self.source, self.target, self.weight) == (other.source, other.target, other.weight)
        )

    def __hash__(self) -> int:
        return hash((self.source, self.target, self.weight))
