"""
validation.py — Boundary checks
================================
Turns raw request values into well-typed tracer inputs, or raises
InvalidInputError with a message fit to show the user.  Nothing here
runs once a tracer has started.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional, Union

from graph import Graph
from engine.errors import InvalidInputError

logger = logging.getLogger(__name__)

Number = Union[int, float]


def parse_number(raw: Any, what: str = "number") -> Number:
    """int when the value is integral text / int, float otherwise."""
    if isinstance(raw, bool):
        raise _reject(f"Invalid {what}: {raw}")
    if isinstance(raw, (int, float)):
        value = raw
    else:
        text = str(raw).strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise _reject(f"Invalid {what}: {text}") from None
    if isinstance(value, float) and not math.isfinite(value):
        raise _reject(f"Invalid {what}: {str(raw).strip()}")
    return value


def parse_array(raw: Union[str, Iterable[Any]], max_size: int = 100) -> List[Number]:
    """
    Accepts "5, 3, 8, 1" or a list.  Errors, in the order they are checked:
        Invalid number: x
        Array cannot be empty
        Array size cannot exceed N elements
    """
    if isinstance(raw, str):
        items = [] if not raw.strip() else raw.split(",")
    elif raw is None:
        items = []
    else:
        items = list(raw)

    values = [parse_number(item) for item in items]

    if not values:
        raise _reject("Array cannot be empty")
    if len(values) > max_size:
        raise _reject(f"Array size cannot exceed {max_size} elements")
    return values


def parse_keys(raw: Union[str, Iterable[Any]], max_size: int = 100) -> List[Number]:
    """Tree keys: same format as arrays.  Integral floats come back as ints."""
    return [
        int(value) if isinstance(value, float) and value.is_integer() else value
        for value in parse_array(raw, max_size=max_size)
    ]


def parse_node_id(raw: Any, what: str = "node id") -> int:
    value = parse_number(raw, what)
    if isinstance(value, float) and not value.is_integer():
        raise _reject(f"Invalid {what}: {raw}")
    return int(value)


def parse_bounded_int(raw: Any, what: str, low: int, high: int) -> int:
    value = parse_node_id(raw, what)
    if not low <= value <= high:
        raise _reject(f"{what.capitalize()} must be between {low} and {high}")
    return value


def parse_probability(raw: Any, what: str = "edge density") -> float:
    value = float(parse_number(raw, what))
    if not 0.0 <= value <= 1.0:
        raise _reject(f"{what.capitalize()} must be between 0 and 1")
    return value


def parse_graph(raw: Union[str, Dict[str, Any]]) -> Graph:
    """A serialised graph dict, or adjacency-list text."""
    if isinstance(raw, str):
        try:
            graph = Graph.from_adjacency_list(raw)
        except ValueError as exc:
            raise _reject(str(exc)) from None
    elif isinstance(raw, dict):
        try:
            graph = Graph.from_dict(raw)
        except (KeyError, TypeError, ValueError) as exc:
            raise _reject(f"Malformed graph: {exc}") from None
        for edge in graph.edges:
            if isinstance(edge.weight, bool) or not isinstance(edge.weight, (int, float)):
                raise _reject(f"Invalid weight: {edge.weight}")
            if not (graph.has_node(edge.source) and graph.has_node(edge.target)):
                raise _reject(f"Edge {edge.source} → {edge.target} references a missing node")
    else:
        raise _reject("Graph must be an object or adjacency-list text")
    if graph.node_count() == 0:
        raise _reject("Graph has no nodes")
    return graph


def require_nodes(graph: Graph, start: int, end: Optional[int] = None) -> None:
    if not graph.has_node(start):
        raise _reject(f"Start node {start} does not exist in the graph")
    if end is not None and not graph.has_node(end):
        raise _reject(f"End node {end} does not exist in the graph")


def require_non_negative(graph: Graph) -> None:
    if graph.has_negative_edges():
        raise _reject("Dijkstra's algorithm requires non-negative edge weights")


def _reject(message: str) -> InvalidInputError:
    logger.warning("rejected input: %s", message)
    return InvalidInputError(message)
