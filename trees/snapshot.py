"""
snapshot.py — Frozen Tree Snapshots
====================================
The immutable trees stored inside TreeFrames.

Each node shape is its own frozen dataclass and carries a `kind` tag,
so consumers dispatch on `node.kind` instead of probing for fields:

    BSTNode(key, left, right)
    AVLNode(key, height, left, right)
    RBNode (key, color,  left, right)

Snapshots own their children outright (no parent pointers), which is
what makes every frame's tree independently inspectable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Union


class NodeKind(Enum):
    BST = "bst"
    AVL = "avl"
    RB  = "rb"


class Color(Enum):
    RED   = "red"
    BLACK = "black"


@dataclass(frozen=True)
class BSTNode:
    key:   int
    left:  Optional["BSTNode"] = None
    right: Optional["BSTNode"] = None

    kind: ClassVar[NodeKind] = NodeKind.BST


@dataclass(frozen=True)
class AVLNode:
    key:    int
    height: int                 = 1
    left:   Optional["AVLNode"] = None
    right:  Optional["AVLNode"] = None

    kind: ClassVar[NodeKind] = NodeKind.AVL


@dataclass(frozen=True)
class RBNode:
    key:   int
    color: Color              = Color.RED
    left:  Optional["RBNode"] = None
    right: Optional["RBNode"] = None

    kind: ClassVar[NodeKind] = NodeKind.RB


TreeSnapshot = Union[BSTNode, AVLNode, RBNode]


# ---------------------------------------------------------------------------
# Read helpers
# ---------------------------------------------------------------------------
def in_order(node: Optional[TreeSnapshot]) -> Iterator[TreeSnapshot]:
    """Yield nodes in ascending key order."""
    stack: List[TreeSnapshot] = []
    cur = node
    while stack or cur is not None:
        while cur is not None:
            stack.append(cur)
            cur = cur.left
        cur = stack.pop()
        yield cur
        cur = cur.right


def keys_in_order(node: Optional[TreeSnapshot]) -> List[int]:
    return [n.key for n in in_order(node)]


def tree_height(node: Optional[TreeSnapshot]) -> int:
    if node is None:
        return 0
    return 1 + max(tree_height(node.left), tree_height(node.right))


def snapshot_to_dict(node: Optional[TreeSnapshot]) -> Optional[Dict[str, Any]]:
    """Nested JSON-safe dict, tagged with the node kind."""
    if node is None:
        return None
    d: Dict[str, Any] = {"kind": node.kind.value, "key": node.key}
    if node.kind is NodeKind.AVL:
        d["height"] = node.height
    elif node.kind is NodeKind.RB:
        d["color"] = node.color.value
    d["left"]  = snapshot_to_dict(node.left)
    d["right"] = snapshot_to_dict(node.right)
    return d
