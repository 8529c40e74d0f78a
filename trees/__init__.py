"""
trees/
------
Tree storage for the insertion tracers.

    from trees import TreeArena, NodeKind, Color
    from trees import BSTNode, AVLNode, RBNode, TreeSnapshot
"""

from trees.snapshot import (
    AVLNode,
    BSTNode,
    Color,
    NodeKind,
    RBNode,
    TreeSnapshot,
    in_order,
    keys_in_order,
    snapshot_to_dict,
    tree_height,
)
from trees.arena import NIL, Slot, TreeArena

__all__ = [
    "TreeArena", "Slot", "NIL",
    "NodeKind",  "Color",
    "BSTNode",   "AVLNode", "RBNode", "TreeSnapshot",
    "in_order",  "keys_in_order", "tree_height", "snapshot_to_dict",
]
