"""
arena.py — Index-Based Tree Storage
====================================
Working storage the tree tracers mutate while inserting keys.

Nodes live in a flat list of slots and refer to each other by integer
handle.  Children are owned links; `parent` is a back-index used only
for lookups (rotations, red-black fix-up), never a second owner.

Slot 0 is the sentinel NIL: BLACK, height 0, key None.  Every absent
child and the root's parent point at it, so colour and height reads
never need a None check.

Design decisions:
  - One arena serves BST, AVL and red-black tracers; the `kind` given at
    construction decides which snapshot class `snapshot()` builds.
  - Rotations relink the parent's child pointer (or `root`) themselves,
    so a whole-tree snapshot is consistent at every intermediate step.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from trees.snapshot import AVLNode, BSTNode, Color, NodeKind, RBNode, TreeSnapshot

NIL = 0


@dataclass
class Slot:
    key:    Optional[int]
    left:   int   = NIL
    right:  int   = NIL
    parent: int   = NIL
    height: int   = 1
    color:  Color = Color.RED


class TreeArena:
    """
    Attributes:
        kind  : NodeKind – decides the snapshot shape.
        slots : [Slot] – slot 0 is the sentinel.
        root  : Handle of the root, NIL when empty.
    """

    def __init__(self, kind: NodeKind):
        self.kind:  NodeKind   = kind
        self.slots: List[Slot] = [Slot(key=None, height=0, color=Color.BLACK)]
        self.root:  int        = NIL

    # ------------------------------------------------------------------
    # Slot access
    # ------------------------------------------------------------------
    def new_node(self, key: int, color: Color = Color.RED) -> int:
        self.slots.append(Slot(key=key, color=color))
        return len(self.slots) - 1

    def __getitem__(self, handle: int) -> Slot:
        return self.slots[handle]

    def key(self, handle: int) -> Optional[int]:
        return self.slots[handle].key

    def height(self, handle: int) -> int:
        return self.slots[handle].height

    def color(self, handle: int) -> Color:
        return self.slots[handle].color

    def is_empty(self) -> bool:
        return self.root == NIL

    def __len__(self) -> int:
        return len(self.slots) - 1

    # ------------------------------------------------------------------
    # AVL bookkeeping
    # ------------------------------------------------------------------
    def update_height(self, handle: int) -> None:
        s = self.slots[handle]
        s.height = 1 + max(self.height(s.left), self.height(s.right))

    def balance_factor(self, handle: int) -> int:
        s = self.slots[handle]
        return self.height(s.left) - self.height(s.right)

    def balance_factors(self) -> Dict[int, int]:
        """{key: balance factor} for every node, pre-order."""
        factors: Dict[int, int] = {}
        stack = [self.root] if self.root != NIL else []
        while stack:
            h = stack.pop()
            s = self.slots[h]
            factors[s.key] = self.balance_factor(h)
            if s.right != NIL:
                stack.append(s.right)
            if s.left != NIL:
                stack.append(s.left)
        return factors

    # ------------------------------------------------------------------
    # Linking
    # ------------------------------------------------------------------
    def attach(self, parent: int, child: int, left: bool) -> None:
        if left:
            self.slots[parent].left = child
        else:
            self.slots[parent].right = child
        self.slots[child].parent = parent

    def _replace_child(self, old: int, new: int) -> None:
        """Point old's parent (or root) at new."""
        p = self.slots[old].parent
        self.slots[new].parent = p
        if p == NIL:
            self.root = new
        elif self.slots[p].left == old:
            self.slots[p].left = new
        else:
            self.slots[p].right = new

    # ------------------------------------------------------------------
    # Rotations: return the handle of the new local root
    # ------------------------------------------------------------------
    def rotate_left(self, x: int) -> int:
        y = self.slots[x].right
        beta = self.slots[y].left

        self.slots[x].right = beta
        if beta != NIL:
            self.slots[beta].parent = x

        self._replace_child(x, y)
        self.slots[y].left = x
        self.slots[x].parent = y

        if self.kind is NodeKind.AVL:
            self.update_height(x)
            self.update_height(y)
        return y

    def rotate_right(self, y: int) -> int:
        x = self.slots[y].left
        beta = self.slots[x].right

        self.slots[y].left = beta
        if beta != NIL:
            self.slots[beta].parent = y

        self._replace_child(y, x)
        self.slots[x].right = y
        self.slots[y].parent = x

        if self.kind is NodeKind.AVL:
            self.update_height(y)
            self.update_height(x)
        return x

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def snapshot(self, handle: Optional[int] = None) -> Optional[TreeSnapshot]:
        """Deep, immutable copy of the subtree at `handle` (default: root)."""
        h = self.root if handle is None else handle
        if h == NIL:
            return None
        s = self.slots[h]
        left, right = self.snapshot(s.left), self.snapshot(s.right)
        if self.kind is NodeKind.AVL:
            return AVLNode(key=s.key, height=s.height, left=left, right=right)
        if self.kind is NodeKind.RB:
            return RBNode(key=s.key, color=s.color, left=left, right=right)
        return BSTNode(key=s.key, left=left, right=right)
