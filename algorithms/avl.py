"""
avl.py — AVL Tree insertion
============================
Plain BST descent to place the new leaf, then a walk back up the
ancestors.  At each ancestor:

  1. Refresh its height and report the balance factor
  2. If |bf| > 1, name the case (LL, LR, RR, RL) and rotate
  3. Confirm the new local root

Balance factor = height(left) − height(right); empty subtrees have
height 0.  A duplicate key is reported and the walk back up is skipped.

Every frame carries the balance factor of every node in the tree.
"""

from typing import Generator, List

from trees import NIL, NodeKind, TreeArena
from algorithms.frames import FrameEvent, RotationEdge, TreeFrame, tree_frame


PSEUDOCODE: List[str] = [
    "def insert(node, key):",                               # 0
    "    BST-insert key below node",                        # 1
    "    node.height ← 1 + max(h(left), h(right))",         # 2
    "    bf ← h(left) − h(right)",                          # 3
    "    if bf > 1 and bf(left) >= 0: rotate_right(node)",  # 4
    "    if bf > 1 and bf(left) < 0:",                      # 5
    "        rotate_left(left); rotate_right(node)",        # 6
    "    if bf < −1 and bf(right) <= 0: rotate_left(node)", # 7
    "    if bf < −1 and bf(right) > 0:",                    # 8
    "        rotate_right(right); rotate_left(node)",       # 9
    "    return node",                                      # 10
]


def avl_insert_all(keys: List[int]) -> Generator[TreeFrame, None, None]:
    arena = TreeArena(NodeKind.AVL)

    yield tree_frame(arena, "Starting with an empty AVL Tree", FrameEvent.START)

    for key in keys:
        yield from insert_key(arena, key)

    yield tree_frame(
        arena,
        f"AVL Tree construction complete: {len(arena)} node(s), height {arena.height(arena.root)}",
        FrameEvent.CONCLUDE, line=10,
    )


def insert_key(arena: TreeArena, key: int) -> Generator[TreeFrame, None, bool]:
    yield tree_frame(arena, f"Starting insertion of key {key}", FrameEvent.NOTE, line=0)

    if arena.is_empty():
        arena.root = arena.new_node(key)
        yield tree_frame(
            arena, f"Inserted {key} as the root of an empty tree",
            FrameEvent.INSERT, line=1, changed=(key,),
        )
        yield tree_frame(arena, "Insertion complete", FrameEvent.INSERTION_COMPLETE, line=10)
        return True

    node = arena.root
    while True:
        nkey = arena.key(node)
        yield tree_frame(
            arena, f"Comparing {key} with {nkey}", FrameEvent.COMPARE, line=1, highlighted=(nkey,),
        )
        if key == nkey:
            yield tree_frame(
                arena, f"Key {key} already exists in the tree, no insertion needed",
                FrameEvent.DUPLICATE, line=1, highlighted=(nkey,),
            )
            yield tree_frame(arena, "Insertion complete", FrameEvent.INSERTION_COMPLETE, line=10)
            return False

        go_left = key < nkey
        side = "left" if go_left else "right"
        child = arena[node].left if go_left else arena[node].right
        if child == NIL:
            leaf = arena.new_node(key)
            arena.attach(node, leaf, left=go_left)
            yield tree_frame(
                arena, f"Inserted {key} as {side} child of {nkey}",
                FrameEvent.INSERT, line=1, changed=(key,),
            )
            break
        yield tree_frame(
            arena, f"{key} is {'less' if go_left else 'greater'} than {nkey}, going {side}",
            FrameEvent.NOTE, line=1, highlighted=(nkey,),
        )
        node = child

    # walk back up, rebalancing every ancestor of the new leaf
    ancestor = node
    while ancestor != NIL:
        local_root = yield from _rebalance(arena, ancestor)
        ancestor = arena[local_root].parent

    yield tree_frame(arena, "Insertion complete", FrameEvent.INSERTION_COMPLETE, line=10)
    return True


def _rebalance(arena: TreeArena, node: int) -> Generator[TreeFrame, None, int]:
    """Fix the subtree at `node`; returns the handle of its (possibly new) root."""
    arena.update_height(node)
    nkey = arena.key(node)
    bf = arena.balance_factor(node)
    yield tree_frame(
        arena, f"Checking balance at node {nkey}. Balance factor: {bf}",
        FrameEvent.BALANCE, line=3, highlighted=(nkey,),
    )

    if bf > 1:
        left = arena[node].left
        if arena.balance_factor(left) >= 0:
            yield tree_frame(
                arena, f"Left-Left case at node {nkey}: performing right rotation",
                FrameEvent.BALANCE, line=4, highlighted=(nkey,),
            )
            new_root = yield from _rotate_right(arena, node, line=4)
        else:
            yield tree_frame(
                arena, f"Left-Right case at node {nkey}: left rotation on {arena.key(left)}, "
                f"then right rotation on {nkey}",
                FrameEvent.BALANCE, line=5, highlighted=(nkey, arena.key(left)),
            )
            yield from _rotate_left(arena, left, line=6)
            new_root = yield from _rotate_right(arena, node, line=6)
    elif bf < -1:
        right = arena[node].right
        if arena.balance_factor(right) <= 0:
            yield tree_frame(
                arena, f"Right-Right case at node {nkey}: performing left rotation",
                FrameEvent.BALANCE, line=7, highlighted=(nkey,),
            )
            new_root = yield from _rotate_left(arena, node, line=7)
        else:
            yield tree_frame(
                arena, f"Right-Left case at node {nkey}: right rotation on {arena.key(right)}, "
                f"then left rotation on {nkey}",
                FrameEvent.BALANCE, line=8, highlighted=(nkey, arena.key(right)),
            )
            yield from _rotate_right(arena, right, line=9)
            new_root = yield from _rotate_left(arena, node, line=9)
    else:
        return node

    yield tree_frame(
        arena, f"Subtree rebalanced, {arena.key(new_root)} is the new local root",
        FrameEvent.NOTE, line=10, highlighted=(arena.key(new_root),),
    )
    return new_root


def _rotate_right(arena: TreeArena, y: int, line: int) -> Generator[TreeFrame, None, int]:
    ykey = arena.key(y)
    x = arena.rotate_right(y)
    xkey = arena.key(x)
    yield tree_frame(
        arena, f"Right rotation on {ykey}: {xkey} moves up",
        FrameEvent.ROTATE, line=line, changed=(ykey, xkey), rotation=RotationEdge(ykey, xkey),
    )
    return x


def _rotate_left(arena: TreeArena, x: int, line: int) -> Generator[TreeFrame, None, int]:
    xkey = arena.key(x)
    y = arena.rotate_left(x)
    ykey = arena.key(y)
    yield tree_frame(
        arena, f"Left rotation on {xkey}: {ykey} moves up",
        FrameEvent.ROTATE, line=line, changed=(xkey, ykey), rotation=RotationEdge(xkey, ykey),
    )
    return y
