"""
red_black.py — Red-Black Tree insertion
========================================
New keys go in as RED leaves (the very first key becomes a BLACK root).
While the new node's parent is RED the fix-up loop runs:

  Case 1 – uncle RED           →  recolour parent, uncle, grandparent;
                                  continue from the grandparent
  Case 2 – uncle BLACK, "zig-zag"  →  rotate at the parent to straighten
  Case 3 – uncle BLACK, straight   →  recolour, rotate at the grandparent

Finally the root is forced BLACK.  Absent children and the root's parent
are the arena sentinel, which reads as BLACK.
"""

import logging
from typing import Generator, List

from trees import NIL, Color, NodeKind, TreeArena
from algorithms.frames import FrameEvent, RotationEdge, TreeFrame, tree_frame

logger = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def insert(T, key):",                                  # 0
    "    z ← BST-insert(key); z.color ← RED",               # 1
    "    while z.parent.color == RED:",                     # 2
    "        y ← uncle(z)",                                 # 3
    "        if y.color == RED:            # case 1",       # 4
    "            recolour parent, uncle BLACK; grand RED",  # 5
    "            z ← z.grandparent",                        # 6
    "        else:",                                        # 7
    "            if z is an inner child:   # case 2",       # 8
    "                z ← z.parent; rotate(z)",              # 9
    "            parent BLACK; grand RED   # case 3",       # 10
    "            rotate(z.grandparent)",                    # 11
    "    T.root.color ← BLACK",                             # 12
]


def rb_insert_all(keys: List[int]) -> Generator[TreeFrame, None, None]:
    arena = TreeArena(NodeKind.RB)

    yield tree_frame(arena, "Starting with an empty Red-Black Tree", FrameEvent.START)

    for key in keys:
        yield from insert_key(arena, key)

    yield tree_frame(
        arena, f"Red-Black Tree construction complete: {len(arena)} node(s)",
        FrameEvent.CONCLUDE, line=12,
    )


def insert_key(arena: TreeArena, key: int) -> Generator[TreeFrame, None, bool]:
    yield tree_frame(arena, f"Starting insertion of key {key}", FrameEvent.NOTE, line=0)

    if arena.is_empty():
        arena.root = arena.new_node(key, color=Color.BLACK)
        yield tree_frame(
            arena, f"Created new tree with root node {key} (BLACK)",
            FrameEvent.INSERT, line=12, changed=(key,),
        )
        yield tree_frame(arena, "Insertion complete", FrameEvent.INSERTION_COMPLETE, line=12)
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
            yield tree_frame(arena, "Insertion complete", FrameEvent.INSERTION_COMPLETE, line=12)
            return False

        go_left = key < nkey
        side = "left" if go_left else "right"
        child = arena[node].left if go_left else arena[node].right
        if child == NIL:
            z = arena.new_node(key)
            arena.attach(node, z, left=go_left)
            yield tree_frame(
                arena, f"Inserted {key} as {side} child of {nkey} (RED)",
                FrameEvent.INSERT, line=1, changed=(key,),
            )
            break
        yield tree_frame(
            arena, f"{key} is {'less' if go_left else 'greater'} than {nkey}, going {side}",
            FrameEvent.NOTE, line=1, highlighted=(nkey,),
        )
        node = child

    yield from _fix_insert(arena, z)

    root = arena.root
    if arena.color(root) is not Color.BLACK:
        arena[root].color = Color.BLACK
        yield tree_frame(
            arena, f"Ensuring root is BLACK: recoloured {arena.key(root)}",
            FrameEvent.RECOLOR, line=12, changed=(arena.key(root),),
        )

    yield tree_frame(arena, "Insertion complete", FrameEvent.INSERTION_COMPLETE, line=12)
    return True


def _fix_insert(arena: TreeArena, z: int) -> Generator[TreeFrame, None, None]:
    while arena.color(arena[z].parent) is Color.RED:
        p = arena[z].parent
        g = arena[p].parent     # p is RED so it is not the root; g exists
        parent_is_left = arena[g].left == p
        uncle = arena[g].right if parent_is_left else arena[g].left

        zkey, pkey, gkey = arena.key(z), arena.key(p), arena.key(g)
        yield tree_frame(
            arena, f"Violation: node {zkey} and its parent {pkey} are both RED",
            FrameEvent.NOTE, line=2, highlighted=(zkey, pkey),
        )

        if arena.color(uncle) is Color.RED:
            ukey = arena.key(uncle)
            arena[p].color = Color.BLACK
            arena[uncle].color = Color.BLACK
            arena[g].color = Color.RED
            yield tree_frame(
                arena,
                f"Case 1: uncle {ukey} is RED. Recoloured parent {pkey} and uncle {ukey} "
                f"BLACK, grandparent {gkey} RED",
                FrameEvent.RECOLOR, line=5, changed=(pkey, ukey, gkey),
            )
            z = g
            continue

        inner = (arena[p].right == z) if parent_is_left else (arena[p].left == z)
        if inner:
            yield tree_frame(
                arena, f"Case 2: uncle is BLACK and {zkey} is an inner child, rotating at parent {pkey}",
                FrameEvent.NOTE, line=8, highlighted=(zkey, pkey),
            )
            z = p
            if parent_is_left:
                up = arena.rotate_left(z)
            else:
                up = arena.rotate_right(z)
            yield tree_frame(
                arena, f"{'Left' if parent_is_left else 'Right'} rotation on {pkey}",
                FrameEvent.ROTATE, line=9, changed=(pkey, arena.key(up)),
                rotation=RotationEdge(pkey, arena.key(up)),
            )
            p = arena[z].parent
            pkey = arena.key(p)

        arena[p].color = Color.BLACK
        arena[g].color = Color.RED
        yield tree_frame(
            arena, f"Case 3: recoloured parent {pkey} BLACK and grandparent {gkey} RED",
            FrameEvent.RECOLOR, line=10, changed=(pkey, gkey),
        )
        if parent_is_left:
            up = arena.rotate_right(g)
        else:
            up = arena.rotate_left(g)
        yield tree_frame(
            arena, f"{'Right' if parent_is_left else 'Left'} rotation on grandparent {gkey}",
            FrameEvent.ROTATE, line=11, changed=(gkey, arena.key(up)),
            rotation=RotationEdge(gkey, arena.key(up)),
        )
        logger.debug("rb fix-up rotated at %s, new local root %s", gkey, arena.key(up))
