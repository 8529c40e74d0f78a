"""
bst.py — Binary Search Tree insertion & lookup
===============================================
`bst_insert_all(keys)` inserts the keys one at a time into a plain
(unbalanced) BST.  Each key gets its own sub-trace:

  1. "Starting insertion of key k"
  2. Compare with the node on the search path, then go left / right
  3. Attach the new leaf, or note that the key already exists
  4. "Insertion complete"

The root carries over from one key to the next.  A duplicate key is a
no-op.  The whole trace opens on an empty tree and closes with a
summary of the finished structure.

`bst_search(keys, target)` builds the tree from `keys` without frames
and then traces a lookup of `target`.
"""

from typing import Generator, List

from trees import NIL, NodeKind, TreeArena
from algorithms.frames import FrameEvent, TreeFrame, tree_frame


PSEUDOCODE: List[str] = [
    "def insert(node, key):",                       # 0
    "    if node is empty: return new Node(key)",   # 1
    "    if key < node.key:",                       # 2
    "        node.left ← insert(node.left, key)",   # 3
    "    elif key > node.key:",                     # 4
    "        node.right ← insert(node.right, key)", # 5
    "    else: key already present",                # 6
    "    return node",                              # 7
]

SEARCH_PSEUDOCODE: List[str] = [
    "def search(node, key):",                       # 0
    "    if node is empty: return NOT FOUND",       # 1
    "    if key == node.key: return node",          # 2
    "    if key < node.key: return search(node.left, key)",   # 3
    "    return search(node.right, key)",           # 4
]


def bst_insert_all(keys: List[int]) -> Generator[TreeFrame, None, None]:
    arena = TreeArena(NodeKind.BST)

    yield tree_frame(arena, "Starting with an empty Binary Search Tree", FrameEvent.START)

    for key in keys:
        yield from insert_key(arena, key)

    yield tree_frame(
        arena,
        f"Binary Search Tree construction complete: {len(arena)} node(s)",
        FrameEvent.CONCLUDE, line=7,
    )


def insert_key(arena: TreeArena, key: int) -> Generator[TreeFrame, None, bool]:
    """Sub-trace for one key.  Returns True if a node was added."""
    yield tree_frame(arena, f"Starting insertion of key {key}", FrameEvent.NOTE, line=0)

    if arena.is_empty():
        arena.root = arena.new_node(key)
        yield tree_frame(
            arena, f"Inserted {key} as the root of an empty tree",
            FrameEvent.INSERT, line=1, changed=(key,),
        )
        yield tree_frame(arena, "Insertion complete", FrameEvent.INSERTION_COMPLETE, line=7)
        return True

    node = arena.root
    inserted = False
    while True:
        nkey = arena.key(node)
        yield tree_frame(
            arena, f"Comparing {key} with {nkey}", FrameEvent.COMPARE, line=2, highlighted=(nkey,),
        )
        if key == nkey:
            yield tree_frame(
                arena, f"Key {key} already exists in the tree, no insertion needed",
                FrameEvent.DUPLICATE, line=6, highlighted=(nkey,),
            )
            break

        go_left = key < nkey
        direction = "less than" if go_left else "greater than"
        side = "left" if go_left else "right"
        yield tree_frame(
            arena, f"{key} is {direction} {nkey}, going {side}",
            FrameEvent.NOTE, line=3 if go_left else 5, highlighted=(nkey,),
        )

        child = arena[node].left if go_left else arena[node].right
        if child == NIL:
            arena.attach(node, arena.new_node(key), left=go_left)
            inserted = True
            yield tree_frame(
                arena, f"Inserted {key} as {side} child of {nkey}",
                FrameEvent.INSERT, line=1, changed=(key,),
            )
            break
        node = child

    yield tree_frame(arena, "Insertion complete", FrameEvent.INSERTION_COMPLETE, line=7)
    return inserted


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------
def bst_search(keys: List[int], target: int) -> Generator[TreeFrame, None, None]:
    arena = TreeArena(NodeKind.BST)
    for key in keys:
        _insert_quiet(arena, key)

    yield tree_frame(arena, f"Starting search for key {target}", FrameEvent.START, line=0)

    if arena.is_empty():
        yield tree_frame(arena, "Tree is empty, search failed", FrameEvent.NOT_FOUND, line=1)
        return

    node = arena.root
    while node != NIL:
        nkey = arena.key(node)
        yield tree_frame(
            arena, f"Comparing {target} with {nkey}", FrameEvent.COMPARE, line=2, highlighted=(nkey,),
        )
        if target == nkey:
            yield tree_frame(
                arena, f"Found key {target}!", FrameEvent.FOUND, line=2,
                highlighted=(nkey,), changed=(nkey,),
            )
            yield tree_frame(arena, "Search complete", FrameEvent.CONCLUDE, line=2, highlighted=(nkey,))
            return
        if target < nkey:
            yield tree_frame(
                arena, f"{target} is less than {nkey}, going left",
                FrameEvent.NOTE, line=3, highlighted=(nkey,),
            )
            node = arena[node].left
        else:
            yield tree_frame(
                arena, f"{target} is greater than {nkey}, going right",
                FrameEvent.NOTE, line=4, highlighted=(nkey,),
            )
            node = arena[node].right

    yield tree_frame(
        arena, f"Reached an empty subtree, key {target} not found", FrameEvent.NOT_FOUND, line=1,
    )
    yield tree_frame(arena, "Search complete", FrameEvent.CONCLUDE, line=1)


def _insert_quiet(arena: TreeArena, key: int) -> None:
    if arena.is_empty():
        arena.root = arena.new_node(key)
        return
    node = arena.root
    while True:
        nkey = arena.key(node)
        if key == nkey:
            return
        go_left = key < nkey
        child = arena[node].left if go_left else arena[node].right
        if child == NIL:
            arena.attach(node, arena.new_node(key), left=go_left)
            return
        node = child
