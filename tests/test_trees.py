import random

import pytest

from algorithms.avl import avl_insert_all
from algorithms.bst import bst_insert_all, bst_search
from algorithms.frames import FrameEvent
from algorithms.red_black import rb_insert_all
from algorithms.samples import DEFAULT_TREE_KEYS
from trees import AVLNode, BSTNode, Color, RBNode, keys_in_order, tree_height


def _key_lists(count=15):
    rng = random.Random(99)
    lists = [list(range(1, 12)), list(range(12, 0, -1)), [5, 5, 5], DEFAULT_TREE_KEYS]
    for _ in range(count):
        lists.append([rng.randrange(0, 40) for _ in range(rng.randrange(1, 25))])
    return lists


def _completed(frames):
    return [f for f in frames if f.event is FrameEvent.INSERTION_COMPLETE]


def _black_height(node):
    """Black count on every root-to-leaf path, or -1 if they differ."""
    if node is None:
        return 1
    left, right = _black_height(node.left), _black_height(node.right)
    if left == -1 or right == -1 or left != right:
        return -1
    return left + (1 if node.color is Color.BLACK else 0)


def _no_red_red(node):
    if node is None:
        return True
    if node.color is Color.RED:
        for child in (node.left, node.right):
            if child is not None and child.color is Color.RED:
                return False
    return _no_red_red(node.left) and _no_red_red(node.right)


def _avl_balanced(node):
    if node is None:
        return True
    if abs(tree_height(node.left) - tree_height(node.right)) > 1:
        return False
    if node.height != tree_height(node):
        return False
    return _avl_balanced(node.left) and _avl_balanced(node.right)


# ---------------------------------------------------------------------------
# Shared behaviour
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("tracer", [bst_insert_all, avl_insert_all, rb_insert_all])
@pytest.mark.parametrize("keys", _key_lists())
def test_in_order_is_sorted_and_duplicate_free(tracer, keys):
    last = list(tracer(keys))[-1]
    assert keys_in_order(last.tree) == sorted(set(keys))
    assert last.event is FrameEvent.CONCLUDE
    assert "construction complete" in last.description


@pytest.mark.parametrize("tracer, name", [
    (bst_insert_all, "Binary Search Tree"),
    (avl_insert_all, "AVL Tree"),
    (rb_insert_all, "Red-Black Tree"),
])
def test_trace_opens_on_an_empty_tree(tracer, name):
    first = next(iter(tracer([3, 1])))
    assert first.tree is None
    assert first.description == f"Starting with an empty {name}"


@pytest.mark.parametrize("tracer", [bst_insert_all, avl_insert_all, rb_insert_all])
def test_one_insertion_complete_frame_per_key(tracer):
    frames = list(tracer([4, 2, 6, 2]))
    assert len(_completed(frames)) == 4


@pytest.mark.parametrize("tracer", [bst_insert_all, avl_insert_all, rb_insert_all])
def test_duplicate_key_is_a_noop(tracer):
    frames = list(tracer([4, 2, 4]))
    dup = [f for f in frames if f.event is FrameEvent.DUPLICATE]
    assert len(dup) == 1
    assert "already exists" in dup[0].description
    assert keys_in_order(frames[-1].tree) == [2, 4]


@pytest.mark.parametrize("tracer", [bst_insert_all, avl_insert_all, rb_insert_all])
def test_frames_own_independent_snapshots(tracer):
    frames = list(tracer([5, 3, 8, 1, 4]))
    sizes = [len(keys_in_order(f.tree)) for f in frames]
    assert sizes == sorted(sizes)
    assert sizes[1] == 0 and sizes[-1] == 5


def test_empty_key_list():
    for tracer in (bst_insert_all, avl_insert_all, rb_insert_all):
        frames = list(tracer([]))
        assert len(frames) == 2
        assert frames[-1].tree is None


# ---------------------------------------------------------------------------
# BST
# ---------------------------------------------------------------------------
def test_bst_does_not_rebalance():
    last = list(bst_insert_all([1, 2, 3, 4]))[-1]
    assert isinstance(last.tree, BSTNode)
    assert tree_height(last.tree) == 4
    assert last.balance_factors is None


def test_bst_narration():
    frames = list(bst_insert_all([30, 20]))
    descriptions = [f.description for f in frames]
    assert "Inserted 30 as the root of an empty tree" in descriptions
    assert "Comparing 20 with 30" in descriptions
    assert "Inserted 20 as left child of 30" in descriptions


def test_bst_search_found():
    frames = list(bst_search(DEFAULT_TREE_KEYS, 25))
    compared = [f.highlighted_nodes[0] for f in frames if f.event is FrameEvent.COMPARE]
    assert compared == [30, 20, 25]
    assert any(f.event is FrameEvent.FOUND for f in frames)
    assert frames[-1].description == "Search complete"


def test_bst_search_missing_key():
    frames = list(bst_search(DEFAULT_TREE_KEYS, 27))
    assert not any(f.event is FrameEvent.FOUND for f in frames)
    assert any(f.event is FrameEvent.NOT_FOUND and "empty subtree" in f.description for f in frames)


def test_bst_search_empty_tree():
    frames = list(bst_search([], 1))
    assert frames[-1].description == "Tree is empty, search failed"


# ---------------------------------------------------------------------------
# AVL
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("keys", _key_lists())
def test_avl_balanced_after_every_insertion(keys):
    for frame in _completed(avl_insert_all(keys)):
        assert all(abs(bf) <= 1 for bf in frame.balance_factors.values())
        assert _avl_balanced(frame.tree)


@pytest.mark.parametrize("keys, case, edge", [
    ([30, 20, 10], "Left-Left", (30, 20)),
    ([10, 20, 30], "Right-Right", (10, 20)),
    ([30, 10, 20], "Left-Right", (30, 20)),
    ([10, 30, 20], "Right-Left", (10, 20)),
])
def test_avl_rotation_cases(keys, case, edge):
    frames = list(avl_insert_all(keys))
    assert any(f.description.startswith(case) for f in frames)
    rotations = [f for f in frames if f.event is FrameEvent.ROTATE]
    last_rotation = rotations[-1].rotation_edge
    assert (last_rotation.source, last_rotation.target) == edge
    assert frames[-1].tree.key == 20
    assert isinstance(frames[-1].tree, AVLNode)
    assert any("new local root" in f.description for f in frames)


def test_avl_double_rotation_has_two_rotate_frames():
    frames = list(avl_insert_all([30, 10, 20]))
    assert len([f for f in frames if f.event is FrameEvent.ROTATE]) == 2


def test_avl_reports_balance_factor_before_rebalancing():
    frames = list(avl_insert_all([10, 20, 30]))
    checks = [f.description for f in frames if f.event is FrameEvent.BALANCE]
    assert "Checking balance at node 10. Balance factor: -2" in checks


def test_avl_default_keys_need_no_rotation():
    frames = list(avl_insert_all(DEFAULT_TREE_KEYS))
    assert not any(f.event is FrameEvent.ROTATE for f in frames)
    assert frames[-1].tree.height == 3


# ---------------------------------------------------------------------------
# Red-Black
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("keys", _key_lists())
def test_red_black_invariants_after_every_insertion(keys):
    for frame in _completed(rb_insert_all(keys)):
        root = frame.tree
        assert root.color is Color.BLACK
        assert _no_red_red(root)
        assert _black_height(root) != -1


def test_red_black_default_keys_scenario():
    last = list(rb_insert_all(DEFAULT_TREE_KEYS))[-1]
    assert isinstance(last.tree, RBNode)
    assert last.tree.key in (30, 20)
    assert last.tree.color is Color.BLACK


def test_red_black_first_key_is_black_root():
    frames = list(rb_insert_all([7]))
    assert any(f.description == "Created new tree with root node 7 (BLACK)" for f in frames)


def test_red_black_uncle_red_recolours():
    frames = list(rb_insert_all([30, 20, 40, 10]))
    case1 = [f for f in frames if f.description.startswith("Case 1")]
    assert len(case1) == 1
    assert case1[0].event is FrameEvent.RECOLOR
    # grandparent 30 turned RED and is the root, so it is forced back
    assert any(f.description.startswith("Ensuring root is BLACK") for f in frames)


def test_red_black_straight_line_rotates_at_grandparent():
    frames = list(rb_insert_all([10, 20, 30]))
    rotations = [f for f in frames if f.event is FrameEvent.ROTATE]
    assert len(rotations) == 1
    assert (rotations[0].rotation_edge.source, rotations[0].rotation_edge.target) == (10, 20)
    last = frames[-1].tree
    assert last.key == 20 and last.color is Color.BLACK
    assert last.left.color is Color.RED and last.right.color is Color.RED


def test_red_black_zig_zag_rotates_twice():
    frames = list(rb_insert_all([10, 30, 20]))
    assert any(f.description.startswith("Case 2") for f in frames)
    assert len([f for f in frames if f.event is FrameEvent.ROTATE]) == 2
    assert frames[-1].tree.key == 20


def test_tree_frame_to_dict_is_tagged():
    last = list(rb_insert_all([2, 1]))[-1].to_dict()
    assert last["tree"]["kind"] == "rb"
    assert last["tree"]["color"] == "black"
    assert last["tree"]["left"]["color"] == "red"
    avl = list(avl_insert_all([2, 1]))[-1].to_dict()
    assert avl["tree"]["height"] == 2
    assert avl["balanceFactor"] == {"2": 1, "1": 0}
