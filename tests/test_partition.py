"""Tests for the partition layout and the LayoutTree arena."""

import math

import pytest

from sunzoom.core.models import ArcState, HierarchyNode, NodeKind
from sunzoom.core.partition import aggregate, partition
from sunzoom.errors import UnknownNodeError


def test_two_regions_three_to_one():
    """Regions weighted 3 and 1 split the circle at 1.5π."""
    root = HierarchyNode("Root", NodeKind.ROOT, weight=0)
    root.add(HierarchyNode("B", NodeKind.REGION, weight=1))
    root.add(HierarchyNode("A", NodeKind.REGION, weight=3))
    tree = partition(root)

    a = tree[tree.find(["A"])]
    b = tree[tree.find(["B"])]
    assert (a.canonical.x0, a.canonical.x1) == pytest.approx((0.0, 1.5 * math.pi))
    assert (b.canonical.x0, b.canonical.x1) == pytest.approx((1.5 * math.pi, 2 * math.pi))


def test_preorder_ids(small_tree):
    tree = partition(small_tree)
    assert [n.name for n in tree] == ["Root", "A", "A1", "A2", "B", "B1"]
    assert [n.id for n in tree] == list(range(6))
    assert tree[2].parent == 1
    assert tree[1].children == [2, 3]
    assert tree.height == 2


def test_children_fill_parent_span(small_tree):
    """Child spans are contiguous, sum to the parent's and descend by value."""
    tree = partition(small_tree)
    for node in tree:
        if node.is_leaf:
            continue
        kids = [tree[c] for c in node.children]
        widths = [k.canonical.width for k in kids]
        assert sum(widths) == pytest.approx(node.canonical.width)
        assert kids[0].canonical.x0 == pytest.approx(node.canonical.x0)
        assert kids[-1].canonical.x1 == pytest.approx(node.canonical.x1)
        for left, right in zip(kids, kids[1:]):
            assert left.canonical.x1 == pytest.approx(right.canonical.x0)
            assert left.value >= right.value


def test_depth_rings(small_tree):
    tree = partition(small_tree)
    for node in tree:
        assert node.canonical.y0 == node.depth
        assert node.canonical.y1 - node.canonical.y0 == 1


def test_aggregate_includes_own_weight():
    root = HierarchyNode("Root", NodeKind.ROOT, weight=2)
    child = root.add(HierarchyNode("C", NodeKind.REGION, weight=3))
    child.add(HierarchyNode("L", NodeKind.SCHEME, weight=-4))
    sums = aggregate(root)
    assert sums[id(root)] == 5
    assert sums[id(child)] == 3


def test_ties_keep_input_order():
    root = HierarchyNode("Root", NodeKind.ROOT, weight=0)
    for name in ("first", "second", "third"):
        root.add(HierarchyNode(name, NodeKind.REGION, weight=1))
    tree = partition(root)
    assert [tree[c].name for c in tree.root.children] == ["first", "second", "third"]


def test_zero_sum_child_is_degenerate():
    """A zero-valued sibling gets no width and never steals the parent's end."""
    root = HierarchyNode("Root", NodeKind.ROOT, weight=0)
    root.add(HierarchyNode("Empty", NodeKind.REGION, weight=0))
    root.add(HierarchyNode("Full", NodeKind.REGION, weight=2))
    tree = partition(root)

    full = tree[tree.find(["Full"])]
    empty = tree[tree.find(["Empty"])]
    assert (full.canonical.x0, full.canonical.x1) == pytest.approx((0.0, 2 * math.pi))
    assert empty.is_degenerate
    assert empty.canonical.width == 0
    # sorted after the last weighted sibling, so it sits exactly on its end
    assert empty.canonical.x0 == full.canonical.x1
    assert empty.canonical.x1 == full.canonical.x1


def test_root_only_tree():
    tree = partition(HierarchyNode("Solo", NodeKind.ROOT))
    assert len(tree) == 1
    assert tree.height == 0
    assert tree.root.canonical == ArcState(0.0, 2 * math.pi, 0.0, 1.0)


def test_navigation_helpers(small_tree):
    tree = partition(small_tree)
    a2 = tree.find(["A", "A2"])
    assert tree.path(a2) == ["Root", "A", "A2"]
    assert [n.name for n in tree.ancestors(a2)] == ["Root", "A", "A2"]
    assert [n.name for n in tree.descendants(1)] == ["A", "A1", "A2"]

    with pytest.raises(UnknownNodeError):
        tree.find(["A", "nope"])
    with pytest.raises(KeyError):
        tree[99]


def test_published_state(small_tree):
    """Frames and targets are replaced wholesale and size-checked."""
    tree = partition(small_tree)
    assert tree.frame == tree.canonical_frame()
    assert tree.targets is None
    assert tree.target(1) is None

    shifted = tuple(ArcState(s.x0, s.x1, s.y0 + 1, s.y1 + 1) for s in tree.frame)
    tree.publish(shifted)
    assert tree.current(1).y0 == 2
    assert tree[1].canonical.y0 == 1

    tree.set_targets(shifted)
    assert tree.target(1) == shifted[1]

    with pytest.raises(ValueError):
        tree.publish(shifted[:2])
