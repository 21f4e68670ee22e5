"""Tests for wedge color precedence."""

from sunzoom.core.models import Category, HierarchyNode, NodeKind, Status
from sunzoom.views.colors import (
    CATEGORY_COLORS,
    FALLBACK_COLOR,
    KIND_COLORS,
    STATUS_COLORS,
    node_color,
)


def test_override_beats_everything():
    node = HierarchyNode(
        "n", NodeKind.LPCD_CATEGORY, category=Category.ABOVE_LPCD, status=Status.CRITICAL, color="#abcdef"
    )
    assert node_color(node) == "#abcdef"


def test_category_beats_status():
    node = HierarchyNode("n", NodeKind.LPCD_CATEGORY, category=Category.BELOW_LPCD, status=Status.GOOD)
    assert node_color(node) == CATEGORY_COLORS[Category.BELOW_LPCD]


def test_status_beats_kind():
    node = HierarchyNode("n", NodeKind.SCHEME, status=Status.COMPLETED)
    assert node_color(node) == STATUS_COLORS[Status.COMPLETED]


def test_kind_default():
    assert node_color(HierarchyNode("n", NodeKind.VILLAGE)) == KIND_COLORS[NodeKind.VILLAGE]


def test_every_variant_has_a_color():
    assert set(STATUS_COLORS) == set(Status)
    assert set(KIND_COLORS) == set(NodeKind)
    assert set(CATEGORY_COLORS) == set(Category)
    assert FALLBACK_COLOR == "#6b7280"
