"""Tests for arc geometry, visibility, paths and hit testing."""

import math

import pytest

from sunzoom.config import SunburstConfig
from sunzoom.core.models import ArcState
from sunzoom.core.partition import partition
from sunzoom.core.transition import zoom_targets
from sunzoom.views.geometry import (
    CENTER,
    ArcGeometry,
    Wedge,
    arc_path,
    hit_test,
    polar_to_xy,
    xy_to_polar,
)


@pytest.fixture
def geometry():
    return ArcGeometry(SunburstConfig(), height=2)


def test_radii(geometry):
    """Rings scale by R/H, clamped to the center hole."""
    r = 900 / 2.2
    s = ArcState(0.0, 1.0, 1.0, 2.0)
    assert geometry.inner_radius(s) == pytest.approx(r / 2)
    assert geometry.outer_radius(s) == pytest.approx(r - 1.0)

    innermost = ArcState(0.0, 1.0, 0.0, 0.2)
    assert geometry.inner_radius(innermost) == 60.0
    assert geometry.outer_radius(innermost) == 60.0


def test_arc_visibility(geometry):
    assert geometry.arc_visible(ArcState(0.0, 1.0, 1.0, 2.0))
    assert not geometry.arc_visible(ArcState(0.0, 1.0, 2.0, 3.0))
    assert not geometry.arc_visible(ArcState(1.0, 1.0, 0.0, 1.0))
    assert not geometry.arc_visible(ArcState(0.0, 1.0, -1.0, 0.0))


def test_label_visibility_implies_arc_visibility(geometry):
    """labelVisible ⟹ arcVisible over a grid of states."""
    for x0 in (0.0, 1.0, 6.0):
        for width in (0.0, 0.05, 0.081, 0.5, 3.0):
            for y0 in (-1.0, 0.0, 1.0, 2.0):
                s = ArcState(x0, x0 + width, y0, y0 + 1)
                if geometry.label_visible(s):
                    assert geometry.arc_visible(s)

    assert not geometry.label_visible(ArcState(0.0, 0.05, 1.0, 2.0))
    assert geometry.label_visible(ArcState(0.0, 0.1, 1.0, 2.0))


def test_zero_height_tree():
    geometry = ArcGeometry(SunburstConfig(), height=0)
    assert geometry.inner_radius(ArcState(0.0, 1.0, 0.0, 1.0)) == 60.0
    assert not geometry.arc_visible(ArcState(0.0, 1.0, 0.0, 1.0))


def test_label_transform_reads_left_to_right(geometry):
    right = geometry.label_transform(ArcState(0.0, math.pi / 2, 1.0, 2.0))
    assert right.startswith("rotate(-45)")
    assert right.endswith("rotate(0)")

    left = geometry.label_transform(ArcState(math.pi, 1.5 * math.pi, 1.0, 2.0))
    assert left.startswith("rotate(135)")
    assert left.endswith("rotate(180)")


def test_label_anchor_at_wedge_centroid(geometry):
    x, y = geometry.label_anchor(ArcState(0.0, math.pi, 1.0, 2.0))
    w = geometry.wedge(ArcState(0.0, math.pi, 1.0, 2.0))
    assert x == pytest.approx(w.mid_radius)
    assert y == pytest.approx(0.0, abs=1e-9)


def test_polar_round_trip():
    assert polar_to_xy(0.0, 10.0) == pytest.approx((0.0, -10.0))
    for angle in (0.1, 1.0, math.pi, 4.0, 6.0):
        x, y = polar_to_xy(angle, 7.0)
        a, r = xy_to_polar(x, y)
        assert a == pytest.approx(angle)
        assert r == pytest.approx(7.0)


def test_arc_path_shapes():
    wedge = arc_path(Wedge(60.0, 120.0, 0.0, math.pi / 2), pad_angle=0.003)
    assert wedge.startswith("M")
    assert wedge.count("A") == 2
    assert wedge.endswith("Z")

    # large arc flag set for spans over π
    big = arc_path(Wedge(60.0, 120.0, 0.0, 1.5 * math.pi))
    assert "0,1,1," in big

    ring = arc_path(Wedge(60.0, 120.0, 0.0, 2 * math.pi), pad_angle=0.003)
    assert ring.startswith("M0,-120")
    assert "M0,-60" in ring

    assert arc_path(Wedge(60.0, 120.0, 1.0, 1.0)) == ""
    assert arc_path(Wedge(0.0, 0.0, 0.0, 1.0)) == ""


def test_pad_never_inverts_thin_wedges():
    d = arc_path(Wedge(60.0, 120.0, 1.0, 1.0001), pad_angle=0.5)
    assert d.endswith("Z")


def test_hit_test(small_tree):
    """Viewport points resolve to wedges, the center hole or nothing."""
    tree = partition(small_tree)
    geometry = ArcGeometry(SunburstConfig(), tree.height)

    assert hit_test(tree, geometry, 450, 450) == CENTER
    assert hit_test(tree, geometry, 450 + 300, 450) == 1
    # root band is never a target
    assert hit_test(tree, geometry, 450 + 100, 450) is None

    dx, dy = polar_to_xy(1.75 * math.pi, 300)
    assert hit_test(tree, geometry, 450 + dx, 450 + dy) == 4

    assert hit_test(tree, geometry, 450 + 420, 450) is None
    assert hit_test(tree, geometry, 0, 0) is None


def test_hit_test_deepest_ring_only_when_zoomed(small_tree):
    """Leaf wedges past ring H take no pointer events until zoomed into view."""
    tree = partition(small_tree)
    geometry = ArcGeometry(SunburstConfig(), tree.height)
    assert not geometry.arc_visible(tree.current(2))

    zoomed = zoom_targets(tree, 1)
    assert hit_test(tree, geometry, 450 + 300, 450, states=zoomed) == 2


def test_hit_test_skips_hidden_wedges(small_tree):
    tree = partition(small_tree)
    geometry = ArcGeometry(SunburstConfig(), tree.height)
    # shift everything out past the outer ring
    hidden = tuple(ArcState(s.x0, s.x1, s.y0 + 2, s.y1 + 2) for s in tree.frame)
    assert hit_test(tree, geometry, 450 + 300, 450, states=hidden) is None
