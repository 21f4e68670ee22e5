"""Tests for the navigation shell: breadcrumb, hover gating and events."""

import pytest

from sunzoom.core.navigation import FocusEvent, HoverEvent, NavigationShell
from sunzoom.core.partition import partition
from sunzoom.core.transition import ZoomController
from sunzoom.views.geometry import CENTER, ArcGeometry
from sunzoom.views.overlay import ZOOM_IN_HINT, ZOOM_OUT_HINT, TooltipOverlay


@pytest.fixture
def shell(small_tree, config):
    tree = partition(small_tree)
    controller = ZoomController(tree, config, clock=lambda: 0.0)
    return NavigationShell(controller, ArcGeometry(config, tree.height), TooltipOverlay())


def test_breadcrumb_updates_on_completion(shell):
    """Clicking region A then the center hole walks the breadcrumb down and back."""
    events = []
    shell.on_focus(events.append)

    assert shell.click(1, now=0.0)
    assert shell.breadcrumb == ["Root"]
    assert shell.is_animating

    shell.controller.tick(1.0)
    assert shell.breadcrumb == ["Root", "A"]
    assert shell.zoom_level == 1
    assert shell.focus.name == "A"
    assert events[-1] == FocusEvent(node_id=1, path=["Root", "A"], depth=1, details={})

    assert shell.click_center(now=2.0)
    shell.controller.tick(3.0)
    assert shell.breadcrumb == ["Root"]
    assert shell.zoom_level == 0


def test_clicks_ignored_while_animating(shell):
    shell.click(1, now=0.0)
    assert not shell.click(4, now=0.1)
    assert not shell.click_center(now=0.1)
    assert not shell.navigate_to(0, now=0.1)
    assert shell.controller.pending_focus == 1


def test_hover_suppressed_while_animating(shell):
    shell.click(1, now=0.0)
    assert not shell.hover(2, (1.0, 1.0))
    assert shell.hovered is None
    assert not shell.overlay.visible


def test_hover_tooltip_and_events(shell):
    events = []
    shell.on_hover(events.append)

    assert shell.hover(1, (5.0, 6.0))
    assert shell.overlay.visible
    assert shell.overlay.lines[0] == "A"
    assert shell.overlay.lines[-1] == ZOOM_IN_HINT
    assert shell.overlay.position == (5.0, 6.0)

    # hovering the same wedge again is not a change
    assert not shell.hover(1, (7.0, 7.0))

    shell.hover(2)
    assert ZOOM_IN_HINT not in shell.overlay.lines

    shell.hover(CENTER)
    assert shell.overlay.lines == [ZOOM_OUT_HINT]

    shell.hover(None)
    assert not shell.overlay.visible

    assert events == [
        HoverEvent(node_id=1, name="A"),
        HoverEvent(node_id=2, name="A1"),
        HoverEvent(node_id=None, center=True),
        HoverEvent(node_id=None),
    ]


def test_click_clears_hover(shell):
    shell.hover(1, (5.0, 6.0))
    shell.click(1, now=0.0)
    assert shell.hovered is None
    assert not shell.overlay.visible


def test_hidden_wedges_ignore_clicks(shell):
    shell.click(1, now=0.0)
    shell.controller.tick(1.0)
    # B has been squeezed to zero width
    assert not shell.click(4, now=2.0)
    assert not shell.is_animating


def test_click_and_hover_at_coordinates(shell):
    assert shell.hover_at(450 + 300, 450)
    assert shell.hovered == 1
    assert shell.click_at(450 + 300, 450, now=0.0)
    shell.controller.tick(1.0)
    assert shell.breadcrumb == ["Root", "A"]

    assert not shell.click_at(0, 0, now=2.0)
    assert shell.click_at(450, 450, now=2.0)
    shell.controller.tick(3.0)
    assert shell.breadcrumb == ["Root"]


def test_navigate_to(shell):
    shell.click(1, now=0.0)
    shell.controller.tick(1.0)

    assert not shell.navigate_to(1, now=2.0)
    assert not shell.navigate_to(5, now=2.0)
    assert not shell.navigate_to(-1, now=2.0)

    assert shell.navigate_to(0, now=2.0)
    shell.controller.tick(3.0)
    assert shell.breadcrumb == ["Root"]


def test_reset_mid_animation(shell):
    events = []
    shell.on_focus(events.append)
    shell.click(1, now=0.0)
    shell.controller.tick(0.5)

    shell.reset()
    assert not shell.is_animating
    assert shell.breadcrumb == ["Root"]
    assert shell.tree.frame == shell.tree.canonical_frame()
    assert events[-1].node_id == 0


def test_works_without_overlay(small_tree, config):
    tree = partition(small_tree)
    shell = NavigationShell(ZoomController(tree, config), ArcGeometry(config, tree.height))
    assert shell.hover(1)
    assert shell.click(1, now=0.0)
