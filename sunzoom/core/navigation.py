"""
Navigation shell around the zoom state machine.

Holds the focus and breadcrumb trail, gates pointer input while a
transition is in flight, and publishes focus/hover events to external
listeners (breadcrumb bars, side panels, tooltips).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..views.geometry import CENTER, ArcGeometry, hit_test
from ..views.overlay import ZOOM_OUT_HINT, TooltipOverlay, tooltip_lines
from .models import LayoutNode
from .transition import ZoomController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FocusEvent:
    node_id: int
    path: List[str]
    depth: int
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HoverEvent:
    node_id: Optional[int]
    name: Optional[str] = None
    center: bool = False


FocusListener = Callable[[FocusEvent], None]
HoverListener = Callable[[HoverEvent], None]
Target = Union[int, str, None]


class NavigationShell:
    def __init__(
        self,
        controller: ZoomController,
        geometry: ArcGeometry,
        overlay: Optional[TooltipOverlay] = None,
    ):
        self.controller = controller
        self.geometry = geometry
        self.overlay = overlay
        self.tree = controller.tree
        self.focus_id = self.tree.root.id
        self.breadcrumb: List[str] = [self.tree.root.name]
        self.hovered: Target = None
        self._focus_listeners: List[FocusListener] = []
        self._hover_listeners: List[HoverListener] = []
        controller.on_complete(self._focus_changed)

    # --- state ---

    @property
    def is_animating(self) -> bool:
        return self.controller.is_animating

    @property
    def focus(self) -> LayoutNode:
        return self.tree[self.focus_id]

    @property
    def zoom_level(self) -> int:
        return self.focus.depth

    def on_focus(self, listener: FocusListener) -> None:
        self._focus_listeners.append(listener)

    def on_hover(self, listener: HoverListener) -> None:
        self._hover_listeners.append(listener)

    def _focus_changed(self, node_id: int, breadcrumb: List[str]) -> None:
        self.focus_id = node_id
        self.breadcrumb = list(breadcrumb)
        node = self.tree[node_id]
        event = FocusEvent(node_id=node_id, path=list(breadcrumb), depth=node.depth, details=dict(node.node.details))
        for listener in self._focus_listeners:
            listener(event)

    # --- pointer input ---

    def click(self, node_id: int, now: Optional[float] = None) -> bool:
        """Activate a wedge. Ignored while animating or for non-zoomable nodes."""
        if self.is_animating:
            return False
        if node_id == self.tree.root.id:
            return self.click_center(now)
        if not self.geometry.arc_visible(self.tree.current(node_id)):
            logger.debug("Ignoring click on hidden node %s", node_id)
            return False
        started = self.controller.activate(node_id, now)
        if started:
            self._clear_hover()
        return started

    def click_center(self, now: Optional[float] = None) -> bool:
        if self.is_animating:
            return False
        started = self.controller.zoom_out(now)
        if started:
            self._clear_hover()
        return started

    def click_at(self, x: float, y: float, now: Optional[float] = None) -> bool:
        if self.is_animating:
            return False
        target = hit_test(self.tree, self.geometry, x, y)
        if target == CENTER:
            return self.click_center(now)
        if target is None:
            return False
        return self.click(target, now)

    def hover(self, target: Target, position: Tuple[float, float] = (0.0, 0.0)) -> bool:
        """Point at a node id, the center hole, or nothing. Suppressed while animating."""
        if self.is_animating:
            return False
        if target == self.hovered:
            return False
        self.hovered = target
        if self.overlay is not None:
            if target == CENTER:
                self.overlay.show([ZOOM_OUT_HINT], position)
            elif target is not None:
                node = self.tree[target]
                self.overlay.show(tooltip_lines(node, zoomable=self.controller.can_activate(node.id)), position)
            else:
                self.overlay.hide()
        self._emit_hover(target)
        return True

    def hover_at(self, x: float, y: float) -> bool:
        if self.is_animating:
            return False
        return self.hover(hit_test(self.tree, self.geometry, x, y), (x, y))

    def _clear_hover(self) -> None:
        if self.overlay is not None:
            self.overlay.hide()
        if self.hovered is not None:
            self.hovered = None
            self._emit_hover(None)

    def _emit_hover(self, target: Target) -> None:
        if target == CENTER:
            event = HoverEvent(node_id=None, center=True)
        elif target is None:
            event = HoverEvent(node_id=None)
        else:
            event = HoverEvent(node_id=target, name=self.tree[target].name)
        for listener in self._hover_listeners:
            listener(event)

    # --- breadcrumb / reset ---

    def navigate_to(self, index: int, now: Optional[float] = None) -> bool:
        """Zoom to the ancestor at breadcrumb position `index` (0 is the root)."""
        if self.is_animating:
            return False
        chain = self.tree.ancestors(self.focus_id)
        if not 0 <= index < len(chain) - 1:
            return False
        node = chain[index]
        started = self.controller.activate(node.id, now)
        if started:
            self._clear_hover()
        return started

    def reset(self) -> None:
        """Snap back to the root instantly, aborting any transition."""
        self._clear_hover()
        self.controller.reset()
