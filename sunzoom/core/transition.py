"""
Zoom transitions: Idle → Animating → Idle.

Activating a node re-normalizes its angular window to the full circle and
shifts every radial span inward by the node's depth. A single driver owns
the in-flight animation; it publishes whole frames to the LayoutTree and is
the only writer of `current`/`target` until it completes or a reset aborts
it. Activations that arrive while a driver is running are dropped.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..config import SunburstConfig
from .models import TAU, ArcState
from .partition import Frame, LayoutTree

logger = logging.getLogger(__name__)

Easing = Callable[[float], float]
CompletionListener = Callable[[int, List[str]], None]


def ease_cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


def zoom_targets(tree: LayoutTree, focus_id: int) -> Frame:
    """End-state of every node when zoomed in on `focus_id`.

    Computed from canonical layout, so zooming back to an ancestor restores
    the exact pre-zoom states.
    """
    p = tree[focus_id]
    c = p.canonical
    span = c.x1 - c.x0
    if span <= 0:
        raise ValueError(f"cannot zoom into zero-width node {p.name!r}")
    out = []
    for d in tree.nodes:
        s = d.canonical
        out.append(
            ArcState(
                _clamp01((s.x0 - c.x0) / span) * TAU,
                _clamp01((s.x1 - c.x0) / span) * TAU,
                max(0.0, s.y0 - p.depth),
                max(0.0, s.y1 - p.depth),
            )
        )
    return tuple(out)


class Phase(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"


@dataclass
class ZoomDriver:
    """One in-flight transition, interpolating each field linearly under an easing curve."""

    focus_id: int
    origin: Frame
    target: Frame
    start: float
    duration: float
    easing: Easing = ease_cubic_in_out

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return _clamp01((now - self.start) / self.duration)

    def finished(self, now: float) -> bool:
        return self.progress(now) >= 1.0

    def frame_at(self, now: float) -> Frame:
        t = self.progress(now)
        if t >= 1.0:
            return self.target
        k = self.easing(t)
        return tuple(a.lerp(b, k) for a, b in zip(self.origin, self.target))


class ZoomController:
    """State machine owning the zoom focus and the active driver."""

    def __init__(
        self,
        tree: LayoutTree,
        config: Optional[SunburstConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        easing: Easing = ease_cubic_in_out,
    ):
        self.tree = tree
        self.config = config or SunburstConfig()
        self.clock = clock
        self.easing = easing
        self.phase = Phase.IDLE
        self.focus_id = tree.root.id
        self._driver: Optional[ZoomDriver] = None
        self._listeners: List[CompletionListener] = []

    @property
    def is_animating(self) -> bool:
        return self.phase is Phase.ANIMATING

    @property
    def driver(self) -> Optional[ZoomDriver]:
        return self._driver

    @property
    def pending_focus(self) -> int:
        """Focus the view is heading to: the driver's target while animating."""
        return self._driver.focus_id if self._driver is not None else self.focus_id

    def on_complete(self, listener: CompletionListener) -> None:
        self._listeners.append(listener)

    def zoom_out_target(self) -> int:
        focus = self.tree[self.focus_id]
        return focus.parent if focus.parent is not None else self.tree.root.id

    def can_activate(self, node_id: int) -> bool:
        node = self.tree[node_id]
        if node.is_degenerate:
            return False
        return not node.is_leaf or node_id == self.zoom_out_target()

    def activate(self, node_id: int, now: Optional[float] = None) -> bool:
        """Start zooming into `node_id`. Returns False when the request is dropped."""
        if self.is_animating:
            logger.debug("Dropping activation of node %s: transition in flight", node_id)
            return False
        if not self.can_activate(node_id):
            logger.debug("Ignoring activation of non-zoomable node %s", node_id)
            return False
        self._start(node_id, now)
        return True

    def zoom_out(self, now: Optional[float] = None) -> bool:
        """Zoom to the focus node's parent (the root when focused on the root)."""
        if self.is_animating:
            logger.debug("Dropping zoom-out: transition in flight")
            return False
        self._start(self.zoom_out_target(), now)
        return True

    def _start(self, node_id: int, now: Optional[float]) -> None:
        start = self.clock() if now is None else now
        self._driver = ZoomDriver(
            focus_id=node_id,
            origin=self.tree.frame,
            target=zoom_targets(self.tree, node_id),
            start=start,
            duration=self.config.duration_s,
            easing=self.easing,
        )
        self.tree.set_targets(self._driver.target)
        self.phase = Phase.ANIMATING
        logger.debug("Zooming to %r", self.tree[node_id].name)
        if self._driver.finished(start):
            self._complete()

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance the active driver by one frame. Returns True if a frame was published."""
        driver = self._driver
        if driver is None:
            return False
        now = self.clock() if now is None else now
        if driver.finished(now):
            self._complete()
        else:
            self.tree.publish(driver.frame_at(now))
        return True

    def _complete(self) -> None:
        driver = self._driver
        self.tree.publish(driver.target)
        self.tree.set_targets(None)
        self._driver = None
        self.phase = Phase.IDLE
        self.focus_id = driver.focus_id
        self._notify()

    def reset(self) -> None:
        """Abort any driver and snap every node to its canonical layout."""
        if self._driver is not None:
            logger.debug("Aborting transition to node %s", self._driver.focus_id)
        self._driver = None
        self.tree.publish(self.tree.canonical_frame())
        self.tree.set_targets(None)
        self.phase = Phase.IDLE
        self.focus_id = self.tree.root.id
        self._notify()

    def _notify(self) -> None:
        breadcrumb = self.tree.path(self.focus_id)
        for listener in self._listeners:
            listener(self.focus_id, breadcrumb)
