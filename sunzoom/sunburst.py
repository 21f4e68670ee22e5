"""
Sunburst: the zoomable radial partition as one object.

Wires hierarchy → partition → zoom controller → navigation shell → view,
and owns the tooltip overlay for as long as the instance is mounted.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Union

from .config import SunburstConfig
from .core.hierarchy import HierarchyBuilder, Record, load_dataset
from .core.models import HierarchyNode, LayoutNode
from .core.navigation import FocusListener, HoverListener, NavigationShell
from .core.partition import LayoutTree, partition
from .core.transition import ZoomController
from .views.geometry import ArcGeometry
from .views.overlay import TooltipOverlay
from .views.sunburst import SunburstView
from .views.svg import save_png

NodeRef = Union[int, str, Sequence[str]]


class Sunburst:
    def __init__(
        self,
        root: HierarchyNode,
        config: Optional[SunburstConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or SunburstConfig()
        self.clock = clock
        self.overlay: Optional[TooltipOverlay] = None
        self._focus_listeners: List[FocusListener] = []
        self._hover_listeners: List[HoverListener] = []
        self._build(root)
        self.mount()

    @classmethod
    def from_records(
        cls,
        regions: Iterable[Record],
        schemes: Iterable[Record],
        villages: Iterable[Record],
        config: Optional[SunburstConfig] = None,
        *,
        rings: bool = False,
        **kwargs: Any,
    ) -> "Sunburst":
        builder = HierarchyBuilder(config)
        build = builder.build_status_rings if rings else builder.build
        return cls(build(regions, schemes, villages), config, **kwargs)

    @classmethod
    def from_dataset(cls, data: Any, config: Optional[SunburstConfig] = None, *, rings: bool = False, **kwargs: Any):
        return cls(load_dataset(data, config, rings=rings), config, **kwargs)

    def _build(self, root: HierarchyNode) -> None:
        self.root = root
        self.tree: LayoutTree = partition(root)
        self.geometry = ArcGeometry(self.config, self.tree.height)
        self.controller = ZoomController(self.tree, self.config, clock=self.clock)
        self.shell = NavigationShell(self.controller, self.geometry, self.overlay)
        self.view = SunburstView(self.tree, self.config, self.geometry)
        for listener in self._focus_listeners:
            self.shell.on_focus(listener)
        for listener in self._hover_listeners:
            self.shell.on_hover(listener)

    # --- lifecycle ---

    def mount(self) -> None:
        if self.overlay is None:
            self.overlay = TooltipOverlay()
        self.shell.overlay = self.overlay

    def unmount(self) -> None:
        if self.overlay is not None:
            self.overlay.hide()
        self.overlay = None
        self.shell.overlay = None

    def __enter__(self) -> "Sunburst":
        self.mount()
        return self

    def __exit__(self, *exc) -> None:
        self.unmount()

    def refresh(self, root: HierarchyNode) -> None:
        """Replace the dataset; any in-flight transition is discarded."""
        if self.overlay is not None:
            self.overlay.hide()
        self._build(root)

    # --- events ---

    def on_focus(self, listener: FocusListener) -> None:
        self._focus_listeners.append(listener)
        self.shell.on_focus(listener)

    def on_hover(self, listener: HoverListener) -> None:
        self._hover_listeners.append(listener)
        self.shell.on_hover(listener)

    # --- state ---

    @property
    def breadcrumb(self) -> List[str]:
        return list(self.shell.breadcrumb)

    @property
    def focus(self) -> LayoutNode:
        return self.shell.focus

    @property
    def is_animating(self) -> bool:
        return self.shell.is_animating

    def node_id(self, ref: NodeRef) -> int:
        """Resolve an id, a `/`-separated name path, or a name sequence below the root."""
        if isinstance(ref, int):
            return self.tree[ref].id
        if isinstance(ref, str):
            ref = [p for p in ref.split("/") if p]
        return self.tree.find(list(ref))

    # --- interaction ---

    def click(self, ref: NodeRef, now: Optional[float] = None) -> bool:
        return self.shell.click(self.node_id(ref), now)

    def click_center(self, now: Optional[float] = None) -> bool:
        return self.shell.click_center(now)

    def click_at(self, x: float, y: float, now: Optional[float] = None) -> bool:
        return self.shell.click_at(x, y, now)

    def hover_at(self, x: float, y: float) -> bool:
        return self.shell.hover_at(x, y)

    def navigate_to(self, index: int, now: Optional[float] = None) -> bool:
        return self.shell.navigate_to(index, now)

    def reset(self) -> None:
        self.shell.reset()

    def tick(self, now: Optional[float] = None) -> bool:
        return self.controller.tick(now)

    def settle(self) -> None:
        """Run the in-flight transition to its end state."""
        driver = self.controller.driver
        if driver is not None:
            self.controller.tick(driver.start + driver.duration)

    def frame_times(self, fps: Optional[int] = None, *, count: Optional[int] = None) -> List[float]:
        """Timestamps sampling the in-flight transition, ending on its completion.

        `count` overrides the frame budget otherwise derived from `fps`.
        """
        driver = self.controller.driver
        if driver is None:
            return []
        if count is None:
            count = round(driver.duration * (fps or self.config.frame_rate))
        count = max(1, count)
        return [driver.start + driver.duration * (i + 1) / count for i in range(count)]

    def frames(self, fps: Optional[int] = None, *, count: Optional[int] = None) -> Iterator[str]:
        """Render every frame of the in-flight transition."""
        for t in self.frame_times(fps, count=count):
            self.controller.tick(t)
            yield self.render()

    def zoom_path(self, ref: NodeRef) -> List[str]:
        """Click down a name path one level at a time, settling each transition."""
        names = [p for p in ref.split("/") if p] if isinstance(ref, str) else list(ref)
        for i in range(1, len(names) + 1):
            if self.click(names[:i]):
                self.settle()
        return self.breadcrumb

    # --- output ---

    def render(self, output_path: Union[str, Path, None] = None) -> str:
        focus = self.tree[self.controller.pending_focus]
        svg = self.view.render(
            breadcrumb=self.shell.breadcrumb,
            focus_label=focus.name,
            overlay=self.overlay,
            hovered=self.shell.hovered if isinstance(self.shell.hovered, int) else None,
        )
        if output_path is not None:
            path = Path(output_path)
            if path.suffix.lower() == ".png":
                save_png(svg, path)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(svg, encoding="utf-8")
        return svg
