"""Sunburst View - one frame of the zoomable radial partition."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..config import SunburstConfig
from ..core.models import ArcState, Category, LayoutNode, NodeKind
from ..core.partition import LayoutTree
from .colors import node_color
from .geometry import ArcGeometry
from .overlay import TooltipOverlay
from .svg import COLORS, Style, SVGCanvas


class SunburstView:
    def __init__(self, tree: LayoutTree, config: SunburstConfig, geometry: Optional[ArcGeometry] = None):
        self.tree = tree
        self.config = config
        self.geometry = geometry or ArcGeometry(config, tree.height)

    def end_state(self, node_id: int) -> ArcState:
        """State a wedge is heading to; visibility is decided on this, not per frame."""
        target = self.tree.target(node_id)
        return target if target is not None else self.tree.current(node_id)

    def label_text(self, node: LayoutNode, s: ArcState) -> str:
        cfg = self.config
        if node.kind is NodeKind.LPCD_CATEGORY:
            mark = ">" if node.node.category is Category.ABOVE_LPCD else "<"
            return f"{node.node.weight:g} ({mark}{cfg.lpcd_threshold:g})"
        if self.geometry.arc_length(s) <= cfg.label_min_space:
            return ""
        name = node.name
        if len(name) > cfg.label_max_chars:
            return name[: cfg.label_truncate_to] + "..."
        return name

    def label_font(self, node: LayoutNode, s: ArcState) -> Tuple[int, str]:
        arc = self.geometry.arc_length(s)
        depth = node.depth
        if arc > 80:
            size = max(10, 14 - depth)
        elif arc > 50:
            size = max(8, 12 - depth)
        else:
            size = max(7, 10 - depth)
        return size, "bold" if depth <= 1 else "600"

    def visible_nodes(self) -> List[LayoutNode]:
        """Non-root nodes whose end state is drawable."""
        return [
            n
            for n in self.tree.nodes[1:]
            if not n.is_degenerate and self.geometry.arc_visible(self.end_state(n.id))
        ]

    def render(
        self,
        *,
        breadcrumb: Sequence[str] = (),
        focus_label: Optional[str] = None,
        overlay: Optional[TooltipOverlay] = None,
        hovered: Optional[int] = None,
    ) -> str:
        """Render the current frame."""
        cfg = self.config
        tree = self.tree
        animating = tree.targets is not None
        canvas = SVGCanvas(width=cfg.width, height=cfg.height, dark_mode=cfg.dark_mode)
        text_color = COLORS["text"] if cfg.dark_mode else COLORS["text_dark"]

        if breadcrumb:
            canvas.add_text(
                16,
                26,
                "  >  ".join(breadcrumb),
                style=Style(fill=text_color, font_size=14, font_weight="bold"),
            )
        if animating:
            canvas.add_text(
                cfg.width - 16,
                26,
                "Zooming...",
                style=Style(fill=COLORS["focus"], font_size=12, font_weight="bold", text_anchor="end"),
            )

        cx, cy = cfg.center
        canvas.begin_group(transform=f"translate({cx},{cy})")

        nodes = self.visible_nodes()
        canvas.begin_group(css_class="wedges")
        for node in nodes:
            s = tree.current(node.id)
            canvas.add_path(
                self.geometry.path(s),
                style=Style(
                    fill=node_color(node.node),
                    fill_opacity=1.0 if node.id == hovered else cfg.fill_opacity,
                    stroke=COLORS["stroke"],
                    stroke_width=2.5 if node.id == hovered else 1.5,
                    fill_rule="evenodd",
                ),
                node_id=node.id,
            )
        canvas.end_group()

        canvas.begin_group(css_class="labels")
        for node in nodes:
            end = self.end_state(node.id)
            if not self.geometry.label_visible(end):
                continue
            text = self.label_text(node, end)
            if not text:
                continue
            size, weight = self.label_font(node, end)
            canvas.add_text(
                0,
                0,
                text,
                style=Style(fill="#ffffff", font_size=size, font_weight=weight, text_anchor="middle"),
                transform=self.geometry.label_transform(tree.current(node.id)),
                dy="0.35em",
            )
        canvas.end_group()

        canvas.add_circle(
            0,
            0,
            cfg.center_radius,
            style=Style(fill=COLORS["center"], stroke=COLORS["stroke"], stroke_width=3, opacity=0.9),
            node_id=tree.root.id,
        )
        label = focus_label if focus_label is not None else tree.root.name
        canvas.add_text(
            0,
            0,
            label[: cfg.label_max_chars],
            style=Style(fill="#ffffff", font_size=14, font_weight="bold", text_anchor="middle"),
            dy="0.35em",
        )
        canvas.end_group()

        if overlay is not None and overlay.visible:
            self._draw_tooltip(canvas, overlay)

        return canvas.render()

    def _draw_tooltip(self, canvas: SVGCanvas, overlay: TooltipOverlay) -> None:
        cfg = self.config
        font = 13
        line_h = font * 1.35
        w = max(len(line) for line in overlay.lines) * font * 0.6 + 32
        h = len(overlay.lines) * line_h + 20
        x = min(max(0.0, overlay.position[0] + 10), cfg.width - w)
        y = min(max(0.0, overlay.position[1] - 10), cfg.height - h)
        canvas.add_rect(
            x, y, w, h, rx=8, style=Style(fill=COLORS["tooltip"], stroke=COLORS["outline"], filter="drop-shadow")
        )
        title, *rest = overlay.lines
        canvas.add_text(x + 16, y + 10 + font, title, style=Style(fill="#ffffff", font_size=14, font_weight="bold"))
        if rest:
            canvas.add_text_lines(
                x + 16, y + 10 + font + line_h, rest, style=Style(fill=COLORS["text"], font_size=font), line_height=line_h
            )
