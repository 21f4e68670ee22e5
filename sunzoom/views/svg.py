"""
Sunzoom SVG engine.

Minimal SVG generation primitives plus PNG rasterization.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# Chrome palette. Wedge fills come from views.colors.
COLORS = {
    "bg": "#0e1116",
    "bg_light": "#ffffff",
    "outline": "#8a919a",
    "text": "#e6edf3",
    "text_dark": "#0f172a",
    "stroke": "#ffffff",
    "center": "#1e40af",
    "focus": "#facc15",
    "tooltip": "rgba(15, 23, 42, 0.95)",
}


@dataclass
class Style:
    fill: str = "none"
    stroke: str = "none"
    stroke_width: float = 1.0
    opacity: float = 1.0
    fill_opacity: Optional[float] = None
    font_size: int = 12
    font_family: str = "system-ui, -apple-system, sans-serif"
    font_weight: str = "normal"
    text_anchor: str = "start"
    fill_rule: Optional[str] = None
    filter: Optional[str] = None


class SVGCanvas:
    """
    Lightweight SVG generator.
    """

    def __init__(self, width: int = 900, height: int = 900, dark_mode: bool = True):
        self.width = width
        self.height = height
        self.elements: List[str] = []
        self.defs: List[str] = []
        self.bg_color = COLORS["bg"] if dark_mode else COLORS["bg_light"]
        self._open_groups = 0

        self._add_filters()

    def _add_filters(self):
        """Add drop shadow filter."""
        self.defs.append("""
        <filter id="drop-shadow" x="-20%" y="-20%" width="140%" height="140%">
            <feGaussianBlur in="SourceAlpha" stdDeviation="2"/>
            <feOffset dx="2" dy="2" result="offsetblur"/>
            <feComponentTransfer>
                <feFuncA type="linear" slope="0.3"/>
            </feComponentTransfer>
            <feMerge>
                <feMergeNode/>
                <feMergeNode in="SourceGraphic"/>
            </feMerge>
        </filter>
        """)

    def begin_group(self, transform: str | None = None, css_class: str | None = None):
        """Open a <g>; every begin_group needs a matching end_group."""
        attrs = []
        if transform:
            attrs.append(f'transform="{transform}"')
        if css_class:
            attrs.append(f'class="{html.escape(css_class, quote=True)}"')
        self.elements.append(f"<g {' '.join(attrs)}>" if attrs else "<g>")
        self._open_groups += 1

    def end_group(self):
        if self._open_groups <= 0:
            raise RuntimeError("end_group() without begin_group()")
        self.elements.append("</g>")
        self._open_groups -= 1

    def add_rect(self, x: float, y: float, w: float, h: float, rx: float = 0, style: Style | None = None):
        """Draw a rectangle."""
        attrs = self._style_to_attrs(style or Style())
        self.elements.append(f'<rect x="{x}" y="{y}" width="{w}" height="{h}" rx="{rx}" {attrs} />')

    def add_circle(self, cx: float, cy: float, r: float, style: Style | None = None, node_id: int | None = None):
        """Draw a circle."""
        attrs = self._style_to_attrs(style or Style())
        data = f' data-node="{node_id}"' if node_id is not None else ""
        self.elements.append(f'<circle cx="{cx}" cy="{cy}" r="{r}" {attrs}{data} />')

    def add_text(
        self,
        x: float,
        y: float,
        text: str,
        style: Style | None = None,
        transform: str | None = None,
        dy: str | None = None,
    ):
        """Draw text."""
        s = style or Style()
        attrs = self._style_to_attrs(s)
        extra = ""
        if transform:
            extra += f' transform="{transform}"'
        if dy:
            extra += f' dy="{dy}"'
        escaped_text = html.escape(str(text))
        self.elements.append(f'<text x="{x}" y="{y}" {attrs}{extra}>{escaped_text}</text>')

    def add_text_lines(
        self,
        x: float,
        y: float,
        lines: List[str],
        style: Style | None = None,
        line_height: Optional[float] = None,
    ):
        """Draw multiline text using tspans (SVG does not render \n in <text>)."""
        if not lines:
            return
        s = style or Style()
        attrs = self._style_to_attrs(s)
        lh = line_height if line_height is not None else (s.font_size * 1.25)
        tspans = []
        for i, line in enumerate(lines):
            dy = 0 if i == 0 else lh
            tspans.append(f'<tspan x="{x}" dy="{dy}">{html.escape(str(line))}</tspan>')
        inner = "".join(tspans)
        self.elements.append(f'<text x="{x}" y="{y}" {attrs}>{inner}</text>')

    def add_path(self, d: str, style: Style | None = None, node_id: int | None = None):
        """Draw a path, optionally tagged with the node it represents."""
        if not d:
            return
        attrs = self._style_to_attrs(style or Style())
        extra = f' data-node="{node_id}"' if node_id is not None else ""
        self.elements.append(f'<path d="{d}" {attrs}{extra} />')

    def _style_to_attrs(self, style: Style) -> str:
        """Convert Style object to SVG attributes string."""
        attrs = [
            f'fill="{style.fill}"',
            f'stroke="{style.stroke}"',
            f'stroke-width="{style.stroke_width}"',
            f'opacity="{style.opacity}"',
            f'font-family="{style.font_family}"',
            f'font-size="{style.font_size}px"',
            f'font-weight="{style.font_weight}"',
            f'text-anchor="{style.text_anchor}"',
        ]
        if style.fill_opacity is not None:
            attrs.append(f'fill-opacity="{style.fill_opacity}"')
        if style.fill_rule:
            attrs.append(f'fill-rule="{style.fill_rule}"')
        if style.filter:
            attrs.append(f'filter="url(#{style.filter})"')

        return " ".join(attrs)

    def render(self) -> str:
        """Generate full SVG string."""
        if self._open_groups:
            raise RuntimeError(f"{self._open_groups} unclosed group(s)")
        defs_block = f"<defs>{''.join(self.defs)}</defs>" if self.defs else ""
        content = "\n".join(self.elements)

        return f"""<?xml version="1.0" encoding="UTF-8" standalone="no"?>
<svg width="{self.width}" height="{self.height}" viewBox="0 0 {self.width} {self.height}"
     xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">
    <rect width="100%" height="100%" fill="{self.bg_color}" />
    {defs_block}
    {content}
</svg>"""


# --- Rasterization helpers ---


def svg_string_to_png_bytes(svg: str) -> bytes:
    """Convert an SVG string to PNG bytes."""
    # cairosvg loads the native cairo library at import time.
    import cairosvg

    return cairosvg.svg2png(bytestring=svg.encode("utf-8"))


def save_png(svg: str, png_path: str | Path) -> bytes:
    """Save SVG-rendered content to a PNG on disk and return the bytes."""
    out_path = Path(png_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    png_bytes = svg_string_to_png_bytes(svg)
    out_path.write_bytes(png_bytes)
    return png_bytes
