"""Views: SVG rendering of sunburst frames."""

from .colors import node_color
from .geometry import CENTER, ArcGeometry, arc_path, hit_test
from .overlay import TooltipOverlay, tooltip_lines
from .sunburst import SunburstView
from .svg import SVGCanvas, Style, save_png

__all__ = [
    "node_color",
    "CENTER",
    "ArcGeometry",
    "arc_path",
    "hit_test",
    "TooltipOverlay",
    "tooltip_lines",
    "SunburstView",
    "SVGCanvas",
    "Style",
    "save_png",
]
