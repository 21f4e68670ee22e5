"""Tooltip overlay owned by a single sunburst instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core.models import LayoutNode

ZOOM_IN_HINT = "Click to zoom in"
ZOOM_OUT_HINT = "Click to zoom out"


@dataclass
class TooltipOverlay:
    visible: bool = False
    lines: List[str] = field(default_factory=list)
    position: Tuple[float, float] = (0.0, 0.0)

    def show(self, lines: List[str], position: Tuple[float, float]) -> None:
        self.lines = list(lines)
        self.position = position
        self.visible = bool(self.lines)

    def hide(self) -> None:
        self.visible = False
        self.lines = []


def _number(v) -> Optional[str]:
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f"{int(f):,}" if f.is_integer() else f"{f:,.2f}"


def tooltip_lines(node: LayoutNode, *, zoomable: bool) -> List[str]:
    data = node.node
    lines = [data.name, f"Type: {data.kind.value.replace('-', ' ')}", f"Count: {_number(node.value) or 0}"]
    population = _number(data.details.get("population"))
    if population:
        lines.append(f"Population: {population}")
    lpcd = _number(data.details.get("lpcd"))
    if lpcd:
        lines.append(f"LPCD: {lpcd}")
    if data.status is not None:
        lines.append(f"Status: {data.status.value}")
    if zoomable:
        lines.append(ZOOM_IN_HINT)
    return lines
