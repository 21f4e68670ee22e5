from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from ..config import SunburstConfig
from ..core.models import TAU, ArcState
from ..core.partition import LayoutTree

Point = Tuple[float, float]

CENTER = "center"

_FULL_CIRCLE_EPS = 1e-6


@dataclass(frozen=True)
class Wedge:
    """Concrete annular wedge in viewport-relative polar coordinates."""

    inner: float
    outer: float
    start: float
    end: float

    @property
    def mid_angle(self) -> float:
        return (self.start + self.end) / 2

    @property
    def mid_radius(self) -> float:
        return (self.inner + self.outer) / 2


class ArcGeometry:
    """Maps ring/angle states onto pixel wedges.

    `height` is the tree height H; radial spans are scaled by R / H and
    anything reaching past ring H is hidden, so the deepest ring only shows
    once zoomed. A root-only tree (H = 0) collapses onto the center hole.
    """

    def __init__(self, config: SunburstConfig, height: int):
        self.config = config
        self.height = height
        self.radius = config.radius
        self._scale = self.radius / height if height > 0 else 0.0

    def inner_radius(self, s: ArcState) -> float:
        return max(self.config.center_radius, s.y0 * self._scale)

    def outer_radius(self, s: ArcState) -> float:
        return max(self.config.center_radius, s.y1 * self._scale - self.config.stroke_gap)

    def wedge(self, s: ArcState) -> Wedge:
        return Wedge(self.inner_radius(s), self.outer_radius(s), s.x0, s.x1)

    def arc_visible(self, s: ArcState) -> bool:
        return s.y1 <= self.height and s.y0 >= 0 and s.x1 > s.x0

    def label_visible(self, s: ArcState) -> bool:
        return self.arc_visible(s) and (s.x1 - s.x0) > self.config.label_angle_threshold

    def label_anchor(self, s: ArcState) -> Point:
        """Wedge centroid in viewport-relative coordinates (y grows downward)."""
        w = self.wedge(s)
        return polar_to_xy(w.mid_angle, w.mid_radius)

    def label_transform(self, s: ArcState) -> str:
        """SVG transform placing a label at the wedge centroid, reading left to right."""
        w = self.wedge(s)
        deg = math.degrees(w.mid_angle)
        r = w.mid_radius
        flip = 0 if deg < 180 else 180
        return f"rotate({_fmt(deg - 90)}) translate({_fmt(r)},0) rotate({flip})"

    def arc_length(self, s: ArcState) -> float:
        return (s.x1 - s.x0) * self.radius

    def path(self, s: ArcState) -> str:
        return arc_path(self.wedge(s), pad_angle=self.config.pad_angle)


def polar_to_xy(angle: float, r: float) -> Point:
    """Angle measured clockwise from 12 o'clock."""
    return r * math.sin(angle), -r * math.cos(angle)


def xy_to_polar(x: float, y: float) -> Tuple[float, float]:
    """Inverse of `polar_to_xy`; angle normalised to [0, 2π)."""
    angle = math.atan2(x, -y)
    if angle < 0:
        angle += TAU
    return angle, math.hypot(x, y)


def _fmt(v: float) -> str:
    return f"{v:.3f}".rstrip("0").rstrip(".") if v != 0 else "0"


def _pad(r: float, pad_radius: float, pad_angle: float) -> float:
    if r <= 0 or pad_angle <= 0:
        return 0.0
    return math.asin(min(1.0, pad_radius * pad_angle / 2 / r))


def arc_path(w: Wedge, *, pad_angle: float = 0.0) -> str:
    """SVG path data for an annular wedge.

    Padding is applied here only, so it never disturbs proportional layout.
    The pad is a constant linear gap, as in d3's arc generator.
    """
    r0, r1 = min(w.inner, w.outer), max(w.inner, w.outer)
    da = w.end - w.start
    if r1 <= 0 or da <= 0:
        return ""

    if da >= TAU - _FULL_CIRCLE_EPS:
        return _annulus_path(r0, r1)

    pad_radius = math.sqrt(r0 * r0 + r1 * r1)
    a00, a01 = _inset(w.start, w.end, _pad(r0, pad_radius, pad_angle))
    a10, a11 = _inset(w.start, w.end, _pad(r1, pad_radius, pad_angle))

    large_outer = 1 if a11 - a10 > math.pi else 0
    x, y = polar_to_xy(a10, r1)
    d = [f"M{_fmt(x)},{_fmt(y)}"]
    x, y = polar_to_xy(a11, r1)
    d.append(f"A{_fmt(r1)},{_fmt(r1)},0,{large_outer},1,{_fmt(x)},{_fmt(y)}")
    if r0 > 0:
        large_inner = 1 if a01 - a00 > math.pi else 0
        x, y = polar_to_xy(a01, r0)
        d.append(f"L{_fmt(x)},{_fmt(y)}")
        x, y = polar_to_xy(a00, r0)
        d.append(f"A{_fmt(r0)},{_fmt(r0)},0,{large_inner},0,{_fmt(x)},{_fmt(y)}")
    else:
        d.append("L0,0")
    d.append("Z")
    return "".join(d)


def _inset(start: float, end: float, pad: float) -> Tuple[float, float]:
    if end - start > 2 * pad:
        return start + pad, end - pad
    mid = (start + end) / 2
    return mid, mid


def _annulus_path(r0: float, r1: float) -> str:
    d = [
        f"M0,{_fmt(-r1)}",
        f"A{_fmt(r1)},{_fmt(r1)},0,1,1,0,{_fmt(r1)}",
        f"A{_fmt(r1)},{_fmt(r1)},0,1,1,0,{_fmt(-r1)}",
    ]
    if r0 > 0:
        d += [
            f"M0,{_fmt(-r0)}",
            f"A{_fmt(r0)},{_fmt(r0)},0,1,0,0,{_fmt(r0)}",
            f"A{_fmt(r0)},{_fmt(r0)},0,1,0,0,{_fmt(-r0)}",
        ]
    d.append("Z")
    return "".join(d)


def hit_test(
    tree: LayoutTree,
    geometry: ArcGeometry,
    x: float,
    y: float,
    *,
    states: Optional[Sequence[ArcState]] = None,
) -> Union[int, str, None]:
    """Resolve a viewport point to a node id, the center hole, or nothing.

    Only arc-visible, non-degenerate, non-root wedges receive pointer events.
    """
    cx, cy = geometry.config.center
    angle, r = xy_to_polar(x - cx, y - cy)
    if r <= geometry.config.center_radius:
        return CENTER

    frame = states if states is not None else tree.frame
    for node in tree.nodes[1:]:
        s = frame[node.id]
        if node.is_degenerate or not geometry.arc_visible(s):
            continue
        if s.x0 <= angle < s.x1 and geometry.inner_radius(s) <= r < geometry.outer_radius(s):
            return node.id
    return None
