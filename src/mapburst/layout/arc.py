"""
Arc Geometry.

Pure functions turning a partitioned node plus the current scales into an
annular sector, and a sector into SVG path data. Kept free of any drawing
surface so the math can be tested on its own.
"""

import math
from dataclasses import dataclass, field
from typing import List

from ..config import PAD_ANGLE
from .partition import PartitionedNode
from .scale import LinearScale, SqrtScale

TAU = 2 * math.pi
HALF_PI = math.pi / 2
EPSILON = 1e-12


@dataclass
class Scales:
    """
    Current zoom state: normalized angle -> radians, normalized depth -> px.

    The radial scale is square-root so ring area tracks normalized depth.
    """
    x: LinearScale
    y: SqrtScale

    @classmethod
    def for_radius(cls, radius: float) -> "Scales":
        return cls(
            x=LinearScale(range_=(0.0, TAU)),
            y=SqrtScale(range_=(0.0, radius)),
        )


@dataclass(frozen=True)
class ArcGeometry:
    """An annular sector; angles in radians clockwise from 12 o'clock."""
    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float
    pad_angle: float = 0.0

    @property
    def angle(self) -> float:
        return abs(self.end_angle - self.start_angle)


def _clamp_angle(angle: float) -> float:
    return max(0.0, min(TAU, angle))


def compute_arc(node: PartitionedNode, scales: Scales, pad_angle: float = PAD_ANGLE) -> ArcGeometry:
    """
    Project a node through the scales.

    The outer radius is pulled in by one pixel to leave a visible separator
    between rings.
    """
    return ArcGeometry(
        start_angle=_clamp_angle(scales.x(node.x0)),
        end_angle=_clamp_angle(scales.x(node.x1)),
        inner_radius=max(0.0, scales.y(node.y0)),
        outer_radius=max(0.0, scales.y(node.y1) - 1),
        pad_angle=pad_angle,
    )


def _num(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _asin(value: float) -> float:
    if value >= 1:
        return HALF_PI
    if value <= -1:
        return -HALF_PI
    return math.asin(value)


@dataclass
class _Path:
    parts: List[str] = field(default_factory=list)
    started: bool = False
    last: tuple = (0.0, 0.0)

    def move_to(self, x: float, y: float) -> None:
        self.parts.append(f"M{_num(x)},{_num(y)}")
        self.started = True
        self.last = (x, y)

    def line_to(self, x: float, y: float) -> None:
        self.parts.append(f"L{_num(x)},{_num(y)}")
        self.last = (x, y)

    def arc(self, r: float, a0: float, a1: float, ccw: bool) -> None:
        dx, dy = r * math.cos(a0), r * math.sin(a0)
        sweep = 0 if ccw else 1
        da = a0 - a1 if ccw else a1 - a0

        if not self.started:
            self.move_to(dx, dy)
        elif abs(self.last[0] - dx) > EPSILON or abs(self.last[1] - dy) > EPSILON:
            self.line_to(dx, dy)

        if not r:
            return
        if da < 0:
            da = da % TAU + TAU
        if da > TAU - EPSILON:
            # Full circle: two half arcs through the opposite point
            self.parts.append(f"A{_num(r)},{_num(r)},0,1,{sweep},{_num(-dx)},{_num(-dy)}")
            self.parts.append(f"A{_num(r)},{_num(r)},0,1,{sweep},{_num(dx)},{_num(dy)}")
            self.last = (dx, dy)
        elif da > EPSILON:
            x1, y1 = r * math.cos(a1), r * math.sin(a1)
            large = 1 if da >= math.pi else 0
            self.parts.append(f"A{_num(r)},{_num(r)},0,{large},{sweep},{_num(x1)},{_num(y1)}")
            self.last = (x1, y1)

    def close(self) -> str:
        self.parts.append("Z")
        return "".join(self.parts)


def arc_path(geometry: ArcGeometry) -> str:
    """
    SVG path data for a sector centred on the origin.

    Padding is applied as a constant linear gap between neighbours; a
    sector narrower than its padding collapses to its mid angle.
    """
    r0, r1 = geometry.inner_radius, geometry.outer_radius
    if r1 < r0:
        r0, r1 = r1, r0
    a0 = geometry.start_angle - HALF_PI
    a1 = geometry.end_angle - HALF_PI
    da = abs(a1 - a0)
    cw = a1 > a0
    path = _Path()

    if not r1 > EPSILON:
        path.move_to(0, 0)
        return path.close()

    if da > TAU - EPSILON:
        path.move_to(r1 * math.cos(a0), r1 * math.sin(a0))
        path.arc(r1, a0, a1, not cw)
        if r0 > EPSILON:
            path.move_to(r0 * math.cos(a1), r0 * math.sin(a1))
            path.arc(r0, a1, a0, cw)
        return path.close()

    a00, a01, a10, a11 = a0, a0, a1, a1
    da0 = da1 = da
    ap = geometry.pad_angle / 2
    rp = math.sqrt(r0 * r0 + r1 * r1) if ap > EPSILON else 0.0

    if rp > EPSILON:
        direction = 1 if cw else -1
        p0 = _asin(rp / r0 * math.sin(ap)) if r0 > EPSILON else HALF_PI
        p1 = _asin(rp / r1 * math.sin(ap))
        da0 -= p0 * 2
        if da0 > EPSILON:
            a00 += p0 * direction
            a10 -= p0 * direction
        else:
            da0 = 0.0
            a00 = a10 = (a0 + a1) / 2
        da1 -= p1 * 2
        if da1 > EPSILON:
            a01 += p1 * direction
            a11 -= p1 * direction
        else:
            da1 = 0.0
            a01 = a11 = (a0 + a1) / 2

    path.move_to(r1 * math.cos(a01), r1 * math.sin(a01))
    if da1 > EPSILON:
        path.arc(r1, a01, a11, not cw)

    if not r0 > EPSILON or not da0 > EPSILON:
        path.line_to(r0 * math.cos(a10), r0 * math.sin(a10))
    else:
        path.arc(r0, a10, a00, cw)

    return path.close()
