"""Segment clipping against an axis-aligned window.

Two classic algorithms, Cohen-Sutherland (region outcodes) and
Cyrus-Beck (parametric half-planes).  Both take a ``Segment`` and a
``ClipWindow`` and return a new ``Segment`` or ``None`` when nothing
of the segment is visible.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rastergeom.geom import EPSILON, ClipWindow, Point

## outcode bits
INSIDE = 0
LEFT = 1
RIGHT = 2
BOTTOM = 4
TOP = 8


@dataclass(frozen=True)
class Segment:
    x1: float
    y1: float
    x2: float
    y2: float

    @classmethod
    def from_points(cls, p1, p2) -> "Segment":
        return cls(p1.x, p1.y, p2.x, p2.y)

    @property
    def start(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def end(self) -> Point:
        return Point(self.x2, self.y2)


def outcode(x, y, window: ClipWindow) -> int:
    """Region code of ``(x, y)``: ``INSIDE`` or an OR of ``LEFT``,
    ``RIGHT``, ``BOTTOM`` and ``TOP``"""
    code = INSIDE
    if x < window.x_min:
        code |= LEFT
    elif x > window.x_max:
        code |= RIGHT
    if y < window.y_min:
        code |= BOTTOM
    elif y > window.y_max:
        code |= TOP
    return code


def cohen_sutherland_clip(seg: Segment, window: ClipWindow) -> Optional[Segment]:
    """Cohen-Sutherland clipping.

    Accept when both outcodes are zero, reject when they share a bit,
    otherwise move the outside endpoint onto the boundary it violates
    (top, then bottom, right, left) and try again.
    """
    x1, y1, x2, y2 = seg.x1, seg.y1, seg.x2, seg.y2
    code1 = outcode(x1, y1, window)
    code2 = outcode(x2, y2, window)

    while True:
        if not (code1 | code2):
            return Segment(x1, y1, x2, y2)
        if code1 & code2:
            return None

        out = code1 if code1 != INSIDE else code2
        if out & TOP:
            x = x1 + (x2 - x1) * (window.y_max - y1) / (y2 - y1)
            y = window.y_max
        elif out & BOTTOM:
            x = x1 + (x2 - x1) * (window.y_min - y1) / (y2 - y1)
            y = window.y_min
        elif out & RIGHT:
            y = y1 + (y2 - y1) * (window.x_max - x1) / (x2 - x1)
            x = window.x_max
        else:
            y = y1 + (y2 - y1) * (window.x_min - x1) / (x2 - x1)
            x = window.x_min

        if out == code1:
            x1, y1 = x, y
            code1 = outcode(x1, y1, window)
        else:
            x2, y2 = x, y
            code2 = outcode(x2, y2, window)


def cyrus_beck_clip(seg: Segment, window: ClipWindow) -> Optional[Segment]:
    """Cyrus-Beck clipping against the window's four inward-facing
    half-planes"""
    dx = seg.x2 - seg.x1
    dy = seg.y2 - seg.y1

    ## (inward normal, point on the boundary)
    planes = (
        ((1, 0), (window.x_min, seg.y1)),
        ((-1, 0), (window.x_max, seg.y1)),
        ((0, 1), (seg.x1, window.y_min)),
        ((0, -1), (seg.x1, window.y_max)),
    )

    t_enter = 0.0
    t_exit = 1.0
    for (nx, ny), (px, py) in planes:
        d_dot_n = dx * nx + dy * ny
        w_dot_n = (px - seg.x1) * nx + (py - seg.y1) * ny
        if abs(d_dot_n) < EPSILON:
            ## parallel: start point outside means the whole segment is
            if w_dot_n > 0:
                return None
            continue
        t = w_dot_n / d_dot_n
        if d_dot_n < 0:
            t_exit = min(t_exit, t)
        else:
            t_enter = max(t_enter, t)

    if t_enter > t_exit:
        return None
    if t_enter == 0 and t_exit == 1:
        return Segment(seg.x1, seg.y1, seg.x2, seg.y2)
    return Segment(seg.x1 + t_enter * dx, seg.y1 + t_enter * dy,
                   seg.x1 + t_exit * dx, seg.y1 + t_exit * dy)


__all__ = [
    'INSIDE',
    'LEFT',
    'RIGHT',
    'BOTTOM',
    'TOP',
    'Segment',
    'outcode',
    'cohen_sutherland_clip',
    'cyrus_beck_clip',
]
