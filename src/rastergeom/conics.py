## second-order curve rasterizers for rastergeom
## Copyright (c) 2020 Richard W. DeVaul
## Copyright (c) 2026 rastergeom contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Second-order curve rasterizers.

Circles use the integer Bresenham decision variable with eight-way
symmetry, ellipses the two-region midpoint algorithm with four-way
symmetry, and parabolas and hyperbolas are evaluated analytically along
whichever axis keeps the branch connected.

Every rasterizer has a ``_steps`` twin emitting ``StepInfo`` records with
the decision value and the kind of move (``H``, ``V`` or ``D``).  Taken
in order and stripped of metadata, the trace equals the plain output.
"""

from __future__ import annotations

from math import floor, sqrt
from typing import List

from rastergeom.geom import Point, StepInfo, iround

## parabola arms are never generated wider than this
PARABOLA_MAX_X = 400


def _octants(cx, cy, x, y):
    return [(cx + x, cy + y), (cx - x, cy + y),
            (cx + x, cy - y), (cx - x, cy - y),
            (cx + y, cy + x), (cx - y, cy + x),
            (cx + y, cy - x), (cx - y, cy - x)]


def _quadrants(cx, cy, x, y):
    return [(cx + x, cy + y), (cx - x, cy + y),
            (cx + x, cy - y), (cx - x, cy - y)]


def _emit(trace, coords, delta, kind):
    for x, y in coords:
        trace.append(StepInfo(x, y, delta_i=delta, step_kind=kind))


## circle
## ------

def circle_bresenham_steps(cx: int, cy: int, radius: int) -> List[StepInfo]:
    """Bresenham circle trace.

    Starts at ``(0, R)`` with ``delta = 2(1 - R)`` and walks one octant
    while ``x <= y``, choosing the horizontal, vertical or diagonal
    neighbour from the sign of ``delta`` and of the auxiliary difference
    between the two candidate errors.  The step kind recorded with each
    octant of points is the move chosen from that position.
    """
    radius = abs(radius)
    x = 0
    y = radius
    delta = 2 * (1 - radius)
    trace: List[StepInfo] = []

    while x <= y:
        if delta < 0:
            kind = 'H' if 2 * delta + 2 * y - 1 <= 0 else 'D'
        elif delta > 0:
            kind = 'D' if 2 * delta - 2 * x - 1 <= 0 else 'V'
        else:
            kind = 'D'

        _emit(trace, _octants(cx, cy, x, y), delta, kind)

        if kind == 'H':
            x += 1
            delta += 2 * x + 1
        elif kind == 'V':
            y -= 1
            delta += -2 * y + 1
        else:
            x += 1
            y -= 1
            delta += 2 * x - 2 * y + 2

    return trace


def circle_bresenham(cx: int, cy: int, radius: int) -> List[Point]:
    """Bresenham circle; eight symmetric points per octant step"""
    return [s.plain() for s in circle_bresenham_steps(cx, cy, radius)]


## ellipse
## -------

def ellipse_midpoint_steps(cx: int, cy: int, a: int, b: int) -> List[StepInfo]:
    """Midpoint ellipse trace.

    Region 1 walks x while the tangent is flatter than 45 degrees
    (``dx < dy``) and region 2 walks y down to zero.  Region 1 steps are
    ``H`` or ``D``, region 2 steps ``V`` or ``D``.  Equal semi-axes fall
    back to the circle.
    """
    a = abs(a)
    b = abs(b)
    if a == b:
        return circle_bresenham_steps(cx, cy, a)

    trace: List[StepInfo] = []
    x = 0
    y = b
    a2 = a * a
    b2 = b * b

    dx = 2 * b2 * x
    dy = 2 * a2 * y
    d1 = floor(b2 - a2 * b + a2 / 4)
    while dx < dy:
        kind = 'H' if d1 < 0 else 'D'
        _emit(trace, _quadrants(cx, cy, x, y), d1, kind)
        if d1 < 0:
            x += 1
            dx += 2 * b2
            d1 += dx + b2
        else:
            x += 1
            y -= 1
            dx += 2 * b2
            dy -= 2 * a2
            d1 += dx - dy + b2

    d2 = floor(b2 * (x * x + x + 0.25) + a2 * (y * y - 2 * y + 1) - a2 * b2)
    while y >= 0:
        kind = 'V' if d2 > 0 else 'D'
        _emit(trace, _quadrants(cx, cy, x, y), d2, kind)
        if d2 > 0:
            y -= 1
            dy -= 2 * a2
            d2 += a2 - dy
        else:
            x += 1
            dx += 2 * b2
            y -= 1
            dy -= 2 * a2
            d2 += dx - dy + a2

    return trace


def ellipse_midpoint(cx: int, cy: int, a: int, b: int) -> List[Point]:
    """Midpoint ellipse with semi-axes ``a`` (x) and ``b`` (y)"""
    return [s.plain() for s in ellipse_midpoint_steps(cx, cy, a, b)]


## parabola
## --------

def parabola_steps(vx: int, vy: int, p: float,
                   max_length: int = 100) -> List[StepInfo]:
    """Parabola ``x^2 = 2py`` trace, opening upward on screen.

    ``delta_i`` is ``x^2 - 2py`` at the emitted pixel; the step is ``D``
    when y grew since the previous column and ``H`` otherwise.
    """
    max_x = int(max(0, min(PARABOLA_MAX_X, max_length)))
    denom = 2 * p or 1
    trace: List[StepInfo] = []
    prev_y = 0
    for x in range(max_x + 1):
        y = floor((x * x + p) / denom)
        delta = x * x - 2 * p * y
        kind = 'D' if y > prev_y else 'H'
        trace.append(StepInfo(vx + x, vy - y, delta_i=delta, step_kind=kind))
        trace.append(StepInfo(vx - x, vy - y, delta_i=delta, step_kind=kind))
        prev_y = y
    return trace


def parabola(vx: int, vy: int, p: float, max_length: int = 100) -> List[Point]:
    """Vertical parabola with vertex ``(vx, vy)``; two mirrored points per
    column out to ``max_length`` (at most 400)"""
    return [s.plain() for s in parabola_steps(vx, vy, p, max_length)]


## hyperbola
## ---------

def hyperbola_steps(cx: int, cy: int, a: float, b: float,
                    limit: int = 100) -> List[StepInfo]:
    """Hyperbola ``x^2/a^2 - y^2/b^2 = 1`` trace, both branches.

    Near the vertices the branch is steeper than 45 degrees, so rows are
    walked and x computed from y; once the slope ``b^2 x / (a^2 y)``
    drops to 1 the walk switches to columns.  Both walks stop when an
    offset from the center exceeds ``limit``.  ``delta_i`` is the
    integer residual ``b^2 x^2 - a^2 y^2 - a^2 b^2`` of the emitted
    pixel.
    """
    trace: List[StepInfo] = []
    if a <= 0 or b <= 0:
        return trace
    a2 = a * a
    b2 = b * b

    def residual(x, y):
        return b2 * x * x - a2 * y * y - a2 * b2

    ## region 1: step y
    y = 0
    prev_x = None
    while y <= limit:
        xe = a * sqrt(1.0 + y * y / b2)
        if y > 0 and b2 * xe <= a2 * y:
            ## flatter than 45 degrees from here on
            break
        x = iround(xe)
        if x > limit:
            return trace
        kind = 'V' if prev_x is None or x == prev_x else 'D'
        _emit(trace, _quadrants(cx, cy, x, y), residual(x, y), kind)
        prev_x = x
        y += 1
    else:
        return trace

    ## region 2: step x
    prev_y = y - 1
    x = prev_x + 1
    while x <= limit:
        y = iround(b * sqrt(x * x / a2 - 1.0))
        if y > limit:
            break
        kind = 'H' if y == prev_y else 'D'
        _emit(trace, _quadrants(cx, cy, x, y), residual(x, y), kind)
        prev_y = y
        x += 1

    return trace


def hyperbola(cx: int, cy: int, a: float, b: float,
              limit: int = 100) -> List[Point]:
    """Hyperbola with semi-axes ``a`` (transverse, x) and ``b`` centered
    at ``(cx, cy)``"""
    return [s.plain() for s in hyperbola_steps(cx, cy, a, b, limit)]


__all__ = [
    'circle_bresenham',
    'circle_bresenham_steps',
    'ellipse_midpoint',
    'ellipse_midpoint_steps',
    'parabola',
    'parabola_steps',
    'hyperbola',
    'hyperbola_steps',
]
