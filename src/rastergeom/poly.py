## polygon algorithms for rastergeom
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

"""
Polygon geometry
================

Polygons are ordered point sequences; the closing edge from the last
vertex back to the first is implied, so the vertex list never repeats
its first point.

This module provides the convexity test, inner edge normals, two
convex hull constructions, segment intersection, even-odd inside
testing and scanline filling with an active edge table.  None of these
functions raise on degenerate geometry: too few vertices, parallel
segments and collinear point sets produce an empty or trivial result.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from math import ceil, floor, sqrt
from typing import List, Optional, Sequence

from rastergeom.geom import (
    EPSILON, Point, centroid, cross, dedupe, dist2, iround,
    point_key,
)


def is_convex(vertices: Sequence) -> bool:
    """Is the polygon convex?  Collinear vertex triples are ignored; any
    change in turn direction makes the polygon non-convex"""
    n = len(vertices)
    if n < 3:
        return False
    sign = 0
    for i in range(n):
        a = vertices[i]
        b = vertices[(i + 1) % n]
        c = vertices[(i + 2) % n]
        z = (b.x - a.x) * (c.y - b.y) - (b.y - a.y) * (c.x - b.x)
        if z == 0:
            continue
        s = 1 if z > 0 else -1
        if sign == 0:
            sign = s
        elif sign != s:
            return False
    return True


def inner_normals(vertices: Sequence) -> List[Point]:
    """Unit normal of every edge ``vertices[i] -> vertices[i+1]``,
    oriented toward the vertex centroid"""
    n = len(vertices)
    if n < 3:
        return []
    center = centroid(vertices)
    normals = []
    for i in range(n):
        a = vertices[i]
        b = vertices[(i + 1) % n]
        dx = b.x - a.x
        dy = b.y - a.y
        length = sqrt(dx * dx + dy * dy) or 1.0
        nx = -dy / length
        ny = dx / length
        midx = (a.x + b.x) / 2
        midy = (a.y + b.y) / 2
        if nx * (center.x - midx) + ny * (center.y - midy) > 0:
            normals.append(Point(nx, ny))
        else:
            normals.append(Point(-nx, -ny))
    return normals


## convex hulls
## ------------

def _lowest_left(points: Sequence) -> int:
    best = 0
    for i in range(1, len(points)):
        p = points[i]
        q = points[best]
        if p.y < q.y or (p.y == q.y and p.x < q.x):
            best = i
    return best


def convex_hull_graham(points: Sequence) -> List[Point]:
    """Graham scan.  Returns the hull counter-clockwise, starting at the
    lowest (then leftmost) point.  Collinear boundary points are
    dropped"""
    pts = dedupe(points)
    if len(pts) < 3:
        return list(pts)
    si = _lowest_left(pts)
    start = pts[si]
    rest = pts[:si] + pts[si + 1:]

    def by_angle(p, q):
        c = cross(start, p, q)
        if c > 0:
            return -1
        if c < 0:
            return 1
        dp = dist2(start, p)
        dq = dist2(start, q)
        return (dp > dq) - (dp < dq)

    ## every point is at or above start, so the cross product orders
    ## them by polar angle; ties nearer first
    ordered = sorted(rest, key=cmp_to_key(by_angle))

    stack = [start]
    for p in ordered:
        while len(stack) >= 2 and cross(stack[-2], stack[-1], p) <= 0:
            stack.pop()
        stack.append(p)
    return stack


def convex_hull_jarvis(points: Sequence) -> List[Point]:
    """Jarvis march (gift wrapping).

    From each hull vertex the next one is the candidate with no other
    point strictly to the left of the directed edge between them;
    collinear candidates prefer the farther point.  Starts at the
    lowest (then leftmost) point and stops on wrapping back to it.
    """
    pts = dedupe(points)
    if len(pts) < 3:
        return list(pts)
    start = pts[_lowest_left(pts)]
    hull = [start]
    current = start
    ## a hull can't have more vertices than the input
    for _ in range(len(pts)):
        nxt = None
        for p in pts:
            if p == current:
                continue
            if nxt is None:
                nxt = p
                continue
            c = cross(current, nxt, p)
            if c > 0:
                nxt = p
            elif c == 0 and dist2(current, p) > dist2(current, nxt):
                nxt = p
        if nxt is None or nxt == start:
            break
        hull.append(nxt)
        current = nxt
    return hull


## intersections
## -------------

def segment_segment_intersection(a1, a2, b1, b2) -> Optional[Point]:
    """Intersection of segments ``a1-a2`` and ``b1-b2`` rounded to the
    pixel grid, or ``None`` if they are parallel or miss each other"""
    dax = a2.x - a1.x
    day = a2.y - a1.y
    dbx = b2.x - b1.x
    dby = b2.y - b1.y
    denom = dax * dby - day * dbx
    if abs(denom) < EPSILON:
        return None
    t = ((b1.x - a1.x) * dby - (b1.y - a1.y) * dbx) / denom
    u = ((b1.x - a1.x) * day - (b1.y - a1.y) * dax) / denom
    if 0 <= t <= 1 and 0 <= u <= 1:
        return Point(iround(a1.x + t * dax), iround(a1.y + t * day))
    return None


def segment_polygon_intersections(seg_start, seg_end,
                                  polygon: Sequence) -> List[Point]:
    """Every distinct point where the segment crosses a polygon edge"""
    out: List[Point] = []
    seen = set()
    n = len(polygon)
    for i in range(n):
        p = segment_segment_intersection(seg_start, seg_end,
                                         polygon[i], polygon[(i + 1) % n])
        if p is None:
            continue
        k = point_key(p)
        if k not in seen:
            seen.add(k)
            out.append(p)
    return out


def point_in_polygon(p, polygon: Sequence) -> bool:
    """Even-odd test with a horizontal ray toward +x"""
    n = len(polygon)
    if n < 3:
        return False
    inside = False
    x = p.x
    y = p.y
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


## scanline fill
## -------------

@dataclass
class _EdgeRecord:
    y_min: int
    y_max: int
    x_at_ymin: float
    dx_per_scan: float


@dataclass
class _ActiveEdge:
    x: float
    y_max: int
    dx_per_scan: float


def fill_polygon_scanline(polygon: Sequence) -> List[Point]:
    """Fill a polygon with the scanline active edge table method.

    Horizontal edges are skipped when the edge table is built.  On each
    row, edges starting there join the active table, edges ending there
    leave it, the active edges are sorted by their current x and the
    spans between consecutive pairs are filled, rounding span ends
    inward.  Each active x then advances by its per-row increment.
    """
    n = len(polygon)
    if n < 3:
        return []

    table: List[_EdgeRecord] = []
    for i in range(n):
        a = polygon[i]
        b = polygon[(i + 1) % n]
        y1 = iround(a.y)
        y2 = iround(b.y)
        if y1 == y2:
            continue
        table.append(_EdgeRecord(
            y_min=min(y1, y2),
            y_max=max(y1, y2),
            x_at_ymin=a.x if y1 < y2 else b.x,
            dx_per_scan=(b.x - a.x) / (b.y - a.y)))
    if not table:
        return []

    pixels: List[Point] = []
    active: List[_ActiveEdge] = []
    for y in range(min(e.y_min for e in table), max(e.y_max for e in table) + 1):
        for e in table:
            if e.y_min == y:
                active.append(_ActiveEdge(e.x_at_ymin, e.y_max, e.dx_per_scan))
        active = [e for e in active if e.y_max > y]
        active.sort(key=lambda e: e.x)

        for k in range(0, len(active) - 1, 2):
            for x in range(ceil(active[k].x), floor(active[k + 1].x) + 1):
                pixels.append(Point(x, y))

        for e in active:
            e.x += e.dx_per_scan

    return pixels


__all__ = [
    'is_convex',
    'inner_normals',
    'convex_hull_graham',
    'convex_hull_jarvis',
    'segment_segment_intersection',
    'segment_polygon_intersections',
    'point_in_polygon',
    'fill_polygon_scanline',
]
