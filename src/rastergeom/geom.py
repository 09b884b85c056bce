## foundational records and helpers for rastergeom
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

"""foundational records and helpers for **rastergeom**

====================
OVERVIEW
====================

The rastergeom.geom module provides the small set of value types shared
by every algorithm in the package, together with the scalar and vector
helpers they are built from.

constants
=========

``EPSILON`` (1e-10) guards near-zero denominators and cross products.
A value whose magnitude is below ``EPSILON`` is treated as the
degenerate case, never as an error.

points
======

Points are immutable ``Point(x, y)`` records on the pixel grid.  Their
coordinates may be integers (rasterizer output) or floats (clipping,
circumcenters, projections).  Two points with the same coordinates are
interchangeable, and ``point.key`` gives the canonical ``"x,y"`` string
used to deduplicate them.

The ``as_point()`` convenience function makes a point out of just about
any plausible argument: ::

   p1 = as_point(3, 4)
   p2 = as_point((3, 4))
   p3 = as_point(p1)

trace records
=============

Rasterizers and curve evaluators come in pairs: a plain function that
returns points, and a ``_steps`` twin that returns trace records
(``StepInfo`` or ``CurveStep``).  Trace records are points carrying
extra fields, and ``plain_points()`` strips them so the two outputs can
be compared directly.

"""

from __future__ import annotations

from dataclasses import dataclass
from math import floor, sqrt
from typing import Iterable, List, Sequence, Tuple

## constants
EPSILON = 1e-10

## operations on scalars
## -----------------------

## booleans are ints in python, but True is not a coordinate
def isgoodnum(n) -> bool:
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float))


def close(a, b, tol: float = EPSILON) -> bool:
    """ are two scalars the same within ``tol``
    """
    return abs(a - b) < tol


def iround(v: float) -> int:
    """Round half up to the nearest integer, so that ``iround(-2.5) == -2``
    and ``iround(2.5) == 3``.  The builtin ``round()`` rounds half to even,
    which makes pixel walks lopsided."""
    return int(floor(v + 0.5))


def fpart(v: float) -> float:
    """ fractional part of ``v``, always in ``[0, 1)``"""
    return v - floor(v)


def rfpart(v: float) -> float:
    """ one minus the fractional part of ``v``"""
    return 1.0 - fpart(v)


## records
## -------

@dataclass(frozen=True)
class Point:
    """A point on the pixel grid."""

    x: float
    y: float

    @property
    def key(self) -> str:
        return point_key(self)

    def plain(self) -> "Point":
        """Return the bare ``Point`` of this record, dropping any extra
        trace fields carried by subclasses."""
        return Point(self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class StepInfo(Point):
    """Rasterizer trace record: the emitted pixel, the running decision
    value and the kind of move (``H``, ``V`` or ``D``)."""

    delta_i: float = 0
    step_kind: str = 'D'


@dataclass(frozen=True)
class CurveStep(Point):
    """Curve evaluator trace record."""

    step_index: int = 0
    total_steps: int = 0
    description: str = ''


@dataclass(frozen=True)
class WuPixel(Point):
    """Antialiased pixel; ``intensity`` is 1.0 for full coverage."""

    intensity: float = 1.0


@dataclass(frozen=True)
class ClipWindow:
    """Axis-aligned rectangle, ``x_min <= x_max`` and ``y_min <= y_max``."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @classmethod
    def from_corners(cls, p1, p2) -> "ClipWindow":
        """Build a window from two arbitrary opposite corners."""
        a = as_point(p1)
        b = as_point(p2)
        return cls(min(a.x, b.x), min(a.y, b.y),
                   max(a.x, b.x), max(a.y, b.y))

    def contains(self, p) -> bool:
        return self.x_min <= p.x <= self.x_max and \
            self.y_min <= p.y <= self.y_max


## point construction and keys
## ---------------------------

def as_point(x=None, y=None) -> Point:
    """Point creation from a point, an ``(x, y)`` sequence, an object
    with ``x`` and ``y`` attributes, or two scalars"""
    if isinstance(x, Point):
        return Point(x.x, x.y)
    if isgoodnum(x) and isgoodnum(y):
        return Point(x, y)
    if isinstance(x, (tuple, list)) and len(x) >= 2 \
       and isgoodnum(x[0]) and isgoodnum(x[1]):
        return Point(x[0], x[1])
    if hasattr(x, 'x') and hasattr(x, 'y') \
       and isgoodnum(x.x) and isgoodnum(x.y):
        return Point(x.x, x.y)
    raise ValueError('bad values passed to as_point(): {}, {}'.format(x, y))


def as_points(seq: Iterable) -> List[Point]:
    """Convert every element of ``seq`` with ``as_point()``."""
    return [as_point(p) for p in seq]


def _num_str(v) -> str:
    ## 3.0 and 3 are the same grid position
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    return str(v)


def point_key(p) -> str:
    """Canonical ``"x,y"`` string of a point"""
    return '{},{}'.format(_num_str(p.x), _num_str(p.y))


def edge_key(a, b) -> str:
    """Canonical key of the undirected edge ``a``-``b``; swapping the
    endpoints gives the same key"""
    ka = point_key(a)
    kb = point_key(b)
    return '{}|{}'.format(ka, kb) if ka < kb else '{}|{}'.format(kb, ka)


def plain_points(seq: Iterable[Point]) -> List[Point]:
    """Strip trace metadata from a sequence of point records"""
    return [p.plain() for p in seq]


## vector operations on points
## ---------------------------

def cross(a, b, c) -> float:
    """z component of ``(b - a) x (c - a)``.  Positive when ``c`` lies to
    the left of the directed line ``a -> b``"""
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def dist2(a, b) -> float:
    """ squared euclidean distance between points ``a`` and ``b``"""
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def dist(a, b) -> float:
    """ euclidean distance between points ``a`` and ``b``"""
    return sqrt(dist2(a, b))


def centroid(points: Sequence) -> Point:
    """Arithmetic mean of a non-empty point sequence"""
    n = len(points)
    return Point(sum(p.x for p in points) / n,
                 sum(p.y for p in points) / n)


def dedupe(points: Iterable) -> List[Point]:
    """Remove positional duplicates, keeping first occurrences in order"""
    seen = set()
    out: List[Point] = []
    for p in points:
        k = point_key(p)
        if k in seen:
            continue
        seen.add(k)
        out.append(p)
    return out


def bounds(points: Sequence) -> Tuple[float, float, float, float] | None:
    """``(x_min, y_min, x_max, y_max)`` of a point sequence, or ``None``
    if it is empty"""
    if not points:
        return None
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


__all__ = [
    'EPSILON',
    'isgoodnum',
    'close',
    'iround',
    'fpart',
    'rfpart',
    'Point',
    'StepInfo',
    'CurveStep',
    'WuPixel',
    'ClipWindow',
    'as_point',
    'as_points',
    'point_key',
    'edge_key',
    'plain_points',
    'cross',
    'dist2',
    'dist',
    'centroid',
    'dedupe',
    'bounds',
]
