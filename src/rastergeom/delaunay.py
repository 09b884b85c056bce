"""Delaunay triangulation by conjugate points, and its Voronoi dual.

The triangulation grows from one convex hull edge.  Every unresolved
("live") edge remembers the third vertex of the triangle it came from;
its conjugate point is searched for on the other side only.  Live edges
are kept in an insertion-ordered mapping and processed first in, first
out, and adding an edge that is already live removes it instead, since
the two triangles on either side of it are then both known.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import hypot, inf
from typing import Dict, List, Optional, Sequence, Tuple

from rastergeom.geom import (
    EPSILON, ClipWindow, Point, as_points, cross, dist2, edge_key, point_key,
)
from rastergeom.poly import convex_hull_jarvis

logger = logging.getLogger(__name__)

## rays are aimed this far before being clipped to the box
RAY_LENGTH = 500


@dataclass(frozen=True)
class Triangle:
    """Immutable triangle of three grid points."""

    a: Point
    b: Point
    c: Point

    def __iter__(self):
        yield self.a
        yield self.b
        yield self.c

    def edges(self) -> List[Tuple[Point, Point]]:
        return [(self.a, self.b), (self.b, self.c), (self.c, self.a)]


@dataclass(frozen=True)
class LiveEdge:
    a: Point
    b: Point
    known_third: Optional[Point] = None


@dataclass(frozen=True)
class DelaunayStep:
    """Snapshot of the triangulation after one live edge was processed."""

    step_index: int
    message: str
    triangles: Tuple[Triangle, ...] = ()
    live_edges: Tuple[LiveEdge, ...] = ()
    current_edge: Optional[Tuple[Point, Point]] = None
    conjugate: Optional[Point] = None
    new_triangle: Optional[Triangle] = None
    circumcenter: Optional[Point] = None
    circumradius: Optional[float] = None


@dataclass(frozen=True)
class VoronoiEdge:
    start: Point
    end: Point


@dataclass(frozen=True)
class VoronoiStep:
    step_index: int
    message: str
    triangles: Tuple[Triangle, ...] = ()
    edges: Tuple[VoronoiEdge, ...] = ()
    edge_count: int = 0


def circumcircle(a, b, c) -> Optional[Tuple[Point, float]]:
    """Center and radius of the circle through ``a``, ``b`` and ``c``, or
    ``None`` if the three points are collinear."""
    d = 2 * (a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))
    if abs(d) < EPSILON:
        return None
    aa = a.x * a.x + a.y * a.y
    bb = b.x * b.x + b.y * b.y
    cc = c.x * c.x + c.y * c.y
    ux = (aa * (b.y - c.y) + bb * (c.y - a.y) + cc * (a.y - b.y)) / d
    uy = (aa * (c.x - b.x) + bb * (a.x - c.x) + cc * (b.x - a.x)) / d
    return Point(ux, uy), hypot(a.x - ux, a.y - uy)


def _strictly_inside(p, center: Point, radius: float) -> bool:
    return hypot(p.x - center.x, p.y - center.y) < radius - EPSILON


def _crosses(p1, p2, q1, q2) -> bool:
    """True if the open segments ``p1``-``p2`` and ``q1``-``q2`` cross"""
    if {point_key(p1), point_key(p2)} & {point_key(q1), point_key(q2)}:
        return False
    d1 = cross(q1, q2, p1)
    d2 = cross(q1, q2, p2)
    d3 = cross(p1, p2, q1)
    d4 = cross(p1, p2, q2)
    return ((d1 > EPSILON and d2 < -EPSILON) or (d1 < -EPSILON and d2 > EPSILON)) and \
        ((d3 > EPSILON and d4 < -EPSILON) or (d3 < -EPSILON and d4 > EPSILON))


def find_conjugate(a, b, points: Sequence, known_third=None,
                   edges: Sequence = ()) -> Optional[Point]:
    """Conjugate point of the edge ``a``-``b``.

    Candidates lie strictly on the side of the line opposite
    ``known_third`` (either side when it is ``None``) and their
    circumcircle with ``a`` and ``b`` must hold no other input point.
    A candidate whose new sides would cross one of ``edges`` (the
    triangulation built so far) is skipped; this keeps four or more
    points on one circle from producing overlapping triangles.  Of the
    rest, the one with the smallest circumradius wins; ties go to the
    earliest in ``points``.
    """
    ka = point_key(a)
    kb = point_key(b)
    kt = point_key(known_third) if known_third is not None else None
    k_side = cross(a, b, known_third) if known_third is not None else 0

    best = None
    best_radius = inf
    for p in points:
        kp = point_key(p)
        if kp in (ka, kb, kt):
            continue
        side = cross(a, b, p)
        if abs(side) < EPSILON:
            continue
        if known_third is not None and side * k_side >= 0:
            continue
        circle = circumcircle(a, b, p)
        if circle is None:
            continue
        center, radius = circle
        if radius >= best_radius - EPSILON:
            continue
        if any(_strictly_inside(q, center, radius) for q in points
               if point_key(q) not in (ka, kb, kp)):
            continue
        if any(_crosses(s, t, u, v) for u, v in ((a, p), (p, b))
               for s, t in edges):
            continue
        best_radius = radius
        best = p
    return best


class _Frontier:
    """Live edges keyed by canonical edge key, oldest first."""

    def __init__(self):
        self.edges: Dict[str, LiveEdge] = {}

    def __len__(self):
        return len(self.edges)

    def push(self, edge: LiveEdge):
        self.edges[edge_key(edge.a, edge.b)] = edge

    def pop(self) -> LiveEdge:
        key = next(iter(self.edges))
        return self.edges.pop(key)

    def toggle(self, a, b, third):
        """Add the edge, or drop it if it is already live"""
        key = edge_key(a, b)
        if key in self.edges:
            del self.edges[key]
        else:
            self.edges[key] = LiveEdge(a, b, third)

    def snapshot(self) -> Tuple[LiveEdge, ...]:
        return tuple(self.edges.values())


def _first_on_edge(start, end, points: Sequence) -> Point:
    """Input point nearest ``start`` on the hull edge ``start``-``end``.

    The hull skips collinear boundary points; an edge passing over one
    has no empty circle and cannot seed the triangulation.
    """
    best = end
    best_d = dist2(start, end)
    for p in points:
        if abs(cross(start, end, p)) > EPSILON:
            continue
        d = dist2(start, p)
        if EPSILON < d < best_d and \
                (p.x - start.x) * (end.x - start.x) + (p.y - start.y) * (end.y - start.y) > 0:
            best = p
            best_d = d
    return best


def _fmt(p) -> str:
    return '({},{})'.format(p.x, p.y)


def delaunay_triangulation_steps(points: Sequence) -> List[DelaunayStep]:
    """Triangulate ``points`` recording a snapshot per processed edge.

    The first snapshot shows the starting hull edge, the last one the
    finished triangulation.  In between there is one snapshot for each
    live edge taken off the frontier, whether it produced a triangle or
    turned out to be a hull edge.  Fewer than three points, or all
    points collinear, give an empty list.
    """
    pts = as_points(points)
    if len(pts) < 3:
        return []
    hull = convex_hull_jarvis(pts)
    if len(hull) < 3:
        logger.debug('points are collinear, nothing to triangulate')
        return []

    triangles: List[Triangle] = []
    frontier = _Frontier()
    start = hull[0]
    nxt = _first_on_edge(start, hull[1], pts)
    frontier.push(LiveEdge(start, nxt, None))
    steps = [DelaunayStep(
        step_index=0,
        message='start from hull edge {}-{}'.format(_fmt(start), _fmt(nxt)),
        live_edges=frontier.snapshot(),
        current_edge=(start, nxt))]

    ## a planar triangulation of n points has fewer than 2n triangles
    limit = 2 * len(pts)
    while len(frontier):
        edge = frontier.pop()
        a, b = edge.a, edge.b
        p = find_conjugate(a, b, pts, edge.known_third,
                           [e for t in triangles for e in t.edges()])
        if p is None:
            logger.debug('hull edge %s-%s skipped', _fmt(a), _fmt(b))
            steps.append(DelaunayStep(
                step_index=len(steps),
                message='hull edge {}-{}: no conjugate point, skipped'.format(
                    _fmt(a), _fmt(b)),
                triangles=tuple(triangles),
                live_edges=frontier.snapshot(),
                current_edge=(a, b)))
            continue

        tri = Triangle(a, b, p)
        triangles.append(tri)
        frontier.toggle(a, p, b)
        frontier.toggle(p, b, a)
        center, radius = circumcircle(a, b, p)
        logger.debug('triangle %d: %s %s %s', len(triangles),
                     _fmt(a), _fmt(b), _fmt(p))
        steps.append(DelaunayStep(
            step_index=len(steps),
            message='added triangle {}-{}-{}, conjugate point {}'.format(
                _fmt(a), _fmt(b), _fmt(p), _fmt(p)),
            triangles=tuple(triangles),
            live_edges=frontier.snapshot(),
            current_edge=(a, b),
            conjugate=p,
            new_triangle=tri,
            circumcenter=center,
            circumradius=radius))
        if len(triangles) >= limit:
            logger.debug('giving up after %d triangles, input is degenerate',
                         len(triangles))
            break

    steps.append(DelaunayStep(
        step_index=len(steps),
        message='done: {} triangles'.format(len(triangles)),
        triangles=tuple(triangles)))
    return steps


def delaunay_triangulation(points: Sequence) -> List[Triangle]:
    """Delaunay triangulation of a point set, as a list of triangles.

    >>> tris = delaunay_triangulation([(0, 0), (4, 0), (4, 4), (0, 4)])
    >>> len(tris)
    2
    """
    steps = delaunay_triangulation_steps(points)
    if not steps:
        return []
    return list(steps[-1].triangles)


## voronoi dual
## ------------

def clip_to_box(start, end, box: ClipWindow, ray: bool = False):
    """Clip the segment ``start``-``end`` to ``box`` (Liang-Barsky).

    With ``ray`` set, ``end`` only gives the direction and the ray is
    unbounded past it.  Returns ``(start, end)`` of the visible part or
    ``None``.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    t0 = 0.0
    t1 = inf if ray else 1.0
    for p, q in ((-dx, start.x - box.x_min), (dx, box.x_max - start.x),
                 (-dy, start.y - box.y_min), (dy, box.y_max - start.y)):
        if abs(p) < EPSILON:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    if t0 > t1 or t1 == inf:
        return None
    return (Point(start.x + t0 * dx, start.y + t0 * dy),
            Point(start.x + t1 * dx, start.y + t1 * dy))


def _edge_map(triangles: Sequence[Triangle]) -> Dict[str, List[int]]:
    out: Dict[str, List[int]] = {}
    for i, tri in enumerate(triangles):
        for a, b in tri.edges():
            out.setdefault(edge_key(a, b), []).append(i)
    return out


def _outward_ray(tri: Triangle, a, b, center: Point) -> Point:
    """Far point of the ray leaving ``center`` across edge ``a``-``b``,
    away from the triangle's third vertex"""
    ka = point_key(a)
    kb = point_key(b)
    third = next(v for v in tri if point_key(v) not in (ka, kb))
    rx = -(b.y - a.y)
    ry = b.x - a.x
    if rx * (third.x - (a.x + b.x) / 2) + ry * (third.y - (a.y + b.y) / 2) > 0:
        rx, ry = -rx, -ry
    return Point(center.x + rx * RAY_LENGTH, center.y + ry * RAY_LENGTH)


def voronoi_from_delaunay_steps(triangles: Sequence,
                                box: ClipWindow) -> List[VoronoiStep]:
    """Voronoi edges of a triangulation, one snapshot per dual edge.

    An edge shared by two triangles gives the segment between their
    circumcenters; a hull edge gives a ray from its triangle's
    circumcenter pointing outward.  Each Delaunay edge is visited once,
    and everything is clipped to ``box``.
    """
    tris = tuple(t if isinstance(t, Triangle) else Triangle(*as_points(t))
                 for t in triangles)
    steps = [VoronoiStep(0, 'initial Delaunay triangulation', tris)]
    edges: List[VoronoiEdge] = []
    owners = _edge_map(tris)
    done = set()

    for i, tri in enumerate(tris):
        circle = circumcircle(*tri)
        if circle is None:
            continue
        center = circle[0]
        for a, b in tri.edges():
            k = edge_key(a, b)
            if k in done:
                continue
            done.add(k)
            shared = owners[k]
            if len(shared) == 2:
                j = shared[1] if shared[0] == i else shared[0]
                other = circumcircle(*tris[j])
                if other is None:
                    continue
                clipped = clip_to_box(center, other[0], box)
                message = 'edge between circumcenters of triangles {} and {}'.format(
                    i + 1, j + 1)
            else:
                clipped = clip_to_box(center, _outward_ray(tri, a, b, center),
                                      box, ray=True)
                message = 'boundary ray from triangle {}'.format(i + 1)
            if clipped is None:
                continue
            edges.append(VoronoiEdge(*clipped))
            steps.append(VoronoiStep(len(steps), message, tris,
                                     tuple(edges), len(edges)))

    steps.append(VoronoiStep(
        len(steps), 'done: {} Voronoi edges'.format(len(edges)),
        tris, tuple(edges), len(edges)))
    return steps


def voronoi_from_delaunay(triangles: Sequence,
                          box: ClipWindow) -> List[VoronoiEdge]:
    """Voronoi edges dual to ``triangles``, clipped to ``box``"""
    return list(voronoi_from_delaunay_steps(triangles, box)[-1].edges)


__all__ = [
    'Triangle',
    'LiveEdge',
    'DelaunayStep',
    'VoronoiEdge',
    'VoronoiStep',
    'circumcircle',
    'find_conjugate',
    'delaunay_triangulation',
    'delaunay_triangulation_steps',
    'clip_to_box',
    'voronoi_from_delaunay',
    'voronoi_from_delaunay_steps',
]
