"""Validation helpers for rastergeom results.

Nothing in the package calls these; they are for callers (and the test
suite) checking rasterizer paths, hulls and triangulations.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from rastergeom.geom import EPSILON, cross, dist, edge_key, point_key
from rastergeom.poly import is_convex, point_in_polygon


def is_8_connected_path(points: Sequence) -> "CheckResult":
    """Each pixel is one king's move from the one before it"""

    if not points:
        return CheckResult(False, ['empty path'])
    gaps = []
    for i in range(1, len(points)):
        dx = abs(points[i].x - points[i - 1].x)
        dy = abs(points[i].y - points[i - 1].y)
        if max(dx, dy) != 1:
            gaps.append(i)
    if gaps:
        return CheckResult(False, [f'path breaks before indices: {gaps}'])
    return CheckResult(True, [])


def point_on_segment(p, a, b, tol: float = EPSILON) -> bool:
    """Return ``True`` if ``p`` lies on the closed segment ``a``-``b``."""

    if abs(cross(a, b, p)) > tol * max(1.0, dist(a, b)):
        return False
    return min(a.x, b.x) - tol <= p.x <= max(a.x, b.x) + tol and \
        min(a.y, b.y) - tol <= p.y <= max(a.y, b.y) + tol


def point_on_boundary(p, polygon: Sequence, tol: float = EPSILON) -> bool:
    n = len(polygon)
    return any(point_on_segment(p, polygon[i], polygon[(i + 1) % n], tol)
               for i in range(n))


def polygon_contains_points(polygon: Sequence, points: Sequence) -> "CheckResult":
    """Every point is inside ``polygon`` or on its boundary."""

    outside = [point_key(p) for p in points
               if not point_in_polygon(p, polygon)
               and not point_on_boundary(p, polygon)]
    if outside:
        return CheckResult(False, [f'points outside polygon: {outside}'])
    return CheckResult(True, [])


def hull_is_valid(hull: Sequence, points: Sequence) -> "CheckResult":
    """A hull of three or more vertices is convex and holds every
    input point."""

    if len(hull) < 3:
        return CheckResult(True, ['hull is degenerate'])
    warnings: List[str] = []
    ok = True
    if not is_convex(hull):
        ok = False
        warnings.append('hull is not convex')
    contained = polygon_contains_points(hull, points)
    if not contained:
        ok = False
        warnings.extend(contained.warnings)
    return CheckResult(ok, warnings)


def delaunay_empty_circles(triangles: Sequence, points: Sequence) -> "CheckResult":
    """No input point lies strictly inside any triangle's circumcircle."""
    from rastergeom.delaunay import circumcircle

    bad = []
    for idx, tri in enumerate(triangles):
        a, b, c = tri
        circle = circumcircle(a, b, c)
        if circle is None:
            bad.append(idx)
            continue
        center, radius = circle
        corners = {point_key(a), point_key(b), point_key(c)}
        for p in points:
            if point_key(p) in corners:
                continue
            if dist(p, center) < radius - EPSILON:
                bad.append(idx)
                break
    if bad:
        return CheckResult(False, [f'non-empty circumcircles at indices: {bad}'])
    return CheckResult(True, [])


def delaunay_edge_counts(triangles: Sequence) -> Tuple[int, int]:
    """``(internal, boundary)`` edge counts of a triangulation."""

    edges: Counter = Counter()
    for a, b, c in triangles:
        edges[edge_key(a, b)] += 1
        edges[edge_key(b, c)] += 1
        edges[edge_key(c, a)] += 1
    internal = sum(1 for count in edges.values() if count == 2)
    boundary = sum(1 for count in edges.values() if count == 1)
    return internal, boundary


def triangulation_manifold(triangles: Sequence) -> "CheckResult":
    """No edge is shared by more than two triangles."""

    edges: Counter = Counter()
    for a, b, c in triangles:
        edges[edge_key(a, b)] += 1
        edges[edge_key(b, c)] += 1
        edges[edge_key(c, a)] += 1
    invalid = [edge for edge, count in edges.items() if count > 2]
    if invalid:
        return CheckResult(False, [f'edges with multiplicity >2: {invalid}'])
    return CheckResult(True, [])


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'is_8_connected_path',
    'point_on_segment',
    'point_on_boundary',
    'polygon_contains_points',
    'hull_is_valid',
    'delaunay_empty_circles',
    'delaunay_edge_counts',
    'triangulation_manifold',
]
