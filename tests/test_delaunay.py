from math import sqrt

import pytest

from rastergeom.delaunay import (
    circumcircle,
    clip_to_box,
    delaunay_triangulation,
    delaunay_triangulation_steps,
    find_conjugate,
    voronoi_from_delaunay,
    voronoi_from_delaunay_steps,
)
from rastergeom.geom import ClipWindow, Point, edge_key
from rastergeom.geometry_checks import (
    delaunay_edge_counts,
    delaunay_empty_circles,
    triangulation_manifold,
)
from rastergeom.poly import convex_hull_graham

SQUARE = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)]
SITES = [Point(0, 0), Point(10, 1), Point(4, 7), Point(13, 9), Point(2, 12),
         Point(8, 15), Point(16, 3), Point(7, 4)]
BIG_BOX = ClipWindow(-1000, -1000, 1000, 1000)


def _edges(tri):
    return {edge_key(a, b) for a, b in tri.edges()}


class TestCircumcircle:

    def test_right_triangle(self):
        center, radius = circumcircle(Point(0, 0), Point(4, 0), Point(0, 4))
        assert (center.x, center.y) == pytest.approx((2, 2))
        assert radius == pytest.approx(sqrt(8))

    def test_collinear(self):
        assert circumcircle(Point(0, 0), Point(1, 1), Point(2, 2)) is None


class TestConjugate:

    def test_bootstrap_either_side(self):
        ## both candidates share the circle; the first in the list wins
        assert find_conjugate(Point(0, 0), Point(4, 0), SQUARE) == Point(4, 4)

    def test_opposite_side_only(self):
        assert find_conjugate(Point(0, 0), Point(4, 0), SQUARE, Point(4, 4)) is None
        assert find_conjugate(Point(4, 0), Point(0, 4), SQUARE, Point(0, 0)) == Point(4, 4)

    def test_rejects_non_empty_circle(self):
        pts = [Point(0, 0), Point(10, 0), Point(5, 1), Point(5, 9)]
        assert find_conjugate(Point(0, 0), Point(10, 0), pts, Point(5, -5)) == Point(5, 1)

    def test_skips_crossing_candidate(self):
        ## with the other diagonal already present, (4,4) would overlap it
        diagonal = [(Point(4, 0), Point(0, 4))]
        assert find_conjugate(Point(0, 0), Point(4, 0), SQUARE, None,
                              diagonal) == Point(0, 4)


class TestTriangulation:

    def test_square(self):
        tris = delaunay_triangulation(SQUARE)
        assert len(tris) == 2
        shared = _edges(tris[0]) & _edges(tris[1])
        assert len(shared) == 1
        ## the shared edge is a diagonal
        a, b = shared.pop().split('|')
        assert {a, b} in ({'0,0', '4,4'}, {'4,0', '0,4'})
        for tri in tris:
            fourth = [p for p in SQUARE if p not in tuple(tri)]
            assert len(fourth) == 1
            center, radius = circumcircle(*tri)
            assert sqrt((fourth[0].x - center.x) ** 2 +
                        (fourth[0].y - center.y) ** 2) >= radius - 1e-9
        assert delaunay_empty_circles(tris, SQUARE)

    def test_general_position(self):
        tris = delaunay_triangulation(SITES)
        hull = convex_hull_graham(SITES)
        assert len(tris) == 2 * len(SITES) - 2 - len(hull)
        assert delaunay_empty_circles(tris, SITES)
        assert triangulation_manifold(tris)

    def test_grid(self):
        ## collinear points on every hull edge, four points on every unit circle
        grid = [Point(x, y) for x in range(3) for y in range(3)]
        tris = delaunay_triangulation(grid)
        assert len(tris) == 8
        assert delaunay_empty_circles(tris, grid)
        assert triangulation_manifold(tris)
        assert delaunay_edge_counts(tris) == (8, 8)

    def test_collinear_on_first_hull_edge(self):
        pts = [Point(0, 0), Point(0, 1), Point(0, 2), Point(3, 1)]
        steps = delaunay_triangulation_steps(pts)
        assert steps[0].message == 'start from hull edge (0,0)-(0,1)'
        tris = list(steps[-1].triangles)
        assert len(tris) == 2
        assert delaunay_empty_circles(tris, pts)

    def test_collinear_on_later_hull_edge(self):
        pts = [Point(0, 0), Point(2, 0), Point(4, 0), Point(2, 3)]
        tris = delaunay_triangulation(pts)
        assert len(tris) == 2
        assert delaunay_empty_circles(tris, pts)
        assert delaunay_edge_counts(tris) == (1, 4)

    def test_accepts_tuples(self):
        assert len(delaunay_triangulation([(0, 0), (4, 0), (4, 4), (0, 4)])) == 2

    def test_degenerate(self):
        assert delaunay_triangulation([]) == []
        assert delaunay_triangulation(SQUARE[:2]) == []
        assert delaunay_triangulation([Point(0, 0), Point(1, 1), Point(3, 3)]) == []
        assert delaunay_triangulation_steps([Point(0, 0), Point(1, 1), Point(3, 3)]) == []

    def test_input_not_mutated(self):
        pts = list(SITES)
        delaunay_triangulation(pts)
        assert pts == SITES

    def test_steps(self):
        steps = delaunay_triangulation_steps(SITES)
        assert [s.step_index for s in steps] == list(range(len(steps)))
        assert steps[0].triangles == ()
        assert len(steps[0].live_edges) == 1
        assert steps[0].current_edge is not None
        assert list(steps[-1].triangles) == delaunay_triangulation(SITES)
        assert steps[-1].live_edges == ()
        assert steps[-1].current_edge is None
        for s in steps[1:-1]:
            assert s.current_edge is not None
            if s.new_triangle is None:
                assert s.conjugate is None
                assert 'no conjugate' in s.message
            else:
                assert s.conjugate == s.new_triangle.c
                assert s.circumradius > 0
                assert s.triangles[-1] == s.new_triangle


class TestClipToBox:

    def test_inside_unchanged(self):
        seg = clip_to_box(Point(1, 1), Point(3, 2), ClipWindow(0, 0, 10, 10))
        assert seg == (Point(1, 1), Point(3, 2))

    def test_ray(self):
        start, end = clip_to_box(Point(0, 0), Point(1, 0),
                                 ClipWindow(-10, -10, 10, 10), ray=True)
        assert (start.x, start.y) == pytest.approx((0, 0))
        assert (end.x, end.y) == pytest.approx((10, 0))

    def test_ray_from_outside(self):
        start, end = clip_to_box(Point(-20, 5), Point(-19, 5),
                                 ClipWindow(-10, -10, 10, 10), ray=True)
        assert (start.x, start.y) == pytest.approx((-10, 5))
        assert (end.x, end.y) == pytest.approx((10, 5))

    def test_miss(self):
        box = ClipWindow(0, 0, 10, 10)
        assert clip_to_box(Point(20, 20), Point(30, 25), box) is None
        assert clip_to_box(Point(20, 5), Point(21, 5), box, ray=True) is None
        assert clip_to_box(Point(5, 5), Point(5, 5), box, ray=True) is None


class TestVoronoi:

    def test_square_duality(self):
        tris = delaunay_triangulation(SQUARE)
        edges = voronoi_from_delaunay(tris, BIG_BOX)
        internal, boundary = delaunay_edge_counts(tris)
        assert (internal, boundary) == (1, 4)
        assert len(edges) == 5

    def test_general_duality(self):
        tris = delaunay_triangulation(SITES)
        internal, boundary = delaunay_edge_counts(tris)
        edges = voronoi_from_delaunay(tris, BIG_BOX)
        assert len(edges) == internal + boundary

    def test_edges_inside_box(self):
        box = ClipWindow(-5, -5, 20, 20)
        for e in voronoi_from_delaunay(delaunay_triangulation(SITES), box):
            for p in (e.start, e.end):
                assert box.x_min - 1e-9 <= p.x <= box.x_max + 1e-9
                assert box.y_min - 1e-9 <= p.y <= box.y_max + 1e-9

    def test_accepts_point_lists(self):
        tris = [[(0, 0), (4, 0), (0, 4)]]
        edges = voronoi_from_delaunay(tris, BIG_BOX)
        assert len(edges) == 3

    def test_steps(self):
        tris = delaunay_triangulation(SITES)
        steps = voronoi_from_delaunay_steps(tris, BIG_BOX)
        assert steps[0].edges == ()
        assert steps[0].triangles == tuple(tris)
        assert [s.edge_count for s in steps[1:]] == \
            list(range(1, len(steps) - 1)) + [len(steps) - 2]
        assert list(steps[-1].edges) == voronoi_from_delaunay(tris, BIG_BOX)

    def test_empty(self):
        assert voronoi_from_delaunay([], BIG_BOX) == []
