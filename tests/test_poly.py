import random

import pytest

from rastergeom.geom import Point
from rastergeom.geometry_checks import hull_is_valid, polygon_contains_points
from rastergeom.poly import (
    convex_hull_graham,
    convex_hull_jarvis,
    fill_polygon_scanline,
    inner_normals,
    is_convex,
    point_in_polygon,
    segment_polygon_intersections,
    segment_segment_intersection,
)

SQUARE = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)]
DENTED = [Point(0, 0), Point(4, 0), Point(2, 2), Point(4, 4), Point(0, 4)]
BIG_SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


def _keys(pts):
    return {(p.x, p.y) for p in pts}


def _random_points(seed, n=30, span=50):
    rng = random.Random(seed)
    return [Point(rng.randint(-span, span), rng.randint(-span, span))
            for _ in range(n)]


class TestConvexity:

    def test_square_is_convex(self):
        assert is_convex(SQUARE)

    def test_dented_is_not(self):
        assert not is_convex(DENTED)

    def test_collinear_vertex_ignored(self):
        assert is_convex([Point(0, 0), Point(2, 0), Point(4, 0),
                          Point(4, 4), Point(0, 4)])

    def test_clockwise_square(self):
        assert is_convex(list(reversed(SQUARE)))

    def test_too_small(self):
        assert not is_convex(SQUARE[:2])

    def test_inner_normals_point_inward(self):
        normals = inner_normals(SQUARE)
        assert [(n.x, n.y) for n in normals] == [
            pytest.approx((0, 1)), pytest.approx((-1, 0)),
            pytest.approx((0, -1)), pytest.approx((1, 0))]
        ## same answer whatever the winding
        rev = inner_normals([Point(0, 0), Point(0, 4), Point(4, 4), Point(4, 0)])
        assert (rev[0].x, rev[0].y) == pytest.approx((1, 0))


class TestHulls:

    def test_square_with_interior_points(self):
        pts = BIG_SQUARE + [Point(5, 5), Point(2, 3), Point(5, 0), Point(7, 9)]
        assert convex_hull_graham(pts) == [Point(0, 0), Point(10, 0),
                                           Point(10, 10), Point(0, 10)]
        assert convex_hull_jarvis(pts) == [Point(0, 0), Point(0, 10),
                                           Point(10, 10), Point(10, 0)]

    def test_start_is_lowest_then_leftmost(self):
        pts = [Point(5, 1), Point(3, 1), Point(4, 6), Point(9, 3)]
        assert convex_hull_graham(pts)[0] == Point(3, 1)
        assert convex_hull_jarvis(pts)[0] == Point(3, 1)

    def test_small_inputs(self):
        assert convex_hull_graham([Point(1, 1)]) == [Point(1, 1)]
        assert convex_hull_jarvis([Point(1, 1), Point(1, 1), Point(2, 2)]) == \
            [Point(1, 1), Point(2, 2)]

    def test_collinear(self):
        pts = [Point(0, 0), Point(3, 3), Point(1, 1), Point(5, 5)]
        assert _keys(convex_hull_graham(pts)) == {(0, 0), (5, 5)}
        assert _keys(convex_hull_jarvis(pts)) == {(0, 0), (5, 5)}

    @pytest.mark.parametrize('seed', range(8))
    def test_random_hulls(self, seed):
        pts = _random_points(seed)
        graham = convex_hull_graham(pts)
        jarvis = convex_hull_jarvis(pts)
        assert hull_is_valid(graham, pts)
        assert hull_is_valid(jarvis, pts)
        assert _keys(graham) == _keys(jarvis)

    def test_input_not_mutated(self):
        pts = [Point(3, 3), Point(0, 0), Point(6, 0), Point(3, 6)]
        before = list(pts)
        convex_hull_graham(pts)
        convex_hull_jarvis(pts)
        assert pts == before


class TestIntersections:

    def test_crossing(self):
        p = segment_segment_intersection(Point(0, 0), Point(10, 10),
                                         Point(0, 10), Point(10, 0))
        assert p == Point(5, 5)

    def test_rounded(self):
        p = segment_segment_intersection(Point(0, 0), Point(3, 0),
                                         Point(1, -1), Point(2, 1))
        assert p == Point(2, 0)

    def test_parallel_and_missing(self):
        assert segment_segment_intersection(Point(0, 0), Point(5, 0),
                                            Point(0, 1), Point(5, 1)) is None
        assert segment_segment_intersection(Point(0, 0), Point(1, 1),
                                            Point(5, 0), Point(0, 5)) is None

    def test_polygon(self):
        hits = segment_polygon_intersections(Point(-5, 2), Point(15, 2), BIG_SQUARE)
        assert _keys(hits) == {(0, 2), (10, 2)}

    def test_polygon_through_vertices(self):
        hits = segment_polygon_intersections(Point(-5, -5), Point(15, 15), BIG_SQUARE)
        assert len(hits) == 2
        assert _keys(hits) == {(0, 0), (10, 10)}


class TestInside:

    def test_point_in_polygon(self):
        assert point_in_polygon(Point(5, 5), BIG_SQUARE)
        assert not point_in_polygon(Point(15, 5), BIG_SQUARE)
        assert not point_in_polygon(Point(3, 2), DENTED)
        assert point_in_polygon(Point(1, 2), DENTED)
        assert not point_in_polygon(Point(0, 0), SQUARE[:2])


class TestScanlineFill:

    def test_square(self):
        pix = fill_polygon_scanline(SQUARE)
        assert len(pix) == 20
        assert _keys(pix) == {(x, y) for x in range(5) for y in range(4)}

    @pytest.mark.parametrize('polygon', [
        SQUARE,
        [Point(0, 0), Point(8, 0), Point(4, 4), Point(8, 8), Point(0, 8)],
        [Point(0, 0), Point(10, 0), Point(5, 8)],
        [Point(-6, -3), Point(7, -5), Point(9, 6), Point(1, 2), Point(-4, 9)],
    ])
    def test_containment(self, polygon):
        pix = fill_polygon_scanline(polygon)
        assert pix
        assert polygon_contains_points(polygon, pix)

    def test_degenerate(self):
        assert fill_polygon_scanline(SQUARE[:2]) == []
        assert fill_polygon_scanline([Point(0, 0), Point(5, 0), Point(9, 0)]) == []
