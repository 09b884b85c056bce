import pytest

from rastergeom.geom import Point, plain_points
from rastergeom.spline import (
    bspline,
    bspline_steps,
    cubic_bezier,
    cubic_bezier_steps,
    hermite,
    hermite_steps,
    quadratic_bezier,
    quadratic_bezier_steps,
)

CTRL = [Point(-15, -5), Point(-8, 10), Point(0, -10), Point(8, 10), Point(15, -5)]


def test_cubic_bezier_endpoints():
    pts = cubic_bezier((0, 0), (5, 20), (15, 20), (20, 0), steps=40)
    assert len(pts) == 41
    assert pts[0] == Point(0, 0)
    assert pts[-1] == Point(20, 0)


def test_quadratic_bezier_midpoint():
    pts = quadratic_bezier(Point(0, 0), Point(10, 20), Point(20, 0), steps=2)
    assert pts == [Point(0, 0), Point(10, 10), Point(20, 0)]


def test_hermite_endpoints():
    pts = hermite(Point(-10, 0), Point(10, 0), Point(0, 30), Point(0, -30), steps=20)
    assert len(pts) == 21
    assert pts[0] == Point(-10, 0)
    assert pts[-1] == Point(10, 0)
    ## positive starting tangent lifts the curve above the chord
    assert max(p.y for p in pts) > 0


def test_hermite_straight_tangents_give_line():
    pts = hermite(Point(0, 0), Point(9, 0), Point(9, 0), Point(9, 0), steps=9)
    assert [p.y for p in pts] == [0] * 10
    assert [p.x for p in pts] == list(range(10))


def test_steps_clamped_to_one():
    assert cubic_bezier((0, 0), (1, 1), (2, 1), (3, 0), steps=0) == [Point(0, 0), Point(3, 0)]
    assert len(hermite((0, 0), (4, 0), (0, 0), (0, 0), steps=-5)) == 2


class TestBSpline:

    def test_segments_and_samples(self):
        pts = bspline(CTRL, steps=10)
        assert len(pts) == 4 * 11

    def test_polyline_fallback(self):
        ctrl = [Point(0, 0), Point(10, 0), Point(10, 10)]
        pts = bspline(ctrl, steps=50)
        ## max(10, 50 // 2) samples per span, both ends included
        assert len(pts) == 2 * 26
        assert pts[0] == Point(0, 0)
        assert pts[-1] == Point(10, 10)
        assert all(p.y == 0 for p in pts[:26])

    def test_polyline_minimum_density(self):
        assert len(bspline([Point(0, 0), Point(5, 5), Point(9, 0)], steps=4)) == 2 * 11

    def test_too_few_points(self):
        assert bspline([Point(1, 1)]) == []
        assert bspline([]) == []

    def test_convex_hull_property(self):
        xs = [p.x for p in CTRL]
        ys = [p.y for p in CTRL]
        for p in bspline(CTRL, steps=20):
            assert min(xs) <= p.x <= max(xs)
            assert min(ys) <= p.y <= max(ys)

    def test_descriptions(self):
        trace = bspline_steps(CTRL, steps=4)
        assert trace[0].description == 'B-spline segment 1/4, t=0.00'
        assert trace[-1].description == 'B-spline segment 4/4, t=1.00'
        short = bspline_steps([Point(0, 0), Point(10, 0)], steps=20)
        assert short[0].description == 'B-spline segment 1'


@pytest.mark.parametrize('plain,traced,args', [
    (hermite, hermite_steps, (Point(0, 0), Point(20, 5), Point(10, 30), Point(5, -20), 33)),
    (quadratic_bezier, quadratic_bezier_steps, (Point(0, 0), Point(7, 19), Point(20, 3), 17)),
    (cubic_bezier, cubic_bezier_steps, (Point(0, 0), Point(3, 14), Point(17, -9), Point(20, 4), 50)),
    (bspline, bspline_steps, (CTRL, 12)),
    (bspline, bspline_steps, (CTRL[:3], 12)),
])
def test_trace_matches_plain(plain, traced, args):
    trace = traced(*args)
    assert plain_points(trace) == plain(*args)
    assert [s.step_index for s in trace] == list(range(len(trace)))
    assert all(s.total_steps == len(trace) for s in trace)


def test_trace_variants_name_their_twin():
    for traced in (hermite_steps, quadratic_bezier_steps, cubic_bezier_steps, bspline_steps):
        assert traced.__doc__ and 'twin' in traced.__doc__.lower()
