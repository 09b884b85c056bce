import pytest

from rastergeom.geom import (
    ClipWindow,
    CurveStep,
    Point,
    StepInfo,
    WuPixel,
    as_point,
    bounds,
    centroid,
    cross,
    dedupe,
    edge_key,
    fpart,
    iround,
    plain_points,
    point_key,
    rfpart,
)
## unit tests for rastergeom geom.py


class TestScalars:
    """rounding and fractional helpers"""

    def test_iround_half_up(self):
        assert iround(2.5) == 3
        assert iround(-2.5) == -2
        assert iround(0.49) == 0
        assert iround(-0.51) == -1

    def test_fpart(self):
        assert fpart(3.25) == pytest.approx(0.25)
        assert fpart(-0.25) == pytest.approx(0.75)
        assert rfpart(3.25) == pytest.approx(0.75)


class TestPoints:
    """point construction, keys and helpers"""

    def test_as_point_variants(self):
        p = Point(3, 4)
        assert as_point(3, 4) == p
        assert as_point((3, 4)) == p
        assert as_point([3, 4]) == p
        assert as_point(p) == p
        assert as_point(StepInfo(3, 4, delta_i=2)) == p

    def test_as_point_rejects_garbage(self):
        with pytest.raises(ValueError):
            as_point('3,4')
        with pytest.raises(ValueError):
            as_point(True, False)
        with pytest.raises(ValueError):
            as_point((1,))

    def test_keys(self):
        assert point_key(Point(3, 4)) == '3,4'
        assert point_key(Point(3.0, -4.0)) == '3,-4'
        assert Point(1, 2).key == '1,2'
        assert edge_key(Point(0, 0), Point(4, 4)) == edge_key(Point(4, 4), Point(0, 0))

    def test_trace_records_strip_to_points(self):
        recs = [StepInfo(1, 2, delta_i=-3, step_kind='H'),
                CurveStep(2, 3, step_index=1, total_steps=2, description='x'),
                WuPixel(4, 5, intensity=0.5)]
        assert plain_points(recs) == [Point(1, 2), Point(2, 3), Point(4, 5)]
        assert all(type(p) is Point for p in plain_points(recs))

    def test_points_unpack(self):
        x, y = Point(7, 8)
        assert (x, y) == (7, 8)

    def test_cross_sign(self):
        assert cross(Point(0, 0), Point(1, 0), Point(0, 1)) > 0
        assert cross(Point(0, 0), Point(1, 0), Point(0, -1)) < 0
        assert cross(Point(0, 0), Point(1, 0), Point(5, 0)) == 0

    def test_dedupe_keeps_first(self):
        pts = [Point(1, 1), Point(2, 2), Point(1.0, 1.0), Point(3, 3)]
        assert dedupe(pts) == [Point(1, 1), Point(2, 2), Point(3, 3)]

    def test_centroid_and_bounds(self):
        pts = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)]
        assert centroid(pts) == Point(2, 2)
        assert bounds(pts) == (0, 0, 4, 4)
        assert bounds([]) is None


def test_clip_window_from_corners():
    w = ClipWindow.from_corners((10, -2), (-3, 7))
    assert (w.x_min, w.y_min, w.x_max, w.y_max) == (-3, -2, 10, 7)
    assert w.contains(Point(0, 0))
    assert not w.contains(Point(11, 0))
