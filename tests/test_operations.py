import pytest

from rastergeom import conics, lines
from rastergeom.clipping import Segment
from rastergeom.config import ConfigError
from rastergeom.delaunay import VoronoiEdge
from rastergeom.geom import Point
from rastergeom.operations import (
    Operation, Param, get_operation, list_operations, register,
)
from rastergeom.roberts import ProjectedFace

NAMES = [
    'bspline', 'circle', 'clip_cohen_sutherland', 'clip_cyrus_beck',
    'convex_hull_graham', 'convex_hull_jarvis', 'cubic_bezier', 'delaunay',
    'ellipse', 'fill_polygon', 'hermite', 'hyperbola', 'line_bresenham',
    'line_dda', 'line_wu', 'parabola', 'quadratic_bezier', 'roberts', 'voronoi',
]


def test_registry():
    assert [op.name for op in list_operations()] == NAMES
    with pytest.raises(ConfigError, match='unknown operation'):
        get_operation('teapot')


def test_signature():
    assert get_operation('line_dda').signature() == \
        'line_dda(x0: int = 0, y0: int = 0, x1: int = 10, y1: int = 4)'


class TestParam:

    def test_int(self):
        p = Param('n', 'int', 0)
        assert p.coerce('3') == 3
        assert p.coerce(3.0) == 3
        for bad in (2.5, True, 'abc', None):
            with pytest.raises(ValueError):
                p.coerce(bad)

    def test_float_and_bool(self):
        assert Param('f', 'float').coerce('2.5') == 2.5
        assert Param('f', 'float').coerce(2) == 2
        assert Param('b', 'bool').coerce('TRUE') is True
        assert Param('b', 'bool').coerce(False) is False
        with pytest.raises(ValueError):
            Param('b', 'bool').coerce('yes')

    def test_points(self):
        assert Param('p', 'point').coerce('1,2') == Point(1, 2)
        assert Param('p', 'point').coerce([1.5, 2]) == Point(1.5, 2)
        assert Param('ps', 'points').coerce('0,0; 4,0;') == [Point(0, 0), Point(4, 0)]
        assert Param('ps', 'points').coerce([[0, 0], (1, 2)]) == [Point(0, 0), Point(1, 2)]
        with pytest.raises(ValueError):
            Param('p', 'point').coerce('1,2,3')
        with pytest.raises(ValueError):
            Param('ps', 'points').coerce(5)

    def test_describe(self):
        assert Param('x', 'int').describe() == 'x: int'
        assert Param('x', 'int').required
        assert Param('p0', 'point', Point(1, 2)).describe() == 'p0: point = 1,2'


class TestBind:

    def test_defaults_and_coercion(self):
        op = get_operation('circle')
        assert op.bind({'radius': '7'}) == {'cx': 0, 'cy': 0, 'radius': 7}

    def test_unknown_and_bad(self):
        op = get_operation('circle')
        with pytest.raises(ConfigError, match='unknown parameters'):
            op.bind({'r': 5})
        with pytest.raises(ConfigError, match='circle.radius'):
            op.bind({'radius': 'big'})

    def test_required(self):
        op = Operation('needs_n', lambda n: n, (Param('n', 'int'),), 'test only')
        with pytest.raises(ConfigError, match='missing parameter'):
            op.bind({})
        assert op.run(n='4') == 4


class TestRun:

    def test_core_functions(self):
        assert get_operation('circle').run(radius=5) == conics.circle_bresenham(0, 0, 5)
        assert get_operation('line_bresenham').run_steps() == \
            lines.line_bresenham_steps(0, 0, 10, 4)

    def test_no_trace(self):
        with pytest.raises(ConfigError):
            get_operation('convex_hull_graham').run_steps()

    def test_every_default_runs(self):
        for op in list_operations():
            assert op.run(), op.name

    def test_clipping(self):
        for name in ('clip_cohen_sutherland', 'clip_cyrus_beck'):
            out = get_operation(name).run()
            assert len(out) == 1 and isinstance(out[0], Segment)
            seg = out[0]
            assert (seg.x1, seg.y1, seg.x2, seg.y2) == \
                pytest.approx((-10, -0.75, 10, 7.75))
            assert get_operation(name).run(x1=30, x2=40, y1=0, y2=0) == []

    def test_voronoi(self):
        edges = get_operation('voronoi').run()
        assert edges and all(isinstance(e, VoronoiEdge) for e in edges)
        for e in edges:
            for p in (e.start, e.end):
                assert -20 - 1e-9 <= p.x <= 20 + 1e-9
                assert -20 - 1e-9 <= p.y <= 20 + 1e-9

    def test_roberts(self):
        op = get_operation('roberts')
        faces = op.run()
        assert op.y_down
        assert len(faces) == 6 and all(isinstance(f, ProjectedFace) for f in faces)
        assert 1 <= sum(f.visible for f in faces) <= 3


def test_register_checks():
    with pytest.raises(ValueError, match='already registered'):
        register(get_operation('circle'))
    with pytest.raises(ValueError, match='polystyle'):
        register(Operation('bad_style', len, (), 'test only', polystyle='dots'))
    with pytest.raises(ValueError, match='kind'):
        register(Operation('bad_kind', len, (Param('x', 'complex'),), 'test only'))
    with pytest.raises(ConfigError):
        get_operation('bad_style')


def test_roberts_on_eye_plane():
    faces = get_operation('roberts').run(rx=0, ry=0, rz=0, scale=10, distance=0.5)
    assert len(faces) == 6
