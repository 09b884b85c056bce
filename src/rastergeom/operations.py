"""Named registry of the drawing operations offered on the command line
and in scene files.

Each ``Operation`` wraps one core function together with a typed
parameter list, so that values arriving as strings (``--param x0=3``,
``--param points="0,0;4,0;2,3"``) or as YAML scalars and lists can be
checked and coerced before the function runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import radians
from typing import Any, Callable, Dict, List, Optional, Tuple

from rastergeom import conics, lines, poly, spline
from rastergeom.clipping import Segment, cohen_sutherland_clip, cyrus_beck_clip
from rastergeom.config import ConfigError
from rastergeom.delaunay import (
    delaunay_triangulation, delaunay_triangulation_steps,
    voronoi_from_delaunay, voronoi_from_delaunay_steps,
)
from rastergeom.geom import ClipWindow, Point, as_point, isgoodnum
from rastergeom.roberts import roberts_visibility, rotate_vertices, unit_cube

logger = logging.getLogger(__name__)

PARAM_KINDS = ('int', 'float', 'bool', 'point', 'points')

## marks a parameter without a default
REQUIRED = object()


def _parse_point(value) -> Point:
    if isinstance(value, str):
        parts = value.split(',')
        if len(parts) != 2:
            raise ValueError(f"expected 'x,y', got: {value!r}")
        return Point(_number(parts[0]), _number(parts[1]))
    return as_point(value)


def _number(text: str):
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _parse_points(value) -> List[Point]:
    if isinstance(value, str):
        return [_parse_point(p) for p in value.split(';') if p.strip()]
    if isinstance(value, (list, tuple)):
        return [_parse_point(p) for p in value]
    raise ValueError(f"expected a point list, got: {value!r}")


@dataclass(frozen=True)
class Param:
    name: str
    kind: str
    default: Any = REQUIRED

    @property
    def required(self) -> bool:
        return self.default is REQUIRED

    def coerce(self, value):
        """Convert ``value`` to this parameter's kind or raise
        ``ValueError``"""
        if self.kind == 'int':
            if isinstance(value, str):
                value = _number(value)
            if isgoodnum(value) and float(value).is_integer():
                return int(value)
            raise ValueError(f"expected an integer, got: {value!r}")
        if self.kind == 'float':
            if isinstance(value, str):
                value = _number(value)
            if isgoodnum(value):
                return value
            raise ValueError(f"expected a number, got: {value!r}")
        if self.kind == 'bool':
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.lower() in ('true', 'false'):
                return value.lower() == 'true'
            raise ValueError(f"expected true or false, got: {value!r}")
        if self.kind == 'point':
            return _parse_point(value)
        return _parse_points(value)

    def describe(self) -> str:
        if self.required:
            return f"{self.name}: {self.kind}"
        default = self.default
        if isinstance(default, Point):
            default = f"{default.x},{default.y}"
        return f"{self.name}: {self.kind} = {default}"


@dataclass(frozen=True)
class Operation:
    """A core function exposed by name.

    ``polystyle`` tells a drawable how to draw a bare point list result
    and ``y_down`` marks results in canvas coordinates.
    """

    name: str
    func: Callable
    params: Tuple[Param, ...]
    description: str
    trace: Optional[Callable] = None
    polystyle: str = 'points'
    y_down: bool = False

    def bind(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Check and coerce ``values``, filling in defaults"""
        known = {p.name for p in self.params}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(
                f"unknown parameters for {self.name}: {sorted(unknown)}")
        bound = {}
        for p in self.params:
            if p.name in values:
                try:
                    bound[p.name] = p.coerce(values[p.name])
                except ValueError as e:
                    raise ConfigError(
                        f"bad value for {self.name}.{p.name}: {e}") from e
            elif p.required:
                raise ConfigError(f"missing parameter {self.name}.{p.name}")
            else:
                bound[p.name] = p.default
        return bound

    def run(self, **values):
        kwargs = self.bind(values)
        logger.debug('running %s with %s', self.name, kwargs)
        return self.func(**kwargs)

    def run_steps(self, **values):
        if self.trace is None:
            raise ConfigError(f"operation {self.name} has no step trace")
        kwargs = self.bind(values)
        logger.debug('tracing %s with %s', self.name, kwargs)
        return self.trace(**kwargs)

    def signature(self) -> str:
        return f"{self.name}({', '.join(p.describe() for p in self.params)})"


_REGISTRY: Dict[str, Operation] = {}


def register(op: Operation) -> Operation:
    if op.name in _REGISTRY:
        raise ValueError(f"operation already registered: {op.name}")
    if op.polystyle not in ('points', 'lines', 'polygon', 'both'):
        raise ValueError(f"bad polystyle for {op.name}: {op.polystyle}")
    for p in op.params:
        if p.kind not in PARAM_KINDS:
            raise ValueError(f"bad parameter kind for {op.name}.{p.name}: {p.kind}")
    _REGISTRY[op.name] = op
    return op


def get_operation(name: str) -> Operation:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise ConfigError(f"unknown operation: {name}") from None


def list_operations() -> List[Operation]:
    return sorted(_REGISTRY.values(), key=lambda op: op.name)


## adapters for functions whose signatures don't map onto flat parameters
## ------------------------------------------------------------------------

def _clip_with(algorithm):
    def clip(x1, y1, x2, y2, x_min, y_min, x_max, y_max):
        window = ClipWindow.from_corners((x_min, y_min), (x_max, y_max))
        seg = algorithm(Segment(x1, y1, x2, y2), window)
        return [] if seg is None else [seg]
    return clip


def _voronoi(points, x_min, y_min, x_max, y_max):
    box = ClipWindow.from_corners((x_min, y_min), (x_max, y_max))
    return voronoi_from_delaunay(delaunay_triangulation(points), box)


def _voronoi_steps(points, x_min, y_min, x_max, y_max):
    box = ClipWindow.from_corners((x_min, y_min), (x_max, y_max))
    return voronoi_from_delaunay_steps(delaunay_triangulation(points), box)


def _roberts(rx, ry, rz, scale, distance):
    vertices, faces = unit_cube()
    vertices = rotate_vertices(vertices, radians(rx), radians(ry), radians(rz))
    return roberts_visibility(vertices, faces, scale=scale, distance=distance)


def _line(x0=0, y0=0, x1=10, y1=4):
    return (Param('x0', 'int', x0), Param('y0', 'int', y0),
            Param('x1', 'int', x1), Param('y1', 'int', y1))


_CLIP_PARAMS = (
    Param('x1', 'float', -20), Param('y1', 'float', -5),
    Param('x2', 'float', 20), Param('y2', 'float', 12),
    Param('x_min', 'float', -10), Param('y_min', 'float', -8),
    Param('x_max', 'float', 10), Param('y_max', 'float', 8),
)

_SITES = [Point(-12, -8), Point(10, -10), Point(14, 6), Point(-4, 12),
          Point(0, 0), Point(-15, 5)]


for _op in (
    Operation('line_dda', lines.line_dda, _line(),
              'digital differential analyzer line', lines.line_dda_steps),
    Operation('line_bresenham', lines.line_bresenham, _line(),
              'Bresenham integer line', lines.line_bresenham_steps),
    Operation('line_wu', lines.line_wu,
              (Param('x0', 'float', 0), Param('y0', 'float', 0),
               Param('x1', 'float', 10), Param('y1', 'float', 4)),
              'Wu antialiased line'),
    Operation('circle', conics.circle_bresenham,
              (Param('cx', 'int', 0), Param('cy', 'int', 0),
               Param('radius', 'int', 10)),
              'Bresenham circle', conics.circle_bresenham_steps),
    Operation('ellipse', conics.ellipse_midpoint,
              (Param('cx', 'int', 0), Param('cy', 'int', 0),
               Param('a', 'int', 15), Param('b', 'int', 8)),
              'midpoint ellipse', conics.ellipse_midpoint_steps),
    Operation('parabola', conics.parabola,
              (Param('vx', 'int', 0), Param('vy', 'int', 0),
               Param('p', 'float', 4), Param('max_length', 'int', 15)),
              'parabola x^2 = 2py, opening toward screen top',
              conics.parabola_steps),
    Operation('hyperbola', conics.hyperbola,
              (Param('cx', 'int', 0), Param('cy', 'int', 0),
               Param('a', 'float', 5), Param('b', 'float', 4),
               Param('limit', 'int', 15)),
              'hyperbola x^2/a^2 - y^2/b^2 = 1', conics.hyperbola_steps),
    Operation('hermite', spline.hermite,
              (Param('p0', 'point', Point(-15, 0)), Param('p1', 'point', Point(15, 0)),
               Param('t0', 'point', Point(0, 40)), Param('t1', 'point', Point(0, -40)),
               Param('steps', 'int', 100)),
              'cubic Hermite curve', spline.hermite_steps, polystyle='lines'),
    Operation('quadratic_bezier', spline.quadratic_bezier,
              (Param('p0', 'point', Point(-15, -10)), Param('p1', 'point', Point(0, 15)),
               Param('p2', 'point', Point(15, -10)), Param('steps', 'int', 50)),
              'quadratic Bezier curve', spline.quadratic_bezier_steps,
              polystyle='lines'),
    Operation('cubic_bezier', spline.cubic_bezier,
              (Param('p0', 'point', Point(-15, -10)), Param('p1', 'point', Point(-5, 15)),
               Param('p2', 'point', Point(5, -15)), Param('p3', 'point', Point(15, 10)),
               Param('steps', 'int', 100)),
              'cubic Bezier curve', spline.cubic_bezier_steps, polystyle='lines'),
    Operation('bspline', spline.bspline,
              (Param('points', 'points',
                     [Point(-15, -5), Point(-8, 10), Point(0, -10),
                      Point(8, 10), Point(15, -5)]),
               Param('steps', 'int', 50)),
              'uniform cubic B-spline', spline.bspline_steps, polystyle='lines'),
    Operation('convex_hull_graham', poly.convex_hull_graham,
              (Param('points', 'points', _SITES),),
              'convex hull by Graham scan', polystyle='polygon'),
    Operation('convex_hull_jarvis', poly.convex_hull_jarvis,
              (Param('points', 'points', _SITES),),
              'convex hull by Jarvis march', polystyle='polygon'),
    Operation('fill_polygon', poly.fill_polygon_scanline,
              (Param('polygon', 'points',
                     [Point(-12, -8), Point(12, -8), Point(4, 0),
                      Point(12, 10), Point(-12, 10)]),),
              'scanline polygon fill with an active edge table'),
    Operation('delaunay', delaunay_triangulation,
              (Param('points', 'points', _SITES),),
              'Delaunay triangulation', delaunay_triangulation_steps),
    Operation('voronoi', _voronoi,
              (Param('points', 'points', _SITES),
               Param('x_min', 'float', -20), Param('y_min', 'float', -20),
               Param('x_max', 'float', 20), Param('y_max', 'float', 20)),
              'Voronoi diagram from the Delaunay triangulation', _voronoi_steps),
    Operation('clip_cohen_sutherland', _clip_with(cohen_sutherland_clip),
              _CLIP_PARAMS, 'Cohen-Sutherland segment clipping'),
    Operation('clip_cyrus_beck', _clip_with(cyrus_beck_clip),
              _CLIP_PARAMS, 'Cyrus-Beck segment clipping'),
    Operation('roberts', _roberts,
              (Param('rx', 'float', 25), Param('ry', 'float', 35),
               Param('rz', 'float', 0), Param('scale', 'float', 12),
               Param('distance', 'float', 3)),
              'unit cube with Roberts hidden faces (angles in degrees)',
              y_down=True),
):
    register(_op)


__all__ = [
    'Param',
    'Operation',
    'register',
    'get_operation',
    'list_operations',
]
