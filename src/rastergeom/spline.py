"""Curve evaluators for rastergeom.

Provides sampling routines for Hermite, Bézier and uniform cubic
B-spline curves.  Every evaluator samples the parameter range uniformly
and rounds each sample to the nearest pixel; the ``_steps`` twins tag
the very same samples with their index, the total sample count and a
short description.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from rastergeom.geom import CurveStep, Point, as_point, iround

Sample = Tuple[float, float, str]


def _clamp_steps(steps: int) -> int:
    return max(1, int(steps))


def _to_steps(samples: Sequence[Sample]) -> List[CurveStep]:
    total = len(samples)
    return [CurveStep(iround(x), iround(y), step_index=i,
                      total_steps=total, description=desc)
            for i, (x, y, desc) in enumerate(samples)]


def _to_points(samples: Sequence[Sample]) -> List[Point]:
    return [Point(iround(x), iround(y)) for x, y, _ in samples]


## Hermite
## -------

def _hermite_samples(p0, p1, t0, t1, steps: int) -> List[Sample]:
    p0, p1, t0, t1 = (as_point(p) for p in (p0, p1, t0, t1))
    steps = _clamp_steps(steps)
    samples = []
    for i in range(steps + 1):
        t = i / steps
        h00 = 2 * t ** 3 - 3 * t ** 2 + 1
        h10 = t ** 3 - 2 * t ** 2 + t
        h01 = -2 * t ** 3 + 3 * t ** 2
        h11 = t ** 3 - t ** 2
        x = h00 * p0.x + h10 * t0.x + h01 * p1.x + h11 * t1.x
        y = h00 * p0.y + h10 * t0.y + h01 * p1.y + h11 * t1.y
        samples.append((x, y, 'Hermite t={:.2f}'.format(t)))
    return samples


def hermite(p0, p1, t0, t1, steps: int = 100) -> List[Point]:
    """Cubic Hermite curve from ``p0`` to ``p1`` with tangent vectors
    ``t0`` and ``t1``, sampled at ``steps + 1`` parameter values."""

    return _to_points(_hermite_samples(p0, p1, t0, t1, steps))


def hermite_steps(p0, p1, t0, t1, steps: int = 100) -> List[CurveStep]:
    """Trace twin of :func:`hermite`."""

    return _to_steps(_hermite_samples(p0, p1, t0, t1, steps))


## Bézier
## ------

def _bezier_samples(ctrl: Sequence, steps: int, label: str,
                    basis: Callable[[float], Sequence[float]]) -> List[Sample]:
    ctrl = [as_point(p) for p in ctrl]
    steps = _clamp_steps(steps)
    samples = []
    for i in range(steps + 1):
        t = i / steps
        weights = basis(t)
        x = sum(w * p.x for w, p in zip(weights, ctrl))
        y = sum(w * p.y for w, p in zip(weights, ctrl))
        samples.append((x, y, '{} t={:.2f}'.format(label, t)))
    return samples


def _quadratic_basis(t: float) -> Tuple[float, float, float]:
    s = 1.0 - t
    return s * s, 2 * s * t, t * t


def _cubic_basis(t: float) -> Tuple[float, float, float, float]:
    s = 1.0 - t
    return s * s * s, 3 * s * s * t, 3 * s * t * t, t * t * t


def quadratic_bezier(p0, p1, p2, steps: int = 50) -> List[Point]:
    """Quadratic Bézier curve through three control points."""

    return _to_points(_bezier_samples((p0, p1, p2), steps, 'Bezier',
                                      _quadratic_basis))


def quadratic_bezier_steps(p0, p1, p2, steps: int = 50) -> List[CurveStep]:
    """Trace twin of :func:`quadratic_bezier`."""
    return _to_steps(_bezier_samples((p0, p1, p2), steps, 'Bezier',
                                     _quadratic_basis))


def cubic_bezier(p0, p1, p2, p3, steps: int = 100) -> List[Point]:
    """Cubic Bézier curve evaluated with the Bernstein basis."""

    return _to_points(_bezier_samples((p0, p1, p2, p3), steps, 'Bezier',
                                      _cubic_basis))


def cubic_bezier_steps(p0, p1, p2, p3, steps: int = 100) -> List[CurveStep]:
    """Trace twin of :func:`cubic_bezier`."""

    return _to_steps(_bezier_samples((p0, p1, p2, p3), steps, 'Bezier',
                                     _cubic_basis))


## uniform cubic B-spline
## ----------------------

def _bspline_samples(points: Sequence, steps: int) -> List[Sample]:
    ctrl = [as_point(p) for p in points]
    steps = _clamp_steps(steps)
    count = len(ctrl)
    samples: List[Sample] = []

    if count < 4:
        ## too few points for a cubic window: connect them with straight spans
        if count < 2:
            return samples
        line_steps = max(10, steps // (count - 1))
        for i in range(count - 1):
            a = ctrl[i]
            b = ctrl[i + 1]
            for j in range(line_steps + 1):
                t = j / line_steps
                samples.append((a.x + t * (b.x - a.x),
                                a.y + t * (b.y - a.y),
                                'B-spline segment {}'.format(i + 1)))
        return samples

    n = count - 1
    for k in range(n):
        p0 = ctrl[max(0, k - 1)]
        p1 = ctrl[k]
        p2 = ctrl[k + 1]
        p3 = ctrl[min(n, k + 2)]
        for i in range(steps + 1):
            t = i / steps
            t2 = t * t
            t3 = t2 * t
            b0 = (1 - 3 * t + 3 * t2 - t3) / 6
            b1 = (4 - 6 * t2 + 3 * t3) / 6
            b2 = (1 + 3 * t + 3 * t2 - 3 * t3) / 6
            b3 = t3 / 6
            x = b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x
            y = b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y
            samples.append((x, y, 'B-spline segment {}/{}, t={:.2f}'.format(
                k + 1, n, t)))
    return samples


def bspline(points: Sequence, steps: int = 50) -> List[Point]:
    """Uniform cubic B-spline through ``points``.

    Each of the ``len(points) - 1`` segments uses the window
    ``[k-1, k, k+1, k+2]`` clamped to the ends of the array and is
    sampled at ``steps + 1`` parameter values.  With fewer than four
    control points the curve degrades to a sampled polyline.
    """

    return _to_points(_bspline_samples(points, steps))


def bspline_steps(points: Sequence, steps: int = 50) -> List[CurveStep]:
    """Trace twin of :func:`bspline`."""

    return _to_steps(_bspline_samples(points, steps))


__all__ = [
    'hermite',
    'hermite_steps',
    'quadratic_bezier',
    'quadratic_bezier_steps',
    'cubic_bezier',
    'cubic_bezier_steps',
    'bspline',
    'bspline_steps',
]
