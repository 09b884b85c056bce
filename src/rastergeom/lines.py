## line rasterization algorithms for rastergeom
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

"""Line rasterizers.

Each rasterizer takes two grid endpoints and returns the ordered pixel
sequence approximating the segment between them.  ``line_dda`` and
``line_bresenham`` have ``_steps`` twins that also report the running
decision value and the kind of move that reached each pixel.
"""

from __future__ import annotations

from math import floor
from typing import Dict, List, Tuple

from rastergeom.geom import Point, StepInfo, WuPixel, fpart, iround, rfpart

## pixels dimmer than this are not worth drawing
WU_MIN_INTENSITY = 0.15


def _step_kind(prev: Point | None, cur: Point, major_x: bool) -> str:
    if prev is None:
        return 'H' if major_x else 'V'
    moved_x = cur.x != prev.x
    moved_y = cur.y != prev.y
    if moved_x and moved_y:
        return 'D'
    if moved_y:
        return 'V'
    return 'H'


def line_dda(x0: int, y0: int, x1: int, y1: int) -> List[Point]:
    """Digital differential analyzer.  Walks ``max(|dx|, |dy|)`` equal
    steps and rounds each sample to the nearest pixel."""
    dx = x1 - x0
    dy = y1 - y0
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        return [Point(x0, y0)]

    xinc = dx / steps
    yinc = dy / steps
    x = float(x0)
    y = float(y0)
    points = []
    for _ in range(int(steps) + 1):
        points.append(Point(iround(x), iround(y)))
        x += xinc
        y += yinc
    return points


def line_dda_steps(x0: int, y0: int, x1: int, y1: int) -> List[StepInfo]:
    """Trace twin of :func:`line_dda`.  ``delta_i`` is the signed rounding
    error along the minor axis."""
    dx = x1 - x0
    dy = y1 - y0
    steps = max(abs(dx), abs(dy))
    major_x = abs(dx) >= abs(dy)
    if steps == 0:
        return [StepInfo(x0, y0, delta_i=0.0, step_kind='H')]

    xinc = dx / steps
    yinc = dy / steps
    x = float(x0)
    y = float(y0)
    trace = []
    prev = None
    for _ in range(int(steps) + 1):
        p = Point(iround(x), iround(y))
        err = (p.y - y) if major_x else (p.x - x)
        trace.append(StepInfo(p.x, p.y, delta_i=err,
                              step_kind=_step_kind(prev, p, major_x)))
        prev = p
        x += xinc
        y += yinc
    return trace


def line_bresenham(x0: int, y0: int, x1: int, y1: int) -> List[Point]:
    """Integer Bresenham line, inclusive of both endpoints, valid in every
    octant."""
    return [s.plain() for s in line_bresenham_steps(x0, y0, x1, y1)]


def line_bresenham_steps(x0: int, y0: int, x1: int, y1: int) -> List[StepInfo]:
    """Trace twin of :func:`line_bresenham`.  ``delta_i`` is the error
    term ``err`` at the moment the pixel is emitted."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    major_x = dx >= dy

    err = dx - dy
    x, y = x0, y0
    trace = []
    prev = None
    while True:
        p = Point(x, y)
        trace.append(StepInfo(x, y, delta_i=err,
                              step_kind=_step_kind(prev, p, major_x)))
        prev = p
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
    return trace


def line_wu(x0: float, y0: float, x1: float, y1: float) -> List[WuPixel]:
    """Xiaolin Wu antialiased line.

    Every column (every row for steep lines) splits unit intensity
    between the two pixels straddling the ideal line.  The two end
    columns are additionally weighted by how much of their pixel the
    segment covers, so integer endpoints weigh 1.  Contributions to the
    same pixel keep the larger intensity, and pixels below
    ``WU_MIN_INTENSITY`` are dropped.
    """
    steep = abs(y1 - y0) > abs(x1 - x0)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = y1 - y0
    gradient = 0.0 if dx == 0 else dy / dx

    pixels: Dict[Tuple[int, int], float] = {}

    def plot(col: int, row: int, c: float) -> None:
        key = (row, col) if steep else (col, row)
        c = min(1.0, max(0.0, c))
        if c > pixels.get(key, -1.0):
            pixels[key] = c

    def plot_column(col: int, yexact: float, weight: float) -> None:
        row = int(floor(yexact))
        plot(col, row, rfpart(yexact) * weight)
        plot(col, row + 1, fpart(yexact) * weight)

    ## first endpoint
    xend = iround(x0)
    yend = y0 + gradient * (xend - x0)
    plot_column(xend, yend, 1.0 - abs(x0 - xend))
    xpxl1 = xend

    ## second endpoint
    xend = iround(x1)
    yend = y1 + gradient * (xend - x1)
    xpxl2 = xend

    ## interior columns
    for col in range(xpxl1 + 1, xpxl2):
        plot_column(col, y0 + gradient * (col - x0), 1.0)

    if xpxl2 != xpxl1:
        plot_column(xpxl2, yend, 1.0 - abs(x1 - xpxl2))

    return [WuPixel(k[0], k[1], intensity=c)
            for k, c in pixels.items() if c >= WU_MIN_INTENSITY]


__all__ = [
    'WU_MIN_INTENSITY',
    'line_dda',
    'line_dda_steps',
    'line_bresenham',
    'line_bresenham_steps',
    'line_wu',
]
