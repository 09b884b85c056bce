"""Pixel-grid drawable backed by a numpy intensity array."""

from __future__ import annotations

import numpy as np

from rastergeom import drawable
from rastergeom.geom import iround
from rastergeom.lines import line_bresenham

## text shades, darkest first: (minimum intensity, character)
SHADES = ((0.999, '#'), (0.5, '+'), (0.0, '.'))

## hidden lines draw DASH_ON pixels, then skip DASH_OFF
DASH_ON = 2
DASH_OFF = 2


class GridDraw(drawable.Drawable):
    """Rasterize results onto a ``height`` x ``width`` float grid.

    Grid coordinates are y-up: row 0 of the array is the bottom of the
    picture.  With ``origin='center'`` the point (0, 0) sits in the middle
    of the grid, with ``origin='corner'`` in the lower left.  Set
    ``y_down`` for results already in canvas coordinates, where y grows
    downward.
    """

    def __init__(self, width=41, height=41, origin='center', y_down=False):
        super().__init__()
        if width < 1 or height < 1:
            raise ValueError(f'bad grid size: {width}x{height}')
        if origin not in ('center', 'corner'):
            raise ValueError(f'bad grid origin: {origin}')
        self.width = int(width)
        self.height = int(height)
        self.origin = origin
        self.y_down = y_down
        self.grid = np.zeros((self.height, self.width), dtype=float)
        self.__linetypelist = [False, 'Continuous', 'DASHED']
        if origin == 'center':
            self.ox = self.width // 2
            self.oy = self.height // 2
        else:
            self.ox = 0
            self.oy = 0

    def __repr__(self):
        return f'an instance of GridDraw ({self.width}x{self.height})'

    @drawable.Drawable.linetype.setter
    def linetype(self, linetype=False):
        if linetype not in self.__linetypelist:
            raise ValueError('bad linetype in linetypeset: {}'.format(linetype))
        self._set_linetype(linetype)

    def cell(self, p):
        """Array index ``(row, col)`` of a point, or ``None`` off grid"""
        col = iround(p.x) + self.ox
        if self.y_down:
            row = self.height - 1 - (iround(p.y) + self.oy)
        else:
            row = iround(p.y) + self.oy
        if 0 <= col < self.width and 0 <= row < self.height:
            return row, col
        return None

    def clear(self):
        self.grid[:, :] = 0.0

    ## Overload virtual drawable base class drawing methods

    def draw_pixel(self, p, intensity=1.0):
        idx = self.cell(p)
        if idx is None:
            return
        self.grid[idx] = max(self.grid[idx], float(intensity))

    def draw_line(self, p1, p2):
        dashed = self.layer == 'HIDDEN' or self.linetype == 'DASHED'
        pts = line_bresenham(iround(p1.x), iround(p1.y),
                             iround(p2.x), iround(p2.y))
        for i, p in enumerate(pts):
            if dashed and i % (DASH_ON + DASH_OFF) >= DASH_ON:
                continue
            self.draw_pixel(p)

    def count(self) -> int:
        """Number of lit cells"""
        return int(np.count_nonzero(self.grid))

    def render_text(self) -> str:
        """The grid as text, top row first"""
        lines = []
        for row in range(self.height - 1, -1, -1):
            chars = []
            for v in self.grid[row]:
                ch = ' '
                if v > 0:
                    for level, shade in SHADES:
                        if v >= level:
                            ch = shade
                            break
                chars.append(ch)
            lines.append(''.join(chars).rstrip())
        return '\n'.join(lines)

    def display(self):
        print(self.render_text())
        return True


__all__ = ['GridDraw']
