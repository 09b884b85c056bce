## base class of drawable for rastergeom
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

import logging

from rastergeom.clipping import Segment
from rastergeom.delaunay import (
    DelaunayStep, Triangle, VoronoiEdge, VoronoiStep,
)
from rastergeom.geom import Point, WuPixel
from rastergeom.roberts import ProjectedFace

logger = logging.getLogger(__name__)

## Generic drawing functions -- assumed to use the current drawing
## pen (layer, line type)

class Drawable:
    """Base class for rastergeom drawables"""

    ## pure virtual functions -- override for specific rendering
    ## system
    def draw_pixel(self, p, intensity=1.0):
        logger.warning("pure virtual draw_pixel called: %s, %s", p, intensity)

    def draw_line(self, p1, p2):
        logger.warning("pure virtual draw_line called: %s, %s", p1, p2)

    ## non-virtual utility drawing functions
    def draw_polyline(self, pts, closed=False):
        for i in range(1, len(pts)):
            self.draw_line(pts[i - 1], pts[i])
        if closed and len(pts) > 2:
            self.draw_line(pts[-1], pts[0])

    def draw_face(self, face):
        """Draw a projected face as a closed outline, hidden faces on the
        ``HIDDEN`` layer"""
        saved = self.layer
        if not face.visible and 'HIDDEN' in self.layerlist:
            self.layer = 'HIDDEN'
        try:
            self.draw_polyline(face.points, closed=True)
        finally:
            self.layer = saved

    def __init__(self):
        self.__polystyle = 'points'
        self.__linetype = False
        self.__layer = False
        self.__layerlist = [False, 'default', 'HIDDEN']

    ## Various property functions

    @property
    def layerlist(self):
        return self.__layerlist

    def _set_layerlist(self, lst):
        self.__layerlist = lst

    @layerlist.setter
    def layerlist(self, lst):
        if isinstance(lst, list):
            self._set_layerlist(lst)
        else:
            raise ValueError('bad layer list ' + str(lst))

    @property
    def layer(self):
        return self.__layer

    def _set_layer(self, lyr):
        self.__layer = lyr

    @layer.setter
    def layer(self, lyr=False):
        if lyr in self.layerlist:
            self._set_layer(lyr)
        else:
            raise ValueError('bad layer: ' + str(lyr))

    ## how a bare point sequence is drawn: as pixels (rasterizer
    ## output), as an open polyline, as a closed polygon, or both
    ## pixels and polyline
    @property
    def polystyle(self):
        return self.__polystyle

    def _set_polystyle(self, pst):
        self.__polystyle = pst

    @polystyle.setter
    def polystyle(self, pst=False):
        if pst in ['points', 'lines', 'polygon', 'both']:
            self._set_polystyle(pst)
        else:
            raise ValueError('bad polystyle')

    @property
    def linetype(self):
        return self.__linetype

    def _set_linetype(self, lt):
        self.__linetype = lt

    @linetype.setter
    def linetype(self, lt=False):
        if lt in [False, 'Continuous']:       # only continuous linetype supported in base class
            self._set_linetype(False)
        else:
            raise ValueError('unsupported linetype ' + str(lt))

    ## non-property methods

    def __repr__(self):
        return 'an abstract Drawable instance'

    def _draw_points(self, pts):
        style = self.polystyle
        if style in ('points', 'both'):
            for p in pts:
                self.draw(p)
        if style in ('lines', 'both'):
            self.draw_polyline(pts)
        elif style == 'polygon':
            self.draw_polyline(pts, closed=True)

    def draw(self, x):
        if isinstance(x, WuPixel):
            self.draw_pixel(x, x.intensity)
        elif isinstance(x, Point):
            self.draw_pixel(x)
        elif isinstance(x, Segment):
            self.draw_line(x.start, x.end)
        elif isinstance(x, VoronoiEdge):
            self.draw_line(x.start, x.end)
        elif isinstance(x, Triangle):
            self.draw_polyline(list(x), closed=True)
        elif isinstance(x, ProjectedFace):
            self.draw_face(x)
        elif isinstance(x, DelaunayStep):
            for t in x.triangles:
                self.draw(t)
        elif isinstance(x, VoronoiStep):
            for e in x.edges:
                self.draw(e)
        elif isinstance(x, (list, tuple)):
            if x and all(isinstance(e, Point) and not isinstance(e, WuPixel)
                         for e in x):
                self._draw_points(x)
            else:
                ## a list of results, or a list of lists; bad elements
                ## are caught in the else case below
                for e in x:
                    self.draw(e)
        else:
            raise ValueError(f'bad argument to Drawable.draw(): {x}')

    ## cause drawing page to be rendered -- pure virtual in base class
    def display(self):
        logger.warning('pure virtual display function called')
        return True
