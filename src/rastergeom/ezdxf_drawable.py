## simple rastergeom framework for dxf-rendered drawable objects using
## ezdxf package.
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

import ezdxf

import rastergeom.drawable as drawable

DXF_LAYERS = (False, '0', 'PIXELS', 'LINES', 'HIDDEN')

## class to provide dxf drawing functionality
class ezdxfDraw(drawable.Drawable):

    def __init__(self):
        super().__init__()

        # setup=False avoids creating default blocks (like _CLOSEDFILLED) that
        # contain SOLID entities unsupported by some CAD programs (e.g., FreeCAD)
        self.__doc = ezdxf.new(dxfversion='R2010', setup=False)
        self.__doc.linetypes.add('DASHED', pattern=[0.6, 0.5, -0.1],
                                 description='Dashed __ __ __ __')
        self.__doc.layers.new('PIXELS', dxfattribs={'color': 7}) #white
        self.__doc.layers.new('LINES', dxfattribs={'color': 4}) #aqua
        self.__doc.layers.new('HIDDEN', dxfattribs={'color': 8, #gray
                                                    'linetype': 'DASHED'})
        self.__linetypelist = [False, 'Continuous', 'DASHED']
        self.__msp = self.__doc.modelspace()
        self.__filename = "rastergeom-out"
        self.layerlist = list(DXF_LAYERS)

    def __repr__(self):
        return 'an instance of ezdxfDraw'

    ## properties

    @drawable.Drawable.linetype.setter
    def linetype(self, linetype=False):
        if not linetype in self.__linetypelist:
            raise ValueError('bad linetype in linetypeset: {}'.format(linetype))
        self._set_linetype(linetype)

    @property
    def filename(self):
        return self.__filename

    def _set_filename(self, name):
        self.__filename = name

    @filename.setter
    def filename(self, name):
        if not isinstance(name, str):
            raise ValueError('bad (non-string) filename: ' + str(name))
        self._set_filename(name)

    @property
    def doc(self):
        return self.__doc

    def _attribs(self, default_layer):
        layer = self.layer
        if layer == False:
            layer = default_layer
        linetype = self.linetype
        if linetype == False:
            linetype = 'BYLAYER'
        return {'layer': layer, 'linetype': linetype}

    ## Overload virtual rastergeom drawable base class drawing methods

    def draw_pixel(self, p, intensity=1.0):
        self.__msp.add_point((p.x, p.y), dxfattribs=self._attribs('PIXELS'))

    def draw_line(self, p1, p2):
        self.__msp.add_line((p1.x, p1.y), (p2.x, p2.y),
                            dxfattribs=self._attribs('LINES'))

    def draw_polyline(self, pts, closed=False):
        if len(pts) < 2:
            return
        self.__msp.add_lwpolyline([(p.x, p.y) for p in pts], close=closed,
                                  dxfattribs=self._attribs('LINES'))

    def display(self):
        self.__doc.saveas("{}.dxf".format(self.filename))
        return True
