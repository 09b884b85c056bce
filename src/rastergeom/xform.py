## 4x4 homogeneous matrix transformations for rastergeom

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

"""
Homogeneous 3D transformations
==============================

A ``Matrix`` holds four rows of four numbers.  Points are row vectors
``[x, y, z, 1]`` and are transformed as ``v' = v . M``, so a translation
lives in the bottom row and composing ``A`` then ``B`` is ``A.mul(B)``.

The CamelCase builders (``Translation``, ``RotationX``, ``Scale``, ...)
return fresh matrices.  Angles are in radians; a positive angle turns
counter-clockwise when looking down the axis toward the origin.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, sin
from typing import List, Sequence

from rastergeom.geom import EPSILON, isgoodnum


@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float

    def __post_init__(self):
        for v in (self.x, self.y, self.z):
            if not isgoodnum(v):
                raise ValueError('bad coordinate passed to Vec3: {}'.format(v))

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other):
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, s) -> "Vec3":
        return Vec3(self.x * s, self.y * s, self.z * s)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> "Vec3":
        return Vec3(self.y * other.z - self.z * other.y,
                    self.z * other.x - self.x * other.z,
                    self.x * other.y - self.y * other.x)


def as_vec3(v) -> Vec3:
    if isinstance(v, Vec3):
        return v
    if isinstance(v, (tuple, list)) and len(v) >= 3:
        return Vec3(v[0], v[1], v[2])
    raise ValueError('bad value passed to as_vec3: {}'.format(v))


class Matrix:
    """4x4 transformation matrix for homogeneous row vectors"""

    def __init__(self, a=None):
        self.m = [[1, 0, 0, 0],
                  [0, 1, 0, 0],
                  [0, 0, 1, 0],
                  [0, 0, 0, 1]]

        if isinstance(a, Matrix):
            for i in range(4):
                self.setrow(i, a.getrow(i))
        elif isinstance(a, (tuple, list)):
            if len(a) == 4 and all(isinstance(r, (tuple, list)) and len(r) == 4
                                   for r in a):
                for i in range(4):
                    for j in range(4):
                        self.set(i, j, a[i][j])
            elif len(a) == 16:
                for i in range(4):
                    for j in range(4):
                        self.set(i, j, a[i * 4 + j])
            else:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))

    def __repr__(self):
        return "Matrix({},{},{},{})".format(self.m[0], self.m[1],
                                            self.m[2], self.m[3])

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.m == other.m

    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        return self.m[i][j]

    def set(self, i, j, x):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to set: {},{}'.format(i, j))
        if not isgoodnum(x):
            raise ValueError('bad value passed to set: {}'.format(x))
        self.m[i][j] = x

    def getrow(self, i) -> List[float]:
        if i < 0 or i > 3:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        return list(self.m[i])

    def getcol(self, j) -> List[float]:
        if j < 0 or j > 3:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        return [self.m[0][j], self.m[1][j], self.m[2][j], self.m[3][j]]

    def setrow(self, i, x):
        if i < 0 or i > 3:
            raise ValueError('bad row index passed to setrow: {}'.format(i))
        if len(x) != 4:
            raise ValueError('bad non-vector passed to setrow: {}'.format(x))
        for j in range(4):
            self.set(i, j, x[j])

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # scalar, scale every element.  Anything else is an error.
    def mul(self, x) -> "Matrix":
        if isinstance(x, Matrix):
            result = Matrix()
            for i in range(4):
                row = self.m[i]
                for j in range(4):
                    result.m[i][j] = sum(row[k] * x.m[k][j] for k in range(4))
            return result
        elif isgoodnum(x):
            return Matrix([[v * x for v in row] for row in self.m])

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def transform(self, v) -> List[float]:
        """Row vector times matrix.  ``v`` has three (``w`` taken as 1)
        or four components"""
        if len(v) == 3:
            v = [v[0], v[1], v[2], 1]
        elif len(v) != 4:
            raise ValueError('bad vector passed to transform: {}'.format(v))
        return [sum(v[k] * self.m[k][j] for k in range(4)) for j in range(4)]


## matrix builders
## ---------------

def Identity() -> Matrix:
    return Matrix()


def Translation(dx, dy, dz) -> Matrix:
    return Matrix([[1, 0, 0, 0],
                   [0, 1, 0, 0],
                   [0, 0, 1, 0],
                   [dx, dy, dz, 1]])


def RotationX(angle) -> Matrix:
    c = cos(angle)
    s = sin(angle)
    return Matrix([[1, 0, 0, 0],
                   [0, c, s, 0],
                   [0, -s, c, 0],
                   [0, 0, 0, 1]])


def RotationY(angle) -> Matrix:
    c = cos(angle)
    s = sin(angle)
    return Matrix([[c, 0, -s, 0],
                   [0, 1, 0, 0],
                   [s, 0, c, 0],
                   [0, 0, 0, 1]])


def RotationZ(angle) -> Matrix:
    c = cos(angle)
    s = sin(angle)
    return Matrix([[c, s, 0, 0],
                   [-s, c, 0, 0],
                   [0, 0, 1, 0],
                   [0, 0, 0, 1]])


def Scale(x, y=None, z=None) -> Matrix:
    """Scaling matrix; a single factor scales uniformly"""
    if not isgoodnum(x):
        raise ValueError('bad scaling values passed to Scale')
    sx = x
    if isgoodnum(y) and isgoodnum(z):
        sy = y
        sz = z
    else:
        sy = sz = x
    return Matrix([[sx, 0, 0, 0],
                   [0, sy, 0, 0],
                   [0, 0, sz, 0],
                   [0, 0, 0, 1]])


## reflection through the XY plane negates z
def ReflectionXY() -> Matrix:
    return Scale(1, 1, -1)


def ReflectionXZ() -> Matrix:
    return Scale(1, -1, 1)


def ReflectionYZ() -> Matrix:
    return Scale(-1, 1, 1)


def Perspective(d) -> Matrix:
    """Perspective matrix for a projection plane at distance ``d``.

    Leaves x, y and z alone and sets ``w = 1 + z/d``; dividing by ``w``
    afterwards gives the projection.  ``d == 0`` gives the identity.
    """
    if abs(d) < EPSILON:
        return Matrix()
    return Matrix([[1, 0, 0, 0],
                   [0, 1, 0, 0],
                   [0, 0, 1, 1.0 / d],
                   [0, 0, 0, 1]])


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """``a . b``: applying the result applies ``a`` first, then ``b``"""
    return a.mul(b)


def composite_transform(sx=1, sy=1, sz=1, rx=0, ry=0, rz=0,
                        reflect_xy=False, reflect_xz=False, reflect_yz=False,
                        tx=0, ty=0, tz=0, perspective=0) -> Matrix:
    """Single matrix applying scale, rotations about X, Y and Z,
    the requested reflections, translation and, when ``perspective`` is
    non-zero, the perspective matrix, in that order"""
    m = Scale(sx, sy, sz)
    m = m.mul(RotationX(rx)).mul(RotationY(ry)).mul(RotationZ(rz))
    if reflect_xy:
        m = m.mul(ReflectionXY())
    if reflect_xz:
        m = m.mul(ReflectionXZ())
    if reflect_yz:
        m = m.mul(ReflectionYZ())
    m = m.mul(Translation(tx, ty, tz))
    if perspective:
        m = m.mul(Perspective(perspective))
    return m


## applying transformations
## ------------------------

def transform_point(p, m: Matrix) -> List[float]:
    """Homogeneous ``[x, y, z, w]`` image of the 3D point ``p``"""
    v = as_vec3(p)
    return m.transform([v.x, v.y, v.z, 1])


def homogeneous_to_cartesian(v: Sequence[float]) -> Vec3:
    """Divide through by ``w``; a ``w`` near zero is left undivided"""
    w = v[3]
    if abs(w) < EPSILON:
        return Vec3(v[0], v[1], v[2])
    return Vec3(v[0] / w, v[1] / w, v[2] / w)


def apply_transform(p, m: Matrix) -> Vec3:
    return homogeneous_to_cartesian(transform_point(p, m))


def transform_vertices(vertices: Sequence, m: Matrix) -> List[Vec3]:
    return [apply_transform(p, m) for p in vertices]


def project_to_2d(p, d=0) -> Vec3:
    """Project onto the z = 0 plane seen from distance ``d``; ``d <= 0``
    drops z orthographically.  The input z is kept for depth
    sorting."""
    v = as_vec3(p)
    if d > 0:
        f = d / (v.z + d)
        return Vec3(v.x * f, v.y * f, v.z)
    return Vec3(v.x, v.y, v.z)


__all__ = [
    'Vec3',
    'as_vec3',
    'Matrix',
    'Identity',
    'Translation',
    'RotationX',
    'RotationY',
    'RotationZ',
    'Scale',
    'ReflectionXY',
    'ReflectionXZ',
    'ReflectionYZ',
    'Perspective',
    'multiply',
    'composite_transform',
    'transform_point',
    'homogeneous_to_cartesian',
    'apply_transform',
    'transform_vertices',
    'project_to_2d',
]
