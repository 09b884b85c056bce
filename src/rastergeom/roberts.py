"""Roberts back-face removal for convex polyhedra.

A face is visible when its outward normal points toward the observer.
The normal is always recomputed from the current vertex positions, so
rotating the vertices needs no separate bookkeeping for the faces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from rastergeom.geom import EPSILON, Point
from rastergeom.xform import (
    RotationX, RotationY, RotationZ, Vec3, as_vec3, transform_vertices,
)

DEFAULT_OBSERVER = Vec3(0, 0, 3)
DEFAULT_DISTANCE = 3


@dataclass(frozen=True)
class Face:
    """Quadrilateral face: four vertex indices, counter-clockwise seen
    from outside, the outward normal at rest and a label."""

    indices: Tuple[int, int, int, int]
    normal: Vec3
    label: str


@dataclass(frozen=True)
class ProjectedFace:
    points: Tuple[Point, ...]
    visible: bool
    label: str


def unit_cube() -> Tuple[List[Vec3], List[Face]]:
    """Vertices and faces of the cube spanning [-0.5, 0.5] on each axis"""
    h = 0.5
    vertices = [
        Vec3(-h, -h, -h), Vec3(h, -h, -h), Vec3(h, h, -h), Vec3(-h, h, -h),
        Vec3(-h, -h, h), Vec3(h, -h, h), Vec3(h, h, h), Vec3(-h, h, h),
    ]
    faces = [
        Face((4, 5, 6, 7), Vec3(0, 0, 1), 'front (z+)'),
        Face((1, 0, 3, 2), Vec3(0, 0, -1), 'back (z-)'),
        Face((0, 4, 7, 3), Vec3(-1, 0, 0), 'left (x-)'),
        Face((5, 1, 2, 6), Vec3(1, 0, 0), 'right (x+)'),
        Face((3, 7, 6, 2), Vec3(0, 1, 0), 'top (y+)'),
        Face((0, 1, 5, 4), Vec3(0, -1, 0), 'bottom (y-)'),
    ]
    return vertices, faces


def rotate_vertices(vertices: Sequence, rx=0, ry=0, rz=0) -> List[Vec3]:
    """Rotate about X, then Y, then Z (radians)"""
    m = RotationX(rx).mul(RotationY(ry)).mul(RotationZ(rz))
    return transform_vertices(vertices, m)


def face_normal(vertices: Sequence[Vec3], face: Face) -> Vec3:
    """Outward normal from the face's current vertices:
    ``(v1 - v0) x (v3 - v0)``"""
    v0 = vertices[face.indices[0]]
    v1 = vertices[face.indices[1]]
    v3 = vertices[face.indices[3]]
    return (v1 - v0).cross(v3 - v0)


def roberts_visibility(vertices: Sequence, faces: Sequence[Face],
                       observer=DEFAULT_OBSERVER, canvas_cx=0, canvas_cy=0,
                       scale=1, distance=DEFAULT_DISTANCE) -> List[ProjectedFace]:
    """Visibility flag and canvas projection of every face.

    Hidden faces are returned too; drawing them differently is up to
    the caller.  Projection is perspective from ``distance`` along +z,
    with y flipped so that up on the canvas is toward smaller row
    numbers.  A vertex with ``z == distance`` sits in the eye plane and
    is projected without perspective scaling.
    """
    verts = [as_vec3(v) for v in vertices]
    eye = as_vec3(observer)

    def project(v: Vec3) -> Point:
        ## a vertex on the eye plane is left unscaled
        denom = distance - v.z
        f = distance / denom if abs(denom) > EPSILON else 1.0
        return Point(canvas_cx + v.x * scale * f, canvas_cy - v.y * scale * f)

    out = []
    for face in faces:
        corners = [verts[i] for i in face.indices]
        center = corners[0]
        for c in corners[1:]:
            center = center + c
        center = center.scale(1.0 / len(corners))
        visible = face_normal(verts, face).dot(eye - center) > 0
        out.append(ProjectedFace(tuple(project(c) for c in corners),
                                 visible, face.label))
    return out


__all__ = [
    'Face',
    'ProjectedFace',
    'unit_cube',
    'rotate_vertices',
    'face_normal',
    'roberts_visibility',
]
