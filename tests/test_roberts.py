import random
from math import pi

import pytest

from rastergeom.roberts import (
    DEFAULT_OBSERVER, face_normal, roberts_visibility, rotate_vertices, unit_cube,
)

OPPOSITE = [('front (z+)', 'back (z-)'), ('left (x-)', 'right (x+)'),
            ('top (y+)', 'bottom (y-)')]


def _visible(faces):
    return {f.label for f in faces if f.visible}


class TestCube:

    def test_static_normals(self):
        vertices, faces = unit_cube()
        assert len(vertices) == 8
        assert len(faces) == 6
        for face in faces:
            assert face_normal(vertices, face) == face.normal

    def test_front_only(self):
        vertices, faces = unit_cube()
        out = roberts_visibility(vertices, faces)
        assert len(out) == 6
        assert _visible(out) == {'front (z+)'}

    def test_half_turn_shows_back(self):
        vertices, faces = unit_cube()
        turned = rotate_vertices(vertices, ry=pi)
        assert _visible(roberts_visibility(turned, faces)) == {'back (z-)'}

    def test_quarter_turn(self):
        vertices, faces = unit_cube()
        ## turning +90 degrees about y brings the left face to the front
        turned = rotate_vertices(vertices, ry=pi / 2)
        assert _visible(roberts_visibility(turned, faces)) == {'left (x-)'}

    def test_random_orientations(self):
        rng = random.Random(3)
        vertices, faces = unit_cube()
        for _ in range(50):
            turned = rotate_vertices(vertices, rng.uniform(0, 2 * pi),
                                     rng.uniform(0, 2 * pi), rng.uniform(0, 2 * pi))
            seen = _visible(roberts_visibility(turned, faces))
            assert 1 <= len(seen) <= 3
            for a, b in OPPOSITE:
                assert not (a in seen and b in seen)


def test_projection():
    vertices, faces = unit_cube()
    out = roberts_visibility(vertices, faces, canvas_cx=50, canvas_cy=50, scale=10)
    front = out[0]
    assert front.label == 'front (z+)'
    assert len(front.points) == 4
    assert (front.points[0].x, front.points[0].y) == pytest.approx((44, 56))
    back = out[1]
    ## farther away, so closer to the canvas center
    assert abs(back.points[0].x - 50) < abs(front.points[0].x - 50)


def test_observer_moves():
    vertices, faces = unit_cube()
    out = roberts_visibility(vertices, faces, observer=(3, 0, 0))
    assert _visible(out) == {'right (x+)'}
    assert DEFAULT_OBSERVER.z == 3


def test_vertex_on_eye_plane():
    vertices, faces = unit_cube()
    ## the front face sits at z = 0.5, exactly the projection distance
    out = roberts_visibility(vertices, faces, scale=10, distance=0.5)
    assert len(out) == 6
    front = out[0]
    assert (front.points[0].x, front.points[0].y) == pytest.approx((-5, 5))
    back = out[1]
    ## z = -0.5 still gets perspective: f = 0.5 / 1.0
    assert (back.points[0].x, back.points[0].y) == pytest.approx((2.5, 2.5))


def test_vertex_near_eye_plane():
    vertices, faces = unit_cube()
    out = roberts_visibility(vertices, faces, distance=0.5 + 1e-12)
    assert all(abs(p.x) < 1e6 and abs(p.y) < 1e6 for f in out for p in f.points)
