"""
Test Suite: Bloch Sphere Projection and Rotation
================================================

Checks the fixed oblique projection and the Rodrigues rotator that every
pulse trajectory is built from.
"""

import numpy as np
import pytest

from qpu_visualizer.bloch.geometry import (
    Vector3,
    ScreenPoint,
    project,
    project_vector,
    rotate,
    north_pole,
    south_pole,
    sphere_wireframe,
)
from qpu_visualizer.constants import (
    SPHERE_RADIUS,
    VIEW_TILT,
    VIEW_ROTATION,
    VIEWPORT_CENTER_X,
    VIEWPORT_CENTER_Y,
)


@pytest.fixture
def random_vectors():
    rng = np.random.default_rng(7)
    return [Vector3(*rng.normal(size=3) * 50) for _ in range(20)]


class TestProjector:
    """The projector maps sphere coordinates onto the fixed viewport."""

    def test_origin_maps_to_viewport_center(self):
        p = project(0, 0, 0)
        assert p == ScreenPoint(VIEWPORT_CENTER_X, VIEWPORT_CENTER_Y)

    def test_poles_lie_on_vertical_axis(self):
        R = SPHERE_RADIUS
        top = project_vector(north_pole())
        bottom = project_vector(south_pole())

        assert top.cx == pytest.approx(VIEWPORT_CENTER_X)
        assert bottom.cx == pytest.approx(VIEWPORT_CENTER_X)
        assert top.cy == pytest.approx(VIEWPORT_CENTER_Y - R * np.cos(VIEW_TILT))
        assert bottom.cy == pytest.approx(VIEWPORT_CENTER_Y + R * np.cos(VIEW_TILT))
        assert top.cy < bottom.cy, "|0⟩ must be drawn above |1⟩ (screen y points down)"

    def test_x_axis_point(self):
        R = SPHERE_RADIUS
        p = project(R, 0, 0)
        assert p.cx == pytest.approx(VIEWPORT_CENTER_X + R * np.cos(VIEW_ROTATION))
        assert p.cy == pytest.approx(
            VIEWPORT_CENTER_Y - R * np.sin(VIEW_ROTATION) * np.sin(VIEW_TILT)
        )

    def test_sphere_projects_inside_outline(self, random_vectors):
        for v in random_vectors:
            unit = Vector3(v.x / v.norm() * SPHERE_RADIUS,
                           v.y / v.norm() * SPHERE_RADIUS,
                           v.z / v.norm() * SPHERE_RADIUS)
            p = project_vector(unit)
            d = np.hypot(p.cx - VIEWPORT_CENTER_X, p.cy - VIEWPORT_CENTER_Y)
            assert d <= SPHERE_RADIUS + 1e-9, (
                f"Projected point {p} lies outside the sphere outline (distance {d:.3f})"
            )


class TestRotator:
    """Rodrigues rotation about a horizontal axis at angle a in the x–z plane."""

    @pytest.mark.parametrize("axis", [0.0, np.pi / 3, np.pi / 2, 2.0])
    def test_zero_angle_is_exact_identity(self, random_vectors, axis):
        for v in random_vectors:
            assert rotate(v, axis, 0.0) == v

    @pytest.mark.parametrize("theta", [0.3, np.pi, -1.7, 5.0])
    def test_norm_preserved(self, random_vectors, theta):
        for v in random_vectors:
            r = rotate(v, 0.8, theta)
            assert r.norm() == pytest.approx(v.norm(), rel=1e-12)

    def test_same_axis_composition_is_additive(self, random_vectors):
        for v in random_vectors:
            twice = rotate(rotate(v, 1.1, 0.4), 1.1, 0.9)
            once = rotate(v, 1.1, 1.3)
            np.testing.assert_allclose(twice.as_array(), once.as_array(), atol=1e-10)

    def test_pi_about_x_flips_poles(self):
        flipped = rotate(north_pole(), 0.0, np.pi)
        assert flipped.distance_to(south_pole()) < 1e-9

    def test_axis_component_is_invariant(self):
        v = Vector3(10.0, -30.0, 40.0)
        about_z = rotate(v, np.pi / 2, 1.2)
        assert about_z.z == pytest.approx(v.z)
        about_x = rotate(v, 0.0, 1.2)
        assert about_x.x == pytest.approx(v.x)


class TestWireframe:

    def test_contains_reference_geometry(self):
        frame = sphere_wireframe()
        assert set(frame) == {"equator", "meridian", "center", "radius", "north", "south"}
        assert len(frame["equator"]) == len(frame["meridian"]) > 60
        assert frame["radius"] == SPHERE_RADIUS
        assert frame["north"] == project_vector(north_pole())

    def test_equator_is_closed(self):
        equator = sphere_wireframe()["equator"]
        gap = np.hypot(equator[0].cx - equator[-1].cx, equator[0].cy - equator[-1].cy)
        assert gap < SPHERE_RADIUS * 0.1
