"""
Bloch Sphere Geometry
=====================

Projection and rotation primitives for drawing qubit states on a sphere.

Every sphere-based view goes through the same two functions:

    project(x, y, z) → ScreenPoint     fixed oblique parallel projection
    rotate(v, axis_angle, θ) → Vector3  Rodrigues rotation, horizontal axis

Rodrigues Formula
-----------------
Rotating v by θ about a unit axis k:

    v_rot = v cos θ + (k × v) sin θ + k (k·v)(1 - cos θ)

Single-qubit drive fields only ever point in the equatorial plane, so the
axis is restricted to k = (cos a, 0, sin a). With k_y = 0 the cross product
and dot product lose a term each:

    k · v = k_x v_x + k_z v_z
    k × v = (-k_z v_y,  k_z v_x - k_x v_z,  k_x v_y)

Rotations preserve |v|, so every vector built from a start point on the
sphere stays on the sphere up to floating-point error.
"""

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from ..constants import (
    VIEW_TILT,
    VIEW_ROTATION,
    VIEWPORT_CENTER_X,
    VIEWPORT_CENTER_Y,
    SPHERE_RADIUS,
    WIREFRAME_STEP,
)


# =============================================================================
# DATA TYPES
# =============================================================================

@dataclass(frozen=True)
class Vector3:
    """A point on (or near) the sphere of radius ``SPHERE_RADIUS``."""
    x: float
    y: float
    z: float

    def norm(self) -> float:
        return float(np.sqrt(self.x**2 + self.y**2 + self.z**2))

    def distance_to(self, other: "Vector3") -> float:
        return float(np.sqrt(
            (self.x - other.x)**2 + (self.y - other.y)**2 + (self.z - other.z)**2
        ))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class ScreenPoint:
    """2-D drawing coordinate produced by :func:`project`."""
    cx: float
    cy: float


# =============================================================================
# PROJECTOR
# =============================================================================

def project(x: float, y: float, z: float) -> ScreenPoint:
    """
    Project a 3-D sphere coordinate onto the drawing viewport.

    Parameters
    ----------
    x, y, z : float
        Sphere coordinates. y points down the screen.

    Returns
    -------
    ScreenPoint
        Viewport coordinate (depth is discarded).
    """
    # Rotate around the vertical axis
    x1 = x * np.cos(VIEW_ROTATION) - z * np.sin(VIEW_ROTATION)
    z1 = x * np.sin(VIEW_ROTATION) + z * np.cos(VIEW_ROTATION)

    # Tilt around the horizontal axis
    y2 = y * np.cos(VIEW_TILT) - z1 * np.sin(VIEW_TILT)

    return ScreenPoint(
        cx=float(VIEWPORT_CENTER_X + x1),
        cy=float(VIEWPORT_CENTER_Y + y2),
    )


def project_vector(v: Vector3) -> ScreenPoint:
    """Convenience wrapper around :func:`project` for a Vector3."""
    return project(v.x, v.y, v.z)


# =============================================================================
# ROTATOR
# =============================================================================

def rotate(v: Vector3, axis_angle: float, theta: float) -> Vector3:
    """
    Rotate ``v`` by ``theta`` about a horizontal axis.

    Parameters
    ----------
    v : Vector3
        Vector to rotate.
    axis_angle : float
        Direction of the rotation axis in the x–z plane (radians).
        0 is the x axis, π/2 the z axis.
    theta : float
        Signed rotation angle (radians).

    Returns
    -------
    Vector3
        The rotated vector. ``rotate(v, a, 0) == v`` holds exactly.
    """
    ax = np.cos(axis_angle)
    az = np.sin(axis_angle)

    c = np.cos(theta)
    s = np.sin(theta)
    dot = v.x * ax + v.z * az

    cross_x = -az * v.y
    cross_y = az * v.x - ax * v.z
    cross_z = ax * v.y

    return Vector3(
        x=float(v.x * c + cross_x * s + ax * dot * (1 - c)),
        y=float(v.y * c + cross_y * s),
        z=float(v.z * c + cross_z * s + az * dot * (1 - c)),
    )


# =============================================================================
# POLES AND WIREFRAME
# =============================================================================

def north_pole(radius: float = SPHERE_RADIUS) -> Vector3:
    """The |0⟩ pole (top of the drawing)."""
    return Vector3(0.0, -radius, 0.0)


def south_pole(radius: float = SPHERE_RADIUS) -> Vector3:
    """The |1⟩ pole (bottom of the drawing)."""
    return Vector3(0.0, radius, 0.0)


def sphere_wireframe(radius: float = SPHERE_RADIUS,
                     step: float = WIREFRAME_STEP) -> Dict[str, object]:
    """
    Projected reference geometry for drawing the sphere.

    Returns
    -------
    dict
        - "equator": list of ScreenPoint around the x–z great circle
        - "meridian": list of ScreenPoint around the y–z great circle
        - "center": ScreenPoint of the viewport centre (outline circle)
        - "radius": outline radius
        - "north", "south": projected poles (axis line and state labels)
    """
    angles = np.arange(0.0, 2 * np.pi + 1e-12, step)

    equator: List[ScreenPoint] = [
        project(radius * np.cos(t), 0.0, radius * np.sin(t)) for t in angles
    ]
    meridian: List[ScreenPoint] = [
        project(0.0, radius * np.cos(t), radius * np.sin(t)) for t in angles
    ]

    return {
        "equator": equator,
        "meridian": meridian,
        "center": ScreenPoint(float(VIEWPORT_CENTER_X), float(VIEWPORT_CENTER_Y)),
        "radius": radius,
        "north": project_vector(north_pole(radius)),
        "south": project_vector(south_pole(radius)),
    }
