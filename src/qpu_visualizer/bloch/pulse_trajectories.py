"""
Single vs. Composite Pulse Trajectories
=======================================

This module builds the two Bloch-sphere paths shown in the pulse-control
view: a plain π pulse and a three-segment composite pulse, both suffering
the same fractional calibration error ε.

Calibration Error
-----------------
A drive that is on slightly too long (or too short) rotates by θ(1 + ε)
instead of θ. For a single π pulse starting at |0⟩ the endpoint misses |1⟩
by an angle πε, i.e. a chord of

    d_single = 2R |sin(πε/2)|

which grows LINEARLY with ε for small errors.

Composite Flip
--------------
The composite sequence replaces the π pulse with

    (π/2)_φ1 · (π)_φ2 · (π/2)_φ1        with φ2 = φ1 + π/2

i.e. half of the target flip, the full flip about a perpendicular axis, and
the half flip again. Every leg is scaled by the SAME (1 + ε). The oversized
middle leg carries the error of the outer legs back across the pole, and the
endpoint lands at

    d_composite = 2R sin²(πε/2)

which is QUADRATIC in ε: at ε = 0.1 it is 0.049 R against 0.31 R for the
single pulse, and the ratio d_composite / d_single = |sin(πε/2)| is below one
for every non-zero error.

Sampling
--------
The single pulse is sampled by re-deriving each point from the START vector
rotated by the fraction of the angle reached so far (no incremental drift).
The composite legs are truly incremental: each leg starts from the endpoint
of the previous one and is sampled from that leg's own starting vector.

References
----------
- Levitt & Freeman, J. Magn. Reson. 33, 473 (1979) - 90x180y90x inversion
- Cummins, Llewellyn & Jones, PRA 67, 042308 (2003) - SCROFULOUS / BB1
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

try:
    from qutip import basis, expect, ket2dm, qeye, sigmax, sigmay, sigmaz
except ImportError:
    raise ImportError(
        "QuTiP is required for transfer probabilities. Install with: pip install qutip"
    )

from ..constants import (
    SPHERE_RADIUS,
    TARGET_ROTATION,
    SINGLE_PULSE_AXIS,
    SINGLE_PULSE_STEPS,
    COMPOSITE_OUTER_AXIS,
    COMPOSITE_INNER_AXIS,
    COMPOSITE_OUTER_STEPS,
    COMPOSITE_INNER_STEPS,
    CALIBRATION_ERROR_MIN,
    CALIBRATION_ERROR_MAX,
)
from ..utils.math_utils import clamp
from .geometry import Vector3, ScreenPoint, project_vector, rotate, north_pole, south_pole


# =============================================================================
# DATA TYPES
# =============================================================================

@dataclass(frozen=True)
class PulseSegment:
    """
    One leg of a pulse sequence.

    Attributes
    ----------
    angle : float
        Total rotation angle of the leg (radians), calibration error included.
    axis_phase : float
        Direction of the drive axis in the equatorial plane (radians).
    steps : int
        Number of samples drawn along the leg.
    """
    angle: float
    axis_phase: float
    steps: int


@dataclass
class PulseComparison:
    """
    Both trajectories for one calibration error.

    Attributes
    ----------
    calibration_error : float
        Fractional over/undershoot ε used for every leg.
    single_points, composite_points : list of ScreenPoint
        Projected trajectories in temporal order.
    single_endpoint, composite_endpoint : Vector3
        Final sphere vectors of each path.
    target : Vector3
        The |1⟩ pole both pulses aim for.
    """
    calibration_error: float
    single_points: List[ScreenPoint]
    composite_points: List[ScreenPoint]
    single_endpoint: Vector3
    composite_endpoint: Vector3
    target: Vector3 = field(default_factory=south_pole)

    @property
    def single_error(self) -> float:
        """Distance of the single-pulse endpoint from the target pole."""
        return self.single_endpoint.distance_to(self.target)

    @property
    def composite_error(self) -> float:
        """Distance of the composite endpoint from the target pole."""
        return self.composite_endpoint.distance_to(self.target)

    @property
    def single_transfer(self) -> float:
        """Population transferred to |1⟩ by the single pulse."""
        return transfer_probability(self.single_endpoint, self.target.norm())

    @property
    def composite_transfer(self) -> float:
        """Population transferred to |1⟩ by the composite pulse."""
        return transfer_probability(self.composite_endpoint, self.target.norm())


# =============================================================================
# HELPERS
# =============================================================================

def clamp_calibration_error(error: float) -> float:
    """
    Bound a user-supplied calibration error to the slider range.

    The trajectory generators never validate ε; UI controls call this first.
    """
    return clamp(error, CALIBRATION_ERROR_MIN, CALIBRATION_ERROR_MAX)


def endpoint_error(endpoint: Vector3, radius: float = SPHERE_RADIUS) -> float:
    """Distance between ``endpoint`` and the |1⟩ pole."""
    return endpoint.distance_to(south_pole(radius))


def transfer_probability(v: Vector3, radius: float = SPHERE_RADIUS) -> float:
    """
    Probability of finding the qubit in |1⟩ for the Bloch vector ``v``.

    The drawing frame is mapped onto the standard Bloch frame as

        n_x = x/R,  n_y = z/R,  n_z = -y/R

    (screen y points down, so the top pole is |0⟩). The state is the density
    matrix ρ = (I + n·σ)/2 and the returned value is ⟨1|ρ|1⟩ = (1 - n_z)/2.

    Parameters
    ----------
    v : Vector3
        Sphere vector (any radius).
    radius : float
        Sphere radius used for normalisation.

    Returns
    -------
    float
        Transfer probability in [0, 1].
    """
    # Plain floats keep numpy scalars from hijacking Qobj multiplication
    nx, ny, nz = float(v.x / radius), float(v.z / radius), float(-v.y / radius)
    rho = 0.5 * (qeye(2) + nx * sigmax() + ny * sigmay() + nz * sigmaz())
    return float(np.real(expect(ket2dm(basis(2, 1)), rho)))


def _sample_segment(start: Vector3, segment: PulseSegment) -> List[Vector3]:
    """Vectors at fractions 1/steps .. 1 of ``segment`` starting from ``start``."""
    return [
        rotate(start, segment.axis_phase, segment.angle * (i / segment.steps))
        for i in range(1, segment.steps + 1)
    ]


# =============================================================================
# SINGLE PULSE
# =============================================================================

def single_pulse_trajectory(
    calibration_error: float,
    steps: int = SINGLE_PULSE_STEPS,
    radius: float = SPHERE_RADIUS,
) -> Tuple[List[ScreenPoint], Vector3]:
    """
    Trajectory of a plain π pulse with calibration error ε.

    Samples the rotation from 0 to π(1 + ε) about axis phase 0 at
    ``steps + 1`` evenly spaced fractions (start point included).

    Returns
    -------
    points : list of ScreenPoint
        Projected trajectory.
    endpoint : Vector3
        Final vector on the sphere.
    """
    start = north_pole(radius)
    total_angle = TARGET_ROTATION * (1 + calibration_error)

    vectors = [
        rotate(start, SINGLE_PULSE_AXIS, total_angle * (i / steps))
        for i in range(steps + 1)
    ]
    return [project_vector(v) for v in vectors], vectors[-1]


# =============================================================================
# COMPOSITE PULSE
# =============================================================================

def composite_segments(calibration_error: float) -> List[PulseSegment]:
    """
    The three legs of the composite flip for calibration error ε.

    Leg 1 and leg 3 are identical half flips about the outer axis, leg 2 is
    the full flip about the perpendicular inner axis. All angles carry the
    same (1 + ε) scale factor.
    """
    scale = 1 + calibration_error
    outer = PulseSegment(
        angle=TARGET_ROTATION / 2 * scale,
        axis_phase=COMPOSITE_OUTER_AXIS,
        steps=COMPOSITE_OUTER_STEPS,
    )
    inner = PulseSegment(
        angle=TARGET_ROTATION * scale,
        axis_phase=COMPOSITE_INNER_AXIS,
        steps=COMPOSITE_INNER_STEPS,
    )
    return [outer, inner, outer]


def composite_pulse_trajectory(
    calibration_error: float,
    segments: Optional[Sequence[PulseSegment]] = None,
    radius: float = SPHERE_RADIUS,
) -> Tuple[List[ScreenPoint], Vector3]:
    """
    Trajectory of the three-segment composite flip.

    Parameters
    ----------
    calibration_error : float
        Fractional over/undershoot ε.
    segments : sequence of PulseSegment, optional
        Override the default legs from :func:`composite_segments`.
    radius : float
        Sphere radius.

    Returns
    -------
    points : list of ScreenPoint
        Start point followed by every sampled point of each leg.
    endpoint : Vector3
        Final vector on the sphere.
    """
    if segments is None:
        segments = composite_segments(calibration_error)

    current = north_pole(radius)
    vectors = [current]
    for segment in segments:
        leg = _sample_segment(current, segment)
        vectors.extend(leg)
        current = leg[-1] if leg else current

    return [project_vector(v) for v in vectors], current


# =============================================================================
# COMPARISON
# =============================================================================

def compare_pulses(calibration_error: float,
                   radius: float = SPHERE_RADIUS) -> PulseComparison:
    """
    Build both trajectories for one calibration error.

    The two paths share no state; each is regenerated from the start pole.
    """
    single_points, single_end = single_pulse_trajectory(calibration_error, radius=radius)
    composite_points, composite_end = composite_pulse_trajectory(calibration_error, radius=radius)

    return PulseComparison(
        calibration_error=calibration_error,
        single_points=single_points,
        composite_points=composite_points,
        single_endpoint=single_end,
        composite_endpoint=composite_end,
        target=south_pole(radius),
    )


def endpoint_error_sweep(
    errors: Optional[np.ndarray] = None,
    radius: float = SPHERE_RADIUS,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Endpoint distance from |1⟩ versus calibration error for both pulses.

    Parameters
    ----------
    errors : np.ndarray, optional
        Calibration errors to evaluate. Defaults to 41 points spanning the
        slider range.
    radius : float
        Sphere radius.

    Returns
    -------
    errors : np.ndarray
    single : np.ndarray
        Single-pulse endpoint distances.
    composite : np.ndarray
        Composite endpoint distances.
    """
    if errors is None:
        errors = np.linspace(CALIBRATION_ERROR_MIN, CALIBRATION_ERROR_MAX, 41)
    errors = np.asarray(errors, dtype=float)

    single = np.empty_like(errors)
    composite = np.empty_like(errors)
    for i, eps in enumerate(errors):
        _, single_end = single_pulse_trajectory(eps, radius=radius)
        _, composite_end = composite_pulse_trajectory(eps, radius=radius)
        single[i] = endpoint_error(single_end, radius)
        composite[i] = endpoint_error(composite_end, radius)

    return errors, single, composite
