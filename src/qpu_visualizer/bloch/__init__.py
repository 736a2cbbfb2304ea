"""
Bloch Sphere Subsystem
======================

Geometry and pulse trajectories for the pulse-control view.

    - geometry: Vector3, ScreenPoint, project(), rotate(), sphere wireframe
    - pulse_trajectories: single π pulse vs. three-segment composite flip
      under a shared calibration error

Example
-------
>>> from qpu_visualizer.bloch import compare_pulses
>>> comparison = compare_pulses(0.1)
>>> comparison.composite_error < comparison.single_error
True
"""

from .geometry import (
    Vector3,
    ScreenPoint,
    project,
    project_vector,
    rotate,
    north_pole,
    south_pole,
    sphere_wireframe,
)

from .pulse_trajectories import (
    PulseSegment,
    PulseComparison,
    clamp_calibration_error,
    endpoint_error,
    transfer_probability,
    single_pulse_trajectory,
    composite_segments,
    composite_pulse_trajectory,
    compare_pulses,
    endpoint_error_sweep,
)


__all__ = [
    "Vector3",
    "ScreenPoint",
    "project",
    "project_vector",
    "rotate",
    "north_pole",
    "south_pole",
    "sphere_wireframe",
    "PulseSegment",
    "PulseComparison",
    "clamp_calibration_error",
    "endpoint_error",
    "transfer_probability",
    "single_pulse_trajectory",
    "composite_segments",
    "composite_pulse_trajectory",
    "compare_pulses",
    "endpoint_error_sweep",
]
