"""
Coherent Transport Subsystem
============================

Animation of an atom handed from a static SLM trap to a moving AOD trap,
carried to a second site, and handed back.

    - schedule: pure functions of the cycle time t (phase, trap powers,
      diagonal/sequential positions, waveforms)
    - engine: frame-driven loop with start/stop and pluggable schedulers
"""

from .schedule import (
    PHASE_HANDOVER_START,
    PHASE_TRANSPORT,
    PHASE_HANDOVER_END,
    PHASE_RESET,
    TRANSPORT_PHASES,
    PATH_DIAGONAL,
    PATH_SEQUENTIAL,
    PHASE_LABELS,
    TransportState,
    WaveformSeries,
    normalize_path_policy,
    phase_label,
    normalized_time,
    phase_at,
    trap_powers,
    position_at,
    path_fraction,
    transport_state,
    generate_waveforms,
    cursor_time,
)

from .engine import (
    FrameScheduler,
    ManualFrameScheduler,
    TransportFrame,
    TransportEngine,
    render_frames,
)


__all__ = [
    "PHASE_HANDOVER_START",
    "PHASE_TRANSPORT",
    "PHASE_HANDOVER_END",
    "PHASE_RESET",
    "TRANSPORT_PHASES",
    "PATH_DIAGONAL",
    "PATH_SEQUENTIAL",
    "PHASE_LABELS",
    "TransportState",
    "WaveformSeries",
    "normalize_path_policy",
    "phase_label",
    "normalized_time",
    "phase_at",
    "trap_powers",
    "position_at",
    "path_fraction",
    "transport_state",
    "generate_waveforms",
    "cursor_time",
    "FrameScheduler",
    "ManualFrameScheduler",
    "TransportFrame",
    "TransportEngine",
    "render_frames",
]
