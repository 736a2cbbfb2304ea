# AOD/SLM Handover Schedule
#
# Pure functions of the normalised cycle time t ∈ [0, 1) describing one
# coherent-transport cycle of a single atom between two static SLM sites,
# carried by a moving AOD tweezer.
#
# Phase schedule (fractions of the cycle, see TransportConfig):
#   [0.00, 0.15)  handover_start  SLM ramps 1 → 0, AOD ramps 0 → 1, atom at start
#   [0.15, 0.75)  transport       AOD at full depth moves the atom, SLM off
#   [0.75, 0.90)  handover_end    AOD ramps 1 → 0, SLM ramps 0 → 1, atom at end
#   [0.90, 1.00)  reset           SLM at full depth, AOD off, atom back at start
#
# Path policies (only the transport phase differs):
#   - diagonal:   both AOD axes chirp together along the straight diagonal
#   - sequential: first the x axis moves fully, then the y axis ("Manhattan")
#
# Motion profile:
#   Each moving leg uses cubic in-out easing, so the trap starts and stops
#   with zero velocity and no acceleration-induced heating kick at the ends.
#
# Outputs:
#   - TransportState: stage, 1-D and 2-D positions, SLM/AOD powers
#   - WaveformSeries: both trap-depth waveforms over one cycle, for the
#     live intensity plot with its "now" cursor

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..configurations import TransportConfig
from ..utils.math_utils import ease_cubic_in_out, linear_ramp, wrap_unit


# =============================================================================
# PHASES AND POLICIES
# =============================================================================

PHASE_HANDOVER_START = "handover_start"
PHASE_TRANSPORT = "transport"
PHASE_HANDOVER_END = "handover_end"
PHASE_RESET = "reset"

# Cycle order; index i covers [boundaries[i], boundaries[i + 1])
TRANSPORT_PHASES = (
    PHASE_HANDOVER_START,
    PHASE_TRANSPORT,
    PHASE_HANDOVER_END,
    PHASE_RESET,
)

PATH_DIAGONAL = "diagonal"
PATH_SEQUENTIAL = "sequential"

_PATH_ALIASES = {
    "diagonal": PATH_DIAGONAL,
    "simultaneous": PATH_DIAGONAL,
    "sequential": PATH_SEQUENTIAL,
    "straight": PATH_SEQUENTIAL,
    "manhattan": PATH_SEQUENTIAL,
}

PHASE_LABELS = {
    PHASE_HANDOVER_START: "Handover (SLM → AOD)",
    PHASE_TRANSPORT: "{path} Transport",
    PHASE_HANDOVER_END: "Handover (AOD → SLM)",
    PHASE_RESET: "Resetting...",
}


def normalize_path_policy(policy: str) -> str:
    """Map user-facing path names onto "diagonal" / "sequential"."""
    key = policy.lower().strip()
    if key not in _PATH_ALIASES:
        raise ValueError(
            f"Unknown path policy '{policy}'. Use 'diagonal' (or 'simultaneous') "
            f"or 'sequential' (or 'straight', 'manhattan')."
        )
    return _PATH_ALIASES[key]


def phase_label(stage: str, path_policy: str = PATH_DIAGONAL) -> str:
    """Human-readable stage label shown above the animation."""
    return PHASE_LABELS[stage].format(path=path_policy.capitalize())


# =============================================================================
# DATA TYPES
# =============================================================================

@dataclass(frozen=True)
class TransportState:
    """
    Snapshot of the transport scene at cycle time ``time``.

    Attributes
    ----------
    time : float
        Normalised cycle time in [0, 1).
    stage : str
        One of TRANSPORT_PHASES.
    x : float
        Atom position in the 1-D side view.
    position : tuple of float
        Atom position in the 2-D path view.
    slm_power, aod_power : float
        Relative trap depths in [0, 1].
    slm_x : float
        Side-view site currently held by the static SLM trap.
    path_policy : str
        Policy used to derive the position.
    """
    time: float
    stage: str
    x: float
    position: Tuple[float, float]
    slm_power: float
    aod_power: float
    slm_x: float
    path_policy: str = PATH_DIAGONAL

    @property
    def label(self) -> str:
        return phase_label(self.stage, self.path_policy)


@dataclass
class WaveformSeries:
    """
    Trap-depth waveforms over one cycle.

    Attributes
    ----------
    slm, aod : list of (time, amplitude)
        Time in seconds from the start of the cycle, amplitude in [0, 1].
    """
    slm: List[Tuple[float, float]] = field(default_factory=list)
    aod: List[Tuple[float, float]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.slm)

    def amplitudes_at(self, time: float) -> Tuple[float, float]:
        """Linearly interpolated (SLM, AOD) amplitudes at ``time`` seconds; (0, 0) when empty."""
        if not self.slm:
            return 0.0, 0.0
        times = [p[0] for p in self.slm]
        slm = float(np.interp(time, times, [p[1] for p in self.slm]))
        aod = float(np.interp(time, times, [p[1] for p in self.aod]))
        return slm, aod


# =============================================================================
# SCHEDULE
# =============================================================================

def normalized_time(elapsed: float, config: Optional[TransportConfig] = None) -> float:
    """Cycle fraction for ``elapsed`` seconds since the animation started."""
    if config is None:
        config = TransportConfig()
    return wrap_unit(elapsed, config.cycle_duration)


def phase_at(t: float, config: Optional[TransportConfig] = None) -> str:
    """Stage covering cycle time ``t``."""
    if config is None:
        config = TransportConfig()
    bounds = config.boundaries
    for stage, upper in zip(TRANSPORT_PHASES, bounds[1:]):
        if t < upper:
            return stage
    return PHASE_RESET


def trap_powers(t: float, config: Optional[TransportConfig] = None) -> Tuple[float, float]:
    """
    Relative (SLM, AOD) trap depths at cycle time ``t``.

    During each handover one trap ramps down linearly while the other ramps
    up, so the atom is never left without confinement.
    """
    if config is None:
        config = TransportConfig()
    _, b1, b2, b3, _ = config.boundaries
    stage = phase_at(t, config)

    if stage == PHASE_HANDOVER_START:
        ramp = linear_ramp(t, 0.0, b1)
        return 1.0 - ramp, ramp
    if stage == PHASE_TRANSPORT:
        return 0.0, 1.0
    if stage == PHASE_HANDOVER_END:
        ramp = linear_ramp(t, b2, b3)
        return ramp, 1.0 - ramp
    return 1.0, 0.0


def _axis_progress(t: float, policy: str, config: TransportConfig) -> Tuple[float, float]:
    """Eased (x, y) progress of the move at cycle time ``t``."""
    _, b1, b2, _, _ = config.boundaries
    if policy == PATH_DIAGONAL:
        f = ease_cubic_in_out(linear_ramp(t, b1, b2))
        return f, f
    midpoint = (b1 + b2) / 2
    return (ease_cubic_in_out(linear_ramp(t, b1, midpoint)),
            ease_cubic_in_out(linear_ramp(t, midpoint, b2)))


def position_at(t: float, path_policy: str = PATH_DIAGONAL,
                config: Optional[TransportConfig] = None) -> Tuple[float, float]:
    """
    2-D atom position at cycle time ``t`` for the chosen path policy.

    The atom sits at the start site during the first handover and the reset,
    and at the end site during the second handover.
    """
    if config is None:
        config = TransportConfig()
    policy = normalize_path_policy(path_policy)
    (x0, y0), (x1, y1) = config.start_xy, config.end_xy

    stage = phase_at(t, config)
    if stage == PHASE_TRANSPORT:
        fx, fy = _axis_progress(t, policy, config)
    elif stage == PHASE_HANDOVER_END:
        fx, fy = 1.0, 1.0
    else:
        fx, fy = 0.0, 0.0

    return x0 + (x1 - x0) * fx, y0 + (y1 - y0) * fy


def path_fraction(t: float, path_policy: str = PATH_DIAGONAL,
                  config: Optional[TransportConfig] = None) -> float:
    """
    Fraction of the total path length covered at cycle time ``t``.

    Drives the 1-D side view so both policies cross it in step with the
    2-D inset.
    """
    if config is None:
        config = TransportConfig()
    (x0, y0), (x1, y1) = config.start_xy, config.end_xy
    x, y = position_at(t, path_policy, config)

    policy = normalize_path_policy(path_policy)
    if policy == PATH_DIAGONAL:
        total = np.hypot(x1 - x0, y1 - y0)
        covered = np.hypot(x - x0, y - y0)
    else:
        total = abs(x1 - x0) + abs(y1 - y0)
        covered = abs(x - x0) + abs(y - y0)
    return float(covered / total) if total > 0 else 0.0


def transport_state(t: float, path_policy: str = PATH_DIAGONAL,
                    config: Optional[TransportConfig] = None) -> TransportState:
    """
    Full scene state at cycle time ``t``.

    Parameters
    ----------
    t : float
        Normalised cycle time in [0, 1).
    path_policy : str
        "diagonal" or "sequential" (aliases accepted).
    config : TransportConfig, optional
        Cycle timing and geometry.

    Returns
    -------
    TransportState
    """
    if config is None:
        config = TransportConfig()
    policy = normalize_path_policy(path_policy)

    slm_power, aod_power = trap_powers(t, config)
    fraction = path_fraction(t, policy, config)

    return TransportState(
        time=t,
        stage=phase_at(t, config),
        x=config.start_x + (config.end_x - config.start_x) * fraction,
        position=position_at(t, policy, config),
        slm_power=slm_power,
        aod_power=aod_power,
        slm_x=config.end_x if t > 0.5 else config.start_x,
        path_policy=policy,
    )


# =============================================================================
# WAVEFORMS
# =============================================================================

def generate_waveforms(config: Optional[TransportConfig] = None) -> WaveformSeries:
    """
    Sample both trap-depth waveforms over one cycle.

    ``config.waveform_points`` samples at cycle fractions i/n, i = 0..n-1,
    taken from the same schedule as :func:`trap_powers`.
    """
    if config is None:
        config = TransportConfig()
    n = config.waveform_points

    series = WaveformSeries()
    for i in range(n):
        t = i / n
        slm, aod = trap_powers(t, config)
        series.slm.append((t * config.cycle_duration, slm))
        series.aod.append((t * config.cycle_duration, aod))
    return series


def cursor_time(t: float, config: Optional[TransportConfig] = None) -> float:
    """Position of the "now" cursor on the waveform time axis (seconds)."""
    if config is None:
        config = TransportConfig()
    return t * config.cycle_duration
