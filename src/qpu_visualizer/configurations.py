"""
Configuration Dataclasses for the Explainer Views
=================================================

Each chart or animation takes one small configuration object instead of a
long list of keyword arguments. Defaults reproduce the numbers quoted in the
paper (see ``constants``), and preset factories build the exact
configurations used by the coherence and lifetime charts.

CONFIGURATION OVERVIEW
----------------------

    DecayCurveConfig     stretched-exponential decay chart (T2, T1)
    RBConfig             randomized benchmarking chart (standard / interleaved)
    TransportConfig      SLM ↔ AOD handover cycle and path geometry
    ReadoutConfig        imaging ROI weights and photon-count histograms
    ArrayLoadingConfig   scaled-down occupation map of the tweezer array

PRESET CONFIGURATIONS
---------------------

- ``get_coherence_config()``: T2 = 12.6 s, α = 1.5 (XY16 decoupling)
- ``get_lifetime_config()``: τ = 22.9 min, α = 1 (vacuum-limited lifetime)

The transport configuration is validated on construction because a bad phase
boundary would leave part of the cycle without a phase label.
"""

from dataclasses import dataclass
from typing import Tuple

from .constants import (
    COHERENCE_T2, COHERENCE_MAX_TIME, COHERENCE_STRETCH, COHERENCE_NOISE,
    LIFETIME_TAU, LIFETIME_MAX_TIME, LIFETIME_NOISE,
    DECAY_GRID_POINTS, DECAY_MEASURE_EVERY,
    RB_SEQUENCE_LENGTHS, RB_SEQUENCES_PER_LENGTH, RB_DEPOLARIZING_P,
    RB_INTERLEAVED_FIDELITY, RB_VARIANCE_SCALE, RB_VARIANCE_LENGTH,
    TRANSPORT_CYCLE_DURATION, HANDOVER_START_END, TRANSPORT_END, HANDOVER_END_END,
    TRANSPORT_START_X, TRANSPORT_END_X, TRANSPORT_START_XY, TRANSPORT_END_XY,
    WAVEFORM_POINTS,
    ROI_SIZE, ROI_WEIGHT_SIGMA, ROI_NOISE,
    HISTOGRAM_BACKGROUND_MEAN, HISTOGRAM_SEPARATION, HISTOGRAM_WIDTH_UNWEIGHTED,
    HISTOGRAM_WIDTH_WEIGHTED, HISTOGRAM_MAX_COUNT, HISTOGRAM_STEP,
    ARRAY_COLS, ARRAY_ROWS, ARRAY_SPACING, ARRAY_VIEW_WIDTH, ARRAY_VIEW_HEIGHT,
    ARRAY_FILL_PROBABILITY,
)


# =============================================================================
# STATISTICAL CURVES
# =============================================================================

@dataclass
class DecayCurveConfig:
    """
    Parameters of a stretched-exponential decay chart.

    The fitted curve is C(t) = exp(-(t/τ)^α).

    Attributes
    ----------
    tau : float
        Decay constant, in the chart's time unit.
    max_time : float
        Right edge of the time grid.
    points : int
        Number of grid intervals (the grid has points + 1 samples).
    noise : float
        Peak-to-peak amplitude of the uniform measurement noise.
    exponent : float
        Stretch exponent α (1 = simple exponential).
    measure_every : int
        Stride of simulated measurements along the grid.
    label : str
        Legend label of the fit.
    time_unit : str
        Axis unit, e.g. "s" or "min".
    """
    tau: float = COHERENCE_T2
    max_time: float = COHERENCE_MAX_TIME
    points: int = DECAY_GRID_POINTS
    noise: float = 0.0
    exponent: float = 1.0
    measure_every: int = DECAY_MEASURE_EVERY
    label: str = "Fit"
    time_unit: str = "s"


def get_coherence_config() -> DecayCurveConfig:
    """XY16 coherence decay: T2 = 12.6 s with stretch exponent 1.5."""
    return DecayCurveConfig(
        tau=COHERENCE_T2,
        max_time=COHERENCE_MAX_TIME,
        noise=COHERENCE_NOISE,
        exponent=COHERENCE_STRETCH,
        label="XY16 Fit",
        time_unit="s",
    )


def get_lifetime_config() -> DecayCurveConfig:
    """Vacuum-limited survival: τ = 22.9 min, simple exponential."""
    return DecayCurveConfig(
        tau=LIFETIME_TAU,
        max_time=LIFETIME_MAX_TIME,
        noise=LIFETIME_NOISE,
        exponent=1.0,
        label="Fit Model",
        time_unit="min",
    )


@dataclass
class RBConfig:
    """
    Parameters of the randomized benchmarking chart.

    Attributes
    ----------
    p : float
        Depolarizing parameter of the reference Clifford sequence.
    interleaved_fidelity : float
        Extra factor applied to p when a transport move is interleaved
        between every Clifford.
    lengths : tuple of int
        Sequence lengths m.
    sequences_per_length : int
        Number of scatter samples drawn per length.
    variance_scale : float
        v0 in v(m) = v0 (1 - exp(-m/k)).
    variance_length : float
        k in v(m) = v0 (1 - exp(-m/k)).
    """
    p: float = RB_DEPOLARIZING_P
    interleaved_fidelity: float = RB_INTERLEAVED_FIDELITY
    lengths: Tuple[int, ...] = RB_SEQUENCE_LENGTHS
    sequences_per_length: int = RB_SEQUENCES_PER_LENGTH
    variance_scale: float = RB_VARIANCE_SCALE
    variance_length: float = RB_VARIANCE_LENGTH

    @property
    def interleaved_p(self) -> float:
        """Effective depolarizing parameter of the interleaved sequence."""
        return self.p * self.interleaved_fidelity


# =============================================================================
# TRANSPORT
# =============================================================================

@dataclass
class TransportConfig:
    """
    Timing and geometry of the SLM ↔ AOD transport cycle.

    Attributes
    ----------
    cycle_duration : float
        Length of one full cycle in seconds.
    handover_start_end : float
        Cycle fraction where the SLM → AOD handover ends.
    transport_end : float
        Cycle fraction where the move ends.
    handover_end_end : float
        Cycle fraction where the AOD → SLM handover ends (reset follows).
    start_xy, end_xy : tuple of float
        Start and end site in the 2-D path view.
    start_x, end_x : float
        Start and end site in the 1-D side view.
    waveform_points : int
        Samples per trap-intensity waveform.

    Raises
    ------
    ValueError
        If the boundaries are not strictly increasing inside (0, 1).
    """
    cycle_duration: float = TRANSPORT_CYCLE_DURATION
    handover_start_end: float = HANDOVER_START_END
    transport_end: float = TRANSPORT_END
    handover_end_end: float = HANDOVER_END_END
    start_xy: Tuple[float, float] = TRANSPORT_START_XY
    end_xy: Tuple[float, float] = TRANSPORT_END_XY
    start_x: float = TRANSPORT_START_X
    end_x: float = TRANSPORT_END_X
    waveform_points: int = WAVEFORM_POINTS

    def __post_init__(self):
        bounds = self.boundaries
        if not all(lo < hi for lo, hi in zip(bounds[:-1], bounds[1:])):
            raise ValueError(
                f"Phase boundaries must increase strictly inside (0, 1), got "
                f"{self.handover_start_end}, {self.transport_end}, {self.handover_end_end}"
            )
        if self.cycle_duration <= 0:
            raise ValueError(f"cycle_duration must be positive, got {self.cycle_duration}")
        if self.waveform_points < 2:
            raise ValueError(f"waveform_points must be at least 2, got {self.waveform_points}")

    @property
    def boundaries(self) -> Tuple[float, float, float, float, float]:
        """Phase edges as cycle fractions, from 0 to 1."""
        return (0.0, self.handover_start_end, self.transport_end,
                self.handover_end_end, 1.0)


# =============================================================================
# IMAGING
# =============================================================================

@dataclass
class ReadoutConfig:
    """
    Imaging region-of-interest and histogram parameters.

    Attributes
    ----------
    roi_size : int
        Side of the square ROI in pixels.
    weight_sigma : float
        Width of the Gaussian pixel weights (pixels).
    roi_noise : float
        Amplitude of the uniform background noise per pixel.
    background_mean : float
        Mean photon count with no atom.
    separation : float
        Mean count difference between atom and background.
    width_unweighted, width_weighted : float
        Histogram peak widths without and with pixel weighting.
    max_count, step : int
        Histogram count axis.
    """
    roi_size: int = ROI_SIZE
    weight_sigma: float = ROI_WEIGHT_SIGMA
    roi_noise: float = ROI_NOISE
    background_mean: float = HISTOGRAM_BACKGROUND_MEAN
    separation: float = HISTOGRAM_SEPARATION
    width_unweighted: float = HISTOGRAM_WIDTH_UNWEIGHTED
    width_weighted: float = HISTOGRAM_WIDTH_WEIGHTED
    max_count: int = HISTOGRAM_MAX_COUNT
    step: int = HISTOGRAM_STEP


@dataclass
class ArrayLoadingConfig:
    """Scaled-down tweezer grid used by the array occupation view."""
    cols: int = ARRAY_COLS
    rows: int = ARRAY_ROWS
    spacing: float = ARRAY_SPACING
    width: float = ARRAY_VIEW_WIDTH
    height: float = ARRAY_VIEW_HEIGHT
    fill_probability: float = ARRAY_FILL_PROBABILITY
