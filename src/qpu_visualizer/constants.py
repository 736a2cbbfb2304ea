"""
Fixed Constants for the Tweezer-Array Explainer
===============================================

This module collects every fixed number shared by the visualization and
simulation engine. Keeping them in one place guarantees that all sphere-based
views use the SAME viewing convention and that the charts are driven by the
same headline values quoted in the paper.

VIEWING CONVENTION
------------------

The Bloch sphere is drawn with an oblique parallel projection:

    1. rotate by VIEW_ROTATION about the vertical (screen y) axis
    2. tilt by VIEW_TILT about the horizontal (screen x) axis
    3. translate by the viewport centre (VIEWPORT_CENTER_X, VIEWPORT_CENTER_Y)

Screen y grows DOWNWARDS (SVG/canvas convention). The |0⟩ pole therefore sits
at (0, -R, 0) and the |1⟩ pole at (0, +R, 0), with R = SPHERE_RADIUS.

TRANSPORT CYCLE
---------------

One handover/transport/handover/reset cycle lasts TRANSPORT_CYCLE_DURATION
seconds. Phase boundaries are given as fractions of the cycle:

    0.00 ──── 0.15 ──────────────── 0.75 ──── 0.90 ──── 1.00
    Handover  │     Transport       │ Handover │  Reset  │
    SLM → AOD │  (AOD moves atom)   │ AOD → SLM│         │

PAPER VALUES
------------

    T2 (XY16 dynamical decoupling)   12.6(1) s, stretch exponent α ≈ 1.5
    Vacuum lifetime                  22.9(1) min
    Global Clifford RB               p ≈ 0.9985
    Transport (interleaved)          fidelity factor ≈ 0.9995 (>99.95 %)

References
----------
- Manetsch, Nomura et al., "A tweezer array with 6,100 highly coherent
  atomic qubits", Nature 647 (2025)
- Magesan et al., PRL 109, 080505 (2012) - Interleaved randomized benchmarking
- Levitt, Prog. NMR Spectrosc. 18, 61 (1986) - Composite pulses
"""

import numpy as np


# =============================================================================
# BLOCH SPHERE VIEW
# =============================================================================

VIEW_TILT = 0.4          # rad, about screen x
VIEW_ROTATION = 0.5      # rad, about screen y
VIEWPORT_WIDTH = 500
VIEWPORT_HEIGHT = 400
VIEWPORT_CENTER_X = VIEWPORT_WIDTH / 2
VIEWPORT_CENTER_Y = VIEWPORT_HEIGHT / 2

SPHERE_RADIUS = 120.0
WIREFRAME_STEP = 0.1     # rad between wireframe samples


# =============================================================================
# PULSE CONTROL
# =============================================================================

# Range of the calibration-error slider (fractional over/undershoot)
CALIBRATION_ERROR_MIN = -0.2
CALIBRATION_ERROR_MAX = 0.2

# Target operation: population flip |0⟩ → |1⟩
TARGET_ROTATION = np.pi

SINGLE_PULSE_AXIS = 0.0
SINGLE_PULSE_STEPS = 20

# Composite flip: (θ/2)_φ1 · (θ)_φ2 · (θ/2)_φ1 with perpendicular axes
COMPOSITE_OUTER_AXIS = 0.0
COMPOSITE_INNER_AXIS = np.pi / 2
COMPOSITE_OUTER_STEPS = 15
COMPOSITE_INNER_STEPS = 25


# =============================================================================
# DECAY CURVES
# =============================================================================

COHERENCE_T2 = 12.6            # s
COHERENCE_MAX_TIME = 20.0      # s
COHERENCE_STRETCH = 1.5
COHERENCE_NOISE = 0.05

LIFETIME_TAU = 22.9            # min
LIFETIME_MAX_TIME = 40.0       # min
LIFETIME_NOISE = 0.08

DECAY_GRID_POINTS = 100
DECAY_MEASURE_EVERY = 5


# =============================================================================
# RANDOMIZED BENCHMARKING
# =============================================================================

RB_SEQUENCE_LENGTHS = (2, 10, 20, 40, 80, 150, 300, 500)
RB_SEQUENCES_PER_LENGTH = 30
RB_DEPOLARIZING_P = 0.9985
RB_INTERLEAVED_FIDELITY = 0.9995
RB_VARIANCE_SCALE = 0.05
RB_VARIANCE_LENGTH = 100.0

RB_MODE_STANDARD = "standard"
RB_MODE_INTERLEAVED = "interleaved"

QUBIT_DIMENSION = 2


# =============================================================================
# TRANSPORT
# =============================================================================

TRANSPORT_CYCLE_DURATION = 8.0      # s
HANDOVER_START_END = 0.15
TRANSPORT_END = 0.75
HANDOVER_END_END = 0.90

# 1-D scene coordinates of the two SLM sites (main animation)
TRANSPORT_START_X = 100.0
TRANSPORT_END_X = 700.0

# 2-D inset coordinates (top-down path view)
TRANSPORT_START_XY = (20.0, 130.0)
TRANSPORT_END_XY = (130.0, 20.0)

WAVEFORM_POINTS = 100

# Phase ring on the atom spins at 100 deg/s of wall-clock time
PHASE_RING_RATE = 100.0


# =============================================================================
# IMAGING READOUT
# =============================================================================

ROI_SIZE = 7
ROI_WEIGHT_SIGMA = 1.2
ROI_NOISE = 0.4

HISTOGRAM_BACKGROUND_MEAN = 80.0
HISTOGRAM_SEPARATION = 70.0
HISTOGRAM_WIDTH_UNWEIGHTED = 25.0
HISTOGRAM_WIDTH_WEIGHTED = 10.0
HISTOGRAM_MAX_COUNT = 250
HISTOGRAM_STEP = 2


# =============================================================================
# ARRAY LOADING
# =============================================================================

ARRAY_COLS = 40
ARRAY_ROWS = 25
ARRAY_SPACING = 12.0
ARRAY_VIEW_WIDTH = 600.0
ARRAY_VIEW_HEIGHT = 400.0
ARRAY_FILL_PROBABILITY = 0.52
# Each drawn site stands for this many sites of the real array
ARRAY_SCALE_FACTOR = 6
