"""
Imaging Subsystem
=================

    - readout: ROI weighting and photon-count histograms
    - array_loading: stochastic occupation of the tweezer grid
"""

from .readout import (
    ReadoutComparison,
    gaussian_weight_matrix,
    simulate_roi_frame,
    simulate_readout_frames,
    apply_weights,
    photon_count_histogram,
    histogram_overlap,
    detection_threshold,
    compare_readout,
)

from .array_loading import (
    ArrayLoadingResult,
    simulate_array_loading,
)


__all__ = [
    "ReadoutComparison",
    "gaussian_weight_matrix",
    "simulate_roi_frame",
    "simulate_readout_frames",
    "apply_weights",
    "photon_count_histogram",
    "histogram_overlap",
    "detection_threshold",
    "compare_readout",
    "ArrayLoadingResult",
    "simulate_array_loading",
]
