# Weighted Fluorescence Readout
#
# Toy model of single-site imaging: an atom is detected by summing camera
# counts over a small region of interest (ROI) around its tweezer.
#
# Physics included:
#   - Point-spread signal concentrated in the central pixels of a 7×7 ROI
#   - Uniform background noise on every pixel
#   - Gaussian weight function W(u, v) that suppresses the noisy edge pixels
#
# Photon-count statistics:
#   Background (no atom) and atom counts are modelled as Gaussian peaks of
#   equal width. Weighting narrows both peaks without moving them, so the
#   overlap shrinks and a threshold at the midpoint separates them cleanly.
#
# Outputs:
#   - Weight matrix, noisy raw ROI frames, weighted frames
#   - Histogram records {counts, background, atom}
#   - Peak overlap and detection threshold

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..configurations import ReadoutConfig
from ..constants import (
    ROI_SIZE,
    ROI_WEIGHT_SIGMA,
    ROI_NOISE,
    HISTOGRAM_BACKGROUND_MEAN,
    HISTOGRAM_MAX_COUNT,
    HISTOGRAM_STEP,
)


@dataclass
class ReadoutComparison:
    """Unweighted vs weighted histograms for the same peak separation."""
    unweighted: List[Dict[str, float]]
    weighted: List[Dict[str, float]]
    threshold: float

    @property
    def unweighted_overlap(self) -> float:
        return histogram_overlap(self.unweighted)

    @property
    def weighted_overlap(self) -> float:
        return histogram_overlap(self.weighted)


def _distance_grid(size: int) -> np.ndarray:
    center = size // 2
    ys, xs = np.mgrid[0:size, 0:size]
    return np.sqrt((xs - center) ** 2 + (ys - center) ** 2)


def gaussian_weight_matrix(size: int = ROI_SIZE, sigma: float = ROI_WEIGHT_SIGMA) -> np.ndarray:
    """
    Gaussian ROI weights, 1 at the central pixel.

    W(u, v) = exp(-d² / 2σ²), d measured from pixel (size // 2, size // 2).
    """
    if size <= 0:
        raise ValueError(f"ROI size must be positive, got {size}")
    d = _distance_grid(size)
    return np.exp(-d ** 2 / (2 * sigma ** 2))


def simulate_roi_frame(size: int = ROI_SIZE, noise: float = ROI_NOISE, rng=None) -> np.ndarray:
    """
    One noisy raw ROI frame.

    Pixels within 1.5 of the centre carry signal max(0, 1 - d/2); every pixel
    gets ``u × noise`` background with u drawn from ``rng.random()`` in
    row-major order.
    """
    if size <= 0:
        raise ValueError(f"ROI size must be positive, got {size}")
    if rng is None:
        rng = np.random.default_rng()

    d = _distance_grid(size)
    signal = np.where(d < 1.5, np.maximum(0.0, 1.0 - 0.5 * d), 0.0)

    frame = np.empty((size, size))
    for row in range(size):
        for col in range(size):
            frame[row, col] = signal[row, col] + rng.random() * noise
    return frame


def apply_weights(frame: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """Elementwise S·W of a raw frame and a weight matrix of the same shape."""
    frame = np.asarray(frame, dtype=float)
    weights = np.asarray(weights, dtype=float)
    if frame.shape != weights.shape:
        raise ValueError(
            f"Frame shape {frame.shape} does not match weight shape {weights.shape}"
        )
    return frame * weights


def simulate_readout_frames(
    config: Optional[ReadoutConfig] = None, rng=None
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Raw ROI frame, weight matrix and weighted frame for a readout configuration.

    Returns
    -------
    tuple of np.ndarray
        (raw, weights, weighted), each ``config.roi_size`` square.
    """
    if config is None:
        config = ReadoutConfig()
    raw = simulate_roi_frame(config.roi_size, config.roi_noise, rng=rng)
    weights = gaussian_weight_matrix(config.roi_size, config.weight_sigma)
    return raw, weights, apply_weights(raw, weights)


def photon_count_histogram(
    separation: float,
    width: float,
    background_mean: float = HISTOGRAM_BACKGROUND_MEAN,
    max_count: int = HISTOGRAM_MAX_COUNT,
    step: int = HISTOGRAM_STEP,
) -> List[Dict[str, float]]:
    """
    Background and atom photon-count peaks sampled on 0, step, ..., max_count.

    Parameters
    ----------
    separation : float
        Distance between the atom peak and the background peak (counts).
    width : float
        Standard deviation of both peaks (counts).

    Returns
    -------
    list of dict
        {"counts", "background", "atom"}, peak heights normalised to 1.
    """
    if width <= 0:
        raise ValueError(f"Histogram width must be positive, got {width}")
    if step <= 0:
        raise ValueError(f"Histogram step must be positive, got {step}")

    atom_mean = background_mean + separation
    records = []
    for counts in range(0, max_count + 1, step):
        records.append({
            "counts": counts,
            "background": float(np.exp(-(counts - background_mean) ** 2 / (2 * width ** 2))),
            "atom": float(np.exp(-(counts - atom_mean) ** 2 / (2 * width ** 2))),
        })
    return records


def histogram_overlap(records: List[Dict[str, float]]) -> float:
    """Shared area of the two peaks as a fraction of the background area."""
    background = np.array([r["background"] for r in records])
    atom = np.array([r["atom"] for r in records])
    total = background.sum()
    if total == 0:
        return 0.0
    return float(np.minimum(background, atom).sum() / total)


def detection_threshold(separation: float, background_mean: float = HISTOGRAM_BACKGROUND_MEAN) -> float:
    """Midpoint between the two peaks (115 counts for the default readout)."""
    return background_mean + separation / 2


def compare_readout(config: Optional[ReadoutConfig] = None) -> ReadoutComparison:
    """Unweighted and weighted histograms for a readout configuration."""
    if config is None:
        config = ReadoutConfig()

    def _hist(width: float) -> List[Dict[str, float]]:
        return photon_count_histogram(config.separation, width, config.background_mean,
                                      config.max_count, config.step)

    return ReadoutComparison(
        unweighted=_hist(config.width_unweighted),
        weighted=_hist(config.width_weighted),
        threshold=detection_threshold(config.separation, config.background_mean),
    )
