"""
Array Loading
=============

Stochastic occupation of a scaled-down tweezer grid.

Each tweezer is loaded independently with probability ``fill_probability``
(collisional blockade gives ~50 %). The grid is centred in the view, and the
loaded count is multiplied by ARRAY_SCALE_FACTOR to stand in for the full
array.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..configurations import ArrayLoadingConfig
from ..constants import ARRAY_SCALE_FACTOR


@dataclass
class ArrayLoadingResult:
    """
    One loading shot.

    Attributes
    ----------
    x, y : np.ndarray
        View coordinates of every site, column-major (column outer, row inner).
    loaded : np.ndarray of bool
        Occupation of every site.
    """
    x: np.ndarray
    y: np.ndarray
    loaded: np.ndarray

    @property
    def n_sites(self) -> int:
        return len(self.loaded)

    @property
    def loaded_count(self) -> int:
        return int(np.count_nonzero(self.loaded))

    @property
    def fill_fraction(self) -> float:
        return self.loaded_count / self.n_sites if self.n_sites else 0.0

    @property
    def scaled_qubits(self) -> int:
        return self.loaded_count * ARRAY_SCALE_FACTOR


def simulate_array_loading(config: Optional[ArrayLoadingConfig] = None, rng=None) -> ArrayLoadingResult:
    """
    Draw one occupation map.

    Parameters
    ----------
    config : ArrayLoadingConfig, optional
        Grid shape, spacing, view size and fill probability.
    rng : object with ``random()``, optional
        Noise source, one draw per site. Defaults to ``np.random.default_rng()``.

    Returns
    -------
    ArrayLoadingResult
    """
    if config is None:
        config = ArrayLoadingConfig()
    if config.cols <= 0 or config.rows <= 0:
        raise ValueError(f"Grid must have at least one site, got {config.cols}×{config.rows}")
    if rng is None:
        rng = np.random.default_rng()

    offset_x = (config.width - config.cols * config.spacing) / 2
    offset_y = (config.height - config.rows * config.spacing) / 2
    empty_below = 1.0 - config.fill_probability

    xs, ys, loaded = [], [], []
    for i in range(config.cols):
        for j in range(config.rows):
            xs.append(i * config.spacing + offset_x)
            ys.append(j * config.spacing + offset_y)
            loaded.append(rng.random() > empty_below)

    return ArrayLoadingResult(x=np.array(xs), y=np.array(ys), loaded=np.array(loaded, dtype=bool))
