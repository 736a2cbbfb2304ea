"""
Randomized Benchmarking Curves
==============================

Synthetic standard and interleaved randomized benchmarking (RB / IRB) data,
and the fits that turn them into gate fidelities.

Standard RB
-----------
Random Clifford sequences of length m followed by the inverting Clifford
should return the qubit to its start state. Depolarizing errors shrink the
return probability towards the fully mixed value 1/2:

    y(m) = 1/2 + 1/2 p^m

The average Clifford fidelity follows from p for a d-level system:

    F_avg = 1 - (1 - p)(d - 1)/d

Interleaved RB
--------------
Interleaving one operation C (here: a transport move) between every Clifford
multiplies the decay parameter by that operation's own factor, p_C:

    p_int = p × p_C

and the fidelity of C alone is recovered from the RATIO of the two decays:

    F_C = 1 - (1 - p_int/p)(d - 1)/d

With p = 0.9985 and p_C = 0.9995 the transport fidelity is 99.975 %.

Scatter
-------
Each length gets ``sequences_per_length`` independent noisy draws around
y(m). The spread grows with length, saturating at v0:

    v(m) = v0 (1 - exp(-m/k))
    y_i  = clamp(y(m) + (u_i - 1/2) · 2 v(m), 0, 1)      u_i ~ U[0, 1)

References
----------
- Knill et al., PRA 77, 012307 (2008) - Randomized benchmarking
- Magesan et al., PRL 109, 080505 (2012) - Interleaved RB
"""

import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np
from scipy.optimize import curve_fit

from ..configurations import RBConfig
from ..constants import RB_MODE_STANDARD, RB_MODE_INTERLEAVED, QUBIT_DIMENSION
from ..utils.math_utils import clamp


_MODE_ALIASES = {
    "standard": RB_MODE_STANDARD,
    "rb": RB_MODE_STANDARD,
    "reference": RB_MODE_STANDARD,
    "interleaved": RB_MODE_INTERLEAVED,
    "irb": RB_MODE_INTERLEAVED,
}


# =============================================================================
# DATA TYPES
# =============================================================================

@dataclass
class RBScatterSample:
    """One noisy sequence outcome at length ``length``."""
    length: int
    y: float
    category: str


@dataclass
class RBFitPoint:
    """The model value of one curve at length ``length``."""
    length: int
    fit: float
    category: str


@dataclass
class RBDataset:
    """
    Everything the RB chart draws for one mode.

    Attributes
    ----------
    mode : str
        "standard" or "interleaved".
    scatter : list of RBScatterSample
        Sequence outcomes, all of the mode's own category.
    reference_fit : list of RBFitPoint
        Standard decay curve, one point per length (always present).
    interleaved_fit : list of RBFitPoint
        Interleaved decay curve, one point per length (interleaved mode only).
    """
    mode: str
    scatter: List[RBScatterSample] = field(default_factory=list)
    reference_fit: List[RBFitPoint] = field(default_factory=list)
    interleaved_fit: List[RBFitPoint] = field(default_factory=list)

    def to_records(self) -> List[Dict]:
        """
        Flat chart records sorted by sequence length.

        Scatter rows: {"length", "y", "type": "scatter", "category"}
        Line rows:    {"length", "standard_fit", "irb_fit", "type": "line", "category"}
        """
        records = [
            {"length": s.length, "y": s.y, "type": "scatter", "category": s.category}
            for s in self.scatter
        ]
        interleaved = {p.length: p.fit for p in self.interleaved_fit}
        for point in self.reference_fit:
            records.append({
                "length": point.length,
                "standard_fit": point.fit,
                "irb_fit": interleaved.get(point.length),
                "type": "line",
                "category": point.category,
            })
        return sorted(records, key=lambda r: r["length"])


@dataclass
class RBFitResult:
    """
    Fit of y(m) = A p^m + B.

    Attributes
    ----------
    p : float
        Depolarizing parameter.
    amplitude, offset : float
        A and B of the model.
    p_err : float
        One-sigma uncertainty of p.
    """
    p: float
    amplitude: float
    offset: float
    p_err: float

    @property
    def average_gate_fidelity(self) -> float:
        return average_gate_fidelity(self.p)


# =============================================================================
# MODEL
# =============================================================================

def normalize_rb_mode(mode: str) -> str:
    """Map user-facing RB mode names onto "standard" / "interleaved"."""
    key = mode.lower().strip()
    if key not in _MODE_ALIASES:
        raise ValueError(
            f"Unknown RB mode '{mode}'. Use 'standard' (or 'rb') "
            f"or 'interleaved' (or 'irb')."
        )
    return _MODE_ALIASES[key]


def rb_survival(m, p: float):
    """Return probability 1/2 + 1/2 p^m (works on arrays)."""
    return 0.5 + 0.5 * np.power(p, m)


def rb_variance(m: float, variance_scale: float, variance_length: float) -> float:
    """Scatter half-width v(m) = v0 (1 - exp(-m/k))."""
    return variance_scale * (1 - np.exp(-m / variance_length))


def average_gate_fidelity(p: float, dimension: int = QUBIT_DIMENSION) -> float:
    """F_avg = 1 - (1 - p)(d - 1)/d."""
    return 1 - (1 - p) * (dimension - 1) / dimension


def interleaved_gate_fidelity(p_reference: float, p_interleaved: float,
                              dimension: int = QUBIT_DIMENSION) -> float:
    """Fidelity of the interleaved operation from the two decay parameters."""
    return 1 - (1 - p_interleaved / p_reference) * (dimension - 1) / dimension


# =============================================================================
# GENERATOR
# =============================================================================

def generate_rb_data(
    mode: str = RB_MODE_STANDARD,
    config: Optional[RBConfig] = None,
    rng=None,
    decimals: Optional[int] = None,
) -> RBDataset:
    """
    Build scatter samples and fit curves for the RB chart.

    Parameters
    ----------
    mode : str
        "standard" draws reference sequences; "interleaved" draws sequences
        with a transport move between every Clifford and adds the
        interleaved fit curve.
    config : RBConfig, optional
        Decay parameters and sampling. Defaults to the paper values.
    rng : object with ``random()``, optional
        Noise source. Defaults to ``np.random.default_rng()``.
    decimals : int, optional
        Round y and fit values for display.

    Returns
    -------
    RBDataset
    """
    mode = normalize_rb_mode(mode)
    if config is None:
        config = RBConfig()
    if not config.lengths:
        raise ValueError("RB needs at least one sequence length")
    if rng is None:
        rng = np.random.default_rng()

    interleaved = mode == RB_MODE_INTERLEAVED
    p_scatter = config.interleaved_p if interleaved else config.p

    def _round(value: float) -> float:
        return round(value, decimals) if decimals is not None else value

    dataset = RBDataset(mode=mode)
    for m in config.lengths:
        mean = float(rb_survival(m, p_scatter))
        spread = rb_variance(m, config.variance_scale, config.variance_length)

        for _ in range(config.sequences_per_length):
            y = clamp(mean + (rng.random() - 0.5) * spread * 2, 0.0, 1.0)
            dataset.scatter.append(RBScatterSample(length=m, y=_round(y), category=mode))

        dataset.reference_fit.append(RBFitPoint(
            length=m,
            fit=_round(float(rb_survival(m, config.p))),
            category=RB_MODE_STANDARD,
        ))
        if interleaved:
            dataset.interleaved_fit.append(RBFitPoint(
                length=m,
                fit=_round(float(rb_survival(m, config.interleaved_p))),
                category=RB_MODE_INTERLEAVED,
            ))

    return dataset


# =============================================================================
# FITTING
# =============================================================================

def fit_rb_decay(lengths: Sequence[float], values: Sequence[float],
                 p_guess: float = 0.99) -> Optional[RBFitResult]:
    """
    Fit y(m) = A p^m + B to RB outcomes.

    Parameters
    ----------
    lengths : sequence of float
        Sequence length of every outcome (repeats allowed).
    values : sequence of float
        Return probabilities.
    p_guess : float
        Initial depolarizing parameter.

    Returns
    -------
    RBFitResult or None
        None (with a warning) when fewer than three distinct lengths exist.
    """
    lengths = np.asarray(lengths, dtype=float)
    values = np.asarray(values, dtype=float)
    if len(np.unique(lengths)) < 3:
        warnings.warn(
            f"Need at least 3 distinct sequence lengths to fit an RB decay, "
            f"got {len(np.unique(lengths))}"
        )
        return None

    popt, pcov = curve_fit(
        lambda m, a, p, b: a * np.power(p, m) + b,
        lengths,
        values,
        p0=[0.5, p_guess, 0.5],
        bounds=([0.0, 0.0, 0.0], [1.0, 1.0, 1.0]),
    )
    perr = np.sqrt(np.abs(np.diag(pcov)))

    return RBFitResult(
        p=float(popt[1]),
        amplitude=float(popt[0]),
        offset=float(popt[2]),
        p_err=float(perr[1]),
    )


def fit_dataset(dataset: RBDataset) -> Optional[RBFitResult]:
    """Fit the scatter samples of an :class:`RBDataset`."""
    return fit_rb_decay(
        [s.length for s in dataset.scatter],
        [s.y for s in dataset.scatter],
    )
