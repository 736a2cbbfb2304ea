"""
Statistical Curve Generators
============================

Synthetic chart data for the benchmarking section of the explainer.

    - decay_curves: stretched-exponential T2 / T1 curves with sparse noisy
      measurements, plus a scipy fit to recover τ and α
    - randomized_benchmarking: standard and interleaved RB scatter and fit
      curves, plus fidelity extraction

Both generators take an injectable noise source (``rng``) so tests can run
them deterministically.
"""

from .decay_curves import (
    DecaySample,
    DecayFitResult,
    stretched_exponential,
    generate_decay_data,
    generate_from_config,
    measured_points,
    fit_decay_curve,
)

from .randomized_benchmarking import (
    RBScatterSample,
    RBFitPoint,
    RBDataset,
    RBFitResult,
    normalize_rb_mode,
    rb_survival,
    rb_variance,
    average_gate_fidelity,
    interleaved_gate_fidelity,
    generate_rb_data,
    fit_rb_decay,
    fit_dataset,
)


__all__ = [
    "DecaySample",
    "DecayFitResult",
    "stretched_exponential",
    "generate_decay_data",
    "generate_from_config",
    "measured_points",
    "fit_decay_curve",
    "RBScatterSample",
    "RBFitPoint",
    "RBDataset",
    "RBFitResult",
    "normalize_rb_mode",
    "rb_survival",
    "rb_variance",
    "average_gate_fidelity",
    "interleaved_gate_fidelity",
    "generate_rb_data",
    "fit_rb_decay",
    "fit_dataset",
]
