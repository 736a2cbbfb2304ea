"""
Stretched-Exponential Decay Curves
==================================

Synthetic data for the coherence (T2) and lifetime (T1) charts, and the fit
that turns measured points back into a decay constant.

Model
-----
    C(t) = exp(-(t/τ)^α)

- α = 1: simple exponential (vacuum-limited atom loss)
- α > 1: "compressed" decay typical of dynamical-decoupling coherence, where
  slow noise dominates at early times

At t = τ the curve always equals 1/e, which is how τ is read off the chart.

Sparse Measurements
-------------------
A real experiment only samples a handful of dwell times. The generator
evaluates the fit on a uniform grid and attaches a noisy ``measured`` value
to every ``measure_every``-th grid point only:

    measured(t_i) = C(t_i) + (u_i - 1/2) × noise     u_i ~ U[0, 1)

Randomness is injected through ``rng`` (anything with a ``random()``
method), so tests can pass a fixed sequence or use ``noise = 0``.
"""

import warnings
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from scipy.optimize import curve_fit

from ..configurations import DecayCurveConfig


# =============================================================================
# DATA TYPES
# =============================================================================

@dataclass
class DecaySample:
    """
    One grid point of a decay chart.

    Attributes
    ----------
    time : float
        Grid time.
    fit : float
        Noiseless model value.
    measured : float or None
        Simulated measurement, present only at the sampling stride.
    """
    time: float
    fit: float
    measured: Optional[float] = None

    def to_dict(self) -> dict:
        return {"time": self.time, "fit": self.fit, "measured": self.measured}


@dataclass
class DecayFitResult:
    """
    Result of fitting C(t) = A exp(-(t/τ)^α) to measured points.

    Attributes
    ----------
    tau, exponent, amplitude : float
        Best-fit parameters.
    tau_err, exponent_err : float
        One-sigma uncertainties from the covariance matrix.
    n_points : int
        Number of measured samples used.
    """
    tau: float
    exponent: float
    amplitude: float
    tau_err: float
    exponent_err: float
    n_points: int

    def summary(self) -> str:
        return (f"τ = {self.tau:.3f} ± {self.tau_err:.3f}, "
                f"α = {self.exponent:.3f} ± {self.exponent_err:.3f} "
                f"({self.n_points} points)")


# =============================================================================
# MODEL
# =============================================================================

def stretched_exponential(t, tau: float, exponent: float = 1.0, amplitude: float = 1.0):
    """A exp(-(t/τ)^α), elementwise on arrays."""
    return amplitude * np.exp(-np.power(np.asarray(t, dtype=float) / tau, exponent))


# =============================================================================
# GENERATOR
# =============================================================================

def generate_decay_data(
    tau: float,
    max_time: float,
    points: int,
    noise: float = 0.0,
    exponent: float = 1.0,
    measure_every: int = 5,
    rng=None,
    decimals: Optional[int] = None,
) -> List[DecaySample]:
    """
    Build the fit curve and sparse noisy measurements for a decay chart.

    Parameters
    ----------
    tau : float
        Decay constant τ.
    max_time : float
        Last grid time.
    points : int
        Number of grid intervals; ``points + 1`` samples are returned.
    noise : float
        Peak-to-peak amplitude of the uniform measurement noise.
    exponent : float
        Stretch exponent α.
    measure_every : int
        Only grid indices divisible by this carry a measurement.
    rng : object with ``random()``, optional
        Noise source. Defaults to ``np.random.default_rng()``. Only drawn
        from at measured points.
    decimals : int, optional
        Round time to one decimal and values to ``decimals`` places, as the
        chart labels do. None keeps full precision.

    Returns
    -------
    list of DecaySample
    """
    if points <= 0:
        raise ValueError(f"points must be positive, got {points}")
    if measure_every <= 0:
        raise ValueError(f"measure_every must be positive, got {measure_every}")

    if rng is None:
        rng = np.random.default_rng()

    samples = []
    for i in range(points + 1):
        t = (max_time / points) * i
        fit = float(np.exp(-((t / tau) ** exponent)))

        measured = None
        if i % measure_every == 0:
            measured = fit + (rng.random() - 0.5) * noise

        if decimals is not None:
            t = round(t, 1)
            fit = round(fit, decimals)
            if measured is not None:
                measured = round(measured, decimals)

        samples.append(DecaySample(time=t, fit=fit, measured=measured))

    return samples


def generate_from_config(config: DecayCurveConfig, rng=None,
                         decimals: Optional[int] = None) -> List[DecaySample]:
    """Run :func:`generate_decay_data` with a :class:`DecayCurveConfig`."""
    return generate_decay_data(
        tau=config.tau,
        max_time=config.max_time,
        points=config.points,
        noise=config.noise,
        exponent=config.exponent,
        measure_every=config.measure_every,
        rng=rng,
        decimals=decimals,
    )


def measured_points(samples: Sequence[DecaySample]):
    """Times and values of the samples that carry a measurement."""
    pairs = [(s.time, s.measured) for s in samples if s.measured is not None]
    if not pairs:
        return np.array([]), np.array([])
    times, values = zip(*pairs)
    return np.array(times, dtype=float), np.array(values, dtype=float)


# =============================================================================
# FITTING
# =============================================================================

def fit_decay_curve(
    samples: Sequence[DecaySample],
    tau_guess: Optional[float] = None,
    exponent_guess: float = 1.0,
) -> Optional[DecayFitResult]:
    """
    Extract τ and α from the measured points of a decay chart.

    Parameters
    ----------
    samples : sequence of DecaySample
        Output of :func:`generate_decay_data`.
    tau_guess : float, optional
        Initial τ. Defaults to the time where the measurements first cross 1/e.
    exponent_guess : float
        Initial stretch exponent.

    Returns
    -------
    DecayFitResult or None
        None (with a warning) when fewer than four measurements are present.
    """
    times, values = measured_points(samples)
    if len(times) < 4:
        warnings.warn(
            f"Need at least 4 measured points to fit a stretched exponential, "
            f"got {len(times)}"
        )
        return None

    if tau_guess is None:
        below = np.nonzero(values < np.exp(-1))[0]
        tau_guess = times[below[0]] if len(below) else times[-1]
        tau_guess = max(tau_guess, times[1] if len(times) > 1 else 1.0)

    popt, pcov = curve_fit(
        lambda t, tau, alpha, amp: stretched_exponential(t, tau, alpha, amp),
        times,
        values,
        p0=[tau_guess, exponent_guess, 1.0],
        bounds=([1e-9, 0.1, 0.0], [np.inf, 5.0, 2.0]),
    )
    perr = np.sqrt(np.abs(np.diag(pcov)))

    return DecayFitResult(
        tau=float(popt[0]),
        exponent=float(popt[1]),
        amplitude=float(popt[2]),
        tau_err=float(perr[0]),
        exponent_err=float(perr[1]),
        n_points=len(times),
    )
