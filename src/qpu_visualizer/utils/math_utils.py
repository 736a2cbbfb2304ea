# Mathematical Utilities
#
# Small scalar helpers shared by the animation and curve generators.
#
# Functions:
#   - clamp: bound a value to an interval
#   - linear_ramp: normalised position of t inside a window
#   - ease_cubic_in_out: smooth 0 → 1 easing with zero velocity at both ends
#   - wrap_unit: fold an elapsed time into a [0, 1) cycle fraction

import numpy as np


def clamp(value: float, low: float, high: float) -> float:
    """Bound ``value`` to the closed interval [low, high]."""
    return min(high, max(low, value))


def linear_ramp(t: float, start: float, end: float) -> float:
    """
    Fraction of the way ``t`` has travelled through the window [start, end).

    Values outside the window are clamped to 0 or 1.
    """
    if end <= start:
        return 1.0 if t >= end else 0.0
    return clamp((t - start) / (end - start), 0.0, 1.0)


def ease_cubic_in_out(t: float) -> float:
    """
    Symmetric cubic easing.

    f(t) = 4t³              for t < 1/2
    f(t) = 1 - (2 - 2t)³/2  otherwise

    f(0) = 0, f(1/2) = 1/2, f(1) = 1 and f'(0) = f'(1) = 0, so a trap moved
    with this profile starts and stops without a velocity jump.
    """
    t = clamp(t, 0.0, 1.0) * 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


def wrap_unit(elapsed: float, duration: float) -> float:
    """
    Convert an elapsed time into a fraction of a repeating cycle.

    Negative elapsed times are treated as zero.
    """
    elapsed = max(0.0, elapsed)
    return float(np.mod(elapsed, duration) / duration)
