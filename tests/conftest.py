"""
Shared fixtures: deterministic noise sources for the stochastic generators.
"""

import pytest


class SequenceRNG:
    """Noise source returning a fixed cycle of values and counting draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def make_rng():
    """Factory: make_rng(0.5) or make_rng([0.1, 0.9]) -> SequenceRNG."""
    def _make(values):
        if isinstance(values, (int, float)):
            values = [values]
        return SequenceRNG(values)
    return _make
