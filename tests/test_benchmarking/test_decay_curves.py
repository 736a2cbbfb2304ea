"""
Test Suite: Stretched-Exponential Decay Curves
==============================================

Covers the chart generator (grid, sparse noisy measurements, rounding) and
the scipy fit that recovers τ and α from the measured points.
"""

import numpy as np
import pytest

from qpu_visualizer.benchmarking.decay_curves import (
    DecaySample,
    stretched_exponential,
    generate_decay_data,
    generate_from_config,
    measured_points,
    fit_decay_curve,
)
from qpu_visualizer.configurations import get_coherence_config, get_lifetime_config


@pytest.fixture
def coherence_samples(make_rng):
    return generate_from_config(get_coherence_config(), rng=make_rng(0.5))


class TestGenerator:

    def test_grid(self, make_rng):
        samples = generate_decay_data(tau=10.0, max_time=20.0, points=100, rng=make_rng(0.5))
        assert len(samples) == 101
        assert samples[0].time == 0.0
        assert samples[-1].time == pytest.approx(20.0)
        assert samples[0].fit == 1.0
        np.testing.assert_allclose(np.diff([s.time for s in samples]), 0.2)

    def test_fit_at_tau_is_one_over_e(self, make_rng):
        samples = generate_decay_data(tau=10.0, max_time=20.0, points=100,
                                      exponent=1.5, rng=make_rng(0.5))
        assert samples[50].time == pytest.approx(10.0)
        assert samples[50].fit == pytest.approx(np.exp(-1))

    def test_fit_is_monotone(self, coherence_samples):
        fits = np.array([s.fit for s in coherence_samples])
        assert np.all(np.diff(fits) <= 0)

    def test_measurements_only_every_fifth_point(self, make_rng):
        rng = make_rng(0.3)
        samples = generate_decay_data(tau=5.0, max_time=10.0, points=100, noise=0.1, rng=rng)
        for i, s in enumerate(samples):
            if i % 5 == 0:
                assert s.measured is not None, f"Index {i} should carry a measurement"
            else:
                assert s.measured is None, f"Index {i} should not carry a measurement"
        assert rng.calls == 21, "Noise source must only be drawn at measured points"

    def test_noise_offset(self, make_rng):
        samples = generate_decay_data(tau=5.0, max_time=10.0, points=10, noise=0.2,
                                      measure_every=1, rng=make_rng(0.75))
        for s in samples:
            assert s.measured == pytest.approx(s.fit + 0.05)

    def test_zero_noise_measures_the_fit(self, make_rng):
        samples = generate_decay_data(tau=5.0, max_time=10.0, points=20, rng=make_rng(0.9))
        for s in samples:
            if s.measured is not None:
                assert s.measured == s.fit

    def test_default_rng(self):
        samples = generate_decay_data(tau=5.0, max_time=10.0, points=20, noise=0.1)
        for s in samples:
            if s.measured is not None:
                assert abs(s.measured - s.fit) <= 0.05

    def test_decimals(self, make_rng):
        samples = generate_decay_data(tau=3.0, max_time=7.0, points=30, noise=0.1,
                                      rng=make_rng(0.37), decimals=3)
        for s in samples:
            assert s.fit == round(s.fit, 3)
            assert s.time == round(s.time, 1)
            if s.measured is not None:
                assert s.measured == round(s.measured, 3)

    @pytest.mark.parametrize("kwargs", [{"points": 0}, {"points": -5}, {"measure_every": 0}])
    def test_invalid_structure_raises(self, kwargs):
        params = dict(tau=5.0, max_time=10.0, points=10)
        params.update(kwargs)
        with pytest.raises(ValueError):
            generate_decay_data(**params)

    def test_presets(self):
        coherence = get_coherence_config()
        lifetime = get_lifetime_config()
        assert coherence.tau == 12.6 and coherence.exponent == 1.5
        assert lifetime.tau == 22.9 and lifetime.exponent == 1.0
        assert lifetime.time_unit == "min"

    def test_to_dict(self):
        sample = DecaySample(time=1.0, fit=0.5)
        assert sample.to_dict() == {"time": 1.0, "fit": 0.5, "measured": None}


class TestFit:

    def test_stretched_exponential(self):
        t = np.array([0.0, 2.0, 4.0])
        np.testing.assert_allclose(stretched_exponential(t, 2.0, 2.0),
                                   [1.0, np.exp(-1), np.exp(-4)])

    def test_recovers_coherence_parameters(self, coherence_samples):
        result = fit_decay_curve(coherence_samples)
        assert result is not None
        assert result.tau == pytest.approx(12.6, rel=1e-3)
        assert result.exponent == pytest.approx(1.5, rel=1e-3)
        assert result.amplitude == pytest.approx(1.0, rel=1e-3)
        assert result.n_points == 21

    def test_recovers_lifetime(self, make_rng):
        samples = generate_from_config(get_lifetime_config(), rng=make_rng(0.5))
        result = fit_decay_curve(samples)
        assert result.tau == pytest.approx(22.9, rel=1e-3)
        assert result.exponent == pytest.approx(1.0, rel=1e-3)

    def test_noisy_fit_is_close(self):
        config = get_coherence_config()
        samples = generate_from_config(config, rng=np.random.default_rng(3))
        result = fit_decay_curve(samples)
        assert result.tau == pytest.approx(config.tau, rel=0.15), result.summary()

    def test_too_few_points_warns(self, make_rng):
        samples = generate_decay_data(tau=5.0, max_time=10.0, points=10, rng=make_rng(0.5))
        assert len(measured_points(samples)[0]) == 3
        with pytest.warns(UserWarning, match="at least 4"):
            assert fit_decay_curve(samples) is None


class TestEndToEnd:

    def test_simple_exponential_at_tau(self, make_rng):
        samples = generate_decay_data(tau=12.6, max_time=20, points=100, noise=0,
                                      exponent=1, rng=make_rng(0.2))
        at_tau = [s for s in samples if abs(s.time - 12.6) < 1e-9]
        assert len(at_tau) == 1
        assert at_tau[0].fit == pytest.approx(np.exp(-1), abs=1e-3)
