"""
Test Suite: AOD/SLM Handover Schedule
=====================================

The scene is a pure function of the cycle time t. Checks phase boundaries,
complementary trap powers, both path policies and the waveform samples.
"""

import numpy as np
import pytest

from qpu_visualizer.configurations import TransportConfig
from qpu_visualizer.transport.schedule import (
    PHASE_HANDOVER_START,
    PHASE_TRANSPORT,
    PHASE_HANDOVER_END,
    PHASE_RESET,
    normalize_path_policy,
    normalized_time,
    phase_at,
    trap_powers,
    position_at,
    path_fraction,
    transport_state,
    WaveformSeries,
    generate_waveforms,
    cursor_time,
)

GRID = np.linspace(0.0, 0.999, 400)


@pytest.fixture
def config():
    return TransportConfig()


class TestPhases:

    @pytest.mark.parametrize("t,stage", [
        (0.0, PHASE_HANDOVER_START),
        (0.149, PHASE_HANDOVER_START),
        (0.15, PHASE_TRANSPORT),
        (0.7499, PHASE_TRANSPORT),
        (0.75, PHASE_HANDOVER_END),
        (0.8999, PHASE_HANDOVER_END),
        (0.9, PHASE_RESET),
        (0.999, PHASE_RESET),
    ])
    def test_phase_boundaries(self, t, stage):
        assert phase_at(t) == stage

    @pytest.mark.parametrize("elapsed,expected", [
        (0.0, 0.0), (4.0, 0.5), (8.0, 0.0), (10.0, 0.25), (-3.0, 0.0),
    ])
    def test_normalized_time(self, elapsed, expected):
        assert normalized_time(elapsed) == pytest.approx(expected)

    def test_invalid_config_raises(self):
        with pytest.raises(ValueError):
            TransportConfig(handover_start_end=0.8)
        with pytest.raises(ValueError):
            TransportConfig(cycle_duration=0.0)
        with pytest.raises(ValueError):
            TransportConfig(waveform_points=1)


class TestTrapPowers:

    @pytest.mark.parametrize("t,expected", [
        (0.0, (1.0, 0.0)),
        (0.075, (0.5, 0.5)),
        (0.4, (0.0, 1.0)),
        (0.825, (0.5, 0.5)),
        (0.95, (1.0, 0.0)),
    ])
    def test_schedule(self, t, expected):
        assert trap_powers(t) == pytest.approx(expected)

    def test_powers_are_complementary(self):
        for t in GRID:
            slm, aod = trap_powers(t)
            assert 0.0 <= slm <= 1.0 and 0.0 <= aod <= 1.0
            assert slm + aod == pytest.approx(1.0), f"Atom left unconfined at t={t:.3f}"


class TestPaths:

    def test_diagonal_endpoints_and_midpoint(self, config):
        assert position_at(0.1, "diagonal") == config.start_xy
        assert position_at(0.15, "diagonal") == pytest.approx(config.start_xy)
        assert position_at(0.45, "diagonal") == pytest.approx((75.0, 75.0))
        assert position_at(0.8, "diagonal") == pytest.approx(config.end_xy)
        assert position_at(0.95, "diagonal") == pytest.approx(config.start_xy)

    def test_diagonal_stays_on_the_line(self):
        for t in GRID:
            x, y = position_at(t, "diagonal")
            assert x + y == pytest.approx(150.0)

    def test_sequential_moves_x_then_y(self, config):
        (x0, y0), (x1, y1) = config.start_xy, config.end_xy
        assert position_at(0.3, "sequential") == pytest.approx((75.0, y0))
        assert position_at(0.45, "sequential") == pytest.approx((x1, y0))
        assert position_at(0.6, "sequential") == pytest.approx((x1, 75.0))
        assert position_at(0.75, "sequential") == pytest.approx((x1, y1))
        for t in GRID:
            x, y = position_at(t, "sequential")
            assert x == pytest.approx(x0) or x == pytest.approx(x1) or y == pytest.approx(y0)

    def test_motion_is_continuous(self):
        for policy in ("diagonal", "sequential"):
            for boundary in (0.15, 0.75):
                before = np.array(position_at(boundary - 1e-9, policy))
                after = np.array(position_at(boundary, policy))
                assert np.linalg.norm(after - before) < 1e-3

    def test_path_fraction(self):
        for policy in ("diagonal", "sequential"):
            assert path_fraction(0.05, policy) == 0.0
            assert path_fraction(0.8, policy) == pytest.approx(1.0)
        assert path_fraction(0.45, "diagonal") == pytest.approx(0.5)
        assert path_fraction(0.45, "sequential") == pytest.approx(0.5)

    @pytest.mark.parametrize("name,expected", [
        ("diagonal", "diagonal"), ("Simultaneous", "diagonal"),
        ("sequential", "sequential"), ("straight", "sequential"), ("MANHATTAN", "sequential"),
    ])
    def test_policy_aliases(self, name, expected):
        assert normalize_path_policy(name) == expected

    def test_unknown_policy_raises(self):
        with pytest.raises(ValueError, match="Unknown path policy"):
            position_at(0.3, "teleport")


class TestState:

    def test_side_view_position(self, config):
        assert transport_state(0.0).x == config.start_x
        assert transport_state(0.45).x == pytest.approx((config.start_x + config.end_x) / 2)
        assert transport_state(0.8).x == pytest.approx(config.end_x)
        assert transport_state(0.95).x == config.start_x

    def test_slm_site(self, config):
        assert transport_state(0.4).slm_x == config.start_x
        assert transport_state(0.5).slm_x == config.start_x
        assert transport_state(0.6).slm_x == config.end_x

    def test_labels(self):
        assert transport_state(0.05).label == "Handover (SLM → AOD)"
        assert transport_state(0.3, "diagonal").label == "Diagonal Transport"
        assert transport_state(0.3, "manhattan").label == "Sequential Transport"
        assert transport_state(0.8).label == "Handover (AOD → SLM)"
        assert transport_state(0.95).label == "Resetting..."

    def test_pure_function_of_time(self):
        assert transport_state(0.37, "sequential") == transport_state(0.37, "sequential")


class TestWaveforms:

    def test_length_and_times(self, config):
        waves = generate_waveforms(config)
        assert len(waves) == len(waves.aod) == 100
        times = [p[0] for p in waves.slm]
        assert times[0] == 0.0
        assert times[-1] == pytest.approx(0.99 * config.cycle_duration)
        np.testing.assert_allclose(np.diff(times), config.cycle_duration / 100)

    def test_follows_power_schedule(self, config):
        waves = generate_waveforms(config)
        for i, ((_, slm), (_, aod)) in enumerate(zip(waves.slm, waves.aod)):
            assert (slm, aod) == pytest.approx(trap_powers(i / 100, config))

    def test_interpolation(self, config):
        waves = generate_waveforms(config)
        assert waves.amplitudes_at(0.0) == pytest.approx((1.0, 0.0))
        assert waves.amplitudes_at(0.5 * config.cycle_duration) == pytest.approx((0.0, 1.0))

    def test_empty_series_interpolates_to_zero(self):
        assert WaveformSeries().amplitudes_at(1.0) == (0.0, 0.0)

    def test_cursor(self):
        assert cursor_time(0.5) == pytest.approx(4.0)
        assert cursor_time(0.0) == 0.0


class TestCycleSweep:

    def test_stage_order_without_skips(self):
        order = [PHASE_HANDOVER_START, PHASE_TRANSPORT, PHASE_HANDOVER_END, PHASE_RESET]
        stages = [phase_at(t) for t in np.arange(0.0, 2.0, 0.001) % 1.0]
        transitions = [b for a, b in zip(stages, stages[1:]) if a != b]
        for prev, nxt in zip([stages[0]] + transitions, transitions):
            assert order.index(nxt) == (order.index(prev) + 1) % 4, (
                f"Stage jumped from {prev} to {nxt}"
            )
        assert len(transitions) == 7
