#!/usr/bin/env python3
"""
Explainer Gallery
=================

Renders every view of the tweezer-array explainer to PNG and prints the
numbers each chart is meant to convey.

Generates:
1. Single vs composite pulse on the Bloch sphere (three calibration errors)
2. Endpoint error sweep
3. XY16 coherence decay with fitted T2
4. Vacuum-limited lifetime with fitted τ
5. Standard and interleaved randomized benchmarking
6. Weighted imaging readout (ROI frames and histograms)
7. Array loading map
8. Transport handover strip for both path policies
"""

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from qpu_visualizer.bloch import compare_pulses
from qpu_visualizer.benchmarking import (
    generate_from_config,
    fit_decay_curve,
    generate_rb_data,
    fit_dataset,
    interleaved_gate_fidelity,
)
from qpu_visualizer.configurations import (
    get_coherence_config,
    get_lifetime_config,
    ReadoutConfig,
    TransportConfig,
)
from qpu_visualizer.imaging import (
    compare_readout,
    simulate_readout_frames,
    simulate_array_loading,
)
from qpu_visualizer.transport import render_frames, PATH_DIAGONAL, PATH_SEQUENTIAL
from qpu_visualizer.utils.visualization import (
    TransportView,
    plot_array_loading,
    plot_decay_curve,
    plot_error_sweep,
    plot_pulse_comparison,
    plot_rb_curves,
    plot_readout_histograms,
    plot_roi_frames,
)


def save(fig: plt.Figure, output_path: Path):
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"  Saved: {output_path}")


def render_pulses(output_dir: Path):
    print("\nComposite pulse comparison...")
    errors = [-0.1, 0.05, 0.2]
    fig, axes = plt.subplots(1, len(errors), figsize=(15, 5))
    for ax, eps in zip(axes, errors):
        comparison = compare_pulses(eps)
        plot_pulse_comparison(comparison, ax=ax)
        print(f"  ε={eps:+.2f}: single error={comparison.single_error:.2f}, "
              f"composite error={comparison.composite_error:.2f}, "
              f"P(|1⟩) {comparison.single_transfer:.4f} → {comparison.composite_transfer:.4f}")
    save(fig, output_dir / "01_pulse_comparison.png")

    ax = plot_error_sweep()
    save(ax.figure, output_dir / "02_endpoint_error_sweep.png")


def render_decays(output_dir: Path, rng):
    print("\nDecay curves...")
    for index, (name, config) in enumerate([
        ("coherence", get_coherence_config()),
        ("lifetime", get_lifetime_config()),
    ], start=3):
        samples = generate_from_config(config, rng=rng)
        result = fit_decay_curve(samples)
        print(f"  {name}: {result.summary()}")
        ax = plot_decay_curve(samples, label=config.label, time_unit=config.time_unit,
                              title=f"{name.capitalize()} (τ = {result.tau:.1f} {config.time_unit})")
        save(ax.figure, output_dir / f"0{index}_{name}_decay.png")


def render_rb(output_dir: Path, rng):
    print("\nRandomized benchmarking...")
    standard = generate_rb_data("standard", rng=rng)
    interleaved = generate_rb_data("interleaved", rng=rng)

    fit_ref = fit_dataset(standard)
    fit_int = fit_dataset(interleaved)
    print(f"  reference p={fit_ref.p:.5f} (F_avg={fit_ref.average_gate_fidelity:.5f})")
    print(f"  interleaved p={fit_int.p:.5f}")
    print(f"  transport fidelity={interleaved_gate_fidelity(fit_ref.p, fit_int.p):.5f}")

    fig, axes = plt.subplots(1, 2, figsize=(14, 4), sharey=True)
    plot_rb_curves(standard, ax=axes[0])
    plot_rb_curves(interleaved, ax=axes[1])
    save(fig, output_dir / "05_randomized_benchmarking.png")


def render_imaging(output_dir: Path, rng):
    print("\nImaging readout...")
    config = ReadoutConfig()
    raw, weights, _ = simulate_readout_frames(config, rng=rng)
    axes = plot_roi_frames(raw, weights)
    save(axes[0].figure, output_dir / "06_roi_frames.png")

    comparison = compare_readout(config)
    print(f"  overlap: unweighted={comparison.unweighted_overlap:.3f}, "
          f"weighted={comparison.weighted_overlap:.4f}, threshold={comparison.threshold:.0f}")
    axes = plot_readout_histograms(comparison)
    save(axes[0].figure, output_dir / "06_readout_histograms.png")

    loading = simulate_array_loading(rng=rng)
    print(f"  array: {loading.loaded_count}/{loading.n_sites} loaded, "
          f"{loading.scaled_qubits} qubits (scaled)")
    ax = plot_array_loading(loading)
    save(ax.figure, output_dir / "07_array_loading.png")


def render_transport(output_dir: Path):
    print("\nTransport handover...")
    config = TransportConfig()
    timestamps = np.linspace(0.0, config.cycle_duration, 9)[:-1]
    for policy in (PATH_DIAGONAL, PATH_SEQUENTIAL):
        for i, frame in enumerate(render_frames(timestamps, config=config, path_policy=policy)):
            view = TransportView(config=config, path_policy=policy)
            view.update(frame)
            print(f"  {policy} t={frame.state.time:.3f}: {frame.state.label}, "
                  f"SLM={frame.state.slm_power:.2f}, AOD={frame.state.aod_power:.2f}")
            save(view.fig, output_dir / f"08_transport_{policy}_{i}.png")


def main():
    """Render every explainer view"""

    output_dir = Path(__file__).parent.parent / "figures" / "explainer"
    output_dir.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(6100)

    print("=" * 60)
    print("Tweezer-Array Explainer Gallery")
    print("=" * 60)

    render_pulses(output_dir)
    render_decays(output_dir, rng)
    render_rb(output_dir, rng)
    render_imaging(output_dir, rng)
    render_transport(output_dir)

    print("\nDone.")


if __name__ == "__main__":
    main()
