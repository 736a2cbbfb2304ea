# QPU Visualizer: Numerical Core of the Tweezer-Array Explainer
#
# Geometry, pulse, transport and statistics engines behind an interactive
# explainer of a 6,100-qubit neutral-atom tweezer array.
#
# Subsystems:
#   bloch:        projected Bloch sphere, single vs composite pulse paths
#   benchmarking: coherence/lifetime decays, standard and interleaved RB
#   transport:    AOD/SLM handover schedule and frame-driven engine
#   imaging:      weighted ROI readout, array loading
#   utils:        math helpers, matplotlib renderings

__version__ = "0.1.0"
