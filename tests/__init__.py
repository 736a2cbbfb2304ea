# Tests for QPU Visualizer
#
# Test organization mirrors source structure:
#   - test_bloch/: projection, rotation, pulse trajectories
#   - test_benchmarking/: decay curves, randomized benchmarking
#   - test_transport/: handover schedule and animation engine
#   - test_imaging/: ROI readout and array loading
#   - test_utils/: matplotlib renderings (Agg backend)
#
# Running tests:
#   pytest tests/
#   pytest tests/test_transport/ -v
#   pytest tests/ -k "composite"
