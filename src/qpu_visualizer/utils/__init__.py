# Utility Functions
#
# Common utilities used across the explainer.
#
# Submodules:
#   - math_utils: clamping, linear ramps, cubic in-out easing, cycle wrapping
#   - visualization: matplotlib renderings and the canvas frame scheduler
#
# visualization imports matplotlib; import it explicitly:
#   from qpu_visualizer.utils.visualization import plot_pulse_comparison

from .math_utils import clamp, linear_ramp, ease_cubic_in_out, wrap_unit

__all__ = ["clamp", "linear_ramp", "ease_cubic_in_out", "wrap_unit"]
