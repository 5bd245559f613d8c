"""
Envelope math shared by all animations

window() turns a signed 1-D offset (from a ring, an edge, a wave crest) into
a soft intensity. Phase and decay depend on entity timing and live on
Entity itself.

duration and thickness are knob-edited without validation. Division and
sine here follow IEEE-754 (x/0 -> ±inf or nan, sin(inf) -> nan) so a
degenerate value shows up as a dark or NaN pad instead of an exception
in the render loop; Color.to_rgb8() maps NaN to 0.
"""

import math

# Steepness of the bell; window(±thickness / 2.5) == 1/e
WINDOW_SHARPNESS = 2.5


def divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE-754 semantics for a zero denominator"""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def sine(x: float) -> float:
    """math.sin that returns nan for infinite input instead of raising"""
    if math.isinf(x):
        return math.nan
    return math.sin(x)


def window(value: float, thickness: float) -> float:
    """
    Symmetric bell curve: exp(-(2.5 * value / thickness)^2).

    Peak 1 at value == 0, even in value, decays monotonically with |value|.
    Larger thickness stretches the curve.
    """
    scaled = divide(WINDOW_SHARPNESS * value, thickness)
    return math.exp(-(scaled * scaled))
