"""Rounding and clamping helpers shared by the adjuster and evaluator."""

from __future__ import annotations

import math


def clamp(value: float, lower: float, upper: float) -> float:
    """Limit value to the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def round_to_increment(value: float, increment: float) -> float:
    """Round value to the nearest multiple of increment.

    Ties round half away from zero, so 102.5 at increment 5 gives 105 and
    -102.5 gives -105.

    Args:
        value: Weight (or any quantity) to round.
        increment: Step size, e.g. the smallest plate pair available.

    Returns:
        The rounded value. A non-positive increment makes this the identity,
        as does a non-finite value.
    """
    if increment <= 0:
        return value
    quotient = value / increment
    if not math.isfinite(quotient):
        return value
    if quotient >= 0:
        steps = math.floor(quotient + 0.5)
    else:
        steps = math.ceil(quotient - 0.5)
    return steps * increment
