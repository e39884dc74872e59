"""Numeric helpers shared by the scoring components."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (``62.5 -> 63``)."""
    return math.floor(value + 0.5)


def percent(numerator: float, denominator: float) -> int:
    """``round_half_up(100 * numerator / denominator)`` clamped to [0, 100].

    A zero denominator yields 0.
    """
    if denominator <= 0:
        return 0
    return clamp_percent(round_half_up(100 * numerator / denominator))


def clamp_percent(value: float) -> int:
    return int(min(100, max(0, value)))
