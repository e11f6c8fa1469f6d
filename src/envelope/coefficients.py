"""One-pole stage coefficients and parameter conversions.

Every stage of the envelope is the recurrence ``value = b + c * value``. The
pair ``(b, c)`` is solved so that, starting from the stage's start target, the
recurrence lands on its end target after ``rate_samples`` steps, with the
curvature controlled by a cubic-warped tension.
"""

from __future__ import annotations

from math import exp, log
from typing import Tuple

# Sentinel for zero tension: makes the warp so large the curve is a straight
# line for all practical purposes (but not exactly one).
NEUTRAL_TENSION = 100.0


def solve_coefficients(
    target_start: float,
    target_end: float,
    target_c: float,
    rate_samples: float,
    tension_raw: float,
    mult: float,
) -> Tuple[float, float]:
    """Return ``(b, c)`` for one stage.

    ``tension_raw > 1`` gives a slow-start curve, anything else a fast-start
    (inverse exponential) one. ``target_c`` is the amplitude span the warp is
    scaled against. Requires ``rate_samples >= 1`` and a tension produced by
    ``normalize_tension``.
    """
    if tension_raw > 1:
        t = (tension_raw - 1) ** 3
        c = exp(log((target_c + t) / t) / rate_samples)
        b = (target_start - mult * t) * (1 - c)
    else:
        t = tension_raw ** 3
        c = exp(-log((target_c + t) / t) / rate_samples)
        b = (target_end + mult * t) * (1 - c)
    return b, c


def normalize_tension(tension: float) -> float:
    # [-1, 1] -> solver domain, skipping the singular point 1
    u = tension + 1
    if u == 1:
        return NEUTRAL_TENSION
    if u > 1:
        return 3.001 - u
    return 0.001 + u


def ms_to_samples(ms: float, sample_rate: float) -> float:
    return max(ms, 1) * 0.001 * sample_rate


def db_to_gain(db: float) -> float:
    return 10 ** (min(db, 0) / 20)
