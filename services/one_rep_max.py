"""
One-Rep Max Estimation
Estimated 1RM from a logged weight x reps attempt

Each estimator maps a multi-rep set to the single rep it predicts. The
exercise detail view picks one by name; 'average' blends all of them.
"""

import numpy as np

DEFAULT_FORMULA = 'epley'
AVERAGE = 'average'


def _epley(weight: float, reps: int) -> float:
    return weight * (1 + reps / 30)


def _brzycki(weight: float, reps: int) -> float:
    # Diverges as reps approach 37
    if reps >= 37:
        return weight * 2
    return weight * 36 / (37 - reps)


def _lombardi(weight: float, reps: int) -> float:
    return weight * reps ** 0.10


def _oconner(weight: float, reps: int) -> float:
    return weight * (1 + reps / 40)


def _mayhew(weight: float, reps: int) -> float:
    return weight * 100 / (52.2 + 41.9 * np.exp(-0.055 * reps))


ESTIMATORS = {
    'epley': _epley,
    'brzycki': _brzycki,
    'lombardi': _lombardi,
    'oconner': _oconner,
    'mayhew': _mayhew,
}

FORMULAS = tuple(ESTIMATORS) + (AVERAGE,)


def estimate_1rm(weight: float, reps: int, formula: str = DEFAULT_FORMULA) -> float:
    """
    Estimated one-rep max for a single attempt.

    A single rep is its own max, and an empty or weightless attempt
    estimates 0. Raises ValueError for a formula name not in FORMULAS.
    """
    if formula not in FORMULAS:
        raise ValueError(f"Unknown 1RM formula: {formula}")
    if reps < 1 or weight <= 0:
        return 0.0
    if reps == 1:
        return float(weight)

    if formula == AVERAGE:
        return float(np.mean([estimator(weight, reps) for estimator in ESTIMATORS.values()]))
    return float(ESTIMATORS[formula](weight, reps))
