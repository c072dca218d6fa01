"""
Rhythm Evaluator - Local rhythmic complexity of a note.

Scores how unpredictable the timing pattern leading up to a note is:

1. Collect the intervals of the note and up to 15 predecessors
2. For every interval, estimate its probability of occurrence in that window
   as the mean similarity to all intervals of the window
3. Sum the information entropy ``-p * ln(p)`` of those probabilities

Similarity between two intervals is high when their ratio is close to a small
integer or simple fraction. The harmonic weights and powers below are opaque
tuned values.

Preconditions (not validated here): every interval is positive and finite.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np
from numba import njit

from pyrhythmcomplexity.difficulty.constants import (
    COEF_COSINE_POWER,
    COEF_ITERATIONS,
    COEF_SINE_POWER,
    ENTROPY_MULTIPLIER,
    MAX_OBJECT_COUNT,
)
from pyrhythmcomplexity.difficulty.preprocessing import TimingHistory


def largest_prime_factor(n: int) -> int:
    """Largest prime factor of ``n``, with 1 mapped to 1."""
    factor = 1
    divisor = 2
    while n > 1:
        while n % divisor == 0:
            factor = divisor
            n //= divisor
        divisor += 1
    return factor


# Largest prime factor of each harmonic, starting at 1
BIGGEST_PRIME_FACTOR = np.array(
    [largest_prime_factor(n) for n in range(1, COEF_ITERATIONS + 1)],
    dtype=np.int64,
)
BIGGEST_PRIME_FACTOR.flags.writeable = False

# Inverse sum of the first COEF_ITERATIONS biggest prime factors
INVERSE_BIGGEST_PRIME_FACTOR_SUM = float(
    sum(1.0 / int(f) for f in BIGGEST_PRIME_FACTOR[:COEF_ITERATIONS])
)

_COSINE_POWER = float(COEF_COSINE_POWER)
_SINE_POWER = float(COEF_SINE_POWER)


def rhythm_window(current: TimingHistory) -> np.ndarray:
    """
    Intervals of ``current`` and its predecessors, most recent first.

    Offset -1 is the current object itself, so the window always starts with
    the current interval and holds at most MAX_OBJECT_COUNT values.
    """
    delta_times = []
    for x in range(MAX_OBJECT_COUNT):
        if not current.has_predecessor(x - 1):
            break
        delta_times.append(current.interval_duration(x - 1))

    return np.array(delta_times, dtype=np.float64)


def evaluate_difficulty_of(current: TimingHistory) -> float:
    """
    Rhythm complexity of a note.

    Args:
        current: The note to evaluate; must expose its own interval and those
            of its predecessors through the TimingHistory protocol

    Returns:
        Non-negative entropy of the local timing window, scaled by
        ENTROPY_MULTIPLIER. 0 for a single interval or a perfectly regular window.
    """
    return float(window_entropy(rhythm_window(current)))


def evaluate_sequence(objects: Iterable[TimingHistory]) -> np.ndarray:
    """Rhythm complexity of every object of a sequence, in order."""
    return np.array([evaluate_difficulty_of(obj) for obj in objects], dtype=np.float64)


@njit(cache=True)
def window_entropy(delta_times: np.ndarray) -> float:
    """Scaled entropy of a window of intervals."""
    entropy = 0.0

    for x in delta_times:
        p = probability(x, delta_times)
        entropy += -p * math.log(p)

    return entropy * ENTROPY_MULTIPLIER


@njit(cache=True)
def probability(delta_time1: float, delta_times: np.ndarray) -> float:
    """Average probability of occurrence of ``delta_time1`` within the window."""
    p = 0.0

    for delta_time2 in delta_times:
        p += coefficient(delta_time1, delta_time2)

    return p / len(delta_times)


@njit(cache=True)
def coefficient(delta_time1: float, delta_time2: float) -> float:
    """
    Rhythmic similarity of two intervals, about 1 for related ratios.

    Not symmetric: the ratio is always ``delta_time1 / delta_time2``.
    """
    coef = 0.0

    for i in range(1, COEF_ITERATIONS + 1):
        cos = math.pow(math.cos(delta_time1 / delta_time2 * i * math.pi), _COSINE_POWER)
        sin = math.pow(math.sin(cos * math.pi / 2), _SINE_POWER)

        coef += sin / BIGGEST_PRIME_FACTOR[i - 1]

    return coef / INVERSE_BIGGEST_PRIME_FACTOR_SUM
