import math

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from pyrhythmcomplexity.difficulty import create_difficulty_hit_objects, evaluate_sequence
from pyrhythmcomplexity.difficulty.constants import MAX_OBJECT_COUNT
from pyrhythmcomplexity.difficulty.evaluators.rhythm import (
    BIGGEST_PRIME_FACTOR,
    INVERSE_BIGGEST_PRIME_FACTOR_SUM,
    coefficient,
    evaluate_difficulty_of,
    largest_prime_factor,
    probability,
    rhythm_window,
    window_entropy,
)
from tests.helpers import IntervalHistory

FACTORS = [1, 2, 3, 2, 5, 3, 7, 2]


def reference_complexity(window):
    norm = sum(1.0 / f for f in FACTORS)

    def coef(a, b):
        total = 0.0
        for i in range(1, 9):
            c = math.cos(a / b * i * math.pi) ** 2
            s = math.sin(c * math.pi / 2) ** 8
            total += s / FACTORS[i - 1]
        return total / norm

    entropy = 0.0
    for x in window:
        p = sum(coef(x, y) for y in window) / len(window)
        entropy += -p * math.log(p)
    return entropy * 0.4


intervals_st = st.floats(min_value=1.0, max_value=2000.0, allow_nan=False, allow_infinity=False)


def test_prime_factor_table():
    assert list(BIGGEST_PRIME_FACTOR) == FACTORS
    assert [largest_prime_factor(n) for n in (1, 9, 12, 49, 97)] == [1, 3, 3, 7, 97]


def test_prime_factor_table_is_read_only():
    with pytest.raises(ValueError):
        BIGGEST_PRIME_FACTOR[0] = 4


def test_inverse_prime_factor_sum():
    assert INVERSE_BIGGEST_PRIME_FACTOR_SUM == pytest.approx(sum(1.0 / f for f in FACTORS))
    assert INVERSE_BIGGEST_PRIME_FACTOR_SUM == pytest.approx(3.5095238, abs=1e-6)


@pytest.mark.parametrize("value", [1.0, 25.0, 100.0, 333.3, 1234.5678])
def test_coefficient_of_identical_intervals_is_one(value):
    assert coefficient(value, value) == pytest.approx(1.0, abs=1e-12)


def test_coefficient_is_asymmetric():
    # 200/100 = 2 hits every harmonic; 100/200 = 0.5 only the even ones
    assert coefficient(200.0, 100.0) == pytest.approx(1.0, abs=1e-12)
    expected = (1 / 2 + 1 / 2 + 1 / 3 + 1 / 2) / INVERSE_BIGGEST_PRIME_FACTOR_SUM
    assert coefficient(100.0, 200.0) == pytest.approx(expected, abs=1e-9)


def test_coefficient_is_low_for_unrelated_ratio():
    assert coefficient(100.0, 100.0 * math.sqrt(2)) < coefficient(100.0, 200.0)


def test_probability_includes_self_term():
    window = np.array([100.0, 137.0, 251.0])
    assert probability(100.0, window) >= 1.0 / len(window)
    assert probability(100.0, np.array([100.0])) == pytest.approx(1.0)


def test_single_interval_window_is_zero():
    assert evaluate_difficulty_of(IntervalHistory([100.0])) == 0.0


@pytest.mark.parametrize("length", [2, 3, 7, 16, 40])
def test_regular_window_is_zero(length):
    assert evaluate_difficulty_of(IntervalHistory([100.0] * length)) == pytest.approx(0.0, abs=1e-9)


def test_alternating_window_matches_reference():
    history = IntervalHistory([100.0, 200.0, 100.0, 200.0])
    result = evaluate_difficulty_of(history)

    assert result > 0
    assert result == pytest.approx(reference_complexity([200.0, 100.0, 200.0, 100.0]), abs=1e-9)
    assert result == pytest.approx(0.16616, abs=1e-4)


def test_window_starts_with_current_interval():
    history = IntervalHistory([10.0, 20.0, 30.0, 40.0])
    assert list(rhythm_window(history)) == [40.0, 30.0, 20.0, 10.0]


def test_window_is_capped():
    history = IntervalHistory([float(i) for i in range(1, 51)])
    window = rhythm_window(history)

    assert len(window) == MAX_OBJECT_COUNT
    assert window[0] == 50.0
    assert window[-1] == 35.0


@settings(max_examples=50, deadline=None)
@given(st.lists(intervals_st, min_size=16, max_size=50))
def test_older_history_is_ignored(intervals):
    full = evaluate_difficulty_of(IntervalHistory(intervals))
    truncated = evaluate_difficulty_of(IntervalHistory(intervals[-MAX_OBJECT_COUNT:]))
    assert full == truncated


@settings(max_examples=100, deadline=None)
@given(st.lists(intervals_st, min_size=1, max_size=20))
def test_complexity_is_finite_and_non_negative(intervals):
    result = evaluate_difficulty_of(IntervalHistory(intervals))
    assert math.isfinite(result)
    assert result >= 0.0


@settings(max_examples=50, deadline=None)
@given(st.lists(intervals_st, min_size=1, max_size=16))
def test_kernel_matches_reference(intervals):
    window = np.array(intervals, dtype=np.float64)
    assert window_entropy(window) == pytest.approx(reference_complexity(intervals), abs=1e-9)


def test_evaluate_sequence_scores_every_object():
    objects = create_difficulty_hit_objects([0, 100, 300, 400, 600, 700], interval="delta")
    scores = evaluate_sequence(objects)

    assert scores.shape == (5,)
    assert scores.dtype == np.float64
    assert scores[0] == 0.0
    assert scores[-1] == pytest.approx(evaluate_difficulty_of(objects[-1]))


def test_strain_time_changes_window():
    onsets = [0, 10, 20, 60]
    delta = create_difficulty_hit_objects(onsets, interval="delta")[-1]
    strain = create_difficulty_hit_objects(onsets, interval="strain")[-1]

    assert list(rhythm_window(delta)) == [40.0, 10.0, 10.0]
    assert list(rhythm_window(strain)) == [40.0, 25.0, 25.0]
    assert evaluate_difficulty_of(strain) == pytest.approx(
        reference_complexity([40.0, 25.0, 25.0]), abs=1e-9
    )
