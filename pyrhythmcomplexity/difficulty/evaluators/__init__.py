"""
Difficulty evaluators.

Each evaluator scores a single difficulty object from one perspective:

- rhythm.py - Local rhythmic complexity (timing entropy)
"""

from pyrhythmcomplexity.difficulty.evaluators.rhythm import (
    evaluate_difficulty_of,
    evaluate_sequence,
    rhythm_window,
)

__all__ = [
    'evaluate_difficulty_of',
    'evaluate_sequence',
    'rhythm_window',
]
