"""
PyRhythmComplexity Difficulty Module.

Architecture:
├── constants.py         - Tuned evaluation parameters
├── preprocessing.py     - Onset times -> difficulty hit objects
└── evaluators/
    └── rhythm.py        - Rhythm complexity (local timing entropy)
"""

from pyrhythmcomplexity.difficulty.preprocessing import (
    DifficultyHitObject,
    StrainHitObject,
    TimingHistory,
    create_difficulty_hit_objects,
)

from pyrhythmcomplexity.difficulty.evaluators import (
    evaluate_difficulty_of,
    evaluate_sequence,
    rhythm_window,
)


__all__ = [
    # Preprocessing
    'DifficultyHitObject',
    'StrainHitObject',
    'TimingHistory',
    'create_difficulty_hit_objects',

    # Evaluators
    'evaluate_difficulty_of',
    'evaluate_sequence',
    'rhythm_window',
]
