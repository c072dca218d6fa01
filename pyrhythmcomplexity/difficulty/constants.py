"""
Difficulty Constants - Tuned parameters for rhythm evaluation.

Values are fixed experimental parameters. Changing any of them changes the
score of every evaluated chart, so they are only replaced through an explicit
recalibration.
"""

from __future__ import annotations

# ============================================================================
# RHYTHM WINDOW
# ============================================================================

# Amount of past hit objects (including the current one) to consider
MAX_OBJECT_COUNT = 16

# ============================================================================
# COEFFICIENT
# ============================================================================

COEF_ITERATIONS = 8  # Harmonics summed per coefficient
COEF_SINE_POWER = 8  # Power of the sine curve
COEF_COSINE_POWER = 2  # Power of the cosine curve

# ============================================================================
# ENTROPY
# ============================================================================

ENTROPY_MULTIPLIER = 0.4  # Scale applied to the window entropy

# ============================================================================
# PREPROCESSING
# ============================================================================

# Lower bound (ms) of the strain time of a hit object
MIN_DELTA_TIME = 25
